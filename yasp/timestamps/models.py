"""Data models for the nested word/phoneme transcript.

The models are frozen pydantic models: a transcript is built once by
``yasp.timestamps.merge`` and then only serialized.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "NestedTranscript",
    "PhonemeNode",
    "WordNode",
]


class PhonemeNode(BaseModel):
    """A phoneme spoken within a word."""

    model_config = ConfigDict(frozen=True)

    phoneme: str = Field(..., description="Phoneme symbol.")
    start: int = Field(..., description="Start frame on the utterance clock.")
    duration: int = Field(..., description="Length in frames.")


class WordNode(BaseModel):
    """A recognized word and the phonemes inside its span."""

    model_config = ConfigDict(frozen=True)

    word: str = Field(..., description="Word spelling.")
    start: int = Field(..., description="Start frame on the utterance clock.")
    duration: int = Field(..., description="Length in frames.")
    phonemes: tuple[PhonemeNode, ...] = Field(
        default=(), description="Ordered phonemes of the word."
    )


class NestedTranscript(BaseModel):
    """Ordered word nodes for one utterance."""

    model_config = ConfigDict(frozen=True)

    words: tuple[WordNode, ...] = Field(default=(), description="Ordered word nodes.")
