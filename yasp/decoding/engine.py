"""Interface between the decode orchestrator and the external decoding engine."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from yasp.config import EngineConfig

__all__ = [
    "AlignmentOutput",
    "DecodingEngine",
    "EngineFactory",
    "PhoneRecord",
    "WordRecord",
]


@dataclass(frozen=True)
class WordRecord:
    """One entry of the engine's word segmentation."""

    word: str
    start_frame: int
    end_frame: int
    probability: float
    acoustic_score: float
    language_score: float
    language_backoff: int


@dataclass(frozen=True)
class PhoneRecord:
    """One entry of the engine's phoneme alignment, in the alignment's own clock."""

    phone: str
    start_frame: int
    duration: int
    score: int


@dataclass
class AlignmentOutput:
    """Result of a forced-alignment decode."""

    words: list[WordRecord] = field(default_factory=list)
    phones: list[PhoneRecord] = field(default_factory=list)


class DecodingEngine(Protocol):
    """Protocol for decoders driven by :class:`~yasp.decoding.orchestrator.DecodeOrchestrator`.

    Implementations wrap one engine instance and are not expected to be
    safe for concurrent use.
    """

    def has_word(self, word: str) -> bool:
        """Return ``True`` when ``word`` is in the pronunciation dictionary."""

    def recognize(self, audio: bytes) -> list[WordRecord]:
        """Run free recognition over raw PCM and return the word segmentation.

        Parameters:
            audio (bytes): 16-bit little-endian mono PCM for the whole utterance.

        Returns:
            list[WordRecord]: Words in time order, including sentinel tokens.
        """

    def align(self, audio: bytes, words: Sequence[str]) -> AlignmentOutput:
        """Force-align ``words`` (bracketed by ``<s>``/``</s>``) against ``audio``.

        Parameters:
            audio (bytes): 16-bit little-endian mono PCM for the whole utterance.
            words (Sequence[str]): Transcript words in spoken order.

        Returns:
            AlignmentOutput: The word segmentation of the alignment decode and
                its phoneme alignment, the latter starting at frame 0.
        """


EngineFactory = Callable[[EngineConfig], DecodingEngine]
