"""Segment models and the owned, ordered segment list.

A :class:`Segment` is one word or phoneme reported by the decoding engine.
Segments are collected in a :class:`SegmentList`, which owns them
exclusively for the duration of one interpret call and releases them when
its ``with`` block ends.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from yasp.utils.constant import PHONE_SILENCE, UTTERANCE_END, UTTERANCE_START, WORD_SILENCE

__all__ = [
    "Clock",
    "Segment",
    "SegmentKind",
    "SegmentList",
    "Sentinel",
]


class SegmentKind(str, Enum):
    """Which engine output a segment came from."""

    WORD = "word"
    PHONEME = "phoneme"


class Clock(str, Enum):
    """Time base of a segment list's ``start`` values."""

    LOCAL = "local"
    UTTERANCE = "utterance"


class Sentinel(str, Enum):
    """Structural labels that are not spoken words or phones."""

    UTTERANCE_START = UTTERANCE_START
    UTTERANCE_END = UTTERANCE_END
    WORD_SILENCE = WORD_SILENCE
    PHONE_SILENCE = PHONE_SILENCE


_SENTINELS_BY_KIND: dict[SegmentKind, dict[str, Sentinel]] = {
    SegmentKind.WORD: {
        UTTERANCE_START: Sentinel.UTTERANCE_START,
        UTTERANCE_END: Sentinel.UTTERANCE_END,
        WORD_SILENCE: Sentinel.WORD_SILENCE,
    },
    SegmentKind.PHONEME: {
        PHONE_SILENCE: Sentinel.PHONE_SILENCE,
    },
}


class Segment(BaseModel):
    """A single recognized word or phoneme with frame timing."""

    kind: SegmentKind = Field(..., description="Word or phoneme.")
    label: str = Field(..., description="Word spelling or phoneme symbol.")
    start: int = Field(..., description="Start frame.")
    duration: int = Field(..., description="Length in frames.")
    end: int | None = Field(None, description="End frame (words only).")
    probability: float | None = Field(
        None, ge=0.0, le=1.0, description="Posterior probability (words only)."
    )
    acoustic_score: float | None = Field(None, description="Acoustic score (words only).")
    language_score: float | None = Field(
        None, description="Language model score (words only)."
    )
    language_backoff: int | None = Field(None, description="Language model backoff (words only).")
    score: int | None = Field(None, description="Alignment score (phonemes only).")
    sentinel: Sentinel | None = Field(None, description="Structural tag, if any.")

    @model_validator(mode="after")
    def _tag_sentinel(self) -> Segment:
        """Derive the sentinel tag from the label at construction."""
        object.__setattr__(self, "sentinel", _SENTINELS_BY_KIND[self.kind].get(self.label))
        return self

    @classmethod
    def word(
        cls,
        label: str,
        start: int,
        end: int,
        *,
        probability: float | None = None,
        acoustic_score: float | None = None,
        language_score: float | None = None,
        language_backoff: int | None = None,
    ) -> Segment:
        """Build a word segment; ``duration`` is ``end - start``."""
        return cls(
            kind=SegmentKind.WORD,
            label=label,
            start=start,
            end=end,
            duration=end - start,
            probability=probability,
            acoustic_score=acoustic_score,
            language_score=language_score,
            language_backoff=language_backoff,
        )

    @classmethod
    def phoneme(cls, label: str, start: int, duration: int, *, score: int | None = None) -> Segment:
        """Build a phoneme segment."""
        return cls(
            kind=SegmentKind.PHONEME,
            label=label,
            start=start,
            duration=duration,
            score=score,
        )

    @property
    def is_sentinel(self) -> bool:
        return self.sentinel is not None


class SegmentList:
    """Append-only ordered sequence of segments for one utterance.

    The list owns its segments. ``release()`` drops them all and may be
    called any number of times; using the list as a context manager
    guarantees the release on every exit path.

    Attributes:
        kind: Kind of segment the list holds.
        clock: Time base of the ``start`` values.

    """

    __slots__ = ("kind", "clock", "_items")

    def __init__(self, kind: SegmentKind, clock: Clock = Clock.UTTERANCE) -> None:
        self.kind = kind
        self.clock = clock
        self._items: list[Segment] = []

    @classmethod
    def words(cls) -> SegmentList:
        """Create an empty word list (utterance clock)."""
        return cls(SegmentKind.WORD, Clock.UTTERANCE)

    @classmethod
    def phonemes(cls) -> SegmentList:
        """Create an empty phoneme list (alignment-local clock)."""
        return cls(SegmentKind.PHONEME, Clock.LOCAL)

    def append(self, segment: Segment) -> None:
        """Add ``segment`` to the tail.

        Raises:
            TypeError: If the segment kind does not match the list kind.

        """
        if segment.kind is not self.kind:
            raise TypeError(
                f"cannot add a {segment.kind.value} segment to a {self.kind.value} list"
            )
        self._items.append(segment)

    def release(self) -> None:
        """Drop every segment held by the list."""
        self._items.clear()

    def labels(self) -> list[str]:
        return [seg.label for seg in self._items]

    def find(self, sentinel: Sentinel, *, last: bool = False) -> Segment | None:
        """Return the first (or with ``last``, the final) segment tagged ``sentinel``."""
        for seg in reversed(self._items) if last else self._items:
            if seg.sentinel is sentinel:
                return seg
        return None

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Segment:
        return self._items[index]

    def __bool__(self) -> bool:
        return bool(self._items)

    def __enter__(self) -> SegmentList:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"SegmentList(kind={self.kind.value}, clock={self.clock.value}, size={len(self)})"
