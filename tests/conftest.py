"""Shared test fixtures for the yasp test suite."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from yasp.config import EngineConfig
from yasp.decoding.engine import AlignmentOutput, PhoneRecord, WordRecord


def word(label: str, start: int, end: int, prob: float = 1.0) -> WordRecord:
    """Build a word record with neutral scores."""
    return WordRecord(
        word=label,
        start_frame=start,
        end_frame=end,
        probability=prob,
        acoustic_score=-100,
        language_score=-10,
        language_backoff=1,
    )


def phone(label: str, start: int, duration: int) -> PhoneRecord:
    """Build a phone record with a neutral score."""
    return PhoneRecord(phone=label, start_frame=start, duration=duration, score=-5)


class FakeEngine:
    """In-memory stand-in for the PocketSphinx adapter.

    Records every call so tests can assert on the decode sequence.
    """

    def __init__(
        self,
        *,
        vocabulary: Sequence[str] = (),
        hypothesis: Sequence[WordRecord] = (),
        aligned_words: Sequence[WordRecord] = (),
        phones: Sequence[PhoneRecord] = (),
    ) -> None:
        self.vocabulary = set(vocabulary)
        self.hypothesis = list(hypothesis)
        self.aligned_words = list(aligned_words)
        self.phones = list(phones)
        self.calls: list[tuple[str, object]] = []

    def has_word(self, word: str) -> bool:
        return word in self.vocabulary

    def recognize(self, audio: bytes) -> list[WordRecord]:
        self.calls.append(("recognize", audio))
        return list(self.hypothesis)

    def align(self, audio: bytes, words: Sequence[str]) -> AlignmentOutput:
        self.calls.append(("align", list(words)))
        return AlignmentOutput(words=list(self.aligned_words), phones=list(self.phones))


@pytest.fixture
def cat_engine() -> FakeEngine:
    """Engine that recognizes and aligns a single word, "cat"."""
    return FakeEngine(
        vocabulary=["cat"],
        hypothesis=[
            word("<s>", 0, 9),
            word("cat", 10, 20),
            word("<sil>", 21, 22),
            word("</s>", 23, 25),
        ],
        aligned_words=[word("<s>", 0, 9), word("cat", 10, 20), word("</s>", 21, 25)],
        phones=[phone("K", 8, 4), phone("AE", 13, 3), phone("T", 17, 2)],
    )


@pytest.fixture
def engine_factory() -> Callable[[FakeEngine], Callable[[EngineConfig], FakeEngine]]:
    """Wrap an engine instance in a factory that records the config it was given."""

    def _make(engine: FakeEngine) -> Callable[[EngineConfig], FakeEngine]:
        def _factory(config: EngineConfig) -> FakeEngine:
            engine.config = config  # type: ignore[attr-defined]
            return engine

        return _factory

    return _make


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    """A small raw PCM file."""
    path = tmp_path / "clip.raw"
    path.write_bytes(b"\x00\x01" * 160)
    return path


@pytest.fixture
def transcript_file(tmp_path: Path) -> Path:
    """A one-word transcript matching ``cat_engine``."""
    path = tmp_path / "clip.txt"
    path.write_text("cat\n", encoding="utf-8")
    return path
