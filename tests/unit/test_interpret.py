"""Unit tests for the library entry points in ``yasp.interpret``."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from conftest import FakeEngine, phone, word

from yasp.exceptions import FileIOError, UnknownWordError
from yasp.interpret import (
    interpret,
    interpret_breakdown,
    interpret_hypothesis,
    interpret_phonemes,
    interpret_to_str,
)
from yasp.segments.models import Clock, SegmentKind


@pytest.fixture
def shifted_engine() -> FakeEngine:
    """Engine whose utterance starts five frames into the clip."""
    return FakeEngine(
        vocabulary=["go", "forward"],
        aligned_words=[
            word("<s>", 5, 9),
            word("go", 10, 20),
            word("forward", 21, 40),
            word("</s>", 41, 45),
        ],
        phones=[
            phone("G", 5, 5),
            phone("OW", 11, 3),
            phone("F", 16, 5),
            phone("AO", 22, 10),
            phone("SIL", 33, 2),
        ],
    )


def test_breakdown_applies_offset(
    shifted_engine: FakeEngine, engine_factory, audio_file: Path, tmp_path: Path
) -> None:
    transcript = tmp_path / "t.txt"
    transcript.write_text("go forward\n", encoding="utf-8")

    with interpret_breakdown(
        audio_file, transcript, engine_factory=engine_factory(shifted_engine)
    ) as breakdown:
        assert breakdown.offset == 5
        assert breakdown.timing_reliable is True
        assert breakdown.phonemes.clock is Clock.UTTERANCE
        assert [p.start for p in breakdown.phonemes] == [10, 16, 21, 27, 38]
        assert breakdown.words.labels() == ["<s>", "go", "forward", "</s>"]

    assert len(breakdown.words) == 0


def test_merged_transcript_nests_shifted_phonemes(
    shifted_engine: FakeEngine, engine_factory, audio_file: Path, tmp_path: Path
) -> None:
    transcript = tmp_path / "t.txt"
    transcript.write_text("go forward", encoding="utf-8")

    nested = interpret(audio_file, transcript, engine_factory=engine_factory(shifted_engine))

    assert [w.word for w in nested.words] == ["go", "forward"]
    go, forward = nested.words
    assert [p.phoneme for p in go.phonemes] == ["G", "OW", "F"]
    assert [p.phoneme for p in forward.phonemes] == ["F", "AO"]
    assert forward.phonemes[-1].start == 27


def test_missing_start_marker_is_recovered(
    engine_factory, audio_file: Path, transcript_file: Path, caplog: pytest.LogCaptureFixture
) -> None:
    engine = FakeEngine(
        vocabulary=["cat"],
        aligned_words=[word("cat", 10, 20)],
        phones=[phone("K", 8, 4), phone("AE", 13, 3)],
    )

    with caplog.at_level(logging.ERROR):
        breakdown = interpret_breakdown(
            audio_file, transcript_file, engine_factory=engine_factory(engine)
        )

    assert breakdown.timing_reliable is False
    assert breakdown.offset is None
    assert breakdown.phonemes.clock is Clock.LOCAL
    assert [p.start for p in breakdown.phonemes] == [8, 13]
    assert "Timing incompatibility" in caplog.text

    nested = interpret(audio_file, transcript_file, engine_factory=engine_factory(engine))
    assert [p.phoneme for p in nested.words[0].phonemes] == ["K", "AE"]


def test_decode_failure_is_logged_and_reraised(
    engine_factory, audio_file: Path, transcript_file: Path, caplog: pytest.LogCaptureFixture
) -> None:
    engine = FakeEngine(vocabulary=[])
    with caplog.at_level(logging.ERROR), pytest.raises(UnknownWordError):
        interpret_breakdown(audio_file, transcript_file, engine_factory=engine_factory(engine))
    assert "Failed to parse speech clip" in caplog.text


def test_hypothesis_only(
    cat_engine: FakeEngine, engine_factory, audio_file: Path, tmp_path: Path
) -> None:
    words = interpret_hypothesis(
        audio_file,
        engine_factory=engine_factory(cat_engine),
        hypothesis_path=tmp_path / "hyp",
    )
    assert words.kind is SegmentKind.WORD
    assert words.labels() == ["<s>", "cat", "</s>"]
    assert (tmp_path / "hyp").read_text(encoding="utf-8") == "cat"


def test_phonemes_only(
    cat_engine: FakeEngine, engine_factory, audio_file: Path, transcript_file: Path
) -> None:
    phonemes = interpret_phonemes(
        audio_file, transcript_file, engine_factory=engine_factory(cat_engine)
    )
    assert phonemes.kind is SegmentKind.PHONEME
    assert phonemes.labels() == ["K", "AE", "T"]
    assert phonemes.clock is Clock.UTTERANCE


def test_interpret_to_str_json(
    cat_engine: FakeEngine, engine_factory, audio_file: Path, transcript_file: Path
) -> None:
    text = interpret_to_str(audio_file, transcript_file, engine_factory=engine_factory(cat_engine))
    assert json.loads(text) == {
        "words": [
            {
                "word": "cat",
                "start": 10,
                "duration": 10,
                "phonemes": [
                    {"phoneme": "K", "start": 8, "duration": 4},
                    {"phoneme": "AE", "start": 13, "duration": 3},
                    {"phoneme": "T", "start": 17, "duration": 2},
                ],
            }
        ]
    }


def test_interpret_to_str_txt(
    cat_engine: FakeEngine, engine_factory, audio_file: Path, transcript_file: Path
) -> None:
    text = interpret_to_str(
        audio_file,
        transcript_file,
        output_format="txt",
        engine_factory=engine_factory(cat_engine),
    )
    assert text == "cat\n"


def test_interpret_writes_output_file(
    cat_engine: FakeEngine, engine_factory, audio_file: Path, transcript_file: Path, tmp_path: Path
) -> None:
    output = tmp_path / "out.json"
    nested = interpret(
        audio_file, transcript_file, output, engine_factory=engine_factory(cat_engine)
    )
    assert json.loads(output.read_text(encoding="utf-8"))["words"][0]["word"] == "cat"
    assert nested.words[0].duration == 10


def test_interpret_rejects_unknown_format_before_decoding(
    cat_engine: FakeEngine, engine_factory, audio_file: Path, transcript_file: Path
) -> None:
    with pytest.raises(ValueError):
        interpret(
            audio_file,
            transcript_file,
            output_format="srt",
            engine_factory=engine_factory(cat_engine),
        )
    assert cat_engine.calls == []


def test_interpret_unwritable_output(
    cat_engine: FakeEngine, engine_factory, audio_file: Path, transcript_file: Path, tmp_path: Path
) -> None:
    with pytest.raises(FileIOError):
        interpret(
            audio_file,
            transcript_file,
            tmp_path / "missing" / "out.json",
            engine_factory=engine_factory(cat_engine),
        )
