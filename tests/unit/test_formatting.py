"""Unit tests for transcript formatters and segment reports."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from yasp.exceptions import SerializationError
from yasp.formatting import (
    FORMATTERS,
    format_for_path,
    format_segment_list,
    from_json,
    get_formatter,
    get_formatter_spec,
    pprint_segment_list,
    to_json,
    to_txt,
)
from yasp.segments.models import Segment, SegmentList
from yasp.timestamps.models import NestedTranscript, PhonemeNode, WordNode


@pytest.fixture
def transcript() -> NestedTranscript:
    return NestedTranscript(
        words=(
            WordNode(
                word="cat",
                start=10,
                duration=10,
                phonemes=(
                    PhonemeNode(phoneme="K", start=8, duration=4),
                    PhonemeNode(phoneme="AE", start=13, duration=3),
                    PhonemeNode(phoneme="T", start=17, duration=2),
                ),
            ),
            WordNode(word="sat", start=21, duration=9),
        )
    )


def test_json_schema_and_key_order(transcript: NestedTranscript) -> None:
    doc = json.loads(to_json(transcript))

    assert list(doc) == ["words"]
    first = doc["words"][0]
    assert list(first) == ["word", "start", "duration", "phonemes"]
    assert list(first["phonemes"][0]) == ["phoneme", "start", "duration"]
    assert first["phonemes"][1] == {"phoneme": "AE", "start": 13, "duration": 3}
    assert doc["words"][1]["phonemes"] == []


def test_json_uses_integers(transcript: NestedTranscript) -> None:
    text = to_json(transcript)
    assert '"start": 10,' in text
    assert "10.0" not in text


def test_round_trip_preserves_nodes(transcript: NestedTranscript) -> None:
    parsed = from_json(to_json(transcript))
    assert parsed == transcript
    assert [p.phoneme for p in parsed.words[0].phonemes] == ["K", "AE", "T"]


def test_from_json_rejects_bad_documents() -> None:
    with pytest.raises(SerializationError):
        from_json('{"words": [{"word": "cat"}]}')


def test_empty_transcript() -> None:
    assert json.loads(to_json(NestedTranscript())) == {"words": []}
    assert to_txt(NestedTranscript()) == "\n"


def test_txt_lists_words(transcript: NestedTranscript) -> None:
    assert to_txt(transcript) == "cat sat\n"


def test_transcript_is_immutable(transcript: NestedTranscript) -> None:
    with pytest.raises(ValueError):
        transcript.words[0].start = 3  # type: ignore[misc]


def test_registry_lookup_is_case_insensitive() -> None:
    assert get_formatter("JSON") is to_json
    assert get_formatter_spec("txt").file_extension == ".txt"
    assert set(FORMATTERS) == {"json", "txt"}


def test_format_for_path_matches_extension() -> None:
    assert format_for_path("clip.TXT") == "txt"
    assert format_for_path(Path("out/clip.json")) == "json"
    assert format_for_path("clip.srt") is None
    assert format_for_path("clip") is None


def test_registry_rejects_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unsupported format"):
        get_formatter("srt")


def _segments() -> tuple[SegmentList, SegmentList]:
    words = SegmentList.words()
    words.append(
        Segment.word(
            "<s>", 0, 9, probability=1.0, acoustic_score=-1, language_score=-2, language_backoff=1
        )
    )
    words.append(
        Segment.word(
            "cat",
            10,
            20,
            probability=0.25,
            acoustic_score=-300,
            language_score=-40,
            language_backoff=2,
        )
    )
    phonemes = SegmentList.phonemes()
    phonemes.append(Segment.phoneme("K", 8, 4, score=-12))
    return words, phonemes


def test_segment_list_rows_are_space_delimited() -> None:
    words, phonemes = _segments()

    lines = format_segment_list(words).splitlines()
    assert lines[0] == "word start end pprob ascr lscr lback duration"
    assert lines[2] == "cat 10 20 0.250000 -300 -40 2 10"

    phone_lines = format_segment_list(phonemes).splitlines()
    assert phone_lines[1] == "K 8 - - - -12 - 4"


def test_pprint_renders_every_segment() -> None:
    words, _ = _segments()
    text = pprint_segment_list(words, title="words")
    assert "cat" in text
    assert "0.250" in text
    assert "\x1b[" not in text


def test_fractional_scores_are_printed_compactly() -> None:
    words = SegmentList.words()
    words.append(
        Segment.word(
            "go",
            3,
            12,
            probability=0.0,
            acoustic_score=1.28336896916634e-05,
            language_score=0.5,
            language_backoff=1,
        )
    )

    row = format_segment_list(words).splitlines()[1]

    assert row == "go 3 12 0.000000 1.28337e-05 0.5 1 9"
