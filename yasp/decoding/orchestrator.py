"""Two-phase decode orchestration for one utterance.

When no transcript is supplied the audio is first decoded with free
recognition, and the recognized words (minus sentinels) are written out
as a synthesized transcript. Forced alignment then runs against either
transcript and yields the final word segmentation together with the raw
phoneme alignment.

State machine::

    NEEDS_HYPOTHESIS --(free recognition)--> NEEDS_ALIGNMENT
    NEEDS_ALIGNMENT  --(forced alignment)--> DONE
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum
from importlib import import_module
from pathlib import Path

from yasp.config import EngineConfig
from yasp.decoding.engine import DecodingEngine, EngineFactory, PhoneRecord, WordRecord
from yasp.exceptions import FileIOError, UnknownWordError
from yasp.segments.models import Segment, SegmentList
from yasp.transcript.tokenizer import TRANSCRIPT_WHITESPACE, parse_transcript
from yasp.utils.audio_io import read_pcm
from yasp.utils.constant import DEFAULT_HYPOTHESIS_PATH

__all__ = [
    "DecodeOrchestrator",
    "DecodeResult",
    "DecodeState",
    "default_engine_factory",
    "read_transcript",
]


class DecodeState(str, Enum):
    """States of the per-utterance decode."""

    NEEDS_HYPOTHESIS = "needs_hypothesis"
    NEEDS_ALIGNMENT = "needs_alignment"
    DONE = "done"


@dataclass
class DecodeResult:
    """Word list and raw phoneme list produced by one decode.

    Attributes:
        words: Word segmentation on the utterance clock.
        phonemes: Phoneme alignment on the alignment's local clock.
        transcript_path: Transcript the alignment ran against.
        synthesized: ``True`` when the transcript came from free recognition.

    """

    words: SegmentList
    phonemes: SegmentList
    transcript_path: Path
    synthesized: bool = False

    def release(self) -> None:
        self.words.release()
        self.phonemes.release()

    def __enter__(self) -> DecodeResult:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


def default_engine_factory(config: EngineConfig) -> DecodingEngine:
    """Build the PocketSphinx engine, importing it only when first needed."""
    return import_module("yasp.models.pocketsphinx").create_engine(config)


def read_transcript(path: str | Path) -> list[str]:
    """Open a transcript file and split it into words.

    Raises:
        FileIOError: If the file cannot be opened.
        WordTooLong: If a token overflows the token buffer.
        TranscriptReadError: If reading fails before end of file.

    """
    try:
        fh = open(path, "rb")
    except OSError as exc:
        raise FileIOError(path, exc) from exc
    with fh:
        return parse_transcript(fh, TRANSCRIPT_WHITESPACE)


def _word_segment(record: WordRecord) -> Segment:
    return Segment.word(
        record.word,
        record.start_frame,
        record.end_frame,
        probability=record.probability,
        acoustic_score=record.acoustic_score,
        language_score=record.language_score,
        language_backoff=record.language_backoff,
    )


def _phone_segment(record: PhoneRecord) -> Segment:
    return Segment.phoneme(record.phone, record.start_frame, record.duration, score=record.score)


def _fill(target: SegmentList, segments: Iterable[Segment]) -> SegmentList:
    for seg in segments:
        target.append(seg)
    return target


class DecodeOrchestrator:
    """Run free recognition and/or forced alignment for one utterance at a time.

    A fresh engine is built for every :meth:`run` call, so one orchestrator
    may be reused sequentially. It is not safe to share across threads.

    Attributes:
        config: Engine settings, fixed for the orchestrator's lifetime.
        hypothesis_path: Where a synthesized transcript is written.

    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        engine_factory: EngineFactory | None = None,
        hypothesis_path: str | Path | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.hypothesis_path = Path(hypothesis_path or DEFAULT_HYPOTHESIS_PATH)
        self._engine_factory = engine_factory or default_engine_factory
        self._logger = logger or logging.getLogger(__name__)

    @staticmethod
    def initial_state(transcript_path: str | Path | None) -> DecodeState:
        """Return the state a decode starts in for the given transcript."""
        if transcript_path is None:
            return DecodeState.NEEDS_HYPOTHESIS
        return DecodeState.NEEDS_ALIGNMENT

    def run(
        self, audio_path: str | Path, transcript_path: str | Path | None = None
    ) -> DecodeResult:
        """Decode one utterance.

        Parameters:
            audio_path (str | Path): Raw PCM or WAV audio.
            transcript_path (str | Path | None): Known transcript; when
                ``None`` one is synthesized by free recognition.

        Returns:
            DecodeResult: Word list and uncorrected phoneme list. The caller
                owns both and should release them (``with result: ...``).

        Raises:
            FileIOError: Audio, transcript or hypothesis file failure.
            EngineInitError: The engine could not be built.
            UnknownWordError: A transcript word is not in the dictionary.
            WordTooLong: A transcript token overflows the token buffer.
            TranscriptReadError: The transcript could not be read.
        """
        audio = read_pcm(audio_path, self.config.sample_rate)
        state = self.initial_state(transcript_path)
        words: list[str] = []
        transcript = self.hypothesis_path
        synthesized = False
        if transcript_path is not None:
            transcript = Path(transcript_path)
            words = read_transcript(transcript)

        engine = self._engine_factory(self.config)
        while True:
            self._logger.debug("Decode state: %s", state.value)
            if state is DecodeState.NEEDS_HYPOTHESIS:
                transcript = self._synthesize_transcript(engine, audio)
                words = read_transcript(transcript)
                synthesized = True
                state = DecodeState.NEEDS_ALIGNMENT
                continue
            result = self._align(engine, audio, words, transcript, synthesized)
            self._logger.debug("Decode state: %s", DecodeState.DONE.value)
            return result

    def _synthesize_transcript(self, engine: DecodingEngine, audio: bytes) -> Path:
        """Run free recognition and write the spoken words to ``hypothesis_path``."""
        with _fill(SegmentList.words(), map(_word_segment, engine.recognize(audio))) as hypothesis:
            text = " ".join(seg.label for seg in hypothesis if not seg.is_sentinel)
        self._logger.info("Hypothesis: %s", text)
        try:
            self.hypothesis_path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise FileIOError(self.hypothesis_path, exc) from exc
        return self.hypothesis_path

    def _align(
        self,
        engine: DecodingEngine,
        audio: bytes,
        words: list[str],
        transcript_path: Path,
        synthesized: bool,
    ) -> DecodeResult:
        """Force-align ``words`` and collect both segmentations."""
        for word in words:
            if not engine.has_word(word):
                self._logger.error("Unknown word %s", word)
                raise UnknownWordError(word)

        with ExitStack() as stack:
            word_list = stack.enter_context(SegmentList.words())
            phoneme_list = stack.enter_context(SegmentList.phonemes())
            output = engine.align(audio, words)
            _fill(word_list, map(_word_segment, output.words))
            _fill(phoneme_list, map(_phone_segment, output.phones))
            stack.pop_all()
        return DecodeResult(
            words=word_list,
            phonemes=phoneme_list,
            transcript_path=transcript_path,
            synthesized=synthesized,
        )
