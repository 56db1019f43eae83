"""PocketSphinx implementation of :class:`~yasp.decoding.engine.DecodingEngine`.

The adapter builds one ``pocketsphinx.Decoder`` per instance from an
:class:`~yasp.config.EngineConfig` and converts its segment and alignment
iterators into plain records. Phone-level alignment needs two decodes of
the same audio: the first against the transcript's word sequence, the
second after ``set_alignment()`` has expanded it into phone states.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from pocketsphinx import Decoder, get_model_path

from yasp.config import EngineConfig
from yasp.decoding.engine import AlignmentOutput, PhoneRecord, WordRecord
from yasp.exceptions import EngineInitError, UnknownWordError

__all__ = [
    "PocketSphinxEngine",
    "build_config",
    "create_engine",
]

logger = logging.getLogger(__name__)


def _engine_log_level() -> str:
    """Map the ``pocketsphinx`` logger level onto the decoder's own ``loglevel``."""
    level = logging.getLogger("pocketsphinx").getEffectiveLevel()
    if level <= logging.DEBUG:
        return "DEBUG"
    if level <= logging.INFO:
        return "INFO"
    if level <= logging.WARNING:
        return "WARN"
    return "ERROR"


def build_config(config: EngineConfig) -> dict[str, object]:
    """Translate an :class:`EngineConfig` into decoder arguments.

    Parameters:
        config (EngineConfig): Engine settings.

    Returns:
        dict[str, object]: Keyword arguments for ``pocketsphinx.Decoder``.

    Raises:
        EngineInitError: If the acoustic model directory does not exist.
    """
    hmm, lm, dictionary = config.model_paths(Path(get_model_path()))
    if not hmm.is_dir():
        raise EngineInitError(f"Acoustic model not found: {hmm}")
    return {
        "hmm": str(hmm),
        "lm": str(lm),
        "dict": str(dictionary),
        "dictcase": config.dictcase,
        "backtrace": config.backtrace,
        "dither": config.dither,
        "cmn": config.cmn,
        "beam": config.beam,
        "pbeam": config.pbeam,
        "lw": config.language_weight,
        "samprate": float(config.sample_rate),
        "loglevel": _engine_log_level(),
    }


def _posterior(value: float) -> float:
    """Return a segment posterior as a probability in [0, 1].

    pocketsphinx 5 exponentiates ``Segment.prob`` itself, so an underflowed
    posterior arrives as ``0.0``. Rounding may push a certain word a hair
    above ``1.0``.
    """
    return min(max(float(value), 0.0), 1.0)


class PocketSphinxEngine:
    """Decoding engine backed by a single ``pocketsphinx.Decoder``."""

    def __init__(self, config: EngineConfig) -> None:
        self.config = config
        kwargs = build_config(config)
        logger.debug("Creating pocketsphinx decoder: %s", kwargs)
        try:
            self._decoder = Decoder(**kwargs)
        except (RuntimeError, KeyError, ValueError) as exc:
            raise EngineInitError(f"Failed to create recognizer: {exc}") from exc

    def has_word(self, word: str) -> bool:
        return self._decoder.lookup_word(word) is not None

    def _decode(self, audio: bytes) -> None:
        self._decoder.start_utt()
        self._decoder.process_raw(audio, full_utt=True)
        self._decoder.end_utt()

    def _segments(self) -> list[WordRecord]:
        return [
            WordRecord(
                word=seg.word,
                start_frame=seg.start_frame,
                end_frame=seg.end_frame,
                probability=_posterior(seg.prob),
                acoustic_score=float(seg.ascore),
                language_score=float(seg.lscore),
                language_backoff=int(seg.lback),
            )
            for seg in self._decoder.seg()
        ]

    def recognize(self, audio: bytes) -> list[WordRecord]:
        self._decode(audio)
        return self._segments()

    def align(self, audio: bytes, words: Sequence[str]) -> AlignmentOutput:
        for word in words:
            if not self.has_word(word):
                raise UnknownWordError(word)
        # set_align_text adds the <s> and </s> brackets itself
        self._decoder.set_align_text(" ".join(words))
        self._decode(audio)
        result = AlignmentOutput(words=self._segments())

        self._decoder.set_alignment()
        self._decode(audio)
        alignment = self._decoder.get_alignment()
        if alignment is None:
            return result
        result.phones = [
            PhoneRecord(
                phone=entry.name,
                start_frame=entry.start,
                duration=entry.duration,
                score=int(entry.score),
            )
            for entry in alignment.phones()
        ]
        return result


def create_engine(config: EngineConfig) -> PocketSphinxEngine:
    """Default :data:`~yasp.decoding.engine.EngineFactory`."""
    return PocketSphinxEngine(config)
