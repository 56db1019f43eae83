"""Library entry points: decode, reconcile, merge and serialize one utterance.

Every function here handles exactly one utterance, synchronously. The
segment lists created along the way are released before returning unless
they are the return value, in which case the caller owns them.

Example:
    >>> from yasp.interpret import interpret_to_str
    >>> print(interpret_to_str("goforward.raw", "goforward.txt"))
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path

from yasp.config import EngineConfig
from yasp.decoding.engine import EngineFactory
from yasp.decoding.orchestrator import DecodeOrchestrator
from yasp.exceptions import FileIOError, TimingIncompatibility, YaspError
from yasp.formatting import format_segment_list, get_formatter_spec, pprint_segment_list
from yasp.segments.models import SegmentList
from yasp.timestamps.merge import merge_segments
from yasp.timestamps.models import NestedTranscript
from yasp.timestamps.reconcile import reconcile

__all__ = [
    "Breakdown",
    "interpret",
    "interpret_breakdown",
    "interpret_hypothesis",
    "interpret_phonemes",
    "interpret_to_str",
    "write_transcript",
]

PathLike = str | Path


@dataclass
class Breakdown:
    """Reconciled word and phoneme lists for one utterance.

    Attributes:
        words: Word list on the utterance clock.
        phonemes: Phoneme list, on the utterance clock when ``timing_reliable``.
        timing_reliable: ``False`` when the offset correction could not be
            applied and phoneme times are still alignment-relative.
        offset: Frames added to each phoneme start, or ``None``.

    """

    words: SegmentList
    phonemes: SegmentList
    timing_reliable: bool = True
    offset: int | None = None

    def release(self) -> None:
        self.words.release()
        self.phonemes.release()

    def __enter__(self) -> Breakdown:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


def interpret_breakdown(
    audio: PathLike,
    transcript: PathLike | None = None,
    *,
    config: EngineConfig | None = None,
    hypothesis_path: PathLike | None = None,
    engine_factory: EngineFactory | None = None,
    logger: logging.Logger | None = None,
) -> Breakdown:
    """Decode ``audio`` and return its reconciled word and phoneme lists.

    A missing ``<s>`` marker is not fatal: it is logged and reported through
    ``Breakdown.timing_reliable``.

    Args:
        audio: Raw PCM or WAV audio file.
        transcript: Known transcript; synthesized by free recognition if ``None``.
        config: Engine settings.
        hypothesis_path: Where a synthesized transcript is written.
        engine_factory: Builds the decoding engine (PocketSphinx by default).
        logger: Logger receiving progress and error messages.

    Returns:
        Breakdown: Both lists, owned by the caller.

    Raises:
        YaspError: Any decode failure (file, engine, vocabulary or transcript).

    """
    log = logger or logging.getLogger(__name__)
    orchestrator = DecodeOrchestrator(
        config,
        engine_factory=engine_factory,
        hypothesis_path=hypothesis_path,
        logger=log,
    )
    try:
        result = orchestrator.run(audio, transcript)
    except YaspError:
        log.error("Failed to parse speech clip %s", audio)
        raise

    with ExitStack() as stack:
        stack.enter_context(result)
        breakdown = Breakdown(words=result.words, phonemes=result.phonemes)
        try:
            breakdown.offset = reconcile(result.words, result.phonemes, logger=log)
        except TimingIncompatibility:
            log.error(
                "Timing incompatibility between word and phoneme lists. "
                "Result may be unreliable"
            )
            breakdown.timing_reliable = False
        stack.pop_all()
    return breakdown


def interpret_hypothesis(
    audio: PathLike, transcript: PathLike | None = None, **kwargs
) -> SegmentList:
    """Decode ``audio`` and return only its word list.

    Accepts the same keyword arguments as :func:`interpret_breakdown`.
    """
    breakdown = interpret_breakdown(audio, transcript, **kwargs)
    breakdown.phonemes.release()
    return breakdown.words


def interpret_phonemes(
    audio: PathLike, transcript: PathLike | None = None, **kwargs
) -> SegmentList:
    """Decode ``audio`` and return only its phoneme list.

    Accepts the same keyword arguments as :func:`interpret_breakdown`.
    """
    breakdown = interpret_breakdown(audio, transcript, **kwargs)
    breakdown.words.release()
    return breakdown.phonemes


def _build(
    audio: PathLike,
    transcript: PathLike | None,
    log: logging.Logger,
    **kwargs,
) -> NestedTranscript:
    with interpret_breakdown(audio, transcript, logger=log, **kwargs) as breakdown:
        nested = merge_segments(breakdown.words, breakdown.phonemes, logger=log)
        log.info("Words:\n%s", format_segment_list(breakdown.words))
        log.info("Phonemes:\n%s", format_segment_list(breakdown.phonemes))
        if log.isEnabledFor(logging.DEBUG):
            log.debug("\n%s", pprint_segment_list(breakdown.words, title="words"))
            log.debug("\n%s", pprint_segment_list(breakdown.phonemes, title="phonemes"))
    return nested


def interpret_to_str(
    audio: PathLike,
    transcript: PathLike | None = None,
    *,
    output_format: str = "json",
    logger: logging.Logger | None = None,
    **kwargs,
) -> str:
    """Decode ``audio`` and return the serialized nested transcript.

    Args:
        audio: Raw PCM or WAV audio file.
        transcript: Known transcript, or ``None``.
        output_format: Formatter name (``"json"`` or ``"txt"``).
        logger: Logger receiving progress and error messages.
        **kwargs: Forwarded to :func:`interpret_breakdown`.

    Returns:
        str: The serialized transcript.

    """
    log = logger or logging.getLogger(__name__)
    spec = get_formatter_spec(output_format)
    return spec.format_func(_build(audio, transcript, log, **kwargs))


def write_transcript(
    nested: NestedTranscript, output: PathLike, *, output_format: str = "json"
) -> Path:
    """Serialize ``nested`` and write it to ``output``.

    The text is rendered before the file is opened, so a serialization
    failure never leaves a file behind.

    Raises:
        SerializationError: If rendering fails.
        FileIOError: If the file cannot be written.

    """
    text = get_formatter_spec(output_format).format_func(nested)
    path = Path(output)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise FileIOError(path, exc) from exc
    return path


def interpret(
    audio: PathLike,
    transcript: PathLike | None = None,
    output: PathLike | None = None,
    *,
    output_format: str = "json",
    logger: logging.Logger | None = None,
    **kwargs,
) -> NestedTranscript:
    """Decode ``audio`` into a nested transcript, writing it to ``output`` if given.

    Args:
        audio: Raw PCM or WAV audio file.
        transcript: Known transcript, or ``None``.
        output: Destination file, or ``None`` to skip writing.
        output_format: Formatter name used for the file.
        logger: Logger receiving progress and error messages.
        **kwargs: Forwarded to :func:`interpret_breakdown`.

    Returns:
        NestedTranscript: The merged transcript.

    """
    log = logger or logging.getLogger(__name__)
    get_formatter_spec(output_format)
    nested = _build(audio, transcript, log, **kwargs)
    if output is not None:
        try:
            write_transcript(nested, output, output_format=output_format)
        except YaspError:
            log.error("Failed to create %s file: %s", output_format, output)
            raise
    return nested
