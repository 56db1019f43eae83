"""Merge a word list and a phoneme list into a nested transcript.

Both lists must already share the utterance clock (see
``yasp.timestamps.reconcile``). The merge is one forward pass: a phoneme
cursor moves through the phoneme list and never goes back.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from yasp.exceptions import InvalidArgument, SerializationError
from yasp.segments.models import Clock, Segment, SegmentList
from yasp.timestamps.models import NestedTranscript, PhonemeNode, WordNode

__all__ = ["merge_segments"]


def _word_end(word: Segment) -> int:
    return word.end if word.end is not None else word.start + word.duration


def _collect_phonemes(
    word: Segment, phonemes: SegmentList, cursor: int
) -> tuple[list[PhonemeNode], int]:
    """Gather the phonemes of ``word`` starting at ``cursor``.

    A phoneme whose ``start + duration + 1`` passes the word's end frame is
    the word's last one; the returned cursor points at it so the next word
    examines it again. When the list runs out first, the cursor stays
    where it was and the next word scans the same phonemes again.

    Returns:
        tuple[list[PhonemeNode], int]: The word's phoneme nodes and the new cursor.
    """
    end = _word_end(word)
    nodes: list[PhonemeNode] = []
    for index in range(cursor, len(phonemes)):
        phoneme = phonemes[index]
        next_time = phoneme.start + phoneme.duration + 1
        # SIL is dropped but still takes part in the boundary test
        if not phoneme.is_sentinel:
            nodes.append(
                PhonemeNode(phoneme=phoneme.label, start=phoneme.start, duration=phoneme.duration)
            )
        if next_time > end:
            return nodes, index
    return nodes, cursor


def merge_segments(
    words: SegmentList | None,
    phonemes: SegmentList | None,
    *,
    logger: logging.Logger | None = None,
) -> NestedTranscript:
    """Assign each phoneme to the word whose span contains it.

    Words tagged ``<s>``, ``</s>`` or ``<sil>`` produce no node; phonemes
    tagged ``SIL`` produce no node.

    Args:
        words: Word list in utterance order.
        phonemes: Phoneme list on the utterance clock.
        logger: Logger for diagnostics.

    Returns:
        NestedTranscript: Word nodes with their nested phoneme nodes.

    Raises:
        InvalidArgument: If either list is missing.
        SerializationError: If a node cannot be built from a segment.

    """
    log = logger or logging.getLogger(__name__)
    if words is None or phonemes is None:
        log.error("bad parameter list")
        raise InvalidArgument("merge needs both a word list and a phoneme list")
    if phonemes and phonemes.clock is not Clock.UTTERANCE:
        log.warning("Merging phonemes that are still on the alignment clock")

    cursor = 0
    nodes: list[WordNode] = []
    try:
        for word in words:
            if word.is_sentinel:
                continue
            phoneme_nodes, cursor = _collect_phonemes(word, phonemes, cursor)
            nodes.append(
                WordNode(
                    word=word.label,
                    start=word.start,
                    duration=word.duration,
                    phonemes=tuple(phoneme_nodes),
                )
            )
        return NestedTranscript(words=tuple(nodes))
    except ValidationError as exc:
        raise SerializationError(f"Failed to build nested transcript: {exc}") from exc
