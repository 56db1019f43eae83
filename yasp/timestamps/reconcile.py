"""Move phoneme start times from the alignment clock onto the utterance clock.

The phoneme alignment is produced by a sub-search whose clock starts at
frame 0, while the word segmentation spans the whole utterance. The start
frame of the ``<s>`` word is the offset between the two.
"""

from __future__ import annotations

import logging

from yasp.exceptions import AlreadyReconciledError, InvalidArgument, TimingIncompatibility
from yasp.segments.models import Clock, SegmentKind, SegmentList, Sentinel

__all__ = ["reconcile", "utterance_offset"]


def utterance_offset(words: SegmentList) -> int:
    """Return the start frame of the utterance-start marker.

    When the engine reports more than one ``<s>``, the last one wins.

    Raises:
        TimingIncompatibility: If ``words`` has no ``<s>`` segment.

    """
    marker = words.find(Sentinel.UTTERANCE_START, last=True)
    if marker is None:
        raise TimingIncompatibility("word list has no <s> marker to take the phoneme offset from")
    return marker.start


def reconcile(
    words: SegmentList | None,
    phonemes: SegmentList | None,
    *,
    logger: logging.Logger | None = None,
) -> int:
    """Shift every phoneme start by the utterance offset, in place.

    The correction is applied once: the phoneme list is switched to the
    utterance clock and a second call is rejected.

    Args:
        words: Word list of the decode.
        phonemes: Phoneme list of the same decode, still on its local clock.
        logger: Logger for diagnostics.

    Returns:
        int: The offset that was added.

    Raises:
        InvalidArgument: If either list is missing or of the wrong kind.
        AlreadyReconciledError: If ``phonemes`` is already on the utterance clock.
        TimingIncompatibility: If ``words`` has no ``<s>`` marker; phoneme
            starts are left unchanged.

    """
    log = logger or logging.getLogger(__name__)
    if words is None or phonemes is None:
        raise InvalidArgument("reconcile needs both a word list and a phoneme list")
    if words.kind is not SegmentKind.WORD or phonemes.kind is not SegmentKind.PHONEME:
        raise InvalidArgument("reconcile expects (word list, phoneme list)")
    if phonemes.clock is Clock.UTTERANCE:
        raise AlreadyReconciledError("phoneme list is already on the utterance clock")

    offset = utterance_offset(words)
    for phoneme in phonemes:
        phoneme.start += offset
    phonemes.clock = Clock.UTTERANCE
    log.debug("Shifted %d phonemes by %d frames", len(phonemes), offset)
    return offset
