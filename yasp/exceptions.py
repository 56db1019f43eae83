"""Exception hierarchy for yasp.

Every failure raised by the library derives from :class:`YaspError` so that
callers can catch the whole family in one place. ``MemoryError`` is not
wrapped and propagates unchanged.
"""

from __future__ import annotations

import os

__all__ = [
    "AlreadyReconciledError",
    "EngineInitError",
    "FileIOError",
    "InvalidArgument",
    "SerializationError",
    "TimingIncompatibility",
    "TranscriptError",
    "TranscriptReadError",
    "UnknownWordError",
    "WordTooLong",
    "YaspError",
]


class YaspError(Exception):
    """Base exception for yasp."""


class FileIOError(YaspError):
    """Opening, reading or writing a file failed.

    Attributes:
        path: The file that could not be accessed.
        os_error: The underlying operating-system error, when there is one.

    """

    def __init__(self, path: str | os.PathLike[str], os_error: OSError | None = None) -> None:
        self.path = os.fspath(path)
        self.os_error = os_error
        if os_error is None:
            reason = "unknown error"
        else:
            reason = os_error.strerror or str(os_error)
        super().__init__(f"{self.path}: {reason}")


class EngineInitError(YaspError):
    """The external decoding engine could not be constructed."""


class UnknownWordError(YaspError):
    """A transcript word is not in the engine's pronunciation dictionary."""

    def __init__(self, word: str) -> None:
        self.word = word
        super().__init__(f"Unknown word {word!r}")


class TimingIncompatibility(YaspError):
    """The word list carries no ``<s>`` marker to derive the phoneme offset from."""


class TranscriptError(YaspError):
    """Base class for transcript tokenizer faults."""


class WordTooLong(TranscriptError):
    """A single transcript token exceeds the token buffer."""


class TranscriptReadError(TranscriptError):
    """The transcript stream failed before end of file."""


class InvalidArgument(YaspError, ValueError):
    """A required argument is missing or in the wrong state."""


class AlreadyReconciledError(InvalidArgument):
    """The phoneme list has already been moved onto the utterance clock."""


class SerializationError(YaspError):
    """The nested transcript could not be built or rendered."""
