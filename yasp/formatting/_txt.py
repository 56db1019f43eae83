"""Formatter for plain text (.txt) output."""

from yasp.timestamps.models import NestedTranscript


def to_txt(transcript: NestedTranscript, **kwargs: object) -> str:
    """Return the recognized words on a single line.

    Args:
        transcript: The nested transcript.
        **kwargs: Ignored.

    Returns:
        The word labels separated by single spaces, newline terminated.
    """
    return " ".join(node.word for node in transcript.words) + "\n"
