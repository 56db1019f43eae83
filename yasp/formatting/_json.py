"""Formatter for JSON (.json) output."""

from pydantic import ValidationError

from yasp.exceptions import SerializationError
from yasp.timestamps.models import NestedTranscript


def to_json(transcript: NestedTranscript, **kwargs: object) -> str:
    """
    Convert a NestedTranscript into a JSON-formatted string.

    The document is ``{"words": [{"word", "start", "duration", "phonemes":
    [{"phoneme", "start", "duration"}]}]}`` with keys in that order.

    Parameters:
        transcript: The NestedTranscript to serialize.
        **kwargs: Additional arguments; ignored for JSON output.

    Returns:
        JSON string representation of the transcript (pretty-printed with two-space indentation).
    """
    try:
        return transcript.model_dump_json(indent=2)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Failed to print json: {exc}") from exc


def from_json(text: str | bytes) -> NestedTranscript:
    """
    Parse a document produced by :func:`to_json`.

    Raises:
        SerializationError: If the text is not a valid nested transcript.
    """
    try:
        return NestedTranscript.model_validate_json(text)
    except ValidationError as exc:
        raise SerializationError(f"Invalid transcript JSON: {exc}") from exc
