"""Split a plain-text transcript into the words handed to forced alignment."""

from __future__ import annotations

import logging
from typing import BinaryIO, Final

from yasp.exceptions import TranscriptReadError, WordTooLong
from yasp.utils.constant import MAX_TOKEN_BYTES

__all__ = [
    "TRANSCRIPT_WHITESPACE",
    "parse_transcript",
]

logger = logging.getLogger(__name__)

# Delimiters matching the engine's own alignment-text splitter.
TRANSCRIPT_WHITESPACE: Final[bytes] = b" \t\r\n"

_READ_SIZE: Final[int] = 4096


def parse_transcript(
    stream: BinaryIO,
    delimiters: bytes = b" ",
    *,
    max_token_bytes: int = MAX_TOKEN_BYTES,
) -> list[str]:
    """Read ``stream`` to the end and return its words in file order.

    The stream is scanned byte by byte. Any byte in ``delimiters`` ends the
    current token; runs of delimiters produce no empty tokens. A trailing
    token without a delimiter after it is still returned.

    Args:
        stream: Binary stream positioned at the start of the transcript.
        delimiters: Bytes that separate tokens.
        max_token_bytes: Longest accepted token, in bytes.

    Returns:
        list[str]: UTF-8 decoded tokens, left to right.

    Raises:
        WordTooLong: If a token is longer than ``max_token_bytes``.
        TranscriptReadError: If reading the stream fails before end of file.

    """
    tokens: list[str] = []
    token = bytearray()

    while True:
        try:
            chunk = stream.read(_READ_SIZE)
        except OSError as exc:
            raise TranscriptReadError(f"Failed to read transcript: {exc}") from exc
        if not chunk:
            break
        for byte in chunk:
            if byte in delimiters:
                if token:
                    tokens.append(_decode(token))
                    token = bytearray()
                continue
            if len(token) >= max_token_bytes:
                logger.error("Word is too large in transcript")
                raise WordTooLong(
                    f"Transcript token exceeds {max_token_bytes} bytes: {bytes(token[:32])!r}..."
                )
            token.append(byte)

    if token:
        tokens.append(_decode(token))
    return tokens


def _decode(token: bytearray) -> str:
    """Decode a token, raising TranscriptReadError on invalid UTF-8."""
    try:
        return token.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TranscriptReadError(f"Transcript is not valid UTF-8: {exc}") from exc
