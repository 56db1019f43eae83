"""Registry of output formatters for nested transcripts.

Allows easy extension with new formats by adding a formatter function and
registering it in the ``FORMATTERS`` dictionary.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass

from yasp.timestamps.models import NestedTranscript

from ._json import from_json, to_json
from ._txt import to_txt
from .segment_table import format_segment_list, pprint_segment_list


@dataclass
class FormatterSpec:
    """Metadata and function for a specific output format.

    Attributes:
        format_func: The formatter function that converts a NestedTranscript to string.
        file_extension: The file extension for this format (including the dot).

    """

    format_func: Callable[[NestedTranscript], str]
    file_extension: str


# A registry mapping format names to their respective formatter specifications.
FORMATTERS: dict[str, FormatterSpec] = {
    "json": FormatterSpec(format_func=to_json, file_extension=".json"),
    "txt": FormatterSpec(format_func=to_txt, file_extension=".txt"),
}


def get_formatter_spec(format_name: str) -> FormatterSpec:
    """Retrieve the FormatterSpec for the given output format name.

    Parameters:
        format_name (str): Case-insensitive format identifier (e.g., "json", "txt").

    Returns:
        FormatterSpec: The metadata and formatter function for the requested format.

    Raises:
        ValueError: If the specified format_name is not supported.
    """
    spec = FORMATTERS.get(format_name.lower())
    if not spec:
        supported = list(FORMATTERS.keys())
        raise ValueError(f"Unsupported format: '{format_name}'. Supported formats are: {supported}")
    return spec


def format_for_path(path: str | os.PathLike[str]) -> str | None:
    """Return the format whose file extension matches ``path``, or ``None``."""
    suffix = os.path.splitext(os.fspath(path))[1].lower()
    for name, spec in FORMATTERS.items():
        if spec.file_extension == suffix:
            return name
    return None


def get_formatter(format_name: str) -> Callable[[NestedTranscript], str]:
    """Get the formatter function registered for the given format name.

    Raises:
        ValueError: If `format_name` is not supported.
    """
    return get_formatter_spec(format_name).format_func


__all__ = [
    "FORMATTERS",
    "FormatterSpec",
    "format_for_path",
    "format_segment_list",
    "from_json",
    "get_formatter",
    "get_formatter_spec",
    "pprint_segment_list",
    "to_json",
    "to_txt",
]
