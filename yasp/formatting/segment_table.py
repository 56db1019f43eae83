"""Textual reports of word and phoneme segment lists.

``format_segment_list`` produces space-delimited rows that paste cleanly
into a spreadsheet; ``pprint_segment_list`` renders an aligned table with
*rich* for reading in a terminal or log file.
"""

from __future__ import annotations

import io

from rich import box
from rich.console import Console
from rich.table import Table

from yasp.segments.models import Segment, SegmentList

__all__ = ["format_segment_list", "pprint_segment_list"]

_COLUMNS = ("word", "start", "end", "pprob", "ascr", "lscr", "lback", "duration")


def _cell(value: object) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _row(seg: Segment) -> list[str]:
    prob = "-" if seg.probability is None else f"{seg.probability:f}"
    return [
        seg.label,
        str(seg.start),
        _cell(seg.end),
        prob,
        _cell(seg.acoustic_score),
        _cell(seg.language_score if seg.language_score is not None else seg.score),
        _cell(seg.language_backoff),
        str(seg.duration),
    ]


def format_segment_list(segments: SegmentList) -> str:
    """Render one header line plus one space-delimited line per segment.

    Missing values (e.g. ``end`` for phonemes) are printed as ``-``; a
    phoneme's alignment score is shown in the ``lscr`` column.
    """
    lines = [" ".join(_COLUMNS)]
    lines.extend(" ".join(_row(seg)) for seg in segments)
    return "\n".join(lines) + "\n"


def pprint_segment_list(segments: SegmentList, *, title: str | None = None) -> str:
    """Render ``segments`` as an aligned table.

    Args:
        segments: Word or phoneme list.
        title: Optional table title.

    Returns:
        str: The table as plain text (no ANSI styling).
    """
    table = Table(title=title, box=box.SIMPLE, show_header=True)
    for name in _COLUMNS:
        table.add_column(name, no_wrap=True, justify="left" if name == "word" else "right")
    for seg in segments:
        row = _row(seg)
        if seg.probability is not None:
            row[3] = f"{seg.probability:.3f}"
        table.add_row(*row)

    buffer = io.StringIO()
    Console(file=buffer, width=120, no_color=True, force_terminal=False).print(table)
    return buffer.getvalue()
