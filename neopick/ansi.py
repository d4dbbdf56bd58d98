"""Display-width helpers for terminal rendering.

Measures characters in terminal cells and clips line text to a column budget
while keeping track of each visible cell's source offset, so match
highlighting stays aligned when tabs and wide characters are present.
"""

from __future__ import annotations

import unicodedata

TAB_STOP = 8
CONTROL_PLACEHOLDER = "?"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies from column 0."""
    col = 0
    for ch in text:
        col += char_display_width(ch, col)
    return col


def clip_cells(text: str, max_cols: int) -> list[tuple[int, str]]:
    """Split ``text`` into printable pieces that fit in ``max_cols`` cells.

    Returns ``(offset, piece)`` pairs where ``offset`` indexes ``text``.
    Tabs become spaces up to the next tab stop, other control characters
    become ``?``, and a character that would straddle the limit is dropped.
    """
    if max_cols <= 0 or not text:
        return []

    out: list[tuple[int, str]] = []
    col = 0
    for offset, ch in enumerate(text):
        if col >= max_cols:
            break
        if ch != "\t" and unicodedata.category(ch) == "Cc":
            ch = CONTROL_PLACEHOLDER
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append((offset, " " * w if ch == "\t" else ch))
        col += w
    return out


def clip_text(text: str, max_cols: int) -> str:
    """Return ``text`` clipped to ``max_cols`` display cells."""
    return "".join(piece for _offset, piece in clip_cells(text, max_cols))
