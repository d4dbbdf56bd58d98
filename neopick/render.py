"""Render engine for the filter screen.

Builds an immutable frame (rows of styled spans) from the query, the ranked
matches and the cursor, then writes the whole frame with one call so rapid
typing never shows a half-drawn screen.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass

from .ansi import clip_cells, clip_text, display_width
from .match_index import Match
from .ui_theme import UITheme

PROMPT = "> "
SELECTED_MARKER = "> "
UNSELECTED_MARKER = "  "
HEADER_ROWS = 2
CLEAR_SCREEN = "\033[H\033[J"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"


@dataclass(frozen=True)
class ScreenSize:
    """Terminal dimensions in character cells."""

    rows: int
    columns: int


@dataclass(frozen=True)
class Span:
    """Run of text drawn with one SGR style (empty style means unstyled)."""

    text: str
    style: str = ""


@dataclass(frozen=True)
class Frame:
    """Complete screen description produced for one redraw."""

    rows: tuple[tuple[Span, ...], ...]
    cursor_row: int
    cursor_col: int
    reset: str = ""

    def encode(self) -> str:
        """Serialize the frame into one ANSI string."""
        out: list[str] = [HIDE_CURSOR, CLEAR_SCREEN]
        for row_idx, row in enumerate(self.rows):
            if row_idx:
                out.append("\r\n")
            for span in row:
                if span.style:
                    out.append(span.style)
                    out.append(span.text)
                    out.append(self.reset)
                else:
                    out.append(span.text)
        out.append(f"\033[{self.cursor_row};{self.cursor_col}H")
        out.append(SHOW_CURSOR)
        return "".join(out)

    def plain_rows(self) -> list[str]:
        """Return row text without styling."""
        return ["".join(span.text for span in row) for row in self.rows]


def visible_row_count(size: ScreenSize) -> int:
    """Return how many result rows fit below the header."""
    return max(0, size.rows - HEADER_ROWS)


def viewport_start(cursor: int, visible_rows: int) -> int:
    """Return the first visible match index so ``cursor`` stays on screen.

    Scrolling only advances far enough to keep the cursor on the last row.
    """
    if visible_rows <= 0 or cursor < visible_rows:
        return 0
    return cursor - visible_rows + 1


def _line_spans(match: Match, max_cols: int, selected: bool, theme: UITheme) -> list[Span]:
    """Group a clipped line into spans of matched and unmatched text."""
    matched = set(match.positions)
    base_style = theme.selected_text if selected else ""
    hit_style = theme.match_selected if selected else theme.match
    spans: list[Span] = []
    run: list[str] = []
    run_hit = False
    for offset, piece in clip_cells(match.line, max_cols):
        is_hit = offset in matched
        if run and is_hit != run_hit:
            spans.append(Span("".join(run), hit_style if run_hit else base_style))
            run = []
        run.append(piece)
        run_hit = is_hit
    if run:
        spans.append(Span("".join(run), hit_style if run_hit else base_style))
    return spans


def build_frame(
    query: str,
    matches: Sequence[Match],
    cursor: int,
    size: ScreenSize,
    theme: UITheme,
) -> Frame:
    """Project the query and the visible slice of ``matches`` onto a frame."""
    text_cols = max(0, size.columns - len(SELECTED_MARKER))
    header = (
        Span(PROMPT, theme.prompt),
        Span(clip_text(query, text_cols), theme.query),
    )
    rows: list[tuple[Span, ...]] = [header]

    visible = visible_row_count(size)
    start = viewport_start(cursor, visible)
    for idx in range(start, min(len(matches), start + visible)):
        selected = idx == cursor
        marker = Span(SELECTED_MARKER, theme.marker) if selected else Span(UNSELECTED_MARKER)
        rows.append((marker, *_line_spans(matches[idx], text_cols, selected, theme)))

    cursor_col = display_width(query) + len(PROMPT) + 1
    return Frame(
        rows=tuple(rows),
        cursor_row=1,
        cursor_col=max(1, min(cursor_col, size.columns)),
        reset=theme.reset,
    )


def write_frame(fd: int, frame: Frame) -> None:
    """Write the encoded frame to ``fd`` in a single pass."""
    data = frame.encode().encode("utf-8", errors="replace")
    while data:
        written = os.write(fd, data)
        data = data[written:]


__all__ = [
    "Frame",
    "ScreenSize",
    "Span",
    "build_frame",
    "viewport_start",
    "visible_row_count",
    "write_frame",
]
