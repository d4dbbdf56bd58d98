"""Interactive session state machine.

A ``Session`` owns the query, the match index and the selection cursor.
Key tokens from ``neopick.input`` drive it from ``EDITING`` to either
``CONFIRMED`` (carrying the selected line) or ``CANCELLED``.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .match_index import Match, clamp_cursor, rebuild

MAX_QUERY_LENGTH = 4095
QUIT_KEYS = frozenset({"ESC", "CTRL_C", "CTRL_G", "EOF"})


class SessionState(enum.Enum):
    EDITING = "editing"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass
class Session:
    """Mutable state for one filtering session over a fixed line set."""

    lines: Sequence[str]
    query: str = ""
    cursor: int = 0
    state: SessionState = SessionState.EDITING
    selected: Match | None = None
    matches: list[Match] = field(init=False)

    def __post_init__(self) -> None:
        self.matches = rebuild(self.query, self.lines)
        self.cursor = clamp_cursor(self.cursor, len(self.matches))
        self._bindings: dict[str, Callable[[], bool]] = {
            "BACKSPACE": self.backspace,
            "UP": lambda: self.move_cursor(-1),
            "DOWN": lambda: self.move_cursor(1),
            "ENTER": self.confirm,
        }
        for key in QUIT_KEYS:
            self._bindings[key] = self.cancel

    @property
    def finished(self) -> bool:
        return self.state is not SessionState.EDITING

    @property
    def selected_line(self) -> str | None:
        """Return the confirmed line, or ``None`` if nothing was confirmed."""
        if self.state is SessionState.CONFIRMED and self.selected is not None:
            return self.selected.line
        return None

    def set_query(self, query: str) -> None:
        """Replace the query, rebuild matches and move the cursor to the top."""
        self.query = query
        self.matches = rebuild(query, self.lines)
        self.cursor = clamp_cursor(0, len(self.matches))

    def type_char(self, ch: str) -> bool:
        if len(self.query) >= MAX_QUERY_LENGTH:
            return False
        self.set_query(self.query + ch)
        return True

    def backspace(self) -> bool:
        if not self.query:
            return False
        self.set_query(self.query[:-1])
        return True

    def move_cursor(self, delta: int) -> bool:
        """Move the selection by ``delta`` rows; out-of-range moves are no-ops."""
        target = self.cursor + delta
        if not 0 <= target < len(self.matches):
            return False
        self.cursor = target
        return True

    def confirm(self) -> bool:
        if not self.matches:
            return False
        self.selected = self.matches[self.cursor]
        self.state = SessionState.CONFIRMED
        return True

    def cancel(self) -> bool:
        self.state = SessionState.CANCELLED
        return True

    def handle_key(self, key: str) -> bool:
        """Apply one key token and return whether the screen needs a redraw."""
        if self.finished:
            return False
        handler = self._bindings.get(key)
        if handler is not None:
            return handler()
        if len(key) == 1 and key.isprintable():
            return self.type_char(key)
        return False


__all__ = ["MAX_QUERY_LENGTH", "QUIT_KEYS", "Session", "SessionState"]
