from __future__ import annotations

from contextlib import contextmanager
import unittest
from unittest import mock

from neopick.errors import SessionInterrupted
from neopick.render import Frame, ScreenSize
from neopick.runtime import run_session
from neopick.session import Session, SessionState
from neopick.ui_theme import PLAIN_THEME

FRUIT = ["apple", "banana", "grape"]


class _FakeTerminal:
    def __init__(self, size: ScreenSize = ScreenSize(rows=10, columns=40), interrupt_on_restore: bool = False) -> None:
        self.fd = 3
        self.size = size
        self.raw_enters = 0
        self.raw_exits = 0
        self.guarded = False
        self.interrupt_on_restore = interrupt_on_restore

    @contextmanager
    def raw_mode(self):
        self.raw_enters += 1
        try:
            yield
        finally:
            self.raw_exits += 1
            if self.interrupt_on_restore:
                raise SessionInterrupted(15)

    @contextmanager
    def signal_guard(self):
        self.guarded = True
        try:
            yield
        finally:
            self.guarded = False


class _ScriptedReader:
    def __init__(self, keys: list[object], on_read=None) -> None:
        self._keys = list(keys)
        self._on_read = on_read
        self.reads = 0

    def read_key(self) -> str:
        self.reads += 1
        if self._on_read is not None:
            self._on_read(self.reads)
        key = self._keys.pop(0)
        if isinstance(key, BaseException):
            raise key
        return key


class RunSessionTests(unittest.TestCase):
    def _run(self, keys: list[object], terminal: _FakeTerminal | None = None, on_read=None):
        terminal = terminal or _FakeTerminal()
        frames: list[Frame] = []
        session = Session(FRUIT)
        with mock.patch("neopick.runtime.write_frame", side_effect=lambda _fd, frame: frames.append(frame)):
            result = run_session(session, terminal, PLAIN_THEME, reader=_ScriptedReader(keys, on_read))
        return result, terminal, frames

    def test_confirm_after_navigation_returns_selected_line(self) -> None:
        session, terminal, frames = self._run(["a", "p", "DOWN", "ENTER"])

        self.assertEqual(session.state, SessionState.CONFIRMED)
        self.assertEqual(session.selected_line, "grape")
        self.assertEqual(len(frames), 4)
        self.assertEqual(frames[-1].plain_rows(), ["> ap", "  apple", "> grape"])
        self.assertEqual((terminal.raw_enters, terminal.raw_exits), (1, 1))

    def test_noop_keys_do_not_redraw(self) -> None:
        _session, _terminal, frames = self._run(["UP", "BACKSPACE", "ESC"])

        self.assertEqual(len(frames), 1)

    def test_quit_key_cancels_and_restores_terminal(self) -> None:
        session, terminal, _frames = self._run(["ESC"])

        self.assertEqual(session.state, SessionState.CANCELLED)
        self.assertIsNone(session.selected_line)
        self.assertEqual(terminal.raw_exits, 1)
        self.assertFalse(terminal.guarded)

    def test_signal_interrupt_cancels_and_restores_terminal_once(self) -> None:
        session, terminal, _frames = self._run(["a", SessionInterrupted(15)])

        self.assertEqual(session.state, SessionState.CANCELLED)
        self.assertEqual((terminal.raw_enters, terminal.raw_exits), (1, 1))

    def test_signal_during_restore_keeps_confirmed_selection(self) -> None:
        terminal = _FakeTerminal(interrupt_on_restore=True)

        session, terminal, _frames = self._run(["g", "ENTER"], terminal=terminal)

        self.assertEqual(session.state, SessionState.CONFIRMED)
        self.assertEqual(session.selected_line, "grape")
        self.assertEqual(terminal.raw_exits, 1)

    def test_resize_is_picked_up_by_next_frame(self) -> None:
        terminal = _FakeTerminal(ScreenSize(rows=10, columns=40))

        def shrink(reads: int) -> None:
            if reads == 1:
                terminal.size = ScreenSize(rows=3, columns=5)

        session, _terminal, frames = self._run(["LEFT", "ESC"], terminal=terminal, on_read=shrink)

        self.assertEqual(len(frames), 2)
        self.assertEqual(frames[0].plain_rows(), ["> ", "> apple", "  banana", "  grape"])
        self.assertEqual(frames[1].plain_rows(), ["> ", "> app"])
        self.assertEqual([m.line for m in session.matches], FRUIT)


if __name__ == "__main__":
    unittest.main()
