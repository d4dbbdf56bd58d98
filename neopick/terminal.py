"""Terminal control helpers for the filter session.

Owns the controlling-tty descriptor, raw-mode lifecycle, alternate-screen
switching and the cached screen size. Signal handlers installed here turn
termination signals into ``SessionInterrupted`` so teardown always runs.
"""

from __future__ import annotations

import contextlib
import logging
import os
import signal
import termios
import tty
from collections.abc import Iterator

from .errors import NoTerminalError, SessionInterrupted
from .render import ScreenSize

TTY_PATH = "/dev/tty"
DEFAULT_SIZE = ScreenSize(rows=24, columns=80)
TERMINATION_SIGNALS: tuple[signal.Signals, ...] = (
    signal.SIGINT,
    signal.SIGTERM,
    signal.SIGQUIT,
    signal.SIGHUP,
)

logger = logging.getLogger(__name__)


class TerminalController:
    """Manage one controlling terminal for the duration of a session."""

    def __init__(self, fd: int) -> None:
        """Capture tty state for ``fd`` so it can be restored on teardown."""
        self.fd = fd
        try:
            self._saved_tty_state = termios.tcgetattr(fd)
        except termios.error as exc:
            raise NoTerminalError(f"file descriptor {fd} is not a terminal") from exc
        self._tui_active = False
        self._interrupted = False
        self.size = self.query_size()

    @classmethod
    def open(cls, path: str = TTY_PATH) -> TerminalController:
        """Open ``path`` read/write and wrap it, raising ``NoTerminalError``."""
        try:
            fd = os.open(path, os.O_RDWR)
        except OSError as exc:
            raise NoTerminalError(f"cannot open {path}: {exc.strerror or exc}") from exc
        try:
            return cls(fd)
        except NoTerminalError:
            os.close(fd)
            raise

    def close(self) -> None:
        """Close the terminal descriptor."""
        os.close(self.fd)

    def query_size(self) -> ScreenSize:
        """Ask the terminal for its size, falling back to 80x24."""
        try:
            current = os.get_terminal_size(self.fd)
        except OSError:
            return DEFAULT_SIZE
        if current.lines <= 0 or current.columns <= 0:
            return DEFAULT_SIZE
        return ScreenSize(rows=current.lines, columns=current.columns)

    def refresh_size(self) -> ScreenSize:
        """Re-read and cache the terminal size."""
        self.size = self.query_size()
        return self.size

    @contextlib.contextmanager
    def _termination_signals_blocked(self) -> Iterator[None]:
        # Pending signals are delivered when the previous mask is restored.
        previous_mask = signal.pthread_sigmask(signal.SIG_BLOCK, TERMINATION_SIGNALS)
        try:
            yield
        finally:
            signal.pthread_sigmask(signal.SIG_SETMASK, previous_mask)

    def enable_tui_mode(self) -> None:
        """Enter raw mode on the alternate screen."""
        with self._termination_signals_blocked():
            # Marked active first so a failed switch is still undone.
            self._tui_active = True
            tty.setraw(self.fd, termios.TCSAFLUSH)
            os.write(self.fd, b"\x1b[?1049h")

    def disable_tui_mode(self) -> None:
        """Restore the saved tty state; repeated calls do nothing."""
        if not self._tui_active:
            return
        with self._termination_signals_blocked():
            try:
                # Show cursor and restore the main screen buffer.
                os.write(self.fd, b"\x1b[0m\x1b[?25h\x1b[?1049l")
            finally:
                termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved_tty_state)
                self._tui_active = False
        logger.debug("terminal restored")

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()

    def _handle_termination(self, signum: int, _frame: object) -> None:
        if self._interrupted:
            return
        self._interrupted = True
        logger.info("received signal %d", signum)
        raise SessionInterrupted(signum)

    def _handle_resize(self, _signum: int, _frame: object) -> None:
        self.refresh_size()

    @contextlib.contextmanager
    def signal_guard(self) -> Iterator[None]:
        """Route termination signals and resizes to this controller.

        Only the first termination signal raises; later ones are ignored so
        teardown cannot be interrupted. Previous handlers are reinstated on
        exit.
        """
        previous: dict[int, object] = {}
        self._interrupted = False
        try:
            for signum in TERMINATION_SIGNALS:
                previous[signum] = signal.signal(signum, self._handle_termination)
            previous[signal.SIGWINCH] = signal.signal(signal.SIGWINCH, self._handle_resize)
            yield
        finally:
            for signum, handler in previous.items():
                signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


__all__ = ["DEFAULT_SIZE", "TERMINATION_SIGNALS", "TTY_PATH", "TerminalController"]
