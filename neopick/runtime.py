"""Blocking event loop for one filtering session.

Draws a frame, waits for one key, applies it to the session and redraws,
until the session is confirmed or cancelled. Everything happens inside the
terminal's raw-mode guard so the tty is restored on every exit path.
"""

from __future__ import annotations

import logging

from .errors import SessionInterrupted
from .input import KeyReader
from .render import ScreenSize, build_frame, write_frame
from .session import Session
from .terminal import TerminalController
from .ui_theme import UITheme

logger = logging.getLogger(__name__)


def draw(session: Session, terminal: TerminalController, theme: UITheme) -> ScreenSize:
    """Render the session with the currently cached size and return that size."""
    size = terminal.size
    frame = build_frame(session.query, session.matches, session.cursor, size, theme)
    write_frame(terminal.fd, frame)
    return size


def run_session(
    session: Session,
    terminal: TerminalController,
    theme: UITheme,
    reader: KeyReader | None = None,
) -> Session:
    """Drive ``session`` from terminal input until it reaches a final state."""
    if reader is None:
        reader = KeyReader(terminal.fd)

    with terminal.signal_guard():
        try:
            with terminal.raw_mode():
                drawn_size = draw(session, terminal, theme)
                while not session.finished:
                    key = reader.read_key()
                    changed = session.handle_key(key)
                    if session.finished:
                        break
                    if changed or terminal.size != drawn_size:
                        drawn_size = draw(session, terminal, theme)
        except SessionInterrupted as exc:
            logger.info("session interrupted: %s", exc)
            if not session.finished:
                session.cancel()

    logger.debug("session finished in state %s", session.state.value)
    return session


__all__ = ["draw", "run_session"]
