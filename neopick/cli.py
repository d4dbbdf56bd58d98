"""Command-line front door for neopick.

Parses CLI options, loads lines from standard input, opens the controlling
terminal and runs the interactive session. The confirmed line is the only
thing ever written to standard output.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from .config import load_log_file, load_max_line_length, load_max_lines, load_theme_name
from .errors import EmptyInputError, InteractiveInputError, StartupError
from .lines import MAX_LINE_LENGTH, MAX_LINES, LineStore, load_lines
from .logs import configure_logging
from .runtime import run_session
from .session import Session
from .terminal import TerminalController
from .ui_theme import available_theme_names, resolve_theme

EXIT_CANCELLED = 130

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="neopick",
        description="Interactively fuzzy-filter lines from standard input and print the chosen one.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        choices=available_theme_names(),
        help="UI theme name.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--max-lines",
        type=_positive_int,
        default=None,
        help=f"Maximum number of input lines to read (default: {MAX_LINES}).",
    )
    parser.add_argument(
        "--max-line-length",
        type=_positive_int,
        default=None,
        help=f"Truncate input lines to this many characters (default: {MAX_LINE_LENGTH}).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Append debug logs to this file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level.")
    return parser


def read_input(stdin: TextIO, max_lines: int, max_line_length: int) -> LineStore:
    """Load the line store from piped ``stdin`` or raise a ``StartupError``."""
    if stdin.isatty():
        raise InteractiveInputError("standard input is a terminal; pipe lines into neopick")
    store = load_lines(stdin.buffer, max_lines=max_lines, max_line_length=max_line_length)
    if not store:
        raise EmptyInputError("no input lines")
    return store


def run(args: argparse.Namespace, stdin: TextIO, stdout: TextIO) -> int:
    """Run one session and return the process exit status."""
    max_lines = args.max_lines or load_max_lines() or MAX_LINES
    max_line_length = args.max_line_length or load_max_line_length() or MAX_LINE_LENGTH
    store = read_input(stdin, max_lines, max_line_length)
    theme = resolve_theme(args.theme or load_theme_name(), no_color=args.no_color)

    terminal = TerminalController.open()
    try:
        session = run_session(Session(store), terminal, theme)
    finally:
        terminal.close()

    selected = session.selected_line
    if selected is None:
        return EXIT_CANCELLED
    stdout.buffer.write(selected.encode("utf-8", errors="surrogateescape") + b"\n")
    stdout.flush()
    return 0


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the interactive filter.

    Startup problems (no terminal, terminal on stdin, empty input) exit with
    a diagnostic before any screen output. A cancelled session exits with
    status 130 and prints nothing.
    """
    args = build_parser().parse_args(argv)
    try:
        configure_logging(args.log_file or load_log_file(), verbose=args.verbose)
    except OSError as exc:
        raise SystemExit(f"neopick: cannot open log file: {exc}") from exc

    try:
        status = run(args, sys.stdin, sys.stdout)
    except StartupError as exc:
        logger.error("startup failed: %s", exc)
        raise SystemExit(f"neopick: {exc}") from exc
    except KeyboardInterrupt:
        # Ctrl-C before the session installs its own handlers.
        logger.info("interrupted before the session started")
        raise SystemExit(EXIT_CANCELLED) from None
    if status:
        raise SystemExit(status)


if __name__ == "__main__":
    main()
