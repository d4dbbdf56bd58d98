"""Optional file logging.

The TUI owns the terminal, so log records never go to stderr. They are only
written when a log file is configured.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
PACKAGE_LOGGER = "neopick"


def configure_logging(log_file: Path | None, verbose: bool = False) -> logging.Handler | None:
    """Attach a file handler to the package logger when ``log_file`` is set."""
    if log_file is None:
        return None
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler


__all__ = ["LOG_FORMAT", "configure_logging"]
