"""User JSON config helpers.

Reads the theme name, input limits and log-file location.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "neopick"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_positive_int(key: str) -> int | None:
    """Read a strictly positive integer; booleans and other types are ignored."""
    value = load_config().get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def _load_nonempty_str(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load configured UI theme name, returning ``None`` when unset/invalid."""
    return _load_nonempty_str("theme")


def load_max_lines() -> int | None:
    """Load the configured cap on input records."""
    return _load_positive_int("max_lines")


def load_max_line_length() -> int | None:
    """Load the configured per-record character limit."""
    return _load_positive_int("max_line_length")


def load_log_file() -> Path | None:
    """Load the configured log file path, expanding ``~``."""
    value = _load_nonempty_str("log_file")
    if value is None:
        return None
    return Path(value).expanduser()


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "load_log_file",
    "load_max_line_length",
    "load_max_lines",
    "load_theme_name",
]
