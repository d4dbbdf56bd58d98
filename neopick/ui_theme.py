"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the prompt, the selection marker and match
emphasis. The plain theme carries no escape sequences for ``--no-color``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the render engine."""

    name: str
    reset: str
    prompt: str
    query: str
    marker: str
    selected_text: str
    match: str
    match_selected: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    prompt="\033[38;2;116;199;236m",
    query="",
    marker="\033[38;2;243;139;168m",
    selected_text="\033[37m",
    match="\033[38;2;250;179;135m",
    match_selected="\033[1;38;2;250;179;135m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    prompt="\033[1;38;5;45m",
    query="\033[38;5;153m",
    marker="\033[38;5;39m",
    selected_text="\033[38;5;252m",
    match="\033[38;5;117m",
    match_selected="\033[1;38;5;81m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    prompt="",
    query="",
    marker="",
    selected_text="",
    match="",
    match_selected="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
