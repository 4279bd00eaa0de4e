"""UI theme definitions and selection helpers.

Themes are immutable ANSI palettes handed to the renderer. The navigation core
never reads them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    border: str
    title: str
    tab_active: str
    tab_inactive: str
    recipe_selected: str
    recipe_inactive: str
    controls: str
    description: str
    query: str
    query_placeholder: str
    warning: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    border="\033[38;5;250m",
    title="\033[1;38;2;250;235;215m",
    tab_active="\033[1;4;38;2;172;215;230m",
    tab_inactive="\033[38;2;168;168;168m",
    recipe_selected="\033[1;35m",
    recipe_inactive="\033[38;2;168;168;168m",
    controls="\033[3;38;2;168;168;168m",
    description="\033[38;2;250;235;215m",
    query="\033[1;38;2;172;215;230m",
    query_placeholder="\033[2;38;2;168;168;168m",
    warning="\033[1;35m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    border="",
    title="",
    tab_active="",
    tab_inactive="",
    recipe_selected="",
    recipe_inactive="",
    controls="",
    description="",
    query="",
    query_placeholder="",
    warning="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    candidate = str(name or "").strip().lower()
    return _THEMES.get(candidate, DEFAULT_THEME)


__all__ = [
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "UITheme",
    "resolve_theme",
]
