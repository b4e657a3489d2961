"""UI theme definitions and selection helpers.

Themes are ANSI palettes for relay-list rows. JSON highlighting style for
``--json`` output remains a separate pygments setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reset: str
    section_header: str
    marker: str
    country: str
    city: str
    relay: str
    custom_list: str
    inactive: str
    selected: str
    badge_owned: str
    badge_rented: str
    badge_daita: str
    empty_text: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reset="\033[0m",
    section_header="\033[1;38;5;81m",
    marker="\033[38;5;44m",
    country="\033[1;34m",
    city="\033[38;5;110m",
    relay="\033[38;5;252m",
    custom_list="\033[1;38;5;229m",
    inactive="\033[2;38;5;250m",
    selected="\033[1;38;5;42m",
    badge_owned="\033[38;5;42m",
    badge_rented="\033[38;5;214m",
    badge_daita="\033[38;5;177m",
    empty_text="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reset="\033[0m",
    section_header="\033[1;38;5;45m",
    marker="\033[38;5;39m",
    country="\033[1;38;5;45m",
    city="\033[38;5;117m",
    relay="\033[38;5;252m",
    custom_list="\033[1;38;5;153m",
    inactive="\033[2;38;5;110m",
    selected="\033[1;38;5;84m",
    badge_owned="\033[38;5;84m",
    badge_rented="\033[38;5;215m",
    badge_daita="\033[38;5;141m",
    empty_text="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reset="",
    section_header="",
    marker="",
    country="",
    city="",
    relay="",
    custom_list="",
    inactive="",
    selected="",
    badge_owned="",
    badge_rented="",
    badge_daita="",
    empty_text="",
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
