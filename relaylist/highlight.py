"""Terminal highlighting for JSON output via pygments."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JsonLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()
_FORMATTERS: dict[str, TerminalFormatter] = {}


def normalize_style(style: str) -> str:
    """Return ``style`` when pygments knows it, otherwise the default style."""
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_json(source: str, style: str = DEFAULT_STYLE) -> str:
    """Return ``source`` with ANSI JSON highlighting."""
    formatter = _formatter_for_style(normalize_style(style))
    return highlight(source, JsonLexer(), formatter)
