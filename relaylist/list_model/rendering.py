"""Formatting helpers for relay-list rows."""

from __future__ import annotations

from ..relay_model.hierarchy import children
from ..relay_model.types import City, Country, CustomList, Ownership, Relay, RelayItem
from ..ui_theme import DEFAULT_THEME, UITheme
from .items import (
    CustomListEntryItem,
    CustomListFooter,
    CustomListHeader,
    CustomListItem,
    EmptyRelayList,
    GeoLocationItem,
    LocationHeader,
    LocationsEmptyText,
    RecentListItem,
    RecentsListFooter,
    RecentsListHeader,
    RelayListItem,
    SectionDivider,
)

DIVIDER_WIDTH = 24


def item_color_for(item: RelayItem, theme: UITheme | None = None) -> str:
    """Return ANSI color for an item name based on its kind and activity."""
    active_theme = theme or DEFAULT_THEME
    if not item.active:
        return active_theme.inactive
    if isinstance(item, Country):
        return active_theme.country
    if isinstance(item, City):
        return active_theme.city
    if isinstance(item, CustomList):
        return active_theme.custom_list
    return active_theme.relay


def format_relay_badges(relay: Relay, theme: UITheme | None = None) -> str:
    """Render ownership, provider and DAITA badges for one relay."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    if relay.ownership is Ownership.OWNED:
        badges = f" {active_theme.badge_owned}[owned]{reset}"
    else:
        badges = f" {active_theme.badge_rented}[rented]{reset}"
    if relay.provider:
        badges += f" {active_theme.divider}{relay.provider}{reset}"
    if relay.daita:
        badges += f" {active_theme.badge_daita}[daita]{reset}"
    return badges


def _format_item_row(
    item: RelayItem,
    depth: int,
    is_expanded: bool,
    is_selected: bool,
    theme: UITheme,
) -> str:
    indent = "  " * depth
    reset = theme.reset
    if children(item):
        marker = f"{theme.marker}{'▾ ' if is_expanded else '▸ '}{reset}"
    else:
        marker = "  "
    name_color = theme.selected if is_selected else item_color_for(item, theme)
    check = f" {theme.selected}✓{reset}" if is_selected else ""
    badges = format_relay_badges(item, theme) if isinstance(item, Relay) else ""
    return f"{indent}{marker}{name_color}{item.name}{reset}{badges}{check}"


def format_relay_list_item(row: RelayListItem, theme: UITheme | None = None) -> str:
    """Render one relay-list row as ANSI-styled display text."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    header = active_theme.section_header
    hint = active_theme.empty_text

    if isinstance(row, RecentsListHeader):
        return f"{header}Recents{reset}"
    if isinstance(row, RecentListItem):
        return _format_item_row(row.item, 0, False, row.is_selected, active_theme)
    if isinstance(row, RecentsListFooter):
        return ""
    if isinstance(row, CustomListHeader):
        actions = " [+] [edit]" if row.can_edit else " [+]"
        return f"{header}Custom lists{reset}{active_theme.marker}{actions}{reset}"
    if isinstance(row, CustomListItem):
        return _format_item_row(row.item, 0, row.is_expanded, row.is_selected, active_theme)
    if isinstance(row, CustomListEntryItem):
        return _format_item_row(row.item, row.depth, row.is_expanded, row.is_selected, active_theme)
    if isinstance(row, CustomListFooter):
        if row.has_custom_lists:
            return ""
        return f"{hint}To create a custom list press \"+\"{reset}"
    if isinstance(row, SectionDivider):
        return f"{active_theme.divider}{'─' * DIVIDER_WIDTH}{reset}"
    if isinstance(row, LocationHeader):
        return f"{header}All locations{reset}"
    if isinstance(row, GeoLocationItem):
        return _format_item_row(row.item, row.depth, row.is_expanded, row.is_selected, active_theme)
    if isinstance(row, LocationsEmptyText):
        if row.filters_active:
            return f"{hint}No locations match the active filters{reset}"
        return f"{hint}No matching locations found{reset}"
    if isinstance(row, EmptyRelayList):
        return f"{hint}No relays available{reset}"
    raise TypeError(f"unsupported relay list row: {row!r}")


def format_relay_list(rows: list[RelayListItem], theme: UITheme | None = None) -> list[str]:
    """Render every row, one display line per row."""
    return [format_relay_list_item(row, theme) for row in rows]
