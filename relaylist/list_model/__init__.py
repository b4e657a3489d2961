"""Flat relay-list view-model: row variants, expansion state, building, formatting.

``build_relay_list_items`` turns filtered locations, custom lists and recents
into the single ordered row sequence consumed by renderers.
"""

from __future__ import annotations

from .build import build_relay_list_items, selected_row_index
from .expansion import (
    ExpansionKey,
    ancestor_ids,
    expand_all,
    initial_expansion,
    prune_expansion,
    toggle_expansion,
)
from .items import (
    SELECTABLE_ITEM_TYPES,
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
from .rendering import format_relay_badges, format_relay_list, format_relay_list_item, item_color_for

__all__ = [
    "SELECTABLE_ITEM_TYPES",
    "CustomListEntryItem",
    "CustomListFooter",
    "CustomListHeader",
    "CustomListItem",
    "EmptyRelayList",
    "ExpansionKey",
    "GeoLocationItem",
    "LocationHeader",
    "LocationsEmptyText",
    "RecentListItem",
    "RecentsListFooter",
    "RecentsListHeader",
    "RelayListItem",
    "SectionDivider",
    "ancestor_ids",
    "build_relay_list_items",
    "expand_all",
    "format_relay_badges",
    "format_relay_list",
    "format_relay_list_item",
    "initial_expansion",
    "item_color_for",
    "prune_expansion",
    "selected_row_index",
    "toggle_expansion",
]
