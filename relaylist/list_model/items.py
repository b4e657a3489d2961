"""Flat row variants handed to the rendering layer.

Every row exposes a stable ``key`` for list diffing and a ``content_type``
grouping rows that share a layout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..relay_model.types import CustomList, CustomListId, Location, RelayItem

CONTENT_HEADER = "header"
CONTENT_FOOTER = "footer"
CONTENT_DIVIDER = "divider"
CONTENT_LOCATION = "location"
CONTENT_CUSTOM_LIST = "custom_list"
CONTENT_CUSTOM_LIST_ENTRY = "custom_list_entry"
CONTENT_RECENT = "recent"
CONTENT_EMPTY = "empty"


@dataclass(frozen=True)
class RecentsListHeader:
    key = "recents_header"
    content_type = CONTENT_HEADER


@dataclass(frozen=True)
class RecentListItem:
    item: RelayItem
    is_selected: bool = False
    content_type = CONTENT_RECENT

    @property
    def key(self) -> tuple[str, object]:
        return ("recent", self.item.id)


@dataclass(frozen=True)
class RecentsListFooter:
    key = "recents_footer"
    content_type = CONTENT_FOOTER


@dataclass(frozen=True)
class CustomListHeader:
    """Custom-list section header; ``can_edit`` enables the edit action."""

    can_edit: bool = False
    key = "custom_list_header"
    content_type = CONTENT_HEADER


@dataclass(frozen=True)
class CustomListItem:
    item: CustomList
    is_selected: bool = False
    is_expanded: bool = False
    content_type = CONTENT_CUSTOM_LIST

    @property
    def key(self) -> tuple[str, object]:
        return ("custom_list", self.item.id)


@dataclass(frozen=True)
class CustomListEntryItem:
    """One member (or nested child) of an expanded custom list."""

    parent_id: CustomListId
    parent_name: str
    item: Location
    depth: int = 1
    is_selected: bool = False
    is_expanded: bool = False
    content_type = CONTENT_CUSTOM_LIST_ENTRY

    @property
    def key(self) -> tuple[str, object, object, int]:
        # A member can also appear nested under another member at a deeper level.
        return ("custom_list_entry", self.parent_id, self.item.id, self.depth)


@dataclass(frozen=True)
class CustomListFooter:
    has_custom_lists: bool = False
    key = "custom_list_footer"
    content_type = CONTENT_FOOTER


@dataclass(frozen=True)
class SectionDivider:
    key = "section_divider"
    content_type = CONTENT_DIVIDER


@dataclass(frozen=True)
class LocationHeader:
    key = "location_header"
    content_type = CONTENT_HEADER


@dataclass(frozen=True)
class GeoLocationItem:
    item: Location
    is_selected: bool = False
    depth: int = 0
    is_expanded: bool = False
    content_type = CONTENT_LOCATION

    @property
    def key(self) -> tuple[str, object]:
        return ("location", self.item.id)


@dataclass(frozen=True)
class LocationsEmptyText:
    """Catalog has locations, but active filters exclude all of them."""

    filters_active: bool = True
    key = "locations_empty_text"
    content_type = CONTENT_EMPTY


@dataclass(frozen=True)
class EmptyRelayList:
    """The catalog itself holds no locations."""

    key = "empty_relay_list"
    content_type = CONTENT_EMPTY


RelayListItem = Union[
    RecentsListHeader,
    RecentListItem,
    RecentsListFooter,
    CustomListHeader,
    CustomListItem,
    CustomListEntryItem,
    CustomListFooter,
    SectionDivider,
    LocationHeader,
    GeoLocationItem,
    LocationsEmptyText,
    EmptyRelayList,
]

SELECTABLE_ITEM_TYPES = (CustomListItem, GeoLocationItem, RecentListItem)
