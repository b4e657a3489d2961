"""Flat relay-list construction from filtered locations, custom lists and recents."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import replace

from ..relay_model.hierarchy import dedupe_first, location_children
from ..relay_model.lookup import find_relay_item
from ..relay_model.types import Country, CustomList, Location, RelayItemId
from .expansion import ExpansionKey
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


def _is_expanded(location: Location, key: ExpansionKey, expanded: Collection[ExpansionKey]) -> bool:
    return bool(location_children(location)) and key in expanded


def _recent_rows(
    recents: Sequence[RelayItemId],
    countries: Sequence[Country],
    custom_lists: Sequence[CustomList],
) -> list[RelayListItem]:
    rows: list[RelayListItem] = []
    for item_id in dedupe_first(recents):
        item = find_relay_item(countries, custom_lists, item_id)
        if item is not None:
            rows.append(RecentListItem(item))
    if not rows:
        return []
    return [RecentsListHeader(), *rows, RecentsListFooter()]


def _custom_list_entry_rows(
    custom_list: CustomList,
    location: Location,
    depth: int,
    expanded: Collection[ExpansionKey],
    out: list[RelayListItem],
) -> None:
    is_expanded = _is_expanded(location, ExpansionKey(location.id, custom_list.id), expanded)
    out.append(
        CustomListEntryItem(
            parent_id=custom_list.id,
            parent_name=custom_list.name,
            item=location,
            depth=depth,
            is_expanded=is_expanded,
        )
    )
    if is_expanded:
        for child in location_children(location):
            _custom_list_entry_rows(custom_list, child, depth + 1, expanded, out)


def _geo_location_rows(
    location: Location,
    depth: int,
    expanded: Collection[ExpansionKey],
    out: list[RelayListItem],
) -> None:
    """Depth-first pre-order walk emitting children of expanded nodes only."""
    is_expanded = _is_expanded(location, ExpansionKey(location.id), expanded)
    out.append(GeoLocationItem(location, depth=depth, is_expanded=is_expanded))
    if is_expanded:
        for child in location_children(location):
            _geo_location_rows(child, depth + 1, expanded, out)


def selected_row_index(rows: Sequence[RelayListItem], selected: RelayItemId | None) -> int | None:
    """Pick the single row that shows ``selected``.

    The first selectable row in output order wins; a custom-list entry only
    carries the selection when no selectable row shows the id.
    """
    if selected is None:
        return None
    first_entry: int | None = None
    for idx, row in enumerate(rows):
        if isinstance(row, SELECTABLE_ITEM_TYPES) and row.item.id == selected:
            return idx
        if first_entry is None and isinstance(row, CustomListEntryItem) and row.item.id == selected:
            first_entry = idx
    return first_entry


def build_relay_list_items(
    countries: Sequence[Country],
    custom_lists: Sequence[CustomList],
    recents: Sequence[RelayItemId] | None,
    expanded: Collection[ExpansionKey],
    selected: RelayItemId | None = None,
    catalog_empty: bool = False,
    filters_active: bool = False,
) -> list[RelayListItem]:
    """Build the ordered row list for the location picker.

    ``countries`` and ``custom_lists`` are expected to be filtered already.
    ``recents`` is ``None`` when the recents section is disabled; recent ids
    that no longer resolve are skipped. At most one row reports
    ``is_selected``.
    """
    rows: list[RelayListItem] = []
    if recents is not None:
        rows.extend(_recent_rows(recents, countries, custom_lists))

    rows.append(CustomListHeader(can_edit=bool(custom_lists)))
    for custom_list in custom_lists:
        is_expanded = ExpansionKey(custom_list.id) in expanded
        rows.append(CustomListItem(custom_list, is_expanded=is_expanded))
        if is_expanded:
            for location in custom_list.locations:
                _custom_list_entry_rows(custom_list, location, 1, expanded, rows)
    rows.append(CustomListFooter(has_custom_lists=bool(custom_lists)))
    rows.append(SectionDivider())
    rows.append(LocationHeader())

    if not countries:
        rows.append(EmptyRelayList() if catalog_empty else LocationsEmptyText(filters_active=filters_active))
    for country in countries:
        _geo_location_rows(country, 0, expanded, rows)

    idx = selected_row_index(rows, selected)
    if idx is not None:
        rows[idx] = replace(rows[idx], is_selected=True)
    return rows
