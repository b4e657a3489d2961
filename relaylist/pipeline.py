"""One-pass derivation from a state snapshot to the flat relay list.

Each snapshot is re-derived in full: resolve custom lists, filter the tree
and the lists, then build rows. This is the caller side of the builder
contract, so unresolvable references are logged here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .list_model.build import build_relay_list_items
from .list_model.expansion import ExpansionKey
from .list_model.items import RelayListItem
from .relay_model.catalog import CustomListRecord, resolve_custom_lists
from .relay_model.filtering import RelayFilter, filter_countries, filter_custom_lists
from .relay_model.hierarchy import dedupe_first, dedupe_locations
from .relay_model.lookup import canonical_item_id, find_relay_item
from .relay_model.types import Country, CustomList, RelayItemId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelayListSnapshot:
    """Everything the list depends on, as delivered by the state container."""

    countries: tuple[Country, ...] = ()
    custom_lists: tuple[CustomListRecord, ...] = ()
    recents: tuple[RelayItemId, ...] = ()
    relay_filter: RelayFilter = field(default_factory=RelayFilter)
    expanded: frozenset[ExpansionKey] = frozenset()
    selected: RelayItemId | None = None
    recents_enabled: bool = True


@dataclass(frozen=True)
class RelayListState:
    items: tuple[RelayListItem, ...]
    countries: tuple[Country, ...]
    custom_lists: tuple[CustomList, ...]


def derive(snapshot: RelayListSnapshot) -> RelayListState:
    """Filter the snapshot and build its flat row list.

    Repeated ids in the snapshot keep their first occurrence.
    """
    catalog = dedupe_locations(snapshot.countries)
    if catalog != list(snapshot.countries):
        logger.debug("Dropped duplicate location ids from snapshot")
    resolved_lists = resolve_custom_lists(snapshot.custom_lists, catalog)
    countries = filter_countries(catalog, snapshot.relay_filter)
    custom_lists = filter_custom_lists(resolved_lists, snapshot.relay_filter)

    selected = snapshot.selected
    if selected is not None:
        selected = canonical_item_id(catalog, selected)

    recents: list[RelayItemId] | None = None
    if snapshot.recents_enabled:
        recents = dedupe_first(canonical_item_id(catalog, item_id) for item_id in snapshot.recents)
        for item_id in recents:
            if find_relay_item(catalog, resolved_lists, item_id) is None:
                logger.debug("Recent %s no longer exists in the catalog", item_id)

    items = build_relay_list_items(
        countries,
        custom_lists,
        recents,
        snapshot.expanded,
        selected=selected,
        catalog_empty=not catalog,
        filters_active=snapshot.relay_filter.is_active,
    )
    return RelayListState(
        items=tuple(items),
        countries=tuple(countries),
        custom_lists=tuple(custom_lists),
    )
