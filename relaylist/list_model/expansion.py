"""Expansion-state keys and pure transitions.

Expansion lives outside the tree as a frozen set of ``ExpansionKey``. The
same location can be expanded independently in the main tree and inside
each custom list, so entry keys carry the owning list id.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..relay_model.hierarchy import with_descendants
from ..relay_model.types import (
    CityId,
    Country,
    CustomList,
    CustomListId,
    HostnameId,
    RelayItemId,
)


@dataclass(frozen=True)
class ExpansionKey:
    item_id: RelayItemId
    custom_list_id: CustomListId | None = None


def toggle_expansion(
    expanded: frozenset[ExpansionKey],
    item_id: RelayItemId,
    custom_list_id: CustomListId | None,
    expand: bool,
) -> frozenset[ExpansionKey]:
    """Return ``expanded`` with one key added or removed."""
    key = ExpansionKey(item_id, custom_list_id)
    if expand:
        return expanded | {key}
    return expanded - {key}


def ancestor_ids(item_id: RelayItemId) -> list[RelayItemId]:
    """Return the country/city ids above a geo id, outermost first."""
    if isinstance(item_id, HostnameId):
        return [item_id.country, item_id.city]
    if isinstance(item_id, CityId):
        return [item_id.country]
    return []


def initial_expansion(selected: RelayItemId | None) -> frozenset[ExpansionKey]:
    """Expand the main-tree ancestors of ``selected`` so it is visible."""
    if selected is None or isinstance(selected, CustomListId):
        return frozenset()
    return frozenset(ExpansionKey(ancestor) for ancestor in ancestor_ids(selected))


def _known_keys(countries: Sequence[Country], custom_lists: Sequence[CustomList]) -> set[ExpansionKey]:
    known: set[ExpansionKey] = set()
    for location in with_descendants(countries):
        known.add(ExpansionKey(location.id))
    for custom_list in custom_lists:
        known.add(ExpansionKey(custom_list.id))
        for location in with_descendants(custom_list.locations):
            known.add(ExpansionKey(location.id, custom_list.id))
    return known


def prune_expansion(
    expanded: Iterable[ExpansionKey],
    countries: Sequence[Country],
    custom_lists: Sequence[CustomList],
) -> frozenset[ExpansionKey]:
    """Drop keys whose node no longer exists in the catalog or custom lists.

    Prune against the unfiltered data: nodes hidden by filters keep their
    expansion state.
    """
    known = _known_keys(countries, custom_lists)
    return frozenset(key for key in expanded if key in known)


def expand_all(countries: Sequence[Country], custom_lists: Sequence[CustomList] = ()) -> frozenset[ExpansionKey]:
    """Return keys that expand every node in the tree and every custom list."""
    return frozenset(_known_keys(countries, custom_lists))

