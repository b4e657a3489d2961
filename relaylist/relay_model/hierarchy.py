"""Child/descendant traversal and first-occurrence dedupe for relay items."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from dataclasses import replace
from typing import TypeVar

from .types import City, Country, CustomList, Location, RelayItem

T = TypeVar("T")


def children(item: RelayItem) -> tuple[RelayItem, ...]:
    """Return direct children: cities, relays, or custom-list members."""
    if isinstance(item, Country):
        return item.cities
    if isinstance(item, City):
        return item.relays
    if isinstance(item, CustomList):
        return item.locations
    return ()


def location_children(location: Location) -> tuple[Location, ...]:
    """Return direct location children of a country or city."""
    if isinstance(location, Country):
        return location.cities
    if isinstance(location, City):
        return location.relays
    return ()


def descendants(location: Location) -> list[Location]:
    """Return children first, followed by each child's descendants."""
    direct = list(location_children(location))
    out = list(direct)
    for child in direct:
        out.extend(descendants(child))
    return out


def with_descendants(locations: Iterable[Location]) -> list[Location]:
    """Return ``locations`` followed by all of their descendants."""
    roots = list(locations)
    out = list(roots)
    for location in roots:
        out.extend(descendants(location))
    return out


def dedupe_first(items: Iterable[T], key: Callable[[T], Hashable] | None = None) -> list[T]:
    """Return ``items`` in order with later duplicates dropped.

    ``key`` maps an item to its identity; by default the item itself is used.
    """
    seen: set[Hashable] = set()
    out: list[T] = []
    for item in items:
        marker = item if key is None else key(item)
        if marker in seen:
            continue
        seen.add(marker)
        out.append(item)
    return out


def _node_id(node: Location) -> Hashable:
    return node.id


def dedupe_locations(countries: Iterable[Country]) -> list[Country]:
    """Drop repeated country, city and relay ids; the first occurrence wins."""
    out: list[Country] = []
    for country in dedupe_first(countries, _node_id):
        cities: list[City] = []
        for city in dedupe_first(country.cities, _node_id):
            relays = tuple(dedupe_first(city.relays, _node_id))
            cities.append(city if relays == city.relays else replace(city, relays=relays))
        deduped = tuple(cities)
        out.append(country if deduped == country.cities else replace(country, cities=deduped))
    return out
