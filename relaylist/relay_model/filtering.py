"""Constraint filtering for the location hierarchy and custom lists.

Filtered results never contain a country or city without children: a branch
whose relays all fail the constraints is dropped entirely. Custom lists are
the exception at the top level; they are always returned, possibly empty.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Union

from .types import City, Country, CustomList, Location, Ownership, Relay


class AnyConstraint:
    """Constraint that matches every value."""

    _instance: AnyConstraint | None = None

    def __new__(cls) -> AnyConstraint:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ANY"


ANY = AnyConstraint()


@dataclass(frozen=True)
class Only:
    """Constraint that requires a structural match against ``value``."""

    value: object


Constraint = Union[AnyConstraint, Only]


@dataclass(frozen=True)
class RelayFilter:
    """Ownership, provider-set and DAITA constraints applied together."""

    ownership: Constraint = field(default=ANY)
    providers: Constraint = field(default=ANY)
    daita: bool = False

    @property
    def is_active(self) -> bool:
        return isinstance(self.ownership, Only) or isinstance(self.providers, Only) or self.daita


def matches_ownership(location: Location, constraint: Constraint) -> bool:
    """Return whether ``location`` or any relay under it has the ownership."""
    if not isinstance(constraint, Only):
        return True
    if isinstance(location, Country):
        return any(matches_ownership(city, constraint) for city in location.cities)
    if isinstance(location, City):
        return any(matches_ownership(relay, constraint) for relay in location.relays)
    return location.ownership == constraint.value


def matches_provider(location: Location, constraint: Constraint) -> bool:
    """Return whether ``location`` or any relay under it uses an allowed provider."""
    if not isinstance(constraint, Only):
        return True
    if isinstance(location, Country):
        return any(matches_provider(city, constraint) for city in location.cities)
    if isinstance(location, City):
        return any(matches_provider(relay, constraint) for relay in location.relays)
    return location.provider in constraint.value


def filter_relay(
    relay: Relay,
    ownership: Constraint = ANY,
    providers: Constraint = ANY,
    daita: bool = False,
) -> Relay | None:
    """Return ``relay`` when all three predicates hold, else ``None``."""
    if daita and not relay.daita:
        return None
    if not matches_ownership(relay, ownership):
        return None
    if not matches_provider(relay, providers):
        return None
    return relay


def filter_city(
    city: City,
    ownership: Constraint = ANY,
    providers: Constraint = ANY,
    daita: bool = False,
) -> City | None:
    """Return ``city`` with only surviving relays, or ``None`` if none survive."""
    relays = tuple(
        relay
        for relay in (filter_relay(item, ownership, providers, daita) for item in city.relays)
        if relay is not None
    )
    if not relays:
        return None
    if relays == city.relays:
        return city
    return replace(city, relays=relays)


def filter_country(
    country: Country,
    ownership: Constraint = ANY,
    providers: Constraint = ANY,
    daita: bool = False,
) -> Country | None:
    """Return ``country`` with only surviving cities, or ``None`` if none survive."""
    cities = tuple(
        city
        for city in (filter_city(item, ownership, providers, daita) for item in country.cities)
        if city is not None
    )
    if not cities:
        return None
    if cities == country.cities:
        return country
    return replace(country, cities=cities)


def filter_location(
    location: Location,
    ownership: Constraint = ANY,
    providers: Constraint = ANY,
    daita: bool = False,
) -> Location | None:
    """Dispatch to the country, city or relay filter for ``location``."""
    if isinstance(location, Country):
        return filter_country(location, ownership, providers, daita)
    if isinstance(location, City):
        return filter_city(location, ownership, providers, daita)
    return filter_relay(location, ownership, providers, daita)


def filter_custom_list(
    custom_list: CustomList,
    ownership: Constraint = ANY,
    providers: Constraint = ANY,
    daita: bool = False,
) -> CustomList:
    """Filter each member independently; the list itself always survives."""
    locations = tuple(
        location
        for location in (
            filter_location(item, ownership, providers, daita) for item in custom_list.locations
        )
        if location is not None
    )
    return replace(custom_list, locations=locations)


def filter_countries(countries: Iterable[Country], relay_filter: RelayFilter) -> list[Country]:
    """Filter a whole catalog, preserving country order."""
    out: list[Country] = []
    for country in countries:
        filtered = filter_country(country, relay_filter.ownership, relay_filter.providers, relay_filter.daita)
        if filtered is not None:
            out.append(filtered)
    return out


def filter_custom_lists(custom_lists: Iterable[CustomList], relay_filter: RelayFilter) -> list[CustomList]:
    """Filter every custom list, preserving list order."""
    return [
        filter_custom_list(custom_list, relay_filter.ownership, relay_filter.providers, relay_filter.daita)
        for custom_list in custom_lists
    ]
