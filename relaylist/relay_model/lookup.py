"""Top-down lookup of locations by composite id.

The tree holds no parent pointers, so every lookup walks from the country
list. A missing link anywhere in the chain yields ``None``.
"""

from __future__ import annotations

from collections.abc import Sequence

from .types import (
    City,
    CityId,
    Country,
    CountryId,
    CustomList,
    CustomListId,
    GeoLocationId,
    HostnameId,
    Location,
    Relay,
    RelayItem,
    RelayItemId,
)


def find_country(countries: Sequence[Country], country_id: CountryId) -> Country | None:
    for country in countries:
        if country.id == country_id:
            return country
    return None


def find_city(countries: Sequence[Country], city_id: CityId) -> City | None:
    country = find_country(countries, city_id.country)
    if country is None:
        return None
    for city in country.cities:
        if city.id == city_id:
            return city
    return None


def find_relay(countries: Sequence[Country], hostname_id: HostnameId) -> Relay | None:
    city = find_city(countries, hostname_id.city)
    if city is None:
        return None
    for relay in city.relays:
        if relay.id == hostname_id:
            return relay
    return None


def find_relay_by_hostname(countries: Sequence[Country], hostname: str) -> Relay | None:
    """Scan the whole tree for ``hostname`` regardless of its city prefix."""
    for country in countries:
        for city in country.cities:
            for relay in city.relays:
                if relay.id.hostname == hostname:
                    return relay
    return None


def find_by_geo_location_id(countries: Sequence[Country], geo_id: GeoLocationId) -> Location | None:
    """Resolve ``geo_id`` to its node, or ``None`` when it is not in the tree."""
    if isinstance(geo_id, CountryId):
        return find_country(countries, geo_id)
    if isinstance(geo_id, CityId):
        return find_city(countries, geo_id)
    if isinstance(geo_id, HostnameId):
        return find_relay(countries, geo_id)
    return None


def canonical_item_id(countries: Sequence[Country], item_id: RelayItemId) -> RelayItemId:
    """Return the catalog's own id for ``item_id``.

    A hostname parsed from its prefix carries the prefix city, while the
    catalog files the relay under its declared location. When the two differ
    the relay is found by hostname alone and its catalog id is returned.
    """
    if isinstance(item_id, HostnameId) and find_relay(countries, item_id) is None:
        relay = find_relay_by_hostname(countries, item_id.hostname)
        if relay is not None:
            return relay.id
    return item_id


def find_custom_list(custom_lists: Sequence[CustomList], custom_list_id: CustomListId) -> CustomList | None:
    for custom_list in custom_lists:
        if custom_list.id == custom_list_id:
            return custom_list
    return None


def find_relay_item(
    countries: Sequence[Country],
    custom_lists: Sequence[CustomList],
    item_id: RelayItemId,
) -> RelayItem | None:
    """Resolve either a geo id or a custom-list id."""
    if isinstance(item_id, CustomListId):
        return find_custom_list(custom_lists, item_id)
    return find_by_geo_location_id(countries, item_id)
