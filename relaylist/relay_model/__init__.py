"""Relay-item hierarchy, constraint filtering, lookup, and catalog parsing.

Defines the immutable ``Country -> City -> Relay`` tree and ``CustomList``.
Every transform returns a new tree; nothing is mutated in place.
"""

from __future__ import annotations

from .catalog import (
    CatalogFormatError,
    CustomListRecord,
    dump_countries,
    load_catalog,
    parse_catalog,
    parse_custom_lists,
    parse_recents,
    read_json_document,
    resolve_custom_list,
    resolve_custom_lists,
)
from .filtering import (
    ANY,
    AnyConstraint,
    Constraint,
    Only,
    RelayFilter,
    filter_city,
    filter_countries,
    filter_country,
    filter_custom_list,
    filter_custom_lists,
    filter_location,
    filter_relay,
)
from .hierarchy import (
    children,
    dedupe_first,
    dedupe_locations,
    descendants,
    location_children,
    with_descendants,
)
from .lookup import (
    canonical_item_id,
    find_by_geo_location_id,
    find_city,
    find_country,
    find_custom_list,
    find_relay,
    find_relay_by_hostname,
    find_relay_item,
)
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
    Ownership,
    Relay,
    RelayItem,
    RelayItemId,
    parse_geo_location_id,
)

__all__ = [
    "ANY",
    "AnyConstraint",
    "CatalogFormatError",
    "City",
    "CityId",
    "Constraint",
    "Country",
    "CountryId",
    "CustomList",
    "CustomListId",
    "CustomListRecord",
    "GeoLocationId",
    "HostnameId",
    "Location",
    "Only",
    "Ownership",
    "Relay",
    "RelayFilter",
    "RelayItem",
    "RelayItemId",
    "canonical_item_id",
    "children",
    "dedupe_first",
    "dedupe_locations",
    "descendants",
    "dump_countries",
    "filter_city",
    "filter_countries",
    "filter_country",
    "filter_custom_list",
    "filter_custom_lists",
    "filter_location",
    "filter_relay",
    "find_by_geo_location_id",
    "find_city",
    "find_country",
    "find_custom_list",
    "find_relay",
    "find_relay_by_hostname",
    "find_relay_item",
    "load_catalog",
    "location_children",
    "parse_catalog",
    "parse_custom_lists",
    "parse_geo_location_id",
    "parse_recents",
    "read_json_document",
    "resolve_custom_list",
    "resolve_custom_lists",
    "with_descendants",
]
