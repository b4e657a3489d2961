"""Catalog snapshot and custom-list document parsing.

Turns an already-fetched relay-list JSON document into the immutable
``Country -> City -> Relay`` tree, and a custom-list store document into
``CustomListRecord`` values plus recent ids. Duplicate ids keep their first
occurrence so that rebuilding from the same document is reproducible.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .hierarchy import dedupe_first
from .lookup import canonical_item_id, find_by_geo_location_id
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
    RelayItemId,
    parse_geo_location_id,
)

logger = logging.getLogger(__name__)

RELAY_SECTIONS = ("wireguard", "openvpn", "bridge")


class CatalogFormatError(ValueError):
    """Raised when a catalog or custom-list document has the wrong shape."""


def _first_key_wins(pairs: list[tuple[str, object]]) -> dict[str, object]:
    """``object_pairs_hook`` that keeps the first value of a repeated key."""
    out: dict[str, object] = {}
    for key, value in pairs:
        if key in out:
            logger.debug("Dropping duplicate key %r", key)
            continue
        out[key] = value
    return out


def read_json_document(path: Path) -> object:
    """Decode ``path`` as JSON, keeping the first of any repeated keys."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogFormatError(f"cannot read {path}: {exc}") from exc
    try:
        return json.loads(text, object_pairs_hook=_first_key_wins)
    except json.JSONDecodeError as exc:
        raise CatalogFormatError(f"{path} is not valid JSON: {exc}") from exc


def split_location_code(code: str) -> tuple[str, str] | None:
    """Split ``"se-got"`` into ``("se", "got")``; ``None`` without a city part."""
    parts = code.lower().split("-")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return None
    return parts[0], parts[1]


class _CityBuilder:
    def __init__(self, city_id: CityId, name: str) -> None:
        self.id = city_id
        self.name = name
        self.relays: list[Relay] = []

    def build(self) -> City:
        return City(id=self.id, name=self.name, relays=tuple(self.relays))


class _CountryBuilder:
    def __init__(self, country_id: CountryId, name: str) -> None:
        self.id = country_id
        self.name = name
        self.cities: dict[CityId, _CityBuilder] = {}

    def build(self) -> Country | None:
        cities = tuple(city.build() for city in self.cities.values() if city.relays)
        if not cities:
            return None
        return Country(id=self.id, name=self.name, cities=cities)


def _relay_from_entry(entry: object, city_id: CityId) -> Relay | None:
    if not isinstance(entry, dict):
        return None
    hostname = entry.get("hostname")
    if not isinstance(hostname, str) or not hostname.strip():
        return None
    provider = entry.get("provider")
    return Relay(
        id=HostnameId(city_id, hostname.strip().lower()),
        ownership=Ownership.OWNED if entry.get("owned") is True else Ownership.RENTED,
        provider=provider if isinstance(provider, str) else "",
        daita=entry.get("daita") is True,
        active=entry.get("active") is not False,
    )


def parse_catalog(data: object) -> list[Country]:
    """Build the country tree from a decoded relay-list document.

    Countries come out ordered by code, cities in first-seen order and relays
    in document order. Locations without relays are omitted.
    """
    if not isinstance(data, dict):
        raise CatalogFormatError("catalog document must be a JSON object")
    locations = data.get("locations")
    if not isinstance(locations, dict):
        raise CatalogFormatError("catalog document has no 'locations' object")

    countries: dict[CountryId, _CountryBuilder] = {}
    for code, location in locations.items():
        split = split_location_code(str(code))
        if split is None or not isinstance(location, dict):
            logger.error("Bad location code: %s", code)
            continue
        country_code, city_code = split
        country_id = CountryId(country_code)
        country = countries.get(country_id)
        if country is None:
            country = _CountryBuilder(country_id, str(location.get("country") or country_code))
            countries[country_id] = country
        city_id = CityId(country_id, city_code)
        if city_id in country.cities:
            logger.debug("Dropping duplicate city %s", city_id)
            continue
        country.cities[city_id] = _CityBuilder(city_id, str(location.get("city") or city_code))

    seen_relays: set[HostnameId] = set()
    for section in RELAY_SECTIONS:
        payload = data.get(section)
        if not isinstance(payload, dict):
            continue
        relays = payload.get("relays")
        if not isinstance(relays, list):
            continue
        for entry in relays:
            location_code = entry.get("location") if isinstance(entry, dict) else None
            split = split_location_code(location_code) if isinstance(location_code, str) else None
            country = countries.get(CountryId(split[0])) if split is not None else None
            city = country.cities.get(CityId(country.id, split[1])) if country is not None else None
            if city is None:
                logger.warning("Skipping relay with unknown location: %r", location_code)
                continue
            relay = _relay_from_entry(entry, city.id)
            if relay is None:
                logger.warning("Skipping malformed relay entry in %s", section)
                continue
            if relay.id in seen_relays:
                logger.debug("Dropping duplicate relay %s", relay.id)
                continue
            seen_relays.add(relay.id)
            city.relays.append(relay)

    out: list[Country] = []
    for country_id in sorted(countries, key=lambda item: item.code):
        built = countries[country_id].build()
        if built is not None:
            out.append(built)
    return out


def load_catalog(path: Path) -> list[Country]:
    """Read and parse a relay-list document from ``path``."""
    return parse_catalog(read_json_document(path))


def dump_countries(countries: Iterable[Country]) -> dict[str, object]:
    """Serialize a (possibly filtered) tree into a nested JSON-ready document."""
    return {
        "countries": [
            {
                "code": country.id.code,
                "name": country.name,
                "cities": [
                    {
                        "code": city.id.code,
                        "name": city.name,
                        "relays": [
                            {
                                "hostname": relay.id.hostname,
                                "owned": relay.ownership is Ownership.OWNED,
                                "provider": relay.provider,
                                "daita": relay.daita,
                                "active": relay.active,
                            }
                            for relay in city.relays
                        ],
                    }
                    for city in country.cities
                ],
            }
            for country in countries
        ]
    }


@dataclass(frozen=True)
class CustomListRecord:
    """Stored custom list: references by id, not resolved nodes."""

    id: CustomListId
    name: str
    location_ids: tuple[GeoLocationId, ...] = ()


def _parse_location_ids(raw: object, list_name: str) -> tuple[GeoLocationId, ...]:
    if not isinstance(raw, list):
        return ()
    ids: list[GeoLocationId] = []
    for value in raw:
        try:
            geo_id = parse_geo_location_id(value) if isinstance(value, str) else None
        except ValueError:
            geo_id = None
        if geo_id is None:
            logger.warning("Skipping invalid location %r in custom list %r", value, list_name)
            continue
        if geo_id in ids:
            continue
        ids.append(geo_id)
    return tuple(ids)


def parse_custom_lists(data: object) -> list[CustomListRecord]:
    """Parse ``custom_lists`` from a store document; first id wins."""
    if not isinstance(data, dict):
        raise CatalogFormatError("custom-list document must be a JSON object")
    raw_lists = data.get("custom_lists", [])
    if not isinstance(raw_lists, list):
        raise CatalogFormatError("'custom_lists' must be a list")

    records: list[CustomListRecord] = []
    seen: set[CustomListId] = set()
    for raw in raw_lists:
        if not isinstance(raw, dict) or not isinstance(raw.get("id"), str) or not raw["id"]:
            logger.warning("Skipping malformed custom list entry")
            continue
        list_id = CustomListId(raw["id"])
        if list_id in seen:
            logger.debug("Dropping duplicate custom list %s", list_id)
            continue
        seen.add(list_id)
        name = raw.get("name") if isinstance(raw.get("name"), str) else raw["id"]
        records.append(CustomListRecord(list_id, name, _parse_location_ids(raw.get("locations"), name)))
    return records


def parse_recents(data: object) -> list[RelayItemId]:
    """Parse ``recents`` entries (``{"location": ...}`` or ``{"custom_list": ...}``)."""
    if not isinstance(data, dict):
        raise CatalogFormatError("custom-list document must be a JSON object")
    raw_recents = data.get("recents", [])
    if not isinstance(raw_recents, list):
        raise CatalogFormatError("'recents' must be a list")

    recents: list[RelayItemId] = []
    for raw in raw_recents:
        item_id: RelayItemId | None = None
        if isinstance(raw, dict) and isinstance(raw.get("custom_list"), str) and raw["custom_list"]:
            item_id = CustomListId(raw["custom_list"])
        elif isinstance(raw, dict) and isinstance(raw.get("location"), str):
            try:
                item_id = parse_geo_location_id(raw["location"])
            except ValueError:
                item_id = None
        if item_id is None:
            logger.warning("Skipping malformed recent entry: %r", raw)
            continue
        if item_id not in recents:
            recents.append(item_id)
    return recents


def resolve_custom_list(record: CustomListRecord, countries: Sequence[Country]) -> CustomList:
    """Resolve stored references; unresolvable ids are logged and omitted."""
    locations: list[Location] = []
    for geo_id in dedupe_first(canonical_item_id(countries, item) for item in record.location_ids):
        location = find_by_geo_location_id(countries, geo_id)
        if location is None:
            logger.debug("Custom list %r references missing location %s", record.name, geo_id)
            continue
        locations.append(location)
    return CustomList(id=record.id, name=record.name, locations=tuple(locations))


def resolve_custom_lists(records: Iterable[CustomListRecord], countries: Sequence[Country]) -> list[CustomList]:
    """Resolve every record; a repeated list id keeps its first record."""
    return [resolve_custom_list(record, countries) for record in dedupe_first(records, lambda record: record.id)]
