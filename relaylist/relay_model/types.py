"""Relay-item datatypes shared by filtering, lookup and list building.

Ids are small frozen value types so they can key expansion and selection
state across rebuilds. Nodes are frozen too; transforms return new trees.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Ownership(Enum):
    """Whether a relay is operated by the provider or leased."""

    OWNED = "owned"
    RENTED = "rented"


@dataclass(frozen=True)
class CountryId:
    code: str

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class CityId:
    country: CountryId
    code: str

    def __str__(self) -> str:
        return f"{self.country.code}-{self.code}"


@dataclass(frozen=True)
class HostnameId:
    """Relay id; the hostname already embeds the country and city codes."""

    city: CityId
    hostname: str

    @property
    def country(self) -> CountryId:
        return self.city.country

    def __str__(self) -> str:
        return self.hostname


GeoLocationId = Union[CountryId, CityId, HostnameId]


@dataclass(frozen=True)
class CustomListId:
    value: str

    def __str__(self) -> str:
        return self.value


RelayItemId = Union[CountryId, CityId, HostnameId, CustomListId]


def parse_geo_location_id(code: str) -> GeoLocationId:
    """Parse ``se``, ``se-got`` or ``se-got-wg-001`` into a geo id.

    Codes are lower-cased. Hostname ids keep the full hostname.
    """
    normalized = code.strip().lower()
    parts = normalized.split("-")
    if not normalized or any(not part for part in parts):
        raise ValueError(f"invalid location code: {code!r}")
    country = CountryId(parts[0])
    if len(parts) == 1:
        return country
    city = CityId(country, parts[1])
    if len(parts) == 2:
        return city
    return HostnameId(city, normalized)


@dataclass(frozen=True)
class Relay:
    id: HostnameId
    ownership: Ownership
    provider: str
    daita: bool = False
    active: bool = True

    @property
    def name(self) -> str:
        return self.id.hostname


@dataclass(frozen=True)
class City:
    id: CityId
    name: str
    relays: tuple[Relay, ...] = ()

    @property
    def active(self) -> bool:
        return any(relay.active for relay in self.relays)


@dataclass(frozen=True)
class Country:
    id: CountryId
    name: str
    cities: tuple[City, ...] = ()

    @property
    def active(self) -> bool:
        return any(city.active for city in self.cities)


Location = Union[Country, City, Relay]


@dataclass(frozen=True)
class CustomList:
    """User-named list of references into the location hierarchy."""

    id: CustomListId
    name: str
    locations: tuple[Location, ...] = ()

    @property
    def active(self) -> bool:
        return any(location.active for location in self.locations)


RelayItem = Union[Country, City, Relay, CustomList]
