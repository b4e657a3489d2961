"""Tests for ownership/provider/DAITA filtering of the relay hierarchy.

Covers pruning of empty branches, sibling order, idempotence, and custom
lists that survive even when every member is filtered out.
"""

from __future__ import annotations

import unittest

from relaylist.relay_model import (
    ANY,
    City,
    CityId,
    Country,
    CountryId,
    CustomList,
    CustomListId,
    HostnameId,
    Only,
    Ownership,
    Relay,
    RelayFilter,
    filter_countries,
    filter_country,
    filter_custom_list,
    filter_location,
    filter_relay,
)
from relaylist.relay_model.filtering import matches_ownership, matches_provider

SE = CountryId("se")
GOT = CityId(SE, "got")
STO = CityId(SE, "sto")


def relay(city: CityId, name: str, ownership: Ownership, provider: str = "31173", daita: bool = False) -> Relay:
    return Relay(HostnameId(city, f"{city}-{name}"), ownership, provider, daita=daita)


RELAY_A = relay(GOT, "wg-001", Ownership.OWNED)
RELAY_B = relay(GOT, "wg-002", Ownership.RENTED, provider="M247")
RELAY_C = relay(STO, "wg-001", Ownership.RENTED, provider="M247", daita=True)
RELAY_D = relay(STO, "wg-002", Ownership.OWNED, daita=True)

GOTHENBURG = City(GOT, "Gothenburg", (RELAY_A, RELAY_B))
STOCKHOLM = City(STO, "Stockholm", (RELAY_C, RELAY_D))
SWEDEN = Country(SE, "Sweden", (GOTHENBURG, STOCKHOLM))


def all_relays(countries: list[Country]) -> list[Relay]:
    return [relay for country in countries for city in country.cities for relay in city.relays]


class RelayPredicateTests(unittest.TestCase):
    def test_any_constraints_keep_relay(self) -> None:
        self.assertIs(filter_relay(RELAY_B), RELAY_B)

    def test_daita_required_drops_relay_without_daita(self) -> None:
        self.assertIsNone(filter_relay(RELAY_A, daita=True))
        self.assertIs(filter_relay(RELAY_C, daita=True), RELAY_C)

    def test_provider_constraint_is_set_membership(self) -> None:
        providers = Only(frozenset({"M247", "xtom"}))
        self.assertIs(filter_relay(RELAY_B, providers=providers), RELAY_B)
        self.assertIsNone(filter_relay(RELAY_A, providers=providers))

    def test_ownership_matches_parents_existentially(self) -> None:
        owned = Only(Ownership.OWNED)
        self.assertTrue(matches_ownership(GOTHENBURG, owned))
        self.assertTrue(matches_ownership(SWEDEN, owned))
        only_rented_city = City(GOT, "Gothenburg", (RELAY_B,))
        self.assertFalse(matches_ownership(only_rented_city, owned))
        self.assertTrue(matches_ownership(only_rented_city, ANY))

    def test_provider_matches_parents_existentially(self) -> None:
        self.assertTrue(matches_provider(SWEDEN, Only(frozenset({"M247"}))))
        self.assertFalse(matches_provider(SWEDEN, Only(frozenset({"unknown"}))))


class HierarchyFilterTests(unittest.TestCase):
    def test_ownership_filter_keeps_city_with_matching_relay(self) -> None:
        tree = Country(SE, "Sweden", (City(GOT, "Gothenburg", (RELAY_A, RELAY_B)),))

        filtered = filter_country(tree, Only(Ownership.OWNED), ANY, False)

        assert filtered is not None
        self.assertEqual([city.id for city in filtered.cities], [GOT])
        self.assertEqual(filtered.cities[0].relays, (RELAY_A,))

    def test_full_exclusion_removes_country(self) -> None:
        tree = Country(SE, "Sweden", (City(GOT, "Gothenburg", (RELAY_A, RELAY_B)),))

        self.assertIsNone(filter_country(tree, Only(Ownership.OWNED), ANY, True))
        self.assertEqual(filter_countries([tree], RelayFilter(Only(Ownership.OWNED), ANY, True)), [])

    def test_empty_city_is_dropped_not_emptied(self) -> None:
        filtered = filter_country(SWEDEN, ANY, ANY, True)

        assert filtered is not None
        self.assertEqual([city.id for city in filtered.cities], [STO])
        for country in filter_countries([SWEDEN], RelayFilter(daita=True)):
            for city in country.cities:
                self.assertTrue(city.relays)

    def test_surviving_siblings_keep_order(self) -> None:
        filtered = filter_countries([SWEDEN], RelayFilter(ownership=Only(Ownership.OWNED)))

        self.assertEqual(all_relays(filtered), [RELAY_A, RELAY_D])

    def test_every_surviving_relay_satisfies_constraints(self) -> None:
        relay_filter = RelayFilter(Only(Ownership.RENTED), Only(frozenset({"M247"})), True)

        survivors = all_relays(filter_countries([SWEDEN], relay_filter))

        self.assertEqual(survivors, [RELAY_C])
        for survivor in survivors:
            self.assertEqual(survivor.ownership, Ownership.RENTED)
            self.assertIn(survivor.provider, {"M247"})
            self.assertTrue(survivor.daita)

    def test_filter_is_idempotent(self) -> None:
        relay_filter = RelayFilter(ownership=Only(Ownership.OWNED))
        once = filter_countries([SWEDEN], relay_filter)
        twice = filter_countries(once, relay_filter)
        self.assertEqual(once, twice)

    def test_any_filter_returns_equal_tree(self) -> None:
        self.assertEqual(filter_countries([SWEDEN], RelayFilter()), [SWEDEN])

    def test_filter_location_dispatches_on_node_type(self) -> None:
        self.assertIsNone(filter_location(GOTHENBURG, daita=True))
        self.assertEqual(filter_location(STOCKHOLM, ownership=Only(Ownership.OWNED)), City(STO, "Stockholm", (RELAY_D,)))
        self.assertIs(filter_location(RELAY_C, daita=True), RELAY_C)


class CustomListFilterTests(unittest.TestCase):
    def test_custom_list_prunes_members_but_survives(self) -> None:
        custom_list = CustomList(CustomListId("fav"), "Favourites", (RELAY_A, RELAY_B))

        filtered = filter_custom_list(custom_list, Only(Ownership.OWNED), ANY, False)

        self.assertEqual(filtered.id, custom_list.id)
        self.assertEqual(filtered.locations, (RELAY_A,))

    def test_custom_list_with_no_surviving_members_is_still_returned(self) -> None:
        custom_list = CustomList(CustomListId("fav"), "Favourites", (GOTHENBURG,))

        filtered = filter_custom_list(custom_list, ANY, ANY, True)

        self.assertEqual(filtered.name, "Favourites")
        self.assertEqual(filtered.locations, ())

    def test_custom_list_members_are_filtered_at_their_own_level(self) -> None:
        custom_list = CustomList(CustomListId("mixed"), "Mixed", (SWEDEN, STOCKHOLM, RELAY_B))

        filtered = filter_custom_list(custom_list, Only(Ownership.OWNED), ANY, False)

        self.assertEqual(len(filtered.locations), 2)
        country, city = filtered.locations
        assert isinstance(country, Country) and isinstance(city, City)
        self.assertEqual([relay.id for c in country.cities for relay in c.relays], [RELAY_A.id, RELAY_D.id])
        self.assertEqual(city.relays, (RELAY_D,))


if __name__ == "__main__":
    unittest.main()
