"""Tests for composite-id lookup and id parsing."""

from __future__ import annotations

import unittest

from relaylist.relay_model import (
    City,
    CityId,
    Country,
    CountryId,
    CustomList,
    CustomListId,
    HostnameId,
    Ownership,
    Relay,
    canonical_item_id,
    children,
    dedupe_first,
    dedupe_locations,
    descendants,
    find_by_geo_location_id,
    find_city,
    find_custom_list,
    find_relay,
    find_relay_by_hostname,
    find_relay_item,
    parse_geo_location_id,
    with_descendants,
)

GB = CountryId("gb")
CA = CountryId("ca")
GB_LON = CityId(GB, "lon")
CA_LON = CityId(CA, "lon")
GB_RELAY = Relay(HostnameId(GB_LON, "gb-lon-wg-001"), Ownership.OWNED, "31173")
CA_RELAY = Relay(HostnameId(CA_LON, "ca-lon-wg-001"), Ownership.RENTED, "M247")
LONDON = City(GB_LON, "London", (GB_RELAY,))
LONDON_ON = City(CA_LON, "London ON", (CA_RELAY,))
COUNTRIES = [
    Country(CA, "Canada", (LONDON_ON,)),
    Country(GB, "United Kingdom", (LONDON,)),
]


class GeoLocationIdTests(unittest.TestCase):
    def test_parse_builds_each_variant(self) -> None:
        self.assertEqual(parse_geo_location_id("gb"), GB)
        self.assertEqual(parse_geo_location_id("GB-Lon"), GB_LON)
        self.assertEqual(parse_geo_location_id("gb-lon-wg-001"), GB_RELAY.id)

    def test_parse_rejects_malformed_codes(self) -> None:
        for code in ("", "gb-", "-lon", "gb--wg"):
            with self.subTest(code=code):
                with self.assertRaises(ValueError):
                    parse_geo_location_id(code)

    def test_city_ids_include_country(self) -> None:
        self.assertNotEqual(GB_LON, CA_LON)
        self.assertEqual(len({GB_LON, CA_LON, CityId(CountryId("gb"), "lon")}), 2)

    def test_ids_render_as_codes(self) -> None:
        self.assertEqual(str(GB_LON), "gb-lon")
        self.assertEqual(str(GB_RELAY.id), "gb-lon-wg-001")
        self.assertEqual(GB_RELAY.id.country, GB)


class LookupTests(unittest.TestCase):
    def test_finds_every_node_by_its_id(self) -> None:
        for location in with_descendants(COUNTRIES):
            with self.subTest(location=location.id):
                self.assertIs(find_by_geo_location_id(COUNTRIES, location.id), location)

    def test_same_city_code_in_other_country_does_not_collide(self) -> None:
        self.assertIs(find_city(COUNTRIES, CA_LON), LONDON_ON)
        self.assertIs(find_city(COUNTRIES, GB_LON), LONDON)

    def test_missing_links_yield_none(self) -> None:
        self.assertIsNone(find_by_geo_location_id(COUNTRIES, CountryId("se")))
        self.assertIsNone(find_by_geo_location_id(COUNTRIES, CityId(GB, "man")))
        self.assertIsNone(find_relay(COUNTRIES, HostnameId(GB_LON, "gb-lon-wg-999")))
        self.assertIsNone(find_relay(COUNTRIES, HostnameId(CityId(CountryId("se"), "got"), "se-got-wg-001")))

    def test_empty_catalog_yields_none(self) -> None:
        self.assertIsNone(find_by_geo_location_id([], GB))
        self.assertIsNone(find_by_geo_location_id([], GB_RELAY.id))

    def test_find_relay_item_dispatches_to_custom_lists(self) -> None:
        custom_list = CustomList(CustomListId("work"), "Work", (LONDON,))

        self.assertIs(find_custom_list([custom_list], CustomListId("work")), custom_list)
        self.assertIs(find_relay_item(COUNTRIES, [custom_list], CustomListId("work")), custom_list)
        self.assertIs(find_relay_item(COUNTRIES, [custom_list], GB_LON), LONDON)
        self.assertIsNone(find_relay_item(COUNTRIES, [custom_list], CustomListId("home")))


class HierarchyTests(unittest.TestCase):
    def test_children_per_variant(self) -> None:
        custom_list = CustomList(CustomListId("work"), "Work", (LONDON, CA_RELAY))
        self.assertEqual(children(COUNTRIES[1]), (LONDON,))
        self.assertEqual(children(LONDON), (GB_RELAY,))
        self.assertEqual(children(GB_RELAY), ())
        self.assertEqual(children(custom_list), (LONDON, CA_RELAY))

    def test_descendants_lists_children_before_grandchildren(self) -> None:
        self.assertEqual(descendants(COUNTRIES[1]), [LONDON, GB_RELAY])
        self.assertEqual(descendants(GB_RELAY), [])

    def test_active_is_derived_from_relays(self) -> None:
        inactive = Relay(HostnameId(GB_LON, "gb-lon-wg-002"), Ownership.OWNED, "31173", active=False)
        self.assertFalse(City(GB_LON, "London", (inactive,)).active)
        self.assertTrue(City(GB_LON, "London", (inactive, GB_RELAY)).active)

    def test_dedupe_first_keeps_first_occurrence_in_order(self) -> None:
        self.assertEqual(dedupe_first([GB, CA, GB, CA]), [GB, CA])
        self.assertEqual(dedupe_first([LONDON, LONDON_ON, LONDON], lambda city: city.id), [LONDON, LONDON_ON])

    def test_dedupe_locations_drops_repeated_ids_at_every_level(self) -> None:
        later = Relay(GB_RELAY.id, Ownership.RENTED, "later")
        messy = [
            Country(GB, "United Kingdom", (City(GB_LON, "London", (GB_RELAY, later)), City(GB_LON, "Again"))),
            Country(GB, "Duplicate", (LONDON,)),
            COUNTRIES[0],
        ]

        cleaned = dedupe_locations(messy)

        self.assertEqual(cleaned, [Country(GB, "United Kingdom", (LONDON,)), COUNTRIES[0]])
        self.assertIs(dedupe_locations(COUNTRIES)[0], COUNTRIES[0])


class CanonicalIdTests(unittest.TestCase):
    def test_hostname_filed_under_another_city_resolves_by_hostname(self) -> None:
        moved = Relay(HostnameId(GB_LON, "gb-man-wg-001"), Ownership.OWNED, "31173")
        countries = [Country(GB, "United Kingdom", (City(GB_LON, "London", (moved,)),))]
        parsed = parse_geo_location_id("gb-man-wg-001")

        self.assertIsNone(find_relay(countries, parsed))
        self.assertIs(find_relay_by_hostname(countries, "gb-man-wg-001"), moved)
        self.assertEqual(canonical_item_id(countries, parsed), moved.id)

    def test_known_and_unknown_ids_pass_through(self) -> None:
        missing = HostnameId(GB_LON, "gb-lon-wg-999")
        self.assertEqual(canonical_item_id(COUNTRIES, GB_RELAY.id), GB_RELAY.id)
        self.assertEqual(canonical_item_id(COUNTRIES, missing), missing)
        self.assertEqual(canonical_item_id(COUNTRIES, CustomListId("work")), CustomListId("work"))


if __name__ == "__main__":
    unittest.main()
