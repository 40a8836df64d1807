import unittest
from unittest import mock

from geopy.exc import GeocoderServiceError, GeocoderTimedOut

from tripwise import geocode
from tripwise.categories import FOOD_AND_DRINK, OTHER, THINGS_TO_DO, categorise, marker_colour

RAW = {
    "lat": "35.6586",
    "lon": "139.7454",
    "class": "tourism",
    "type": "attraction",
    "name": "Tokyo Tower",
    "display_name": "Tokyo Tower, 4-2-8, Shibakoen, Minato, Tokyo, Japan",
    "extratags": {"opening_hours": "Mo-Su 09:00-23:00"},
}


class TestCategories(unittest.TestCase):
    def test_categorise(self):
        self.assertEqual(categorise(["restaurant"]), FOOD_AND_DRINK)
        self.assertEqual(categorise([None, "Museum"]), THINGS_TO_DO)
        self.assertEqual(categorise(["yes", "building"]), OTHER)
        self.assertEqual(marker_colour("Not a category"), marker_colour(OTHER))


class TestSearchPlace(unittest.TestCase):
    def setUp(self):
        geocode.search_place.cache_clear()

    def test_place_from_raw(self):
        place = geocode.place_from_raw(RAW, "tokyo tower")
        self.assertEqual(place.name, "Tokyo Tower")
        self.assertEqual(place.category, THINGS_TO_DO)
        self.assertEqual(place.osm_opening_hours, "Mo-Su 09:00-23:00")
        stop = place.to_stop(dwell_minutes=40)
        self.assertEqual(stop.position, (35.6586, 139.7454))
        self.assertEqual(stop.dwell_minutes, 40)

    @mock.patch("tripwise.geocode._geocode")
    def test_search_place(self, fake):
        fake.return_value = mock.Mock(raw=RAW)
        self.assertEqual(geocode.search_place("Tokyo Tower").name, "Tokyo Tower")

    @mock.patch("tripwise.geocode._geocode")
    def test_retries_once_on_timeout(self, fake):
        fake.side_effect = [GeocoderTimedOut("slow"), mock.Mock(raw=RAW)]
        self.assertIsNotNone(geocode.search_place("Tokyo Tower"))
        self.assertEqual(fake.call_count, 2)

    @mock.patch("tripwise.geocode._geocode")
    def test_gives_up_after_retry(self, fake):
        fake.side_effect = GeocoderServiceError("down")
        self.assertIsNone(geocode.search_place("Tokyo Tower"))
        self.assertEqual(fake.call_count, 2)

    @mock.patch("tripwise.geocode._geocode")
    def test_not_found_and_blank_query(self, fake):
        fake.return_value = None
        self.assertIsNone(geocode.search_place("nowhere at all"))
        self.assertIsNone(geocode.search_place("   "))
        self.assertEqual(fake.call_count, 1)


if __name__ == "__main__":
    unittest.main()
