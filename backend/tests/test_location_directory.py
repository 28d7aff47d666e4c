import unittest

from app.data.adapters.location_directory import (
    DEFAULT_DIRECTORY,
    MATCH_FIRST,
    MATCH_LONGEST,
    LocationDirectory,
)
from app.domain.entities.location_entity import LocationSource


class TestLocationDirectory(unittest.TestCase):

    def setUp(self):
        self.directory = LocationDirectory()

    def test_exact_match_ignores_case_and_whitespace(self):
        for text in ("chicago", "Chicago", "  CHICAGO \n"):
            location = self.directory.lookup(text)
            self.assertIsNotNone(location)
            self.assertEqual(location.source, LocationSource.DIRECTORY_EXACT)
            self.assertEqual((location.lat, location.lng), (41.8781, -87.6298))
            self.assertEqual(location.formatted_address, "Chicago, IL")

    def test_exact_zip_code(self):
        location = self.directory.lookup("90210")
        self.assertEqual(location.source, LocationSource.DIRECTORY_EXACT)
        self.assertEqual(location.formatted_address, "Beverly Hills, CA 90210")

    def test_zip_code_with_leading_zero_is_kept(self):
        location = self.directory.lookup("02101")
        self.assertEqual(location.formatted_address, "Boston, MA 02101")

    def test_input_containing_key_is_partial(self):
        location = self.directory.lookup("Downtown Seattle, WA")
        self.assertEqual(location.source, LocationSource.DIRECTORY_PARTIAL)
        self.assertEqual(location.formatted_address, "Seattle, WA")

    def test_key_containing_input_is_partial(self):
        location = self.directory.lookup("sacram")
        self.assertEqual(location.source, LocationSource.DIRECTORY_PARTIAL)
        self.assertEqual(location.formatted_address, "Sacramento, CA")

    def test_no_match_returns_none(self):
        self.assertIsNone(self.directory.lookup("Reykjavik"))

    def test_blank_input_is_a_miss(self):
        self.assertIsNone(self.directory.lookup(""))
        self.assertIsNone(self.directory.lookup("   "))

    def test_street_address_with_city_and_zip_prefers_city(self):
        location = self.directory.lookup("100 N State St, Chicago IL 60601")
        self.assertEqual(location.source, LocationSource.DIRECTORY_PARTIAL)
        self.assertEqual(location.formatted_address, "Chicago, IL")

    def test_longest_beats_table_order(self):
        entries = {
            "york": DEFAULT_DIRECTORY["new york"],
            "new york": DEFAULT_DIRECTORY["10001"],
        }
        longest = LocationDirectory(entries=entries, strategy=MATCH_LONGEST)
        first = LocationDirectory(entries=entries, strategy=MATCH_FIRST)
        self.assertEqual(longest.lookup("new york city").formatted_address, "New York, NY 10001")
        self.assertEqual(first.lookup("new york city").formatted_address, "New York, NY")

    def test_first_strategy_keeps_table_order_for_ambiguous_prefix(self):
        first = LocationDirectory(strategy=MATCH_FIRST)
        self.assertEqual(first.lookup("san").formatted_address, "San Antonio, TX")

    def test_longest_ties_keep_table_order(self):
        # Every 'san ...' key contains 'san' with the same overlap
        self.assertEqual(self.directory.lookup("san").formatted_address, "San Antonio, TX")

    def test_unknown_strategy_defaults_to_longest(self):
        directory = LocationDirectory(strategy="fuzzy")
        self.assertEqual(directory.strategy, MATCH_LONGEST)

    def test_directory_is_read_only(self):
        with self.assertRaises(TypeError):
            DEFAULT_DIRECTORY["gotham"] = DEFAULT_DIRECTORY["chicago"]
