import random
import unittest
from unittest.mock import MagicMock

from app.domain.entities.location_entity import GeoPoint
from app.domain.entities.places_entity import NearbySearchResponse, PlaceDetails
from app.domain.exceptions import UpstreamUnavailableError
from app.domain.repositories.places_repository import PlacesRepository
from app.domain.usecases.rank_repair_shops_usecase import DEMO_SHOPS, RankRepairShopsUseCase


QUERY = GeoPoint(lat=37.7749, lng=-122.4194)


def _venue(name, lat, lng, place_id=None, **extra):
    venue = {"name": name, "geometry": {"location": {"lat": lat, "lng": lng}}, "vicinity": f"{name} street"}
    if place_id:
        venue["place_id"] = place_id
    venue.update(extra)
    return venue


class TestRankRepairShopsUseCase(unittest.TestCase):

    def setUp(self):
        self.mock_repo = MagicMock(spec=PlacesRepository)
        self.mock_repo.get_details.return_value = PlaceDetails()
        self.usecase = RankRepairShopsUseCase(repository=self.mock_repo, rng=random.Random(7))

    def _assert_demo_shape(self, shops):
        self.assertEqual(len(shops), 5)
        distances = [s.distance_miles for s in shops]
        self.assertEqual(distances, sorted(distances))
        for shop in shops:
            self.assertTrue(shop.synthetic)
            self.assertGreaterEqual(shop.distance_miles, 0)
            self.assertGreaterEqual(shop.total_ratings, 50)
            self.assertLessEqual(shop.total_ratings, 250)
            self.assertIn(shop.is_open, (True, False))
            self.assertLessEqual(abs(shop.location.lat - QUERY.lat), 0.02 + 1e-9)
            self.assertLessEqual(abs(shop.location.lng - QUERY.lng), 0.02 + 1e-9)
        self.assertEqual({s.name for s in shops}, {d.name for d in DEMO_SHOPS})

    def test_provider_failure_returns_five_demo_shops(self):
        self.mock_repo.search_nearby.side_effect = UpstreamUnavailableError("google_places", "timeout after 10s")
        self._assert_demo_shape(self.usecase.execute(QUERY))

    def test_non_ok_status_returns_demo_shops(self):
        response = NearbySearchResponse(status="OVER_QUERY_LIMIT", results=[_venue("Joe's Auto Body", 37.78, -122.42)])
        self._assert_demo_shape(self.usecase.rank(QUERY, response))
        self.mock_repo.get_details.assert_not_called()

    def test_demo_random_fields_follow_injected_rng(self):
        first = RankRepairShopsUseCase(self.mock_repo, rng=random.Random(123)).demo_shops(QUERY)
        second = RankRepairShopsUseCase(self.mock_repo, rng=random.Random(123)).demo_shops(QUERY)
        self.assertEqual([(s.total_ratings, s.is_open) for s in first], [(s.total_ratings, s.is_open) for s in second])

    def test_non_matching_names_are_excluded_even_if_closest(self):
        response = NearbySearchResponse(status="OK", results=[
            _venue("Joe's Pizza", QUERY.lat, QUERY.lng),
            _venue("Bay Collision Center", 37.80, -122.42),
        ])
        shops = self.usecase.rank(QUERY, response)
        self.assertEqual([s.name for s in shops], ["Bay Collision Center"])
        self.assertFalse(shops[0].synthetic)

    def test_keyword_match_is_case_insensitive(self):
        response = NearbySearchResponse(status="OK", results=[
            _venue("MIKE'S AUTOMOTIVE", 37.78, -122.42),
            _venue("Downtown BODY Works", 37.79, -122.42),
            _venue("Quick Lube", 37.77, -122.42),
        ])
        names = [s.name for s in self.usecase.rank(QUERY, response)]
        self.assertEqual(sorted(names), ["Downtown BODY Works", "MIKE'S AUTOMOTIVE"])

    def test_truncates_to_five_in_provider_order_then_sorts_by_distance(self):
        # Provider order: far to near; the sixth (nearest) must be cut before sorting
        results = [_venue(f"Shop {i} Auto", 37.7749 + 0.01 * (7 - i), -122.4194) for i in range(1, 7)]
        response = NearbySearchResponse(status="OK", results=results)
        shops = self.usecase.rank(QUERY, response)
        self.assertEqual(len(shops), 5)
        self.assertNotIn("Shop 6 Auto", [s.name for s in shops])
        self.assertEqual([s.name for s in shops], ["Shop 5 Auto", "Shop 4 Auto", "Shop 3 Auto", "Shop 2 Auto", "Shop 1 Auto"])

    def test_equal_distances_keep_provider_order(self):
        response = NearbySearchResponse(status="OK", results=[
            _venue("Second Auto", 37.78, -122.4194),
            _venue("First Auto", 37.78, -122.4194),
        ])
        self.assertEqual([s.name for s in self.usecase.rank(QUERY, response)], ["Second Auto", "First Auto"])

    def test_distance_is_computed_not_taken_from_provider(self):
        response = NearbySearchResponse(status="OK", results=[
            _venue("Auto Spa", 37.7849, -122.4194, distance=0.0),
        ])
        shop = self.usecase.rank(QUERY, response)[0]
        self.assertAlmostEqual(shop.distance_miles, 0.691, places=2)

    def test_raw_fields_are_mapped_with_defaults(self):
        response = NearbySearchResponse(status="OK", results=[
            _venue("Rated Auto", 37.78, -122.42, place_id="p1", rating=4.6, user_ratings_total=88,
                   opening_hours={"open_now": False}, price_level=2),
            {"name": "Plain Repair", "geometry": {"location": {"lat": 37.79, "lng": -122.42}},
             "formatted_address": "1 Plain St"},
        ])
        by_name = {s.name: s for s in self.usecase.rank(QUERY, response)}
        rated = by_name["Rated Auto"]
        self.assertEqual((rated.rating, rated.total_ratings, rated.is_open, rated.price_level), (4.6, 88, False, 2))
        plain = by_name["Plain Repair"]
        self.assertEqual((plain.rating, plain.total_ratings, plain.is_open), (4.0, 0, None))
        self.assertEqual(plain.address, "1 Plain St")

    def test_details_enrichment(self):
        self.mock_repo.get_details.side_effect = lambda place_id: PlaceDetails(
            phone=f"phone-{place_id}", website=f"https://{place_id}.example", hours={"open_now": True},
        )
        response = NearbySearchResponse(status="OK", results=[
            _venue("A Auto", 37.78, -122.42, place_id="a"),
            _venue("B Auto", 37.79, -122.42, place_id="b"),
        ])
        shops = self.usecase.rank(QUERY, response)
        self.assertEqual([s.phone for s in shops], ["phone-a", "phone-b"])
        self.assertEqual(shops[1].website, "https://b.example")
        self.assertEqual(self.mock_repo.get_details.call_count, 2)

    def test_details_failure_keeps_candidate(self):
        def details(place_id):
            if place_id == "bad":
                raise UpstreamUnavailableError("google_places", "HTTP 500")
            return PlaceDetails(phone="(555) 000-0000")

        self.mock_repo.get_details.side_effect = details
        response = NearbySearchResponse(status="OK", results=[
            _venue("Good Auto", 37.78, -122.42, place_id="good"),
            _venue("Bad Auto", 37.79, -122.42, place_id="bad"),
        ])
        shops = self.usecase.rank(QUERY, response)
        self.assertEqual([s.name for s in shops], ["Good Auto", "Bad Auto"])
        self.assertEqual(shops[0].phone, "(555) 000-0000")
        self.assertIsNone(shops[1].phone)
        self.assertFalse(shops[1].synthetic)

    def test_malformed_candidate_falls_back_to_demo_shops(self):
        response = NearbySearchResponse(status="OK", results=[{"name": "Broken Auto Body"}])
        self._assert_demo_shape(self.usecase.rank(QUERY, response))

    def test_nothing_usable_falls_back_to_demo_shops(self):
        response = NearbySearchResponse(status="OK", results=[_venue("Joe's Pizza", QUERY.lat, QUERY.lng)])
        shops = self.usecase.rank(QUERY, response)
        self._assert_demo_shape(shops)
        self.assertNotIn("Joe's Pizza", [s.name for s in shops])
