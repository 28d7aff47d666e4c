import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from app.core.utils.fallback import FallbackChain
from app.core.utils.geo import distance_miles
from app.core.utils.logger import get_logger
from app.domain.entities.location_entity import GeoPoint
from app.domain.entities.places_entity import STATUS_REQUEST_FAILED, NearbySearchResponse, PlaceDetails
from app.domain.entities.repair_shop_entity import RepairShop
from app.domain.repositories.places_repository import PlacesRepository

_logger = get_logger("rank_repair_shops")

SHOP_NAME_KEYWORDS = ("auto", "collision", "body", "repair")
MAX_CANDIDATES = 5
DEFAULT_RATING = 4.0


@dataclass(frozen=True)
class _DemoShop:
    name: str
    address: str
    phone: str
    website: str
    rating: float
    d_lat: float
    d_lng: float


# Shown when the provider is down or has nothing usable; placed around the query point
DEMO_SHOPS: Tuple[_DemoShop, ...] = (
    _DemoShop("AutoCraft Collision Center", "1234 Main Street", "(555) 123-4567", "autocraft-collision.com", 4.8, 0.01, 0.01),
    _DemoShop("Precision Auto Body", "5678 Oak Avenue", "(555) 234-5678", "precisionautobody.com", 4.9, -0.01, 0.01),
    _DemoShop("Metro Collision Repair", "9012 Pine Street", "(555) 345-6789", "metrocollision.com", 4.6, 0.01, -0.01),
    _DemoShop("Elite Auto Restoration", "3456 Elm Drive", "(555) 456-7890", "eliteautorestoration.com", 4.7, -0.01, -0.01),
    _DemoShop("Superior Car Care", "7890 Cedar Lane", "(555) 567-8901", "superiorcarcare.com", 4.5, 0.02, 0.0),
)
DEMO_OPEN_PROBABILITY = 0.7
DEMO_MIN_RATINGS = 50
DEMO_MAX_RATINGS = 249


class RankRepairShopsUseCase:
    """Find repair shops near a point and order them by distance.

    Provider venues are filtered by name keywords, capped at five, enriched
    with details (best effort, concurrently) and sorted nearest first. When
    the provider fails, answers with a non-OK status, or leaves nothing
    usable, a fixed set of five demo shops is returned instead.
    """

    def __init__(self, repository: PlacesRepository, rng: Optional[random.Random] = None, details_workers: int = 5):
        self._repo = repository
        self._rng = rng or random.Random()
        self._details_workers = max(1, details_workers)

    def execute(self, point: GeoPoint) -> List[RepairShop]:
        try:
            response = self._repo.search_nearby(point)
        except Exception as e:
            _logger.warning("Nearby search failed: %s", e)
            response = NearbySearchResponse(status=STATUS_REQUEST_FAILED, error_message=str(e))
        return self.rank(point, response)

    def rank(self, point: GeoPoint, response: NearbySearchResponse) -> List[RepairShop]:
        if not response.ok:
            _logger.info("Nearby search not usable (%s); returning demo shops", response.status)
            return self.demo_shops(point)

        return (
            FallbackChain("rank_repair_shops")
            .then("provider", lambda: self._rank_candidates(point, response.results) or None)
            .otherwise("demo", lambda: self.demo_shops(point))
            .run()
        )

    def demo_shops(self, point: GeoPoint) -> List[RepairShop]:
        shops = []
        for demo in DEMO_SHOPS:
            location = GeoPoint(lat=point.lat + demo.d_lat, lng=point.lng + demo.d_lng)
            shops.append(
                RepairShop(
                    name=demo.name,
                    address=demo.address,
                    location=location,
                    distance_miles=distance_miles(point, location),
                    rating=demo.rating,
                    total_ratings=self._rng.randint(DEMO_MIN_RATINGS, DEMO_MAX_RATINGS),
                    is_open=self._rng.random() < DEMO_OPEN_PROBABILITY,
                    phone=demo.phone,
                    website=demo.website,
                    synthetic=True,
                )
            )
        return sorted(shops, key=lambda s: s.distance_miles)

    def _rank_candidates(self, point: GeoPoint, results: List[Dict[str, Any]]) -> List[RepairShop]:
        candidates = [place for place in results if self._is_repair_shop(place)][:MAX_CANDIDATES]
        shops = [self._to_shop(point, place) for place in candidates]
        self._enrich(shops)
        # sorted() is stable: equal distances keep provider relevance order
        return sorted(shops, key=lambda s: s.distance_miles)

    @staticmethod
    def _is_repair_shop(place: Dict[str, Any]) -> bool:
        name = str(place.get("name") or "").lower()
        return any(keyword in name for keyword in SHOP_NAME_KEYWORDS)

    @staticmethod
    def _to_shop(point: GeoPoint, place: Dict[str, Any]) -> RepairShop:
        raw_location = place["geometry"]["location"]
        location = GeoPoint(lat=float(raw_location["lat"]), lng=float(raw_location["lng"]))
        opening_hours = place.get("opening_hours")
        return RepairShop(
            name=place["name"],
            address=place.get("vicinity") or place.get("formatted_address") or "",
            location=location,
            distance_miles=distance_miles(point, location),
            rating=place.get("rating") or DEFAULT_RATING,
            total_ratings=place.get("user_ratings_total") or 0,
            place_id=place.get("place_id"),
            is_open=opening_hours.get("open_now") if isinstance(opening_hours, dict) else None,
            price_level=place.get("price_level"),
        )

    def _enrich(self, shops: List[RepairShop]) -> None:
        with_ids = [shop for shop in shops if shop.place_id]
        if not with_ids:
            return
        workers = min(self._details_workers, len(with_ids))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            details = list(pool.map(self._details_for, [shop.place_id for shop in with_ids]))
        for shop, extra in zip(with_ids, details):
            shop.phone = extra.phone
            shop.website = extra.website
            shop.hours = extra.hours

    def _details_for(self, place_id: str) -> PlaceDetails:
        try:
            return self._repo.get_details(place_id)
        except Exception as e:
            _logger.debug("Details lookup failed for %s: %s", place_id, e)
            return PlaceDetails()
