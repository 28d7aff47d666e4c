from typing import Any, Dict, List

from app.core.utils.logger import get_logger
from app.data.adapters.google_places_client import GooglePlacesClient, PROVIDER_NAME
from app.domain.entities.location_entity import GeoPoint
from app.domain.entities.places_entity import (
    STATUS_OK,
    NearbySearchResponse,
    PlaceDetails,
    TextSearchResponse,
)
from app.domain.exceptions import MalformedUpstreamPayloadError
from app.domain.repositories.places_repository import PlacesRepository

_logger = get_logger("places_repo")


class PlacesRepositoryImpl(PlacesRepository):
    """Repository implementation backed by GooglePlacesClient."""

    def __init__(self, client: GooglePlacesClient, search_radius_meters: int = 16093):
        self._client = client
        self._radius = search_radius_meters

    def search_nearby(self, point: GeoPoint) -> NearbySearchResponse:
        data = self._client.nearby_search(point.lat, point.lng, self._radius)
        status = str(data.get("status", ""))
        if status != STATUS_OK:
            _logger.warning("Google Places nearby search error: %s %s", status, data.get("error_message"))
        return NearbySearchResponse(
            status=status,
            results=self._results(data),
            error_message=data.get("error_message"),
        )

    def get_details(self, place_id: str) -> PlaceDetails:
        data = self._client.place_details(place_id)
        result = data.get("result")
        if data.get("status") != STATUS_OK or not isinstance(result, dict):
            return PlaceDetails()
        return PlaceDetails(
            phone=result.get("formatted_phone_number"),
            website=result.get("website"),
            hours=result.get("opening_hours"),
        )

    def text_search(self, query: str) -> TextSearchResponse:
        data = self._client.text_search(query)
        status = str(data.get("status", ""))
        if status != STATUS_OK:
            _logger.warning("Google Places text search failed: %s %s", status, data.get("error_message"))
        return TextSearchResponse(
            status=status,
            results=self._results(data),
            error_message=data.get("error_message"),
        )

    @staticmethod
    def _results(data: Dict[str, Any]) -> List[Dict[str, Any]]:
        raw = data.get("results") or []
        if not isinstance(raw, list):
            raise MalformedUpstreamPayloadError(PROVIDER_NAME, "'results' is not a list")
        # Non-dict entries carry nothing usable
        return [r for r in raw if isinstance(r, dict)]
