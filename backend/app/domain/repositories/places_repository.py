from abc import ABC, abstractmethod

from app.domain.entities.location_entity import GeoPoint
from app.domain.entities.places_entity import NearbySearchResponse, PlaceDetails, TextSearchResponse


class PlacesRepository(ABC):
    """Contract for the external places provider (search, details and text geocoding).

    Implementations raise ProviderError subclasses on failure; use cases decide the fallback.
    """

    @abstractmethod
    def search_nearby(self, point: GeoPoint) -> NearbySearchResponse:
        """Return candidate repair venues around a point, in provider relevance order."""
        raise NotImplementedError

    @abstractmethod
    def get_details(self, place_id: str) -> PlaceDetails:
        """Return phone / website / opening hours for a place id."""
        raise NotImplementedError

    @abstractmethod
    def text_search(self, query: str) -> TextSearchResponse:
        """
        Free-text search used as a geocoder.

        - query: address, city or zip code exactly as typed by the user.
        """
        raise NotImplementedError
