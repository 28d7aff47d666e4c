from typing import Optional

from app.core.utils.fallback import FallbackChain
from app.core.utils.logger import get_logger
from app.domain.entities.location_entity import GeoPoint, LocationSource, ResolvedLocation
from app.domain.repositories.location_directory_repository import LocationDirectoryRepository
from app.domain.repositories.places_repository import PlacesRepository

_logger = get_logger("resolve_location")

DEFAULT_LOCATION = ResolvedLocation(
    point=GeoPoint(lat=37.7749, lng=-122.4194),
    formatted_address="San Francisco, CA (default)",
    source=LocationSource.DEFAULT,
)


class ResolveLocationUseCase:
    """Resolve free text (city, zip code, street address) to coordinates.

    Tries the local directory, then the provider's text search, then a fixed
    default point. Never raises: provider failures fall through to the default.
    """

    def __init__(self, directory: LocationDirectoryRepository, repository: PlacesRepository):
        self._directory = directory
        self._repo = repository

    def execute(self, address: str) -> ResolvedLocation:
        text = (address or "").strip()
        if not text:
            _logger.info("Empty address; using default location")
            return DEFAULT_LOCATION

        return (
            FallbackChain("resolve_location")
            .then("directory", lambda: self._directory.lookup(text))
            .then("provider", lambda: self._from_provider(text))
            .otherwise("default", self._default)
            .run()
        )

    def _from_provider(self, text: str) -> Optional[ResolvedLocation]:
        response = self._repo.text_search(text)
        if not response.ok or not response.results:
            return None
        first = response.results[0]
        location = first["geometry"]["location"]
        resolved = ResolvedLocation(
            point=GeoPoint(lat=float(location["lat"]), lng=float(location["lng"])),
            formatted_address=first.get("formatted_address") or text,
            source=LocationSource.PROVIDER,
        )
        _logger.info("Provider text search resolved '%s' -> %s", text, resolved.formatted_address)
        return resolved

    @staticmethod
    def _default() -> ResolvedLocation:
        _logger.info("Falling back to default location: %s", DEFAULT_LOCATION.formatted_address)
        return DEFAULT_LOCATION
