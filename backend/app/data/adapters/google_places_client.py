from typing import Any, Dict, Optional

import requests

from app.core.utils.logger import get_logger
from app.domain.exceptions import MalformedUpstreamPayloadError, UpstreamUnavailableError

_logger = get_logger("google_places_client")

PROVIDER_NAME = "google_places"


class GooglePlacesClient:
    """Thin client for the Google Places web service (nearby search, details, text search).

    Every call carries a timeout so a slow provider behaves like a failed one.
    Failures are raised as UpstreamUnavailableError / MalformedUpstreamPayloadError;
    deciding what to fall back to is the caller's job.
    """

    NEARBY_SEARCH_PATH = "/nearbysearch/json"
    DETAILS_PATH = "/details/json"
    TEXT_SEARCH_PATH = "/textsearch/json"

    DETAILS_FIELDS = "formatted_phone_number,website,opening_hours"
    SHOP_TYPE = "car_repair"
    SHOP_KEYWORD = "auto body collision repair"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://maps.googleapis.com/maps/api/place",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def nearby_search(self, lat: float, lng: float, radius_meters: int) -> Dict[str, Any]:
        params = {
            "location": f"{lat},{lng}",
            "radius": radius_meters,
            "type": self.SHOP_TYPE,
            "keyword": self.SHOP_KEYWORD,
        }
        return self._get(self.NEARBY_SEARCH_PATH, params)

    def place_details(self, place_id: str) -> Dict[str, Any]:
        params = {"place_id": place_id, "fields": self.DETAILS_FIELDS}
        return self._get(self.DETAILS_PATH, params)

    def text_search(self, query: str) -> Dict[str, Any]:
        return self._get(self.TEXT_SEARCH_PATH, {"query": query})

    def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if not self.api_key:
            raise UpstreamUnavailableError(PROVIDER_NAME, "GOOGLE_API_KEY not configured")

        url = f"{self.base_url}{path}"
        query = dict(params)
        query["key"] = self.api_key

        try:
            resp = self._session.get(url, params=query, timeout=self.timeout)
        except requests.Timeout as e:
            _logger.warning("Google Places request timed out (%s): %s", path, e)
            raise UpstreamUnavailableError(PROVIDER_NAME, f"timeout after {self.timeout}s") from e
        except requests.RequestException as e:
            _logger.warning("Google Places request failed (%s): %s", path, e)
            raise UpstreamUnavailableError(PROVIDER_NAME, str(e)) from e

        if resp.status_code >= 400:
            raise UpstreamUnavailableError(PROVIDER_NAME, f"HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            _logger.warning("Google Places response is not JSON (%s): %s", path, (resp.text or "")[:200])
            raise MalformedUpstreamPayloadError(PROVIDER_NAME, "response is not JSON") from e

        if not isinstance(data, dict):
            raise MalformedUpstreamPayloadError(PROVIDER_NAME, f"expected object, got {type(data).__name__}")
        return data
