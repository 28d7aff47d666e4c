from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from app.core.utils.logger import get_logger
from app.domain.entities.location_entity import GeoPoint, LocationSource, ResolvedLocation
from app.domain.repositories.location_directory_repository import LocationDirectoryRepository

_logger = get_logger("location_directory")


@dataclass(frozen=True)
class DirectoryEntry:
    lat: float
    lng: float
    name: str


_RAW_ENTRIES: Tuple[Tuple[str, float, float, str], ...] = (
    # Major US cities
    ("new york", 40.7128, -74.0060, "New York, NY"),
    ("los angeles", 34.0522, -118.2437, "Los Angeles, CA"),
    ("chicago", 41.8781, -87.6298, "Chicago, IL"),
    ("houston", 29.7604, -95.3698, "Houston, TX"),
    ("phoenix", 33.4484, -112.0740, "Phoenix, AZ"),
    ("philadelphia", 39.9526, -75.1652, "Philadelphia, PA"),
    ("san antonio", 29.4241, -98.4936, "San Antonio, TX"),
    ("san diego", 32.7157, -117.1611, "San Diego, CA"),
    ("dallas", 32.7767, -96.7970, "Dallas, TX"),
    ("san jose", 37.3382, -121.8863, "San Jose, CA"),
    ("austin", 30.2672, -97.7431, "Austin, TX"),
    ("jacksonville", 30.3322, -81.6557, "Jacksonville, FL"),
    ("san francisco", 37.7749, -122.4194, "San Francisco, CA"),
    ("columbus", 39.9612, -82.9988, "Columbus, OH"),
    ("charlotte", 35.2271, -80.8431, "Charlotte, NC"),
    ("fort worth", 32.7555, -97.3308, "Fort Worth, TX"),
    ("indianapolis", 39.7684, -86.1581, "Indianapolis, IN"),
    ("seattle", 47.6062, -122.3321, "Seattle, WA"),
    ("denver", 39.7392, -104.9903, "Denver, CO"),
    ("boston", 42.3601, -71.0589, "Boston, MA"),
    ("el paso", 31.7619, -106.4850, "El Paso, TX"),
    ("detroit", 42.3314, -83.0458, "Detroit, MI"),
    ("nashville", 36.1627, -86.7816, "Nashville, TN"),
    ("portland", 45.5152, -122.6784, "Portland, OR"),
    ("memphis", 35.1495, -90.0490, "Memphis, TN"),
    ("oklahoma city", 35.4676, -97.5164, "Oklahoma City, OK"),
    ("las vegas", 36.1699, -115.1398, "Las Vegas, NV"),
    ("louisville", 38.2527, -85.7585, "Louisville, KY"),
    ("baltimore", 39.2904, -76.6122, "Baltimore, MD"),
    ("milwaukee", 43.0389, -87.9065, "Milwaukee, WI"),
    ("albuquerque", 35.0844, -106.6504, "Albuquerque, NM"),
    ("tucson", 32.2226, -110.9747, "Tucson, AZ"),
    ("fresno", 36.7378, -119.7871, "Fresno, CA"),
    ("sacramento", 38.5816, -121.4944, "Sacramento, CA"),
    ("kansas city", 39.0997, -94.5786, "Kansas City, MO"),
    ("mesa", 33.4152, -111.8315, "Mesa, AZ"),
    ("atlanta", 33.7490, -84.3880, "Atlanta, GA"),
    ("colorado springs", 38.8339, -104.8214, "Colorado Springs, CO"),
    ("raleigh", 35.7796, -78.6382, "Raleigh, NC"),
    ("omaha", 41.2565, -95.9345, "Omaha, NE"),
    ("miami", 25.7617, -80.1918, "Miami, FL"),
    ("oakland", 37.8044, -122.2712, "Oakland, CA"),
    ("minneapolis", 44.9778, -93.2650, "Minneapolis, MN"),
    ("tulsa", 36.1540, -95.9928, "Tulsa, OK"),
    ("cleveland", 41.4993, -81.6944, "Cleveland, OH"),
    ("wichita", 37.6872, -97.3301, "Wichita, KS"),
    ("arlington", 32.7357, -97.1081, "Arlington, TX"),
    # Popular zip codes
    ("10001", 40.7505, -73.9934, "New York, NY 10001"),
    ("90210", 34.0901, -118.4065, "Beverly Hills, CA 90210"),
    ("60601", 41.8826, -87.6288, "Chicago, IL 60601"),
    ("77001", 29.7347, -95.3864, "Houston, TX 77001"),
    ("33101", 25.7889, -80.2264, "Miami, FL 33101"),
    ("85001", 33.4734, -112.0740, "Phoenix, AZ 85001"),
    ("19101", 39.9526, -75.1652, "Philadelphia, PA 19101"),
    ("78201", 29.4241, -98.4936, "San Antonio, TX 78201"),
    ("92101", 32.7157, -117.1611, "San Diego, CA 92101"),
    ("75201", 32.7767, -96.7970, "Dallas, TX 75201"),
    ("95101", 37.3382, -121.8863, "San Jose, CA 95101"),
    ("78701", 30.2672, -97.7431, "Austin, TX 78701"),
    ("32099", 30.3322, -81.6557, "Jacksonville, FL 32099"),
    ("94101", 37.7749, -122.4194, "San Francisco, CA 94101"),
    ("43215", 39.9612, -82.9988, "Columbus, OH 43215"),
    ("28202", 35.2271, -80.8431, "Charlotte, NC 28202"),
    ("98101", 47.6062, -122.3321, "Seattle, WA 98101"),
    ("80202", 39.7392, -104.9903, "Denver, CO 80202"),
    ("02101", 42.3601, -71.0589, "Boston, MA 02101"),
)

# Read-only, insertion-ordered: iteration order is part of the 'first' strategy contract.
DEFAULT_DIRECTORY: Mapping[str, DirectoryEntry] = MappingProxyType(
    {key: DirectoryEntry(lat=lat, lng=lng, name=name) for key, lat, lng, name in _RAW_ENTRIES}
)

MATCH_FIRST = "first"
MATCH_LONGEST = "longest"


class LocationDirectory(LocationDirectoryRepository):
    """Static lookup of well-known city names and zip codes.

    Lookup order:
    1. exact key match on the trimmed, lower-cased input -> directory_exact
    2. substring match (input contains a key, or a key contains the input) -> directory_partial

    The 'first' strategy returns the first substring hit in table order. The
    'longest' strategy ranks hits: keys found inside the input beat keys that
    merely contain the input, then the longer overlap wins, then table order.
    """

    def __init__(self, entries: Optional[Mapping[str, DirectoryEntry]] = None, strategy: str = MATCH_LONGEST):
        self._entries = entries if entries is not None else DEFAULT_DIRECTORY
        if strategy not in (MATCH_FIRST, MATCH_LONGEST):
            _logger.warning("Unknown match strategy '%s'; using '%s'", strategy, MATCH_LONGEST)
            strategy = MATCH_LONGEST
        self.strategy = strategy

    def lookup(self, text: str) -> Optional[ResolvedLocation]:
        search_key = (text or "").strip().lower()
        if not search_key:
            return None

        entry = self._entries.get(search_key)
        if entry is not None:
            _logger.info("Found in local directory: %s", entry.name)
            return self._to_location(entry, LocationSource.DIRECTORY_EXACT)

        key = self._partial_match(search_key)
        if key is None:
            return None
        entry = self._entries[key]
        _logger.info("Partial match in local directory: '%s' -> %s", search_key, entry.name)
        return self._to_location(entry, LocationSource.DIRECTORY_PARTIAL)

    def _partial_match(self, search_key: str) -> Optional[str]:
        candidates: List[Tuple[bool, int, int, str]] = []
        for index, key in enumerate(self._entries):
            key_in_input = key in search_key
            if not key_in_input and search_key not in key:
                continue
            if self.strategy == MATCH_FIRST:
                return key
            overlap = len(key) if key_in_input else len(search_key)
            # Sort key: containment first, longer overlap, then table order
            candidates.append((not key_in_input, -overlap, index, key))
        if not candidates:
            return None
        return min(candidates)[3]

    @staticmethod
    def _to_location(entry: DirectoryEntry, source: LocationSource) -> ResolvedLocation:
        return ResolvedLocation(
            point=GeoPoint(lat=entry.lat, lng=entry.lng),
            formatted_address=entry.name,
            source=source,
        )
