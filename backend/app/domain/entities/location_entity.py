from dataclasses import dataclass
from enum import Enum


class LocationSource(str, Enum):
    DIRECTORY_EXACT = "directory_exact"
    DIRECTORY_PARTIAL = "directory_partial"
    PROVIDER = "provider"
    DEFAULT = "default"


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class ResolvedLocation:
    """A free-text address turned into coordinates, tagged with where they came from."""
    point: GeoPoint
    formatted_address: str
    source: LocationSource

    @property
    def lat(self) -> float:
        return self.point.lat

    @property
    def lng(self) -> float:
        return self.point.lng
