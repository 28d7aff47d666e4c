from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.domain.entities.location_entity import GeoPoint


@dataclass
class RepairShop:
    """A candidate repair shop near a query point.

    distance_miles is always computed from the query point, never taken from the provider.
    synthetic marks shops produced by the fallback when the provider is unusable.
    """
    name: str
    address: str
    location: GeoPoint
    distance_miles: float
    rating: float = 4.0
    total_ratings: int = 0
    place_id: Optional[str] = None
    is_open: Optional[bool] = None
    price_level: Optional[int] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    hours: Optional[Dict[str, Any]] = None
    synthetic: bool = False
