import math

from app.domain.entities.location_entity import GeoPoint


EARTH_RADIUS_MILES = 3959.0


def distance_miles(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in statute miles (haversine)."""
    if a == b:
        return 0.0
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    # rounding can push h just outside [0, 1] for antipodal points
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_MILES * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
