from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from app.core.di.service_locator import ServiceLocator
from app.core.utils.logger import get_logger
from app.domain.entities.location_entity import GeoPoint
from app.domain.entities.repair_shop_entity import RepairShop
from app.presentation.api.v1.location_router import ResolvedLocationResponse, to_location_response


router = APIRouter(prefix="/api/v1/repair-shops", tags=["repair-shops"])
logger = get_logger("repair_shop_router")


class RepairShopRequest(BaseModel):
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    address: Optional[str] = Field(None, description="Used when coordinates are not given")


class GeoPointResponse(BaseModel):
    lat: float
    lng: float


class RepairShopResponse(BaseModel):
    name: str
    address: str
    rating: float
    total_ratings: int
    place_id: Optional[str] = None
    location: GeoPointResponse
    is_open: Optional[bool] = None
    price_level: Optional[int] = None
    distance_miles: float
    phone: Optional[str] = None
    website: Optional[str] = None
    hours: Optional[Dict[str, Any]] = None
    synthetic: bool = False


class RepairShopListResponse(BaseModel):
    query_point: GeoPointResponse
    resolved_location: Optional[ResolvedLocationResponse] = None
    shops: List[RepairShopResponse]


def _to_shop_response(shop: RepairShop) -> RepairShopResponse:
    return RepairShopResponse(
        name=shop.name,
        address=shop.address,
        rating=shop.rating,
        total_ratings=shop.total_ratings,
        place_id=shop.place_id,
        location=GeoPointResponse(lat=shop.location.lat, lng=shop.location.lng),
        is_open=shop.is_open,
        price_level=shop.price_level,
        distance_miles=shop.distance_miles,
        phone=shop.phone,
        website=shop.website,
        hours=shop.hours,
        synthetic=shop.synthetic,
    )


@router.post("", response_model=RepairShopListResponse)
def find_repair_shops(req: RepairShopRequest):
    has_coordinates = req.latitude is not None and req.longitude is not None
    if not has_coordinates and not (req.address and req.address.strip()):
        raise HTTPException(status_code=400, detail="Provide latitude and longitude, or an address.")

    resolved = None
    try:
        if has_coordinates:
            point = GeoPoint(lat=req.latitude, lng=req.longitude)
        else:
            resolved = ServiceLocator.resolve_location_usecase().execute(req.address)
            point = resolved.point
        logger.info("Finding repair shops near: %s, %s", point.lat, point.lng)
        shops = ServiceLocator.rank_shops_usecase().execute(point)
    except Exception as e:
        logger.error("Repair shop search failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to find repair shops: {e}")

    return RepairShopListResponse(
        query_point=GeoPointResponse(lat=point.lat, lng=point.lng),
        resolved_location=to_location_response(resolved) if resolved is not None else None,
        shops=[_to_shop_response(s) for s in shops],
    )
