from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from app.core.di.service_locator import ServiceLocator
from app.core.utils.logger import get_logger
from app.domain.entities.location_entity import ResolvedLocation


router = APIRouter(prefix="/api/v1/locations", tags=["locations"])
logger = get_logger("location_router")


class GeocodeRequest(BaseModel):
    address: str = Field(..., description="City, zip code or street address")


class ResolvedLocationResponse(BaseModel):
    lat: float
    lng: float
    formatted_address: str
    source: str


def to_location_response(location: ResolvedLocation) -> ResolvedLocationResponse:
    return ResolvedLocationResponse(
        lat=location.lat,
        lng=location.lng,
        formatted_address=location.formatted_address,
        source=location.source.value,
    )


@router.post("/geocode", response_model=ResolvedLocationResponse)
def geocode(req: GeocodeRequest):
    logger.info("Geocoding address: %s", req.address)
    try:
        location = ServiceLocator.resolve_location_usecase().execute(req.address)
    except Exception as e:
        logger.error("Geocoding failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to geocode address: {e}")
    return to_location_response(location)
