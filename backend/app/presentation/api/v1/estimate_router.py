from typing import Any, List, Optional

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel

from app.core.di.service_locator import ServiceLocator
from app.core.utils.logger import get_logger
from app.data.repositories.assessment_mapper import assessment_from_payload
from app.domain.entities.cost_entity import CostBreakdown
from app.domain.exceptions import InvalidAssessmentPayloadError


router = APIRouter(prefix="/api/v1/estimates", tags=["estimates"])
logger = get_logger("estimate_router")


class PriceRangeResponse(BaseModel):
    low: int
    high: int


class CostLineItemResponse(BaseModel):
    part: str
    severity: str
    part_cost: float
    paint_cost: float


class VehicleMetadataResponse(BaseModel):
    make: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None


class CostBreakdownResponse(BaseModel):
    parts_and_labor: float
    paint: float
    surcharges: float
    total: float
    adjusted_total: float
    estimate_range: PriceRangeResponse
    midpoint: int
    confidence: float
    range_pct: float
    estimated_cost: str  # "$low - $high"
    line_items: List[CostLineItemResponse]
    vehicle: VehicleMetadataResponse
    damage_summary: Optional[str] = None


def _to_response(breakdown: CostBreakdown, vehicle: VehicleMetadataResponse, summary: Optional[str]) -> CostBreakdownResponse:
    return CostBreakdownResponse(
        parts_and_labor=breakdown.parts_and_labor,
        paint=breakdown.paint,
        surcharges=breakdown.surcharges,
        total=breakdown.total,
        adjusted_total=breakdown.adjusted_total,
        estimate_range=PriceRangeResponse(low=breakdown.estimate_range.low, high=breakdown.estimate_range.high),
        midpoint=breakdown.midpoint,
        confidence=breakdown.confidence,
        range_pct=breakdown.range_pct,
        estimated_cost=breakdown.formatted_range(),
        line_items=[
            CostLineItemResponse(part=i.part, severity=i.severity, part_cost=i.part_cost, paint_cost=i.paint_cost)
            for i in breakdown.line_items
        ],
        vehicle=vehicle,
        damage_summary=summary,
    )


@router.post("", response_model=CostBreakdownResponse)
def estimate_cost(payload: Any = Body(...)):
    try:
        assessment = assessment_from_payload(payload)
    except InvalidAssessmentPayloadError as e:
        raise HTTPException(status_code=422, detail=str(e))

    usecase = ServiceLocator.estimate_usecase()
    try:
        breakdown = usecase.execute(assessment)
    except Exception as e:
        logger.error("Error estimating repair cost: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to estimate repair cost: {e}")

    vehicle = VehicleMetadataResponse(make=assessment.make, model=assessment.model, color=assessment.color)
    return _to_response(breakdown, vehicle, assessment.summary)
