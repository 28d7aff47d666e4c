import math
from types import MappingProxyType
from typing import List, Mapping, Optional

from app.core.utils.logger import get_logger
from app.domain.entities.cost_entity import CostBreakdown, CostLineItem, PriceRange
from app.domain.entities.damage_entity import DamageAssessment, DamagedPart, Severity

_logger = get_logger("estimate_repair_cost")


# Base repair cost per part in USD (moderate damage)
BASE_PART_COST: Mapping[str, float] = MappingProxyType({
    DamagedPart.FRONT_BUMPER.value: 500.0,
    DamagedPart.REAR_BUMPER.value: 500.0,
    DamagedPart.FRONT_DOOR.value: 800.0,
    DamagedPart.REAR_DOOR.value: 800.0,
    DamagedPart.HOOD.value: 1200.0,
    DamagedPart.ROOF.value: 2500.0,
    DamagedPart.FENDER.value: 700.0,
    DamagedPart.QUARTER_PANEL.value: 700.0,
    DamagedPart.TRUNK.value: 700.0,
    DamagedPart.WINDSHIELD.value: 500.0,
    DamagedPart.REAR_GLASS.value: 400.0,
    DamagedPart.SIDE_GLASS.value: 400.0,
    DamagedPart.HEADLIGHT.value: 300.0,
    DamagedPart.TAILLIGHT.value: 300.0,
    DamagedPart.WHEEL.value: 400.0,
    DamagedPart.TIRE.value: 400.0,
    DamagedPart.FRAME.value: 2000.0,
})
DEFAULT_PART_COST = 500.0

SEVERITY_MULTIPLIER: Mapping[str, float] = MappingProxyType({
    Severity.MINOR.value: 0.5,
    Severity.MODERATE.value: 1.0,
    Severity.SEVERE.value: 2.0,
    Severity.CATASTROPHIC.value: 3.0,
})
DEFAULT_SEVERITY_MULTIPLIER = 1.0

# Body panels that need paint once repaired; flat rate, no severity multiplier
EXTERIOR_PANELS = frozenset({
    DamagedPart.FRONT_BUMPER.value,
    DamagedPart.REAR_BUMPER.value,
    DamagedPart.FRONT_DOOR.value,
    DamagedPart.REAR_DOOR.value,
    DamagedPart.HOOD.value,
    DamagedPart.ROOF.value,
    DamagedPart.FENDER.value,
    DamagedPart.QUARTER_PANEL.value,
    DamagedPart.TRUNK.value,
})
PAINT_COST_PER_PANEL = 200.0

AIRBAG_SURCHARGE = 3000.0  # two airbags
NOT_DRIVABLE_SURCHARGE = 300.0  # towing
MINIMUM_TOTAL = 600.0

DEFAULT_CONFIDENCE = 0.7
ZERO_ESTIMATE_CONFIDENCE = 1.0


def range_pct_for(confidence: float) -> float:
    """Half-width of the price range as a fraction of the total."""
    if confidence >= 0.8:
        return 0.15
    if confidence >= 0.6:
        return 0.25
    return 0.35


def round_half_up(value: float) -> int:
    # round() is banker's rounding; currency amounts round .5 upward
    return int(math.floor(value + 0.5))


def normalize_key(value: Optional[str]) -> str:
    return (value or "").strip().lower().replace("-", "_").replace(" ", "_")


class EstimateRepairCostUseCase:
    """Turns a damage assessment into a cost breakdown with a confidence-weighted range.

    Pure and deterministic: identical assessments give identical breakdowns.
    Unknown parts and severities are priced with the documented defaults, never rejected.
    """

    def execute(self, assessment: DamageAssessment) -> CostBreakdown:
        parts = assessment.effective_parts
        if not assessment.vehicle_detected or not assessment.damage_detected or not parts:
            confidence = assessment.confidence if assessment.confidence is not None else ZERO_ESTIMATE_CONFIDENCE
            return self._zero(confidence)

        line_items: List[CostLineItem] = []
        for damage in parts:
            part = normalize_key(damage.part)
            severity = normalize_key(damage.severity)
            if part not in BASE_PART_COST:
                _logger.debug("Unknown part '%s'; using default cost %s", damage.part, DEFAULT_PART_COST)
            if severity not in SEVERITY_MULTIPLIER:
                _logger.debug("Unknown severity '%s'; using multiplier %s", damage.severity, DEFAULT_SEVERITY_MULTIPLIER)
            part_cost = BASE_PART_COST.get(part, DEFAULT_PART_COST) * SEVERITY_MULTIPLIER.get(severity, DEFAULT_SEVERITY_MULTIPLIER)
            paint_cost = PAINT_COST_PER_PANEL if part in EXTERIOR_PANELS else 0.0
            line_items.append(CostLineItem(part=part, severity=severity, part_cost=part_cost, paint_cost=paint_cost))

        parts_and_labor = sum(item.part_cost for item in line_items)
        paint = sum(item.paint_cost for item in line_items)
        surcharges = 0.0
        if assessment.airbags_deployed:
            surcharges += AIRBAG_SURCHARGE
        if not assessment.drivable:
            surcharges += NOT_DRIVABLE_SURCHARGE

        total = parts_and_labor + paint + surcharges
        adjusted_total = max(total, MINIMUM_TOTAL)

        confidence = assessment.confidence if assessment.confidence is not None else DEFAULT_CONFIDENCE
        pct = range_pct_for(confidence)
        return CostBreakdown(
            parts_and_labor=parts_and_labor,
            paint=paint,
            surcharges=surcharges,
            total=total,
            adjusted_total=adjusted_total,
            estimate_range=PriceRange(
                low=round_half_up(adjusted_total * (1 - pct)),
                high=round_half_up(adjusted_total * (1 + pct)),
            ),
            midpoint=round_half_up(adjusted_total),
            confidence=confidence,
            range_pct=pct,
            line_items=line_items,
        )

    @staticmethod
    def _zero(confidence: float) -> CostBreakdown:
        return CostBreakdown(
            parts_and_labor=0.0,
            paint=0.0,
            surcharges=0.0,
            total=0.0,
            adjusted_total=0.0,
            estimate_range=PriceRange(low=0, high=0),
            midpoint=0,
            confidence=confidence,
        )
