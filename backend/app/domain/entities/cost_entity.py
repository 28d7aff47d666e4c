from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class PriceRange:
    low: int
    high: int


@dataclass(frozen=True)
class CostLineItem:
    """Cost contributed by one damaged part."""
    part: str
    severity: str
    part_cost: float
    paint_cost: float


@dataclass(frozen=True)
class CostBreakdown:
    """Repair cost estimate for one assessment. Built fresh per request, never mutated."""
    parts_and_labor: float
    paint: float
    surcharges: float
    total: float
    adjusted_total: float
    estimate_range: PriceRange
    midpoint: int
    confidence: float
    range_pct: float = 0.0
    line_items: List[CostLineItem] = field(default_factory=list)

    def formatted_range(self) -> str:
        return f"${self.estimate_range.low} - ${self.estimate_range.high}"
