from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DamagedPart(str, Enum):
    FRONT_BUMPER = "front_bumper"
    REAR_BUMPER = "rear_bumper"
    FRONT_DOOR = "front_door"
    REAR_DOOR = "rear_door"
    HOOD = "hood"
    ROOF = "roof"
    FENDER = "fender"
    QUARTER_PANEL = "quarter_panel"
    TRUNK = "trunk"
    WINDSHIELD = "windshield"
    REAR_GLASS = "rear_glass"
    SIDE_GLASS = "side_glass"
    HEADLIGHT = "headlight"
    TAILLIGHT = "taillight"
    WHEEL = "wheel"
    TIRE = "tire"
    FRAME = "frame"


class Severity(str, Enum):
    MINOR = "minor"
    MODERATE = "moderate"
    SEVERE = "severe"
    CATASTROPHIC = "catastrophic"


@dataclass(frozen=True)
class PartDamage:
    """A single damaged part reported by the vision model.

    - part: one of DamagedPart values; unknown strings are allowed and priced with a default
    - severity: one of Severity values; unknown strings are priced as 'moderate'
    """
    part: str
    severity: str = Severity.MODERATE.value


@dataclass(frozen=True)
class DamageAssessment:
    """Structured output of the vision model, input to the cost estimator.

    When damage_detected is False the parts list is ignored, whatever it holds.
    confidence is in [0.0 - 1.0]; None means the model did not report one.
    """
    vehicle_detected: bool = True
    damage_detected: bool = True
    parts: List[PartDamage] = field(default_factory=list)
    airbags_deployed: bool = False
    drivable: bool = True
    confidence: Optional[float] = None
    # Vehicle metadata echoed back to clients; not used for pricing
    make: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    summary: Optional[str] = None

    @property
    def effective_parts(self) -> List[PartDamage]:
        return list(self.parts) if self.damage_detected else []
