import math
from typing import Any, Dict, List, Optional

from app.core.utils.logger import get_logger
from app.domain.entities.damage_entity import DamageAssessment, PartDamage, Severity
from app.domain.exceptions import InvalidAssessmentPayloadError

_logger = get_logger("assessment_mapper")

_TRUE_STRINGS = ("1", "true", "yes", "y", "on")
_FALSE_STRINGS = ("0", "false", "no", "n", "off")


def _pick(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        val = value.strip().lower()
        if val in _TRUE_STRINGS:
            return True
        if val in _FALSE_STRINGS:
            return False
    return default


def _as_confidence(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        conf = float(value)
    except (TypeError, ValueError):
        _logger.warning("Ignoring non-numeric confidence: %r", value)
        return None
    if math.isnan(conf):
        return None
    return min(max(conf, 0.0), 1.0)


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parts(raw_parts: Any) -> List[PartDamage]:
    if not isinstance(raw_parts, list):
        return []
    parts: List[PartDamage] = []
    for item in raw_parts:
        if not isinstance(item, dict):
            continue
        part = _as_text(_pick(item, "part", "name"))
        if part is None:
            continue
        severity = _as_text(item.get("severity")) or Severity.MODERATE.value
        parts.append(PartDamage(part=part, severity=severity))
    skipped = len(raw_parts) - len(parts)
    if skipped:
        _logger.warning("Skipped %d malformed part entries in assessment payload", skipped)
    return parts


def assessment_from_payload(data: Any) -> DamageAssessment:
    """Map the vision model's JSON (camelCase or snake_case) to a DamageAssessment.

    Only a payload that is not an object is rejected; every field-level problem
    degrades to a documented default so the estimator can still price it.
    """
    if not isinstance(data, dict):
        raise InvalidAssessmentPayloadError(f"Assessment payload must be an object, got {type(data).__name__}")

    parts = _parts(_pick(data, "parts", "damagedParts", "damaged_parts"))
    return DamageAssessment(
        vehicle_detected=_as_bool(_pick(data, "vehicleDetected", "vehicle_detected"), True),
        damage_detected=_as_bool(_pick(data, "damageDetected", "damage_detected"), bool(parts)),
        parts=parts,
        airbags_deployed=_as_bool(_pick(data, "airbagsDeployed", "airbags_deployed"), False),
        drivable=_as_bool(data.get("drivable"), True),
        confidence=_as_confidence(data.get("confidence")),
        make=_as_text(data.get("make")),
        model=_as_text(data.get("model")),
        color=_as_text(data.get("color")),
        summary=_as_text(_pick(data, "summary", "damage")),
    )
