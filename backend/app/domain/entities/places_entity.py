from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


STATUS_OK = "OK"
# Not a Google status: set locally when the call itself raised
STATUS_REQUEST_FAILED = "REQUEST_FAILED"


@dataclass
class NearbySearchResponse:
    """Raw nearby-search answer: provider status plus the venue dicts as returned."""
    status: str
    results: List[Dict[str, Any]] = field(default_factory=list)
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK


@dataclass
class TextSearchResponse:
    status: str
    results: List[Dict[str, Any]] = field(default_factory=list)
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK


@dataclass
class PlaceDetails:
    phone: Optional[str] = None
    website: Optional[str] = None
    hours: Optional[Dict[str, Any]] = None
