from abc import ABC, abstractmethod
from typing import Optional

from app.domain.entities.location_entity import ResolvedLocation


class LocationDirectoryRepository(ABC):
    """Contract for a local, read-only table of well-known places."""

    @abstractmethod
    def lookup(self, text: str) -> Optional[ResolvedLocation]:
        """Return the matching place, or None to let the caller try another source."""
        raise NotImplementedError
