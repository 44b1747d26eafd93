"""ServiceRecord class for maintenance records."""
from datetime import date
from typing import Optional

from .area import ServiceArea


class ServiceRecord:
    """A record of maintenance performed on one area."""

    def __init__(
            self,
            area: ServiceArea,
            date: Optional[str] = None,
            km: Optional[float] = None,
            notes: Optional[str] = None,
            cost: Optional[float] = None,
    ):
        self.area = area
        self.date = date
        self.km = km
        self.notes = notes
        self.cost = cost

    @property
    def serviced_on(self) -> Optional[date]:
        """Service date parsed from its ISO string."""
        return date.fromisoformat(self.date) if self.date else None
