"""ServiceInterval value class for maintenance interval definitions."""

from dataclasses import dataclass
from typing import Optional

from .area import ServiceArea


@dataclass(frozen=True)
class ServiceInterval:
    """How often an area should be serviced, by distance and/or time."""

    area: ServiceArea
    every_km: Optional[int] = None
    approaching_km: Optional[int] = None
    every_months: Optional[int] = None
    approaching_months: Optional[int] = None

    @property
    def has_fixed_interval(self) -> bool:
        """False for wear-based areas with neither a distance nor a time period."""
        return self.every_km is not None or self.every_months is not None

    def describe(self) -> str:
        """Short text such as '15,000 km / 12 mo'."""
        parts = []
        if self.every_km is not None:
            parts.append(f"{self.every_km:,} km")
        if self.every_months is not None:
            parts.append(f"{self.every_months} mo")
        return " / ".join(parts) if parts else "-"
