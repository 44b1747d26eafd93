"""VehicleAnalysis dataclass for the rules-based overview of a vehicle."""

from dataclasses import dataclass, field
from typing import List

from .recommendation import Recommendation
from .status import ServiceStatus


@dataclass
class VehicleAnalysis:
    """Recommendations for every catalog area of one vehicle."""

    title: str
    current_km: float
    items: List[Recommendation] = field(default_factory=list)

    @property
    def do_now(self) -> List[Recommendation]:
        return [i for i in self.items if i.status is ServiceStatus.URGENT]

    @property
    def check_soon(self) -> List[Recommendation]:
        return [i for i in self.items if i.status is ServiceStatus.APPROACHING]
