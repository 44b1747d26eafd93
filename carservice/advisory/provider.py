"""Advisory provider interface."""

from abc import ABC, abstractmethod

from ..area import ServiceArea
from .models import AdvisoryResult, VehicleContext


class AdvisoryProvider(ABC):
    """
    Source of typical-interval advice for one vehicle and area.

    Implementations must be safe to call concurrently for different
    (vehicle, area) pairs. Cancelling the awaiting task abandons the call.
    Throttling is signalled with RateLimitedError; unusable answers come back
    as a degraded AdvisoryResult rather than an exception.
    """

    @abstractmethod
    async def get_advice(self, vehicle: VehicleContext, area: ServiceArea) -> AdvisoryResult:
        raise NotImplementedError
