"""Caller-facing advisory query."""

import asyncio
from typing import Optional, Union

from ..area import FuelType, ServiceArea
from .models import AdvisoryResult, VehicleContext
from .provider import AdvisoryProvider


class AdvisoryService:
    """
    Look up advisory text for a vehicle area through a provider composition.

    The blocking get_advice runs every request on one event loop owned by the
    service, so provider clients holding loop-bound connection pools keep
    working across calls. Call close() (or use the service as a context
    manager) when done.
    """

    def __init__(self, provider: AdvisoryProvider):
        self.provider = provider
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def __enter__(self) -> "AdvisoryService":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    async def advise(
        self,
        vehicle_id: int,
        brand: str,
        model: str,
        year: int,
        fuel_type: Union[FuelType, str],
        area: Union[ServiceArea, str],
    ) -> AdvisoryResult:
        """Awaitable variant; cancel the awaiting task to abandon the request."""
        vehicle = VehicleContext(vehicle_id, brand, model, year, FuelType.parse(fuel_type))
        return await self.provider.get_advice(vehicle, ServiceArea.parse(area))

    def get_advice(
        self,
        vehicle_id: int,
        brand: str,
        model: str,
        year: int,
        fuel_type: Union[FuelType, str],
        area: Union[ServiceArea, str],
    ) -> AdvisoryResult:
        """
        Blocking variant for synchronous callers; must not be called from a running event loop.

        Never raises for throttling or unparseable answers; raises
        ProviderUnavailableError when the provider can't be reached.
        """
        if self._loop is None or self._loop.is_closed():
            self._loop = asyncio.new_event_loop()
        return self._loop.run_until_complete(
            self.advise(vehicle_id, brand, model, year, fuel_type, area)
        )

    def close(self):
        """Shut down the event loop used by get_advice."""
        loop, self._loop = self._loop, None
        if loop is None or loop.is_closed():
            return
        try:
            loop.run_until_complete(loop.shutdown_asyncgens())
        finally:
            loop.close()
