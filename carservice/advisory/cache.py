"""Cache-aside advisory provider with stale fallback on throttling."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from ..area import ServiceArea
from .errors import PayloadError, RateLimitedError
from .models import AdvisoryResult, VehicleContext, from_payload, to_payload
from .provider import AdvisoryProvider
from .store import AdvisoryRecord, AdvisoryStore

logger = logging.getLogger(__name__)

CACHE_TTL = timedelta(days=7)

THROTTLED_RESULT = AdvisoryResult(
    summary="AI suggestion",
    key_intervals=["The AI request limit has been temporarily exceeded (HTTP 429)."],
    sources=[],
    safety_note="Try again later or rely on the rules-based evaluation.",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _decode(record: AdvisoryRecord) -> Optional[AdvisoryResult]:
    try:
        return from_payload(record.payload)
    except PayloadError:
        logger.warning(
            "Corrupt cached advisory vehicle_id=%s area=%s", record.vehicle_id, record.area.slug
        )
        return None


class CachedAdvisoryProvider(AdvisoryProvider):
    """
    Wrap another provider with a persisted per-(vehicle, area) cache.

    Fresh records are served without calling the inner provider. On a miss
    or expiry the inner provider is called and its answer stored for
    CACHE_TTL. When the inner provider is rate limited the previous record
    is served even if expired, or THROTTLED_RESULT when there is none. Other
    provider errors propagate.

    Concurrent first loads of the same key may each call the inner provider;
    the last write wins.
    """

    def __init__(
        self,
        store: AdvisoryStore,
        inner: AdvisoryProvider,
        clock: Callable[[], datetime] = _utcnow,
        ttl: timedelta = CACHE_TTL,
    ):
        self._store = store
        self._inner = inner
        self._clock = clock
        self._ttl = ttl

    async def get_advice(self, vehicle: VehicleContext, area: ServiceArea) -> AdvisoryResult:
        now = self._clock()
        record = self._store.find(vehicle.vehicle_id, area)

        if record is not None and now < record.expires_at:
            cached = _decode(record)
            if cached is not None:
                logger.info("Advisory cache HIT vehicle_id=%s area=%s", vehicle.vehicle_id, area.slug)
                return cached

        logger.info("Advisory cache MISS vehicle_id=%s area=%s", vehicle.vehicle_id, area.slug)
        try:
            fresh = await self._inner.get_advice(vehicle, area)
        except RateLimitedError:
            logger.warning(
                "Advisory provider rate limited vehicle_id=%s area=%s", vehicle.vehicle_id, area.slug
            )
            if record is not None:
                stale = _decode(record)
                if stale is not None:
                    return stale
            return THROTTLED_RESULT

        self._store.upsert(vehicle.vehicle_id, area, to_payload(fresh), now, now + self._ttl)
        return fresh
