"""
AI advisory providers.

- AdvisoryProvider: interface with the single async get_advice operation
- GeminiAdvisoryProvider: network-backed provider
- StaticAdvisoryProvider: offline provider with rule-of-thumb text
- CachedAdvisoryProvider: cache-aside decorator around any provider
- AdvisoryService: caller-facing query
"""

from .errors import AdvisoryError, PayloadError, ProviderUnavailableError, RateLimitedError
from .models import AdvisoryResult, AdvisorySource, VehicleContext, from_payload, to_payload
from .provider import AdvisoryProvider
from .static import StaticAdvisoryProvider
from .gemini import GeminiAdvisoryProvider
from .store import AdvisoryRecord, AdvisoryStore, SqlAdvisoryStore
from .cache import CACHE_TTL, THROTTLED_RESULT, CachedAdvisoryProvider
from .service import AdvisoryService

__all__ = [
    "AdvisoryError",
    "PayloadError",
    "ProviderUnavailableError",
    "RateLimitedError",
    "AdvisoryResult",
    "AdvisorySource",
    "VehicleContext",
    "from_payload",
    "to_payload",
    "AdvisoryProvider",
    "StaticAdvisoryProvider",
    "GeminiAdvisoryProvider",
    "AdvisoryRecord",
    "AdvisoryStore",
    "SqlAdvisoryStore",
    "CACHE_TTL",
    "THROTTLED_RESULT",
    "CachedAdvisoryProvider",
    "AdvisoryService",
]
