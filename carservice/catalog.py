"""Default per-area maintenance intervals."""

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from .area import ServiceArea
from .interval import ServiceInterval

DEFAULT_INTERVALS: List[ServiceInterval] = [
    ServiceInterval(ServiceArea.ENGINE_OIL, 15000, 2000, 12, 2),
    ServiceInterval(ServiceArea.AIR_FILTER, 30000, 3000, 24, 3),
    ServiceInterval(ServiceArea.CABIN_FILTER, 15000, 2000, 12, 2),
    ServiceInterval(ServiceArea.BRAKE_FLUID, None, None, 24, 3),
    ServiceInterval(ServiceArea.COOLANT, None, None, 60, 6),
    ServiceInterval(ServiceArea.BATTERY, None, None, 48, 6),
    # Wear-based: no fixed cadence, always evaluated as UNKNOWN
    ServiceInterval(ServiceArea.BRAKES),
    ServiceInterval(ServiceArea.TIMING),
    ServiceInterval(ServiceArea.INSPECTION, 15000, 2000, 12, 2),
]

# YAML key -> ServiceInterval field
_OVERRIDE_FIELDS = {
    "everyKm": "every_km",
    "approachingKm": "approaching_km",
    "everyMonths": "every_months",
    "approachingMonths": "approaching_months",
}


def get_interval(
    area: ServiceArea, catalog: Iterable[ServiceInterval] = DEFAULT_INTERVALS
) -> Optional[ServiceInterval]:
    """Find the interval definition for an area."""
    for interval in catalog:
        if interval.area is area:
            return interval
    return None


def build_catalog(
    overrides: Optional[Dict[str, Dict[str, Any]]] = None,
    base: Iterable[ServiceInterval] = DEFAULT_INTERVALS,
) -> List[ServiceInterval]:
    """
    Apply per-area overrides (camelCase keys, as in the config file) to a catalog.

    A key set to null removes that period, e.g. ``everyKm: null`` turns the
    area into a time-only interval.
    """
    if not overrides:
        return list(base)

    by_area = {ServiceArea.parse(name): values for name, values in overrides.items()}
    catalog = []
    for interval in base:
        values = by_area.get(interval.area)
        if values:
            fields = {_OVERRIDE_FIELDS[k]: v for k, v in values.items()}
            interval = replace(interval, **fields)
        catalog.append(interval)
    return catalog
