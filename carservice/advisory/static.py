"""Offline advisory provider with fixed, rule-of-thumb interval text."""

from datetime import datetime, timezone
from typing import Callable, Dict, List

from ..area import FuelType, ServiceArea
from .models import AdvisoryResult, AdvisorySource, VehicleContext
from .provider import AdvisoryProvider

OLD_VEHICLE_AGE_YEARS = 12

SOURCES = [
    AdvisorySource("Rules-based data (fallback)", "https://example.com/fallback-rules"),
    AdvisorySource("Workshop practice - indicative values", "https://example.com/service-practice"),
]

DISCLAIMER = (
    "Values are indicative and for information only. "
    "The exact interval depends on driving style, operating conditions and service history. "
    "Check the manufacturer's manual or ask a mechanic."
)

AREA_BULLETS: Dict[ServiceArea, List[str]] = {
    ServiceArea.AIR_FILTER: [
        "Air filter: usually every 20-30k km or every 12-24 months.",
        "Frequent city driving or dusty conditions shorten the interval.",
    ],
    ServiceArea.CABIN_FILTER: [
        "Cabin filter: usually every 10-15k km or once a year.",
        "Signs of wear: fogging windows, weak airflow, odours.",
    ],
    ServiceArea.BRAKE_FLUID: [
        "Brake fluid: most often every 24 months, regardless of mileage.",
        "Absorbed moisture reduces braking performance.",
    ],
    ServiceArea.COOLANT: [
        "Coolant: usually every 4-5 years (depending on specification).",
        "After cooling system repairs consider replacing it earlier.",
    ],
    ServiceArea.BATTERY: [
        "Battery: typical lifespan 4-6 years.",
        "Short trips and low temperatures shorten battery life.",
    ],
    ServiceArea.BRAKES: [
        "Brakes: no fixed km interval, wear depends on driving style.",
        "Check pads and discs every 10-15k km or seasonally.",
        "City driving wears pads faster, infrequent use promotes disc corrosion.",
    ],
    ServiceArea.TIMING: [
        "Timing: interval depends on the type (belt/chain) and the engine.",
        "Belt: usually 90-180k km or 5-10 years. Chain: watch for signs of wear.",
    ],
    ServiceArea.INSPECTION: [
        "General inspection: usually every 12 months or as required by law.",
        "It covers fluids, brakes, suspension, tyres and lighting.",
    ],
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def oil_bullets(fuel_type: FuelType, vehicle_age: int) -> List[str]:
    if fuel_type is FuelType.ELECTRIC:
        return ["Engine oil: not applicable to electric vehicles."]

    bullets = [
        "Engine oil: usually every 10-15k km or every 12 months.",
        "Short trips and city driving call for shorter intervals.",
    ]
    if vehicle_age >= OLD_VEHICLE_AGE_YEARS:
        bullets.append("Older vehicles: check oil level and consumption more often.")
    if fuel_type is FuelType.DIESEL:
        bullets.append("Diesel: frequent city driving can dilute the oil with fuel.")
    return bullets


def build_bullets(area: ServiceArea, fuel_type: FuelType, vehicle_age: int) -> List[str]:
    """Key-interval lines for an area, adjusted for fuel type and vehicle age."""
    if area is ServiceArea.ENGINE_OIL:
        return oil_bullets(fuel_type, vehicle_age)
    return list(AREA_BULLETS.get(area, ["No data for this area."]))


class StaticAdvisoryProvider(AdvisoryProvider):
    """Deterministic advice without any network access."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._clock = clock

    async def get_advice(self, vehicle: VehicleContext, area: ServiceArea) -> AdvisoryResult:
        vehicle_age = max(0, self._clock().year - vehicle.year)
        title = (
            f"Estimated service intervals: {vehicle.brand} {vehicle.model} ({vehicle.year}), "
            f"{vehicle.fuel_type.display_name}, area: {area.display_name}"
        )
        return AdvisoryResult(
            summary=title,
            key_intervals=build_bullets(area, vehicle.fuel_type, vehicle_age),
            sources=list(SOURCES),
            safety_note=DISCLAIMER,
        )
