"""Maintenance areas and fuel types."""

from enum import Enum


def _normalize(value: str) -> str:
    """Reduce 'EngineOil', 'engine-oil' and 'engine_oil' to 'ENGINEOIL'."""
    return "".join(ch for ch in value if ch.isalnum()).upper()


class _Named(Enum):
    """Enum with a display name and lenient parsing."""

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def slug(self) -> str:
        """Identifier used in YAML files and on the command line."""
        return self.name.lower()

    @classmethod
    def parse(cls, value):
        """Parse a member from its name in any common spelling."""
        if isinstance(value, cls):
            return value
        wanted = _normalize(str(value))
        for member in cls:
            if _normalize(member.name) == wanted:
                return member
        allowed = ", ".join(m.slug for m in cls)
        raise ValueError(f"Unknown {cls.__name__} '{value}' (allowed: {allowed})")


class ServiceArea(_Named):
    """A maintenance category with its own interval rules and advisory text."""

    ENGINE_OIL = "Engine oil"
    TIMING = "Timing belt/chain"
    BRAKES = "Brakes"
    AIR_FILTER = "Air filter"
    CABIN_FILTER = "Cabin filter"
    BRAKE_FLUID = "Brake fluid"
    COOLANT = "Coolant"
    BATTERY = "Battery"
    INSPECTION = "General inspection"


class FuelType(_Named):
    """Vehicle fuel/powertrain type."""

    PETROL = "Petrol"
    DIESEL = "Diesel"
    HYBRID = "Hybrid"
    ELECTRIC = "Electric"
    LPG = "LPG"
