"""Car class for vehicle identification."""

from typing import Optional

from .area import FuelType


class Car:
    """Vehicle identification: what the advisory prompts are built from."""

    def __init__(
        self,
        brand: str,
        model: str,
        year: int,
        fuel_type: FuelType,
        vin: Optional[str] = None,
    ):
        self.brand = brand
        self.model = model
        self.year = year
        self.fuel_type = fuel_type
        self.vin = vin

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        return f"{self.brand} {self.model} ({self.year})"
