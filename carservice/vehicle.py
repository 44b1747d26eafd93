"""Vehicle class - the main aggregate for vehicle data and calculations."""

from datetime import date
from typing import Iterable, List, Optional

from .analysis import VehicleAnalysis
from .area import ServiceArea
from .calculations import LastServiceObservation, evaluate_observation
from .car import Car
from .catalog import DEFAULT_INTERVALS
from .interval import ServiceInterval
from .recommendation import build
from .service_record import ServiceRecord


class Vehicle:
    """Complete vehicle record with car info and maintenance history."""

    def __init__(
        self,
        car: Car,
        records: Optional[List[ServiceRecord]] = None,
        state_as_of_date: Optional[str] = None,
        state_current_km: Optional[float] = None,
        vehicle_id: Optional[int] = None,
    ):
        self.car = car
        self.records = records or []
        self.vehicle_id = vehicle_id
        self._state_as_of_date = state_as_of_date
        self._state_current_km = state_current_km

    @property
    def current_km(self) -> float:
        """Current odometer, auto-computed from records if not explicitly set."""
        if self._state_current_km is not None:
            return self._state_current_km
        km_from_records = [r.km for r in self.records if r.km is not None]
        if km_from_records:
            return max(km_from_records)
        return 0

    @property
    def as_of_date(self) -> str:
        """Date of current state, defaults to today."""
        if self._state_as_of_date:
            return self._state_as_of_date
        return date.today().isoformat()

    def get_records_for_area(self, area: ServiceArea) -> List[ServiceRecord]:
        """Get all records for a specific area."""
        return [r for r in self.records if r.area is area]

    def get_last_service(self, area: ServiceArea) -> Optional[ServiceRecord]:
        """Get the most recent record for an area; undated records sort oldest."""
        records = self.get_records_for_area(area)
        if not records:
            return None
        return max(records, key=lambda r: r.date or "")

    def get_observation(self, area: ServiceArea) -> LastServiceObservation:
        """Last service km/date for an area, empty when there is no history."""
        last = self.get_last_service(area)
        if last is None:
            return LastServiceObservation()
        return LastServiceObservation(km=last.km, serviced_on=last.serviced_on)

    def get_records_sorted(self, sort_by: str = "date", reverse: bool = True) -> List[ServiceRecord]:
        """
        Get records sorted by specified field.

        Args:
            sort_by: "date", "km", or "area"
            reverse: If True, newest/highest first (default)
        """
        if sort_by == "date":
            return sorted(self.records, key=lambda r: r.date or "", reverse=reverse)
        elif sort_by == "km":
            return sorted(self.records, key=lambda r: r.km or 0, reverse=reverse)
        elif sort_by == "area":
            return sorted(
                self.records, key=lambda r: (r.area.slug, r.date or ""), reverse=reverse
            )
        return self.records

    def analyze(
        self,
        catalog: Iterable[ServiceInterval] = DEFAULT_INTERVALS,
        now: Optional[date] = None,
    ) -> VehicleAnalysis:
        """
        Evaluate every catalog area and build its recommendation.

        Uses the latest record per area as the last service and the
        vehicle's as-of date as "now" unless one is given.
        """
        now = now or date.fromisoformat(self.as_of_date)
        current_km = self.current_km
        items = []
        for interval in catalog:
            status = evaluate_observation(
                current_km, self.get_observation(interval.area), interval, now
            )
            items.append(build(interval.area, status))
        return VehicleAnalysis(title=self.car.name, current_km=current_km, items=items)
