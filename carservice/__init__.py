"""
Vehicle maintenance tracking and service advice.

This package provides:
- ServiceStatus: Urgency levels (UNKNOWN, OK, APPROACHING, URGENT)
- ServiceArea / FuelType: Maintenance areas and powertrains
- ServiceInterval: Per-area maintenance interval definitions
- evaluate / evaluate_observation: Rules-based due evaluation
- build: Recommendation text for an area and status
- Car / ServiceRecord / Vehicle: Vehicle data and service history
- advisory: AI advice providers and the advisory cache
"""

from .status import ServiceStatus, combine
from .area import ServiceArea, FuelType
from .interval import ServiceInterval
from .catalog import DEFAULT_INTERVALS, build_catalog, get_interval
from .calculations import (
    LastServiceObservation,
    calc_due_km,
    calc_due_date,
    check_status,
    evaluate,
    evaluate_observation,
)
from .recommendation import Recommendation, build
from .car import Car
from .service_record import ServiceRecord
from .analysis import VehicleAnalysis
from .vehicle import Vehicle
from .loader import load_vehicle, save_service_record, save_current_km

__all__ = [
    "ServiceStatus",
    "combine",
    "ServiceArea",
    "FuelType",
    "ServiceInterval",
    "DEFAULT_INTERVALS",
    "build_catalog",
    "get_interval",
    "LastServiceObservation",
    "calc_due_km",
    "calc_due_date",
    "check_status",
    "evaluate",
    "evaluate_observation",
    "Recommendation",
    "build",
    "Car",
    "ServiceRecord",
    "VehicleAnalysis",
    "Vehicle",
    "load_vehicle",
    "save_service_record",
    "save_current_km",
]
