"""YAML loading and saving utilities for vehicle data."""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .area import FuelType, ServiceArea
from .car import Car
from .service_record import ServiceRecord
from .vehicle import Vehicle


def _parse_object(dct: Dict[str, Any]) -> Union[Car, ServiceRecord, Vehicle, dict]:
    """Parse dictionary into appropriate object type."""
    # Car object (inside 'vehicle' key)
    if "brand" in dct and "model" in dct:
        return Car(
            dct["brand"],
            dct["model"],
            dct["year"],
            FuelType.parse(dct["fuelType"]),
            dct.get("vin"),
        )
    # Service record
    elif "area" in dct:
        return ServiceRecord(
            ServiceArea.parse(dct["area"]),
            dct.get("date"),
            dct.get("km"),
            dct.get("notes"),
            dct.get("cost"),
        )
    # Top-level vehicle object
    elif "vehicle" in dct:
        state = dct.get("state") or {}
        return Vehicle(
            dct["vehicle"],
            dct.get("records"),
            state.get("asOfDate"),
            state.get("currentKm"),
            dct.get("id"),
        )
    else:
        # Return dict as-is for unknown structures (like 'state')
        return dct


def _load_raw(filename: Union[str, Path]) -> Dict[str, Any]:
    with open(filename, "r") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader) or {}


def _dump(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def load_vehicle(filename: Union[str, Path]) -> Vehicle:
    """Load a vehicle from a YAML file."""
    # Unquoted YAML dates load as date objects; default=str keeps them ISO strings
    json_data = json.dumps(_load_raw(filename), indent=4, default=str)
    return json.loads(json_data, object_hook=_parse_object)


def record_to_dict(record: ServiceRecord) -> Dict[str, Any]:
    """Serialize a ServiceRecord to the YAML dict format, omitting empty fields."""
    d: Dict[str, Any] = {"area": record.area.slug}
    if record.date is not None:
        d["date"] = record.date
    if record.km is not None:
        d["km"] = record.km
    if record.notes is not None:
        d["notes"] = record.notes
    if record.cost is not None:
        d["cost"] = record.cost
    return d


def save_service_record(filename: Union[str, Path], record: ServiceRecord) -> None:
    """
    Append a service record to a vehicle YAML file.

    Loads the raw YAML, appends the record to the records list,
    and writes back to the file.
    """
    data = _load_raw(filename)
    if data.get("records") is None:
        data["records"] = []
    data["records"].append(record_to_dict(record))
    _dump(filename, data)


def save_current_km(filename: Union[str, Path], km: float, as_of_date: Optional[str] = None) -> None:
    """Update state.currentKm (and optionally state.asOfDate) in a vehicle YAML file."""
    data = _load_raw(filename)
    if data.get("state") is None:
        data["state"] = {}
    data["state"]["currentKm"] = km
    if as_of_date is not None:
        data["state"]["asOfDate"] = as_of_date
    _dump(filename, data)
