"""Advisory data classes and their JSON payload format."""

import json
from dataclasses import dataclass, field
from typing import Any, List

from ..area import FuelType
from .errors import PayloadError


@dataclass(frozen=True)
class VehicleContext:
    """What a provider needs to know about the vehicle it advises on."""

    vehicle_id: int
    brand: str
    model: str
    year: int
    fuel_type: FuelType


@dataclass(frozen=True)
class AdvisorySource:
    title: str
    url: str


@dataclass(frozen=True)
class AdvisoryResult:
    """Advisory text returned to the caller and stored in the cache."""

    summary: str = ""
    key_intervals: List[str] = field(default_factory=list)
    sources: List[AdvisorySource] = field(default_factory=list)
    safety_note: str = ""


def to_payload(result: AdvisoryResult) -> str:
    """Serialize a result to the JSON stored in the cache."""
    return json.dumps(
        {
            "summary": result.summary,
            "keyIntervals": list(result.key_intervals),
            "sources": [{"title": s.title, "url": s.url} for s in result.sources],
            "safetyNote": result.safety_note,
        },
        ensure_ascii=False,
    )


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def from_payload(payload: str) -> AdvisoryResult:
    """
    Deserialize a cached payload.

    Missing or unknown fields default to empty so payloads written by other
    versions stay readable. Raises PayloadError when the text isn't a JSON
    object at all.
    """
    try:
        data = json.loads(payload)
    except (TypeError, ValueError, RecursionError) as exc:
        raise PayloadError(f"Invalid advisory payload: {exc}") from exc
    if not isinstance(data, dict):
        raise PayloadError(f"Advisory payload is not an object: {type(data).__name__}")

    intervals = data.get("keyIntervals") or []
    sources = data.get("sources") or []
    return AdvisoryResult(
        summary=_text(data.get("summary")),
        key_intervals=[i for i in intervals if isinstance(i, str)] if isinstance(intervals, list) else [],
        sources=[
            AdvisorySource(_text(s.get("title")), _text(s.get("url")))
            for s in (sources if isinstance(sources, list) else [])
            if isinstance(s, dict)
        ],
        safety_note=_text(data.get("safetyNote")),
    )
