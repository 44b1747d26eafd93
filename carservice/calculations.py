"""Helper functions for service due calculations."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, TypeVar, Union

from dateutil.relativedelta import relativedelta

from .interval import ServiceInterval
from .status import ServiceStatus, combine

# date or datetime
When = TypeVar("When", bound=date)
Number = Union[int, float]


@dataclass(frozen=True)
class LastServiceObservation:
    """Last known service of one area of one vehicle."""

    km: Optional[Number] = None
    serviced_on: Optional[date] = None


def calc_due_km(last_km: Optional[Number], every_km: Optional[Number]) -> Optional[Number]:
    """Calculate next due odometer reading: last + interval."""
    if every_km is None or last_km is None:
        return None
    return last_km + every_km


def calc_due_date(last_date: Optional[When], every_months: Optional[int]) -> Optional[When]:
    """
    Calculate next due date: last + interval calendar months.

    Month ends clamp the way people expect: 2025-01-31 + 1 month is 2025-02-28.
    """
    if every_months is None or last_date is None:
        return None
    return last_date + relativedelta(months=every_months)


def check_status(current, due, approaching_at) -> ServiceStatus:
    """Determine status by comparing current value to due and approaching thresholds."""
    if current >= due:
        return ServiceStatus.URGENT
    if current >= approaching_at:
        return ServiceStatus.APPROACHING
    return ServiceStatus.OK


def _same_kind(last_date: date, now: date):
    """Reduce both to plain dates unless they are datetimes of the same awareness."""
    if isinstance(last_date, datetime) and isinstance(now, datetime):
        if (last_date.tzinfo is None) == (now.tzinfo is None):
            return last_date, now
    return _as_date(last_date), _as_date(now)


def _as_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def evaluate_km(
    current_km: Number, last_km: Optional[Number], interval: ServiceInterval
) -> ServiceStatus:
    """Distance axis. An interval without a distance period is vacuously OK."""
    if interval.every_km is None:
        return ServiceStatus.OK
    due = calc_due_km(last_km, interval.every_km)
    if due is None:
        return ServiceStatus.UNKNOWN
    lead = max(interval.approaching_km or 0, 0)
    return check_status(current_km, due, due - lead)


def evaluate_time(
    last_date: Optional[When], interval: ServiceInterval, now: When
) -> ServiceStatus:
    """
    Time axis. An interval without a time period is vacuously OK.

    Mixed date and datetime values, or naive and aware datetimes, are compared
    by calendar date.
    """
    if interval.every_months is None:
        return ServiceStatus.OK
    if last_date is not None:
        last_date, now = _same_kind(last_date, now)
    due = calc_due_date(last_date, interval.every_months)
    if due is None:
        return ServiceStatus.UNKNOWN
    lead = max(interval.approaching_months or 0, 0)
    return check_status(now, due, due - relativedelta(months=lead))


def evaluate(
    current_km: Number,
    last_km: Optional[Number],
    last_date: Optional[When],
    interval: ServiceInterval,
    now: When,
) -> ServiceStatus:
    """
    Evaluate whether an area is due for service.

    Logic:
    - No distance and no time period: UNKNOWN (wear-based area)
    - Each axis is URGENT at or past its due point, APPROACHING within
      its lead, otherwise OK; UNKNOWN when the last service value is missing
    - Unknown on either axis makes the result UNKNOWN, otherwise the more
      urgent axis wins (whichever comes first)
    - Dates and datetimes may be mixed; they are then compared by calendar date
    """
    if not interval.has_fixed_interval:
        return ServiceStatus.UNKNOWN
    return combine(
        evaluate_km(current_km, last_km, interval),
        evaluate_time(last_date, interval, now),
    )


def evaluate_observation(
    current_km: Number,
    observation: Optional[LastServiceObservation],
    interval: ServiceInterval,
    now: date,
) -> ServiceStatus:
    """Evaluate using a LastServiceObservation (None means no history at all)."""
    observation = observation or LastServiceObservation()
    return evaluate(current_km, observation.km, observation.serviced_on, interval, now)
