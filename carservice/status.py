"""ServiceStatus enum for maintenance urgency levels."""

from enum import Enum


class ServiceStatus(Enum):
    """Maintenance status categories. Higher value = more urgent."""

    UNKNOWN = 0  # Can't calculate (missing data or no fixed interval)
    OK = 1
    APPROACHING = 2
    URGENT = 3

    @property
    def label(self) -> str:
        """Human-readable status name."""
        return self.name.replace("_", " ").title()


def combine(distance: ServiceStatus, time: ServiceStatus) -> ServiceStatus:
    """
    Combine the distance and time axis statuses.

    Unknown on either axis wins, otherwise the more urgent axis does.
    """
    if distance is ServiceStatus.UNKNOWN or time is ServiceStatus.UNKNOWN:
        return ServiceStatus.UNKNOWN
    return max(distance, time, key=lambda s: s.value)
