"""User-facing recommendation text for an (area, status) pair."""

from dataclasses import dataclass
from typing import Dict, Optional

from .area import ServiceArea
from .status import ServiceStatus


@dataclass(frozen=True)
class Recommendation:
    """What to tell the owner about one maintenance area."""

    area: ServiceArea
    status: ServiceStatus
    title: str
    description: str
    next_action_hint: str
    deferred_check_hint: str


@dataclass(frozen=True)
class RecommendationTemplate:
    """Phrasing for one area: a description per status plus two hints."""

    descriptions: Dict[ServiceStatus, str]
    next_action_hint: str
    deferred_check_hint: str
    title: Optional[str] = None  # None = area display name


DEFAULT_TEMPLATE = RecommendationTemplate(
    descriptions={
        ServiceStatus.UNKNOWN: (
            "No service data, so the condition can't be assessed. "
            "Check it or have it replaced."
        ),
        ServiceStatus.OK: "Looks fine for now.",
        ServiceStatus.APPROACHING: "Service is coming up, worth planning ahead.",
        ServiceStatus.URGENT: "This looks urgent, don't put it off for long.",
    },
    next_action_hint="Fill in the service history if you have the details.",
    deferred_check_hint="If you're not sure, have it checked at the next visit.",
)

TEMPLATES: Dict[ServiceArea, RecommendationTemplate] = {
    ServiceArea.ENGINE_OIL: RecommendationTemplate(
        descriptions={
            ServiceStatus.UNKNOWN: (
                "No record of an oil change. Check it, or change the oil "
                "if you're not sure when it was last done."
            ),
            ServiceStatus.OK: "The oil appears to be within a safe interval.",
            ServiceStatus.APPROACHING: "An oil change is coming up, worth booking a service.",
            ServiceStatus.URGENT: (
                "An oil change is urgent. Delaying it can speed up engine wear."
            ),
        },
        next_action_hint="Enter the odometer reading and/or date of the last oil change if you know them.",
        deferred_check_hint=(
            "If you don't remember, replace oil and filter at the next service "
            "and log it in the history."
        ),
    ),
    ServiceArea.BRAKE_FLUID: RecommendationTemplate(
        descriptions={
            ServiceStatus.UNKNOWN: (
                "No record of a brake fluid change. Have it checked, or replace "
                "it if you're not sure."
            ),
            ServiceStatus.OK: "The brake fluid is probably still within spec.",
            ServiceStatus.APPROACHING: "Brake fluid replacement is coming up.",
            ServiceStatus.URGENT: (
                "Brake fluid replacement is urgent. It affects braking performance."
            ),
        },
        next_action_hint="Enter the date of the last brake fluid change if you remember it.",
        deferred_check_hint="Ask for the water content of the fluid to be measured with a tester.",
    ),
    ServiceArea.BRAKES: RecommendationTemplate(
        descriptions={
            ServiceStatus.UNKNOWN: (
                "Pads and discs wear with use rather than on a schedule. "
                "Watch for squealing, pulsing or a longer stopping distance."
            ),
            ServiceStatus.OK: "No signs that the brakes need attention.",
            ServiceStatus.APPROACHING: "Brake wear is getting close to the limit.",
            ServiceStatus.URGENT: "Brakes need attention now.",
        },
        next_action_hint="Have pad thickness and disc condition checked.",
        deferred_check_hint="Inspect the brakes seasonally or every 10-15k km.",
    ),
    ServiceArea.TIMING: RecommendationTemplate(
        descriptions={
            ServiceStatus.UNKNOWN: (
                "The timing interval depends on the engine (belt or chain). "
                "Check the manufacturer's schedule and listen for rattling on cold start."
            ),
            ServiceStatus.OK: "The timing drive appears to be within its interval.",
            ServiceStatus.APPROACHING: "Timing belt replacement is coming up.",
            ServiceStatus.URGENT: (
                "Timing replacement is overdue. A failure can destroy the engine."
            ),
        },
        next_action_hint="Log the last timing belt/chain service if it was done.",
        deferred_check_hint="Ask the mechanic to check tensioner, guides and the water pump.",
    ),
}


def build(area: ServiceArea, status: ServiceStatus) -> Recommendation:
    """Build the recommendation for an area in a given status."""
    template = TEMPLATES.get(area, DEFAULT_TEMPLATE)
    return Recommendation(
        area=area,
        status=status,
        title=template.title or area.display_name,
        description=template.descriptions[status],
        next_action_hint=template.next_action_hint,
        deferred_check_hint=template.deferred_check_hint,
    )
