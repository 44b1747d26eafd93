"""Advisory provider backed by Google Gemini (google-genai SDK)."""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx
from google import genai
from google.genai import errors, types

from ..area import ServiceArea
from .errors import ProviderUnavailableError, RateLimitedError
from .models import AdvisoryResult, VehicleContext
from .provider import AdvisoryProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT_SECONDS = 30.0

DEFAULT_TITLE = "AI suggestion"
DEFAULT_DISCLAIMER = "Indicative information only."
DURING_PREFIX = "During the service"

AREA_PROMPTS: Dict[ServiceArea, Tuple[str, str]] = {
    ServiceArea.ENGINE_OIL: (
        "Engine oil",
        "Give typical engine oil and oil filter change intervals: a km range AND time (months/years). "
        "Add 1 point on factors that shorten the interval (city driving, short trips, DPF). "
        "Mention what to look at during the change (leaks, drain plug, filter, oil level and colour, "
        "crankcase ventilation if relevant). Do not write about tyres or general inspections.",
    ),
    ServiceArea.BRAKES: (
        "Brakes",
        "Give typical ranges for front pads, rear pads, front discs and rear discs (km or wear ranges). "
        "Add 1 point on symptoms of brake wear and 1 point on factors that speed up wear "
        "(city driving, driving style, vehicle weight). Mention what to look at during replacement "
        "(caliper guides, boots, wear sensors, disc run-out, fluid leaks). "
        "Do not write about engine oil or general inspections.",
    ),
    ServiceArea.BRAKE_FLUID: (
        "Brake fluid",
        "Give the typical brake fluid replacement interval (time, e.g. every 2 years) and briefly why. "
        "Mention what to look at during replacement (bleeding, hoses, leaks, fluid colour, "
        "ABS/ESP procedure if required). Do not write about pads, discs or engine oil.",
    ),
    ServiceArea.AIR_FILTER: (
        "Air filter",
        "Give the typical air filter replacement interval (km and/or time) and when to shorten it "
        "(dust, city driving). Mention what to look at during replacement (housing seal, dirt in the "
        "intake, housing closed properly, cracks). Do not write about oil or general inspections.",
    ),
    ServiceArea.CABIN_FILTER: (
        "Cabin filter",
        "Give the typical cabin filter replacement interval (km and/or time) and signs of wear. "
        "Mention what to look at during replacement (fitting direction, scuttle drains, smell or "
        "moisture, fogging). Do not write about oil or general inspections.",
    ),
    ServiceArea.COOLANT: (
        "Coolant",
        "Give the typical coolant replacement interval (years) and when to replace it earlier "
        "(repairs, unknown fluid). Mention what to look at during replacement (system tightness, "
        "hoses and clamps, reservoir cap, bleeding, fluid type). "
        "Do not write about oil or general inspections.",
    ),
    ServiceArea.BATTERY: (
        "Battery",
        "Give the typical battery lifespan (years), 2-3 symptoms of wear and factors that shorten it. "
        "Mention what to look at during replacement (coding/registration where required, terminals "
        "and ground, alternator charging, memory saver). Do not write about oil or general inspections.",
    ),
    ServiceArea.TIMING: (
        "Timing",
        "Give general typical intervals: belt (km + years) and chain (usually no fixed interval, "
        "list symptoms). Mention what to look at during replacement (water pump, idlers and seals "
        "with a belt; tensioner and guides with a chain; leaks around the covers). "
        "Do not write about engine oil or general inspections.",
    ),
    ServiceArea.INSPECTION: (
        "General inspection",
        "Give the typical general inspection interval (time/km) and example items to check (max 4). "
        "Mention what to look at during the inspection (leaks, play, boots, corrosion). "
        "Do not produce a pre-drive checklist.",
    ),
}


def normalize_model(model: Optional[str]) -> str:
    """Strip whitespace and an optional 'models/' prefix from a model name."""
    model = (model or "").strip()
    if model.lower().startswith("models/"):
        model = model[len("models/"):]
    return model or DEFAULT_MODEL


def build_prompt(vehicle: VehicleContext, area: ServiceArea) -> str:
    title, instructions = AREA_PROMPTS.get(
        area,
        (area.display_name, "Give typical intervals and short tips for this area only."),
    )
    return (
        "Return ONLY valid JSON in the format:\n"
        '{"title":"...","intervals":["..."],"notes":["..."],'
        '"during":"During the service ...","disclaimer":"..."}\n'
        "No markdown, no additional text.\n"
        f"Car: {vehicle.brand} {vehicle.model} ({vehicle.year}), "
        f"fuel: {vehicle.fuel_type.display_name}.\n"
        f"Topic: {title}.\n"
        "Answer requirements:\n"
        f"- {instructions}\n"
        "- intervals: 2-3 points only about intervals (km + time).\n"
        "- notes: 2-3 points (symptoms, factors that shorten the interval or remarks for the topic).\n"
        f'- during: exactly 1 sentence starting with "{DURING_PREFIX}" naming 2-4 things to check.\n'
        "- Every item in intervals and notes must be PLAIN TEXT, without bullets, '•', '-', '*' "
        "or numbering.\n"
        "- Do not add general advice unrelated to the topic.\n"
        "- disclaimer: 1 sentence (informative, not alarming).\n"
    )


def strip_markdown(text: str) -> str:
    return (text or "").replace("**", "").replace("__", "").strip()


def _strip_fences(text: str) -> str:
    text = text.strip().strip("`").strip()
    if text[:4].lower() == "json":
        text = text[4:].strip()
    return text


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    items = (strip_markdown(v) for v in value if isinstance(v, str))
    return [i for i in items if i]


def _string(value: Any) -> str:
    return strip_markdown(value) if isinstance(value, str) else ""


def _bullet(text: str) -> str:
    return text if text.startswith("•") else f"• {text}"


def parse_answer(text: Optional[str]) -> Optional[AdvisoryResult]:
    """
    Build an AdvisoryResult from the model's JSON answer.

    Returns None when the text is empty or isn't a JSON object.
    """
    if not isinstance(text, str) or not text.strip():
        return None
    try:
        answer = json.loads(_strip_fences(text))
    except ValueError:
        return None
    if not isinstance(answer, dict):
        return None

    bullets = [_bullet(i) for i in _string_list(answer.get("intervals"))]
    bullets += [_bullet(n) for n in _string_list(answer.get("notes"))]
    during = _string(answer.get("during"))
    if during:
        if not during.lower().startswith(DURING_PREFIX.lower()):
            during = f"{DURING_PREFIX}: {during}"
        bullets.append(during)

    return AdvisoryResult(
        summary=_string(answer.get("title")) or DEFAULT_TITLE,
        key_intervals=bullets,
        sources=[],
        safety_note=_string(answer.get("disclaimer")) or DEFAULT_DISCLAIMER,
    )


def degraded_result(reason: str, safety_note: str) -> AdvisoryResult:
    """
    Result shown when Gemini answered but gave nothing usable.

    The summary stays the generic title and the reason is the single key
    interval line, so it is rendered where the intervals normally appear.
    """
    return AdvisoryResult(
        summary=DEFAULT_TITLE,
        key_intervals=[reason],
        sources=[],
        safety_note=safety_note,
    )


def _retry_after(exc: errors.APIError) -> Optional[str]:
    headers = getattr(getattr(exc, "response", None), "headers", None)
    return headers.get("Retry-After") if headers is not None else None


def is_transport_error(exc: BaseException) -> bool:
    """
    True for connection and timeout failures from the SDK's HTTP transport.

    The SDK talks through httpx, or through aiohttp when its aiohttp extra is
    installed. aiohttp errors are recognised by their ClientError base so the
    package is not imported here.
    """
    if isinstance(exc, (httpx.TransportError, OSError, asyncio.TimeoutError)):
        return True
    return any(
        cls.__name__ == "ClientError" and cls.__module__.startswith("aiohttp")
        for cls in type(exc).__mro__
    )


class GeminiAdvisoryProvider(AdvisoryProvider):
    """
    Ask Gemini for typical service intervals of a vehicle area.

    HTTP 429 raises RateLimitedError and transport failures raise
    ProviderUnavailableError. Other API errors and answers that can't be
    parsed come back as a degraded result.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        client: Optional[genai.Client] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._model = normalize_model(model)
        if client is None:
            client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=int(timeout * 1000)),
            )
        self._client = client

    @property
    def model(self) -> str:
        return self._model

    async def get_advice(self, vehicle: VehicleContext, area: ServiceArea) -> AdvisoryResult:
        prompt = build_prompt(vehicle, area)
        logger.info(
            "Gemini request vehicle_id=%s (%s %s %s, %s) area=%s model=%s",
            vehicle.vehicle_id,
            vehicle.brand,
            vehicle.model,
            vehicle.year,
            vehicle.fuel_type.slug,
            area.slug,
            self._model,
        )
        logger.debug("Gemini prompt:\n%s", prompt)

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=types.GenerateContentConfig(response_mime_type="application/json"),
            )
        except errors.APIError as exc:
            if exc.code == 429:
                raise RateLimitedError(
                    "Gemini rate limit exceeded (HTTP 429)", retry_after=_retry_after(exc)
                ) from exc
            logger.warning(
                "Gemini HTTP %s vehicle_id=%s area=%s: %s",
                exc.code,
                vehicle.vehicle_id,
                area.slug,
                exc.message,
            )
            return degraded_result(
                f"Gemini error: HTTP {exc.code}",
                "Couldn't fetch AI data. Try again or rely on the rules-based evaluation.",
            )
        except Exception as exc:
            if not is_transport_error(exc):
                raise
            raise ProviderUnavailableError(f"Gemini request failed: {exc}") from exc

        parsed = parse_answer(response.text)
        if parsed is None:
            logger.warning(
                "Unparseable Gemini response vehicle_id=%s area=%s", vehicle.vehicle_id, area.slug
            )
            return degraded_result(
                "Couldn't interpret the AI response.",
                "Data is indicative. Confirm it in the owner's manual or with a mechanic.",
            )
        return parsed
