# Role: Turn sanitized Gemini text into a CanonicalItinerary. Parsing is the only fatal step
# (MalformedPayload). After that, a pure recursive default-fill transform builds a brand-new itinerary:
# every field is coerced when it has a usable shape and replaced by its typed default when it does not.
# Field-level anomalies never raise. Keys must match the contract in travelai/prompts/itinerary_prompt.py.

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Dict, List, Mapping, Optional

import travelai.config as config
from travelai.models.errors import MalformedPayload
from travelai.models.itinerary import (
    UNKNOWN_DESTINATION,
    Activity,
    ActivityType,
    CanonicalItinerary,
    Day,
    EmergencyInfo,
    TimeSlot,
    Weather,
)

logger = logging.getLogger(__name__)

_NUMERIC_RE = re.compile(r"^[+-]?\d+(?:\.\d+)?$")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")

_ACTIVITY_TYPES = {t.value for t in ActivityType}
_TIME_SLOTS = {t.value for t in TimeSlot}

_TOP_LEVEL_KEYS = (
    "destination",
    "duration",
    "estimatedBudget",
    "travelStyle",
    "weatherOverview",
    "essentialTravelTips",
    "emergencyInfo",
    "days",
)


def parse_payload(text: str) -> Dict[str, Any]:
    # 1) strict json.loads (pathologically deep nesting counts as unparseable)
    # 2) a single-object array is unwrapped
    # 3) anything without an object at its root carries no itinerary -> fatal
    try:
        data = json.loads(text)
    except (TypeError, ValueError, RecursionError) as e:
        preview = (text or "")[:120]
        raise MalformedPayload(
            f"Oracle output is not valid JSON ({e}); starts with: {preview!r}", cause=e
        ) from e

    if isinstance(data, list) and len(data) == 1 and isinstance(data[0], dict):
        data = data[0]

    if not isinstance(data, dict):
        raise MalformedPayload(
            f"Oracle output parsed as {type(data).__name__}, expected a JSON object."
        )
    return data


def normalize(text: str, fallback_destination: Optional[str] = None) -> CanonicalItinerary:
    data = parse_payload(text)
    itinerary = normalize_itinerary(data, fallback_destination=fallback_destination)

    logger.info(
        "Normalized itinerary for %s: duration=%d, days=%d",
        itinerary.destination,
        itinerary.duration,
        len(itinerary.days),
    )
    if itinerary.duration and len(itinerary.days) != itinerary.duration:
        # Key line: surfaced, not repaired. Days are never fabricated or dropped.
        logger.warning(
            "Itinerary duration (%d) does not match number of days (%d)",
            itinerary.duration,
            len(itinerary.days),
        )
    return itinerary


def normalize_itinerary(
    data: Mapping[str, Any], fallback_destination: Optional[str] = None
) -> CanonicalItinerary:
    destination = _as_str(_pick(data, "destination")) or (fallback_destination or "").strip()

    result = CanonicalItinerary(
        destination=destination or UNKNOWN_DESTINATION,
        duration=_as_int(_pick(data, "duration"), default=0, minimum=0),
        estimated_budget=_as_str(_pick(data, "estimatedBudget")),
        travel_style=_as_str(_pick(data, "travelStyle")),
        weather_overview=_as_str(_pick(data, "weatherOverview")),
        essential_travel_tips=_as_str_list(_pick(data, "essentialTravelTips")),
        emergency_info=normalize_emergency_info(_pick(data, "emergencyInfo")),
        days=[normalize_day(raw, position) for position, raw in enumerate(_as_list(_pick(data, "days")))],
    )

    if config.DEBUG:
        missing = [key for key in _TOP_LEVEL_KEYS if _pick(data, key) is None]
        if missing:
            logger.debug("Defaulted missing top-level fields: %s", ", ".join(missing))

    return result


def normalize_emergency_info(value: Any) -> EmergencyInfo:
    data = value if isinstance(value, dict) else {}
    return EmergencyInfo(
        contacts=_as_str_list(_pick(data, "contacts")),
        hospitals=_as_str_list(_pick(data, "hospitals")),
        embassies=_as_str_list(_pick(data, "embassies")),
    )


def normalize_day(value: Any, position: int) -> Day:
    # Key line: a day keeps its slot even when it is unusable; dayNumber falls back to its position.
    data = value if isinstance(value, dict) else {}
    return Day(
        day_number=_as_int(_pick(data, "dayNumber"), default=position + 1, minimum=1),
        date=_as_str(_pick(data, "date")),
        weather=normalize_weather(_pick(data, "weather")),
        daily_tips=_as_str_list(_pick(data, "dailyTips")),
        activities=[normalize_activity(raw) for raw in _activity_items(_pick(data, "activities"))],
        day_summary=_as_str(_pick(data, "daySummary")),
    )


def normalize_weather(value: Any) -> Weather:
    data = value if isinstance(value, dict) else {}
    return Weather(
        temp_range=_as_str(_pick(data, "tempRange")),
        condition=_as_str(_pick(data, "condition")),
        tip=_as_str(_pick(data, "tip")),
    )


def normalize_activity(value: Any) -> Activity:
    # A bare string is taken as the activity name.
    if isinstance(value, str):
        return Activity(name=value.strip())
    data = value if isinstance(value, dict) else {}
    return Activity(
        name=_as_str(_pick(data, "name")),
        category=_as_str(_pick(data, "category")),
        type=_as_choice(_pick(data, "type"), _ACTIVITY_TYPES, ActivityType.FLEXIBLE.value),
        time_slot=_as_choice(_pick(data, "timeSlot"), _TIME_SLOTS, ""),
        description=_as_str(_pick(data, "description")),
        duration=_as_str(_pick(data, "duration")),
        location=_as_str(_pick(data, "location")),
        cost=_as_str(_pick(data, "cost")),
        rating=_as_str(_pick(data, "rating")),
        photos=_as_str(_pick(data, "photos")),
    )


# ----------------------------
# Coercion helpers
# ----------------------------
def _pick(data: Mapping[str, Any], key: str) -> Any:
    # camelCase first, then the snake_case spelling of the same key.
    if key in data:
        return data[key]
    snake = _CAMEL_BOUNDARY_RE.sub("_", key).lower()
    return data.get(snake)


def _as_str(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return ""
        return str(int(value)) if value.is_integer() else str(value)
    if isinstance(value, list):
        # A list of scalars where one string is expected, e.g. photos: ["a", "b"].
        parts = [_as_str(item) for item in value if not isinstance(item, (dict, list))]
        return ", ".join(part for part in parts if part)
    return ""


def _as_int(value: Any, *, default: int, minimum: int) -> int:
    number: Optional[float] = None
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value >= minimum else default
    if isinstance(value, float):
        number = value
    elif isinstance(value, str) and _NUMERIC_RE.match(value.strip()):
        number = float(value.strip())

    if number is None or not math.isfinite(number):
        return default
    result = int(number)
    return result if result >= minimum else default


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        return [value]
    return []


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    items = value if isinstance(value, list) else [value]
    out: List[str] = []
    for item in items:
        if isinstance(item, (dict, list)):
            continue
        text = _as_str(item)
        if text:
            out.append(text)
    return out


def _as_choice(value: Any, allowed: set, default: str) -> str:
    if isinstance(value, str):
        cleaned = value.strip().lower()
        if cleaned in allowed:
            return cleaned
    return default


def _activity_items(value: Any) -> List[Any]:
    # A single activity name where a list is expected.
    if isinstance(value, str):
        return [value] if value.strip() else []
    return _as_list(value)
