# Role: Canonical itinerary shape returned to every caller. Every field is always present
# (strings default to "", sequences to []), models are frozen once built, and JSON uses camelCase keys.

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

UNKNOWN_DESTINATION = "Unknown"


class ActivityType(str, Enum):
    INDOOR = "indoor"
    OUTDOOR = "outdoor"
    FLEXIBLE = "flexible"


class TimeSlot(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class _Canonical(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Weather(_Canonical):
    temp_range: str = ""
    condition: str = ""
    tip: str = ""


class Activity(_Canonical):
    name: str = ""
    category: str = ""
    type: ActivityType = ActivityType.FLEXIBLE
    # "" when the oracle gave no recognizable slot; otherwise a TimeSlot value.
    time_slot: str = ""
    description: str = ""
    duration: str = ""
    location: str = ""
    cost: str = ""
    rating: str = ""
    photos: str = ""


class Day(_Canonical):
    day_number: int = Field(1, ge=1)
    date: str = ""
    weather: Weather = Field(default_factory=Weather)
    daily_tips: List[str] = Field(default_factory=list)
    activities: List[Activity] = Field(default_factory=list)
    day_summary: str = ""


class EmergencyInfo(_Canonical):
    contacts: List[str] = Field(default_factory=list)
    hospitals: List[str] = Field(default_factory=list)
    embassies: List[str] = Field(default_factory=list)


class CanonicalItinerary(_Canonical):
    destination: str = Field(UNKNOWN_DESTINATION, min_length=1)
    duration: int = Field(0, ge=0)
    estimated_budget: str = ""
    travel_style: str = ""
    weather_overview: str = ""
    essential_travel_tips: List[str] = Field(default_factory=list)
    emergency_info: EmergencyInfo = Field(default_factory=EmergencyInfo)
    # Key line: order is whatever the oracle sent; never re-sorted by day_number.
    days: List[Day] = Field(default_factory=list)
