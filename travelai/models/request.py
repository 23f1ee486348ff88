# Role: Inbound request contract. A request is exactly one of two variants:
# StructuredPreferences (form input) or NaturalLanguageQuery (free text). Downstream code dispatches on
# the variant type and never re-inspects the raw request body.

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class TravelStyle(str, Enum):
    RELAXED = "relaxed"
    MODERATE = "moderate"
    PACKED = "packed"


class Budget(str, Enum):
    BUDGET = "budget"
    MID_RANGE = "mid-range"
    LUXURY = "luxury"


class Accommodation(str, Enum):
    HOSTEL = "hostel"
    HOTEL = "hotel"
    RESORT = "resort"
    AIRBNB = "airbnb"


class StructuredPreferences(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    destination: str = Field(..., min_length=1)
    duration: int = Field(..., ge=1)
    travel_style: Optional[TravelStyle] = None
    budget: Optional[Budget] = None
    interests: List[str] = Field(default_factory=list)
    group_size: Optional[int] = Field(None, ge=1)
    accommodation: Optional[Accommodation] = None
    start_date: Optional[date] = None
    specific_requests: Optional[str] = None

    @field_validator("destination", mode="before")
    @classmethod
    def _strip_destination(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("interests", mode="before")
    @classmethod
    def _clean_interests(cls, value):
        # Key line: interests behave like a set (trimmed, no blanks, first occurrence wins).
        if value is None:
            return []
        if not isinstance(value, (list, tuple, set)):
            return value
        cleaned: List[str] = []
        for item in value:
            if isinstance(item, str):
                item = item.strip()
                if item and item not in cleaned:
                    cleaned.append(item)
        return cleaned

    @field_validator("specific_requests", mode="before")
    @classmethod
    def _blank_requests_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value

    @field_validator("start_date", mode="before")
    @classmethod
    def _blank_date_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class NaturalLanguageQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1)

    @field_validator("text", mode="before")
    @classmethod
    def _strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value


RequestInput = Union[StructuredPreferences, NaturalLanguageQuery]
