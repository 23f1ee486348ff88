# Role: Directive builder for itinerary generation. Turns one request variant into the single text sent to
# Gemini: user intent first (only the fields the user actually gave), then a fixed schema contract that
# pins the output shape to CanonicalItinerary. The contract suffix must stay in lockstep with
# travelai/core/normalizer.py.

from __future__ import annotations

import json
from typing import List, NewType

from travelai.models.errors import InvalidInput
from travelai.models.request import NaturalLanguageQuery, RequestInput, StructuredPreferences

Directive = NewType("Directive", str)

# Key lines: the skeleton documents every canonical key with its type; it is rendered once at import.
_SCHEMA_SKELETON = {
    "destination": "<string>",
    "duration": "<integer, number of days>",
    "estimatedBudget": "<string, total estimate with currency, e.g. '$1,200 - $1,500'>",
    "travelStyle": "<string>",
    "weatherOverview": "<string>",
    "essentialTravelTips": ["<string>"],
    "emergencyInfo": {
        "contacts": ["<string, e.g. 'Police: 112'>"],
        "hospitals": ["<string, name and address>"],
        "embassies": ["<string, name and address>"],
    },
    "days": [
        {
            "dayNumber": "<integer starting at 1>",
            "date": "<string, YYYY-MM-DD or 'Day N'>",
            "weather": {
                "tempRange": "<string, e.g. '18-24°C'>",
                "condition": "<string>",
                "tip": "<string>",
            },
            "dailyTips": ["<string>"],
            "activities": [
                {
                    "name": "<string>",
                    "category": "<string, e.g. culture, food, nature>",
                    "type": "<one of: indoor | outdoor | flexible>",
                    "timeSlot": "<one of: morning | afternoon | evening>",
                    "description": "<string>",
                    "duration": "<string, e.g. '2 hours'>",
                    "location": "<string>",
                    "cost": "<string, e.g. '$25' or 'Free'>",
                    "rating": "<string, e.g. '4.5/5'>",
                    "photos": "<string, short photo-spot suggestions>",
                }
            ],
            "daySummary": "<string>",
        }
    ],
}

SCHEMA_CONTRACT = f"""
OUTPUT CONTRACT (NON-NEGOTIABLE):
- Respond with EXACTLY ONE raw JSON object and nothing else (no markdown, no code fences, no commentary).
- The object MUST have exactly this shape and these keys:
{json.dumps(_SCHEMA_SKELETON, ensure_ascii=False, indent=2)}
- "days" MUST contain one entry per day of the trip, in chronological order.
- Every field is required. Never use null, empty strings, empty arrays, "N/A", "unknown" or "TBD".
- When the traveler did not say something, infer a plausible, realistic value for the destination.
- Numbers ("duration", "dayNumber") are JSON integers; every other scalar value is a JSON string.
""".strip()

_STRUCTURED_INTRO = (
    "Generate a detailed travel itinerary for a trip to {destination} for {duration} {day_word}. "
    "Include activities, estimated costs, and travel tips for each day. "
    "Also include weather information and emergency contacts for the destination."
)

_NATURAL_LANGUAGE_INTRO = "Create a travel itinerary based on this natural language request: {text}"


def _structured_clauses(prefs: StructuredPreferences) -> List[str]:
    # 1) destination + duration always
    # 2) every optional preference only when present (absent fields are left out entirely)
    day_word = "day" if prefs.duration == 1 else "days"
    clauses = [
        _STRUCTURED_INTRO.format(
            destination=prefs.destination, duration=prefs.duration, day_word=day_word
        )
    ]

    if prefs.travel_style is not None:
        clauses.append(f"The user prefers {prefs.travel_style.value} style trips.")
    if prefs.interests:
        clauses.append(f"User interests include: {', '.join(prefs.interests)}.")
    if prefs.budget is not None:
        clauses.append(f"Budget: {prefs.budget.value}.")
    if prefs.group_size is not None:
        people = "person" if prefs.group_size == 1 else "people"
        clauses.append(f"Group size: {prefs.group_size} {people}.")
    if prefs.accommodation is not None:
        clauses.append(f"Preferred accommodation: {prefs.accommodation.value}.")
    if prefs.start_date is not None:
        clauses.append(f"Starting on: {prefs.start_date.isoformat()}.")
    if prefs.specific_requests:
        clauses.append(f"Specific requests: {prefs.specific_requests}.")

    return clauses


def build_intent_clause(request: RequestInput) -> str:
    """Return the user-intent part of the directive (everything before the schema contract)."""
    if isinstance(request, StructuredPreferences):
        return " ".join(_structured_clauses(request))
    if isinstance(request, NaturalLanguageQuery):
        # Key line: the user's text is embedded verbatim.
        return _NATURAL_LANGUAGE_INTRO.format(text=request.text)
    raise InvalidInput(
        f"Unsupported request type: {type(request).__name__}; "
        "expected structured preferences or a natural language query."
    )


def build_itinerary_prompt(request: RequestInput) -> Directive:
    return Directive(f"{build_intent_clause(request)}\n\n{SCHEMA_CONTRACT}")
