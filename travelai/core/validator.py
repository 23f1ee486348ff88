# Role: Input gatekeeper. Converts a raw request body into exactly one RequestInput variant, or fails fast
# with InvalidInput before anything reaches Gemini. The discriminant is which key is present:
# "preferences" (form) or "naturalLanguageQuery" (free text). Both or neither is rejected.

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from pydantic import ValidationError

from travelai.models.errors import InvalidInput
from travelai.models.request import NaturalLanguageQuery, RequestInput, StructuredPreferences

logger = logging.getLogger(__name__)

PREFERENCES_KEY = "preferences"
NATURAL_LANGUAGE_KEY = "naturalLanguageQuery"


def _format_errors(exc: ValidationError) -> str:
    parts: List[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def parse_request_input(payload: Any) -> RequestInput:
    # 1) Already-typed variants pass through untouched
    # 2) Body must be an object with exactly one discriminant key
    # 3) The chosen variant is validated by its pydantic model
    if isinstance(payload, (StructuredPreferences, NaturalLanguageQuery)):
        return payload

    if not isinstance(payload, Mapping):
        raise InvalidInput(f"Request body must be a JSON object, got {type(payload).__name__}.")

    has_prefs = payload.get(PREFERENCES_KEY) is not None
    has_query = payload.get(NATURAL_LANGUAGE_KEY) is not None

    if has_prefs and has_query:
        raise InvalidInput(
            f"Provide either '{PREFERENCES_KEY}' or '{NATURAL_LANGUAGE_KEY}', not both."
        )
    if not has_prefs and not has_query:
        raise InvalidInput(f"Missing '{PREFERENCES_KEY}' or '{NATURAL_LANGUAGE_KEY}'.")

    try:
        if has_prefs:
            prefs = payload[PREFERENCES_KEY]
            if not isinstance(prefs, Mapping):
                raise InvalidInput(f"'{PREFERENCES_KEY}' must be an object.")
            return StructuredPreferences.model_validate(dict(prefs))

        query = payload[NATURAL_LANGUAGE_KEY]
        if not isinstance(query, str):
            raise InvalidInput(f"'{NATURAL_LANGUAGE_KEY}' must be a string.")
        return NaturalLanguageQuery(text=query)
    except ValidationError as exc:
        details = _format_errors(exc)
        logger.info("Rejected request input: %s", details)
        raise InvalidInput(details, cause=exc) from exc
