# Role: Orchestrator for one itinerary request. It glues together:
# input validation, directive building, the Gemini call, sanitizing and normalizing.
# Stages run strictly in order; the first failure short-circuits. Nothing is retried or cached here,
# and no state survives between calls (a retry is a fresh generate() call with a freshly built directive).

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import travelai.config as config
from travelai.core.normalizer import normalize
from travelai.core.validator import parse_request_input
from travelai.llm.gemini_client import GeminiClient
from travelai.llm.sanitizer import sanitize
from travelai.models.errors import PipelineError
from travelai.models.itinerary import CanonicalItinerary
from travelai.models.request import StructuredPreferences
from travelai.prompts.itinerary_prompt import build_itinerary_prompt

logger = logging.getLogger(__name__)


class ItineraryPipeline:
    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        client_factory: Callable[[], GeminiClient] = GeminiClient,
    ) -> None:
        # Key line: lazy-init avoids crashing at startup if GEMINI_API_KEY is missing
        # (invalid input is still rejected, and the missing key surfaces as OracleUnavailable per call).
        self._client = client
        self._client_factory = client_factory

    def _get_client(self) -> GeminiClient:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def generate(self, request: Any) -> CanonicalItinerary:
        # 1) Validate -> exactly one request variant (InvalidInput, no Gemini call)
        # 2) Build directive
        # 3) Call Gemini once
        # 4) Sanitize raw text
        # 5) Normalize into CanonicalItinerary (MalformedPayload if unparseable)
        try:
            request_input = parse_request_input(request)
            directive = build_itinerary_prompt(request_input)

            raw = self._get_client().generate_text(directive)
            cleaned = sanitize(raw)

            if config.DEBUG and cleaned != raw:
                logger.debug("Sanitized oracle output (%d -> %d chars)", len(raw), len(cleaned))

            fallback_destination = (
                request_input.destination if isinstance(request_input, StructuredPreferences) else None
            )
            itinerary = normalize(cleaned, fallback_destination=fallback_destination)
        except PipelineError as e:
            log = logger.info if e.status_code < 500 else logger.error
            log(
                "Itinerary generation failed at stage=%s (%s, retryable=%s): %s",
                e.stage,
                type(e).__name__,
                e.retryable,
                e.details,
            )
            raise

        logger.info("Itinerary generated for %s with %d day(s)", itinerary.destination, len(itinerary.days))
        return itinerary
