# Role: Minimal wrapper around the Gemini API. Centralizes model name, temperature, timeout, the fixed
# safety profile and the JSON output hint, and maps every failure into the pipeline's typed errors,
# so the rest of the code calls a single method: generate_text(directive).

from __future__ import annotations

import logging
import os
from typing import Any, List, Optional

from google import genai
from google.genai import errors, types

import travelai.config as config
from travelai.models.errors import OracleRefused, OracleTransportError, OracleUnavailable

logger = logging.getLogger(__name__)

# Key lines: travel planning is not a moderation domain (nightlife, safety tips, hospitals...), so every
# adjustable category is opened up. Applied on every call.
SAFETY_SETTINGS: List[types.SafetySetting] = [
    types.SafetySetting(category=category, threshold=types.HarmBlockThreshold.BLOCK_NONE)
    for category in (
        types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
        types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    )
]

JSON_MIME_TYPE = "application/json"

_REFUSAL_FINISH_REASONS = {"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII"}

# 401/403: the key itself is rejected, an operator problem like a missing key.
_CREDENTIAL_STATUS_CODES = {401, 403}


def _enum_name(value: Any) -> str:
    if value is None:
        return ""
    return str(getattr(value, "name", value)).upper()


class GeminiClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        # Key lines:
        # - Reads secrets from env (no secrets in code).
        # - Missing key is an operator problem, surfaced as OracleUnavailable.
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not self.api_key:
            raise OracleUnavailable("Missing GEMINI_API_KEY in environment or .env")

        self.model_name = model or config.gemini_model()
        self.temperature = config.gemini_temperature() if temperature is None else temperature
        self.timeout_seconds = (
            config.gemini_timeout_seconds() if timeout_seconds is None else timeout_seconds
        )

        self.client = genai.Client(
            api_key=self.api_key,
            http_options=types.HttpOptions(timeout=int(self.timeout_seconds * 1000)),
        )

    def _generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self.temperature,
            safety_settings=SAFETY_SETTINGS,
            response_mime_type=JSON_MIME_TYPE,
        )

    def generate_text(self, prompt: str) -> str:
        # 1) Validate prompt
        # 2) Call Gemini once (no retry here; callers decide)
        # 3) Detect safety refusals, then validate non-empty response
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must be non-empty.")

        logger.info("Calling Gemini model %s (%d chars)", self.model_name, len(prompt))
        if config.DEBUG:
            logger.debug("DIRECTIVE:\n%s", prompt)

        try:
            resp = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=self._generation_config(),
            )
        except errors.APIError as e:
            code = getattr(e, "code", None)
            if code in _CREDENTIAL_STATUS_CODES:
                raise OracleUnavailable(
                    f"Gemini rejected the API key (status {code}): {e}", cause=e
                ) from e
            raise OracleTransportError(
                f"Gemini API call failed with status {code}: {e}", cause=e
            ) from e
        except Exception as e:
            raise OracleTransportError(f"Gemini API call failed: {e}", cause=e) from e

        self._raise_if_refused(resp)

        text = getattr(resp, "text", None)
        if not text or not text.strip():
            raise OracleTransportError("Gemini returned an empty response.")

        if config.DEBUG:
            logger.debug("RAW RESPONSE (%d chars):\n%s", len(text), text)

        return text.strip()

    def _raise_if_refused(self, resp: Any) -> None:
        # Role: a blocked prompt or a safety-stopped candidate is a refusal, not a transport problem.
        feedback = getattr(resp, "prompt_feedback", None)
        block_reason = _enum_name(getattr(feedback, "block_reason", None))
        if block_reason and block_reason != "BLOCKED_REASON_UNSPECIFIED":
            raise OracleRefused(f"Gemini blocked the prompt (block_reason={block_reason}).")

        candidates = getattr(resp, "candidates", None) or []
        if candidates:
            finish_reason = _enum_name(getattr(candidates[0], "finish_reason", None))
            if finish_reason in _REFUSAL_FINISH_REASONS:
                raise OracleRefused(f"Gemini stopped generation (finish_reason={finish_reason}).")
