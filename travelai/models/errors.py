# Role: Typed failure taxonomy for the itinerary pipeline. Each error knows which stage raised it,
# the HTTP status it maps to, whether a fresh invocation may succeed, and the short message a caller sees.
# Raw diagnostics only travel in `details` (for logs / debugging), never in the public message.

from __future__ import annotations

from typing import Any, Dict, Optional

GENERIC_FAILURE_MESSAGE = "Failed to generate itinerary. Please try again."
INVALID_INPUT_MESSAGE = (
    "Invalid input format. Please provide valid preferences or a natural language query."
)


class PipelineError(Exception):
    stage: str = "pipeline"
    status_code: int = 500
    retryable: bool = False
    public_message: str = GENERIC_FAILURE_MESSAGE

    def __init__(self, details: str = "", *, cause: Optional[BaseException] = None) -> None:
        super().__init__(details or self.public_message)
        self.details = details or self.public_message
        self.cause = cause

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.public_message, "details": self.details}

    def __str__(self) -> str:
        return f"[{self.stage}] {self.details}"


class InvalidInput(PipelineError):
    stage = "validation"
    status_code = 400
    public_message = INVALID_INPUT_MESSAGE


class OracleUnavailable(PipelineError):
    # Operator error (missing key / config): retrying the same request will not help.
    stage = "oracle"
    public_message = "The itinerary service is not configured. Please try again later."


class OracleTransportError(PipelineError):
    stage = "oracle"
    retryable = True


class OracleRefused(PipelineError):
    stage = "oracle"
    public_message = (
        "The itinerary could not be generated for this request. Please adjust your request and try again."
    )


class MalformedPayload(PipelineError):
    stage = "normalize"
    retryable = True
