# Role: Pull the JSON payload out of Gemini's raw text. Models sometimes wrap JSON in code fences or in
# a sentence of prose despite the output contract. Never raises: text that still is not JSON is the
# normalizer's problem (MalformedPayload), not ours.

from __future__ import annotations

import json
import re

_FENCE_RE = re.compile(r"```[ \t]*(?:json|JSON)?[ \t]*\r?\n?(.*?)```", re.DOTALL)


def sanitize(raw: str) -> str:
    # 1) Text that already parses is returned as-is (backticks inside string values are content)
    # 2) Fenced block present -> its inner content, unless only the unfenced {...} parses
    # 3) Otherwise, a JSON object wrapped in prose -> trim to {...}
    # Idempotent: every result either parses or contains no fence.
    if not raw:
        return ""
    if _parses(raw):
        return raw

    match = _FENCE_RE.search(raw)
    if not match:
        return _trim_prose(raw)

    fenced = _trim_prose(match.group(1).strip())
    if _parses(fenced):
        return fenced

    # Key line: the "fence" may be a pair of backticks inside a string value of a prose-wrapped object.
    trimmed = _trim_prose(raw)
    return trimmed if _parses(trimmed) else fenced


def _trim_prose(text: str) -> str:
    stripped = text.strip()
    if not stripped or _parses(stripped):
        return text

    start = stripped.find("{")
    end = stripped.rfind("}")
    if start != -1 and end > start:
        return stripped[start : end + 1]
    return text


def _parses(text: str) -> bool:
    try:
        json.loads(text)
    except (ValueError, RecursionError):
        return False
    return True
