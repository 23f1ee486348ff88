from typing import List, Optional, Union

import pytest


class FakeGeminiClient:
    """Stands in for GeminiClient: records directives and replays a scripted reply or error."""

    def __init__(self, reply: Union[str, BaseException] = "{}") -> None:
        self.reply = reply
        self.prompts: List[str] = []

    def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if isinstance(self.reply, BaseException):
            raise self.reply
        return self.reply


LISBON_PREFERENCES = {
    "destination": "Lisbon",
    "duration": 2,
    "travelStyle": "relaxed",
    "budget": "budget",
    "interests": [],
    "groupSize": 1,
    "accommodation": "hostel",
}

LISBON_REPLY = (
    '```json\n{"destination":"Lisbon","duration":2,'
    '"days":[{"dayNumber":1,"activities":[]}]}\n```'
)


@pytest.fixture
def fake_client_factory():
    def _make(reply: Optional[Union[str, BaseException]] = "{}") -> FakeGeminiClient:
        return FakeGeminiClient(reply)

    return _make


@pytest.fixture
def lisbon_preferences():
    return dict(LISBON_PREFERENCES)


@pytest.fixture
def lisbon_reply():
    return LISBON_REPLY
