import json

import pytest

from travelai.llm.sanitizer import sanitize


def test_json_fence_is_unwrapped():
    raw = '```json\n{"destination": "Lisbon"}\n```'

    assert sanitize(raw) == '{"destination": "Lisbon"}'


def test_plain_fence_is_unwrapped():
    raw = 'Here you go:\n```\n{"a": 1}\n```\nEnjoy!'

    assert sanitize(raw) == '{"a": 1}'


def test_clean_json_is_returned_unchanged():
    raw = '  {"destination": "Lisbon", "days": []}\n'

    assert sanitize(raw) == raw


def test_prose_around_object_is_trimmed():
    raw = 'Sure! Here is your itinerary: {"destination": "Rome"} Have a great trip.'

    assert sanitize(raw) == '{"destination": "Rome"}'


def test_text_without_json_is_returned_unchanged():
    raw = "Sorry, I cannot help with that."

    assert sanitize(raw) == raw


def test_unterminated_fence_still_yields_object():
    raw = '```json\n{"destination": "Oslo"}'

    assert sanitize(raw) == '{"destination": "Oslo"}'


def test_empty_input():
    assert sanitize("") == ""


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "Sorry, I cannot help with that.",
        '{"a": 1}',
        '```json\n{"a": 1}\n```',
        '```\n  prose then {"a": {"b": 2}} more prose\n```',
        'intro {"a": 1} middle {"b": 2} outro',
        "```python\nprint('hi')\n```",
        '```json\n[{"a": 1}]\n```',
        "``` only one fence {",
        '```json\n{"a": "```"}\n```',
        '{"tips": ["Type ```wifi``` into the kiosk"]}',
        '[Itinerary below]\n{"destination": "Rome"}',
    ],
)
def test_sanitize_is_idempotent(raw):
    once = sanitize(raw)

    assert sanitize(once) == once


def test_valid_json_with_backticks_in_values_is_left_alone():
    raw = json.dumps({"destination": "Lisbon", "essentialTravelTips": ["Type ```wifi``` into the kiosk"]})

    assert sanitize(raw) == raw


def test_fence_inside_prose_with_backticks_in_values():
    inner = json.dumps({"destination": "Lisbon", "dailyTips": ["Ask for ```menu do dia```"]})
    raw = f"Here you go:\n{inner}\nEnjoy!"

    assert json.loads(sanitize(raw))["destination"] == "Lisbon"


def test_bracketed_prose_before_object_is_trimmed():
    raw = '[Itinerary below]\n{"destination": "Rome"}'

    assert sanitize(raw) == '{"destination": "Rome"}'


def test_top_level_array_is_left_alone():
    raw = '[{"destination": "Seville"}]'

    assert sanitize(raw) == raw


def test_deeply_nested_text_does_not_raise():
    raw = '{"days": ' + "[" * 100000 + "]" * 100000 + "}"

    assert sanitize(raw) == raw
