from types import SimpleNamespace

import pytest
from google.genai import errors, types

from travelai.llm import gemini_client as gemini_module
from travelai.llm.gemini_client import GeminiClient
from travelai.models.errors import OracleRefused, OracleTransportError, OracleUnavailable


class _FakeModels:
    def __init__(self, outcome):
        self.outcome = outcome
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome


def _response(text="{}", block_reason=None, finish_reason="STOP"):
    return SimpleNamespace(
        text=text,
        prompt_feedback=SimpleNamespace(block_reason=block_reason) if block_reason else None,
        candidates=[SimpleNamespace(finish_reason=finish_reason)],
    )


@pytest.fixture
def install_fake_sdk(monkeypatch):
    created = {}

    def _install(outcome):
        models = _FakeModels(outcome)

        class FakeSdkClient:
            def __init__(self, **kwargs):
                created["kwargs"] = kwargs
                self.models = models

        monkeypatch.setattr(gemini_module.genai, "Client", FakeSdkClient)
        return models, created

    return _install


def test_missing_key_raises_oracle_unavailable(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    with pytest.raises(OracleUnavailable):
        GeminiClient()


def test_single_call_with_safety_profile_and_json_hint(install_fake_sdk, monkeypatch):
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
    models, created = install_fake_sdk(_response(text='  {"destination": "Lisbon"}  '))

    client = GeminiClient(api_key="test-key", temperature=0.2, timeout_seconds=30)
    text = client.generate_text("Plan Lisbon")

    assert text == '{"destination": "Lisbon"}'
    assert created["kwargs"]["api_key"] == "test-key"
    assert created["kwargs"]["http_options"].timeout == 30000
    assert len(models.calls) == 1

    call = models.calls[0]
    assert call["model"] == "gemini-test"
    assert call["contents"] == "Plan Lisbon"
    generation_config = call["config"]
    assert generation_config.response_mime_type == "application/json"
    assert generation_config.temperature == 0.2
    categories = {setting.category for setting in generation_config.safety_settings}
    assert categories == {
        types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
        types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    }
    assert all(
        setting.threshold == types.HarmBlockThreshold.BLOCK_NONE
        for setting in generation_config.safety_settings
    )


def test_sdk_exception_becomes_transport_error(install_fake_sdk):
    models, _ = install_fake_sdk(TimeoutError("read timed out"))
    client = GeminiClient(api_key="test-key")

    with pytest.raises(OracleTransportError) as excinfo:
        client.generate_text("Plan Lisbon")

    assert "read timed out" in excinfo.value.details
    assert excinfo.value.retryable is True
    assert len(models.calls) == 1


def test_empty_response_is_transport_error(install_fake_sdk):
    install_fake_sdk(_response(text=None))
    client = GeminiClient(api_key="test-key")

    with pytest.raises(OracleTransportError):
        client.generate_text("Plan Lisbon")


def test_blocked_prompt_is_refusal(install_fake_sdk):
    install_fake_sdk(_response(text=None, block_reason="SAFETY"))
    client = GeminiClient(api_key="test-key")

    with pytest.raises(OracleRefused) as excinfo:
        client.generate_text("Plan Lisbon")

    assert excinfo.value.retryable is False


def test_safety_finish_reason_is_refusal(install_fake_sdk):
    install_fake_sdk(_response(text="", finish_reason="SAFETY"))
    client = GeminiClient(api_key="test-key")

    with pytest.raises(OracleRefused):
        client.generate_text("Plan Lisbon")


def test_blank_prompt_is_rejected_without_calling_the_sdk(install_fake_sdk):
    models, _ = install_fake_sdk(_response())
    client = GeminiClient(api_key="test-key")

    with pytest.raises(ValueError):
        client.generate_text("   ")

    assert models.calls == []


@pytest.mark.parametrize("code", [401, 403])
def test_rejected_key_is_oracle_unavailable(install_fake_sdk, code):
    install_fake_sdk(
        errors.ClientError(
            code, {"error": {"code": code, "message": "API key not valid.", "status": "PERMISSION_DENIED"}}
        )
    )
    client = GeminiClient(api_key="bad-key")

    with pytest.raises(OracleUnavailable) as excinfo:
        client.generate_text("Plan Lisbon")

    assert excinfo.value.retryable is False
    assert str(code) in excinfo.value.details


def test_server_error_is_retryable_transport_error(install_fake_sdk):
    install_fake_sdk(
        errors.ServerError(
            503, {"error": {"code": 503, "message": "The model is overloaded.", "status": "UNAVAILABLE"}}
        )
    )
    client = GeminiClient(api_key="test-key")

    with pytest.raises(OracleTransportError) as excinfo:
        client.generate_text("Plan Lisbon")

    assert excinfo.value.retryable is True
