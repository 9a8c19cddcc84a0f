import pytest
from pydantic import ValidationError
from finance_chatbot.config import Settings
from finance_chatbot.llm.relay import ResponseRelay

def test_missing_credential_is_fatal(monkeypatch):
    monkeypatch.delenv("OPENAI_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)

def test_defaults(monkeypatch):
    monkeypatch.setenv("OPENAI_KEY", "sk-abc")
    s = Settings(_env_file=None)
    assert s.LLM_MODEL == "gpt-4o-mini"
    assert s.LLM_MAX_TOKENS == 500
    assert s.LLM_TEMPERATURE == 0.7
    assert s.PORT == 8081
    assert s.UPSTREAM_URL.endswith("/v1/chat/completions")

@pytest.mark.parametrize("value", ["-0.1", "1.5"])
def test_temperature_bounds(monkeypatch, value):
    monkeypatch.setenv("OPENAI_KEY", "sk-abc")
    monkeypatch.setenv("LLM_TEMPERATURE", value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)

def test_relay_takes_credential_from_settings(monkeypatch):
    monkeypatch.setenv("OPENAI_KEY", "sk-from-env")
    monkeypatch.setenv("UPSTREAM_TIMEOUT_S", "12.5")
    relay = ResponseRelay.from_settings(Settings(_env_file=None))
    assert relay.api_key == "sk-from-env"
    assert relay.timeout == 12.5
