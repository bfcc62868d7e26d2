from chat_gateway.config import DEFAULT_MODELS, GatewaySettings, get_settings
from chat_gateway.errors import (
    InternalError,
    MissingCredentialError,
    UpstreamError,
    ValidationError,
    redact,
)


def test_settings_from_mapping():
    s = get_settings({
        "GEMINI_API_KEY": " g-key ",
        "OPENAI_API_KEY": "",
        "ANTHROPIC_MODEL": "claude-3-haiku-20240307",
        "UPSTREAM_TIMEOUT_SECONDS": "12.5",
        "MOCK_DELAY_MIN_MS": "0",
        "MOCK_DELAY_MAX_MS": "10",
    })
    assert s.gemini_api_key == "g-key"
    assert s.openai_api_key is None
    assert s.anthropic_api_key is None
    assert s.anthropic_model == "claude-3-haiku-20240307"
    assert s.gemini_model == DEFAULT_MODELS["gemini"]
    assert s.upstream_timeout == 12.5
    assert s.mock_delay_ms == (0, 10)


def test_invalid_numbers_fall_back():
    s = get_settings({"UPSTREAM_TIMEOUT_SECONDS": "soon", "MOCK_DELAY_MIN_MS": "-5", "MOCK_DELAY_MAX_MS": "x"})
    assert s.upstream_timeout == 30.0
    assert s.mock_delay_ms == (1000, 3000)


def test_swapped_delay_bounds_are_ordered():
    s = get_settings({"MOCK_DELAY_MIN_MS": "500", "MOCK_DELAY_MAX_MS": "100"})
    assert s.mock_delay_ms == (100, 500)


def test_settings_read_live_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "first")
    assert get_settings().openai_api_key == "first"
    monkeypatch.setenv("OPENAI_API_KEY", "second")
    assert get_settings().openai_api_key == "second"


def test_api_key_lookup():
    s = GatewaySettings(anthropic_api_key="a")
    assert s.api_key_for("anthropic") == "a"
    assert s.api_key_for("mock") is None
    assert s.model_for("openai") == DEFAULT_MODELS["openai"]


def test_redact():
    assert redact("https://x/y?key=abc123", "abc123") == "https://x/y?key=API_KEY_HIDDEN"
    assert redact("nothing here", None) == "nothing here"
    assert redact(None, "abc") == ""


def test_error_bodies():
    assert ValidationError("Message is required").to_body() == {"error": "Message is required"}
    assert ValidationError("x").status_code == 400
    assert InternalError().to_body() == {"error": "Internal server error"}
    body = MissingCredentialError("gemini", "Gemini", "GEMINI_API_KEY").to_body()
    assert body["fallback"] is True
    assert body["provider"] == "gemini"
    assert body["error"] == (
        "LLM API error: Gemini API key not provided. Please add GEMINI_API_KEY to your "
        "environment variables or pass apiKey in the request."
    )


def test_upstream_error_truncates_body():
    err = UpstreamError("openai", "OpenAI", 500, "x" * 2000)
    assert err.upstream_status == 500
    assert len(err.body) < 600
    assert err.message.startswith("OpenAI API error: 500 - xxx")
