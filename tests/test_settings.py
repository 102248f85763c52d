from config.settings import DEFAULT_MODEL, DEFAULT_PORT, Settings


def test_from_env_defaults(monkeypatch):
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "GEMINI_MODEL", "PORT", "REQUEST_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    s = Settings.from_env()
    assert s.gemini_api_key is None
    assert not s.api_key_configured
    assert s.gemini_model == DEFAULT_MODEL
    assert s.port == DEFAULT_PORT


def test_from_env_overrides(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("GOOGLE_API_KEY", "fallback")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "12.5")
    s = Settings.from_env()
    assert s.gemini_api_key == "fallback"
    assert s.api_key_configured
    assert s.port == 8080
    assert s.request_timeout == 12.5
