from chronosnap.core.settings import Settings


def test_cors_origins_read_from_env_json(monkeypatch):
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", '["https://chronosnap.example"]')
    s = Settings(_env_file=None)
    assert s.cors_allow_origins == ["https://chronosnap.example"]


def test_api_key_aliases(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.setenv("GEMINI_API_KEY", "secret")
    assert Settings(_env_file=None).gemini_api_key == "secret"
