from urbix.core.config import (
    DEFAULT_ANALYSIS_MODEL,
    DEFAULT_API_V1_PREFIX,
    DEFAULT_DATABASE_URL,
    DEFAULT_PROJECT_NAME,
    DEFAULT_PROVIDERS_JSON,
    DEFAULT_PULSE_MODEL,
    Settings,
)
from urbix.core.providers import ProviderRegistry, _parse_providers


def test_defaults(monkeypatch):
    for key in ("PROJECT_NAME", "API_V1_PREFIX", "DATABASE_URL", "PROVIDERS", "PULSE_REPORT_LIMIT"):
        monkeypatch.delenv(key, raising=False)
    settings = Settings(_env_file=None)
    assert settings.PROJECT_NAME == DEFAULT_PROJECT_NAME
    assert settings.API_V1_PREFIX == DEFAULT_API_V1_PREFIX
    assert settings.DATABASE_URL == DEFAULT_DATABASE_URL
    assert settings.PULSE_REPORT_LIMIT == 10
    assert settings.BOOTSTRAP_ADMIN_USERNAME is None


def test_default_providers_cover_default_models():
    registry = ProviderRegistry(_parse_providers(DEFAULT_PROVIDERS_JSON))
    assert registry.missing_models(DEFAULT_ANALYSIS_MODEL, DEFAULT_PULSE_MODEL) == []
    assert registry.provider_for_model(DEFAULT_ANALYSIS_MODEL).api_key_env == "GEMINI_API_KEY"


def test_cors_origins_accepts_comma_list(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    settings = Settings(_env_file=None)
    assert settings.CORS_ORIGINS == ["https://a.example", "https://b.example"]
