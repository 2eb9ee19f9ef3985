import json
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_PROJECT_NAME = "Urbix Civic Reports API"
DEFAULT_API_V1_PREFIX = "/api/v1"
DEFAULT_DATABASE_URL = "sqlite:///./urbix.db"
DEFAULT_ANALYSIS_MODEL = "gemini-2.5-pro"
DEFAULT_PULSE_MODEL = "gemini-2.5-flash"
DEFAULT_PROVIDERS_JSON = json.dumps(
    [
        {
            "host": "gemini",
            "base_url": "https://generativelanguage.googleapis.com/v1beta/openai/",
            "api_key_env": "GEMINI_API_KEY",
            "models": [
                {"id": "gemini-2.5-pro", "name": "Gemini 2.5 Pro"},
                {"id": "gemini-2.5-flash", "name": "Gemini 2.5 Flash"},
            ],
        },
        {
            "host": "openai",
            "base_url": "https://api.openai.com/v1",
            "api_key_env": "OPENAI_API_KEY",
            "models": [{"id": "gpt-4o-mini", "name": "GPT-4o mini"}],
        },
    ],
    ensure_ascii=True,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', extra='ignore')

    PROJECT_NAME: str = DEFAULT_PROJECT_NAME
    API_V1_PREFIX: str = DEFAULT_API_V1_PREFIX
    ENV: str = 'development'
    DEBUG: bool = False

    DATABASE_URL: str = DEFAULT_DATABASE_URL
    LOG_LEVEL: str = 'INFO'
    LOG_JSON: bool = False
    CORS_ORIGINS: Annotated[list[str], NoDecode] = ['*']

    SECRET_KEY: str = 'change-me'
    ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12
    BOOTSTRAP_ADMIN_USERNAME: str | None = None
    BOOTSTRAP_ADMIN_PASSWORD: str | None = None

    PROVIDERS: str = DEFAULT_PROVIDERS_JSON
    ANALYSIS_MODEL: str = DEFAULT_ANALYSIS_MODEL
    PULSE_MODEL: str = DEFAULT_PULSE_MODEL
    AI_TIMEOUT_SECONDS: float = 30.0
    PULSE_REPORT_LIMIT: int = 10

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, value):  # type: ignore[override]
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return []
            if value == '*':
                return ['*']
            return [item.strip() for item in value.split(',') if item.strip()]
        return value


settings = Settings()
