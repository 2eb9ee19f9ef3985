from __future__ import annotations

from functools import lru_cache

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from urbix.core.config import settings

# Whitespace is stripped before the length check, so blank hosts and ids fail validation.
_STRICT = ConfigDict(extra='forbid', str_strip_whitespace=True)


class ProviderModelConfig(BaseModel):
    model_config = _STRICT

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


class ProviderConfig(BaseModel):
    model_config = _STRICT

    host: str = Field(..., min_length=1)
    base_url: str = Field(..., min_length=1)
    api_key_env: str = Field(..., min_length=1)
    models: list[ProviderModelConfig] = Field(..., min_length=1)


class ProviderRegistry:
    """Maps model ids to the OpenAI-compatible endpoint that serves them."""

    def __init__(self, providers: list[ProviderConfig]) -> None:
        if not providers:
            raise RuntimeError("PROVIDERS must include at least one provider")
        self._providers = providers
        self._model_index: dict[str, ProviderConfig] = {}
        hosts = [provider.host for provider in providers]
        duplicate_hosts = sorted({host for host in hosts if hosts.count(host) > 1})
        if duplicate_hosts:
            raise RuntimeError(f"Duplicate provider host: {', '.join(duplicate_hosts)}")
        for provider in providers:
            for model in provider.models:
                if model.id in self._model_index:
                    raise RuntimeError(f"Duplicate model id: {model.id}")
                self._model_index[model.id] = provider

    def has_model(self, model_id: str) -> bool:
        return model_id in self._model_index

    def provider_for_model(self, model_id: str) -> ProviderConfig:
        provider = self._model_index.get(model_id)
        if not provider:
            raise RuntimeError(f"Model not available: {model_id}")
        return provider

    def missing_models(self, *model_ids: str) -> list[str]:
        return [model_id for model_id in model_ids if not self.has_model(model_id)]


_provider_list = TypeAdapter(list[ProviderConfig])


def _parse_providers(raw: str) -> list[ProviderConfig]:
    if not raw or not raw.strip():
        raise RuntimeError("PROVIDERS is missing in environment or .env")
    try:
        providers = _provider_list.validate_json(raw)
    except ValidationError as exc:
        raise RuntimeError(f"PROVIDERS must be a JSON array of providers: {exc}") from exc
    if not providers:
        raise RuntimeError("PROVIDERS must include at least one provider")
    return providers


@lru_cache
def get_provider_registry() -> ProviderRegistry:
    registry = ProviderRegistry(_parse_providers(settings.PROVIDERS))
    missing = registry.missing_models(settings.ANALYSIS_MODEL, settings.PULSE_MODEL)
    if missing:
        # AI calls for these models will fail and fall back; startup still succeeds.
        logger.warning('ai.provider.unregistered_models', models=missing)
    return registry


def reset_provider_registry() -> None:
    get_provider_registry.cache_clear()
