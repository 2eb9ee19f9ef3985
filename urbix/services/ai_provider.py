from __future__ import annotations

from dataclasses import dataclass

from loguru import logger
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider

from urbix.core.env import lookup_secret
from urbix.core.providers import get_provider_registry


@dataclass(frozen=True)
class ProviderInfo:
    name: str
    base_url: str
    api_key: str


def resolve_provider_info(model_id: str) -> ProviderInfo:
    provider = get_provider_registry().provider_for_model(model_id)
    api_key = lookup_secret(provider.api_key_env)
    if not api_key:
        raise RuntimeError(f"{provider.api_key_env} is missing in environment or .env")
    return ProviderInfo(name=provider.host, base_url=provider.base_url, api_key=api_key)


def build_openai_chat_model(model_id: str) -> OpenAIChatModel:
    info = resolve_provider_info(model_id)
    logger.debug('ai.provider.selected', provider=info.name, model=model_id)
    provider = OpenAIProvider(base_url=info.base_url, api_key=info.api_key)
    return OpenAIChatModel(model_id, provider=provider)
