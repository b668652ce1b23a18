"""Provider 工厂：按 ProviderConfig.kind 选择实现类并构造。

新增后端只需 register_provider("kind", SomeProvider)，编排核心不感知具体类型。
"""

from __future__ import annotations

import logging

import httpx

from agentchat.core.errors import ConfigurationError
from agentchat.models.agent import ProviderConfig
from agentchat.providers.base import BaseProvider
from agentchat.providers.ollama_provider import OllamaProvider
from agentchat.providers.openai_provider import OpenAIProvider
from agentchat.providers.openrouter_provider import OpenRouterProvider

logger = logging.getLogger(__name__)

_PROVIDERS: dict[str, type[BaseProvider]] = {
    "openai": OpenAIProvider,
    "openrouter": OpenRouterProvider,
    "ollama": OllamaProvider,
}


def register_provider(kind: str, provider_cls: type[BaseProvider]) -> None:
    """注册（或覆盖）一种后端类型。"""
    _PROVIDERS[kind.lower()] = provider_cls
    logger.info("Registered provider kind: %s -> %s", kind, provider_cls.__name__)


def available_providers() -> list[str]:
    return sorted(_PROVIDERS)


def create_provider(
    config: ProviderConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> BaseProvider:
    """按 config.kind 构造 Provider；transport 只传给基于 httpx 的实现。"""
    kind = config.kind.lower()
    provider_cls = _PROVIDERS.get(kind)
    if provider_cls is None:
        raise ConfigurationError(f"Unsupported provider: {config.kind}")

    logger.info("[CALL] create_provider: kind=%s model=%s", kind, config.model or "<default>")
    if transport is not None:
        return provider_cls(config, transport=transport)
    return provider_cls(config)
