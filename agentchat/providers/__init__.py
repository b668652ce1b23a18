"""LLM 后端：BaseProvider 抽象基类，OpenAI / OpenRouter / Ollama 实现与构造工厂。"""
from agentchat.providers.base import BaseProvider
from agentchat.providers.factory import available_providers, create_provider, register_provider
from agentchat.providers.ollama_provider import OllamaProvider
from agentchat.providers.openai_compatible import OpenAICompatibleProvider
from agentchat.providers.openai_provider import OpenAIProvider
from agentchat.providers.openrouter_provider import OpenRouterProvider

__all__ = [
    "BaseProvider",
    "OpenAICompatibleProvider",
    "OpenAIProvider",
    "OpenRouterProvider",
    "OllamaProvider",
    "create_provider",
    "register_provider",
    "available_providers",
]
