"""OpenAI Provider：直接调用 api.openai.com，必须提供 API key。"""

from __future__ import annotations

from agentchat.providers.openai_compatible import OpenAICompatibleProvider


class OpenAIProvider(OpenAICompatibleProvider):
    PROVIDER_NAME = "OpenAI"
    DEFAULT_BASE_URL = "https://api.openai.com/v1"
    DEFAULT_MODEL = "gpt-3.5-turbo"
