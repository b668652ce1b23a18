"""OpenRouter Provider：OpenAI 兼容接口，额外携带来源标识请求头。"""

from __future__ import annotations

from agentchat.providers.openai_compatible import OpenAICompatibleProvider

APP_REFERER = "https://github.com/agentchat/agentchat"
APP_TITLE = "agentchat"


class OpenRouterProvider(OpenAICompatibleProvider):
    """通过 openrouter.ai 路由到各家模型；模型名带厂商前缀，如 openai/gpt-3.5-turbo。"""

    PROVIDER_NAME = "OpenRouter"
    DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
    DEFAULT_MODEL = "openai/gpt-3.5-turbo"

    def _default_headers(self) -> dict[str, str]:
        return {"HTTP-Referer": APP_REFERER, "X-Title": APP_TITLE}
