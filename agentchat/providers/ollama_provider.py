"""Ollama Provider：本地推理服务的 OpenAI 兼容接口（默认 http://localhost:11434/v1）。

Ollama 不校验 API key，未配置时发送占位值；max_tokens 仅在配置时才发送。
"""

from __future__ import annotations

from agentchat.providers.openai_compatible import OpenAICompatibleProvider

PLACEHOLDER_API_KEY = "ollama"


class OllamaProvider(OpenAICompatibleProvider):
    PROVIDER_NAME = "Ollama"
    DEFAULT_BASE_URL = "http://localhost:11434/v1"
    DEFAULT_MODEL = "llama2"
    DEFAULT_MAX_TOKENS = None
    REQUIRES_API_KEY = False

    def _build_headers(self) -> dict[str, str]:
        headers = super()._build_headers()
        headers.setdefault("Authorization", f"Bearer {PLACEHOLDER_API_KEY}")
        return headers
