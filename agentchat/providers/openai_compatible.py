"""OpenAI 兼容接口的通用 Provider：通过 httpx 调用 POST {base_url}/chat/completions。

OpenAI、OpenRouter、Ollama 都暴露这一接口，各自的子类只声明默认地址、默认模型、
是否必须提供 API key 以及额外请求头。

错误映射：
  401 / 403        → AuthenticationError
  429              → RateLimitError（带 Retry-After）
  其他 >= 400      → BackendError(status_code)
  连接失败 / 超时  → TransportError
  响应不是合法 JSON → BackendError
"""

from __future__ import annotations

import logging
from typing import ClassVar

import httpx

from agentchat.core.cancellation import CancellationToken
from agentchat.core.errors import (
    AuthenticationError,
    BackendError,
    ConfigurationError,
    RateLimitError,
    TransportError,
)
from agentchat.models.agent import ProviderConfig
from agentchat.models.message import Message
from agentchat.providers.base import BaseProvider

logger = logging.getLogger(__name__)

# 这些字段变化后需要重建 HTTP 客户端
_CLIENT_FIELDS = {"api_key", "base_url", "timeout", "headers"}


class OpenAICompatibleProvider(BaseProvider):
    """OpenAI chat-completions 协议的通用实现。

    transport 可注入（测试中使用 httpx.MockTransport）；HTTP 客户端在首次调用时才创建。
    """

    PROVIDER_NAME: ClassVar[str] = "OpenAICompatible"
    DEFAULT_BASE_URL: ClassVar[str] = "https://api.openai.com/v1"
    DEFAULT_MODEL: ClassVar[str] = "gpt-3.5-turbo"
    DEFAULT_MAX_TOKENS: ClassVar[int | None] = 1000
    REQUIRES_API_KEY: ClassVar[bool] = True

    def __init__(
        self,
        config: ProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if self.REQUIRES_API_KEY and not config.api_key:
            raise ConfigurationError(f"{self.PROVIDER_NAME} API key is required")
        super().__init__(config)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def get_provider_name(self) -> str:
        return self.PROVIDER_NAME

    @property
    def model(self) -> str:
        return self.config.model or self.DEFAULT_MODEL

    @property
    def base_url(self) -> str:
        return (self.config.base_url or self.DEFAULT_BASE_URL).rstrip("/")

    def update_config(self, **changes) -> None:
        super().update_config(**changes)
        if _CLIENT_FIELDS & changes.keys():
            self._client = None

    def _default_headers(self) -> dict[str, str]:
        return {}

    def _build_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        headers.update(self._default_headers())
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        headers.update(self.config.headers)
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        """获取或创建 HTTP 客户端（懒加载）。"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._build_headers(),
                timeout=self.config.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_payload(self, messages: list[Message]) -> dict:
        payload = {
            "model": self.model,
            "messages": [m.to_wire() for m in messages],
            "temperature": self.config.temperature,
        }
        max_tokens = self.config.max_tokens or self.DEFAULT_MAX_TOKENS
        if max_tokens:
            payload["max_tokens"] = max_tokens
        return payload

    async def generate_completion(
        self,
        messages: list[Message],
        cancellation_token: CancellationToken | None = None,
    ) -> str:
        """发送一次 chat-completion 请求并返回第一条候选的文本，没有内容时返回空串。"""
        payload = self._build_payload(messages)
        logger.info(
            "[CALL] %s.generate_completion: model=%s messages=%d",
            self.PROVIDER_NAME, payload["model"], len(payload["messages"]),
        )
        if cancellation_token:
            data = await cancellation_token.run(self._post(payload))
        else:
            data = await self._post(payload)
        content = self._parse_content(data)
        logger.debug(
            "[CALL] %s completion received: content_len=%d usage=%s",
            self.PROVIDER_NAME, len(content), data.get("usage") if isinstance(data, dict) else None,
        )
        return content

    async def _post(self, payload: dict) -> dict:
        client = self._get_client()
        try:
            response = await client.post("/chat/completions", json=payload)
        except httpx.TimeoutException as e:
            logger.error("[CALL] %s request timed out: %s", self.PROVIDER_NAME, e)
            raise TransportError(
                f"{self.PROVIDER_NAME} request timed out after {self.config.timeout}s",
                provider=self.PROVIDER_NAME,
            ) from e
        except httpx.TransportError as e:
            logger.error("[CALL] %s transport error: %s", self.PROVIDER_NAME, e)
            raise TransportError(
                f"{self.PROVIDER_NAME} request failed: {e}",
                provider=self.PROVIDER_NAME,
            ) from e

        self._raise_for_status(response)

        try:
            return response.json()
        except ValueError as e:
            raise BackendError(
                f"{self.PROVIDER_NAME} returned a non-JSON response",
                provider=self.PROVIDER_NAME,
                status_code=response.status_code,
            ) from e

    def _raise_for_status(self, response: httpx.Response) -> None:
        status = response.status_code
        if status < 400:
            return
        detail = response.text[:300]
        logger.error(
            "[CALL] %s HTTP error: status=%s body_preview=%s",
            self.PROVIDER_NAME, status, detail,
        )
        if status in (401, 403):
            raise AuthenticationError(
                f"{self.PROVIDER_NAME} authentication failed ({status}): {detail}",
                provider=self.PROVIDER_NAME,
                status_code=status,
            )
        if status == 429:
            raise RateLimitError(
                f"{self.PROVIDER_NAME} rate limit exceeded: {detail}",
                provider=self.PROVIDER_NAME,
                retry_after=_parse_retry_after(response.headers.get("retry-after")),
            )
        raise BackendError(
            f"{self.PROVIDER_NAME} request failed ({status}): {detail}",
            provider=self.PROVIDER_NAME,
            status_code=status,
        )

    def _parse_content(self, data: dict) -> str:
        if not isinstance(data, dict):
            raise BackendError(
                f"{self.PROVIDER_NAME} returned an unexpected payload",
                provider=self.PROVIDER_NAME,
            )
        choices = data.get("choices") or []
        if not choices:
            return ""
        message = choices[0].get("message") or {}
        return message.get("content") or ""


def _parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None
