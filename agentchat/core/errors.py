"""异常体系：配置错误、后端错误（鉴权 / 限流 / 网络）与取消错误。

编排核心不吞异常、不重试、不替换默认回复：任何一轮抛出的异常都会中止当前对话，
已写入历史 / 群聊记录的消息保持不变。
"""

from __future__ import annotations


class AgentChatError(Exception):
    """所有 agentchat 异常的基类。"""


class ConfigurationError(AgentChatError):
    """构造参数不合法（如群聊成员少于 2 个、缺少 API key、未知后端类型）。"""


class BackendError(AgentChatError):
    """LLM 后端调用失败；provider / status_code 便于调用方区分来源。"""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
    ):
        self.provider = provider
        self.status_code = status_code
        super().__init__(message)


class AuthenticationError(BackendError):
    """API key 缺失或无效（HTTP 401 / 403）。"""


class RateLimitError(BackendError):
    """触发后端限流（HTTP 429）；retry_after 为服务端建议的等待秒数。"""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = 429,
        retry_after: float | None = None,
    ):
        self.retry_after = retry_after
        super().__init__(message, provider=provider, status_code=status_code)


class TransportError(BackendError):
    """网络层失败：连接失败、超时等，未拿到 HTTP 响应。"""


class CancellationError(AgentChatError):
    """进行中的一轮被 CancellationToken 中止；不会记录任何回复。"""
