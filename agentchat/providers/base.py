"""BaseProvider：所有 LLM 后端的抽象基类。"""

from __future__ import annotations

from abc import ABC, abstractmethod

from agentchat.core.cancellation import CancellationToken
from agentchat.models.agent import ProviderConfig
from agentchat.models.message import Message


class BaseProvider(ABC):
    """所有 LLM 后端的基类。

    每个 Provider 负责：
    1. 把消息历史转为后端接口的请求
    2. 调用后端并返回回复文本
    3. 把鉴权 / 限流 / 网络失败转为对应的 BackendError 子类
    编排核心只依赖这个接口；新增后端只需提供新的实现并注册到 factory。
    """

    def __init__(self, config: ProviderConfig):
        self.config = config

    @abstractmethod
    async def generate_completion(
        self,
        messages: list[Message],
        cancellation_token: CancellationToken | None = None,
    ) -> str:
        """根据消息历史生成回复文本；令牌触发时中止调用并抛出 CancellationError。"""
        ...

    @abstractmethod
    def get_provider_name(self) -> str:
        ...

    def update_config(self, **changes) -> None:
        """局部更新配置（如 model、temperature），未提及的字段保持不变。"""
        self.config = self.config.model_copy(update=changes)

    async def close(self) -> None:
        """释放底层连接；默认无资源需要释放。"""
        pass
