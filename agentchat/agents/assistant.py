"""AssistantAgent：把回复生成委托给 LLM Provider 的 Agent。

Provider 通过构造函数注入（或由 from_profile 经工厂创建），Agent 只依赖 BaseProvider 接口。
"""

from __future__ import annotations

import logging

from agentchat.core.agent import BaseAgent
from agentchat.core.cancellation import CancellationToken
from agentchat.core.errors import AgentChatError, BackendError
from agentchat.models.agent import AgentProfile
from agentchat.models.message import Message
from agentchat.providers.base import BaseProvider
from agentchat.providers.factory import create_provider

logger = logging.getLogger(__name__)


class AssistantAgent(BaseAgent):
    """由 LLM 生成回复的 Agent。"""

    def __init__(
        self,
        name: str,
        provider: BaseProvider,
        system_message: str | None = None,
        description: str = "",
    ):
        super().__init__(name, system_message)
        self.provider = provider
        self.description = description

    @classmethod
    def from_profile(cls, profile: AgentProfile) -> AssistantAgent:
        """按档案中的 ProviderConfig 创建 Provider 并构造 Agent。"""
        return cls(
            name=profile.name,
            provider=create_provider(profile.provider),
            system_message=profile.system_message,
            description=profile.description,
        )

    def _prepare_messages(self, messages: list[Message]) -> list[Message]:
        """组装发给 Provider 的消息：补上系统提示；其他 Agent 的 assistant 消息改为 user 视角。"""
        prepared: list[Message] = []
        if self.system_message and not (messages and messages[0].role == "system"):
            prepared.append(Message(role="system", content=self.system_message))
        for msg in messages:
            if msg.role == "assistant" and msg.name and msg.name != self.name:
                msg = msg.model_copy(update={"role": "user"})
            prepared.append(msg)
        return prepared

    async def generate_reply(
        self,
        messages: list[Message],
        cancellation_token: CancellationToken | None = None,
    ) -> Message:
        """调用 Provider 生成回复；非 agentchat 异常包装为 BackendError 并保留原因。"""
        prompt = self._prepare_messages(messages)
        logger.info(
            "[CALL] assistant.generate_reply: agent=%s provider=%s messages=%d",
            self.name, self.provider.get_provider_name(), len(prompt),
        )
        try:
            content = await self.provider.generate_completion(prompt, cancellation_token)
        except AgentChatError:
            raise
        except Exception as e:
            logger.error(
                "[CALL] assistant.generate_reply failed: agent=%s error=%s",
                self.name, e, exc_info=True,
            )
            raise BackendError(
                f"Failed to generate reply: {e}",
                provider=self.provider.get_provider_name(),
            ) from e

        return Message(role="assistant", content=content, name=self.name)

    def set_model(self, model: str) -> None:
        self.provider.update_config(model=model)

    def set_temperature(self, temperature: float) -> None:
        self.provider.update_config(temperature=temperature)

    def get_provider_name(self) -> str:
        return self.provider.get_provider_name()
