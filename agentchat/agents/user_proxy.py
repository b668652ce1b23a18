"""UserProxyAgent：代表人类参与对话的 Agent。

是否向人类索要输入由 HumanInputMode 决定：
  ALWAYS     每一轮都询问
  TERMINATE  收到终止消息或自动回复次数耗尽时才询问
  NEVER      从不询问
人类给出输入 → 作为 user 角色回复，并清零自动回复计数；
不输入（或无需询问）→ 在 max_consecutive_auto_reply 次以内用 default_auto_reply 自动继续，
超出后回复 "TERMINATE" 结束对话。
"""

from __future__ import annotations

import logging

from agentchat.agents.human_input import ConsoleInputProvider, HumanInputProvider
from agentchat.core.agent import BaseAgent, is_termination_message
from agentchat.core.cancellation import CancellationToken
from agentchat.models.agent import AgentProfile, HumanInputMode
from agentchat.models.message import Message

logger = logging.getLogger(__name__)

TERMINATE_REPLY = "TERMINATE"


class UserProxyAgent(BaseAgent):
    """人类代理：按输入模式向 HumanInputProvider 索要回复，或自动回复。"""

    def __init__(
        self,
        name: str,
        human_input_mode: HumanInputMode = HumanInputMode.ALWAYS,
        input_provider: HumanInputProvider | None = None,
        max_consecutive_auto_reply: int = 100,
        default_auto_reply: str = "",
        system_message: str | None = None,
    ):
        super().__init__(name, system_message)
        self.human_input_mode = HumanInputMode(human_input_mode)
        self.input_provider = input_provider or ConsoleInputProvider()
        self.max_consecutive_auto_reply = max_consecutive_auto_reply
        self.default_auto_reply = default_auto_reply
        self._consecutive_auto_reply = 0

    @classmethod
    def from_profile(
        cls,
        profile: AgentProfile,
        input_provider: HumanInputProvider | None = None,
    ) -> UserProxyAgent:
        return cls(
            name=profile.name,
            human_input_mode=profile.human_input_mode,
            input_provider=input_provider,
            max_consecutive_auto_reply=profile.max_consecutive_auto_reply,
            default_auto_reply=profile.default_auto_reply,
            system_message=profile.system_message,
        )

    @property
    def consecutive_auto_reply(self) -> int:
        return self._consecutive_auto_reply

    def reset_auto_reply_counter(self) -> None:
        self._consecutive_auto_reply = 0

    def clear_history(self) -> None:
        super().clear_history()
        self._consecutive_auto_reply = 0

    def _auto_reply_exhausted(self) -> bool:
        return self._consecutive_auto_reply >= self.max_consecutive_auto_reply

    def _should_prompt(self, last: Message | None) -> bool:
        if self.human_input_mode == HumanInputMode.ALWAYS:
            return True
        if self.human_input_mode == HumanInputMode.NEVER:
            return False
        return (last is not None and is_termination_message(last)) or self._auto_reply_exhausted()

    def _build_context(self, last: Message | None) -> str:
        if last is None:
            return f"[{self.name}] Provide input (press enter to skip): "
        sender = last.name or last.role
        return f"[{sender}]: {last.content}\n[{self.name}] Provide feedback to {sender} (press enter to skip): "

    async def generate_reply(
        self,
        messages: list[Message],
        cancellation_token: CancellationToken | None = None,
    ) -> Message:
        last = messages[-1] if messages else None

        if self._should_prompt(last):
            context = self._build_context(last)
            if cancellation_token:
                text = await cancellation_token.run(self.input_provider.prompt_for_input(context))
            else:
                text = await self.input_provider.prompt_for_input(context)
            if text is not None:
                self._consecutive_auto_reply = 0
                logger.info("[INPUT] %s: human replied len=%d", self.name, len(text))
                return Message(role="user", content=text, name=self.name)
            logger.info("[INPUT] %s: no human input", self.name)

        return self._auto_reply()

    def _auto_reply(self) -> Message:
        if self._auto_reply_exhausted():
            logger.info(
                "[INPUT] %s: auto reply limit %d reached, terminating",
                self.name, self.max_consecutive_auto_reply,
            )
            return Message(role="user", content=TERMINATE_REPLY, name=self.name)
        self._consecutive_auto_reply += 1
        return Message(role="user", content=self.default_auto_reply, name=self.name)
