"""群聊引擎：固定成员列表上的轮流发言、共享记录、终止检测与轮数上限。

GroupChat 持有共享记录（transcript），成员不直接写入；每轮由 GroupChat 选出发言者、
把完整记录交给它生成回复，再以发言者名义追加。一次只有一个发言者在生成回复。

GroupChatManager 把 GroupChat 包装成 BaseAgent，使整场群聊可以作为一个参与者
嵌入其他对话；它的「回复」就是把整场群聊跑完，耗时取决于轮数与各成员的延迟。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from agentchat.core.agent import Agent, BaseAgent, is_termination_message
from agentchat.core.cancellation import CancellationToken
from agentchat.core.errors import ConfigurationError
from agentchat.models.message import Message
from agentchat.models.session import GroupChatConfig

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUND = 10
MIN_AGENTS = 2


class GroupChat:
    """多方对话会话：成员与配置构造后不变，记录与轮次计数可通过 reset 清空。

    成员名称默认唯一但不做校验；重名时记录中的归属会有歧义。
    """

    def __init__(
        self,
        agents: Sequence[Agent],
        max_round: int = DEFAULT_MAX_ROUND,
        admin_name: str = "Admin",
    ):
        if len(agents) < MIN_AGENTS:
            raise ConfigurationError(f"GroupChat requires at least {MIN_AGENTS} agents")
        if max_round < 1:
            raise ConfigurationError("GroupChat max_round must be at least 1")

        self._agents: tuple[Agent, ...] = tuple(agents)
        self._max_round = max_round
        self._admin_name = admin_name
        self._messages: list[Message] = []
        self._round = 0

    @classmethod
    def from_config(cls, agents: Sequence[Agent], config: GroupChatConfig) -> GroupChat:
        return cls(agents, max_round=config.max_round, admin_name=config.admin_name)

    @property
    def max_round(self) -> int:
        return self._max_round

    @property
    def admin_name(self) -> str:
        return self._admin_name

    @property
    def current_round(self) -> int:
        """已完成的发言轮数；首条消息算第 0 轮。"""
        return self._round

    def get_agents(self) -> list[Agent]:
        return list(self._agents)

    def get_messages(self) -> list[Message]:
        return list(self._messages)

    def add_message(self, message: Message) -> None:
        """从外部向记录追加一条消息，不触发任何发言。"""
        self._messages.append(message)

    def reset(self) -> None:
        """清空记录与轮次计数；成员与配置保留。"""
        self._messages = []
        self._round = 0

    def select_speaker(self, round_number: int) -> Agent:
        """第 round_number 轮（从 1 开始）的发言者：按成员顺序严格轮转。"""
        return self._agents[(round_number - 1) % len(self._agents)]

    def _seed_message(self, initial_message: str | Message) -> Message:
        if isinstance(initial_message, str):
            return Message(role="user", content=initial_message, name=self._admin_name)
        if initial_message.role != "user":
            return initial_message.model_copy(update={"role": "user"})
        return initial_message

    async def run(
        self,
        initial_message: str | Message,
        cancellation_token: CancellationToken | None = None,
    ) -> list[Message]:
        """以 initial_message 开场跑完整场群聊，返回记录的拷贝。

        每轮把完整记录交给发言者，回复以发言者名义追加后立即做终止检测；
        命中则不再安排下一轮。发言者抛出的异常原样传播，之前的记录保留。

        记录只由 reset 清空：未 reset 时再次 run，新的首条消息接在上一场记录之后，
        发言者能看到之前各场的全部内容；current_round 则从 0 重新计数，
        只反映本场已完成的轮数，轮数上限也按本场计算。
        """
        seed = self._seed_message(initial_message)
        self._messages.append(seed)
        self._round = 0
        logger.info(
            "[GROUP] run: agents=%s max_round=%d seed_preview=%s",
            [a.get_name() for a in self._agents], self._max_round, seed.preview(),
        )

        for round_number in range(1, self._max_round + 1):
            if cancellation_token:
                cancellation_token.raise_if_cancelled()

            speaker = self.select_speaker(round_number)
            speaker_name = speaker.get_name()
            try:
                reply = await speaker.generate_reply(self.get_messages(), cancellation_token)
            except Exception as e:
                logger.error(
                    "[GROUP] round %d: speaker %s failed: %s",
                    round_number, speaker_name, e, exc_info=True,
                )
                raise

            if reply.name != speaker_name:
                reply = reply.model_copy(update={"name": speaker_name})
            self._messages.append(reply)
            self._round = round_number
            logger.info(
                "[GROUP] round %d: speaker=%s content_preview=%s",
                round_number, speaker_name, reply.preview(),
            )

            if is_termination_message(reply):
                logger.info("[GROUP] termination detected: round=%d speaker=%s", round_number, speaker_name)
                break

        return self.get_messages()


class GroupChatManager(BaseAgent):
    """把一个 GroupChat 适配为 BaseAgent：可被直接驱动，也可作为两方对话中的一方。"""

    def __init__(
        self,
        group_chat: GroupChat,
        name: str = "chat_manager",
        system_message: str | None = None,
    ):
        super().__init__(name, system_message)
        self._group_chat = group_chat

    def get_group_chat(self) -> GroupChat:
        """返回所包装的 GroupChat 本身（共享引用），调用方可直接查看或 reset。"""
        return self._group_chat

    async def run_chat(
        self,
        task: str | Message,
        cancellation_token: CancellationToken | None = None,
    ) -> list[Message]:
        return await self._group_chat.run(task, cancellation_token)

    async def generate_reply(
        self,
        messages: list[Message],
        cancellation_token: CancellationToken | None = None,
    ) -> Message:
        """以最后一条消息为任务跑完整场群聊，用最终记录的最后一条内容作答。"""
        if not messages:
            raise ConfigurationError("GroupChatManager needs at least one message to start a chat")

        transcript = await self.run_chat(messages[-1], cancellation_token)
        return Message(role="assistant", content=transcript[-1].content, name=self.name)
