"""Agent 抽象与基础对话 Agent：身份、历史记录、消息收发与两方对话循环。

- Agent：所有参与者的能力接口（名称 + 根据历史生成回复），GroupChat 只依赖它。
- BaseAgent：在 Agent 之上管理自己的对话历史，提供 send / receive / initiate_chat。
- is_termination_message：终止判定，内容中（不区分大小写）出现 "terminate" 或
  "goodbye" 子串即视为终止，两方循环与群聊循环共用。

历史记录只由所属 Agent 自己追加；对外只返回拷贝。
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from agentchat.core.cancellation import CancellationToken
from agentchat.core.errors import ConfigurationError
from agentchat.models.message import Message

logger = logging.getLogger(__name__)

TERMINATION_KEYWORDS = ("terminate", "goodbye")


def is_termination_message(message: Message) -> bool:
    """子串匹配，不区分大小写；普通文本里出现这些词同样会触发终止。"""
    content = (message.content or "").lower()
    return any(keyword in content for keyword in TERMINATION_KEYWORDS)


class Agent(ABC):
    """对话参与者的最小能力接口：报告名称、根据消息历史生成一条回复。"""

    @abstractmethod
    def get_name(self) -> str:
        ...

    @abstractmethod
    async def generate_reply(
        self,
        messages: list[Message],
        cancellation_token: CancellationToken | None = None,
    ) -> Message:
        """根据传入的消息历史生成回复。

        cancellation_token 触发时必须中止进行中的后端调用并抛出 CancellationError，
        不能返回半截或过期的回复。
        """
        ...


class BaseAgent(Agent):
    """带对话历史的 Agent 基类：子类只需实现 generate_reply。

    配置了 system_message 时，历史的第一条永远是该系统消息，clear_history 也不会移除它。
    """

    def __init__(self, name: str, system_message: str | None = None):
        self.name = name
        self.system_message = system_message
        self._history: list[Message] = []
        self.clear_history()

    def get_name(self) -> str:
        return self.name

    # ── 历史记录 ──

    def get_conversation_history(self) -> list[Message]:
        """返回历史的拷贝；Message 本身不可变，浅拷贝即可隔离内部状态。"""
        return list(self._history)

    def clear_history(self) -> None:
        """清空历史；若配置了系统提示则重新放回第一条。"""
        self._history = []
        if self.system_message:
            self._history.append(Message(role="system", content=self.system_message))

    def add_to_history(self, message: Message) -> None:
        self._history.append(message)

    # ── 消息收发 ──

    def _normalize(self, message: str | Message) -> Message:
        """把字符串或 Message 规整为 user / assistant 角色、带发送者名称的消息。"""
        if isinstance(message, str):
            return Message(role="user", content=message, name=self.name)
        updates: dict = {}
        if message.role not in ("user", "assistant"):
            updates["role"] = "user"
        if message.name is None:
            updates["name"] = self.name
        return message.model_copy(update=updates) if updates else message

    async def send(
        self,
        message: str | Message,
        recipient: BaseAgent,
        request_reply: bool = True,
        cancellation_token: CancellationToken | None = None,
    ) -> Message | None:
        """发送一条消息：先写入自己的历史；request_reply 为 False 时不调用对方，直接返回 None。

        需要回复时由 recipient.receive 生成回复，回复同样写入自己的历史并返回。
        对方抛出的异常原样向上传播。
        """
        msg = self._normalize(message)
        self.add_to_history(msg)
        logger.info(
            "[CALL] send: %s -> %s request_reply=%s content_preview=%s",
            self.name, recipient.get_name(), request_reply, msg.preview(),
        )
        if not request_reply:
            return None

        reply = await recipient.receive(msg, self, cancellation_token)
        self.add_to_history(reply)
        return reply

    async def receive(
        self,
        message: Message,
        sender: Agent | None = None,
        cancellation_token: CancellationToken | None = None,
    ) -> Message:
        """收到消息后基于「自己的历史 + 新消息」生成回复。

        只有生成成功后才把收到的消息与回复写入历史，失败或取消时历史保持原样。
        """
        return await self._reply_to(message, sender, cancellation_token, record_message=True)

    async def _reply_to(
        self,
        message: Message,
        sender: Agent | None,
        cancellation_token: CancellationToken | None,
        record_message: bool,
    ) -> Message:
        context = self.get_conversation_history()
        if record_message:
            context.append(message)

        reply = await self.generate_reply(context, cancellation_token)

        if record_message:
            self.add_to_history(message)
        self.add_to_history(reply)
        logger.info(
            "[CALL] receive: %s replied to %s reply_len=%d",
            self.name, sender.get_name() if sender else message.name, len(reply.content),
        )
        return reply

    async def _pass_back(
        self,
        reply: Message,
        recipient: BaseAgent,
        cancellation_token: CancellationToken | None = None,
    ) -> Message:
        """把自己刚生成的回复交回对方继续对话。

        这条回复已在双方历史末尾（自己在 receive 时写入，对方在 send 时写入），
        因此两边都不再追加，只记录对方的新回复。
        """
        logger.info(
            "[CALL] send: %s -> %s request_reply=True content_preview=%s",
            self.name, recipient.get_name(), reply.preview(),
        )
        new_reply = await recipient._reply_to(reply, self, cancellation_token, record_message=False)
        self.add_to_history(new_reply)
        return new_reply

    @abstractmethod
    async def generate_reply(
        self,
        messages: list[Message],
        cancellation_token: CancellationToken | None = None,
    ) -> Message:
        ...

    # ── 两方对话 ──

    async def initiate_chat(
        self,
        recipient: BaseAgent,
        message: str | Message,
        max_rounds: int = 10,
        cancellation_token: CancellationToken | None = None,
    ) -> list[Message]:
        """与 recipient 进行严格交替的两方对话，返回按时间顺序交换的回复（不含首条消息）。

        第一轮由自己 send 首条消息；之后每一轮由上一轮的回复方把回复交回对方，
        双方历史各记录一次，不重复。
        出现终止消息或达到 max_rounds 时停止，因此无终止时返回恰好 max_rounds 条。
        """
        if max_rounds < 1:
            raise ConfigurationError("max_rounds must be at least 1")

        logger.info(
            "[CHAT] initiate_chat: %s -> %s max_rounds=%d",
            self.name, recipient.get_name(), max_rounds,
        )
        chat: list[Message] = []
        current = message
        sender, receiver = self, recipient

        for round_number in range(1, max_rounds + 1):
            if cancellation_token:
                cancellation_token.raise_if_cancelled()
            try:
                if round_number == 1:
                    reply = await sender.send(current, receiver, True, cancellation_token)
                else:
                    reply = await sender._pass_back(current, receiver, cancellation_token)
            except Exception as e:
                logger.error(
                    "[CHAT] round %d failed: %s -> %s error=%s",
                    round_number, sender.get_name(), receiver.get_name(), e,
                    exc_info=True,
                )
                raise

            chat.append(reply)
            logger.info(
                "[CHAT] round %d: %s replied content_preview=%s",
                round_number, receiver.get_name(), reply.preview(),
            )
            if is_termination_message(reply):
                logger.info("[CHAT] termination detected at round %d", round_number)
                break

            current = reply
            sender, receiver = receiver, sender

        return chat

    @staticmethod
    def is_termination_message(message: Message) -> bool:
        return is_termination_message(message)
