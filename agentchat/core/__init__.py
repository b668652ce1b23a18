"""编排核心：Agent 抽象、两方对话、群聊引擎、取消令牌与异常体系。"""
from agentchat.core.agent import Agent, BaseAgent, is_termination_message
from agentchat.core.cancellation import CancellationToken
from agentchat.core.errors import (
    AgentChatError,
    AuthenticationError,
    BackendError,
    CancellationError,
    ConfigurationError,
    RateLimitError,
    TransportError,
)
from agentchat.core.group_chat import GroupChat, GroupChatManager

__all__ = [
    "Agent",
    "BaseAgent",
    "is_termination_message",
    "CancellationToken",
    "GroupChat",
    "GroupChatManager",
    "AgentChatError",
    "ConfigurationError",
    "BackendError",
    "AuthenticationError",
    "RateLimitError",
    "TransportError",
    "CancellationError",
]
