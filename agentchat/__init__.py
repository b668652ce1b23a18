"""agentchat：多 Agent 对话编排（两方对话、轮流发言的群聊、可插拔 LLM 后端）。"""
from agentchat.agents import AssistantAgent, ConsoleInputProvider, HumanInputProvider, UserProxyAgent
from agentchat.core import (
    Agent,
    AgentChatError,
    AuthenticationError,
    BackendError,
    BaseAgent,
    CancellationError,
    CancellationToken,
    ConfigurationError,
    GroupChat,
    GroupChatManager,
    RateLimitError,
    TransportError,
    is_termination_message,
)
from agentchat.models import AgentProfile, GroupChatConfig, HumanInputMode, Message, ProviderConfig
from agentchat.providers import (
    BaseProvider,
    OllamaProvider,
    OpenAIProvider,
    OpenRouterProvider,
    create_provider,
    register_provider,
)

__version__ = "0.1.0"

__all__ = [
    "Agent",
    "BaseAgent",
    "AssistantAgent",
    "UserProxyAgent",
    "HumanInputProvider",
    "ConsoleInputProvider",
    "GroupChat",
    "GroupChatManager",
    "CancellationToken",
    "is_termination_message",
    "Message",
    "AgentProfile",
    "ProviderConfig",
    "GroupChatConfig",
    "HumanInputMode",
    "BaseProvider",
    "OpenAIProvider",
    "OpenRouterProvider",
    "OllamaProvider",
    "create_provider",
    "register_provider",
    "AgentChatError",
    "ConfigurationError",
    "BackendError",
    "AuthenticationError",
    "RateLimitError",
    "TransportError",
    "CancellationError",
]
