"""统一导出消息、Agent 与群聊相关数据模型，供其他模块引用。"""
from agentchat.models.agent import AgentProfile, HumanInputMode, ProviderConfig
from agentchat.models.message import FunctionCall, Message, Role
from agentchat.models.session import GroupChatConfig

__all__ = [
    "Message",
    "FunctionCall",
    "Role",
    "AgentProfile",
    "HumanInputMode",
    "ProviderConfig",
    "GroupChatConfig",
]
