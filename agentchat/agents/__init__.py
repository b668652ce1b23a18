"""具体 Agent：AssistantAgent（LLM 驱动）、UserProxyAgent（人类代理）与人类输入能力。"""
from agentchat.agents.assistant import AssistantAgent
from agentchat.agents.human_input import ConsoleInputProvider, HumanInputProvider
from agentchat.agents.user_proxy import UserProxyAgent

__all__ = [
    "AssistantAgent",
    "UserProxyAgent",
    "HumanInputProvider",
    "ConsoleInputProvider",
]
