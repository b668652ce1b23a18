"""Agent 注册表：从 YAML 加载档案并构造 Agent。"""
from agentchat.registry.agent_registry import AgentRegistry

__all__ = ["AgentRegistry"]
