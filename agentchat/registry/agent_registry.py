"""Agent 注册表：从 agents 目录的 YAML 加载 AgentProfile，支持动态注册、重载与构造 Agent。

YAML 示例：
    name: designer
    kind: assistant
    system_message: You are a creative product designer.
    provider:
      kind: openai
      model: gpt-3.5-turbo
      temperature: 0.8
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from agentchat.agents.assistant import AssistantAgent
from agentchat.agents.human_input import HumanInputProvider
from agentchat.agents.user_proxy import UserProxyAgent
from agentchat.config import resolve_provider_config
from agentchat.core.agent import BaseAgent
from agentchat.models.agent import AgentProfile

logger = logging.getLogger(__name__)


class AgentRegistry:
    """内存中的 Agent 配置表：name -> AgentProfile，支持从目录加载与重载。"""

    def __init__(self, config_dir: str = "agents/", environ: Mapping[str, str] | None = None):
        """指定配置目录并立即加载所有 *.yaml；environ 用于解析 API key（默认 os.environ）。"""
        self.profiles: dict[str, AgentProfile] = {}
        self.config_dir = config_dir
        self.environ = environ
        self._load_from_dir(config_dir)

    def _load_from_dir(self, config_dir: str) -> None:
        """遍历目录下所有 .yaml / .yml 文件，解析为 AgentProfile；单个文件出错只记录日志并跳过。"""
        config_path = Path(config_dir)
        if not config_path.exists():
            logger.warning("Agent config directory not found: %s", config_dir)
            return

        files = sorted(config_path.glob("*.yaml")) + sorted(config_path.glob("*.yml"))
        for file in files:
            try:
                profile = self._load_profile(file)
                self.profiles[profile.name] = profile
                logger.info("Loaded agent: %s (%s) from %s", profile.name, profile.kind, file.name)
            except Exception as e:
                logger.error("Failed to load agent from %s: %s", file, e)

    def _load_profile(self, file: Path) -> AgentProfile:
        with open(file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"expected a mapping, got {type(data).__name__}")
        data.setdefault("name", file.stem)
        return AgentProfile.model_validate(data)

    def register_profile(self, profile: AgentProfile) -> None:
        """加入一个档案；同名覆盖。"""
        self.profiles[profile.name] = profile
        logger.info("Registered agent: %s (%s)", profile.name, profile.kind)

    def unregister_profile(self, name: str) -> None:
        if name in self.profiles:
            del self.profiles[name]
            logger.info("Unregistered agent: %s", name)

    def get_profile(self, name: str) -> AgentProfile:
        """按名称获取档案；不存在则抛 KeyError。"""
        if name not in self.profiles:
            raise KeyError(f"Agent not found: {name}")
        return self.profiles[name]

    def list_profiles(self) -> list[AgentProfile]:
        return list(self.profiles.values())

    def reload(self) -> None:
        """清空当前表并从 config_dir 重新加载。"""
        self.profiles.clear()
        self._load_from_dir(self.config_dir)

    def build_agent(
        self,
        name: str,
        input_provider: HumanInputProvider | None = None,
    ) -> BaseAgent:
        """按档案构造 Agent：assistant 会先用环境变量补全 ProviderConfig。"""
        profile = self.get_profile(name)
        if profile.kind == "user_proxy":
            return UserProxyAgent.from_profile(profile, input_provider)

        provider_config = resolve_provider_config(profile.provider, self.environ)
        resolved = profile.model_copy(update={"provider": provider_config})
        return AssistantAgent.from_profile(resolved)

    def build_agents(
        self,
        names: list[str],
        input_provider: HumanInputProvider | None = None,
    ) -> list[BaseAgent]:
        return [self.build_agent(name, input_provider) for name in names]
