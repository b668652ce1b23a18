"""Agent 配置模型：AgentProfile、ProviderConfig、HumanInputMode。

用于从 YAML 加载或代码中构造的 Agent 元数据，不包含运行时状态（历史记录等）。
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class HumanInputMode(str, Enum):
    """UserProxyAgent 何时向人类索要输入。"""

    ALWAYS = "ALWAYS"        # 每一轮都询问
    TERMINATE = "TERMINATE"  # 仅在收到终止消息或自动回复次数耗尽时询问
    NEVER = "NEVER"          # 从不询问，只做自动回复


class ProviderConfig(BaseModel):
    """LLM 后端配置：后端类型、模型、采样参数、密钥与地址。

    显式传入 Provider 构造函数；编排核心从不直接读取环境变量，
    环境变量的解析见 agentchat.config.resolve_provider_config。
    """

    kind: str = "openai"            # openai / openrouter / ollama / 自行注册的类型
    model: str | None = None        # 为空时使用各 Provider 的默认模型
    temperature: float = 0.0
    max_tokens: int | None = 1000
    api_key: str | None = None
    api_key_env: str | None = None  # 从哪个环境变量读取 api_key
    base_url: str | None = None
    timeout: float = 120.0          # 单次 HTTP 调用超时（秒）
    headers: dict[str, str] = Field(default_factory=dict)


class AgentProfile(BaseModel):
    """Agent 档案：名称、类型、系统提示、后端配置与人类输入策略。"""

    name: str
    kind: Literal["assistant", "user_proxy"] = "assistant"
    description: str = ""
    system_message: str | None = None

    # assistant 类型使用
    provider: ProviderConfig = Field(default_factory=ProviderConfig)

    # user_proxy 类型使用
    human_input_mode: HumanInputMode = HumanInputMode.ALWAYS
    max_consecutive_auto_reply: int = 100
    default_auto_reply: str = ""
