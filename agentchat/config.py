"""环境配置解析：把环境变量中的密钥 / 地址填入 ProviderConfig。

只由启动代码（AgentRegistry、main）调用；编排核心与 Provider 只接收显式的 ProviderConfig。
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from agentchat.models.agent import ProviderConfig

logger = logging.getLogger(__name__)

# 各后端默认读取的 API key 环境变量
DEFAULT_API_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
}

# 各后端默认读取的服务地址环境变量
DEFAULT_BASE_URL_ENV = {
    "ollama": "OLLAMA_BASE_URL",
}


def resolve_provider_config(
    config: ProviderConfig,
    environ: Mapping[str, str] | None = None,
) -> ProviderConfig:
    """返回补全后的新配置：已显式配置的字段优先，环境变量只用于填空。"""
    env = os.environ if environ is None else environ
    kind = config.kind.lower()
    updates: dict = {}

    if not config.api_key:
        key_env = config.api_key_env or DEFAULT_API_KEY_ENV.get(kind)
        if key_env and env.get(key_env):
            updates["api_key"] = env[key_env]
        elif key_env:
            logger.debug("API key env %s not set for provider kind=%s", key_env, kind)

    if not config.base_url:
        url_env = DEFAULT_BASE_URL_ENV.get(kind)
        if url_env and env.get(url_env):
            updates["base_url"] = env[url_env]

    return config.model_copy(update=updates) if updates else config
