"""agentchat 命令行入口。

本模块负责：
- 日志初始化
- 从 agents 目录加载档案并构造 Agent
- 按参数运行两方对话（--pair）或由 GroupChatManager 驱动的群聊，打印记录

示例：
    python -m agentchat.main "Design a smart notification system" \
        --agents designer engineer product_manager --max-round 6
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections import Counter
from dataclasses import dataclass

from agentchat.core.agent import BaseAgent
from agentchat.core.errors import ConfigurationError
from agentchat.core.group_chat import GroupChat, GroupChatManager
from agentchat.models.message import Message
from agentchat.providers.base import BaseProvider
from agentchat.registry.agent_registry import AgentRegistry

# 配置根日志格式，便于排查问题
logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


@dataclass
class RunOptions:
    """一次命令行运行的参数。"""

    task: str
    agents: list[str]
    agents_dir: str = "agents/"
    pair: bool = False
    max_round: int = 10
    max_rounds: int = 10
    admin_name: str = "Admin"


def parse_args(argv: list[str] | None = None) -> RunOptions:
    parser = argparse.ArgumentParser(prog="agentchat", description="Run a multi-agent conversation")
    parser.add_argument("task", help="initial message / task for the conversation")
    parser.add_argument("--agents", nargs="+", required=True, help="agent names from the agents directory")
    parser.add_argument("--agents-dir", default="agents/", help="directory holding agent YAML files")
    parser.add_argument("--pair", action="store_true", help="two-party chat between the first two agents")
    parser.add_argument("--max-round", type=int, default=10, help="group chat round budget")
    parser.add_argument("--max-rounds", type=int, default=10, help="two-party chat round budget")
    parser.add_argument("--admin-name", default="Admin", help="name attributed to the task message")
    ns = parser.parse_args(argv)
    if ns.pair and len(ns.agents) < 2:
        parser.error("--pair needs at least two agents")
    return RunOptions(
        task=ns.task,
        agents=ns.agents,
        agents_dir=ns.agents_dir,
        pair=ns.pair,
        max_round=ns.max_round,
        max_rounds=ns.max_rounds,
        admin_name=ns.admin_name,
    )


async def run(options: RunOptions, registry: AgentRegistry | None = None) -> list[Message]:
    """构造 Agent 并运行对话，返回交换的消息；结束时关闭所有 Provider 连接。"""
    registry = registry or AgentRegistry(config_dir=options.agents_dir)
    agents = registry.build_agents(options.agents)
    logger.info("agentchat started. agents=%s pair=%s", options.agents, options.pair)

    try:
        if options.pair:
            if len(agents) < 2:
                raise ConfigurationError("Two-party chat needs two agents")
            initiator, recipient = agents[0], agents[1]
            return await initiator.initiate_chat(recipient, options.task, max_rounds=options.max_rounds)

        group_chat = GroupChat(agents, max_round=options.max_round, admin_name=options.admin_name)
        manager = GroupChatManager(group_chat=group_chat)
        return await manager.run_chat(options.task)
    finally:
        await _close_providers(agents)


async def _close_providers(agents: list[BaseAgent]) -> None:
    for agent in agents:
        provider = getattr(agent, "provider", None)
        if isinstance(provider, BaseProvider):
            await provider.close()


def print_transcript(messages: list[Message]) -> None:
    print("=" * 60)
    for msg in messages:
        print(f"[{msg.name or msg.role}]: {msg.content}")
        print("-" * 60)
    stats = Counter(msg.name or msg.role for msg in messages)
    print(f"Total messages: {len(messages)}")
    for name, count in stats.items():
        print(f"  {name}: {count} message(s)")


def main(argv: list[str] | None = None) -> None:
    options = parse_args(argv)
    messages = asyncio.run(run(options))
    print_transcript(messages)


if __name__ == "__main__":
    main()
