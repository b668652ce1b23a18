"""命令行入口测试：参数解析与运行模式。"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from agentchat.agents.assistant import AssistantAgent
from agentchat.core.agent import BaseAgent
from agentchat.core.errors import ConfigurationError
from agentchat.main import RunOptions, parse_args, print_transcript, run
from agentchat.models.message import Message
from agentchat.providers.base import BaseProvider


class ScriptedAgent(BaseAgent):
    def __init__(self, name: str, reply: str):
        super().__init__(name)
        self.reply = reply

    async def generate_reply(self, messages, cancellation_token=None):
        return Message(role="assistant", content=self.reply, name=self.name)


def fake_registry(agents):
    registry = MagicMock()
    registry.build_agents.return_value = agents
    return registry


def test_parse_args_defaults():
    options = parse_args(["Plan a launch", "--agents", "designer", "engineer"])

    assert options == RunOptions(task="Plan a launch", agents=["designer", "engineer"])


def test_parse_args_pair_mode():
    options = parse_args([
        "Review this", "--agents", "user", "engineer",
        "--pair", "--max-rounds", "4", "--agents-dir", "configs/", "--admin-name", "Boss",
    ])

    assert options.pair is True
    assert options.max_rounds == 4
    assert options.agents_dir == "configs/"
    assert options.admin_name == "Boss"


def test_parse_args_pair_needs_two_agents(capsys):
    with pytest.raises(SystemExit) as exc_info:
        parse_args(["Review this", "--agents", "engineer", "--pair"])

    assert exc_info.value.code == 2
    assert "--pair needs at least two agents" in capsys.readouterr().err


async def test_run_pair_with_one_agent_is_configuration_error():
    options = RunOptions(task="Chat", agents=["a"], pair=True)

    with pytest.raises(ConfigurationError, match="needs two agents"):
        await run(options, registry=fake_registry([ScriptedAgent("a", "hi")]))


async def test_run_group_chat():
    agents = [ScriptedAgent("a", "idea"), ScriptedAgent("b", "TERMINATE")]
    options = RunOptions(task="Brainstorm", agents=["a", "b"], max_round=5, admin_name="Host")

    messages = await run(options, registry=fake_registry(agents))

    assert [m.name for m in messages] == ["Host", "a", "b"]


async def test_run_pair_chat():
    agents = [ScriptedAgent("a", "hello"), ScriptedAgent("b", "hi")]
    options = RunOptions(task="Chat", agents=["a", "b"], pair=True, max_rounds=3)

    messages = await run(options, registry=fake_registry(agents))

    assert [m.name for m in messages] == ["b", "a", "b"]


async def test_run_closes_providers():
    provider = MagicMock(spec=BaseProvider)
    provider.close = AsyncMock()
    provider.get_provider_name.return_value = "Mock"
    provider.generate_completion = AsyncMock(return_value="done, TERMINATE")
    agents = [AssistantAgent("writer", provider), ScriptedAgent("editor", "ok")]

    await run(RunOptions(task="Write", agents=["writer", "editor"]), registry=fake_registry(agents))

    provider.close.assert_awaited_once()


def test_print_transcript(capsys):
    print_transcript([
        Message(role="user", content="Start", name="Admin"),
        Message(role="assistant", content="Done", name="a"),
        Message(role="assistant", content="no name"),
    ])

    out = capsys.readouterr().out
    assert "[Admin]: Start" in out
    assert "[assistant]: no name" in out
    assert "Total messages: 3" in out
