"""GroupChat / GroupChatManager 单元测试。"""

import pytest

from agentchat.core.agent import BaseAgent
from agentchat.core.errors import BackendError, ConfigurationError
from agentchat.core.group_chat import GroupChat, GroupChatManager
from agentchat.models.message import Message
from agentchat.models.session import GroupChatConfig


class MockAgent(BaseAgent):
    """按顺序循环给出预设回复的测试 Agent。"""

    def __init__(self, name: str, mock_replies: list[str] | None = None):
        super().__init__(name)
        self.mock_replies = mock_replies or ["Mock reply"]
        self.reply_index = 0
        self.seen: list[list[Message]] = []

    async def generate_reply(self, messages, cancellation_token=None):
        self.seen.append(list(messages))
        reply = self.mock_replies[self.reply_index % len(self.mock_replies)]
        self.reply_index += 1
        return Message(role="assistant", content=reply, name=self.name)


class FailingAgent(BaseAgent):
    async def generate_reply(self, messages, cancellation_token=None):
        raise BackendError("rate limited", provider="mock", status_code=429)


def make_agents(*specs):
    return [MockAgent(name, replies) for name, replies in specs]


# ── 构造 ──

def test_create_group_chat():
    group_chat = GroupChat(make_agents(("agent1", None), ("agent2", None)))
    assert len(group_chat.get_agents()) == 2


@pytest.mark.parametrize("count", [0, 1])
def test_requires_at_least_two_agents(count):
    agents = make_agents(*[(f"agent{i}", None) for i in range(count)])
    with pytest.raises(ConfigurationError, match="GroupChat requires at least 2 agents"):
        GroupChat(agents)


def test_default_max_round():
    group_chat = GroupChat(make_agents(("agent1", None), ("agent2", None)))
    assert group_chat.max_round == 10


def test_custom_max_round_and_config():
    agents = make_agents(("agent1", None), ("agent2", None))
    assert GroupChat(agents, max_round=5).max_round == 5

    group_chat = GroupChat.from_config(agents, GroupChatConfig(max_round=3, admin_name="TaskInitiator"))
    assert group_chat.max_round == 3
    assert group_chat.admin_name == "TaskInitiator"


def test_invalid_max_round():
    with pytest.raises(ConfigurationError):
        GroupChat(make_agents(("agent1", None), ("agent2", None)), max_round=0)


# ── 访问器 ──

def test_get_agents_returns_copy():
    agents = make_agents(("agent1", None), ("agent2", None))
    group_chat = GroupChat(agents)

    agents1 = group_chat.get_agents()
    agents2 = group_chat.get_agents()
    assert agents1 is not agents2
    assert agents1 == agents2

    agents1.pop()
    agents.append(MockAgent("late"))
    assert len(group_chat.get_agents()) == 2


def test_messages_empty_initially_and_after_add():
    group_chat = GroupChat(make_agents(("agent1", None), ("agent2", None)))
    assert group_chat.get_messages() == []

    msg = Message(role="user", content="Test message")
    group_chat.add_message(msg)

    assert group_chat.get_messages() == [msg]
    assert group_chat.current_round == 0


def test_get_messages_returns_copy():
    group_chat = GroupChat(make_agents(("agent1", None), ("agent2", None)))
    group_chat.add_message(Message(role="user", content="Test"))

    messages = group_chat.get_messages()
    messages.clear()

    assert len(group_chat.get_messages()) == 1


# ── run ──

async def test_run_starts_with_initial_message():
    group_chat = GroupChat(make_agents(("agent1", ["TERMINATE"]), ("agent2", ["Response"])), max_round=3)

    messages = await group_chat.run("Hello")

    assert messages[0].content == "Hello"
    assert messages[0].role == "user"
    assert messages[0].name == "Admin"


async def test_run_terminates_on_keyword():
    group_chat = GroupChat(make_agents(("agent1", ["TERMINATE"]), ("agent2", ["Response"])), max_round=10)

    messages = await group_chat.run("Start")

    assert len(messages) == 2
    assert messages[-1].name == "agent1"
    assert group_chat.current_round == 1


async def test_run_respects_max_round():
    group_chat = GroupChat(make_agents(("agent1", ["Continue"]), ("agent2", ["Continue"])), max_round=3)

    messages = await group_chat.run("Start")

    # 首条消息 + max_round 条回复
    assert len(messages) == 4
    assert group_chat.current_round == 3


async def test_round_robin_order():
    agents = make_agents(("a", ["x"]), ("b", ["y"]), ("c", ["z"]))
    group_chat = GroupChat(agents, max_round=7)

    messages = await group_chat.run("Start")

    speakers = [m.name for m in messages[1:]]
    assert speakers == [agents[(k - 1) % 3].get_name() for k in range(1, 8)]


async def test_third_participant_terminates_on_first_turn():
    agents = make_agents(("A", ["Reply from A"]), ("B", ["Reply from B"]), ("C", ["TERMINATE"]))
    group_chat = GroupChat(agents, max_round=5)

    messages = await group_chat.run("Start")

    assert [m.name for m in messages[1:]] == ["A", "B", "C"]
    assert messages[-1].content == "TERMINATE"
    assert group_chat.current_round == 3


async def test_every_speaker_sees_full_transcript():
    agents = make_agents(("A", ["a1"]), ("B", ["b1"]), ("C", ["c1"]))
    group_chat = GroupChat(agents, max_round=3)

    await group_chat.run("Start")

    assert [m.content for m in agents[2].seen[0]] == ["Start", "a1", "b1"]
    # 成员自己的历史不被群聊改写
    assert agents[0].get_conversation_history() == []


async def test_reply_is_attributed_to_speaker():
    class Anonymous(BaseAgent):
        async def generate_reply(self, messages, cancellation_token=None):
            return Message(role="assistant", content="no name")

    group_chat = GroupChat([Anonymous("anon"), MockAgent("named", ["TERMINATE"])], max_round=4)

    messages = await group_chat.run("Start")

    assert messages[1].name == "anon"


async def test_run_with_message_seed_is_tagged_user():
    group_chat = GroupChat(make_agents(("agent1", ["TERMINATE"]), ("agent2", None)))

    messages = await group_chat.run(Message(role="assistant", content="Seed", name="boss"))

    assert messages[0] == Message(role="user", content="Seed", name="boss")


async def test_run_propagates_error_and_keeps_transcript():
    group_chat = GroupChat([MockAgent("ok", ["fine"]), FailingAgent("broken")], max_round=5)

    with pytest.raises(BackendError):
        await group_chat.run("Start")

    assert [m.content for m in group_chat.get_messages()] == ["Start", "fine"]
    assert group_chat.current_round == 1


async def test_custom_speaker_selection():
    class AlwaysFirst(GroupChat):
        def select_speaker(self, round_number):
            return self.get_agents()[0]

    group_chat = AlwaysFirst(make_agents(("lead", ["go"]), ("other", ["TERMINATE"])), max_round=3)

    messages = await group_chat.run("Start")

    assert [m.name for m in messages[1:]] == ["lead", "lead", "lead"]


async def test_run_again_without_reset_continues_transcript():
    agents = make_agents(("agent1", ["one"]), ("agent2", ["two"]))
    group_chat = GroupChat(agents, max_round=2)

    await group_chat.run("First task")
    messages = await group_chat.run("Second task")

    assert [m.content for m in messages] == ["First task", "one", "two", "Second task", "one", "two"]
    assert group_chat.current_round == 2
    # 第二场的发言者能看到第一场的内容
    assert [m.content for m in agents[0].seen[1]] == ["First task", "one", "two", "Second task"]


async def test_manager_driven_twice_keeps_transcript_until_reset():
    group_chat = GroupChat(make_agents(("writer", ["draft"]), ("editor", ["approved, TERMINATE"])))
    manager = GroupChatManager(group_chat)

    await manager.run_chat("Task one")
    await manager.run_chat("Task two")
    assert len(group_chat.get_messages()) == 6
    assert group_chat.current_round == 2

    manager.get_group_chat().reset()
    messages = await manager.run_chat("Task three")
    assert [m.content for m in messages] == ["Task three", "draft", "approved, TERMINATE"]


# ── reset ──

async def test_reset_clears_transcript_and_round():
    agents = make_agents(("agent1", ["Continue"]), ("agent2", ["Continue"]))
    group_chat = GroupChat(agents, max_round=4)

    await group_chat.run("Hello")
    assert group_chat.get_messages()
    assert group_chat.current_round == 4

    group_chat.reset()

    assert group_chat.get_messages() == []
    assert group_chat.current_round == 0
    assert group_chat.get_agents() == agents
    assert group_chat.max_round == 4


# ── GroupChatManager ──

def test_manager_defaults():
    group_chat = GroupChat(make_agents(("agent1", None), ("agent2", None)))
    manager = GroupChatManager(group_chat=group_chat)

    assert manager.get_name() == "chat_manager"
    assert manager.get_group_chat() is group_chat


def test_manager_custom_name():
    group_chat = GroupChat(make_agents(("agent1", None), ("agent2", None)))
    manager = GroupChatManager(group_chat=group_chat, name="custom_manager")
    assert manager.get_name() == "custom_manager"


async def test_manager_run_chat():
    group_chat = GroupChat(make_agents(("agent1", ["TERMINATE"]), ("agent2", ["Response"])))
    manager = GroupChatManager(group_chat=group_chat)

    messages = await manager.run_chat("Start conversation")

    assert [m.content for m in messages] == ["Start conversation", "TERMINATE"]
    assert group_chat.get_messages() == messages


async def test_manager_as_participant_in_two_party_chat():
    group_chat = GroupChat(make_agents(("writer", ["draft"]), ("editor", ["approved, TERMINATE"])), max_round=6)
    manager = GroupChatManager(group_chat=group_chat)
    requester = MockAgent("requester", ["thanks"])

    chat = await requester.initiate_chat(manager, "Write a haiku", max_rounds=4)

    assert len(chat) == 1
    assert chat[0].name == "chat_manager"
    assert chat[0].content == "approved, TERMINATE"
    assert [m.content for m in group_chat.get_messages()] == ["Write a haiku", "draft", "approved, TERMINATE"]


async def test_manager_generate_reply_requires_messages():
    manager = GroupChatManager(GroupChat(make_agents(("agent1", None), ("agent2", None))))
    with pytest.raises(ConfigurationError):
        await manager.generate_reply([])
