"""
Pytest configuration and shared fixtures for the dispatcher tests.
"""

import itertools
from unittest.mock import AsyncMock, MagicMock

import pytest

from chatbot.blockable import BlockedReason
from chatbot.chats import Chat
from chatbot.command import Command
from chatbot.message import Message
from shared.models.chat import ChatModel
from shared.repositories.chat import ChatRepository
from shared.repositories.user import UserRepository

CHAT_ID = "chat-1"
USER_ID = "user-1"

_message_ids = itertools.count(1)


class FakeClock:
    """Epoch-seconds clock that only moves when told to."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingCommand(Command):
    """Command double that records executions and block notifications."""

    def __init__(
        self,
        name="echo",
        triggers=("echo",),
        *,
        cooldown=60,
        block=None,
        fail=False,
        category="test",
    ):
        super().__init__(
            name=name,
            triggers=triggers,
            cooldown=cooldown,
            category=category,
            description=f"{name} command",
            usage=f"$(prefix){triggers[0]}",
        )
        self.block = block
        self.fail = fail
        self.calls = []
        self.blocked = []
        self.checks = 0

    async def check_blocked(self, context, message, *, strict=True):
        self.checks += 1
        return self.block

    async def on_blocked(self, context, message, reason: BlockedReason):
        self.blocked.append(reason)

    async def execute(self, context, message, raw_body, body, *args):
        self.calls.append((raw_body, body, args))
        if self.fail:
            raise RuntimeError("command exploded")


def make_message(content, *, sender=USER_ID, chat_id=CHAT_ID, **kwargs) -> Message:
    return Message(
        id=f"msg-{next(_message_ids)}",
        chat_id=chat_id,
        sender=sender,
        content=content,
        **kwargs,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def users(clock):
    return UserRepository(clock=clock)


@pytest.fixture
def chats():
    return ChatRepository()


@pytest.fixture
def messaging():
    """Stand-in for the transport's reply sender."""
    service = MagicMock()
    service.reply = AsyncMock()
    service.reply_advanced = AsyncMock()
    return service


@pytest.fixture
def echo():
    return RecordingCommand()


@pytest.fixture
def make_chat(users, messaging):
    """Build a Chat for CHAT_ID with the given command instances."""

    def _make(*commands, prefix="!", language="en", **kwargs):
        factories = [lambda _language, c=c: c for c in commands]
        return Chat(
            ChatModel(CHAT_ID, command_prefix=prefix, language=language),
            users=users,
            messaging=messaging,
            commands=kwargs.pop("factories", factories),
            **kwargs,
        )

    return _make
