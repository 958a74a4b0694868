from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chatbot.chats.chat import Chat
    from chatbot.messaging import MessagingService
    from shared.repositories.user import UserRepository


@dataclass(frozen=True)
class CommandContext:
    """Dependencies handed to every blockable check and execution."""

    chat: Chat
    users: UserRepository
    messaging: MessagingService
