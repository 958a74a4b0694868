"""ChatManager: owns every Chat and isolates per-message failures."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from chatbot.chats.chat import Chat, CommandFactory
from chatbot.command.commands import USER_COMMANDS
from chatbot.locales import get_language
from chatbot.message import Message
from chatbot.messaging import MessagingService
from shared.cache import KeyedLocks
from shared.repositories.chat import ChatRepository
from shared.repositories.routine import RoutineRepository
from shared.repositories.user import UserRepository

LOGGER: logging.Logger = logging.getLogger("ChatManager")


class ChatManager:
    """Entry point for inbound messages from the transport.

    Chats are created lazily the first time a conversation is seen. One
    failing command is logged and answered with a generic error reply; it
    never propagates to the transport loop.
    """

    def __init__(
        self,
        *,
        chats: ChatRepository,
        users: UserRepository,
        messaging: MessagingService,
        routines: RoutineRepository | None = None,
        commands: Sequence[CommandFactory] = USER_COMMANDS,
    ) -> None:
        self.chats = chats
        self.users = users
        self.messaging = messaging
        self.routines = routines
        self._commands = tuple(commands)
        self._chats: dict[str, Chat] = {}
        self._locks = KeyedLocks()

    @property
    def active_chats(self) -> int:
        return len(self._chats)

    def get_cached_chat(self, chat_id: str) -> Chat | None:
        return self._chats.get(chat_id)

    async def get_chat(self, chat_id: str) -> Chat:
        chat = self._chats.get(chat_id)
        if chat is not None:
            return chat

        async with self._locks.hold(chat_id):
            chat = self._chats.get(chat_id)
            if chat is not None:
                return chat

            model = await self.chats.ensure_chat(chat_id)
            chat = Chat(
                model,
                users=self.users,
                messaging=self.messaging,
                chats=self.chats,
                routines=self.routines,
                commands=self._commands,
            )
            await chat.setup_handlers()
            self._chats[chat_id] = chat
            return chat

    async def handle_message(self, message: Message) -> None:
        if message.from_me:
            return

        LOGGER.debug(f"[{message.sender}#{message.chat_id}]: {message.content}")

        try:
            await self.users.ensure(message.sender)
            chat = await self.get_chat(message.chat_id)
            await chat.handle_message(message)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            LOGGER.exception(
                f"Error handling message {message.id} in {message.chat_id}: "
                f"{type(e).__name__}: {e}"
            )
            await self._reply_error(message)

    async def _reply_error(self, message: Message) -> None:
        chat = self._chats.get(message.chat_id)
        language = chat.model.language if chat else self.chats.default_language
        try:
            await self.messaging.reply(message, get_language(language)["errors"]["generic"], True)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            LOGGER.warning(f"Failed to send error reply in {message.chat_id}: {e}")

    async def reload_routines(self, chat_id: str) -> None:
        """Refresh a chat's routines after their config changed."""
        chat = self._chats.get(chat_id)
        if chat is not None:
            await chat.reload_routines()
