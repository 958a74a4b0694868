"""Chat: the per-conversation dispatch pipeline."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from chatbot.blockable import Blockable, BlockedReason, Triggerable
from chatbot.command import Command
from chatbot.command.commands import USER_COMMANDS, DonateCommand
from chatbot.context import CommandContext
from chatbot.formatting import format_placeholders, format_seconds, plural_form
from chatbot.handlers import BlockableHandler, CommandHandler, RoutineHandler
from chatbot.locales import get_language
from chatbot.message import Button, Message, ReplyContent
from chatbot.messaging import MessagingService
from chatbot.routine import build_routines
from shared.models.chat import ChatModel
from shared.repositories.chat import ChatRepository
from shared.repositories.routine import RoutineRepository
from shared.repositories.user import UserRepository

LOGGER: logging.Logger = logging.getLogger("Chat")

C = TypeVar("C", bound=Command)

# builds a command for a language code; command classes qualify
CommandFactory = Callable[[str], Command]


class Chat:
    """One conversation: its configuration, handlers and dispatch.

    The handler set is an immutable tuple swapped in whole by the
    registration methods, which are serialized by a per-chat lock.
    Dispatch reads whatever snapshot is current and never takes that lock.
    """

    def __init__(
        self,
        model: ChatModel,
        *,
        users: UserRepository,
        messaging: MessagingService,
        chats: ChatRepository | None = None,
        routines: RoutineRepository | None = None,
        commands: Sequence[CommandFactory] = USER_COMMANDS,
    ) -> None:
        self.model = model
        self.users = users
        self.messaging = messaging
        self.chats = chats
        self.routines = routines
        self._command_factories = tuple(commands)
        self._handlers: tuple[BlockableHandler, ...] = ()
        self._registered = False
        self._lock = asyncio.Lock()
        self.context = CommandContext(chat=self, users=users, messaging=messaging)

    @property
    def chat_id(self) -> str:
        return self.model.chat_id

    @property
    def handlers(self) -> tuple[BlockableHandler, ...]:
        return self._handlers

    @property
    def command_handler(self) -> CommandHandler | None:
        for handler in self._handlers:
            if isinstance(handler, CommandHandler):
                return handler
        return None

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    async def setup_handlers(self) -> None:
        """Build the command and routine handlers once. Idempotent."""
        async with self._lock:
            if self._registered:
                return

            prefix = self.model.command_prefix
            self._handlers = (
                CommandHandler(prefix, self._build_commands()),
                RoutineHandler(prefix, await self._load_routines()),
            )
            self._registered = True

        LOGGER.info(f"Handlers registered for chat {self.chat_id} (prefix={prefix!r})")

    async def update_prefix(self, prefix: str) -> None:
        """Replace the command prefix; the old prefix stops matching at once."""
        async with self._lock:
            if self.chats is not None:
                self.model = await self.chats.update_prefix(self.chat_id, prefix)
            else:
                self.model.command_prefix = prefix
            self._handlers = tuple(handler.with_prefix(prefix) for handler in self._handlers)

        LOGGER.info(f"Prefix of chat {self.chat_id} changed to {prefix!r}")

    async def update_language(self, language: str) -> None:
        async with self._lock:
            if self.chats is not None:
                self.model = await self.chats.update_language(self.chat_id, language)
            else:
                self.model.language = language
            self._swap_commands()

        LOGGER.info(f"Language of chat {self.chat_id} changed to {language}")

    async def register_user_commands(self) -> None:
        """Rebuild the command set for the current language and prefix."""
        async with self._lock:
            self._swap_commands()

    async def reload_routines(self) -> None:
        async with self._lock:
            routines = await self._load_routines()
            self._handlers = tuple(
                handler.with_blockables(routines) if isinstance(handler, RoutineHandler) else handler
                for handler in self._handlers
            )

    def _build_commands(self) -> list[Command]:
        return [factory(self.model.language) for factory in self._command_factories]

    def _swap_commands(self) -> None:
        if not self._registered:
            return
        commands = self._build_commands()
        self._handlers = tuple(
            handler.with_blockables(commands) if isinstance(handler, CommandHandler) else handler
            for handler in self._handlers
        )

    async def _load_routines(self) -> list[Blockable]:
        if self.routines is None:
            return []
        return list(build_routines(await self.routines.list_enabled(self.chat_id)))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def get_handlers(self, message: Message) -> list[BlockableHandler]:
        handlers = self._handlers
        return [handler for handler in handlers if await handler.appliable(message)]

    async def handle_message(self, message: Message) -> None:
        """Resolve, check and run every match of *message*.

        Errors raised by a command propagate to the caller.
        """
        if message.from_me:
            return

        if not self._registered:
            await self.setup_handlers()

        for handler in await self.get_handlers(message):
            for trigger, blockable in await handler.find(message):
                reason = await self._claim(message, blockable)

                if reason is BlockedReason.COOLDOWN:
                    await self._send_cooldown_notice(message, blockable)

                if reason is not None:
                    LOGGER.debug(
                        f"[BLOCK] {blockable.name} for {message.sender} in {self.chat_id}: "
                        f"{reason.value}"
                    )
                    await blockable.on_blocked(self.context, message, reason)
                    continue

                await self._execute(message, trigger, blockable, handler)

    async def is_executable_command(self, message: Message) -> tuple[bool, list[Command] | None]:
        """Dry run of dispatch for *message*: no ledger write, no reply.

        Returns ``(False, None)`` when a match would be blocked, otherwise
        ``(True, commands)`` with the commands that would run.
        """
        handler = self.command_handler
        if handler is None:
            return False, None

        executables: list[Command] = []
        for _, blockable in await handler.find(message):
            if await blockable.is_blocked(self.context, message, strict=False) is not None:
                return False, None
            if isinstance(blockable, Command):
                executables.append(blockable)

        return True, executables

    async def _claim(self, message: Message, blockable: Blockable) -> BlockedReason | None:
        """Check blocking and, when clear, stamp the cooldown in one step.

        Two tasks racing on the same (user, chat, command) are serialized
        here, so at most one of them sees "not blocked" inside a window.
        """
        async with self.users.cooldown_lock(message.sender, message.chat_id, blockable.name):
            reason = await blockable.is_blocked(self.context, message, strict=True)
            if reason is None:
                user = await self.users.get(message.sender)
                if user is not None:
                    await self.users.add_cooldown(user, message.chat_id, blockable)
            return reason

    async def _execute(
        self,
        message: Message,
        trigger: Triggerable,
        blockable: Blockable,
        handler: BlockableHandler,
    ) -> None:
        raw_body = trigger.body(message.content or "", handler.prefix)
        body = raw_body.strip()
        LOGGER.info(f"[{self.chat_id}] {message.sender} -> {blockable.name}")
        await blockable.execute(self.context, message, raw_body, body, *body.split())

    async def _send_cooldown_notice(self, message: Message, blockable: Blockable) -> None:
        user = await self.users.get(message.sender)
        wait_ms = (
            self.users.time_till_cooldown_end(user, message.chat_id, blockable) if user else 0
        )
        time_text, seconds = format_seconds(wait_ms)
        strings = get_language(self.model.language)

        text = format_placeholders(
            strings["cooldown"]["message"],
            {"time": time_text, "second": plural_form(seconds, strings["times"]["second"])},
            chat=self.model,
        )

        buttons: list[Button] = []
        donate = self.get_command_by_class(DonateCommand)
        if donate is not None:
            buttons.append(Button("0", f"{self.model.command_prefix}{donate.display_name}"))

        await self.messaging.reply_advanced(message, ReplyContent(text=text, buttons=buttons), True)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def get_command_by_trigger(self, trigger: str) -> Command | None:
        """Resolve a keyword (with or without the prefix) to its command."""
        handler = self.command_handler
        if handler is None:
            return None

        if not trigger.startswith(handler.prefix):
            trigger = handler.prefix + trigger

        for _, blockable in await handler.find_by_content(trigger):
            if isinstance(blockable, Command):
                return blockable
        return None

    def get_command_by_class(self, command_type: type[C]) -> C | None:
        handler = self.command_handler
        if handler is None:
            return None
        for blockable in handler.blockables:
            if isinstance(blockable, command_type):
                return blockable
        return None

    def get_command(self, name: str) -> Command | None:
        """Look a command up by its stable identity."""
        handler = self.command_handler
        if handler is None:
            return None
        for blockable in handler.blockables:
            if isinstance(blockable, Command) and blockable.name == name:
                return blockable
        return None
