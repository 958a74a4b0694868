from __future__ import annotations

from typing import TYPE_CHECKING

from chatbot.blockable import BlockedReason
from chatbot.command.command import LocalizedCommand
from chatbot.locales import LANGUAGES, command_strings

if TYPE_CHECKING:
    from chatbot.context import CommandContext
    from chatbot.message import Message


class LanguageCommand(LocalizedCommand):
    """Change the chat's language and re-register its commands. Group admins only.

    Usage: !language <code>
    """

    key = "language"
    default_cooldown = 15

    async def check_blocked(
        self, context: CommandContext, message: Message, *, strict: bool = True
    ) -> BlockedReason | None:
        if message.is_group and not message.sender_is_admin:
            return BlockedReason.OTHER
        return None

    async def on_blocked(
        self, context: CommandContext, message: Message, reason: BlockedReason
    ) -> None:
        if reason is BlockedReason.OTHER:
            await self.reply(context, message, self.strings["not_admin"])

    async def execute(
        self, context: CommandContext, message: Message, raw_body: str, body: str, *args: str
    ) -> None:
        languages = ", ".join(LANGUAGES)
        if len(args) != 1 or args[0] not in LANGUAGES:
            await self.reply(context, message, self.strings["invalid"], languages=languages)
            return

        await context.chat.update_language(args[0])
        # confirm in the newly selected language
        strings = command_strings(self.key, args[0])["execution"]
        await self.reply(context, message, strings["success"], languages=languages)
