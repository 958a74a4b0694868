from __future__ import annotations

from typing import TYPE_CHECKING

from chatbot.blockable import BlockedReason
from chatbot.command.command import LocalizedCommand

if TYPE_CHECKING:
    from chatbot.context import CommandContext
    from chatbot.message import Message


class PrefixCommand(LocalizedCommand):
    """Change the chat's command prefix. Group admins only.

    Usage: !prefix <new prefix>
    """

    key = "prefix"
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
        if len(args) != 1:
            await self.reply(context, message, self.strings["invalid"])
            return

        await context.chat.update_prefix(args[0])
        await self.reply(context, message, self.strings["success"])
