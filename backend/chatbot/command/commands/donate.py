from __future__ import annotations

from typing import TYPE_CHECKING

from chatbot.command.command import LocalizedCommand

if TYPE_CHECKING:
    from chatbot.context import CommandContext
    from chatbot.message import Message


class DonateCommand(LocalizedCommand):
    """Referenced by the cooldown notice as the way to skip waiting."""

    key = "donate"
    default_cooldown = 10

    async def execute(
        self, context: CommandContext, message: Message, raw_body: str, body: str, *args: str
    ) -> None:
        await self.reply(context, message, self.strings["reply"])
