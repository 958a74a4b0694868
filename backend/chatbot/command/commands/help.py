from __future__ import annotations

from typing import TYPE_CHECKING

from chatbot.command.command import Command, LocalizedCommand
from chatbot.formatting import format_placeholders

if TYPE_CHECKING:
    from chatbot.context import CommandContext
    from chatbot.message import Message


class HelpCommand(LocalizedCommand):
    """List commands by category, or describe one command.

    Usage: !help, !help <command>
    """

    key = "help"
    default_cooldown = 10

    async def execute(
        self, context: CommandContext, message: Message, raw_body: str, body: str, *args: str
    ) -> None:
        chat = context.chat
        if args:
            command = await chat.get_command_by_trigger(args[0])
            if command is None:
                await self.reply(context, message, self.strings["unknown"], query=args[0])
                return
            await self.reply(
                context,
                message,
                self.strings["detail"],
                name=command.display_name,
                description=command.description,
                usage=format_placeholders(command.usage, chat=chat.model),
            )
            return

        handler = chat.command_handler
        commands = [b for b in handler.blockables if isinstance(b, Command)] if handler else []

        # insertion order of categories follows registration order
        categories: dict[str, list[Command]] = {}
        for command in commands:
            categories.setdefault(command.category, []).append(command)

        lines = [self.strings["header"]]
        for category, members in categories.items():
            lines.append("")
            lines.append(format_placeholders(self.strings["category"], {"category": category}))
            for command in members:
                lines.append(
                    format_placeholders(
                        self.strings["line"],
                        {"name": command.display_name, "description": command.description},
                        chat=chat.model,
                    )
                )

        await self.reply(context, message, "\n".join(lines))
