"""Command: the user-invocable Blockable variant."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, ClassVar

from chatbot.blockable import Blockable
from chatbot.command.trigger import CommandTrigger
from chatbot.formatting import format_placeholders
from chatbot.locales import command_strings, command_triggers

if TYPE_CHECKING:
    from chatbot.context import CommandContext
    from chatbot.message import Message


class Command(Blockable):
    """A bot action invoked through a prefixed keyword.

    ``announced_aliases`` are the keywords shown to users (help listings,
    buttons); ``triggers`` may contain more, e.g. the keywords of every
    language.
    """

    def __init__(
        self,
        *,
        name: str,
        triggers: Sequence[str | CommandTrigger],
        announced_aliases: Sequence[str] = (),
        **kwargs: Any,
    ) -> None:
        super().__init__(
            name=name,
            triggers=[t if isinstance(t, CommandTrigger) else CommandTrigger(t) for t in triggers],
            **kwargs,
        )
        self.announced_aliases: tuple[str, ...] = tuple(announced_aliases) or tuple(
            t.key for t in self.triggers
        )

    @property
    def display_name(self) -> str:
        return self.announced_aliases[0]

    async def reply(
        self,
        context: CommandContext,
        message: Message,
        template: str,
        *,
        quote: bool = True,
        **placeholders: Any,
    ) -> None:
        text = format_placeholders(template, placeholders, chat=context.chat.model)
        await context.messaging.reply(message, text, quote)


class LocalizedCommand(Command):
    """A built-in command whose metadata comes from the locale table."""

    key: ClassVar[str]
    default_cooldown: ClassVar[float] = 5

    def __init__(self, language: str = "en") -> None:
        strings = command_strings(self.key, language)
        super().__init__(
            name=self.key,
            triggers=command_triggers(self.key),
            announced_aliases=strings["triggers"],
            cooldown=self.default_cooldown,
            usage=strings["usage"],
            category=strings["category"],
            description=strings["description"],
        )
        self.language = language
        self.strings: dict[str, str] = strings["execution"]
