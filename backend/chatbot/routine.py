"""Routines: non-command auto responses matched anywhere in a message."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chatbot.blockable import Blockable
from chatbot.blockable.triggerable import Triggerable
from chatbot.formatting import format_placeholders

if TYPE_CHECKING:
    from chatbot.context import CommandContext
    from chatbot.message import Message
    from shared.models.routine import RoutineConfig

LOGGER = logging.getLogger("Routine")

MATCH_TYPES = ("contains", "startswith", "exact", "regex")


@dataclass(frozen=True)
class RoutineTrigger(Triggerable):
    """Matches message text by ``contains``/``startswith``/``exact``/``regex``.

    Routines ignore the command prefix; the whole text is the body.
    """

    match_type: str
    pattern: str
    case_sensitive: bool = False
    _regex: re.Pattern | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.match_type not in MATCH_TYPES:
            raise ValueError(f"Unknown match type: {self.match_type!r}")
        if self.match_type == "regex":
            flags = 0 if self.case_sensitive else re.IGNORECASE
            object.__setattr__(self, "_regex", re.compile(self.pattern, flags))

    @property
    def key(self) -> str:
        return f"{self.match_type}:{self.pattern}"

    def matches(self, text: str, prefix: str = "") -> bool:
        if self._regex is not None:
            return self._regex.search(text) is not None

        pattern = self.pattern
        if not self.case_sensitive:
            text, pattern = text.lower(), pattern.lower()

        if self.match_type == "contains":
            return pattern in text
        if self.match_type == "startswith":
            return text.startswith(pattern)
        return text == pattern

    def body(self, text: str, prefix: str = "") -> str:
        return text


class Routine(Blockable):
    def __init__(self, config: RoutineConfig) -> None:
        super().__init__(
            name=f"routine:{config.routine_name}",
            triggers=[RoutineTrigger(config.match_type, config.pattern, config.case_sensitive)],
            cooldown=config.cooldown,
            category="routine",
        )
        self.response = config.response

    async def execute(
        self, context: CommandContext, message: Message, raw_body: str, body: str, *args: str
    ) -> None:
        text = format_placeholders(
            self.response,
            {"user": message.sender, "query": body},
            chat=context.chat.model,
        )
        await context.messaging.reply(message, text, True)
        LOGGER.debug(f"Routine {self.name} answered in {message.chat_id}")


def build_routines(configs: list[RoutineConfig]) -> list[Routine]:
    """Build routines in *configs* order.

    Configs whose pattern cannot be compiled are skipped, and so are
    configs whose trigger is already taken by an earlier routine.
    """
    routines: list[Routine] = []
    owners: dict[str, str] = {}
    for config in configs:
        try:
            routine = Routine(config)
        except (ValueError, re.error) as e:
            LOGGER.warning(f"Skipping routine {config.routine_name} in {config.chat_id}: {e}")
            continue

        key = routine.triggers[0].key
        if key in owners:
            LOGGER.warning(
                f"Skipping routine {config.routine_name} in {config.chat_id}: "
                f"trigger '{key}' already used by {owners[key]}"
            )
            continue

        owners[key] = routine.name
        routines.append(routine)
    return routines
