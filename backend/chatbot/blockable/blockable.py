"""Blockable: a dispatchable unit that may refuse to run before it starts."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from chatbot.blockable.triggerable import Triggerable

if TYPE_CHECKING:
    from chatbot.context import CommandContext
    from chatbot.message import Message


class BlockedReason(enum.Enum):
    """Why a blockable refused to run. An outcome, not an error."""

    COOLDOWN = "cooldown"
    OTHER = "other"


class Blockable(ABC):
    def __init__(
        self,
        *,
        name: str,
        triggers: Sequence[Triggerable],
        cooldown: float = 0,
        usage: str = "",
        category: str = "",
        description: str = "",
    ) -> None:
        if not triggers:
            raise ValueError(f"{type(self).__name__} '{name}' declares no triggers")

        self.name = name
        self.triggers: tuple[Triggerable, ...] = tuple(triggers)
        self.cooldown = cooldown
        self.usage = usage
        self.category = category
        self.description = description

    async def is_blocked(
        self, context: CommandContext, message: Message, *, strict: bool = True
    ) -> BlockedReason | None:
        """Evaluate the cooldown ledger, then the blockable's own rules.

        Never writes to the ledger. With ``strict=False`` the check must
        also be free of any other side effect.
        """
        if self.cooldown > 0:
            user = await context.users.get(message.sender)
            if user is not None:
                remaining = context.users.time_till_cooldown_end(user, message.chat_id, self)
                if remaining > 0:
                    return BlockedReason.COOLDOWN

        return await self.check_blocked(context, message, strict=strict)

    async def check_blocked(
        self, context: CommandContext, message: Message, *, strict: bool = True
    ) -> BlockedReason | None:
        """Blockable-specific refusal (permissions, context). Return OTHER to refuse."""
        return None

    async def on_blocked(
        self, context: CommandContext, message: Message, reason: BlockedReason
    ) -> None:
        pass

    @abstractmethod
    async def execute(
        self,
        context: CommandContext,
        message: Message,
        raw_body: str,
        body: str,
        *args: str,
    ) -> None: ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
