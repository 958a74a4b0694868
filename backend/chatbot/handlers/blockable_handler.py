"""Ordered registries of blockables sharing one resolution strategy."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from chatbot.blockable import Blockable, Triggerable

if TYPE_CHECKING:
    from chatbot.message import Message

Match = tuple[Triggerable, Blockable]


class BlockableHandler:
    """Immutable, ordered set of blockables.

    Registration order is resolution priority: the first blockable with a
    matching trigger wins and later ones are not consulted. Trigger keys
    are unique within a handler. Handlers are never mutated; changes build
    a new handler that the owning chat swaps in.
    """

    prefix: str = ""

    def __init__(self, blockables: Iterable[Blockable] = ()) -> None:
        self._blockables: tuple[Blockable, ...] = tuple(blockables)

        seen: dict[str, Blockable] = {}
        for blockable in self._blockables:
            for trigger in blockable.triggers:
                owner = seen.setdefault(trigger.key, blockable)
                if owner is not blockable:
                    raise ValueError(
                        f"Trigger '{trigger.key}' of {blockable.name} "
                        f"is already registered by {owner.name}"
                    )

    @property
    def blockables(self) -> tuple[Blockable, ...]:
        return self._blockables

    async def appliable(self, message: Message) -> bool:
        """Whether this handler should be consulted for *message* at all."""
        return True

    async def find(self, message: Message) -> list[Match]:
        return await self.find_by_content(message.content or "")

    async def find_by_content(self, text: str) -> list[Match]:
        for blockable in self._blockables:
            for trigger in blockable.triggers:
                if trigger.matches(text, self.prefix):
                    return [(trigger, blockable)]
        return []

    def with_blockables(self, blockables: Iterable[Blockable]) -> BlockableHandler:
        return type(self)(blockables)

    def with_prefix(self, prefix: str) -> BlockableHandler:
        return self

    def __len__(self) -> int:
        return len(self._blockables)
