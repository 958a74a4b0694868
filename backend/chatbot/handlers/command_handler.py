from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from chatbot.blockable import Blockable
from chatbot.handlers.blockable_handler import BlockableHandler

if TYPE_CHECKING:
    from chatbot.message import Message


class CommandHandler(BlockableHandler):
    """Resolves ``prefix + keyword`` commands. The prefix may be empty."""

    def __init__(self, prefix: str, blockables: Iterable[Blockable] = ()) -> None:
        super().__init__(blockables)
        self.prefix = prefix

    async def appliable(self, message: Message) -> bool:
        return bool(message.content) and message.content.startswith(self.prefix)  # type: ignore[union-attr]

    def with_blockables(self, blockables: Iterable[Blockable]) -> CommandHandler:
        return CommandHandler(self.prefix, blockables)

    def with_prefix(self, prefix: str) -> CommandHandler:
        return CommandHandler(prefix, self._blockables)
