from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from chatbot.blockable import Blockable
from chatbot.handlers.blockable_handler import BlockableHandler

if TYPE_CHECKING:
    from chatbot.message import Message


class RoutineHandler(BlockableHandler):
    """Resolves routines for plain (non-command) messages.

    Messages starting with the chat's command prefix are left to the
    command handler.
    """

    def __init__(self, command_prefix: str, blockables: Iterable[Blockable] = ()) -> None:
        super().__init__(blockables)
        self.command_prefix = command_prefix

    async def appliable(self, message: Message) -> bool:
        if not message.content or not self._blockables:
            return False
        return not (self.command_prefix and message.content.startswith(self.command_prefix))

    def with_blockables(self, blockables: Iterable[Blockable]) -> RoutineHandler:
        return RoutineHandler(self.command_prefix, blockables)

    def with_prefix(self, prefix: str) -> RoutineHandler:
        return RoutineHandler(prefix, self._blockables)
