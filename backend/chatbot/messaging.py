"""Reply-sending contract implemented by the transport client."""

from __future__ import annotations

from typing import Protocol

from chatbot.message import Message, ReplyContent


class MessagingService(Protocol):
    """Sends replies into a conversation.

    Text handed to these methods is already localized and has its
    placeholders substituted.
    """

    async def reply(self, message: Message, text: str, quote: bool = True) -> None: ...

    async def reply_advanced(
        self, message: Message, content: ReplyContent, quote: bool = True
    ) -> None: ...
