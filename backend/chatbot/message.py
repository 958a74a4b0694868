"""Inbound message and outbound reply types shared with the transport."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Message:
    """An inbound chat message as delivered by the transport client."""

    id: str
    chat_id: str
    sender: str
    content: str | None = None
    from_me: bool = False
    is_group: bool = False
    sender_is_admin: bool = False
    media: bytes | None = None
    quoted: Message | None = None
    raw: Any = None


@dataclass(frozen=True)
class Button:
    button_id: str
    text: str


@dataclass
class ReplyContent:
    """Payload of a reply: text plus optional buttons and media."""

    text: str | None = None
    buttons: list[Button] = field(default_factory=list)
    media: bytes | None = None
