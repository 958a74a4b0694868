"""Data model for the chats table."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class ChatModel:
    """Conversation-level configuration."""

    chat_id: str
    command_prefix: str = "!"
    language: str = "en"
    created_at: datetime | None = None
    updated_at: datetime | None = None
