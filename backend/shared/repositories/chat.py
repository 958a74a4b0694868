"""Repository for the chats table."""

from __future__ import annotations

import logging

import asyncpg

from shared.models.chat import ChatModel
from shared.repositories.retry import retry_on_db_error

logger = logging.getLogger(__name__)

_COLUMNS = "chat_id, command_prefix, language, created_at, updated_at"


class ChatRepository:
    """Chat configuration storage.

    Without a pool, records live in process memory only (reset on restart).
    Not cached: each chat is read once and then held by its ChatManager.
    """

    def __init__(
        self,
        pool: asyncpg.Pool | None = None,
        *,
        default_prefix: str = "!",
        default_language: str = "en",
    ) -> None:
        self.pool = pool
        self.default_prefix = default_prefix
        self.default_language = default_language
        self._memory: dict[str, ChatModel] = {}

    async def get_chat(self, chat_id: str) -> ChatModel | None:
        if self.pool is None:
            return self._memory.get(chat_id)

        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(f"SELECT {_COLUMNS} FROM chats WHERE chat_id = $1", chat_id)
            if not row:
                return None
            return ChatModel(**dict(row))

    async def ensure_chat(self, chat_id: str) -> ChatModel:
        """Return the chat record, creating it with defaults on first contact."""
        chat = await self.get_chat(chat_id)
        if chat:
            return chat

        chat = await self._upsert(chat_id)
        logger.info(f"Registered new chat {chat_id}")
        return chat

    async def update_prefix(self, chat_id: str, prefix: str) -> ChatModel:
        return await self._upsert(chat_id, command_prefix=prefix)

    async def update_language(self, chat_id: str, language: str) -> ChatModel:
        return await self._upsert(chat_id, language=language)

    async def _upsert(
        self,
        chat_id: str,
        *,
        command_prefix: str | None = None,
        language: str | None = None,
    ) -> ChatModel:
        if self.pool is None:
            chat = self._memory.setdefault(
                chat_id,
                ChatModel(chat_id, self.default_prefix, self.default_language),
            )
            if command_prefix is not None:
                chat.command_prefix = command_prefix
            if language is not None:
                chat.language = language
            return chat

        async def _query() -> ChatModel:
            async with self.pool.acquire() as conn:  # type: ignore[union-attr]
                row = await conn.fetchrow(
                    f"""
                    INSERT INTO chats (chat_id, command_prefix, language)
                    VALUES ($1, COALESCE($2, $4), COALESCE($3, $5))
                    ON CONFLICT (chat_id) DO UPDATE SET
                        command_prefix = COALESCE($2, chats.command_prefix),
                        language       = COALESCE($3, chats.language),
                        updated_at     = NOW()
                    RETURNING {_COLUMNS}
                    """,
                    chat_id,
                    command_prefix,
                    language,
                    self.default_prefix,
                    self.default_language,
                )
                return ChatModel(**dict(row))

        return await retry_on_db_error(_query)
