"""Wiring between settings, storage and the transport client."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable

from chatbot.chats import ChatManager
from chatbot.core.config import BotSettings, get_settings
from chatbot.core.logging import setup_logging
from chatbot.message import Message
from chatbot.messaging import MessagingService
from shared.database import DatabaseManager
from shared.repositories import ChatRepository, RoutineRepository, UserRepository

LOGGER: logging.Logger = logging.getLogger("Bot")


async def create_chat_manager(
    messaging: MessagingService,
    settings: BotSettings | None = None,
) -> tuple[ChatManager, DatabaseManager | None]:
    """Build a ChatManager; connects to PostgreSQL when DATABASE_URL is set."""
    settings = settings or get_settings()

    database: DatabaseManager | None = None
    pool = None
    if settings.database_url:
        database = DatabaseManager(settings.database_url)
        await database.connect()
        pool = database.pool
    else:
        LOGGER.warning("DATABASE_URL not set, chats and cooldowns are kept in memory only")

    manager = ChatManager(
        chats=ChatRepository(
            pool,
            default_prefix=settings.default_prefix,
            default_language=settings.default_language,
        ),
        users=UserRepository(pool),
        routines=RoutineRepository(pool),
        messaging=messaging,
    )
    return manager, database


async def dispatch_forever(manager: ChatManager, messages: AsyncIterable[Message]) -> None:
    """Run one task per inbound message until the stream ends.

    Waits for in-flight messages before returning.
    """
    tasks: set[asyncio.Task] = set()
    try:
        async for message in messages:
            task = asyncio.create_task(manager.handle_message(message))
            tasks.add(task)
            task.add_done_callback(tasks.discard)
    finally:
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)


async def run(messaging: MessagingService, messages: AsyncIterable[Message]) -> None:
    """Entry point used by transport adapters."""
    settings = get_settings()
    setup_logging(settings.log_level)

    manager, database = await create_chat_manager(messaging, settings)
    LOGGER.info("Dispatcher started")
    try:
        await dispatch_forever(manager, messages)
    finally:
        if database is not None:
            await database.disconnect()
        LOGGER.info("Dispatcher stopped")
