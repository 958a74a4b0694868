"""Database connection management for the chat bot.

The bot runs fine without PostgreSQL (repositories fall back to in-memory
storage); when ``DATABASE_URL`` is set, chats, users and their cooldown
ledgers are persisted through a single asyncpg pool.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import asyncpg

logger = logging.getLogger(__name__)


@dataclass
class PoolConfig:
    """Database pool configuration with sensible defaults."""

    min_size: int = 1
    max_size: int = 5
    timeout: float = 5.0
    command_timeout: float = 15.0
    max_inactive_connection_lifetime: float = 30.0
    max_retries: int = 3
    retry_delay: float = 3.0


class DatabaseManager:
    """Manages the PostgreSQL connection pool lifecycle."""

    def __init__(self, database_url: str, config: PoolConfig | None = None):
        self.database_url = database_url
        self.config = config or PoolConfig()
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        """Create the pool, retrying with exponential backoff."""
        if self._pool is not None:
            logger.warning("Database pool already initialized")
            return

        cfg = self.config
        for attempt in range(1, cfg.max_retries + 1):
            try:
                self._pool = await asyncpg.create_pool(
                    dsn=self.database_url,
                    min_size=cfg.min_size,
                    max_size=cfg.max_size,
                    timeout=cfg.timeout,
                    command_timeout=cfg.command_timeout,
                    max_inactive_connection_lifetime=cfg.max_inactive_connection_lifetime,
                )
                async with self._pool.acquire() as conn:
                    await conn.fetchval("SELECT 1")
                    await setup_database_schema(conn)

                logger.info(f"Database pool created (size={cfg.min_size}-{cfg.max_size})")
                return
            except Exception as e:
                if attempt < cfg.max_retries:
                    delay = cfg.retry_delay * (2 ** (attempt - 1))
                    logger.warning(
                        f"Database connection attempt {attempt}/{cfg.max_retries} failed: "
                        f"{type(e).__name__}: {e or repr(e)}, retrying in {delay}s..."
                    )
                    if self._pool:
                        await self._pool.close()
                        self._pool = None
                    await asyncio.sleep(delay)
                else:
                    logger.exception(
                        f"Database connection failed after {cfg.max_retries} attempts: "
                        f"{type(e).__name__}: {e or repr(e)}"
                    )
                    raise

    async def disconnect(self) -> None:
        if self._pool is None:
            return

        try:
            await self._pool.close()
            self._pool = None
            logger.info("Database pool closed")
        except Exception as e:
            logger.exception(f"Error closing database pool: {e}")

    @property
    def pool(self) -> asyncpg.Pool:
        """Get the connection pool. Raises if not connected."""
        if self._pool is None:
            raise RuntimeError("Database pool not initialized. Call connect() first.")
        return self._pool


async def setup_database_schema(connection: asyncpg.Connection) -> None:
    """Create the chat, user, cooldown and routine tables."""
    await connection.execute(
        """CREATE TABLE IF NOT EXISTS chats(
            chat_id TEXT PRIMARY KEY,
            command_prefix TEXT NOT NULL DEFAULT '!',
            language TEXT NOT NULL DEFAULT 'en',
            created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
        )"""
    )

    await connection.execute(
        """CREATE TABLE IF NOT EXISTS users(
            user_id TEXT PRIMARY KEY,
            created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
        )"""
    )

    await connection.execute(
        """CREATE TABLE IF NOT EXISTS user_cooldowns(
            user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
            chat_id TEXT NOT NULL,
            command_name TEXT NOT NULL,
            last_used_at DOUBLE PRECISION NOT NULL,
            PRIMARY KEY (user_id, chat_id, command_name)
        )"""
    )

    await connection.execute(
        """CREATE TABLE IF NOT EXISTS routines(
            id SERIAL PRIMARY KEY,
            chat_id TEXT NOT NULL,
            routine_name TEXT NOT NULL,
            match_type TEXT NOT NULL DEFAULT 'contains',
            pattern TEXT NOT NULL,
            case_sensitive BOOLEAN NOT NULL DEFAULT FALSE,
            response TEXT NOT NULL,
            cooldown INTEGER NOT NULL DEFAULT 0,
            priority INTEGER NOT NULL DEFAULT 0,
            enabled BOOLEAN NOT NULL DEFAULT TRUE,
            UNIQUE (chat_id, routine_name)
        )"""
    )
