"""Repository for users and the user_cooldowns table.

Users are held in process memory once loaded; the cooldown ledger is read
on every dispatch attempt and never goes back to the database after the
first load. Writes are stamped in memory first and then persisted.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

import asyncpg

from shared.cache import KeyedLocks
from shared.models.user import HasCooldown, User
from shared.repositories.retry import retry_on_db_error

logger = logging.getLogger(__name__)


class UserRepository:
    """User lookup plus the per-(user, chat, command) cooldown ledger.

    ``clock`` returns epoch seconds and is injectable so cooldown windows
    can be exercised without sleeping.
    """

    def __init__(
        self,
        pool: asyncpg.Pool | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.pool = pool
        self.clock = clock
        self._users: dict[str, User] = {}
        self._locks = KeyedLocks()

    async def get(self, user_id: str) -> User | None:
        """Return the user, or None when the user was never seen."""
        user = self._users.get(user_id)
        if user is not None or self.pool is None:
            return user

        async with self._locks.hold(f"user:{user_id}"):
            user = self._users.get(user_id)
            if user is None:
                user = await self._load(user_id)
                if user is not None:
                    self._users[user_id] = user
            return user

    async def ensure(self, user_id: str) -> User:
        """Return the user, creating the record on first contact."""
        user = await self.get(user_id)
        if user is not None:
            return user

        async with self._locks.hold(f"user:{user_id}"):
            user = self._users.get(user_id)
            if user is not None:
                return user

            if self.pool is not None:
                pool = self.pool

                async def _query() -> None:
                    async with pool.acquire() as conn:
                        await conn.execute(
                            "INSERT INTO users (user_id) VALUES ($1) ON CONFLICT DO NOTHING",
                            user_id,
                        )

                await retry_on_db_error(_query)

            user = self._users[user_id] = User(user_id)
            logger.debug(f"Registered new user {user_id}")
            return user

    def cooldown_lock(
        self, user_id: str, chat_id: str, command_name: str
    ) -> AbstractAsyncContextManager[None]:
        """Hold the lock serializing the check-then-stamp sequence for one ledger key."""
        return self._locks.hold(f"cooldown:{user_id}:{chat_id}:{command_name}")

    def time_till_cooldown_end(self, user: User, chat_id: str, command: HasCooldown) -> int:
        return user.time_till_cooldown_end(chat_id, command, now=self.clock())

    async def add_cooldown(self, user: User, chat_id: str, command: HasCooldown) -> None:
        """Stamp *now* for (user, chat, command) and persist it.

        The in-memory stamp is visible to the next check before this
        coroutine first suspends. A failed write is logged, not raised.
        """
        stamp = user.add_cooldown(chat_id, command, now=self.clock())
        if self.pool is None:
            return

        pool = self.pool

        async def _query() -> None:
            async with pool.acquire() as conn:
                await conn.execute(
                    """
                    INSERT INTO user_cooldowns (user_id, chat_id, command_name, last_used_at)
                    VALUES ($1, $2, $3, $4)
                    ON CONFLICT (user_id, chat_id, command_name) DO UPDATE SET
                        last_used_at = EXCLUDED.last_used_at
                    """,
                    user.user_id,
                    chat_id,
                    command.name,
                    stamp,
                )

        try:
            await retry_on_db_error(_query)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                f"Failed to persist cooldown {command.name} for {user.user_id} in {chat_id}: {e}"
            )

    async def _load(self, user_id: str) -> User | None:
        async with self.pool.acquire() as conn:  # type: ignore[union-attr]
            row = await conn.fetchrow(
                "SELECT user_id, created_at FROM users WHERE user_id = $1", user_id
            )
            if not row:
                return None

            user = User(**dict(row))
            rows = await conn.fetch(
                "SELECT chat_id, command_name, last_used_at FROM user_cooldowns WHERE user_id = $1",
                user_id,
            )
            for r in rows:
                user.cooldowns.setdefault(r["chat_id"], {})[r["command_name"]] = r["last_used_at"]
            return user
