"""Keyed locks and a load-once TTL cache.

Cooldown checks, user creation and chat creation each serialize on a
string key. Routine lists are the only records re-read from PostgreSQL
after startup (on every reload), so they are cached here and invalidated
by the repository writes.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from cachetools import TTLCache  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class KeyedLocks:
    """One ``asyncio.Lock`` per key, bounded by *maxsize*.

    Every task inside :meth:`hold`, holding the lock or waiting for it, is
    counted; only keys with no such task are pruned, so a woken waiter
    and a newcomer always share the same lock.
    """

    def __init__(self, maxsize: int = 1024):
        self._maxsize = maxsize
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            self._prune()
            lock = self._locks[key] = asyncio.Lock()
            self._holders[key] = 0

        self._holders[key] += 1
        try:
            async with lock:
                yield
        finally:
            self._holders[key] -= 1

    def _prune(self) -> None:
        if len(self._locks) < self._maxsize:
            return
        idle = [key for key, count in self._holders.items() if count == 0]
        for key in idle:
            del self._locks[key]
            del self._holders[key]
        if idle:
            logger.debug(f"Pruned {len(idle)} idle locks")

    def __len__(self) -> int:
        return len(self._locks)


class AsyncTTLCache:
    """TTL cache whose misses are loaded at most once per key at a time.

    Loader errors propagate and nothing is cached for that key.
    """

    def __init__(self, maxsize: int = 128, ttl: float = 60.0):
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)
        self._locks = KeyedLocks(maxsize=maxsize * 2)

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[T]]) -> T:
        value: Any = self._cache.get(key, _MISSING)
        if value is not _MISSING:
            return value

        async with self._locks.hold(key):
            value = self._cache.get(key, _MISSING)
            if value is _MISSING:
                value = await loader()
                self._cache[key] = value
            return value

    def invalidate(self, key: str) -> None:
        self._cache.pop(key, None)

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
