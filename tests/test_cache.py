"""Tests for keyed locks and the load-once TTL cache."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from shared.cache import AsyncTTLCache, KeyedLocks


async def _visit(locks, key, events, name):
    async with locks.hold(key):
        events.append(f"{name}-in")
        await asyncio.sleep(0)
        events.append(f"{name}-out")


class TestKeyedLocks:
    @pytest.mark.asyncio
    async def test_same_key_is_serialized(self):
        locks = KeyedLocks()
        events = []

        await asyncio.gather(_visit(locks, "k", events, "a"), _visit(locks, "k", events, "b"))

        assert events == ["a-in", "a-out", "b-in", "b-out"]

    @pytest.mark.asyncio
    async def test_different_keys_run_concurrently(self):
        locks = KeyedLocks()
        events = []

        await asyncio.gather(_visit(locks, "x", events, "a"), _visit(locks, "y", events, "b"))

        assert events == ["a-in", "b-in", "a-out", "b-out"]

    @pytest.mark.asyncio
    async def test_woken_waiter_keeps_its_lock(self):
        locks = KeyedLocks(maxsize=1)
        events = []

        async with locks.hold("k"):
            waiter = asyncio.create_task(_visit(locks, "k", events, "waiter"))
            await asyncio.sleep(0)

        # "k" is released but its waiter has not run yet
        async with locks.hold("other"):
            assert len(locks) == 2

        await waiter
        assert events == ["waiter-in", "waiter-out"]

    @pytest.mark.asyncio
    async def test_idle_locks_are_pruned(self):
        locks = KeyedLocks(maxsize=2)
        for key in ("a", "b"):
            async with locks.hold(key):
                pass

        async with locks.hold("c"):
            assert len(locks) == 1


class TestAsyncTTLCache:
    @pytest.mark.asyncio
    async def test_loads_once(self):
        cache = AsyncTTLCache()
        loader = AsyncMock(return_value=["value"])

        assert await cache.get_or_load("k", loader) == ["value"]
        assert await cache.get_or_load("k", loader) == ["value"]
        loader.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_concurrent_misses_share_one_load(self):
        cache = AsyncTTLCache()
        calls = []

        async def load():
            calls.append(1)
            await asyncio.sleep(0)
            return "value"

        results = await asyncio.gather(*(cache.get_or_load("k", load) for _ in range(3)))

        assert results == ["value"] * 3
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_invalidate_forces_reload(self):
        cache = AsyncTTLCache()
        loader = AsyncMock(side_effect=["old", "new"])

        await cache.get_or_load("k", loader)
        cache.invalidate("k")

        assert await cache.get_or_load("k", loader) == "new"

    @pytest.mark.asyncio
    async def test_cached_none_is_a_hit(self):
        cache = AsyncTTLCache()
        loader = AsyncMock(return_value=None)

        await cache.get_or_load("k", loader)
        await cache.get_or_load("k", loader)

        loader.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_loader_errors_are_not_cached(self):
        cache = AsyncTTLCache()
        loader = AsyncMock(side_effect=[OSError("down"), "value"])

        with pytest.raises(OSError, match="down"):
            await cache.get_or_load("k", loader)

        assert await cache.get_or_load("k", loader) == "value"
        assert len(cache) == 1
