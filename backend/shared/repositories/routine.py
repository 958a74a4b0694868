"""Repository for the routines table."""

from __future__ import annotations

import asyncpg

from shared.cache import AsyncTTLCache
from shared.models.routine import RoutineConfig

_COLUMNS = (
    "id, chat_id, routine_name, match_type, pattern, response, "
    "case_sensitive, cooldown, priority, enabled"
)


class RoutineRepository:
    def __init__(self, pool: asyncpg.Pool | None = None) -> None:
        self.pool = pool
        self._memory: dict[str, list[RoutineConfig]] = {}
        # enabled routines per chat; writes invalidate
        self._cache = AsyncTTLCache(maxsize=64, ttl=3600)

    async def list_enabled(self, chat_id: str) -> list[RoutineConfig]:
        """Return enabled routines for a chat, ordered by priority DESC then id."""
        if self.pool is None:
            routines = [r for r in self._memory.get(chat_id, []) if r.enabled]
            return sorted(routines, key=lambda r: (-r.priority, r.id))
        return await self._cache.get_or_load(chat_id, lambda: self._fetch_enabled(chat_id))

    async def _fetch_enabled(self, chat_id: str) -> list[RoutineConfig]:
        async with self.pool.acquire() as conn:  # type: ignore[union-attr]
            rows = await conn.fetch(
                f"SELECT {_COLUMNS} FROM routines "
                "WHERE chat_id = $1 AND enabled = TRUE "
                "ORDER BY priority DESC, id",
                chat_id,
            )
            return [RoutineConfig(**dict(row)) for row in rows]

    async def upsert(
        self,
        chat_id: str,
        routine_name: str,
        *,
        match_type: str = "contains",
        pattern: str,
        response: str,
        case_sensitive: bool = False,
        cooldown: int = 0,
        priority: int = 0,
        enabled: bool = True,
    ) -> RoutineConfig:
        if self.pool is None:
            routines = self._memory.setdefault(chat_id, [])
            existing = next((r for r in routines if r.routine_name == routine_name), None)
            routine = RoutineConfig(
                id=existing.id if existing else len(routines) + 1,
                chat_id=chat_id,
                routine_name=routine_name,
                match_type=match_type,
                pattern=pattern,
                response=response,
                case_sensitive=case_sensitive,
                cooldown=cooldown,
                priority=priority,
                enabled=enabled,
            )
            if existing:
                routines[routines.index(existing)] = routine
            else:
                routines.append(routine)
            return routine

        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO routines
                    (chat_id, routine_name, match_type, pattern, response,
                     case_sensitive, cooldown, priority, enabled)
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
                ON CONFLICT (chat_id, routine_name) DO UPDATE SET
                    match_type     = EXCLUDED.match_type,
                    pattern        = EXCLUDED.pattern,
                    response       = EXCLUDED.response,
                    case_sensitive = EXCLUDED.case_sensitive,
                    cooldown       = EXCLUDED.cooldown,
                    priority       = EXCLUDED.priority,
                    enabled        = EXCLUDED.enabled
                RETURNING {_COLUMNS}
                """,
                chat_id,
                routine_name,
                match_type,
                pattern,
                response,
                case_sensitive,
                cooldown,
                priority,
                enabled,
            )
            self._cache.invalidate(chat_id)
            return RoutineConfig(**dict(row))

    async def delete(self, chat_id: str, routine_name: str) -> bool:
        """Delete a routine. Returns True if deleted."""
        if self.pool is None:
            routines = self._memory.get(chat_id, [])
            kept = [r for r in routines if r.routine_name != routine_name]
            self._memory[chat_id] = kept
            return len(kept) != len(routines)

        async with self.pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM routines WHERE chat_id = $1 AND routine_name = $2",
                chat_id,
                routine_name,
            )
            self._cache.invalidate(chat_id)
            return result == "DELETE 1"
