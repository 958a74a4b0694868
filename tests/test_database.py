"""Tests for database pool management."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from shared.database import DatabaseManager, setup_database_schema


class TestDatabaseManager:
    def test_pool_requires_connect(self):
        database = DatabaseManager("postgresql://bot@localhost/bot")

        with pytest.raises(RuntimeError, match="connect"):
            database.pool

    @pytest.mark.asyncio
    async def test_disconnect_without_pool_is_noop(self):
        await DatabaseManager("postgresql://bot@localhost/bot").disconnect()

    @pytest.mark.asyncio
    async def test_schema_creates_tables(self):
        conn = MagicMock()
        conn.execute = AsyncMock()

        await setup_database_schema(conn)

        statements = " ".join(call.args[0] for call in conn.execute.await_args_list)
        for table in ("chats", "users", "user_cooldowns", "routines"):
            assert f"CREATE TABLE IF NOT EXISTS {table}(" in statements
