"""Tests for the server lifespan."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from mssql_dba_mcp.common import ConnectionFailedError
from mssql_dba_mcp.server.lifespan import LifespanManager


class TestLifespanManager:
    """Test cases for database connect and close around the server lifetime."""

    @pytest.mark.asyncio
    async def test_connect_failure_does_not_raise(self, make_settings):
        """Test that the server starts even when the database is unreachable."""
        manager = LifespanManager(make_settings())
        manager.tools.db_connection.pool_connect = AsyncMock(side_effect=ConnectionFailedError("Login timeout expired"))

        assert await manager.connect() is False

    @pytest.mark.asyncio
    async def test_lifespan_connects_and_closes(self, make_settings):
        """Test that the pool is connected on startup and closed on shutdown."""
        manager = LifespanManager(make_settings())
        pool = manager.tools.db_connection
        pool.pool_connect = AsyncMock()
        pool.close = AsyncMock()

        async with manager.create_lifespan()(None) as state:
            assert state == {}
            pool.pool_connect.assert_awaited_once()
            pool.close.assert_not_called()

        pool.close.assert_awaited_once()
