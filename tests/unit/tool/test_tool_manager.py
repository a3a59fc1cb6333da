"""Tests for ToolManager tool execution and result formatting."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from mssql_dba_mcp.common import ConnectionFailedError, NotConnectedError, QueryError
from mssql_dba_mcp.tool import constants
from mssql_dba_mcp.tool.tools import ToolManager


@pytest.fixture
def manager(database_config):
    """ToolManager with a mocked SQL driver."""
    tool_manager = ToolManager(database_config)
    tool_manager._sql_driver = MagicMock()
    tool_manager._sql_driver.execute_query = AsyncMock(return_value=[])
    return tool_manager


class TestTableLevelTools:
    """Test cases for tools that take a list of table names."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get_tables_info", "get_tables_index_health", "get_tables_missing_indexes"])
    async def test_empty_list_skips_database(self, manager, method):
        """Test that an empty table list returns the sentinel without a query."""
        result = await getattr(manager, method)(tableNames=[])

        assert result == constants.NO_TABLE_NAMES_PROVIDED
        manager._sql_driver.execute_query.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_names_skip_database(self, manager):
        """Test that rejected names are reported and never queried."""
        result = await manager.get_tables_index_health(tableNames=["Orders", "Orders; DROP TABLE Orders"])

        assert result.startswith("Invalid table names provided: 'Orders; DROP TABLE Orders'.")
        manager._sql_driver.execute_query.assert_not_called()

    @pytest.mark.asyncio
    async def test_tables_info_returns_json(self, manager):
        """Test that rows are returned as a pretty-printed JSON array."""
        rows = [
            {"Table": "Orders", "Total Reads": 1200, "Activity Level": "High Activity"},
            {"Table": "Customers", "Total Reads": 40, "Activity Level": "Low Activity"},
        ]
        manager._sql_driver.execute_query.return_value = rows

        result = await manager.get_tables_info(tableNames=["Orders", "Customers"])

        assert json.loads(result) == rows
        assert result.startswith('[\n  {\n    "Table": "Orders"')
        query = manager._sql_driver.execute_query.call_args.args[0]
        assert "tableName IN (N'Orders', N'Customers')" in query

    @pytest.mark.asyncio
    async def test_missing_indexes_empty_result(self, manager):
        """Test that an empty result returns the reassuring sentinel."""
        result = await manager.get_tables_missing_indexes(tableNames=["Orders"])

        assert result == constants.NO_MISSING_INDEXES
        manager._sql_driver.execute_query.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_index_health_empty_result(self, manager):
        """Test the index health sentinel."""
        result = await manager.get_tables_index_health(tableNames=["Orders"])

        assert result == constants.NO_INDEXES

    @pytest.mark.asyncio
    async def test_query_error_is_returned_as_text(self, manager):
        """Test that a failed query produces a labelled error string."""
        manager._sql_driver.execute_query.side_effect = QueryError("Invalid object name 'sys.dm_db_index_usage_stats'.")

        result = await manager.get_tables_index_health(tableNames=["Orders"])

        assert result == "Error retrieving index health: Invalid object name 'sys.dm_db_index_usage_stats'."


class TestCatalogTools:
    """Test cases for tools without arguments."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "sentinel"),
        [
            ("get_server_info", constants.NO_SERVER_INFO),
            ("get_db_collation", constants.NO_DB_COLLATION),
            ("get_collation_mismatches", constants.NO_COLLATION_MISMATCHES),
            ("get_active_tables_info", constants.NO_ACTIVE_TABLES),
        ],
    )
    async def test_empty_results(self, manager, method, sentinel):
        """Test that each tool has its own empty-result text."""
        assert await getattr(manager, method)() == sentinel

    @pytest.mark.asyncio
    async def test_server_info_formats_driver_types(self, manager):
        """Test that decimals, datetimes and bytes are serialized."""
        manager._sql_driver.execute_query.return_value = [
            {
                "Edition": "Developer Edition (64-bit)",
                "CPU Count": Decimal(8),
                "Memory GB": Decimal("15.5"),
                "Started": datetime(2026, 1, 2, 3, 4, 5),
                "Host": b"sql01",
            },
        ]

        result = json.loads(await manager.get_server_info())

        assert result == [
            {
                "Edition": "Developer Edition (64-bit)",
                "CPU Count": 8,
                "Memory GB": 15.5,
                "Started": "2026-01-02T03:04:05",
                "Host": "sql01",
            },
        ]

    @pytest.mark.asyncio
    async def test_repeated_call_returns_identical_text(self, manager):
        """Test that unchanged rows produce byte-identical text on every call."""
        manager._sql_driver.execute_query.return_value = [{"Database Collation": "SQL_Latin1_General_CP1_CI_AS"}]

        first = await manager.get_db_collation()
        second = await manager.get_db_collation()

        assert first == second
        assert first.encode() == second.encode()
        assert manager._sql_driver.execute_query.await_count == 2

    @pytest.mark.asyncio
    async def test_collation_mismatches_binds_schema(self, manager, database_config):
        """Test that the configured schema is passed as a bind parameter."""
        await manager.get_collation_mismatches()

        query, params = manager._sql_driver.execute_query.call_args.args
        assert ":schema_name" in query
        assert dict(params) == {"schema_name": database_config.schema_name}

    @pytest.mark.asyncio
    async def test_connection_error_is_returned_as_text(self, manager):
        """Test that connection failures are reported, not raised."""
        manager._sql_driver.execute_query.side_effect = ConnectionFailedError("Login failed for user 'sa'.")

        result = await manager.get_db_collation()

        assert result == "Error retrieving database collation: Connection attempt failed: Login failed for user 'sa'."

    @pytest.mark.asyncio
    async def test_closed_pool_is_returned_as_text(self, manager):
        """Test that a closed pool is reported with the active tables label."""
        manager._sql_driver.execute_query.side_effect = NotConnectedError()

        result = await manager.get_active_tables_info()

        assert result == "Error retrieving active tables info: Database connection is not established."


class TestToolManagerLifecycle:
    """Test cases for ToolManager setup and teardown."""

    def test_sql_driver_is_lazy_and_shared(self, database_config):
        """Test that the driver is created once and uses the manager's pool."""
        tool_manager = ToolManager(database_config)

        driver = tool_manager.sql_driver

        assert driver is tool_manager.sql_driver
        assert driver.conn is tool_manager.db_connection

    @pytest.mark.asyncio
    async def test_context_manager_closes_pool(self, database_config):
        """Test that leaving the context closes the connection pool."""
        tool_manager = ToolManager(database_config)
        tool_manager.db_connection = MagicMock()
        tool_manager.db_connection.close = AsyncMock()

        async with tool_manager as entered:
            assert entered is tool_manager

        tool_manager.db_connection.close.assert_awaited_once()

    def test_register_tools(self, database_config):
        """Test that every tool is registered under its wire name."""
        tool_manager = ToolManager(database_config)
        mcp = MagicMock()

        count = tool_manager.register_tools(mcp)

        assert count == 7
        names = [call.kwargs["name"] for call in mcp.tool.call_args_list]
        assert names == [
            "get-tables-info",
            "get-active-tables-info",
            "get-tables-index-health",
            "get-tables-missing-indexes",
            "get-server-info",
            "get-db-collation",
            "get-collation-mismatches",
        ]
