"""Module for creating and registering MCP tools."""

from __future__ import annotations

from types import TracebackType
from typing import TYPE_CHECKING, Self

from pydantic import Field

from mssql_dba_mcp.common import IdentifierValidationError
from mssql_dba_mcp.enums import ToolName
from mssql_dba_mcp.logger import get_logger
from mssql_dba_mcp.sql import DbConnPool, SqlDriver

from .catalog import CATALOG, DiagnosticQuery, QueryRequest
from .constants import (
    INVALID_TABLE_NAMES,
    LOG_REGISTERED_TOOLS,
    LOG_REJECTED_TABLE_NAMES,
    LOG_RUNNING_TOOL,
    LOG_TOOL_FAILED,
    NO_TABLE_NAMES_PROVIDED,
)
from .descriptions import ARG_TABLE_NAMES
from .utils import decode_bytes_to_utf8, format_rows


if TYPE_CHECKING:
    from fastmcp import FastMCP

    from mssql_dba_mcp.config import DatabaseConfig


logger = get_logger(__name__)


class ToolManager:
    """Class for creating and managing MCP tools.

    Every tool runs one catalog query and answers with text: a JSON array of
    rows, a fixed sentinel when there is nothing to report, or an error string.
    Tools never raise.
    """

    def __init__(self, config: DatabaseConfig) -> None:
        """Initialize the ToolManager class.

        Args:
            config: Database configuration.
        """
        self.config = config
        self.db_connection = DbConnPool(config)
        # Lazy-loaded SQL driver (created on first access)
        self._sql_driver: SqlDriver | None = None

    async def __aenter__(self) -> Self:
        """Async context manager entry.

        Returns:
            Self instance for use in async with statement.
        """
        logger.debug("Entering ToolManager context manager")
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit.

        Closes database connection pool on exit.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        logger.debug("Exiting ToolManager context manager, closing database connections")
        try:
            await self.db_connection.close()
            logger.debug("Database connection pool closed successfully")
        except Exception as e:
            logger.error("Error closing database connection pool: %s", e)

    @property
    def sql_driver(self) -> SqlDriver:
        """Get the SQL driver.

        Uses lazy loading - creates driver on first access and reuses the same instance.
        Connection to database pool will be established automatically on first query execution.

        Returns:
            SqlDriver bound to this manager's connection pool.
        """
        if self._sql_driver is None:
            self._sql_driver = SqlDriver(conn=self.db_connection)
        return self._sql_driver

    async def _execute(self, entry: DiagnosticQuery, request: QueryRequest) -> str:
        """Run a built request and format the outcome as tool text."""
        logger.debug(LOG_RUNNING_TOOL, entry.name)
        try:
            rows = await self.sql_driver.execute_query(request.query, request.params)
        except Exception as e:
            logger.error(LOG_TOOL_FAILED, entry.error_label, e)
            return f"{entry.error_label}: {e}"
        if not rows:
            return entry.empty_message
        return format_rows(decode_bytes_to_utf8(rows))

    async def _run_catalog_query(self, tool: ToolName) -> str:
        entry = CATALOG[tool]
        try:
            request = entry.build(**self._bind_params(entry))
        except Exception as e:
            logger.error(LOG_TOOL_FAILED, entry.error_label, e)
            return f"{entry.error_label}: {e}"
        return await self._execute(entry, request)

    async def _run_table_query(self, tool: ToolName, table_names: list[str]) -> str:
        entry = CATALOG[tool]
        if not table_names:
            return NO_TABLE_NAMES_PROVIDED
        try:
            request = entry.build(table_names, **self._bind_params(entry))
        except IdentifierValidationError as e:
            logger.warning(LOG_REJECTED_TABLE_NAMES, tool, e.invalid)
            return INVALID_TABLE_NAMES.format(", ".join(repr(name) for name in e.invalid))
        except Exception as e:
            logger.error(LOG_TOOL_FAILED, entry.error_label, e)
            return f"{entry.error_label}: {e}"
        return await self._execute(entry, request)

    def _bind_params(self, entry: DiagnosticQuery) -> dict[str, str]:
        available = {"schema_name": self.config.schema_name}
        return {name: available[name] for name in entry.required_params}

    # Table-level tools

    async def get_tables_info(
        self,
        tableNames: list[str] = Field(description=ARG_TABLE_NAMES),  # noqa: N803
    ) -> str:
        """Get the metadata about specified tables."""
        return await self._run_table_query(ToolName.GET_TABLES_INFO, tableNames)

    async def get_tables_index_health(
        self,
        tableNames: list[str] = Field(description=ARG_TABLE_NAMES),  # noqa: N803
    ) -> str:
        """Assess index health for specified tables."""
        return await self._run_table_query(ToolName.GET_TABLES_INDEX_HEALTH, tableNames)

    async def get_tables_missing_indexes(
        self,
        tableNames: list[str] = Field(description=ARG_TABLE_NAMES),  # noqa: N803
    ) -> str:
        """Identify missing indexes for specified tables."""
        return await self._run_table_query(ToolName.GET_TABLES_MISSING_INDEXES, tableNames)

    # Schema-level tools

    async def get_active_tables_info(self) -> str:
        """Get workload metadata for every table with recorded activity."""
        return await self._run_catalog_query(ToolName.GET_ACTIVE_TABLES_INFO)

    # Server-level tools

    async def get_server_info(self) -> str:
        """Retrieve version, edition and licensing information about the instance."""
        return await self._run_catalog_query(ToolName.GET_SERVER_INFO)

    # Database-level tools

    async def get_db_collation(self) -> str:
        """Retrieve the collation setting for the current database."""
        return await self._run_catalog_query(ToolName.GET_DB_COLLATION)

    async def get_collation_mismatches(self) -> str:
        """Retrieve the columns whose collation differs from the database default."""
        return await self._run_catalog_query(ToolName.GET_COLLATION_MISMATCHES)

    def register_tools(self, mcp: FastMCP) -> int:
        """Register all tools directly with FastMCP server using mcp.tool().

        Args:
            mcp: FastMCP server instance to register tools with.

        Returns:
            Number of registered tools.
        """
        registered_count = 0
        for tool_name in ToolName:
            entry = CATALOG[tool_name]
            method = getattr(self, tool_name.method_name)
            mcp.tool(method, name=tool_name.value, title=entry.title, description=entry.description)
            registered_count += 1

        logger.debug(LOG_REGISTERED_TOOLS, registered_count)
        return registered_count
