"""Lifespan management for FastMCP server."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from mssql_dba_mcp.logger import get_logger
from mssql_dba_mcp.sql import obfuscate_password
from mssql_dba_mcp.tool import ToolManager


if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastmcp import FastMCP

    from mssql_dba_mcp.config import Settings


logger = get_logger(__name__)


class LifespanManager:
    """Lifespan manager for FastMCP server.

    Owns the ToolManager and its database connection: connects on startup,
    closes the pool on shutdown.
    """

    def __init__(self, config: Settings) -> None:
        """Initialize lifespan manager.

        Args:
            config: Application configuration.
        """
        self.config = config
        self.tools = ToolManager(config=config.database)

    async def connect(self) -> bool:
        """Connect to the database, logging instead of raising on failure.

        Returns:
            True if the connection was established.
        """
        database = self.config.database
        try:
            await self.tools.db_connection.pool_connect()
        except Exception as e:
            logger.warning(
                "Could not connect to database '%s' on %s: %s. "
                "The server will start, tools will retry the connection on their next call.",
                database.name,
                database.host,
                obfuscate_password(str(e)),
            )
            return False
        logger.info("Successfully connected to database '%s' on %s", database.name, database.host)
        return True

    def create_lifespan(self) -> Any:  # noqa: ANN401
        """Create lifespan context manager for FastMCP server.

        Returns:
            Lifespan context manager that can be passed to FastMCP constructor.
        """

        @asynccontextmanager
        async def lifespan(_server: FastMCP[Any]) -> AsyncIterator[dict[str, Any]]:
            """Lifespan context manager for the ToolManager lifecycle.

            Args:
                _server: FastMCP server instance (unused but required by signature).

            Yields:
                Empty dictionary.
            """
            async with self.tools:
                logger.info("Initializing database connection...")
                await self.connect()
                yield {}

        return lifespan
