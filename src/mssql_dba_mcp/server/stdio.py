"""STDIO server implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mssql_dba_mcp.enums import TransportConfig
from mssql_dba_mcp.logger import get_logger
from mssql_dba_mcp.server.base import BaseServerBuilder


if TYPE_CHECKING:
    from mssql_dba_mcp.config import Settings


logger = get_logger(__name__)


class StdioServerBuilder(BaseServerBuilder):
    """STDIO server builder for FastMCP.

    Encapsulates STDIO server creation and configuration logic.
    """

    async def run(self) -> None:
        """Run STDIO server.

        Implementation of abstract method from BaseServerBuilder.
        """
        self.register_components(transport_type=TransportConfig.STDIO)

        # stdout carries the protocol: no banner, FastMCP's own logging suppressed
        await self.main_mcp.run_stdio_async(show_banner=False, log_level="CRITICAL")


async def run_stdio(config: Settings) -> None:
    """Run server in stdio mode with lifecycle management.

    Args:
        config: Application configuration.
    """
    logger.info("Starting MCP server: %s, transport: stdio", config.name)
    try:
        builder = StdioServerBuilder(config)
        await builder.run()
    except KeyboardInterrupt:
        logger.info("Received KeyboardInterrupt, shutting down...")
        raise
