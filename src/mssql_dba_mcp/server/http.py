"""HTTP server implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uvicorn
from starlette.applications import Starlette
from starlette.routing import Mount

from mssql_dba_mcp.enums import TransportConfig, TransportHttpApp
from mssql_dba_mcp.logger import get_logger
from mssql_dba_mcp.server.base import BaseServerBuilder


if TYPE_CHECKING:
    from mssql_dba_mcp.config import Settings


logger = get_logger(__name__)


class HttpServerBuilder(BaseServerBuilder):
    """HTTP server builder for FastMCP.

    Serves the MCP endpoint at ``/{endpoint}`` and, when enabled, ``GET /health``.
    """

    def build(self) -> Starlette:
        """Build and configure HTTP application.

        Returns:
            Configured Starlette application ready to run.
        """
        self.register_components(transport_type=TransportConfig.HTTP)

        transport_type = TransportHttpApp.STREAMABLE_HTTP if self.config.server.streamable else TransportHttpApp.HTTP
        # FastMCP's app carries the server lifespan (database connect/close) and custom routes
        main_app = self.main_mcp.http_app(path=f"/{self.config.endpoint}", transport=transport_type.value)
        logger.info("Endpoint /%s created (transport: %s)", self.config.endpoint, transport_type.value)

        return Starlette(routes=[Mount("/", app=main_app)], lifespan=main_app.lifespan)

    async def run(self) -> None:
        """Run HTTP server.

        Implementation of abstract method from BaseServerBuilder.
        """
        server = self.build()
        uvicorn_config = uvicorn.Config(
            server,
            host=self.config.host,
            port=self.config.port,
            log_config=None,
        )
        uvicorn_server = uvicorn.Server(uvicorn_config)
        await uvicorn_server.serve()


async def run_http(config: Settings) -> None:
    """Run server in HTTP mode with lifecycle management via FastMCP lifespan.

    Args:
        config: Application configuration.
    """
    logger.info(
        "Starting MCP server: %s, transport: HTTP, host: %s, port: %d, endpoint: /%s",
        config.name,
        config.host,
        config.port,
        config.endpoint,
    )
    try:
        builder = HttpServerBuilder(config)
        await builder.run()
    except KeyboardInterrupt:
        logger.info("Received KeyboardInterrupt, shutting down...")
        raise
