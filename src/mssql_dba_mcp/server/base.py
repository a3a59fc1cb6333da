"""Base class for server creation and registration."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from fastmcp import FastMCP
from starlette.responses import JSONResponse

from mssql_dba_mcp.logger import get_logger
from mssql_dba_mcp.prompt import PromptManager
from mssql_dba_mcp.server.lifespan import LifespanManager
from mssql_dba_mcp.server.middleware import MiddlewareManager


if TYPE_CHECKING:
    from starlette.requests import Request

    from mssql_dba_mcp.config import Settings
    from mssql_dba_mcp.enums import TransportConfig

logger = get_logger(__name__)


class BaseServerBuilder(ABC):
    """Base class for building servers of different transport types.

    Encapsulates common logic for creating the FastMCP server, managing its
    lifecycle, and registering tools and prompts.
    """

    def __init__(self, config: Settings) -> None:
        """Initialize base server builder.

        Args:
            config: Application configuration.
        """
        self.config = config
        self.lifespan_manager = LifespanManager(config)
        self.lifespan = self.lifespan_manager.create_lifespan()
        self.main_mcp = FastMCP(name=config.name, lifespan=self.lifespan)
        MiddlewareManager(self.main_mcp, config).setup_all()
        self.prompt_manager = PromptManager(server_name=config.name)
        if config.server.health_endpoint_enabled:
            self._register_health_endpoint()

    def register_components(self, transport_type: TransportConfig) -> tuple[int, int]:
        """Register tools and prompts on the main FastMCP server.

        Args:
            transport_type: Transport type for logging.

        Returns:
            Number of registered tools and prompts.
        """
        tool_count = self.lifespan_manager.tools.register_tools(self.main_mcp)
        prompt_count = self.prompt_manager.register_prompts(self.main_mcp)
        logger.info(
            "Server %s: registered %d tools and %d prompts -> %s",
            self.config.name,
            tool_count,
            prompt_count,
            transport_type.value,
        )
        return tool_count, prompt_count

    def _register_health_endpoint(self) -> None:
        """Register health check endpoint.

        Used by monitoring systems and load balancers. Served by the HTTP
        transport only.
        """

        @self.main_mcp.custom_route("/health", methods=["GET"])
        async def health_check(_request: Request) -> JSONResponse:
            """Health check endpoint for monitoring server health.

            Args:
                _request: HTTP request (not used, but required for signature).

            Returns:
                JSON response with service status.
            """
            return JSONResponse(
                {
                    "status": "healthy",
                    "service": self.config.name,
                    "database_connected": self.lifespan_manager.tools.db_connection.is_connected,
                }
            )

        logger.debug("Health endpoint registered: GET /health")

    @abstractmethod
    async def run(self) -> None:
        """Run the server.

        Must be implemented in subclasses for specific transport types.
        """
        raise NotImplementedError
