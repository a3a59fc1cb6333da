"""Manager for configuring and adding middleware to FastMCP server."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastmcp.server.middleware.error_handling import ErrorHandlingMiddleware
from fastmcp.server.middleware.timing import TimingMiddleware

from mssql_dba_mcp.logger import get_logger
from mssql_dba_mcp.server.middleware.error_to_string import ErrorToStringMiddleware


if TYPE_CHECKING:
    from fastmcp import FastMCP

    from mssql_dba_mcp.config import Settings


logger = get_logger(__name__)


class MiddlewareManager:
    """Manager for configuring and adding middleware to FastMCP server.

    Middleware run in the order they are added (first added = first on entry,
    last on exit), so the first one added is the outermost layer.
    """

    def __init__(self, mcp: FastMCP, settings: Settings) -> None:
        """Initialize middleware manager.

        Args:
            mcp: FastMCP server instance.
            settings: Application settings.
        """
        self.mcp = mcp
        self.settings = settings

    def setup_all(self) -> list[str]:
        """Configure and add all middleware in the correct order.

        Returns:
            Class names of the middleware added, outermost first.
        """
        self._setup_error_to_string_middleware()
        self._setup_error_handling_middleware()
        self._setup_timing_middleware()
        return [type(middleware).__name__ for middleware in self.mcp.middleware]

    def _setup_error_to_string_middleware(self) -> None:
        """Configure ErrorToStringMiddleware (outermost layer)."""
        include_traceback = self.settings.server.error_traceback
        self.mcp.add_middleware(ErrorToStringMiddleware(include_traceback=include_traceback))
        logger.info(
            "Error-to-string middleware enabled: errors will be returned as strings in LLM responses (traceback: %s)",
            "enabled" if include_traceback else "disabled",
        )

    def _setup_error_handling_middleware(self) -> None:
        """Configure ErrorHandlingMiddleware for error logging."""
        self.mcp.add_middleware(
            ErrorHandlingMiddleware(
                logger=logger,
                include_traceback=self.settings.server.error_traceback,
                transform_errors=False,
            )
        )

    def _setup_timing_middleware(self) -> None:
        """Configure TimingMiddleware, only useful at DEBUG level."""
        if self.settings.server.log_level != "DEBUG":
            return
        self.mcp.add_middleware(TimingMiddleware(logger=logger, log_level=logging.DEBUG))
        logger.info("Timing middleware enabled")
