"""Middleware for converting errors to strings in LLM responses."""

from __future__ import annotations

import traceback
from typing import TYPE_CHECKING

from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools.tool import ToolResult
from mcp import McpError

from mssql_dba_mcp.logger import get_logger


if TYPE_CHECKING:
    from fastmcp.server.middleware.middleware import CallNext
    from mcp.types import CallToolRequestParams


logger = get_logger(__name__)


class ErrorToStringMiddleware(Middleware):
    """Middleware that returns any error escaping a tool as the tool's text result.

    Tool methods already turn database failures into text. This is the outer
    net for everything else (argument validation, unexpected exceptions), so a
    failed call never surfaces as a protocol error and the server keeps serving.

    Example:
        ```python
        from mssql_dba_mcp.server.middleware import ErrorToStringMiddleware

        mcp = FastMCP("mssql-dba")
        mcp.add_middleware(ErrorToStringMiddleware(include_traceback=False))
        ```
    """

    def __init__(self, *, include_traceback: bool = False) -> None:
        """Initialize middleware for converting errors to strings.

        Args:
            include_traceback: Whether to include full traceback in error message.
        """
        self.include_traceback = include_traceback

    def format_error(self, error: Exception) -> str:
        """Convert exception to a readable string.

        Args:
            error: Exception to convert.

        Returns:
            String with error description.
        """
        if isinstance(error, ToolError):
            message = str(error)
        elif isinstance(error, McpError) and getattr(error, "error", None) is not None:
            message = str(error.error.message)
        else:
            message = str(error) or repr(error)

        if self.include_traceback:
            tb_str = "".join(traceback.format_exception(type(error), error, error.__traceback__))
            return f"{message}\n\nTraceback:\n{tb_str}"
        return message

    @staticmethod
    def _tool_name(context: MiddlewareContext) -> str:
        return getattr(context.message, "name", None) or "unknown"

    async def _has_output_schema(self, context: MiddlewareContext, tool_name: str) -> bool:
        if context.fastmcp_context is None:
            return False
        try:
            tool = await context.fastmcp_context.fastmcp.get_tool(tool_name)
        except Exception as e:
            logger.warning("Could not get tool info for '%s': %s", tool_name, e)
            return False
        return bool(getattr(tool, "output_schema", None))

    async def on_call_tool(
        self,
        context: MiddlewareContext,
        call_next: CallNext[CallToolRequestParams, ToolResult],
    ) -> ToolResult:
        """Intercept tool call and convert errors to strings.

        Args:
            context: Middleware context with request information.
            call_next: Function to call next middleware or tool.

        Returns:
            ToolResult with tool execution result or error string.
        """
        tool_name = self._tool_name(context)
        try:
            return await call_next(context)
        except Exception as error:
            logger.error(
                "Error in tool '%s': %s: %s",
                tool_name,
                type(error).__name__,
                error,
                exc_info=self.include_traceback,
            )
            error_string = self.format_error(error)
            # String-returning tools wrap their result as {"result": ...}
            if await self._has_output_schema(context, tool_name):
                return ToolResult(content=error_string, structured_content={"result": error_string})
            return ToolResult(content=error_string)
