"""Tests for ErrorToStringMiddleware."""

from __future__ import annotations

import pytest
from fastmcp import Client, FastMCP
from fastmcp.exceptions import ToolError

from mssql_dba_mcp.server.middleware import ErrorToStringMiddleware, MiddlewareManager


def _server(*, include_traceback: bool = False) -> FastMCP:
    mcp = FastMCP("test")
    mcp.add_middleware(ErrorToStringMiddleware(include_traceback=include_traceback))

    @mcp.tool
    def explode() -> str:
        """Raise an unexpected error."""
        error_msg = "disk on fire"
        raise RuntimeError(error_msg)

    @mcp.tool
    def fine() -> str:
        """Return normally."""
        return "ok"

    return mcp


class TestErrorToStringMiddleware:
    """Test cases for converting tool errors to text."""

    @pytest.mark.asyncio
    async def test_error_returned_as_text(self):
        """Test that an exception becomes a non-error text result."""
        async with Client(_server()) as client:
            result = await client.call_tool("explode", {})

        assert result.is_error is False
        assert "disk on fire" in result.content[0].text
        assert "Traceback" not in result.content[0].text

    @pytest.mark.asyncio
    async def test_traceback_appended_when_enabled(self):
        """Test that the traceback is included on request."""
        async with Client(_server(include_traceback=True)) as client:
            result = await client.call_tool("explode", {})

        assert "Traceback:" in result.content[0].text

    @pytest.mark.asyncio
    async def test_successful_call_untouched(self):
        """Test that normal results pass through."""
        async with Client(_server()) as client:
            result = await client.call_tool("fine", {})

        assert result.content[0].text == "ok"

    def test_format_error(self):
        """Test message extraction for different exception types."""
        middleware = ErrorToStringMiddleware()

        assert middleware.format_error(ToolError("bad input")) == "bad input"
        assert middleware.format_error(KeyError("x")) == "'x'"
        assert middleware.format_error(RuntimeError()) == "RuntimeError()"


class TestMiddlewareManager:
    """Test cases for middleware setup order."""

    def test_default_order(self, make_settings):
        """Test that error-to-string is the outermost layer."""
        mcp = FastMCP("test")

        names = MiddlewareManager(mcp, make_settings()).setup_all()

        assert names == ["ErrorToStringMiddleware", "ErrorHandlingMiddleware"]

    def test_timing_added_at_debug(self, make_settings):
        """Test that timing middleware is only added at DEBUG level."""
        mcp = FastMCP("test")

        names = MiddlewareManager(mcp, make_settings(log_level="DEBUG")).setup_all()

        assert names == ["ErrorToStringMiddleware", "ErrorHandlingMiddleware", "TimingMiddleware"]
