"""Middleware package for FastMCP server."""

from __future__ import annotations

from mssql_dba_mcp.server.middleware.error_to_string import ErrorToStringMiddleware
from mssql_dba_mcp.server.middleware.manager import MiddlewareManager


__all__ = ["ErrorToStringMiddleware", "MiddlewareManager"]
