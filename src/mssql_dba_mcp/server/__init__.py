"""Server modules for stdio and HTTP transport."""

from mssql_dba_mcp.server.base import BaseServerBuilder
from mssql_dba_mcp.server.http import HttpServerBuilder, run_http
from mssql_dba_mcp.server.stdio import StdioServerBuilder, run_stdio


__all__ = [
    "BaseServerBuilder",
    "HttpServerBuilder",
    "StdioServerBuilder",
    "run_http",
    "run_stdio",
]
