"""Main entry point for the MCP server."""

from __future__ import annotations

import asyncio
import sys
import warnings
from typing import Any

import click

from mssql_dba_mcp import __version__
from mssql_dba_mcp.common import ConfigurationError
from mssql_dba_mcp.config import get_settings
from mssql_dba_mcp.logger import configure_logging, get_logger
from mssql_dba_mcp.server import run_http, run_stdio


logger = get_logger(__name__)


@click.command()
@click.option("--version", is_flag=True, default=False, help="Show version and exit")
@click.option(
    "--transport",
    type=click.Choice(["http", "stdio"], case_sensitive=False),
    default=None,
    help="Transport type: 'http' or 'stdio'. If not specified, uses MCP_TRANSPORT (default: stdio).",
)
@click.option("--host", type=str, default=None, help="Host to bind the HTTP server to (MCP_HOST)")
@click.option("--port", type=int, default=None, help="Port to bind the HTTP server to (MCP_PORT)")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Log level (MCP_LOG_LEVEL)",
)
def main(
    *,
    version: bool = False,
    transport: str | None = None,
    host: str | None = None,
    port: int | None = None,
    log_level: str | None = None,
) -> None:
    """Start the SQL Server diagnostics MCP server.

    Database connection settings come from the environment (or ``.env``):
    DB_USER, DB_PASSWORD, DB_HOST and DB_NAME are required.

    Uvicorn and FastMCP have built-in signal handling (SIGINT, SIGTERM).
    The lifespan manager closes the connection pool on shutdown.
    """
    configure_logging(level="INFO")

    if version:
        click.echo(f"mssql-dba-mcp version {__version__}")
        return

    # Only CLI parameters that were actually given override the environment
    cli_overrides: dict[str, Any] = {
        "transport": transport.lower() if transport else None,
        "host": host,
        "port": port,
        "log_level": log_level,
    }
    server_overrides = {key: value for key, value in cli_overrides.items() if value is not None}

    try:
        app_settings = get_settings(server=server_overrides)
    except ConfigurationError as e:
        logger.error("%s", e)
        sys.exit(1)

    configure_logging(level=app_settings.server.log_level)

    # websockets (pulled in by uvicorn) emits deprecation warnings on import
    warnings.filterwarnings("ignore", category=DeprecationWarning, module="websockets")
    warnings.filterwarnings("ignore", category=DeprecationWarning, module="uvicorn.protocols.websockets")

    # Start server - asyncio.run() and uvicorn/FastMCP handle signals automatically
    try:
        if app_settings.stdio:
            asyncio.run(run_stdio(app_settings))
        else:
            asyncio.run(run_http(app_settings))
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        sys.exit(0)
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
