"""Logging setup based on Rich."""

from __future__ import annotations

import logging
from typing import Literal

from rich.console import Console
from rich.logging import RichHandler


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Third-party loggers that are too chatty at INFO
_NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "mcp.server.lowlevel.server", "httpx")


def configure_logging(
    level: LogLevel | int = "INFO",
    *,
    show_path: bool = True,
    rich_tracebacks: bool = True,
    tracebacks_max_frames: int = 3,
) -> None:
    """Configure the root logger with Rich handlers writing to stderr.

    stdout is reserved for the MCP stdio transport, so nothing here may ever
    write to it.

    Args:
        level: Log level.
        show_path: Show file path in logs.
        rich_tracebacks: Render tracebacks with Rich.
        tracebacks_max_frames: Maximum number of frames in traceback.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console = Console(stderr=True)

    # Plain records
    handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=show_path,
        rich_tracebacks=False,
    )
    handler.setLevel(level)
    handler.addFilter(lambda record: record.exc_info is None)
    root_logger.addHandler(handler)

    # Records carrying a traceback
    traceback_handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=show_path,
        rich_tracebacks=rich_tracebacks,
        tracebacks_max_frames=tracebacks_max_frames,
    )
    traceback_handler.setLevel(level)
    traceback_handler.addFilter(lambda record: record.exc_info is not None)
    root_logger.addHandler(traceback_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root_logger.level))


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name.

    Args:
        name: Logger name (usually __name__ of the module).

    Returns:
        Configured logger.
    """
    return logging.getLogger(name)
