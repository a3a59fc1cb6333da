"""SQL driver adapter for SQL Server connections."""

from __future__ import annotations

import asyncio
import re
from contextlib import ExitStack
from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from mssql_dba_mcp.common import ConnectionFailedError, NotConnectedError, QueryError
from mssql_dba_mcp.logger import get_logger


if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.engine import Engine

    from mssql_dba_mcp.config import DatabaseConfig


logger = get_logger(__name__)

APPLICATION_NAME = "mssql-dba-mcp"

_URL_PASSWORD = re.compile(r"(mssql(?:\+\w+)?://[^:/\s]+:)([^@\s]+)(@)")
_ODBC_PASSWORD = re.compile(
    r"((?:^|(?<=[;&?\s{])|(?<=%3B))(?:PWD|Password)\s*(?:=|%3D))(\{(?:[^}]|\}\})*\}|.*?)(?=;|%3B|&|\s|$)",
    re.IGNORECASE,
)


def obfuscate_password(text: str | None) -> str | None:
    """Obfuscate password in any text containing connection information.

    Works on SQLAlchemy URLs, ODBC connection strings (plain or URL-encoded)
    and error messages that embed either.

    Args:
        text: The text containing connection information.

    Returns:
        The text with passwords obfuscated, or None if input was None.
    """
    if not text:
        return text
    text = _URL_PASSWORD.sub(r"\1****\3", text)
    return _ODBC_PASSWORD.sub(r"\1****", text)


def _odbc_value(value: str) -> str:
    """Quote an ODBC connection string value when it needs it."""
    if value and not re.search(r"[;{}=\s]", value):
        return value
    return "{" + value.replace("}", "}}") + "}"


def build_connection_string(config: DatabaseConfig) -> str:
    """Build the ODBC connection string for a database configuration.

    Args:
        config: Database configuration.

    Returns:
        ODBC connection string (contains the password in clear text).
    """
    parts = {
        "DRIVER": "{" + config.driver + "}",
        "SERVER": f"{config.host},{config.port}",
        "DATABASE": _odbc_value(config.name),
        "UID": _odbc_value(config.user),
        "PWD": _odbc_value(config.password.get_secret_value()),
        "Encrypt": "yes" if config.encrypt else "no",
        "TrustServerCertificate": "yes" if config.trust_server_certificate else "no",
        "APP": APPLICATION_NAME,
    }
    return ";".join(f"{key}={value}" for key, value in parts.items())


def driver_message(error: BaseException) -> str:
    """Extract the database's own message from a wrapped driver error.

    SQLAlchemy appends the failing statement and a documentation link to its
    messages; callers only want what the server said.

    Args:
        error: Exception raised while talking to the database.

    Returns:
        The most specific message available.
    """
    orig = getattr(error, "orig", None)
    if orig is not None:
        args = getattr(orig, "args", ())
        if args and isinstance(args[-1], str):
            return args[-1]
        return str(orig)
    return str(error) or repr(error)


def _open_engine(engine: Engine, warm_connections: int) -> None:
    """Verify the engine with a trivial query and pre-open pooled connections."""
    with ExitStack() as stack:
        connection = stack.enter_context(engine.connect())
        connection.execute(text("SELECT 1"))
        for _ in range(warm_connections - 1):
            stack.enter_context(engine.connect())


def _run_query(engine: Engine, query: str, params: dict[str, Any]) -> list[dict[str, Any]]:
    # Leaving the block rolls the implicit transaction back; every query here is read-only
    with engine.connect() as connection:
        result = connection.execute(text(query), params)
        if not result.returns_rows:
            return []
        return [dict(row) for row in result.mappings()]


class DbConnPool:
    """Database connection manager using SQLAlchemy's queue pool over pyodbc.

    Holds at most one engine per process. ``pool_connect`` is idempotent and
    serialized, so concurrent first calls share a single engine.
    """

    def __init__(self, config: DatabaseConfig) -> None:
        """Initialize database connection pool.

        Args:
            config: Database configuration.
        """
        self.config = config
        self.engine: Engine | None = None
        self._is_valid = False
        self._closed = False
        self._last_error: str | None = None
        self._lock = asyncio.Lock()

    def _create_engine(self) -> Engine:
        url = URL.create("mssql+pyodbc", query={"odbc_connect": build_connection_string(self.config)})
        engine = create_engine(
            url,
            pool_size=self.config.max_pool,
            max_overflow=0,
            pool_recycle=self.config.idle_seconds,
            pool_timeout=max(1, self.config.connection_timeout_seconds),
            pool_pre_ping=True,
            connect_args={"timeout": self.config.connection_timeout_seconds},
        )
        request_timeout = self.config.request_timeout_seconds

        @event.listens_for(engine, "connect")
        def set_query_timeout(dbapi_connection: Any, _connection_record: Any) -> None:  # noqa: ANN401
            dbapi_connection.timeout = request_timeout

        return engine

    async def pool_connect(self) -> Engine:
        """Create the engine and verify it, unless a valid one already exists.

        Returns:
            The connected engine.

        Raises:
            ConnectionFailedError: If the server cannot be reached or rejects the login.
        """
        async with self._lock:
            if self.engine is not None and self._is_valid:
                return self.engine

            # Discard an engine left behind by a dropped connection
            self._dispose()
            self._closed = False

            engine: Engine | None = None
            try:
                engine = self._create_engine()
                await asyncio.to_thread(_open_engine, engine, max(1, self.config.min_pool))
            except Exception as e:
                if engine is not None:
                    engine.dispose()
                self._is_valid = False
                self._last_error = obfuscate_password(driver_message(e))
                raise ConnectionFailedError(self._last_error) from e

            self.engine = engine
            self._is_valid = True
            self._last_error = None
            logger.info(
                "Connected to %s/%s (pool max=%d, min=%d, recycle=%dms)",
                self.config.host,
                self.config.name,
                self.config.max_pool,
                self.config.min_pool,
                self.config.idle,
            )
            return engine

    async def acquire_engine(self) -> Engine:
        """Return a usable engine, connecting lazily if needed.

        Returns:
            The connected engine.

        Raises:
            NotConnectedError: If the pool was explicitly closed.
            ConnectionFailedError: If a lazy connection attempt fails.
        """
        if self._closed:
            raise NotConnectedError
        if self.engine is not None and self._is_valid:
            return self.engine
        logger.info("Database connection is not available, connecting")
        return await self.pool_connect()

    def _dispose(self) -> None:
        if self.engine is not None:
            try:
                self.engine.dispose()
            except Exception as e:
                logger.warning("Error disposing connection pool: %s", e)
        self.engine = None
        self._is_valid = False

    async def close(self) -> None:
        """Close the connection pool. Queries fail until ``pool_connect`` is called again."""
        async with self._lock:
            self._dispose()
            self._closed = True

    def reset(self) -> None:
        """Drop the engine and forget all state, including an explicit close."""
        self._dispose()
        self._closed = False
        self._last_error = None

    def mark_invalid(self, error: str | None = None) -> None:
        """Mark connection pool as invalid so the next query reconnects.

        Args:
            error: Error message if any.
        """
        self._is_valid = False
        self._last_error = error

    @property
    def is_connected(self) -> bool:
        """Check if the pool holds a valid engine."""
        return self.engine is not None and self._is_valid

    @property
    def is_closed(self) -> bool:
        """Check if the pool was explicitly closed."""
        return self._closed

    @property
    def last_error(self) -> str | None:
        """Get the last error message."""
        return self._last_error


class SqlDriver:
    """Executes parameterized queries through a :class:`DbConnPool`."""

    def __init__(self, conn: DbConnPool) -> None:
        """Initialize with a connection pool.

        Args:
            conn: Connection pool shared by all tool calls.
        """
        self.conn = conn

    async def execute_query(
        self,
        query: str,
        params: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Execute a query and return all rows.

        Parameters are bound by name (``:name`` placeholders); their values
        never become part of the SQL text.

        Args:
            query: SQL query to execute.
            params: Named parameter values.

        Returns:
            Rows as dictionaries keyed by column label, in result order.

        Raises:
            NotConnectedError: If the pool was explicitly closed.
            ConnectionFailedError: If the connection cannot be established or was lost.
            QueryError: If the database rejects the query.
        """
        engine = await self.conn.acquire_engine()
        try:
            return await asyncio.to_thread(_run_query, engine, query, dict(params or {}))
        except DBAPIError as e:
            message = driver_message(e)
            if e.connection_invalidated:
                self.conn.mark_invalid(message)
                logger.warning("Database connection lost: %s", obfuscate_password(message))
                raise ConnectionFailedError(obfuscate_password(message)) from e
            logger.error("Error executing query: %s", message)
            raise QueryError(message) from e
        except SQLAlchemyError as e:
            logger.error("Error executing query: %s", e)
            raise QueryError(driver_message(e)) from e
