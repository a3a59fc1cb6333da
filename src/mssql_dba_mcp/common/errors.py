"""Error types shared across the server."""

from __future__ import annotations


class MssqlDbaError(Exception):
    """Base class for all errors raised by the server."""


class ConfigurationError(MssqlDbaError):
    """Required connection settings are missing or invalid.

    Raised at startup only. The process must not go on to serve tools.
    """


class ConnectionFailedError(MssqlDbaError):
    """Exception for database connection errors."""

    def __init__(self, error_details: str | None) -> None:
        """Initialize exception.

        Args:
            error_details: Connection error details (with obfuscated password).
        """
        message = f"Connection attempt failed: {error_details}"
        super().__init__(message)
        self.error_details = error_details


class NotConnectedError(MssqlDbaError):
    """A query was attempted after the connection pool was explicitly closed."""

    def __init__(self) -> None:
        super().__init__("Database connection is not established.")


class QueryError(MssqlDbaError):
    """The database rejected a query (syntax, permissions, timeout)."""


class IdentifierValidationError(MssqlDbaError, ValueError):
    """One or more identifiers failed the allow-list check."""

    def __init__(self, invalid: list[str]) -> None:
        """Initialize exception.

        Args:
            invalid: Identifiers that were rejected, in input order.
        """
        names = ", ".join(repr(name) for name in invalid)
        super().__init__(f"Invalid identifiers: {names}")
        self.invalid = invalid
