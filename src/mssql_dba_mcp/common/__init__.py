"""Common utilities and types."""

from .errors import (
    ConfigurationError,
    ConnectionFailedError,
    IdentifierValidationError,
    MssqlDbaError,
    NotConnectedError,
    QueryError,
)


__all__ = [
    "ConfigurationError",
    "ConnectionFailedError",
    "IdentifierValidationError",
    "MssqlDbaError",
    "NotConnectedError",
    "QueryError",
]
