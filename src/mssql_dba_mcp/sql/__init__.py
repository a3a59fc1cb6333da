"""SQL utilities."""

from .identifiers import is_valid_identifier, render_in_list, validate_identifiers
from .sql_driver import DbConnPool, SqlDriver, build_connection_string, driver_message, obfuscate_password


__all__ = [
    "DbConnPool",
    "SqlDriver",
    "build_connection_string",
    "driver_message",
    "is_valid_identifier",
    "obfuscate_password",
    "render_in_list",
    "validate_identifiers",
]
