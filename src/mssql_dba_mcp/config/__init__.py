"""Application configuration and settings."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_settings import BaseSettings

from mssql_dba_mcp.common import ConfigurationError
from mssql_dba_mcp.config.database import DatabaseConfig
from mssql_dba_mcp.config.server import ServerSettings
from mssql_dba_mcp.enums import TransportConfig


__all__ = ["DatabaseConfig", "ServerSettings", "Settings", "get_settings"]


class Settings(BaseModel):
    """Application settings.

    Combines the server settings (``MCP_*`` variables) with the database
    connection settings (``DB_*`` and pool variables).
    """

    model_config = ConfigDict(frozen=True)

    server: ServerSettings
    database: DatabaseConfig

    @property
    def name(self) -> str:
        """Server name announced to clients."""
        return self.server.server_name

    @property
    def transport(self) -> TransportConfig:
        """Transport from server settings."""
        return self.server.transport

    @property
    def stdio(self) -> bool:
        """Check if server should run in stdio mode.

        Returns:
            True if transport='stdio', False otherwise.
        """
        return self.server.transport == TransportConfig.STDIO

    @property
    def host(self) -> str:
        """Host from server settings."""
        return self.server.host

    @property
    def port(self) -> int:
        """Port from server settings."""
        return self.server.port

    @property
    def endpoint(self) -> str:
        """Endpoint path from server settings."""
        return self.server.endpoint


def _env_name(model: type[BaseSettings], field: str) -> str:
    """Map a field (or alias) reported by pydantic to the environment variable an operator sets."""
    info = model.model_fields.get(field)
    if info is None:
        return field.upper()
    alias = info.validation_alias
    choices = getattr(alias, "choices", None)
    if choices:
        return str(choices[0]).upper()
    prefix = model.model_config.get("env_prefix", "")
    return f"{prefix}{field}".upper()


def _describe_validation_error(model: type[BaseSettings], error: ValidationError) -> str:
    """Turn a pydantic validation error into an operator-facing message.

    Args:
        model: Settings class that failed to validate.
        error: The validation error.

    Returns:
        One line per problem, naming the environment variable involved.
    """
    problems: list[str] = []
    for item in error.errors():
        loc = item.get("loc") or ()
        if loc:
            problems.append(f"{_env_name(model, str(loc[0]))}: {item['msg']}")
        else:
            problems.append(item["msg"])
    return "Invalid configuration:\n  " + "\n  ".join(problems)


def _build(model: type[BaseSettings], value: Any) -> Any:  # noqa: ANN401
    if isinstance(value, model):
        return value
    try:
        return model(**(value or {}))
    except ValidationError as e:
        raise ConfigurationError(_describe_validation_error(model, e)) from e


def get_settings(
    *,
    server: ServerSettings | dict[str, Any] | None = None,
    database: DatabaseConfig | dict[str, Any] | None = None,
) -> Settings:
    """Factory function to create settings instance.

    Loads configuration in the following priority order:
    1. Explicit overrides (instances or dictionaries of field values)
    2. Environment variables
    3. .env file (if exists)
    4. Default values from class

    Args:
        server: Server settings instance or field overrides.
        database: Database settings instance or field overrides.

    Returns:
        Settings instance with loaded configuration.

    Raises:
        ConfigurationError: If a required setting is missing or a value is invalid.

    Examples:
        >>> settings = get_settings()
        >>> test_settings = get_settings(server={"transport": "http", "port": 9000})
    """
    return Settings(
        server=_build(ServerSettings, server),
        database=_build(DatabaseConfig, database),
    )
