"""Database connection configuration."""

from __future__ import annotations

from typing import Self

from pydantic import AliasChoices, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env(name: str, field_name: str) -> AliasChoices:
    # Accept the bare environment variable as well as the field name for overrides
    return AliasChoices(name, field_name)


class DatabaseConfig(BaseSettings):
    """SQL Server connection settings.

    Loaded from the environment (or ``.env``)::

        DB_USER=sa
        DB_PASSWORD=secret
        DB_HOST=localhost
        DB_NAME=AdventureWorks
        TRUST_SERVER_CERTIFICATE=true
        ENCRYPT=false
        MAX_POOL=10
        MIN_POOL=0
        IDLE=30000

    Immutable once constructed.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DB_",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    user: str = Field(min_length=1, description="Login name")
    password: SecretStr = Field(description="Login password")
    host: str = Field(min_length=1, description="SQL Server host name or address")
    name: str = Field(min_length=1, description="Database to connect to")
    port: int = Field(default=1433, ge=1, le=65535, description="SQL Server TCP port")
    driver: str = Field(default="ODBC Driver 18 for SQL Server", description="ODBC driver name")
    schema_name: str = Field(
        default="dbo",
        validation_alias=_env("DB_SCHEMA", "schema_name"),
        description="Schema inspected by schema-level diagnostics",
    )
    trust_server_certificate: bool = Field(
        default=False,
        validation_alias=_env("TRUST_SERVER_CERTIFICATE", "trust_server_certificate"),
        description="Trust the server certificate without validation",
    )
    encrypt: bool = Field(
        default=False,
        validation_alias=_env("ENCRYPT", "encrypt"),
        description="Encrypt the connection",
    )
    max_pool: int = Field(
        default=10,
        ge=1,
        validation_alias=_env("MAX_POOL", "max_pool"),
        description="Maximum number of pooled connections",
    )
    min_pool: int = Field(
        default=0,
        ge=0,
        validation_alias=_env("MIN_POOL", "min_pool"),
        description="Connections opened eagerly when the pool is created",
    )
    idle: int = Field(
        default=30000,
        ge=0,
        validation_alias=_env("IDLE", "idle"),
        description=(
            "Maximum age in milliseconds of a pooled connection before it is replaced on checkout; "
            "SQLAlchemy pools have no idle timeout, so this is a recycle age, not an idle limit"
        ),
    )
    connection_timeout: int = Field(
        default=15000,
        ge=0,
        validation_alias=_env("CONNECTION_TIMEOUT", "connection_timeout"),
        description="Login and pool checkout timeout in milliseconds",
    )
    request_timeout: int = Field(
        default=15000,
        ge=0,
        validation_alias=_env("REQUEST_TIMEOUT", "request_timeout"),
        description="Query timeout in milliseconds (0 disables it)",
    )

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: SecretStr) -> SecretStr:
        """Reject an empty password."""
        if not value.get_secret_value():
            error_msg = "password must not be empty"
            raise ValueError(error_msg)
        return value

    @model_validator(mode="after")
    def validate_pool_bounds(self) -> Self:
        """Ensure MIN_POOL does not exceed MAX_POOL."""
        if self.min_pool > self.max_pool:
            error_msg = f"MIN_POOL ({self.min_pool}) must not exceed MAX_POOL ({self.max_pool})"
            raise ValueError(error_msg)
        return self

    @property
    def idle_seconds(self) -> int:
        """Connection recycle age in whole seconds (at least one)."""
        return max(1, self.idle // 1000)

    @property
    def connection_timeout_seconds(self) -> int:
        """Connection timeout in whole seconds."""
        return self.connection_timeout // 1000

    @property
    def request_timeout_seconds(self) -> int:
        """Query timeout in whole seconds."""
        return self.request_timeout // 1000
