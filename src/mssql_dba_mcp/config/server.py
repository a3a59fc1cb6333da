"""Server configuration."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mssql_dba_mcp.enums import TransportConfig
from mssql_dba_mcp.logger import LogLevel


class ServerSettings(BaseSettings):
    """Server settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="MCP_", env_ignore_empty=True, extra="ignore")

    server_name: str = Field(default="mssql-dba", description="Name announced to MCP clients")
    transport: TransportConfig = Field(default=TransportConfig.STDIO, description="Transport type: 'stdio' or 'http'")
    host: str = Field(default="127.0.0.1", description="Host to bind the HTTP server to")
    port: int = Field(default=8000, ge=1, le=65535, description="Port to bind the HTTP server to")
    endpoint: str = Field(default="mcp", description="HTTP endpoint path")
    streamable: bool = Field(default=False, description="Use streamable-http instead of plain http transport")
    health_endpoint_enabled: bool = Field(
        default=True, description="Enable health check endpoint at /health (HTTP transport only)"
    )
    log_level: LogLevel = Field(default="INFO", description="Log level")
    error_traceback: bool = Field(
        default=False, description="Append tracebacks to error strings returned by the error-to-string middleware"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Accept log levels in any case."""
        return value.upper() if isinstance(value, str) else value
