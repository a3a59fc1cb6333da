"""Enumerations for server configuration and the tool/prompt surface."""

from __future__ import annotations

from enum import StrEnum


class TransportConfig(StrEnum):
    """Transport types for configuration."""

    HTTP = "http"
    STDIO = "stdio"


class TransportHttpApp(StrEnum):
    """HTTP transport types for FastMCP http_app."""

    HTTP = "http"
    STREAMABLE_HTTP = "streamable-http"


class ToolName(StrEnum):
    """Wire names of the diagnostic tools."""

    GET_TABLES_INFO = "get-tables-info"
    GET_ACTIVE_TABLES_INFO = "get-active-tables-info"
    GET_TABLES_INDEX_HEALTH = "get-tables-index-health"
    GET_TABLES_MISSING_INDEXES = "get-tables-missing-indexes"
    GET_SERVER_INFO = "get-server-info"
    GET_DB_COLLATION = "get-db-collation"
    GET_COLLATION_MISMATCHES = "get-collation-mismatches"

    @classmethod
    def table_level_tools(cls) -> list[ToolName]:
        """Tools that take a list of table names."""
        return [
            cls.GET_TABLES_INFO,
            cls.GET_TABLES_INDEX_HEALTH,
            cls.GET_TABLES_MISSING_INDEXES,
        ]

    @property
    def method_name(self) -> str:
        """Name of the ToolManager method implementing this tool."""
        return self.value.replace("-", "_")


class PromptName(StrEnum):
    """Wire names of the instructional prompts."""

    OPTIMIZE_QUERY = "optimize-query"
    OPTIMIZE_INDEXES = "optimize-indexes"
    OPTIMIZE_INDICES = "optimize-indices"
