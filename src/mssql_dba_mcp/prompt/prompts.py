"""Module for creating and registering MCP prompts.

Annotations here are evaluated eagerly: FastMCP builds argument adapters from
the prompt signatures when they are registered.
"""

from typing import TYPE_CHECKING, Annotated

from mcp.types import PromptMessage, TextContent
from pydantic import Field

from mssql_dba_mcp.enums import PromptName
from mssql_dba_mcp.logger import get_logger

from .templates import (
    ARG_QUERY,
    ARG_TABLE_NAMES,
    DESC_OPTIMIZE_INDEXES,
    DESC_OPTIMIZE_QUERY,
    OPTIMIZE_INDEXES_TEXT,
    OPTIMIZE_QUERY_SUFFIX,
    OPTIMIZE_QUERY_TEXT,
    TITLE_OPTIMIZE_INDEXES,
    TITLE_OPTIMIZE_QUERY,
)


if TYPE_CHECKING:
    from fastmcp import FastMCP


logger = get_logger(__name__)

DEFAULT_SERVER_NAME = "mssql-dba"


def _user_message(text: str) -> list[PromptMessage]:
    return [PromptMessage(role="user", content=TextContent(type="text", text=text))]


class PromptManager:
    """Class for creating and managing MCP prompts.

    Prompts are fixed instructions with the caller's arguments interpolated.
    Each one renders to a single user message.
    """

    def __init__(self, server_name: str = DEFAULT_SERVER_NAME) -> None:
        """Initialize the PromptManager class.

        Args:
            server_name: Name of this MCP server, referenced by the instructions.
        """
        self.server_name = server_name

    def optimize_query(
        self,
        query: Annotated[str | None, Field(description=ARG_QUERY)] = None,
    ) -> list[PromptMessage]:
        """Optimize SQL queries for better performance."""
        text = OPTIMIZE_QUERY_TEXT.format(server_name=self.server_name)
        if query and query.strip():
            text += OPTIMIZE_QUERY_SUFFIX.format(query=query.strip())
        return _user_message(text)

    def optimize_indexes(
        self,
        tableNames: Annotated[str, Field(description=ARG_TABLE_NAMES)],  # noqa: N803
    ) -> list[PromptMessage]:
        """Optimize indexes on specified tables."""
        return _user_message(OPTIMIZE_INDEXES_TEXT.format(server_name=self.server_name, table_names=tableNames))

    def register_prompts(self, mcp: "FastMCP") -> int:
        """Register all prompts with FastMCP server using mcp.prompt().

        ``optimize-indices`` is registered as an alias of ``optimize-indexes``.

        Args:
            mcp: FastMCP server instance to register prompts with.

        Returns:
            Number of registered prompts.
        """
        prompts = {
            PromptName.OPTIMIZE_QUERY: (self.optimize_query, TITLE_OPTIMIZE_QUERY, DESC_OPTIMIZE_QUERY),
            PromptName.OPTIMIZE_INDEXES: (self.optimize_indexes, TITLE_OPTIMIZE_INDEXES, DESC_OPTIMIZE_INDEXES),
            PromptName.OPTIMIZE_INDICES: (self.optimize_indexes, TITLE_OPTIMIZE_INDEXES, DESC_OPTIMIZE_INDEXES),
        }
        for prompt_name, (method, title, description) in prompts.items():
            mcp.prompt(method, name=prompt_name.value, title=title, description=description)

        logger.debug("Registered %d prompts", len(prompts))
        return len(prompts)
