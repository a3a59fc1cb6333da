"""Tests for prompt rendering and registration."""

from __future__ import annotations

import pytest
from fastmcp import Client, FastMCP

from mssql_dba_mcp.prompt import PromptManager


class TestPromptRendering:
    """Test cases for PromptManager prompt methods."""

    def test_optimize_query_without_query(self):
        """Test that the instructions are returned alone when no query is given."""
        messages = PromptManager().optimize_query()

        assert len(messages) == 1
        assert messages[0].role == "user"
        text = messages[0].content.text
        assert "“mssql-dba” MCP server" in text
        assert "Query:" not in text

    def test_optimize_query_blank_query_is_ignored(self):
        """Test that whitespace-only queries are treated as absent."""
        text = PromptManager().optimize_query("   \n").pop().content.text

        assert "Query:" not in text

    def test_optimize_query_appends_query(self):
        """Test that the query is appended after the instructions."""
        text = PromptManager().optimize_query("  SELECT * FROM Orders WHERE id = 1  ").pop().content.text

        assert text.endswith("\nQuery:\nSELECT * FROM Orders WHERE id = 1\n")
        assert "{QUERY FILE NAME}" in text

    def test_optimize_indexes_interpolates_tables(self):
        """Test that table names and the server name are inserted."""
        messages = PromptManager(server_name="sql-prod").optimize_indexes("Orders, Customers")

        text = messages[0].content.text
        assert "for these tables: Orders, Customers, using only tools" in text
        assert "“sql-prod” MCP server" in text
        assert '"index_optimizations.sql"' in text


class TestPromptRegistration:
    """Test cases for prompt registration with FastMCP."""

    def test_register_prompts_count(self):
        """Test that both prompts and the alias are registered."""
        mcp = FastMCP("test")

        assert PromptManager().register_prompts(mcp) == 3

    @pytest.mark.asyncio
    async def test_prompts_listed_with_arguments(self):
        """Test the advertised prompt names and their arguments."""
        mcp = FastMCP("test")
        PromptManager().register_prompts(mcp)

        async with Client(mcp) as client:
            prompts = {prompt.name: prompt for prompt in await client.list_prompts()}

        assert set(prompts) == {"optimize-query", "optimize-indexes", "optimize-indices"}
        query_args = {arg.name: arg.required for arg in prompts["optimize-query"].arguments}
        assert query_args == {"query": False}
        index_args = {arg.name: arg.required for arg in prompts["optimize-indexes"].arguments}
        assert index_args == {"tableNames": True}

    @pytest.mark.asyncio
    async def test_alias_renders_same_text(self):
        """Test that optimize-indices renders the optimize-indexes text."""
        mcp = FastMCP("test")
        PromptManager().register_prompts(mcp)

        async with Client(mcp) as client:
            indexes = await client.get_prompt("optimize-indexes", {"tableNames": "Orders"})
            indices = await client.get_prompt("optimize-indices", {"tableNames": "Orders"})

        assert indexes.messages[0].content.text == indices.messages[0].content.text
        assert "for these tables: Orders," in indexes.messages[0].content.text

    @pytest.mark.asyncio
    async def test_optimize_query_renders_over_protocol(self):
        """Test that optimize-query renders with and without its optional argument."""
        mcp = FastMCP("test")
        PromptManager().register_prompts(mcp)

        async with Client(mcp) as client:
            bare = await client.get_prompt("optimize-query")
            with_query = await client.get_prompt("optimize-query", {"query": "SELECT * FROM Orders"})

        assert len(bare.messages) == 1
        assert bare.messages[0].role == "user"
        assert "Query:" not in bare.messages[0].content.text
        assert with_query.messages[0].content.text.endswith("\nQuery:\nSELECT * FROM Orders\n")
