"""Tests for tool and prompt registration on the server."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from fastmcp import Client

from mssql_dba_mcp.enums import ToolName, TransportConfig
from mssql_dba_mcp.server.stdio import StdioServerBuilder
from mssql_dba_mcp.tool import constants


@pytest.fixture
def builder(make_settings):
    """Stdio server builder whose lifespan never reaches a database."""
    with patch("mssql_dba_mcp.server.lifespan.LifespanManager.connect", new=AsyncMock(return_value=False)):
        server_builder = StdioServerBuilder(make_settings())
        server_builder.register_components(TransportConfig.STDIO)
        yield server_builder


class TestToolRegistration:
    """Test cases for the advertised tool surface."""

    def test_register_components_counts(self, make_settings):
        """Test that seven tools and three prompts are registered."""
        server_builder = StdioServerBuilder(make_settings())

        assert server_builder.register_components(TransportConfig.STDIO) == (7, 3)

    @pytest.mark.asyncio
    async def test_tools_listed_with_titles(self, builder):
        """Test that every tool is listed with its title and description."""
        async with Client(builder.main_mcp) as client:
            tools = {tool.name: tool for tool in await client.list_tools()}

        assert set(tools) == {tool_name.value for tool_name in ToolName}
        assert tools["get-server-info"].title == "Get Server Info"
        assert tools["get-tables-index-health"].description == "Assess index health for specified tables"

    @pytest.mark.asyncio
    async def test_table_tools_take_string_array(self, builder):
        """Test that table-level tools require a tableNames string array."""
        async with Client(builder.main_mcp) as client:
            tools = {tool.name: tool for tool in await client.list_tools()}

        for tool_name in ToolName.table_level_tools():
            schema = tools[tool_name.value].inputSchema
            assert schema["required"] == ["tableNames"]
            assert schema["properties"]["tableNames"]["type"] == "array"
            assert schema["properties"]["tableNames"]["items"] == {"type": "string"}
        assert not tools["get-server-info"].inputSchema.get("properties")

    @pytest.mark.asyncio
    async def test_empty_table_list_over_protocol(self, builder):
        """Test a full tool call that never needs the database."""
        async with Client(builder.main_mcp) as client:
            result = await client.call_tool("get-tables-missing-indexes", {"tableNames": []})

        assert result.is_error is False
        assert result.content[0].text == constants.NO_TABLE_NAMES_PROVIDED

