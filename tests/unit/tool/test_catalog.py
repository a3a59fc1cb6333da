"""Tests for the diagnostic query catalog."""

from __future__ import annotations

import pytest

from mssql_dba_mcp.common import IdentifierValidationError
from mssql_dba_mcp.enums import ToolName
from mssql_dba_mcp.tool.catalog import CATALOG


class TestCatalogEntries:
    """Test cases for catalog coverage."""

    def test_every_tool_has_an_entry(self):
        """Test that each tool name maps to an entry carrying the same name."""
        assert set(CATALOG) == set(ToolName)
        for tool_name, entry in CATALOG.items():
            assert entry.name == tool_name
            assert entry.title
            assert entry.description
            assert entry.empty_message
            assert entry.error_label

    def test_table_level_tools_take_table_names(self):
        """Test that only table-level entries require a table list."""
        table_level = set(ToolName.table_level_tools())
        for tool_name, entry in CATALOG.items():
            assert entry.takes_table_names is (tool_name in table_level)

    def test_table_filtered_entries_by_name(self):
        """Test the exact set of entries that require a table list."""
        filtered = {entry.name.value for entry in CATALOG.values() if entry.takes_table_names}

        assert filtered == {"get-tables-info", "get-tables-index-health", "get-tables-missing-indexes"}

    def test_templates_have_no_unfilled_placeholders(self):
        """Test that only table-level templates keep a placeholder."""
        for entry in CATALOG.values():
            assert "{table_filter}" not in entry.template
            assert ("{table_names}" in entry.template) is entry.takes_table_names

    def test_catalog_is_read_only(self):
        """Test that the catalog cannot be modified at runtime."""
        with pytest.raises(TypeError):
            CATALOG[ToolName.GET_SERVER_INFO] = CATALOG[ToolName.GET_DB_COLLATION]  # type: ignore[index]


class TestDiagnosticQueryBuild:
    """Test cases for DiagnosticQuery.build."""

    def test_table_names_rendered_into_in_list(self):
        """Test that validated names are written as a unicode literal list."""
        request = CATALOG[ToolName.GET_TABLES_INDEX_HEALTH].build(["Orders", "Customers", "Orders"])

        assert "tableName IN (N'Orders', N'Customers')" in request.query
        assert "{table_names}" not in request.query
        assert dict(request.params) == {}

    def test_tables_info_filters_by_list(self):
        """Test that get-tables-info uses the workload query with an IN filter."""
        request = CATALOG[ToolName.GET_TABLES_INFO].build(["Orders"])

        assert "tableName IN (N'Orders');" in request.query
        assert "activityLevelFriendly <> 'No Activity'" not in request.query

    def test_active_tables_filters_by_activity(self):
        """Test that get-active-tables-info keeps only tables with recorded activity."""
        request = CATALOG[ToolName.GET_ACTIVE_TABLES_INFO].build()

        assert "activityLevelFriendly <> 'No Activity';" in request.query

    def test_invalid_name_never_reaches_sql(self):
        """Test that a rejected name is not rendered."""
        entry = CATALOG[ToolName.GET_TABLES_MISSING_INDEXES]

        with pytest.raises(IdentifierValidationError) as exc_info:
            entry.build(["Orders", "x') OR 1=1 --"])

        assert exc_info.value.invalid == ["x') OR 1=1 --"]

    def test_empty_table_list_rejected(self):
        """Test that an empty list cannot produce an empty IN clause."""
        with pytest.raises(ValueError, match="At least one"):
            CATALOG[ToolName.GET_TABLES_INFO].build([])

    def test_missing_table_list_rejected(self):
        """Test that table-level entries require a list."""
        with pytest.raises(ValueError, match="requires a list of table names"):
            CATALOG[ToolName.GET_TABLES_INFO].build()

    def test_schema_parameter_is_bound(self):
        """Test that the schema name is passed as a parameter, not as text."""
        request = CATALOG[ToolName.GET_COLLATION_MISMATCHES].build(schema_name="sales")

        assert ":schema_name" in request.query
        assert "sales" not in request.query
        assert dict(request.params) == {"schema_name": "sales"}

    def test_schema_parameter_required(self):
        """Test that a missing required parameter is reported."""
        with pytest.raises(ValueError, match="schema_name"):
            CATALOG[ToolName.GET_COLLATION_MISMATCHES].build()

    def test_request_is_immutable(self):
        """Test that built requests cannot be modified."""
        request = CATALOG[ToolName.GET_SERVER_INFO].build()

        with pytest.raises(AttributeError):
            request.query = "SELECT 1"  # type: ignore[misc]
