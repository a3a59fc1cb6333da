"""Tests for identifier validation and rendering."""

from __future__ import annotations

import pytest

from mssql_dba_mcp.common import IdentifierValidationError
from mssql_dba_mcp.sql.identifiers import (
    MAX_IDENTIFIER_LENGTH,
    is_valid_identifier,
    render_in_list,
    validate_identifiers,
)


class TestIsValidIdentifier:
    """Test cases for the identifier allow-list."""

    @pytest.mark.parametrize("name", ["Orders", "order_items", "_staging", "T1", "a" * MAX_IDENTIFIER_LENGTH])
    def test_accepts_plain_identifiers(self, name):
        """Test that letters, digits and underscores are accepted."""
        assert is_valid_identifier(name) is True

    @pytest.mark.parametrize(
        "name",
        [
            "",
            "1Orders",
            "Orders;DROP TABLE x",
            "O'Brien",
            "dbo.Orders",
            "[Orders]",
            "Order Items",
            "Orders--",
            "a" * (MAX_IDENTIFIER_LENGTH + 1),
            None,
            42,
        ],
    )
    def test_rejects_everything_else(self, name):
        """Test that quotes, separators, brackets and overlong names are rejected."""
        assert is_valid_identifier(name) is False


class TestValidateIdentifiers:
    """Test cases for validate_identifiers."""

    def test_deduplicates_preserving_order(self):
        """Test that duplicates are dropped and first-seen order is kept."""
        assert validate_identifiers(["Orders", "Customers", "Orders"]) == ["Orders", "Customers"]

    def test_reports_all_invalid_names(self):
        """Test that every rejected name is reported."""
        with pytest.raises(IdentifierValidationError) as exc_info:
            validate_identifiers(["Orders", "x'y", "a b"])

        assert exc_info.value.invalid == ["x'y", "a b"]
        assert isinstance(exc_info.value, ValueError)


class TestRenderInList:
    """Test cases for render_in_list."""

    def test_renders_unicode_literals(self):
        """Test that names become N'...' literals."""
        assert render_in_list(["Orders", "Customers"]) == "N'Orders', N'Customers'"

    def test_rejects_empty_list(self):
        """Test that an empty list cannot produce an empty IN clause."""
        with pytest.raises(ValueError, match="At least one"):
            render_in_list([])

    def test_never_renders_invalid_names(self):
        """Test that render_in_list validates on its own."""
        with pytest.raises(IdentifierValidationError):
            render_in_list(["Orders') OR 1=1 --"])
