"""Catalog of the diagnostic queries behind each tool.

Entries are pure: building a request never touches the database.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from mssql_dba_mcp.enums import ToolName
from mssql_dba_mcp.sql.identifiers import render_in_list, validate_identifiers

from . import constants, descriptions, queries


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


@dataclass(frozen=True)
class QueryRequest:
    """Query text plus its named bind parameters."""

    query: str
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DiagnosticQuery:
    """A named, parameterized diagnostic query.

    Attributes:
        name: Tool name the entry backs.
        title: Human-readable tool title.
        description: Tool description shown to clients.
        template: SQL text. Table-filtered templates contain a ``{table_names}`` placeholder.
        empty_message: Text returned when the query yields no rows.
        error_label: Prefix of the text returned when the query fails.
        required_params: Names of bind parameters the caller must supply.
    """

    name: ToolName
    title: str
    description: str
    template: str
    empty_message: str
    error_label: str
    required_params: tuple[str, ...] = ()

    @property
    def takes_table_names(self) -> bool:
        """Whether the query is filtered by a caller-supplied table list."""
        return self.name in ToolName.table_level_tools()

    def build(self, table_names: Iterable[str] | None = None, **params: Any) -> QueryRequest:  # noqa: ANN401
        """Build the query request for this entry.

        Args:
            table_names: Tables to filter by (table-filtered entries only).
            **params: Bind parameter values.

        Returns:
            The query text and its bindings.

        Raises:
            IdentifierValidationError: If a table name fails the allow-list.
            ValueError: If the table list is missing or empty, or a required parameter is absent.
        """
        missing = [name for name in self.required_params if name not in params]
        if missing:
            error_msg = f"Missing parameters for {self.name}: {', '.join(missing)}"
            raise ValueError(error_msg)

        if not self.takes_table_names:
            return QueryRequest(query=self.template, params=MappingProxyType(dict(params)))

        if table_names is None:
            error_msg = f"{self.name} requires a list of table names"
            raise ValueError(error_msg)
        in_list = render_in_list(validate_identifiers(table_names))
        return QueryRequest(
            query=self.template.format(table_names=in_list),
            params=MappingProxyType(dict(params)),
        )


CATALOG: Mapping[ToolName, DiagnosticQuery] = MappingProxyType(
    {
        ToolName.GET_TABLES_INFO: DiagnosticQuery(
            name=ToolName.GET_TABLES_INFO,
            title=descriptions.TITLE_GET_TABLES_INFO,
            description=descriptions.DESC_GET_TABLES_INFO,
            template=queries.QUERY_TABLES_WORKLOAD.format(table_filter=queries.TABLES_IN_LIST_FILTER),
            empty_message=constants.NO_TABLES_INFO,
            error_label=constants.ERROR_TABLES_INFO,
        ),
        ToolName.GET_ACTIVE_TABLES_INFO: DiagnosticQuery(
            name=ToolName.GET_ACTIVE_TABLES_INFO,
            title=descriptions.TITLE_GET_ACTIVE_TABLES_INFO,
            description=descriptions.DESC_GET_ACTIVE_TABLES_INFO,
            template=queries.QUERY_TABLES_WORKLOAD.format(table_filter=queries.ACTIVE_TABLES_FILTER),
            empty_message=constants.NO_ACTIVE_TABLES,
            error_label=constants.ERROR_ACTIVE_TABLES_INFO,
        ),
        ToolName.GET_TABLES_INDEX_HEALTH: DiagnosticQuery(
            name=ToolName.GET_TABLES_INDEX_HEALTH,
            title=descriptions.TITLE_GET_TABLES_INDEX_HEALTH,
            description=descriptions.DESC_GET_TABLES_INDEX_HEALTH,
            template=queries.QUERY_TABLES_INDEX_HEALTH,
            empty_message=constants.NO_INDEXES,
            error_label=constants.ERROR_INDEX_HEALTH,
        ),
        ToolName.GET_TABLES_MISSING_INDEXES: DiagnosticQuery(
            name=ToolName.GET_TABLES_MISSING_INDEXES,
            title=descriptions.TITLE_GET_TABLES_MISSING_INDEXES,
            description=descriptions.DESC_GET_TABLES_MISSING_INDEXES,
            template=queries.QUERY_TABLES_MISSING_INDEXES,
            empty_message=constants.NO_MISSING_INDEXES,
            error_label=constants.ERROR_MISSING_INDEXES,
        ),
        ToolName.GET_SERVER_INFO: DiagnosticQuery(
            name=ToolName.GET_SERVER_INFO,
            title=descriptions.TITLE_GET_SERVER_INFO,
            description=descriptions.DESC_GET_SERVER_INFO,
            template=queries.QUERY_SERVER_INFO,
            empty_message=constants.NO_SERVER_INFO,
            error_label=constants.ERROR_SERVER_INFO,
        ),
        ToolName.GET_DB_COLLATION: DiagnosticQuery(
            name=ToolName.GET_DB_COLLATION,
            title=descriptions.TITLE_GET_DB_COLLATION,
            description=descriptions.DESC_GET_DB_COLLATION,
            template=queries.QUERY_DB_COLLATION,
            empty_message=constants.NO_DB_COLLATION,
            error_label=constants.ERROR_DB_COLLATION,
        ),
        ToolName.GET_COLLATION_MISMATCHES: DiagnosticQuery(
            name=ToolName.GET_COLLATION_MISMATCHES,
            title=descriptions.TITLE_GET_COLLATION_MISMATCHES,
            description=descriptions.DESC_GET_COLLATION_MISMATCHES,
            template=queries.QUERY_COLLATION_MISMATCHES,
            empty_message=constants.NO_COLLATION_MISMATCHES,
            error_label=constants.ERROR_COLLATION_MISMATCHES,
            required_params=("schema_name",),
        ),
    }
)
