"""MCP tools."""

from .catalog import CATALOG, DiagnosticQuery, QueryRequest
from .tools import ToolManager


__all__ = ["CATALOG", "DiagnosticQuery", "QueryRequest", "ToolManager"]
