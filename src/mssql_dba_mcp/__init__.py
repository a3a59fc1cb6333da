"""MCP server exposing SQL Server diagnostic queries as tools."""

from importlib.metadata import version


__version__ = version("mssql-dba-mcp")
