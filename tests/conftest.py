"""Shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from mssql_dba_mcp.config import DatabaseConfig, Settings, get_settings


@pytest.fixture
def database_config() -> DatabaseConfig:
    """Database configuration that never touches the environment's DB_* values."""
    return DatabaseConfig(
        user="sa",
        password="S3cret!pw",
        host="sql.example.local",
        name="Sales",
        trust_server_certificate=True,
        encrypt=False,
    )


@pytest.fixture
def make_settings(database_config):
    """Factory for Settings with server overrides and the test database configuration."""

    def _make(**server: Any) -> Settings:
        return get_settings(server=server, database=database_config)

    return _make
