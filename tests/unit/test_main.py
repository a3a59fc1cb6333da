"""Tests for the command line entry point."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from mssql_dba_mcp import __version__
from mssql_dba_mcp.main import main


@pytest.fixture
def db_env(monkeypatch, tmp_path):
    """Complete database environment, isolated from any local .env file."""
    monkeypatch.chdir(tmp_path)
    for name in ("MCP_TRANSPORT", "MCP_HOST", "MCP_PORT", "MCP_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DB_USER", "sa")
    monkeypatch.setenv("DB_PASSWORD", "S3cret!pw")
    monkeypatch.setenv("DB_HOST", "localhost")
    monkeypatch.setenv("DB_NAME", "Sales")


@pytest.fixture
def runners():
    """Patch the event loop entry point and both transports."""
    with (
        patch("mssql_dba_mcp.main.configure_logging"),
        patch("mssql_dba_mcp.main.asyncio") as mock_asyncio,
        patch("mssql_dba_mcp.main.run_stdio", new=MagicMock(return_value="stdio")) as mock_stdio,
        patch("mssql_dba_mcp.main.run_http", new=MagicMock(return_value="http")) as mock_http,
    ):
        yield mock_asyncio, mock_stdio, mock_http


class TestMain:
    """Test cases for main()."""

    def test_version(self, runners):  # noqa: ARG002
        """Test that --version prints the version without loading settings."""
        result = CliRunner().invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_database_settings_exit_1(self, runners, monkeypatch, tmp_path):
        """Test that startup fails before serving when required settings are missing."""
        monkeypatch.chdir(tmp_path)
        for name in ("DB_USER", "DB_PASSWORD", "DB_HOST", "DB_NAME"):
            monkeypatch.delenv(name, raising=False)
        mock_asyncio, mock_stdio, mock_http = runners

        result = CliRunner().invoke(main, [])

        assert result.exit_code == 1
        mock_asyncio.run.assert_not_called()
        mock_stdio.assert_not_called()
        mock_http.assert_not_called()

    def test_default_transport_is_stdio(self, db_env, runners):  # noqa: ARG002
        """Test that stdio is used when no transport is configured."""
        mock_asyncio, mock_stdio, mock_http = runners

        result = CliRunner().invoke(main, [])

        assert result.exit_code == 0
        mock_stdio.assert_called_once()
        mock_http.assert_not_called()
        mock_asyncio.run.assert_called_once_with("stdio")
        settings = mock_stdio.call_args.args[0]
        assert settings.database.name == "Sales"

    def test_http_transport_with_overrides(self, db_env, runners):  # noqa: ARG002
        """Test that CLI options override the environment."""
        mock_asyncio, mock_stdio, mock_http = runners

        result = CliRunner().invoke(main, ["--transport", "HTTP", "--port", "9001", "--log-level", "debug"])

        assert result.exit_code == 0
        mock_stdio.assert_not_called()
        settings = mock_http.call_args.args[0]
        assert settings.port == 9001
        assert settings.server.log_level == "DEBUG"
        mock_asyncio.run.assert_called_once_with("http")

    def test_keyboard_interrupt_exits_cleanly(self, db_env, runners):  # noqa: ARG002
        """Test that Ctrl+C ends the process with status 0."""
        mock_asyncio, _, _ = runners
        mock_asyncio.run.side_effect = KeyboardInterrupt

        result = CliRunner().invoke(main, [])

        assert result.exit_code == 0

    def test_fatal_error_exits_1(self, db_env, runners):  # noqa: ARG002
        """Test that an unexpected failure ends the process with status 1."""
        mock_asyncio, _, _ = runners
        mock_asyncio.run.side_effect = RuntimeError("boom")

        result = CliRunner().invoke(main, [])

        assert result.exit_code == 1
