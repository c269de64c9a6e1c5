"""Unit tests for the top-level CLI application."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner
from xcleanup import __version__
from xcleanup.cli.main import app

runner = CliRunner()


class TestMainApp:
    """Tests for global options and command registration."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"xcleanup version {__version__}" in result.stdout

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("init", "plan", "run", "status"):
            assert command in result.stdout

    def test_verbose_enables_console_logging(self, write_config: Callable[..., Path]) -> None:
        config_path = write_config()

        with patch("xcleanup.cli.main.enable_console_logging") as mock_console:
            result = runner.invoke(app, ["-v", "status", "--config", str(config_path)])

        assert result.exit_code == 0, result.output
        mock_console.assert_called_once()
