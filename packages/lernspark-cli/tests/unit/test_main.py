"""Unit tests for lernspark_cli.main."""

from __future__ import annotations

from unittest.mock import MagicMock

import click
import pytest
from click.testing import CliRunner

from lernspark_cli.main import LAZY_COMMANDS, LazyGroup, cli

pytestmark = pytest.mark.unit


class TestCLIHelp:
    """Tests for CLI help output."""

    def test_help_shows_global_options(self, cli_runner: CliRunner) -> None:
        """--help lists the global options."""
        result = cli_runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for option in ("--version", "--no-color", "--log-level", "--json-logs"):
            assert option in result.output

    def test_help_shows_all_commands(self, cli_runner: CliRunner) -> None:
        """--help lists every lazily loaded command."""
        result = cli_runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in ("parse", "generate", "probe", "check"):
            assert name in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        """--version prints the program name and version."""
        result = cli_runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "lernspark" in result.output
        assert "0.1.0" in result.output

    def test_no_color_accepted(self, cli_runner: CliRunner) -> None:
        """--no-color does not break invocation."""
        result = cli_runner.invoke(cli, ["--no-color", "--help"])

        assert result.exit_code == 0

    def test_unknown_command(self, cli_runner: CliRunner) -> None:
        """Unknown commands are a usage error."""
        result = cli_runner.invoke(cli, ["frobnicate"])

        assert result.exit_code == 2


class TestLogging:
    """Tests for the logging options."""

    def test_logging_configured_from_options(
        self, cli_runner: CliRunner, quiet_logging: MagicMock, schema_file: object
    ) -> None:
        """--log-level and --json-logs reach configure_logging."""
        result = cli_runner.invoke(
            cli, ["--log-level", "debug", "--json-logs", "parse", "data.sql"]
        )

        assert result.exit_code == 0, result.output
        quiet_logging.assert_called_once_with(log_level="DEBUG", json_format=True)

    def test_invalid_log_level(self, cli_runner: CliRunner) -> None:
        """Unknown levels are rejected by click."""
        result = cli_runner.invoke(cli, ["--log-level", "LOUD", "parse", "x"])

        assert result.exit_code == 2


class TestLazyGroup:
    """Tests for LazyGroup."""

    def test_lists_lazy_commands(self) -> None:
        """Lazy commands are listed in sorted order."""
        group = LazyGroup(name="g", lazy_subcommands={"b": "x.b", "a": "x.a"})

        assert group.list_commands(click.Context(group)) == ["a", "b"]

    def test_unknown_lazy_command(self) -> None:
        """Names without a mapping resolve to None."""
        group = LazyGroup(name="g", lazy_subcommands={})

        assert group.get_command(click.Context(group), "missing") is None

    @pytest.mark.parametrize("name", sorted(LAZY_COMMANDS))
    def test_every_command_importable(self, name: str) -> None:
        """Each mapping resolves to a click command."""
        command = cli.get_command(click.Context(cli), name)  # type: ignore[attr-defined]

        assert isinstance(command, click.Command)

    def test_group_renders_help_with_rich_click(self) -> None:
        """The main group is a rich-click group."""
        import rich_click as rclick

        assert isinstance(cli, rclick.RichGroup)
