"""CLI entry point for lernspark.

The main group loads subcommands lazily: a command module is imported only
when that command is invoked.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from lernspark_cli import __version__
from lernspark_cli.output import set_no_color
from lernspark_probe.observability import LOG_LEVELS, configure_logging

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that imports command modules only when they are invoked.

    Attributes:
        lazy_subcommands: Mapping of command names to "module.attribute" paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize LazyGroup.

        Args:
            *args: Positional arguments for parent class.
            lazy_subcommands: Mapping of command name to module path.
                Format: {"parse": "lernspark_cli.commands.parse.parse"}
            **kwargs: Keyword arguments for parent class.
        """
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_name, attr_name = self.lazy_subcommands[cmd_name].rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "parse": "lernspark_cli.commands.parse.parse",
    "generate": "lernspark_cli.commands.generate.generate",
    "probe": "lernspark_cli.commands.probe.probe",
    "check": "lernspark_cli.commands.check.check",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="lernspark")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Minimum level of log records written to stderr.",
)
@click.option(
    "--json-logs",
    is_flag=True,
    default=False,
    help="Emit log records as JSON lines.",
)
def cli(log_level: str, json_logs: bool) -> None:
    """lernspark - synthetic example data and storage capability probes.

    Getting Started:

    \b
    lernspark parse data.sql       Show the tables a schema file defines
    lernspark generate data.sql    Write examples.zip with synthetic Parquet data
    lernspark check                Verify storage connectivity and permissions
    lernspark probe                Benchmark parallel uploads, then clean up
    """
    configure_logging(log_level=log_level, json_format=json_logs)


if __name__ == "__main__":
    cli()
