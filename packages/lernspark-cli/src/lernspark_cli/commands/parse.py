"""lernspark parse command - Show the tables a schema file defines."""

from __future__ import annotations

import click

from lernspark_cli.errors import handle_synthesis_error
from lernspark_cli.output import get_console, print_json, success


@click.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
    help="Output format.",
)
def parse(schema_file: str, output_format: str) -> None:
    """Parse SCHEMA_FILE and show its tables and columns."""
    from rich.table import Table as RichTable

    from lernspark_synthetic.errors import SynthesisError
    from lernspark_synthetic.schema import parse_schema_file

    try:
        tables = parse_schema_file(schema_file)
    except SynthesisError as e:
        handle_synthesis_error(e, schema_file)

    if output_format == "json":
        print_json([table.model_dump(mode="json") for table in tables])
        return

    console = get_console()
    for table in tables:
        view = RichTable(title=f"[bold]{table.name}[/bold]", show_header=True, header_style="bold")
        view.add_column("Column", min_width=16)
        view.add_column("Type")
        view.add_column("Constraints", style="dim")
        for column in table.columns:
            view.add_row(column.name, str(column.data_type), " ".join(column.constraints) or "-")
        console.print(view)

    success(f"Parsed {len(tables)} table(s) from {schema_file}")
