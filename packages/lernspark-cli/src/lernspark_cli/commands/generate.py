"""lernspark generate command - Write synthetic example data to an archive."""

from __future__ import annotations

import click
from pydantic import ValidationError

from lernspark_cli.errors import handle_synthesis_error, handle_validation_error
from lernspark_cli.output import get_console, success


@click.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default="examples.zip",
    show_default=True,
    help="Archive to write.",
)
@click.option("--min-rows", type=int, default=None, help="Minimum rows per table.")
@click.option("--max-rows", type=int, default=None, help="Maximum rows per table.")
@click.option("--seed", type=int, default=None, help="Random seed for reproducible data.")
def generate(
    schema_file: str,
    output: str,
    min_rows: int | None,
    max_rows: int | None,
    seed: int | None,
) -> None:
    """Generate synthetic Parquet datasets for SCHEMA_FILE and zip them.

    Options not given on the command line fall back to the
    LERNSPARK_SYNTH_* environment variables.
    """
    from rich.table import Table as RichTable

    from lernspark_synthetic.errors import SynthesisError
    from lernspark_synthetic.schema import parse_schema_file
    from lernspark_synthetic.settings import SynthesisSettings
    from lernspark_synthetic.writers import ArchiveBundler, ParquetDatasetWriter

    overrides = {
        key: value
        for key, value in (("min_rows", min_rows), ("max_rows", max_rows), ("seed", seed))
        if value is not None
    }
    try:
        settings = SynthesisSettings(**overrides)
    except ValidationError as e:
        handle_validation_error(e)

    try:
        tables = parse_schema_file(schema_file)
        result = ArchiveBundler(ParquetDatasetWriter(settings)).bundle(tables, output)
    except SynthesisError as e:
        handle_synthesis_error(e, schema_file)

    summary = RichTable(show_header=True, header_style="bold")
    summary.add_column("Table", min_width=16)
    summary.add_column("Rows", justify="right")
    summary.add_column("Example row", overflow="fold")
    for entry in result.entries:
        summary.add_row(entry.table_name, str(entry.rows_written), str(entry.example_row or "-"))
    get_console().print(summary)

    success(f"Wrote {result.total_rows} rows in {len(result.entries)} table(s) to {output}")
