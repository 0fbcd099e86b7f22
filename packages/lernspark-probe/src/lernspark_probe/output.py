"""Probe report output formatters.

Rich table and JSON output for probe reports.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lernspark_probe.models import ProbeReport

MIB_F = 1024.0 * 1024.0


def _mib(value: float) -> str:
    return f"{value / MIB_F:.2f}"


def format_report_table(report: ProbeReport, console: Console | None = None) -> None:
    """Format a probe report as a Rich panel and table.

    Args:
        report: ProbeReport to display
        console: Optional Rich console (creates one if not provided)
    """
    if console is None:
        console = Console()

    cleanup_color = "green" if report.cleanup_succeeded else "red"
    header = Text()
    header.append("STORAGE PROBE REPORT\n\n", style="bold")
    header.append(f"Bucket: {report.bucket.bucket}\n")
    header.append(f"Region: {report.region or 'default (us-east-1)'}\n")
    header.append(
        f"Deep archive: {'available' if report.deep_archive_available else 'unavailable'}\n"
    )
    header.append(f"Objects: {len(report.object_keys)}, {_mib(report.total_bytes)} MiB\n")
    header.append(f"Elapsed: {report.elapsed_seconds:.2f}s")
    header.append(f" ({_mib(report.aggregate_throughput)} MiB/s aggregate)\n")
    header.append("Cleanup: ")
    header.append(
        "succeeded" if report.cleanup_succeeded else f"FAILED ({report.cleanup_error})",
        style=f"bold {cleanup_color}",
    )
    console.print(Panel(header, title="[bold]Probe Results[/bold]"))

    table = Table(show_header=True, header_style="bold")
    table.add_column("Object", min_width=24)
    table.add_column("Size (MiB)", justify="right")
    table.add_column("Generate (s)", justify="right")
    table.add_column("Upload (s)", justify="right")
    table.add_column("MiB/s", justify="right")

    for upload in report.uploads:
        table.add_row(
            upload.object_key,
            _mib(upload.size_bytes),
            f"{upload.generation_seconds:.3f}",
            f"{upload.upload_seconds:.3f}",
            _mib(upload.throughput_bytes_per_second),
        )

    console.print(table)


def format_report_json(report: ProbeReport, pretty: bool = True) -> str:
    """Format a probe report as JSON.

    Args:
        report: ProbeReport to format
        pretty: Whether to use indentation

    Returns:
        JSON string representation
    """
    data = report_to_dict(report)
    if pretty:
        return json.dumps(data, indent=2, default=str)
    return json.dumps(data, default=str)


def report_to_dict(report: ProbeReport) -> dict[str, Any]:
    """Convert a ProbeReport to a dictionary for JSON serialization."""
    data = report.model_dump(mode="json")
    data["per_object_throughput"] = report.per_object_throughput
    data["aggregate_throughput"] = report.aggregate_throughput
    return data


def print_report(
    report: ProbeReport,
    output_format: str = "table",
    console: Console | None = None,
) -> None:
    """Print a probe report in the specified format.

    Args:
        report: ProbeReport to display
        output_format: Output format ("table" or "json")
        console: Optional Rich console
    """
    if console is None:
        console = Console()

    if output_format == "json":
        # Raw JSON so the output stays parseable.
        json_str = format_report_json(report, pretty=True)
        if console.file is not None:
            console.file.write(json_str + "\n")
        else:
            print(json_str)
    else:
        format_report_table(report, console)
