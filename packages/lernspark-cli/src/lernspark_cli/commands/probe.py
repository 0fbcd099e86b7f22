"""lernspark probe command - Benchmark parallel uploads against object storage."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import click
from pydantic import ValidationError

from lernspark_cli.errors import CLIError, handle_storage_error, handle_validation_error
from lernspark_cli.output import error, get_console, info, success, warning

if TYPE_CHECKING:
    from lernspark_probe.models import ProbeReport


@dataclass
class ProbeOptions:
    """Grouped probe CLI options."""

    profile: str | None
    region: str | None
    endpoint_url: str | None
    bucket_prefix: str | None
    min_uploads: int | None
    max_uploads: int | None
    timeout: float | None
    max_concurrency: int | None
    output_format: str

    def aws_overrides(self) -> dict[str, Any]:
        """Connection options given on the command line."""
        return _given(profile=self.profile, region=self.region, endpoint_url=self.endpoint_url)

    def probe_overrides(self) -> dict[str, Any]:
        """Probe options given on the command line."""
        return _given(
            bucket_prefix=self.bucket_prefix,
            min_uploads=self.min_uploads,
            max_uploads=self.max_uploads,
            timeout_seconds=self.timeout,
            max_concurrency=self.max_concurrency,
        )


def _given(**values: Any) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


async def _run_probe(opts: ProbeOptions) -> ProbeReport:
    from lernspark_probe.client import create_storage_client
    from lernspark_probe.config import AwsSettings, ProbeSettings
    from lernspark_probe.probe import CloudProbe

    settings = ProbeSettings(**opts.probe_overrides())
    client = create_storage_client(
        AwsSettings(**opts.aws_overrides()), timeout_seconds=settings.timeout_seconds
    )
    try:
        return await CloudProbe(client, settings).run()
    finally:
        client.close()


@click.command()
@click.option("--profile", default=None, help="AWS profile (default: AWS_PROFILE or 'default').")
@click.option("--region", default=None, help="Region for the probe bucket.")
@click.option("--endpoint-url", default=None, help="S3-compatible endpoint override.")
@click.option("--bucket-prefix", default=None, help="Prefix of the probe bucket name.")
@click.option("--min-uploads", type=int, default=None, help="Minimum number of uploads.")
@click.option("--max-uploads", type=int, default=None, help="Maximum number of uploads.")
@click.option("--timeout", type=float, default=None, help="Timeout per backend call (seconds).")
@click.option(
    "--max-concurrency",
    type=int,
    default=None,
    help="Maximum simultaneous uploads (0 = unlimited).",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
    help="Report format.",
)
def probe(
    profile: str | None,
    region: str | None,
    endpoint_url: str | None,
    bucket_prefix: str | None,
    min_uploads: int | None,
    max_uploads: int | None,
    timeout: float | None,
    max_concurrency: int | None,
    output_format: str,
) -> None:
    """Run the storage capability probe.

    Creates a temporary bucket, uploads random payloads in parallel, reports
    throughput and deletes everything it created.
    """
    from lernspark_probe.errors import CleanupError, StorageError, UploadJoinError
    from lernspark_probe.output import print_report

    opts = ProbeOptions(
        profile=profile,
        region=region,
        endpoint_url=endpoint_url,
        bucket_prefix=bucket_prefix,
        min_uploads=min_uploads,
        max_uploads=max_uploads,
        timeout=timeout,
        max_concurrency=max_concurrency,
        output_format=output_format,
    )

    if output_format == "table":
        info("Running storage probe...")
    try:
        report = asyncio.run(_run_probe(opts))
    except ValidationError as e:
        handle_validation_error(e)
    except CleanupError as e:
        if e.report is not None:
            print_report(e.report, output_format=output_format, console=get_console())
        raise CLIError(f"Probe resources were not fully removed: {e}") from e
    except UploadJoinError as e:
        for failure in e.failures:
            error(str(failure))
        if e.cleanup_error is not None:
            warning(f"Cleanup also failed: {e.cleanup_error}")
        handle_storage_error(e)
    except StorageError as e:
        handle_storage_error(e)

    print_report(report, output_format=output_format, console=get_console())
    if output_format == "table":
        success("Probe completed and cleaned up")
