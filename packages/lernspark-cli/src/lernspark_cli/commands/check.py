"""lernspark check command - Storage connectivity and permission checks."""

from __future__ import annotations

import asyncio

import click

from lernspark_cli.errors import handle_storage_error
from lernspark_cli.output import success


@click.command()
@click.option("--profile", default=None, help="AWS profile (default: AWS_PROFILE or 'default').")
@click.option(
    "--region",
    default=None,
    help="AWS region (default: profile or environment region, else us-east-1).",
)
@click.option("--endpoint-url", default=None, help="S3-compatible endpoint override.")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=60.0,
    show_default=True,
    help="Timeout per backend call (seconds).",
)
def check(
    profile: str | None, region: str | None, endpoint_url: str | None, timeout: float
) -> None:
    """Check that the storage backend is reachable and buckets can be listed."""
    from lernspark_probe.checks import check_connection, check_permissions
    from lernspark_probe.client import create_storage_client
    from lernspark_probe.config import AwsSettings
    from lernspark_probe.errors import StorageError

    overrides = {
        key: value
        for key, value in (("profile", profile), ("region", region), ("endpoint_url", endpoint_url))
        if value is not None
    }

    async def _run() -> None:
        client = create_storage_client(AwsSettings(**overrides), timeout_seconds=timeout)
        try:
            await check_connection(client, timeout_seconds=timeout)
            success("Storage backend reachable")
            await check_permissions(client, timeout_seconds=timeout)
            success("Permission to list buckets")
        finally:
            client.close()

    try:
        asyncio.run(_run())
    except StorageError as e:
        handle_storage_error(e)
