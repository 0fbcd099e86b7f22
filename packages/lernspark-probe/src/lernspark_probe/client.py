"""Async storage client protocol and the boto3 adapter.

This module provides:
- StorageClient: The async object-store interface the probe depends on
- S3StorageClient: Adapter running a blocking boto3 S3 client in a thread pool
- create_storage_client: Factory building the adapter from AwsSettings
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Protocol, TypeVar, runtime_checkable

import boto3
import structlog
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from lernspark_probe.config import AwsSettings
from lernspark_probe.errors import StorageError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Region in which S3 rejects an explicit LocationConstraint.
DEFAULT_S3_REGION = "us-east-1"


@runtime_checkable
class StorageClient(Protocol):
    """Async interface of an S3-compatible object store.

    Implementations raise whatever their backend raises; the probe classifies
    errors by their text.
    """

    async def list_buckets(self) -> list[str]:
        """Return the names of all buckets visible to the caller."""
        ...

    async def create_bucket(self, bucket: str) -> dict[str, str | None]:
        """Create a bucket; return ``{"location": ..., "request_id": ...}``."""
        ...

    async def get_bucket_location(self, bucket: str) -> str | None:
        """Return the bucket's location constraint (None for the default region)."""
        ...

    async def put_object(self, bucket: str, key: str, body: bytes) -> None:
        """Store ``body`` under ``key``."""
        ...

    async def delete_object(self, bucket: str, key: str) -> None:
        """Delete one object."""
        ...

    async def delete_bucket(self, bucket: str) -> None:
        """Delete an (empty) bucket."""
        ...

    async def drain(self) -> None:
        """Wait until every backend call issued so far has finished.

        Callers that stopped awaiting a call (timeout, cancellation) use this
        before touching the resources that call may still be writing to.
        """
        ...


class S3StorageClient:
    """StorageClient backed by a boto3 S3 client.

    boto3 calls block, so each one is pushed to a thread pool. The boto3
    client is shared by all workers. A worker thread cannot be interrupted,
    so the futures of running calls are kept until they finish and
    ``drain`` can wait for them.

    Example:
        >>> client = create_storage_client(AwsSettings(region="eu-west-1"))
        >>> await client.list_buckets()
        ['analytics', 'lernspark-probe-3f2a...']
        >>> client.close()
    """

    def __init__(
        self,
        s3_client: Any,
        *,
        region: str = DEFAULT_S3_REGION,
        executor: Executor | None = None,
        max_workers: int = 32,
    ) -> None:
        """Initialize the adapter.

        Args:
            s3_client: boto3 S3 client
            region: Region new buckets are created in
            executor: Executor for blocking calls (default: an owned thread pool)
            max_workers: Size of the owned thread pool
        """
        self._s3 = s3_client
        self.region = region
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="lernspark-s3"
        )
        self._inflight: set[Future[Any]] = set()
        self._log = logger.bind(region=region)

    def _run(self, func: Callable[..., T], **kwargs: Any) -> asyncio.Future[T]:
        future = self._executor.submit(functools.partial(func, **kwargs))
        self._inflight.add(future)
        future.add_done_callback(self._inflight.discard)
        return asyncio.wrap_future(future)

    async def list_buckets(self) -> list[str]:
        response = await self._run(self._s3.list_buckets)
        return [b["Name"] for b in response.get("Buckets", [])]

    async def create_bucket(self, bucket: str) -> dict[str, str | None]:
        kwargs: dict[str, Any] = {"Bucket": bucket}
        if self.region != DEFAULT_S3_REGION:
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
        response = await self._run(self._s3.create_bucket, **kwargs)
        self._log.debug("bucket_created", bucket=bucket)
        return {
            "location": response.get("Location"),
            "request_id": response.get("ResponseMetadata", {}).get("RequestId"),
        }

    async def get_bucket_location(self, bucket: str) -> str | None:
        response = await self._run(self._s3.get_bucket_location, Bucket=bucket)
        return response.get("LocationConstraint") or None

    async def put_object(self, bucket: str, key: str, body: bytes) -> None:
        await self._run(self._s3.put_object, Bucket=bucket, Key=key, Body=body)

    async def delete_object(self, bucket: str, key: str) -> None:
        await self._run(self._s3.delete_object, Bucket=bucket, Key=key)

    async def delete_bucket(self, bucket: str) -> None:
        await self._run(self._s3.delete_bucket, Bucket=bucket)

    async def drain(self) -> None:
        pending = list(self._inflight)
        if pending:
            self._log.debug("storage_client_draining", calls=len(pending))
            await asyncio.gather(
                *(asyncio.wrap_future(f) for f in pending), return_exceptions=True
            )

    def close(self) -> None:
        """Shut down the owned thread pool."""
        if self._owns_executor:
            self._executor.shutdown(wait=False)


def create_storage_client(
    settings: AwsSettings | None = None,
    *,
    max_workers: int = 32,
    timeout_seconds: float | None = None,
) -> S3StorageClient:
    """Build an S3StorageClient from connection settings.

    Args:
        settings: Profile, region and endpoint (default: from environment)
        max_workers: Thread pool size and boto3 connection pool size
        timeout_seconds: Connect and read timeout of every boto3 call, with
            botocore retries disabled (default: botocore defaults)

    Returns:
        Ready-to-use storage client

    Raises:
        StorageError: If the boto3 session or client cannot be created
            (e.g. unknown profile)
    """
    settings = settings or AwsSettings()
    config = Config(max_pool_connections=max_workers)
    if timeout_seconds is not None:
        config = config.merge(
            Config(
                connect_timeout=timeout_seconds,
                read_timeout=timeout_seconds,
                retries={"total_max_attempts": 1},
            )
        )
    try:
        session = boto3.Session(profile_name=settings.profile, region_name=settings.region)
        s3 = session.client("s3", endpoint_url=settings.endpoint_url, config=config)
        region = session.region_name or DEFAULT_S3_REGION
    except BotoCoreError as e:
        raise StorageError(
            "Failed to create storage client",
            details={"profile": settings.profile or "default", "cause": str(e)},
        ) from e

    logger.debug(
        "storage_client_created",
        profile=settings.profile,
        region=region,
        endpoint_url=settings.endpoint_url,
    )
    return S3StorageClient(s3, region=region, max_workers=max_workers)
