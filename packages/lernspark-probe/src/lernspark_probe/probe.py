"""Concurrent storage capability probe.

CloudProbe creates a throwaway bucket, uploads a random number of random-size
payloads in parallel, measures throughput and removes everything it created.

Cleanup is guarded by a finalizer entered as soon as the bucket exists. It
runs exactly once, after every upload task has finished or been cancelled and
the client has no backend call left in flight, and deletes the keys recorded
by the orchestrator at that point.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import random
import time
import uuid
from collections.abc import AsyncIterator, Awaitable
from dataclasses import dataclass, field
from typing import Any, TypeVar

import structlog

from lernspark_probe.client import StorageClient
from lernspark_probe.config import MIB, ProbeSettings
from lernspark_probe.errors import (
    BucketCreateError,
    CleanupError,
    StorageError,
    UploadError,
    UploadJoinError,
    classify_backend_error,
)
from lernspark_probe.models import BucketInfo, ProbeReport, UploadResult, UploadTask

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Regions offering the S3 Glacier Deep Archive storage class.
DEEP_ARCHIVE_REGIONS: frozenset[str] = frozenset(
    {
        "us-east-1",
        "us-east-2",
        "us-west-1",
        "us-west-2",
        "ca-central-1",
        "eu-west-1",
        "eu-west-2",
        "eu-west-3",
        "eu-central-1",
        "eu-north-1",
        "eu-south-1",
        "ap-northeast-1",
        "ap-northeast-2",
        "ap-northeast-3",
        "ap-southeast-1",
        "ap-southeast-2",
        "ap-south-1",
        "ap-east-1",
        "sa-east-1",
        "me-south-1",
        "af-south-1",
    }
)

# Lower bound for upload durations so throughput stays finite.
_MIN_DURATION = 1e-9


def supports_deep_archive(location: str | None) -> bool:
    """Check whether a bucket location offers the deep-archive tier.

    An unspecified location is the S3 default region, which does.

    Example:
        >>> supports_deep_archive(None)
        True
        >>> supports_deep_archive("cn-north-1")
        False
    """
    if not location:
        return True
    return location in DEEP_ARCHIVE_REGIONS


def object_key(index: int, size_bytes: int) -> str:
    """Key of the ``index``-th probe payload."""
    return f"payload-{index}-{size_bytes}b.bin"


@dataclass
class _CleanupScope:
    """State guarded by the cleanup finalizer.

    ``created_keys`` is appended to by the orchestrator only, before the
    upload task for that key is launched.
    """

    bucket: str
    created_keys: list[str] = field(default_factory=list)
    tasks: list[asyncio.Task[UploadResult]] = field(default_factory=list)
    cleanup_error: CleanupError | None = None


class CloudProbe:
    """Benchmark parallel uploads against an object store and clean up after.

    Example:
        >>> probe = CloudProbe(create_storage_client(), ProbeSettings(max_uploads=10))
        >>> report = await probe.run()
        >>> report.cleanup_succeeded
        True
    """

    def __init__(
        self,
        client: StorageClient,
        settings: ProbeSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the probe.

        Args:
            client: Async storage client
            settings: Upload plan bounds and timeouts (default: from environment)
            rng: Random source for the upload plan (default: unseeded)
        """
        self.client = client
        self.settings = settings or ProbeSettings()
        self.rng = rng or random.Random()
        self._log = logger.bind(component="cloud_probe")

    def bucket_name(self) -> str:
        """Generate a fresh bucket name: prefix plus a random hex suffix."""
        return f"{self.settings.bucket_prefix}-{uuid.uuid4().hex}"

    def plan_uploads(self) -> list[UploadTask]:
        """Draw the number of uploads and the size of each one."""
        s = self.settings
        count = self.rng.randint(s.min_uploads, s.max_uploads)
        plan = []
        for index in range(count):
            size = self.rng.randint(s.min_size_mib, s.max_size_mib) * MIB
            plan.append(UploadTask(object_key=object_key(index, size), size_bytes=size))
        return plan

    async def run(self) -> ProbeReport:
        """Run the probe.

        Returns:
            ProbeReport, finalized after all uploads joined and cleanup ran

        Raises:
            AccessDeniedError: If the backend denied an operation
            BucketCreateError: If the probe bucket cannot be created
            UploadJoinError: If any upload failed (after cleanup)
            CleanupError: If uploads succeeded but cleanup failed; the
                finished report is attached as ``.report``
            StorageError: On timeouts and other backend failures
        """
        started = time.perf_counter()
        bucket = self.bucket_name()
        log = self._log.bind(bucket=bucket)

        info = await self._create_bucket(bucket)
        log.info("probe_bucket_created", location=info.location, request_id=info.request_id)

        async with self._cleanup_guard(bucket) as scope:
            location = await self._call(
                "get_bucket_location", self.client.get_bucket_location(bucket)
            )
            deep_archive = supports_deep_archive(location)
            plan = self.plan_uploads()
            log.info(
                "probe_uploads_started",
                uploads=len(plan),
                total_bytes=sum(t.size_bytes for t in plan),
                region=location,
                deep_archive_available=deep_archive,
            )

            limiter = self._limiter()
            for task in plan:
                scope.created_keys.append(task.object_key)
                scope.tasks.append(asyncio.create_task(self._upload(bucket, task, limiter)))
            outcomes = await asyncio.gather(*scope.tasks, return_exceptions=True)

        failures = [o for o in outcomes if isinstance(o, BaseException)]
        results = [o for o in outcomes if isinstance(o, UploadResult)]
        if failures:
            log.error("probe_uploads_failed", failed=len(failures), succeeded=len(results))
            raise UploadJoinError(failures, cleanup_error=scope.cleanup_error) from failures[0]

        cleanup_error = scope.cleanup_error
        report = ProbeReport(
            bucket=info,
            region=location,
            deep_archive_available=deep_archive,
            object_keys=list(scope.created_keys),
            total_bytes=sum(r.size_bytes for r in results),
            elapsed_seconds=time.perf_counter() - started,
            uploads=results,
            cleanup_succeeded=cleanup_error is None,
            cleanup_error=str(cleanup_error) if cleanup_error else None,
        )
        log.info(
            "probe_completed",
            uploads=len(results),
            total_bytes=report.total_bytes,
            elapsed_seconds=round(report.elapsed_seconds, 3),
        )

        if cleanup_error is not None:
            cleanup_error.report = report
            raise cleanup_error
        return report

    async def _create_bucket(self, bucket: str) -> BucketInfo:
        response = await self._call(
            "create_bucket",
            self.client.create_bucket(bucket),
            BucketCreateError,
            bucket=bucket,
        )
        return BucketInfo(
            bucket=bucket,
            location=response.get("location"),
            request_id=response.get("request_id"),
        )

    @contextlib.asynccontextmanager
    async def _cleanup_guard(self, bucket: str) -> AsyncIterator[_CleanupScope]:
        scope = _CleanupScope(bucket=bucket)
        try:
            yield scope
        finally:
            pending = [t for t in scope.tasks if not t.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)
            drain_error = await self._drain(bucket)
            cleanup_error = await self._cleanup(bucket, list(scope.created_keys))
            scope.cleanup_error = cleanup_error or drain_error

    def _limiter(self) -> Any:
        if self.settings.max_concurrency > 0:
            return asyncio.Semaphore(self.settings.max_concurrency)
        return contextlib.nullcontext()

    async def _upload(self, bucket: str, task: UploadTask, limiter: Any) -> UploadResult:
        async with limiter:
            gen_start = time.perf_counter()
            payload = os.urandom(task.size_bytes)
            generation_seconds = time.perf_counter() - gen_start

            upload_start = time.perf_counter()
            await self._call(
                "put_object",
                self.client.put_object(bucket, task.object_key, payload),
                UploadError,
                key=task.object_key,
            )
            upload_seconds = time.perf_counter() - upload_start

        self._log.debug(
            "probe_object_uploaded",
            key=task.object_key,
            size_bytes=task.size_bytes,
            upload_seconds=round(upload_seconds, 4),
        )
        return UploadResult(
            object_key=task.object_key,
            size_bytes=task.size_bytes,
            generation_seconds=generation_seconds,
            upload_seconds=upload_seconds,
            throughput_bytes_per_second=task.size_bytes / max(upload_seconds, _MIN_DURATION),
        )

    async def _drain(self, bucket: str) -> CleanupError | None:
        """Wait for backend calls still running after their task gave up.

        A call abandoned by a timeout may still write an object; deleting
        before it lands would leave that object behind.
        """
        timeout = self.settings.drain_timeout_seconds
        try:
            await asyncio.wait_for(self.client.drain(), timeout=timeout)
        except asyncio.TimeoutError:
            self._log.error("probe_drain_timed_out", bucket=bucket, timeout_seconds=timeout)
            return CleanupError(
                "Backend calls still in flight when cleanup started",
                bucket=bucket,
                cause=f"drain timed out after {timeout}s",
            )
        return None

    async def _cleanup(self, bucket: str, keys: list[str]) -> CleanupError | None:
        """Delete every key in order, then the bucket.

        The first failure stops the cleanup and is returned, not raised.
        """
        log = self._log.bind(bucket=bucket)
        for key in keys:
            try:
                await self._call("delete_object", self.client.delete_object(bucket, key))
            except StorageError as e:
                log.error("probe_cleanup_failed", key=key, error=str(e))
                return CleanupError(
                    f"Failed to delete object {key}", bucket=bucket, key=key, cause=str(e)
                )

        try:
            await self._call("delete_bucket", self.client.delete_bucket(bucket))
        except StorageError as e:
            log.error("probe_cleanup_failed", error=str(e))
            return CleanupError(f"Failed to delete bucket {bucket}", bucket=bucket, cause=str(e))

        log.info("probe_cleanup_completed", objects_deleted=len(keys))
        return None

    async def _call(
        self,
        operation: str,
        awaitable: Awaitable[T],
        error_cls: type[StorageError] = StorageError,
        **details: str,
    ) -> T:
        """Await one backend call under the configured timeout.

        Raises:
            AccessDeniedError: If the backend denied the call
            StorageError: ``error_cls`` for other failures, plain StorageError
                on timeout
        """
        timeout = self.settings.timeout_seconds
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except StorageError:
            raise
        except asyncio.TimeoutError as e:
            raise StorageError(
                f"Storage operation {operation} timed out",
                details={"operation": operation, "timeout_seconds": str(timeout), **details},
            ) from e
        except Exception as e:
            raise classify_backend_error(e, operation, error_cls, **details) from e
