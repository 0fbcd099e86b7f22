"""Shared pytest fixtures for lernspark-probe tests.

Provides an in-memory StorageClient that records every call and can be told
to fail specific operations.
"""

from __future__ import annotations

import asyncio
import random
import sys
from typing import Any

import pytest
import structlog

from lernspark_probe.config import ProbeSettings


class FakeStorageClient:
    """In-memory StorageClient recording calls in order.

    Attributes:
        calls: (operation, bucket, key) tuples in call order
        buckets: bucket name -> {key: body}
        failures: operation -> exception raised by that operation
        failing_keys: keys whose put_object raises
        location: value returned by get_bucket_location
        put_delay: seconds every put_object sleeps
    """

    def __init__(self, *, location: str | None = "eu-west-1") -> None:
        self.calls: list[tuple[str, str | None, str | None]] = []
        self.buckets: dict[str, dict[str, bytes]] = {}
        self.failures: dict[str, Exception] = {}
        self.failing_keys: dict[str, Exception] = {}
        self.location = location
        self.put_delay = 0.0
        self.active_puts = 0
        self.max_active_puts = 0
        self.closed = False

    def _record(self, operation: str, bucket: str | None = None, key: str | None = None) -> None:
        self.calls.append((operation, bucket, key))
        if operation in self.failures:
            raise self.failures[operation]

    def ops(self, operation: str) -> list[tuple[str, str | None, str | None]]:
        """Recorded calls of one operation."""
        return [call for call in self.calls if call[0] == operation]

    async def list_buckets(self) -> list[str]:
        self._record("list_buckets")
        return sorted(self.buckets)

    async def create_bucket(self, bucket: str) -> dict[str, Any]:
        self._record("create_bucket", bucket)
        self.buckets[bucket] = {}
        return {"location": f"/{bucket}", "request_id": "REQ123"}

    async def get_bucket_location(self, bucket: str) -> str | None:
        self._record("get_bucket_location", bucket)
        return self.location

    async def put_object(self, bucket: str, key: str, body: bytes) -> None:
        self.active_puts += 1
        self.max_active_puts = max(self.max_active_puts, self.active_puts)
        try:
            if self.put_delay:
                await asyncio.sleep(self.put_delay)
            self._record("put_object", bucket, key)
            if key in self.failing_keys:
                raise self.failing_keys[key]
            self.buckets[bucket][key] = body
        finally:
            self.active_puts -= 1

    async def delete_object(self, bucket: str, key: str) -> None:
        self._record("delete_object", bucket, key)
        self.buckets[bucket].pop(key, None)

    async def delete_bucket(self, bucket: str) -> None:
        self._record("delete_bucket", bucket)
        if self.buckets[bucket]:
            raise RuntimeError("BucketNotEmpty: The bucket you tried to delete is not empty")
        del self.buckets[bucket]

    async def drain(self) -> None:
        self._record("drain")

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Route structlog output to stdout so capsys can capture it."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def fake_client() -> FakeStorageClient:
    """Fresh in-memory storage client."""
    return FakeStorageClient()


@pytest.fixture
def small_settings() -> ProbeSettings:
    """Settings with a handful of 1 MiB uploads."""
    return ProbeSettings(
        min_uploads=3,
        max_uploads=6,
        min_size_mib=1,
        max_size_mib=1,
        timeout_seconds=5,
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)
