"""Probe records and report models.

This module defines:
- UploadTask: One planned upload (ephemeral, never persisted)
- UploadResult: Timing of one completed upload
- BucketInfo: Creation metadata of the probe bucket
- ProbeReport: Aggregate outcome of a probe run
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class UploadTask:
    """A planned upload: the key to write and the payload size."""

    object_key: str
    size_bytes: int


class UploadResult(BaseModel):
    """Timing of one completed upload.

    Attributes:
        object_key: Key the payload was stored under
        size_bytes: Payload size
        generation_seconds: Time spent generating the random payload
        upload_seconds: Time spent in the put-object call
        throughput_bytes_per_second: size_bytes / upload_seconds
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    object_key: str = Field(..., min_length=1)
    size_bytes: int = Field(..., ge=0)
    generation_seconds: float = Field(..., ge=0)
    upload_seconds: float = Field(..., ge=0)
    throughput_bytes_per_second: float = Field(..., ge=0)


class BucketInfo(BaseModel):
    """Metadata recorded when the probe bucket is created.

    Attributes:
        bucket: Bucket name
        location: Location returned by the create call, if any
        request_id: Backend request id of the create call, if any
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    bucket: str = Field(..., min_length=3, max_length=63)
    location: str | None = None
    request_id: str | None = None


class ProbeReport(BaseModel):
    """Outcome of a probe run.

    Finalized only after every upload task joined and cleanup ran.

    Attributes:
        bucket: Creation metadata of the probe bucket
        region: Bucket location reported by the backend (None = default region)
        deep_archive_available: Whether the region offers the deep-archive tier
        object_keys: Keys uploaded, in upload-plan order
        total_bytes: Sum of all uploaded payload sizes
        elapsed_seconds: Wall-clock time of the whole run
        uploads: Per-upload timings, in upload-plan order
        cleanup_succeeded: Whether all objects and the bucket were deleted
        cleanup_error: Cleanup failure description, if any

    Example:
        >>> report.per_object_throughput["payload-0-1048576b.bin"]
        52428800.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    bucket: BucketInfo
    region: str | None = None
    deep_archive_available: bool = False
    object_keys: list[str] = Field(default_factory=list)
    total_bytes: int = Field(default=0, ge=0)
    elapsed_seconds: float = Field(default=0.0, ge=0)
    uploads: list[UploadResult] = Field(default_factory=list)
    cleanup_succeeded: bool = True
    cleanup_error: str | None = None

    @property
    def elapsed(self) -> timedelta:
        """Wall-clock time of the run as a duration."""
        return timedelta(seconds=self.elapsed_seconds)

    @property
    def per_object_throughput(self) -> dict[str, float]:
        """Upload throughput in bytes/second keyed by object key."""
        return {u.object_key: u.throughput_bytes_per_second for u in self.uploads}

    @property
    def aggregate_throughput(self) -> float:
        """Total bytes divided by the run's wall-clock time."""
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.total_bytes / self.elapsed_seconds
