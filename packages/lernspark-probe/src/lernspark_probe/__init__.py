"""lernspark-probe: Concurrent capability probe for S3-compatible storage.

This package provides:
- CloudProbe: Parallel upload benchmark with guaranteed cleanup
- check_permissions / check_connection: Pre-probe backend checks
- S3StorageClient: boto3 adapter for the async StorageClient protocol
- ProbeSettings / AwsSettings: Environment-driven configuration

Example:
    >>> from lernspark_probe import CloudProbe, create_storage_client
    >>> client = create_storage_client()
    >>> report = await CloudProbe(client).run()
"""

from __future__ import annotations

from lernspark_probe.checks import check_connection, check_permissions
from lernspark_probe.client import S3StorageClient, StorageClient, create_storage_client
from lernspark_probe.config import AwsSettings, ProbeSettings
from lernspark_probe.errors import (
    AccessDeniedError,
    BucketCreateError,
    CleanupError,
    StorageError,
    UploadError,
    UploadJoinError,
    classify_backend_error,
)
from lernspark_probe.models import BucketInfo, ProbeReport, UploadResult, UploadTask
from lernspark_probe.observability import configure_logging
from lernspark_probe.probe import DEEP_ARCHIVE_REGIONS, CloudProbe, supports_deep_archive

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Probe
    "CloudProbe",
    "DEEP_ARCHIVE_REGIONS",
    "supports_deep_archive",
    # Checks
    "check_connection",
    "check_permissions",
    # Client
    "StorageClient",
    "S3StorageClient",
    "create_storage_client",
    # Configuration
    "AwsSettings",
    "ProbeSettings",
    # Models
    "BucketInfo",
    "ProbeReport",
    "UploadResult",
    "UploadTask",
    # Errors
    "StorageError",
    "AccessDeniedError",
    "BucketCreateError",
    "UploadError",
    "CleanupError",
    "UploadJoinError",
    "classify_backend_error",
    # Logging
    "configure_logging",
]
