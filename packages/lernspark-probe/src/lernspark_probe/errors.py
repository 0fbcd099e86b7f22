"""Custom exceptions for lernspark-probe.

This module defines the exception hierarchy:
- StorageError (base)
- AccessDeniedError
- BucketCreateError
- UploadError
- CleanupError
- UploadJoinError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lernspark_probe.models import ProbeReport

# Substring the storage backend puts in its error text when a call is denied.
ACCESS_DENIED_SIGNAL = "AccessDenied"


class StorageError(Exception):
    """Base exception for all storage backend operations.

    Attributes:
        message: Human-readable error description.
        details: Optional additional context about the error.

    Example:
        >>> try:
        ...     report = await probe.run()
        ... except StorageError as e:
        ...     print(f"Storage error: {e}")
    """

    def __init__(self, message: str, *, details: dict[str, str] | None = None) -> None:
        """Initialize StorageError.

        Args:
            message: Human-readable error description.
            details: Optional additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details if present."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class AccessDeniedError(StorageError):
    """The backend refused an operation for lack of permissions.

    Raised instead of the operation-specific error whenever the backend's
    error text carries the access-denied signal.

    Example:
        >>> try:
        ...     await check_permissions(client)
        ... except AccessDeniedError as e:
        ...     print(f"Denied: {e.operation}")
    """

    def __init__(
        self,
        message: str = "Access denied",
        *,
        operation: str | None = None,
        cause: str | None = None,
    ) -> None:
        """Initialize AccessDeniedError.

        Args:
            message: Human-readable error description.
            operation: The backend operation that was denied.
            cause: The backend error text.
        """
        details: dict[str, str] = {}
        if operation:
            details["operation"] = operation
        if cause:
            details["cause"] = cause
        super().__init__(message, details=details)
        self.operation = operation
        self.cause = cause


class BucketCreateError(StorageError):
    """Creating the probe bucket failed."""

    def __init__(
        self,
        message: str = "Failed to create bucket",
        *,
        bucket: str | None = None,
        cause: str | None = None,
    ) -> None:
        """Initialize BucketCreateError.

        Args:
            message: Human-readable error description.
            bucket: The bucket that could not be created.
            cause: The backend error text.
        """
        details: dict[str, str] = {}
        if bucket:
            details["bucket"] = bucket
        if cause:
            details["cause"] = cause
        super().__init__(message, details=details)
        self.bucket = bucket
        self.cause = cause


class UploadError(StorageError):
    """Uploading one probe object failed."""

    def __init__(
        self,
        message: str = "Failed to upload object",
        *,
        key: str | None = None,
        cause: str | None = None,
    ) -> None:
        """Initialize UploadError.

        Args:
            message: Human-readable error description.
            key: The object key being uploaded.
            cause: The backend error text.
        """
        details: dict[str, str] = {}
        if key:
            details["key"] = key
        if cause:
            details["cause"] = cause
        super().__init__(message, details=details)
        self.key = key
        self.cause = cause


class CleanupError(StorageError):
    """Deleting probe objects or the probe bucket failed.

    When the uploads themselves succeeded, the finished report is attached so
    callers still see the measurements.

    Attributes:
        bucket: Bucket being cleaned up.
        key: Object whose deletion failed, None when the bucket deletion failed.
        report: Probe report, when the uploads completed.
    """

    def __init__(
        self,
        message: str = "Failed to clean up probe resources",
        *,
        bucket: str | None = None,
        key: str | None = None,
        cause: str | None = None,
    ) -> None:
        """Initialize CleanupError.

        Args:
            message: Human-readable error description.
            bucket: Bucket being cleaned up.
            key: Object whose deletion failed.
            cause: The backend error text.
        """
        details: dict[str, str] = {}
        if bucket:
            details["bucket"] = bucket
        if key:
            details["key"] = key
        if cause:
            details["cause"] = cause
        super().__init__(message, details=details)
        self.bucket = bucket
        self.key = key
        self.cause = cause
        self.report: ProbeReport | None = None


class UploadJoinError(StorageError):
    """One or more upload tasks failed.

    Attributes:
        failures: Exceptions raised by the failed upload tasks, in task order.
        cleanup_error: Cleanup failure that occurred afterwards, if any.
    """

    def __init__(
        self,
        failures: list[BaseException],
        *,
        cleanup_error: StorageError | None = None,
    ) -> None:
        """Initialize UploadJoinError.

        Args:
            failures: Exceptions raised by the failed upload tasks.
            cleanup_error: Cleanup failure, reported separately.
        """
        details = {"failed": str(len(failures))}
        if failures:
            details["first"] = str(failures[0])
        if cleanup_error is not None:
            details["cleanup"] = str(cleanup_error)
        super().__init__(f"{len(failures)} upload task(s) failed", details=details)
        self.failures = failures
        self.cleanup_error = cleanup_error

    @property
    def access_denied(self) -> bool:
        """True when any upload was refused for lack of permissions."""
        return any(isinstance(f, AccessDeniedError) for f in self.failures)


def is_access_denied(exc: BaseException) -> bool:
    """Check whether a backend exception signals denied access."""
    return ACCESS_DENIED_SIGNAL in str(exc)


def classify_backend_error(
    exc: BaseException,
    operation: str,
    error_cls: type[StorageError] = StorageError,
    **details: str,
) -> StorageError:
    """Translate a raw backend exception into the storage error hierarchy.

    Args:
        exc: Exception raised by the storage client.
        operation: Name of the backend operation, e.g. "put_object".
        error_cls: Error type used when access was not denied.
        **details: Extra keyword arguments for ``error_cls`` (bucket, key, ...).

    Returns:
        AccessDeniedError when the error text carries the access-denied
        signal, otherwise an ``error_cls`` instance.

    Example:
        >>> err = classify_backend_error(Exception("AccessDenied: nope"), "list_buckets")
        >>> type(err).__name__
        'AccessDeniedError'
    """
    if isinstance(exc, StorageError):
        return exc
    if is_access_denied(exc):
        return AccessDeniedError(
            f"Access denied during {operation}", operation=operation, cause=str(exc)
        )
    if error_cls is StorageError:
        return StorageError(
            f"Storage operation {operation} failed",
            details={"operation": operation, "cause": str(exc), **details},
        )
    return error_cls(cause=str(exc), **details)  # type: ignore[call-arg]
