"""Pre-probe checks against the storage backend.

Both checks list buckets: a cheap call that needs valid credentials, network
reachability and the list permission. The call is bounded like every other
backend call the probe makes.
"""

from __future__ import annotations

import asyncio

import structlog

from lernspark_probe.client import StorageClient
from lernspark_probe.errors import AccessDeniedError, StorageError, is_access_denied

logger = structlog.get_logger(__name__)

DEFAULT_CHECK_TIMEOUT = 60.0


async def check_permissions(
    client: StorageClient, *, timeout_seconds: float = DEFAULT_CHECK_TIMEOUT
) -> None:
    """Verify the caller may list buckets.

    Args:
        client: Async storage client
        timeout_seconds: Timeout of the list call

    Raises:
        AccessDeniedError: If listing buckets is denied
        StorageError: If listing buckets fails for another reason or times out

    Example:
        >>> await check_permissions(create_storage_client())
    """
    try:
        await asyncio.wait_for(client.list_buckets(), timeout=timeout_seconds)
    except asyncio.TimeoutError as e:
        logger.warning("permission_check_timed_out", timeout_seconds=timeout_seconds)
        raise StorageError(
            "Failed to list buckets",
            details={
                "operation": "list_buckets",
                "cause": f"timed out after {timeout_seconds}s",
            },
        ) from e
    except Exception as e:
        if is_access_denied(e):
            logger.warning("permission_check_denied", error=str(e))
            raise AccessDeniedError(
                "Access denied: Insufficient permissions to list buckets",
                operation="list_buckets",
                cause=str(e),
            ) from e
        raise StorageError(
            "Failed to list buckets", details={"operation": "list_buckets", "cause": str(e)}
        ) from e
    logger.info("permission_check_passed")


async def check_connection(
    client: StorageClient, *, timeout_seconds: float = DEFAULT_CHECK_TIMEOUT
) -> None:
    """Verify the storage backend is reachable with the configured credentials.

    An access-denied answer still proves the backend is reachable; whether
    listing is permitted is left to ``check_permissions``.

    Raises:
        StorageError: If the backend cannot be reached in time
    """
    try:
        await asyncio.wait_for(client.list_buckets(), timeout=timeout_seconds)
    except asyncio.TimeoutError as e:
        logger.warning("connection_check_timed_out", timeout_seconds=timeout_seconds)
        raise StorageError(
            "Error connecting to storage backend",
            details={"cause": f"timed out after {timeout_seconds}s"},
        ) from e
    except Exception as e:
        if is_access_denied(e):
            logger.info("connection_check_passed", access_denied=True)
            return
        logger.warning("connection_check_failed", error=str(e))
        raise StorageError(
            "Error connecting to storage backend", details={"cause": str(e)}
        ) from e
    logger.info("connection_check_passed")
