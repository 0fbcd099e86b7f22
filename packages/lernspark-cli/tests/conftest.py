"""Shared test fixtures for lernspark-cli tests.

Provides CliRunner fixtures, a schema file and a mocked storage client.
"""

from __future__ import annotations

import sys
from collections.abc import Generator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import structlog
from click.testing import CliRunner

SCHEMA_FILENAME = "data.sql"

KINGDOMS_SQL = """-- SQL Database Schema
CREATE TABLE Lanisters (
    ID INT AUTO_INCREMENT PRIMARY KEY,
    King TEXT UNIQUE,
    Army INT NOT NULL,
    Alias VARCHAR(100)
);

CREATE TABLE Starks (
    ID INT AUTO_INCREMENT PRIMARY KEY,
    King TEXT NOT NULL,
    Army INT NOT NULL,
    IS_TRUE_KING BOOLEAN
);
"""


@pytest.fixture(autouse=True)
def quiet_logging() -> Generator[MagicMock, None, None]:
    """Keep log records out of command output.

    The group callback would reconfigure logging on every invocation; tests
    route structlog to the real stderr instead.
    """
    structlog.configure(
        processors=[structlog.processors.KeyValueRenderer()],
        logger_factory=structlog.PrintLoggerFactory(file=sys.__stderr__),
        cache_logger_on_first_use=False,
    )
    with patch("lernspark_cli.main.configure_logging") as configure:
        yield configure


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem."""
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def schema_file(isolated_runner: CliRunner) -> Path:
    """Write the Lanisters/Starks schema into the isolated filesystem."""
    path = Path(SCHEMA_FILENAME)
    path.write_text(KINGDOMS_SQL, encoding="utf-8")
    return path


@pytest.fixture
def storage_client() -> MagicMock:
    """Storage client mock with a working in-memory-like backend."""
    client = MagicMock()
    client.list_buckets = AsyncMock(return_value=["existing"])
    client.create_bucket = AsyncMock(
        return_value={"location": "/lernspark-probe-x", "request_id": "REQ"}
    )
    client.get_bucket_location = AsyncMock(return_value="eu-west-1")
    client.put_object = AsyncMock(return_value=None)
    client.delete_object = AsyncMock(return_value=None)
    client.delete_bucket = AsyncMock(return_value=None)
    client.drain = AsyncMock(return_value=None)
    return client


@pytest.fixture
def patched_client(storage_client: MagicMock) -> Generator[MagicMock, None, None]:
    """Make create_storage_client return ``storage_client``."""
    with patch(
        "lernspark_probe.client.create_storage_client", return_value=storage_client
    ) as factory:
        yield factory
