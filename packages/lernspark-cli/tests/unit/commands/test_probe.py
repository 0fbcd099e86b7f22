"""Unit tests for the lernspark probe command."""

from __future__ import annotations

import json
from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from lernspark_cli.main import cli

pytestmark = pytest.mark.unit

SMALL_PLAN = ["probe", "--min-uploads", "2", "--max-uploads", "2"]


@pytest.fixture(autouse=True)
def one_mib_payloads(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep generated payloads at 1 MiB."""
    monkeypatch.setenv("LERNSPARK_PROBE_MAX_SIZE_MIB", "1")
    yield


class TestProbeCommand:
    """Tests for probe."""

    def test_help(self, cli_runner: CliRunner) -> None:
        """Help lists the probe options."""
        result = cli_runner.invoke(cli, ["probe", "--help"])

        assert result.exit_code == 0
        for option in ("--profile", "--region", "--endpoint-url", "--bucket-prefix", "--timeout"):
            assert option in result.output

    def test_success(
        self, cli_runner: CliRunner, patched_client: MagicMock, storage_client: MagicMock
    ) -> None:
        """A clean run prints the report and exits 0."""
        result = cli_runner.invoke(cli, SMALL_PLAN)

        assert result.exit_code == 0, result.output
        assert "Probe completed" in result.output
        assert storage_client.put_object.await_count == 2
        assert storage_client.delete_bucket.await_count == 1
        storage_client.close.assert_called_once()

    def test_connection_options_forwarded(
        self, cli_runner: CliRunner, patched_client: MagicMock
    ) -> None:
        """Profile, region and endpoint reach the client factory."""
        result = cli_runner.invoke(
            cli,
            [
                *SMALL_PLAN,
                "--profile",
                "dev",
                "--region",
                "eu-west-1",
                "--endpoint-url",
                "http://s3",
            ],
        )

        assert result.exit_code == 0, result.output
        settings = patched_client.call_args.args[0]
        assert (settings.profile, settings.region, settings.endpoint_url) == (
            "dev",
            "eu-west-1",
            "http://s3",
        )

    def test_timeout_reaches_client(
        self, cli_runner: CliRunner, patched_client: MagicMock
    ) -> None:
        """--timeout also bounds the blocking calls inside the client."""
        result = cli_runner.invoke(cli, [*SMALL_PLAN, "--timeout", "7.5"])

        assert result.exit_code == 0, result.output
        assert patched_client.call_args.kwargs["timeout_seconds"] == 7.5

    def test_client_drained_before_cleanup(
        self, cli_runner: CliRunner, patched_client: MagicMock, storage_client: MagicMock
    ) -> None:
        """The probe waits for the client before deleting anything."""
        result = cli_runner.invoke(cli, SMALL_PLAN)

        assert result.exit_code == 0, result.output
        storage_client.drain.assert_awaited_once()

    def test_json_report(
        self, cli_runner: CliRunner, patched_client: MagicMock, storage_client: MagicMock
    ) -> None:
        """--format json prints only the report."""
        result = cli_runner.invoke(cli, [*SMALL_PLAN, "--format", "json"])

        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        assert len(report["object_keys"]) == 2
        assert report["deep_archive_available"] is True

    def test_access_denied(
        self, cli_runner: CliRunner, patched_client: MagicMock, storage_client: MagicMock
    ) -> None:
        """A denied bucket creation is reported as access denied."""
        storage_client.create_bucket.side_effect = RuntimeError("AccessDenied")

        result = cli_runner.invoke(cli, SMALL_PLAN)

        assert result.exit_code == 1
        assert "Access denied" in result.output
        storage_client.close.assert_called_once()

    def test_upload_failure(
        self, cli_runner: CliRunner, patched_client: MagicMock, storage_client: MagicMock
    ) -> None:
        """Failed uploads exit 1 after cleanup."""
        storage_client.put_object.side_effect = RuntimeError("connection reset")

        result = cli_runner.invoke(cli, SMALL_PLAN)

        assert result.exit_code == 1
        assert "Storage error" in result.output
        assert storage_client.delete_bucket.await_count == 1

    def test_cleanup_failure(
        self, cli_runner: CliRunner, patched_client: MagicMock, storage_client: MagicMock
    ) -> None:
        """A cleanup failure still shows the report, then exits 1."""
        storage_client.delete_bucket.side_effect = RuntimeError("InternalError")

        result = cli_runner.invoke(cli, SMALL_PLAN)

        assert result.exit_code == 1
        assert "Probe Results" in result.output
        assert "not fully removed" in result.output

    def test_invalid_plan(self, cli_runner: CliRunner, patched_client: MagicMock) -> None:
        """Inconsistent upload bounds exit 1 before touching storage."""
        result = cli_runner.invoke(cli, ["probe", "--min-uploads", "9", "--max-uploads", "2"])

        assert result.exit_code == 1
        assert "Invalid settings" in result.output
        patched_client.assert_not_called()
