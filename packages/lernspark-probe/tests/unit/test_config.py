"""Unit tests for ProbeSettings and AwsSettings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from lernspark_probe.config import MIB, AwsSettings, ProbeSettings

pytestmark = pytest.mark.unit


class TestProbeSettings:
    """Tests for ProbeSettings."""

    def test_defaults(self) -> None:
        """Defaults match the documented plan bounds."""
        settings = ProbeSettings(_env_file=None)  # type: ignore[call-arg]

        assert settings.bucket_prefix == "lernspark-probe"
        assert (settings.min_uploads, settings.max_uploads) == (5, 100)
        assert (settings.min_size_bytes, settings.max_size_bytes) == (MIB, 16 * MIB)
        assert settings.timeout_seconds == 60.0
        assert settings.drain_timeout_seconds == 300.0
        assert settings.max_concurrency == 0

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Values are read from LERNSPARK_PROBE_* variables."""
        monkeypatch.setenv("LERNSPARK_PROBE_MAX_UPLOADS", "7")
        monkeypatch.setenv("LERNSPARK_PROBE_TIMEOUT_SECONDS", "2.5")

        settings = ProbeSettings(_env_file=None)  # type: ignore[call-arg]

        assert settings.max_uploads == 7
        assert settings.timeout_seconds == 2.5

    @pytest.mark.parametrize(
        "overrides",
        [
            {"min_uploads": 10, "max_uploads": 5},
            {"min_size_mib": 8, "max_size_mib": 2},
            {"min_uploads": 0},
            {"timeout_seconds": 0},
            {"drain_timeout_seconds": 0},
            {"max_concurrency": -1},
            {"bucket_prefix": "Upper_Case"},
        ],
    )
    def test_invalid(self, overrides: dict[str, object]) -> None:
        """Out-of-range or inconsistent values are rejected."""
        with pytest.raises(ValidationError):
            ProbeSettings(**overrides)


class TestAwsSettings:
    """Tests for AwsSettings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Profile and region are left to boto3's resolution chain."""
        for var in ("AWS_PROFILE", "AWS_REGION", "AWS_ENDPOINT_URL"):
            monkeypatch.delenv(var, raising=False)

        settings = AwsSettings()

        assert settings.profile is None
        assert settings.region is None
        assert settings.endpoint_url is None

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Standard AWS_* variables are honoured."""
        monkeypatch.setenv("AWS_PROFILE", "analytics")
        monkeypatch.setenv("AWS_REGION", "eu-central-1")
        monkeypatch.setenv("AWS_ENDPOINT_URL", "http://localhost:4566")

        settings = AwsSettings()

        assert settings.profile == "analytics"
        assert settings.region == "eu-central-1"
        assert settings.endpoint_url == "http://localhost:4566"
