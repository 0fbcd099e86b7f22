"""Configuration for the storage capability probe.

This module provides:
- ProbeSettings: Upload plan bounds, bucket naming and timeouts
- AwsSettings: Profile/region/endpoint used to build the boto3 client

Both load from environment variables (LERNSPARK_PROBE_ and AWS_ prefixes).
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIB = 1024 * 1024


class ProbeSettings(BaseSettings):
    """Settings for a probe run.

    Attributes:
        bucket_prefix: Fixed prefix of the probe bucket name
        min_uploads: Minimum number of objects uploaded (inclusive)
        max_uploads: Maximum number of objects uploaded (inclusive)
        min_size_mib: Minimum object size in MiB (inclusive)
        max_size_mib: Maximum object size in MiB (inclusive)
        timeout_seconds: Timeout for every individual backend call
        drain_timeout_seconds: Longest wait for abandoned backend calls to end
            before cleanup starts
        max_concurrency: Simultaneous uploads (0 = one task per payload, no cap)

    Example:
        >>> settings = ProbeSettings(min_uploads=5, max_uploads=5, max_size_mib=2)
        >>> settings.max_size_bytes
        2097152
    """

    model_config = SettingsConfigDict(
        env_prefix="LERNSPARK_PROBE_",
        env_file=".env",
        extra="ignore",
    )

    bucket_prefix: str = Field(
        default="lernspark-probe",
        min_length=3,
        max_length=30,
        pattern=r"^[a-z0-9][a-z0-9-]*$",
        description="Prefix of the generated bucket name",
    )
    min_uploads: int = Field(default=5, ge=1, le=1000, description="Minimum upload count")
    max_uploads: int = Field(default=100, ge=1, le=1000, description="Maximum upload count")
    min_size_mib: int = Field(default=1, ge=1, le=1024, description="Minimum object size (MiB)")
    max_size_mib: int = Field(default=16, ge=1, le=1024, description="Maximum object size (MiB)")
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        le=3600,
        description="Timeout for each backend call in seconds",
    )
    drain_timeout_seconds: float = Field(
        default=300.0,
        gt=0,
        le=3600,
        description="Maximum wait for in-flight backend calls before cleanup in seconds",
    )
    max_concurrency: int = Field(
        default=0,
        ge=0,
        le=1000,
        description="Maximum simultaneous uploads (0 = unlimited)",
    )

    @model_validator(mode="after")
    def _ranges_are_ordered(self) -> ProbeSettings:
        if self.max_uploads < self.min_uploads:
            msg = f"max_uploads ({self.max_uploads}) must be >= min_uploads ({self.min_uploads})"
            raise ValueError(msg)
        if self.max_size_mib < self.min_size_mib:
            msg = (
                f"max_size_mib ({self.max_size_mib}) must be >= "
                f"min_size_mib ({self.min_size_mib})"
            )
            raise ValueError(msg)
        return self

    @property
    def min_size_bytes(self) -> int:
        """Minimum object size in bytes."""
        return self.min_size_mib * MIB

    @property
    def max_size_bytes(self) -> int:
        """Maximum object size in bytes."""
        return self.max_size_mib * MIB


class AwsSettings(BaseSettings):
    """Connection settings handed to boto3.

    Credentials are never read here; boto3 resolves them from the selected
    profile or its default chain.

    Attributes:
        profile: Named profile (env AWS_PROFILE); None uses boto3's default chain
        region: Region for new buckets (env AWS_REGION); None lets boto3 resolve
            it from the profile or AWS_DEFAULT_REGION, falling back to us-east-1
        endpoint_url: S3-compatible endpoint override (env AWS_ENDPOINT_URL)
    """

    model_config = SettingsConfigDict(
        env_prefix="AWS_",
        extra="ignore",
    )

    profile: str | None = Field(default=None, description="AWS named profile")
    region: str | None = Field(
        default=None,
        min_length=1,
        description="AWS region (None = profile or environment region, else us-east-1)",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="S3 endpoint override (e.g., http://localhost:4566 for LocalStack)",
    )
