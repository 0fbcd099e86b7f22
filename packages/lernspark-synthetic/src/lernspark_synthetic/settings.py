"""Configuration for dataset synthesis.

Can be loaded from environment variables with the LERNSPARK_SYNTH_ prefix.

Example:
    >>> # From environment (LERNSPARK_SYNTH_MIN_ROWS=500, ...)
    >>> settings = SynthesisSettings()
    >>>
    >>> # Explicit
    >>> settings = SynthesisSettings(min_rows=10, max_rows=20, seed=42)
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SynthesisSettings(BaseSettings):
    """Tunables for the synthesis pipeline.

    Attributes:
        min_rows: Lower bound (inclusive) of the per-table row count
        max_rows: Upper bound (inclusive) of the per-table row count
        batch_size: Rows generated and written per Parquet row group
        seed: Random seed; None draws fresh randomness on every run
    """

    model_config = SettingsConfigDict(
        env_prefix="LERNSPARK_SYNTH_",
        env_file=".env",
        extra="ignore",
    )

    min_rows: int = Field(
        default=1_000,
        ge=1,
        description="Minimum number of rows generated per table",
    )
    max_rows: int = Field(
        default=10_000,
        ge=1,
        description="Maximum number of rows generated per table",
    )
    batch_size: int = Field(
        default=50_000,
        ge=1,
        description="Rows per generated batch",
    )
    seed: int | None = Field(
        default=None,
        description="Random seed for reproducible datasets",
    )

    @model_validator(mode="after")
    def _max_rows_not_below_min(self) -> SynthesisSettings:
        if self.max_rows < self.min_rows:
            msg = f"max_rows ({self.max_rows}) must be >= min_rows ({self.min_rows})"
            raise ValueError(msg)
        return self
