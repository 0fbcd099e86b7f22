"""Parquet dataset writer for synthetic tables.

This module provides the ParquetDatasetWriter, which materializes one parsed
table as a Parquet file filled with synthetic rows.

Features:
- Row count drawn once per table from the configured range
- Batched generation to bound memory on large tables
- Single ParquetWriter per table, one row group per batch
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq
import structlog
from pydantic import BaseModel, ConfigDict

from lernspark_synthetic.errors import ArtifactIOError, EncodingError
from lernspark_synthetic.generators.values import SyntheticValueGenerator
from lernspark_synthetic.schema.models import Table
from lernspark_synthetic.schema.types import to_arrow_schema
from lernspark_synthetic.settings import SynthesisSettings

logger = structlog.get_logger(__name__)


class WriteResult(BaseModel):
    """Result of writing one table.

    Attributes:
        table_name: Name of the table written
        rows_written: Number of rows in the file
        path: File that was written
        example_row: First generated row, for human inspection
    """

    model_config = ConfigDict(frozen=True)

    table_name: str
    rows_written: int
    path: str
    example_row: dict[str, Any] | None = None


class ParquetDatasetWriter:
    """Write synthetic Parquet files for parsed tables.

    Example:
        >>> writer = ParquetDatasetWriter(SynthesisSettings(min_rows=10, max_rows=10))
        >>> result = writer.write(table, "users.parquet")
        >>> result.rows_written
        10
    """

    def __init__(
        self,
        settings: SynthesisSettings | None = None,
        generator: SyntheticValueGenerator | None = None,
    ) -> None:
        """Initialize the writer.

        Args:
            settings: Row-count range, batch size and seed
            generator: Value generator (default: seeded from settings)
        """
        self.settings = settings or SynthesisSettings()
        self.generator = generator or SyntheticValueGenerator(seed=self.settings.seed)
        self._log = logger.bind(writer="parquet")

    def choose_row_count(self) -> int:
        """Draw the number of rows for one table from the configured range."""
        return self.generator.fake.random.randint(self.settings.min_rows, self.settings.max_rows)

    def generate_batches(self, table: Table, total: int) -> Iterator[pa.Table]:
        """Stream Arrow batches for a table.

        Every column of a batch holds the same number of values.

        Args:
            table: Table to generate rows for
            total: Total number of rows

        Yields:
            Arrow tables of at most ``settings.batch_size`` rows
        """
        schema = to_arrow_schema(table)
        batch_size = self.settings.batch_size
        for offset in range(0, total, batch_size):
            count = min(batch_size, total - offset)
            arrays = [
                pa.array(self.generator.generate(column, count), type=field.type)
                for column, field in zip(table.columns, schema, strict=True)
            ]
            yield pa.Table.from_arrays(arrays, schema=schema)

    def write(self, table: Table, target: str | Path) -> WriteResult:
        """Generate rows for a table and write them to a Parquet file.

        Args:
            table: Parsed table
            target: Destination file path

        Returns:
            WriteResult describing the file

        Raises:
            EncodingError: If values cannot be encoded as Arrow/Parquet
            ArtifactIOError: If the file cannot be written
        """
        path = Path(target)
        # A table without columns cannot hold rows; its file is schema-only.
        rows = self.choose_row_count() if table.columns else 0
        log = self._log.bind(table=table.name, path=str(path))
        log.info("dataset_generation_started", rows=rows, columns=len(table.columns))

        start = time.monotonic()
        example_row: dict[str, Any] | None = None
        try:
            with pq.ParquetWriter(path, to_arrow_schema(table)) as writer:
                for batch in self.generate_batches(table, rows):
                    if example_row is None and batch.num_rows:
                        example_row = batch.slice(0, 1).to_pylist()[0]
                    writer.write_table(batch)
        except OSError as e:
            raise ArtifactIOError(
                "Failed to write dataset file", path=str(path), cause=str(e)
            ) from e
        except pa.ArrowException as e:
            raise EncodingError(
                "Failed to encode dataset", table=table.name, cause=str(e)
            ) from e

        log.info(
            "dataset_written",
            rows=rows,
            duration_ms=int((time.monotonic() - start) * 1000),
            example_row=example_row,
        )
        return WriteResult(
            table_name=table.name,
            rows_written=rows,
            path=str(path),
            example_row=example_row,
        )
