"""Bundle synthetic datasets into a single zip archive.

Each table is written to a temporary Parquet file, appended to the archive as
``<table name>.parquet`` and the temporary file is removed straight away, so
no per-table files outlive the call. A failure leaves the archive as it was
at the time of the error; entries already appended are not rolled back.
"""

from __future__ import annotations

import os
import tempfile
import zipfile
from collections.abc import Iterable
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field

from lernspark_synthetic.errors import ArtifactIOError
from lernspark_synthetic.schema.models import Table
from lernspark_synthetic.writers.parquet import ParquetDatasetWriter, WriteResult

logger = structlog.get_logger(__name__)

DEFAULT_ARCHIVE_NAME = "examples.zip"


class BundleResult(BaseModel):
    """Result of bundling a set of tables.

    Attributes:
        destination: Archive path
        entries: Per-table write results in archive order
    """

    model_config = ConfigDict(frozen=True)

    destination: str
    entries: list[WriteResult] = Field(default_factory=list)

    @property
    def total_rows(self) -> int:
        """Rows across every table in the archive."""
        return sum(entry.rows_written for entry in self.entries)


class ArchiveBundler:
    """Write every table through a dataset writer into one compressed archive.

    Example:
        >>> bundler = ArchiveBundler()
        >>> result = bundler.bundle(parse_schema_file("data.sql"), "examples.zip")
        >>> [entry.table_name for entry in result.entries]
        ['Lanisters', 'Starks']
    """

    def __init__(
        self,
        writer: ParquetDatasetWriter | None = None,
        work_dir: str | Path | None = None,
    ) -> None:
        """Initialize the bundler.

        Args:
            writer: Dataset writer used per table (default: from environment settings)
            work_dir: Directory for temporary per-table files (default: system temp dir)
        """
        self.writer = writer or ParquetDatasetWriter()
        self.work_dir = Path(work_dir) if work_dir is not None else None

    def bundle(self, tables: Iterable[Table], destination: str | Path) -> BundleResult:
        """Write all tables into a zip archive at ``destination``.

        Args:
            tables: Parsed tables
            destination: Archive path, overwritten if it exists

        Returns:
            BundleResult with one entry per table

        Raises:
            ArtifactIOError: If a dataset or the archive cannot be written
            EncodingError: If a dataset cannot be encoded
        """
        dest = Path(destination)
        entries: list[WriteResult] = []
        log = logger.bind(destination=str(dest))

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(dest, "w", compression=zipfile.ZIP_DEFLATED) as archive:
                for table in tables:
                    entries.append(self._append_table(archive, table))
        except (OSError, zipfile.BadZipFile) as e:
            raise ArtifactIOError("Failed to write archive", path=str(dest), cause=str(e)) from e

        log.info("archive_written", tables=len(entries), rows=sum(e.rows_written for e in entries))
        return BundleResult(destination=str(dest), entries=entries)

    def _append_table(self, archive: zipfile.ZipFile, table: Table) -> WriteResult:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f"{table.name}-",
            suffix=".parquet",
            dir=self.work_dir,
        )
        os.close(fd)
        tmp_path = Path(tmp_name)
        try:
            result = self.writer.write(table, tmp_path)
            archive.write(tmp_path, arcname=f"{table.name}.parquet")
        finally:
            tmp_path.unlink(missing_ok=True)
        return result
