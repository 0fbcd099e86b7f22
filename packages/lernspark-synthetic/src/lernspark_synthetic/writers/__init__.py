"""Dataset writers for synthetic tables.

Exports:
- ParquetDatasetWriter, WriteResult: One Parquet file per table
- ArchiveBundler, BundleResult: All tables bundled into one zip archive
"""

from __future__ import annotations

from lernspark_synthetic.writers.archive import (
    DEFAULT_ARCHIVE_NAME,
    ArchiveBundler,
    BundleResult,
)
from lernspark_synthetic.writers.parquet import ParquetDatasetWriter, WriteResult

__all__ = [
    "DEFAULT_ARCHIVE_NAME",
    "ArchiveBundler",
    "BundleResult",
    "ParquetDatasetWriter",
    "WriteResult",
]
