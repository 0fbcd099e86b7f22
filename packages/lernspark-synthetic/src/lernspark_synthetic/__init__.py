"""Synthetic dataset generation for lernspark.

This package turns a DDL-like schema description into realistic example
datasets.

Key Components:
- schema: CREATE TABLE parser, typed table model and Arrow type mapping
- generators: Faker-based per-column value generation with name semantics
- writers: Parquet dataset writer and zip archive bundler
- settings: Row-count range and seed configuration

Example:
    >>> from lernspark_synthetic.schema import parse_schema_file
    >>> from lernspark_synthetic.writers import ArchiveBundler
    >>>
    >>> tables = parse_schema_file("data.sql")
    >>> result = ArchiveBundler().bundle(tables, "examples.zip")
    >>> print(f"Wrote {result.total_rows} rows")
"""

from __future__ import annotations

__version__ = "0.1.0"
