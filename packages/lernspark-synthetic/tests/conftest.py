"""Shared pytest fixtures for lernspark-synthetic tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
import structlog

from lernspark_synthetic.generators.values import SyntheticValueGenerator
from lernspark_synthetic.schema import Column, DataType, DataTypeKind, Table
from lernspark_synthetic.settings import SynthesisSettings
from lernspark_synthetic.writers.parquet import ParquetDatasetWriter

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
def configure_structlog_for_tests() -> None:
    """Route structlog output to stdout so capsys can capture it."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def kingdoms_file(tmp_path: Path) -> Path:
    """Schema file with the Lanisters and Starks tables."""
    path = tmp_path / "data.sql"
    path.write_text(KINGDOMS_SQL, encoding="utf-8")
    return path


@pytest.fixture
def all_types_table() -> Table:
    """A table with one column of every supported type."""
    return Table(
        name="everything",
        columns=(
            Column(
                name="id",
                data_type=DataType(kind=DataTypeKind.INT),
                constraints=("NOT", "NULL"),
            ),
            Column(name="score", data_type=DataType(kind=DataTypeKind.FLOAT)),
            Column(name="bio", data_type=DataType(kind=DataTypeKind.STRING)),
            Column(name="joined", data_type=DataType(kind=DataTypeKind.DATETIME)),
            Column(name="ref", data_type=DataType(kind=DataTypeKind.UUID)),
            Column(name="active", data_type=DataType(kind=DataTypeKind.BOOLEAN)),
            Column(name="username", data_type=DataType.varchar(8)),
        ),
    )


@pytest.fixture
def small_settings() -> SynthesisSettings:
    """Settings producing small, reproducible tables."""
    return SynthesisSettings(min_rows=20, max_rows=40, batch_size=16, seed=7)


@pytest.fixture
def small_writer(small_settings: SynthesisSettings) -> ParquetDatasetWriter:
    """Parquet writer using ``small_settings``."""
    return ParquetDatasetWriter(small_settings, SyntheticValueGenerator(seed=small_settings.seed))
