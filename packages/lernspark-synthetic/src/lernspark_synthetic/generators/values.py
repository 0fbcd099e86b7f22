"""Per-column synthetic value generation using Faker.

This module provides the SyntheticValueGenerator, which turns a typed
column into a list of values matching the column's Arrow storage type.

Features:
- Deterministic seeding for reproducible datasets
- Name-driven semantics for text columns (see ``semantics``)
- VARCHAR values truncated to the declared length
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

import structlog
from faker import Faker

from lernspark_synthetic.generators.semantics import resolve_rule
from lernspark_synthetic.schema.models import Column, DataTypeKind

logger = structlog.get_logger(__name__)

INT_RANGE = (0, 100)
FLOAT_RANGE = (0.0, 100.0)
DAY_OFFSET_RANGE = (0, 100)
EPOCH = date(1970, 1, 1)


class SyntheticValueGenerator:
    """Generate column values with realistic text and uniform numerics.

    Numeric, boolean and date values are drawn independently per row.
    Text values are chosen by column-name semantics.

    Attributes:
        seed: Random seed for reproducibility
        fake: Faker instance for data generation

    Example:
        >>> generator = SyntheticValueGenerator(seed=42)
        >>> column = Column(name="email", data_type=DataType(kind=DataTypeKind.STRING))
        >>> emails = generator.generate(column, 10)
        >>> len(emails)
        10
    """

    def __init__(self, seed: int | None = None) -> None:
        """Initialize the generator.

        Args:
            seed: Random seed. Same seed produces identical values across runs.
        """
        self.seed = seed
        self.fake = Faker()
        if seed is not None:
            self.fake.seed_instance(seed)

    def generate(self, column: Column, count: int) -> list[Any]:
        """Generate ``count`` values for a column.

        Args:
            column: Column to generate values for
            count: Number of values

        Returns:
            Values in row order: int, float, bool, ``datetime.date`` or str
            depending on the column type.
        """
        data_type = column.data_type
        if data_type.is_text:
            values = self.generate_strings(column.name, count)
            if data_type.kind is DataTypeKind.VARCHAR and data_type.length is not None:
                values = [value[: data_type.length] for value in values]
            return values

        rng = self.fake.random
        kind = data_type.kind
        if kind is DataTypeKind.INT:
            return [rng.randint(*INT_RANGE) for _ in range(count)]
        if kind is DataTypeKind.FLOAT:
            return [rng.uniform(*FLOAT_RANGE) for _ in range(count)]
        if kind is DataTypeKind.BOOLEAN:
            return [rng.random() < 0.5 for _ in range(count)]
        if kind is DataTypeKind.DATETIME:
            return [
                EPOCH + timedelta(days=rng.randint(*DAY_OFFSET_RANGE)) for _ in range(count)
            ]
        if kind is DataTypeKind.UUID:
            return [self.fake.uuid4() for _ in range(count)]

        msg = f"No generator for data type {kind.value}"  # pragma: no cover
        raise ValueError(msg)  # pragma: no cover

    def generate_strings(self, column_name: str, count: int) -> list[str]:
        """Generate text values chosen by the column name's semantics.

        Args:
            column_name: Name of the text column
            count: Number of values

        Returns:
            List of ``count`` strings.
        """
        rule = resolve_rule(column_name)
        lowered = column_name.lower()
        logger.debug(
            "text_column_classified",
            column=column_name,
            category=rule.category.value,
            count=count,
        )
        return [rule.producer(self.fake, lowered) for _ in range(count)]
