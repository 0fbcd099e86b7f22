"""Typed table model produced by the schema parser.

This module defines the immutable models describing a parsed schema:
- DataTypeKind: Tag of the supported column types
- DataType: Type tag plus the VARCHAR length payload
- Column: A named, typed column with its raw constraint tokens
- Table: A named, ordered sequence of columns

All models are immutable (frozen=True) and validate at construction time.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_VARCHAR_LENGTH = 255


class DataTypeKind(str, Enum):
    """Supported column type tags.

    Attributes:
        INT: 32-bit signed integer
        FLOAT: 32-bit float
        STRING: Unbounded text (``TEXT``)
        DATETIME: Calendar date (``DATE`` and ``DATETIME``)
        UUID: UUID rendered as text
        BOOLEAN: True/false
        VARCHAR: Bounded text with a length
    """

    INT = "int"
    FLOAT = "float"
    STRING = "string"
    DATETIME = "datetime"
    UUID = "uuid"
    BOOLEAN = "boolean"
    VARCHAR = "varchar"


class DataType(BaseModel):
    """Column data type.

    Only ``VARCHAR`` carries a payload (its length); every other kind is
    identified by its tag alone.

    Example:
        >>> DataType.varchar(50).length
        50
        >>> DataType(kind=DataTypeKind.INT).length is None
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: DataTypeKind = Field(..., description="Type tag")
    length: int | None = Field(default=None, ge=0, description="VARCHAR length")

    @model_validator(mode="before")
    @classmethod
    def _default_varchar_length(cls, data: Any) -> Any:
        if (
            isinstance(data, dict)
            and data.get("kind") in (DataTypeKind.VARCHAR, DataTypeKind.VARCHAR.value)
            and data.get("length") is None
        ):
            return {**data, "length": DEFAULT_VARCHAR_LENGTH}
        return data

    @model_validator(mode="after")
    def _length_only_for_varchar(self) -> DataType:
        if self.kind is not DataTypeKind.VARCHAR and self.length is not None:
            msg = f"length is only valid for VARCHAR, got {self.kind.value}"
            raise ValueError(msg)
        return self

    @classmethod
    def varchar(cls, length: int = DEFAULT_VARCHAR_LENGTH) -> DataType:
        """Build a VARCHAR type with the given length."""
        return cls(kind=DataTypeKind.VARCHAR, length=length)

    @property
    def is_text(self) -> bool:
        """True for STRING and VARCHAR columns."""
        return self.kind in (DataTypeKind.STRING, DataTypeKind.VARCHAR)

    def __str__(self) -> str:
        if self.kind is DataTypeKind.VARCHAR:
            return f"VARCHAR({self.length})"
        return self.kind.name


class Column(BaseModel):
    """A single column of a table.

    Attributes:
        name: Column name (non-empty)
        data_type: Column type
        constraints: Raw constraint tokens, e.g. ("NOT", "NULL"), kept verbatim
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Column name")
    data_type: DataType = Field(..., description="Column type")
    constraints: tuple[str, ...] = Field(default=(), description="Raw constraint tokens")

    @property
    def not_null(self) -> bool:
        """True when the constraints contain the ``NOT NULL`` token pair."""
        upper = [c.upper() for c in self.constraints]
        return any(a == "NOT" and b == "NULL" for a, b in zip(upper, upper[1:]))


class Table(BaseModel):
    """A parsed ``CREATE TABLE`` statement.

    Attributes:
        name: Table name (non-empty)
        columns: Columns in declaration order

    Example:
        >>> table = Table(
        ...     name="users",
        ...     columns=(Column(name="id", data_type=DataType(kind=DataTypeKind.INT)),),
        ... )
        >>> table.column_names
        ['id']
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Table name")
    columns: tuple[Column, ...] = Field(default=(), description="Columns in order")

    @property
    def column_names(self) -> list[str]:
        """Column names in declaration order."""
        return [column.name for column in self.columns]
