"""Mapping from schema data types to Arrow storage types.

The mapping is total: every ``DataTypeKind`` has exactly one Arrow image.

| Schema type      | Arrow type | Notes                        |
|------------------|------------|------------------------------|
| INT              | int32      |                              |
| FLOAT            | float32    |                              |
| STRING, VARCHAR  | string     | UTF-8                        |
| DATETIME         | date32     | days since the Unix epoch    |
| UUID             | string     | canonical hyphenated text    |
| BOOLEAN          | bool       |                              |
"""

from __future__ import annotations

import pyarrow as pa

from lernspark_synthetic.schema.models import Column, DataType, DataTypeKind, Table

_ARROW_TYPES: dict[DataTypeKind, pa.DataType] = {
    DataTypeKind.INT: pa.int32(),
    DataTypeKind.FLOAT: pa.float32(),
    DataTypeKind.STRING: pa.string(),
    DataTypeKind.VARCHAR: pa.string(),
    DataTypeKind.DATETIME: pa.date32(),
    DataTypeKind.UUID: pa.string(),
    DataTypeKind.BOOLEAN: pa.bool_(),
}


def to_arrow_type(data_type: DataType) -> pa.DataType:
    """Return the Arrow storage type for a schema data type.

    Args:
        data_type: Parsed column type

    Returns:
        Arrow data type used when encoding the column

    Example:
        >>> to_arrow_type(DataType.varchar(10))
        DataType(string)
    """
    return _ARROW_TYPES[data_type.kind]


def to_arrow_field(column: Column) -> pa.Field:
    """Build the Arrow field for a column.

    Columns declared ``NOT NULL`` become non-nullable fields; other
    constraint tokens are not interpreted.
    """
    return pa.field(column.name, to_arrow_type(column.data_type), nullable=not column.not_null)


def to_arrow_schema(table: Table) -> pa.Schema:
    """Build the Arrow schema for a whole table, preserving column order."""
    return pa.schema([to_arrow_field(column) for column in table.columns])
