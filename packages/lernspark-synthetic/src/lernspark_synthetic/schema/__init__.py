"""Schema parsing and type mapping.

Exports:
- parse_schema, parse_schema_file, parse_create_table: CREATE TABLE parser
- Table, Column, DataType, DataTypeKind: Parsed table model
- to_arrow_type, to_arrow_schema: Storage type mapping
"""

from __future__ import annotations

from lernspark_synthetic.schema.models import (
    DEFAULT_VARCHAR_LENGTH,
    Column,
    DataType,
    DataTypeKind,
    Table,
)
from lernspark_synthetic.schema.parser import (
    parse_create_table,
    parse_schema,
    parse_schema_file,
)
from lernspark_synthetic.schema.types import to_arrow_field, to_arrow_schema, to_arrow_type

__all__ = [
    "DEFAULT_VARCHAR_LENGTH",
    "Column",
    "DataType",
    "DataTypeKind",
    "Table",
    "parse_create_table",
    "parse_schema",
    "parse_schema_file",
    "to_arrow_field",
    "to_arrow_schema",
    "to_arrow_type",
]
