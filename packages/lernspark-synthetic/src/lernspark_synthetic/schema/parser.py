"""Parser for ``CREATE TABLE`` schema descriptions.

Turns a schema file made of semicolon-terminated ``CREATE TABLE`` statements,
optionally preceded by a single ``--`` comment line, into typed ``Table``
models. Parsing is pure and all-or-nothing: one bad statement fails the
whole batch.

Example:
    >>> tables = parse_schema('''
    ... -- Example schema
    ... CREATE TABLE users (
    ...     id INT PRIMARY KEY,
    ...     name VARCHAR(50) NOT NULL
    ... );
    ... ''')
    >>> [str(c.data_type) for c in tables[0].columns]
    ['INT', 'VARCHAR(50)']
"""

from __future__ import annotations

import re
from pathlib import Path

import structlog

from lernspark_synthetic.errors import (
    ArtifactIOError,
    MalformedColumnError,
    MalformedStatementError,
    UnsupportedTypeError,
)
from lernspark_synthetic.schema.models import (
    DEFAULT_VARCHAR_LENGTH,
    Column,
    DataType,
    DataTypeKind,
    Table,
)

logger = structlog.get_logger(__name__)

COMMENT_MARKER = "--"

# DATETIME must be tried before DATE; the lookahead keeps INT from matching INTEGER.
_TYPE_PATTERN = re.compile(
    r"^(?P<type>VARCHAR(?:\s*\((?P<length>[^)]*)\))?|DATETIME|DATE|INT|FLOAT|TEXT|UUID|BOOLEAN)"
    r"(?=\s|$)",
    re.IGNORECASE,
)

_SIMPLE_TYPES: dict[str, DataTypeKind] = {
    "INT": DataTypeKind.INT,
    "FLOAT": DataTypeKind.FLOAT,
    "TEXT": DataTypeKind.STRING,
    "DATE": DataTypeKind.DATETIME,
    "DATETIME": DataTypeKind.DATETIME,
    "UUID": DataTypeKind.UUID,
    "BOOLEAN": DataTypeKind.BOOLEAN,
}


def parse_schema(text: str) -> list[Table]:
    """Parse every ``CREATE TABLE`` statement in a schema description.

    Args:
        text: Schema text, optionally starting with one comment line
            (leading blank lines are ignored).

    Returns:
        Tables in statement order.

    Raises:
        SchemaError: If any statement is malformed or uses an unsupported type.
    """
    body = _strip_leading_comment(text)
    statements = [stmt.strip() for stmt in body.split(";")]
    tables = [parse_create_table(stmt) for stmt in statements if stmt]
    logger.debug("schema_parsed", tables=len(tables))
    return tables


def parse_schema_file(path: str | Path) -> list[Table]:
    """Read and parse a schema file.

    Args:
        path: Path to a UTF-8 schema file.

    Returns:
        Tables in statement order.

    Raises:
        ArtifactIOError: If the file cannot be read.
        SchemaError: If the contents do not parse.
    """
    schema_path = Path(path)
    try:
        text = schema_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ArtifactIOError(
            "Cannot read schema file", path=str(schema_path), cause=str(e)
        ) from e
    return parse_schema(text)


def parse_create_table(statement: str) -> Table:
    """Parse a single ``CREATE TABLE`` statement (without the trailing ``;``).

    A statement without a parenthesised column block yields a table with no
    columns.

    Args:
        statement: Statement text.

    Returns:
        The parsed table.

    Raises:
        MalformedStatementError: If the statement is not ``CREATE TABLE <name>``.
        MalformedColumnError: If a column has no type.
        UnsupportedTypeError: If a column type is outside the vocabulary.
    """
    name = _extract_table_name(statement)
    columns = tuple(
        _parse_column(definition, table=name)
        for definition in _split_top_level(_extract_column_block(statement))
    )
    return Table(name=name, columns=columns)


def _strip_leading_comment(text: str) -> str:
    """Drop the first non-blank line when it is a comment."""
    lines = text.splitlines()
    first = next((i for i, line in enumerate(lines) if line.strip()), None)
    if first is not None and lines[first].strip().startswith(COMMENT_MARKER):
        return "\n".join(lines[first + 1 :])
    return text


def _extract_table_name(statement: str) -> str:
    tokens = statement.split()
    if len(tokens) < 3 or tokens[0].upper() != "CREATE" or tokens[1].upper() != "TABLE":
        raise MalformedStatementError(statement)
    name = tokens[2].split("(", 1)[0]
    if not name:
        raise MalformedStatementError(statement, "CREATE TABLE statement has no table name")
    return name


def _extract_column_block(statement: str) -> str:
    start = statement.find("(")
    end = statement.rfind(")")
    if start == -1 or end <= start:
        return ""
    return statement[start + 1 : end]


def _split_top_level(block: str) -> list[str]:
    """Split a column block on commas outside nested parentheses."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for char in block:
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def _parse_column(definition: str, *, table: str) -> Column:
    name, *rest = definition.split(None, 1)
    tail = rest[0].strip() if rest else ""
    if not tail:
        raise MalformedColumnError(definition, table=table)

    match = _TYPE_PATTERN.match(tail)
    if match is None:
        raise UnsupportedTypeError(tail.split()[0], column=name)

    data_type = _to_data_type(match.group("type"), match.group("length"))
    constraints = tuple(tail[match.end() :].split())
    return Column(name=name, data_type=data_type, constraints=constraints)


def _to_data_type(type_token: str, length: str | None) -> DataType:
    upper = type_token.upper()
    if upper.startswith("VARCHAR"):
        return DataType.varchar(_parse_length(length))
    return DataType(kind=_SIMPLE_TYPES[upper])


def _parse_length(raw: str | None) -> int:
    if raw is None:
        return DEFAULT_VARCHAR_LENGTH
    raw = raw.strip()
    return int(raw) if raw.isdecimal() else DEFAULT_VARCHAR_LENGTH
