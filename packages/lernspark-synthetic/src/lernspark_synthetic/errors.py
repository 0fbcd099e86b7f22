"""Custom exceptions for lernspark-synthetic.

This module defines the exception hierarchy:
- SynthesisError (base)
- SchemaError
  - MalformedStatementError
  - MalformedColumnError
  - UnsupportedTypeError
- EncodingError
- ArtifactIOError
"""

from __future__ import annotations


class SynthesisError(Exception):
    """Base exception for all dataset synthesis operations.

    Attributes:
        message: Human-readable error description.
        details: Optional additional context about the error.

    Example:
        >>> try:
        ...     tables = parse_schema(text)
        ... except SynthesisError as e:
        ...     print(f"Synthesis error: {e}")
    """

    def __init__(self, message: str, *, details: dict[str, str] | None = None) -> None:
        """Initialize SynthesisError.

        Args:
            message: Human-readable error description.
            details: Optional additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details if present."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class SchemaError(SynthesisError):
    """The schema description could not be parsed.

    A single bad statement invalidates the whole schema file; no partial
    table list is ever returned alongside this error.
    """


class MalformedStatementError(SchemaError):
    """A statement is not a well-formed ``CREATE TABLE`` statement.

    Example:
        >>> try:
        ...     parse_create_table("DROP TABLE users")
        ... except MalformedStatementError as e:
        ...     print(e.statement)
    """

    def __init__(self, statement: str, message: str | None = None) -> None:
        """Initialize MalformedStatementError.

        Args:
            statement: The offending statement text (truncated in details).
            message: Optional custom error message.
        """
        msg = message or "Malformed CREATE TABLE statement"
        super().__init__(msg, details={"statement": _abbreviate(statement)})
        self.statement = statement


class MalformedColumnError(SchemaError):
    """A column definition is missing its type token."""

    def __init__(self, definition: str, *, table: str | None = None) -> None:
        """Initialize MalformedColumnError.

        Args:
            definition: The column definition text.
            table: Table the column belongs to, when known.
        """
        details = {"column": definition}
        if table:
            details["table"] = table
        super().__init__(f"Column definition has no type: {definition}", details=details)
        self.definition = definition
        self.table = table


class UnsupportedTypeError(SchemaError):
    """A column declares a type outside the supported vocabulary.

    Example:
        >>> try:
        ...     parse_schema("CREATE TABLE t (price MONEY);")
        ... except UnsupportedTypeError as e:
        ...     print(e.type_token)
        MONEY
    """

    def __init__(self, type_token: str, *, column: str | None = None) -> None:
        """Initialize UnsupportedTypeError.

        Args:
            type_token: The unrecognized type token.
            column: Name of the column declaring it.
        """
        details = {"type": type_token}
        if column:
            details["column"] = column
        super().__init__(f"Unsupported data type: {type_token}", details=details)
        self.type_token = type_token
        self.column = column


class EncodingError(SynthesisError):
    """Generated values could not be encoded into the columnar file."""

    def __init__(
        self,
        message: str = "Failed to encode dataset",
        *,
        table: str | None = None,
        cause: str | None = None,
    ) -> None:
        """Initialize EncodingError.

        Args:
            message: Human-readable error description.
            table: The table being encoded.
            cause: The underlying encoder error.
        """
        details: dict[str, str] = {}
        if table:
            details["table"] = table
        if cause:
            details["cause"] = cause
        super().__init__(message, details=details)
        self.table = table
        self.cause = cause


class ArtifactIOError(SynthesisError):
    """Reading a schema file or writing a dataset/archive failed."""

    def __init__(
        self,
        message: str = "Artifact I/O failed",
        *,
        path: str | None = None,
        cause: str | None = None,
    ) -> None:
        """Initialize ArtifactIOError.

        Args:
            message: Human-readable error description.
            path: The filesystem path involved.
            cause: The underlying OS error.
        """
        details: dict[str, str] = {}
        if path:
            details["path"] = path
        if cause:
            details["cause"] = cause
        super().__init__(message, details=details)
        self.path = path
        self.cause = cause


def _abbreviate(text: str, limit: int = 80) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= limit else flat[: limit - 3] + "..."
