"""CLI error handling for lernspark-cli.

Wraps lernspark domain exceptions into user-friendly messages with
appropriate exit codes.
"""

from __future__ import annotations

from typing import IO, Any, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError

from lernspark_cli.output import error
from lernspark_probe.errors import AccessDeniedError, StorageError, UploadJoinError
from lernspark_synthetic.errors import ArtifactIOError, SynthesisError

# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # User error (bad schema, denied access, failed probe)
EXIT_SYSTEM_ERROR = 2  # System error (unwritable output)


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error message using Rich formatting."""
        error(self.format_message())


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format Pydantic validation error into user-friendly message.

    Example:
        >>> format_pydantic_error(err)
        "Invalid settings:\\n  - max_rows: Value error, max_rows (5) must be >= ..."
    """
    lines = ["Invalid settings:"]
    for e in err.errors():
        loc = ".".join(str(x) for x in e["loc"]) or "settings"
        lines.append(f"  - {loc}: {e['msg']}")
    return "\n".join(lines)


def handle_synthesis_error(err: SynthesisError, source: str) -> NoReturn:
    """Translate a synthesis failure into a CLIError.

    Raises:
        CLIError: Always; exit code 2 for file system failures, 1 otherwise.
    """
    if isinstance(err, ArtifactIOError):
        raise CLIError(f"Cannot write output for {source}: {err}", exit_code=EXIT_SYSTEM_ERROR)
    raise CLIError(f"{source}: {err}")


def handle_storage_error(err: StorageError) -> NoReturn:
    """Translate a storage failure into a CLIError.

    Access denial is reported distinctly from other failures.

    Raises:
        CLIError: Always.
    """
    if isinstance(err, AccessDeniedError) or (
        isinstance(err, UploadJoinError) and err.access_denied
    ):
        raise CLIError(f"Access denied: {err}")
    raise CLIError(f"Storage error: {err}")


def handle_validation_error(err: PydanticValidationError) -> NoReturn:
    """Translate invalid settings into a CLIError.

    Raises:
        CLIError: Always.
    """
    raise CLIError(format_pydantic_error(err))
