"""Rich console output utilities for lernspark-cli.

Colored success/error/warning messages that respect the NO_COLOR
environment variable and the ``--no-color`` flag.
"""

from __future__ import annotations

import json
import os
from typing import Any

from rich.console import Console

_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console instance with appropriate color settings.

    Args:
        no_color: If True, disable colored output. Also respects NO_COLOR env var.

    Returns:
        Configured Console instance.
    """
    force_terminal = None
    if no_color or _force_no_color:
        force_terminal = False
    return Console(force_terminal=force_terminal, no_color=no_color or _force_no_color)


console = create_console()


def get_console() -> Console:
    """Return the current module-level console."""
    return console


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with green checkmark.

    Example:
        >>> success("Wrote examples.zip")
        ✓ Wrote examples.zip
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with red X.

    Example:
        >>> error("Unsupported column type: MONEY")
        ✗ Unsupported column type: MONEY
    """
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print an informational message."""
    console.print(message, **kwargs)


def print_json(data: Any) -> None:
    """Print JSON without Rich markup so the output stays parseable.

    Args:
        data: JSON-serializable value.
    """
    console.file.write(json.dumps(data, indent=2, default=str) + "\n")


def set_no_color(no_color: bool) -> None:
    """Update the global console to enable/disable colors.

    Args:
        no_color: If True, disable colored output.
    """
    global console
    console = create_console(no_color=no_color)
