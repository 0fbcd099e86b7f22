"""lernspark command line interface."""

from __future__ import annotations

__version__ = "0.1.0"
