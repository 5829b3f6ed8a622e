"""Console receivers."""

from __future__ import annotations

from .rich_console import RichConsoleReceiver

__all__ = ["RichConsoleReceiver"]
