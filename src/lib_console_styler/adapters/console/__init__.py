"""Console adapters writing styled log lines to byte sinks."""

from __future__ import annotations

from .styled_console import ConsoleLineFormatter, ConsoleOutput, StyledConsoleAdapter

__all__ = ["ConsoleLineFormatter", "ConsoleOutput", "StyledConsoleAdapter"]
