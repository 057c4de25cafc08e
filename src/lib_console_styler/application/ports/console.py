"""Console port describing terminal emission contracts.

Purpose
-------
Give the logging pipeline a narrow boundary for its human-facing output so
the process use case never depends on colour or layout code.

Contents
--------
* :class:`ConsolePort` – ``emit`` for entries, ``notice`` for out-of-band
  warnings such as plugin failures.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_console_styler.domain.entry import LogEntry


@runtime_checkable
class ConsolePort(Protocol):
    """Render log entries to an interactive console."""

    def emit(self, entry: LogEntry) -> None:
        """Write one styled line (or wrapped block) for ``entry``."""

    def notice(self, text: str) -> None:
        """Write a warning line that is not a log entry."""


__all__ = ["ConsolePort"]
