"""Port for rendering history snapshots."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from lib_console_styler.domain.dump import DumpFormat
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.levels import LogLevel


@runtime_checkable
class DumpPort(Protocol):
    """Render entries into a text, JSON or HTML document."""

    def dump(
        self,
        entries: Sequence[LogEntry],
        *,
        dump_format: DumpFormat,
        min_level: LogLevel | None = None,
        colorize: bool = False,
        text_template: str | None = None,
    ) -> str: ...


__all__ = ["DumpPort"]
