"""Styled console adapter implementing :class:`ConsolePort`.

Purpose
-------
Render each accepted entry as one human-facing line: timestamp, level symbol
and label coloured by the theme role of the level, namespace, message and
metadata pairs.

Contents
--------
* :data:`_LEVEL_ROLES` – level to theme role mapping.
* :class:`ConsoleLineFormatter` – entry → list of lines.
* :class:`StyledConsoleAdapter` – primary sink used by the logger.
* :class:`ConsoleOutput` – the same rendering as a level-gated output plugin.

System Role
-----------
Primary human-facing sink; colour, unicode and width come from the
capabilities and configuration handed in by the runtime.
"""

from __future__ import annotations

import threading
from typing import Mapping

from lib_console_styler.adapters._formatting import format_metadata
from lib_console_styler.application.ports.plugin import BasePlugin
from lib_console_styler.application.ports.terminal import ByteSink
from lib_console_styler.domain.capabilities import Capabilities
from lib_console_styler.domain.colors import ColorEngine
from lib_console_styler.domain.config import EntryFormatter, StylerConfig
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.layout import measure, wrap
from lib_console_styler.domain.levels import LogLevel
from lib_console_styler.domain.theme import Theme

_LEVEL_ROLES: Mapping[LogLevel, str] = {
    LogLevel.DEBUG: "debug",
    LogLevel.INFO: "info",
    LogLevel.SUCCESS: "success",
    LogLevel.WARNING: "warning",
    LogLevel.ERROR: "error",
    LogLevel.CRITICAL: "critical",
}

_LABEL_WIDTH = max(len(level.name) for level in LogLevel)


class ConsoleLineFormatter:
    """Turn entries into styled console lines."""

    def __init__(self, *, colors: ColorEngine, theme: Theme, capabilities: Capabilities, config: StylerConfig) -> None:
        self._colors = colors
        self._theme = theme
        self._capabilities = capabilities
        self._config = config

    def prefix(self, entry: LogEntry) -> str:
        role = _LEVEL_ROLES[entry.level]
        parts: list[str] = []
        if self._config.show_timestamp:
            stamp = entry.timestamp.astimezone().strftime(self._config.timestamp_format)
            parts.append(self._colors.colorize(stamp, "muted"))
        symbol = self._theme.symbol(role, unicode=self._capabilities.unicode, emoji=self._capabilities.emoji)
        if symbol:
            parts.append(self._colors.colorize(symbol, role))
        parts.append(self._colors.colorize(entry.level.name.ljust(_LABEL_WIDTH), role))
        if entry.namespace:
            parts.append(self._colors.colorize(f"[{entry.namespace}]", "accent"))
        return " ".join(parts)

    def body(self, entry: LogEntry) -> str:
        message = entry.message
        if entry.level >= LogLevel.ERROR:
            message = self._colors.colorize(message, _LEVEL_ROLES[entry.level])
        pairs = format_metadata(entry.metadata)
        if pairs:
            message = f"{message} {self._colors.colorize(pairs, 'muted')}"
        return message

    def format(self, entry: LogEntry) -> list[str]:
        """Return the lines for ``entry``; continuation lines are indented."""
        line = f"{self.prefix(entry)} {self.body(entry)}"
        indent = " " * max(0, self._config.indent_size)
        width = self._config.max_line_width
        if width is None:
            first, *rest = line.split("\n")
            return [first, *(indent + part for part in rest)]
        head, *tail = wrap(line, width)
        lines = [head]
        for paragraph in tail:
            lines.extend(indent + part for part in wrap(paragraph, max(1, width - measure(indent))))
        return lines

    def notice(self, text: str) -> str:
        symbol = self._theme.symbol("warning", unicode=self._capabilities.unicode, emoji=self._capabilities.emoji)
        return self._colors.colorize(f"{symbol} {text}" if symbol else text, "warning")


class StyledConsoleAdapter:
    """Write formatted lines to a byte sink, one entry per write."""

    def __init__(self, sink: ByteSink, formatter: ConsoleLineFormatter) -> None:
        self._sink = sink
        self._formatter = formatter
        self._lock = threading.Lock()

    @property
    def formatter(self) -> ConsoleLineFormatter:
        return self._formatter

    def emit(self, entry: LogEntry) -> None:
        self._write(self._formatter.format(entry))

    def notice(self, text: str) -> None:
        self._write([self._formatter.notice(text)])

    def write_lines(self, lines: list[str]) -> None:
        self._write(lines)

    def _write(self, lines: list[str]) -> None:
        payload = "".join(f"{line}\n" for line in lines).encode("utf-8")
        with self._lock:
            self._sink.write(payload)


class ConsoleOutput(BasePlugin):
    """Additional console destination (for example stderr) with its own level gate.

    A custom ``formatter`` replaces the styled rendering with one plain line
    per entry.
    """

    name = "console"
    version = "1.0.0"

    def __init__(
        self,
        adapter: StyledConsoleAdapter,
        *,
        min_level: LogLevel | None = None,
        formatter: EntryFormatter | None = None,
    ) -> None:
        self._adapter = adapter
        self.min_level = min_level
        self._custom = formatter

    def on_log(self, entry: LogEntry) -> None:
        if self._custom is not None:
            self._adapter.write_lines([self._custom(entry)])
        else:
            self._adapter.emit(entry)


__all__ = ["ConsoleLineFormatter", "ConsoleOutput", "StyledConsoleAdapter"]
