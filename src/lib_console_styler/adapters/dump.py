"""Dump adapter rendering history snapshots as text, JSON or HTML.

Outputs
-------
* Text lines from a ``str.format`` template, optionally ANSI-coloured;
  ``{date}`` and ``{time}`` follow the configured date and time formats.
* A JSON array of entry dictionaries.
* A standalone HTML document rendered through Rich's recording console.

Contents
--------
* :class:`DumpAdapter` – implementation of :class:`DumpPort`.
"""

from __future__ import annotations

import json
from io import StringIO
from typing import Mapping, Sequence

from rich.console import Console
from rich.text import Text

from lib_console_styler.application.ports.dump import DumpPort
from lib_console_styler.domain.dump import DumpFormat
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.levels import LogLevel

from ._formatting import DEFAULT_DATE_FORMAT, DEFAULT_TIME_FORMAT, build_format_payload

DEFAULT_TEXT_TEMPLATE = "{timestamp} {LEVEL:<8} {namespace} {message}{metadata_fields}"

_LEVEL_STYLES: Mapping[LogLevel, str] = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "blue",
    LogLevel.SUCCESS: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
    LogLevel.CRITICAL: "bold bright_red",
}


class DumpAdapter(DumpPort):
    """Render entries according to a :class:`DumpFormat`."""

    def __init__(
        self,
        *,
        text_template: str = DEFAULT_TEXT_TEMPLATE,
        date_format: str = DEFAULT_DATE_FORMAT,
        time_format: str = DEFAULT_TIME_FORMAT,
    ) -> None:
        self._template = text_template
        self._date_format = date_format
        self._time_format = time_format

    def dump(
        self,
        entries: Sequence[LogEntry],
        *,
        dump_format: DumpFormat,
        min_level: LogLevel | None = None,
        colorize: bool = False,
        text_template: str | None = None,
    ) -> str:
        """Render ``entries`` at or above ``min_level``.

        ``text_template`` replaces the adapter template for this call.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> entry = LogEntry(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.INFO, 'msg')
        >>> DumpAdapter().dump([entry], dump_format=DumpFormat.JSON).startswith('[')
        True
        """
        selected = [entry for entry in entries if min_level is None or entry.level >= min_level]
        template = text_template if text_template is not None else self._template
        if dump_format is DumpFormat.TEXT:
            return self._render_text(selected, template, colorize=colorize)
        if dump_format is DumpFormat.JSON:
            return json.dumps([entry.to_dict() for entry in selected], indent=2, default=str, ensure_ascii=False)
        if dump_format is DumpFormat.HTML:
            return self._render_html(selected, template)
        raise ValueError(f"Unsupported dump format: {dump_format}")  # pragma: no cover - exhaustiveness guard

    def _line(self, entry: LogEntry, template: str) -> str:
        try:
            return template.format(
                **build_format_payload(entry, date_format=self._date_format, time_format=self._time_format)
            )
        except KeyError as exc:
            raise ValueError(f"Unknown placeholder in text template: {exc}") from exc

    def _render_text(self, entries: Sequence[LogEntry], template: str, *, colorize: bool) -> str:
        if not colorize:
            return "\n".join(self._line(entry, template) for entry in entries)
        console = Console(color_system="truecolor", force_terminal=True, legacy_windows=False, file=StringIO())
        lines = []
        for entry in entries:
            with console.capture() as capture:
                console.print(Text(self._line(entry, template), style=_LEVEL_STYLES[entry.level]), end="", soft_wrap=True)
            lines.append(capture.get())
        return "\n".join(lines)

    def _render_html(self, entries: Sequence[LogEntry], template: str) -> str:
        console = Console(record=True, file=StringIO(), force_terminal=True, color_system="truecolor", width=160)
        for entry in entries:
            console.print(Text(self._line(entry, template), style=_LEVEL_STYLES[entry.level]), soft_wrap=True)
        return console.export_html(inline_styles=True, clear=True)


__all__ = ["DEFAULT_TEXT_TEMPLATE", "DumpAdapter"]
