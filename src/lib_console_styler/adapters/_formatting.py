"""Utilities that normalise log entries into template-friendly dictionaries.

Why
---
The file outputs, the text dump and custom formatters accept the same
``str.format`` placeholders. Producing the payload in one place keeps them in
sync.

Contents
--------
* :func:`build_format_payload` – placeholder values for a log entry.
* :func:`format_metadata` – ``key=value`` rendering of metadata.
* :func:`format_text_line` – the plain line written by file outputs.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from lib_console_styler.domain.entry import LogEntry

DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_TIME_FORMAT = "%H:%M:%S"


def format_metadata(metadata: Mapping[str, Any]) -> str:
    """Return ``key=value`` pairs in insertion order, skipping ``None`` values.

    >>> format_metadata({"user": "ada", "attempt": 2, "skip": None})
    'user=ada attempt=2'
    """
    return " ".join(f"{key}={value}" for key, value in metadata.items() if value is not None)


def build_format_payload(
    entry: LogEntry,
    *,
    date_format: str = DEFAULT_DATE_FORMAT,
    time_format: str = DEFAULT_TIME_FORMAT,
) -> dict[str, Any]:
    """Return the mapping of placeholders exposed to format templates.

    ``{date}`` and ``{time}`` are rendered in local time with the given
    ``strftime`` formats; the numeric fields stay in UTC.
    """

    stamp = entry.timestamp
    local = stamp.astimezone()
    metadata = dict(entry.metadata)
    pairs = format_metadata(metadata)
    level_text = entry.level.severity.upper()
    return {
        "timestamp": stamp.isoformat(),
        "date": local.strftime(date_format),
        "time": local.strftime(time_format),
        "YYYY": f"{stamp.year:04d}",
        "MM": f"{stamp.month:02d}",
        "DD": f"{stamp.day:02d}",
        "hh": f"{stamp.hour:02d}",
        "mm": f"{stamp.minute:02d}",
        "ss": f"{stamp.second:02d}",
        "level": level_text,
        "LEVEL": level_text,
        "level_enum": entry.level,
        "level_name": entry.level.name,
        "level_code": entry.level.code,
        "level_icon": entry.level.icon,
        "namespace": entry.namespace,
        "message": entry.message,
        "metadata": metadata,
        "metadata_fields": f" {pairs}" if pairs else "",
        "category": entry.category or "",
        "request_id": entry.request_id or "",
    }


def format_text_line(entry: LogEntry) -> str:
    """Render ``[timestamp] LEVEL [namespace] message {metadata-json}``.

    The namespace and metadata parts are omitted when empty.
    """

    parts = [f"[{entry.timestamp.isoformat()}]", entry.level.severity.upper()]
    if entry.namespace:
        parts.append(f"[{entry.namespace}]")
    parts.append(entry.message)
    if entry.metadata:
        parts.append(json.dumps(dict(entry.metadata), default=str, ensure_ascii=False))
    return " ".join(parts)


__all__ = ["DEFAULT_DATE_FORMAT", "DEFAULT_TIME_FORMAT", "build_format_payload", "format_metadata", "format_text_line"]
