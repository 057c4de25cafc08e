"""JSON file output.

Two layouts are supported: newline-delimited JSON (one object per line,
appended) and a pretty-printed array. The array is extended in place by
writing each record over the closing bracket and re-closing it, so the file
stays a valid document after every entry without being rewritten.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from lib_console_styler.application.ports.plugin import BasePlugin
from lib_console_styler.domain.config import StylerConfig
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.levels import LogLevel

LOGGER = logging.getLogger(__name__)

_EMPTY_ARRAY = b"[\n]\n"


class JsonFileOutput(BasePlugin):
    """Write entries to ``path`` as NDJSON or, with ``pretty=True``, a JSON array.

    An existing array is extended; an unreadable file is replaced after a
    warning.
    """

    name = "json-file"
    version = "1.0.0"

    def __init__(self, path: str | Path, *, min_level: LogLevel | None = None, pretty: bool = False) -> None:
        self.path = Path(path)
        self.min_level = min_level
        self.pretty = pretty
        self._close_at: int | None = None
        self._has_records = False
        self._lock = threading.Lock()

    def on_init(self, config: StylerConfig) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self.pretty:
            with self._lock:
                self._open_array()

    def on_log(self, entry: LogEntry) -> None:
        record = entry.to_dict()
        with self._lock:
            if self.pretty:
                self._append_to_array(record)
            else:
                with self.path.open("a", encoding="utf-8") as handle:
                    handle.write(json.dumps(record, default=str, ensure_ascii=False) + "\n")

    def _open_array(self) -> int:
        """Locate the closing bracket of the existing array or start a new one."""
        raw = self.path.read_bytes() if self.path.exists() else b""
        if not raw.strip():
            return self._start_array()
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            LOGGER.warning("Replacing unreadable JSON log %s: %s", self.path, exc)
            return self._start_array()
        if not isinstance(data, list):
            LOGGER.warning("Replacing JSON log %s: top-level value is not an array", self.path)
            return self._start_array()
        closing = raw.rindex(b"]")
        self._close_at = len(raw[:closing].rstrip())
        self._has_records = bool(data)
        return self._close_at

    def _start_array(self) -> int:
        self.path.write_bytes(_EMPTY_ARRAY)
        self._close_at = 1
        self._has_records = False
        return self._close_at

    def _append_to_array(self, record: dict[str, object]) -> None:
        offset = self._close_at
        if offset is None or not self.path.exists():
            offset = self._open_array()
        body = json.dumps(record, indent=2, default=str, ensure_ascii=False)
        item = "\n".join(f"  {line}" for line in body.splitlines())
        chunk = ((",\n" if self._has_records else "\n") + item).encode("utf-8")
        with self.path.open("r+b") as handle:
            handle.seek(offset)
            handle.write(chunk + b"\n]\n")
            handle.truncate()
        self._close_at = offset + len(chunk)
        self._has_records = True


__all__ = ["JsonFileOutput"]
