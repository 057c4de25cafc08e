"""Plain-text file output with size-based rotation.

Purpose
-------
Append one line per delivered entry to a file, rotating ``app.log`` to
``app.log.1`` ... ``app.log.N`` before a write would push it past
``max_bytes``.

Contents
--------
* :class:`FileOutput` – output plugin.
* :func:`rotated_path` – backup file naming.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import IO

from lib_console_styler.application.ports.plugin import BasePlugin
from lib_console_styler.domain.config import EntryFormatter, StylerConfig
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.levels import LogLevel

from ._formatting import format_text_line


def rotated_path(path: Path, index: int) -> Path:
    """Return the ``index``-th backup name for ``path``.

    >>> rotated_path(Path("logs/app.log"), 2).name
    'app.log.2'
    """
    return path.with_name(f"{path.name}.{index}")


class FileOutput(BasePlugin):
    """Write formatted lines to ``path``; rotation is disabled when ``max_bytes`` is ``None``."""

    name = "file"
    version = "1.0.0"

    def __init__(
        self,
        path: str | Path,
        *,
        min_level: LogLevel | None = None,
        formatter: EntryFormatter | None = None,
        max_bytes: int | None = None,
        backup_count: int = 3,
        encoding: str = "utf-8",
    ) -> None:
        self.path = Path(path)
        self.min_level = min_level
        self.max_bytes = max_bytes
        self.backup_count = max(0, backup_count)
        self.encoding = encoding
        self._formatter = formatter or format_text_line
        self._file: IO[bytes] | None = None
        self._lock = threading.Lock()

    def on_init(self, config: StylerConfig) -> None:
        with self._lock:
            self._open()

    def on_log(self, entry: LogEntry) -> None:
        data = (self._formatter(entry) + "\n").encode(self.encoding)
        with self._lock:
            handle = self._file or self._open()
            if self._should_rotate(handle, len(data)):
                handle = self._rotate()
            handle.write(data)
            handle.flush()

    def on_shutdown(self) -> None:
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def _open(self) -> IO[bytes]:
        if self._file is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, "ab")
        return self._file

    def _should_rotate(self, handle: IO[bytes], incoming: int) -> bool:
        if not self.max_bytes:
            return False
        size = handle.tell()
        return size > 0 and size + incoming > self.max_bytes

    def _rotate(self) -> IO[bytes]:
        if self._file is not None:
            self._file.close()
            self._file = None
        if self.backup_count == 0:
            self.path.unlink(missing_ok=True)
            return self._open()
        oldest = rotated_path(self.path, self.backup_count)
        oldest.unlink(missing_ok=True)
        for index in range(self.backup_count - 1, 0, -1):
            source = rotated_path(self.path, index)
            if source.exists():
                source.replace(rotated_path(self.path, index + 1))
        if self.path.exists():
            self.path.replace(rotated_path(self.path, 1))
        return self._open()


__all__ = ["FileOutput", "rotated_path"]
