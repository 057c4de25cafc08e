"""Ring buffer storing the most recent log entries.

Purpose
-------
Provide bounded in-memory history so callers can inspect recent entries
without relying on external sinks.

Contents
--------
* :class:`RingBuffer` with filtered snapshot helpers.
"""

from __future__ import annotations

from collections import deque
from datetime import datetime, timezone
from typing import Deque, Iterator

from .entry import LogEntry
from .levels import LogLevel


class RingBuffer:
    """Fixed-size FIFO retaining the most recent :class:`LogEntry` objects."""

    def __init__(self, *, max_entries: int) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._max_entries = max_entries
        self._buffer: Deque[LogEntry] = deque(maxlen=max_entries)

    @property
    def max_entries(self) -> int:
        """Return the configured capacity."""

        return self._max_entries

    def append(self, entry: LogEntry) -> None:
        """Append an entry, evicting the oldest one on overflow."""

        self._buffer.append(entry)

    def snapshot(self, *, min_level: LogLevel | None = None, since: datetime | None = None) -> list[LogEntry]:
        """Return a filtered copy of the buffer from oldest to newest."""

        entries = list(self._buffer)
        if min_level is not None:
            entries = [entry for entry in entries if entry.level >= min_level]
        if since is not None:
            # naive values are local wall-clock time
            cutoff = since.astimezone(timezone.utc)
            entries = [entry for entry in entries if entry.timestamp >= cutoff]
        return entries

    def __iter__(self) -> Iterator[LogEntry]:
        """Iterate over buffered entries from oldest to newest."""
        return iter(list(self._buffer))

    def __len__(self) -> int:
        return len(self._buffer)

    def clear(self) -> None:
        """Remove all buffered entries."""
        self._buffer.clear()


__all__ = ["RingBuffer"]
