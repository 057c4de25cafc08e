"""Use case exporting history through a dump adapter.

Purpose
-------
Provide the application-layer glue between the ring buffer and the dump
adapter. Unlike a flush, dumping leaves the history untouched.
"""

from __future__ import annotations

from typing import Callable

from lib_console_styler.application.ports.dump import DumpPort
from lib_console_styler.domain import RingBuffer
from lib_console_styler.domain.dump import DumpFormat
from lib_console_styler.domain.levels import LogLevel


def create_capture_dump(
    *,
    ring_buffer: RingBuffer,
    dump_port: DumpPort,
) -> Callable[..., str]:
    """Return a callable rendering the current history snapshot.

    Examples
    --------
    >>> class DummyDump(DumpPort):
    ...     def __init__(self):
    ...         self.calls = []
    ...     def dump(self, entries, *, dump_format, min_level=None, colorize=False, text_template=None):
    ...         self.calls.append((len(list(entries)), dump_format, min_level, colorize))
    ...         return 'payload'
    >>> ring = RingBuffer(max_entries=5)
    >>> dump_port = DummyDump()
    >>> capture = create_capture_dump(ring_buffer=ring, dump_port=dump_port)
    >>> capture(dump_format=DumpFormat.TEXT)
    'payload'
    >>> dump_port.calls[0][1] is DumpFormat.TEXT
    True
    """

    def capture(
        *,
        dump_format: DumpFormat,
        min_level: LogLevel | None = None,
        colorize: bool = False,
        text_template: str | None = None,
    ) -> str:
        return dump_port.dump(
            ring_buffer.snapshot(),
            dump_format=dump_format,
            min_level=min_level,
            colorize=colorize,
            text_template=text_template,
        )

    return capture


__all__ = ["create_capture_dump"]
