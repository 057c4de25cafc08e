"""Use case orchestrating the processing pipeline for a single log call.

Purpose
-------
Gate by level, build the entry, remember it, render it to the console and fan
it out to plugins, in that order.

Contents
--------
* :func:`create_process_entry` factory returning the runtime callable.

System Role
-----------
Application-layer orchestrator invoked by the runtime logger; the logger
serialises calls so history order matches call order.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol

from lib_console_styler.application.ports import ClockPort, ConsolePort, PluginPort
from lib_console_styler.domain import LogEntry, LogLevel, RingBuffer

from ._isolation import run_isolated


class ProcessCallable(Protocol):
    def __call__(
        self,
        level: LogLevel,
        message: str,
        metadata: Mapping[str, Any] | None = None,
        *,
        category: str | None = None,
        request_id: str | None = None,
    ) -> LogEntry | None: ...


def _wants(plugin: Any, level: LogLevel) -> bool:
    threshold = getattr(plugin, "min_level", None)
    return threshold is None or level >= threshold


def create_process_entry(
    *,
    namespace: str,
    min_level: LogLevel,
    ring_buffer: RingBuffer | None,
    console: ConsolePort,
    plugins: Callable[[], Sequence[PluginPort]],
    clock: ClockPort,
) -> ProcessCallable:
    """Build the pipeline callable for one logger.

    Parameters
    ----------
    namespace:
        Dot-joined logger name stamped on each entry.
    min_level:
        Calls below this level return ``None`` before any work happens.
    ring_buffer:
        History buffer, or ``None`` when history is disabled.
    console:
        Primary console adapter.
    plugins:
        Returns the currently registered plugins in registration order.
    clock:
        Source of timezone-aware timestamps.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> class Console:
    ...     def __init__(self):
    ...         self.lines = []
    ...     def emit(self, entry):
    ...         self.lines.append(entry.message)
    ...     def notice(self, text):
    ...         self.lines.append(text)
    >>> class Clock:
    ...     def now(self):
    ...         return datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
    >>> console = Console()
    >>> ring = RingBuffer(max_entries=5)
    >>> process = create_process_entry(
    ...     namespace='app', min_level=LogLevel.INFO, ring_buffer=ring,
    ...     console=console, plugins=lambda: [], clock=Clock(),
    ... )
    >>> process(LogLevel.DEBUG, 'hidden') is None
    True
    >>> process(LogLevel.INFO, 'shown').namespace
    'app'
    >>> console.lines, len(ring)
    (['shown'], 1)
    """

    def process(
        level: LogLevel,
        message: str,
        metadata: Mapping[str, Any] | None = None,
        *,
        category: str | None = None,
        request_id: str | None = None,
    ) -> LogEntry | None:
        if level < min_level:
            return None
        entry = LogEntry(
            timestamp=clock.now(),
            level=level,
            message=str(message),
            metadata=metadata or {},
            namespace=namespace,
            category=category,
            request_id=request_id,
        )
        if ring_buffer is not None:
            ring_buffer.append(entry)
        console.emit(entry)
        for plugin in plugins():
            if _wants(plugin, level):
                run_isolated(plugin, "on_log", lambda plugin=plugin: plugin.on_log(entry), console)
        return entry

    return process


__all__ = ["ProcessCallable", "create_process_entry"]
