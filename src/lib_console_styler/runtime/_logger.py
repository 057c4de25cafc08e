"""Structured logger facade.

Purpose
-------
Own one logger's configuration, history, console adapter and plugin registry
and expose the level methods, child loggers, history queries and lifecycle.

Contents
--------
* :class:`Logger` – the public logger object.

System Role
-----------
Outer shell over :func:`create_process_entry`, :func:`create_shutdown` and
:func:`create_capture_dump`. Calls on one logger are serialised by a
re-entrant lock so history order matches call order.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from datetime import datetime
from typing import Any, Callable, Mapping, Sequence

from lib_console_styler.adapters import DumpAdapter
from lib_console_styler.application.ports import ClockPort, PluginPort
from lib_console_styler.application.use_cases import create_capture_dump, create_process_entry, create_shutdown
from lib_console_styler.application.use_cases._isolation import plugin_label, run_isolated
from lib_console_styler.domain import DumpFormat, LogEntry, LoggerClosedError, LogLevel, RingBuffer, StylerConfig
from lib_console_styler.domain.layout import measure, repeat_to_width
from lib_console_styler.presentation.box import BoxRenderer
from lib_console_styler.presentation.context import StylerContext
from lib_console_styler.presentation.table import TableRenderer, TableRenderResult

from ._composition import SystemClock, build_outputs, create_console

LOGGER = logging.getLogger(__name__)

_REBUILD_KEYS = frozenset({"outputs", "plugins"})


class Logger:
    """Level-gated structured logger with history and plugins.

    Parameters
    ----------
    config:
        Immutable configuration; defaults to :class:`StylerConfig()`.
    context:
        Output context. When omitted one is detected for stdout.
    namespace:
        Dot-joined name stamped on every entry.
    clock:
        Timestamp source, replaceable in tests.
    """

    def __init__(
        self,
        config: StylerConfig | None = None,
        *,
        context: StylerContext | None = None,
        namespace: str = "",
        clock: ClockPort | None = None,
        _inherited: tuple[Sequence[PluginPort], Mapping[str, Callable[..., Any]]] | None = None,
    ) -> None:
        self._config = config or StylerConfig()
        self._base_context = context or StylerContext.from_environment()
        self._context = self._base_context.for_config(self._config)
        self._namespace = namespace
        self._clock = clock or SystemClock()
        self._lock = threading.RLock()
        self._closed = False
        self._history = RingBuffer(max_entries=self._config.max_history_size) if self._config.enable_history else None
        self._console = create_console(self._context, self._config)
        self._plugins: list[PluginPort] = []
        self._owned: list[PluginPort] = []
        self._capabilities: dict[str, Callable[..., Any]] = {}
        self._process = create_process_entry(
            namespace=namespace,
            min_level=self._config.log_level,
            ring_buffer=self._history,
            console=self._console,
            plugins=self._plugin_snapshot,
            clock=self._clock,
        )
        self._shutdown = create_shutdown(plugins=lambda: tuple(self._owned), console=self._console)
        self._capture = create_capture_dump(
            ring_buffer=self._history if self._history is not None else RingBuffer(max_entries=1),
            dump_port=DumpAdapter(date_format=self._config.date_format, time_format=self._config.timestamp_format),
        )
        if _inherited is not None:
            plugins, capabilities = _inherited
            self._plugins.extend(plugins)
            self._capabilities.update(capabilities)
        else:
            for plugin in [*build_outputs(self._config.outputs, self._context, self._config), *self._config.plugins]:
                self._register(plugin)

    @property
    def config(self) -> StylerConfig:
        return self._config

    @property
    def context(self) -> StylerContext:
        return self._context

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def plugins(self) -> tuple[PluginPort, ...]:
        return self._plugin_snapshot()

    def _plugin_snapshot(self) -> tuple[PluginPort, ...]:
        return tuple(self._plugins)

    # -- logging ---------------------------------------------------------

    def log(
        self,
        level: LogLevel | str | int,
        message: str,
        metadata: Mapping[str, Any] | None = None,
        *,
        category: str | None = None,
        request_id: str | None = None,
    ) -> LogEntry | None:
        """Record ``message`` at ``level``; returns the entry or ``None`` when filtered."""
        resolved = LogLevel.coerce(level)
        with self._lock:
            if self._closed:
                if self._config.after_shutdown == "raise":
                    raise LoggerClosedError(f"Logger {self._namespace or '<root>'!r} has been shut down")
                return None
            return self._process(resolved, message, metadata, category=category, request_id=request_id)

    def debug(self, message: str, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> LogEntry | None:
        return self.log(LogLevel.DEBUG, message, metadata, **kwargs)

    def info(self, message: str, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> LogEntry | None:
        return self.log(LogLevel.INFO, message, metadata, **kwargs)

    def success(self, message: str, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> LogEntry | None:
        return self.log(LogLevel.SUCCESS, message, metadata, **kwargs)

    def warning(self, message: str, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> LogEntry | None:
        return self.log(LogLevel.WARNING, message, metadata, **kwargs)

    def error(self, message: str, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> LogEntry | None:
        return self.log(LogLevel.ERROR, message, metadata, **kwargs)

    def critical(self, message: str, metadata: Mapping[str, Any] | None = None, **kwargs: Any) -> LogEntry | None:
        return self.log(LogLevel.CRITICAL, message, metadata, **kwargs)

    # -- hierarchy -------------------------------------------------------

    def child(self, namespace: str, **overrides: Any) -> "Logger":
        """Return a logger named ``<parent>.<namespace>`` with ``overrides`` applied.

        The child has its own history. It shares the parent's plugins unless
        ``outputs`` or ``plugins`` are overridden, in which case it builds and
        owns its own.
        """
        name = f"{self._namespace}.{namespace}" if self._namespace else namespace
        config = self._config.merged(**overrides)
        with self._lock:
            inherited = None if _REBUILD_KEYS & overrides.keys() else (tuple(self._plugins), dict(self._capabilities))
        return Logger(config, context=self._base_context, namespace=name, clock=self._clock, _inherited=inherited)

    # -- history ---------------------------------------------------------

    def get_history(self, min_level: LogLevel | str | None = None, since: datetime | None = None) -> list[LogEntry]:
        """Return a copy of the remembered entries, oldest first."""
        if self._history is None:
            return []
        level = LogLevel.coerce(min_level) if min_level is not None else None
        with self._lock:
            return self._history.snapshot(min_level=level, since=since)

    def clear_history(self) -> None:
        if self._history is not None:
            with self._lock:
                self._history.clear()

    def dump(
        self,
        dump_format: DumpFormat | str = DumpFormat.TEXT,
        *,
        min_level: LogLevel | str | None = None,
        colorize: bool = False,
        text_template: str | None = None,
    ) -> str:
        """Render the history as text, JSON or HTML without clearing it.

        ``text_template`` uses the placeholders of
        :func:`~lib_console_styler.adapters._formatting.build_format_payload`;
        ``{date}`` and ``{time}`` follow the configured formats.
        """
        level = LogLevel.coerce(min_level) if min_level is not None else None
        with self._lock:
            return self._capture(
                dump_format=DumpFormat.from_name(dump_format),
                min_level=level,
                colorize=colorize,
                text_template=text_template,
            )

    # -- plugins ---------------------------------------------------------

    def use(self, plugin: PluginPort) -> "Logger":
        """Register ``plugin`` and run its ``on_init`` hook now."""
        with self._lock:
            if self._closed:
                if self._config.after_shutdown == "raise":
                    raise LoggerClosedError("Cannot register plugins on a logger that has been shut down")
                return self
            self._register(plugin)
        return self

    def _register(self, plugin: PluginPort) -> None:
        provided: dict[str, Callable[..., Any]] = {}
        if hasattr(plugin, "capabilities"):
            ok, offered = run_isolated(plugin, "capabilities", plugin.capabilities, self._console)
            provided = dict(offered or {}) if ok else {}
        clashes = sorted(provided.keys() & self._capabilities.keys())
        if clashes:
            raise ValueError(f"Capability {clashes[0]!r} is already provided by another plugin")
        self._capabilities.update(provided)
        self._plugins.append(plugin)
        self._owned.append(plugin)
        run_isolated(plugin, "on_init", lambda: plugin.on_init(self._config), self._console)
        LOGGER.debug("Registered plugin %s on logger %r", plugin_label(plugin), self._namespace)

    def capability(self, name: str) -> Callable[..., Any] | None:
        """Return a callable a plugin registered under ``name``, if any."""
        return self._capabilities.get(name)

    # -- presentation ----------------------------------------------------

    def section(self, title: str) -> None:
        """Write a titled rule spanning the terminal width."""
        ctx = self._context
        rule = ctx.glyphs().horizontal
        label = f" {title} "
        left = 2
        right = max(0, ctx.width - left - measure(label))
        line = (
            ctx.colorize(repeat_to_width(rule, left), "muted")
            + ctx.colorize(label, ("primary", "bold"))
            + ctx.colorize(repeat_to_width(rule, right), "muted")
        )
        with self._lock:
            self._console.write_lines(["", line])

    def box(self, content: str | Sequence[str], **options: Any) -> None:
        lines = BoxRenderer(self._context).to_lines(content, **options)
        with self._lock:
            self._console.write_lines(lines)

    def table(self, rows: Sequence[Mapping[str, Any]], columns: Sequence[Any] | None = None, **options: Any) -> TableRenderResult:
        result = TableRenderer(self._context).render_result(rows, columns, **options)
        with self._lock:
            self._console.write_lines(result.lines)
        return result

    # -- lifecycle -------------------------------------------------------

    async def shutdown_async(self) -> None:
        """Close the logger and await every owned plugin's shutdown hook once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        await self._shutdown()

    def shutdown(self) -> None:
        """Synchronous wrapper around :meth:`shutdown_async`."""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self.shutdown_async())
            return
        raise RuntimeError("Logger.shutdown() cannot run inside an event loop; await shutdown_async() instead")

    def __repr__(self) -> str:
        return f"Logger(namespace={self._namespace!r}, level={self._config.log_level.name}, plugins={len(self._plugins)})"


__all__ = ["Logger"]
