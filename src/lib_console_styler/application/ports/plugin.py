"""Plugin port describing the logger extension contract.

Purpose
-------
Define the lifecycle every plugin and output shares: ``on_init`` when
registered, ``on_log`` for each delivered entry, and ``on_shutdown`` (which may
be a coroutine) when the logger closes. Each hook may fail independently; the
logger isolates failures per call.

Contents
--------
* :class:`PluginPort` – runtime-checkable protocol.
* :class:`BasePlugin` – no-op base supplying defaults for optional parts.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Mapping, Protocol, runtime_checkable

from lib_console_styler.domain.config import StylerConfig
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.levels import LogLevel


@runtime_checkable
class PluginPort(Protocol):
    """Extension registered on a logger."""

    name: str
    version: str

    def on_init(self, config: StylerConfig) -> None: ...

    def on_log(self, entry: LogEntry) -> None: ...

    def on_shutdown(self) -> Awaitable[None] | None: ...

    def capabilities(self) -> Mapping[str, Callable[..., Any]]: ...


class BasePlugin:
    """Convenience base with no-op hooks and an optional level gate.

    ``min_level`` lets the logger skip ``on_log`` for entries the plugin does
    not want, which is how configured outputs apply their own thresholds.
    """

    name = "plugin"
    version = "0.0.0"
    min_level: LogLevel | None = None

    def on_init(self, config: StylerConfig) -> None:
        return None

    def on_log(self, entry: LogEntry) -> None:
        return None

    def on_shutdown(self) -> Awaitable[None] | None:
        return None

    def capabilities(self) -> Mapping[str, Callable[..., Any]]:
        return {}


__all__ = ["BasePlugin", "PluginPort"]
