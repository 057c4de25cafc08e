"""Shutdown orchestration for a logger's plugins.

Purpose
-------
Run every plugin's ``on_shutdown`` hook in registration order, awaiting the
ones that return awaitables, with the same failure isolation as logging.
"""

from __future__ import annotations

import inspect
from typing import Awaitable, Callable, Sequence

from lib_console_styler.application.ports import ConsolePort, PluginPort

from ._isolation import report_failure, run_isolated


def create_shutdown(
    *,
    plugins: Callable[[], Sequence[PluginPort]],
    console: ConsolePort,
) -> Callable[[], Awaitable[None]]:
    """Return an async callable performing the shutdown sequence."""

    async def shutdown() -> None:
        """Flush and close each plugin; failures are reported and skipped."""
        for plugin in plugins():
            ok, result = run_isolated(plugin, "on_shutdown", plugin.on_shutdown, console)
            if ok and inspect.isawaitable(result):
                await _await_isolated(plugin, result, console)

    return shutdown


async def _await_isolated(plugin: PluginPort, pending: Awaitable[object], console: ConsolePort) -> None:
    try:
        await pending
    except Exception as exc:  # noqa: BLE001
        report_failure(plugin, "on_shutdown", exc, console)


__all__ = ["create_shutdown"]
