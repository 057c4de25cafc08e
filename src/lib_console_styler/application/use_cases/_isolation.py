"""Run plugin hooks so that one failing plugin cannot affect the others."""

from __future__ import annotations

import logging
from typing import Any, Callable

from lib_console_styler.application.ports.console import ConsolePort

logger = logging.getLogger(__name__)


def plugin_label(plugin: Any) -> str:
    return str(getattr(plugin, "name", None) or type(plugin).__name__)


def run_isolated(plugin: Any, hook: str, call: Callable[[], Any], console: ConsolePort) -> tuple[bool, Any]:
    """Invoke ``call``; on failure write one console notice and return ``(False, None)``.

    The notice goes straight to the console port. It is not a log entry, so
    it never reaches history or other plugins and cannot recurse.
    """
    try:
        return True, call()
    except Exception as exc:  # noqa: BLE001
        report_failure(plugin, hook, exc, console)
        return False, None


def report_failure(plugin: Any, hook: str, exc: BaseException, console: ConsolePort) -> None:
    console.notice(f"Plugin {plugin_label(plugin)!r} failed in {hook}: {exc}")
    logger.debug("Plugin %s failed in %s", plugin_label(plugin), hook, exc_info=exc)


__all__ = ["plugin_label", "report_failure", "run_isolated"]
