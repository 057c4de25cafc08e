"""Runtime facade: logger construction and context factories.

Purpose
-------
Expose the entry points host applications use (:func:`create_logger`,
:func:`default_context`) instead of importing the inner layers. Nothing here
installs process-wide state; every logger and renderer receives its context
explicitly.
"""

from __future__ import annotations

from typing import IO

from lib_console_styler.adapters.terminal import OsEnvReader
from lib_console_styler.application.ports import ClockPort, EnvReader
from lib_console_styler.domain import StylerConfig
from lib_console_styler.presentation.context import StylerContext

from ._composition import SystemClock, build_outputs, create_console, create_output
from ._logger import Logger


def default_context(
    stream: IO[str] | IO[bytes] | None = None,
    *,
    env: EnvReader | None = None,
    config: StylerConfig | None = None,
) -> StylerContext:
    """Detect capabilities for ``stream`` (stdout by default) from the environment.

    Examples
    --------
    >>> import io
    >>> from lib_console_styler.adapters.terminal import MappingEnvReader
    >>> ctx = default_context(io.StringIO(), env=MappingEnvReader({"NO_COLOR": "1"}))
    >>> ctx.colors.enabled
    False
    """
    return StylerContext.from_environment(stream, env=env or OsEnvReader(), config=config)


def create_logger(
    config: StylerConfig | None = None,
    *,
    context: StylerContext | None = None,
    namespace: str = "",
    clock: ClockPort | None = None,
) -> Logger:
    """Build a root :class:`Logger`, detecting a stdout context when none is given."""
    return Logger(config, context=context, namespace=namespace, clock=clock)


__all__ = [
    "Logger",
    "SystemClock",
    "build_outputs",
    "create_console",
    "create_logger",
    "create_output",
    "default_context",
]
