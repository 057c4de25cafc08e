"""Composition helpers wiring configuration into live adapters.

Purpose
-------
Translate a :class:`StylerConfig` and a :class:`StylerContext` into the
console adapter and the output plugins a :class:`Logger` fans out to.

Contents
--------
* :class:`SystemClock` – UTC wall clock implementing :class:`ClockPort`.
* :func:`create_console` – styled console adapter for a context.
* :func:`create_output` / :func:`build_outputs` – :class:`LogOutput`
  descriptors to plugins.
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import Any, Sequence

from lib_console_styler.adapters import (
    ChatWebhookOutput,
    ConsoleLineFormatter,
    ConsoleOutput,
    FileOutput,
    JsonFileOutput,
    RemoteBatchOutput,
    StreamSink,
    StyledConsoleAdapter,
)
from lib_console_styler.domain.config import LogOutput, OutputKind, StylerConfig
from lib_console_styler.presentation.context import StylerContext


class SystemClock:
    """Concrete clock returning timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def create_console(context: StylerContext, config: StylerConfig) -> StyledConsoleAdapter:
    formatter = ConsoleLineFormatter(
        colors=context.colors,
        theme=context.theme,
        capabilities=context.capabilities,
        config=config,
    )
    return StyledConsoleAdapter(context.sink, formatter)


def _console_output(output: LogOutput, context: StylerContext, config: StylerConfig) -> ConsoleOutput:
    stream = output.options.get("stream")
    if stream is None and output.options.get("stderr", False):
        stream = sys.stderr
    target = context if stream is None else StylerContext(StreamSink(stream), env=context.env).for_config(config)
    return ConsoleOutput(create_console(target, config), min_level=output.min_level, formatter=output.formatter)


def create_output(output: LogOutput, context: StylerContext, config: StylerConfig) -> Any:
    """Build the plugin described by ``output``."""
    options = dict(output.options)
    if output.kind is OutputKind.CONSOLE:
        return _console_output(output, context, config)
    if output.kind is OutputKind.FILE:
        return FileOutput(
            options.pop("path"),
            min_level=output.min_level,
            formatter=output.formatter,
            **options,
        )
    if output.kind is OutputKind.JSON_FILE:
        return JsonFileOutput(options.pop("path"), min_level=output.min_level, **options)
    if output.kind is OutputKind.REMOTE:
        return RemoteBatchOutput(options.pop("url"), min_level=output.min_level, **options)
    if output.kind is OutputKind.WEBHOOK:
        return ChatWebhookOutput(options.pop("url"), min_level=output.min_level, **options)
    raise ValueError(f"Unsupported output kind: {output.kind}")  # pragma: no cover - exhaustiveness guard


def build_outputs(outputs: Sequence[LogOutput], context: StylerContext, config: StylerConfig) -> list[Any]:
    return [create_output(output, context, config) for output in outputs]


__all__ = ["SystemClock", "build_outputs", "create_console", "create_output"]
