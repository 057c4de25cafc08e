"""Protocols the application layer depends on."""

from __future__ import annotations

from .console import ConsolePort
from .dump import DumpPort
from .plugin import BasePlugin, PluginPort
from .terminal import ByteSink, EnvReader, TerminalStream
from .time import ClockPort, MonotonicPort

__all__ = [
    "BasePlugin",
    "ByteSink",
    "ClockPort",
    "ConsolePort",
    "DumpPort",
    "EnvReader",
    "MonotonicPort",
    "PluginPort",
    "TerminalStream",
]
