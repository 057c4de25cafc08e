"""Ports describing the host collaborators the core depends on.

Purpose
-------
The styling core needs only a byte sink to write to and a way to read
environment variables. Everything else (prompts, argument parsing, demo
content) stays outside.

Contents
--------
* :class:`ByteSink` – ``write(bytes)``.
* :class:`TerminalStream` – a sink that can also report tty status and size.
* :class:`EnvReader` – ``read_env(name)`` accessor.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteSink(Protocol):
    """Destination for rendered bytes."""

    def write(self, data: bytes) -> object: ...


@runtime_checkable
class TerminalStream(ByteSink, Protocol):
    """Sink that can describe the terminal behind it."""

    encoding: str | None

    def isatty(self) -> bool: ...

    def terminal_size(self) -> tuple[int, int] | None: ...


@runtime_checkable
class EnvReader(Protocol):
    """Read a single environment variable."""

    def read_env(self, name: str) -> str | None: ...


__all__ = ["ByteSink", "EnvReader", "TerminalStream"]
