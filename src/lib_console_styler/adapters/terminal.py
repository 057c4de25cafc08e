"""Terminal adapters: byte sinks, environment readers and capability detection.

Purpose
-------
Bridge real streams and ``os.environ`` to the ports the core depends on and
classify what the terminal can display.

Contents
--------
* :class:`StreamSink` / :class:`MemorySink` – :class:`TerminalStream` adapters.
* :class:`OsEnvReader` / :class:`MappingEnvReader` – :class:`EnvReader` adapters.
* :func:`detect_color_support`, :func:`supports_unicode`,
  :func:`supports_emoji`, :func:`get_terminal_width`,
  :func:`get_terminal_height`, :func:`detect_capabilities`.

System Role
-----------
The only module that touches process-wide state (environment, file
descriptors). Detection runs once per :class:`StylerContext`.
"""

from __future__ import annotations

import io
import os
import sys
from typing import IO, Mapping

from lib_console_styler.application.ports.terminal import ByteSink, EnvReader, TerminalStream
from lib_console_styler.domain.capabilities import DEFAULT_HEIGHT, DEFAULT_WIDTH, Capabilities
from lib_console_styler.domain.colors import ColorTier

_TRUECOLOR_VALUES = frozenset({"truecolor", "24bit"})
_LOCALE_VARS = ("LC_ALL", "LC_CTYPE", "LANG")


class StreamSink:
    """Write bytes to a text or binary stream such as ``sys.stdout``."""

    def __init__(self, stream: IO[str] | IO[bytes] | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    @property
    def stream(self) -> IO[str] | IO[bytes]:
        return self._stream

    @property
    def encoding(self) -> str | None:
        return getattr(self._stream, "encoding", None)

    def write(self, data: bytes) -> None:
        target = getattr(self._stream, "buffer", None)
        if target is not None:
            self._stream.flush()
            target.write(data)
            target.flush()
            return
        if isinstance(self._stream, (io.RawIOBase, io.BufferedIOBase)):
            self._stream.write(data)
        else:
            self._stream.write(data.decode(self.encoding or "utf-8", errors="replace"))  # type: ignore[arg-type]
        self._stream.flush()

    def isatty(self) -> bool:
        try:
            return bool(self._stream.isatty())
        except (AttributeError, ValueError):
            return False

    def terminal_size(self) -> tuple[int, int] | None:
        if not self.isatty():
            return None
        try:
            size = os.get_terminal_size(self._stream.fileno())
        except (AttributeError, OSError, ValueError):
            return None
        return size.columns, size.lines


class MemorySink:
    """In-memory sink recording every write; useful for capture and tests."""

    def __init__(self, *, tty: bool = False, size: tuple[int, int] | None = None, encoding: str | None = "utf-8") -> None:
        self._chunks: list[bytes] = []
        self._tty = tty
        self._size = size
        self.encoding = encoding

    def write(self, data: bytes) -> None:
        self._chunks.append(bytes(data))

    def isatty(self) -> bool:
        return self._tty

    def terminal_size(self) -> tuple[int, int] | None:
        return self._size

    @property
    def writes(self) -> list[bytes]:
        return list(self._chunks)

    def getvalue(self) -> str:
        return b"".join(self._chunks).decode("utf-8")

    def clear(self) -> None:
        self._chunks.clear()


class OsEnvReader:
    """Read variables from ``os.environ`` at call time."""

    def read_env(self, name: str) -> str | None:
        return os.environ.get(name)


class MappingEnvReader:
    """Read variables from a fixed mapping."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def read_env(self, name: str) -> str | None:
        return self._values.get(name)


def _env(env: EnvReader, name: str) -> str:
    return (env.read_env(name) or "").strip()


def detect_color_support(env: EnvReader) -> ColorTier:
    """Classify the colour tier from environment signals.

    ``NO_COLOR`` wins, then ``COLORTERM`` truecolor, then a 256-colour
    ``TERM``, then any other non-dumb ``TERM``.

    >>> detect_color_support(MappingEnvReader({"TERM": "xterm-256color"})).name
    'ANSI_256'
    """
    if _env(env, "NO_COLOR"):
        return ColorTier.NONE
    if _env(env, "COLORTERM").lower() in _TRUECOLOR_VALUES:
        return ColorTier.TRUECOLOR
    term = _env(env, "TERM").lower()
    if "256color" in term:
        return ColorTier.ANSI_256
    if term and term != "dumb":
        return ColorTier.BASIC
    return ColorTier.NONE


def supports_unicode(env: EnvReader, encoding: str | None = None) -> bool:
    """Return ``True`` when the locale or stream encoding is UTF-8."""
    for name in _LOCALE_VARS:
        value = _env(env, name)
        if value:
            normalized = value.lower().replace("-", "")
            return "utf8" in normalized
    if encoding:
        return encoding.lower().replace("-", "") == "utf8"
    return False


def supports_emoji(env: EnvReader, encoding: str | None = None) -> bool:
    """Emoji need unicode and a terminal other than the Linux console."""
    return supports_unicode(env, encoding) and _env(env, "TERM").lower() != "linux"


def get_terminal_width(sink: ByteSink) -> int:
    size = sink.terminal_size() if isinstance(sink, TerminalStream) else None
    return size[0] if size and size[0] > 0 else DEFAULT_WIDTH


def get_terminal_height(sink: ByteSink) -> int:
    size = sink.terminal_size() if isinstance(sink, TerminalStream) else None
    return size[1] if size and size[1] > 0 else DEFAULT_HEIGHT


def detect_capabilities(env: EnvReader, sink: ByteSink) -> Capabilities:
    """Snapshot colour, glyph and viewport capabilities for ``sink``."""
    encoding = sink.encoding if isinstance(sink, TerminalStream) else None
    return Capabilities(
        color=detect_color_support(env),
        unicode=supports_unicode(env, encoding),
        emoji=supports_emoji(env, encoding),
        width=get_terminal_width(sink),
        height=get_terminal_height(sink),
    )


__all__ = [
    "MappingEnvReader",
    "MemorySink",
    "OsEnvReader",
    "StreamSink",
    "detect_capabilities",
    "detect_color_support",
    "get_terminal_height",
    "get_terminal_width",
    "supports_emoji",
    "supports_unicode",
]
