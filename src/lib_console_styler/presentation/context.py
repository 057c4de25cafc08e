"""Explicit rendering context handed to every renderer and logger.

Purpose
-------
Replace process-wide default themes and detectors with one object that owns
the output sink, the detected capabilities, the theme and the colour engine.

Contents
--------
* :class:`StylerContext` – sink + capabilities + theme + colour engine.
"""

from __future__ import annotations

from typing import IO, Iterable

from lib_console_styler.adapters.terminal import OsEnvReader, StreamSink, detect_capabilities
from lib_console_styler.application.ports.terminal import ByteSink, EnvReader
from lib_console_styler.domain.capabilities import Capabilities
from lib_console_styler.domain.colors import ColorEngine, ColorSpec
from lib_console_styler.domain.config import StylerConfig
from lib_console_styler.domain.theme import BorderStyle, BoxGlyphs, DEFAULT_THEME, Theme


class StylerContext:
    """Everything a renderer needs to turn data into terminal bytes."""

    def __init__(
        self,
        sink: ByteSink,
        *,
        capabilities: Capabilities | None = None,
        theme: Theme = DEFAULT_THEME,
        env: EnvReader | None = None,
    ) -> None:
        self._sink = sink
        self._env = env or OsEnvReader()
        self._detected = capabilities if capabilities is not None else detect_capabilities(self._env, sink)
        self._capabilities = self._detected
        self._theme = theme
        self._colors = ColorEngine(self._capabilities.color, roles=theme.colors)

    @classmethod
    def from_environment(
        cls,
        stream: IO[str] | IO[bytes] | None = None,
        *,
        env: EnvReader | None = None,
        config: StylerConfig | None = None,
    ) -> "StylerContext":
        """Build a context for ``stream`` (stdout by default) from env signals."""
        context = cls(StreamSink(stream), env=env)
        return context.for_config(config) if config is not None else context

    def for_config(self, config: StylerConfig) -> "StylerContext":
        """Return a context on the same sink with ``config``'s modes and theme applied."""
        derived = StylerContext(self._sink, capabilities=self._detected, theme=config.theme, env=self._env)
        derived._capabilities = self._detected.with_modes(
            color=config.color_mode,
            unicode=config.unicode_mode,
            emoji=config.emoji_mode,
        )
        derived._colors = ColorEngine(derived._capabilities.color, roles=config.theme.colors)
        return derived

    @property
    def sink(self) -> ByteSink:
        return self._sink

    @property
    def env(self) -> EnvReader:
        return self._env

    @property
    def capabilities(self) -> Capabilities:
        return self._capabilities

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def colors(self) -> ColorEngine:
        return self._colors

    @property
    def width(self) -> int:
        return self._capabilities.width

    @property
    def unicode(self) -> bool:
        return self._capabilities.unicode

    def colorize(self, text: str, spec: ColorSpec) -> str:
        """Colour ``text`` with a theme role, colour name, hex string or :class:`Color`."""
        return self._colors.colorize(text, spec)

    def symbol(self, role: str) -> str:
        return self._theme.symbol(role, unicode=self._capabilities.unicode, emoji=self._capabilities.emoji)

    def glyphs(self, style: BorderStyle | str | None = None) -> BoxGlyphs:
        if not self._capabilities.unicode:
            return self._theme.glyphs(BorderStyle.ASCII)
        return self._theme.glyphs(style)

    def write(self, text: str) -> None:
        self._sink.write(text.encode("utf-8"))

    def write_line(self, text: str = "") -> None:
        self.write(text + "\n")

    def write_lines(self, lines: Iterable[str]) -> None:
        payload = "".join(f"{line}\n" for line in lines)
        if payload:
            self.write(payload)


__all__ = ["StylerContext"]
