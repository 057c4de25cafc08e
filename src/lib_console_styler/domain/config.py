"""Styler configuration value objects and their fluent builder.

Purpose
-------
Capture every knob of a logger (colour/emoji/unicode modes, formats, widths,
level gate, history, outputs, theme, plugins) in one frozen value built once
and copied-with-overrides for child loggers.

Contents
--------
* :class:`Mode` – auto/enabled/disabled tri-state.
* :class:`OutputKind` / :class:`LogOutput` – sink descriptors.
* :class:`StylerConfig` – immutable configuration.
* :class:`ConfigBuilder` – fluent construction with validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Mapping, Sequence

from .entry import LogEntry
from .levels import LogLevel
from .theme import DEFAULT_THEME, Theme, get_theme


class Mode(Enum):
    AUTO = "auto"
    ENABLED = "enabled"
    DISABLED = "disabled"

    @classmethod
    def coerce(cls, value: "Mode | str | bool") -> "Mode":
        if isinstance(value, Mode):
            return value
        if isinstance(value, bool):
            return cls.ENABLED if value else cls.DISABLED
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on", "always", "force"}:
            return cls.ENABLED
        if normalized in {"0", "false", "no", "off", "never"}:
            return cls.DISABLED
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError(f"Unknown mode: {value!r}") from exc


class OutputKind(Enum):
    CONSOLE = "console"
    FILE = "file"
    JSON_FILE = "json_file"
    REMOTE = "remote"
    WEBHOOK = "webhook"


EntryFormatter = Callable[[LogEntry], str]


@dataclass(frozen=True)
class LogOutput:
    """Sink descriptor resolved into a concrete output at logger construction.

    Attributes
    ----------
    kind:
        Which sink family to build.
    min_level:
        Entries below this level are not delivered; ``None`` accepts all.
    formatter:
        Optional entry → line override for text sinks.
    options:
        Kind-specific settings (path, url, batch size, ...).
    """

    kind: OutputKind
    min_level: LogLevel | None = None
    formatter: EntryFormatter | None = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def accepts(self, level: LogLevel) -> bool:
        return self.min_level is None or level >= self.min_level

    @classmethod
    def console(
        cls,
        *,
        min_level: LogLevel | str | None = None,
        formatter: EntryFormatter | None = None,
        stderr: bool = False,
        stream: Any = None,
    ) -> "LogOutput":
        """Extra console destination; ``stderr=True`` or ``stream`` pick the target."""
        return cls(OutputKind.CONSOLE, _level_or_none(min_level), formatter, {"stderr": stderr, "stream": stream})

    @classmethod
    def file(
        cls,
        path: str | Path,
        *,
        min_level: LogLevel | str | None = None,
        formatter: EntryFormatter | None = None,
        max_bytes: int | None = None,
        backup_count: int = 3,
    ) -> "LogOutput":
        options = {"path": Path(path), "max_bytes": max_bytes, "backup_count": backup_count}
        return cls(OutputKind.FILE, _level_or_none(min_level), formatter, options)

    @classmethod
    def json_file(cls, path: str | Path, *, min_level: LogLevel | str | None = None, pretty: bool = False) -> "LogOutput":
        return cls(OutputKind.JSON_FILE, _level_or_none(min_level), None, {"path": Path(path), "pretty": pretty})

    @classmethod
    def remote(cls, url: str, *, min_level: LogLevel | str | None = None, **options: Any) -> "LogOutput":
        return cls(OutputKind.REMOTE, _level_or_none(min_level), None, {"url": url, **options})

    @classmethod
    def webhook(cls, url: str, *, min_level: LogLevel | str | None = LogLevel.WARNING, **options: Any) -> "LogOutput":
        return cls(OutputKind.WEBHOOK, _level_or_none(min_level), None, {"url": url, **options})


def _level_or_none(level: LogLevel | str | None) -> LogLevel | None:
    return None if level is None else LogLevel.coerce(level)


@dataclass(frozen=True)
class StylerConfig:
    """Immutable configuration shared (by value) across a logger hierarchy."""

    color_mode: Mode = Mode.AUTO
    emoji_mode: Mode = Mode.AUTO
    unicode_mode: Mode = Mode.AUTO
    timestamp_format: str = "%H:%M:%S"
    date_format: str = "%Y-%m-%d"
    show_timestamp: bool = True
    indent_size: int = 2
    max_line_width: int | None = None
    log_level: LogLevel = LogLevel.DEBUG
    enable_history: bool = True
    max_history_size: int = 1000
    outputs: tuple[LogOutput, ...] = ()
    theme: Theme = DEFAULT_THEME
    plugins: tuple[Any, ...] = ()
    after_shutdown: str = "ignore"

    def __post_init__(self) -> None:
        object.__setattr__(self, "outputs", tuple(self.outputs))
        object.__setattr__(self, "plugins", tuple(self.plugins))
        if self.after_shutdown not in {"ignore", "raise"}:
            raise ValueError("after_shutdown must be 'ignore' or 'raise'")

    def merged(self, **overrides: Any) -> "StylerConfig":
        """Return a copy with ``overrides`` shallow-merged in."""
        if "log_level" in overrides:
            overrides["log_level"] = LogLevel.coerce(overrides["log_level"])
        for key in ("color_mode", "emoji_mode", "unicode_mode"):
            if key in overrides:
                overrides[key] = Mode.coerce(overrides[key])
        return replace(self, **overrides)


class ConfigBuilder:
    """Fluent builder producing a validated :class:`StylerConfig`.

    >>> config = ConfigBuilder().log_level("warning").history(size=3).build()
    >>> config.log_level.name, config.max_history_size
    ('WARNING', 3)
    """

    def __init__(self, base: StylerConfig | None = None) -> None:
        self._values: dict[str, Any] = {}
        self._outputs: list[LogOutput] = list(base.outputs) if base else []
        self._plugins: list[Any] = list(base.plugins) if base else []
        self._base = base or StylerConfig()

    def color_mode(self, mode: Mode | str | bool) -> "ConfigBuilder":
        self._values["color_mode"] = Mode.coerce(mode)
        return self

    def emoji_mode(self, mode: Mode | str | bool) -> "ConfigBuilder":
        self._values["emoji_mode"] = Mode.coerce(mode)
        return self

    def unicode_mode(self, mode: Mode | str | bool) -> "ConfigBuilder":
        self._values["unicode_mode"] = Mode.coerce(mode)
        return self

    def timestamp_format(self, fmt: str, *, show: bool = True) -> "ConfigBuilder":
        self._values["timestamp_format"] = fmt
        self._values["show_timestamp"] = show
        return self

    def date_format(self, fmt: str) -> "ConfigBuilder":
        self._values["date_format"] = fmt
        return self

    def indent_size(self, size: int) -> "ConfigBuilder":
        if size < 0:
            raise ValueError("indent_size must not be negative")
        self._values["indent_size"] = size
        return self

    def max_line_width(self, width: int | None) -> "ConfigBuilder":
        if width is not None and width <= 0:
            raise ValueError("max_line_width must be positive")
        self._values["max_line_width"] = width
        return self

    def log_level(self, level: LogLevel | str | int) -> "ConfigBuilder":
        self._values["log_level"] = LogLevel.coerce(level)
        return self

    def history(self, *, enabled: bool = True, size: int | None = None) -> "ConfigBuilder":
        if size is not None and size <= 0:
            raise ValueError("history size must be positive")
        self._values["enable_history"] = enabled
        if size is not None:
            self._values["max_history_size"] = size
        return self

    def output(self, output: LogOutput) -> "ConfigBuilder":
        self._outputs.append(output)
        return self

    def outputs(self, outputs: Sequence[LogOutput]) -> "ConfigBuilder":
        self._outputs = list(outputs)
        return self

    def theme(self, theme: Theme | str) -> "ConfigBuilder":
        self._values["theme"] = get_theme(theme) if isinstance(theme, str) else theme
        return self

    def plugin(self, plugin: Any) -> "ConfigBuilder":
        self._plugins.append(plugin)
        return self

    def after_shutdown(self, policy: str) -> "ConfigBuilder":
        self._values["after_shutdown"] = policy
        return self

    def build(self) -> StylerConfig:
        return replace(self._base, outputs=tuple(self._outputs), plugins=tuple(self._plugins), **self._values)


__all__ = [
    "ConfigBuilder",
    "EntryFormatter",
    "LogOutput",
    "Mode",
    "OutputKind",
    "StylerConfig",
]
