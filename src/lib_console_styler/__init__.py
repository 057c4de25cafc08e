"""Terminal styling and structured logging toolkit.

Colour handling degrades truecolor requests to what the terminal supports,
layout helpers measure display cells rather than code points, renderers draw
boxes, tables, charts, banners and animations, and :class:`Logger` records
structured entries, keeps a bounded history and fans entries out to plugins.

Everything that writes output takes an explicit :class:`StylerContext`;
:func:`default_context` builds one for stdout from the environment.
"""

from __future__ import annotations

from .adapters import (
    ChatWebhookOutput,
    FileOutput,
    JsonFileOutput,
    MappingEnvReader,
    MemorySink,
    OsEnvReader,
    RemoteBatchOutput,
    StreamSink,
)
from .application.ports import BasePlugin, ByteSink, EnvReader, PluginPort
from .domain import (
    AnimationInUse,
    BorderStyle,
    Capabilities,
    Color,
    ColorEngine,
    ColorTier,
    ConfigBuilder,
    DumpFormat,
    InvalidColorCode,
    InvalidColorComponent,
    InvalidHexColor,
    LogEntry,
    LoggerClosedError,
    LogLevel,
    LogOutput,
    Mode,
    RingBuffer,
    StylerConfig,
    StylerError,
    Theme,
)
from .domain.colors import bg_color256, color256, create_gradient, hex_to_rgb, hex_to_rgb_bg, rgb, rgb_bg, strip_ansi
from .domain.layout import measure, pad, truncate, wrap
from .domain.theme import DEFAULT_THEME, DRACULA_THEME, MINIMAL_THEME, get_theme
from .presentation import (
    BannerRenderer,
    BoxOptions,
    BoxRenderer,
    ChartDatum,
    ChartRenderer,
    ProgressBar,
    Spinner,
    StylerContext,
    TableColumn,
    TableOptions,
    TableRenderResult,
    TableRenderer,
)
from .runtime import Logger, create_logger, default_context

__all__ = [
    "AnimationInUse",
    "BannerRenderer",
    "BasePlugin",
    "BorderStyle",
    "BoxOptions",
    "BoxRenderer",
    "ByteSink",
    "Capabilities",
    "ChartDatum",
    "ChartRenderer",
    "ChatWebhookOutput",
    "Color",
    "ColorEngine",
    "ColorTier",
    "ConfigBuilder",
    "DEFAULT_THEME",
    "DRACULA_THEME",
    "DumpFormat",
    "EnvReader",
    "FileOutput",
    "InvalidColorCode",
    "InvalidColorComponent",
    "InvalidHexColor",
    "JsonFileOutput",
    "LogEntry",
    "LogLevel",
    "LogOutput",
    "Logger",
    "LoggerClosedError",
    "MINIMAL_THEME",
    "MappingEnvReader",
    "MemorySink",
    "Mode",
    "OsEnvReader",
    "PluginPort",
    "ProgressBar",
    "RemoteBatchOutput",
    "RingBuffer",
    "Spinner",
    "StreamSink",
    "StylerConfig",
    "StylerContext",
    "StylerError",
    "TableColumn",
    "TableOptions",
    "TableRenderResult",
    "TableRenderer",
    "Theme",
    "bg_color256",
    "color256",
    "create_gradient",
    "create_logger",
    "default_context",
    "get_theme",
    "hex_to_rgb",
    "hex_to_rgb_bg",
    "measure",
    "pad",
    "rgb",
    "rgb_bg",
    "strip_ansi",
    "truncate",
    "wrap",
]
