"""Domain entities and value objects used by the styling and logging core."""

from __future__ import annotations

from .capabilities import Capabilities
from .colors import Color, ColorEngine, ColorTier
from .config import ConfigBuilder, LogOutput, Mode, OutputKind, StylerConfig
from .dump import DumpFormat
from .entry import LogEntry
from .errors import (
    AnimationInUse,
    InvalidColorCode,
    InvalidColorComponent,
    InvalidHexColor,
    LoggerClosedError,
    StylerError,
)
from .levels import LogLevel
from .ring_buffer import RingBuffer
from .theme import BorderStyle, BoxGlyphs, Theme

__all__ = [
    "AnimationInUse",
    "BorderStyle",
    "BoxGlyphs",
    "Capabilities",
    "Color",
    "ColorEngine",
    "ColorTier",
    "ConfigBuilder",
    "DumpFormat",
    "InvalidColorCode",
    "InvalidColorComponent",
    "InvalidHexColor",
    "LogEntry",
    "LogLevel",
    "LogOutput",
    "LoggerClosedError",
    "Mode",
    "OutputKind",
    "RingBuffer",
    "StylerConfig",
    "StylerError",
    "Theme",
]
