"""Log level abstraction with presentation metadata.

Purpose
-------
Offer a totally ordered severity scale that extends the stdlib levels with a
``success`` step between ``info`` and ``warning``.

Contents
--------
* :class:`LogLevel` enum with conversion helpers and presentation metadata.
* ``_ICON_TABLE`` / ``_CODE_TABLE`` constants mapping levels to glyphs and
  four-letter codes.

System Role
-----------
Used by the logger core to gate calls before any work happens and by the
console formatter and output plugins to label entries.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Enumerated logging levels used throughout the system."""

    DEBUG = 10
    INFO = 20
    SUCCESS = 25
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value >= other.value

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured payloads."""

        return self.name.lower()

    @property
    def icon(self) -> str:
        """Return the unicode icon visualizing the level on rich consoles."""

        return _ICON_TABLE[self]

    @property
    def code(self) -> str:
        """Return the fixed-width four letter code used by compact formats."""

        return _CODE_TABLE[self]

    def to_python_level(self) -> int:
        """Return the :mod:`logging` integer matching this level.

        ``SUCCESS`` has no stdlib constant and maps to ``INFO + 5``.
        """

        return self.value if self is LogLevel.SUCCESS else getattr(logging, self.name)

    @classmethod
    def coerce(cls, value: "LogLevel | str | int") -> "LogLevel":
        """Accept a level, a name, or a numeric value."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, int):
            return cls.from_numeric(value)
        return cls.from_name(value)

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        if normalized == "WARN":
            normalized = "WARNING"
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` corresponding to ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc


_ICON_TABLE = {
    LogLevel.DEBUG: "⊙",
    LogLevel.INFO: "ⓘ",
    LogLevel.SUCCESS: "✓",
    LogLevel.WARNING: "⚠",
    LogLevel.ERROR: "✗",
    LogLevel.CRITICAL: "☠",
}
# Console glyphs displayed next to the level label.

_CODE_TABLE = {
    LogLevel.DEBUG: "DEBG",
    LogLevel.INFO: "INFO",
    LogLevel.SUCCESS: "SUCC",
    LogLevel.WARNING: "WARN",
    LogLevel.ERROR: "ERRO",
    LogLevel.CRITICAL: "CRIT",
}


__all__ = ["LogLevel"]
