"""Dump format enumeration for history exports."""

from __future__ import annotations

from enum import Enum


class DumpFormat(Enum):
    """Supported history export formats."""

    TEXT = "text"
    JSON = "json"
    HTML = "html"

    @classmethod
    def from_name(cls, name: "DumpFormat | str") -> "DumpFormat":
        if isinstance(name, DumpFormat):
            return name
        try:
            return cls[name.strip().upper()]
        except KeyError as exc:
            raise ValueError(f"Unsupported dump format: {name!r}") from exc


__all__ = ["DumpFormat"]
