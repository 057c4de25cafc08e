"""Immutable structured log entry.

Purpose
-------
Provide the serialisable record created by every accepted log call and shared
with history, the console formatter and every output plugin.

Contents
--------
* :class:`LogEntry` frozen dataclass with dict/JSON helpers.
* ``_ensure_aware`` timestamp validation helper.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogEntry:
    """One accepted log call.

    Attributes
    ----------
    timestamp:
        Time of the call in timezone-aware UTC.
    level:
        :class:`LogLevel` severity of the call.
    message:
        Rendered message passed by the caller.
    metadata:
        Read-only copy of caller-supplied key/value pairs.
    namespace:
        Dot-joined logger ancestry, empty for a root logger.
    category, request_id:
        Optional grouping and correlation identifiers.
    """

    timestamp: datetime
    level: LogLevel
    message: str
    metadata: Mapping[str, Any] = field(default_factory=dict)
    namespace: str = ""
    category: str | None = None
    request_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entry to a dictionary with an ISO8601 timestamp."""

        data: dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.severity,
            "message": self.message,
            "metadata": dict(self.metadata),
            "namespace": self.namespace,
        }
        if self.category is not None:
            data["category"] = self.category
        if self.request_id is not None:
            data["request_id"] = self.request_id
        return data

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialize the entry to JSON; unknown metadata types fall back to ``str``."""

        return json.dumps(self.to_dict(), default=str, ensure_ascii=False, indent=indent)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "LogEntry":
        """Reconstruct an entry from :meth:`to_dict` output."""

        return cls(
            timestamp=datetime.fromisoformat(payload["timestamp"]),
            level=LogLevel.from_name(payload["level"]),
            message=payload["message"],
            metadata=payload.get("metadata", {}),
            namespace=payload.get("namespace", ""),
            category=payload.get("category"),
            request_id=payload.get("request_id"),
        )


__all__ = ["LogEntry"]
