from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.levels import LogLevel
from lib_console_styler.domain.ring_buffer import RingBuffer

T0 = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)


def make_entry(message: str, level: LogLevel = LogLevel.INFO, offset: int = 0) -> LogEntry:
    return LogEntry(timestamp=T0 + timedelta(seconds=offset), level=level, message=message)


def test_entry_requires_timezone_aware_timestamp() -> None:
    with pytest.raises(ValueError, match="timezone-aware"):
        LogEntry(timestamp=datetime(2025, 1, 1), level=LogLevel.INFO, message="naive")


def test_entry_normalises_timestamp_to_utc() -> None:
    local = datetime(2025, 9, 30, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    entry = LogEntry(timestamp=local, level=LogLevel.INFO, message="x")
    assert entry.timestamp == T0
    assert entry.timestamp.tzinfo is timezone.utc


def test_entry_metadata_is_a_read_only_copy() -> None:
    source = {"user": "ada"}
    entry = LogEntry(timestamp=T0, level=LogLevel.INFO, message="x", metadata=source)
    source["user"] = "bob"
    assert entry.metadata["user"] == "ada"
    with pytest.raises(TypeError):
        entry.metadata["user"] = "eve"  # type: ignore[index]


def test_to_dict_round_trips_through_from_dict() -> None:
    entry = LogEntry(
        timestamp=T0,
        level=LogLevel.SUCCESS,
        message="deployed",
        metadata={"version": "1.2"},
        namespace="app.deploy",
        category="release",
        request_id="req-1",
    )
    payload = entry.to_dict()
    assert payload["level"] == "success"
    assert payload["timestamp"] == "2025-09-30T12:00:00+00:00"
    assert LogEntry.from_dict(payload) == entry


def test_to_dict_omits_unset_optional_fields() -> None:
    payload = make_entry("x").to_dict()
    assert "category" not in payload
    assert "request_id" not in payload


def test_to_json_falls_back_to_str_for_unknown_types() -> None:
    entry = LogEntry(timestamp=T0, level=LogLevel.INFO, message="x", metadata={"when": T0})
    assert json.loads(entry.to_json())["metadata"]["when"] == str(T0)


def test_ring_buffer_keeps_most_recent_entries_in_order() -> None:
    ring = RingBuffer(max_entries=3)
    for index, message in enumerate("abcd"):
        ring.append(make_entry(message, offset=index))
    assert [entry.message for entry in ring.snapshot()] == ["b", "c", "d"]
    assert len(ring) == 3


def test_ring_buffer_rejects_non_positive_capacity() -> None:
    with pytest.raises(ValueError):
        RingBuffer(max_entries=0)


def test_ring_buffer_snapshot_filters_by_level_and_time() -> None:
    ring = RingBuffer(max_entries=10)
    ring.append(make_entry("debug", LogLevel.DEBUG, 0))
    ring.append(make_entry("warn", LogLevel.WARNING, 1))
    ring.append(make_entry("error", LogLevel.ERROR, 2))
    assert [e.message for e in ring.snapshot(min_level=LogLevel.WARNING)] == ["warn", "error"]
    assert [e.message for e in ring.snapshot(since=T0 + timedelta(seconds=2))] == ["error"]


def test_ring_buffer_snapshot_is_a_copy() -> None:
    ring = RingBuffer(max_entries=2)
    ring.append(make_entry("a"))
    snapshot = ring.snapshot()
    ring.clear()
    assert [e.message for e in snapshot] == ["a"]
    assert len(ring) == 0


def test_ring_buffer_snapshot_accepts_naive_since_as_local_time() -> None:
    buffer = RingBuffer(max_entries=3)
    buffer.append(make_entry("old", offset=0))
    buffer.append(make_entry("new", offset=60))
    cutoff = (T0 + timedelta(seconds=30)).astimezone().replace(tzinfo=None)
    assert [entry.message for entry in buffer.snapshot(since=cutoff)] == ["new"]
    assert len(buffer.snapshot(since=datetime(2000, 1, 1))) == 2
