from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from lib_console_styler.adapters.dump import DumpAdapter
from lib_console_styler.domain.dump import DumpFormat
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.levels import LogLevel

T0 = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)

ENTRIES = [
    LogEntry(timestamp=T0, level=LogLevel.DEBUG, message="noise"),
    LogEntry(timestamp=T0, level=LogLevel.WARNING, message="careful", namespace="db", metadata={"table": "users"}),
]


def test_text_dump_uses_the_default_template() -> None:
    text = DumpAdapter().dump(ENTRIES, dump_format=DumpFormat.TEXT, min_level=LogLevel.INFO)
    assert text == "2025-09-30T12:00:00+00:00 WARNING  db careful table=users"


def test_custom_template() -> None:
    adapter = DumpAdapter(text_template="{hh}:{mm} {level_code} {message}")
    lines = adapter.dump(ENTRIES, dump_format=DumpFormat.TEXT).splitlines()
    assert lines[1] == f"12:00 {LogLevel.WARNING.code} careful"


def test_unknown_placeholder_is_reported() -> None:
    with pytest.raises(ValueError, match="placeholder"):
        DumpAdapter(text_template="{nope}").dump(ENTRIES, dump_format=DumpFormat.TEXT)


def test_coloured_text_dump_adds_ansi() -> None:
    text = DumpAdapter().dump(ENTRIES, dump_format=DumpFormat.TEXT, colorize=True)
    assert "\x1b[" in text
    assert "careful" in text


def test_json_dump_is_an_indented_array() -> None:
    payload = DumpAdapter().dump(ENTRIES, dump_format=DumpFormat.JSON)
    records = json.loads(payload)
    assert [record["level"] for record in records] == ["debug", "warning"]
    assert payload.startswith("[\n  {")


def test_html_dump_is_a_document() -> None:
    html = DumpAdapter().dump(ENTRIES, dump_format=DumpFormat.HTML, min_level=LogLevel.WARNING)
    assert "<html" in html.lower()
    assert "careful" in html
    assert "noise" not in html


def test_empty_selection() -> None:
    assert DumpAdapter().dump([], dump_format=DumpFormat.TEXT) == ""
    assert DumpAdapter().dump([], dump_format=DumpFormat.JSON) == "[]"
