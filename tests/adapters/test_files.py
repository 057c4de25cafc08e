from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from lib_console_styler.adapters.files import FileOutput, rotated_path
from lib_console_styler.domain.config import StylerConfig
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.levels import LogLevel

T0 = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)


def make_entry(message: str, **kwargs) -> LogEntry:
    return LogEntry(timestamp=T0, level=kwargs.pop("level", LogLevel.INFO), message=message, **kwargs)


def test_default_line_format(tmp_path: Path) -> None:
    output = FileOutput(tmp_path / "app.log")
    output.on_init(StylerConfig())
    output.on_log(make_entry("ready", namespace="api", metadata={"port": 80}))
    output.on_log(make_entry("bare"))
    output.on_shutdown()
    lines = (tmp_path / "app.log").read_text(encoding="utf-8").splitlines()
    assert lines == [
        '[2025-09-30T12:00:00+00:00] INFO [api] ready {"port": 80}',
        "[2025-09-30T12:00:00+00:00] INFO bare",
    ]


def test_custom_formatter_and_missing_directory(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "deeper" / "app.log"
    output = FileOutput(target, formatter=lambda entry: f"{entry.level.code}|{entry.message}")
    output.on_log(make_entry("hello", level=LogLevel.ERROR))
    output.on_shutdown()
    assert target.read_text(encoding="utf-8") == f"{LogLevel.ERROR.code}|hello\n"


def test_rotates_before_exceeding_max_bytes(tmp_path: Path) -> None:
    path = tmp_path / "app.log"
    output = FileOutput(path, formatter=lambda entry: entry.message, max_bytes=10, backup_count=2)
    for message in ("aaaa", "bbbb", "cccc", "dddd", "eeee"):
        output.on_log(make_entry(message))
    output.on_shutdown()
    assert path.read_text() == "eeee\n"
    assert rotated_path(path, 1).read_text() == "cccc\ndddd\n"
    assert rotated_path(path, 2).read_text() == "aaaa\nbbbb\n"
    assert not rotated_path(path, 3).exists()


def test_zero_backups_truncates_in_place(tmp_path: Path) -> None:
    path = tmp_path / "app.log"
    output = FileOutput(path, formatter=lambda entry: entry.message, max_bytes=6, backup_count=0)
    output.on_log(make_entry("one"))
    output.on_log(make_entry("two"))
    output.on_shutdown()
    assert path.read_text() == "two\n"
    assert not rotated_path(path, 1).exists()


def test_oversized_first_line_is_still_written(tmp_path: Path) -> None:
    path = tmp_path / "app.log"
    output = FileOutput(path, formatter=lambda entry: entry.message, max_bytes=2)
    output.on_log(make_entry("longer than limit"))
    output.on_shutdown()
    assert path.read_text() == "longer than limit\n"
    assert not rotated_path(path, 1).exists()
