from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from lib_console_styler.adapters.dump import DumpAdapter
from lib_console_styler.application.ports.plugin import BasePlugin
from lib_console_styler.application.use_cases import create_capture_dump, create_process_entry, create_shutdown
from lib_console_styler.domain.dump import DumpFormat
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.levels import LogLevel
from lib_console_styler.domain.ring_buffer import RingBuffer


@dataclass
class RecordingConsole:
    entries: list[LogEntry] = field(default_factory=list)
    notices: list[str] = field(default_factory=list)

    def emit(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    def notice(self, text: str) -> None:
        self.notices.append(text)


class Recorder(BasePlugin):
    def __init__(self, name: str, journal: list[str], *, min_level: LogLevel | None = None) -> None:
        self.name = name
        self.journal = journal
        self.min_level = min_level

    def on_log(self, entry: LogEntry) -> None:
        self.journal.append(f"{self.name}:{entry.message}")


class Exploding(BasePlugin):
    name = "exploding"

    def on_log(self, entry: LogEntry) -> None:
        raise RuntimeError("boom")

    def on_shutdown(self) -> None:
        raise RuntimeError("close failed")


def make_process(clock, *, plugins=(), min_level: LogLevel = LogLevel.DEBUG, ring: RingBuffer | None = None):
    console = RecordingConsole()
    process = create_process_entry(
        namespace="svc",
        min_level=min_level,
        ring_buffer=ring,
        console=console,
        plugins=lambda: list(plugins),
        clock=clock,
    )
    return process, console


def test_entries_below_the_threshold_do_nothing(clock) -> None:
    journal: list[str] = []
    ring = RingBuffer(max_entries=5)
    process, console = make_process(clock, plugins=[Recorder("r", journal)], min_level=LogLevel.WARNING, ring=ring)
    assert process(LogLevel.INFO, "quiet") is None
    assert (console.entries, journal, len(ring)) == ([], [], 0)


def test_entry_fields_are_stamped(clock) -> None:
    process, _ = make_process(clock)
    entry = process(LogLevel.INFO, "hello", {"k": 1}, category="auth", request_id="abc")
    assert entry is not None
    assert entry.namespace == "svc"
    assert entry.metadata == {"k": 1}
    assert (entry.category, entry.request_id) == ("auth", "abc")


def test_plugins_follow_registration_order_and_their_own_threshold(clock) -> None:
    journal: list[str] = []
    plugins = [Recorder("first", journal), Recorder("errors", journal, min_level=LogLevel.ERROR), Recorder("last", journal)]
    process, _ = make_process(clock, plugins=plugins)
    process(LogLevel.INFO, "a")
    process(LogLevel.ERROR, "b")
    assert journal == ["first:a", "last:a", "first:b", "errors:b", "last:b"]


def test_failing_plugin_is_isolated_and_reported(clock) -> None:
    journal: list[str] = []
    ring = RingBuffer(max_entries=5)
    process, console = make_process(clock, plugins=[Exploding(), Recorder("after", journal)], ring=ring)
    process(LogLevel.INFO, "still delivered")
    assert journal == ["after:still delivered"]
    assert len(console.notices) == 1
    assert "exploding" in console.notices[0]
    assert "boom" in console.notices[0]
    assert [entry.message for entry in ring] == ["still delivered"]
    assert [entry.message for entry in console.entries] == ["still delivered"]


def test_shutdown_awaits_async_hooks_and_isolates_failures() -> None:
    journal: list[str] = []

    class AsyncFlush(BasePlugin):
        name = "async"

        async def on_shutdown(self) -> None:
            await asyncio.sleep(0)
            journal.append("flushed")

    class FailingAsync(BasePlugin):
        name = "failing-async"

        async def on_shutdown(self) -> None:
            raise ValueError("late failure")

    console = RecordingConsole()
    shutdown = create_shutdown(plugins=lambda: [Exploding(), FailingAsync(), AsyncFlush()], console=console)
    asyncio.run(shutdown())
    assert journal == ["flushed"]
    assert len(console.notices) == 2
    assert "on_shutdown" in console.notices[1]


def test_capture_dump_keeps_history(clock) -> None:
    ring = RingBuffer(max_entries=5)
    process, _ = make_process(clock, ring=ring)
    process(LogLevel.DEBUG, "one")
    process(LogLevel.ERROR, "two")
    capture = create_capture_dump(ring_buffer=ring, dump_port=DumpAdapter(text_template="{message}"))
    assert capture(dump_format=DumpFormat.TEXT, min_level=LogLevel.INFO) == "two"
    assert capture(dump_format=DumpFormat.TEXT) == "one\ntwo"
    assert len(ring) == 2
