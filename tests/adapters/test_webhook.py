from __future__ import annotations

import json
from datetime import datetime, timezone

import httpx
import pytest

from lib_console_styler.adapters.webhook import ChatWebhookOutput
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.levels import LogLevel

T0 = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
URL = "https://hooks.example/T000/B000"


def make_entry(level: LogLevel, message: str = "disk full", **kwargs) -> LogEntry:
    return LogEntry(timestamp=T0, level=level, message=message, **kwargs)


def test_payload_contains_text_channel_and_icon() -> None:
    output = ChatWebhookOutput(URL, channel="#ops", username="bot")
    payload = output.build_payload(make_entry(LogLevel.ERROR, namespace="api", metadata={"host": "db1"}))
    assert payload == {
        "text": "*ERROR* [api] disk full\n• host: db1",
        "icon": ":x:",
        "channel": "#ops",
        "username": "bot",
    }


def test_critical_entries_mention_the_channel() -> None:
    payload = ChatWebhookOutput(URL).build_payload(make_entry(LogLevel.CRITICAL))
    assert payload["text"].startswith("<!channel> *CRITICAL*")
    assert "channel" not in payload


def test_mention_can_be_disabled() -> None:
    payload = ChatWebhookOutput(URL, mention=None, icon=":fire:").build_payload(make_entry(LogLevel.CRITICAL))
    assert payload["text"] == "*CRITICAL* disk full"
    assert payload["icon"] == ":fire:"


def test_on_log_posts_json() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="ok")

    output = ChatWebhookOutput(URL, transport=httpx.MockTransport(handler))
    output.on_log(make_entry(LogLevel.WARNING))
    output.on_shutdown()
    assert str(seen[0].url) == URL
    assert json.loads(seen[0].content)["text"] == "*WARNING* disk full"


def test_failed_post_raises() -> None:
    output = ChatWebhookOutput(URL, transport=httpx.MockTransport(lambda request: httpx.Response(404)))
    with pytest.raises(httpx.HTTPStatusError):
        output.on_log(make_entry(LogLevel.ERROR))


def test_defaults_to_warning_threshold() -> None:
    assert ChatWebhookOutput(URL).min_level is LogLevel.WARNING
