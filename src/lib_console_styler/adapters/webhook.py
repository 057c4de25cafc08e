"""Chat webhook output for incoming-webhook style chat services.

Each delivered entry becomes one JSON POST ``{"text", "channel"?,
"username"?, "icon"}``. Critical entries start with a mention so they
page whoever watches the channel. Request failures propagate; the logger
isolates them like any other plugin failure.
"""

from __future__ import annotations

from typing import Any, Mapping

import httpx

from lib_console_styler.application.ports.plugin import BasePlugin
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.levels import LogLevel

_LEVEL_ICONS: Mapping[LogLevel, str] = {
    LogLevel.DEBUG: ":mag:",
    LogLevel.INFO: ":information_source:",
    LogLevel.SUCCESS: ":white_check_mark:",
    LogLevel.WARNING: ":warning:",
    LogLevel.ERROR: ":x:",
    LogLevel.CRITICAL: ":rotating_light:",
}


class ChatWebhookOutput(BasePlugin):
    """Post one chat message per delivered entry to ``url``.

    ``icon`` overrides the per-level icon; ``mention`` prefixes critical
    messages and ``None`` disables it.
    """

    name = "webhook"
    version = "1.0.0"

    def __init__(
        self,
        url: str,
        *,
        min_level: LogLevel | None = LogLevel.WARNING,
        channel: str | None = None,
        username: str | None = None,
        icon: str | None = None,
        mention: str | None = "<!channel>",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url
        self.min_level = min_level
        self.channel = channel
        self.username = username
        self.icon = icon
        self.mention = mention
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.Client(transport=transport)

    def build_payload(self, entry: LogEntry) -> dict[str, Any]:
        """Return the JSON body posted for ``entry``."""
        header = f"*{entry.level.name}*"
        if entry.namespace:
            header += f" [{entry.namespace}]"
        text = f"{header} {entry.message}"
        if entry.metadata:
            details = "\n".join(f"• {key}: {value}" for key, value in entry.metadata.items())
            text = f"{text}\n{details}"
        if entry.level is LogLevel.CRITICAL and self.mention:
            text = f"{self.mention} {text}"
        payload: dict[str, Any] = {"text": text, "icon": self.icon or _LEVEL_ICONS[entry.level]}
        if self.channel:
            payload["channel"] = self.channel
        if self.username:
            payload["username"] = self.username
        return payload

    def on_log(self, entry: LogEntry) -> None:
        response = self._client.post(self.url, json=self.build_payload(entry), timeout=self.timeout)
        response.raise_for_status()

    def on_shutdown(self) -> None:
        if self._owns_client:
            self._client.close()


__all__ = ["ChatWebhookOutput"]
