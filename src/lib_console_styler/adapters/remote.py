"""Batched HTTP log shipping.

Purpose
-------
Buffer entries and POST them as JSON batches to a collector, flushing when
the buffer reaches ``batch_size``, on a timer and at shutdown.

Contents
--------
* :class:`RemoteStats` – counters exposed for monitoring.
* :class:`RemoteBatchOutput` – output plugin built on :mod:`httpx`.

System Role
-----------
Sends never block the logging call: batches are handed to a single worker
thread, which also keeps batches in submission order. Failed batches are
retried with exponential back-off and dropped once retries are exhausted;
a batch whose payload cannot be built is dropped at once. Every drop logs
one warning and reaches ``on_error``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import asdict, dataclass
from typing import Any, Callable, Mapping, Sequence

import httpx

from lib_console_styler.application.ports.plugin import BasePlugin
from lib_console_styler.domain.config import StylerConfig
from lib_console_styler.domain.entry import LogEntry
from lib_console_styler.domain.levels import LogLevel

LOGGER = logging.getLogger(__name__)

MAX_RETRY_DELAY = 30.0

PayloadTransform = Callable[[Sequence[LogEntry]], Any]
ErrorCallback = Callable[[Exception, Sequence[LogEntry]], None]
SuccessCallback = Callable[[httpx.Response, Sequence[LogEntry]], None]


class RemoteDeliveryError(Exception):
    """A collector answered with a non-success status."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"HTTP {status_code} from {url}")
        self.status_code = status_code


@dataclass
class RemoteStats:
    """Delivery counters; ``buffer_size`` is the number of entries not yet sent."""

    sent_batches: int = 0
    sent_entries: int = 0
    failed_batches: int = 0
    dropped_entries: int = 0
    attempts: int = 0
    buffer_size: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def retry_delay_for(attempt: int, base: float) -> float:
    """Delay before retry number ``attempt`` (1-based), doubling up to a cap.

    >>> [retry_delay_for(n, 1.0) for n in (1, 2, 3)]
    [1.0, 2.0, 4.0]
    >>> retry_delay_for(10, 1.0)
    30.0
    """
    return min(MAX_RETRY_DELAY, base * (2 ** (attempt - 1)))


class RemoteBatchOutput(BasePlugin):
    """Ship entries to ``url`` in JSON batches.

    ``retries`` counts additional attempts after the first, so ``retries=1``
    means at most two requests per batch. ``flush_interval=None`` disables the
    timer; batches then leave only when full, on :meth:`flush` or at shutdown.
    """

    name = "remote"
    version = "1.0.0"

    def __init__(
        self,
        url: str,
        *,
        method: str = "POST",
        headers: Mapping[str, str] | None = None,
        api_key: str | None = None,
        batch_size: int = 10,
        flush_interval: float | None = 5.0,
        retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 10.0,
        min_level: LogLevel | None = None,
        transform: PayloadTransform | None = None,
        on_error: ErrorCallback | None = None,
        on_success: SuccessCallback | None = None,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if retries < 0:
            raise ValueError("retries must not be negative")
        self.url = url
        self.method = method.upper()
        self.batch_size = batch_size
        self.flush_interval = flush_interval
        self.retries = retries
        self.retry_delay = retry_delay
        self.timeout = timeout
        self.min_level = min_level
        self._transform = transform
        self._on_error = on_error
        self._on_success = on_success
        self._sleep = sleep
        self._headers = {"Content-Type": "application/json", **dict(headers or {})}
        if api_key:
            self._headers["Authorization"] = f"Bearer {api_key}"
        self._owns_client = client is None
        self._client = client or httpx.Client(transport=transport)
        self._buffer: list[LogEntry] = []
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="lib-console-styler-remote")
        self._pending: set[Future[bool]] = set()
        self._stop_event = threading.Event()
        self._timer: threading.Thread | None = None
        self._closed = False
        self.stats = RemoteStats()

    def on_init(self, config: StylerConfig) -> None:
        if self.flush_interval and self._timer is None:
            self._timer = threading.Thread(target=self._run_timer, name="lib-console-styler-remote-timer", daemon=True)
            self._timer.start()

    def on_log(self, entry: LogEntry) -> None:
        with self._lock:
            if self._closed:
                return
            self._buffer.append(entry)
            self.stats.buffer_size = len(self._buffer)
            if len(self._buffer) < self.batch_size:
                return
            batch = self._take_buffer()
        self._submit(batch)

    def flush(self, *, wait_for_delivery: bool = True) -> None:
        """Send whatever is buffered now."""
        with self._lock:
            batch = self._take_buffer()
        future = self._submit(batch) if batch else None
        if not wait_for_delivery:
            return
        if future is not None:
            future.result()
        else:
            self._drain()

    async def on_shutdown(self) -> None:
        self._stop_event.set()
        timer = self._timer
        self._timer = None
        if timer is not None:
            await asyncio.to_thread(timer.join)
        with self._lock:
            self._closed = True
            batch = self._take_buffer()
        if batch:
            self._submit(batch)
        await asyncio.to_thread(self._close)

    def _take_buffer(self) -> list[LogEntry]:
        batch, self._buffer = self._buffer, []
        self.stats.buffer_size = 0
        return batch

    def _submit(self, batch: list[LogEntry]) -> Future[bool]:
        future = self._executor.submit(self._send, batch)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return future

    def _forget(self, future: Future[bool]) -> None:
        with self._lock:
            self._pending.discard(future)

    def _drain(self) -> None:
        with self._lock:
            pending = list(self._pending)
        wait(pending)

    def _close(self) -> None:
        self._drain()
        self._executor.shutdown(wait=True)
        if self._owns_client:
            self._client.close()

    def _run_timer(self) -> None:
        interval = self.flush_interval or 0.0
        while not self._stop_event.wait(interval):
            with self._lock:
                batch = self._take_buffer()
            if batch:
                self._submit(batch)

    def _payload(self, batch: Sequence[LogEntry]) -> bytes:
        body = self._transform(batch) if self._transform is not None else [entry.to_dict() for entry in batch]
        return json.dumps(body, default=str, ensure_ascii=False).encode("utf-8")

    def _send(self, batch: list[LogEntry]) -> bool:
        try:
            content = self._payload(batch)
        except Exception as exc:  # noqa: BLE001
            return self._drop(batch, exc, "could not be encoded")
        last_error: Exception | None = None
        for attempt in range(self.retries + 1):
            if attempt:
                self._sleep(retry_delay_for(attempt, self.retry_delay))
            self.stats.attempts += 1
            try:
                response = self._client.request(self.method, self.url, content=content, headers=self._headers, timeout=self.timeout)
            except Exception as exc:  # noqa: BLE001
                last_error = exc
                LOGGER.debug("Remote log delivery attempt %d failed: %s", attempt + 1, exc)
                continue
            if response.is_success:
                self.stats.sent_batches += 1
                self.stats.sent_entries += len(batch)
                self._notify(self._on_success, response, batch)
                return True
            last_error = RemoteDeliveryError(response.status_code, self.url)
            LOGGER.debug("Remote log delivery attempt %d failed: %s", attempt + 1, last_error)
        return self._drop(batch, last_error, f"after {self.retries + 1} attempts")

    def _drop(self, batch: Sequence[LogEntry], error: Exception | None, reason: str) -> bool:
        self.stats.failed_batches += 1
        self.stats.dropped_entries += len(batch)
        LOGGER.warning("Dropping %d log entries for %s %s: %s", len(batch), self.url, reason, error)
        self._notify(self._on_error, error, batch)
        return False

    @staticmethod
    def _notify(callback: Callable[[Any, Sequence[LogEntry]], None] | None, subject: Any, batch: Sequence[LogEntry]) -> None:
        if callback is None:
            return
        try:
            callback(subject, batch)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Remote log callback failed: %s", exc, exc_info=True)


__all__ = ["MAX_RETRY_DELAY", "RemoteBatchOutput", "RemoteDeliveryError", "RemoteStats", "retry_delay_for"]
