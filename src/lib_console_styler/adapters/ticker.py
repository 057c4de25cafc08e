"""Background thread that calls a function at a fixed interval.

Drives spinner frames when the host application does not call ``tick``
itself. The thread is a daemon so a forgotten spinner never blocks exit.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

LOGGER = logging.getLogger(__name__)


class ThreadTicker:
    """Call ``callback`` every ``interval`` seconds until :meth:`stop`."""

    def __init__(self, callback: Callable[[], object], interval: float, *, name: str = "lib-console-styler-ticker") -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._callback = callback
        self._interval = interval
        self._name = name
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 1.0) -> None:
        self._stop_event.set()
        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self._callback()
            except Exception as exc:  # noqa: BLE001
                LOGGER.error("Ticker callback failed: %s", exc, exc_info=True)
                return


__all__ = ["ThreadTicker"]
