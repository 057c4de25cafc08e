"""Frame-cycling spinner with a single final status line.

The spinner is driven by :meth:`Spinner.tick`, either from the host's own
loop or from a :class:`~lib_console_styler.adapters.ticker.ThreadTicker`
when started with ``background=True``.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Sequence

from lib_console_styler.adapters.ticker import ThreadTicker
from lib_console_styler.domain.colors import ColorSpec
from lib_console_styler.domain.layout import measure

from . import _animation
from .context import StylerContext

DOTS_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
ASCII_FRAMES = ("|", "/", "-", "\\")


class Spinner:
    """Animated status indicator.

    Exactly one of :meth:`stop`, :meth:`succeed`, :meth:`fail`, :meth:`warn`
    or :meth:`info` ends the spinner; it prints one status line and every
    later call is ignored.
    """

    def __init__(
        self,
        context: StylerContext,
        text: str = "",
        *,
        frames: Sequence[str] | None = None,
        interval: float = 0.08,
        color: ColorSpec = "primary",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._context = context
        self._text = text
        self._frames = tuple(frames) if frames else (DOTS_FRAMES if context.unicode else ASCII_FRAMES)
        self._interval = interval
        self._color = color
        self._clock = clock
        self._lock = threading.RLock()
        self._frame = 0
        self._last_tick = 0.0
        self._last_width = 0
        self._running = False
        self._finished = False
        self._ticker: ThreadTicker | None = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def frame(self) -> str:
        return self._frames[self._frame]

    @property
    def text(self) -> str:
        return self._text

    def start(self, *, background: bool = False) -> "Spinner":
        with self._lock:
            if self._running or self._finished:
                return self
            _animation.claim(self._context.sink, self)
            self._running = True
            self._last_tick = self._clock()
            self._draw()
        if background:
            self._ticker = ThreadTicker(self.tick, self._interval, name="lib-console-styler-spinner")
            self._ticker.start()
        return self

    def tick(self) -> bool:
        """Advance one frame if the interval has elapsed; return whether it redrew."""
        with self._lock:
            if not self._running:
                return False
            now = self._clock()
            if now - self._last_tick < self._interval:
                return False
            self._last_tick = now
            self._frame = (self._frame + 1) % len(self._frames)
            self._draw()
            return True

    def update_text(self, text: str) -> None:
        with self._lock:
            self._text = text
            if self._running:
                self._draw()

    def stop(self, text: str | None = None, *, symbol: str | None = None, color: ColorSpec = None) -> None:
        ticker = self._ticker
        self._ticker = None
        if ticker is not None:
            ticker.stop()
        with self._lock:
            if self._finished:
                return
            self._finished = True
            was_running = self._running
            self._running = False
            message = self._text if text is None else text
            prefix = f"{self._context.colorize(symbol, color)} " if symbol else ""
            line = f"{prefix}{message}"
            trailing = " " * max(0, self._last_width - measure(line))
            self._context.write(f"\r{line}{trailing}\n" if was_running else f"{line}\n")
            if was_running:
                _animation.release(self._context.sink, self)

    def succeed(self, text: str | None = None) -> None:
        self.stop(text, symbol=self._context.symbol("success"), color="success")

    def fail(self, text: str | None = None) -> None:
        self.stop(text, symbol=self._context.symbol("error"), color="error")

    def warn(self, text: str | None = None) -> None:
        self.stop(text, symbol=self._context.symbol("warning"), color="warning")

    def info(self, text: str | None = None) -> None:
        self.stop(text, symbol=self._context.symbol("info"), color="info")

    def _draw(self) -> None:
        line = f"{self._context.colorize(self.frame, self._color)} {self._text}"
        width = measure(line)
        trailing = " " * max(0, self._last_width - width)
        self._context.write(f"\r{line}{trailing}")
        self._last_width = width

    def __enter__(self) -> "Spinner":
        return self.start()

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        if exc_type is None:
            self.succeed()
        else:
            self.fail()


__all__ = ["ASCII_FRAMES", "DOTS_FRAMES", "Spinner"]
