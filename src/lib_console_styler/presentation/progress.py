"""In-place progress bar.

The bar owns its output stream from the first update until ``complete``;
see :mod:`._animation`.
"""

from __future__ import annotations

import math

from lib_console_styler.domain.colors import ColorSpec
from lib_console_styler.domain.layout import measure

from . import _animation
from .context import StylerContext


class ProgressBar:
    """Fill ``round(current / total * width)`` cells of a fixed-width bar."""

    def __init__(
        self,
        context: StylerContext,
        total: float,
        *,
        width: int = 30,
        label: str = "",
        show_percent: bool = True,
        color: ColorSpec = "success",
    ) -> None:
        self._context = context
        self._total = float(total) if total > 0 else 0.0
        self._width = max(1, width)
        self._label = label
        self._show_percent = show_percent
        self._color = color
        self._current = 0.0
        self._started = False
        self._completed = False
        self._last_width = 0
        self._rendered = ""

    @property
    def current(self) -> float:
        return self._current

    @property
    def total(self) -> float:
        return self._total

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def rendered(self) -> str:
        """Text of the most recent render without the carriage return."""
        return self._rendered

    @property
    def ratio(self) -> float:
        if self._total <= 0:
            return 1.0 if self._completed else 0.0
        return self._current / self._total

    @property
    def filled(self) -> int:
        return min(self._width, int(math.floor(self.ratio * self._width + 0.5)))

    def render_line(self) -> str:
        unicode = self._context.unicode
        fill, empty = ("█", "░") if unicode else ("#", "-")
        filled = self.filled
        bar = self._context.colorize(fill * filled, self._color) + empty * (self._width - filled)
        parts = [self._label] if self._label else []
        parts.append(f"[{bar}]" if not unicode else bar)
        if self._show_percent:
            parts.append(f"{self.ratio * 100:5.1f}%")
        return " ".join(parts)

    def start(self) -> "ProgressBar":
        if not self._started:
            _animation.claim(self._context.sink, self)
            self._started = True
            self._draw()
        return self

    def update(self, current: float) -> None:
        """Move to ``current`` clamped to ``[0, total]`` and redraw in place."""
        if self._completed:
            return
        self.start()
        self._current = min(max(0.0, float(current)), self._total)
        self._draw()

    def increment(self, step: float = 1) -> None:
        self.update(self._current + step)

    def complete(self) -> None:
        """Fill the bar, end the line and release the stream; later calls do nothing."""
        if self._completed:
            return
        self.start()
        self._current = self._total
        self._completed = True
        self._draw()
        self._context.write("\n")
        _animation.release(self._context.sink, self)

    def _draw(self) -> None:
        line = self.render_line()
        width = measure(line)
        trailing = " " * max(0, self._last_width - width)
        self._context.write(f"\r{line}{trailing}")
        self._last_width = width
        self._rendered = line

    def __enter__(self) -> "ProgressBar":
        return self.start()

    def __exit__(self, *exc: object) -> None:
        self.complete()


__all__ = ["ProgressBar"]
