"""Text charts: horizontal bars, sparklines, line plots and pie summaries.

Every chart is a pure ``*_lines`` function returning strings plus a
``render_*`` counterpart that writes them to the context sink.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from lib_console_styler.domain.colors import ColorSpec
from lib_console_styler.domain.layout import fit, measure, pad

from .context import StylerContext

SPARK_GLYPHS = "▁▂▃▄▅▆▇█"
SPARK_GLYPHS_ASCII = " .:-=+*#"
_PALETTE = ("primary", "success", "warning", "error", "info", "accent", "secondary")


@dataclass(frozen=True)
class ChartDatum:
    """One labelled value; ``color=None`` takes the next palette colour."""

    label: str
    value: float
    color: ColorSpec = None

    @classmethod
    def coerce(cls, value: "ChartDatum | Mapping[str, Any] | tuple[str, float]") -> "ChartDatum":
        if isinstance(value, ChartDatum):
            return value
        if isinstance(value, Mapping):
            return cls(str(value["label"]), float(value["value"]), value.get("color"))
        label, number = value
        return cls(str(label), float(number))


ChartData = Sequence["ChartDatum | Mapping[str, Any] | tuple[str, float]"]


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def bar_length(value: float, maximum: float, width: int) -> int:
    """Cells for one bar: ``round(value / maximum * width)``, never negative.

    >>> bar_length(5, 10, 10)
    5
    """
    if maximum <= 0 or value <= 0 or width <= 0:
        return 0
    return min(width, int(math.floor(value / maximum * width + 0.5)))


def _downsample(numbers: list[float], width: int | None) -> list[float]:
    if width is None or width < 1 or len(numbers) <= width:
        return numbers
    size = len(numbers) / width
    buckets = [numbers[int(i * size) : max(int(i * size) + 1, int((i + 1) * size))] for i in range(width)]
    return [sum(bucket) / len(bucket) for bucket in buckets]


def _format_value(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:.2f}".rstrip("0").rstrip(".")


class ChartRenderer:
    """Draw charts with the capabilities of a :class:`StylerContext`."""

    def __init__(self, context: StylerContext) -> None:
        self._context = context

    @property
    def _fill(self) -> str:
        return "█" if self._context.unicode else "#"

    def bar_chart_lines(
        self,
        data: ChartData,
        *,
        width: int = 40,
        show_values: bool = True,
        label_width: int | None = None,
        color: ColorSpec = "primary",
    ) -> list[str]:
        """One line per datum: label, bar of at most ``width`` cells, value."""
        items = [ChartDatum.coerce(item) for item in data]
        if not items:
            return []
        values = [_finite(item.value) for item in items]
        maximum = max(values)
        labels = label_width if label_width is not None else min(20, max(measure(item.label) for item in items))
        value_width = max(measure(_format_value(v)) for v in values)
        lines = []
        for item, value in zip(items, values):
            bar = self._fill * bar_length(value, maximum, width)
            painted = self._context.colorize(bar, item.color or color)
            line = f"{fit(item.label, labels)} {painted}{' ' * (width - measure(bar))}"
            if show_values:
                line += f" {pad(_format_value(value), value_width, 'right')}"
            lines.append(line)
        return lines

    def sparkline(self, values: Sequence[float], *, color: ColorSpec = None) -> str:
        """One glyph per value, scaled between the series minimum and maximum.

        A constant series maps every value to the same middle glyph.
        """
        glyphs = SPARK_GLYPHS if self._context.unicode else SPARK_GLYPHS_ASCII
        numbers = [_finite(float(v)) for v in values]
        if not numbers:
            return ""
        low, high = min(numbers), max(numbers)
        top = len(glyphs) - 1
        if high == low:
            text = glyphs[top // 2] * len(numbers)
        else:
            text = "".join(glyphs[int(math.floor((v - low) / (high - low) * top))] for v in numbers)
        return self._context.colorize(text, color) if color else text

    def line_chart_lines(
        self,
        values: Sequence[float],
        *,
        height: int = 8,
        width: int | None = None,
        color: ColorSpec = "primary",
        show_axis: bool = True,
    ) -> list[str]:
        """Plot one point per value on a ``height``-row grid with a y axis.

        Series longer than ``width`` are averaged down to ``width`` columns.
        Consecutive points more than one row apart are joined by a vertical
        stroke.
        """
        numbers = _downsample([_finite(float(v)) for v in values], width)
        if not numbers or height < 1:
            return []
        low, high = min(numbers), max(numbers)
        span = high - low
        rows = [[" "] * len(numbers) for _ in range(height)]
        point = "●" if self._context.unicode else "*"
        stroke = "│" if self._context.unicode else "|"
        previous: int | None = None
        for column, value in enumerate(numbers):
            level = (height - 1) // 2 if span == 0 else int(round((value - low) / span * (height - 1)))
            if previous is not None:
                for between in range(min(previous, level) + 1, max(previous, level)):
                    rows[height - 1 - between][column] = stroke
            rows[height - 1 - level][column] = point
            previous = level
        axis_labels = [_format_value(high), _format_value(low)]
        label_width = max(measure(label) for label in axis_labels)
        vertical = self._context.glyphs().vertical
        lines = []
        for index, cells in enumerate(rows):
            plot = self._context.colorize("".join(cells), color)
            if not show_axis:
                lines.append(plot)
                continue
            if index == 0:
                label = axis_labels[0]
            elif index == height - 1:
                label = axis_labels[1]
            else:
                label = ""
            lines.append(f"{pad(label, label_width, 'right')} {vertical}{plot}")
        if show_axis:
            glyphs = self._context.glyphs()
            lines.append(f"{' ' * label_width} {glyphs.bottom_left}{glyphs.horizontal * len(numbers)}")
        return lines

    def pie_chart_lines(self, data: ChartData, *, width: int = 20) -> list[str]:
        """Share of the total per datum as a proportional bar with a percentage."""
        items = [ChartDatum.coerce(item) for item in data]
        total = sum(max(0.0, _finite(item.value)) for item in items)
        if not items or total <= 0:
            return []
        labels = max(measure(item.label) for item in items)
        lines = []
        for position, item in enumerate(items):
            share = max(0.0, _finite(item.value)) / total
            bar = self._fill * bar_length(share, 1.0, width)
            painted = self._context.colorize(bar, item.color or _PALETTE[position % len(_PALETTE)])
            lines.append(f"{pad(item.label, labels)} {painted}{' ' * (width - measure(bar))} {share * 100:5.1f}%")
        return lines

    def render_bar_chart(self, data: ChartData, **kwargs: Any) -> None:
        self._context.write_lines(self.bar_chart_lines(data, **kwargs))

    def render_sparkline(self, values: Sequence[float], **kwargs: Any) -> None:
        self._context.write_line(self.sparkline(values, **kwargs))

    def render_line_chart(self, values: Sequence[float], **kwargs: Any) -> None:
        self._context.write_lines(self.line_chart_lines(values, **kwargs))

    def render_pie_chart(self, data: ChartData, **kwargs: Any) -> None:
        self._context.write_lines(self.pie_chart_lines(data, **kwargs))


__all__ = ["ChartData", "ChartDatum", "ChartRenderer", "SPARK_GLYPHS", "SPARK_GLYPHS_ASCII", "bar_length"]
