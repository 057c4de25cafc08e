"""Framed boxes around multi-line content.

Purpose
-------
Draw a border around text with optional title, padding, margin and width
bounds, wrapping content that is wider than the box allows.

Contents
--------
* :class:`BoxOptions` – option bag.
* :class:`BoxRenderer` – ``to_lines`` (pure) and ``render`` (writes to sink).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Sequence

from lib_console_styler.domain.colors import ColorSpec
from lib_console_styler.domain.layout import Align, measure, pad, repeat_to_width, wrap
from lib_console_styler.domain.theme import BorderStyle

from .context import StylerContext


@dataclass(frozen=True)
class BoxOptions:
    """Box layout settings.

    ``max_width`` bounds the whole box including borders and margin; when
    unset the terminal width is used.
    """

    title: str | None = None
    style: BorderStyle | str | None = None
    padding: int = 1
    margin: int = 0
    min_width: int = 0
    max_width: int | None = None
    align: Align = "left"
    border_color: ColorSpec = "muted"
    title_color: ColorSpec = "primary"


def _content_lines(content: str | Sequence[str]) -> list[str]:
    items = [content] if isinstance(content, str) else list(content)
    lines: list[str] = []
    for item in items:
        lines.extend(str(item).split("\n"))
    return lines


class BoxRenderer:
    """Render boxes with the glyphs and colours of a :class:`StylerContext`."""

    def __init__(self, context: StylerContext) -> None:
        self._context = context

    def inner_width(self, lines: Sequence[str], options: BoxOptions) -> int:
        """Content width: natural width raised to ``min_width`` and clamped to the limit."""
        padding = max(0, options.padding)
        outer = options.max_width if options.max_width is not None else self._context.width
        limit = max(1, outer - options.margin - 2 - 2 * padding)
        natural = max((measure(line) for line in lines), default=0)
        return max(1, min(max(natural, options.min_width), limit))

    def to_lines(self, content: str | Sequence[str], options: BoxOptions | None = None, **overrides: Any) -> list[str]:
        opts = replace(options or BoxOptions(), **overrides)
        ctx = self._context
        glyphs = ctx.glyphs(opts.style)
        padding = max(0, opts.padding)
        source = _content_lines(content)
        inner = self.inner_width(source, opts)
        span = inner + 2 * padding
        margin = " " * max(0, opts.margin)

        def border(text: str) -> str:
            return ctx.colorize(text, opts.border_color)

        top = border(glyphs.top_left) + self._top_run(opts.title, span, glyphs.horizontal, opts) + border(glyphs.top_right)
        lines = [margin + top]
        side = border(glyphs.vertical)
        gap = " " * padding
        for raw in source:
            for line in wrap(raw, inner):
                lines.append(f"{margin}{side}{gap}{pad(line, inner, opts.align)}{gap}{side}")
        bottom = glyphs.bottom_left + repeat_to_width(glyphs.horizontal, span) + glyphs.bottom_right
        lines.append(margin + border(bottom))
        return lines

    def _top_run(self, title: str | None, span: int, horizontal: str, opts: BoxOptions) -> str:
        ctx = self._context
        if title:
            label = f" {title} "
            size = measure(label)
            if size <= span:
                left = (span - size) // 2
                return (
                    ctx.colorize(repeat_to_width(horizontal, left), opts.border_color)
                    + ctx.colorize(label, opts.title_color)
                    + ctx.colorize(repeat_to_width(horizontal, span - left - size), opts.border_color)
                )
        return ctx.colorize(repeat_to_width(horizontal, span), opts.border_color)

    def render(self, content: str | Sequence[str], options: BoxOptions | None = None, **overrides: Any) -> None:
        self._context.write_lines(self.to_lines(content, options, **overrides))


__all__ = ["BoxOptions", "BoxRenderer"]
