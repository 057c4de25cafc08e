"""Banners and application headers framed with double-line glyphs."""

from __future__ import annotations

from typing import Any, Literal

from lib_console_styler.domain.colors import RGB, ColorSpec
from lib_console_styler.domain.layout import measure, pad, repeat_to_width
from lib_console_styler.domain.theme import BorderStyle

from .context import StylerContext

BannerStyle = Literal["standard", "gradient", "minimal"]

_GRADIENT_START: RGB = (139, 233, 253)
_GRADIENT_END: RGB = (189, 147, 249)


class BannerRenderer:
    """Render framed banners and ``name vX.Y.Z`` application headers."""

    def __init__(self, context: StylerContext) -> None:
        self._context = context

    def banner_lines(
        self,
        text: str,
        *,
        style: BannerStyle = "standard",
        color: ColorSpec = "primary",
        padding: int = 2,
        gradient: tuple[RGB, RGB] = (_GRADIENT_START, _GRADIENT_END),
    ) -> list[str]:
        """Three lines: frame top, the text, frame bottom.

        ``minimal`` draws a rule above and below instead of a frame.
        """
        ctx = self._context
        if style == "gradient":
            body = ctx.colors.gradient_text(text, *gradient)
        else:
            body = ctx.colorize(text, color)
        span = measure(text) + 2 * max(0, padding)
        glyphs = ctx.glyphs(BorderStyle.DOUBLE)
        if style == "minimal":
            rule = ctx.colorize(repeat_to_width(glyphs.horizontal, span), "muted")
            return [rule, pad(body, span, "center"), rule]
        edge = ctx.colorize(glyphs.vertical, color)
        return [
            ctx.colorize(glyphs.top_left + repeat_to_width(glyphs.horizontal, span) + glyphs.top_right, color),
            f"{edge}{pad(body, span, 'center')}{edge}",
            ctx.colorize(glyphs.bottom_left + repeat_to_width(glyphs.horizontal, span) + glyphs.bottom_right, color),
        ]

    def header_lines(
        self,
        name: str,
        *,
        version: str | None = None,
        tagline: str | None = None,
        author: str | None = None,
    ) -> list[str]:
        """Application header: banner for ``name vX`` followed by muted details."""
        ctx = self._context
        title = f"{name} v{version}" if version else name
        lines = self.banner_lines(title, style="gradient" if ctx.colors.enabled else "standard")
        if tagline:
            lines.append(ctx.colorize(tagline, "secondary"))
        if author:
            lines.append(ctx.colorize(f"by {author}", "muted"))
        return lines

    def render(self, text: str, **kwargs: Any) -> None:
        self._context.write_lines(self.banner_lines(text, **kwargs))

    def header(self, name: str, **kwargs: Any) -> None:
        self._context.write_lines(self.header_lines(name, **kwargs))


__all__ = ["BannerRenderer", "BannerStyle"]
