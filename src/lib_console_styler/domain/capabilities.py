"""Terminal capability snapshot consumed by renderers and the console sink."""

from __future__ import annotations

from dataclasses import dataclass

from .colors import ColorTier
from .config import Mode

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24


@dataclass(frozen=True)
class Capabilities:
    """What the output stream can show, as detected once per context."""

    color: ColorTier = ColorTier.NONE
    unicode: bool = False
    emoji: bool = False
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    def with_modes(self, *, color: Mode = Mode.AUTO, unicode: Mode = Mode.AUTO, emoji: Mode = Mode.AUTO) -> "Capabilities":
        """Apply explicit configuration modes on top of detection."""
        tier = self.color
        if color is Mode.DISABLED:
            tier = ColorTier.NONE
        elif color is Mode.ENABLED and tier is ColorTier.NONE:
            tier = ColorTier.BASIC
        use_unicode = _resolve(unicode, self.unicode)
        use_emoji = _resolve(emoji, self.emoji) and use_unicode
        return Capabilities(tier, use_unicode, use_emoji, self.width, self.height)


def _resolve(mode: Mode, detected: bool) -> bool:
    if mode is Mode.AUTO:
        return detected
    return mode is Mode.ENABLED


__all__ = ["DEFAULT_HEIGHT", "DEFAULT_WIDTH", "Capabilities"]
