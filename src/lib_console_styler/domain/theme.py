"""Themes: colour roles, status symbols and box-drawing glyph sets.

Purpose
-------
Bundle the presentation vocabulary shared by renderers and the console log
formatter into one immutable value that a logger hands to its children.

Contents
--------
* :class:`BorderStyle` / :class:`BoxGlyphs` – border variants and glyphs.
* :class:`Theme` – named colour roles, symbols and default border.
* ``DEFAULT_THEME``, ``DRACULA_THEME``, ``MINIMAL_THEME`` and :func:`get_theme`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .colors import ColorSpec, hex_to_rgb


class BorderStyle(Enum):
    SINGLE = "single"
    DOUBLE = "double"
    ROUNDED = "rounded"
    HEAVY = "heavy"
    ASCII = "ascii"

    @classmethod
    def coerce(cls, value: "BorderStyle | str") -> "BorderStyle":
        return value if isinstance(value, BorderStyle) else cls(value.strip().lower())


@dataclass(frozen=True)
class BoxGlyphs:
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str
    cross: str
    tee_left: str
    tee_right: str
    tee_top: str
    tee_bottom: str


BOX_STYLES: Mapping[BorderStyle, BoxGlyphs] = MappingProxyType(
    {
        BorderStyle.SINGLE: BoxGlyphs("┌", "┐", "└", "┘", "─", "│", "┼", "├", "┤", "┬", "┴"),
        BorderStyle.DOUBLE: BoxGlyphs("╔", "╗", "╚", "╝", "═", "║", "╬", "╠", "╣", "╦", "╩"),
        BorderStyle.ROUNDED: BoxGlyphs("╭", "╮", "╰", "╯", "─", "│", "┼", "├", "┤", "┬", "┴"),
        BorderStyle.HEAVY: BoxGlyphs("┏", "┓", "┗", "┛", "━", "┃", "╋", "┣", "┫", "┳", "┻"),
        BorderStyle.ASCII: BoxGlyphs("+", "+", "+", "+", "-", "|", "+", "+", "+", "+", "+"),
    }
)

ASCII_SYMBOLS: Mapping[str, str] = MappingProxyType(
    {
        "success": "[ok]",
        "error": "[x]",
        "warning": "[!]",
        "info": "[i]",
        "debug": "[.]",
        "critical": "[!!]",
        "bullet": "*",
        "arrow": "->",
        "check": "v",
        "cross": "x",
    }
)
# Used instead of theme symbols when the terminal cannot render unicode.

EMOJI_SYMBOLS: Mapping[str, str] = MappingProxyType(
    {
        "success": "✅",
        "error": "❌",
        "warning": "🚧",
        "info": "💡",
        "debug": "🐛",
        "critical": "🚨",
    }
)


def _frozen(mapping: Mapping[str, object]) -> Mapping[str, object]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Theme:
    """Immutable presentation vocabulary."""

    name: str
    colors: Mapping[str, ColorSpec] = field(default_factory=dict)
    symbols: Mapping[str, str] = field(default_factory=dict)
    border: BorderStyle = BorderStyle.ROUNDED
    emoji_symbols: Mapping[str, str] = field(default_factory=lambda: dict(EMOJI_SYMBOLS))

    def __post_init__(self) -> None:
        object.__setattr__(self, "colors", _frozen(self.colors))
        object.__setattr__(self, "symbols", _frozen(self.symbols))
        object.__setattr__(self, "emoji_symbols", _frozen(self.emoji_symbols))

    def glyphs(self, style: BorderStyle | str | None = None) -> BoxGlyphs:
        """Return the glyph set for ``style`` or the theme's default border."""
        return BOX_STYLES[BorderStyle.coerce(style) if style is not None else self.border]

    def symbol(self, role: str, *, unicode: bool = True, emoji: bool = False) -> str:
        """Return the symbol for ``role``; emoji win when the terminal shows them."""
        if not unicode:
            return ASCII_SYMBOLS.get(role, "")
        if emoji and role in self.emoji_symbols:
            return self.emoji_symbols[role]
        return self.symbols.get(role, ASCII_SYMBOLS.get(role, ""))

    def color(self, role: str) -> ColorSpec:
        return self.colors.get(role)


_DEFAULT_SYMBOLS = {
    "success": "✓",
    "error": "✗",
    "warning": "⚠",
    "info": "ⓘ",
    "debug": "⊙",
    "critical": "‼",
    "bullet": "•",
    "arrow": "→",
    "check": "✓",
    "cross": "✗",
}

DEFAULT_THEME = Theme(
    name="default",
    colors={
        "primary": "cyan",
        "secondary": "bright_cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "info": "blue",
        "debug": "gray",
        "critical": ("bright_red", "bold"),
        "muted": "dim",
        "accent": "magenta",
    },
    symbols=_DEFAULT_SYMBOLS,
    border=BorderStyle.ROUNDED,
)

DRACULA_THEME = Theme(
    name="dracula",
    colors={
        "primary": hex_to_rgb("#bd93f9"),
        "secondary": hex_to_rgb("#8be9fd"),
        "success": hex_to_rgb("#50fa7b"),
        "warning": hex_to_rgb("#ffb86c"),
        "error": hex_to_rgb("#ff5555"),
        "info": hex_to_rgb("#8be9fd"),
        "debug": hex_to_rgb("#6272a4"),
        "critical": (hex_to_rgb("#ff5555"), "bold"),
        "muted": hex_to_rgb("#6272a4"),
        "accent": hex_to_rgb("#f1fa8c"),
    },
    symbols={**_DEFAULT_SYMBOLS, "info": "ⓘ", "bullet": "▪", "arrow": "➜", "critical": "⚠"},
    border=BorderStyle.ROUNDED,
)

MINIMAL_THEME = Theme(
    name="minimal",
    colors={
        "primary": "bold",
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "critical": ("red", "bold"),
        "muted": "dim",
    },
    symbols=dict(ASCII_SYMBOLS),
    border=BorderStyle.ASCII,
    emoji_symbols={},
)

THEMES: Mapping[str, Theme] = MappingProxyType({theme.name: theme for theme in (DEFAULT_THEME, DRACULA_THEME, MINIMAL_THEME)})


def get_theme(name: str) -> Theme:
    try:
        return THEMES[name.strip().lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown theme: {name!r}") from exc


__all__ = [
    "ASCII_SYMBOLS",
    "BOX_STYLES",
    "BorderStyle",
    "BoxGlyphs",
    "DEFAULT_THEME",
    "DRACULA_THEME",
    "EMOJI_SYMBOLS",
    "MINIMAL_THEME",
    "THEMES",
    "Theme",
    "get_theme",
]
