"""Colour engine: named codes, numeric colours, and tier degradation.

Purpose
-------
Map a semantic or numeric colour request plus the active terminal tier to an
escape sequence, or to nothing at all. Every colour is expressed at its
richest form and degraded deterministically when the tier is lower.

Contents
--------
* :class:`ColorTier` – none/basic/256/truecolor capability ordering.
* :class:`Color` – immutable colour request (named SGR, RGB or palette index).
* :func:`rgb_to_256` / :func:`rgb_to_basic` – pure degradation functions.
* :func:`create_gradient` – per-channel linear interpolation.
* :class:`ColorEngine` – binds a tier and renders/wraps text.

System Role
-----------
Shared by every renderer and by the console log formatter. The engine holds
no mutable state: the same ``(color, tier)`` pair always yields the same bytes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Mapping, Sequence, Union

from .errors import InvalidColorCode, InvalidColorComponent, InvalidHexColor

RGB = tuple[int, int, int]

RESET = "\x1b[0m"

ANSI_PATTERN = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")
# Matches SGR colour codes and the cursor/erase sequences emitted by animations.

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class ColorTier(IntEnum):
    """Terminal colour capability, ordered from poorest to richest."""

    NONE = 0
    BASIC = 1
    ANSI_256 = 2
    TRUECOLOR = 3


CODES: Mapping[str, str] = {
    "reset": RESET,
    "bright": "\x1b[1m",
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "italic": "\x1b[3m",
    "underscore": "\x1b[4m",
    "blink": "\x1b[5m",
    "reverse": "\x1b[7m",
    "hidden": "\x1b[8m",
    "strikethrough": "\x1b[9m",
    "black": "\x1b[30m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",
    "gray": "\x1b[90m",
    "bright_red": "\x1b[91m",
    "bright_green": "\x1b[92m",
    "bright_yellow": "\x1b[93m",
    "bright_blue": "\x1b[94m",
    "bright_magenta": "\x1b[95m",
    "bright_cyan": "\x1b[96m",
    "bright_white": "\x1b[97m",
    "bg_black": "\x1b[40m",
    "bg_red": "\x1b[41m",
    "bg_green": "\x1b[42m",
    "bg_yellow": "\x1b[43m",
    "bg_blue": "\x1b[44m",
    "bg_magenta": "\x1b[45m",
    "bg_cyan": "\x1b[46m",
    "bg_white": "\x1b[47m",
}

ROLE_ALIASES: Mapping[str, str] = {
    "success": "green",
    "error": "red",
    "warning": "yellow",
    "info": "blue",
    "debug": "gray",
    "critical": "bright_red",
    "accent": "magenta",
    "muted": "gray",
    "primary": "cyan",
    "secondary": "bright_cyan",
}
# Semantic roles bound to base hues when no theme overrides them.

# Standard xterm RGB values for the 16 ANSI colours, index order 0-15.
ANSI_16_RGB: tuple[RGB, ...] = (
    (0, 0, 0),
    (205, 0, 0),
    (0, 205, 0),
    (205, 205, 0),
    (0, 0, 238),
    (205, 0, 205),
    (0, 205, 205),
    (229, 229, 229),
    (127, 127, 127),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (92, 92, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)

_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)
_NEUTRAL_SPREAD = 16


@dataclass(frozen=True)
class Color:
    """A colour request expressed at its intended tier.

    Exactly one of ``name``, ``rgb`` or ``index`` is set. ``background`` selects
    the background variant of numeric colours.
    """

    name: str | None = None
    rgb: RGB | None = None
    index: int | None = None
    background: bool = False

    @classmethod
    def named(cls, name: str) -> "Color":
        key = ROLE_ALIASES.get(name, name)
        if key not in CODES:
            raise KeyError(f"Unknown colour name: {name!r}")
        return cls(name=key)


ColorSpec = Union[Color, str, Sequence["ColorSpec"], None]


def _check_channel(value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 255:
        raise InvalidColorComponent(f"Colour component must be an integer in [0, 255], got {value!r}")
    return value


def _check_index(code: int) -> int:
    if not isinstance(code, int) or isinstance(code, bool) or not 0 <= code <= 255:
        raise InvalidColorCode(f"256-colour index must be in [0, 255], got {code!r}")
    return code


def rgb(r: int, g: int, b: int) -> Color:
    """Return a truecolor foreground request after validating each channel."""
    return Color(rgb=(_check_channel(r), _check_channel(g), _check_channel(b)))


def rgb_bg(r: int, g: int, b: int) -> Color:
    """Return a truecolor background request after validating each channel."""
    return Color(rgb=(_check_channel(r), _check_channel(g), _check_channel(b)), background=True)


def parse_hex(value: str) -> RGB:
    """Parse ``#rgb`` / ``#rrggbb`` (case-insensitive, ``#`` optional).

    >>> parse_hex("#F80")
    (255, 136, 0)
    """
    match = _HEX_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise InvalidHexColor(f"Malformed hex colour: {value!r}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def hex_to_rgb(value: str) -> Color:
    """Return a truecolor foreground request parsed from a hex string."""
    return Color(rgb=parse_hex(value))


def hex_to_rgb_bg(value: str) -> Color:
    """Return a truecolor background request parsed from a hex string."""
    return Color(rgb=parse_hex(value), background=True)


def color256(code: int) -> Color:
    return Color(index=_check_index(code))


def bg_color256(code: int) -> Color:
    return Color(index=_check_index(code), background=True)


def create_gradient(start: RGB, end: RGB, steps: int) -> list[RGB]:
    """Interpolate ``steps`` colours from ``start`` to ``end`` inclusive.

    >>> create_gradient((0, 0, 0), (255, 255, 255), 3)
    [(0, 0, 0), (128, 128, 128), (255, 255, 255)]
    """
    if steps < 2:
        raise ValueError("steps must be at least 2")
    for channel in (*start, *end):
        _check_channel(channel)
    span = steps - 1
    gradient = []
    for i in range(steps):
        gradient.append(
            tuple(_round_half_up(s + (e - s) * i / span) for s, e in zip(start, end))  # type: ignore[misc]
        )
    gradient[0] = tuple(start)
    gradient[-1] = tuple(end)
    return gradient  # type: ignore[return-value]


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; colour math expects half-up.
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def _distance(a: RGB, b: RGB) -> int:
    return sum((x - y) ** 2 for x, y in zip(a, b))


def _quantize_channel(value: int) -> int:
    if value < 48:
        return 0
    if value < 115:
        return 1
    return (value - 35) // 40


def index_to_rgb(index: int) -> RGB:
    """Return the RGB value an xterm terminal shows for palette ``index``."""
    _check_index(index)
    if index < 16:
        return ANSI_16_RGB[index]
    if index >= 232:
        level = 8 + (index - 232) * 10
        return (level, level, level)
    offset = index - 16
    return (_CUBE_LEVELS[offset // 36], _CUBE_LEVELS[(offset // 6) % 6], _CUBE_LEVELS[offset % 6])


def rgb_to_256(value: RGB) -> int:
    """Map an RGB triple to the nearest 6x6x6 cube or grayscale ramp index."""
    r, g, b = value
    qr, qg, qb = _quantize_channel(r), _quantize_channel(g), _quantize_channel(b)
    cube_index = 16 + 36 * qr + 6 * qg + qb
    if max(value) - min(value) < _NEUTRAL_SPREAD:
        average = (r + g + b) // 3
        if 8 <= average <= 238:
            gray_index = 232 + min(23, max(0, _round_half_up((average - 8) / 10)))
            if _distance(value, index_to_rgb(gray_index)) < _distance(value, index_to_rgb(cube_index)):
                return gray_index
    return cube_index


def rgb_to_basic(value: RGB) -> int:
    """Bucket an RGB triple to the nearest of the 16 ANSI colours (0-15)."""
    approximated = index_to_rgb(rgb_to_256(value))
    best = 0
    best_distance = _distance(approximated, ANSI_16_RGB[0])
    for index, candidate in enumerate(ANSI_16_RGB[1:], start=1):
        distance = _distance(approximated, candidate)
        if distance < best_distance:
            best, best_distance = index, distance
    return best


def _basic_sequence(index: int, background: bool) -> str:
    base = (40 if background else 30) if index < 8 else (100 if background else 90)
    return f"\x1b[{base + index % 8}m"


def sequence_for(color: Color, tier: ColorTier) -> str:
    """Return the escape sequence for ``color`` degraded to ``tier``."""
    if tier is ColorTier.NONE:
        return ""
    if color.name is not None:
        return CODES[color.name]
    layer = 48 if color.background else 38
    if color.rgb is not None:
        if tier is ColorTier.TRUECOLOR:
            r, g, b = color.rgb
            return f"\x1b[{layer};2;{r};{g};{b}m"
        if tier is ColorTier.ANSI_256:
            return f"\x1b[{layer};5;{rgb_to_256(color.rgb)}m"
        return _basic_sequence(rgb_to_basic(color.rgb), color.background)
    if color.index is not None:
        if tier >= ColorTier.ANSI_256:
            return f"\x1b[{layer};5;{color.index}m"
        index = color.index if color.index < 16 else rgb_to_basic(index_to_rgb(color.index))
        return _basic_sequence(index, color.background)
    return ""


def strip_ansi(text: str) -> str:
    """Remove escape sequences from ``text``.

    >>> strip_ansi("\\x1b[31mred\\x1b[0m")
    'red'
    """
    return ANSI_PATTERN.sub("", text)


class ColorEngine:
    """Render colour requests for one fixed :class:`ColorTier`."""

    codes = CODES

    def __init__(self, tier: ColorTier = ColorTier.TRUECOLOR, *, roles: Mapping[str, ColorSpec] | None = None) -> None:
        self._tier = ColorTier(tier)
        self._roles = dict(roles or {})

    @property
    def tier(self) -> ColorTier:
        return self._tier

    @property
    def enabled(self) -> bool:
        return self._tier is not ColorTier.NONE

    def with_tier(self, tier: ColorTier) -> "ColorEngine":
        return ColorEngine(tier, roles=self._roles)

    def resolve(self, spec: ColorSpec) -> list[Color]:
        """Turn a colour spec (role, name, hex, :class:`Color` or a list) into colours."""
        if spec is None or spec == "":
            return []
        if isinstance(spec, Color):
            return [spec]
        if isinstance(spec, str):
            if spec in self._roles:
                return self.resolve(self._roles[spec])
            if spec.startswith("#"):
                return [hex_to_rgb(spec)]
            return [Color.named(spec)]
        resolved: list[Color] = []
        for part in spec:
            resolved.extend(self.resolve(part))
        return resolved

    def sequence(self, spec: ColorSpec) -> str:
        """Return the opening escape sequence for ``spec`` at this tier."""
        if not self.enabled:
            return ""
        return "".join(sequence_for(color, self._tier) for color in self.resolve(spec))

    def colorize(self, text: str, spec: ColorSpec) -> str:
        """Wrap ``text`` with the opening sequence and exactly one reset.

        Inner resets re-open the outer colour so nested spans keep it. Calling
        this twice with the same spec returns the first result unchanged.
        """
        opening = self.sequence(spec)
        if not opening or not text:
            return text
        if text.startswith(opening) and text.endswith(RESET):
            return text
        body = text.replace(RESET, RESET + opening)
        return f"{opening}{body}{RESET}"

    def gradient_text(self, text: str, start: RGB, end: RGB) -> str:
        """Colour each grapheme of ``text`` along a gradient from ``start`` to ``end``."""
        from .layout import clusters

        parts = clusters(strip_ansi(text))
        if not self.enabled or not parts:
            return strip_ansi(text)
        if len(parts) == 1:
            return self.colorize(parts[0], Color(rgb=start))
        colours = create_gradient(start, end, len(parts))
        painted = "".join(sequence_for(Color(rgb=c), self._tier) + part for c, part in zip(colours, parts))
        return painted + RESET


__all__ = [
    "ANSI_PATTERN",
    "CODES",
    "RESET",
    "ROLE_ALIASES",
    "Color",
    "ColorEngine",
    "ColorSpec",
    "ColorTier",
    "bg_color256",
    "color256",
    "create_gradient",
    "hex_to_rgb",
    "hex_to_rgb_bg",
    "index_to_rgb",
    "parse_hex",
    "rgb",
    "rgb_bg",
    "rgb_to_256",
    "rgb_to_basic",
    "sequence_for",
    "strip_ansi",
]
