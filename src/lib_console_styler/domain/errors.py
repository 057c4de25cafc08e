"""Error types raised by the styling and logging core.

Colour errors signal programmer misuse of the numeric colour APIs and are
raised immediately. Sink and plugin failures never surface as these types;
the logger isolates them instead.
"""

from __future__ import annotations


class StylerError(Exception):
    """Base class for every error raised by :mod:`lib_console_styler`."""


class InvalidColorComponent(StylerError, ValueError):
    """An RGB channel fell outside ``[0, 255]``."""


class InvalidHexColor(StylerError, ValueError):
    """A hex colour string was not 3 or 6 hexadecimal digits."""


class InvalidColorCode(StylerError, ValueError):
    """A 256-colour palette index fell outside ``[0, 255]``."""


class AnimationInUse(StylerError, RuntimeError):
    """Another spinner or progress bar already owns the output stream."""


class LoggerClosedError(StylerError, RuntimeError):
    """A log call reached a logger configured to reject calls after shutdown."""


__all__ = [
    "AnimationInUse",
    "InvalidColorCode",
    "InvalidColorComponent",
    "InvalidHexColor",
    "LoggerClosedError",
    "StylerError",
]
