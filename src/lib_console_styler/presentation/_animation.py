"""Single-slot ownership of an output stream by one animated widget.

Two spinners or progress bars redrawing the same stream in place corrupt
each other, so a widget must claim the stream before animating and release
it once it prints its final line.
"""

from __future__ import annotations

import threading

from lib_console_styler.adapters.terminal import StreamSink
from lib_console_styler.application.ports.terminal import ByteSink
from lib_console_styler.domain.errors import AnimationInUse

_LOCK = threading.Lock()
_CLAIMS: dict[int, tuple[object, object]] = {}
# id(target) -> (target, owner); the target reference keeps the id stable while claimed.


def _target(sink: ByteSink) -> object:
    return sink.stream if isinstance(sink, StreamSink) else sink


def claim(sink: ByteSink, owner: object) -> None:
    """Make ``owner`` the active widget on ``sink`` or raise :class:`AnimationInUse`."""
    target = _target(sink)
    with _LOCK:
        current = _CLAIMS.get(id(target))
        if current is not None and current[1] is not owner:
            raise AnimationInUse(f"{type(current[1]).__name__} is already animating this output stream")
        _CLAIMS[id(target)] = (target, owner)


def release(sink: ByteSink, owner: object) -> None:
    target = _target(sink)
    with _LOCK:
        current = _CLAIMS.get(id(target))
        if current is not None and current[1] is owner:
            del _CLAIMS[id(target)]


def owner_of(sink: ByteSink) -> object | None:
    with _LOCK:
        current = _CLAIMS.get(id(_target(sink)))
        return current[1] if current else None


__all__ = ["claim", "owner_of", "release"]
