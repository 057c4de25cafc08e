from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from lib_console_styler.adapters.terminal import MemorySink
from lib_console_styler.domain.capabilities import Capabilities
from lib_console_styler.domain.colors import ColorTier
from lib_console_styler.presentation.context import StylerContext


class StepClock:
    """Clock returning a fixed start time advanced by one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        value = self.current
        self.current = value + timedelta(seconds=1)
        return value


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def make_context() -> Callable[..., StylerContext]:
    def factory(
        *,
        color: ColorTier = ColorTier.NONE,
        unicode: bool = True,
        emoji: bool = False,
        width: int = 80,
        sink: MemorySink | None = None,
    ) -> StylerContext:
        target = sink if sink is not None else MemorySink()
        return StylerContext(target, capabilities=Capabilities(color, unicode, emoji, width, 24))

    return factory


@pytest.fixture
def plain_context(make_context: Callable[..., StylerContext]) -> StylerContext:
    return make_context()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()
