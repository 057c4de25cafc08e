from __future__ import annotations

import pytest

from lib_console_styler.domain.errors import AnimationInUse
from lib_console_styler.presentation import _animation
from lib_console_styler.presentation.progress import ProgressBar
from lib_console_styler.presentation.spinner import Spinner


def test_half_way_fills_half_the_bar(plain_context) -> None:
    bar = ProgressBar(plain_context, 10, width=10)
    bar.update(5)
    assert bar.rendered == "█████░░░░░  50.0%"
    bar.complete()


def test_updates_are_clamped_to_the_total(plain_context) -> None:
    bar = ProgressBar(plain_context, 4, width=8)
    bar.update(99)
    assert bar.current == 4
    bar.update(-3)
    assert bar.current == 0
    bar.complete()


def test_increment_moves_by_step(plain_context) -> None:
    bar = ProgressBar(plain_context, 3, width=3, show_percent=False)
    bar.increment()
    bar.increment()
    assert bar.rendered == "██░"
    bar.complete()


def test_redraws_stay_on_one_line_until_complete(make_context, sink) -> None:
    context = make_context(sink=sink)
    bar = ProgressBar(context, 2, width=4, label="copy")
    bar.update(1)
    assert "\n" not in sink.getvalue()
    bar.complete()
    output = sink.getvalue()
    assert output.endswith("100.0%\n")
    assert output.count("\n") == 1
    assert output.count("\r") == 3


def test_complete_is_idempotent(make_context, sink) -> None:
    bar = ProgressBar(make_context(sink=sink), 1, width=2)
    bar.complete()
    bar.complete()
    bar.update(0)
    assert sink.getvalue().count("\n") == 1
    assert bar.completed


def test_ascii_bar_uses_brackets(make_context) -> None:
    bar = ProgressBar(make_context(unicode=False), 4, width=4, show_percent=False)
    bar.update(1)
    assert bar.rendered == "[#---]"
    bar.complete()


def test_zero_total_reads_empty_until_completed(plain_context) -> None:
    bar = ProgressBar(plain_context, 0, width=4)
    assert bar.ratio == 0.0
    bar.complete()
    assert bar.ratio == 1.0


def test_context_manager_completes_and_releases(plain_context) -> None:
    with ProgressBar(plain_context, 2) as bar:
        bar.increment()
    assert bar.completed
    assert _animation.owner_of(plain_context.sink) is None


def test_second_animation_on_same_stream_is_refused(plain_context) -> None:
    bar = ProgressBar(plain_context, 2).start()
    with pytest.raises(AnimationInUse):
        Spinner(plain_context, "busy").start()
    bar.complete()
    spinner = Spinner(plain_context, "busy").start()
    spinner.stop()
