from __future__ import annotations

import pytest

from lib_console_styler.domain.colors import (
    RESET,
    Color,
    ColorEngine,
    ColorTier,
    bg_color256,
    color256,
    create_gradient,
    hex_to_rgb,
    hex_to_rgb_bg,
    index_to_rgb,
    parse_hex,
    rgb,
    rgb_bg,
    rgb_to_256,
    rgb_to_basic,
    sequence_for,
    strip_ansi,
)
from lib_console_styler.domain.errors import InvalidColorCode, InvalidColorComponent, InvalidHexColor, StylerError


@pytest.mark.parametrize(
    "text, expected",
    [
        ("#FF0000", (255, 0, 0)),
        ("ff0000", (255, 0, 0)),
        ("#f80", (255, 136, 0)),
        ("#AbCdEf", (171, 205, 239)),
    ],
)
def test_parse_hex_accepts_short_long_and_bare_forms(text: str, expected: tuple[int, int, int]) -> None:
    assert parse_hex(text) == expected


@pytest.mark.parametrize("text", ["#12", "#GGGGGG", "#12345", "", "red"])
def test_parse_hex_rejects_malformed_values(text: str) -> None:
    with pytest.raises(InvalidHexColor):
        parse_hex(text)


def test_colour_errors_are_styler_and_value_errors() -> None:
    with pytest.raises(StylerError):
        rgb(256, 0, 0)
    with pytest.raises(ValueError):
        hex_to_rgb("nope")


@pytest.mark.parametrize("channels", [(-1, 0, 0), (0, 256, 0), (0, 0, 300)])
def test_rgb_rejects_out_of_range_channels(channels: tuple[int, int, int]) -> None:
    with pytest.raises(InvalidColorComponent):
        rgb(*channels)
    with pytest.raises(InvalidColorComponent):
        rgb_bg(*channels)


@pytest.mark.parametrize("code", [-1, 256])
def test_color256_rejects_out_of_range_codes(code: int) -> None:
    with pytest.raises(InvalidColorCode):
        color256(code)
    with pytest.raises(InvalidColorCode):
        bg_color256(code)


def test_truecolor_sequences_use_24_bit_form() -> None:
    assert sequence_for(rgb(1, 2, 3), ColorTier.TRUECOLOR) == "\x1b[38;2;1;2;3m"
    assert sequence_for(hex_to_rgb_bg("#010203"), ColorTier.TRUECOLOR) == "\x1b[48;2;1;2;3m"


def test_truecolor_request_degrades_to_256_palette() -> None:
    assert sequence_for(rgb(255, 0, 0), ColorTier.ANSI_256) == "\x1b[38;5;196m"


def test_truecolor_request_degrades_to_basic_palette() -> None:
    assert sequence_for(rgb(255, 0, 0), ColorTier.BASIC) == "\x1b[91m"
    assert sequence_for(rgb_bg(0, 0, 0), ColorTier.BASIC) == "\x1b[40m"


def test_no_colour_tier_emits_nothing() -> None:
    assert sequence_for(rgb(255, 0, 0), ColorTier.NONE) == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        ((0, 0, 0), 16),
        ((255, 255, 255), 231),
        ((255, 0, 0), 196),
        ((0, 255, 0), 46),
        ((128, 128, 128), 244),
    ],
)
def test_rgb_to_256_picks_nearest_cube_or_gray(value: tuple[int, int, int], expected: int) -> None:
    assert rgb_to_256(value) == expected


def test_index_to_rgb_covers_all_palette_regions() -> None:
    assert index_to_rgb(1) == (205, 0, 0)
    assert index_to_rgb(196) == (255, 0, 0)
    assert index_to_rgb(232) == (8, 8, 8)


@pytest.mark.parametrize(
    "value, expected",
    [((255, 0, 0), 9), ((0, 0, 0), 0), ((255, 255, 255), 15), ((0, 205, 0), 2)],
)
def test_rgb_to_basic_buckets_to_nearest_ansi_colour(value: tuple[int, int, int], expected: int) -> None:
    assert rgb_to_basic(value) == expected


def test_256_index_degrades_to_basic() -> None:
    assert sequence_for(color256(196), ColorTier.BASIC) == "\x1b[91m"
    assert sequence_for(color256(3), ColorTier.BASIC) == "\x1b[33m"


def test_create_gradient_pins_endpoints_and_rounds_half_up() -> None:
    gradient = create_gradient((0, 0, 0), (255, 255, 255), 3)
    assert gradient == [(0, 0, 0), (128, 128, 128), (255, 255, 255)]
    assert len(create_gradient((10, 20, 30), (200, 100, 0), 7)) == 7


def test_create_gradient_rejects_fewer_than_two_steps() -> None:
    with pytest.raises(ValueError):
        create_gradient((0, 0, 0), (1, 1, 1), 1)


def test_disabled_engine_returns_text_unchanged() -> None:
    engine = ColorEngine(ColorTier.NONE)
    coloured = engine.colorize("x", hex_to_rgb("#FF0000"))
    assert coloured == "x"
    assert "\x1b" not in coloured


def test_colorize_wraps_text_with_a_single_reset() -> None:
    engine = ColorEngine(ColorTier.TRUECOLOR)
    coloured = engine.colorize("hi", "red")
    assert coloured == f"\x1b[31mhi{RESET}"
    assert coloured.count(RESET) == 1


def test_colorize_is_idempotent() -> None:
    engine = ColorEngine(ColorTier.TRUECOLOR)
    once = engine.colorize("hi", rgb(1, 2, 3))
    assert engine.colorize(once, rgb(1, 2, 3)) == once


def test_nested_spans_restore_the_outer_colour() -> None:
    engine = ColorEngine(ColorTier.BASIC)
    inner = engine.colorize("inner", "red")
    outer = engine.colorize(f"a {inner} b", "blue")
    assert outer == f"\x1b[34ma \x1b[31minner{RESET}\x1b[34m b{RESET}"


def test_roles_resolve_through_engine_mapping() -> None:
    engine = ColorEngine(ColorTier.BASIC, roles={"accent": "cyan"})
    assert engine.sequence("accent") == "\x1b[36m"
    assert engine.sequence("success") == "\x1b[32m"


def test_unknown_colour_names_raise() -> None:
    with pytest.raises(KeyError):
        Color.named("not-a-colour")


def test_gradient_text_colours_each_grapheme() -> None:
    engine = ColorEngine(ColorTier.TRUECOLOR)
    painted = engine.gradient_text("abc", (0, 0, 0), (255, 255, 255))
    assert strip_ansi(painted) == "abc"
    assert painted.count("\x1b[38;2;") == 3
    assert ColorEngine(ColorTier.NONE).gradient_text("abc", (0, 0, 0), (1, 1, 1)) == "abc"


def test_strip_ansi_removes_sequences() -> None:
    assert strip_ansi("\x1b[1m\x1b[38;2;1;2;3mok\x1b[0m") == "ok"


@pytest.mark.parametrize(
    "start, end, steps",
    [
        ((0, 255, 10), (255, 0, 10), 7),
        ((12, 200, 90), (250, 3, 91), 16),
        ((255, 255, 255), (0, 128, 64), 4),
        ((1, 2, 3), (254, 1, 200), 33),
    ],
)
def test_create_gradient_is_monotonic_per_channel(start, end, steps: int) -> None:
    gradient = create_gradient(start, end, steps)
    assert len(gradient) == steps
    assert gradient[0] == start
    assert gradient[-1] == end
    for channel in range(3):
        values = [colour[channel] for colour in gradient]
        if end[channel] >= start[channel]:
            assert values == sorted(values)
        else:
            assert values == sorted(values, reverse=True)


SAMPLED_RGB = [(0, 0, 0), (255, 255, 255), (128, 64, 32), (17, 200, 99), (250, 5, 130), (95, 135, 175)]


@pytest.mark.parametrize("tier", [ColorTier.TRUECOLOR, ColorTier.ANSI_256, ColorTier.BASIC])
@pytest.mark.parametrize("value", SAMPLED_RGB)
def test_colorize_is_deterministic_at_every_tier(tier: ColorTier, value: tuple[int, int, int]) -> None:
    colour = rgb(*value)
    first = ColorEngine(tier).colorize("sample", colour)
    assert ColorEngine(tier).colorize("sample", colour) == first
    assert ColorEngine(tier).colorize(first, colour) == first
    assert first.count(RESET) == 1
    assert strip_ansi(first) == "sample"
