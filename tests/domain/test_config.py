from __future__ import annotations

from pathlib import Path

import pytest

from lib_console_styler.domain.capabilities import Capabilities
from lib_console_styler.domain.colors import ColorTier
from lib_console_styler.domain.config import ConfigBuilder, LogOutput, Mode, OutputKind, StylerConfig
from lib_console_styler.domain.levels import LogLevel
from lib_console_styler.domain.theme import BOX_STYLES, DEFAULT_THEME, DRACULA_THEME, EMOJI_SYMBOLS, BorderStyle, MINIMAL_THEME, get_theme


def test_default_config_values() -> None:
    config = StylerConfig()
    assert config.color_mode is Mode.AUTO
    assert config.log_level is LogLevel.DEBUG
    assert config.max_history_size == 1000
    assert config.enable_history is True
    assert config.outputs == ()


def test_builder_produces_immutable_config() -> None:
    config = (
        ConfigBuilder()
        .color_mode("disabled")
        .log_level("warn")
        .history(size=5)
        .max_line_width(60)
        .theme("dracula")
        .output(LogOutput.file("app.log", max_bytes=1024))
        .build()
    )
    assert config.color_mode is Mode.DISABLED
    assert config.log_level is LogLevel.WARNING
    assert config.max_history_size == 5
    assert config.theme is DRACULA_THEME
    assert config.outputs[0].kind is OutputKind.FILE
    assert config.outputs[0].options["path"] == Path("app.log")
    with pytest.raises(AttributeError):
        config.log_level = LogLevel.DEBUG  # type: ignore[misc]


def test_merged_overrides_without_touching_the_original() -> None:
    base = StylerConfig()
    child = base.merged(log_level="error", color_mode=False)
    assert child.log_level is LogLevel.ERROR
    assert child.color_mode is Mode.DISABLED
    assert base.log_level is LogLevel.DEBUG


@pytest.mark.parametrize(
    "call",
    [
        lambda b: b.history(size=0),
        lambda b: b.indent_size(-1),
        lambda b: b.max_line_width(0),
        lambda b: b.log_level("loud"),
        lambda b: b.color_mode("sometimes"),
        lambda b: b.theme("neon"),
    ],
)
def test_builder_rejects_invalid_values(call) -> None:
    with pytest.raises(ValueError):
        call(ConfigBuilder())


def test_after_shutdown_policy_is_validated() -> None:
    with pytest.raises(ValueError):
        StylerConfig(after_shutdown="explode")


def test_output_descriptors_apply_level_gates() -> None:
    webhook = LogOutput.webhook("https://hooks.example/x")
    assert webhook.min_level is LogLevel.WARNING
    assert not webhook.accepts(LogLevel.INFO)
    assert webhook.accepts(LogLevel.CRITICAL)
    assert LogOutput.remote("https://collector.example", batch_size=5).options["batch_size"] == 5


@pytest.mark.parametrize(
    "detected, mode, expected",
    [
        (ColorTier.TRUECOLOR, Mode.AUTO, ColorTier.TRUECOLOR),
        (ColorTier.TRUECOLOR, Mode.DISABLED, ColorTier.NONE),
        (ColorTier.NONE, Mode.ENABLED, ColorTier.BASIC),
        (ColorTier.ANSI_256, Mode.ENABLED, ColorTier.ANSI_256),
    ],
)
def test_capability_modes_override_detection(detected: ColorTier, mode: Mode, expected: ColorTier) -> None:
    assert Capabilities(color=detected).with_modes(color=mode).color is expected


def test_emoji_requires_unicode() -> None:
    caps = Capabilities(unicode=False, emoji=True).with_modes(emoji=Mode.ENABLED)
    assert caps.emoji is False


def test_themes_expose_roles_symbols_and_borders() -> None:
    assert get_theme("Minimal") is MINIMAL_THEME
    assert MINIMAL_THEME.glyphs() == BOX_STYLES[BorderStyle.ASCII]
    assert DRACULA_THEME.glyphs("double").top_left == "╔"
    assert DRACULA_THEME.symbol("success", unicode=False) == "[ok]"


def test_emoji_symbols_replace_level_symbols_only_when_enabled() -> None:
    assert DEFAULT_THEME.symbol("success", emoji=True) == EMOJI_SYMBOLS["success"]
    assert DEFAULT_THEME.symbol("success") == "✓"
    assert DEFAULT_THEME.symbol("bullet", emoji=True) == "•"
    assert DEFAULT_THEME.symbol("success", unicode=False, emoji=True) == "[ok]"
    assert MINIMAL_THEME.symbol("success", emoji=True) == "[ok]"
