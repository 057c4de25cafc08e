from __future__ import annotations

import logging

import pytest

from lib_console_styler.domain.levels import LogLevel


@pytest.mark.parametrize(
    "name, expected",
    [
        ("debug", LogLevel.DEBUG),
        ("INFO", LogLevel.INFO),
        ("Success", LogLevel.SUCCESS),
        ("Warning", LogLevel.WARNING),
        ("warn", LogLevel.WARNING),
        ("error", LogLevel.ERROR),
        ("CRITICAL", LogLevel.CRITICAL),
    ],
)
def test_from_name_accepts_case_insensitive_matches(name: str, expected: LogLevel) -> None:
    assert LogLevel.from_name(name) is expected


def test_from_name_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        LogLevel.from_name("verbose")


@pytest.mark.parametrize("number", [-5, 5, 15, 35, 45, 55])
def test_from_numeric_rejects_non_standard_levels(number: int) -> None:
    with pytest.raises(ValueError, match="Unsupported log level numeric"):
        LogLevel.from_numeric(number)


def test_levels_are_totally_ordered() -> None:
    ordered = [LogLevel.DEBUG, LogLevel.INFO, LogLevel.SUCCESS, LogLevel.WARNING, LogLevel.ERROR, LogLevel.CRITICAL]
    assert sorted(reversed(ordered)) == ordered
    assert LogLevel.SUCCESS > LogLevel.INFO
    assert LogLevel.SUCCESS < LogLevel.WARNING


def test_comparison_with_foreign_types_is_unsupported() -> None:
    with pytest.raises(TypeError):
        _ = LogLevel.INFO < 20  # type: ignore[operator]


@pytest.mark.parametrize(
    "level, expected",
    [
        (LogLevel.DEBUG, logging.DEBUG),
        (LogLevel.INFO, logging.INFO),
        (LogLevel.SUCCESS, 25),
        (LogLevel.WARNING, logging.WARNING),
        (LogLevel.CRITICAL, logging.CRITICAL),
    ],
)
def test_to_python_level_matches_stdlib(level: LogLevel, expected: int) -> None:
    assert level.to_python_level() == expected


def test_presentation_metadata_is_exposed() -> None:
    assert LogLevel.WARNING.severity == "warning"
    assert LogLevel.SUCCESS.code == "SUCC"
    assert all(len(level.code) == 4 for level in LogLevel)
    assert LogLevel.ERROR.icon


@pytest.mark.parametrize("value", [LogLevel.ERROR, "error", 40])
def test_coerce_accepts_levels_names_and_numbers(value: object) -> None:
    assert LogLevel.coerce(value) is LogLevel.ERROR  # type: ignore[arg-type]
