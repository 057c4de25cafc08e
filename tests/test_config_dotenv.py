from __future__ import annotations

import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from lib_console_styler import cli as cli_module
from lib_console_styler import config as styler_config
from lib_console_styler.adapters.terminal import MappingEnvReader
from lib_console_styler.domain.config import Mode
from lib_console_styler.domain.levels import LogLevel


@pytest.fixture(autouse=True)
def _reset_dotenv_state() -> None:
    """Reset shared dotenv state around each test."""

    styler_config._reset_dotenv_state_for_testing()
    yield
    styler_config._reset_dotenv_state_for_testing()


def test_enable_dotenv_populates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Loading the nearest .env injects values that are not yet set."""

    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text("CONSOLE_STYLER_THEME=dracula\n")
    monkeypatch.chdir(nested)
    monkeypatch.delenv("CONSOLE_STYLER_THEME", raising=False)

    loaded = styler_config.enable_dotenv()

    assert loaded == env_file.resolve()
    assert styler_config.loaded_dotenv() == loaded
    assert os.environ["CONSOLE_STYLER_THEME"] == "dracula"

    os.environ.pop("CONSOLE_STYLER_THEME", None)


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Existing environment variables keep precedence over .env entries."""

    (tmp_path / ".env").write_text("CONSOLE_STYLER_THEME=dracula\n")
    monkeypatch.setenv("CONSOLE_STYLER_THEME", "minimal")

    result = styler_config.enable_dotenv(search_from=tmp_path / "a" / "b")

    assert result == (tmp_path / ".env").resolve()
    assert os.environ["CONSOLE_STYLER_THEME"] == "minimal"


def test_enable_dotenv_without_a_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(styler_config, "find_dotenv", lambda usecwd: "")

    assert styler_config.enable_dotenv() is None
    assert styler_config.loaded_dotenv() is None


def test_cli_dotenv_toggle_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    """CLI flag wins over environment toggle when deciding whether to load .env."""

    runner = CliRunner()

    calls: list[tuple[tuple[object, ...], dict[str, object]]] = []

    def record_enable(*args: object, **kwargs: object) -> None:
        calls.append((args, kwargs))

    monkeypatch.setattr(styler_config, "enable_dotenv", record_enable)
    monkeypatch.delenv(styler_config.DOTENV_ENV_VAR, raising=False)

    result = runner.invoke(cli_module.cli, ["--use-dotenv", "info"])
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["info"])
    assert result.exit_code == 0
    assert calls == []

    env = {styler_config.DOTENV_ENV_VAR: "1"}
    result = runner.invoke(cli_module.cli, ["info"], env=env)
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["--no-use-dotenv", "info"], env=env)
    assert result.exit_code == 0
    assert calls == []


def test_env_overrides_map_onto_the_builder() -> None:
    env = MappingEnvReader(
        {
            "CONSOLE_STYLER_LOG_LEVEL": "warning",
            "CONSOLE_STYLER_COLOR": "disabled",
            "CONSOLE_STYLER_UNICODE": "false",
            "CONSOLE_STYLER_THEME": "dracula",
            "CONSOLE_STYLER_HISTORY_SIZE": "50",
        }
    )

    config = styler_config.config_from_env(env)

    assert config.log_level is LogLevel.WARNING
    assert config.color_mode is Mode.DISABLED
    assert config.unicode_mode is Mode.DISABLED
    assert config.emoji_mode is Mode.AUTO
    assert config.theme.name == "dracula"
    assert config.max_history_size == 50


def test_blank_variables_are_ignored() -> None:
    config = styler_config.config_from_env(MappingEnvReader({"CONSOLE_STYLER_LOG_LEVEL": "  "}))

    assert config.log_level is LogLevel.DEBUG


@pytest.mark.parametrize(
    "key, value",
    [("LOG_LEVEL", "loudest"), ("HISTORY_SIZE", "many"), ("HISTORY_SIZE", "0"), ("THEME", "neon"), ("COLOR", "sometimes")],
)
def test_invalid_values_name_the_variable(key: str, value: str) -> None:
    with pytest.raises(ValueError, match=f"CONSOLE_STYLER_{key}"):
        styler_config.config_from_env(MappingEnvReader({f"CONSOLE_STYLER_{key}": value}))
