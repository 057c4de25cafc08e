"""Environment-driven configuration helpers.

Purpose
-------
Load an optional ``.env`` file via :mod:`python-dotenv` and translate
``CONSOLE_STYLER_*`` variables into :class:`ConfigBuilder` calls.

Contents
--------
* :data:`DOTENV_ENV_VAR` – toggle read by the CLI.
* :func:`should_use_dotenv` / :func:`enable_dotenv` – ``.env`` loading.
* :func:`apply_env_overrides` / :func:`config_from_env` – variable mapping.

System Role
-----------
Only the CLI and host applications call into this module; library code never
reads the environment except through an explicit :class:`EnvReader`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from lib_console_styler.adapters.terminal import OsEnvReader
from lib_console_styler.application.ports import EnvReader
from lib_console_styler.domain import ConfigBuilder, StylerConfig

LOGGER = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LIB_CONSOLE_STYLER_USE_DOTENV"
ENV_PREFIX = "CONSOLE_STYLER_"

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})

_DOTENV_LOADED: Path | None = None


def _parse_flag(value: str | None) -> bool | None:
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    return None


def should_use_dotenv(*, explicit: bool | None, env_value: str | None = None) -> bool:
    """Decide whether to load ``.env``; an explicit CLI flag beats the env toggle.

    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    """
    if explicit is not None:
        return explicit
    return bool(_parse_flag(env_value))


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding variables that are already set.

    Returns the loaded file or ``None`` when none was found.
    """
    global _DOTENV_LOADED
    if search_from is not None:
        candidate = _search_upwards(search_from)
    else:
        found = find_dotenv(usecwd=True)
        candidate = Path(found).resolve() if found else None
    if candidate is None:
        LOGGER.debug("No .env file found")
        return None
    load_dotenv(candidate, override=False)
    _DOTENV_LOADED = candidate
    LOGGER.debug("Loaded environment from %s", candidate)
    return candidate


def _search_upwards(start: Path) -> Path | None:
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def loaded_dotenv() -> Path | None:
    return _DOTENV_LOADED


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED
    _DOTENV_LOADED = None


def apply_env_overrides(builder: ConfigBuilder, env: EnvReader | None = None) -> ConfigBuilder:
    """Apply ``CONSOLE_STYLER_*`` variables to ``builder``.

    Recognised variables: ``LOG_LEVEL``, ``COLOR``, ``EMOJI``, ``UNICODE``
    (``auto``/``enabled``/``disabled`` or a boolean), ``HISTORY_SIZE`` and
    ``THEME``. Invalid values raise :class:`ValueError` naming the variable.
    """
    reader = env or OsEnvReader()

    def read(key: str) -> str | None:
        value = reader.read_env(ENV_PREFIX + key)
        return value.strip() if value and value.strip() else None

    steps = (
        ("LOG_LEVEL", builder.log_level),
        ("COLOR", builder.color_mode),
        ("EMOJI", builder.emoji_mode),
        ("UNICODE", builder.unicode_mode),
        ("THEME", builder.theme),
        ("HISTORY_SIZE", lambda raw: builder.history(size=int(raw))),
    )
    for key, apply in steps:
        raw = read(key)
        if raw is None:
            continue
        try:
            apply(raw)
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Invalid value for {ENV_PREFIX}{key}: {raw!r}") from exc
    return builder


def config_from_env(env: EnvReader | None = None, *, base: StylerConfig | None = None) -> StylerConfig:
    return apply_env_overrides(ConfigBuilder(base), env).build()


__all__ = [
    "DOTENV_ENV_VAR",
    "ENV_PREFIX",
    "apply_env_overrides",
    "config_from_env",
    "enable_dotenv",
    "loaded_dotenv",
    "should_use_dotenv",
]
