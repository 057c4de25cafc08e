"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

name = "lib_console_styler"
title = "Terminal styling and structured logging toolkit"
version = "1.0.0"
homepage = "https://github.com/lib-console-styler/lib_console_styler"
author = "lib_console_styler maintainers"
shell_command = "lib_console_styler"


def info_lines() -> list[tuple[str, str]]:
    """Return the ``(label, value)`` pairs printed by ``lib_console_styler info``."""
    return [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("shell_command", shell_command),
    ]


__all__ = ["author", "homepage", "info_lines", "name", "shell_command", "title", "version"]
