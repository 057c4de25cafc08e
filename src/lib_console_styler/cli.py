"""Click command-line interface.

Purpose
-------
Offer ``lib_console_styler info`` (package metadata) and
``lib_console_styler demo`` (a tour of renderers and log levels), plus the
``--use-dotenv`` toggle shared by every command.

Contents
--------
* :func:`cli` – root group.
* :func:`info` / :func:`demo` – subcommands.
* :func:`main` – ``argv`` wrapper returning an exit code.
"""

from __future__ import annotations

import os
from typing import Sequence

import click

from . import __init__conf__
from . import config as styler_config
from .domain import ConfigBuilder, LogLevel
from .domain.theme import THEMES
from .presentation import BannerRenderer, BoxRenderer, ChartRenderer, TableRenderer
from .runtime import create_logger, default_context

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _info_lines() -> list[str]:
    pairs = __init__conf__.info_lines()
    width = max(len(label) for label, _ in pairs)
    return [f"Info for {__init__conf__.name}:", "", *(f"    {label.ljust(width)} = {value}" for label, value in pairs)]


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(prog)s version %(version)s")
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help="Load environment variables from the nearest .env before running commands.",
)
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool) -> None:
    """Terminal styling and structured logging toolkit."""
    explicit = None if ctx.get_parameter_source("use_dotenv") is click.core.ParameterSource.DEFAULT else use_dotenv
    if styler_config.should_use_dotenv(explicit=explicit, env_value=os.getenv(styler_config.DOTENV_ENV_VAR)):
        styler_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo("\n".join(_info_lines()))


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def info() -> None:
    """Print package metadata."""
    click.echo("\n".join(_info_lines()))


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--theme", type=click.Choice(sorted(THEMES)), default="default", show_default=True)
@click.option("--color/--no-color", default=None, help="Force colour on or off instead of detecting it.")
@click.option("--level", default="debug", show_default=True, help="Lowest level the demo logger shows.")
def demo(theme: str, color: bool | None, level: str) -> None:
    """Show banners, boxes, tables, charts and every log level."""
    builder = styler_config.apply_env_overrides(ConfigBuilder()).theme(theme).log_level(level)
    if color is not None:
        builder.color_mode(color)
    config = builder.build()
    context = default_context(config=config)

    context.write_lines(BannerRenderer(context).header_lines(__init__conf__.name, version=__init__conf__.version, tagline=__init__conf__.title))
    context.write_lines(BoxRenderer(context).to_lines(["Capabilities", f"colour tier: {context.capabilities.color.name}", f"unicode: {context.unicode}"], title="terminal"))
    TableRenderer(context).render(
        [
            {"level": item.name, "value": item.value, "code": item.code}
            for item in LogLevel
        ],
        [{"key": "level", "width": 10}, {"key": "value", "align": "right"}, {"key": "code"}],
    )
    charts = ChartRenderer(context)
    charts.render_bar_chart([("alpha", 3), ("beta", 7), ("gamma", 5)], width=20)
    context.write_line(charts.sparkline([1, 5, 2, 8, 3, 9, 4]))

    logger = create_logger(config, context=context, namespace="demo")
    logger.section("log levels")
    for item in LogLevel:
        logger.log(item, f"{item.name.lower()} message", {"value": item.value})
    logger.child("worker").info("child logger entry", {"job": 1})
    logger.shutdown()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return its exit code instead of exiting.

    >>> main(["info"])  # doctest: +ELLIPSIS
    Info for lib_console_styler:
    ...
    0
    """
    try:
        result = cli.main(args=list(argv) if argv is not None else None, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.exceptions.Exit as exc:
        return int(exc.exit_code)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return result if isinstance(result, int) else 0


__all__ = ["cli", "demo", "info", "main"]
