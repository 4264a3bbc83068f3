"""Command line entry point for text-to-svg-path."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from text_to_svg_path import __version__
from text_to_svg_path.cli.commands import batch, render, template
from text_to_svg_path.config import LOG_LEVELS, Config
from text_to_svg_path.exceptions import ConfigError

console = Console()


def configure_logging(level: str) -> None:
    """Send library logs to stderr through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(__version__, prog_name="text2svgpath")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level (overrides config)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML config file",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, config_path: Path | None) -> None:
    """Convert text to SVG path outlines using any font URL."""
    ctx.ensure_object(dict)
    try:
        config = Config.load(config_path)
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    if log_level:
        config.log_level = log_level.upper()
    configure_logging(config.log_level)

    ctx.obj["config"] = config
    ctx.obj["log_level"] = config.log_level


cli.add_command(render)
cli.add_command(batch)
cli.add_command(template)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
