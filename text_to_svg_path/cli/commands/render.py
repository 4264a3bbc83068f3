"""Render command - convert one text to SVG."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from text_to_svg_path.api import render as render_request
from text_to_svg_path.config import Config
from text_to_svg_path.exceptions import RenderError, RequestValidationError
from text_to_svg_path.models import OutputFormat, RenderRequest

console = Console(stderr=True)

FORMAT_NAMES = [f.value for f in OutputFormat]


@click.command()
@click.argument("text")
@click.option("--font-url", "-f", required=True, help="URL of a TTF/OTF/WOFF font")
@click.option("--font-size", "-s", type=float, default=72.0, show_default=True, help="Font size in px")
@click.option("--fill", default="#000000", show_default=True, help="Fill colour")
@click.option("--stroke", default="none", show_default=True, help="Stroke colour")
@click.option("--stroke-width", default="0", show_default=True, help="Stroke width")
@click.option("--kerning/--no-kerning", default=True, show_default=True, help="Apply font kerning")
@click.option("-x", type=float, default=0.0, show_default=True, help="Baseline origin x")
@click.option("-y", type=float, default=None, help="Baseline origin y [default: font size]")
@click.option("--width", type=float, help="SVG width (default: fit glyphs)")
@click.option("--height", type=float, help="SVG height (default: fit glyphs)")
@click.option("--background", "-b", help="Background colour; enables svgWithBackground")
@click.option("--background-width", type=float, default=400.0, show_default=True)
@click.option("--background-height", type=float, default=200.0, show_default=True)
@click.option("--background-x", type=float, default=50.0, show_default=True)
@click.option("--background-y", type=float, default=120.0, show_default=True)
@click.option(
    "--format",
    "formats",
    multiple=True,
    type=click.Choice(FORMAT_NAMES),
    help="Output format to generate (repeatable, default: all)",
)
@click.option(
    "--show",
    type=click.Choice(FORMAT_NAMES),
    default=OutputFormat.SVG.value,
    show_default=True,
    help="Which output to print or write",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write output to file")
@click.pass_context
def render(
    ctx: click.Context,
    text: str,
    font_url: str,
    font_size: float,
    fill: str,
    stroke: str,
    stroke_width: str,
    kerning: bool,
    x: float,
    y: float | None,
    width: float | None,
    height: float | None,
    background: str | None,
    background_width: float,
    background_height: float,
    background_x: float,
    background_y: float,
    formats: tuple[str, ...],
    show: str,
    output: Path | None,
) -> None:
    """Convert TEXT to an SVG path using the font at --font-url."""
    config = ctx.obj.get("config") or Config.load()

    try:
        request = RenderRequest(
            text=text,
            font_url=font_url,
            font_size=font_size,
            fill=fill,
            stroke=stroke,
            stroke_width=stroke_width,
            kerning=kerning,
            x=x,
            y=y,
            width=width,
            height=height,
            background=background,
            background_width=background_width,
            background_height=background_height,
            background_x=background_x,
            background_y=background_y,
            output_formats=frozenset(OutputFormat(f) for f in formats) or None,
        )
    except RequestValidationError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    try:
        result = render_request(request, config=config)
    except RenderError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    content = {
        OutputFormat.SVG.value: result.svg,
        OutputFormat.PATH_DATA.value: result.path_data,
        OutputFormat.PATH_ELEMENT.value: result.path_element,
        OutputFormat.SVG_WITH_BACKGROUND.value: result.svg_with_background,
    }[show]
    if not content:
        hint = " (pass --background)" if show == OutputFormat.SVG_WITH_BACKGROUND.value else ""
        console.print(f"[red]Error:[/red] {show} was not generated{hint}")
        raise SystemExit(1)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content + "\n", encoding="utf-8")
        console.print(f"[green]Wrote[/green] {output}")
    else:
        click.echo(content)
