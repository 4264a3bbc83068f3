"""Batch command - render many labelled texts from a YAML file.

Batch file layout::

    defaults:            # optional, merged into every request
      fontUrl: https://example.com/Roboto-Regular.ttf
      fontSize: 48
    requests:            # required, label -> request fields
      title:
        text: Hello
      subtitle:
        text: World
        fill: "#336699"
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from text_to_svg_path.api import render_batch
from text_to_svg_path.config import Config
from text_to_svg_path.exceptions import BatchConfigError, RequestValidationError
from text_to_svg_path.models import RenderRequest, RenderResult, canonical_field

console = Console()

LABEL_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

TEMPLATE = """\
# text2svgpath batch file
#
# Every entry under `requests` is rendered; entries sharing a fontUrl
# download that font only once.

defaults:
  fontUrl: https://raw.githubusercontent.com/googlefonts/roboto/main/src/hinted/Roboto-Regular.ttf
  fontSize: 72
  fill: "#000000"

requests:
  hello:
    text: Hello World
    fill: "#3366CC"

  takaiva:
    text: takaiva
    fontUrl: https://raw.githubusercontent.com/google/fonts/main/ofl/chakrapetch/ChakraPetch-Regular.ttf
    fontSize: 60
    fill: "#FFFFFF"
    background: "#333333"

  path-only:
    text: Path only
    outputFormats: [pathData, pathElement]
"""


@dataclass
class BatchFile:
    """Parsed batch file."""

    requests: dict[str, RenderRequest]


def load_batch_file(path: Path) -> BatchFile:
    """Load and validate a YAML batch file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        BatchConfigError: If the YAML is invalid or any request is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Batch file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise BatchConfigError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise BatchConfigError("Empty YAML batch file")
    if not isinstance(data, dict):
        raise BatchConfigError("expected a mapping at top level")

    unknown = set(data) - {"defaults", "requests"}
    if unknown:
        raise BatchConfigError(
            f"unknown top-level keys: {', '.join(sorted(map(str, unknown)))}"
        )

    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
        raise BatchConfigError("defaults: expected a mapping")

    if "requests" not in data:
        raise BatchConfigError("requests: required field is missing")
    entries = data["requests"]
    if entries is None or (isinstance(entries, dict) and not entries):
        raise BatchConfigError("requests: at least one request is required")
    if not isinstance(entries, dict):
        raise BatchConfigError("requests: expected a mapping of label to request")

    requests: dict[str, RenderRequest] = {}
    for raw_label, entry in entries.items():
        label = str(raw_label)
        if not LABEL_PATTERN.match(label):
            raise BatchConfigError(
                f"requests.{label}: label may only contain letters, digits, '.', '_' or '-'"
            )
        if not isinstance(entry, dict):
            raise BatchConfigError(f"requests.{label}: expected a mapping")
        try:
            requests[label] = RenderRequest.from_mapping(_merge(defaults, entry))
        except RequestValidationError as e:
            raise BatchConfigError(f"requests.{label}: {e.message}") from e

    return BatchFile(requests=requests)


def _merge(defaults: dict[str, Any], entry: dict[str, Any]) -> dict[str, Any]:
    # an entry may spell a key differently from the defaults (fontUrl/font_url)
    overridden = {canonical_field(k) or k for k in entry}
    merged = {
        k: v for k, v in defaults.items() if (canonical_field(k) or k) not in overridden
    }
    merged.update(entry)
    return merged


def write_results(results: dict[str, RenderResult], output_dir: Path) -> list[Path]:
    """Write SVG files and results.json for a batch run."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for label, result in results.items():
        if result.svg:
            svg_path = output_dir / f"{label}.svg"
            svg_path.write_text(result.svg + "\n", encoding="utf-8")
            written.append(svg_path)
        if result.svg_with_background:
            bg_path = output_dir / f"{label}.bg.svg"
            bg_path.write_text(result.svg_with_background + "\n", encoding="utf-8")
            written.append(bg_path)

    summary_path = output_dir / "results.json"
    summary_path.write_text(
        json.dumps({label: r.to_dict() for label, r in results.items()}, indent=2),
        encoding="utf-8",
    )
    written.append(summary_path)
    return written


@click.command()
@click.argument("batch_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output-dir", "-o", type=click.Path(file_okay=False, path_type=Path), required=True, help="Output directory")
@click.option("-j", "--jobs", type=click.IntRange(min=1), help="Fonts fetched in parallel (overrides config)")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON instead of a table")
@click.option("--strict", is_flag=True, help="Exit with status 1 if any request failed")
@click.pass_context
def batch(
    ctx: click.Context,
    batch_file: Path,
    output_dir: Path,
    jobs: int | None,
    as_json: bool,
    strict: bool,
) -> None:
    """Render every request in BATCH_FILE.

    BATCH_FILE: YAML file with optional `defaults` and a `requests` mapping.
    """
    config = ctx.obj.get("config") or Config.load()
    if jobs:
        config.jobs = jobs

    try:
        parsed = load_batch_file(batch_file)
    except BatchConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    fonts = {r.font_url for r in parsed.requests.values()}
    with console.status(
        f"[bold green]Rendering {len(parsed.requests)} texts with {len(fonts)} fonts..."
    ):
        results = render_batch(parsed.requests, config=config)

    write_results(results, output_dir)
    failed = [label for label, r in results.items() if not r.ok]

    if as_json:
        click.echo(json.dumps({label: r.to_dict() for label, r in results.items()}, indent=2))
    else:
        table = Table(title="Batch results")
        table.add_column("Label", style="cyan")
        table.add_column("Status")
        table.add_column("Font", style="dim")
        for label, result in results.items():
            status = "[green]ok[/green]" if result.ok else f"[red]{escape(result.error or '')}[/red]"
            table.add_row(label, status, parsed.requests[label].font_url)
        console.print(table)

        console.print()
        console.print("[bold]Batch complete:[/bold]")
        console.print(f"  [green]Success:[/green] {len(results) - len(failed)}")
        console.print(f"  [red]Failed:[/red] {len(failed)}")
        console.print(f"  [blue]Output:[/blue] {output_dir}")

    if failed and strict:
        raise SystemExit(1)


@click.command()
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write template to file")
def template(output: Path | None) -> None:
    """Print an example batch file."""
    if output:
        output.write_text(TEMPLATE, encoding="utf-8")
        console.print(f"[green]Template written to[/green] {output}")
    else:
        click.echo(TEMPLATE, nl=False)
