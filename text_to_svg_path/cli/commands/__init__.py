"""CLI commands for text-to-svg-path."""

from text_to_svg_path.cli.commands.batch import batch, template
from text_to_svg_path.cli.commands.render import render

__all__ = ["render", "batch", "template"]
