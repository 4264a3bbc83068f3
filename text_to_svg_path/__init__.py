"""text-to-svg-path: Convert text to SVG path outlines using any font URL.

This library provides:
- Glyph outline extraction with fontTools and HarfBuzz placement
- Path data, path element and standalone SVG output
- Optional SVG output on a background canvas
- Batched rendering that fetches each font URL only once

Example:
    >>> from text_to_svg_path import text_to_svg_path
    >>> results = text_to_svg_path({
    ...     "title": {"text": "Hello", "fontUrl": ROBOTO_URL},
    ...     "subtitle": {"text": "World", "fontUrl": ROBOTO_URL, "fill": "#336"},
    ... })
    >>> results["title"].path_data
"""

from text_to_svg_path.api import render, render_batch, text_to_svg_path
from text_to_svg_path.config import Config, FetchSettings
from text_to_svg_path.exceptions import (
    BatchConfigError,
    BatchGroupError,
    ConfigError,
    FontFetchError,
    FontParseError,
    FontResourceError,
    RenderError,
    RequestValidationError,
    TextToSvgPathError,
)
from text_to_svg_path.models import OutputFormat, RenderRequest, RenderResult

__version__ = "0.1.0"

__all__ = [
    # Main API
    "text_to_svg_path",
    "render",
    "render_batch",
    "RenderRequest",
    "RenderResult",
    "OutputFormat",
    "Config",
    "FetchSettings",
    # Exceptions
    "TextToSvgPathError",
    "FontResourceError",
    "FontFetchError",
    "FontParseError",
    "BatchGroupError",
    "RenderError",
    "RequestValidationError",
    "ConfigError",
    "BatchConfigError",
    # Metadata
    "__version__",
]
