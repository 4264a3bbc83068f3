"""Font handling for text-to-svg-path.

This subpackage provides:
- Font byte retrieval over urllib (http, https, file)
- Parsing into fontTools/HarfBuzz font objects
- Glyph outline extraction as path geometry
"""

from text_to_svg_path.fonts.fetch import Fetcher, FontFetcher, fetch_font_bytes
from text_to_svg_path.fonts.outline import BoundingBox, FontResource, PathGeometry
from text_to_svg_path.fonts.resolver import FontResolver

__all__ = [
    "Fetcher",
    "FontFetcher",
    "fetch_font_bytes",
    "BoundingBox",
    "FontResource",
    "PathGeometry",
    "FontResolver",
]
