"""Font resource resolution: URL -> bytes -> FontResource."""

from __future__ import annotations

import logging

from text_to_svg_path.config import FetchSettings
from text_to_svg_path.fonts.fetch import Fetcher, FontFetcher
from text_to_svg_path.fonts.outline import FontResource

logger = logging.getLogger(__name__)


class FontResolver:
    """Fetch and parse font resources.

    Every call to resolve() performs one retrieval; deduplication is the
    batcher's job.
    """

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        settings: FetchSettings | None = None,
    ) -> None:
        self.fetcher = fetcher or FontFetcher(settings)

    def resolve(self, font_url: str) -> FontResource:
        """Return the parsed font behind ``font_url``.

        Raises:
            FontFetchError: If the bytes cannot be retrieved.
            FontParseError: If the bytes are not a readable font.
        """
        logger.info("Fetching font from %s...", font_url)
        data = self.fetcher(font_url)
        font = FontResource.from_bytes(font_url, data)
        logger.debug(
            "Parsed %s: %d glyphs, %d units per em",
            font_url,
            len(font.glyph_order),
            font.units_per_em,
        )
        return font
