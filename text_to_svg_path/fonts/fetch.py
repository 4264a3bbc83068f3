"""Font byte retrieval.

Fetches raw font files from any URL scheme urllib understands
(``http://``, ``https://``, ``file://``).
"""

from __future__ import annotations

import logging
import urllib.error
import urllib.request
from collections.abc import Callable

from text_to_svg_path.config import FetchSettings
from text_to_svg_path.exceptions import FontFetchError

logger = logging.getLogger(__name__)

# A fetcher takes a URL and returns the font bytes or raises FontFetchError
Fetcher = Callable[[str], bytes]


class FontFetcher:
    """Download font files over urllib.

    One call performs exactly one retrieval; there is no retry and no
    caching.
    """

    def __init__(self, settings: FetchSettings | None = None) -> None:
        self.settings = settings or FetchSettings()

    def __call__(self, url: str) -> bytes:
        return self.fetch(url)

    def fetch(self, url: str) -> bytes:
        """Fetch font bytes from URL.

        Args:
            url: URL of a TTF/OTF/WOFF resource

        Returns:
            Raw font bytes

        Raises:
            FontFetchError: If the transport fails, the response status is
                not a success, or the body exceeds ``max_size``.
        """
        max_size = self.settings.max_size
        try:
            req = urllib.request.Request(
                url,
                headers={
                    "User-Agent": self.settings.user_agent,
                    "Accept": "font/ttf, font/otf, font/woff, application/octet-stream, */*",
                },
            )
            with urllib.request.urlopen(req, timeout=self.settings.timeout) as response:
                # file:// responses carry no status
                status = getattr(response, "status", None)
                if status is not None and not 200 <= status < 300:
                    raise FontFetchError(
                        url, status_code=status, reason=getattr(response, "reason", "")
                    )

                content_length = response.headers.get("Content-Length")
                if content_length and int(content_length) > max_size:
                    raise FontFetchError(
                        url, reason=f"File too large: {content_length} bytes"
                    )

                content = response.read(max_size + 1)
                if len(content) > max_size:
                    raise FontFetchError(url, reason=f"File too large: >{max_size} bytes")

        except urllib.error.HTTPError as e:
            raise FontFetchError(url, status_code=e.code, reason=str(e.reason)) from e
        except urllib.error.URLError as e:
            raise FontFetchError(url, reason=str(e.reason)) from e
        except (OSError, ValueError) as e:
            # socket timeouts, connection resets, malformed URLs
            raise FontFetchError(url, reason=str(e)) from e

        logger.debug("Fetched %d bytes from %s", len(content), url)
        return content


def fetch_font_bytes(url: str, settings: FetchSettings | None = None) -> bytes:
    """Fetch font bytes from URL with the given settings."""
    return FontFetcher(settings).fetch(url)
