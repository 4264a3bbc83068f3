"""Exception hierarchy for text-to-svg-path.

All errors raised by the library derive from TextToSvgPathError so callers
can catch a single base class.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from typing import Any


class TextToSvgPathError(Exception):
    """Base class for all text-to-svg-path errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class FontResourceError(TextToSvgPathError):
    """A font resource could not be turned into a usable font object."""

    def __init__(
        self, url: str, message: str, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message, details)
        self.url = url


class FontFetchError(FontResourceError):
    """Font bytes could not be retrieved.

    Raised for transport failures (DNS, refused connections, timeouts) and
    for responses with a non-success status.
    """

    def __init__(
        self,
        url: str,
        status_code: int | None = None,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason or "unknown error"
        if status_code is not None:
            message = f"Failed to fetch font: {self.reason} ({status_code})"
        else:
            message = f"Failed to fetch font: {self.reason}"
        super().__init__(url, message, details)


class FontParseError(FontResourceError):
    """Retrieved bytes are not a font fontTools can read."""

    def __init__(
        self, url: str, reason: str, details: dict[str, Any] | None = None
    ) -> None:
        self.reason = reason
        super().__init__(url, f"Failed to parse font: {reason}", details)


class BatchGroupError(TextToSvgPathError):
    """A font group in a batch could not be resolved.

    Non-fatal: the batcher turns it into a degraded result for every label
    of the group.
    """

    def __init__(
        self, font_url: str, labels: Sequence[Hashable], cause: FontResourceError
    ) -> None:
        super().__init__(
            cause.message,
            details={"font_url": font_url, "labels": list(labels)},
        )
        self.font_url = font_url
        self.labels = list(labels)
        self.cause = cause


class RenderError(TextToSvgPathError):
    """A single-request render failed."""


class RequestValidationError(TextToSvgPathError, ValueError):
    """A render request has missing or ill-typed fields."""


class ConfigError(TextToSvgPathError, ValueError):
    """Configuration file or environment override is invalid."""


class BatchConfigError(TextToSvgPathError, ValueError):
    """A YAML batch file is malformed."""
