"""Request batching with per-font deduplication.

Requests sharing a font URL form a font group. Each group resolves its font
once and renders every request of the group with it; a group whose font
cannot be resolved degrades its own labels and nothing else.
"""

from __future__ import annotations

import concurrent.futures
import logging
from collections.abc import Hashable, Mapping
from typing import TypeVar

from text_to_svg_path import markup
from text_to_svg_path.exceptions import (
    BatchGroupError,
    FontResourceError,
    RenderError,
)
from text_to_svg_path.fonts.resolver import FontResolver
from text_to_svg_path.generator import PathGenerator
from text_to_svg_path.models import RenderRequest, RenderResult

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


def group_by_font(requests: Mapping[K, RenderRequest]) -> dict[str, list[K]]:
    """Partition request labels by font URL, keeping input order."""
    groups: dict[str, list[K]] = {}
    for label, request in requests.items():
        groups.setdefault(request.font_url, []).append(label)
    return groups


def degraded_result(error: BatchGroupError) -> RenderResult:
    """Return the placeholder result for a label whose font failed."""
    return RenderResult(
        path_data="",
        path_element="",
        svg=markup.error_svg(error.message),
        svg_with_background=None,
        error=error.message,
    )


class RequestBatcher:
    """Run render requests, resolving each font URL at most once per call."""

    def __init__(
        self,
        resolver: FontResolver | None = None,
        generator: PathGenerator | None = None,
        jobs: int = 4,
    ) -> None:
        if jobs < 1:
            raise ValueError("jobs must be at least 1")
        self.resolver = resolver or FontResolver()
        self.generator = generator or PathGenerator()
        self.jobs = jobs

    def run_single(self, request: RenderRequest) -> RenderResult:
        """Render one request.

        Raises:
            RenderError: If the font cannot be fetched or parsed.
        """
        try:
            font = self.resolver.resolve(request.font_url)
        except FontResourceError as e:
            raise RenderError(
                f"Error generating SVG path: {e.message}",
                details={"font_url": request.font_url},
            ) from e
        return self.generator.generate(request, font)

    def run_batch(self, requests: Mapping[K, RenderRequest]) -> dict[K, RenderResult]:
        """Render a labelled collection of requests.

        Returns:
            A result for every input label, in input order. Labels whose
            font could not be resolved get a degraded result.
        """
        groups = group_by_font(requests)
        logger.debug(
            "Batch of %d requests uses %d distinct fonts", len(requests), len(groups)
        )

        collected: dict[K, RenderResult] = {}
        if self.jobs == 1 or len(groups) <= 1:
            for font_url, labels in groups.items():
                collected.update(self._run_group(font_url, labels, requests))
        else:
            workers = min(self.jobs, len(groups))
            with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [
                    executor.submit(self._run_group, font_url, labels, requests)
                    for font_url, labels in groups.items()
                ]
                for future in concurrent.futures.as_completed(futures):
                    collected.update(future.result())

        return {label: collected[label] for label in requests}

    def _run_group(
        self,
        font_url: str,
        labels: list[K],
        requests: Mapping[K, RenderRequest],
    ) -> dict[K, RenderResult]:
        try:
            font = self.resolver.resolve(font_url)
        except FontResourceError as e:
            error = BatchGroupError(font_url, labels, e)
            logger.warning(
                "Font %s failed for %d request(s): %s", font_url, len(labels), e.message
            )
            return {label: degraded_result(error) for label in labels}

        return {label: self.generator.generate(requests[label], font) for label in labels}
