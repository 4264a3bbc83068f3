"""Public entry points.

Example:
    >>> from text_to_svg_path import render, RenderRequest
    >>> result = render(RenderRequest(text="Hello", font_url=FONT_URL))
    >>> result.svg
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import Any, TypeVar, Union, overload

from text_to_svg_path.batcher import RequestBatcher
from text_to_svg_path.config import Config
from text_to_svg_path.exceptions import RequestValidationError
from text_to_svg_path.fonts.fetch import Fetcher
from text_to_svg_path.fonts.resolver import FontResolver
from text_to_svg_path.models import RenderRequest, RenderResult

K = TypeVar("K", bound=Hashable)

RequestLike = Union[RenderRequest, Mapping[str, Any]]


def _batcher(config: Config | None, fetcher: Fetcher | None) -> RequestBatcher:
    config = config or Config()
    resolver = FontResolver(fetcher=fetcher, settings=config.fetch)
    return RequestBatcher(resolver=resolver, jobs=config.jobs)


def as_request(value: RequestLike) -> RenderRequest:
    if isinstance(value, RenderRequest):
        return value
    return RenderRequest.from_mapping(value)


def is_single_request(options: Any) -> bool:
    """Return True if ``options`` describes one request rather than a batch.

    A RenderRequest, or a mapping carrying both ``text`` and a font URL
    (``fontUrl`` or ``font_url``) directly, is a single request.
    """
    if isinstance(options, RenderRequest):
        return True
    if not isinstance(options, Mapping):
        raise RequestValidationError(
            f"expected a request or a mapping of requests, got {type(options).__name__}"
        )
    return "text" in options and ("fontUrl" in options or "font_url" in options)


def render(
    request: RequestLike,
    *,
    config: Config | None = None,
    fetcher: Fetcher | None = None,
) -> RenderResult:
    """Render a single request.

    Raises:
        RenderError: If the font cannot be fetched or parsed.
        RequestValidationError: If ``request`` is a malformed mapping.
    """
    return _batcher(config, fetcher).run_single(as_request(request))


def render_batch(
    requests: Mapping[K, RequestLike],
    *,
    config: Config | None = None,
    fetcher: Fetcher | None = None,
) -> dict[K, RenderResult]:
    """Render a labelled collection of requests.

    Each distinct font URL is fetched once. Font failures degrade the
    results of the labels using that font; the call itself succeeds.

    Raises:
        RequestValidationError: If any entry is a malformed mapping. Nothing
            is fetched in that case.
    """
    parsed: dict[K, RenderRequest] = {}
    for label, value in requests.items():
        try:
            parsed[label] = as_request(value)
        except RequestValidationError as e:
            raise RequestValidationError(f"{label}: {e.message}") from e
    return _batcher(config, fetcher).run_batch(parsed)


@overload
def text_to_svg_path(
    options: RenderRequest,
    *,
    config: Config | None = ...,
    fetcher: Fetcher | None = ...,
) -> RenderResult: ...


@overload
def text_to_svg_path(
    options: Mapping[Any, Any],
    *,
    config: Config | None = ...,
    fetcher: Fetcher | None = ...,
) -> RenderResult | dict[Any, RenderResult]: ...


def text_to_svg_path(
    options: Any,
    *,
    config: Config | None = None,
    fetcher: Fetcher | None = None,
) -> RenderResult | dict[Any, RenderResult]:
    """Render one request or a labelled batch, depending on the input shape.

    See is_single_request() for how the shape is decided.
    """
    if is_single_request(options):
        return render(options, config=config, fetcher=fetcher)
    return render_batch(options, config=config, fetcher=fetcher)
