"""Path generation: one request + one resolved font -> RenderResult."""

from __future__ import annotations

import math

from text_to_svg_path import markup
from text_to_svg_path.fonts.outline import FontResource
from text_to_svg_path.models import OutputFormat, RenderRequest, RenderResult

# Path data precision is part of the output contract
PATH_PRECISION = 2
PADDING_RATIO = 0.2


class PathGenerator:
    """Produce path data and SVG markup for render requests."""

    def __init__(self, precision: int = PATH_PRECISION) -> None:
        self.precision = precision

    def generate(self, request: RenderRequest, font: FontResource) -> RenderResult:
        """Render ``request`` with an already resolved ``font``.

        Path data is always computed; the other outputs are produced only
        when ``request.output_formats`` is empty or names them. The
        background SVG additionally requires ``request.background``.
        """
        geometry = font.get_path(
            request.text,
            request.x,
            request.baseline_y,
            request.font_size,
            kerning=request.kerning,
        )
        result = RenderResult(path_data=geometry.to_path_data(self.precision))

        element = markup.path_element(
            result.path_data, request.fill, request.stroke, request.stroke_width
        )
        if request.wants(OutputFormat.PATH_ELEMENT):
            result.path_element = element

        if request.wants(OutputFormat.SVG):
            bbox = geometry.bounding_box()
            padding = request.font_size * PADDING_RATIO
            # zero counts as "not given"
            width = request.width or math.ceil(bbox.width + padding * 2)
            height = request.height or math.ceil(bbox.height + padding * 2)
            result.svg = markup.svg_document(
                element,
                width,
                height,
                (bbox.x1 - padding, bbox.y1 - padding, width, height),
            )

        if request.background and request.wants(OutputFormat.SVG_WITH_BACKGROUND):
            result.svg_with_background = self._with_background(request, result.path_data)

        return result

    def _with_background(self, request: RenderRequest, path_data: str) -> str:
        w, h = request.background_width, request.background_height
        body = "\n".join(
            [
                markup.background_rect(w, h, request.background),
                markup.path_element(
                    path_data,
                    request.fill,
                    request.stroke,
                    request.stroke_width,
                    transform=markup.translate(
                        request.background_x, request.background_y
                    ),
                ),
            ]
        )
        return markup.svg_document(body, w, h, (0, 0, w, h))


def generate(request: RenderRequest, font: FontResource) -> RenderResult:
    """Render ``request`` with ``font`` using the default generator."""
    return PathGenerator().generate(request, font)
