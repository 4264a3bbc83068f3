"""SVG markup composition.

Attribute values supplied by the caller (colours, stroke width) are
emitted verbatim; only error text embedded in placeholder SVGs is escaped.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

SVG_NS = "http://www.w3.org/2000/svg"


def format_number(value: float) -> str:
    """Format a number the shortest way that round-trips.

    Integral values drop the fractional part (``400.0`` -> ``400``).
    """
    if value == int(value):
        return str(int(value))
    return repr(float(value))


def path_element(
    path_data: str,
    fill: str,
    stroke: str,
    stroke_width: str,
    transform: str | None = None,
) -> str:
    transform_attr = f' transform="{transform}"' if transform else ""
    return (
        f'<path d="{path_data}"{transform_attr} fill="{fill}" '
        f'stroke="{stroke}" stroke-width="{stroke_width}"/>'
    )


def svg_document(
    body: str,
    width: float,
    height: float,
    view_box: tuple[float, float, float, float],
) -> str:
    """Wrap ``body`` in a namespaced root element."""
    box = " ".join(format_number(v) for v in view_box)
    return (
        f'<svg xmlns="{SVG_NS}" width="{format_number(width)}" '
        f'height="{format_number(height)}" viewBox="{box}">\n'
        f"{body}\n"
        "</svg>"
    )


def background_rect(width: float, height: float, fill: str) -> str:
    return (
        f'<rect x="0" y="0" width="{format_number(width)}" '
        f'height="{format_number(height)}" fill="{fill}"/>'
    )


def translate(x: float, y: float) -> str:
    return f"translate({format_number(x)}, {format_number(y)})"


def error_svg(message: str) -> str:
    """Return a placeholder SVG carrying a human readable error."""
    return f'<svg xmlns="{SVG_NS}"><text>Error: {escape(message)}</text></svg>'
