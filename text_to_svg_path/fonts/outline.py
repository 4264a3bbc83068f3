"""Glyph outline extraction.

A FontResource wraps a parsed font (fontTools for outlines, HarfBuzz for
glyph placement) and turns a run of text into PathGeometry: absolute
M/L/Q/C/Z commands in SVG user space (Y axis pointing down).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from io import BytesIO
from typing import Any, NamedTuple

import uharfbuzz as hb
from fontTools.misc.bezierTools import calcCubicBounds, calcQuadraticBounds
from fontTools.pens.basePen import BasePen
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont

from text_to_svg_path.exceptions import FontParseError

Point = tuple[float, float]


class BoundingBox(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1


def format_coordinate(value: float, precision: int) -> str:
    """Format one path coordinate.

    Integral values are written without a fractional part, everything else
    with exactly ``precision`` decimals.
    """
    if round(value) == value:
        return str(int(round(value)))
    return f"{value:.{precision}f}"


def _pack(values: tuple[float, ...], precision: int) -> str:
    out = []
    for i, value in enumerate(values):
        # negative numbers carry their own separator
        if value >= 0 and i > 0:
            out.append(" ")
        out.append(format_coordinate(value, precision))
    return "".join(out)


@dataclass
class PathGeometry:
    """Outline commands for a run of text."""

    commands: list[tuple[str, tuple[float, ...]]] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.commands)

    def to_path_data(self, precision: int = 2) -> str:
        """Serialize to an SVG path ``d`` string."""
        parts = []
        for op, values in self.commands:
            if op == "Z":
                parts.append("Z")
            else:
                parts.append(op + _pack(values, precision))
        return "".join(parts)

    def bounding_box(self) -> BoundingBox:
        """Return exact bounds, curve extrema included.

        An empty geometry has the bounding box (0, 0, 0, 0).
        """
        xs: list[float] = []
        ys: list[float] = []
        start: Point = (0.0, 0.0)
        current: Point = (0.0, 0.0)

        for op, values in self.commands:
            if op == "M":
                start = current = (values[0], values[1])
                xs.append(values[0])
                ys.append(values[1])
            elif op == "L":
                current = (values[0], values[1])
                xs.append(values[0])
                ys.append(values[1])
            elif op == "Q":
                ctrl, end = (values[0], values[1]), (values[2], values[3])
                x_min, y_min, x_max, y_max = calcQuadraticBounds(current, ctrl, end)
                xs += [x_min, x_max]
                ys += [y_min, y_max]
                current = end
            elif op == "C":
                c1, c2 = (values[0], values[1]), (values[2], values[3])
                end = (values[4], values[5])
                x_min, y_min, x_max, y_max = calcCubicBounds(current, c1, c2, end)
                xs += [x_min, x_max]
                ys += [y_min, y_max]
                current = end
            elif op == "Z":
                current = start

        if not xs:
            return BoundingBox(0.0, 0.0, 0.0, 0.0)
        return BoundingBox(min(xs), min(ys), max(xs), max(ys))


class _GeometryPen(BasePen):
    """Collect pen calls as PathGeometry commands.

    BasePen splits TrueType runs of off-curve points into single quadratic
    segments and decomposes components through the glyph set.
    """

    def __init__(self, glyph_set: Any, geometry: PathGeometry) -> None:
        super().__init__(glyph_set)
        self.geometry = geometry

    def _moveTo(self, pt: Point) -> None:
        self.geometry.commands.append(("M", (pt[0], pt[1])))

    def _lineTo(self, pt: Point) -> None:
        self.geometry.commands.append(("L", (pt[0], pt[1])))

    def _qCurveToOne(self, pt1: Point, pt2: Point) -> None:
        self.geometry.commands.append(("Q", (pt1[0], pt1[1], pt2[0], pt2[1])))

    def _curveToOne(self, pt1: Point, pt2: Point, pt3: Point) -> None:
        self.geometry.commands.append(
            ("C", (pt1[0], pt1[1], pt2[0], pt2[1], pt3[0], pt3[1]))
        )

    def _closePath(self) -> None:
        self.geometry.commands.append(("Z", ()))

    def _endPath(self) -> None:
        pass


@dataclass
class FontResource:
    """A parsed font, ready to produce glyph outlines."""

    url: str
    ttfont: TTFont
    hb_font: Any
    units_per_em: int
    glyph_set: Any = field(repr=False)
    glyph_order: list[str] = field(repr=False)

    @classmethod
    def from_bytes(cls, url: str, data: bytes) -> FontResource:
        """Parse font bytes.

        Raises:
            FontParseError: If fontTools cannot read the data.
        """
        if not data:
            raise FontParseError(url, "empty font data")
        try:
            ttfont = TTFont(BytesIO(data), fontNumber=0)
            # decompile everything now so a corrupt table fails here
            ttfont.ensureDecompiled()
            units_per_em = ttfont["head"].unitsPerEm
            glyph_order = ttfont.getGlyphOrder()
            glyph_set = ttfont.getGlyphSet()
            if ttfont.getBestCmap() is None:
                raise FontParseError(url, "font has no Unicode cmap")
            if ttfont.flavor is not None:
                # HarfBuzz reads plain sfnt only
                ttfont.flavor = None
                buffer = BytesIO()
                ttfont.save(buffer)
                data = buffer.getvalue()
        except FontParseError:
            raise
        except Exception as e:
            raise FontParseError(url, str(e) or type(e).__name__) from e

        hb_face = hb.Face(hb.Blob(data), 0)
        hb_font = hb.Font(hb_face)
        hb_font.scale = (units_per_em, units_per_em)
        return cls(
            url=url,
            ttfont=ttfont,
            hb_font=hb_font,
            units_per_em=units_per_em,
            glyph_set=glyph_set,
            glyph_order=glyph_order,
        )

    def get_path(
        self,
        text: str,
        x: float,
        y: float,
        font_size: float,
        kerning: bool = True,
    ) -> PathGeometry:
        """Return the outline of ``text`` with its baseline starting at (x, y)."""
        geometry = PathGeometry()
        if not text:
            return geometry

        buf = hb.Buffer()
        buf.add_str(text)
        buf.guess_segment_properties()
        hb.shape(self.hb_font, buf, {"kern": kerning})

        scale = font_size / self.units_per_em
        pen = _GeometryPen(self.glyph_set, geometry)
        cursor = 0
        for info, pos in zip(buf.glyph_infos, buf.glyph_positions):
            glyph_name = self.glyph_order[info.codepoint]
            origin_x = x + (cursor + pos.x_offset) * scale
            origin_y = y - pos.y_offset * scale
            # font units, Y up -> user space, Y down
            tpen = TransformPen(pen, (scale, 0, 0, -scale, origin_x, origin_y))
            self.glyph_set[glyph_name].draw(tpen)
            cursor += pos.x_advance
        return geometry
