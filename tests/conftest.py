"""Pytest configuration and shared fixtures for text-to-svg-path tests."""

from io import BytesIO
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from text_to_svg_path.exceptions import FontFetchError
from text_to_svg_path.fonts.outline import FontResource

UNITS_PER_EM = 1000
ADVANCE = 600
KERN_AV = -100


def _polygon(points: list[tuple[int, int]]):
    pen = TTGlyphPen(None)
    pen.moveTo(points[0])
    for pt in points[1:]:
        pen.lineTo(pt)
    pen.closePath()
    return pen.glyph()


def _oval():
    pen = TTGlyphPen(None)
    pen.moveTo((300, 0))
    pen.qCurveTo((600, 0), (600, 350))
    pen.qCurveTo((600, 700), (300, 700))
    pen.qCurveTo((0, 700), (0, 350))
    pen.qCurveTo((0, 0), (300, 0))
    pen.closePath()
    return pen.glyph()


def build_test_font(kerning: bool = True) -> bytes:
    """Build a tiny TrueType font with glyphs for 'A', 'V', 'O' and space.

    'A' is a triangle with its apex at (300, 700), 'V' the inverted
    triangle, 'O' a quadratic oval and .notdef a 500x700 box. With
    ``kerning`` the pair A V is tightened by 100 units through GPOS.
    """
    fb = FontBuilder(unitsPerEm=UNITS_PER_EM, isTTF=True)
    glyph_order = [".notdef", "space", "A", "V", "O"]
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({0x20: "space", 0x41: "A", 0x56: "V", 0x4F: "O"})
    fb.setupGlyf(
        {
            ".notdef": _polygon([(50, 0), (50, 700), (550, 700), (550, 0)]),
            "space": TTGlyphPen(None).glyph(),
            "A": _polygon([(0, 0), (300, 700), (600, 0)]),
            "V": _polygon([(0, 700), (600, 700), (300, 0)]),
            "O": _oval(),
        }
    )
    fb.setupHorizontalMetrics(
        {
            ".notdef": (ADVANCE, 50),
            "space": (ADVANCE, 0),
            "A": (ADVANCE, 0),
            "V": (ADVANCE, 0),
            "O": (ADVANCE, 0),
        }
    )
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "T2SP Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    if kerning:
        fb.addOpenTypeFeatures(
            "languagesystem DFLT dflt;\n"
            "languagesystem latn dflt;\n"
            f"feature kern {{ pos A V {KERN_AV}; }} kern;\n"
        )
    buffer = BytesIO()
    fb.save(buffer)
    return buffer.getvalue()


class CountingFetcher:
    """In-memory fetcher that records every URL it is asked for."""

    def __init__(self, fonts: dict[str, bytes]) -> None:
        self.fonts = fonts
        self.calls: list[str] = []

    def __call__(self, url: str) -> bytes:
        self.calls.append(url)
        if url not in self.fonts:
            raise FontFetchError(url, status_code=404, reason="Not Found")
        return self.fonts[url]


FONT_URL = "https://fonts.example.com/T2SPTest-Regular.ttf"
OTHER_FONT_URL = "https://fonts.example.com/T2SPTest-Other.ttf"
MISSING_FONT_URL = "https://fonts.example.com/missing.ttf"
GARBAGE_FONT_URL = "https://fonts.example.com/not-a-font.ttf"


@pytest.fixture(scope="session")
def font_bytes() -> bytes:
    """Return the bytes of the kerned test font."""
    return build_test_font()


@pytest.fixture
def font(font_bytes: bytes) -> FontResource:
    """Return the test font parsed into a FontResource."""
    return FontResource.from_bytes(FONT_URL, font_bytes)


@pytest.fixture
def font_file(tmp_path: Path, font_bytes: bytes) -> Path:
    """Write the test font to disk and return its path."""
    path = tmp_path / "T2SPTest-Regular.ttf"
    path.write_bytes(font_bytes)
    return path


@pytest.fixture
def font_file_url(font_file: Path) -> str:
    """Return a file:// URL for the test font."""
    return font_file.as_uri()


@pytest.fixture
def fetcher(font_bytes: bytes) -> CountingFetcher:
    """Fetcher serving two valid fonts and one non-font blob."""
    return CountingFetcher(
        {
            FONT_URL: font_bytes,
            OTHER_FONT_URL: font_bytes,
            GARBAGE_FONT_URL: b"<html>not a font</html>",
        }
    )
