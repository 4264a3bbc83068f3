"""Unit tests for text_to_svg_path.generator and markup composition."""

import defusedxml.ElementTree as ET
import pytest
from conftest import FONT_URL

from text_to_svg_path.fonts.outline import FontResource
from text_to_svg_path.generator import PathGenerator, generate
from text_to_svg_path.markup import error_svg, format_number
from text_to_svg_path.models import OutputFormat, RenderRequest

SVG_NS = "{http://www.w3.org/2000/svg}"


def make_request(**overrides) -> RenderRequest:
    fields = {"text": "A", "font_url": FONT_URL}
    fields.update(overrides)
    return RenderRequest(**fields)


class TestDefaultOutputs:
    """All formats are produced when no filter is given."""

    def test_path_data_for_single_glyph(self, font: FontResource) -> None:
        result = generate(make_request(), font)
        assert result.path_data == "M0 72L21.60 21.60L43.20 72Z"

    def test_path_element_markup(self, font: FontResource) -> None:
        result = generate(
            make_request(fill="#3366CC", stroke="red", stroke_width="2"), font
        )
        assert result.path_element == (
            f'<path d="{result.path_data}" fill="#3366CC" stroke="red" stroke-width="2"/>'
        )

    def test_default_styling(self, font: FontResource) -> None:
        result = generate(make_request(), font)
        assert 'fill="#000000"' in result.path_element
        assert 'stroke="none"' in result.path_element
        assert 'stroke-width="0"' in result.path_element

    def test_svg_is_namespaced_and_embeds_path_element(self, font: FontResource) -> None:
        result = generate(make_request(), font)
        root = ET.fromstring(result.svg)
        assert root.tag == f"{SVG_NS}svg"
        paths = root.findall(f"{SVG_NS}path")
        assert len(paths) == 1
        assert paths[0].get("d") == result.path_data
        assert result.path_element in result.svg

    def test_svg_view_box_uses_padding(self, font: FontResource) -> None:
        result = generate(make_request(), font)
        root = ET.fromstring(result.svg)
        x, y, width, height = (float(v) for v in root.get("viewBox").split())
        # bbox.x1 is 0, padding is 72 * 0.2
        assert x == pytest.approx(-14.4)
        assert y == pytest.approx(21.6 - 14.4)
        assert width == float(root.get("width"))
        assert height == float(root.get("height"))
        assert int(root.get("width")) in (72, 73)
        assert int(root.get("height")) in (80, 81)

    def test_explicit_dimensions_win(self, font: FontResource) -> None:
        result = generate(make_request(width=500, height=100), font)
        root = ET.fromstring(result.svg)
        assert root.get("width") == "500"
        assert root.get("height") == "100"
        assert root.get("viewBox").endswith(" 500 100")

    def test_no_background_means_no_background_svg(self, font: FontResource) -> None:
        assert generate(make_request(), font).svg_with_background is None

    def test_y_defaults_to_font_size(self, font: FontResource) -> None:
        bbox_default = generate(make_request(font_size=36), font).path_data
        bbox_explicit = generate(make_request(font_size=36, y=36), font).path_data
        assert bbox_default == bbox_explicit


class TestBackground:
    """Tests for the background composited SVG."""

    def test_background_svg_structure(self, font: FontResource) -> None:
        result = generate(make_request(background="#333333", fill="#FFFFFF"), font)
        root = ET.fromstring(result.svg_with_background)
        assert root.get("width") == "400"
        assert root.get("height") == "200"
        assert root.get("viewBox") == "0 0 400 200"

        rect = root.find(f"{SVG_NS}rect")
        assert rect.get("fill") == "#333333"
        assert (rect.get("x"), rect.get("y")) == ("0", "0")
        assert (rect.get("width"), rect.get("height")) == ("400", "200")

        path = root.find(f"{SVG_NS}path")
        assert path.get("transform") == "translate(50, 120)"
        assert path.get("d") == result.path_data
        assert path.get("fill") == "#FFFFFF"

    def test_background_canvas_options(self, font: FontResource) -> None:
        result = generate(
            make_request(
                background="navy",
                background_width=640,
                background_height=320.5,
                background_x=12.5,
                background_y=0,
            ),
            font,
        )
        assert 'width="640" height="320.5" viewBox="0 0 640 320.5"' in result.svg_with_background
        assert 'transform="translate(12.5, 0)"' in result.svg_with_background

    def test_empty_background_is_absent(self, font: FontResource) -> None:
        assert generate(make_request(background=""), font).svg_with_background is None


class TestFormatSelection:
    """Tests for output format filtering."""

    def test_path_data_only(self, font: FontResource) -> None:
        result = generate(
            make_request(output_formats=["pathData"], background="#333333"), font
        )
        assert result.path_data
        assert result.path_element == ""
        assert result.svg == ""
        assert result.svg_with_background is None

    def test_svg_only_still_embeds_path(self, font: FontResource) -> None:
        result = generate(make_request(output_formats=[OutputFormat.SVG]), font)
        assert result.path_element == ""
        assert f'd="{result.path_data}"' in result.svg

    def test_background_requires_colour_even_when_requested(
        self, font: FontResource
    ) -> None:
        result = generate(make_request(output_formats=["svgWithBackground"]), font)
        assert result.svg_with_background is None
        assert result.svg == ""

    @pytest.mark.parametrize(
        ("formats", "background", "expected"),
        [
            (None, "#000", True),
            ([], "#000", True),
            (["svgWithBackground"], "#000", True),
            (["svg", "pathElement"], "#000", False),
            (None, None, False),
            (["svgWithBackground"], None, False),
        ],
    )
    def test_background_precondition(
        self, font: FontResource, formats, background, expected
    ) -> None:
        result = generate(
            make_request(output_formats=formats, background=background), font
        )
        assert (result.svg_with_background is not None) is expected


class TestIdempotence:
    def test_same_request_same_output(self, font: FontResource) -> None:
        request = make_request(text="AVO", background="#eee")
        first = PathGenerator().generate(request, font)
        second = PathGenerator().generate(request, font)
        assert first == second


class TestMarkupHelpers:
    def test_format_number(self) -> None:
        assert format_number(400.0) == "400"
        assert format_number(-14.4) == "-14.4"
        assert format_number(0.5) == "0.5"

    def test_error_svg_escapes_message(self) -> None:
        svg = error_svg("bad <font> & worse")
        root = ET.fromstring(svg)
        assert root.find(f"{SVG_NS}text").text == "Error: bad <font> & worse"
