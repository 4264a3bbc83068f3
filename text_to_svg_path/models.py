"""Render request and result models."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from text_to_svg_path.exceptions import RequestValidationError

DEFAULT_FONT_SIZE = 72.0
DEFAULT_FILL = "#000000"
DEFAULT_STROKE = "none"
DEFAULT_STROKE_WIDTH = "0"
DEFAULT_BACKGROUND_WIDTH = 400.0
DEFAULT_BACKGROUND_HEIGHT = 200.0
DEFAULT_BACKGROUND_X = 50.0
DEFAULT_BACKGROUND_Y = 120.0


class OutputFormat(str, Enum):
    """Output kinds a request can ask for."""

    SVG = "svg"
    PATH_DATA = "pathData"
    PATH_ELEMENT = "pathElement"
    SVG_WITH_BACKGROUND = "svgWithBackground"

    @classmethod
    def parse(cls, value: Any) -> OutputFormat:
        if isinstance(value, cls):
            return value
        for member in cls:
            if value in (member.value, member.name, member.name.lower()):
                return member
        valid = ", ".join(m.value for m in cls)
        raise RequestValidationError(
            f"unknown output format {value!r} (expected one of: {valid})"
        )


# snake_case field name -> camelCase key used by JSON/YAML callers
_CAMEL_KEYS = {
    "text": "text",
    "font_url": "fontUrl",
    "font_size": "fontSize",
    "fill": "fill",
    "stroke": "stroke",
    "stroke_width": "strokeWidth",
    "kerning": "kerning",
    "x": "x",
    "y": "y",
    "width": "width",
    "height": "height",
    "background": "background",
    "background_width": "backgroundWidth",
    "background_height": "backgroundHeight",
    "background_x": "backgroundX",
    "background_y": "backgroundY",
    "output_formats": "outputFormats",
}
_FIELD_FOR_KEY = {**{v: k for k, v in _CAMEL_KEYS.items()}, **{k: k for k in _CAMEL_KEYS}}

_NUMBER_FIELDS = {
    "font_size",
    "x",
    "y",
    "width",
    "height",
    "background_width",
    "background_height",
    "background_x",
    "background_y",
}
_STRING_FIELDS = {"text", "font_url", "fill", "stroke", "background"}


def canonical_field(key: str) -> str | None:
    """Return the RenderRequest field a camelCase or snake_case key names."""
    return _FIELD_FOR_KEY.get(key)


@dataclass(frozen=True)
class RenderRequest:
    """One piece of text to render with one font."""

    text: str
    font_url: str
    font_size: float = DEFAULT_FONT_SIZE
    fill: str = DEFAULT_FILL
    stroke: str = DEFAULT_STROKE
    stroke_width: str = DEFAULT_STROKE_WIDTH
    kerning: bool = True
    x: float = 0.0
    # None means "baseline at font_size"
    y: float | None = None
    width: float | None = None
    height: float | None = None
    background: str | None = None
    background_width: float = DEFAULT_BACKGROUND_WIDTH
    background_height: float = DEFAULT_BACKGROUND_HEIGHT
    background_x: float = DEFAULT_BACKGROUND_X
    background_y: float = DEFAULT_BACKGROUND_Y
    output_formats: frozenset[OutputFormat] | None = None

    def __post_init__(self) -> None:
        for name in sorted(_NUMBER_FIELDS):
            value = getattr(self, name)
            if value is not None and not math.isfinite(value):
                raise RequestValidationError(
                    f"{_CAMEL_KEYS[name]}: expected a finite number, got {value!r}"
                )
        if self.font_size <= 0:
            raise RequestValidationError(
                f"fontSize: must be positive, got {self.font_size!r}"
            )
        if self.output_formats is not None:
            if isinstance(self.output_formats, str):
                raise RequestValidationError(
                    "outputFormats: expected a list of format names, got str"
                )
            object.__setattr__(
                self,
                "output_formats",
                frozenset(OutputFormat.parse(f) for f in self.output_formats),
            )

    @property
    def baseline_y(self) -> float:
        return self.font_size if self.y is None else self.y

    def wants(self, output_format: OutputFormat) -> bool:
        """Return True if ``output_format`` should be produced."""
        if not self.output_formats:
            return True
        return output_format in self.output_formats

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RenderRequest:
        """Build a request from camelCase or snake_case keys.

        Raises:
            RequestValidationError: On unknown keys, missing required fields
                or values of the wrong type.
        """
        if not isinstance(data, Mapping):
            raise RequestValidationError(
                f"expected a mapping of request fields, got {type(data).__name__}"
            )

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _FIELD_FOR_KEY.get(key)
            if name is None:
                raise RequestValidationError(f"unknown request field {key!r}")
            if name in kwargs:
                raise RequestValidationError(
                    f"field {_CAMEL_KEYS[name]!r} given more than once"
                )
            kwargs[name] = _coerce(name, value)

        for required in ("text", "font_url"):
            if kwargs.get(required) is None:
                raise RequestValidationError(
                    f"missing required {_CAMEL_KEYS[required]!r} field"
                )
        return cls(**kwargs)


def _coerce(name: str, value: Any) -> Any:
    key = _CAMEL_KEYS[name]
    if value is None:
        return None
    if name in _NUMBER_FIELDS:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise RequestValidationError(
                f"{key}: expected number, got {type(value).__name__}"
            )
        return float(value)
    if name in _STRING_FIELDS:
        if not isinstance(value, str):
            raise RequestValidationError(
                f"{key}: expected string, got {type(value).__name__}"
            )
        return value
    if name == "stroke_width":
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise RequestValidationError(
                f"{key}: expected string, got {type(value).__name__}"
            )
        return str(value)
    if name == "kerning":
        if not isinstance(value, bool):
            raise RequestValidationError(
                f"{key}: expected boolean, got {type(value).__name__}"
            )
        return value
    if name == "output_formats":
        if isinstance(value, str) or not isinstance(value, Iterable):
            raise RequestValidationError(
                f"{key}: expected a list of format names, got {type(value).__name__}"
            )
        return frozenset(OutputFormat.parse(v) for v in value)
    return value


@dataclass
class RenderResult:
    """Path data and markup produced for one request."""

    path_data: str = ""
    path_element: str = ""
    svg: str = ""
    svg_with_background: str | None = None
    # Set only on degraded batch results
    error: str | None = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, str]:
        """Return the result keyed the way JSON consumers expect."""
        data = {
            "svg": self.svg,
            "pathData": self.path_data,
            "pathElement": self.path_element,
        }
        if self.svg_with_background is not None:
            data["svgWithBackground"] = self.svg_with_background
        if self.error is not None:
            data["error"] = self.error
        return data

