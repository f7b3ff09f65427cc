"""Neutral style models: Style, Rule, ScaleDenominator, and symbolizers.

Field names follow the geostyler JSON shape (camelCase aliases); Python
attributes are snake_case. A field is "set" when it is not None, so a
literal zero is always distinguishable from "not specified".

All models use Pydantic with frozen config for immutability.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

Number = int | float
Scalar = str | int | float | bool | None

# A filter is a recursive tagged tuple: (operator, *operands).
Filter = tuple[Any, ...]

Anchor = Literal[
    "center",
    "left",
    "right",
    "top",
    "bottom",
    "top-left",
    "top-right",
    "bottom-left",
    "bottom-right",
]

_MODEL_CONFIG = {
    "frozen": True,
    "populate_by_name": True,
    "alias_generator": to_camel,
}


def rebuild_nested(value: Any, container: Callable[[list[Any]], Any]) -> Any:
    """Rebuild nested lists/tuples bottom-up with *container*.

    Uses an explicit stack, so filters nested deeper than the interpreter's
    recursion limit convert like any other.
    """
    if not isinstance(value, (list, tuple)):
        return value
    stack: list[tuple[Iterator[Any], list[Any], list[Any] | None]] = [(iter(value), [], None)]
    while True:
        items, built, parent = stack[-1]
        for item in items:
            if isinstance(item, (list, tuple)):
                built.append(None)  # placeholder for the child being built
                stack.append((iter(item), [], built))
                break
            built.append(item)
        else:
            stack.pop()
            finished = container(built)
            if parent is None:
                return finished
            parent[-1] = finished


def _as_tuple(value: Any) -> Any:
    return rebuild_nested(value, tuple)


class ScaleDenominator(BaseModel):
    """Scale range over which a rule is active; None means unbounded."""

    model_config = _MODEL_CONFIG

    min: Number | None = None
    max: Number | None = None


class BaseSymbolizer(BaseModel):
    """Fields shared by every symbolizer kind."""

    model_config = _MODEL_CONFIG

    visibility: bool | None = None


class MarkSymbolizer(BaseSymbolizer):
    """Point marker drawn from a well-known glyph."""

    kind: Literal["Mark"] = "Mark"
    well_known_name: str | None = None
    radius: Number | None = None
    color: str | None = None
    fill_opacity: Number | None = None
    stroke_color: str | None = None
    stroke_width: Number | None = None
    stroke_opacity: Number | None = None
    avoid_edges: bool | None = None
    rotate: Number | None = None


class IconSymbolizer(BaseSymbolizer):
    """Point marker drawn from an image file."""

    kind: Literal["Icon"] = "Icon"
    image: str | None = None
    allow_overlap: bool | None = None
    color: str | None = None
    avoid_edges: bool | None = None
    rotate: Number | None = None


PointSymbolizer = Annotated[MarkSymbolizer | IconSymbolizer, Field(discriminator="kind")]


class FillSymbolizer(BaseSymbolizer):
    """Polygon fill, optionally patterned and outlined."""

    kind: Literal["Fill"] = "Fill"
    color: str | None = None
    opacity: Number | None = None
    antialias: bool | None = None
    graphic_fill: PointSymbolizer | None = None
    outline_color: str | None = None
    outline_opacity: Number | None = None
    outline_width: Number | None = None
    outline_dasharray: list[Number] | None = None

    @property
    def has_outline(self) -> bool:
        return any(
            value is not None
            for value in (
                self.outline_color,
                self.outline_opacity,
                self.outline_width,
                self.outline_dasharray,
            )
        )


class LineSymbolizer(BaseSymbolizer):
    """Line stroke, optionally patterned."""

    kind: Literal["Line"] = "Line"
    color: str | None = None
    opacity: Number | None = None
    width: Number | None = None
    cap: str | None = None
    join: str | None = None
    dasharray: list[Number] | None = None
    graphic_stroke: PointSymbolizer | None = None
    graphic_fill: PointSymbolizer | None = None


class RasterSymbolizer(BaseSymbolizer):
    """Raster layer drawing."""

    kind: Literal["Raster"] = "Raster"
    opacity: Number | None = None


class TextSymbolizer(BaseSymbolizer):
    """Label placement and typography."""

    kind: Literal["Text"] = "Text"
    label: str | None = None
    opacity: Number | None = None
    allow_overlap: bool | None = None
    avoid_edges: bool | None = None
    color: str | None = None
    font: list[str] | None = None
    size: Number | None = None
    halo_color: str | None = None
    halo_width: Number | None = None
    justify: str | None = None
    letter_spacing: Number | None = None
    line_height: Number | None = None
    padding: Number | None = None
    transform: str | None = None
    max_angle: Number | None = None
    max_width: Number | None = None
    rotate: Number | None = None
    offset: tuple[Number, Number] | None = None
    anchor: Anchor | None = None


Symbolizer = Annotated[
    FillSymbolizer
    | LineSymbolizer
    | MarkSymbolizer
    | IconSymbolizer
    | RasterSymbolizer
    | TextSymbolizer,
    Field(discriminator="kind"),
]


class Rule(BaseModel):
    """One styling rule: optional filter and scale range, ordered symbolizers."""

    model_config = _MODEL_CONFIG

    name: str | None = None
    filter: Filter | None = None
    scale_denominator: ScaleDenominator | None = None
    symbolizers: list[Symbolizer] = Field(default_factory=list)

    @field_validator("filter", mode="before")
    @classmethod
    def _normalize_filter(cls, value: Any) -> Any:
        """JSON filters arrive as nested lists; store them as nested tuples."""
        return _as_tuple(value)


class Style(BaseModel):
    """A named, ordered list of rules."""

    model_config = _MODEL_CONFIG

    name: str = ""
    rules: list[Rule] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        """Dump to the JSON-shaped neutral IR (camelCase, unset fields omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
