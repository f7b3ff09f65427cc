"""Symbolizer translation: neutral symbolizers <-> Mapnik symbolizer elements.

Each kind has an ordered mapping table. A mapping knows how to write one
neutral field into one or more target attributes and how to read it back;
absent attributes leave the neutral field unset. Attribute values read from
markup arrive as strings and are coerced back to numbers, booleans and lists.

Element names:

- Fill   -> ``PolygonSymbolizer`` (``PolygonPatternSymbolizer`` with graphicFill),
  plus a sibling ``LineSymbolizer`` when any outline field is set
- Line   -> ``LineSymbolizer`` (``LinePatternSymbolizer`` with graphicFill)
- Mark   -> ``MarkersSymbolizer``
- Icon   -> ``MarkersSymbolizer``
- Raster -> ``RasterSymbolizer``
- Text   -> ``TextSymbolizer``
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from mapnikstyle.domain.errors import MalformedDocumentError, UnrecognizedElementError
from mapnikstyle.domain.node import Node, Scalar
from mapnikstyle.domain.style import (
    BaseSymbolizer,
    FillSymbolizer,
    IconSymbolizer,
    LineSymbolizer,
    MarkSymbolizer,
    RasterSymbolizer,
    TextSymbolizer,
)
from mapnikstyle.domain.types import ElementName, SymbolizerKind
from mapnikstyle.translation.glyphs import lookup_glyph, resolve_glyph

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------

_INT_PATTERN = re.compile(r"[-+]?\d+")
_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off"})
_ROTATE_PATTERN = re.compile(
    r"^\s*rotate\(\s*([-+]?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?)\s*(?:deg)?\s*\)\s*$"
)


def _same(value: Any) -> Any:
    return value


def to_number(value: Any) -> int | float:
    """Coerce a markup value to int or float (ints stay ints)."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    if _INT_PATTERN.fullmatch(text):
        return int(text)
    return float(text)


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def to_text(value: Any) -> str:
    return str(value)


def join_numbers(values: list[int | float]) -> str:
    return ",".join(str(v) for v in values)


def split_numbers(value: Any) -> list[int | float]:
    if isinstance(value, (list, tuple)):
        return [to_number(v) for v in value]
    return [to_number(part) for part in re.split(r"[,\s]+", str(value).strip()) if part]


def _join_fonts(fonts: list[str]) -> str:
    return ",".join(fonts)


def _split_fonts(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [part.strip() for part in str(value).split(",") if part.strip()]


def _antialias_to_gamma(antialias: bool) -> int:
    return 1 if antialias else 0


def _gamma_to_antialias(gamma: Any) -> bool:
    return to_number(gamma) != 0


def _rotate_to_transform(degrees: int | float) -> str:
    return f"rotate({degrees}deg)"


def _transform_to_rotate(transform: Any) -> int | float | None:
    match = _ROTATE_PATTERN.match(str(transform))
    if match is None:
        raise ValueError(f"unsupported transform: {transform!r}")
    return to_number(match.group(1))


# ---------------------------------------------------------------------------
# Mapping tables
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AttributeMapping:
    """One neutral field <-> one target attribute."""

    field: str
    attribute: str
    to_target: Callable[[Any], Scalar] = _same
    to_neutral: Callable[[Any], Any] = _same

    def write(self, value: Any, base_path: str | None) -> dict[str, Scalar]:
        return {self.attribute: self.to_target(value)}

    def read(self, attributes: Mapping[str, Scalar]) -> Any:
        if self.attribute not in attributes:
            return None
        return self.to_neutral(attributes[self.attribute])

    @property
    def attributes(self) -> tuple[str, ...]:
        return (self.attribute,)


@dataclass(frozen=True)
class CompositeMapping:
    """One neutral field <-> several target attributes (or a computed one)."""

    field: str
    writer: Callable[[Any, str | None], dict[str, Scalar]]
    reader: Callable[[Mapping[str, Scalar]], Any]
    attributes: tuple[str, ...] = ()

    def write(self, value: Any, base_path: str | None) -> dict[str, Scalar]:
        return self.writer(value, base_path)

    def read(self, attributes: Mapping[str, Scalar]) -> Any:
        return self.reader(attributes)


FieldMapping = AttributeMapping | CompositeMapping


def _graphic_file(graphic: MarkSymbolizer | IconSymbolizer, base_path: str | None) -> dict:
    if isinstance(graphic, MarkSymbolizer):
        if graphic.well_known_name is None:
            return {}
        return {"file": resolve_glyph(graphic.well_known_name, base_path)}
    if graphic.image is None:
        return {}
    return {"file": graphic.image}


def graphic_from_file(path: str) -> MarkSymbolizer | IconSymbolizer:
    """Recover a graphic from a file path: a known glyph becomes a Mark, anything else an Icon."""
    name = lookup_glyph(path)
    if name is not None:
        return MarkSymbolizer(well_known_name=name)
    return IconSymbolizer(image=path)


def _read_file(attributes: Mapping[str, Scalar]) -> str | None:
    value = attributes.get("file")
    return None if value is None else str(value)


def _read_graphic(attributes: Mapping[str, Scalar]) -> MarkSymbolizer | IconSymbolizer | None:
    path = _read_file(attributes)
    return None if path is None else graphic_from_file(path)


def _read_glyph_name(attributes: Mapping[str, Scalar]) -> str | None:
    path = _read_file(attributes)
    return None if path is None else lookup_glyph(path)


def _read_image(attributes: Mapping[str, Scalar]) -> str | None:
    path = _read_file(attributes)
    if path is None or lookup_glyph(path) is not None:
        return None
    return path


def _read_radius(attributes: Mapping[str, Scalar]) -> int | float | None:
    for key in ("width", "height"):
        if key in attributes:
            return to_number(attributes[key])
    return None


def _read_first(key: str, convert: Callable[[Any], Any]) -> Callable[[Mapping[str, Scalar]], Any]:
    def reader(attributes: Mapping[str, Scalar]) -> Any:
        return convert(attributes[key]) if key in attributes else None

    return reader


def _read_offset(attributes: Mapping[str, Scalar]) -> tuple[int | float, int | float] | None:
    if "dx" not in attributes and "dy" not in attributes:
        return None
    return (to_number(attributes.get("dx", 0)), to_number(attributes.get("dy", 0)))


# Anchor -> (vertical-alignment, horizontal-alignment); None leaves that side unset.
ANCHOR_ALIGNMENTS: Mapping[str, tuple[str | None, str | None]] = MappingProxyType(
    {
        "center": ("middle", "middle"),
        "left": (None, "left"),
        "right": (None, "right"),
        "top": ("top", None),
        "bottom": ("bottom", None),
        "top-left": ("top", "left"),
        "top-right": ("top", "right"),
        "bottom-left": ("bottom", "left"),
        "bottom-right": ("bottom", "right"),
    }
)
_ANCHORS_BY_ALIGNMENT = MappingProxyType({v: k for k, v in ANCHOR_ALIGNMENTS.items()})


def _write_anchor(anchor: str, _base_path: str | None) -> dict[str, Scalar]:
    vertical, horizontal = ANCHOR_ALIGNMENTS[anchor]
    attrs: dict[str, Scalar] = {}
    if vertical is not None:
        attrs["vertical-alignment"] = vertical
    if horizontal is not None:
        attrs["horizontal-alignment"] = horizontal
    return attrs


def _read_anchor(attributes: Mapping[str, Scalar]) -> str | None:
    vertical = attributes.get("vertical-alignment")
    horizontal = attributes.get("horizontal-alignment")
    key = (
        None if vertical is None else str(vertical),
        None if horizontal is None else str(horizontal),
    )
    return _ANCHORS_BY_ALIGNMENT.get(key)


_ROTATE_TRANSFORM = AttributeMapping(
    "rotate", "transform", _rotate_to_transform, _transform_to_rotate
)

FILL_MAPPINGS: tuple[FieldMapping, ...] = (
    AttributeMapping("color", "fill", to_text, to_text),
    AttributeMapping("opacity", "fill-opacity", _same, to_number),
    AttributeMapping("antialias", "gamma", _antialias_to_gamma, _gamma_to_antialias),
    CompositeMapping("graphic_fill", _graphic_file, _read_graphic, ("file",)),
)

OUTLINE_MAPPINGS: tuple[FieldMapping, ...] = (
    AttributeMapping("outline_color", "stroke", to_text, to_text),
    AttributeMapping("outline_opacity", "stroke-opacity", _same, to_number),
    AttributeMapping("outline_width", "stroke-width", _same, to_number),
    AttributeMapping("outline_dasharray", "stroke-dasharray", join_numbers, split_numbers),
)

LINE_MAPPINGS: tuple[FieldMapping, ...] = (
    AttributeMapping("color", "stroke", to_text, to_text),
    AttributeMapping("opacity", "stroke-opacity", _same, to_number),
    AttributeMapping("width", "stroke-width", _same, to_number),
    AttributeMapping("cap", "stroke-linecap", to_text, to_text),
    AttributeMapping("join", "stroke-linejoin", to_text, to_text),
    AttributeMapping("dasharray", "stroke-dasharray", join_numbers, split_numbers),
)

MARK_MAPPINGS: tuple[FieldMapping, ...] = (
    AttributeMapping("fill_opacity", "opacity", _same, to_number),
    AttributeMapping("stroke_color", "stroke", to_text, to_text),
    AttributeMapping("stroke_width", "stroke-width", _same, to_number),
    AttributeMapping("stroke_opacity", "stroke-opacity", _same, to_number),
    CompositeMapping(
        "radius",
        lambda radius, _: {"width": radius, "height": radius},
        _read_radius,
        ("width", "height"),
    ),
    CompositeMapping(
        "well_known_name",
        lambda name, base_path: {"file": resolve_glyph(name, base_path)},
        _read_glyph_name,
        ("file",),
    ),
    AttributeMapping("color", "fill", to_text, to_text),
    AttributeMapping("avoid_edges", "avoid-edges", _same, to_bool),
    _ROTATE_TRANSFORM,
)

ICON_MAPPINGS: tuple[FieldMapping, ...] = (
    AttributeMapping("color", "fill", to_text, to_text),
    AttributeMapping("avoid_edges", "avoid-edges", _same, to_bool),
    _ROTATE_TRANSFORM,
    AttributeMapping("allow_overlap", "allow-overlap", _same, to_bool),
    CompositeMapping("image", lambda image, _: {"file": image}, _read_image, ("file",)),
)

RASTER_MAPPINGS: tuple[FieldMapping, ...] = (
    AttributeMapping("opacity", "opacity", _same, to_number),
)

TEXT_MAPPINGS: tuple[FieldMapping, ...] = (
    AttributeMapping("opacity", "opacity", _same, to_number),
    AttributeMapping("allow_overlap", "allow-overlap", _same, to_bool),
    AttributeMapping("avoid_edges", "avoid-edges", _same, to_bool),
    AttributeMapping("color", "fill", to_text, to_text),
    AttributeMapping("font", "face-name", _join_fonts, _split_fonts),
    AttributeMapping("size", "size", _same, to_number),
    AttributeMapping("halo_color", "halo-fill", to_text, to_text),
    AttributeMapping("halo_width", "halo-radius", _same, to_number),
    AttributeMapping("justify", "justify-alignment", to_text, to_text),
    AttributeMapping("letter_spacing", "character-spacing", _same, to_number),
    AttributeMapping("line_height", "line-spacing", _same, to_number),
    AttributeMapping("padding", "margin", _same, to_number),
    AttributeMapping("transform", "text-transform", to_text, to_text),
    AttributeMapping("max_angle", "max-char-angle-delta", _same, to_number),
    CompositeMapping(
        "max_width",
        lambda width, _: {"wrap-before": True, "wrap-width": width},
        _read_first("wrap-width", to_number),
        ("wrap-before", "wrap-width"),
    ),
    CompositeMapping(
        "rotate",
        lambda degrees, _: {"rotate-displacement": True, "orientation": degrees},
        _read_first("orientation", to_number),
        ("rotate-displacement", "orientation"),
    ),
    CompositeMapping(
        "offset",
        lambda offset, _: {"dx": offset[0], "dy": offset[1]},
        _read_offset,
        ("dx", "dy"),
    ),
    CompositeMapping(
        "anchor",
        _write_anchor,
        _read_anchor,
        ("vertical-alignment", "horizontal-alignment"),
    ),
)

# Mark-only attributes; their presence on a markers element means Mark, not Icon.
_MARK_ONLY_ATTRIBUTES = frozenset(
    {"opacity", "stroke", "stroke-width", "stroke-opacity", "width", "height"}
)


def write_attributes(
    symbolizer: BaseSymbolizer,
    mappings: tuple[FieldMapping, ...],
    base_path: str | None = None,
) -> dict[str, Scalar]:
    """Apply a mapping table to every set field of *symbolizer*, in table order."""
    attributes: dict[str, Scalar] = {}
    for mapping in mappings:
        value = getattr(symbolizer, mapping.field)
        if value is not None:
            attributes.update(mapping.write(value, base_path))
    return attributes


def read_fields(
    node: Node,
    mappings: tuple[FieldMapping, ...],
) -> dict[str, Any]:
    """Invert a mapping table over *node*'s attributes; unset fields are omitted."""
    fields: dict[str, Any] = {}
    for mapping in mappings:
        try:
            value = mapping.read(node.attributes)
        except ValueError as exc:
            names = ", ".join(mapping.attributes) or mapping.field
            msg = f"Invalid value for {names} on <{node.name}>: {exc}"
            raise MalformedDocumentError(msg) from exc
        if value is not None:
            fields[mapping.field] = value
    return fields


def _hide(attributes: dict[str, Scalar], opacity_attribute: str) -> dict[str, Scalar]:
    """visibility=false: force zero opacity, keep every other attribute."""
    attributes[opacity_attribute] = 0
    return attributes


# ---------------------------------------------------------------------------
# Write
# ---------------------------------------------------------------------------


def _write_fill(symbolizer: FillSymbolizer, base_path: str | None) -> list[Node]:
    attributes = write_attributes(symbolizer, FILL_MAPPINGS, base_path)
    if symbolizer.visibility is False:
        _hide(attributes, "fill-opacity")
    name = ElementName.POLYGON_PATTERN if symbolizer.graphic_fill else ElementName.POLYGON
    nodes = [Node(name, attributes)]

    if symbolizer.has_outline:
        outline = write_attributes(symbolizer, OUTLINE_MAPPINGS, base_path)
        if symbolizer.visibility is False:
            _hide(outline, "stroke-opacity")
        nodes.append(Node(ElementName.LINE, outline))
    return nodes


def _write_line(symbolizer: LineSymbolizer, base_path: str | None) -> list[Node]:
    attributes = write_attributes(symbolizer, LINE_MAPPINGS, base_path)
    if symbolizer.visibility is False:
        _hide(attributes, "stroke-opacity")
    # graphicFill takes precedence over graphicStroke for the single file slot.
    for graphic in (symbolizer.graphic_stroke, symbolizer.graphic_fill):
        if graphic is not None:
            attributes.update(_graphic_file(graphic, base_path))
    name = ElementName.LINE_PATTERN if symbolizer.graphic_fill else ElementName.LINE
    return [Node(name, attributes)]


def _write_mark(symbolizer: MarkSymbolizer, base_path: str | None) -> list[Node]:
    attributes = write_attributes(symbolizer, MARK_MAPPINGS, base_path)
    if symbolizer.visibility is False:
        _hide(attributes, "opacity")
    return [Node(ElementName.MARKERS, attributes)]


def _write_icon(symbolizer: IconSymbolizer, base_path: str | None) -> list[Node]:
    attributes = write_attributes(symbolizer, ICON_MAPPINGS, base_path)
    if symbolizer.visibility is False:
        _hide(attributes, "opacity")
    return [Node(ElementName.MARKERS, attributes)]


def _write_raster(symbolizer: RasterSymbolizer, base_path: str | None) -> list[Node]:
    attributes = write_attributes(symbolizer, RASTER_MAPPINGS, base_path)
    if symbolizer.visibility is False:
        _hide(attributes, "opacity")
    return [Node(ElementName.RASTER, attributes)]


def _write_text(symbolizer: TextSymbolizer, base_path: str | None) -> list[Node]:
    attributes = write_attributes(symbolizer, TEXT_MAPPINGS, base_path)
    if symbolizer.visibility is False:
        _hide(attributes, "opacity")
    text = None if symbolizer.label is None else f"[{symbolizer.label}]"
    return [Node(ElementName.TEXT, attributes, text)]


_WRITERS: dict[str, Callable[[Any, str | None], list[Node]]] = {
    SymbolizerKind.FILL: _write_fill,
    SymbolizerKind.LINE: _write_line,
    SymbolizerKind.MARK: _write_mark,
    SymbolizerKind.ICON: _write_icon,
    SymbolizerKind.RASTER: _write_raster,
    SymbolizerKind.TEXT: _write_text,
}


def symbolizer_to_nodes(symbolizer: BaseSymbolizer, *, base_path: str | None = None) -> list[Node]:
    """Translate one neutral symbolizer into its Mapnik element(s).

    Raises:
        UnsupportedSymbolError: a Mark (or graphic) names an unknown glyph.
    """
    kind = getattr(symbolizer, "kind", None)
    writer = _WRITERS.get(kind)  # type: ignore[arg-type]
    if writer is None:
        raise UnrecognizedElementError(str(kind))
    nodes = writer(symbolizer, base_path)
    logger.debug("Translated %s symbolizer to %s", kind, [n.name for n in nodes])
    return nodes


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------


def _read_fill(node: Node) -> FillSymbolizer:
    return FillSymbolizer(**read_fields(node, FILL_MAPPINGS))


def _read_line(node: Node) -> LineSymbolizer:
    fields = read_fields(node, LINE_MAPPINGS)
    path = _read_file(node.attributes)
    if path is not None:
        slot = "graphic_fill" if node.name == ElementName.LINE_PATTERN else "graphic_stroke"
        fields[slot] = graphic_from_file(path)
    return LineSymbolizer(**fields)


def _read_markers(node: Node) -> MarkSymbolizer | IconSymbolizer:
    path = _read_file(node.attributes)
    if path is not None:
        is_mark = lookup_glyph(path) is not None
    elif _MARK_ONLY_ATTRIBUTES & node.attributes.keys():
        is_mark = True
    else:
        is_mark = "allow-overlap" not in node.attributes
    if is_mark:
        return MarkSymbolizer(**read_fields(node, MARK_MAPPINGS))
    return IconSymbolizer(**read_fields(node, ICON_MAPPINGS))


def _read_raster(node: Node) -> RasterSymbolizer:
    return RasterSymbolizer(**read_fields(node, RASTER_MAPPINGS))


def _read_label(text: str | None) -> str | None:
    if text is None or not text.strip():
        return None
    stripped = text.strip()
    if stripped.startswith("[") and stripped.endswith("]") and stripped.count("[") == 1:
        return stripped[1:-1]
    return stripped


def _read_text(node: Node) -> TextSymbolizer:
    fields = read_fields(node, TEXT_MAPPINGS)
    label = _read_label(node.text)
    if label is not None:
        fields["label"] = label
    return TextSymbolizer(**fields)


_READERS: dict[str, Callable[[Node], BaseSymbolizer]] = {
    ElementName.POLYGON: _read_fill,
    ElementName.POLYGON_PATTERN: _read_fill,
    ElementName.LINE: _read_line,
    ElementName.LINE_PATTERN: _read_line,
    ElementName.MARKERS: _read_markers,
    ElementName.RASTER: _read_raster,
    ElementName.TEXT: _read_text,
}


def node_to_symbolizer(node: Node) -> BaseSymbolizer:
    """Translate one Mapnik symbolizer element back into a neutral symbolizer.

    Raises:
        UnrecognizedElementError: *node* is not one of the seven symbolizer elements.
        MalformedDocumentError: an attribute value cannot be coerced.
    """
    reader = _READERS.get(node.name)
    if reader is None:
        raise UnrecognizedElementError(node.name, ElementName.RULE)
    return reader(node)
