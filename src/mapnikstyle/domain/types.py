"""Operator tags, symbolizer kinds, and the Mapnik element vocabulary."""

from __future__ import annotations

from enum import StrEnum


class FilterOperator(StrEnum):
    """Leading tag of a neutral filter tuple (geostyler tokens)."""

    EQUAL = "=="
    NOT_EQUAL = "!="
    MATCH = "*="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    MODULO = "%"
    AND = "&&"
    OR = "||"
    NOT = "!"


COMPARISON_OPERATORS = frozenset(
    {
        FilterOperator.EQUAL,
        FilterOperator.NOT_EQUAL,
        FilterOperator.MATCH,
        FilterOperator.LESS_THAN,
        FilterOperator.LESS_THAN_OR_EQUAL,
        FilterOperator.GREATER_THAN,
        FilterOperator.GREATER_THAN_OR_EQUAL,
        FilterOperator.MODULO,
    }
)
COMBINATION_OPERATORS = frozenset({FilterOperator.AND, FilterOperator.OR})


class SymbolizerKind(StrEnum):
    """Neutral symbolizer kinds."""

    FILL = "Fill"
    LINE = "Line"
    MARK = "Mark"
    ICON = "Icon"
    RASTER = "Raster"
    TEXT = "Text"


class ElementName(StrEnum):
    """Mapnik XML element names produced and consumed by the translator."""

    MAP = "Map"
    STYLE = "Style"
    RULE = "Rule"
    FILTER = "Filter"
    MIN_SCALE = "MinScaleDenominator"
    MAX_SCALE = "MaxScaleDenominator"
    POLYGON = "PolygonSymbolizer"
    POLYGON_PATTERN = "PolygonPatternSymbolizer"
    LINE = "LineSymbolizer"
    LINE_PATTERN = "LinePatternSymbolizer"
    MARKERS = "MarkersSymbolizer"
    RASTER = "RasterSymbolizer"
    TEXT = "TextSymbolizer"


SYMBOLIZER_ELEMENTS = frozenset(
    {
        ElementName.POLYGON,
        ElementName.POLYGON_PATTERN,
        ElementName.LINE,
        ElementName.LINE_PATTERN,
        ElementName.MARKERS,
        ElementName.RASTER,
        ElementName.TEXT,
    }
)
