"""Tests for style assembly and output options."""

from __future__ import annotations

import pytest

from mapnikstyle.config.models import OutputOptions
from mapnikstyle.domain.errors import MalformedDocumentError
from mapnikstyle.domain.node import Node
from mapnikstyle.domain.style import (
    FillSymbolizer,
    RasterSymbolizer,
    Rule,
    Style,
    TextSymbolizer,
)
from mapnikstyle.translation.styles import (
    apply_output_options,
    find_style_node,
    node_to_style,
    style_to_node,
)


class TestStyleToNode:
    def test_wrapped_in_map_by_default(self, roads_style: Style) -> None:
        root = style_to_node(roads_style)
        assert root.name == "Map"
        style = root.find("Style")
        assert style is not None
        assert style.attributes == {"name": "roads"}
        assert [r.attributes["name"] for r in style.find_all("Rule")] == [
            "highways",
            "labels",
            "parks",
        ]

    def test_bare_style(self, roads_style: Style) -> None:
        root = style_to_node(roads_style, OutputOptions(include_map=False))
        assert root.name == "Style"

    def test_unnamed_style_has_no_name_attribute(self) -> None:
        root = style_to_node(Style(rules=[Rule()]), OutputOptions(include_map=False))
        assert root.attributes == {}

    def test_glyph_base_path_applied(self) -> None:
        style = Style.model_validate(
            {"rules": [{"symbolizers": [{"kind": "Mark", "wellKnownName": "Star"}]}]}
        )
        root = style_to_node(style, OutputOptions(glyph_base_path="/sym"))
        markers = next(n for n in root.walk() if n.name == "MarkersSymbolizer")
        assert markers.attributes["file"] == "/sym/star.svg"


class TestOutputOptions:
    def test_map_and_style_options(self, roads_style: Style) -> None:
        options = OutputOptions(
            map={"srs": "+init=epsg:3857", "background-color": "#fff"},
            style={"opacity": 0.9},
        )
        root = style_to_node(roads_style, options)
        assert root.attributes == {"srs": "+init=epsg:3857", "background-color": "#fff"}
        style = root.find("Style")
        assert style is not None
        assert style.attributes == {"name": "roads", "opacity": 0.9}

    def test_computed_attributes_win(self) -> None:
        style = Style(name="real", rules=[Rule(symbolizers=[FillSymbolizer(color="#f00")])])
        options = OutputOptions(
            style={"name": "configured"},
            symbolizers={"PolygonSymbolizer": {"fill": "#00f", "comp-op": "multiply"}},
        )
        root = style_to_node(style, options)
        style_node = root.find("Style")
        assert style_node is not None
        assert style_node.attributes["name"] == "real"
        polygon = next(n for n in root.walk() if n.name == "PolygonSymbolizer")
        assert polygon.attributes == {"fill": "#f00", "comp-op": "multiply"}

    def test_symbolizer_options_reach_outline(self) -> None:
        style = Style(rules=[Rule(symbolizers=[FillSymbolizer(outline_color="#000")])])
        options = OutputOptions(symbolizers={"LineSymbolizer": {"smooth": 0.5}})
        root = style_to_node(style, options)
        line = next(n for n in root.walk() if n.name == "LineSymbolizer")
        assert line.attributes == {"stroke": "#000", "smooth": 0.5}

    def test_hidden_raster_keeps_configured_attributes(self) -> None:
        style = Style(
            rules=[Rule(symbolizers=[RasterSymbolizer(opacity=0.7, visibility=False)])]
        )
        options = OutputOptions(symbolizers={"RasterSymbolizer": {"scaling": "bilinear"}})
        root = style_to_node(style, options)
        raster = next(n for n in root.walk() if n.name == "RasterSymbolizer")
        assert raster.attributes == {"opacity": 0, "scaling": "bilinear"}

    def test_merge_is_pure(self) -> None:
        node = Node("Map", {"srs": "a"})
        merged = apply_output_options(node, OutputOptions(map={"buffer-size": 128}))
        assert node.attributes == {"srs": "a"}
        assert merged.attributes == {"srs": "a", "buffer-size": 128}

    def test_unknown_symbolizer_option_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown symbolizer element"):
            OutputOptions(symbolizers={"ShieldSymbolizer": {"a": 1}})

    def test_aliases_accepted(self) -> None:
        options = OutputOptions.model_validate(
            {"includeMapContainer": False, "styleOptions": {"opacity": 1}}
        )
        assert options.include_map is False
        assert options.style == {"opacity": 1}


class TestFindStyleNode:
    def test_bare_style_root(self) -> None:
        node = Node("Style")
        assert find_style_node(node) is node

    def test_map_root(self) -> None:
        style = Node("Style", {"name": "s"})
        assert find_style_node(Node("Map", children=(style,))) is style

    @pytest.mark.parametrize(
        ("root", "message"),
        [
            (Node("Layer"), "Expected a <Map> or <Style> root"),
            (Node("Map"), "no <Style>"),
            (Node("Map", children=(Node("Style"), Node("Style"))), "2 <Style> elements"),
        ],
    )
    def test_malformed(self, root: Node, message: str) -> None:
        with pytest.raises(MalformedDocumentError, match=message):
            find_style_node(root)


class TestNodeToStyle:
    def test_round_trip(self, roads_style: Style) -> None:
        assert node_to_style(style_to_node(roads_style)) == roads_style

    def test_round_trip_without_map(self, roads_style: Style) -> None:
        root = style_to_node(roads_style, OutputOptions(include_map=False))
        assert node_to_style(root) == roads_style

    def test_unnamed_style_reads_empty_name(self) -> None:
        root = Node("Style", children=(Node("Rule", children=(Node("TextSymbolizer"),)),))
        assert node_to_style(root) == Style(rules=[Rule(symbolizers=[TextSymbolizer()])])
