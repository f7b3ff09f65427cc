"""Tests for the neutral style models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mapnikstyle.domain.style import (
    FillSymbolizer,
    IconSymbolizer,
    MarkSymbolizer,
    Rule,
    Style,
    TextSymbolizer,
    rebuild_nested,
)
from mapnikstyle.domain.types import FilterOperator


class TestSymbolizerUnion:
    def test_dispatches_on_kind(self) -> None:
        rule = Rule.model_validate(
            {
                "symbolizers": [
                    {"kind": "Fill", "color": "#fff"},
                    {"kind": "Mark", "wellKnownName": "Star"},
                    {"kind": "Icon", "image": "pin.png"},
                ]
            }
        )
        assert isinstance(rule.symbolizers[0], FillSymbolizer)
        assert isinstance(rule.symbolizers[1], MarkSymbolizer)
        assert rule.symbolizers[1].well_known_name == "Star"
        assert isinstance(rule.symbolizers[2], IconSymbolizer)

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Rule.model_validate({"symbolizers": [{"kind": "Hatch"}]})

    def test_nested_graphic_fill(self) -> None:
        fill = FillSymbolizer.model_validate(
            {"graphicFill": {"kind": "Mark", "wellKnownName": "shape://slash"}}
        )
        assert isinstance(fill.graphic_fill, MarkSymbolizer)

    def test_snake_case_names_accepted(self) -> None:
        text = TextSymbolizer(halo_color="#000", letter_spacing=2)
        assert text.halo_color == "#000"
        assert text.letter_spacing == 2


class TestFillOutline:
    def test_no_outline_by_default(self) -> None:
        assert FillSymbolizer(color="#f00").has_outline is False

    def test_zero_width_counts_as_outline(self) -> None:
        assert FillSymbolizer(outline_width=0).has_outline is True


class TestRuleFilter:
    def test_lists_become_tuples(self) -> None:
        rule = Rule.model_validate({"filter": ["&&", ["==", "a", "1"], ["<", "b", "2"]]})
        assert rule.filter == ("&&", ("==", "a", "1"), ("<", "b", "2"))

    def test_enum_tags_compare_equal_to_strings(self) -> None:
        rule = Rule(filter=(FilterOperator.EQUAL, "a", "1"))
        assert rule.filter == ("==", "a", "1")

    def test_deep_lists_become_tuples(self) -> None:
        document: list = ["==", "a", "1"]
        for _ in range(5000):
            document = ["!", document]
        rule = Rule.model_validate({"filter": document})
        node = rule.filter
        depth = 0
        while node is not None and node[0] == "!":
            assert isinstance(node, tuple)
            node = node[1]
            depth += 1
        assert depth == 5000
        assert node == ("==", "a", "1")


class TestRebuildNested:
    def test_scalars_pass_through(self) -> None:
        assert rebuild_nested("x", tuple) == "x"
        assert rebuild_nested(None, list) is None

    def test_mixed_containers(self) -> None:
        value = ("&&", ["==", "a", "1"], ("!", ["<", "b", 2]))
        assert rebuild_nested(value, list) == ["&&", ["==", "a", "1"], ["!", ["<", "b", 2]]]
        assert rebuild_nested(value, tuple) == ("&&", ("==", "a", "1"), ("!", ("<", "b", 2)))

    def test_empty_and_sibling_containers(self) -> None:
        assert rebuild_nested([[], [[1], 2], 3], tuple) == ((), ((1,), 2), 3)


class TestStyleDocument:
    def test_to_document_uses_camel_case_and_omits_unset(self) -> None:
        style = Style(
            name="s",
            rules=[Rule(symbolizers=[MarkSymbolizer(well_known_name="X", rotate=0)])],
        )
        doc = style.to_document()
        assert doc == {
            "name": "s",
            "rules": [
                {"symbolizers": [{"kind": "Mark", "wellKnownName": "X", "rotate": 0}]},
            ],
        }

    def test_filter_dumps_as_lists(self) -> None:
        style = Style(rules=[Rule(filter=("==", "a", None))])
        assert style.to_document()["rules"][0]["filter"] == ["==", "a", None]

    def test_frozen(self) -> None:
        style = Style(name="s")
        with pytest.raises(ValidationError):
            style.name = "t"  # type: ignore[misc]
