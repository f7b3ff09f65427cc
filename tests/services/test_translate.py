"""Tests for TranslationService."""

from __future__ import annotations

import json

from mapnikstyle.config.models import OutputOptions
from mapnikstyle.domain.style import Style
from mapnikstyle.services.translate import TranslationService, filter_to_json
from tests.conftest import ROADS_DOCUMENT

BROKEN_DOCUMENT = {
    "name": "points",
    "rules": [
        {"name": "ok", "symbolizers": [{"kind": "Mark", "wellKnownName": "Star"}]},
        {"name": "broken", "symbolizers": [{"kind": "Mark", "wellKnownName": "Blob"}]},
        {"name": "also-ok", "symbolizers": [{"kind": "Raster", "opacity": 1}]},
    ],
}

BROKEN_MARKUP = """\
<Map>
  <Style name="points">
    <Rule name="ok"><MarkersSymbolizer file="star.svg"/></Rule>
    <Rule name="bad"><Filter>[a] ~ 'x'</Filter></Rule>
    <Rule name="shield"><ShieldSymbolizer/></Rule>
  </Style>
</Map>
"""


class TestWriteStyle:
    def test_from_text(self) -> None:
        result = TranslationService().write_style(json.dumps(ROADS_DOCUMENT))
        assert result.ok
        assert result.op == "write_style"
        assert result.data["name"] == "roads"
        assert result.data["rules"] == 3
        assert result.data["markup"].startswith('<?xml version="1.0" encoding="utf-8"?>')
        assert result.meta == {"skipped": 0}

    def test_from_model_with_options(self, roads_style: Style) -> None:
        service = TranslationService(OutputOptions(include_map=False))
        result = service.write_style(roads_style)
        assert result.ok
        assert "<Map" not in result.data["markup"]
        assert service.options.include_map is False

    def test_error_becomes_failed_result(self) -> None:
        result = TranslationService().write_style(json.dumps(BROKEN_DOCUMENT))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNSUPPORTED_SYMBOL"
        assert result.error.detail == {
            "rule_index": 1,
            "rule_name": "broken",
            "symbolizer_index": 0,
        }

    def test_skip_invalid(self) -> None:
        result = TranslationService().write_style(
            json.dumps(BROKEN_DOCUMENT), skip_invalid=True
        )
        assert result.ok
        assert result.data["rules"] == 2
        assert result.meta == {"skipped": 1}
        assert result.warnings == [
            "Skipped rule broken: Unsupported well-known symbol: 'Blob'"
        ]
        assert 'name="broken"' not in result.data["markup"]
        assert 'name="also-ok"' in result.data["markup"]

    def test_invalid_document(self) -> None:
        result = TranslationService().write_style("rules: [1, 2")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "MALFORMED_DOCUMENT"


class TestReadStyle:
    def test_round_trip(self, roads_style: Style) -> None:
        service = TranslationService()
        markup = service.write_style(roads_style).data["markup"]
        result = service.read_style(markup)
        assert result.ok
        assert result.data["name"] == "roads"
        assert Style.model_validate(result.data["style"]) == roads_style

    def test_error_aborts(self) -> None:
        result = TranslationService().read_style(BROKEN_MARKUP)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "MALFORMED_EXPRESSION"
        assert result.error.detail["rule_index"] == 1
        assert result.error.detail["rule_name"] == "bad"

    def test_skip_invalid(self) -> None:
        result = TranslationService().read_style(BROKEN_MARKUP, skip_invalid=True)
        assert result.ok
        assert result.data["rules"] == 1
        assert result.meta == {"skipped": 2}
        assert len(result.warnings) == 2
        assert result.warnings[1].startswith("Skipped rule shield: Unrecognized element")

    def test_not_xml(self) -> None:
        result = TranslationService().read_style("not markup")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "MALFORMED_DOCUMENT"


class TestFilters:
    def test_render(self) -> None:
        result = TranslationService().render_filter(["==", "name", "foo"])
        assert result.ok
        assert result.data == {"expression": "[name] == 'foo'"}

    def test_render_unknown_operator(self) -> None:
        result = TranslationService().render_filter(["~", "a", "b"])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNSUPPORTED_OPERATOR"

    def test_parse(self) -> None:
        result = TranslationService().parse_filter("([a] == '1') && ([b] > '2')")
        assert result.ok
        assert result.data == {"filter": ["&&", ["==", "a", "1"], [">", "b", "2"]]}

    def test_parse_match_rejected(self) -> None:
        result = TranslationService().parse_filter("[a] *= 'x'")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNSUPPORTED_OPERATOR"
        assert result.error.detail == {"position": 4}

    def test_deeply_nested_filters(self) -> None:
        text = "not (" * 600 + "[a] == '1'" + ")" * 600
        parsed = TranslationService().parse_filter(text)
        assert parsed.ok
        rendered = TranslationService().render_filter(parsed.data["filter"])
        assert rendered.ok
        assert rendered.data == {"expression": text}

    def test_filter_to_json(self) -> None:
        assert filter_to_json(("!", ("==", "a", None))) == ["!", ["==", "a", None]]
