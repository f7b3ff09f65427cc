"""Tests for typed translation errors."""

from __future__ import annotations

from mapnikstyle.domain.errors import (
    MalformedDocumentError,
    MalformedExpressionError,
    StyleTranslationError,
    UnrecognizedElementError,
    UnsupportedOperatorError,
    UnsupportedSymbolError,
)


class TestErrorCodes:
    def test_codes(self) -> None:
        assert UnsupportedOperatorError("~").code == "UNSUPPORTED_OPERATOR"
        assert UnsupportedSymbolError("Blob").code == "UNSUPPORTED_SYMBOL"
        assert MalformedExpressionError("bad").code == "MALFORMED_EXPRESSION"
        assert UnrecognizedElementError("Foo").code == "UNRECOGNIZED_ELEMENT"
        assert MalformedDocumentError("bad").code == "MALFORMED_DOCUMENT"

    def test_all_share_base(self) -> None:
        assert issubclass(UnsupportedSymbolError, StyleTranslationError)
        assert issubclass(MalformedDocumentError, StyleTranslationError)


class TestLocate:
    def test_inner_location_wins(self) -> None:
        exc = UnsupportedSymbolError("Blob")
        exc.locate(symbolizer_index=1)
        exc.locate(rule_index=0, symbolizer_index=5)
        assert exc.location == {"symbolizer_index": 1, "rule_index": 0}

    def test_none_values_skipped(self) -> None:
        exc = MalformedDocumentError("bad").locate(rule_name=None, rule_index=2)
        assert exc.location == {"rule_index": 2}

    def test_str_includes_location(self) -> None:
        exc = UnsupportedSymbolError("Blob").locate(rule_index=3)
        assert str(exc) == "Unsupported well-known symbol: 'Blob' (rule_index=3)"


class TestMessages:
    def test_expression_position(self) -> None:
        exc = MalformedExpressionError("Unexpected token", 7)
        assert exc.position == 7
        assert str(exc) == "Unexpected token at position 7"

    def test_unrecognized_element_parent(self) -> None:
        exc = UnrecognizedElementError("ShieldSymbolizer", "Rule")
        assert exc.element == "ShieldSymbolizer"
        assert "inside <Rule>" in exc.message
