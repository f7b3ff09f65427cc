"""Typed translation failures.

Every error is raised synchronously by the core and scoped to the element
being translated. Callers (the service layer) decide whether to abort the
whole document or skip the offending rule.
"""

from __future__ import annotations

from typing import Any


class StyleTranslationError(Exception):
    """Base class for all translation failures.

    Attributes:
        location: Where in the style the failure happened. Populated by the
            assemblers as the error propagates (``rule_index``, ``rule_name``,
            ``symbolizer_index``).
    """

    code = "TRANSLATION_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.location: dict[str, Any] = {}

    def locate(self, **where: Any) -> StyleTranslationError:
        """Record location keys not already set by an inner frame and return self."""
        for key, value in where.items():
            if value is not None:
                self.location.setdefault(key, value)
        return self

    def __str__(self) -> str:
        if not self.location:
            return self.message
        where = ", ".join(f"{k}={v}" for k, v in self.location.items())
        return f"{self.message} ({where})"


class UnsupportedOperatorError(StyleTranslationError):
    """A filter operator is unknown, or cannot be mapped in this direction."""

    code = "UNSUPPORTED_OPERATOR"

    def __init__(self, operator: str, message: str | None = None) -> None:
        super().__init__(message or f"Unsupported filter operator: {operator!r}")
        self.operator = operator


class UnsupportedSymbolError(StyleTranslationError):
    """A well-known mark name has no glyph file."""

    code = "UNSUPPORTED_SYMBOL"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unsupported well-known symbol: {name!r}")
        self.name = name


class MalformedExpressionError(StyleTranslationError):
    """A filter expression could not be parsed or rendered.

    Attributes:
        position: 0-based character offset of the offending token, or None
            when the problem is structural (e.g. a filter tuple of wrong arity).
    """

    code = "MALFORMED_EXPRESSION"

    def __init__(self, message: str, position: int | None = None) -> None:
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message)
        self.position = position


class UnrecognizedElementError(StyleTranslationError):
    """A markup element has no neutral counterpart."""

    code = "UNRECOGNIZED_ELEMENT"

    def __init__(self, element: str, parent: str | None = None) -> None:
        where = f" inside <{parent}>" if parent else ""
        super().__init__(f"Unrecognized element <{element}>{where}")
        self.element = element


class MalformedDocumentError(StyleTranslationError):
    """The markup document is not well-formed or not a Map/Style document."""

    code = "MALFORMED_DOCUMENT"
