"""Operator tables between neutral filter tags and Mapnik expression tokens.

Each table is built once with its inverse precomputed, so lookups are O(1)
in both directions. Construction fails if two neutral operators would share a
target token. Operators listed as ``irreversible`` can be written but never
read back; reverse lookup raises instead of silently dropping them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from mapnikstyle.domain.errors import UnsupportedOperatorError
from mapnikstyle.domain.types import FilterOperator


class BidirectionalTable:
    """Fixed one-to-one mapping between neutral operators and target tokens."""

    def __init__(
        self,
        name: str,
        forward: Mapping[FilterOperator, str],
        *,
        irreversible: Iterable[FilterOperator] = (),
        aliases: Mapping[str, FilterOperator] | None = None,
    ) -> None:
        inverse: dict[str, FilterOperator] = {}
        for operator, token in forward.items():
            if token in inverse:
                msg = f"{name}: {inverse[token]!r} and {operator!r} both map to {token!r}"
                raise ValueError(msg)
            inverse[token] = operator
        for alias, operator in (aliases or {}).items():
            if alias in inverse:
                msg = f"{name}: alias {alias!r} shadows a primary token"
                raise ValueError(msg)
            if operator not in forward:
                msg = f"{name}: alias {alias!r} targets unknown operator {operator!r}"
                raise ValueError(msg)
        self.name = name
        self._forward = MappingProxyType(dict(forward))
        self._inverse = MappingProxyType(inverse)
        self._aliases = MappingProxyType(dict(aliases or {}))
        self.irreversible = frozenset(irreversible)

    def __contains__(self, operator: object) -> bool:
        return operator in self._forward

    @property
    def tokens(self) -> frozenset[str]:
        """All target tokens this table can read, aliases included."""
        return frozenset(self._inverse) | frozenset(self._aliases)

    def to_target(self, operator: FilterOperator | str) -> str:
        try:
            return self._forward[FilterOperator(operator)]
        except (KeyError, ValueError):
            raise UnsupportedOperatorError(str(operator)) from None

    def to_neutral(self, token: str) -> FilterOperator:
        operator = self._inverse.get(token) or self._aliases.get(token)
        if operator is None:
            raise UnsupportedOperatorError(token)
        if operator in self.irreversible:
            raise UnsupportedOperatorError(
                token,
                f"Operator {token!r} ({operator.name}) cannot be read back into a neutral filter",
            )
        return operator


COMPARISON_TABLE = BidirectionalTable(
    "comparison",
    {
        FilterOperator.EQUAL: "==",
        FilterOperator.NOT_EQUAL: "!=",
        FilterOperator.MATCH: "*=",
        FilterOperator.LESS_THAN: "<",
        FilterOperator.LESS_THAN_OR_EQUAL: "<=",
        FilterOperator.GREATER_THAN: ">",
        FilterOperator.GREATER_THAN_OR_EQUAL: ">=",
        FilterOperator.MODULO: "%",
    },
    irreversible={FilterOperator.MATCH},
    aliases={"=": FilterOperator.EQUAL, "<>": FilterOperator.NOT_EQUAL},
)

COMBINATION_TABLE = BidirectionalTable(
    "combination",
    {
        FilterOperator.AND: "&&",
        FilterOperator.OR: "||",
    },
    aliases={"and": FilterOperator.AND, "or": FilterOperator.OR},
)

NEGATION_TABLE = BidirectionalTable(
    "negation",
    {FilterOperator.NOT: "!"},
    aliases={"not": FilterOperator.NOT},
)
