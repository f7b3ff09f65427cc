"""Filter translation: neutral filter tuples <-> Mapnik boolean expressions.

Write renders a filter tree into expression text::

    ("&&", ("==", "a", "1"), (">", "b", "2"))  ->  ([a] == '1') && ([b] > '2')

Read walks the same grammar with an explicit stack of parenthesized groups.
Precedence, tightest first: parenthesized group, negation, comparison,
``&&``, ``||``. A chain of one combinator at one level becomes a single n-ary
combination; a parenthesized group stays nested, so
``parse_filter(render_filter(f)) == f``. Neither direction recurses, so
nesting depth is limited only by memory.

Unquoted ``true``/``false`` read as booleans and ``null`` as None.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from mapnikstyle.domain.errors import MalformedExpressionError, UnsupportedOperatorError
from mapnikstyle.domain.style import Filter
from mapnikstyle.domain.types import (
    COMBINATION_OPERATORS,
    COMPARISON_OPERATORS,
    FilterOperator,
)
from mapnikstyle.translation.operators import (
    COMBINATION_TABLE,
    COMPARISON_TABLE,
    NEGATION_TABLE,
)

# Keyword spelling of negation used on write; "!" is accepted on read.
NOT_KEYWORD = "not"

# ---------------------------------------------------------------------------
# Write
# ---------------------------------------------------------------------------


def _split(filter_: Any) -> tuple[FilterOperator, list[Any]]:
    """Validate a filter node's leading tag; return (operator, operands)."""
    if isinstance(filter_, str) or not isinstance(filter_, Sequence) or not filter_:
        raise MalformedExpressionError(f"Filter must be a non-empty sequence, got {filter_!r}")
    head, *args = filter_
    try:
        operator = FilterOperator(head)
    except ValueError:
        raise UnsupportedOperatorError(str(head)) from None

    if operator in COMBINATION_OPERATORS and len(args) < 2:
        raise MalformedExpressionError(
            f"Combination {operator.value!r} needs at least 2 subfilters, got {len(args)}"
        )
    if operator is FilterOperator.NOT and len(args) != 1:
        raise MalformedExpressionError(f"Negation takes exactly 1 subfilter, got {len(args)}")
    return operator, args


@dataclass
class _Pending:
    """A combination or negation whose subfilters are still being rendered."""

    operator: FilterOperator
    subfilters: list[Any]
    rendered: list[str] = field(default_factory=list)

    def join(self) -> str:
        if self.operator is FilterOperator.NOT:
            return f"{NOT_KEYWORD} ({self.rendered[0]})"
        token = COMBINATION_TABLE.to_target(self.operator)
        return f" {token} ".join(f"({part})" for part in self.rendered)


def render_filter(filter_: Filter | Sequence[Any]) -> str:
    """Render a neutral filter tuple as a Mapnik expression string.

    Subfilters are rendered depth-first, left to right, from an explicit
    stack, so nesting depth is not bounded by the interpreter's recursion
    limit.

    Raises:
        UnsupportedOperatorError: the leading tag is not a known operator.
        MalformedExpressionError: wrong arity or a malformed property key.
    """
    stack: list[_Pending] = []
    current: Any = filter_
    while True:
        operator, args = _split(current)
        if operator not in COMPARISON_OPERATORS:
            stack.append(_Pending(operator, args))
            current = args[0]
            continue

        text = _render_comparison(operator, args)
        while stack:
            pending = stack[-1]
            pending.rendered.append(text)
            if len(pending.rendered) < len(pending.subfilters):
                current = pending.subfilters[len(pending.rendered)]
                break
            stack.pop()
            text = pending.join()
        else:
            return text


def _render_comparison(operator: FilterOperator, args: list[Any]) -> str:
    if len(args) != 2:
        raise MalformedExpressionError(
            f"Comparison {operator.value!r} takes a property and a value, got {len(args)} operands"
        )
    key, value = args
    if not isinstance(key, str) or not key or "]" in key:
        raise MalformedExpressionError(f"Invalid property key: {key!r}")

    prop = f"[{key}]"
    literal = render_literal(value)
    if operator is FilterOperator.NOT_EQUAL:
        equal = COMPARISON_TABLE.to_target(FilterOperator.EQUAL)
        return f"{NOT_KEYWORD} ({prop} {equal} {literal})"
    return f"{prop} {COMPARISON_TABLE.to_target(operator)} {literal}"


def render_literal(value: Any) -> str:
    """``None`` renders as bare ``null``; every other scalar is single-quoted."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, (str, int, float)):
        text = str(value)
    else:
        raise MalformedExpressionError(f"Filter value must be a scalar, got {value!r}")
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------

_PROPERTY = "property"
_STRING = "string"
_NUMBER = "number"
_NULL = "null"
_BOOLEAN = "boolean"
_COMPARATOR = "comparator"
_COMBINATOR = "combinator"
_NEGATION = "negation"
_LPAREN = "("
_RPAREN = ")"
_END = "end"

_NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?")
_WORD_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_SYMBOLS: dict[str, str] = {
    **{t: _COMPARATOR for t in COMPARISON_TABLE.tokens if not t.isalpha()},
    **{t: _COMBINATOR for t in COMBINATION_TABLE.tokens if not t.isalpha()},
    **{t: _NEGATION for t in NEGATION_TABLE.tokens if not t.isalpha()},
}
_KEYWORDS: dict[str, str] = {
    **{t: _COMBINATOR for t in COMBINATION_TABLE.tokens if t.isalpha()},
    **{t: _NEGATION for t in NEGATION_TABLE.tokens if t.isalpha()},
    "null": _NULL,
    "true": _BOOLEAN,
    "false": _BOOLEAN,
}
# Longest symbol first so "<=" wins over "<" and "!=" over "!".
_SYMBOL_PATTERN = re.compile(
    "|".join(re.escape(s) for s in sorted(_SYMBOLS, key=len, reverse=True))
)


@dataclass(frozen=True)
class Token:
    kind: str
    value: Any
    position: int


def tokenize(text: str) -> list[Token]:
    """Split an expression into tokens, ending with an ``end`` token."""
    tokens: list[Token] = []
    pos = 0
    length = len(text)
    while pos < length:
        char = text[pos]
        if char.isspace():
            pos += 1
            continue
        if char == "[":
            close = text.find("]", pos + 1)
            if close == -1:
                raise MalformedExpressionError("Unterminated property reference", pos)
            key = text[pos + 1 : close]
            if not key:
                raise MalformedExpressionError("Empty property reference", pos)
            tokens.append(Token(_PROPERTY, key, pos))
            pos = close + 1
            continue
        if char in "'\"":
            value, end = _read_quoted(text, pos)
            tokens.append(Token(_STRING, value, pos))
            pos = end
            continue
        if char in "()":
            tokens.append(Token(char, char, pos))
            pos += 1
            continue
        number = _NUMBER_PATTERN.match(text, pos)
        if number:
            raw = number.group()
            value = float(raw) if any(c in raw for c in ".eE") else int(raw)
            tokens.append(Token(_NUMBER, value, pos))
            pos = number.end()
            continue
        symbol = _SYMBOL_PATTERN.match(text, pos)
        if symbol:
            raw = symbol.group()
            tokens.append(Token(_SYMBOLS[raw], raw, pos))
            pos = symbol.end()
            continue
        word = _WORD_PATTERN.match(text, pos)
        if word and word.group().lower() in _KEYWORDS:
            raw = word.group().lower()
            tokens.append(Token(_KEYWORDS[raw], raw, pos))
            pos = word.end()
            continue
        found = word.group() if word else char
        raise MalformedExpressionError(f"Unexpected token {found!r}", pos)
    tokens.append(Token(_END, None, length))
    return tokens


def _read_quoted(text: str, start: int) -> tuple[str, int]:
    """Read a quoted literal starting at *start*; return (value, end offset)."""
    quote = text[start]
    chars: list[str] = []
    pos = start + 1
    while pos < len(text):
        char = text[pos]
        if char == "\\" and pos + 1 < len(text):
            chars.append(text[pos + 1])
            pos += 2
            continue
        if char == quote:
            return "".join(chars), pos + 1
        chars.append(char)
        pos += 1
    raise MalformedExpressionError("Unterminated string literal", start)


def _chain(operator: FilterOperator, operands: list[Filter]) -> Filter:
    if len(operands) == 1:
        return operands[0]
    return (operator, *operands)


@dataclass
class _Group:
    """Operands collected inside one pair of parentheses, or at top level.

    ``&&`` binds tighter than ``||``: the open conjunction is closed into the
    disjunction whenever ``||`` is read.
    """

    opened_at: int | None
    negations: int = 0
    conjunction: list[Filter] = field(default_factory=list)
    disjunction: list[Filter] = field(default_factory=list)

    def add(self, operand: Filter) -> None:
        for _ in range(self.negations):
            operand = (FilterOperator.NOT, operand)
        self.negations = 0
        self.conjunction.append(operand)

    def close_conjunction(self) -> None:
        self.disjunction.append(_chain(FilterOperator.AND, self.conjunction))
        self.conjunction = []

    def result(self) -> Filter:
        self.close_conjunction()
        return _chain(FilterOperator.OR, self.disjunction)


class _Parser:
    """Operator-precedence parser over an explicit group stack.

    Each open parenthesis pushes a :class:`_Group`; its closing parenthesis
    pops the group and hands the finished subfilter to the enclosing one.
    """

    def __init__(self, text: str) -> None:
        self._tokens = tokenize(text)
        self._index = 0

    def parse(self) -> Filter:
        if self._peek().kind == _END:
            raise MalformedExpressionError("Empty filter expression", 0)
        groups = [_Group(opened_at=None)]
        while True:
            # Operand position: prefixes, then one comparison.
            token = self._peek()
            if token.kind == _NEGATION:
                self._advance()
                groups[-1].negations += 1
                continue
            if token.kind == _LPAREN:
                self._advance()
                groups.append(_Group(opened_at=token.position))
                continue
            groups[-1].add(self._comparison())

            # Operator position: close finished groups, then combine or stop.
            token = self._peek()
            while token.kind == _RPAREN and groups[-1].opened_at is not None:
                self._advance()
                inner = groups.pop()
                groups[-1].add(inner.result())
                token = self._peek()

            group = groups[-1]
            if token.kind == _COMBINATOR:
                self._advance()
                if COMBINATION_TABLE.to_neutral(token.value) is FilterOperator.OR:
                    group.close_conjunction()
                continue
            found = "end of expression" if token.kind == _END else repr(token.value)
            if group.opened_at is not None:
                raise MalformedExpressionError(f"Expected ')', found {found}", token.position)
            if token.kind != _END:
                raise MalformedExpressionError(f"Unexpected token {token.value!r}", token.position)
            return group.result()

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        self._index += 1
        return token

    def _expect(self, kind: str, what: str) -> Token:
        token = self._peek()
        if token.kind != kind:
            found = "end of expression" if token.kind == _END else repr(token.value)
            raise MalformedExpressionError(f"Expected {what}, found {found}", token.position)
        return self._advance()

    def _comparison(self) -> Filter:
        key = self._expect(_PROPERTY, "a [property] reference")
        token = self._expect(_COMPARATOR, "a comparison operator")
        try:
            operator = COMPARISON_TABLE.to_neutral(token.value)
        except UnsupportedOperatorError as exc:
            raise exc.locate(position=token.position) from None
        return (operator, key.value, self._literal())

    def _literal(self) -> Any:
        token = self._peek()
        if token.kind in (_STRING, _NUMBER):
            return self._advance().value
        if token.kind == _NULL:
            self._advance()
            return None
        if token.kind == _BOOLEAN:
            return self._advance().value == "true"
        found = "end of expression" if token.kind == _END else repr(token.value)
        raise MalformedExpressionError(f"Expected a literal value, found {found}", token.position)


def parse_filter(text: str) -> Filter:
    """Parse a Mapnik expression string into a neutral filter tuple.

    Raises:
        MalformedExpressionError: the text is not a valid expression; carries
            the offending token position.
        UnsupportedOperatorError: the expression uses an operator that cannot
            be read back (``*=``).
    """
    return _Parser(text).parse()
