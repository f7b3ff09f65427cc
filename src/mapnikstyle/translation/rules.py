"""Rule assembly: one neutral Rule <-> one ``<Rule>`` node.

Child order on write: scale bounds, ``Filter``, then every symbolizer
group's elements in listed order. Symbolizer elements are kept as a tagged
sequence, so two groups producing the same element name both survive.
"""

from __future__ import annotations

import logging

from mapnikstyle.config.models import OutputOptions
from mapnikstyle.domain.errors import MalformedDocumentError, StyleTranslationError
from mapnikstyle.domain.node import Node
from mapnikstyle.domain.style import Rule
from mapnikstyle.domain.types import ElementName
from mapnikstyle.translation.filters import parse_filter, render_filter
from mapnikstyle.translation.scale import nodes_to_scale, scale_to_nodes
from mapnikstyle.translation.symbolizers import node_to_symbolizer, symbolizer_to_nodes

logger = logging.getLogger(__name__)

_SINGLETON_CHILDREN = (ElementName.FILTER, ElementName.MIN_SCALE, ElementName.MAX_SCALE)


def rule_to_node(
    rule: Rule,
    options: OutputOptions | None = None,
    *,
    index: int | None = None,
) -> Node:
    """Translate one neutral rule into a ``<Rule>`` node.

    Errors are annotated with *index*, the rule name and the offending
    symbolizer index before they propagate.
    """
    options = options or OutputOptions()
    children: list[Node] = list(scale_to_nodes(rule.scale_denominator))

    if rule.filter is not None:
        try:
            children.append(Node(ElementName.FILTER, text=render_filter(rule.filter)))
        except StyleTranslationError as exc:
            raise exc.locate(rule_index=index, rule_name=rule.name) from None

    for position, symbolizer in enumerate(rule.symbolizers):
        try:
            children.extend(symbolizer_to_nodes(symbolizer, base_path=options.glyph_base_path))
        except StyleTranslationError as exc:
            raise exc.locate(
                rule_index=index, rule_name=rule.name, symbolizer_index=position
            ) from None

    attributes = {"name": rule.name} if rule.name is not None else {}
    logger.debug(
        "Assembled rule %s with %d child element(s)", rule.name or index, len(children)
    )
    return Node(ElementName.RULE, attributes, children=tuple(children))


def node_to_rule(node: Node, *, index: int | None = None) -> Rule:
    """Translate a ``<Rule>`` node back into a neutral rule.

    Raises:
        UnrecognizedElementError: a child is neither a rule control element
            nor one of the seven symbolizer elements.
        MalformedExpressionError / UnsupportedOperatorError: the filter text
            cannot be read back.
    """
    name = node.attributes.get("name")
    rule_name = None if name is None else str(name)
    try:
        return _node_to_rule(node, rule_name)
    except StyleTranslationError as exc:
        raise exc.locate(rule_index=index, rule_name=rule_name) from None


def _node_to_rule(node: Node, rule_name: str | None) -> Rule:
    if node.name != ElementName.RULE:
        raise MalformedDocumentError(f"Expected <{ElementName.RULE}>, got <{node.name}>")

    for singleton in _SINGLETON_CHILDREN:
        if len(node.find_all(singleton)) > 1:
            raise MalformedDocumentError(f"<Rule> may contain at most one <{singleton}>")

    filter_node = node.find(ElementName.FILTER)
    filter_ = None
    if filter_node is not None and (filter_node.text or "").strip():
        filter_ = parse_filter(filter_node.text or "")

    symbolizers = []
    position = 0
    for child in node.children:
        if child.name in _SINGLETON_CHILDREN:
            continue
        try:
            symbolizers.append(node_to_symbolizer(child))
        except StyleTranslationError as exc:
            raise exc.locate(symbolizer_index=position) from None
        position += 1

    return Rule(
        name=rule_name,
        filter=filter_,
        scale_denominator=nodes_to_scale(node),
        symbolizers=symbolizers,
    )
