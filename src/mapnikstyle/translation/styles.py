"""Style assembly: the ordered rule list in ``<Style>``, optionally in ``<Map>``.

Configured output options are overlaid last by :func:`apply_output_options`,
a pure post-processing merge over the finished tree: computed attributes
always win on key collision, so configuration can decorate but never
change semantics.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from mapnikstyle.config.models import OptionValue, OutputOptions
from mapnikstyle.domain.errors import MalformedDocumentError
from mapnikstyle.domain.node import Node, Scalar
from mapnikstyle.domain.style import Style
from mapnikstyle.domain.types import SYMBOLIZER_ELEMENTS, ElementName
from mapnikstyle.translation.rules import node_to_rule, rule_to_node

logger = logging.getLogger(__name__)


def assemble_style(
    name: str | None,
    rule_nodes: Sequence[Node],
    options: OutputOptions | None = None,
) -> Node:
    """Wrap already-translated rule nodes in ``<Style>`` (and ``<Map>`` if configured)."""
    options = options or OutputOptions()
    style_attributes: dict[str, Scalar] = {"name": name} if name else {}
    root = Node(ElementName.STYLE, style_attributes, children=tuple(rule_nodes))
    if options.include_map:
        root = Node(ElementName.MAP, children=(root,))
    return apply_output_options(root, options)


def style_to_node(style: Style, options: OutputOptions | None = None) -> Node:
    """Translate a neutral style into the full attributed tree, options applied."""
    options = options or OutputOptions()
    rule_nodes = [rule_to_node(rule, options, index=i) for i, rule in enumerate(style.rules)]
    logger.debug("Assembled style %r with %d rule(s)", style.name, len(rule_nodes))
    return assemble_style(style.name, rule_nodes, options)


def _merge(computed: Mapping[str, Scalar], configured: Mapping[str, OptionValue]) -> dict:
    merged: dict[str, Scalar] = dict(computed)
    for key, value in configured.items():
        if key in merged:
            logger.debug("Configured attribute %r ignored; computed value wins", key)
            continue
        merged[key] = value
    return merged


def apply_output_options(node: Node, options: OutputOptions) -> Node:
    """Overlay configured attributes onto Map, Style and symbolizer nodes.

    Returns a new tree; *node* is not modified.
    """
    configured: Mapping[str, OptionValue] = {}
    if node.name == ElementName.MAP:
        configured = options.map
    elif node.name == ElementName.STYLE:
        configured = options.style
    elif node.name in SYMBOLIZER_ELEMENTS:
        configured = options.symbolizers.get(node.name, {})

    children = tuple(apply_output_options(child, options) for child in node.children)
    result = node.with_children(children) if node.children else node
    if configured:
        result = result.with_attributes(_merge(node.attributes, configured))
    return result


def find_style_node(root: Node) -> Node:
    """Locate the single ``<Style>`` in a ``<Map>``-rooted or bare ``<Style>`` tree."""
    if root.name == ElementName.STYLE:
        return root
    if root.name != ElementName.MAP:
        msg = f"Expected a <Map> or <Style> root element, got <{root.name}>"
        raise MalformedDocumentError(msg)
    styles = root.find_all(ElementName.STYLE)
    if not styles:
        raise MalformedDocumentError("Document contains no <Style> element")
    if len(styles) > 1:
        msg = f"Document contains {len(styles)} <Style> elements; expected 1"
        raise MalformedDocumentError(msg)
    return styles[0]


def node_to_style(root: Node) -> Style:
    """Translate an attributed tree back into a neutral style, preserving rule order."""
    style_node = find_style_node(root)
    name = style_node.attributes.get("name")
    rules = [
        node_to_rule(child, index=i)
        for i, child in enumerate(style_node.find_all(ElementName.RULE))
    ]
    logger.debug("Read style %r with %d rule(s)", name, len(rules))
    return Style(name="" if name is None else str(name), rules=rules)
