"""Markup codec: attributed node trees <-> Mapnik XML text via lxml.

This is the only module that touches markup syntax. Written documents always
start with the standard XML declaration and are pretty-printed.
"""

from __future__ import annotations

from lxml import etree

from mapnikstyle.domain.errors import MalformedDocumentError
from mapnikstyle.domain.node import Node, Scalar

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'


def format_value(value: Scalar) -> str:
    """Stringify an attribute value the way Mapnik expects (lowercase booleans)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_element(node: Node) -> etree._Element:
    element = etree.Element(
        node.name, {key: format_value(value) for key, value in node.attributes.items()}
    )
    if node.text is not None:
        element.text = node.text
    for child in node.children:
        element.append(to_element(child))
    return element


def serialize(node: Node) -> str:
    """Render *node* as an XML document string."""
    body = etree.tostring(to_element(node), pretty_print=True, encoding="unicode")
    return f"{XML_DECLARATION}\n{body}"


def from_element(element: etree._Element) -> Node:
    children = tuple(
        from_element(child) for child in element if isinstance(child.tag, str)
    )
    text = element.text.strip() if element.text and element.text.strip() else None
    return Node(
        etree.QName(element).localname,
        dict(element.attrib),
        text,
        children,
    )


def parse(markup: str | bytes) -> Node:
    """Parse XML text into an attributed node tree.

    Comments and processing instructions are dropped; external entities
    and network access are disabled.

    Raises:
        MalformedDocumentError: the text is not well-formed XML.
    """
    parser = etree.XMLParser(
        remove_blank_text=True,
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
    )
    data = markup.encode("utf-8") if isinstance(markup, str) else markup
    try:
        root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as exc:
        raise MalformedDocumentError(f"Invalid XML: {exc}") from exc
    return from_element(root)
