"""Scale bounds <-> ``MaxScaleDenominator`` / ``MinScaleDenominator`` children."""

from __future__ import annotations

from mapnikstyle.domain.errors import MalformedDocumentError
from mapnikstyle.domain.node import Node
from mapnikstyle.domain.style import ScaleDenominator
from mapnikstyle.domain.types import ElementName
from mapnikstyle.translation.symbolizers import to_number


def scale_to_nodes(scale: ScaleDenominator | None) -> list[Node]:
    """Return one child per bound that is set (max first); zero counts as set."""
    if scale is None:
        return []
    nodes: list[Node] = []
    if scale.max is not None:
        nodes.append(Node(ElementName.MAX_SCALE, text=str(scale.max)))
    if scale.min is not None:
        nodes.append(Node(ElementName.MIN_SCALE, text=str(scale.min)))
    return nodes


def _bound(node: Node | None) -> int | float | None:
    if node is None:
        return None
    try:
        return to_number((node.text or "").strip())
    except ValueError as exc:
        msg = f"<{node.name}> must contain a number, got {node.text!r}"
        raise MalformedDocumentError(msg) from exc


def nodes_to_scale(rule: Node) -> ScaleDenominator | None:
    """Read the scale bounds of a ``Rule`` node; None when neither bound is present."""
    minimum = _bound(rule.find(ElementName.MIN_SCALE))
    maximum = _bound(rule.find(ElementName.MAX_SCALE))
    if minimum is None and maximum is None:
        return None
    return ScaleDenominator(min=minimum, max=maximum)
