"""Generic attributed node: the contract between the core and the markup codec.

The core builds and reads these trees; it never touches markup syntax.
Children are an ordered, tagged sequence, so two siblings with the same
element name (e.g. two ``LineSymbolizer``) are both kept.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace

Scalar = str | int | float | bool


@dataclass(frozen=True)
class Node:
    """One element of the attributed tree."""

    name: str
    attributes: dict[str, Scalar] = field(default_factory=dict)
    text: str | None = None
    children: tuple[Node, ...] = ()

    def find(self, name: str) -> Node | None:
        """Return the first child named *name*, or None."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def find_all(self, name: str) -> list[Node]:
        """Return every child named *name*, in document order."""
        return [child for child in self.children if child.name == name]

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants, depth-first, in document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def with_attributes(self, attributes: dict[str, Scalar]) -> Node:
        return replace(self, attributes=attributes)

    def with_children(self, children: tuple[Node, ...]) -> Node:
        return replace(self, children=children)
