"""ESTree-shaped syntax nodes consumed by the analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass(frozen=True)
class Position:
    """A 1-based line and 0-based column, as ESTree reports them."""

    line: int
    column: int


@dataclass(frozen=True)
class SourceLocation:
    """Start and end positions of a node."""

    start: Position
    end: Position


@dataclass(eq=False)
class Node:
    """
    A syntax tree node.

    Child nodes and scalar properties live in ``fields`` and are reachable as
    attributes (``node.left``, ``node.body``). Nodes compare by identity so
    they can be used as dictionary keys while the tree is analyzed.
    """

    type: str
    range: tuple[int, int]
    fields: dict[str, Any] = field(default_factory=dict)
    loc: SourceLocation | None = None
    parent: Node | None = field(default=None, repr=False)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name == "fields":
            raise AttributeError(name)
        try:
            return self.fields[name]
        except KeyError:
            raise AttributeError(f"{self.type} node has no field {name!r}") from None

    def get(self, name: str, default: Any = None) -> Any:
        """Return a field value, or ``default`` if the node lacks it."""
        return self.fields.get(name, default)

    @property
    def start(self) -> int:
        return self.range[0]

    @property
    def end(self) -> int:
        return self.range[1]

    def contains(self, other: Node) -> bool:
        """Check whether ``other``'s range nests inside this node's range."""
        return self.range[0] <= other.range[0] and other.range[1] <= self.range[1]

    def children(self) -> Iterator[Node]:
        """Yield direct child nodes in field order."""
        for value in self.fields.values():
            if isinstance(value, Node):
                yield value
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, Node):
                        yield item

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants in pre-order."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(list(node.children())))


def link_parents(root: Node) -> Node:
    """Set ``parent`` on every node below ``root``."""
    root.parent = None
    for node in root.walk():
        for child in node.children():
            child.parent = node
    return root
