"""
AST Traversal
Depth-first walker that dispatches enter/exit events to rule listeners.

Listeners are keyed by node type: ``"FunctionDeclaration"`` fires when the
walker enters a node and ``"FunctionDeclaration:exit"`` when it leaves it.
"""

from collections import defaultdict
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from jsdoclint.ast.nodes import Node

Listener = Callable[[Node], None]


class Traverser:
    """Walks a tree in document order, setting parent links as it goes."""

    def __init__(self, listeners: Optional[Mapping[str, Listener]] = None):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)
        if listeners:
            self.add_listeners(listeners)

    def add_listeners(self, listeners: Mapping[str, Listener]) -> None:
        """Register a rule's listener mapping alongside any existing ones."""
        for event, handler in listeners.items():
            self._listeners[event].append(handler)

    def traverse(self, root: Node) -> None:
        self._visit(root, None)

    def _visit(self, node: Node, parent) -> None:
        node.parent = parent
        node_type = node.type
        for handler in self._listeners.get(node_type, ()):
            handler(node)
        for child in node.children():
            self._visit(child, node)
        for handler in self._listeners.get(f"{node_type}:exit", ()):
            handler(node)


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield every node of the tree in pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(node.children())))
