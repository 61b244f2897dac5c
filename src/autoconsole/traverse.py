"""Host traversal engine: walks a tree and calls visitor hooks by node kind."""

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Union

from .ast_nodes import Node


Hook = Callable[[Node, Optional[Node]], None]


@dataclass(frozen=True)
class Visitor:
    """Hooks called when the walk enters and leaves a node of one kind."""
    enter: Optional[Hook] = None
    exit: Optional[Hook] = None


Visitors = Mapping[str, Union[Visitor, Hook]]


def traverse(root: Node, visitors: Visitors) -> None:
    """Walk ``root`` depth-first, pre-order, children in source order.

    A plain callable in ``visitors`` is treated as an enter hook. Children are
    read after the enter hook returns, so a replacement made there is walked.
    Exit hooks run even when a descendant raises.
    """
    _visit(root, None, visitors)


def _visit(node: Node, parent: Optional[Node], visitors: Visitors) -> None:
    visitor = visitors.get(node.type)
    if callable(visitor):
        visitor = Visitor(enter=visitor)

    if visitor is not None and visitor.enter is not None:
        visitor.enter(node, parent)
    try:
        for _, value in node.children():
            if isinstance(value, list):
                for item in list(value):
                    if isinstance(item, Node):
                        _visit(item, node, visitors)
            else:
                _visit(value, node, visitors)
    finally:
        if visitor is not None and visitor.exit is not None:
            visitor.exit(node, parent)
