"""Decides which expression statements get wrapped in an output call."""

from .ast_nodes import (
    Node, ExpressionStatement, CallExpression, Identifier,
    BinaryExpression, LogicalExpression, ConditionalExpression,
)
from .config import OutputCall
from .errors import MalformedNodeError
from .scope import ScopeTracker


# Bare computations whose result is dropped.
COMPUTED_TYPES = (BinaryExpression, LogicalExpression, ConditionalExpression)


def require(node: Node, field: str):
    """Return ``node.<field>``, raising MalformedNodeError when it is missing."""
    value = getattr(node, field, None)
    if value is None:
        line = node.loc.line if getattr(node, "loc", None) else None
        raise MalformedNodeError(type(node).__name__, field, line)
    return value


def is_eligible(
    statement: ExpressionStatement,
    scope: ScopeTracker,
    output: OutputCall,
    namespace: bool = True,
) -> bool:
    """Should ``statement`` have its expression wrapped in ``output``?

    - calls to the output function itself (or, with ``namespace``, to any
      method of the output object): no
    - any other call: yes
    - a bare identifier: only if some enclosing scope declares it
    - binary, logical and conditional expressions: yes
    - anything else: no
    """
    expression = require(statement, "expression")

    if isinstance(expression, CallExpression):
        require(expression, "callee")
        return not output.matches(expression, namespace)

    if isinstance(expression, Identifier):
        return scope.is_bound(require(expression, "name"))

    return isinstance(expression, COMPUTED_TYPES)
