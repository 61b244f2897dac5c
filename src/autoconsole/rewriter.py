"""Wraps an expression statement's value in the output call."""

from .ast_nodes import CallExpression, ExpressionStatement
from .config import OutputCall


def wrap(statement: ExpressionStatement, output: OutputCall) -> CallExpression:
    # The original expression is moved into the call, not copied.
    expression = statement.expression
    call = CallExpression(output.callee(loc=expression.loc), [expression], loc=expression.loc)
    statement.expression = call
    return call
