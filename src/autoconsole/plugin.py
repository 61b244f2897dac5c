"""The auto-console pass, exposed as a map of visitor hooks.

The pass keeps a scope frame for every lexical region it walks through and
wraps eligible expression statements on entry, before the walk descends into
them. Bodies of excluded function kinds are still scope-tracked but nothing
inside them is rewritten.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union

from .ast_nodes import Node, ExpressionStatement, Property, FUNCTION_TYPES
from .classifier import is_eligible, require
from .config import AutoConsoleOptions
from .rewriter import wrap
from .scope import ScopeTracker, SCOPE_TYPES, collect_bindings
from .traverse import Visitor

logger = logging.getLogger(__name__)


# Child fields a node of each kind must have before the pass can reason about it.
REQUIRED_FIELDS = {
    "Program": ("body",),
    "BlockStatement": ("body",),
    "ExpressionStatement": ("expression",),
    "VariableDeclarator": ("id",),
    "FunctionDeclaration": ("id", "params", "body"),
    "FunctionExpression": ("params", "body"),
    "ArrowFunctionExpression": ("params", "body"),
    "ClassMethod": ("key", "params", "body"),
    "CatchClause": ("body",),
    "SwitchStatement": ("discriminant", "cases"),
    "SwitchCase": ("consequent",),
    "ForStatement": ("body",),
    "ForInStatement": ("left", "right", "body"),
    "ForOfStatement": ("left", "right", "body"),
    "ClassExpression": ("body",),
}


def check_node(node: Node) -> None:
    for field in REQUIRED_FIELDS.get(node.type, ()):
        require(node, field)


class AutoConsolePass:
    """State for one run of the pass over one program."""

    def __init__(self, options: Optional[AutoConsoleOptions] = None):
        self.options = options or AutoConsoleOptions()
        self.scope = ScopeTracker()
        self.rewritten = 0
        self._excluded_depth = 0

    @property
    def in_excluded_function(self) -> bool:
        return self._excluded_depth > 0

    def enter_scope(self, node: Node, parent: Optional[Node]) -> None:
        check_node(node)
        names = collect_bindings(node)
        self.scope.push_frame()
        for name in names:
            self.scope.declare(name)

    def exit_scope(self, node: Node, parent: Optional[Node]) -> None:
        self.scope.pop_frame()

    def _excludes(self, node: Node, parent: Optional[Node]) -> bool:
        # Object literal methods and accessors are walked like class methods.
        if isinstance(parent, Property) and (parent.method or parent.kind != "init"):
            return False
        return self.options.exclude.excludes(node)

    def enter_function(self, node: Node, parent: Optional[Node]) -> None:
        self.enter_scope(node, parent)
        if self._excludes(node, parent):
            self._excluded_depth += 1
            if self._excluded_depth == 1:
                logger.debug("skipping body of %s at %s", node.type, _where(node))

    def exit_function(self, node: Node, parent: Optional[Node]) -> None:
        if self._excludes(node, parent):
            self._excluded_depth -= 1
        self.exit_scope(node, parent)

    def enter_declarator(self, node: Node, parent: Optional[Node]) -> None:
        check_node(node)

    def enter_expression_statement(self, node: ExpressionStatement, parent: Optional[Node]) -> None:
        check_node(node)
        if self.in_excluded_function:
            return
        if is_eligible(node, self.scope, self.options.output, self.options.namespace):
            wrap(node, self.options.output)
            self.rewritten += 1
            logger.debug("wrapped statement at %s in %s", _where(node), self.options.output)

    def visitors(self) -> Dict[str, Visitor]:
        """The node kind -> hooks map handed to the traversal engine."""
        scope = Visitor(self.enter_scope, self.exit_scope)
        function = Visitor(self.enter_function, self.exit_function)
        visitors = {kind.__name__: scope for kind in SCOPE_TYPES}
        visitors.update({kind.__name__: function for kind in FUNCTION_TYPES})
        visitors["VariableDeclarator"] = Visitor(enter=self.enter_declarator)
        visitors["ExpressionStatement"] = Visitor(enter=self.enter_expression_statement)
        return visitors


def _where(node: Node) -> str:
    if node.loc is None:
        return "unknown position"
    return f"line {node.loc.line}, column {node.loc.column}"


def auto_console(
    options: Union[AutoConsoleOptions, Mapping[str, Any], None] = None,
) -> Dict[str, Visitor]:
    """Plugin entry point: a fresh pass's visitor map.

    ``options`` is an AutoConsoleOptions or a mapping with the keys
    ``object``, ``property``, ``exclude`` and ``namespace``.
    """
    if not isinstance(options, AutoConsoleOptions):
        options = AutoConsoleOptions.from_dict(options)
    return AutoConsolePass(options).visitors()
