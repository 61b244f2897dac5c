"""Lexical scope tracking for the auto-console pass.

A ``ScopeTracker`` keeps a stack of ``ScopeFrame`` objects. Each frame holds
the names declared in one lexical region and links to the enclosing frame.
Only presence is tracked: a name is bound if any frame on the stack declares
it.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set

from .ast_nodes import (
    Node, Identifier, AssignmentPattern, RestElement, ObjectPattern, ArrayPattern, Property,
    Program, BlockStatement, SwitchStatement, SwitchCase, CatchClause,
    VariableDeclaration, FunctionDeclaration, FunctionExpression, ArrowFunctionExpression,
    ClassDeclaration, ClassExpression, ClassMethod,
    ForStatement, ForInStatement, ForOfStatement,
    FUNCTION_TYPES,
)
from .errors import ScopeError


@dataclass
class ScopeFrame:
    """Names declared in one lexical region."""
    names: Set[str] = field(default_factory=set)
    parent: Optional["ScopeFrame"] = None

    def lookup(self, name: str) -> bool:
        frame: Optional[ScopeFrame] = self
        while frame is not None:
            if name in frame.names:
                return True
            frame = frame.parent
        return False


class ScopeTracker:
    """Stack of scope frames, innermost last."""

    def __init__(self):
        self.current = ScopeFrame()
        self.depth = 0

    def push_frame(self) -> ScopeFrame:
        self.current = ScopeFrame(parent=self.current)
        self.depth += 1
        return self.current

    def pop_frame(self) -> ScopeFrame:
        if self.current.parent is None:
            raise ScopeError("Cannot pop the outermost scope frame")
        frame = self.current
        self.current = frame.parent
        self.depth -= 1
        return frame

    def declare(self, name: str) -> None:
        self.current.names.add(name)

    def is_bound(self, name: str) -> bool:
        return self.current.lookup(name)


def binding_names(target: Optional[Node]) -> List[str]:
    """Names bound by an identifier or destructuring pattern."""
    if target is None:
        return []
    if isinstance(target, Identifier):
        return [target.name]
    if isinstance(target, AssignmentPattern):
        return binding_names(target.left)
    if isinstance(target, RestElement):
        return binding_names(target.argument)
    if isinstance(target, ArrayPattern):
        return [name for element in target.elements for name in binding_names(element)]
    if isinstance(target, ObjectPattern):
        names = []
        for prop in target.properties:
            names.extend(binding_names(prop.value if isinstance(prop, Property) else prop))
        return names
    return []


def _declared_names(statement: Node, lexical: bool) -> List[str]:
    """Names a single statement declares in the statement list containing it."""
    if isinstance(statement, VariableDeclaration):
        if lexical and statement.kind == "var":
            return []
        return [name for d in statement.declarations for name in binding_names(d.id)]
    if isinstance(statement, (FunctionDeclaration, ClassDeclaration)) and statement.id is not None:
        return [statement.id.name]
    return []


def _var_names(node: Node, block_functions: bool = True) -> List[str]:
    """Every 'var' name in a region, stopping at nested functions.

    With ``block_functions`` a function declared in a nested block is also
    counted, as sloppy-mode code makes it visible to the whole function.
    """
    names: List[str] = []

    def visit(child):
        if isinstance(child, list):
            for item in child:
                visit(item)
            return
        if block_functions and isinstance(child, FunctionDeclaration) and child.id is not None:
            names.append(child.id.name)
        if not isinstance(child, Node) or isinstance(child, FUNCTION_TYPES):
            return
        if isinstance(child, (ClassDeclaration, ClassExpression)):
            return
        if isinstance(child, VariableDeclaration) and child.kind == "var":
            names.extend(n for d in child.declarations for n in binding_names(d.id))
        for _, value in child.children():
            visit(value)

    for _, value in node.children():
        visit(value)
    return names


def collect_bindings(region: Node) -> List[str]:
    """Names visible throughout ``region`` from the moment it is entered.

    Function-level regions see every 'var' they contain; block-level regions
    see the let/const/function/class declarations of their own statement list.
    A switch shares one block across its cases.
    """
    if isinstance(region, Program):
        names = _var_names(region)
        names.extend(n for s in region.body for n in _declared_names(s, lexical=True))
        return list(dict.fromkeys(names))
    if isinstance(region, BlockStatement):
        return [n for s in region.body for n in _declared_names(s, lexical=True)]
    if isinstance(region, SwitchStatement):
        return [
            n for case in region.cases for s in case.consequent
            for n in _declared_names(s, lexical=True)
        ]
    if isinstance(region, SwitchCase):
        return []
    if isinstance(region, FUNCTION_TYPES):
        names = [n for p in region.params for n in binding_names(p)]
        if isinstance(region, FunctionExpression) and region.id is not None:
            names.append(region.id.name)
        if not isinstance(region, ArrowFunctionExpression) or not region.expression:
            # class bodies are strict code
            names.extend(_var_names(region.body, block_functions=not isinstance(region, ClassMethod)))
        return names
    if isinstance(region, CatchClause):
        return binding_names(region.param)
    if isinstance(region, ForStatement):
        if isinstance(region.init, VariableDeclaration):
            return _declared_names(region.init, lexical=False)
        return []
    if isinstance(region, (ForInStatement, ForOfStatement)):
        if isinstance(region.left, VariableDeclaration):
            return _declared_names(region.left, lexical=False)
        return []
    if isinstance(region, ClassExpression) and region.id is not None:
        return [region.id.name]
    return []


# Node kinds that open a new scope frame.
SCOPE_TYPES = (
    Program, BlockStatement, SwitchStatement, SwitchCase, CatchClause,
    ForStatement, ForInStatement, ForOfStatement, ClassExpression,
) + FUNCTION_TYPES
