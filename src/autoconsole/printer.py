"""Prints an AST back to JavaScript source."""

import json
from typing import List

from .ast_nodes import (
    Node, Program, NumericLiteral, StringLiteral, BooleanLiteral, NullLiteral,
    RegexLiteral, Identifier, ThisExpression, Super, ArrayExpression, ObjectExpression, Property,
    SpreadElement, UnaryExpression, UpdateExpression, BinaryExpression, LogicalExpression,
    ConditionalExpression, AssignmentExpression, SequenceExpression,
    MemberExpression, CallExpression, NewExpression, YieldExpression, AwaitExpression,
    AssignmentPattern, RestElement, ObjectPattern, ArrayPattern,
    ExpressionStatement, BlockStatement, EmptyStatement,
    VariableDeclaration, VariableDeclarator,
    IfStatement, WhileStatement, DoWhileStatement, ForStatement,
    ForInStatement, ForOfStatement, BreakStatement, ContinueStatement,
    ReturnStatement, ThrowStatement, TryStatement, CatchClause,
    SwitchStatement, SwitchCase, LabeledStatement,
    FunctionDeclaration, FunctionExpression, ArrowFunctionExpression,
    ClassDeclaration, ClassExpression, ClassBody, ClassMethod,
)
from .parser import PRECEDENCE


# Expression precedence levels; binary operators sit between CONDITIONAL and UNARY.
SEQUENCE = 0
ASSIGN = 1
CONDITIONAL = 2
BINARY_BASE = 3
UNARY = BINARY_BASE + max(PRECEDENCE.values()) + 1
POSTFIX = UNARY + 1
CALL = POSTFIX + 1
PRIMARY = CALL + 1

INDENT = "  "


def _precedence(node: Node) -> int:
    if isinstance(node, SequenceExpression):
        return SEQUENCE
    if isinstance(node, (AssignmentExpression, ArrowFunctionExpression, YieldExpression)):
        return ASSIGN
    if isinstance(node, ConditionalExpression):
        return CONDITIONAL
    if isinstance(node, (BinaryExpression, LogicalExpression)):
        return BINARY_BASE + PRECEDENCE[node.operator]
    if isinstance(node, (UnaryExpression, AwaitExpression)):
        return UNARY
    if isinstance(node, UpdateExpression):
        return UNARY if node.prefix else POSTFIX
    if isinstance(node, (CallExpression, MemberExpression, NewExpression)):
        return CALL
    return PRIMARY


def _leftmost(node: Node) -> Node:
    """The node whose text starts the printed expression."""
    while True:
        if isinstance(node, CallExpression):
            node = node.callee
        elif isinstance(node, MemberExpression):
            node = node.object
        elif isinstance(node, (BinaryExpression, LogicalExpression, AssignmentExpression)):
            node = node.left
        elif isinstance(node, ConditionalExpression):
            node = node.test
        elif isinstance(node, SequenceExpression):
            node = node.expressions[0]
        elif isinstance(node, UpdateExpression) and not node.prefix:
            node = node.argument
        else:
            return node


def _has_method_body(prop: Node) -> bool:
    if not isinstance(prop, Property) or not (prop.method or prop.kind in ("get", "set")):
        return False
    return bool(prop.value.body.body)


class Printer:
    """Serializes a syntax tree with two-space indentation."""

    def __init__(self):
        self.indent = 0
        # set while printing a for(;;) initializer, where a bare 'in' reads as for-in
        self.no_in = False

    def print(self, program: Program) -> str:
        if not program.body:
            return ""
        return "\n".join(self._stmt(s) for s in program.body) + "\n"

    def _pad(self) -> str:
        return INDENT * self.indent

    # ---- Statements ----

    def _block(self, body: List[Node]) -> str:
        if not body:
            return "{}"
        self.indent += 1
        try:
            lines = [self._stmt(s) for s in body]
        finally:
            self.indent -= 1
        return "{\n" + "\n".join(lines) + "\n" + self._pad() + "}"

    def _body(self, node: Node) -> str:
        """Body of a compound statement, placed after its header."""
        if isinstance(node, BlockStatement):
            return " " + self._block(node.body)
        self.indent += 1
        try:
            return "\n" + self._stmt(node)
        finally:
            self.indent -= 1

    def _stmt(self, node: Node) -> str:
        return self._pad() + self._stmt_inline(node)

    def _stmt_inline(self, node: Node) -> str:
        """A statement without its leading indentation."""
        if isinstance(node, ExpressionStatement):
            text = self._expr(node.expression)
            if isinstance(_leftmost(node.expression), (
                ObjectExpression, ObjectPattern, FunctionExpression, ClassExpression,
            )):
                text = f"({text})"
            return text + ";"

        if isinstance(node, BlockStatement):
            return self._block(node.body)

        if isinstance(node, EmptyStatement):
            return ";"

        if isinstance(node, VariableDeclaration):
            return self._declaration(node) + ";"

        if isinstance(node, FunctionDeclaration):
            return self._function(node)

        if isinstance(node, ClassDeclaration):
            return self._class(node)

        if isinstance(node, ReturnStatement):
            if node.argument is None:
                return "return;"
            return f"return {self._expr(node.argument)};"

        if isinstance(node, ThrowStatement):
            return f"throw {self._expr(node.argument)};"

        if isinstance(node, BreakStatement):
            return f"break {node.label.name};" if node.label else "break;"

        if isinstance(node, ContinueStatement):
            return f"continue {node.label.name};" if node.label else "continue;"

        if isinstance(node, IfStatement):
            text = f"if ({self._expr(node.test)})" + self._body(node.consequent)
            if node.alternate is not None:
                if isinstance(node.consequent, BlockStatement):
                    text += " else"
                else:
                    text += "\n" + self._pad() + "else"
                if isinstance(node.alternate, IfStatement):
                    text += " " + self._stmt_inline(node.alternate)
                else:
                    text += self._body(node.alternate)
            return text

        if isinstance(node, WhileStatement):
            return f"while ({self._expr(node.test)})" + self._body(node.body)

        if isinstance(node, DoWhileStatement):
            body = self._body(node.body)
            separator = " " if isinstance(node.body, BlockStatement) else "\n" + self._pad()
            return f"do{body}{separator}while ({self._expr(node.test)});"

        if isinstance(node, ForStatement):
            init = ""
            no_in, self.no_in = self.no_in, True
            try:
                if isinstance(node.init, VariableDeclaration):
                    init = self._declaration(node.init)
                elif node.init is not None:
                    init = self._expr(node.init)
            finally:
                self.no_in = no_in
            test = f" {self._expr(node.test)}" if node.test is not None else ""
            update = f" {self._expr(node.update)}" if node.update is not None else ""
            return f"for ({init};{test};{update})" + self._body(node.body)

        if isinstance(node, (ForInStatement, ForOfStatement)):
            if isinstance(node.left, VariableDeclaration):
                left = self._declaration(node.left)
            else:
                left = self._expr(node.left, CALL)
            keyword = "in" if isinstance(node, ForInStatement) else "of"
            right = self._expr(node.right, ASSIGN)
            return f"for ({left} {keyword} {right})" + self._body(node.body)

        if isinstance(node, TryStatement):
            text = "try " + self._block(node.block.body)
            if node.handler is not None:
                text += " " + self._catch(node.handler)
            if node.finalizer is not None:
                text += " finally " + self._block(node.finalizer.body)
            return text

        if isinstance(node, SwitchStatement):
            return f"switch ({self._expr(node.discriminant)}) " + self._cases(node.cases)

        if isinstance(node, LabeledStatement):
            return f"{node.label.name}: " + self._stmt_inline(node.body)

        raise TypeError(f"Cannot print statement of kind {node.type}")

    def _declaration(self, node: VariableDeclaration) -> str:
        return f"{node.kind} " + ", ".join(self._declarator(d) for d in node.declarations)

    def _declarator(self, node: VariableDeclarator) -> str:
        if node.init is None:
            return self._expr(node.id)
        return f"{self._expr(node.id)} = {self._expr(node.init, ASSIGN)}"

    def _catch(self, node: CatchClause) -> str:
        if node.param is None:
            return "catch " + self._block(node.body.body)
        return f"catch ({self._expr(node.param)}) " + self._block(node.body.body)

    def _cases(self, cases: List[SwitchCase]) -> str:
        if not cases:
            return "{}"
        lines = []
        self.indent += 1
        try:
            for case in cases:
                header = f"case {self._expr(case.test)}:" if case.test is not None else "default:"
                lines.append(self._pad() + header)
                self.indent += 1
                try:
                    lines.extend(self._stmt(s) for s in case.consequent)
                finally:
                    self.indent -= 1
        finally:
            self.indent -= 1
        return "{\n" + "\n".join(lines) + "\n" + self._pad() + "}"

    # ---- Functions and classes ----

    def _params(self, params: List[Node]) -> str:
        return "(" + ", ".join(self._expr(p, ASSIGN) for p in params) + ")"

    def _function(self, node) -> str:
        prefix = "async " if node.is_async else ""
        star = "*" if node.generator else ""
        name = f" {node.id.name}" if node.id is not None else " "
        return f"{prefix}function{star}{name}{self._params(node.params)} " + self._block(node.body.body)

    def _class(self, node) -> str:
        text = "class"
        if node.id is not None:
            text += f" {node.id.name}"
        if node.superclass is not None:
            text += f" extends {self._expr(node.superclass, CALL)}"
        return text + " " + self._class_body(node.body)

    def _class_body(self, node: ClassBody) -> str:
        if not node.body:
            return "{}"
        self.indent += 1
        try:
            lines = [self._pad() + self._method(m) for m in node.body]
        finally:
            self.indent -= 1
        return "{\n" + "\n".join(lines) + "\n" + self._pad() + "}"

    def _method_key(self, key: Node, computed: bool) -> str:
        if computed:
            return f"[{self._expr(key, ASSIGN)}]"
        return self._expr(key)

    def _method(self, node: ClassMethod) -> str:
        text = "static " if node.static else ""
        if node.kind in ("get", "set"):
            text += node.kind + " "
        if node.is_async:
            text += "async "
        if node.generator:
            text += "*"
        text += self._method_key(node.key, node.computed)
        return text + self._params(node.params) + " " + self._block(node.body.body)

    def _object_lines(self, properties: List[Node]) -> str:
        """An object with method bodies, one property per line."""
        self.indent += 1
        try:
            lines = [self._pad() + self._property(p) for p in properties]
        finally:
            self.indent -= 1
        return "{\n" + ",\n".join(lines) + "\n" + self._pad() + "}"

    def _property(self, node: Node) -> str:
        if not isinstance(node, Property):
            return self._expr(node)
        if node.shorthand:
            return self._expr(node.value, ASSIGN)
        key = self._method_key(node.key, node.computed)
        if node.kind in ("get", "set") or node.method:
            fn = node.value
            prefix = f"{node.kind} " if node.kind in ("get", "set") else ""
            if fn.is_async:
                prefix += "async "
            if fn.generator:
                prefix += "*"
            return prefix + key + self._params(fn.params) + " " + self._block(fn.body.body)
        return f"{key}: {self._expr(node.value, ASSIGN)}"

    # ---- Expressions ----

    def _expr(self, node: Node, min_precedence: int = SEQUENCE) -> str:
        """Print ``node``, parenthesized if it binds looser than ``min_precedence``."""
        text = self._expr_inner(node)
        if _precedence(node) < min_precedence:
            return f"({text})"
        if self.no_in and isinstance(node, BinaryExpression) and node.operator == "in":
            return f"({text})"
        return text

    def _expr_inner(self, node: Node) -> str:
        if isinstance(node, Identifier):
            return node.name

        if isinstance(node, NumericLiteral):
            if node.raw is not None:
                return node.raw
            return repr(node.value) if isinstance(node.value, float) else str(node.value)

        if isinstance(node, StringLiteral):
            if node.raw is not None:
                return node.raw
            return json.dumps(node.value, ensure_ascii=False)

        if isinstance(node, BooleanLiteral):
            return "true" if node.value else "false"

        if isinstance(node, NullLiteral):
            return "null"

        if isinstance(node, RegexLiteral):
            return f"/{node.pattern}/{node.flags}"

        if isinstance(node, ThisExpression):
            return "this"

        if isinstance(node, Super):
            return "super"

        if isinstance(node, ArrayExpression):
            items = ["" if e is None else self._expr(e, ASSIGN) for e in node.elements]
            trailing = "," if node.elements and node.elements[-1] is None else ""
            return "[" + ", ".join(items) + trailing + "]"

        if isinstance(node, ArrayPattern):
            items = ["" if e is None else self._expr(e, ASSIGN) for e in node.elements]
            trailing = "," if node.elements and node.elements[-1] is None else ""
            return "[" + ", ".join(items) + trailing + "]"

        if isinstance(node, (ObjectExpression, ObjectPattern)):
            if not node.properties:
                return "{}"
            if any(_has_method_body(p) for p in node.properties):
                return self._object_lines(node.properties)
            return "{ " + ", ".join(self._property(p) for p in node.properties) + " }"

        if isinstance(node, SpreadElement):
            return "..." + self._expr(node.argument, ASSIGN)

        if isinstance(node, RestElement):
            return "..." + self._expr(node.argument, ASSIGN)

        if isinstance(node, AssignmentPattern):
            return f"{self._expr(node.left, CALL)} = {self._expr(node.right, ASSIGN)}"

        if isinstance(node, UnaryExpression):
            argument = self._expr(node.argument, UNARY)
            if node.operator.isalpha():
                return f"{node.operator} {argument}"
            if argument.startswith(node.operator[-1]):
                return f"{node.operator} {argument}"
            return node.operator + argument

        if isinstance(node, UpdateExpression):
            if node.prefix:
                return node.operator + self._expr(node.argument, UNARY)
            return self._expr(node.argument, POSTFIX) + node.operator

        if isinstance(node, (BinaryExpression, LogicalExpression)):
            return self._binary(node)

        if isinstance(node, ConditionalExpression):
            test = self._expr(node.test, CONDITIONAL + 1)
            consequent = self._expr(node.consequent, ASSIGN)
            alternate = self._expr(node.alternate, ASSIGN)
            return f"{test} ? {consequent} : {alternate}"

        if isinstance(node, AssignmentExpression):
            return f"{self._expr(node.left, CALL)} {node.operator} {self._expr(node.right, ASSIGN)}"

        if isinstance(node, SequenceExpression):
            return ", ".join(self._expr(e, ASSIGN) for e in node.expressions)

        if isinstance(node, MemberExpression):
            obj = self._expr(node.object, CALL)
            if isinstance(node.object, NumericLiteral) and obj.isdigit():
                obj = f"({obj})"
            if node.computed:
                return f"{obj}[{self._expr(node.property)}]"
            return f"{obj}.{node.property.name}"

        if isinstance(node, CallExpression):
            callee = self._expr(node.callee, CALL)
            return callee + self._arguments(node.arguments)

        if isinstance(node, NewExpression):
            callee = self._expr(node.callee, CALL)
            if isinstance(node.callee, CallExpression):
                callee = f"({callee})"
            return "new " + callee + self._arguments(node.arguments)

        if isinstance(node, YieldExpression):
            keyword = "yield*" if node.delegate else "yield"
            if node.argument is None:
                return keyword
            return f"{keyword} {self._expr(node.argument, ASSIGN)}"

        if isinstance(node, AwaitExpression):
            return "await " + self._expr(node.argument, UNARY)

        if isinstance(node, FunctionExpression):
            return self._function(node)

        if isinstance(node, ArrowFunctionExpression):
            prefix = "async " if node.is_async else ""
            if node.expression:
                body = self._expr(node.body, ASSIGN)
                if isinstance(_leftmost(node.body), ObjectExpression):
                    body = f"({body})"
            else:
                body = self._block(node.body.body)
            return f"{prefix}{self._params(node.params)} => {body}"

        if isinstance(node, ClassExpression):
            return self._class(node)

        raise TypeError(f"Cannot print expression of kind {node.type}")

    def _arguments(self, arguments: List[Node]) -> str:
        return "(" + ", ".join(self._expr(a, ASSIGN) for a in arguments) + ")"

    def _binary(self, node: Node) -> str:
        precedence = _precedence(node)
        # '**' groups to the right, everything else to the left
        if node.operator == "**":
            left_min, right_min = precedence + 1, precedence
        else:
            left_min, right_min = precedence, precedence + 1
        left = self._operand(node.left, node.operator, left_min)
        # a unary operand cannot be the base of an exponent
        if node.operator == "**" and isinstance(node.left, (UnaryExpression, AwaitExpression)):
            left = f"({left})"
        right = self._operand(node.right, node.operator, right_min)
        return f"{left} {node.operator} {right}"

    def _operand(self, child: Node, operator: str, min_precedence: int) -> str:
        # '??' cannot be mixed with '&&' / '||' without parentheses
        if isinstance(child, LogicalExpression) and (child.operator == "??") != (operator == "??"):
            if operator in ("&&", "||", "??"):
                return f"({self._expr(child)})"
        return self._expr(child, min_precedence)


def print_program(program: Program) -> str:
    """Serialize ``program`` to JavaScript source."""
    return Printer().print(program)
