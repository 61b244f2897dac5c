"""AST node types for the JavaScript parser.

Node kinds follow the ESTree/Babel names, so ``node.type`` is the kind a
visitor map is keyed on.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Tuple, Union


@dataclass(frozen=True)
class SourceLocation:
    """Start position of a node in the source (1-based)."""
    line: int
    column: int


@dataclass
class Node:
    """Base class for all AST nodes."""

    # Excluded from comparisons so trees built by hand equal parsed ones.
    loc: Optional[SourceLocation] = field(default=None, kw_only=True, compare=False, repr=False)

    @property
    def type(self) -> str:
        return self.__class__.__name__

    def children(self) -> Iterator[Tuple[str, Any]]:
        """Yield (field name, value) for every child field, in source order."""
        for key, value in self.__dict__.items():
            if key == "loc":
                continue
            if isinstance(value, (Node, list)):
                yield key, value

    def to_dict(self) -> dict:
        """Convert node to dictionary for testing/serialization."""
        result = {"type": self.type}
        for key, value in self.__dict__.items():
            if key == "loc":
                continue
            if isinstance(value, Node):
                result[key] = value.to_dict()
            elif isinstance(value, list):
                result[key] = [
                    v.to_dict() if isinstance(v, Node) else v
                    for v in value
                ]
            else:
                result[key] = value
        return result


# Literals
@dataclass
class NumericLiteral(Node):
    """Numeric literal: 42, 3.14, 0xff"""
    value: Union[int, float]
    raw: Optional[str] = None


@dataclass
class StringLiteral(Node):
    """String literal: "hello", 'world'"""
    value: str
    raw: Optional[str] = None


@dataclass
class BooleanLiteral(Node):
    """Boolean literal: true, false"""
    value: bool


@dataclass
class NullLiteral(Node):
    """Null literal: null"""
    pass


@dataclass
class RegexLiteral(Node):
    """Regex literal: /ab+c/gi"""
    pattern: str
    flags: str = ""


@dataclass
class Identifier(Node):
    """Identifier: variable names, property names"""
    name: str


@dataclass
class ThisExpression(Node):
    """The 'this' keyword."""
    pass


@dataclass
class Super(Node):
    """The 'super' keyword."""
    pass


# Expressions
@dataclass
class ArrayExpression(Node):
    """Array literal: [1, 2, 3]"""
    elements: List[Optional[Node]]


@dataclass
class ObjectExpression(Node):
    """Object literal: {a: 1, b: 2}"""
    properties: List[Node]


@dataclass
class Property(Node):
    """Object property: key: value"""
    key: Node  # Identifier or Literal
    value: Node
    kind: str = "init"  # "init", "get", or "set"
    computed: bool = False
    shorthand: bool = False
    method: bool = False


@dataclass
class SpreadElement(Node):
    """Spread element: ...items"""
    argument: Node


@dataclass
class UnaryExpression(Node):
    """Unary expression: -x, !x, typeof x, etc."""
    operator: str
    argument: Node
    prefix: bool = True


@dataclass
class UpdateExpression(Node):
    """Update expression: ++x, x++, --x, x--"""
    operator: str  # "++" or "--"
    argument: Node
    prefix: bool


@dataclass
class BinaryExpression(Node):
    """Binary expression: a + b, a * b, etc."""
    operator: str
    left: Node
    right: Node


@dataclass
class LogicalExpression(Node):
    """Logical expression: a && b, a || b"""
    operator: str  # "&&" or "||"
    left: Node
    right: Node


@dataclass
class ConditionalExpression(Node):
    """Conditional (ternary) expression: a ? b : c"""
    test: Node
    consequent: Node
    alternate: Node


@dataclass
class AssignmentExpression(Node):
    """Assignment expression: a = b, a += b, etc."""
    operator: str
    left: Node
    right: Node


@dataclass
class SequenceExpression(Node):
    """Sequence expression: a, b, c"""
    expressions: List[Node]


@dataclass
class MemberExpression(Node):
    """Member expression: a.b, a[b]"""
    object: Node
    property: Node
    computed: bool = False  # True for a[b], False for a.b


@dataclass
class CallExpression(Node):
    """Call expression: f(a, b)"""
    callee: Node
    arguments: List[Node]


@dataclass
class NewExpression(Node):
    """New expression: new Foo(a, b)"""
    callee: Node
    arguments: List[Node]


@dataclass
class YieldExpression(Node):
    """Yield expression: yield x, yield* xs"""
    argument: Optional[Node]
    delegate: bool = False


@dataclass
class AwaitExpression(Node):
    """Await expression: await promise"""
    argument: Node


# Binding patterns
@dataclass
class AssignmentPattern(Node):
    """Binding with a default value: (a = 1) => a"""
    left: Node
    right: Node


@dataclass
class RestElement(Node):
    """Rest binding: (...args) => args"""
    argument: Node


@dataclass
class ObjectPattern(Node):
    """Object destructuring: const {a, b: c} = obj"""
    properties: List[Node]  # Property (value is the binding) or RestElement


@dataclass
class ArrayPattern(Node):
    """Array destructuring: const [a, , b] = arr"""
    elements: List[Optional[Node]]


# Statements
@dataclass
class Program(Node):
    """Program node - root of AST."""
    body: List[Node]


@dataclass
class ExpressionStatement(Node):
    """Expression statement: expression;"""
    expression: Node


@dataclass
class BlockStatement(Node):
    """Block statement: { ... }"""
    body: List[Node]


@dataclass
class EmptyStatement(Node):
    """Empty statement: ;"""
    pass


@dataclass
class VariableDeclaration(Node):
    """Variable declaration: var a = 1, b = 2;"""
    declarations: List["VariableDeclarator"]
    kind: str = "var"  # "var", "let" or "const"


@dataclass
class VariableDeclarator(Node):
    """Variable declarator: a = 1"""
    id: Node  # Identifier or pattern
    init: Optional[Node] = None


@dataclass
class IfStatement(Node):
    """If statement: if (test) consequent else alternate"""
    test: Node
    consequent: Node
    alternate: Optional[Node] = None


@dataclass
class WhileStatement(Node):
    """While statement: while (test) body"""
    test: Node
    body: Node


@dataclass
class DoWhileStatement(Node):
    """Do-while statement: do body while (test)"""
    body: Node
    test: Node


@dataclass
class ForStatement(Node):
    """For statement: for (init; test; update) body"""
    init: Optional[Node]  # VariableDeclaration or Expression
    test: Optional[Node]
    update: Optional[Node]
    body: Node


@dataclass
class ForInStatement(Node):
    """For-in statement: for (left in right) body"""
    left: Node  # VariableDeclaration or Pattern
    right: Node
    body: Node


@dataclass
class ForOfStatement(Node):
    """For-of statement: for (left of right) body"""
    left: Node
    right: Node
    body: Node


@dataclass
class BreakStatement(Node):
    """Break statement: break; or break label;"""
    label: Optional[Identifier] = None


@dataclass
class ContinueStatement(Node):
    """Continue statement: continue; or continue label;"""
    label: Optional[Identifier] = None


@dataclass
class ReturnStatement(Node):
    """Return statement: return; or return expr;"""
    argument: Optional[Node] = None


@dataclass
class ThrowStatement(Node):
    """Throw statement: throw expr;"""
    argument: Node


@dataclass
class TryStatement(Node):
    """Try statement: try { } catch (e) { } finally { }"""
    block: BlockStatement
    handler: Optional["CatchClause"] = None
    finalizer: Optional[BlockStatement] = None


@dataclass
class CatchClause(Node):
    """Catch clause: catch (param) { body }"""
    param: Optional[Node]  # None for "catch { }"
    body: BlockStatement


@dataclass
class SwitchStatement(Node):
    """Switch statement: switch (discriminant) { cases }"""
    discriminant: Node
    cases: List["SwitchCase"]


@dataclass
class SwitchCase(Node):
    """Switch case: case test: consequent or default: consequent"""
    test: Optional[Node]  # None for default
    consequent: List[Node]


@dataclass
class LabeledStatement(Node):
    """Labeled statement: label: statement"""
    label: Identifier
    body: Node


# Functions and classes
@dataclass
class FunctionDeclaration(Node):
    """Function declaration: function name(params) { body }"""
    id: Identifier
    params: List[Node]
    body: BlockStatement
    generator: bool = False
    is_async: bool = False


@dataclass
class FunctionExpression(Node):
    """Function expression: function name(params) { body }"""
    id: Optional[Identifier]
    params: List[Node]
    body: BlockStatement
    generator: bool = False
    is_async: bool = False


@dataclass
class ArrowFunctionExpression(Node):
    """Arrow function: (params) => body"""
    params: List[Node]
    body: Node  # BlockStatement or expression
    expression: bool = False  # True when body is an expression
    is_async: bool = False


@dataclass
class ClassBody(Node):
    """Class body: { methods }"""
    body: List["ClassMethod"]


@dataclass
class ClassMethod(Node):
    """Class method: name(params) { body }"""
    key: Node
    params: List[Node]
    body: BlockStatement
    kind: str = "method"  # "constructor", "method", "get" or "set"
    computed: bool = False
    static: bool = False
    generator: bool = False
    is_async: bool = False


@dataclass
class ClassDeclaration(Node):
    """Class declaration: class Name extends Base { }"""
    id: Identifier
    superclass: Optional[Node]
    body: ClassBody


@dataclass
class ClassExpression(Node):
    """Class expression: const C = class { }"""
    id: Optional[Identifier]
    superclass: Optional[Node]
    body: ClassBody


FUNCTION_TYPES = (FunctionDeclaration, FunctionExpression, ArrowFunctionExpression, ClassMethod)
