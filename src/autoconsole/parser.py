"""JavaScript parser - produces an AST from tokens."""

from typing import List, Optional, Tuple
from .lexer import Lexer
from .tokens import Token, TokenType, KEYWORDS, ASSIGNMENT_OPERATORS, BINARY_OPERATORS
from .errors import JSSyntaxError
from .ast_nodes import (
    Node, SourceLocation, Program, NumericLiteral, StringLiteral, BooleanLiteral, NullLiteral,
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


# Operator precedence (higher = binds tighter)
PRECEDENCE = {
    "??": 1,
    "||": 1,
    "&&": 2,
    "|": 3,
    "^": 4,
    "&": 5,
    "==": 6, "!=": 6, "===": 6, "!==": 6,
    "<": 7, ">": 7, "<=": 7, ">=": 7, "in": 7, "instanceof": 7,
    "<<": 8, ">>": 8, ">>>": 8,
    "+": 9, "-": 9,
    "*": 10, "/": 10, "%": 10,
    "**": 11,
}

LOGICAL_OPERATORS = frozenset(["&&", "||", "??"])

_DECLARATION_KINDS = {
    TokenType.VAR: "var",
    TokenType.LET: "let",
    TokenType.CONST: "const",
}


class Parser:
    """Recursive descent parser for JavaScript."""

    def __init__(self, source: str):
        self.lexer = Lexer(source)
        self.current: Token = self.lexer.next_token()
        self.previous: Optional[Token] = None
        # Whether "yield" / "await" are operators in the function being parsed
        self._in_generator = False
        self._in_async = False

    def _error(self, message: str) -> JSSyntaxError:
        """Create a syntax error at current position."""
        return JSSyntaxError(message, self.current.line, self.current.column)

    @staticmethod
    def _loc(token: Token) -> SourceLocation:
        return SourceLocation(token.line, token.column)

    def _advance(self) -> Token:
        """Advance to next token and return previous."""
        self.previous = self.current
        self.current = self.lexer.next_token()
        return self.previous

    def _check(self, *types: TokenType) -> bool:
        """Check if current token is one of the given types."""
        return self.current.type in types

    def _check_word(self, word: str) -> bool:
        """Check for a contextual keyword such as 'async' or 'get'."""
        return self.current.type == TokenType.IDENTIFIER and self.current.value == word

    def _match(self, *types: TokenType) -> bool:
        """If current token matches, advance and return True."""
        if self._check(*types):
            self._advance()
            return True
        return False

    def _expect(self, token_type: TokenType, message: str) -> Token:
        """Expect a specific token type or raise error."""
        if self.current.type != token_type:
            raise self._error(message)
        return self._advance()

    def _is_at_end(self) -> bool:
        """Check if we've reached the end of input."""
        return self.current.type == TokenType.EOF

    def _save(self) -> Tuple:
        return (self.lexer.save(), self.current, self.previous)

    def _restore(self, state: Tuple) -> None:
        lexer_state, self.current, self.previous = state
        self.lexer.restore(lexer_state)

    def _peek_next(self) -> Token:
        """Peek at the next token without consuming it."""
        state = self.lexer.save()
        next_token = self.lexer.next_token()
        self.lexer.restore(state)
        return next_token

    def _is_arrow_ahead(self) -> bool:
        """At '(' - does the matching ')' precede '=>'?"""
        state = self._save()
        try:
            depth = 0
            while not self._is_at_end():
                if self._check(TokenType.LPAREN, TokenType.LBRACKET, TokenType.LBRACE):
                    depth += 1
                elif self._check(TokenType.RPAREN, TokenType.RBRACKET, TokenType.RBRACE):
                    depth -= 1
                    if depth == 0:
                        self._advance()
                        return self._check(TokenType.ARROW)
                self._advance()
            return False
        except JSSyntaxError:
            return False
        finally:
            self._restore(state)

    def parse(self) -> Program:
        """Parse the entire program."""
        body: List[Node] = []
        while not self._is_at_end():
            body.append(self._parse_statement())
        return Program(body, loc=SourceLocation(1, 1))

    # ---- Statements ----

    def _parse_statement(self) -> Node:
        """Parse a statement."""
        start = self.current

        if self._match(TokenType.SEMICOLON):
            return EmptyStatement(loc=self._loc(start))

        if self._check(TokenType.LBRACE):
            return self._parse_block_statement()

        if self._check(TokenType.VAR, TokenType.LET, TokenType.CONST):
            declaration = self._parse_variable_declaration()
            self._consume_semicolon()
            return declaration

        if self._match(TokenType.IF):
            return self._parse_if_statement(start)

        if self._match(TokenType.WHILE):
            return self._parse_while_statement(start)

        if self._match(TokenType.DO):
            return self._parse_do_while_statement(start)

        if self._match(TokenType.FOR):
            return self._parse_for_statement(start)

        if self._match(TokenType.BREAK):
            label = self._parse_optional_label()
            return BreakStatement(label, loc=self._loc(start))

        if self._match(TokenType.CONTINUE):
            label = self._parse_optional_label()
            return ContinueStatement(label, loc=self._loc(start))

        if self._match(TokenType.RETURN):
            return self._parse_return_statement(start)

        if self._match(TokenType.THROW):
            if self.current.newline_before:
                raise self._error("Illegal newline after throw")
            argument = self._parse_expression()
            self._consume_semicolon()
            return ThrowStatement(argument, loc=self._loc(start))

        if self._match(TokenType.TRY):
            return self._parse_try_statement(start)

        if self._match(TokenType.SWITCH):
            return self._parse_switch_statement(start)

        if self._check(TokenType.FUNCTION):
            return self._parse_function(declaration=True)

        if self._check_word("async") and self._peek_next().type == TokenType.FUNCTION:
            return self._parse_function(declaration=True)

        if self._check(TokenType.CLASS):
            return self._parse_class(declaration=True)

        # Labeled statement: IDENTIFIER COLON statement
        if self._check(TokenType.IDENTIFIER) and self._peek_next().type == TokenType.COLON:
            label_token = self._advance()
            self._advance()
            body = self._parse_statement()
            label = Identifier(label_token.value, loc=self._loc(label_token))
            return LabeledStatement(label, body, loc=self._loc(start))

        return self._parse_expression_statement()

    def _parse_block_statement(self) -> BlockStatement:
        """Parse a block statement: { ... }"""
        start = self._expect(TokenType.LBRACE, "Expected '{'")
        body: List[Node] = []
        while not self._check(TokenType.RBRACE) and not self._is_at_end():
            body.append(self._parse_statement())
        self._expect(TokenType.RBRACE, "Expected '}'")
        return BlockStatement(body, loc=self._loc(start))

    def _parse_variable_declaration(self, in_for: bool = False) -> VariableDeclaration:
        """Parse variable declaration: let a = 1, b = 2

        The trailing semicolon is left to the caller, since a for-loop head
        uses the same syntax.
        """
        start = self._advance()
        kind = _DECLARATION_KINDS[start.type]
        declarations: List[VariableDeclarator] = []

        while True:
            target_token = self.current
            target = self._parse_binding_target()
            init = None
            if self._match(TokenType.ASSIGN):
                init = self._parse_assignment_expression(exclude_in=in_for)
            declarations.append(VariableDeclarator(target, init, loc=self._loc(target_token)))

            if not self._match(TokenType.COMMA):
                break

        return VariableDeclaration(declarations, kind, loc=self._loc(start))

    def _parse_if_statement(self, start: Token) -> IfStatement:
        """Parse if statement: if (test) consequent else alternate"""
        self._expect(TokenType.LPAREN, "Expected '(' after 'if'")
        test = self._parse_expression()
        self._expect(TokenType.RPAREN, "Expected ')' after condition")
        consequent = self._parse_statement()
        alternate = None
        if self._match(TokenType.ELSE):
            alternate = self._parse_statement()
        return IfStatement(test, consequent, alternate, loc=self._loc(start))

    def _parse_while_statement(self, start: Token) -> WhileStatement:
        """Parse while statement: while (test) body"""
        self._expect(TokenType.LPAREN, "Expected '(' after 'while'")
        test = self._parse_expression()
        self._expect(TokenType.RPAREN, "Expected ')' after condition")
        body = self._parse_statement()
        return WhileStatement(test, body, loc=self._loc(start))

    def _parse_do_while_statement(self, start: Token) -> DoWhileStatement:
        """Parse do-while statement: do body while (test);"""
        body = self._parse_statement()
        self._expect(TokenType.WHILE, "Expected 'while' after do block")
        self._expect(TokenType.LPAREN, "Expected '(' after 'while'")
        test = self._parse_expression()
        self._expect(TokenType.RPAREN, "Expected ')' after condition")
        self._consume_semicolon()
        return DoWhileStatement(body, test, loc=self._loc(start))

    def _parse_for_statement(self, start: Token) -> Node:
        """Parse for/for-in/for-of statement."""
        loc = self._loc(start)
        self._expect(TokenType.LPAREN, "Expected '(' after 'for'")

        init: Optional[Node] = None
        if self._check(TokenType.SEMICOLON):
            pass
        else:
            if self._check(TokenType.VAR, TokenType.LET, TokenType.CONST):
                init = self._parse_variable_declaration(in_for=True)
            else:
                # Parse with exclude_in=True so 'in' isn't treated as binary operator
                init = self._parse_expression(exclude_in=True)

            if self._match(TokenType.IN):
                right = self._parse_expression()
                self._expect(TokenType.RPAREN, "Expected ')' after for-in")
                body = self._parse_statement()
                return ForInStatement(self._for_left(init), right, body, loc=loc)

            if self._match(TokenType.OF):
                right = self._parse_assignment_expression()
                self._expect(TokenType.RPAREN, "Expected ')' after for-of")
                body = self._parse_statement()
                return ForOfStatement(self._for_left(init), right, body, loc=loc)

        self._expect(TokenType.SEMICOLON, "Expected ';' after for init")

        test = None
        if not self._check(TokenType.SEMICOLON):
            test = self._parse_expression()
        self._expect(TokenType.SEMICOLON, "Expected ';' after for condition")

        update = None
        if not self._check(TokenType.RPAREN):
            update = self._parse_expression()
        self._expect(TokenType.RPAREN, "Expected ')' after for update")

        body = self._parse_statement()
        return ForStatement(init, test, update, body, loc=loc)

    def _for_left(self, left: Node) -> Node:
        if isinstance(left, VariableDeclaration):
            if len(left.declarations) != 1:
                raise self._error("Only one binding allowed in for-in/for-of head")
            return left
        return self._to_pattern(left)

    def _parse_optional_label(self) -> Optional[Identifier]:
        label = None
        if self._check(TokenType.IDENTIFIER) and not self.current.newline_before:
            token = self._advance()
            label = Identifier(token.value, loc=self._loc(token))
        self._consume_semicolon()
        return label

    def _parse_return_statement(self, start: Token) -> ReturnStatement:
        """Parse return statement."""
        argument = None
        # a line break ends the statement
        if not self.current.newline_before and not self._check(
            TokenType.SEMICOLON, TokenType.RBRACE, TokenType.EOF,
        ):
            argument = self._parse_expression()
        self._consume_semicolon()
        return ReturnStatement(argument, loc=self._loc(start))

    def _parse_try_statement(self, start: Token) -> TryStatement:
        """Parse try statement."""
        block = self._parse_block_statement()
        handler = None
        finalizer = None

        catch_token = self.current
        if self._match(TokenType.CATCH):
            param = None
            if self._match(TokenType.LPAREN):
                param = self._parse_binding_target()
                self._expect(TokenType.RPAREN, "Expected ')' after catch parameter")
            catch_body = self._parse_block_statement()
            handler = CatchClause(param, catch_body, loc=self._loc(catch_token))

        if self._match(TokenType.FINALLY):
            finalizer = self._parse_block_statement()

        if handler is None and finalizer is None:
            raise self._error("Missing catch or finally clause")

        return TryStatement(block, handler, finalizer, loc=self._loc(start))

    def _parse_switch_statement(self, start: Token) -> SwitchStatement:
        """Parse switch statement."""
        self._expect(TokenType.LPAREN, "Expected '(' after 'switch'")
        discriminant = self._parse_expression()
        self._expect(TokenType.RPAREN, "Expected ')' after switch expression")
        self._expect(TokenType.LBRACE, "Expected '{' before switch body")

        cases: List[SwitchCase] = []
        while not self._check(TokenType.RBRACE) and not self._is_at_end():
            case_token = self.current
            test = None
            if self._match(TokenType.CASE):
                test = self._parse_expression()
            elif not self._match(TokenType.DEFAULT):
                raise self._error("Expected 'case' or 'default'")

            self._expect(TokenType.COLON, "Expected ':' after case expression")

            consequent: List[Node] = []
            while not self._check(TokenType.CASE, TokenType.DEFAULT, TokenType.RBRACE, TokenType.EOF):
                consequent.append(self._parse_statement())

            cases.append(SwitchCase(test, consequent, loc=self._loc(case_token)))

        self._expect(TokenType.RBRACE, "Expected '}' after switch body")
        return SwitchStatement(discriminant, cases, loc=self._loc(start))

    def _parse_expression_statement(self) -> ExpressionStatement:
        """Parse expression statement."""
        start = self.current
        expr = self._parse_expression()
        self._consume_semicolon()
        return ExpressionStatement(expr, loc=self._loc(start))

    def _consume_semicolon(self) -> None:
        """Consume a semicolon if present (ASI simulation)."""
        self._match(TokenType.SEMICOLON)

    # ---- Functions and classes ----

    def _parse_function(self, declaration: bool) -> Node:
        """Parse a function declaration or expression, including async/generator forms."""
        start = self.current
        is_async = False
        if self._check_word("async"):
            self._advance()
            is_async = True
        self._expect(TokenType.FUNCTION, "Expected 'function'")
        generator = self._match(TokenType.STAR)

        name = None
        if self._check(TokenType.IDENTIFIER):
            token = self._advance()
            name = Identifier(token.value, loc=self._loc(token))
        elif declaration:
            raise self._error("Expected function name")

        params, body = self._parse_function_rest(generator, is_async)
        if declaration:
            return FunctionDeclaration(name, params, body, generator, is_async, loc=self._loc(start))
        return FunctionExpression(name, params, body, generator, is_async, loc=self._loc(start))

    def _parse_function_rest(self, generator: bool, is_async: bool) -> Tuple[List[Node], BlockStatement]:
        """Parse '(params) { body }' with yield/await enabled as the function allows."""
        saved = (self._in_generator, self._in_async)
        self._in_generator, self._in_async = generator, is_async
        try:
            params = self._parse_function_params()
            body = self._parse_block_statement()
        finally:
            self._in_generator, self._in_async = saved
        return params, body

    def _parse_function_params(self) -> List[Node]:
        """Parse function parameters."""
        self._expect(TokenType.LPAREN, "Expected '(' before parameters")
        params: List[Node] = []
        while not self._check(TokenType.RPAREN):
            if self._check(TokenType.ELLIPSIS):
                start = self._advance()
                params.append(RestElement(self._parse_binding_target(), loc=self._loc(start)))
                break
            params.append(self._parse_binding_element())
            if not self._match(TokenType.COMMA):
                break
        self._expect(TokenType.RPAREN, "Expected ')' after parameters")
        return params

    def _parse_arrow_function(self, is_async: bool = False) -> ArrowFunctionExpression:
        """Parse an arrow function once '=>' is known to follow the parameters."""
        start = self.current
        saved = (self._in_generator, self._in_async)
        self._in_generator, self._in_async = False, is_async
        try:
            if self._check(TokenType.IDENTIFIER):
                token = self._advance()
                params: List[Node] = [Identifier(token.value, loc=self._loc(token))]
            else:
                params = self._parse_function_params()
            self._expect(TokenType.ARROW, "Expected '=>'")
            if self._check(TokenType.LBRACE):
                body: Node = self._parse_block_statement()
                expression = False
            else:
                body = self._parse_assignment_expression()
                expression = True
        finally:
            self._in_generator, self._in_async = saved
        return ArrowFunctionExpression(params, body, expression, is_async, loc=self._loc(start))

    def _parse_class(self, declaration: bool) -> Node:
        """Parse a class declaration or expression."""
        start = self._expect(TokenType.CLASS, "Expected 'class'")
        name = None
        if self._check(TokenType.IDENTIFIER):
            token = self._advance()
            name = Identifier(token.value, loc=self._loc(token))
        elif declaration:
            raise self._error("Expected class name")

        superclass = None
        if self._match(TokenType.EXTENDS):
            superclass = self._parse_postfix_expression()

        body_token = self._expect(TokenType.LBRACE, "Expected '{' before class body")
        methods: List[ClassMethod] = []
        while not self._check(TokenType.RBRACE):
            if self._is_at_end():
                raise self._error("Unterminated class body")
            if self._match(TokenType.SEMICOLON):
                continue
            methods.append(self._parse_class_method())
        self._expect(TokenType.RBRACE, "Expected '}' after class body")

        body = ClassBody(methods, loc=self._loc(body_token))
        if declaration:
            return ClassDeclaration(name, superclass, body, loc=self._loc(start))
        return ClassExpression(name, superclass, body, loc=self._loc(start))

    def _is_modifier(self, word: str) -> bool:
        """A 'static'/'async'/'get'/'set' prefix, as opposed to a method with that name."""
        if not self._check_word(word):
            return False
        return self._peek_next().type not in (
            TokenType.LPAREN, TokenType.ASSIGN, TokenType.SEMICOLON,
            TokenType.COLON, TokenType.COMMA, TokenType.RBRACE,
        )

    def _parse_class_method(self) -> ClassMethod:
        start = self.current
        static = False
        if self._is_modifier("static"):
            self._advance()
            static = True

        is_async = False
        if self._is_modifier("async"):
            self._advance()
            is_async = True
        generator = self._match(TokenType.STAR)

        kind = "method"
        if not is_async and not generator:
            for accessor in ("get", "set"):
                if self._is_modifier(accessor):
                    self._advance()
                    kind = accessor
                    break

        key, computed = self._parse_property_key()
        if kind == "method" and not static and not computed and _key_name(key) == "constructor":
            kind = "constructor"

        params, body = self._parse_function_rest(generator, is_async)
        return ClassMethod(
            key, params, body, kind, computed, static, generator, is_async,
            loc=self._loc(start),
        )

    # ---- Binding patterns ----

    def _parse_binding_target(self) -> Node:
        """Parse an identifier or a destructuring pattern in binding position."""
        start = self.current
        if self._match(TokenType.IDENTIFIER):
            return Identifier(start.value, loc=self._loc(start))

        if self._match(TokenType.LBRACKET):
            elements: List[Optional[Node]] = []
            while not self._check(TokenType.RBRACKET):
                if self._match(TokenType.COMMA):
                    elements.append(None)
                    continue
                if self._check(TokenType.ELLIPSIS):
                    rest_token = self._advance()
                    elements.append(RestElement(self._parse_binding_target(), loc=self._loc(rest_token)))
                else:
                    elements.append(self._parse_binding_element())
                if not self._match(TokenType.COMMA):
                    break
            self._expect(TokenType.RBRACKET, "Expected ']' after array pattern")
            return ArrayPattern(elements, loc=self._loc(start))

        if self._match(TokenType.LBRACE):
            properties: List[Node] = []
            while not self._check(TokenType.RBRACE):
                prop_token = self.current
                if self._match(TokenType.ELLIPSIS):
                    properties.append(RestElement(self._parse_binding_target(), loc=self._loc(prop_token)))
                else:
                    key, computed = self._parse_property_key()
                    if self._match(TokenType.COLON):
                        value = self._parse_binding_element()
                        properties.append(Property(key, value, computed=computed, loc=self._loc(prop_token)))
                    elif isinstance(key, Identifier) and not computed:
                        value = key
                        if self._match(TokenType.ASSIGN):
                            default = self._parse_assignment_expression()
                            value = AssignmentPattern(key, default, loc=self._loc(prop_token))
                        properties.append(Property(key, value, shorthand=True, loc=self._loc(prop_token)))
                    else:
                        raise self._error("Expected ':' in object pattern")
                if not self._match(TokenType.COMMA):
                    break
            self._expect(TokenType.RBRACE, "Expected '}' after object pattern")
            return ObjectPattern(properties, loc=self._loc(start))

        raise self._error("Expected binding name or pattern")

    def _parse_binding_element(self) -> Node:
        """Binding target with an optional default value."""
        start = self.current
        target = self._parse_binding_target()
        if self._match(TokenType.ASSIGN):
            default = self._parse_assignment_expression()
            return AssignmentPattern(target, default, loc=self._loc(start))
        return target

    def _to_pattern(self, node: Node) -> Node:
        """Reinterpret an expression parsed as an assignment target as a pattern."""
        if isinstance(node, ArrayExpression):
            return ArrayPattern(
                [self._to_pattern(e) if e is not None else None for e in node.elements],
                loc=node.loc,
            )
        if isinstance(node, ObjectExpression):
            properties: List[Node] = []
            for prop in node.properties:
                if isinstance(prop, SpreadElement):
                    properties.append(RestElement(self._to_pattern(prop.argument), loc=prop.loc))
                else:
                    properties.append(Property(
                        prop.key, self._to_pattern(prop.value),
                        computed=prop.computed, shorthand=prop.shorthand, loc=prop.loc,
                    ))
            return ObjectPattern(properties, loc=node.loc)
        if isinstance(node, AssignmentExpression) and node.operator == "=":
            return AssignmentPattern(self._to_pattern(node.left), node.right, loc=node.loc)
        if isinstance(node, SpreadElement):
            return RestElement(self._to_pattern(node.argument), loc=node.loc)
        if isinstance(node, (Identifier, MemberExpression, AssignmentPattern,
                             RestElement, ObjectPattern, ArrayPattern)):
            return node
        raise JSSyntaxError(
            "Invalid assignment target",
            node.loc.line if node.loc else 0,
            node.loc.column if node.loc else 0,
        )

    # ---- Expressions ----

    def _parse_expression(self, exclude_in: bool = False) -> Node:
        """Parse an expression (includes comma operator)."""
        start = self.current
        expr = self._parse_assignment_expression(exclude_in)

        if self._check(TokenType.COMMA):
            expressions = [expr]
            while self._match(TokenType.COMMA):
                expressions.append(self._parse_assignment_expression(exclude_in))
            return SequenceExpression(expressions, loc=self._loc(start))

        return expr

    def _parse_assignment_expression(self, exclude_in: bool = False) -> Node:
        """Parse assignment expression, arrow functions and yield."""
        start = self.current

        if self._in_generator and self._check_word("yield"):
            self._advance()
            delegate = self._match(TokenType.STAR)
            argument = None
            if not self._check(TokenType.SEMICOLON, TokenType.RPAREN, TokenType.RBRACKET,
                               TokenType.RBRACE, TokenType.COMMA, TokenType.COLON, TokenType.EOF):
                argument = self._parse_assignment_expression(exclude_in)
            return YieldExpression(argument, delegate, loc=self._loc(start))

        if self._check(TokenType.IDENTIFIER) and self._peek_next().type == TokenType.ARROW:
            return self._parse_arrow_function()

        if self._check(TokenType.LPAREN) and self._is_arrow_ahead():
            return self._parse_arrow_function()

        if self._check_word("async"):
            following = self._peek_next()
            if following.type == TokenType.IDENTIFIER:
                self._advance()
                return self._parse_arrow_function(is_async=True)
            if following.type == TokenType.LPAREN:
                state = self._save()
                self._advance()
                if self._is_arrow_ahead():
                    return self._parse_arrow_function(is_async=True)
                self._restore(state)

        expr = self._parse_conditional_expression(exclude_in)

        if self.current.type in ASSIGNMENT_OPERATORS:
            op = self._advance().value
            target = self._to_pattern(expr) if op == "=" else expr
            if not isinstance(target, (Identifier, MemberExpression, ObjectPattern, ArrayPattern)):
                raise JSSyntaxError("Invalid assignment target", start.line, start.column)
            right = self._parse_assignment_expression(exclude_in)
            return AssignmentExpression(op, target, right, loc=self._loc(start))

        return expr

    def _parse_conditional_expression(self, exclude_in: bool = False) -> Node:
        """Parse conditional (ternary) expression."""
        start = self.current
        expr = self._parse_binary_expression(0, exclude_in)

        if self._match(TokenType.QUESTION):
            consequent = self._parse_assignment_expression()
            self._expect(TokenType.COLON, "Expected ':' in conditional expression")
            alternate = self._parse_assignment_expression(exclude_in)
            return ConditionalExpression(expr, consequent, alternate, loc=self._loc(start))

        return expr

    def _parse_binary_expression(self, min_precedence: int = 0, exclude_in: bool = False) -> Node:
        """Parse binary expression with operator precedence."""
        start = self.current
        left = self._parse_unary_expression()

        while True:
            op = BINARY_OPERATORS.get(self.current.type)
            if op is None:
                break

            # Skip 'in' operator when parsing for-in left-hand side
            if exclude_in and op == "in":
                break

            precedence = PRECEDENCE[op]
            if precedence < min_precedence:
                break

            self._advance()

            # '**' is right-associative
            if op == "**":
                right = self._parse_binary_expression(precedence, exclude_in)
            else:
                right = self._parse_binary_expression(precedence + 1, exclude_in)

            if op in LOGICAL_OPERATORS:
                left = LogicalExpression(op, left, right, loc=self._loc(start))
            else:
                left = BinaryExpression(op, left, right, loc=self._loc(start))

        return left

    def _parse_unary_expression(self) -> Node:
        """Parse unary expression."""
        start = self.current

        if self._check(
            TokenType.MINUS, TokenType.PLUS, TokenType.NOT, TokenType.TILDE,
            TokenType.TYPEOF, TokenType.VOID, TokenType.DELETE,
        ):
            op = self._advance().value
            argument = self._parse_unary_expression()
            return UnaryExpression(op, argument, loc=self._loc(start))

        if self._check(TokenType.PLUSPLUS, TokenType.MINUSMINUS):
            op = self._advance().value
            argument = self._parse_unary_expression()
            return UpdateExpression(op, argument, prefix=True, loc=self._loc(start))

        if self._in_async and self._check_word("await"):
            self._advance()
            argument = self._parse_unary_expression()
            return AwaitExpression(argument, loc=self._loc(start))

        return self._parse_postfix_expression()

    def _parse_postfix_expression(self) -> Node:
        """Parse postfix expression (member access, calls, postfix ++/--)."""
        start = self.current
        expr = self._parse_call_chain(self._parse_new_expression(), start, allow_calls=True)

        # no line break is allowed before a postfix operator
        if self._check(TokenType.PLUSPLUS, TokenType.MINUSMINUS) and not self.current.newline_before:
            op = self._advance().value
            expr = UpdateExpression(op, expr, prefix=False, loc=self._loc(start))

        return expr

    def _parse_call_chain(self, expr: Node, start: Token, allow_calls: bool) -> Node:
        """Apply '.name', '[expr]' and, when allowed, '(args)' suffixes."""
        loc = self._loc(start)
        while True:
            if self._match(TokenType.DOT):
                expr = MemberExpression(expr, self._parse_property_name(), computed=False, loc=loc)
            elif self._match(TokenType.LBRACKET):
                prop = self._parse_expression()
                self._expect(TokenType.RBRACKET, "Expected ']' after index")
                expr = MemberExpression(expr, prop, computed=True, loc=loc)
            elif allow_calls and self._match(TokenType.LPAREN):
                args = self._parse_arguments()
                expr = CallExpression(expr, args, loc=loc)
            else:
                return expr

    def _parse_new_expression(self) -> Node:
        """Parse new expression."""
        start = self.current
        if self._match(TokenType.NEW):
            callee_start = self.current
            callee = self._parse_call_chain(self._parse_new_expression(), callee_start, allow_calls=False)
            args: List[Node] = []
            if self._match(TokenType.LPAREN):
                args = self._parse_arguments()
            return NewExpression(callee, args, loc=self._loc(start))

        return self._parse_primary_expression()

    def _parse_arguments(self) -> List[Node]:
        """Parse call arguments after '(' up to and including ')'."""
        args: List[Node] = []
        while not self._check(TokenType.RPAREN):
            if self._check(TokenType.ELLIPSIS):
                start = self._advance()
                args.append(SpreadElement(self._parse_assignment_expression(), loc=self._loc(start)))
            else:
                args.append(self._parse_assignment_expression())
            if not self._match(TokenType.COMMA):
                break
        self._expect(TokenType.RPAREN, "Expected ')' after arguments")
        return args

    def _parse_property_name(self) -> Identifier:
        """Parse the name after '.', where keywords are allowed."""
        token = self.current
        if token.type == TokenType.IDENTIFIER or token.value in KEYWORDS:
            self._advance()
            return Identifier(token.value, loc=self._loc(token))
        raise self._error("Expected property name")

    def _parse_property_key(self) -> Tuple[Node, bool]:
        """Parse an object/class member key. Returns (key, computed)."""
        token = self.current
        if self._match(TokenType.LBRACKET):
            key = self._parse_assignment_expression()
            self._expect(TokenType.RBRACKET, "Expected ']' after computed property name")
            return key, True
        if self._match(TokenType.STRING):
            return StringLiteral(token.value, token.raw, loc=self._loc(token)), False
        if self._match(TokenType.NUMBER):
            return NumericLiteral(token.value, token.raw, loc=self._loc(token)), False
        return self._parse_property_name(), False

    def _parse_primary_expression(self) -> Node:
        """Parse primary expression (literals, identifiers, grouped)."""
        token = self.current
        loc = self._loc(token)

        if self._match(TokenType.NUMBER):
            return NumericLiteral(token.value, token.raw, loc=loc)

        if self._match(TokenType.STRING):
            return StringLiteral(token.value, token.raw, loc=loc)

        if self._match(TokenType.REGEX):
            pattern, flags = token.value
            return RegexLiteral(pattern, flags, loc=loc)

        if self._match(TokenType.TRUE):
            return BooleanLiteral(True, loc=loc)

        if self._match(TokenType.FALSE):
            return BooleanLiteral(False, loc=loc)

        if self._match(TokenType.NULL):
            return NullLiteral(loc=loc)

        if self._match(TokenType.THIS):
            return ThisExpression(loc=loc)

        if self._match(TokenType.SUPER):
            return Super(loc=loc)

        if self._check_word("async") and self._peek_next().type == TokenType.FUNCTION:
            return self._parse_function(declaration=False)

        if self._match(TokenType.IDENTIFIER):
            return Identifier(token.value, loc=loc)

        if self._match(TokenType.LPAREN):
            expr = self._parse_expression()
            self._expect(TokenType.RPAREN, "Expected ')' after expression")
            return expr

        if self._match(TokenType.LBRACKET):
            return self._parse_array_literal(loc)

        if self._match(TokenType.LBRACE):
            return self._parse_object_literal(loc)

        if self._check(TokenType.FUNCTION):
            return self._parse_function(declaration=False)

        if self._check(TokenType.CLASS):
            return self._parse_class(declaration=False)

        raise self._error(f"Unexpected token: {self.current.type.name}")

    def _parse_array_literal(self, loc: SourceLocation) -> ArrayExpression:
        """Parse array literal: [a, b, c]"""
        elements: List[Optional[Node]] = []
        while not self._check(TokenType.RBRACKET):
            if self._match(TokenType.COMMA):
                elements.append(None)  # hole
                continue
            if self._check(TokenType.ELLIPSIS):
                start = self._advance()
                elements.append(SpreadElement(self._parse_assignment_expression(), loc=self._loc(start)))
            else:
                elements.append(self._parse_assignment_expression())
            if not self._match(TokenType.COMMA):
                break
        self._expect(TokenType.RBRACKET, "Expected ']' after array elements")
        return ArrayExpression(elements, loc=loc)

    def _parse_object_literal(self, loc: SourceLocation) -> ObjectExpression:
        """Parse object literal: {a: 1, b: 2}"""
        properties: List[Node] = []
        while not self._check(TokenType.RBRACE):
            properties.append(self._parse_property())
            if not self._match(TokenType.COMMA):
                break
        self._expect(TokenType.RBRACE, "Expected '}' after object properties")
        return ObjectExpression(properties, loc=loc)

    def _parse_property(self) -> Node:
        """Parse object property."""
        start = self.current
        loc = self._loc(start)

        if self._match(TokenType.ELLIPSIS):
            return SpreadElement(self._parse_assignment_expression(), loc=loc)

        is_async = False
        if self._is_modifier("async"):
            self._advance()
            is_async = True
        generator = self._match(TokenType.STAR)

        kind = "init"
        if not is_async and not generator:
            for accessor in ("get", "set"):
                if self._is_modifier(accessor):
                    self._advance()
                    kind = accessor
                    break

        key, computed = self._parse_property_key()

        if kind != "init" or is_async or generator or self._check(TokenType.LPAREN):
            # Getter, setter or method shorthand: {foo() { }}
            fn_start = self.current
            params, body = self._parse_function_rest(generator, is_async)
            value = FunctionExpression(None, params, body, generator, is_async, loc=self._loc(fn_start))
            return Property(key, value, kind, computed=computed, method=kind == "init", loc=loc)

        if self._match(TokenType.COLON):
            value = self._parse_assignment_expression()
            return Property(key, value, computed=computed, loc=loc)

        # Shorthand property: {x} means {x: x}; {x = 1} only valid as a pattern
        if isinstance(key, Identifier) and not computed:
            if self._match(TokenType.ASSIGN):
                default = self._parse_assignment_expression()
                value = AssignmentExpression("=", key, default, loc=loc)
                return Property(key, value, shorthand=True, loc=loc)
            return Property(key, key, shorthand=True, loc=loc)

        raise self._error("Expected ':' after property name")


def _key_name(key: Node) -> Optional[str]:
    if isinstance(key, Identifier):
        return key.name
    if isinstance(key, StringLiteral):
        return key.value
    return None


def parse(source: str) -> Program:
    """Parse JavaScript source into a Program node."""
    return Parser(source).parse()
