"""Tests for the visitor-map entry point."""

import logging

import pytest
from autoconsole import auto_console, traverse
from autoconsole.ast_nodes import (
    Program, ExpressionStatement, BlockStatement, FunctionDeclaration, Identifier,
    VariableDeclaration, VariableDeclarator,
)
from autoconsole.errors import ConfigError, MalformedNodeError
from autoconsole.parser import parse
from autoconsole.plugin import AutoConsolePass
from autoconsole.printer import print_program
from autoconsole.traverse import Visitor


class TestVisitorMap:
    """Shape of the map handed to the traversal engine."""

    def test_keys(self):
        """Hooks are registered for scopes, functions and statements."""
        visitors = auto_console()
        for kind in (
            "Program", "BlockStatement", "SwitchStatement", "SwitchCase", "CatchClause",
            "ForStatement", "FunctionDeclaration", "ArrowFunctionExpression", "ClassMethod",
            "ExpressionStatement", "VariableDeclarator",
        ):
            assert isinstance(visitors[kind], Visitor)

    def test_fresh_state_per_call(self):
        """Each call gets its own pass state."""
        first, second = auto_console(), auto_console()
        assert first["Program"].enter.__self__ is not second["Program"].enter.__self__

    def test_mapping_options(self):
        """Options may be a plain mapping."""
        program = parse("f();")
        traverse(program, auto_console({"object": "out", "property": "write"}))
        assert print_program(program) == "out.write(f());\n"

    def test_invalid_options(self):
        """Bad options fail when the map is built."""
        with pytest.raises(ConfigError):
            auto_console({"exclude": "nothing"})


class TestPassState:
    """Scope and exclusion bookkeeping across the walk."""

    def test_scope_balanced_after_walk(self):
        """Every frame pushed is popped."""
        run = AutoConsolePass()
        traverse(parse("function f() { { let a; } } for (let i of x) { try {} catch (e) {} }"), run.visitors())
        assert run.scope.depth == 0
        assert not run.in_excluded_function

    def test_scope_balanced_after_error(self):
        """Frames are popped while an error propagates."""
        run = AutoConsolePass()
        program = Program([BlockStatement([ExpressionStatement(None)])])
        with pytest.raises(MalformedNodeError):
            traverse(program, run.visitors())
        assert run.scope.depth == 0

    def test_rewritten_count(self):
        """The pass counts the statements it wrapped."""
        run = AutoConsolePass()
        traverse(parse("a(); b(); function c() { d(); }"), run.visitors())
        assert run.rewritten == 2


class TestMalformedTrees:
    """Hand-built trees missing required fields."""

    def test_statement_without_expression(self):
        """The error names the node kind and the field."""
        program = Program([ExpressionStatement(None)])
        with pytest.raises(MalformedNodeError) as exc_info:
            traverse(program, auto_console())
        assert str(exc_info.value) == "ExpressionStatement node is missing required field 'expression'"

    def test_function_without_body(self):
        """Functions need a body."""
        program = Program([FunctionDeclaration(Identifier("f"), [], None)])
        with pytest.raises(MalformedNodeError, match="body"):
            traverse(program, auto_console())

    def test_declarator_without_id(self):
        """Declarators need a target."""
        program = Program([VariableDeclaration([VariableDeclarator(None)])])
        with pytest.raises(MalformedNodeError, match="'id'"):
            traverse(program, auto_console())

    def test_line_reported(self):
        """The line of the broken node is included when known."""
        program = parse("\n\nx;")
        program.body[0].expression = None
        with pytest.raises(MalformedNodeError, match=r"\(line 3\)"):
            traverse(program, auto_console())


class TestLogging:
    """Debug logging of rewrites."""

    def test_rewrite_logged(self, caplog):
        """Each wrapped statement is logged with its position."""
        with caplog.at_level(logging.DEBUG, logger="autoconsole.plugin"):
            traverse(parse("f();"), auto_console())
        assert "wrapped statement at line 1, column 1 in console.log" in caplog.text

    def test_skipped_function_logged(self, caplog):
        """Skipping an excluded function body is logged once."""
        with caplog.at_level(logging.DEBUG, logger="autoconsole.plugin"):
            traverse(parse("function f() { function g() {} }"), auto_console())
        assert caplog.text.count("skipping body") == 1
