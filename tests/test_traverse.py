"""Tests for the host traversal engine."""

import pytest
from autoconsole.ast_nodes import Identifier, CallExpression, NumericLiteral
from autoconsole.parser import parse
from autoconsole.traverse import Visitor, traverse


class TestTraverse:
    """Order and hook semantics of the walk."""

    def test_pre_order_source_order(self):
        """Nodes are entered parent first, children left to right."""
        seen = []
        traverse(parse("a + b; c;"), {"Identifier": lambda node, parent: seen.append(node.name)})
        assert seen == ["a", "b", "c"]

    def test_enter_and_exit(self):
        """Exit hooks run after the whole subtree."""
        events = []
        visitors = {
            "BlockStatement": Visitor(
                enter=lambda node, parent: events.append("enter"),
                exit=lambda node, parent: events.append("exit"),
            ),
            "Identifier": lambda node, parent: events.append(node.name),
        }
        traverse(parse("{ x; { y; } }"), visitors)
        assert events == ["enter", "x", "enter", "y", "exit", "exit"]

    def test_parent_passed(self):
        """Hooks receive the parent node; the root has none."""
        parents = {}
        traverse(parse("f(1);"), {
            "Program": lambda node, parent: parents.setdefault("Program", parent),
            "NumericLiteral": lambda node, parent: parents.setdefault("NumericLiteral", parent),
        })
        assert parents["Program"] is None
        assert isinstance(parents["NumericLiteral"], CallExpression)

    def test_replacement_in_enter_is_walked(self):
        """Children are read after the enter hook returns."""
        seen = []

        def replace(node, parent):
            node.expression = CallExpression(Identifier("wrapper"), [node.expression])

        traverse(parse("inner;"), {
            "ExpressionStatement": replace,
            "Identifier": lambda node, parent: seen.append(node.name),
        })
        assert seen == ["wrapper", "inner"]

    def test_skips_missing_children(self):
        """Optional children that are None are not visited."""
        kinds = []
        traverse(parse("for (;;) {} [1, , 2];"), {
            "NumericLiteral": lambda node, parent: kinds.append(node.value),
        })
        assert kinds == [1, 2]

    def test_exit_runs_when_descendant_raises(self):
        """Exit hooks still run while an error propagates."""
        exited = []

        def explode(node, parent):
            raise ValueError(node.value)

        visitors = {
            "BlockStatement": Visitor(exit=lambda node, parent: exited.append(node.type)),
            "NumericLiteral": explode,
        }
        with pytest.raises(ValueError):
            traverse(parse("{ { 1; } }"), visitors)
        assert exited == ["BlockStatement", "BlockStatement"]

    def test_walks_hand_built_tree(self):
        """Any node can be the root."""
        seen = []
        traverse(CallExpression(Identifier("f"), [NumericLiteral(1)]), {
            "CallExpression": lambda node, parent: seen.append(node.type),
            "Identifier": lambda node, parent: seen.append(node.name),
        })
        assert seen == ["CallExpression", "f"]
