"""Tests for pass options."""

import pytest
from autoconsole.ast_nodes import ArrowFunctionExpression, ClassMethod, FunctionDeclaration
from autoconsole.config import (
    AutoConsoleOptions, ExclusionPolicy, OutputCall,
    ALL_FUNCTIONS, DECLARATIONS_ONLY, NAMED_FUNCTIONS,
)
from autoconsole.errors import ConfigError
from autoconsole.parser import parse


class TestOutputCall:
    """The function wrapped values are passed to."""

    def test_defaults(self):
        """console.log by default."""
        assert str(OutputCall()) == "console.log"

    def test_callee_node(self):
        """callee() builds object.property as a member expression."""
        callee = OutputCall("logger", "info").callee()
        assert callee.object.name == "logger"
        assert callee.property.name == "info"
        assert not callee.computed

    def test_callee_nodes_are_fresh(self):
        """Every call builds a new node."""
        output = OutputCall()
        assert output.callee() is not output.callee()

    @pytest.mark.parametrize("name", ["", "con sole", "1abc", None])
    def test_invalid_names(self, name):
        """Names must be identifiers."""
        with pytest.raises(ConfigError):
            OutputCall(object=name)

    def test_matches(self):
        """Matching a call against the output function."""
        output = OutputCall()
        exact = parse("console.log(1);").body[0].expression
        sibling = parse("console.info(1);").body[0].expression
        other = parse("log(1);").body[0].expression
        assert output.matches(exact)
        assert not output.matches(sibling)
        assert output.matches(sibling, namespace=True)
        assert not output.matches(other, namespace=True)


class TestExclusionPolicy:
    """Which function bodies are skipped."""

    def test_default_named_functions(self):
        """Declarations and function expressions, not arrows or methods."""
        program = parse("function f() {} (() => {});")
        declaration = program.body[0]
        arrow = program.body[1].expression
        assert NAMED_FUNCTIONS.excludes(declaration)
        assert not NAMED_FUNCTIONS.excludes(arrow)
        assert isinstance(arrow, ArrowFunctionExpression)

    def test_class_methods_never_excluded(self):
        """Methods are not a configurable kind."""
        method = parse("class A { m() {} }").body[0].body.body[0]
        assert isinstance(method, ClassMethod)
        assert not ALL_FUNCTIONS.excludes(method)

    def test_presets(self):
        """Presets by name."""
        assert ExclusionPolicy.preset("declarations") is DECLARATIONS_ONLY
        assert ExclusionPolicy.preset("named-functions") is NAMED_FUNCTIONS
        assert ExclusionPolicy.preset("all-functions") is ALL_FUNCTIONS

    def test_unknown_preset(self):
        """Unknown preset names list the valid ones."""
        with pytest.raises(ConfigError, match="all-functions"):
            ExclusionPolicy.preset("everything")

    def test_non_function_kind(self):
        """Only function kinds can be excluded."""
        with pytest.raises(ConfigError, match="IfStatement"):
            ExclusionPolicy(frozenset(["IfStatement"]))

    def test_declarations_only(self):
        """The declarations preset skips only declarations."""
        assert DECLARATIONS_ONLY.excludes(FunctionDeclaration(None, [], None))
        expression = parse("(function () {});").body[0].expression
        assert not DECLARATIONS_ONLY.excludes(expression)


class TestAutoConsoleOptions:
    """Building options from plugin-style mappings."""

    def test_defaults(self):
        """No mapping gives the defaults."""
        options = AutoConsoleOptions.from_dict(None)
        assert options == AutoConsoleOptions()
        assert options.exclude is NAMED_FUNCTIONS
        assert options.namespace

    def test_all_keys(self):
        """Every documented key."""
        options = AutoConsoleOptions.from_dict({
            "object": "logger",
            "property": "debug",
            "exclude": "all-functions",
            "namespace": False,
        })
        assert options.output == OutputCall("logger", "debug")
        assert options.exclude is ALL_FUNCTIONS
        assert not options.namespace

    def test_exclude_as_kinds(self):
        """exclude may list node kinds."""
        options = AutoConsoleOptions.from_dict({"exclude": ["ArrowFunctionExpression"]})
        assert options.exclude == ExclusionPolicy(frozenset(["ArrowFunctionExpression"]))

    def test_exclude_as_policy(self):
        """exclude may be a policy object."""
        options = AutoConsoleOptions.from_dict({"exclude": DECLARATIONS_ONLY})
        assert options.exclude is DECLARATIONS_ONLY

    def test_unknown_key(self):
        """Misspelled keys are errors, not silently ignored."""
        with pytest.raises(ConfigError, match="objekt"):
            AutoConsoleOptions.from_dict({"objekt": "x"})

    def test_invalid_property(self):
        """Invalid output names are reported."""
        with pytest.raises(ConfigError):
            AutoConsoleOptions.from_dict({"property": "not valid"})
