"""End-to-end tests for the auto-console pass: source in, source out."""

import re

import pytest
from autoconsole import transform, transform_program, parse, print_program
from autoconsole.config import AutoConsoleOptions, ExclusionPolicy, OutputCall
from autoconsole.errors import ConfigError


def squash(code):
    """Drop spaces and line breaks so layout differences don't matter."""
    return re.sub(r"[ \r\n]", "", code)


def auto_console(code, **options):
    return squash(transform(code, options or None))


class TestCalls:
    """Call expression statements."""

    def test_console_log_untouched(self):
        """An existing console.log call is left alone."""
        code = 'console.log("Hello, world!");'
        assert auto_console(code) == squash(code)

    def test_other_call_wrapped(self):
        """Any other call is wrapped."""
        assert auto_console('alert("Hello, world!");') == squash('console.log(alert("Hello, world!"));')

    def test_nested_call_wrapped_once(self):
        """Only the statement's outer call is wrapped."""
        code = 'someFunction(alert("Hello, world!"));'
        assert auto_console(code) == squash('console.log(someFunction(alert("Hello, world!")));')

    def test_reference_inside_console_log(self):
        """A declared name passed to console.log is not wrapped again."""
        code = "const foo = 42; console.log(foo);"
        assert auto_console(code) == squash(code)

    def test_other_console_methods_untouched(self):
        """console.error and friends already produce output."""
        code = "try { alert(1); } catch (e) { console.error(e); }"
        assert auto_console(code) == squash("try { console.log(alert(1)); } catch (e) { console.error(e); }")

    def test_method_call_wrapped(self):
        """Calls through a member expression are wrapped."""
        assert auto_console("items.push(1);") == squash("console.log(items.push(1));")


class TestIdentifiers:
    """Bare identifier statements."""

    def test_declared_identifier_wrapped(self):
        """A name declared in scope is wrapped."""
        assert auto_console("const a = 1; a;") == squash("const a = 1; console.log(a);")

    def test_undeclared_identifier_untouched(self):
        """An unknown name is left alone."""
        assert auto_console("variable;") == "variable;"

    def test_hoisted_var(self):
        """A var declared later in the program is already bound."""
        assert auto_console("a; var a = 1;") == squash("console.log(a); var a = 1;")

    def test_hoisted_function_declaration(self):
        """A function declared later in the program is already bound."""
        assert auto_console("f; function f() {}") == squash("console.log(f); function f() {}")

    def test_block_scoped_name_not_visible_outside(self):
        """A let inside a block does not bind the name after the block."""
        code = "{ let x = 1; x; } x;"
        assert auto_console(code) == squash("{ let x = 1; console.log(x); } x;")

    def test_var_in_block_visible_outside(self):
        """A var inside a block binds the name for the whole program."""
        assert auto_console("{ var x = 1; } x;") == squash("{ var x = 1; } console.log(x);")

    def test_loop_binding(self):
        """The for head declares the loop variable for the body."""
        code = "for (let i = 0; i < 3; i++) { i; }"
        assert auto_console(code) == squash("for (let i = 0; i < 3; i++) { console.log(i); }")

    def test_catch_param(self):
        """The catch parameter is bound inside the handler."""
        code = "try { f(); } catch (err) { err; }"
        assert auto_console(code) == squash("try { console.log(f()); } catch (err) { console.log(err); }")

    def test_destructured_names(self):
        """Names bound by a pattern are declared."""
        code = "const {a, b: [c]} = obj; a; c;"
        assert auto_console(code) == squash("const { a, b: [c] } = obj; console.log(a); console.log(c);")


class TestComputations:
    """Binary, logical and conditional expression statements."""

    def test_arithmetic(self):
        """1+1"""
        assert auto_console("1+1;") == "console.log(1+1);"

    def test_arithmetic_with_variable(self):
        """A computation involving a declared name."""
        assert auto_console("const n = 3; 1+n;") == squash("const n = 3; console.log(1+n);")

    def test_operator_mix_without_semicolon(self):
        """A mix of operators prints without extra parentheses."""
        assert auto_console("2+2/2*4-5") == "console.log(2+2/2*4-5);"

    def test_comparison(self):
        """Strict equality at the top level."""
        assert auto_console("1 === 2") == "console.log(1===2);"

    def test_logical(self):
        """Logical or at the top level."""
        assert auto_console("const a = 0; a || 2") == squash("const a = 0; console.log(a||2);")

    def test_ternary(self):
        """A ternary statement is wrapped."""
        code = "const a = 1; const b = 2; a < b ? a : b;"
        assert auto_console(code) == squash("const a = 1; const b = 2; console.log(a < b ? a : b);")

    def test_ternary_initializer_untouched(self):
        """A ternary used as an initializer is not a statement."""
        code = "const a = 1; const b = 2; const min = a < b ? a : b;"
        assert auto_console(code) == squash(code)

    def test_declarations_untouched(self):
        """Declarations are not expression statements."""
        for code in ('const str = "hello";', "const sum = 1 + 2; console.log(sum);"):
            assert auto_console(code) == squash(code)

    def test_other_statements_untouched(self):
        """Assignments, updates and literals are not wrapped."""
        code = "let x; x = 1; x++; 42; 'text';"
        assert auto_console(code) == squash(code)

    def test_conditions_untouched(self):
        """Tests of if/switch are not statements."""
        for code in (
            "const a = 1; switch(a){}",
            "const a = 1; if(a){}",
            "if(10 === 20 || 20 === 30 && 30 > 0){}",
        ):
            assert auto_console(code) == squash(code)


class TestNesting:
    """Statements nested inside other statements."""

    @pytest.mark.parametrize("code,expected", [
        ('if (true) { alert("hi"); }', 'if (true) { console.log(alert("hi")); }'),
        ('while (true) { alert("hi"); }', 'while (true) { console.log(alert("hi")); }'),
        (
            'for (let i = 0; i < 10; i++) { alert("hi"); }',
            'for (let i = 0; i < 10; i++) { console.log(alert("hi")); }',
        ),
        ('do { alert("hi"); } while (true);', 'do { console.log(alert("hi")); } while (true);'),
        ('try { alert("hi"); } finally { done(); }', 'try { console.log(alert("hi")); } finally { console.log(done()); }'),
    ])
    def test_statement_bodies(self, code, expected):
        """Bodies of control-flow statements are rewritten."""
        assert auto_console(code) == squash(expected)

    def test_if_body_with_identifier(self):
        """A declared name in an if body."""
        assert auto_console("const a = 1; if(a===2){a}") == squash("const a = 1; if(a===2){console.log(a);}")

    def test_switch_case(self):
        """A declared name in a case clause."""
        code = "const a = 1; switch(a){ case 1: a }"
        assert auto_console(code) == squash("const a = 1; switch(a){ case 1: console.log(a); }")

    def test_switch_cases_share_scope(self):
        """A let in one case is visible in a later case."""
        code = "switch (k) { case 1: let v = 2; break; default: v; }"
        assert auto_console(code) == squash("switch (k) { case 1: let v = 2; break; default: console.log(v); }")

    def test_labeled_statement(self):
        """A labeled loop body."""
        code = "outer: while (true) { f(); break outer; }"
        assert auto_console(code) == squash("outer: while (true) { console.log(f()); break outer; }")

    def test_function_declared_in_block(self):
        """A function declared in a block is visible after the block."""
        code = "if (x) { function g() {} } g;"
        assert auto_console(code) == squash("if (x) { function g() {} } console.log(g);")

    def test_class_method(self):
        """Class method bodies are rewritten."""
        code = 'class MyClass { method() { alert("Hello, world!"); } }'
        assert auto_console(code) == squash('class MyClass { method() { console.log(alert("Hello, world!")); } }')

    def test_object_method(self):
        """Object literal methods are rewritten like class methods."""
        code = "const o = { run() { go(); } };"
        assert auto_console(code) == squash("const o = { run() { console.log(go()); } };")


class TestLineBreaks:
    """Line breaks that end a statement without a semicolon."""

    def test_line_break_before_increment(self):
        """++ on the next line belongs to the next statement."""
        code = "const a = 1; let b = 2;\na\n++b"
        assert transform(code) == "const a = 1;\nlet b = 2;\nconsole.log(a);\n++b;\n"

    def test_line_break_after_return(self):
        """The call after a bare return is its own statement."""
        code = "class C { m() { return\nfoo() } }"
        assert transform(code) == (
            "class C {\n"
            "  m() {\n"
            "    return;\n"
            "    console.log(foo());\n"
            "  }\n"
            "}\n"
        )

    def test_return_value_on_same_line(self):
        """A returned call on the same line is not a statement."""
        code = "class C { m() { return foo() } }"
        assert "console.log" not in transform(code)


class TestFunctions:
    """Which function bodies are rewritten."""

    def test_function_declaration_untouched(self):
        """Nothing inside a function declaration changes."""
        code = 'function sayHi(){const hi = "hi"; hi; alert(hi);}'
        assert auto_console(code) == squash(code)

    def test_function_expression_untouched(self):
        """Nothing inside a function expression changes."""
        code = "const f = function () { alert(1); };"
        assert auto_console(code) == squash(code)

    def test_nested_inside_excluded(self):
        """An arrow inside an excluded function is not rewritten either."""
        code = "function f() { items.forEach(() => { g(); }); }"
        assert auto_console(code) == squash(code)

    def test_arrow_expression_body(self):
        """An arrow's expression body is not a statement."""
        code = "const add = (a, b) => a + b;"
        assert auto_console(code) == squash(code)

    def test_arrow_block_body(self):
        """Arrow block bodies are rewritten by default."""
        code = "items.forEach(item => { process(item); });"
        assert auto_console(code) == squash(
            "console.log(items.forEach((item) => { console.log(process(item)); }));"
        )

    def test_parameters_are_bound(self):
        """Parameters are bound inside the arrow body."""
        code = "const f = (x) => { x; };"
        assert auto_console(code) == squash("const f = (x) => { console.log(x); };")

    def test_function_with_return(self):
        """A function with a return statement is left alone."""
        code = "function multiply(a, b) {return a * b;}"
        assert auto_console(code) == squash(code)

    def test_program_level_after_function(self):
        """Statements after an excluded function are still rewritten."""
        code = "function f() { g(); } f();"
        assert auto_console(code) == squash("function f() { g(); } console.log(f());")


class TestOptions:
    """Configurable output call and exclusion policy."""

    def test_custom_output_call(self):
        """object/property select the output function."""
        code = "logger.info(1); alert(2);"
        assert auto_console(code, object="logger", property="info") == squash(
            "logger.info(1); logger.info(alert(2));"
        )

    def test_console_log_wrapped_with_other_output(self):
        """With another output object, console.log is just a call."""
        assert auto_console("console.log(1);", object="out") == squash("out.log(console.log(1));")

    def test_namespace_off(self):
        """Without namespace only the exact output function is skipped."""
        code = "console.error(e); console.log(e);"
        assert auto_console(code, namespace=False) == squash("console.log(console.error(e)); console.log(e);")

    def test_exclude_declarations_only(self):
        """The 'declarations' preset walks function expressions."""
        code = "const f = function () { g(); }; function h() { g(); }"
        assert auto_console(code, exclude="declarations") == squash(
            "const f = function () { console.log(g()); }; function h() { g(); }"
        )

    def test_exclude_all_functions(self):
        """The 'all-functions' preset also skips arrows."""
        code = "items.forEach(item => { process(item); });"
        assert auto_console(code, exclude="all-functions") == squash(
            "console.log(items.forEach((item) => { process(item); }));"
        )

    def test_exclude_nothing(self):
        """An empty exclusion set rewrites every function body."""
        code = "function f() { g(); }"
        assert auto_console(code, exclude=[]) == squash("function f() { console.log(g()); }")

    def test_options_object(self):
        """An AutoConsoleOptions instance is accepted as is."""
        options = AutoConsoleOptions(output=OutputCall("out", "print"), exclude=ExclusionPolicy(frozenset()))
        assert squash(transform("f();", options)) == "out.print(f());"

    def test_unknown_option(self):
        """Unknown option keys are rejected."""
        with pytest.raises(ConfigError):
            transform("f();", {"colour": "red"})


class TestProgramTransform:
    """Tree-level entry point."""

    def test_rewrites_in_place(self):
        """transform_program mutates and returns the same tree."""
        program = parse("f();")
        result = transform_program(program)
        assert result is program
        assert print_program(program) == "console.log(f());\n"

    def test_idempotent(self):
        """Running the pass twice changes nothing the second time."""
        code = "const a = 1; a; f(); a + 1; { g(); }"
        once = transform(code)
        assert transform(once) == once

    def test_wrapped_call_keeps_location(self):
        """The new call takes the position of the expression it wraps."""
        program = transform_program(parse("\n  f();"))
        call = program.body[0].expression
        assert (call.loc.line, call.loc.column) == (2, 3)
        assert call.callee.loc == call.loc

    def test_empty_program(self):
        """An empty program stays empty."""
        assert transform("") == ""
