"""
Unit tests for the JavaScript Parser.
"""

import pytest

from jsdoclint.ast.nodes import (
    ArrayExpression,
    AssignmentExpression,
    BinaryExpression,
    BlockStatement,
    CallExpression,
    ConditionalExpression,
    DoWhileStatement,
    ExpressionStatement,
    ForInStatement,
    ForStatement,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    IfStatement,
    Literal,
    LogicalExpression,
    MemberExpression,
    NewExpression,
    ObjectExpression,
    Program,
    ReturnStatement,
    SwitchStatement,
    TryStatement,
    UnaryExpression,
    UpdateExpression,
    VariableDeclaration,
    WhileStatement,
)
from jsdoclint.errors import JSSyntaxError
from jsdoclint.parser.js_parser import parse


def first_expression(code):
    stmt = parse(code).body[0]
    assert isinstance(stmt, ExpressionStatement)
    return stmt.expression


class TestBasicParsing:
    """Test basic parsing functionality."""

    def test_empty_program(self):
        result = parse("")
        assert isinstance(result, Program)
        assert result.body == []
        assert result.comments == []

    def test_program_keeps_source_and_comments(self):
        source = "/** doc */\nfunction f() {}"
        result = parse(source)
        assert result.source == source
        assert len(result.comments) == 1
        assert result.comments[0].value == "* doc "

    def test_function_declaration(self):
        result = parse("function add(a, b) { return a + b; }")
        func = result.body[0]
        assert isinstance(func, FunctionDeclaration)
        assert func.id.name == "add"
        assert [p.name for p in func.params] == ["a", "b"]
        assert isinstance(func.body, BlockStatement)
        ret = func.body.body[0]
        assert isinstance(ret, ReturnStatement)
        assert isinstance(ret.argument, BinaryExpression)
        assert ret.argument.operator == "+"

    def test_function_without_params(self):
        func = parse("function f() {}").body[0]
        assert func.params == []
        assert func.body.body == []

    def test_bare_return(self):
        func = parse("function f() { return; }").body[0]
        assert func.body.body[0].argument is None

    def test_return_without_semicolon(self):
        func = parse("function f() { return }").body[0]
        assert isinstance(func.body.body[0], ReturnStatement)
        assert func.body.body[0].argument is None

    def test_optional_semicolons(self):
        result = parse("var a = 1\nvar b = 2\nfoo()")
        assert len(result.body) == 3


class TestFunctionExpressions:
    """Test the different places a function expression can appear."""

    def test_anonymous_function_in_variable(self):
        decl = parse("var f = function(x) { return x; };").body[0]
        assert isinstance(decl, VariableDeclaration)
        init = decl.declarations[0].init
        assert isinstance(init, FunctionExpression)
        assert init.id is None
        assert init.params[0].name == "x"

    def test_named_function_expression(self):
        decl = parse("var f = function inner() {};").body[0]
        assert decl.declarations[0].init.id.name == "inner"

    def test_function_as_call_argument(self):
        call = first_expression("setTimeout(function() {}, 10);")
        assert isinstance(call, CallExpression)
        assert isinstance(call.arguments[0], FunctionExpression)
        assert isinstance(call.arguments[1], Literal)

    def test_function_assigned_to_member(self):
        assign = first_expression("Foo.prototype.bar = function(a) {};")
        assert isinstance(assign, AssignmentExpression)
        assert isinstance(assign.left, MemberExpression)
        assert assign.left.property.name == "bar"
        assert isinstance(assign.right, FunctionExpression)

    def test_function_in_object_literal(self):
        decl = parse("var o = { run: function() {}, 'x': 1, 2: null };").body[0]
        obj = decl.declarations[0].init
        assert isinstance(obj, ObjectExpression)
        assert len(obj.properties) == 3
        assert isinstance(obj.properties[0].value, FunctionExpression)
        assert obj.properties[1].key.value == "x"

    def test_iife(self):
        call = first_expression("(function() { var x = 1; })();")
        assert isinstance(call, CallExpression)
        assert isinstance(call.callee, FunctionExpression)

    def test_new_with_function_argument(self):
        expr = first_expression("new Promise(function(resolve) {});")
        assert isinstance(expr, NewExpression)
        assert expr.callee.name == "Promise"
        assert isinstance(expr.arguments[0], FunctionExpression)

    def test_new_without_arguments(self):
        expr = first_expression("new Foo;")
        assert isinstance(expr, NewExpression)
        assert expr.arguments == []

    def test_nested_functions(self):
        func = parse("function outer() { function inner() { return 1; } return inner; }").body[0]
        assert isinstance(func.body.body[0], FunctionDeclaration)
        assert isinstance(func.body.body[1], ReturnStatement)


class TestStatements:
    """Test statement forms."""

    def test_block_at_statement_level(self):
        result = parse("{ foo(); }")
        assert isinstance(result.body[0], BlockStatement)

    def test_empty_block(self):
        assert isinstance(parse("{}").body[0], BlockStatement)

    def test_if_else(self):
        stmt = parse("if (a) { b(); } else c();").body[0]
        assert isinstance(stmt, IfStatement)
        assert isinstance(stmt.consequent, BlockStatement)
        assert isinstance(stmt.alternate, ExpressionStatement)

    def test_dangling_else_binds_to_nearest_if(self):
        stmt = parse("if (a) if (b) x(); else y();").body[0]
        assert stmt.alternate is None
        assert stmt.consequent.alternate is not None

    def test_while(self):
        assert isinstance(parse("while (i < 10) i++;").body[0], WhileStatement)

    def test_do_while(self):
        assert isinstance(parse("do { i--; } while (i);").body[0], DoWhileStatement)

    def test_for(self):
        stmt = parse("for (var i = 0; i < n; i++) {}").body[0]
        assert isinstance(stmt, ForStatement)
        assert isinstance(stmt.init, VariableDeclaration)

    def test_for_with_empty_clauses(self):
        stmt = parse("for (;;) { break; }").body[0]
        assert stmt.init is None and stmt.test is None and stmt.update is None

    def test_for_in(self):
        stmt = parse("for (var key in obj) {}").body[0]
        assert isinstance(stmt, ForInStatement)
        assert stmt.left.declarations[0].id.name == "key"

    def test_for_in_without_declaration(self):
        stmt = parse("for (key in obj) {}").body[0]
        assert isinstance(stmt, ForInStatement)
        assert isinstance(stmt.left, Identifier)

    def test_try_catch_finally(self):
        stmt = parse("try { a(); } catch (e) { b(e); } finally { c(); }").body[0]
        assert isinstance(stmt, TryStatement)
        assert stmt.handler.param.name == "e"
        assert stmt.finalizer is not None

    def test_try_finally(self):
        stmt = parse("try { a(); } finally { c(); }").body[0]
        assert stmt.handler is None
        assert stmt.finalizer is not None

    def test_switch(self):
        stmt = parse("switch (x) { case 1: a(); break; case 'b': default: c(); }").body[0]
        assert isinstance(stmt, SwitchStatement)
        assert len(stmt.cases) == 3
        assert stmt.cases[2].test is None
        assert len(stmt.cases[0].consequent) == 2

    def test_throw(self):
        stmt = parse("throw new Error('x');").body[0]
        assert isinstance(stmt.argument, NewExpression)


class TestExpressions:
    """Test expression precedence and forms."""

    def test_multiplication_binds_tighter(self):
        expr = first_expression("a + b * c;")
        assert expr.operator == "+"
        assert expr.right.operator == "*"

    def test_left_associative_subtraction(self):
        expr = first_expression("a - b - c;")
        assert expr.left.operator == "-"

    def test_assignment_is_right_associative(self):
        expr = first_expression("a = b = c;")
        assert isinstance(expr.right, AssignmentExpression)

    def test_logical_expression(self):
        expr = first_expression("a && b || c;")
        assert isinstance(expr, LogicalExpression)
        assert expr.operator == "||"
        assert expr.left.operator == "&&"

    def test_conditional(self):
        expr = first_expression("a ? b : c;")
        assert isinstance(expr, ConditionalExpression)

    def test_unary_and_typeof(self):
        expr = first_expression("typeof x === 'string';")
        assert expr.operator == "==="
        assert isinstance(expr.left, UnaryExpression)
        assert expr.left.operator == "typeof"

    def test_negation(self):
        expr = first_expression("-a * b;")
        assert expr.operator == "*"
        assert isinstance(expr.left, UnaryExpression)

    def test_postfix_update(self):
        expr = first_expression("i++;")
        assert isinstance(expr, UpdateExpression)
        assert expr.prefix is False

    def test_member_and_call_chain(self):
        expr = first_expression("a.b.c(d)[0];")
        assert isinstance(expr, MemberExpression)
        assert expr.computed is True
        assert isinstance(expr.object, CallExpression)

    def test_keyword_as_property_name(self):
        expr = first_expression("promise.catch(handler);")
        assert expr.callee.property.name == "catch"

    def test_array_with_trailing_comma(self):
        expr = first_expression("[1, 2, 3,];")
        assert isinstance(expr, ArrayExpression)
        assert len(expr.elements) == 3

    def test_keyword_literals(self):
        decl = parse("var a = true, b = null;").body[0]
        assert decl.declarations[0].init.value is True
        assert decl.declarations[1].init.value is None

    def test_instanceof(self):
        expr = first_expression("a instanceof B;")
        assert expr.operator == "instanceof"


class TestLocations:
    """Test node location tracking."""

    def test_function_location(self):
        result = parse("var x;\n  function f() {}")
        func = result.body[1]
        assert func.lineno == 2
        assert func.col_offset == 2
        assert result.source[func.start:].startswith("function")

    def test_param_location(self):
        func = parse("function f(alpha, beta) {}").body[0]
        assert func.params[1].col_offset == 18


class TestSyntaxErrors:
    """Test syntax error reporting."""

    def test_unexpected_token(self):
        with pytest.raises(JSSyntaxError) as exc_info:
            parse("function f(a {}")
        assert exc_info.value.lineno == 1

    def test_unexpected_end_of_input(self):
        with pytest.raises(JSSyntaxError) as exc_info:
            parse("function f() {")
        assert "end of input" in str(exc_info.value)

    def test_error_location(self):
        with pytest.raises(JSSyntaxError) as exc_info:
            parse("var a = 1;\nvar = 2;")
        assert exc_info.value.lineno == 2
