"""
Unit tests for the valid-jsdoc rule.
"""

import pytest

from jsdoclint.driver import lint_string
from jsdoclint.errors import ConfigError, JSDocSyntaxError, ParseErrorKind
from jsdoclint.rules.valid_jsdoc import (
    RULE_ID,
    NestingTracker,
    TagKind,
    classify,
    is_brace_error,
)


def messages(source, options=None):
    return [d.message for d in lint_string(source, options)]


NO_RETURN = {"requireReturn": False}


class TestNestingTracker:
    """Test the per-function return state stack."""

    def test_enter_and_exit(self):
        tracker = NestingTracker()
        tracker.on_function_enter()
        assert tracker.depth == 1
        state = tracker.on_function_exit()
        assert state.return_present is False
        assert tracker.depth == 0

    def test_return_with_argument_marks_innermost(self):
        tracker = NestingTracker()
        tracker.on_function_enter()
        tracker.on_function_enter()
        tracker.on_return(True)
        assert tracker.on_function_exit().return_present is True
        assert tracker.on_function_exit().return_present is False

    def test_bare_return_is_ignored(self):
        tracker = NestingTracker()
        tracker.on_function_enter()
        tracker.on_return(False)
        assert tracker.on_function_exit().return_present is False

    def test_return_outside_function_is_noop(self):
        tracker = NestingTracker()
        tracker.on_return(True)
        assert tracker.depth == 0

    def test_exit_without_enter(self):
        with pytest.raises(IndexError):
            NestingTracker().on_function_exit()


class TestHelpers:

    @pytest.mark.parametrize("title,kind", [
        ("param", TagKind.PARAM),
        ("return", TagKind.RETURN),
        ("returns", TagKind.RETURN),
        ("constructor", TagKind.CONSTRUCTOR),
        ("arg", TagKind.OTHER),
        ("throws", TagKind.OTHER),
    ])
    def test_classify(self, title, kind):
        assert classify(title) is kind

    def test_brace_error_by_kind(self):
        assert is_brace_error(JSDocSyntaxError("x", ParseErrorKind.UNBALANCED_BRACES))
        assert not is_brace_error(JSDocSyntaxError("x", ParseErrorKind.INVALID_TYPE))

    def test_brace_error_by_message(self):
        assert is_brace_error(JSDocSyntaxError("Braces are not balanced"))
        assert not is_brace_error(JSDocSyntaxError("Unexpected token"))


class TestScenarios:
    """End-to-end checks of whole comments against whole functions."""

    def test_non_canonical_param_type(self):
        diagnostics = lint_string("/** @param {String} x the value */ function f(x) {}")
        assert [d.message for d in diagnostics] == [
            "Missing JSDoc @return for function.",
            'Expected JSDoc type name "string" but found "String".',
        ]
        assert all(d.rule_id == RULE_ID for d in diagnostics)
        assert diagnostics[1].line == 1
        assert diagnostics[1].column == 13

    def test_undocumented_params(self):
        source = "/** @returns {number} the sum */\nfunction add(a, b) { return a + b; }"
        assert messages(source) == [
            'Missing JSDoc for parameter "a".',
            'Missing JSDoc for parameter "b".',
        ]

    def test_prefer_runs_alongside_return_checks(self):
        source = "/** @returns {void} */\nfunction f() {}"
        assert messages(source, {"prefer": {"returns": "return"}}) == ["Use @return instead."]

    def test_prefer_and_missing_return_type(self):
        source = "/** @returns */\nfunction f() { return 1; }"
        assert messages(source, {"prefer": {"returns": "return"}}) == [
            "Missing JSDoc return type.",
            "Missing JSDoc return description.",
            "Use @return instead.",
        ]

    def test_fully_documented_function(self):
        source = (
            "/**\n"
            " * Adds two numbers.\n"
            " * @param {number} a the first\n"
            " * @param {number} b the second\n"
            " * @returns {number} the sum\n"
            " */\n"
            "function add(a, b) { return a + b; }\n"
        )
        assert messages(source) == []

    def test_undocumented_function_is_skipped(self):
        assert messages("function f(a) { return a; }") == []


class TestParamChecks:
    """Test @param validation."""

    def test_missing_type(self):
        source = "/**\n * @param x the x\n * @return {void}\n */\nfunction f(x) {}"
        diagnostics = lint_string(source)
        assert [d.message for d in diagnostics] == ['Missing JSDoc parameter type for "x".']
        assert diagnostics[0].line == 2
        assert diagnostics[0].column is None

    def test_missing_description(self):
        source = "/**\n * @param {string} x\n * @return {void}\n */\nfunction f(x) {}"
        assert messages(source) == ['Missing JSDoc parameter description for "x".']

    def test_description_not_required(self):
        source = "/**\n * @param {string} x\n * @return {void}\n */\nfunction f(x) {}"
        assert messages(source, {"requireParamDescription": False}) == []

    def test_duplicate(self):
        source = (
            "/**\n"
            " * @param {string} a first\n"
            " * @param {number} a again\n"
            " * @return {void}\n"
            " */\n"
            "function f(a) {}"
        )
        diagnostics = lint_string(source)
        assert [d.message for d in diagnostics] == ['Duplicate JSDoc parameter "a".']
        assert diagnostics[0].line == 3

    def test_dotted_names_are_not_parameters(self):
        source = (
            "/**\n"
            " * @param {Object} opts options\n"
            " * @param {string} opts.mode the mode\n"
            " * @return {void}\n"
            " */\n"
            "function f(opts) {}"
        )
        assert messages(source) == []

    def test_optional_bracketed_name(self):
        source = "/**\n * @param {number} [n=1] count\n * @return {void}\n */\nfunction f(n) {}"
        assert messages(source) == []


class TestReturnChecks:
    """Test @return / @returns validation."""

    def test_missing_return_when_required(self):
        assert messages("/** Does nothing. */\nfunction f() {}") == ["Missing JSDoc @return for function."]

    def test_missing_return_not_required_without_return(self):
        assert messages("/** Does nothing. */\nfunction f() {}", NO_RETURN) == []

    def test_missing_return_not_required_but_function_returns(self):
        source = "/** Gives one. */\nfunction f() { return 1; }"
        assert messages(source, NO_RETURN) == ["Missing JSDoc @return for function."]

    def test_bare_return_does_not_count(self):
        source = "/** Stops early. */\nfunction f() { return; }"
        assert messages(source, NO_RETURN) == []

    def test_constructor_is_exempt(self):
        assert messages("/** @constructor */\nfunction Foo() {}") == []

    @pytest.mark.parametrize("title", ["return", "returns"])
    def test_unexpected_return_tag(self, title):
        source = f"/** @{title} {{number}} the value */\nfunction f() {{}}"
        assert messages(source, NO_RETURN) == [
            f"Unexpected @{title} tag; function has no return statement."
        ]

    @pytest.mark.parametrize("type_name", ["void", "undefined"])
    def test_no_value_types_are_not_unexpected(self, type_name):
        source = f"/** @return {{{type_name}}} nothing */\nfunction f() {{}}"
        assert messages(source, NO_RETURN) == []

    def test_undefined_still_needs_description(self):
        assert messages("/** @return {undefined} */\nfunction f() {}") == [
            "Missing JSDoc return description."
        ]

    def test_return_tag_with_real_return(self):
        source = "/** @return {number} the value */\nfunction f() { return 1; }"
        assert messages(source, NO_RETURN) == []

    def test_missing_return_type(self):
        assert messages("/** @return the value */\nfunction f() { return 1; }") == [
            "Missing JSDoc return type."
        ]

    def test_missing_return_description(self):
        assert messages("/** @return {number} */\nfunction f() { return 1; }") == [
            "Missing JSDoc return description."
        ]

    def test_void_needs_no_description(self):
        assert messages("/** @return {void} */\nfunction f() {}") == []

    def test_inner_return_does_not_count_for_outer(self):
        source = (
            "/** @return {number} the value */\n"
            "function outer() {\n"
            "  setTimeout(function() { return 1; }, 0);\n"
            "}"
        )
        assert messages(source, NO_RETURN) == [
            "Unexpected @return tag; function has no return statement."
        ]

    def test_outer_return_does_not_leak_into_inner(self):
        source = (
            "function outer() {\n"
            "  /** Inner. */\n"
            "  function inner() {}\n"
            "  return inner;\n"
            "}"
        )
        assert messages(source, NO_RETURN) == []


class TestSignatureChecks:
    """Test documented parameters against the real parameter list."""

    def test_renamed_parameter(self):
        source = (
            "/**\n"
            " * @param {number} a A\n"
            " * @param {number} x X\n"
            " * @param {number} c C\n"
            " * @return {void}\n"
            " */\n"
            "function f(a, b, c) {}"
        )
        diagnostics = lint_string(source)
        assert [(d.line, d.message) for d in diagnostics] == [
            (1, 'Missing JSDoc for parameter "b".'),
            (3, 'Expected JSDoc for "b" but found "x".'),
        ]

    def test_swapped_parameters(self):
        source = (
            "/**\n"
            " * @param {number} b B\n"
            " * @param {number} a A\n"
            " * @return {void}\n"
            " */\n"
            "function f(a, b) {}"
        )
        assert messages(source) == [
            'Expected JSDoc for "a" but found "b".',
            'Expected JSDoc for "b" but found "a".',
        ]

    def test_extra_real_parameter(self):
        source = "/**\n * @param {number} a A\n * @return {void}\n */\nfunction f(a, b) {}"
        diagnostics = lint_string(source)
        assert [d.message for d in diagnostics] == ['Missing JSDoc for parameter "b".']
        assert (diagnostics[0].line, diagnostics[0].column) == (1, 1)

    def test_extra_documented_parameter_is_not_reported(self):
        source = "/**\n * @param {number} a A\n * @param {number} b B\n * @return {void}\n */\nfunction f(a) {}"
        assert messages(source) == []


class TestTagPreferences:
    """Test disfavored titles and non-canonical type names."""

    def test_prefer_any_title(self):
        source = "/**\n * @arg {number} a A\n * @return {void}\n */\nfunction f() {}"
        diagnostics = lint_string(source, {"prefer": {"arg": "param"}})
        assert [d.message for d in diagnostics] == ["Use @param instead."]
        assert diagnostics[0].line == 2

    @pytest.mark.parametrize("written,preferred", [
        ("int", "number"),
        ("Number", "number"),
        ("array", "Array"),
        ("object", "Object"),
        ("function", "Function"),
        ("REGEXP", "RegExp"),
    ])
    def test_type_names(self, written, preferred):
        source = f"/**\n * @param {{{written}}} a A\n * @return {{void}}\n */\nfunction f(a) {{}}"
        assert messages(source) == [
            f'Expected JSDoc type name "{preferred}" but found "{written}".'
        ]

    def test_type_name_column_on_later_line(self):
        source = "/**\n * @param {object} o the o\n * @return {void}\n */\nfunction f(o) {}"
        diagnostic = lint_string(source)[0]
        assert (diagnostic.line, diagnostic.column) == (2, 12)

    def test_type_name_column_on_indented_first_line(self):
        source = "  /** @return {Boolean} flag */\n  function f() { return true; }"
        diagnostic = lint_string(source)[0]
        assert diagnostic.message == 'Expected JSDoc type name "boolean" but found "Boolean".'
        assert diagnostic.column == 16

    def test_compound_types_are_not_normalized(self):
        source = "/**\n * @param {Array.<String>} a A\n * @return {void}\n */\nfunction f(a) {}"
        assert messages(source) == []


class TestCommentErrors:
    """Test comments that fail to parse."""

    def test_missing_brace(self):
        source = "\n  /** @param {string name */\n  function f(name) {}"
        diagnostics = lint_string(source)
        assert [d.message for d in diagnostics] == ["JSDoc type missing brace."]
        assert (diagnostics[0].line, diagnostics[0].column) == (2, 3)

    def test_missing_name(self):
        assert messages("/** @param {string} */\nfunction f(a) {}") == ["JSDoc syntax error."]

    def test_invalid_type(self):
        assert messages("/** @param {a b} x X */\nfunction f(x) {}") == ["JSDoc syntax error."]

    def test_module_prefix_is_stripped(self):
        source = (
            "/**\n"
            " * @param {module:foo/bar} x the x\n"
            " * @return {void}\n"
            " */\n"
            "function f(x) {}"
        )
        assert messages(source) == []

    def test_error_does_not_stop_other_functions(self):
        source = "/** @param {x */\nfunction f() {}\n/** Doc. */\nfunction g() {}"
        assert messages(source) == [
            "JSDoc type missing brace.",
            "Missing JSDoc @return for function.",
        ]


class TestFunctionForms:
    """Test documented function expressions."""

    def test_variable_function_expression(self):
        source = "/** @param {string} a A */\nvar f = function(b) {};"
        assert messages(source, NO_RETURN) == [
            'Expected JSDoc for "b" but found "a".',
            'Missing JSDoc for parameter "b".',
        ]

    def test_object_method(self):
        source = "var o = {\n  /** Runs. */\n  run: function(x) { return x; }\n};"
        assert messages(source) == [
            "Missing JSDoc @return for function.",
            'Missing JSDoc for parameter "x".',
        ]

    def test_callback_is_not_checked(self):
        source = "/** @return {void} */\n[1, 2].forEach(function(n) { return n; });"
        assert messages(source) == []

    def test_diagnostics_are_ordered_by_position(self):
        source = "/** Second. */\nfunction b() {}\n/** First. */\nfunction a() {}"
        assert [d.line for d in lint_string(source)] == [1, 3]


class TestOptions:

    def test_unknown_option(self):
        with pytest.raises(ConfigError):
            lint_string("function f() {}", {"requireRetrun": False})
