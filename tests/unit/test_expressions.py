"""Tests for the output-expression evaluator."""

import pytest

from liquid_filters import UnknownFilterError, evaluate, render


class TestOperands:
    @pytest.mark.parametrize("expression, expected", [
        ("'text'", "text"),
        ('"text"', "text"),
        ("42", 42),
        ("-3", -3),
        ("12.5", 12.5),
        ("true", True),
        ("false", False),
        ("nil", None),
        ("null", None),
        ("", None),
    ])
    def test_literals(self, expression, expected):
        assert evaluate(expression) == expected

    def test_variable_path(self, sample_data):
        assert evaluate("user.name", sample_data) == "Alice"
        assert evaluate("items[1].title", sample_data) == "a"

    def test_missing_variable_is_none(self, sample_data):
        assert evaluate("user.email", sample_data) is None
        assert evaluate("nothing") is None


class TestFilterCalls:
    def test_single_filter(self, sample_data):
        assert evaluate("user.name | upcase", sample_data) == "ALICE"

    def test_multiple_arguments(self):
        assert evaluate("'hello' | slice: 1, 3") == "ell"
        assert evaluate("'hello' | slice: -3, 2") == "ll"

    def test_pipe_inside_quotes_is_literal(self):
        assert evaluate("'a|b' | remove: '|'") == "ab"

    def test_comma_inside_quotes_is_literal(self):
        assert evaluate("'a, b' | append: ', c'") == "a, b, c"

    def test_colon_inside_argument(self):
        assert evaluate("'x' | append: '1:2'") == "x1:2"

    def test_variable_argument(self, sample_data):
        assert evaluate("'hi ' | append: user.name", sample_data) == "hi Alice"

    def test_native_value_is_returned(self):
        assert evaluate("10 | times: 12.5") == 125.0

    def test_unknown_filter(self):
        with pytest.raises(UnknownFilterError):
            evaluate("1 | nope")

    def test_custom_registry(self, registry):
        assert evaluate("'now' | date: 'yyyy'", filters=registry) == "2024"


class TestRender:
    def test_text_is_copied(self, sample_data):
        assert render("Hello {{ user.name }}!", sample_data) == "Hello Alice!"

    def test_several_outputs(self):
        assert render("{{ 1 }}-{{ 2 }}") == "1-2"

    def test_values_render_as_text(self):
        assert render("{{ nil }}|{{ true }}|{{ 10 | times: 12.5 }}") == "|true|125"

    def test_closing_braces_inside_quotes(self):
        assert render("{{ '}}' | append: 'x' }}") == "}}x"

    def test_unterminated_output_is_literal(self):
        assert render("a {{ b") == "a {{ b"

    def test_no_outputs(self):
        assert render("plain text") == "plain text"
