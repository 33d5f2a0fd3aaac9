"""Tests for the regex-backed text filters and their timeout handling."""

import pytest
import regex

from liquid_filters import FilterArgumentError, RegexTimeoutError
from liquid_filters.filters import (
    capitalize, newline_to_br, remove_first, replace, replace_first, strip_html, strip_newlines,
    make_replace_filter, make_strip_html_filter,
)


class TestMarkupAndNewlines:
    def test_strip_html(self):
        assert strip_html("<div>test</div>") == "test"
        assert strip_html("<div id='test'>test</div>") == "test"
        assert strip_html("<br/>a<br />") == "a"

    def test_strip_html_blank(self):
        assert strip_html("") == ""
        assert strip_html(None) is None

    def test_strip_newlines(self):
        assert strip_newlines("a\nb\r\nc") == "abc"

    def test_newline_to_br_keeps_newline(self):
        assert newline_to_br("a\nb") == "a<br />\nb"
        assert newline_to_br("a\r\nb") == "a<br />\r\nb"

    def test_capitalize_every_word(self):
        assert capitalize("That is one sentence.") == "That Is One Sentence."

    def test_capitalize_after_punctuation(self):
        assert capitalize("'quoted' words") == "'Quoted' Words"

    def test_capitalize_blank(self):
        assert capitalize(" ") == " "


class TestReplace:
    def test_replace_all(self):
        assert replace("a a a a", "a", "b") == "b b b b"

    def test_replace_first(self):
        assert replace_first("a a a a", "a", "b") == "b a a a"

    def test_pattern_is_a_regex(self):
        assert replace("a1b22c", r"\d+", "#") == "a#b#c"

    def test_numbered_groups(self):
        assert replace("2024-01-05", r"(\d+)-(\d+)-(\d+)", "$3/$2/$1") == "05/01/2024"

    def test_named_group(self):
        assert replace("john smith", r"(?<first>\w+) (?<last>\w+)", "${last}, ${first}") == "smith, john"

    def test_whole_match_and_literal_dollar(self):
        assert replace("5", r"\d", "$$$&") == "$5"

    def test_unknown_group_is_literal(self):
        assert replace("ab", "a", "$9") == "$9b"

    def test_missing_replacement_removes(self):
        assert replace("abc", "b") == "ac"

    def test_empty_input_or_pattern(self):
        assert replace("", "a", "b") == ""
        assert replace(None, "a", "b") is None
        assert replace("abc", "", "x") == "abc"


class TestRemoveFirst:
    def test_remove_first(self):
        assert remove_first("a a a a", "a ") == "a a a"

    def test_metacharacters_are_literal(self):
        assert remove_first("1+1=2", "+") == "11=2"
        assert remove_first("a.b.c", ".") == "ab.c"

    def test_blank(self):
        assert remove_first("", "a") == ""
        assert remove_first("abc", None) == "abc"


class TestRegexFailures:
    """Timeouts and invalid patterns are reported, never swallowed."""

    def test_invalid_pattern(self):
        with pytest.raises(FilterArgumentError, match="invalid pattern"):
            replace("abc", "(", "x")

    def test_timeout_is_reported(self, monkeypatch):
        def slow_sub(*args, **kwargs):
            raise TimeoutError("regex timed out")

        monkeypatch.setattr(regex, "sub", slow_sub)
        with pytest.raises(RegexTimeoutError, match="exceeded timeout of 0.5s"):
            make_replace_filter(timeout=0.5)("aaaa", "a", "b")

    def test_catastrophic_pattern_times_out(self):
        with pytest.raises(RegexTimeoutError):
            make_replace_filter(timeout=0.2)("x" * 5000, r"(x|x?)*y|(\w*)*\d", "z")

    def test_timeout_error_is_a_builtin_timeout(self, monkeypatch):
        def slow_sub(*args, **kwargs):
            raise TimeoutError("regex timed out")

        monkeypatch.setattr(regex, "sub", slow_sub)
        with pytest.raises(TimeoutError):
            strip_html("<b>x</b>")

    def test_configured_timeout_is_passed_to_regex(self, monkeypatch):
        seen = {}
        real_sub = regex.sub

        def spy_sub(*args, **kwargs):
            seen["timeout"] = kwargs.get("timeout")
            return real_sub(*args, **kwargs)

        monkeypatch.setattr(regex, "sub", spy_sub)
        assert make_strip_html_filter(timeout=3.0)("<i>x</i>") == "x"
        assert seen["timeout"] == 3.0
