"""Integration tests for end-to-end filter chains."""

import pytest
import regex

from liquid_filters import (
    CSharpNamingConvention, FilterConfig, RegexTimeoutError, build_default_filters, render,
)


class TestTextChains:
    """Text filters composed through pipes."""

    def test_remove_first(self, registry):
        assert render("{{ 'a a a a' | remove_first: 'a ' }}", filters=registry) == "a a a"

    def test_remove_literal_pipe(self, registry):
        assert render("{{ 'foo|bar' | remove: '|' }}", filters=registry) == "foobar"

    def test_capitalize_then_truncate(self, registry, sample_data):
        result = render("{{ greeting | capitalize | truncate: 8 }}", sample_data, registry)
        assert result == "Hello..."

    def test_strip_html_then_upcase(self, registry):
        assert render("{{ '<p>hi</p>' | strip_html | upcase }}", filters=registry) == "HI"

    def test_default_for_empty_value(self, registry, sample_data):
        assert render("{{ empty | default: 'n/a' }}", sample_data, registry) == "n/a"

    def test_escape_alias(self, registry):
        assert render("{{ '<b>' | h }}", filters=registry) == "&lt;b&gt;"

    def test_camel_case_filter_name(self, registry):
        assert render("{{ '<i>x</i>' | StripHtml | Upcase }}", filters=registry) == "X"


class TestSequenceChains:
    """sort/map/join over assigned collections."""

    def test_map_renders_concatenated(self, registry, sample_data):
        assert render("{{ items | map: 'title' }}", sample_data, registry) == "bac"

    def test_sort_map_join(self, registry, sample_data):
        template = "{{ items | sort: 'price' | map: 'title' | join: ', ' }}"
        assert render(template, sample_data, registry) == "a, c, b"

    def test_split_sort_join(self, registry):
        assert render("{{ 'c b a' | split: ' ' | sort | join: '-' }}", filters=registry) == "a-b-c"

    def test_size_of_map(self, registry, sample_data):
        assert render("{{ items | map: 'price' | size }}", sample_data, registry) == "3"

    def test_first_and_last(self, registry, sample_data):
        assert render("{{ items | map: 'title' | first }}{{ items | map: 'title' | last }}",
                      sample_data, registry) == "bc"


class TestNumericChains:
    def test_times_real(self, registry):
        assert render("{{ 10 | times:12.5 }}", filters=registry) == "125"

    def test_plus_on_variable(self, registry, sample_data):
        assert render("{{ user.age | plus: 1 | times: 2 }}", sample_data, registry) == "62"

    def test_text_concatenation(self, registry):
        assert render("{{ '1' | plus: '1' }}", filters=registry) == "11"

    def test_failure_renders_empty(self, registry):
        assert render("[{{ 1 | divided_by: 0 }}]", filters=registry) == "[]"

    def test_round(self, registry):
        assert render("{{ 3.14159 | round: 2 }}", filters=registry) == "3.14"

    def test_integer_division_truncates(self, registry):
        assert render("{{ 14 | divided_by: 3 }}", filters=registry) == "4"


class TestDateAndMoney:
    def test_currency(self, registry):
        assert render("{{ '6.72' | currency }}", filters=registry) == "$6.72"
        assert render("{{ 'teststring' | currency }}", filters=registry) == "teststring"

    def test_currency_with_culture(self, registry):
        assert render("{{ 7 | currency: 'de-DE' }}", filters=registry) == "7,00\xa0€"

    def test_native_date(self, registry):
        template = "{{ '2006-07-05 10:00:00' | date: 'MMMM d, yyyy HH:mm' }}"
        assert render(template, filters=registry) == "July 5, 2006 10:00"

    def test_ruby_date(self):
        registry = build_default_filters(FilterConfig(use_ruby_date_format=True))
        template = "{{ '2006-07-05 10:00:00' | date: '%m/%d/%Y' }}"
        assert render(template, filters=registry) == "07/05/2006"

    def test_now(self, registry):
        assert render("{{ 'now' | date: 'dd.MM.yyyy' }}", filters=registry) == "15.03.2024"

    def test_unparsable_date(self, registry):
        assert render("{{ 'hi' | date: 'yyyy' }}", filters=registry) == "hi"


class TestConfiguration:
    def test_csharp_naming(self, sample_data):
        registry = build_default_filters(naming=CSharpNamingConvention())
        assert render("{{ empty | Default: 'x' | Upcase }}", sample_data, registry) == "X"

    def test_regex_timeout_surfaces(self, monkeypatch):
        def stuck_sub(*args, **kwargs):
            raise TimeoutError("regex timed out")

        monkeypatch.setattr(regex, "sub", stuck_sub)
        registry = build_default_filters(FilterConfig(regex_timeout=0.1))
        with pytest.raises(RegexTimeoutError, match="0.1s"):
            render("{{ 'abc' | replace: 'b', 'x' }}", filters=registry)
