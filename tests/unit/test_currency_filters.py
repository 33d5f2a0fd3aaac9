"""Tests for the currency filter and culture lookup."""

from decimal import Decimal

import pytest

from liquid_filters import FilterArgumentError
from liquid_filters.filters import currency, make_currency_filter
from liquid_filters.filters.culture import currency_for, locale_for


class TestCurrency:
    def test_numeric_text(self):
        assert currency("6.72") == "$6.72"

    def test_numbers(self):
        assert currency(7) == "$7.00"
        assert currency(6.5) == "$6.50"
        assert currency(Decimal("1234.5")) == "$1,234.50"

    def test_negative(self):
        assert currency("-6.72") == "-$6.72"

    @pytest.mark.parametrize("value, expected", [
        (0.125, "$0.13"),
        ("2.675", "$2.68"),
        ("-0.125", "-$0.13"),
        (Decimal("1.005"), "$1.01"),
    ])
    def test_halves_round_away_from_zero(self, value, expected):
        assert currency(value) == expected

    def test_non_finite_amount_passes_through(self):
        assert currency(float("inf")) == "inf"

    def test_unparsable_input_passes_through(self):
        assert currency("teststring") == "teststring"

    def test_explicit_culture(self):
        assert currency(7, "de-DE") == "7,00\xa0€"
        assert currency("6.72", "en-GB") == "£6.72"

    def test_blank_culture_uses_active_culture(self):
        assert currency("6.72", "") == "$6.72"
        assert currency("6.72", None) == "$6.72"

    def test_active_culture_reads_and_formats(self):
        german = make_currency_filter("de-DE")
        assert german("6,72") == "6,72\xa0€"
        assert german("6,72", "en-US") == "$6.72"

    def test_unknown_culture(self):
        with pytest.raises(FilterArgumentError):
            currency("6.72", "xx-NOPE")


class TestCultureLookup:
    def test_separators(self):
        assert locale_for("en-US") == locale_for("en_US")

    def test_currency_for_territory(self):
        assert currency_for("en-US") == "USD"
        assert currency_for("de-DE") == "EUR"

    def test_neutral_culture_uses_likely_territory(self):
        assert currency_for("de") == "EUR"
        assert currency_for("en") == "USD"
