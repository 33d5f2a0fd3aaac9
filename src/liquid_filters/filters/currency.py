"""``currency``: culture-aware money formatting."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable

from babel.numbers import NumberFormatError, format_currency, get_currency_precision, parse_decimal

from ..values import is_blank, is_number, to_liquid_string
from .culture import currency_for, locale_for

logger = logging.getLogger(__name__)


def make_currency_filter(culture: str = "en-US") -> Callable[..., Any]:
    """Factory for ``currency``.

    Args:
        culture: The caller's active culture; used to read the amount and as
                 the output culture when none is passed to the filter.
    """
    active = locale_for(culture)

    def currency(input: Any, culture_name: Any = None) -> str:
        """``currency``: the amount in *culture_name*'s currency format.

        Behavior:
        * The amount is *input* itself when numeric (booleans excluded),
          otherwise its text read with the active culture's separators
        * Unreadable input → its textual form, unchanged
        * Blank *culture_name* → the active culture
        * The amount is rounded to the currency's minor unit, halves away
          from zero
        * Unknown *culture_name* raises ``FilterArgumentError``

        Examples::

            currency("6.72")                → "$6.72"
            currency(7, "de-DE")            → "7,00\\xa0€"
            currency("teststring")          → "teststring"
        """
        if is_number(input):
            amount = Decimal(repr(input)) if isinstance(input, float) else Decimal(input)
        else:
            text = to_liquid_string(input)
            try:
                amount = parse_decimal(text.strip(), locale=active)
            except NumberFormatError as exc:
                logger.debug("currency(%r) left unformatted: %s", text, exc)
                return text

        target = culture if is_blank(culture_name) else to_liquid_string(culture_name)
        code = currency_for(target)
        if not amount.is_finite():
            return to_liquid_string(input)
        # halves round away from zero
        amount = amount.quantize(Decimal(1).scaleb(-get_currency_precision(code)), rounding=ROUND_HALF_UP)
        return format_currency(amount, code, locale=locale_for(target))

    return currency


currency = make_currency_filter()
