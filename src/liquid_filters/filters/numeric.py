"""Numeric filters: thin wrappers over ``arithmetic.apply_arithmetic``, and ``round``.

A ``CoercionError`` from the engine is logged at DEBUG and becomes ``None``.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Any, Callable, Optional

from ..arithmetic import Operator, apply_arithmetic
from ..casters import to_decimal, to_int
from ..core import CoercionError

logger = logging.getLogger(__name__)


def _wrap(op: Operator, name: str) -> Callable[[Any, Any], Any]:
    def arithmetic_filter(input: Any, operand: Any = None) -> Any:
        try:
            return apply_arithmetic(op, input, operand)
        except CoercionError as exc:
            logger.debug("%s(%r, %r) -> None: %s", name, input, operand, exc)
            return None

    arithmetic_filter.__name__ = arithmetic_filter.__qualname__ = name
    arithmetic_filter.__doc__ = f"``{name}``: ``{op.value}`` through the numeric coercion engine."
    return arithmetic_filter


plus = _wrap(Operator.ADD, "plus")
minus = _wrap(Operator.SUB, "minus")
times = _wrap(Operator.MUL, "times")
divided_by = _wrap(Operator.DIV, "divided_by")
modulo = _wrap(Operator.MOD, "modulo")


def round(input: Any, places: Any = None) -> Optional[Decimal]:
    """``round``: decimal rounding to *places* fractional digits, half to even.

    Behavior:
    * *input* goes through ``to_decimal`` (numbers and numeric text)
    * Values that already have at most *places* digits are not padded
    * Any conversion failure or negative *places* → ``None``

    Examples::

        round(1.234678, 3)          → Decimal("1.235")
        round(1)                    → Decimal("1")
        round(2.5)                  → Decimal("2")
        round("1.2345678", "two")   → None
    """
    try:
        digits = 0 if places is None else to_int(places)
        if digits < 0:
            raise ValueError(f"places must not be negative, got {digits}")
        value = to_decimal(input)
        if -value.as_tuple().exponent <= digits:
            return value
        return value.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_EVEN)
    except (TypeError, ValueError, InvalidOperation) as exc:
        logger.debug("round(%r, %r) -> None: %s", input, places, exc)
        return None
