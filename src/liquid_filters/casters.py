"""Built-in casters for filter inputs and literal arguments.

Filters receive whatever the render pipeline evaluated, so a length may
arrive as ``"7"`` and an amount as ``6.72``, ``"6.72"`` or ``Decimal("6.72")``.
These helpers bring such values to the type a filter computes with.

Exports
-------
to_int / to_decimal / to_text
    The individual casters.  ``to_int`` and ``to_decimal`` raise
    ``ValueError``/``TypeError`` on failure; callers decide whether that
    becomes ``None`` or propagates.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from .values import is_integer, to_liquid_string


def to_int(value: Any) -> int:
    """``7`` / ``"7"`` / ``7.0`` → ``7``.  Booleans are not numbers."""
    if isinstance(value, bool):
        raise TypeError("bool is not an integer")
    if is_integer(value):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
        return int(value)
    if isinstance(value, (float, Decimal)):
        raise ValueError(f"{value!r} is not integral")
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"cannot cast {type(value).__name__} to int")


def to_decimal(value: Any) -> Decimal:
    """Exact decimal form of a number or numeric text.

    Floats go through their shortest ``repr`` so ``1.234678`` stays
    ``Decimal("1.234678")`` rather than its binary expansion.  Non-finite
    values are rejected.
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a number")
    if isinstance(value, Decimal):
        result = value
    elif is_integer(value):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"{value!r} is not a decimal number") from None
    else:
        raise TypeError(f"cannot cast {type(value).__name__} to decimal")
    if not result.is_finite():
        raise ValueError(f"{value!r} is not a finite number")
    return result


def to_text(value: Any) -> Any:
    """Text form of a filter input; ``None`` stays ``None``."""
    if value is None or isinstance(value, str):
        return value
    return to_liquid_string(value)

