"""Numeric coercion engine behind ``plus``/``minus``/``times``/``divided_by``/``modulo``.

``apply_arithmetic(op, left, right)`` brings both operands to a common
representation through an explicit promotion table and applies *op*::

    left \\ right   Integer   Real   Decimal
    Integer         Integer   Real   Decimal
    Real            Real      Real   Real
    Decimal         Decimal   Real   Decimal

Special cases, checked before promotion:

* either operand ``None``           → ``None``
* ``add`` with text on the left     → concatenation with the right's text form
* ``mul`` of text by an integer     → the text repeated that many times

Integer division truncates toward zero and the remainder takes the sign of
the dividend (so ``-7 / 2 == -3`` and ``-7 % 2 == -1``); ``Decimal`` already
behaves that way.  Anything else that cannot be promoted, and every
arithmetic fault of the promoted type (division by zero included), raises
``CoercionError``.
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from typing import Any, Callable

from .core import CoercionError
from .values import is_integer, to_liquid_string


class Operator(Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"


class _Kind(Enum):
    INTEGER = "integer"
    REAL = "real"
    DECIMAL = "decimal"


_PROMOTION: dict[tuple[_Kind, _Kind], _Kind] = {
    (_Kind.INTEGER, _Kind.INTEGER): _Kind.INTEGER,
    (_Kind.INTEGER, _Kind.REAL): _Kind.REAL,
    (_Kind.INTEGER, _Kind.DECIMAL): _Kind.DECIMAL,
    (_Kind.REAL, _Kind.INTEGER): _Kind.REAL,
    (_Kind.REAL, _Kind.REAL): _Kind.REAL,
    (_Kind.REAL, _Kind.DECIMAL): _Kind.REAL,
    (_Kind.DECIMAL, _Kind.INTEGER): _Kind.DECIMAL,
    (_Kind.DECIMAL, _Kind.REAL): _Kind.REAL,
    (_Kind.DECIMAL, _Kind.DECIMAL): _Kind.DECIMAL,
}


def _kind(value: Any) -> _Kind:
    if is_integer(value):
        return _Kind.INTEGER
    if isinstance(value, float):
        return _Kind.REAL
    if isinstance(value, Decimal):
        return _Kind.DECIMAL
    raise CoercionError(f"{type(value).__name__} is not a numeric operand")


# ─────────────────────────────────────────────────────────────────────────────
# Per-kind operator tables
# ─────────────────────────────────────────────────────────────────────────────


def _int_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _int_mod(a: int, b: int) -> int:
    return a - b * _int_div(a, b)


_BINARY = Callable[[Any, Any], Any]

_INTEGER_OPS: dict[Operator, _BINARY] = {
    Operator.ADD: lambda a, b: a + b,
    Operator.SUB: lambda a, b: a - b,
    Operator.MUL: lambda a, b: a * b,
    Operator.DIV: _int_div,
    Operator.MOD: _int_mod,
}

_REAL_OPS: dict[Operator, _BINARY] = {
    Operator.ADD: lambda a, b: a + b,
    Operator.SUB: lambda a, b: a - b,
    Operator.MUL: lambda a, b: a * b,
    Operator.DIV: lambda a, b: a / b,
    Operator.MOD: math.fmod,
}

_DECIMAL_OPS: dict[Operator, _BINARY] = {
    Operator.ADD: lambda a, b: a + b,
    Operator.SUB: lambda a, b: a - b,
    Operator.MUL: lambda a, b: a * b,
    Operator.DIV: lambda a, b: a / b,
    Operator.MOD: lambda a, b: a % b,
}

_CONVERT: dict[_Kind, Callable[[Any], Any]] = {
    _Kind.INTEGER: int,
    _Kind.REAL: float,
    _Kind.DECIMAL: Decimal,
}

_OPS: dict[_Kind, dict[Operator, _BINARY]] = {
    _Kind.INTEGER: _INTEGER_OPS,
    _Kind.REAL: _REAL_OPS,
    _Kind.DECIMAL: _DECIMAL_OPS,
}


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────


def apply_arithmetic(op: Operator, left: Any, right: Any) -> Any:
    """Apply *op* to *left* and *right* after numeric promotion.

    Examples::

        apply_arithmetic(Operator.ADD, 1, 1)                 → 2
        apply_arithmetic(Operator.ADD, 2, 3.5)               → 5.5
        apply_arithmetic(Operator.ADD, "1", "1")             → "11"
        apply_arithmetic(Operator.MUL, "foo", 4)             → "foofoofoofoo"
        apply_arithmetic(Operator.DIV, 14, 3)                → 4
        apply_arithmetic(Operator.DIV, Decimal("1"), 4)      → Decimal("0.25")
        apply_arithmetic(Operator.SUB, None, 1)              → None
    """
    if left is None or right is None:
        return None

    if op is Operator.ADD and isinstance(left, str):
        return left + to_liquid_string(right)

    if op is Operator.MUL and isinstance(left, str) and is_integer(right):
        if right < 0:
            raise CoercionError(f"cannot repeat text {right} times")
        return left * right

    kind = _PROMOTION[(_kind(left), _kind(right))]
    convert = _CONVERT[kind]
    try:
        return _OPS[kind][op](convert(left), convert(right))
    except (ArithmeticError, ValueError) as exc:
        raise CoercionError(f"{op.value} failed for {left!r} and {right!r}: {exc}") from exc
