"""Output expressions — ``{{ head | filter: arg, arg | filter }}``.

A deliberately small evaluator that lets filter chains run end to end: no
tags, no blocks, no parse caching.

Operands (``head`` and every argument)
--------------------------------------
* ``'text'`` / ``"text"`` – string literal
* ``42`` / ``-3``         – integer
* ``12.5``                – real (``float``)
* ``true`` / ``false``    – booleans
* ``nil`` / ``null``      – ``None``
* anything else           – JMESPath expression evaluated against *assigns*
                            (``product.title``, ``items[0]``); missing → ``None``

``|`` and ``,`` inside quoted literals are part of the literal.

Example::

    render("{{ 'a a a a' | remove_first: 'a ' }}")        → "a a a"
    render("{{ user.name | upcase }}", {"user": {"name": "x"}})  → "X"
"""

from __future__ import annotations

import re
from typing import Any, List, Mapping, Optional

import jmespath

from .core import FilterRegistry
from .values import to_liquid_string

_INTEGER = re.compile(r"[+-]?\d+")
_REAL = re.compile(r"[+-]?\d+\.\d+")
_KEYWORDS = {"true": True, "false": False, "nil": None, "null": None}

_OPEN = "{{"
_CLOSE = "}}"


# ─────────────────────────────────────────────────────────────────────────────
# Private helpers
# ─────────────────────────────────────────────────────────────────────────────


def _split_unquoted(text: str, sep: str) -> List[str]:
    """Split *text* on *sep* wherever it is not inside a quoted literal."""
    parts: list[str] = []
    current: list[str] = []
    quote: Optional[str] = None
    for ch in text:
        if quote:
            if ch == quote:
                quote = None
        elif ch in "'\"":
            quote = ch
        elif ch == sep:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return parts


def _find_close(text: str, start: int) -> int:
    """Index of the ``}}`` closing the output opened before *start*, or -1."""
    quote: Optional[str] = None
    i = start
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == quote:
                quote = None
        elif ch in "'\"":
            quote = ch
        elif text.startswith(_CLOSE, i):
            return i
        i += 1
    return -1


def _operand(token: str, assigns: Mapping[str, Any]) -> Any:
    token = token.strip()
    if not token:
        return None
    if len(token) >= 2 and token[0] == token[-1] and token[0] in "'\"":
        return token[1:-1]
    if token in _KEYWORDS:
        return _KEYWORDS[token]
    if _INTEGER.fullmatch(token):
        return int(token)
    if _REAL.fullmatch(token):
        return float(token)
    return jmespath.search(token, assigns)


def _default_registry() -> FilterRegistry:
    from .factory import build_default_filters
    return build_default_filters()


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────


def evaluate(
        expression: str,
        assigns: Mapping[str, Any] | None = None,
        filters: FilterRegistry | None = None,
) -> Any:
    """Evaluate the inside of one ``{{ … }}`` and return the native value.

    Filters are looked up in *filters* (``None`` → the default registry);
    an unknown name raises ``UnknownFilterError``.
    """
    assigns = assigns if assigns is not None else {}
    filters = filters if filters is not None else _default_registry()

    head, *calls = _split_unquoted(expression, "|")
    value = _operand(head, assigns)
    for call in calls:
        name, _, arg_text = call.partition(":")
        args = [_operand(arg, assigns) for arg in _split_unquoted(arg_text, ",")] if arg_text.strip() else []
        value = filters.invoke(name.strip(), value, *args)
    return value


def render(
        text: str,
        assigns: Mapping[str, Any] | None = None,
        filters: FilterRegistry | None = None,
) -> str:
    """Replace every ``{{ … }}`` in *text* with its rendered value.

    Text outside outputs is copied through; an unterminated ``{{`` is
    copied literally.
    """
    filters = filters if filters is not None else _default_registry()
    out: list[str] = []
    i = 0
    while True:
        start = text.find(_OPEN, i)
        if start == -1:
            out.append(text[i:])
            break
        end = _find_close(text, start + len(_OPEN))
        if end == -1:
            out.append(text[i:])
            break
        out.append(text[i:start])
        value = evaluate(text[start + len(_OPEN):end], assigns, filters)
        out.append(to_liquid_string(value))
        i = end + len(_CLOSE)
    return "".join(out)
