"""Text filters that need no regular expressions.

Every filter takes the piped input first.  ``None`` in → ``None`` out unless
stated otherwise; non-text inputs are read through their textual form.
"""

from __future__ import annotations

import html
from collections.abc import Mapping
from typing import Any, List, Optional
from urllib.parse import quote

from ..casters import to_int, to_text
from ..values import is_blank, is_sequence, to_liquid_string


def _int_or(value: Any, fallback: int) -> int:
    try:
        return to_int(value)
    except (TypeError, ValueError):
        return fallback


# ─────────────────────────────────────────────────────────────────────────────
# Case and slicing
# ─────────────────────────────────────────────────────────────────────────────


def upcase(input: Any) -> Optional[str]:
    text = to_text(input)
    return None if text is None else text.upper()


def downcase(input: Any) -> Optional[str]:
    text = to_text(input)
    return None if text is None else text.lower()


def slice(input: Any, start: Any, length: Any = 1) -> Optional[str]:
    """``slice``: substring of *length* characters starting at *start*.

    Behavior:
    * ``None`` input or *start* past the end → ``None``
    * Negative *start* counts from the end; still negative afterwards → ``None``
    * Non-integer *start* or *length* → ``None``
    * *length* is clamped to the end of the string

    Examples::

        slice("hello", 1, 3)    → "ell"
        slice("hello", -3, 2)   → "ll"
        slice("hello", 3, 10)   → "lo"
    """
    text = to_text(input)
    try:
        start = to_int(start)
        length = to_int(length)
    except (TypeError, ValueError):
        return None
    if text is None or start > len(text):
        return None
    if start < 0:
        start += len(text)
    if start < 0:
        return None
    return text[start:start + max(length, 0)]


# ─────────────────────────────────────────────────────────────────────────────
# Truncation
# ─────────────────────────────────────────────────────────────────────────────


def truncate(input: Any, length: Any = 50, truncate_string: Any = "...") -> Optional[str]:
    """``truncate``: cut text down to *length* characters, suffix included.

    Behavior:
    * Empty or ``None`` input is returned unchanged
    * A *length* that is not an integer counts as 50
    * Text no longer than *length* is returned unchanged
    * Otherwise the first ``max(0, length - len(truncate_string))``
      characters followed by *truncate_string*

    Examples::

        truncate("1234567890", 7)     → "1234..."
        truncate("1234567890", 20)    → "1234567890"
        truncate("1234567890", 0)     → "..."
    """
    text = to_text(input)
    if not text:
        return text
    length = _int_or(length, 50)
    suffix = to_liquid_string(truncate_string)
    if len(text) <= length:
        return text
    return text[:max(0, length - len(suffix))] + suffix


def truncate_words(input: Any, words: Any = 15, truncate_string: Any = "...") -> Optional[str]:
    """``truncate_words``: keep the first *words* space-separated words.

    A *words* count that is not an integer counts as 15.

    Examples::

        truncate_words("one two three", 4)    → "one two three"
        truncate_words("one two three", 2)    → "one two..."
    """
    text = to_text(input)
    if not text:
        return text
    keep = max(0, _int_or(words, 15))
    word_list = text.split(" ")
    if len(word_list) <= keep:
        return text
    return " ".join(word_list[:keep]) + to_liquid_string(truncate_string)


# ─────────────────────────────────────────────────────────────────────────────
# Whitespace and splitting
# ─────────────────────────────────────────────────────────────────────────────


def strip(input: Any) -> Optional[str]:
    text = to_text(input)
    return None if text is None else text.strip()


def lstrip(input: Any) -> Optional[str]:
    text = to_text(input)
    return None if text is None else text.lstrip()


def rstrip(input: Any) -> Optional[str]:
    text = to_text(input)
    return None if text is None else text.rstrip()


def split(input: Any, pattern: Any = None) -> List[Any]:
    """``split``: split on the literal *pattern*, dropping empty pieces.

    Behavior:
    * Blank or ``None`` input → ``[input]``
    * ``None``/empty *pattern* splits on runs of whitespace

    Examples::

        split("This is a sentence", " ")    → ["This", "is", "a", "sentence"]
        split("a,,b", ",")                  → ["a", "b"]
        split(None, None)                   → [None]
    """
    text = to_text(input)
    if is_blank(text):
        return [input]
    if not pattern:
        return text.split()
    return [piece for piece in text.split(to_liquid_string(pattern)) if piece]


# ─────────────────────────────────────────────────────────────────────────────
# Concatenation and removal
# ─────────────────────────────────────────────────────────────────────────────


def append(input: Any, string: Any) -> Optional[str]:
    text = to_text(input)
    return None if text is None else text + to_liquid_string(string)


def prepend(input: Any, string: Any) -> Optional[str]:
    text = to_text(input)
    return None if text is None else to_liquid_string(string) + text


def remove(input: Any, string: Any) -> Optional[str]:
    """``remove``: delete every literal occurrence of *string*.

    Examples::

        remove("a a a a", "a")       → "   "
        remove("foo|bar", "|")       → "foobar"
    """
    text = to_text(input)
    if is_blank(text) or not string:
        return text
    return text.replace(to_liquid_string(string), "")


# ─────────────────────────────────────────────────────────────────────────────
# Escaping
# ─────────────────────────────────────────────────────────────────────────────


def escape(input: Any) -> Optional[str]:
    """``escape`` / ``h``: HTML-entity-encode the reserved characters.

    Encodes ``& < > " '`` and, like a web encoder, the Latin-1 range
    160–255 as numeric entities.  Text that cannot be encoded (lone
    surrogates) is returned unchanged.

    Examples::

        escape("<strong>")     → "&lt;strong&gt;"
        escape("it's")         → "it&#39;s"
    """
    text = to_text(input)
    if not text:
        return text
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return text
    escaped = html.escape(text, quote=True).replace("&#x27;", "&#39;")
    return "".join(f"&#{ord(ch)};" if 160 <= ord(ch) <= 255 else ch for ch in escaped)


h = escape


_JSON_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "/": "\\/",
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def json_escape(input: Any) -> Optional[str]:
    r"""``json_escape``: escape text for embedding in a JSON string literal.

    Backslash, double quote, slash and the control characters \b \t \n \f \r
    get their two-character escapes; any other character below U+0020
    becomes ``\u00XX``.

    Examples::

        json_escape("a\r\nb")      → "a\\r\\nb"
        json_escape("\x01")        → "\\u0001"
    """
    text = to_text(input)
    if not text:
        return text
    out: list[str] = []
    for ch in text:
        if ch in _JSON_ESCAPES:
            out.append(_JSON_ESCAPES[ch])
        elif ch < " ":
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return "".join(out)


def url_encode(input: Any) -> Optional[str]:
    """``url_encode``: percent-encode everything but RFC 3986 unreserved characters.

    Text that cannot be encoded as UTF-8 (lone surrogates) is returned unchanged.
    """
    text = to_text(input)
    if text is None:
        return None
    try:
        return quote(text, safe="")
    except UnicodeEncodeError:
        return text


# ─────────────────────────────────────────────────────────────────────────────
# Fallback
# ─────────────────────────────────────────────────────────────────────────────


def default(input: Any, default_value: Any = None) -> Any:
    """``default``: *default_value* when *input* is missing, empty or blank.

    ``None``, whitespace-only text, and empty sequences or mappings count as
    missing; anything else is returned as is.

    Examples::

        default(None, "foobar")     → "foobar"
        default("  ", "foobar")     → "foobar"
        default("foo", "foobar")    → "foo"
        default(0, "foobar")        → 0
    """
    if is_blank(input):
        return default_value
    if (is_sequence(input) or isinstance(input, Mapping)) and len(input) == 0:
        return default_value
    return input
