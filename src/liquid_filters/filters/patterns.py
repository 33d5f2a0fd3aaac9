"""Regex-backed text filters, each bounded by the configured regex timeout.

Every filter here comes from a ``make_*_filter(timeout=...)`` factory so the
timeout is captured once, when the registry is built.  A module-level
instance built with the default timeout is exported alongside each factory.

A timeout surfaces as ``RegexTimeoutError`` (a ``TimeoutError``); an invalid
pattern surfaces as ``FilterArgumentError`` (a ``ValueError``).  Neither is
swallowed.

Replacement strings use ``$``-substitutions::

    $1 / ${1}     numbered group
    ${name}       named group
    $&  / $0      whole match
    $`  / $'      text before / after the match
    $+            last group
    $_            whole input
    $$            literal "$"
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import regex

from ..core import FilterArgumentError, RegexTimeoutError
from ..casters import to_text
from ..values import is_blank, to_liquid_string

DEFAULT_TIMEOUT = 2.0

_Replacement = Callable[[Any], str]


# ─────────────────────────────────────────────────────────────────────────────
# Private helpers
# ─────────────────────────────────────────────────────────────────────────────


def _sub(pattern: str, repl: Any, string: str, timeout: float, count: int = 0) -> str:
    """``regex.sub`` with the timeout and error translation every filter shares."""
    try:
        return regex.sub(pattern, repl, string, count=count, timeout=timeout)
    except TimeoutError as exc:
        raise RegexTimeoutError(timeout) from exc
    except regex.error as exc:
        raise FilterArgumentError(f"invalid pattern {pattern!r}: {exc}") from exc


def _group(match: Any, key: Any) -> Optional[str]:
    """Return group *key* of *match*, ``""`` if it did not participate,
    ``None`` if the pattern has no such group."""
    if isinstance(key, int) and not 0 <= key <= match.re.groups:
        return None
    if isinstance(key, str) and key not in match.re.groupindex:
        return None
    return match.group(key) or ""


def _numbered_group(match: Any, digits: str) -> tuple[Optional[str], int]:
    """Longest prefix of *digits* naming an existing group → (text, consumed)."""
    for end in range(len(digits), 0, -1):
        value = _group(match, int(digits[:end]))
        if value is not None:
            return value, end
    return None, 0


def _expand(template: str, match: Any) -> str:
    out: list[str] = []
    i = 0
    n = len(template)
    while i < n:
        ch = template[i]
        if ch != "$" or i + 1 >= n:
            out.append(ch)
            i += 1
            continue

        nxt = template[i + 1]
        if nxt == "$":
            out.append("$")
            i += 2
        elif nxt == "&":
            out.append(match.group(0))
            i += 2
        elif nxt == "`":
            out.append(match.string[:match.start()])
            i += 2
        elif nxt == "'":
            out.append(match.string[match.end():])
            i += 2
        elif nxt == "_":
            out.append(match.string)
            i += 2
        elif nxt == "+":
            out.append(_group(match, match.re.groups) or "")
            i += 2
        elif nxt == "{":
            close = template.find("}", i + 2)
            name = template[i + 2:close] if close != -1 else ""
            value = None
            if name:
                value = _group(match, int(name) if name.isdigit() else name)
            if value is None:
                out.append(ch)
                i += 1
            else:
                out.append(value)
                i = close + 1
        elif nxt.isdigit():
            j = i + 1
            while j < n and template[j].isdigit():
                j += 1
            value, consumed = _numbered_group(match, template[i + 1:j])
            if value is None:
                out.append(ch)
                i += 1
            else:
                out.append(value)
                i += 1 + consumed
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _replacement(template: str) -> _Replacement:
    """Compile a ``$``-style replacement template into a ``regex.sub`` callable."""
    if "$" not in template:
        return lambda _match: template
    return lambda match: _expand(template, match)


# ─────────────────────────────────────────────────────────────────────────────
# Markup and newlines
# ─────────────────────────────────────────────────────────────────────────────


def make_strip_html_filter(timeout: float = DEFAULT_TIMEOUT) -> Callable[[Any], Any]:
    """Factory for ``strip_html``.

    Args:
        timeout: Timeout in seconds for the regex evaluation.
    """
    def strip_html(input: Any) -> Optional[str]:
        """``strip_html``: remove every ``<…>`` tag (non-greedy, single line).

        Examples::

            strip_html("<div>test</div>")              → "test"
            strip_html("<div id='test'>test</div>")    → "test"
        """
        text = to_text(input)
        if is_blank(text):
            return text
        return _sub(r"<.*?>", "", text, timeout)

    return strip_html


strip_html = make_strip_html_filter()


def make_strip_newlines_filter(timeout: float = DEFAULT_TIMEOUT) -> Callable[[Any], Any]:
    """Factory for ``strip_newlines``."""
    def strip_newlines(input: Any) -> Optional[str]:
        """``strip_newlines``: drop every ``\\r\\n`` and ``\\n``."""
        text = to_text(input)
        if is_blank(text):
            return text
        return _sub(r"\r?\n", "", text, timeout)

    return strip_newlines


strip_newlines = make_strip_newlines_filter()


def make_newline_to_br_filter(timeout: float = DEFAULT_TIMEOUT) -> Callable[[Any], Any]:
    """Factory for ``newline_to_br``."""
    def newline_to_br(input: Any) -> Optional[str]:
        """``newline_to_br``: put ``<br />`` in front of every newline, keeping it.

        Examples::

            newline_to_br("a\\nb")       → "a<br />\\nb"
            newline_to_br("a\\r\\nb")    → "a<br />\\r\\nb"
        """
        text = to_text(input)
        if is_blank(text):
            return text
        return _sub(r"(\r?\n)", lambda m: "<br />" + m.group(1), text, timeout)

    return newline_to_br


newline_to_br = make_newline_to_br_filter()


def make_capitalize_filter(timeout: float = DEFAULT_TIMEOUT) -> Callable[[Any], Any]:
    """Factory for ``capitalize``."""
    def capitalize(input: Any) -> Optional[str]:
        """``capitalize``: upper-case the first letter of every whitespace-delimited word.

        Examples::

            capitalize("That is one sentence.")    → "That Is One Sentence."
            capitalize(" ")                        → " "
        """
        text = to_text(input)
        if is_blank(text):
            return text
        return _sub(r"(?<!\S)[^\w\s]*\w", lambda m: m.group(0).upper(), text, timeout)

    return capitalize


capitalize = make_capitalize_filter()


# ─────────────────────────────────────────────────────────────────────────────
# Replace / remove
# ─────────────────────────────────────────────────────────────────────────────


def make_replace_filter(timeout: float = DEFAULT_TIMEOUT) -> Callable[..., Any]:
    """Factory for ``replace``.

    Args:
        timeout: Timeout in seconds for the regex evaluation.

    Returns:
        The ``replace`` filter.
    """
    def replace(input: Any, string: Any = None, replacement: Any = "") -> Optional[str]:
        """``replace``: substitute every match of the pattern *string*.

        Behavior:
        * *string* is a regular expression
        * Empty/``None`` input or pattern → input unchanged
        * *replacement* may use ``$1``, ``${name}``, ``$&``, ``$$`` …

        Examples::

            replace("a a a a", "a", "b")          → "b b b b"
            replace("2024-01-05", r"(\\d+)-(\\d+)-(\\d+)", "$3/$2/$1")  → "05/01/2024"
        """
        text = to_text(input)
        if not text or not string:
            return text
        return _sub(to_liquid_string(string), _replacement(to_liquid_string(replacement)), text, timeout)

    return replace


replace = make_replace_filter()


def make_replace_first_filter(timeout: float = DEFAULT_TIMEOUT) -> Callable[..., Any]:
    """Factory for ``replace_first``."""
    def replace_first(input: Any, string: Any = None, replacement: Any = "") -> Optional[str]:
        """``replace_first``: like ``replace`` but only the first match changes.

        Examples::

            replace_first("a a a a", "a", "b")    → "b a a a"
        """
        text = to_text(input)
        if not text or not string:
            return text
        return _sub(
            to_liquid_string(string), _replacement(to_liquid_string(replacement)), text, timeout, count=1,
        )

    return replace_first


replace_first = make_replace_first_filter()


def make_remove_first_filter(timeout: float = DEFAULT_TIMEOUT) -> Callable[..., Any]:
    """Factory for ``remove_first``: the literal *string* through ``replace_first``."""
    first = make_replace_first_filter(timeout)

    def remove_first(input: Any, string: Any = None) -> Optional[str]:
        """``remove_first``: delete the first literal occurrence of *string*.

        Examples::

            remove_first("a a a a", "a ")    → "a a a"
            remove_first("1+1=2", "+")       → "11=2"
        """
        text = to_text(input)
        if is_blank(text) or not string:
            return text
        return first(text, regex.escape(to_liquid_string(string)), "")

    return remove_first


remove_first = make_remove_first_filter()
