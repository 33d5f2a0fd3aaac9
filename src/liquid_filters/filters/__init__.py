"""Filters sub-package — the concrete filter catalog, grouped by what it works on.

strings   – case, slicing, truncation, whitespace, split, append/prepend/remove, escaping, default
patterns  – regex-backed text filters bounded by the regex timeout (strip_html, replace, …)
sequences – sort, map, first, last, size, join
numeric   – plus, minus, times, divided_by, modulo, round
dates     – date, in the native or the strftime pattern dialect
currency  – currency
culture   – culture name → babel locale / currency code
"""

from .currency import currency, make_currency_filter
from .dates import date, format_native, format_strftime, make_date_filter
from .numeric import divided_by, minus, modulo, plus, round, times
from .patterns import (
    capitalize, newline_to_br, remove_first, replace, replace_first, strip_html, strip_newlines,
    make_capitalize_filter, make_newline_to_br_filter, make_remove_first_filter,
    make_replace_filter, make_replace_first_filter, make_strip_html_filter,
    make_strip_newlines_filter,
)
from .sequences import (
    MappedSequence, compare_values, first, join, last, make_map_filter, make_sort_filter,
    map, size, sort,
)
from .strings import (
    append, default, downcase, escape, h, json_escape, lstrip, prepend, remove, rstrip,
    slice, split, strip, truncate, truncate_words, upcase, url_encode,
)

__all__ = [
    # strings
    "upcase",
    "downcase",
    "slice",
    "truncate",
    "truncate_words",
    "strip",
    "lstrip",
    "rstrip",
    "split",
    "append",
    "prepend",
    "remove",
    "escape",
    "h",
    "json_escape",
    "url_encode",
    "default",
    # patterns
    "strip_html",
    "strip_newlines",
    "newline_to_br",
    "capitalize",
    "replace",
    "replace_first",
    "remove_first",
    "make_strip_html_filter",
    "make_strip_newlines_filter",
    "make_newline_to_br_filter",
    "make_capitalize_filter",
    "make_replace_filter",
    "make_replace_first_filter",
    "make_remove_first_filter",
    # sequences
    "sort",
    "map",
    "first",
    "last",
    "size",
    "join",
    "compare_values",
    "MappedSequence",
    "make_sort_filter",
    "make_map_filter",
    # numeric
    "plus",
    "minus",
    "times",
    "divided_by",
    "modulo",
    "round",
    # dates
    "date",
    "make_date_filter",
    "format_native",
    "format_strftime",
    # currency
    "currency",
    "make_currency_filter",
]
