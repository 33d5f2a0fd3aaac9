"""Registry factory — the single place where all filters are assembled.

``build_default_filters`` is the recommended entry point for hosts that want
the complete filter catalog without hand-registering every filter.

Customisation points:

* **config**   – ``FilterConfig`` captured by the configurable filters
                 (regex timeout, date dialect, culture, clock).
* **naming**   – ``NamingConvention`` used for lookups.
                 ``None`` → ``RubyNamingConvention``.
* **resolver** – ``MemberResolver`` used by ``sort`` and ``map``.
                 ``None`` → ``CapabilityResolver``.
"""

from __future__ import annotations

from typing import Dict

from .core import Filter, FilterConfig, FilterRegistry, MemberResolver
from .filters.currency import make_currency_filter
from .filters.dates import make_date_filter
from .filters.numeric import divided_by, minus, modulo, plus, round, times
from .filters.patterns import (
    make_capitalize_filter, make_newline_to_br_filter, make_remove_first_filter,
    make_replace_filter, make_replace_first_filter, make_strip_html_filter,
    make_strip_newlines_filter,
)
from .filters.sequences import first, join, last, make_map_filter, make_sort_filter, size
from .filters.strings import (
    append, default, downcase, escape, json_escape, lstrip, prepend, remove, rstrip,
    slice, split, strip, truncate, truncate_words, upcase, url_encode,
)
from .naming import NamingConvention
from .resolvers.member import CapabilityResolver


def build_default_filters(
        config: FilterConfig | None = None,
        *,
        naming: NamingConvention | None = None,
        resolver: MemberResolver | None = None,
) -> FilterRegistry:
    """Assemble a ``FilterRegistry`` holding every built-in filter.

    What gets wired
    ---------------
    text
        ``upcase``, ``downcase``, ``slice``, ``truncate``, ``truncate_words``,
        ``strip``, ``lstrip``, ``rstrip``, ``split``, ``append``, ``prepend``,
        ``remove``, ``escape`` (alias ``h``), ``json_escape``, ``url_encode``,
        ``default``.

    regex-backed (``config.regex_timeout``)
        ``strip_html``, ``strip_newlines``, ``newline_to_br``, ``capitalize``,
        ``replace``, ``replace_first``, ``remove_first``.

    sequences (*resolver*)
        ``sort``, ``map``, ``first``, ``last``, ``size``, ``join``.

    numeric
        ``plus``, ``minus``, ``times``, ``divided_by``, ``modulo``, ``round``.

    date and money (``config.use_ruby_date_format``, ``config.culture``, ``config.clock``)
        ``date``, ``currency``.

    Args:
        config:   Settings captured by the configurable filters.  ``None`` →
                  ``FilterConfig()``.
        naming:   Lookup naming convention.  ``None`` → Ruby convention.
        resolver: Member lookup for ``sort``/``map``.  ``None`` →
                  ``CapabilityResolver``.

    Returns:
        Fully wired ``FilterRegistry``.

    Example::

        registry = build_default_filters(FilterConfig(culture="de-DE"))
        registry.invoke("currency", "7")              # → "7,00 €"
        registry.invoke("remove_first", "a a a a", "a ")   # → "a a a"
    """
    config = config or FilterConfig()
    resolver = resolver or CapabilityResolver()
    timeout = config.regex_timeout

    filters: Dict[str, Filter] = {
        # text
        "upcase": upcase,
        "downcase": downcase,
        "slice": slice,
        "truncate": truncate,
        "truncate_words": truncate_words,
        "strip": strip,
        "lstrip": lstrip,
        "rstrip": rstrip,
        "split": split,
        "append": append,
        "prepend": prepend,
        "remove": remove,
        "escape": escape,
        "h": escape,
        "json_escape": json_escape,
        "url_encode": url_encode,
        "default": default,
        # regex-backed
        "strip_html": make_strip_html_filter(timeout),
        "strip_newlines": make_strip_newlines_filter(timeout),
        "newline_to_br": make_newline_to_br_filter(timeout),
        "capitalize": make_capitalize_filter(timeout),
        "replace": make_replace_filter(timeout),
        "replace_first": make_replace_first_filter(timeout),
        "remove_first": make_remove_first_filter(timeout),
        # sequences
        "sort": make_sort_filter(resolver),
        "map": make_map_filter(resolver),
        "first": first,
        "last": last,
        "size": size,
        "join": join,
        # numeric
        "plus": plus,
        "minus": minus,
        "times": times,
        "divided_by": divided_by,
        "modulo": modulo,
        "round": round,
        # date and money
        "date": make_date_filter(
            use_ruby_date_format=config.use_ruby_date_format,
            culture=config.culture,
            clock=config.clock,
        ),
        "currency": make_currency_filter(config.culture),
    }

    registry = FilterRegistry(naming=naming)
    registry.register_many(filters)
    return registry
