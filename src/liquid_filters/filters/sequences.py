"""Sequence filters: ``sort``, ``map``, ``first``, ``last``, ``size``, ``join``.

``sort`` and ``map`` read element members through a ``MemberResolver``; the
factories accept one so a host can plug in its own object model.  The
module-level instances use ``CapabilityResolver``.
"""

from __future__ import annotations

import functools
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any, Callable, Iterator, List, Optional

from ..core import MemberResolver
from ..resolvers.member import CapabilityResolver
from ..values import as_list, flatten_once, is_number, is_sequence, to_liquid_string

# ─────────────────────────────────────────────────────────────────────────────
# Ordering
# ─────────────────────────────────────────────────────────────────────────────

_RANK_NULL = 0
_RANK_NUMBER = 1
_RANK_TEXT = 2
_RANK_OTHER = 3


def _rank(value: Any) -> int:
    if value is None:
        return _RANK_NULL
    if is_number(value):
        return _RANK_NUMBER
    if isinstance(value, str):
        return _RANK_TEXT
    return _RANK_OTHER


def compare_values(a: Any, b: Any) -> int:
    """Total order used by ``sort``: ``None`` < numbers < text < everything else.

    Within a rank values compare naturally.  Two "other" values that do not
    support ordering (mappings, mixed types) compare equal, so a stable sort
    keeps their input order.
    """
    rank_a, rank_b = _rank(a), _rank(b)
    if rank_a != rank_b:
        return -1 if rank_a < rank_b else 1
    if rank_a == _RANK_NULL:
        return 0
    if rank_a == _RANK_OTHER and not _orderable(a, b):
        return 0
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


def _orderable(a: Any, b: Any) -> bool:
    if isinstance(a, date) and isinstance(b, date):
        return type(a) is type(b)
    if isinstance(a, bool) and isinstance(b, bool):
        return True
    return type(a) is type(b) and hasattr(a, "__lt__") and not isinstance(a, (Mapping, Sequence))


_sort_key = functools.cmp_to_key(compare_values)


# ─────────────────────────────────────────────────────────────────────────────
# sort / map
# ─────────────────────────────────────────────────────────────────────────────


def make_sort_filter(resolver: Optional[MemberResolver] = None) -> Callable[..., Any]:
    """Factory for ``sort``.

    Args:
        resolver: Member lookup used when a property is given.
                  ``None`` → ``CapabilityResolver``.
    """
    resolver = resolver or CapabilityResolver()

    def sort(input: Any, property: Any = None) -> Optional[List[Any]]:
        """``sort``: stable sort, optionally by a member of each element.

        Behavior:
        * ``None`` → ``None``; a scalar sorts as a one-element list
        * Without *property*, nested sequences are spliced in one level
          before sorting; a list of mappings sorted by *property* is never
          flattened
        * Keys compare with ``compare_values``; missing members are ``None``
          and sort first
        * Input is never mutated

        Examples::

            sort([4, 3, 2, 1])                        → [1, 2, 3, 4]
            sort([[3, 1], 2])                         → [1, 2, 3]
            sort([{"a": 2}, {"a": 1}], "a")           → [{"a": 1}, {"a": 2}]
        """
        if input is None:
            return None

        if property and is_sequence(input) and all(isinstance(v, Mapping) for v in input):
            items = list(input)
        elif is_sequence(input):
            items = list(flatten_once(input))
        else:
            items = [input]

        if not items:
            return items

        if not property:
            return sorted(items, key=_sort_key)

        name = to_liquid_string(property)
        return sorted(items, key=lambda item: _sort_key(resolver.resolve(item, name)))

    return sort


sort = make_sort_filter()


class MappedSequence(Sequence):
    """Read-only, lazily projected view: element *i* is
    ``resolver.resolve(source[i], name)``, computed on access."""

    def __init__(self, source: List[Any], name: str, resolver: MemberResolver) -> None:
        self._source = source
        self._name = name
        self._resolver = resolver

    def __len__(self) -> int:
        return len(self._source)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self._resolver.resolve(item, self._name) for item in self._source[index]]
        return self._resolver.resolve(self._source[index], self._name)

    def __iter__(self) -> Iterator[Any]:
        for item in self._source:
            yield self._resolver.resolve(item, self._name)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, (list, tuple, MappedSequence)):
            return list(self) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"MappedSequence({list(self)!r})"


def make_map_filter(resolver: Optional[MemberResolver] = None) -> Callable[..., Any]:
    """Factory for ``map``."""
    resolver = resolver or CapabilityResolver()

    def map(input: Any, property: Any = None) -> Optional[MappedSequence]:
        """``map``: project every element through the member *property*.

        Same length and order as the input; missing members are ``None``.
        A single non-sequence value is mapped as a one-element list.

        Examples::

            map([{"a": 1}, {"a": 2}], "a")    → [1, 2]
            map([{"a": 1}, None], "a")        → [1, None]
            map(None, "a")                    → None
        """
        if input is None:
            return None
        return MappedSequence(as_list(input), to_liquid_string(property), resolver)

    return map


map = make_map_filter()


# ─────────────────────────────────────────────────────────────────────────────
# first / last / size / join
# ─────────────────────────────────────────────────────────────────────────────


def first(input: Any) -> Any:
    """``first``: first element (first character of text); ``None`` when empty."""
    if input is None or isinstance(input, Mapping):
        return None
    if isinstance(input, str) or is_sequence(input):
        return input[0] if len(input) else None
    return None


def last(input: Any) -> Any:
    """``last``: last element (last character of text); ``None`` when empty."""
    if input is None or isinstance(input, Mapping):
        return None
    if isinstance(input, str) or is_sequence(input):
        return input[-1] if len(input) else None
    return None


def size(input: Any) -> int:
    """``size``: characters of text, elements of a sequence, entries of a
    mapping; ``0`` for anything else."""
    if isinstance(input, (str, Mapping)) or is_sequence(input):
        return len(input)
    return 0


def join(input: Any, glue: Any = " ") -> Optional[str]:
    """``join``: textual forms of the elements with *glue* between them.

    Examples::

        join([1, 2, 3, 4])           → "1 2 3 4"
        join([1, 2, 3, 4], " - ")    → "1 - 2 - 3 - 4"
        join("")                     → ""
        join(None)                   → None
    """
    if input is None:
        return None
    return to_liquid_string(glue).join(to_liquid_string(item) for item in as_list(input))
