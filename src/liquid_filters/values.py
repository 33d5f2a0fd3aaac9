"""Value model shared by every filter.

Filters operate on plain Python values::

    None                      Null
    bool                      Boolean
    int                       Integer
    float                     Real
    decimal.Decimal           Decimal
    str                       Text
    datetime.date / datetime  DateTime
    list / tuple / Sequence   Sequence
    capability object         MapLike | RestrictedView | StructuralObject

Capability objects form a closed set, detected by ``capability_of``:

* ``MAP_LIKE``        – any ``collections.abc.Mapping``.
* ``RESTRICTED_VIEW`` – a ``RestrictedView`` wrapper with an explicit allow-list.
* ``STRUCTURAL``      – a dataclass instance, a namedtuple or a
                        ``types.SimpleNamespace``; field names are enumerable.

Filters never mutate an input value.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping, Sequence
from datetime import date
from decimal import Decimal
from enum import Enum
from types import SimpleNamespace
from typing import Any, Iterable, Iterator, List, Tuple

from .core import FilterArgumentError


class Capability(Enum):
    NONE = "none"
    MAP_LIKE = "map_like"
    RESTRICTED_VIEW = "restricted_view"
    STRUCTURAL = "structural"


@dataclasses.dataclass(frozen=True)
class RestrictedView:
    """Expose only *allowed_members* of *target* to filters.

    A name outside the allow-list is absent, even when *target* has it.
    Every allowed name must exist on *target*; a view that promises a
    member its target cannot deliver is rejected at construction.

    ::

        view = RestrictedView(user, {"name"})
        resolve(view, "name")       → user.name
        resolve(view, "password")   → None
    """

    target: Any
    allowed_members: frozenset = frozenset()

    def __post_init__(self) -> None:
        allowed = frozenset(self.allowed_members)
        object.__setattr__(self, "allowed_members", allowed)
        missing = sorted(m for m in allowed if not _has_field(self.target, m))
        if missing:
            raise FilterArgumentError(
                f"{type(self.target).__name__} has no member(s) {', '.join(missing)} "
                f"named in its allow-list"
            )

    def get(self, name: str) -> Any:
        if name not in self.allowed_members:
            return None
        return _read_field(self.target, name)


# ─────────────────────────────────────────────────────────────────────────────
# Capability detection
# ─────────────────────────────────────────────────────────────────────────────


def _is_namedtuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def is_structural(value: Any) -> bool:
    """True for dataclass instances, namedtuples and ``SimpleNamespace``."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return not isinstance(value, RestrictedView)
    return _is_namedtuple(value) or isinstance(value, SimpleNamespace)


def field_names(value: Any) -> Tuple[str, ...]:
    """Enumerate the fields of a structural object (empty for anything else)."""
    if isinstance(value, RestrictedView):
        return tuple(sorted(value.allowed_members))
    if _is_namedtuple(value):
        return tuple(type(value)._fields)
    if isinstance(value, SimpleNamespace):
        return tuple(vars(value))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return tuple(f.name for f in dataclasses.fields(value))
    return ()


def _has_field(value: Any, name: str) -> bool:
    if is_structural(value):
        return name in field_names(value)
    return hasattr(value, name)


def _read_field(value: Any, name: str) -> Any:
    return getattr(value, name)


def capability_of(value: Any) -> Capability:
    """Classify *value* into one of the capability variants."""
    if isinstance(value, Mapping):
        return Capability.MAP_LIKE
    if isinstance(value, RestrictedView):
        return Capability.RESTRICTED_VIEW
    if is_structural(value):
        return Capability.STRUCTURAL
    return Capability.NONE


# ─────────────────────────────────────────────────────────────────────────────
# Scalars and sequences
# ─────────────────────────────────────────────────────────────────────────────


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value: Any) -> bool:
    return is_integer(value) or isinstance(value, (float, Decimal))


def is_sequence(value: Any) -> bool:
    """Sequences are ordered collections other than text and structural tuples."""
    if isinstance(value, (str, bytes, bytearray)) or _is_namedtuple(value):
        return False
    return isinstance(value, Sequence)


def is_blank(value: Any) -> bool:
    """``None``, or text that is empty or entirely whitespace."""
    return value is None or (isinstance(value, str) and not value.strip())


def flatten_once(items: Iterable[Any]) -> Iterator[Any]:
    """Splice nested sequences one level deep; mappings stay whole."""
    for item in items:
        if is_sequence(item):
            yield from item
        else:
            yield item


def as_list(value: Any) -> List[Any]:
    """View *value* as a list: sequences are copied, ``None`` is empty,
    anything else becomes a one-element list."""
    if value is None:
        return []
    if is_sequence(value):
        return list(value)
    return [value]


# ─────────────────────────────────────────────────────────────────────────────
# Textual rendering
# ─────────────────────────────────────────────────────────────────────────────


def to_liquid_string(value: Any) -> str:
    """Default textual form of a value, as written into rendered output.

    Examples::

        to_liquid_string(None)            → ""
        to_liquid_string(True)            → "true"
        to_liquid_string(125.0)           → "125"
        to_liquid_string(5.5)             → "5.5"
        to_liquid_string(["a", 1])        → "a1"
        to_liquid_string({"a": 1})        → '{"a": 1}'
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (int, Decimal, date)):
        return str(value)
    if isinstance(value, Mapping):
        return json.dumps(value, ensure_ascii=False, default=to_liquid_string)
    if is_sequence(value):
        return "".join(to_liquid_string(v) for v in value)
    return str(value)
