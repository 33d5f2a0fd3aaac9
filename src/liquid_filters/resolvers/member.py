"""Capability-based MemberResolver.

Reads a named member off the closed set of capability objects without ever
raising for an absent member.  Dispatch walks ``MemberRule`` entries by
descending priority and stops at the first rule whose matcher fires::

    priority 40  MapLike                 key test
    priority 30  Sequence of MapLike     per-element key test (no flattening)
    priority 20  RestrictedView          allow-list test, then the target
    priority 10  StructuralObject        enumerable field test
    (no match)                           None
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, List

from ..core import MemberResolver
from ..values import (
    Capability,
    RestrictedView,
    capability_of,
    field_names,
    is_sequence,
)


@dataclass
class MemberRule:
    """One entry of the resolver's dispatch table.

    Attributes:
        name:     Human-readable label.
        priority: Higher = tried first.
        matches:  ``value → bool``.
        lookup:   ``(value, name, resolver) → member``; only called when
                  *matches* fired.
    """

    name: str
    priority: int
    matches: Callable[[Any], bool]
    lookup: Callable[[Any, str, 'CapabilityResolver'], Any]


def _is_map_like_collection(value: Any) -> bool:
    return is_sequence(value) and len(value) > 0 and all(isinstance(v, Mapping) for v in value)


def _map_lookup(value: Mapping, name: str, _resolver: 'CapabilityResolver') -> Any:
    return value.get(name)


def _collection_lookup(value: Any, name: str, resolver: 'CapabilityResolver') -> List[Any]:
    return [resolver.resolve(item, name) for item in value]


def _view_lookup(value: RestrictedView, name: str, _resolver: 'CapabilityResolver') -> Any:
    return value.get(name)


def _structural_lookup(value: Any, name: str, _resolver: 'CapabilityResolver') -> Any:
    if name in field_names(value):
        return getattr(value, name)
    return None


DEFAULT_RULES: tuple[MemberRule, ...] = (
    MemberRule(
        name="map_like", priority=40,
        matches=lambda v: capability_of(v) is Capability.MAP_LIKE,
        lookup=_map_lookup,
    ),
    MemberRule(
        name="map_like_collection", priority=30,
        matches=_is_map_like_collection,
        lookup=_collection_lookup,
    ),
    MemberRule(
        name="restricted_view", priority=20,
        matches=lambda v: capability_of(v) is Capability.RESTRICTED_VIEW,
        lookup=_view_lookup,
    ),
    MemberRule(
        name="structural", priority=10,
        matches=lambda v: capability_of(v) is Capability.STRUCTURAL,
        lookup=_structural_lookup,
    ),
)


class CapabilityResolver(MemberResolver):
    """``MemberResolver`` over maps, restricted views and structural objects.

    ::

        resolve({"a": 1}, "a")                          → 1
        resolve([{"a": 1}, {"a": 2}], "a")              → [1, 2]
        resolve(RestrictedView(obj, {"x"}), "y")        → None
        resolve(Point(x=1, y=2), "x")                   → 1
        resolve(42, "x")                                → None
    """

    def __init__(self, rules: tuple[MemberRule, ...] = DEFAULT_RULES) -> None:
        self._rules = sorted(rules, key=lambda r: r.priority, reverse=True)

    def resolve(self, value: Any, name: str) -> Any:
        if value is None:
            return None
        for rule in self._rules:
            if rule.matches(value):
                return rule.lookup(value, name, self)
        return None


_DEFAULT_RESOLVER = CapabilityResolver()


def resolve(value: Any, name: str) -> Any:
    """Module-level shortcut for ``CapabilityResolver().resolve``."""
    return _DEFAULT_RESOLVER.resolve(value, name)
