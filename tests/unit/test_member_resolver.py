"""Tests for the capability-based member resolver."""

from collections import namedtuple
from dataclasses import dataclass
from types import SimpleNamespace

import pytest

from liquid_filters import CapabilityResolver, RestrictedView, resolve
from liquid_filters.resolvers import DEFAULT_RULES, MemberRule

Point = namedtuple("Point", ["x", "y"])


@dataclass
class User:
    name: str
    password: str


class TestMapLike:
    def test_key_present(self):
        assert resolve({"a": 1}, "a") == 1

    def test_key_absent(self):
        assert resolve({"a": 1}, "b") is None

    def test_collection_of_maps_resolves_per_element(self):
        assert resolve([{"a": 1}, {"a": 2}, {"b": 3}], "a") == [1, 2, None]

    def test_nested_collections_are_not_flattened(self):
        assert resolve([[{"a": 1}]], "a") is None


class TestRestrictedView:
    def test_allowed(self):
        assert resolve(RestrictedView(User("ann", "pw"), {"name"}), "name") == "ann"

    def test_not_allowed_is_absent(self):
        assert resolve(RestrictedView(User("ann", "pw"), {"name"}), "password") is None


class TestStructural:
    def test_namedtuple_field(self):
        assert resolve(Point(1, 2), "y") == 2

    def test_dataclass_field(self):
        assert resolve(User("ann", "pw"), "name") == "ann"

    def test_namespace_field(self):
        assert resolve(SimpleNamespace(a=1), "a") == 1

    def test_methods_are_not_members(self):
        assert resolve(Point(1, 2), "count") is None


class TestAbsence:
    """Absent members never raise."""

    @pytest.mark.parametrize("value", [None, 42, "text", object(), []])
    def test_non_capability_values(self, value):
        assert resolve(value, "x") is None


class TestCustomRules:
    """Rules can be extended and are tried by priority."""

    def test_higher_priority_rule_wins(self):
        shout = MemberRule(
            name="shout", priority=100,
            matches=lambda v: isinstance(v, str),
            lookup=lambda v, name, _r: v.upper() if name == "loud" else None,
        )
        resolver = CapabilityResolver(DEFAULT_RULES + (shout,))

        assert resolver.resolve("hey", "loud") == "HEY"
        assert resolver.resolve({"loud": 1}, "loud") == 1
