"""Tests for the registry and the error hierarchy."""

import pytest

from liquid_filters import (
    CoercionError, FilterArgumentError, FilterError, FilterRegistry, MemberResolver,
    RegexTimeoutError, UnknownFilterError,
)


class TestErrorHierarchy:
    @pytest.mark.parametrize("error, builtin", [
        (CoercionError, TypeError),
        (RegexTimeoutError, TimeoutError),
        (FilterArgumentError, ValueError),
        (UnknownFilterError, KeyError),
    ])
    def test_errors_extend_builtins(self, error, builtin):
        assert issubclass(error, FilterError)
        assert issubclass(error, builtin)

    def test_timeout_message(self):
        error = RegexTimeoutError(2.0)
        assert str(error) == "Regex operation exceeded timeout of 2.0s"
        assert error.timeout == 2.0


class TestFilterRegistry:
    def test_register_and_invoke(self):
        registry = FilterRegistry()
        registry.register("twice", lambda value, n=2: value * n)
        assert registry.invoke("twice", "ab") == "abab"
        assert registry.invoke("twice", "ab", 3) == "ababab"

    def test_register_replaces(self):
        registry = FilterRegistry()
        registry.register("f", lambda v: 1)
        registry.register("f", lambda v: 2)
        assert registry.invoke("f", None) == 2

    def test_register_many_keeps_order(self):
        registry = FilterRegistry()
        registry.register_many({"b": str, "a": str})
        assert registry.names() == ["b", "a"]


class TestMemberResolverInterface:
    def test_resolve_is_abstract(self):
        with pytest.raises(TypeError):
            MemberResolver()
