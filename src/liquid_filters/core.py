"""Core abstractions: configuration, errors, the member-resolver interface,
and the filter registry.

This module owns every *interface* in the system.  Nothing here depends on a
concrete filter — all concrete implementations live in the sub-packages
(``filters``, ``resolvers``) or in ``factory``.

Call flow (``FilterRegistry.invoke`` entry point)::

    host engine (already parsed "{{ x | name: a, b }}")
      │
      ▼
    FilterRegistry.lookup(name)            ← naming convention applied here
      │
      ▼
    filter(input, a, b)                    ← pure, config captured at build time
      │
      └─ arithmetic.apply_arithmetic / resolvers.member.resolve / regex …
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .naming import NamingConvention


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────


class FilterError(Exception):
    """Base class for every error raised by this package."""


class CoercionError(FilterError, TypeError):
    """Two operands could not be brought to a common numeric representation,
    or the promoted operation is undefined for them."""


class RegexTimeoutError(FilterError, TimeoutError):
    """A pattern-based filter exceeded the configured regex timeout."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Regex operation exceeded timeout of {timeout}s")
        self.timeout = timeout


class FilterArgumentError(FilterError, ValueError):
    """A filter argument or capability object breaks its documented contract."""


class UnknownFilterError(FilterError, KeyError):
    """No registered filter answers to the requested name."""


# ─────────────────────────────────────────────────────────────────────────────
# FilterConfig
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FilterConfig:
    """Process-wide settings read by the filters.

    Built once by the host before rendering and captured by the filter
    factories; frozen so any number of concurrent renders may read it.

    Attributes:
        regex_timeout:        Seconds a single regex evaluation may run.
        use_ruby_date_format: ``True`` → ``date`` reads ``%``-directives
                              (strftime dialect) instead of .NET-style
                              custom format patterns.
        culture:              The caller's active culture (``"en-US"``,
                              ``"de-DE"``, …).  Used to parse numbers and
                              as the default ``currency`` culture.
        clock:                Returns the current moment for the
                              ``now``/``today`` date sentinels.
    """

    regex_timeout: float = 2.0
    use_ruby_date_format: bool = False
    culture: str = "en-US"
    clock: Callable[[], datetime] = field(default=datetime.now, compare=False)


# ─────────────────────────────────────────────────────────────────────────────
# MemberResolver — named-member lookup abstraction
# ─────────────────────────────────────────────────────────────────────────────


class MemberResolver(ABC):
    """Abstract interface for reading a named member off a value.

    Swap the concrete implementation and ``sort``/``map`` adapt to a
    different object model.

    Default implementation: ``resolvers.member.CapabilityResolver``.
    """

    @abstractmethod
    def resolve(self, value: Any, name: str) -> Any:
        """Return the member *name* of *value*, or ``None`` when absent.

        Must never raise for a missing member.
        """


# ─────────────────────────────────────────────────────────────────────────────
# FilterRegistry
# ─────────────────────────────────────────────────────────────────────────────

#: Signature of a filter: piped input first, then the literal arguments.
Filter = Callable[..., Any]


class FilterRegistry:
    """Name → filter mapping consulted by the host for every ``| name`` call.

    Names go through the registry's naming convention before lookup, so the
    host can pass the token exactly as the template author wrote it.

    ::

        registry.register("upcase", upcase)
        registry.invoke("upcase", "abc")        → "ABC"
    """

    def __init__(self, naming: Optional['NamingConvention'] = None) -> None:
        if naming is None:
            from .naming import RubyNamingConvention
            naming = RubyNamingConvention()
        self.naming = naming
        self._filters: Dict[str, Filter] = {}

    # -- registration -------------------------------------------------------

    def register(self, name: str, fn: Filter) -> None:
        """Add (or replace) the filter answering to *name*."""
        self._filters[name] = fn

    def register_many(self, filters: Dict[str, Filter]) -> None:
        """Sugar for calling ``register`` once per item."""
        for name, fn in filters.items():
            self.register(name, fn)

    # -- lookup -------------------------------------------------------------

    def lookup(self, name: str) -> Filter:
        """Return the filter *name* refers to.

        Resolution order::

            naming.member_name(name) is a key      → that filter
            naming.operator_equals(name, key)      → first such key

        Raises ``UnknownFilterError`` when nothing matches.
        """
        key = self.naming.member_name(name)
        if key in self._filters:
            return self._filters[key]
        for registered, fn in self._filters.items():
            if self.naming.operator_equals(name, registered):
                return fn
        raise UnknownFilterError(name)

    def __contains__(self, name: str) -> bool:
        try:
            self.lookup(name)
        except UnknownFilterError:
            return False
        return True

    def invoke(self, name: str, value: Any, *args: Any) -> Any:
        """Look up *name* and apply it to *value* with *args*."""
        return self.lookup(name)(value, *args)

    # -- introspection ------------------------------------------------------

    def names(self) -> List[str]:
        """Return registered names in registration order."""
        return list(self._filters)
