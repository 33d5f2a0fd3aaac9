from .core import (
    CoercionError,
    Filter,
    FilterArgumentError,
    FilterConfig,
    FilterError,
    FilterRegistry,
    MemberResolver,
    RegexTimeoutError,
    UnknownFilterError,
)
from .arithmetic import Operator, apply_arithmetic
from .expressions import evaluate, render
from .factory import build_default_filters
from .naming import CSharpNamingConvention, NamingConvention, RubyNamingConvention
from .resolvers import CapabilityResolver, resolve
from .values import Capability, RestrictedView, capability_of, to_liquid_string

__all__ = [
    # core
    "FilterConfig",
    "FilterRegistry",
    "Filter",
    "MemberResolver",
    # errors
    "FilterError",
    "CoercionError",
    "RegexTimeoutError",
    "FilterArgumentError",
    "UnknownFilterError",
    # values
    "Capability",
    "RestrictedView",
    "capability_of",
    "to_liquid_string",
    # arithmetic
    "Operator",
    "apply_arithmetic",
    # resolvers
    "CapabilityResolver",
    "resolve",
    # naming
    "NamingConvention",
    "RubyNamingConvention",
    "CSharpNamingConvention",
    # assembly
    "build_default_filters",
    "evaluate",
    "render",
]
