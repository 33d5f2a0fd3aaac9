"""Resolvers sub-package — concrete ``MemberResolver`` implementations.

member – capability dispatch over MapLike / RestrictedView / StructuralObject
"""

from .member import CapabilityResolver, MemberRule, DEFAULT_RULES, resolve

__all__ = [
    "CapabilityResolver",
    "MemberRule",
    "DEFAULT_RULES",
    "resolve",
]
