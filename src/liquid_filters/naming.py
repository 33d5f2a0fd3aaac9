"""Naming conventions: how a name written in a template maps to a registered filter.

``RubyNamingConvention``   – ``StripHtml`` / ``strip_html`` → ``strip_html``
``CSharpNamingConvention`` – names are used as written; ``Upcase`` and
                             ``upcase`` both answer to ``upcase``
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import regex


class NamingConvention(ABC):
    """Maps template-visible names onto registered filter names."""

    @abstractmethod
    def member_name(self, name: str) -> str:
        """Canonical registry key for *name*."""

    @abstractmethod
    def operator_equals(self, tested: str, reference: str) -> bool:
        """Whether the template name *tested* refers to the key *reference*."""


# Word boundaries inside CamelCase: "StripHTMLTags" → Strip_HTML_Tags
_CAMEL_BOUNDARY = regex.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


class RubyNamingConvention(NamingConvention):
    def member_name(self, name: str) -> str:
        return _CAMEL_BOUNDARY.sub("_", name).lower()

    def operator_equals(self, tested: str, reference: str) -> bool:
        return tested == reference


class CSharpNamingConvention(NamingConvention):
    """``default`` is a reserved word in C#-styled hosts, so it is exposed as ``Default``."""

    def member_name(self, name: str) -> str:
        return "Default" if name == "default" else name

    def operator_equals(self, tested: str, reference: str) -> bool:
        if not tested:
            return tested == reference
        upper = tested[0].upper() + tested[1:]
        lower = tested[0].lower() + tested[1:]
        return reference in (upper, lower)
