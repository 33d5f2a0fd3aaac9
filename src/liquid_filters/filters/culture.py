"""Culture-name → babel ``Locale`` lookup shared by ``date`` and ``currency``."""

from __future__ import annotations

import functools

from babel import Locale, UnknownLocaleError
from babel.core import get_global
from babel.numbers import get_territory_currencies

from ..core import FilterArgumentError


@functools.lru_cache(maxsize=64)
def locale_for(culture: str) -> Locale:
    """``"en-US"`` / ``"en_US"`` / ``"de"`` → ``Locale``.

    Unknown names raise ``FilterArgumentError``.
    """
    name = culture.strip().replace("-", "_")
    try:
        return Locale.parse(name)
    except (UnknownLocaleError, ValueError) as exc:
        raise FilterArgumentError(f"unknown culture {culture!r}") from exc


@functools.lru_cache(maxsize=64)
def currency_for(culture: str) -> str:
    """ISO 4217 code of the currency in use in *culture*'s territory.

    A culture without a territory (``"de"``) borrows the territory of its
    likely subtags (``de`` → ``de_Latn_DE``).
    """
    locale = locale_for(culture)
    territory = locale.territory
    if territory is None:
        likely = get_global("likely_subtags").get(locale.language)
        if likely:
            territory = Locale.parse(likely).territory
    currencies = get_territory_currencies(territory) if territory else []
    if not currencies:
        raise FilterArgumentError(f"culture {culture!r} has no currency")
    return currencies[0]
