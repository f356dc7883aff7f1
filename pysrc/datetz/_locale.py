"""Localized month names, for display only."""

from functools import lru_cache

from babel import Locale
from babel.dates import get_month_names


@lru_cache(maxsize=64)
def _wide_month_names(locale: str) -> tuple[str, ...]:
    parsed = Locale.parse(locale, sep="-" if "-" in locale else "_")
    names = get_month_names("wide", context="format", locale=parsed)
    return tuple(names[m] for m in range(1, 13))


def long_month_name(month: int, locale: str = "en") -> str:
    """The capitalized full name of the (0-based) month in the given locale.

    Example
    -------
    >>> long_month_name(0, "it")
    'Gennaio'
    """
    name = _wide_month_names(locale)[month]
    return name[:1].upper() + name[1:]
