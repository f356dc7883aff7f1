"""The timezone catalog: which IDs exist, and which offsets they use."""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Tuple, Union

from ._zones import ZONES
from .common import TimezoneOffset

__all__ = [
    "UnknownTimezone",
    "TimezoneCatalog",
    "lookup",
    "get_catalog",
    "set_catalog",
    "available_timezones",
]

_Entries = Union[
    Mapping[str, Tuple[int, int]], Iterable[Tuple[str, Tuple[int, int]]]
]


class UnknownTimezone(ValueError):
    """A timezone with the given ID is not in the catalog"""

    @classmethod
    def for_key(cls, key: object) -> UnknownTimezone:
        return cls(f"Invalid timezone: {key}")


class TimezoneCatalog(Mapping[str, TimezoneOffset]):
    """A read-mostly mapping of timezone IDs to their offset pair.

    Example
    -------
    >>> catalog = TimezoneCatalog({"Europe/Rome": (3600, 7200)})
    >>> catalog.lookup("Europe/Rome")
    TimezoneOffset(sdt=3600, dst=7200)
    >>> catalog.lookup("Mars/Phobos")
    Traceback (most recent call last):
      ...
    UnknownTimezone: Invalid timezone: Mars/Phobos
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: _Entries = (), /) -> None:
        items = entries.items() if isinstance(entries, Mapping) else entries
        self._entries: dict[str, TimezoneOffset] = {}
        for key, (sdt, dst) in items:
            self.register(key, sdt, dst)

    def register(self, key: str, sdt: int, dst: int) -> None:
        """Add or replace a zone. Offsets are seconds east of UTC."""
        if not isinstance(key, str) or not key:
            raise ValueError(f"Invalid timezone key: {key!r}")
        self._entries[key] = TimezoneOffset(int(sdt), int(dst))

    def lookup(self, key: str) -> TimezoneOffset:
        """Like ``catalog[key]``, but raises :class:`UnknownTimezone`"""
        try:
            return self._entries[key]
        except (KeyError, TypeError):
            raise UnknownTimezone.for_key(key) from None

    def __getitem__(self, key: str) -> TimezoneOffset:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        try:
            return key in self._entries
        except TypeError:
            return False

    def __repr__(self) -> str:
        return f"TimezoneCatalog({len(self)} zones)"


_DEFAULT_CATALOG = TimezoneCatalog(ZONES)
_CATALOG = _DEFAULT_CATALOG


def get_catalog() -> TimezoneCatalog:
    return _CATALOG


def set_catalog(catalog: _Entries | None = None, /) -> None:
    """Replace the active timezone catalog, or restore the bundled one
    if ``catalog`` is ``None``.

    Caution
    -------
    Existing instances whose timezone is missing from the new catalog
    keep working for reads that don't need the offset pair, but will fail
    with :class:`UnknownTimezone` on anything that does.
    This is a process-wide setting and is not thread-safe.
    """
    global _CATALOG
    if catalog is None:
        _CATALOG = _DEFAULT_CATALOG
    elif isinstance(catalog, TimezoneCatalog):
        _CATALOG = catalog
    else:
        _CATALOG = TimezoneCatalog(catalog)


def lookup(key: str) -> TimezoneOffset:
    return _CATALOG.lookup(key)


def available_timezones() -> set[str]:
    """The set of timezone IDs in the active catalog"""
    return set(_CATALOG)
