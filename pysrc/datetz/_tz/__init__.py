from .ambiguity import resolve_local
from .catalog import (
    TimezoneCatalog,
    UnknownTimezone,
    available_timezones,
    get_catalog,
    lookup,
    set_catalog,
)
from .common import Disambiguate, OffsetInfo, TimezoneOffset
from .resolver import clear_host_cache, resolve_offset

__all__ = [
    "Disambiguate",
    "OffsetInfo",
    "TimezoneCatalog",
    "TimezoneOffset",
    "UnknownTimezone",
    "available_timezones",
    "clear_host_cache",
    "get_catalog",
    "lookup",
    "resolve_local",
    "resolve_offset",
    "set_catalog",
]
