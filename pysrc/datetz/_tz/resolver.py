"""Find the UTC offset actually in effect at an instant.

The catalog only knows the two offsets a zone switches between. Which of
them applies at a given instant is asked of the host timezone database
through :mod:`zoneinfo`.
"""

from __future__ import annotations

import logging
from datetime import timedelta as _timedelta
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .._common import EPOCH, Millis
from .catalog import lookup
from .common import OffsetInfo, TimezoneOffset

__all__ = ["resolve_offset", "classify_offset", "clear_host_cache"]

_LOG = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _host_zone(key: str) -> ZoneInfo | None:
    try:
        return ZoneInfo(key)
    # Several exceptions amount to "the host can't find the key"
    except (ZoneInfoNotFoundError, ValueError, OSError):
        _LOG.debug(
            "No host timezone data for %r, assuming standard time", key
        )
        return None


def _host_offset_secs(key: str, instant: Millis) -> int | None:
    zone = _host_zone(key)
    if zone is None:
        return None
    try:
        local = (EPOCH + _timedelta(milliseconds=instant)).astimezone(zone)
    except OverflowError:
        return None
    offset = local.utcoffset()
    assert offset is not None
    return round(offset.total_seconds())


def classify_offset(offset_secs: int, entry: TimezoneOffset) -> OffsetInfo:
    if offset_secs == entry.sdt:
        return OffsetInfo(offset_secs, False)
    elif offset_secs == entry.dst:
        return OffsetInfo(offset_secs, True)
    # The host knows an offset the catalog doesn't (e.g. a historical one)
    return OffsetInfo(offset_secs, offset_secs > entry.sdt)


def resolve_offset(key: str, instant: Millis) -> OffsetInfo:
    """The offset and DST status of the given zone at the given instant.

    Zones with a single offset never consult the host database. If the host
    has no data for the zone, standard time is assumed.
    """
    entry = lookup(key)
    if not entry.observes_dst:
        return OffsetInfo(entry.sdt, False)

    offset_secs = _host_offset_secs(key, instant)
    if offset_secs is None:
        return OffsetInfo(entry.sdt, False)
    return classify_offset(offset_secs, entry)


def clear_host_cache() -> None:
    """Forget the host timezone data loaded so far"""
    _host_zone.cache_clear()
