from datetime import (
    datetime as _datetime,
    timedelta as _timedelta,
    timezone as _timezone,
)
from functools import lru_cache

UTC = _timezone.utc
EPOCH = _datetime(1970, 1, 1, tzinfo=UTC)

MS_PER_SECOND = 1_000
MS_PER_MINUTE = MS_PER_SECOND * 60
MS_PER_HOUR = MS_PER_MINUTE * 60
MS_PER_DAY = MS_PER_HOUR * 24
MS_PER_WEEK = MS_PER_DAY * 7

Millis = int  # milliseconds since the epoch, UTC


def floor_to_minute(ms: float, /) -> Millis:
    return int(ms // MS_PER_MINUTE) * MS_PER_MINUTE


# We cache fixed-offset tzinfo objects to avoid creating multiple identical ones.
# It's very common to only have whole-hour offsets, so this helps a lot.
@lru_cache
def mk_fixed_tzinfo(secs: int, /) -> _timezone:
    return _timezone(_timedelta(seconds=secs))


def format_offset(secs: int, /) -> str:
    sign = "-" if secs < 0 else "+"
    hrs, mins = divmod(abs(secs) // 60, 60)
    return f"{sign}{hrs:02d}:{mins:02d}"
