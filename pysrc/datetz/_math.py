"""Proleptic Gregorian calendar arithmetic on millisecond timestamps.

Months are 0-based throughout this module (January is 0), matching the
``month`` field of :class:`LocalFields`.
"""

from typing import NamedTuple

from ._common import MS_PER_DAY, MS_PER_SECOND, Millis


class LocalFields(NamedTuple):
    """Calendar fields as observed on a wall clock.

    A snapshot, not a validated date: ``day`` may exceed the length of the
    month after a field has been replaced. Use :func:`clamp_day` before
    converting back with :func:`from_local_fields`.
    """

    year: int
    month: int  # 0-11
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0


def is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


# 0-indexed days per month
_MONTHDAYS = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
_DAYS_BEFORE_MONTH = [sum(_MONTHDAYS[:m]) for m in range(12)]


def days_in_month(year: int, month: int) -> int:
    return _MONTHDAYS[month] + (month == 1 and is_leap(year))


def clamp_day(year: int, month: int, day: int) -> int:
    return min(day, days_in_month(year, month))


def add_months(year: int, month: int, months: int) -> tuple[int, int]:
    """Shift a (year, month) pair, normalizing month overflow in both
    directions. The resulting month is always in 0-11."""
    return divmod(year * 12 + month + months, 12)


def _days_before_year(year: int) -> int:
    y = year - 1
    return y * 365 + y // 4 - y // 100 + y // 400


def _days_before_month(year: int, month: int) -> int:
    return _DAYS_BEFORE_MONTH[month] + (month > 1 and is_leap(year))


_EPOCH_DAYS = _days_before_year(1970)
_DI400Y = _days_before_year(401)
_DI100Y = _days_before_year(101)
_DI4Y = _days_before_year(5)


def _civil_from_days(days: int) -> tuple[int, int, int]:
    # The leap year pattern repeats every 400 years. Find the enclosing
    # 400-year cycle, then narrow down on centuries, 4-year cycles and years.
    # Floor division keeps this correct for days before the epoch too.
    n400, n = divmod(days + _EPOCH_DAYS, _DI400Y)
    n100, n = divmod(n, _DI100Y)
    n4, n = divmod(n, _DI4Y)
    n1, n = divmod(n, 365)
    year = n400 * 400 + 1 + n100 * 100 + n4 * 4 + n1
    if n1 == 4 or n100 == 4:
        # the last day of a leap year closing a 4- or 400-year cycle
        return year - 1, 11, 31

    month = 0
    while month < 11 and n >= _days_before_month(year, month + 1):
        month += 1
    return year, month, n - _days_before_month(year, month) + 1


def to_local_fields(instant: Millis, offset_secs: int) -> LocalFields:
    """Decompose an instant into the wall clock fields at the given offset"""
    days, ms_of_day = divmod(instant + offset_secs * MS_PER_SECOND, MS_PER_DAY)
    year, month, day = _civil_from_days(days)
    hour, secs = divmod(ms_of_day // MS_PER_SECOND, 3600)
    minute, second = divmod(secs, 60)
    return LocalFields(year, month, day, hour, minute, second)


def from_local_fields(fields: LocalFields) -> Millis:
    """Convert wall clock fields to milliseconds, as if they were UTC.

    The caller subtracts the intended offset to obtain the real instant.
    Month overflow is normalized into the year; day, hour, minute and
    second overflow simply carry into the next larger unit.
    """
    year, month = add_months(fields.year, fields.month, 0)
    days = (
        _days_before_year(year)
        - _EPOCH_DAYS
        + _days_before_month(year, month)
        + fields.day
        - 1
    )
    return (
        ((days * 24 + fields.hour) * 60 + fields.minute) * 60 + fields.second
    ) * MS_PER_SECOND


def day_of_week(instant: Millis, offset_secs: int) -> int:
    """0 is Sunday, 6 is Saturday"""
    days = (instant + offset_secs * MS_PER_SECOND) // MS_PER_DAY
    # 1970-01-01 was a Thursday
    return (days + 4) % 7
