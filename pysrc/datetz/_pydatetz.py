# The MIT License (MIT)
#
# Copyright (c) Arie Bovenberg
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Maintainer's notes:
#
# - DateTz is mutable: arithmetic and conversion methods change the
#   instance and return it, so calls can be chained. Use ``clone()`` first
#   where value semantics are needed.
# - All writes of the timestamp go through ``_set_instant()``, which truncates
#   to the minute and drops the offset cache.
# - Calendar arithmetic never adds milliseconds for months or years. It edits
#   the local fields and resolves them again, using the same code path as
#   parsing. That way DST gaps and overlaps are handled identically.
from __future__ import annotations

__version__ = "0.1.0"

import math
from datetime import datetime as _datetime, timedelta as _timedelta
from functools import lru_cache
from numbers import Real
from struct import pack, unpack
from time import time_ns
from typing import (
    Any,
    ClassVar,
    Literal,
    Mapping,
    NamedTuple,
    Optional,
    Union,
    no_type_check,
)
from zoneinfo import ZoneInfo

from ._common import (
    EPOCH,
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    MS_PER_WEEK,
    UTC,
    Millis,
    floor_to_minute,
    format_offset,
    mk_fixed_tzinfo,
)
from ._math import (
    LocalFields,
    add_months,
    clamp_day,
    day_of_week,
    to_local_fields,
)
from ._pattern import (
    MissingMeridiem,
    ParseError,
    PatternMismatch,
    UnconsumedInput,
    UnsupportedToken,
    format_fields,
    parse_fields,
    tokenize,
)
from ._tz import (
    Disambiguate,
    OffsetInfo,
    TimezoneCatalog,
    TimezoneOffset,
    UnknownTimezone,
    available_timezones,
    get_catalog,
    lookup,
    resolve_local,
    resolve_offset,
    set_catalog,
)

__all__ = [
    # The main class
    "DateTz",
    # Helpers accepting any DateTz-like value
    "compare",
    "diff",
    "is_before",
    "is_after",
    "is_same",
    "is_same_or_before",
    "is_same_or_after",
    "is_between",
    # Timezone catalog
    "TimezoneCatalog",
    "TimezoneOffset",
    "OffsetInfo",
    "available_timezones",
    "get_catalog",
    "set_catalog",
    # Exceptions
    "UnknownTimezone",
    "IncomparableTimezones",
    "InvalidRange",
    "InvalidInclusivityToken",
    "UnsupportedUnit",
    "UnsupportedGranularity",
    "ParseError",
    "MissingMeridiem",
    "PatternMismatch",
    "UnconsumedInput",
    "UnsupportedToken",
]

Unit = Literal[
    "millisecond",
    "second",
    "minute",
    "hour",
    "day",
    "week",
    "month",
    "year",
]
Granularity = Literal["minute", "hour", "day", "week", "month", "year"]
Inclusivity = Literal["()", "(]", "[)", "[]"]


class IncomparableTimezones(ValueError):
    """Two values can't be compared because their timezones differ"""

    @classmethod
    def _for_keys(cls, a: str, b: str) -> IncomparableTimezones:
        return cls(
            "Cannot compare dates with different timezones "
            f"({a!r} and {b!r})"
        )


class InvalidRange(ValueError):
    """The start of a range lies after its end"""


class InvalidInclusivityToken(ValueError):
    """Inclusivity must be one of ``()``, ``(]``, ``[)`` or ``[]``"""


class UnsupportedUnit(ValueError):
    """The unit isn't recognized, or not supported by the operation"""


class UnsupportedGranularity(UnsupportedUnit):
    """The unit is too fine-grained to truncate to"""


_UNIT_ALIASES: dict[str, Unit] = {
    "ms": "millisecond",
    "millisecond": "millisecond",
    "milliseconds": "millisecond",
    "s": "second",
    "sec": "second",
    "second": "second",
    "seconds": "second",
    "m": "minute",
    "min": "minute",
    "minute": "minute",
    "minutes": "minute",
    "h": "hour",
    "hr": "hour",
    "hour": "hour",
    "hours": "hour",
    "d": "day",
    "day": "day",
    "days": "day",
    "w": "week",
    "wk": "week",
    "week": "week",
    "weeks": "week",
    "mon": "month",
    "month": "month",
    "months": "month",
    "y": "year",
    "yr": "year",
    "year": "year",
    "years": "year",
}

# Keyword arguments accepted by plus() and minus()
_DURATION_UNITS: dict[str, Unit] = {
    name: unit  # type: ignore[misc]
    for unit in ("minute", "hour", "day", "week", "month", "year")
    for name in (unit, unit + "s")
}

_UNIT_MS: dict[str, int] = {
    "millisecond": 1,
    "second": MS_PER_SECOND,
    "minute": MS_PER_MINUTE,
    "hour": MS_PER_HOUR,
    "day": MS_PER_DAY,
    "week": MS_PER_WEEK,
}

_SUBMINUTE = ("millisecond", "second")


def _normalize_unit(unit: str | None) -> Unit:
    if not unit:
        return "millisecond"
    # "M" is the only case-sensitive alias, "m" being minutes
    if unit == "M":
        return "month"
    try:
        return _UNIT_ALIASES[unit.lower()]
    except (KeyError, AttributeError):
        raise UnsupportedUnit(f"Unsupported unit: {unit}") from None


def _normalize_granularity(unit: str | None) -> Granularity:
    normalized = _normalize_unit(unit)
    if normalized in _SUBMINUTE:
        raise UnsupportedGranularity(f"Unsupported granularity: {unit}")
    return normalized  # type: ignore[return-value]


def _normalize_shift_unit(unit: str) -> Unit:
    normalized = _normalize_unit(unit)
    if normalized in _SUBMINUTE:
        raise UnsupportedUnit(f"Unsupported unit: {unit}")
    return normalized


def _normalize_inclusivity(token: object) -> tuple[bool, bool]:
    if (
        not isinstance(token, str)
        or len(token) != 2
        or token[0] not in "(["
        or token[1] not in ")]"
    ):
        raise InvalidInclusivityToken(f"Invalid inclusivity token: {token!r}")
    return token[0] == "[", token[1] == "]"


def _round_diff(value: float, as_float: bool) -> float:
    # truncate toward zero: a partial unit never counts as elapsed
    return value if as_float else math.trunc(value)


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


# The two kinds of input that can become a DateTz. Anything else is rejected
# by _classify(), the single place where the shape of an input is inspected.
class _FromInstant(NamedTuple):
    timestamp: float


class _FromSerialized(NamedTuple):
    timestamp: float
    tz: Optional[str]


_Input = Union[_FromInstant, _FromSerialized]


def _classify(value: object) -> _Input | None:
    if isinstance(value, DateTz):
        return _FromSerialized(value._timestamp, value._tz)
    elif _is_number(value):
        return _FromInstant(value)  # type: ignore[arg-type]
    elif isinstance(value, Mapping):
        timestamp = value.get("timestamp")
        tz = value.get("timezone")
    else:
        timestamp = getattr(value, "timestamp", None)
        tz = getattr(value, "timezone", None)
    if not _is_number(timestamp):
        return None
    return _FromSerialized(timestamp, tz if isinstance(tz, str) else None)  # type: ignore[arg-type]


def _resolve_input(inp: _Input, tz: str | None) -> tuple[float, str]:
    if isinstance(inp, _FromSerialized) and inp.tz is not None:
        return inp.timestamp, inp.tz
    return inp.timestamp, tz or "UTC"


_object_new = object.__new__
_DEFAULT_PATTERN = "YYYY-MM-DD HH:mm:ss"
# Patterns are usually literals, reused many times
_tokenize = lru_cache(maxsize=128)(tokenize)
_REPR_SEGMENTS = _tokenize(_DEFAULT_PATTERN)
_MS = _timedelta(milliseconds=1)

DateTzLike = Union["DateTz", Mapping[str, Any], int, float]


class DateTz:
    """An instant, truncated to the minute, observed in a specific timezone.

    Example
    -------
    >>> d = DateTz(1609459200000, "Europe/Rome")
    DateTz(2021-01-01 01:00:00+01:00[Europe/Rome])
    >>> d.add(1, "month").format("DD/MM/YYYY HH:mm tz")
    '01/02/2021 01:00 Europe/Rome'

    The value can be created from a millisecond timestamp, another
    ``DateTz``, or any mapping or object with a numeric ``timestamp``
    and (optionally) a ``timezone``:

    >>> DateTz({"timestamp": 1609459200000, "timezone": "UTC"})
    DateTz(2021-01-01 00:00:00+00:00[UTC])

    Important
    ---------
    Arithmetic and conversion methods modify the instance in place and return
    it, so they can be chained. Use ``clone()`` first if you need to keep
    the original:

    >>> later = d.clone().add(2, "hour")

    Seconds and milliseconds are always discarded. The timezone must be
    present in the active catalog (see :func:`set_catalog`), otherwise
    :class:`UnknownTimezone` is raised.
    """

    __slots__ = ("_timestamp", "_tz", "_offset_cache")

    default_format: ClassVar[str] = _DEFAULT_PATTERN
    """The pattern used by ``format()``, ``parse()`` and ``str()``
    if none is given"""

    _timestamp: Millis
    _tz: str
    _offset_cache: tuple[Millis, OffsetInfo] | None

    def __init__(self, value: DateTzLike, /, tz: str | None = None) -> None:
        if (inp := _classify(value)) is None:
            raise TypeError(
                "Expected a timestamp in milliseconds, a DateTz, "
                f"or an object with a numeric 'timestamp', got {value!r}"
            )
        timestamp, key = _resolve_input(inp, tz)
        lookup(key)
        self._timestamp = floor_to_minute(timestamp)
        self._tz = key
        self._offset_cache = None

    @classmethod
    def _from_unchecked(cls, timestamp: Millis, tz: str, /) -> DateTz:
        self = _object_new(cls)
        self._timestamp = timestamp
        self._tz = tz
        self._offset_cache = None
        return self

    @classmethod
    def now(cls, tz: str = "UTC", /) -> DateTz:
        """The current time in the given timezone"""
        lookup(tz)
        return cls._from_unchecked(floor_to_minute(time_ns() // 1_000_000), tz)

    @classmethod
    def parse(
        cls,
        s: str,
        /,
        pattern: str | None = None,
        tz: str | None = None,
        *,
        disambiguate: Disambiguate = "dst",
    ) -> DateTz:
        """Parse a string according to a pattern.

        If the pattern contains a ``tz`` token, the timezone read from the
        string is used; otherwise ``tz`` (or UTC).

        Example
        -------
        >>> DateTz.parse("05/01/2021 6:30 pm", "DD/MM/YYYY hh:mm aa", "Europe/Rome")
        Traceback (most recent call last):
          ...
        PatternMismatch: Failed to parse date string: ...
        >>> DateTz.parse("05/01/2021 06:30 pm", "DD/MM/YYYY hh:mm aa", "Europe/Rome")
        DateTz(2021-01-05 18:30:00+01:00[Europe/Rome])

        Attention
        ---------
        A local time that is skipped (DST gap) resolves to the first valid
        time after the gap. A local time that occurs twice (DST overlap)
        resolves to the daylight occurrence, unless
        ``disambiguate="standard"``.
        """
        parsed = parse_fields(s, _tokenize(pattern or cls.default_format))
        key = parsed.tz or tz or "UTC"
        lookup(key)
        return cls._from_unchecked(
            resolve_local(parsed.fields, key, disambiguate), key
        )

    @classmethod
    def from_py_datetime(cls, d: _datetime, /, tz: str | None = None) -> DateTz:
        """Create an instance from a standard library ``datetime``.

        Naive datetimes are taken to be UTC. Unless ``tz`` is given, the
        key of a ``ZoneInfo`` tzinfo is used as timezone, or UTC otherwise.
        """
        if d.tzinfo is None:
            d = d.replace(tzinfo=UTC)
        if tz is None:
            tz = d.tzinfo.key if isinstance(d.tzinfo, ZoneInfo) else "UTC"
        lookup(tz)
        return cls._from_unchecked(floor_to_minute((d - EPOCH) // _MS), tz)

    @classmethod
    def from_value(cls, value: object, /, tz: str | None = None) -> DateTz:
        """Coerce a ``DateTz``, ``datetime``, timestamp or serialized mapping.

        Existing ``DateTz`` instances are returned as-is.
        """
        if isinstance(value, DateTz):
            return value
        elif isinstance(value, _datetime):
            return cls.from_py_datetime(value, tz)
        elif (inp := _classify(value)) is None:
            raise TypeError("Unable to coerce value into a DateTz instance")
        return cls(*_resolve_input(inp, tz))

    @classmethod
    def hydrate(cls, value: Any, /, tz: str | None = None) -> DateTz | None:
        """Turn a serialized value back into a ``DateTz``.

        ``None`` is passed through, so optional fields can be hydrated
        without checking first.
        """
        if value is None or isinstance(value, DateTz):
            return value
        inp = _classify(value)
        if not isinstance(inp, _FromSerialized):
            raise TypeError(
                "DateTz.hydrate expects an object with a numeric 'timestamp'"
            )
        return cls(*_resolve_input(inp, tz))

    @classmethod
    def maybe_hydrate(cls, value: Any, /, tz: str | None = None) -> DateTz | None:
        """Like ``hydrate()``, but returns ``None`` for anything that doesn't
        look like a serialized value"""
        if isinstance(_classify(value), _FromSerialized):
            return cls.hydrate(value, tz)
        return None

    @staticmethod
    def is_serialized(value: object, /) -> bool:
        """Whether the value is a mapping in the serialized form, with a
        timezone from the catalog"""
        return (
            isinstance(value, Mapping)
            and type(value.get("timestamp")) is int
            and isinstance(tz := value.get("timezone"), str)
            and tz in get_catalog()
        )

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    @property
    def timestamp(self) -> Millis:
        """Milliseconds since the epoch, always a whole number of minutes"""
        return self._timestamp

    @property
    def timezone(self) -> str:
        return self._tz

    @property
    def timezone_offset(self) -> TimezoneOffset:
        """The standard and daylight offsets of the timezone, in seconds"""
        return lookup(self._tz)

    @property
    def is_dst(self) -> bool:
        return self._offset_info().is_dst

    @property
    def year(self) -> int:
        return self._local_fields().year

    @property
    def month(self) -> int:
        """The month, **0-based** (January is 0)"""
        return self._local_fields().month

    @property
    def day(self) -> int:
        return self._local_fields().day

    @property
    def hour(self) -> int:
        return self._local_fields().hour

    @property
    def minute(self) -> int:
        return self._local_fields().minute

    @property
    def day_of_week(self) -> int:
        """0 is Sunday, 6 is Saturday"""
        return day_of_week(self._timestamp, self._offset_info().offset_secs)

    def _offset_info(self) -> OffsetInfo:
        cache = self._offset_cache
        if cache is not None and cache[0] == self._timestamp:
            return cache[1]
        info = resolve_offset(self._tz, self._timestamp)
        self._offset_cache = (self._timestamp, info)
        return info

    def _local_fields(self) -> LocalFields:
        return to_local_fields(self._timestamp, self._offset_info().offset_secs)

    def format(self, pattern: str | None = None, /, locale: str = "en") -> str:
        """Format according to a pattern.

        Tokens: ``YYYY`` (or ``yyyy``), ``YY`` (or ``yy``), ``MM``,
        ``LM`` (month name in ``locale``), ``DD``, ``HH``, ``hh``, ``mm``,
        ``ss``, ``aa``/``AA`` (am/pm, AM/PM), and ``tz`` (the timezone ID).
        Text in square brackets is output as-is.

        Example
        -------
        >>> DateTz(1609459200000).format("LM DD, YYYY hh:mm aa")
        'January 01, 2021 12:00 am'
        >>> DateTz(1609459200000).format("YYYY[ @ ]MM")
        '2021 @ 01'
        """
        return format_fields(
            _tokenize(pattern or self.default_format),
            self._local_fields(),
            self._tz,
            locale,
        )

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return (
            f"DateTz({format_fields(_REPR_SEGMENTS, self._local_fields(), self._tz)}"
            f"{format_offset(self._offset_info().offset_secs)}[{self._tz}])"
        )

    def to_datetime(self) -> _datetime:
        """Convert to a standard library ``datetime`` in UTC"""
        return EPOCH + _timedelta(milliseconds=self._timestamp)

    def py_datetime(self) -> _datetime:
        """Convert to a standard library ``datetime`` with a fixed offset
        equal to the current UTC offset"""
        return (EPOCH + _timedelta(milliseconds=self._timestamp)).astimezone(
            mk_fixed_tzinfo(self._offset_info().offset_secs)
        )

    def to_iso(self) -> str:
        """The instant in UTC, e.g. ``2021-01-01T00:00:00.000Z``"""
        f = to_local_fields(self._timestamp, 0)
        return (
            f"{f.year:04d}-{f.month + 1:02d}-{f.day:02d}"
            f"T{f.hour:02d}:{f.minute:02d}:{f.second:02d}.000Z"
        )

    def to_unix(self) -> int:
        """Seconds since the epoch"""
        return self._timestamp // MS_PER_SECOND

    def to_dict(self) -> dict[str, Any]:
        """The serialized form, accepted by the constructor and ``hydrate()``"""
        return {"timestamp": self._timestamp, "timezone": self._tz}

    def __int__(self) -> int:
        return self._timestamp

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def _as_comparable(self, other: DateTzLike) -> DateTz:
        if isinstance(other, DateTz):
            return other
        if (inp := _classify(other)) is None:
            raise TypeError(f"Cannot compare DateTz with {other!r}")
        return DateTz(*_resolve_input(inp, self._tz))

    def _ensure_comparable(self, other: DateTzLike) -> DateTz:
        instance = self._as_comparable(other)
        if instance._tz != self._tz:
            raise IncomparableTimezones._for_keys(self._tz, instance._tz)
        return instance

    def is_comparable(self, other: DateTzLike) -> bool:
        """Whether ``other`` has the same timezone.

        Serialized values without a timezone are assumed to share ours.
        """
        return self._as_comparable(other)._tz == self._tz

    def compare(self, other: DateTzLike) -> int:
        """The difference in milliseconds: negative if ``self`` is earlier.

        Raises :class:`IncomparableTimezones` if the timezones differ,
        even if the instants are the same.
        """
        return self._timestamp - self._ensure_comparable(other)._timestamp

    def _compare_at(self, other: DateTz, unit: Unit) -> int:
        if unit in _SUBMINUTE:
            return self._timestamp - other._timestamp
        return (
            self.clone().start_of(unit)._timestamp
            - other.clone().start_of(unit)._timestamp
        )

    def _compare_with_unit(self, other: DateTzLike, unit: str) -> int:
        comparable = self._ensure_comparable(other)
        return self._compare_at(comparable, _normalize_unit(unit))

    def is_before(self, other: DateTzLike, unit: str = "millisecond") -> bool:
        return self._compare_with_unit(other, unit) < 0

    def is_after(self, other: DateTzLike, unit: str = "millisecond") -> bool:
        return self._compare_with_unit(other, unit) > 0

    def is_same(self, other: DateTzLike, unit: str = "millisecond") -> bool:
        """Whether both fall in the same ``unit``, e.g. the same hour"""
        return self._compare_with_unit(other, unit) == 0

    def is_same_or_before(
        self, other: DateTzLike, unit: str = "millisecond"
    ) -> bool:
        return self._compare_with_unit(other, unit) <= 0

    def is_same_or_after(
        self, other: DateTzLike, unit: str = "millisecond"
    ) -> bool:
        return self._compare_with_unit(other, unit) >= 0

    def is_between(
        self,
        start: DateTzLike,
        end: DateTzLike,
        unit: str = "millisecond",
        inclusivity: Inclusivity = "()",
    ) -> bool:
        """Whether this value lies between ``start`` and ``end``.

        ``inclusivity`` follows interval notation: ``[`` and ``]`` include
        the bound, ``(`` and ``)`` exclude it.

        Example
        -------
        >>> start = DateTz(1609459200000)
        >>> start.is_between(start, start.clone().add(1, "day"))
        False
        >>> start.is_between(start, start.clone().add(1, "day"), "minute", "[)")
        True
        """
        lower_inclusive, upper_inclusive = _normalize_inclusivity(inclusivity)
        normalized = _normalize_unit(unit)
        range_start = self._ensure_comparable(start)
        range_end = self._ensure_comparable(end)
        if range_start._timestamp > range_end._timestamp:
            raise InvalidRange("Start date must be before end date")
        lower = self._compare_at(range_start, normalized)
        upper = self._compare_at(range_end, normalized)
        return (lower >= 0 if lower_inclusive else lower > 0) and (
            upper <= 0 if upper_inclusive else upper < 0
        )

    def diff(
        self,
        other: DateTzLike,
        unit: str = "millisecond",
        as_float: bool = False,
    ) -> float:
        """The difference ``self - other``, expressed in ``unit``.

        Whole units are returned (truncated toward zero) unless ``as_float``
        is set. Months and years count calendar months: Jan 31 to Feb 28 is
        one whole month.

        Note
        ----
        Month and year differences walk one month at a time, so their cost
        grows linearly with the number of months between the two values.
        """
        normalized = _normalize_unit(unit)
        comparable = self._ensure_comparable(other)
        if normalized == "month":
            value = self._diff_in_months(comparable, as_float)
        elif normalized == "year":
            value = self._diff_in_months(comparable, as_float) / 12
        else:
            value = (
                self._timestamp - comparable._timestamp
            ) / _UNIT_MS[normalized]
        return _round_diff(value, as_float)

    def _diff_in_months(self, other: DateTz, as_float: bool) -> float:
        forward = self._timestamp >= other._timestamp
        earlier, later = (other, self) if forward else (self, other)

        months = 0
        anchor = earlier.clone()
        nxt = anchor.clone().add(1, "month")
        while nxt._timestamp <= later._timestamp:
            anchor = nxt
            months += 1
            nxt = anchor.clone().add(1, "month")

        value: float = months
        if as_float:
            span = nxt._timestamp - anchor._timestamp
            if span:
                value += (later._timestamp - anchor._timestamp) / span
        return value if forward else -value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateTz):
            return NotImplemented
        return self._timestamp == other._timestamp and self._tz == other._tz

    # Instances are mutable, so they can't be hashed
    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: DateTz) -> bool:
        if not isinstance(other, DateTz):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: DateTz) -> bool:
        if not isinstance(other, DateTz):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: DateTz) -> bool:
        if not isinstance(other, DateTz):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: DateTz) -> bool:
        if not isinstance(other, DateTz):
            return NotImplemented
        return self.compare(other) >= 0

    # ------------------------------------------------------------------
    # Arithmetic (mutating)
    # ------------------------------------------------------------------

    def _set_instant(self, timestamp: float) -> None:
        self._timestamp = floor_to_minute(timestamp)
        self._offset_cache = None

    def _set_from_local_fields(self, f: LocalFields) -> None:
        self._set_instant(
            resolve_local(
                f._replace(day=clamp_day(f.year, f.month, f.day)), self._tz
            )
        )

    def _shift(self, unit: Unit, value: int) -> None:
        if not value:
            return
        if unit == "month" or unit == "year":
            self._shift_calendar(unit, value)
        else:
            self._set_instant(self._timestamp + value * _UNIT_MS[unit])

    def _shift_calendar(self, unit: Unit, value: int) -> None:
        f = self._local_fields()
        if unit == "year":
            year, month = f.year + value, f.month
        else:
            year, month = add_months(f.year, f.month, value)
        self._set_from_local_fields(f._replace(year=year, month=month))

    def add(self, value: int, unit: str) -> DateTz:
        """Add an amount of the given unit (minute up to year).

        Minutes, hours, days and weeks are exact durations. Months and years
        are calendar units: the day of month is kept, or clamped to the last
        day of a shorter month.

        >>> d = DateTz.parse("2021-01-31 10:00:00")
        >>> d.add(1, "month")
        DateTz(2021-02-28 10:00:00+00:00[UTC])
        """
        self._shift(_normalize_shift_unit(unit), value)
        return self

    def subtract(self, value: int, unit: str) -> DateTz:
        """The inverse of ``add()``"""
        self._shift(_normalize_shift_unit(unit), -value)
        return self

    def plus(self, **duration: int) -> DateTz:
        """Add several units at once, e.g. ``plus(days=2, hours=3)``.

        Units are applied in the order given.
        """
        shifts = []
        for key, value in duration.items():
            try:
                unit = _DURATION_UNITS[key]
            except KeyError:
                raise UnsupportedUnit(
                    f"Unsupported duration unit: {key}"
                ) from None
            shifts.append((unit, value))
        for unit, value in shifts:
            self._shift(unit, value)
        return self

    def minus(self, **duration: int) -> DateTz:
        return self.plus(**{k: -v for k, v in duration.items()})

    def set(self, value: int, unit: str) -> DateTz:
        """Set a local field: year, month (1-based), day, hour or minute.

        The day is clamped to the length of the month, the hour to 0-23 and
        the minute to 0-59.

        >>> DateTz.parse("2021-01-31 10:00:00").set(4, "month")
        DateTz(2021-04-30 10:00:00+00:00[UTC])
        """
        normalized = _normalize_unit(unit)
        f = self._local_fields()
        if normalized == "year":
            f = f._replace(year=value)
        elif normalized == "month":
            year, month = add_months(f.year, value - 1, 0)
            f = f._replace(year=year, month=month)
        elif normalized == "day":
            f = f._replace(day=value)
        elif normalized == "hour":
            f = f._replace(hour=value)
        elif normalized == "minute":
            f = f._replace(minute=value)
        else:
            raise UnsupportedUnit(f"Unsupported unit: {unit}")
        self._set_from_local_fields(
            f._replace(
                hour=max(0, min(23, f.hour)),
                minute=max(0, min(59, f.minute)),
                second=0,
            )
        )
        return self

    def start_of(self, unit: str) -> DateTz:
        """Move to the start of the current minute, hour, day, week, month
        or year. Weeks start on Sunday."""
        granularity = _normalize_granularity(unit)
        if granularity == "week":
            self.start_of("day")
            if dow := self.day_of_week:
                self._shift("day", -dow)
                self.start_of("day")
            return self

        # Minutes and hours work on the instant instead of rebuilding from
        # local fields, so the standard occurrence in an overlap keeps its
        # offset rather than snapping to the daylight one.
        if granularity == "minute":
            return self
        f = self._local_fields()._replace(second=0)
        if granularity == "hour":
            self._set_instant(self._timestamp - f.minute * MS_PER_MINUTE)
            return self
        elif granularity == "day":
            f = f._replace(hour=0, minute=0)
        elif granularity == "month":
            f = f._replace(day=1, hour=0, minute=0)
        elif granularity == "year":
            f = f._replace(month=0, day=1, hour=0, minute=0)
        self._set_from_local_fields(f)
        return self

    def end_of(self, unit: str) -> DateTz:
        """Move to the last minute of the current hour, day, week, month
        or year.

        >>> DateTz.parse("2021-02-10 10:00:00").end_of("month")
        DateTz(2021-02-28 23:59:00+00:00[UTC])
        """
        granularity = _normalize_granularity(unit)
        if granularity == "minute":
            return self
        self.start_of(granularity)
        if granularity == "day" or granularity == "week":
            # next midnight on the calendar, so DST days keep 23 or 25 hours
            f = self._local_fields()
            step = 1 if granularity == "day" else 7
            self._set_instant(
                resolve_local(f._replace(day=f.day + step), self._tz)
            )
        else:
            self._shift(granularity, 1)
        self._shift("minute", -1)
        return self

    # ------------------------------------------------------------------
    # Timezones and copies
    # ------------------------------------------------------------------

    def convert_to_timezone(self, tz: str) -> DateTz:
        """Observe the same instant in another timezone (in place)"""
        lookup(tz)
        self._tz = tz
        self._offset_cache = None
        return self

    def clone_to_timezone(self, tz: str) -> DateTz:
        """Like ``convert_to_timezone()``, but on a copy"""
        lookup(tz)
        return self._from_unchecked(self._timestamp, tz)

    def clone(self) -> DateTz:
        return self._from_unchecked(self._timestamp, self._tz)

    @no_type_check
    def __copy__(self):
        return self.clone()

    @no_type_check
    def __deepcopy__(self, _):
        return self.clone()

    # a custom pickle implementation with a smaller payload
    def __reduce__(self) -> tuple[object, ...]:
        return _unpkl_datetz, (pack("<q", self._timestamp), self._tz)


# A separate unpickle function allows us to make backwards-compatible changes
# to the pickling format in the future
@no_type_check
def _unpkl_datetz(data: bytes, tz: str) -> DateTz:
    lookup(tz)
    return DateTz._from_unchecked(*unpack("<q", data), tz)


def _coerce(value: object, fallback_tz: str | None = None) -> DateTz:
    if isinstance(value, DateTz):
        return value
    if (inp := _classify(value)) is None:
        raise TypeError("Unable to coerce value into a DateTz instance")
    return DateTz(*_resolve_input(inp, fallback_tz))


def compare(left: DateTzLike, right: DateTzLike) -> int:
    """Compare two DateTz-like values. A timezone missing from ``right``
    defaults to that of ``left``."""
    first = _coerce(left)
    return first.compare(_coerce(right, first.timezone))


def diff(
    left: DateTzLike,
    right: DateTzLike,
    unit: str = "millisecond",
    as_float: bool = False,
) -> float:
    first = _coerce(left)
    return first.diff(_coerce(right, first.timezone), unit, as_float)


def is_before(
    left: DateTzLike, right: DateTzLike, unit: str = "millisecond"
) -> bool:
    first = _coerce(left)
    return first.is_before(_coerce(right, first.timezone), unit)


def is_after(
    left: DateTzLike, right: DateTzLike, unit: str = "millisecond"
) -> bool:
    first = _coerce(left)
    return first.is_after(_coerce(right, first.timezone), unit)


def is_same(
    left: DateTzLike, right: DateTzLike, unit: str = "millisecond"
) -> bool:
    first = _coerce(left)
    return first.is_same(_coerce(right, first.timezone), unit)


def is_same_or_before(
    left: DateTzLike, right: DateTzLike, unit: str = "millisecond"
) -> bool:
    first = _coerce(left)
    return first.is_same_or_before(_coerce(right, first.timezone), unit)


def is_same_or_after(
    left: DateTzLike, right: DateTzLike, unit: str = "millisecond"
) -> bool:
    first = _coerce(left)
    return first.is_same_or_after(_coerce(right, first.timezone), unit)


def is_between(
    value: DateTzLike,
    start: DateTzLike,
    end: DateTzLike,
    unit: str = "millisecond",
    inclusivity: Inclusivity = "()",
) -> bool:
    target = _coerce(value)
    return target.is_between(
        _coerce(start, target.timezone),
        _coerce(end, target.timezone),
        unit,
        inclusivity,
    )


# We expose the public members in the root of the module.
# For clarity, we remove the "_pydatetz" part from the names,
# since this is an implementation detail.
for name in __all__:
    member = locals()[name]
    if getattr(member, "__module__", None) == __name__:
        member.__module__ = "datetz"

# clear up loop variables so they don't leak into the namespace
del name
del member

_unpkl_datetz.__module__ = "datetz"


def _patch_time_frozen(timestamp: Millis) -> None:
    global time_ns

    def time_ns() -> int:
        return timestamp * 1_000_000


def _patch_time_keep_ticking(timestamp: Millis) -> None:
    global time_ns

    _patched_at = time_ns()
    _time_ns = time_ns

    def time_ns() -> int:
        return timestamp * 1_000_000 + _time_ns() - _patched_at


def _unpatch_time() -> None:
    global time_ns

    from time import time_ns
