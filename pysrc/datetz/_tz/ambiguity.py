"""Resolve wall clock fields in a zone to a single instant.

A local time may occur once, twice (an overlap, when clocks are set back)
or not at all (a gap, when clocks spring forward). The catalog gives us the
two offsets a zone switches between, so there are at most two candidate
instants. Each candidate is checked by converting it back to local time:

- a candidate that lands on the requested local time is an exact match.
  In an overlap both candidates match.
- a candidate that lands *after* the requested time means the time was
  skipped. The nearest such candidate is the first valid instant after
  the gap.
- a candidate that lands *before* the requested time is a last resort.

Ties are broken by a policy. The default (``"dst"``) favours the daylight
occurrence: in an overlap this is the earlier of the two instants.
This is a convention, not a law of nature, so ``"standard"`` is available
to mirror every tie-break.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from .._common import MS_PER_SECOND, Millis, floor_to_minute
from .._math import LocalFields, from_local_fields
from .catalog import lookup
from .common import Disambiguate
from .resolver import resolve_offset

__all__ = ["resolve_local"]


class _Candidate(NamedTuple):
    instant: Millis
    delta: int  # landed local time minus requested local time (ms)
    is_dst: bool


def _prefers(
    new: _Candidate, current: Optional[_Candidate], prefer_dst: bool
) -> bool:
    if current is None or abs(new.delta) < abs(current.delta):
        return True
    return (
        new.delta == current.delta
        and new.is_dst == prefer_dst
        and current.is_dst != prefer_dst
    )


def resolve_local(
    fields: LocalFields, key: str, disambiguate: Disambiguate = "dst"
) -> Millis:
    """The instant at which the wall clock in the given zone shows
    ``fields``, truncated to the minute."""
    if disambiguate not in ("dst", "standard"):
        raise ValueError("disambiguate must be 'dst' or 'standard'")
    entry = lookup(key)
    local_as_utc = from_local_fields(fields)
    if not entry.observes_dst:
        return floor_to_minute(local_as_utc - entry.sdt * MS_PER_SECOND)

    prefer_dst = disambiguate == "dst"
    target = from_local_fields(fields._replace(second=0))
    exact: list[_Candidate] = []
    after: Optional[_Candidate] = None
    before: Optional[_Candidate] = None

    for offset_secs in (entry.sdt, entry.dst):
        instant = floor_to_minute(local_as_utc - offset_secs * MS_PER_SECOND)
        landed = resolve_offset(key, instant)
        candidate = _Candidate(
            instant,
            floor_to_minute(instant + landed.offset_secs * MS_PER_SECOND)
            - target,
            landed.is_dst,
        )
        if candidate.delta == 0:
            exact.append(candidate)
        elif candidate.delta > 0:
            if _prefers(candidate, after, prefer_dst):
                after = candidate
        elif _prefers(candidate, before, prefer_dst):
            before = candidate

    if exact:
        exact.sort(key=lambda c: c.is_dst != prefer_dst)
        return exact[0].instant
    elif after is not None:
        return after.instant
    elif before is not None:
        return before.instant
    return floor_to_minute(local_as_utc - entry.sdt * MS_PER_SECOND)  # pragma: no cover
