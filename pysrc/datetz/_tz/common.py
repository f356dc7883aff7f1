from typing import Literal, NamedTuple

# Which occurrence wins when a local time is ambiguous or skipped
Disambiguate = Literal["dst", "standard"]


class TimezoneOffset(NamedTuple):
    """The two UTC offsets (in seconds) a zone switches between"""

    sdt: int
    dst: int

    @property
    def observes_dst(self) -> bool:
        return self.sdt != self.dst


class OffsetInfo(NamedTuple):
    """The UTC offset (in seconds) in effect at an instant"""

    offset_secs: int
    is_dst: bool
