from contextlib import contextmanager
from datetime import datetime, timezone

from datetz import set_catalog


class AlwaysEqual:
    def __eq__(self, _):
        return True


class NeverEqual:
    def __eq__(self, _):
        return False


class AlwaysLarger:
    def __lt__(self, _):
        return False

    def __le__(self, _):
        return False

    def __gt__(self, _):
        return True

    def __ge__(self, _):
        return True


class AlwaysSmaller:
    def __lt__(self, _):
        return True

    def __le__(self, _):
        return True

    def __gt__(self, _):
        return False

    def __ge__(self, _):
        return False


def utc_ms(
    year: int, month: int, day: int, hour: int = 0, minute: int = 0
) -> int:
    """Milliseconds since the epoch for a UTC wall time (1-based month)"""
    return (
        int(
            datetime(
                year, month, day, hour, minute, tzinfo=timezone.utc
            ).timestamp()
        )
        * 1000
    )


# 2021-01-01 00:00 UTC, a Friday
BASE_TIMESTAMP = utc_ms(2021, 1, 1)


@contextmanager
def catalog(entries):
    try:
        set_catalog(entries)
        yield
    finally:
        set_catalog()  # don't forget to restore the bundled catalog!
