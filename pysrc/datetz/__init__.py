from __future__ import annotations

from ._pydatetz import *
from ._pydatetz import (  # for the docs
    __all__,
    _patch_time_frozen,
    _patch_time_keep_ticking,
    _unpatch_time,
    _unpkl_datetz,
)

from contextlib import contextmanager as _contextmanager
from dataclasses import dataclass as _dataclass
from typing import Iterator as _Iterator

from ._pattern import Token
from ._pydatetz import __version__
from ._tz import clear_host_cache as _clear_host_cache


@_dataclass
class _TimePatch:
    _pin: DateTz
    _keep_ticking: bool

    def shift(self, **duration: int) -> None:
        if self._keep_ticking:
            self._pin = new = DateTz.now(self._pin.timezone).plus(**duration)
            _patch_time_keep_ticking(new.timestamp)
        else:
            self._pin = new = self._pin.clone().plus(**duration)
            _patch_time_frozen(new.timestamp)


@_contextmanager
def patch_current_time(
    dt: DateTz, /, *, keep_ticking: bool
) -> _Iterator[_TimePatch]:
    """Patch the current time to a fixed value (for testing purposes).
    Behaves as a context manager or decorator, with similar semantics to
    ``unittest.mock.patch``.

    Important
    ---------

    * This function should be used only for testing purposes. It is not
      thread-safe or part of the stable API.
    * This function only affects :meth:`DateTz.now`. It does not
      affect the standard library's time functions or any other libraries.
      Use the ``time_machine`` package if you also want to patch other libraries.

    Example
    -------

    >>> from datetz import DateTz, patch_current_time
    >>> d = DateTz.parse("1980-03-02 02:00:00")
    >>> with patch_current_time(d, keep_ticking=False) as p:
    ...     assert DateTz.now() == d
    ...     p.shift(hours=4)
    ...     assert DateTz.now() == d.clone().add(4, "hour")
    ...
    >>> assert DateTz.now() != d
    """
    if keep_ticking:
        _patch_time_keep_ticking(dt.timestamp)
    else:
        _patch_time_frozen(dt.timestamp)

    try:
        yield _TimePatch(dt.clone(), keep_ticking)
    finally:
        _unpatch_time()


def clear_tzcache() -> None:
    """Clear the cache of host timezone data.

    Only needed if the system timezone database changed while the
    process was running. The catalog itself is not affected; use
    :func:`set_catalog` for that.

    Behaves similarly to :meth:`zoneinfo.ZoneInfo.clear_cache`, which you may
    want to call as well.
    """
    _clear_host_cache()
