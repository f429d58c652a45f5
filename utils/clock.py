"""
utils/clock.py
--------------
Time source used by every window computation.

Services and the refresh controller take a ``clock`` callable instead of
reading ``datetime.now()`` themselves, so tests can pin "now".
"""

from datetime import datetime
from typing import Callable

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Current local wall-clock time (naive)."""
    return datetime.now()


def fixed_clock(moment: datetime) -> Clock:
    """Return a clock that always reports ``moment``."""
    def _now() -> datetime:
        return moment
    return _now


def to_local_naive(moment: datetime) -> datetime:
    """Convert an aware datetime to local naive time; naive input is returned as-is."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)
