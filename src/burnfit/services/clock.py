"""Wall clock helpers."""

from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

Clock = Callable[[], datetime]


def make_clock(timezone_name: str | None = None) -> Clock:
    """Return a clock for the given IANA timezone.

    Without a timezone name the clock returns naive datetimes, which the rest
    of the application reads as system local time.
    """
    if timezone_name:
        tz = ZoneInfo(timezone_name)
        return lambda: datetime.now(tz=tz)
    return datetime.now


def to_timestamp_ms(moment: datetime) -> int:
    """Convert a datetime to epoch milliseconds."""
    return int(moment.timestamp() * 1000)
