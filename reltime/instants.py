#
# reltime Instants
#

# Standard library -----------------------------------------------------------------------------------------------------
import datetime as dt
import math
import time

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
_MILLISECOND = dt.timedelta(milliseconds=1)

Instant = dt.datetime | dt.date | int | float


# Methods --------------------------------------------------------------------------------------------------------------

def now_millis() -> int:
    """Current time as epoch milliseconds."""
    return time.time_ns() // 1_000_000


def to_millis(value: Instant, tz: dt.tzinfo | None = None) -> int:
    """
    Convert an instant to epoch milliseconds.

    Args:
        value: Aware or naive datetime, date, or epoch milliseconds as int | float.
        tz: Zone for naive datetimes and for dates, which start at midnight in it.
            None means the local zone.

    Returns:
        Epoch milliseconds, truncated towards negative infinity.

    Raises:
        TypeError: If value is None or of an unsupported type.
        ValueError: If value is a non-finite number.

    Examples:
        >>> to_millis(dt.datetime(1970, 1, 1, 0, 0, 1, tzinfo=dt.timezone.utc))
        1000
        >>> to_millis(dt.date(1970, 1, 2), tz=dt.timezone.utc)
        86400000
    """
    if value is None:
        raise TypeError("An instant is required, got None")

    # datetime is a date subclass, check it first
    if isinstance(value, dt.datetime):
        if value.tzinfo is None and tz is not None:
            value = value.replace(tzinfo=tz)
        return _datetime_millis(value)

    if isinstance(value, dt.date):
        midnight = dt.datetime.combine(value, dt.time.min, tzinfo=tz)
        return _datetime_millis(midnight)

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Instant must be datetime | date | int | float, got {type(value).__name__}")

    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Instant must be a finite number, got {value}")
        return math.floor(value)
    return value


def _datetime_millis(value: dt.datetime) -> int:
    if value.tzinfo is None or value.utcoffset() is None:
        # Naive datetimes are local time
        return math.floor(value.timestamp() * 1000)
    return (value - _EPOCH) // _MILLISECOND
