"""
Day boundary and wire formatting helpers.

All values handed to the host are local civil time with millisecond precision
and no trailing zone marker ("2024-12-31T23:59:59.999"). A "Z" suffix would
let the host reinterpret the value as UTC and shift a boundary into the
neighbouring day, so every serialization goes through to_iso_local().
"""

from datetime import date, datetime, time
from typing import Union

DateLike = Union[date, datetime]

END_OF_DAY = time(23, 59, 59, 999000)


def to_local_civil(value: DateLike) -> datetime:
    """
    Convert a date or datetime to a naive local-time datetime.

    Aware datetimes are converted to the local zone first; plain dates become
    midnight.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def day_start(value: DateLike) -> datetime:
    """00:00:00.000 on the calendar day of value."""
    return datetime.combine(to_local_civil(value).date(), time.min)


def day_end(value: DateLike) -> datetime:
    """23:59:59.999 on the calendar day of value."""
    return datetime.combine(to_local_civil(value).date(), END_OF_DAY)


def to_iso_local(value: DateLike) -> str:
    """Serialize to the host wire format, e.g. 2024-12-24T00:00:00.000."""
    return to_local_civil(value).isoformat(timespec="milliseconds")
