"""UTC timestamp helpers.

MongoDB stores datetimes with millisecond precision, so every timestamp the
domain produces is truncated to whole milliseconds. That keeps values read
back from the store equal to the values that were written.
"""

from datetime import datetime, timedelta, timezone

ONE_MILLISECOND = timedelta(milliseconds=1)


def utc_now() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes returned by the driver."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def next_timestamp(previous: datetime) -> datetime:
    """Return the current time, strictly after ``previous``."""
    now = utc_now()
    if now <= previous:
        return previous + ONE_MILLISECOND
    return now
