from __future__ import annotations
from datetime import date, datetime, time, timedelta, timezone as dt_tz
from typing import Callable
from zoneinfo import ZoneInfo

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(dt_tz.utc)


def to_wall_clock(moment: datetime, tz_name: str) -> datetime:
    """
    Convert an instant to the naive local wall clock of `tz_name`.

    The daily cycle is defined on wall-clock hours, so everything downstream
    works on naive datetimes. Naive input is taken to be UTC.

    Args:
        moment: The instant to convert (aware, or naive UTC)
        tz_name: IANA timezone name (e.g., "Africa/Nairobi")

    Returns:
        Naive datetime carrying the local date and time

    Examples:
        >>> from datetime import datetime, timezone
        >>> to_wall_clock(datetime(2025, 1, 10, 15, 0, tzinfo=timezone.utc), "Africa/Nairobi")
        datetime.datetime(2025, 1, 10, 18, 0)
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt_tz.utc)
    return moment.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)


def wall_clock_now(tz_name: str, clock: Clock = utc_now) -> datetime:
    """Read `clock` once and return the local wall clock for `tz_name`."""
    return to_wall_clock(clock(), tz_name)


def at_wall_clock(d: date, hour: int, minute: int = 0) -> datetime:
    """
    Build the wall-clock instant `hour:minute:00` on calendar day `d`.

    Examples:
        >>> at_wall_clock(date(2024, 2, 29), 6)
        datetime.datetime(2024, 2, 29, 6, 0)
    """
    return datetime.combine(d, time(hour, minute))


def shift_days(d: date, days: int) -> date:
    # Calendar arithmetic handles month ends and leap years.
    return d + timedelta(days=days)
