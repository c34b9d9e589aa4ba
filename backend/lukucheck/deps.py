from __future__ import annotations
from datetime import datetime
from lukucheck.config import settings, cycle_config
from lukucheck.services.cycle_clock import CycleConfig
from lukucheck.services.time_windows import Clock, to_wall_clock, utc_now

def get_clock() -> Clock:
    return utc_now

def get_cycle_config() -> CycleConfig:
    return cycle_config

def get_cycle_timezone() -> str:
    return settings.cycle_timezone

def wall_clock_at(at: datetime | None, clock: Clock, tz_name: str) -> datetime:
    """
    Resolve the instant a cycle query is evaluated at.

    A naive `at` is already a wall-clock reading; an aware one is converted to
    `tz_name`. Without `at`, the clock is read once.
    """
    if at is None:
        return to_wall_clock(clock(), tz_name)
    if at.tzinfo is not None:
        return to_wall_clock(at, tz_name)
    return at
