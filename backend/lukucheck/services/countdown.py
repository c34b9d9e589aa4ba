from __future__ import annotations
from datetime import date, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lukucheck.services.cycle_clock import CycleConfig, LeaderboardStatus, SubmissionStatus


def format_time_left(delta: timedelta | None) -> str:
    """
    Render a countdown as HH:MM:SS. Hours are not wrapped at 24.

    Examples:
        >>> format_time_left(timedelta(hours=12, seconds=5))
        '12:00:05'
        >>> format_time_left(timedelta(seconds=-3))
        '00:00:00'
    """
    if delta is None or delta <= timedelta(0):
        return "00:00:00"
    total = int(delta.total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_hour(hour: int, minute: int = 0) -> str:
    """
    Examples:
        >>> format_hour(18)
        '6:00 PM'
        >>> format_hour(0, 25)
        '12:25 AM'
    """
    suffix = "AM" if hour < 12 else "PM"
    h12 = hour % 12 or 12
    return f"{h12}:{minute:02d} {suffix}"


def format_day(d: date) -> str:
    return f"{d.strftime('%B')} {d.day}, {d.year}"


def submission_message(status: SubmissionStatus) -> str:
    left = format_time_left(status.time_until_next_transition)
    if status.state == "before_open":
        return f"Today's submission window opens in: {left}"
    if status.state == "open":
        return f"Submissions LIVE! Closes in: {left}"
    return f"Today's submissions have closed. Opens tomorrow in {left}"


def leaderboard_message(status: LeaderboardStatus) -> str:
    day = format_day(status.for_day)
    left = format_time_left(status.time_until_next_transition)
    if status.state == "pending_release":
        return f"{day} Results Release In: {left}"
    if status.state == "live":
        return f"{day} Results LIVE! Viewable For: {left}"
    return f"{day} Results are no longer available."


def schedule_summary(config: CycleConfig) -> list[str]:
    open_at = format_hour(config.submission_open_hour)
    close_at = format_hour(config.submission_close_hour)
    return [
        f"AI Rating Credits Reset: {format_hour(config.ai_usage_reset_hour)} daily",
        f"Outfit Submission Window: {open_at} - {close_at} daily",
        f"Leaderboard Results Release: {format_hour(*config.release)} daily",
        f"Leaderboard Viewable Until: {format_hour(*config.viewing_end)} the following day",
    ]
