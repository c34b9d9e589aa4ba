from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, model_validator
from lukucheck.services.time_windows import at_wall_clock, shift_days

SubmissionState = Literal["before_open", "open", "closed"]
LeaderboardState = Literal["pending_release", "live", "expired"]
CyclePhase = Literal[
    "before_open",
    "submission_open",
    "after_close_before_release",
    "results_live",
    "results_expired",
]


class CycleConfig(BaseModel):
    """
    Daily challenge schedule, in local wall-clock hours (0-23) and minutes (0-59).

    Built once at process start and never mutated. Only real ints are
    accepted; invalid values raise pydantic's ValidationError on construction
    and nothing is clamped or coerced.
    """
    model_config = ConfigDict(frozen=True, strict=True)

    submission_open_hour: int = Field(ge=0, le=23)
    submission_close_hour: int = Field(ge=0, le=23)
    leaderboard_release_hour: int = Field(ge=0, le=23)
    leaderboard_release_minute: int = Field(default=0, ge=0, le=59)
    leaderboard_viewing_cutoff_hour: int = Field(ge=0, le=23)
    leaderboard_viewing_cutoff_minute: int = Field(default=0, ge=0, le=59)
    leaderboard_viewing_end_hour: int = Field(ge=0, le=23)
    ai_usage_reset_hour: int = Field(ge=0, le=23)

    @model_validator(mode="after")
    def submission_window_order(self):
        if self.submission_open_hour >= self.submission_close_hour:
            raise ValueError(
                f"submission_open_hour ({self.submission_open_hour}) must be before "
                f"submission_close_hour ({self.submission_close_hour})"
            )
        return self

    @property
    def release(self) -> tuple[int, int]:
        return (self.leaderboard_release_hour, self.leaderboard_release_minute)

    @property
    def viewing_cutoff(self) -> tuple[int, int]:
        return (self.leaderboard_viewing_cutoff_hour, self.leaderboard_viewing_cutoff_minute)

    @property
    def viewing_end(self) -> tuple[int, int]:
        return (self.leaderboard_viewing_end_hour, 0)


@dataclass(frozen=True)
class SubmissionStatus:
    state: SubmissionState
    next_transition_at: datetime
    time_until_next_transition: timedelta

    @property
    def is_open(self) -> bool:
        return self.state == "open"


@dataclass(frozen=True)
class LeaderboardStatus:
    state: LeaderboardState
    for_day: date
    next_transition_at: datetime | None
    time_until_next_transition: timedelta | None
    warning: str | None = None


def _wall(now: datetime) -> datetime:
    # Instants are wall-clock readings; an attached tzinfo carries no meaning here.
    return now.replace(tzinfo=None) if now.tzinfo is not None else now


def _hm(now: datetime) -> tuple[int, int]:
    return (now.hour, now.minute)


def submission_phase(config: CycleConfig, now: datetime) -> SubmissionStatus:
    """
    Classify `now` against today's submission window.

    Boundaries are hour-exact and belong to the new state: at the close hour
    the window is already closed. Once closed, the countdown targets
    tomorrow's open instant, so it is never negative.
    """
    now = _wall(now)
    today = now.date()
    if now.hour < config.submission_open_hour:
        state: SubmissionState = "before_open"
        target = at_wall_clock(today, config.submission_open_hour)
    elif now.hour < config.submission_close_hour:
        state = "open"
        target = at_wall_clock(today, config.submission_close_hour)
    else:
        state = "closed"
        target = at_wall_clock(shift_days(today, 1), config.submission_open_hour)
    return SubmissionStatus(state=state, next_transition_at=target, time_until_next_transition=target - now)


def active_leaderboard_day(config: CycleConfig, now: datetime) -> date:
    """
    The calendar day whose results a viewer sees right now.

    At or after the viewing cutoff on day D it is D; before the cutoff it is
    still D-1. This is the only place the viewed day is decided.
    """
    now = _wall(now)
    today = now.date()
    if _hm(now) >= config.viewing_cutoff:
        return today
    return shift_days(today, -1)


def leaderboard_phase(config: CycleConfig, now: datetime, day: date | None = None) -> LeaderboardStatus:
    """
    Release state of a day's leaderboard, by default the active one.

    Results for day D are live from D's release instant until the viewing end
    hour on D+1. When the active day is already expired the cutoff rule still
    points at a day whose viewing has ended; that is reported as a warning on
    the status, not raised. An explicitly requested past day simply expires.
    """
    now = _wall(now)
    active = day is None
    if day is None:
        day = active_leaderboard_day(config, now)
    release_at = at_wall_clock(day, *config.release)
    if now < release_at:
        return LeaderboardStatus(
            state="pending_release",
            for_day=day,
            next_transition_at=release_at,
            time_until_next_transition=release_at - now,
        )
    end_at = at_wall_clock(shift_days(day, 1), *config.viewing_end)
    if now < end_at:
        return LeaderboardStatus(
            state="live",
            for_day=day,
            next_transition_at=end_at,
            time_until_next_transition=end_at - now,
        )
    return LeaderboardStatus(
        state="expired",
        for_day=day,
        next_transition_at=None,
        time_until_next_transition=None,
        warning=(
            f"results for {day.isoformat()} stopped being viewable at "
            f"{end_at.isoformat()} but are still the active leaderboard day"
        ) if active else None,
    )


def cycle_phase(config: CycleConfig, now: datetime, day: date | None = None) -> CyclePhase:
    """
    Where the cycle of `day` (default: today) stands at `now`.

    A day's cycle runs open -> close -> release -> viewing end on the next
    day. The submission window takes precedence when release falls inside it.
    """
    now = _wall(now)
    if day is None:
        day = now.date()
    if now < at_wall_clock(day, config.submission_open_hour):
        return "before_open"
    if now < at_wall_clock(day, config.submission_close_hour):
        return "submission_open"
    if now < at_wall_clock(day, *config.release):
        return "after_close_before_release"
    if now < at_wall_clock(shift_days(day, 1), *config.viewing_end):
        return "results_live"
    return "results_expired"


def ai_credits_reset_instant(config: CycleConfig, now: datetime) -> datetime:
    """Next reset instant; rolls to tomorrow once `now` is at or past the reset hour."""
    now = _wall(now)
    today = now.date()
    if now.hour >= config.ai_usage_reset_hour:
        return at_wall_clock(shift_days(today, 1), config.ai_usage_reset_hour)
    return at_wall_clock(today, config.ai_usage_reset_hour)


def last_ai_credits_reset(config: CycleConfig, now: datetime) -> datetime:
    return ai_credits_reset_instant(config, now) - timedelta(days=1)


def ai_credits_stale(config: CycleConfig, now: datetime, last_reset_at: datetime | None) -> bool:
    """True when credits recorded as reset at `last_reset_at` are due another reset."""
    if last_reset_at is None:
        return True
    return _wall(last_reset_at) < last_ai_credits_reset(config, now)


def ai_usage_day(config: CycleConfig, now: datetime) -> date:
    # Usage before the reset hour still counts toward the previous day.
    return last_ai_credits_reset(config, now).date()


def submission_day(now: datetime) -> date:
    return _wall(now).date()


def consistency_issues(config: CycleConfig) -> tuple[str, ...]:
    """
    Warnings for a valid schedule whose windows do not line up. Neither case is rejected.
    """
    issues: list[str] = []
    if config.viewing_cutoff < config.release:
        issues.append(
            "viewing cutoff %02d:%02d is before release %02d:%02d; the new day becomes "
            "active while its results are still pending" % (*config.viewing_cutoff, *config.release)
        )
    if config.viewing_cutoff > config.viewing_end:
        issues.append(
            "viewing cutoff %02d:%02d is after viewing end %02d:%02d; results expire "
            "before the next day becomes active" % (*config.viewing_cutoff, *config.viewing_end)
        )
    return tuple(issues)
