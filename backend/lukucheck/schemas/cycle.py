from __future__ import annotations
from pydantic import BaseModel, Field, field_serializer
from typing import Literal
from datetime import date, datetime, timedelta
from lukucheck.services.cycle_clock import CyclePhase, LeaderboardState, SubmissionState, LeaderboardStatus, SubmissionStatus
from lukucheck.services.countdown import format_time_left, leaderboard_message, submission_message

class CycleConfigPublic(BaseModel):
    timezone: str
    submission_open_hour: int
    submission_close_hour: int
    leaderboard_release_hour: int
    leaderboard_release_minute: int
    leaderboard_viewing_cutoff_hour: int
    leaderboard_viewing_cutoff_minute: int
    leaderboard_viewing_end_hour: int
    ai_usage_reset_hour: int

class SubmissionPhasePublic(BaseModel):
    state: SubmissionState
    next_transition_at: datetime
    time_until_next_transition: timedelta
    time_left: str
    message: str

    @field_serializer("time_until_next_transition")
    def serialize_delta(self, value: timedelta) -> int:
        return int(value.total_seconds())

    @classmethod
    def from_status(cls, status: SubmissionStatus, **extra) -> "SubmissionPhasePublic":
        return cls(
            state=status.state,
            next_transition_at=status.next_transition_at,
            time_until_next_transition=status.time_until_next_transition,
            time_left=format_time_left(status.time_until_next_transition),
            message=submission_message(status),
            **extra,
        )

class LeaderboardPhasePublic(BaseModel):
    state: LeaderboardState
    for_day: date
    next_transition_at: datetime | None = None
    time_until_next_transition: timedelta | None = None
    time_left: str | None = None
    message: str
    warning: str | None = None

    @field_serializer("time_until_next_transition")
    def serialize_delta(self, value: timedelta | None) -> int | None:
        return None if value is None else int(value.total_seconds())

    @classmethod
    def from_status(cls, status: LeaderboardStatus) -> "LeaderboardPhasePublic":
        return cls(
            state=status.state,
            for_day=status.for_day,
            next_transition_at=status.next_transition_at,
            time_until_next_transition=status.time_until_next_transition,
            time_left=None if status.time_until_next_transition is None else format_time_left(status.time_until_next_transition),
            message=leaderboard_message(status),
            warning=status.warning,
        )

class AiCreditsPublic(BaseModel):
    usage_day: date
    last_reset_at: datetime
    next_reset_at: datetime
    time_until_reset: timedelta
    daily_limit: int

    @field_serializer("time_until_reset")
    def serialize_delta(self, value: timedelta) -> int:
        return int(value.total_seconds())

class CycleSnapshot(BaseModel):
    now: datetime
    phase: CyclePhase
    submission_day: date
    submission: SubmissionPhasePublic
    leaderboard: LeaderboardPhasePublic
    ai_credits: AiCreditsPublic
    schedule: list[str]
    warnings: list[str] = []

class AiUsagePayload(BaseModel):
    count: int = Field(default=0, ge=0)
    usage_day: date | None = None
    last_reset_at: datetime | None = None

class LeaderboardViewPublic(BaseModel):
    display: Literal["countdown", "results", "expired"]
    leaderboard: LeaderboardPhasePublic

class StreakPayload(BaseModel):
    last_day: date | None = None
    current: int = Field(default=0, ge=0)
    badges: list[str] = []

class StreakPublic(BaseModel):
    streak: int
    counted: bool
    new_badges: list[str]
    last_day: date

class SubmissionCheckPublic(SubmissionPhasePublic):
    submission_day: date
    streak: StreakPublic
