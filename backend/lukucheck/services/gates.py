from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Literal
from lukucheck.services.cycle_clock import (
    CycleConfig,
    LeaderboardStatus,
    SubmissionStatus,
    ai_credits_reset_instant,
    ai_credits_stale,
    ai_usage_day,
    last_ai_credits_reset,
    leaderboard_phase,
    submission_phase,
)
from lukucheck.services.countdown import submission_message

DEFAULT_AI_USAGE_DAILY_LIMIT = 5


class CycleGateError(Exception):
    """Base for requests turned away by the daily cycle."""


class SubmissionWindowClosed(CycleGateError):
    def __init__(self, status: SubmissionStatus):
        self.status = status
        super().__init__(submission_message(status))


class AiUsageLimitReached(CycleGateError):
    def __init__(self, limit: int, resets_at: datetime):
        self.limit = limit
        self.resets_at = resets_at
        super().__init__(f"AI usage limit ({limit}/day) reached.")


def ensure_submission_open(config: CycleConfig, now: datetime) -> SubmissionStatus:
    status = submission_phase(config, now)
    if not status.is_open:
        raise SubmissionWindowClosed(status)
    return status


@dataclass(frozen=True)
class AiUsage:
    """Per-user AI rating counter, as persisted by the caller."""
    count: int = 0
    usage_day: date | None = None
    last_reset_at: datetime | None = None


def refresh_ai_usage(config: CycleConfig, now: datetime, usage: AiUsage) -> AiUsage:
    """Zero the counter when it was last reset before the latest reset instant."""
    if not ai_credits_stale(config, now, usage.last_reset_at):
        return usage
    return AiUsage(count=0, usage_day=ai_usage_day(config, now), last_reset_at=last_ai_credits_reset(config, now))


def consume_ai_credit(
    config: CycleConfig,
    now: datetime,
    usage: AiUsage,
    daily_limit: int = DEFAULT_AI_USAGE_DAILY_LIMIT,
) -> AiUsage:
    """
    Spend one AI rating credit.

    Returns the usage the caller should persist; raises AiUsageLimitReached
    (leaving nothing to persist) once the day's allowance is used up.
    """
    usage = refresh_ai_usage(config, now, usage)
    if usage.count >= daily_limit:
        raise AiUsageLimitReached(daily_limit, ai_credits_reset_instant(config, now))
    return replace(usage, count=usage.count + 1)


LeaderboardDisplay = Literal["countdown", "results", "expired"]


@dataclass(frozen=True)
class LeaderboardView:
    display: LeaderboardDisplay
    status: LeaderboardStatus


def leaderboard_view(config: CycleConfig, now: datetime) -> LeaderboardView:
    status = leaderboard_phase(config, now)
    display: LeaderboardDisplay
    if status.state == "pending_release":
        display = "countdown"
    elif status.state == "live":
        display = "results"
    else:
        display = "expired"
    return LeaderboardView(display=display, status=status)
