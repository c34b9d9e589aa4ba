from __future__ import annotations
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query
from lukucheck.config import settings
from lukucheck.deps import get_clock, get_cycle_config, get_cycle_timezone, wall_clock_at
from lukucheck.schemas.cycle import (
    AiCreditsPublic, AiUsagePayload, CycleConfigPublic, CycleSnapshot, LeaderboardPhasePublic,
    LeaderboardViewPublic, StreakPayload, StreakPublic, SubmissionCheckPublic, SubmissionPhasePublic,
)
from lukucheck.services.countdown import schedule_summary
from lukucheck.services.cycle_clock import (
    CycleConfig, LeaderboardStatus, ai_credits_reset_instant, ai_usage_day, consistency_issues,
    cycle_phase, last_ai_credits_reset, leaderboard_phase, submission_day, submission_phase,
)
from lukucheck.services.gates import (
    AiUsage, AiUsageLimitReached, SubmissionWindowClosed, consume_ai_credit, ensure_submission_open, leaderboard_view,
)
from lukucheck.services.streaks import next_streak
from lukucheck.services.time_windows import Clock
import structlog

router = APIRouter(prefix="/cycle", tags=["cycle"])
log = structlog.get_logger()

AT_DESCRIPTION = "Evaluate at this wall-clock time instead of now"

def _leaderboard_public(status: LeaderboardStatus, now: datetime) -> LeaderboardPhasePublic:
    if status.warning:
        log.warning("cycle.consistency_warning", for_day=status.for_day.isoformat(), now=now.isoformat(), warning=status.warning)
    return LeaderboardPhasePublic.from_status(status)

def _ai_credits(config: CycleConfig, now: datetime) -> AiCreditsPublic:
    next_reset = ai_credits_reset_instant(config, now)
    return AiCreditsPublic(
        usage_day=ai_usage_day(config, now),
        last_reset_at=last_ai_credits_reset(config, now),
        next_reset_at=next_reset,
        time_until_reset=next_reset - now,
        daily_limit=settings.ai_usage_daily_limit,
    )

@router.get("", response_model=CycleSnapshot)
async def cycle_snapshot(
    at: datetime | None = Query(default=None, description=AT_DESCRIPTION),
    config: CycleConfig = Depends(get_cycle_config),
    clock: Clock = Depends(get_clock),
    tz_name: str = Depends(get_cycle_timezone),
):
    now = wall_clock_at(at, clock, tz_name)
    leaderboard = _leaderboard_public(leaderboard_phase(config, now), now)
    warnings = list(consistency_issues(config))
    if leaderboard.warning:
        warnings.append(leaderboard.warning)
    return CycleSnapshot(
        now=now,
        phase=cycle_phase(config, now),
        submission_day=submission_day(now),
        submission=SubmissionPhasePublic.from_status(submission_phase(config, now)),
        leaderboard=leaderboard,
        ai_credits=_ai_credits(config, now),
        schedule=schedule_summary(config),
        warnings=warnings,
    )

@router.get("/config", response_model=CycleConfigPublic)
async def cycle_config_public(
    config: CycleConfig = Depends(get_cycle_config),
    tz_name: str = Depends(get_cycle_timezone),
):
    return CycleConfigPublic(timezone=tz_name, **config.model_dump())

@router.get("/submission", response_model=SubmissionPhasePublic)
async def submission_status(
    at: datetime | None = Query(default=None, description=AT_DESCRIPTION),
    config: CycleConfig = Depends(get_cycle_config),
    clock: Clock = Depends(get_clock),
    tz_name: str = Depends(get_cycle_timezone),
):
    return SubmissionPhasePublic.from_status(submission_phase(config, wall_clock_at(at, clock, tz_name)))

@router.get("/leaderboard", response_model=LeaderboardPhasePublic)
async def leaderboard_status(
    at: datetime | None = Query(default=None, description=AT_DESCRIPTION),
    config: CycleConfig = Depends(get_cycle_config),
    clock: Clock = Depends(get_clock),
    tz_name: str = Depends(get_cycle_timezone),
):
    now = wall_clock_at(at, clock, tz_name)
    return _leaderboard_public(leaderboard_phase(config, now), now)

@router.get("/leaderboard/view", response_model=LeaderboardViewPublic)
async def leaderboard_view_status(
    at: datetime | None = Query(default=None, description=AT_DESCRIPTION),
    config: CycleConfig = Depends(get_cycle_config),
    clock: Clock = Depends(get_clock),
    tz_name: str = Depends(get_cycle_timezone),
):
    now = wall_clock_at(at, clock, tz_name)
    view = leaderboard_view(config, now)
    return LeaderboardViewPublic(display=view.display, leaderboard=_leaderboard_public(view.status, now))

@router.get("/ai-credits", response_model=AiCreditsPublic)
async def ai_credits_status(
    at: datetime | None = Query(default=None, description=AT_DESCRIPTION),
    config: CycleConfig = Depends(get_cycle_config),
    clock: Clock = Depends(get_clock),
    tz_name: str = Depends(get_cycle_timezone),
):
    return _ai_credits(config, wall_clock_at(at, clock, tz_name))

@router.post("/submission/check", response_model=SubmissionCheckPublic)
async def check_submission(
    payload: StreakPayload | None = None,
    at: datetime | None = Query(default=None, description=AT_DESCRIPTION),
    config: CycleConfig = Depends(get_cycle_config),
    clock: Clock = Depends(get_clock),
    tz_name: str = Depends(get_cycle_timezone),
):
    """Gate a leaderboard entry and report the streak it would produce."""
    payload = payload or StreakPayload()
    now = wall_clock_at(at, clock, tz_name)
    try:
        status = ensure_submission_open(config, now)
    except SubmissionWindowClosed as e:
        log.info("cycle.submission_rejected", state=e.status.state)
        raise HTTPException(status_code=409, detail=str(e))
    day = submission_day(now)
    update = next_streak(payload.last_day, day, payload.current, set(payload.badges))
    return SubmissionCheckPublic.from_status(
        status,
        submission_day=day,
        streak=StreakPublic(
            streak=update.streak,
            counted=update.counted,
            new_badges=list(update.new_badges),
            last_day=day,
        ),
    )

@router.post("/ai-credits/consume", response_model=AiUsagePayload)
async def consume_ai_credits(
    payload: AiUsagePayload | None = None,
    at: datetime | None = Query(default=None, description=AT_DESCRIPTION),
    config: CycleConfig = Depends(get_cycle_config),
    clock: Clock = Depends(get_clock),
    tz_name: str = Depends(get_cycle_timezone),
):
    payload = payload or AiUsagePayload()
    now = wall_clock_at(at, clock, tz_name)
    usage = AiUsage(count=payload.count, usage_day=payload.usage_day, last_reset_at=payload.last_reset_at)
    try:
        usage = consume_ai_credit(config, now, usage, daily_limit=settings.ai_usage_daily_limit)
    except AiUsageLimitReached as e:
        log.info("cycle.ai_limit_reached", limit=e.limit, resets_at=e.resets_at.isoformat())
        raise HTTPException(status_code=429, detail=str(e))
    return AiUsagePayload(count=usage.count, usage_day=usage.usage_day, last_reset_at=usage.last_reset_at)
