from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date

STREAK_STARTER_3_BADGE = "STREAK_STARTER_3"
STREAK_KEEPER_7_BADGE = "STREAK_KEEPER_7"
STREAK_BADGES = ((3, STREAK_STARTER_3_BADGE), (7, STREAK_KEEPER_7_BADGE))


@dataclass(frozen=True)
class StreakUpdate:
    streak: int
    counted: bool  # False when today's submission was already counted
    new_badges: tuple[str, ...] = field(default_factory=tuple)


def next_streak(
    last_day: date | None,
    today: date,
    current: int,
    badges: frozenset[str] | set[str] = frozenset(),
) -> StreakUpdate:
    """
    Advance a daily submission streak for a submission on `today`.

    One day after `last_day` extends the streak; a gap, a missing history or a
    `last_day` in the future starts over at 1.
    """
    if last_day == today:
        return StreakUpdate(streak=current, counted=False)
    if last_day is not None and (today - last_day).days == 1:
        streak = current + 1
    else:
        streak = 1
    earned = tuple(b for threshold, b in STREAK_BADGES if streak >= threshold and b not in badges)
    return StreakUpdate(streak=streak, counted=True, new_badges=earned)
