"""Achievement catalogue: named predicates over the full record history."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import AbstractSet, Callable, Sequence

from .records import DailyRecord
from .score import wellness_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Achievement:
    id: str
    title: str
    description: str
    predicate: Callable[[Sequence[DailyRecord]], bool]


def longest_run(records: Sequence[DailyRecord]) -> int:
    """Longest run of consecutive calendar dates anywhere in the history."""
    days = sorted({r.date for r in records})
    best = run = 0
    previous = None
    for day in days:
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        best = max(best, run)
        previous = day
    return best


def _count(condition: Callable[[DailyRecord], bool]) -> Callable[[Sequence[DailyRecord]], int]:
    return lambda records: sum(1 for r in records if condition(r))


_sleep_nights = _count(lambda r: r.sleep_hours >= 8)
_active_days = _count(lambda r: r.physical_activity_minutes >= 30)
_detox_days = _count(lambda r: r.screen_time_hours <= 2)

ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement("first_entry", "First Step", "Log your first day.",
                lambda rs: len(rs) >= 1),
    Achievement("ten_entries", "Getting Started", "Log 10 days.",
                lambda rs: len(rs) >= 10),
    Achievement("fifty_entries", "Dedicated Tracker", "Log 50 days.",
                lambda rs: len(rs) >= 50),
    Achievement("week_streak", "Week Warrior", "Track 7 days in a row.",
                lambda rs: longest_run(rs) >= 7),
    Achievement("month_streak", "Monthly Master", "Track 30 days in a row.",
                lambda rs: longest_run(rs) >= 30),
    Achievement("sleep_champion", "Sleep Champion", "Sleep 8 hours or more on 7 days.",
                lambda rs: _sleep_nights(rs) >= 7),
    Achievement("active_week", "Active Lifestyle", "Exercise 30 minutes or more on 7 days.",
                lambda rs: _active_days(rs) >= 7),
    Achievement("screen_detox", "Digital Detox", "Keep screen time at 2 hours or less on 7 days.",
                lambda rs: _detox_days(rs) >= 7),
    Achievement("great_day", "Great Day", "Reach a wellness score of 90 or more.",
                lambda rs: any(wellness_score(r) >= 90 for r in rs)),
)

ACHIEVEMENTS_BY_ID = {a.id: a for a in ACHIEVEMENTS}


def newly_unlocked(records: Sequence[DailyRecord], unlocked: AbstractSet[str]) -> frozenset[str]:
    """Ids whose predicate now holds and that were not unlocked before."""
    return frozenset(
        a.id for a in ACHIEVEMENTS
        if a.id not in unlocked and a.predicate(records)
    )


def evaluate_achievements(records: Sequence[DailyRecord], unlocked: AbstractSet[str]) -> frozenset[str]:
    """Return ``unlocked`` plus every achievement the history now satisfies.

    Already-unlocked ids, including ones no longer in the catalogue, are
    always kept.
    """
    new = newly_unlocked(records, unlocked)
    if new:
        logger.info("Unlocked achievements: %s", ", ".join(sorted(new)))
    return frozenset(unlocked) | new
