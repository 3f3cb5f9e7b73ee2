"""Consecutive-day tracking streaks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Sequence

from .records import DailyRecord, sort_descending


@dataclass(frozen=True)
class StreakSummary:
    current: int
    longest: int


def current_streak(records: Sequence[DailyRecord], reference_date: date | None = None) -> int:
    """Count consecutive days with a record, ending on reference_date (default today).

    The record at position i of the most-recent-first list must be dated
    exactly ``reference_date - i`` days; the first mismatch ends the streak,
    so a missing entry for reference_date itself yields 0.
    """
    expected = reference_date or date.today()
    streak = 0
    for record in sort_descending(records):
        if record.date != expected:
            break
        streak += 1
        expected -= timedelta(days=1)
    return streak


def longest_streak(previous_max: int, current: int) -> int:
    """High-water mark: never lower than previous_max."""
    return max(previous_max, current)


def streak_summary(
    records: Sequence[DailyRecord],
    previous_max: int = 0,
    reference_date: date | None = None,
) -> StreakSummary:
    current = current_streak(records, reference_date)
    return StreakSummary(current=current, longest=longest_streak(previous_max, current))
