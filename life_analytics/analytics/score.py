"""Composite 0-100 wellness score for a single day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Sequence

from .records import DailyRecord

_TERM_MAX = 20.0
_SLEEP_TARGET_H = 8.0
_ACTIVITY_TARGET_MIN = 30.0

_GRADES = ((80, "Excellent"), (60, "Good"), (40, "Fair"))


@dataclass(frozen=True)
class WellnessScore:
    sleep: float
    activity: float
    energy: float
    mood: float
    screen: float
    total: float
    grade: str


def score_breakdown(record: DailyRecord) -> WellnessScore:
    """Return each of the five sub-scores (each within 0-20) and their sum."""
    sleep = min(record.sleep_hours / _SLEEP_TARGET_H, 1.0) * _TERM_MAX
    activity = min(record.physical_activity_minutes / _ACTIVITY_TARGET_MIN, 1.0) * _TERM_MAX
    energy = record.energy / 5 * _TERM_MAX
    mood = record.mood / 5 * _TERM_MAX
    screen = max(0.0, _TERM_MAX - record.screen_time_hours * 2)
    total = sleep + activity + energy + mood + screen
    return WellnessScore(
        sleep=sleep,
        activity=activity,
        energy=energy,
        mood=mood,
        screen=screen,
        total=total,
        grade=score_grade(total),
    )


def wellness_score(record: DailyRecord) -> float:
    return score_breakdown(record).total


def score_grade(score: float) -> str:
    """Map a wellness score to Excellent / Good / Fair / Poor."""
    for threshold, grade in _GRADES:
        if score >= threshold:
            return grade
    return "Poor"


def wellness_series(
    records: Sequence[DailyRecord],
    days: int = 7,
    reference_date: date | None = None,
) -> list[tuple[date, float]]:
    """Per-day scores for the trailing window ending on reference_date, oldest first.

    Days without a record are skipped rather than scored as zero.
    """
    end = reference_date or date.today()
    start = end - timedelta(days=days - 1)
    in_window = [r for r in records if start <= r.date <= end]
    return [(r.date, wellness_score(r)) for r in sorted(in_window, key=lambda r: r.date)]
