"""Trend summaries, day series and calendar bands over the record history."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Any, Sequence

from .records import DailyRecord, Habit
from .score import wellness_score


def trend_summary(records: Sequence[DailyRecord]) -> dict[str, Any]:
    """Averages and standout days across all records.

    Returns an empty dict when there are no records.
    """
    if not records:
        return {}

    def _avg(values: list[float]) -> float:
        return round(sum(values) / len(values), 2)

    ordered = sorted(records, key=lambda r: r.date, reverse=True)
    # max() keeps the first maximal element, i.e. the most recent on ties
    best_day = max(ordered, key=lambda r: r.energy + r.mood)
    most_productive = max(ordered, key=lambda r: r.work_time_hours)

    return {
        "days_with_data": len(records),
        "energy_avg": _avg([r.energy for r in records]),
        "mood_avg": _avg([r.mood for r in records]),
        "sleep_avg_hours": _avg([r.sleep_hours for r in records]),
        "activity_avg_minutes": round(sum(r.physical_activity_minutes for r in records) / len(records)),
        "wellness_avg": _avg([wellness_score(r) for r in records]),
        "best_day": best_day.date,
        "most_productive_day": most_productive.date,
    }


def last_n_days(
    records: Sequence[DailyRecord],
    days: int = 7,
    reference_date: date | None = None,
) -> list[dict[str, Any]]:
    """One entry per calendar day ending on reference_date, oldest first.

    Days without a record are filled with zeros.
    """
    end = reference_date or date.today()
    by_date = {r.date: r for r in records}
    series = []
    for offset in range(days - 1, -1, -1):
        day = end - timedelta(days=offset)
        record = by_date.get(day)
        series.append({
            "date": day,
            "energy": record.energy if record else 0,
            "mood": record.mood if record else 0,
            "sleep_hours": record.sleep_hours if record else 0.0,
            "activity_minutes": record.physical_activity_minutes if record else 0,
            "screen_time_hours": record.screen_time_hours if record else 0.0,
        })
    return series


def energy_band(record: DailyRecord) -> str:
    """Classify a day as high / medium / low from its energy and mood."""
    average = (record.energy + record.mood) / 2
    if average >= 4:
        return "high"
    if average >= 3:
        return "medium"
    return "low"


def calendar_month(records: Sequence[DailyRecord], year: int, month: int) -> dict[date, str]:
    """Energy band for every day of the month that has a record."""
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    return {
        r.date: energy_band(r)
        for r in sorted(records, key=lambda r: r.date)
        if first <= r.date <= last
    }


def habit_completion(record: DailyRecord | None, habits: Sequence[Habit]) -> dict[str, Any]:
    """Completed vs. defined habits for one day."""
    total = len(habits)
    known = {h.id for h in habits}
    completed = 0
    if record is not None:
        completed = sum(1 for c in record.habit_completions if c.completed and c.habit_id in known)
    return {
        "completed": completed,
        "total": total,
        "percentage": round(completed / total * 100, 1) if total else 0.0,
    }
