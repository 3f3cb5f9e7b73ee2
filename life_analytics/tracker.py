"""Application service: ties the repository to the analytics engines."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from .analytics.achievements import ACHIEVEMENTS_BY_ID, evaluate_achievements
from .analytics.goals import Goal, GoalProgress, goal_progress
from .analytics.insights import suggestions
from .analytics.records import DailyRecord
from .analytics.score import score_breakdown, wellness_series
from .analytics.statistics import analyze_correlations
from .analytics.streaks import StreakSummary, streak_summary
from .analytics.trends import habit_completion, last_n_days, trend_summary
from .database.repository import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveResult:
    streaks: StreakSummary
    new_achievements: frozenset[str]


def save_entry(repo: Repository, record: DailyRecord, reference_date: date | None = None) -> SaveResult:
    """Upsert a day's record, then refresh achievements and the longest streak.

    Args:
        repo: Database repository.
        record: Validated record to store.
        reference_date: "Today" for streak purposes; defaults to date.today().

    Returns:
        The refreshed streak summary and any achievements unlocked by this save.
    """
    repo.save_record(record)
    records = repo.list_records()

    unlocked_before = repo.get_unlocked_achievements()
    unlocked = evaluate_achievements(records, unlocked_before)
    new = repo.unlock_achievements(unlocked - unlocked_before)

    streaks = streak_summary(records, repo.get_longest_streak(), reference_date)
    repo.update_longest_streak(streaks.longest)

    logger.info(
        "Saved entry for %s (streak %d, longest %d, %d new achievements)",
        record.date, streaks.current, streaks.longest, len(new),
    )
    return SaveResult(streaks=streaks, new_achievements=new)


def build_dashboard(repo: Repository, reference_date: date | None = None, window_days: int = 7) -> dict[str, Any]:
    """Gather everything the report view shows for reference_date.

    Engines run on a single read of the store; the only writes are the
    monotonic streak high-water mark and achievement set.
    """
    day = reference_date or date.today()
    records = repo.list_records()
    habits = repo.list_habits()
    goals: list[Goal] = repo.list_goals()

    streaks = streak_summary(records, repo.get_longest_streak(), day)
    repo.update_longest_streak(streaks.longest)
    unlocked = evaluate_achievements(records, repo.get_unlocked_achievements())
    repo.unlock_achievements(unlocked)

    today = next((r for r in records if r.date == day), None)
    progress: list[tuple[Goal, GoalProgress]] = [(g, goal_progress(g, records)) for g in goals]

    return {
        "date": day,
        "record": today,
        "score": score_breakdown(today) if today else None,
        "suggestions": suggestions(today) if today else [],
        "habits": habit_completion(today, habits),
        "streaks": streaks,
        "goals": progress,
        "correlations": analyze_correlations(records),
        "trends": trend_summary(records),
        "series": last_n_days(records, window_days, day),
        "wellness_series": wellness_series(records, window_days, day),
        "achievements": [ACHIEVEMENTS_BY_ID[a] for a in sorted(unlocked) if a in ACHIEVEMENTS_BY_ID],
    }
