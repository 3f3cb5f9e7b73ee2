"""Plain-text formatters for the command-line report."""

from __future__ import annotations

from datetime import date
from typing import Any, Sequence

from .analytics.achievements import Achievement
from .analytics.goals import Direction, Goal, GoalProgress
from .analytics.insights import Suggestion
from .analytics.records import DailyRecord
from .analytics.score import WellnessScore
from .analytics.statistics import CorrelationInsight
from .analytics.streaks import StreakSummary

_SEVERITY_ICONS = {"good": "✅", "neutral": "➖", "bad": "⚠️"}


def _fmt_hours(hours: float | None) -> str:
    """Format decimal hours as 'Xh YYmin'."""
    if hours is None:
        return "—"
    h = int(hours)
    m = int(round((hours - h) * 60))
    if m == 60:
        h, m = h + 1, 0
    return f"{h}h {m:02d}min"


def _fmt_day(day: date | None) -> str:
    return day.strftime("%a %d %b %Y") if day else "—"


def _bar(ratio: float, width: int = 10) -> str:
    filled = round(max(0.0, min(ratio, 1.0)) * width)
    return "█" * filled + "░" * (width - filled)


def format_daily_summary(
    record: DailyRecord | None,
    score: WellnessScore | None = None,
    tips: Sequence[Suggestion] | None = None,
    habits: dict[str, Any] | None = None,
    day: date | None = None,
) -> str:
    """Format one day's entry with its wellness score and suggestions.

    Args:
        record: The day's record, or None when nothing was logged.
        score: Optional score breakdown for the record.
        tips: Optional suggestions from the insight rules.
        habits: Optional habit_completion() result.
        day: Date shown when record is None.

    Returns:
        Multi-line string.
    """
    if record is None:
        return f"📊 {_fmt_day(day)}\nNo entry for this day. Log your day to see insights."

    lines = [
        f"📊 {_fmt_day(record.date)}",
        "",
        f"• Sleep: {_fmt_hours(record.sleep_hours)}",
        f"• Activity: {record.physical_activity_minutes} min",
        f"• Screen time: {_fmt_hours(record.screen_time_hours)}",
        f"• Energy: {record.energy}/5   Mood: {record.mood}/5",
    ]
    if record.food_type:
        lines.append(f"• Food: {record.food_type.value}")

    if score is not None:
        lines += ["", f"💯 Wellness score: {score.total:.0f}/100 ({score.grade})"]

    if habits and habits.get("total"):
        lines.append(f"🔁 Habits: {habits['completed']}/{habits['total']} ({habits['percentage']:.0f}%)")

    if tips:
        lines += ["", "💬 Suggestions:"]
        lines += [f"{_SEVERITY_ICONS.get(t.severity, '•')} {t.title}: {t.message}" for t in tips]

    return "\n".join(lines)


def format_streaks(streaks: StreakSummary) -> str:
    icon = "🔥" if streaks.current >= 3 else "📅"
    unit = "day" if streaks.current == 1 else "days"
    return f"{icon} Current streak: {streaks.current} {unit} (longest: {streaks.longest})"


def format_goals(progress: Sequence[tuple[Goal, GoalProgress]]) -> str:
    """Format goal progress lines; an empty list gives a hint instead."""
    if not progress:
        return "🎯 No goals set."
    lines = ["🎯 Goals"]
    for goal, result in progress:
        sign = "≤" if goal.effective_direction is Direction.AT_MOST else "≥"
        status = "achieved" if result.achieved else f"{result.completed_days}/{result.total_days} days"
        lines.append(
            f"• {goal.name} ({sign}{goal.target_value:g}): {_bar(result.ratio)} {result.ratio * 100:.0f}% — {status}"
        )
    return "\n".join(lines)


def format_correlations(insights: Sequence[CorrelationInsight]) -> str:
    lines = ["🔗 Patterns"]
    for insight in insights:
        header = f"• {insight.title} [{insight.strength}]"
        if insight.average_value:
            header += f" r={insight.correlation * 100:.0f}% avg={insight.average_value}"
        lines += [header, f"  {insight.description}"]
    return "\n".join(lines)


def format_trends(stats: dict[str, Any], series: Sequence[dict[str, Any]] | None = None) -> str:
    """Format trend_summary() output and an optional last_n_days() series."""
    if not stats:
        return "📈 No data yet. Start tracking to see your trends."

    lines = [
        f"📈 Trends ({stats['days_with_data']} entries)",
        f"• Average energy: {stats['energy_avg']:.1f}/5",
        f"• Average mood: {stats['mood_avg']:.1f}/5",
        f"• Average sleep: {_fmt_hours(stats['sleep_avg_hours'])}",
        f"• Average activity: {stats['activity_avg_minutes']} min",
        f"• Average wellness: {stats['wellness_avg']:.0f}/100",
        f"• Best day: {_fmt_day(stats['best_day'])}",
        f"• Most productive: {_fmt_day(stats['most_productive_day'])}",
    ]
    if series:
        lines += ["", "Day        Energy Mood Sleep  Active"]
        for point in series:
            lines.append(
                f"{point['date'].strftime('%d/%m')}      {point['energy']:>5} {point['mood']:>4} "
                f"{point['sleep_hours']:>5.1f} {point['activity_minutes']:>6}"
            )
    return "\n".join(lines)


def format_wellness_series(points: Sequence[tuple[date, float]]) -> str:
    if not points:
        return "💯 No wellness scores in this period."
    values = " ".join(f"{day.strftime('%d/%m')}:{score:.0f}" for day, score in points)
    average = sum(score for _, score in points) / len(points)
    return f"💯 Wellness {values} (avg {average:.0f})"


def format_achievements(achievements: Sequence[Achievement]) -> str:
    if not achievements:
        return "🏆 No achievements unlocked yet."
    return "\n".join(["🏆 Achievements"] + [f"• {a.title}: {a.description}" for a in achievements])


def format_report(dashboard: dict[str, Any]) -> str:
    """Assemble the full report from tracker.build_dashboard()."""
    sections = [
        format_daily_summary(
            dashboard["record"],
            dashboard["score"],
            dashboard["suggestions"],
            dashboard["habits"],
            day=dashboard["date"],
        ),
        format_streaks(dashboard["streaks"]),
        format_goals(dashboard["goals"]),
        format_trends(dashboard["trends"], dashboard["series"]),
        format_wellness_series(dashboard["wellness_series"]),
        format_correlations(dashboard["correlations"]),
        format_achievements(dashboard["achievements"]),
    ]
    return "\n\n".join(sections)
