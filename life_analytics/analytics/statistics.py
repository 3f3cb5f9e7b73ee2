"""Correlation analysis between tracked daily variables."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from .records import DailyRecord

logger = logging.getLogger(__name__)

# Smallest history for which any correlation claim is made
MIN_SAMPLES = 7
_REPORT_THRESHOLD = 0.3
_MODERATE_THRESHOLD = 0.5
_STRONG_THRESHOLD = 0.7


@dataclass(frozen=True)
class CorrelationInsight:
    title: str
    description: str
    strength: str  # "weak" | "moderate" | "strong"
    correlation: float
    average_value: str | None = None


NOT_ENOUGH_DATA = CorrelationInsight(
    title="Not Enough Data",
    description="Track at least 7 days to see meaningful patterns and correlations.",
    strength="weak",
    correlation=0.0,
)

KEEP_TRACKING = CorrelationInsight(
    title="Keep Tracking",
    description=(
        "No strong patterns detected yet. Continue tracking to discover meaningful "
        "insights about your habits and wellbeing."
    ),
    strength="weak",
    correlation=0.0,
)


def correlate(samples: Iterable[tuple[float, float]]) -> float:
    """Pearson product-moment correlation of (x, y) pairs.

    Returns 0.0 for empty input or when either series has no variance.
    """
    n = 0
    sum_x = sum_y = sum_xy = sum_x2 = sum_y2 = 0.0
    for x, y in samples:
        n += 1
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_x2 += x * x
        sum_y2 += y * y

    if n == 0:
        return 0.0

    numerator = n * sum_xy - sum_x * sum_y
    variance_product = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    if variance_product <= 0:
        return 0.0
    r = numerator / math.sqrt(variance_product)
    return max(-1.0, min(1.0, r))


def correlation_strength(r: float) -> str:
    """Bucket |r| into weak / moderate / strong."""
    magnitude = abs(r)
    if magnitude > _STRONG_THRESHOLD:
        return "strong"
    if magnitude > _MODERATE_THRESHOLD:
        return "moderate"
    return "weak"


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _pair(records: Sequence[DailyRecord], x: Callable[[DailyRecord], float], y: Callable[[DailyRecord], float]):
    return [(x(r), y(r)) for r in records]


def _sleep_energy(records: Sequence[DailyRecord]) -> CorrelationInsight | None:
    r = correlate(_pair(records, lambda d: d.sleep_hours, lambda d: d.energy))
    if abs(r) <= _REPORT_THRESHOLD:
        return None
    avg_sleep = _mean([d.sleep_hours for d in records])
    direction = "positive" if r > 0 else "negative"
    if r > _MODERATE_THRESHOLD:
        advice = f"Getting {'adequate' if avg_sleep >= 7 else 'more'} sleep significantly boosts your energy."
    else:
        advice = "Consider optimizing your sleep schedule for better energy levels."
    return CorrelationInsight(
        title="Sleep Quality → Energy Levels",
        description=f"Your sleep and energy levels show a {direction} correlation ({r * 100:.0f}%). {advice}",
        strength=correlation_strength(r),
        correlation=r,
        average_value=f"{avg_sleep:.1f}h",
    )


def _activity_mood(records: Sequence[DailyRecord]) -> CorrelationInsight | None:
    r = correlate(_pair(records, lambda d: d.physical_activity_minutes, lambda d: d.mood))
    if abs(r) <= _REPORT_THRESHOLD:
        return None
    avg_activity = _mean([d.physical_activity_minutes for d in records])
    direction = "positive" if r > 0 else "negative"
    if r > _MODERATE_THRESHOLD:
        advice = f"Days with {'regular' if avg_activity >= 30 else 'more'} exercise tend to have better moods."
    else:
        advice = "Consider incorporating more movement into your routine."
    return CorrelationInsight(
        title="Physical Activity → Mood",
        description=f"Physical activity and mood show a {direction} relationship ({r * 100:.0f}%). {advice}",
        strength=correlation_strength(r),
        correlation=r,
        average_value=f"{round(avg_activity)} min",
    )


def _screen_sleep(records: Sequence[DailyRecord]) -> CorrelationInsight | None:
    r = correlate(_pair(records, lambda d: d.screen_time_hours, lambda d: d.sleep_hours))
    if abs(r) <= _REPORT_THRESHOLD:
        return None
    avg_screen = _mean([d.screen_time_hours for d in records])
    direction = "negative" if r < 0 else "positive"
    if r < -_REPORT_THRESHOLD:
        advice = f"High screen time (avg {avg_screen:.1f}h) may be affecting your sleep quality."
    else:
        advice = "Monitor screen time before bed for better sleep."
    return CorrelationInsight(
        title="Screen Time → Sleep Quality",
        description=f"Screen time and sleep show a {direction} correlation ({r * 100:.0f}%). {advice}",
        strength=correlation_strength(r),
        correlation=r,
        average_value=f"{avg_screen:.1f}h",
    )


def _work_rest_balance(records: Sequence[DailyRecord]) -> CorrelationInsight | None:
    total_rest = sum(d.rest_time_hours for d in records)
    if total_rest == 0:
        return None
    ratio = sum(d.work_time_hours for d in records) / total_rest
    if 0.5 <= ratio <= 2:
        return None
    if ratio > 2:
        advice = "Consider allocating more time for rest and recovery."
    else:
        advice = "You have good rest time. Ensure work productivity is optimal."
    return CorrelationInsight(
        title="Work-Life Balance",
        description=f"Your work-to-rest ratio is {ratio:.1f}:1. {advice}",
        strength="strong" if ratio > 3 or ratio < 0.3 else "moderate",
        correlation=0.0,
        average_value=f"{ratio:.1f}:1",
    )


_ANALYSES = (_sleep_energy, _activity_mood, _screen_sleep, _work_rest_balance)


def analyze_correlations(records: Sequence[DailyRecord]) -> list[CorrelationInsight]:
    """Compute the fixed set of correlation insights over the full history.

    Args:
        records: Every stored DailyRecord (order does not matter).

    Returns:
        Insights for the pairs whose |r| exceeds 0.3, plus the work/rest
        heuristic. A single sentinel insight is returned when fewer than
        7 records exist or when nothing crosses the threshold.
    """
    if len(records) < MIN_SAMPLES:
        return [NOT_ENOUGH_DATA]

    insights = [insight for insight in (analysis(records) for analysis in _ANALYSES) if insight]
    logger.debug("Correlation analysis over %d records produced %d insights", len(records), len(insights))
    return insights or [KEEP_TRACKING]
