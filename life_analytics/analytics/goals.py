"""Goal definitions and completion over a trailing window of records."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Sequence

from .records import DailyRecord, InvalidRecordError, sort_descending

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    AT_LEAST = "atLeast"
    AT_MOST = "atMost"


class GoalMetric(str, Enum):
    """Record fields a goal can target; values are the export field names."""

    SLEEP_HOURS = "sleepHours"
    PHYSICAL_ACTIVITY_MINUTES = "physicalActivityMinutes"
    SCREEN_TIME_HOURS = "screenTimeHours"
    WATER_GLASSES = "waterGlasses"
    STEPS_THOUSANDS = "stepsThousands"
    ENERGY = "energy"
    MOOD = "mood"
    STRESS = "stress"
    PRODUCTIVITY = "productivity"
    WORK_TIME_HOURS = "workTimeHours"
    PERSONAL_TIME_HOURS = "personalTimeHours"
    SOCIAL_TIME_HOURS = "socialTimeHours"
    REST_TIME_HOURS = "restTimeHours"

    def value_of(self, record: DailyRecord) -> float:
        return _ACCESSORS[self](record)

    @property
    def default_direction(self) -> Direction:
        # Screen time is the only "lower is better" metric
        return Direction.AT_MOST if self is GoalMetric.SCREEN_TIME_HOURS else Direction.AT_LEAST


_ACCESSORS: dict[GoalMetric, Callable[[DailyRecord], float]] = {
    GoalMetric.SLEEP_HOURS: lambda r: r.sleep_hours,
    GoalMetric.PHYSICAL_ACTIVITY_MINUTES: lambda r: r.physical_activity_minutes,
    GoalMetric.SCREEN_TIME_HOURS: lambda r: r.screen_time_hours,
    GoalMetric.WATER_GLASSES: lambda r: r.water_glasses,
    GoalMetric.STEPS_THOUSANDS: lambda r: r.steps_thousands,
    GoalMetric.ENERGY: lambda r: r.energy,
    GoalMetric.MOOD: lambda r: r.mood,
    GoalMetric.STRESS: lambda r: r.stress,
    GoalMetric.PRODUCTIVITY: lambda r: r.productivity,
    GoalMetric.WORK_TIME_HOURS: lambda r: r.work_time_hours,
    GoalMetric.PERSONAL_TIME_HOURS: lambda r: r.personal_time_hours,
    GoalMetric.SOCIAL_TIME_HOURS: lambda r: r.social_time_hours,
    GoalMetric.REST_TIME_HOURS: lambda r: r.rest_time_hours,
}


@dataclass(frozen=True)
class Goal:
    id: int
    name: str
    metric: GoalMetric
    target_value: float
    window_days: int
    direction: Direction | None = None

    @property
    def effective_direction(self) -> Direction:
        return self.direction or self.metric.default_direction

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "fieldName": self.metric.value,
            "targetValue": self.target_value,
            "windowDays": self.window_days,
            "direction": self.direction.value if self.direction else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Goal:
        try:
            metric = GoalMetric(data["fieldName"])
            direction_raw = data.get("direction")
            target = float(data["targetValue"])
            window = int(data["windowDays"])
            goal = cls(
                id=int(data["id"]),
                name=str(data["name"]),
                metric=metric,
                target_value=target,
                window_days=window,
                direction=Direction(direction_raw) if direction_raw else None,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidRecordError(f"Invalid goal: {data!r}") from exc
        validate_goal(goal.name, goal.target_value, goal.window_days)
        return goal


def validate_goal(name: str, target_value: float, window_days: int) -> None:
    """Raise InvalidRecordError unless the target is finite and the window positive."""
    if not math.isfinite(target_value):
        raise InvalidRecordError(f"Goal {name!r}: targetValue must be finite")
    if window_days < 1:
        raise InvalidRecordError(f"Goal {name!r}: windowDays must be positive")


@dataclass(frozen=True)
class GoalProgress:
    completed_days: int
    total_days: int
    ratio: float
    achieved: bool


def is_day_completed(goal: Goal, record: DailyRecord) -> bool:
    value = goal.metric.value_of(record)
    if goal.effective_direction is Direction.AT_MOST:
        return value <= goal.target_value
    return value >= goal.target_value


def goal_progress(goal: Goal, records: Sequence[DailyRecord]) -> GoalProgress:
    """Evaluate a goal over its most recent ``window_days`` records.

    Shorter histories are evaluated as-is, without padding. The goal is
    achieved only when every record in the window satisfies the target.
    """
    window = sort_descending(records)[: max(goal.window_days, 0)]
    if not window:
        return GoalProgress(completed_days=0, total_days=0, ratio=0.0, achieved=False)

    completed = sum(1 for record in window if is_day_completed(goal, record))
    total = len(window)
    logger.debug("Goal %r: %d/%d days completed", goal.name, completed, total)
    return GoalProgress(
        completed_days=completed,
        total_days=total,
        ratio=completed / total,
        achieved=completed == total,
    )
