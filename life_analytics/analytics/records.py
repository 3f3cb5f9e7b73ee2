"""Daily record value objects and their JSON (de)serialisation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any


class InvalidRecordError(ValueError):
    """Raised when an incoming record or goal cannot be accepted."""


class FoodType(str, Enum):
    HEALTHY = "healthy"
    FAST_FOOD = "fast-food"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class HabitCompletion:
    habit_id: int
    completed: bool


@dataclass(frozen=True)
class Habit:
    id: int
    name: str
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "createdAt": self.created_at}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Habit:
        try:
            return cls(id=int(data["id"]), name=str(data["name"]), created_at=str(data.get("createdAt") or ""))
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidRecordError(f"Invalid habit: {data!r}") from exc


@dataclass(frozen=True)
class DailyRecord:
    """One calendar day's self-reported tracking entry."""

    date: date
    sleep_hours: float = 0.0
    physical_activity_minutes: int = 0
    screen_time_hours: float = 0.0
    water_glasses: float = 0.0
    steps_thousands: float = 0.0
    energy: int = 3
    mood: int = 3
    stress: int = 3
    productivity: int = 3
    food_type: FoodType | None = None
    work_time_hours: float = 0.0
    personal_time_hours: float = 0.0
    social_time_hours: float = 0.0
    rest_time_hours: float = 0.0
    diary_text: str = ""
    habit_completions: tuple[HabitCompletion, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the camelCase export shape."""
        return {
            "date": self.date.isoformat(),
            "sleepHours": self.sleep_hours,
            "physicalActivityMinutes": self.physical_activity_minutes,
            "screenTimeHours": self.screen_time_hours,
            "waterGlasses": self.water_glasses,
            "stepsThousands": self.steps_thousands,
            "energy": self.energy,
            "mood": self.mood,
            "stress": self.stress,
            "productivity": self.productivity,
            "foodType": self.food_type.value if self.food_type else None,
            "workTimeHours": self.work_time_hours,
            "personalTimeHours": self.personal_time_hours,
            "socialTimeHours": self.social_time_hours,
            "restTimeHours": self.rest_time_hours,
            "diaryText": self.diary_text,
            "habitCompletions": [
                {"habitId": h.habit_id, "completed": h.completed} for h in self.habit_completions
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DailyRecord:
        """Build a record from an export entry, validating every field.

        Accepts both the camelCase export keys and the legacy keys written
        by the first version of the journal app (``sleep``, ``screenTime``,
        ``habits``...).

        Raises:
            InvalidRecordError: On a malformed date, a non-finite or
                negative number, a rating outside 1-5 or an unknown food type.
        """
        if not isinstance(data, dict):
            raise InvalidRecordError(f"Record must be an object, got {type(data).__name__}")

        raw_date = data.get("date")
        try:
            day = date.fromisoformat(str(raw_date))
        except ValueError as exc:
            raise InvalidRecordError(f"Invalid record date: {raw_date!r}") from exc

        def pick(key: str) -> Any:
            if key in data:
                return data[key]
            return data.get(_LEGACY_KEYS.get(key, key))

        food_raw = pick("foodType")
        food_type: FoodType | None = None
        if food_raw not in (None, ""):
            try:
                food_type = FoodType(food_raw)
            except ValueError as exc:
                raise InvalidRecordError(f"{day}: unknown foodType {food_raw!r}") from exc

        return cls(
            date=day,
            sleep_hours=_quantity(day, "sleepHours", pick("sleepHours")),
            physical_activity_minutes=_minutes(day, "physicalActivityMinutes", pick("physicalActivityMinutes")),
            screen_time_hours=_quantity(day, "screenTimeHours", pick("screenTimeHours")),
            water_glasses=_quantity(day, "waterGlasses", pick("waterGlasses")),
            steps_thousands=_quantity(day, "stepsThousands", pick("stepsThousands")),
            energy=_rating(day, "energy", pick("energy")),
            mood=_rating(day, "mood", pick("mood")),
            stress=_rating(day, "stress", pick("stress")),
            productivity=_rating(day, "productivity", pick("productivity")),
            food_type=food_type,
            work_time_hours=_quantity(day, "workTimeHours", pick("workTimeHours")),
            personal_time_hours=_quantity(day, "personalTimeHours", pick("personalTimeHours")),
            social_time_hours=_quantity(day, "socialTimeHours", pick("socialTimeHours")),
            rest_time_hours=_quantity(day, "restTimeHours", pick("restTimeHours")),
            diary_text=str(pick("diaryText") or ""),
            habit_completions=_habit_completions(day, pick("habitCompletions")),
        )


# Keys used by the original single-page journal before the field rename
_LEGACY_KEYS = {
    "sleepHours": "sleep",
    "physicalActivityMinutes": "physicalActivity",
    "screenTimeHours": "screenTime",
    "waterGlasses": "water",
    "stepsThousands": "steps",
    "workTimeHours": "workTime",
    "personalTimeHours": "personalTime",
    "socialTimeHours": "socialTime",
    "restTimeHours": "restTime",
    "diaryText": "diary",
    "habitCompletions": "habits",
}


def _number(day: date, name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidRecordError(f"{day}: {name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidRecordError(f"{day}: {name} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise InvalidRecordError(f"{day}: {name} must be finite, got {value!r}")
    return number


def _quantity(day: date, name: str, value: Any) -> float:
    """Non-negative metric; absent means 0."""
    if value is None or value == "":
        return 0.0
    number = _number(day, name, value)
    if number < 0:
        raise InvalidRecordError(f"{day}: {name} cannot be negative, got {value!r}")
    return number


def _minutes(day: date, name: str, value: Any) -> int:
    number = _quantity(day, name, value)
    if number != int(number):
        raise InvalidRecordError(f"{day}: {name} must be a whole number of minutes, got {value!r}")
    return int(number)


def _rating(day: date, name: str, value: Any) -> int:
    """Self-reported 1-5 rating; absent means 3."""
    if value is None or value == "":
        return 3
    number = _number(day, name, value)
    if number != int(number) or not 1 <= number <= 5:
        raise InvalidRecordError(f"{day}: {name} must be an integer between 1 and 5, got {value!r}")
    return int(number)


def _habit_completions(day: date, value: Any) -> tuple[HabitCompletion, ...]:
    if not value:
        return ()
    try:
        completions = tuple(
            HabitCompletion(
                habit_id=int(item["habitId"] if "habitId" in item else item["id"]),
                completed=item.get("completed", False),
            )
            for item in value
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise InvalidRecordError(f"{day}: invalid habitCompletions {value!r}") from exc
    # "false" as a string would otherwise count as done
    if not all(isinstance(c.completed, bool) for c in completions):
        raise InvalidRecordError(f"{day}: habitCompletions 'completed' must be true or false, got {value!r}")
    return completions


def sort_descending(records: list[DailyRecord]) -> list[DailyRecord]:
    """Return a new list ordered most-recent first."""
    return sorted(records, key=lambda r: r.date, reverse=True)
