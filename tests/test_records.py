"""Tests for life_analytics/analytics/records.py."""

from datetime import date

import pytest

from life_analytics.analytics.records import (
    DailyRecord,
    FoodType,
    HabitCompletion,
    InvalidRecordError,
    sort_descending,
)


def _entry(**overrides) -> dict:
    data = {
        "date": "2026-03-10",
        "sleepHours": 7.5,
        "physicalActivityMinutes": 30,
        "screenTimeHours": 3.5,
        "waterGlasses": 8,
        "stepsThousands": 9.2,
        "energy": 4,
        "mood": 5,
        "stress": 2,
        "productivity": 4,
        "foodType": "healthy",
        "workTimeHours": 8,
        "personalTimeHours": 2,
        "socialTimeHours": 1.5,
        "restTimeHours": 3,
        "diaryText": "Long walk by the river.",
        "habitCompletions": [{"habitId": 1700000000000, "completed": True}],
    }
    data.update(overrides)
    return data


def test_from_dict_reads_every_field():
    record = DailyRecord.from_dict(_entry())
    assert record.date == date(2026, 3, 10)
    assert record.sleep_hours == 7.5
    assert record.physical_activity_minutes == 30
    assert record.food_type is FoodType.HEALTHY
    assert record.habit_completions == (HabitCompletion(1700000000000, True),)
    assert record.diary_text == "Long walk by the river."


def test_dict_round_trip():
    record = DailyRecord.from_dict(_entry())
    assert DailyRecord.from_dict(record.to_dict()) == record


def test_missing_optional_fields_use_defaults():
    record = DailyRecord.from_dict({"date": "2026-03-10", "sleepHours": 7})
    assert record.water_glasses == 0
    assert record.steps_thousands == 0
    assert (record.energy, record.mood, record.stress, record.productivity) == (3, 3, 3, 3)
    assert record.food_type is None
    assert record.habit_completions == ()


def test_legacy_keys_are_accepted():
    record = DailyRecord.from_dict({
        "date": "2026-03-10",
        "sleep": 6.5,
        "physicalActivity": 20,
        "screenTime": 4,
        "workTime": 7,
        "restTime": 2,
        "energy": 3,
        "mood": 4,
        "foodType": "fast-food",
        "habits": [{"id": 5, "completed": True}],
    })
    assert record.sleep_hours == 6.5
    assert record.physical_activity_minutes == 20
    assert record.screen_time_hours == 4
    assert record.work_time_hours == 7
    assert record.food_type is FoodType.FAST_FOOD
    assert record.habit_completions == (HabitCompletion(5, True),)


@pytest.mark.parametrize("overrides, match", [
    ({"date": "10/03/2026"}, "date"),
    ({"date": None}, "date"),
    ({"sleepHours": float("nan")}, "finite"),
    ({"screenTimeHours": "Infinity"}, "finite"),
    ({"sleepHours": -1}, "negative"),
    ({"physicalActivityMinutes": "lots"}, "number"),
    ({"energy": 6}, "between 1 and 5"),
    ({"mood": 0}, "between 1 and 5"),
    ({"stress": 2.5}, "between 1 and 5"),
    ({"productivity": True}, "number"),
    ({"foodType": "pizza"}, "foodType"),
    ({"habitCompletions": [{"completed": True}]}, "habitCompletions"),
    ({"physicalActivityMinutes": 29.9}, "whole number"),
    ({"habitCompletions": [{"habitId": 1, "completed": "false"}]}, "habitCompletions"),
])
def test_invalid_records_are_rejected(overrides, match):
    with pytest.raises(InvalidRecordError, match=match):
        DailyRecord.from_dict(_entry(**overrides))


def test_non_object_is_rejected():
    with pytest.raises(InvalidRecordError):
        DailyRecord.from_dict(["2026-03-10"])


def test_sort_descending_does_not_mutate():
    records = [DailyRecord(date=date(2026, 3, d)) for d in (2, 9, 5)]
    ordered = sort_descending(records)
    assert [r.date.day for r in ordered] == [9, 5, 2]
    assert [r.date.day for r in records] == [2, 9, 5]
