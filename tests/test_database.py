"""Tests for life_analytics/database/repository.py."""

import json
from datetime import date, timedelta

import pytest

from life_analytics.analytics.goals import Direction, GoalMetric
from life_analytics.analytics.records import DailyRecord, FoodType, HabitCompletion, InvalidRecordError
from life_analytics.database.repository import Repository


def _make_repo(path) -> Repository:
    r = Repository(str(path))
    r.init_database()
    return r


@pytest.fixture
def repo(tmp_path):
    r = _make_repo(tmp_path / "test.db")
    yield r
    r._engine.dispose()


def _record(day: date, **fields) -> DailyRecord:
    return DailyRecord(date=day, **fields)


def test_save_and_retrieve_record(repo):
    day = date(2026, 3, 10)
    record = _record(
        day, sleep_hours=7.5, physical_activity_minutes=40, screen_time_hours=3.0,
        energy=4, mood=5, food_type=FoodType.HEALTHY, diary_text="Good day",
        habit_completions=(HabitCompletion(1, True), HabitCompletion(2, False)),
    )
    repo.save_record(record)
    assert repo.get_record(day) == record
    assert repo.get_record(day + timedelta(days=1)) is None


def test_upsert_replaces_whole_record(repo):
    day = date(2026, 3, 10)
    repo.save_record(_record(day, water_glasses=5, diary_text="first"))
    repo.save_record(_record(day, sleep_hours=8))
    stored = repo.get_record(day)
    assert stored.sleep_hours == 8
    assert stored.water_glasses == 0
    assert stored.diary_text == ""
    assert repo.count_records() == 1


def test_list_records_is_date_descending(repo):
    for d in (5, 9, 1, 7):
        repo.save_record(_record(date(2026, 3, d)))
    assert [r.date.day for r in repo.list_records()] == [9, 7, 5, 1]


def test_clear_records(repo):
    repo.save_record(_record(date(2026, 3, 1)))
    repo.save_record(_record(date(2026, 3, 2)))
    assert repo.clear_records() == 2
    assert repo.list_records() == []


def test_habits_crud(repo):
    read = repo.add_habit("Read")
    meditate = repo.add_habit("Meditate")
    assert read.id != meditate.id
    assert [h.name for h in repo.list_habits()] == ["Read", "Meditate"]
    assert repo.delete_habit(read.id) is True
    assert repo.delete_habit(read.id) is False
    assert [h.name for h in repo.list_habits()] == ["Meditate"]


def test_goals_crud(repo):
    sleep = repo.add_goal("Sleep 8h", GoalMetric.SLEEP_HOURS, 8, 7)
    screen = repo.add_goal("Less screen", GoalMetric.SCREEN_TIME_HOURS, 3, 14, Direction.AT_MOST)
    goals = repo.list_goals()
    assert goals == [sleep, screen]
    assert goals[1].direction is Direction.AT_MOST
    assert goals[0].direction is None
    assert repo.delete_goal(sleep.id) is True
    assert repo.list_goals() == [screen]


def test_add_goal_rejects_empty_window(repo):
    with pytest.raises(InvalidRecordError):
        repo.add_goal("Broken", GoalMetric.MOOD, 4, 0)


@pytest.mark.parametrize("target", [float("nan"), float("inf"), float("-inf")])
def test_add_goal_rejects_non_finite_target(repo, target):
    with pytest.raises(InvalidRecordError, match="finite"):
        repo.add_goal("Broken", GoalMetric.SLEEP_HOURS, target, 7)
    assert repo.list_goals() == []


def test_achievements_only_grow(repo):
    assert repo.get_unlocked_achievements() == frozenset()
    assert repo.unlock_achievements({"first_entry"}) == {"first_entry"}
    assert repo.unlock_achievements({"first_entry", "week_streak"}) == {"week_streak"}
    repo.unlock_achievements(set())
    assert repo.get_unlocked_achievements() == {"first_entry", "week_streak"}


def test_longest_streak_is_high_water_mark(repo):
    assert repo.get_longest_streak() == 0
    assert repo.update_longest_streak(4) == 4
    assert repo.update_longest_streak(2) == 4
    assert repo.update_longest_streak(9) == 9
    assert repo.get_longest_streak() == 9


def test_export_shape(repo):
    repo.save_record(_record(date(2026, 3, 10), sleep_hours=7))
    repo.unlock_achievements({"first_entry"})
    data = repo.export_data()
    assert set(data) == {"entries", "habits", "goals", "achievements"}
    assert data["entries"][0]["date"] == "2026-03-10"
    assert data["entries"][0]["sleepHours"] == 7
    assert data["achievements"] == ["first_entry"]


def test_export_import_round_trip(repo, tmp_path):
    for i in range(5):
        repo.save_record(_record(
            date(2026, 3, 1) + timedelta(days=i),
            sleep_hours=6 + i * 0.5, energy=1 + i, food_type=FoodType.SKIPPED if i % 2 else None,
            work_time_hours=8, rest_time_hours=1.25, diary_text=f"day {i} ✍️",
            habit_completions=(HabitCompletion(42, bool(i % 2)),),
        ))
    repo.add_habit("Stretch")
    repo.add_goal("Move", GoalMetric.PHYSICAL_ACTIVITY_MINUTES, 30, 7)
    repo.unlock_achievements({"first_entry", "legacy_badge"})

    document = json.loads(json.dumps(repo.export_data()))

    other = _make_repo(tmp_path / "other.db")
    counts = other.import_data(document)
    assert counts == {"entries": 5, "habits": 1, "goals": 1, "achievements": 2}
    assert other.list_records() == repo.list_records()
    assert other.list_habits() == repo.list_habits()
    assert other.list_goals() == repo.list_goals()
    assert other.get_unlocked_achievements() == repo.get_unlocked_achievements()
    other._engine.dispose()


def test_import_overwrites_wholesale(repo):
    repo.save_record(_record(date(2026, 1, 1)))
    repo.add_habit("Old habit")
    repo.import_data({"entries": [{"date": "2026-03-10", "sleepHours": 8}]})
    assert [r.date for r in repo.list_records()] == [date(2026, 3, 10)]
    assert repo.list_habits() == []


def test_invalid_import_leaves_data_untouched(repo):
    repo.save_record(_record(date(2026, 1, 1)))
    with pytest.raises(InvalidRecordError):
        repo.import_data({"entries": [{"date": "2026-03-10"}, {"date": "not-a-date"}]})
    assert repo.count_records() == 1


@pytest.mark.parametrize("document, match", [
    ({"habits": [{"id": 1, "name": "Read"}, {"id": 1, "name": "Walk"}]}, "Duplicate habit ids"),
    ({"goals": [
        {"id": 2, "name": "Sleep", "fieldName": "sleepHours", "targetValue": 8, "windowDays": 7},
        {"id": 2, "name": "Sleep", "fieldName": "sleepHours", "targetValue": 8, "windowDays": 7},
    ]}, "Duplicate goal ids"),
])
def test_import_rejects_duplicate_ids(repo, document, match):
    repo.save_record(_record(date(2026, 1, 1)))
    repo.add_habit("Keep me")
    with pytest.raises(InvalidRecordError, match=match):
        repo.import_data(document)
    assert repo.count_records() == 1
    assert [h.name for h in repo.list_habits()] == ["Keep me"]


def test_import_rejects_non_object(repo):
    with pytest.raises(InvalidRecordError):
        repo.import_data([])
