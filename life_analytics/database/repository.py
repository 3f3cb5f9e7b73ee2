"""Database repository: all read/write operations for journal data."""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from datetime import UTC, date, datetime
from typing import Any, Generator, Iterable

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from ..analytics.goals import Direction, Goal, GoalMetric, validate_goal
from ..analytics.records import DailyRecord, FoodType, Habit, HabitCompletion, InvalidRecordError
from .models import AppState, Base, GoalRow, HabitRow, JournalEntry, UnlockedAchievement

logger = logging.getLogger(__name__)

_LONGEST_STREAK_KEY = "longest_streak"


def _entry_to_record(row: JournalEntry) -> DailyRecord:
    completions = json.loads(row.habit_completions or "[]")
    return DailyRecord(
        date=row.date,
        sleep_hours=row.sleep_hours,
        physical_activity_minutes=row.physical_activity_minutes,
        screen_time_hours=row.screen_time_hours,
        water_glasses=row.water_glasses,
        steps_thousands=row.steps_thousands,
        energy=row.energy,
        mood=row.mood,
        stress=row.stress,
        productivity=row.productivity,
        food_type=FoodType(row.food_type) if row.food_type else None,
        work_time_hours=row.work_time_hours,
        personal_time_hours=row.personal_time_hours,
        social_time_hours=row.social_time_hours,
        rest_time_hours=row.rest_time_hours,
        diary_text=row.diary_text or "",
        habit_completions=tuple(HabitCompletion(c["habitId"], c["completed"]) for c in completions),
    )


def _record_columns(record: DailyRecord) -> dict[str, Any]:
    return {
        "sleep_hours": record.sleep_hours,
        "physical_activity_minutes": record.physical_activity_minutes,
        "screen_time_hours": record.screen_time_hours,
        "water_glasses": record.water_glasses,
        "steps_thousands": record.steps_thousands,
        "energy": record.energy,
        "mood": record.mood,
        "stress": record.stress,
        "productivity": record.productivity,
        "food_type": record.food_type.value if record.food_type else None,
        "work_time_hours": record.work_time_hours,
        "personal_time_hours": record.personal_time_hours,
        "social_time_hours": record.social_time_hours,
        "rest_time_hours": record.rest_time_hours,
        "diary_text": record.diary_text,
        "habit_completions": json.dumps(
            [{"habitId": c.habit_id, "completed": c.completed} for c in record.habit_completions]
        ),
    }


def _goal_from_row(row: GoalRow) -> Goal:
    return Goal(
        id=row.id,
        name=row.name,
        metric=GoalMetric(row.metric),
        target_value=row.target_value,
        window_days=row.window_days,
        direction=Direction(row.direction) if row.direction else None,
    )


class Repository:
    """Handles all database operations using SQLAlchemy."""

    def __init__(self, database_path: str) -> None:
        url = f"sqlite:///{database_path}"
        self._engine = create_engine(url, connect_args={"check_same_thread": False})
        # expire_on_commit=False lets ORM objects be used after session.close()
        self._Session = sessionmaker(bind=self._engine, expire_on_commit=False)

    def init_database(self) -> None:
        """Create all tables if they don't already exist."""
        Base.metadata.create_all(self._engine)
        logger.info("Database initialised at %s", self._engine.url)

    @contextmanager
    def _session(self) -> Generator[Session, None, None]:
        session = self._Session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ------------------------------------------------------------------ #
    # Journal entries                                                       #
    # ------------------------------------------------------------------ #

    def save_record(self, record: DailyRecord) -> None:
        """Insert or replace the entry for record.date."""
        columns = _record_columns(record)
        with self._session() as session:
            existing = session.query(JournalEntry).filter_by(date=record.date).first()
            if existing:
                for key, value in columns.items():
                    setattr(existing, key, value)
                existing.saved_at = datetime.now(UTC)
            else:
                session.add(JournalEntry(date=record.date, saved_at=datetime.now(UTC), **columns))
        logger.debug("Saved journal entry for %s", record.date)

    def get_record(self, day: date) -> DailyRecord | None:
        with self._session() as session:
            row = session.query(JournalEntry).filter_by(date=day).first()
            return _entry_to_record(row) if row else None

    def list_records(self) -> list[DailyRecord]:
        """Return every entry, most recent first."""
        with self._session() as session:
            rows = session.query(JournalEntry).order_by(JournalEntry.date.desc()).all()
            return [_entry_to_record(r) for r in rows]

    def count_records(self) -> int:
        with self._session() as session:
            return session.query(JournalEntry).count()

    def clear_records(self) -> int:
        """Delete every journal entry. Returns the number removed."""
        with self._session() as session:
            removed = session.query(JournalEntry).delete()
        logger.info("Cleared %d journal entries", removed)
        return removed

    # ------------------------------------------------------------------ #
    # Habits and goals                                                      #
    # ------------------------------------------------------------------ #

    def _next_id(self, session: Session, model: type[HabitRow] | type[GoalRow]) -> int:
        """Millisecond timestamp id, bumped past the current maximum on collision."""
        candidate = int(time.time() * 1000)
        highest = session.query(model.id).order_by(model.id.desc()).first()
        if highest and highest[0] >= candidate:
            candidate = highest[0] + 1
        return candidate

    def add_habit(self, name: str) -> Habit:
        with self._session() as session:
            row = HabitRow(
                id=self._next_id(session, HabitRow),
                name=name,
                created_at=datetime.now(UTC).isoformat(),
            )
            session.add(row)
        return Habit(id=row.id, name=row.name, created_at=row.created_at)

    def delete_habit(self, habit_id: int) -> bool:
        with self._session() as session:
            return session.query(HabitRow).filter_by(id=habit_id).delete() > 0

    def list_habits(self) -> list[Habit]:
        with self._session() as session:
            rows = session.query(HabitRow).order_by(HabitRow.id).all()
            return [Habit(id=r.id, name=r.name, created_at=r.created_at) for r in rows]

    def add_goal(
        self,
        name: str,
        metric: GoalMetric,
        target_value: float,
        window_days: int,
        direction: Direction | None = None,
    ) -> Goal:
        """Create a goal. Goals are immutable; delete and re-add to change one."""
        validate_goal(name, float(target_value), window_days)
        with self._session() as session:
            row = GoalRow(
                id=self._next_id(session, GoalRow),
                name=name,
                metric=metric.value,
                target_value=float(target_value),
                window_days=window_days,
                direction=direction.value if direction else None,
            )
            session.add(row)
        logger.info("Created goal %r (%s)", name, metric.value)
        return _goal_from_row(row)

    def delete_goal(self, goal_id: int) -> bool:
        with self._session() as session:
            return session.query(GoalRow).filter_by(id=goal_id).delete() > 0

    def list_goals(self) -> list[Goal]:
        with self._session() as session:
            return [_goal_from_row(r) for r in session.query(GoalRow).order_by(GoalRow.id).all()]

    # ------------------------------------------------------------------ #
    # Achievements and streak high-water mark                               #
    # ------------------------------------------------------------------ #

    def get_unlocked_achievements(self) -> frozenset[str]:
        with self._session() as session:
            return frozenset(r.achievement_id for r in session.query(UnlockedAchievement).all())

    def unlock_achievements(self, achievement_ids: Iterable[str]) -> frozenset[str]:
        """Add ids to the unlocked set (never removes any). Returns the ids that were new."""
        with self._session() as session:
            existing = {r.achievement_id for r in session.query(UnlockedAchievement).all()}
            new = frozenset(achievement_ids) - existing
            for achievement_id in sorted(new):
                session.add(UnlockedAchievement(achievement_id=achievement_id))
        return new

    def get_longest_streak(self) -> int:
        with self._session() as session:
            row = session.get(AppState, _LONGEST_STREAK_KEY)
            return row.value if row else 0

    def update_longest_streak(self, value: int) -> int:
        """Raise the stored longest streak to value if higher. Returns the stored value."""
        with self._session() as session:
            row = session.get(AppState, _LONGEST_STREAK_KEY)
            if row is None:
                row = AppState(key=_LONGEST_STREAK_KEY, value=max(value, 0))
                session.add(row)
            elif value > row.value:
                row.value = value
            return row.value

    # ------------------------------------------------------------------ #
    # Export / import                                                       #
    # ------------------------------------------------------------------ #

    def export_data(self) -> dict[str, list]:
        """Return the full data set in the JSON export shape."""
        return {
            "entries": [r.to_dict() for r in self.list_records()],
            "habits": [h.to_dict() for h in self.list_habits()],
            "goals": [g.to_dict() for g in self.list_goals()],
            "achievements": sorted(self.get_unlocked_achievements()),
        }

    def import_data(self, data: dict[str, Any]) -> dict[str, int]:
        """Replace entries, habits, goals and achievements with the given export.

        Everything is validated before the database is touched, so a bad
        document leaves the existing data intact.

        Raises:
            InvalidRecordError: If the document or any item in it is malformed.
        """
        if not isinstance(data, dict):
            raise InvalidRecordError("Import document must be a JSON object")

        by_date: dict[date, DailyRecord] = {}
        for item in data.get("entries") or []:
            record = DailyRecord.from_dict(item)
            by_date[record.date] = record
        habits = [Habit.from_dict(item) for item in data.get("habits") or []]
        goals = [Goal.from_dict(item) for item in data.get("goals") or []]
        for kind, ids in (("habit", [h.id for h in habits]), ("goal", [g.id for g in goals])):
            duplicates = sorted({i for i in ids if ids.count(i) > 1})
            if duplicates:
                raise InvalidRecordError(f"Duplicate {kind} ids in import: {duplicates}")
        achievements = set()
        for item in data.get("achievements") or []:
            achievement_id = item.get("id") if isinstance(item, dict) else item
            if not isinstance(achievement_id, str) or not achievement_id:
                raise InvalidRecordError(f"Invalid achievement: {item!r}")
            achievements.add(achievement_id)

        with self._session() as session:
            for model in (JournalEntry, HabitRow, GoalRow, UnlockedAchievement):
                session.query(model).delete()
            for record in by_date.values():
                session.add(JournalEntry(date=record.date, **_record_columns(record)))
            for habit in habits:
                session.add(HabitRow(id=habit.id, name=habit.name, created_at=habit.created_at))
            for goal in goals:
                session.add(GoalRow(
                    id=goal.id,
                    name=goal.name,
                    metric=goal.metric.value,
                    target_value=goal.target_value,
                    window_days=goal.window_days,
                    direction=goal.direction.value if goal.direction else None,
                ))
            for achievement_id in sorted(achievements):
                session.add(UnlockedAchievement(achievement_id=achievement_id))

        counts = {
            "entries": len(by_date),
            "habits": len(habits),
            "goals": len(goals),
            "achievements": len(achievements),
        }
        logger.info("Imported %s", counts)
        return counts
