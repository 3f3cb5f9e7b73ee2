"""SQLAlchemy ORM models for the journal database."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Column, Date, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class JournalEntry(Base):
    """One row per calendar day; overwritten wholesale on save."""

    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, unique=True, nullable=False, index=True)
    sleep_hours = Column(Float, nullable=False, default=0.0)
    physical_activity_minutes = Column(Integer, nullable=False, default=0)
    screen_time_hours = Column(Float, nullable=False, default=0.0)
    water_glasses = Column(Float, nullable=False, default=0.0)
    steps_thousands = Column(Float, nullable=False, default=0.0)
    energy = Column(Integer, nullable=False, default=3)
    mood = Column(Integer, nullable=False, default=3)
    stress = Column(Integer, nullable=False, default=3)
    productivity = Column(Integer, nullable=False, default=3)
    food_type = Column(String(20), nullable=True)  # "healthy" | "fast-food" | "skipped"
    work_time_hours = Column(Float, nullable=False, default=0.0)
    personal_time_hours = Column(Float, nullable=False, default=0.0)
    social_time_hours = Column(Float, nullable=False, default=0.0)
    rest_time_hours = Column(Float, nullable=False, default=0.0)
    diary_text = Column(Text, nullable=False, default="")
    habit_completions = Column(Text, nullable=False, default="[]")  # JSON list
    saved_at = Column(DateTime, default=lambda: datetime.now(UTC))

    def __repr__(self) -> str:
        return f"<JournalEntry date={self.date} sleep={self.sleep_hours}h energy={self.energy}>"


class HabitRow(Base):
    __tablename__ = "habits"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    created_at = Column(String(40), nullable=False, default="")


class GoalRow(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    metric = Column(String(40), nullable=False)
    target_value = Column(Float, nullable=False)
    window_days = Column(Integer, nullable=False)
    direction = Column(String(10), nullable=True)  # "atLeast" | "atMost" | NULL

    def __repr__(self) -> str:
        return f"<GoalRow {self.name} {self.metric}={self.target_value}/{self.window_days}d>"


class UnlockedAchievement(Base):
    __tablename__ = "unlocked_achievements"

    achievement_id = Column(String(50), primary_key=True)
    unlocked_at = Column(DateTime, default=lambda: datetime.now(UTC))


class AppState(Base):
    """Integer counters kept between runs (e.g. the longest streak)."""

    __tablename__ = "app_state"

    key = Column(String(50), primary_key=True)
    value = Column(Integer, nullable=False, default=0)
