from typing import Optional
from datetime import datetime, date, timezone
from sqlmodel import SQLModel, Field, UniqueConstraint
from sqlalchemy import DateTime, Column


class Habit(SQLModel, table=True):
    """
    One of the user's nine program habits with its current target.
    """
    __tablename__ = "habits"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True, foreign_key="users.id")

    name: str = Field(max_length=50, index=True)  # HabitKind value, e.g. "pushups"
    display_name: str = Field(max_length=200)
    emoji: str = Field(max_length=20)
    initial_target: str = Field(max_length=50)
    current_target: str = Field(max_length=50)
    unit: str = Field(max_length=20)  # time, distance, duration, reps, volume, limit, pages

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class HabitCompletion(SQLModel, table=True):
    """
    Whether a habit was done on a given day. One row per (user, habit, date).
    """
    __tablename__ = "habit_completions"
    __table_args__ = (
        UniqueConstraint("user_id", "habit_id", "log_date", name="uq_habit_completions_user_habit_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True, foreign_key="users.id")
    habit_id: int = Field(index=True, foreign_key="habits.id")

    log_date: date = Field(index=True)
    completed: bool = Field(default=False)
    actual_value: Optional[str] = Field(default=None, max_length=100)  # what they actually achieved
    notes: Optional[str] = Field(default=None, max_length=1000)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class HabitStreak(SQLModel, table=True):
    """
    Persisted streak pair for a habit. Both numbers are written together.
    """
    __tablename__ = "habit_streaks"
    __table_args__ = (UniqueConstraint("user_id", "habit_id", name="uq_habit_streaks_user_habit"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True, foreign_key="users.id")
    habit_id: int = Field(index=True, foreign_key="habits.id")

    current_streak: int = Field(default=0)
    best_streak: int = Field(default=0)
    last_completed_date: Optional[date] = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
