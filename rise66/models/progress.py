from typing import Optional
from datetime import datetime, date, timezone
from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime, Column


class UserProgress(SQLModel, table=True):
    """
    Whole-program progress: current day and the program streak pair.
    """
    __tablename__ = "user_progress"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True, unique=True, foreign_key="users.id")

    current_day: int = Field(default=1)
    start_date: date
    total_days_completed: int = Field(default=0)
    current_streak: int = Field(default=0)
    best_streak: int = Field(default=0)

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
