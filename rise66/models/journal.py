from typing import Optional
from datetime import datetime, date, timezone
from sqlmodel import SQLModel, Field, UniqueConstraint
from sqlalchemy import DateTime, Column, Text


class JournalEntry(SQLModel, table=True):
    __tablename__ = "journal_entries"
    __table_args__ = (UniqueConstraint("user_id", "entry_date", name="uq_journal_entries_user_date"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True, foreign_key="users.id")

    entry_date: date = Field(index=True)
    mood: str = Field(max_length=20)  # amazing, great, okay, meh, terrible
    content: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    ai_affirmation: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

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
