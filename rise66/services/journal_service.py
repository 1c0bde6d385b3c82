from __future__ import annotations
from typing import List, Optional
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select
from loguru import logger

from ..core.habits import Mood
from ..models.journal import JournalEntry

class JournalService:
    @staticmethod
    async def get_entry(session: AsyncSession, user_id: str, entry_date: date) -> Optional[JournalEntry]:
        result = await session.execute(
            select(JournalEntry).where(JournalEntry.user_id == user_id, JournalEntry.entry_date == entry_date)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def upsert_entry(
        session: AsyncSession,
        user_id: str,
        entry_date: date,
        mood: Mood | str,
        content: Optional[str] = None,
        ai_affirmation: Optional[str] = None,
    ) -> JournalEntry:
        """One entry per user per day; saving again overwrites it."""
        mood = Mood(mood).value

        entry = await JournalService.get_entry(session, user_id, entry_date)
        if entry:
            entry.mood = mood
            entry.content = content
            entry.ai_affirmation = ai_affirmation
            entry.touch()
        else:
            entry = JournalEntry(
                user_id=user_id,
                entry_date=entry_date,
                mood=mood,
                content=content,
                ai_affirmation=ai_affirmation,
            )
        session.add(entry)
        await session.flush()
        logger.info("Saved journal entry for user {} on {}", user_id, entry_date)
        return entry

    @staticmethod
    async def recent_entries(session: AsyncSession, user_id: str, limit: int = 5) -> List[JournalEntry]:
        result = await session.execute(
            select(JournalEntry)
            .where(JournalEntry.user_id == user_id)
            .order_by(JournalEntry.entry_date.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
