from __future__ import annotations
from typing import Optional
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.habits import Mood
from ..db import get_db_session
from ..services.journal_service import JournalService
from .deps import get_current_user_id, utc_today

router = APIRouter(prefix="/api/journal", tags=["Journal"])


class JournalEntryIn(BaseModel):
    mood: Mood
    content: Optional[str] = None
    ai_affirmation: Optional[str] = None


@router.get("/today")
async def todays_entry(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    return await JournalService.get_entry(session, user_id, utc_today())


@router.post("")
async def save_entry(
    body: JournalEntryIn,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    entry = await JournalService.upsert_entry(
        session, user_id, utc_today(), body.mood, body.content, body.ai_affirmation
    )
    await session.commit()
    return entry


@router.get("/recent")
async def recent_entries(
    limit: int = Query(default=5, ge=1, le=66),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    return await JournalService.recent_entries(session, user_id, limit)
