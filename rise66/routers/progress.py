from __future__ import annotations
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.progress import completion_percentage, habit_progress_percentage, motivational_message, streak_emoji
from ..db import get_db_session
from ..services.habit_service import HabitService
from ..services.progress_service import ProgressService
from .deps import get_current_user_id, utc_today

router = APIRouter(prefix="/api/progress", tags=["Progress"])


@router.get("")
async def get_progress(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    progress = await ProgressService.get_progress(session, user_id)
    streaks = await HabitService.list_habit_streaks(session, user_id)

    habits = await HabitService.list_habits(session, user_id)
    completions = await HabitService.get_completions(session, user_id, utc_today())
    completed_count = sum(1 for c in completions if c.completed)
    current_streak = progress.current_streak if progress else 0

    return {
        "progress": progress,
        "streaks": streaks,
        "today": {
            "completed_count": completed_count,
            "total_habits": len(habits),
            "completion_percentage": completion_percentage(completions, len(habits)),
            "message": motivational_message(completed_count, len(habits)),
            "streak_emoji": streak_emoji(current_streak),
            "program_percentage": habit_progress_percentage(current_streak),
        },
    }


@router.get("/weekly")
async def weekly_progress(
    start_date: Optional[date] = None,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    return await ProgressService.weekly_progress(session, user_id, start_date or utc_today())


@router.get("/habit/{habit_name}")
async def habit_progress(
    habit_name: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    return await ProgressService.habit_progress_chart(session, user_id, habit_name)
