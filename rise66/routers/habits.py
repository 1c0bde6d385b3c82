from __future__ import annotations
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from ..db import get_db_session
from ..services.habit_service import HabitService
from ..services.progress_service import ProgressService
from .deps import get_current_user_id, utc_today

router = APIRouter(prefix="/api", tags=["Habits"])


class ToggleCompletion(BaseModel):
    completed: bool
    actual_value: Optional[str] = Field(default=None, max_length=100)


@router.post("/initialize")
async def initialize(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    created, habits, progress = await ProgressService.initialize_user(session, user_id, utc_today())
    if not created:
        return {"message": "User already initialized"}
    await session.commit()
    return {"habits": habits, "progress": progress}


@router.get("/habits")
async def list_habits(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    # keep stored targets in step with the program day
    await ProgressService.sync_current_day(session, user_id, utc_today())
    return await HabitService.list_habits(session, user_id)


@router.get("/habits/today")
async def todays_completions(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    return await HabitService.get_completions(session, user_id, utc_today())


@router.post("/habits/{habit_id}/toggle")
async def toggle_habit(
    habit_id: int,
    body: ToggleCompletion,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    today = utc_today()
    try:
        completion = await HabitService.toggle_completion(
            session, user_id, habit_id, today, body.completed, body.actual_value, today=today
        )
    except ValueError as e:
        logger.warning("Toggle rejected for user {}: {}", user_id, e)
        raise HTTPException(status_code=404, detail=str(e))
    await session.commit()
    return completion
