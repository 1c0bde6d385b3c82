from __future__ import annotations
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..core.habits import Mood
from ..llm.text_generation import analyze_journal_entry, generate_daily_affirmation, generate_journal_prompts
from .deps import get_current_user_id

router = APIRouter(prefix="/api/ai", tags=["AI"], dependencies=[Depends(get_current_user_id)])


class AffirmationRequest(BaseModel):
    mood: Mood
    completed_habits: int = Field(ge=0)
    total_habits: int = Field(ge=0)
    current_streak: int = Field(default=0, ge=0)


class PromptsRequest(BaseModel):
    mood: Mood
    current_day: int = Field(ge=1)


class AnalyzeRequest(BaseModel):
    content: str = Field(min_length=1)


@router.post("/affirmation")
async def affirmation(body: AffirmationRequest):
    text = await generate_daily_affirmation(
        body.mood.value, body.completed_habits, body.total_habits, body.current_streak
    )
    return {"affirmation": text}


@router.post("/prompts")
async def prompts(body: PromptsRequest):
    return {"prompts": await generate_journal_prompts(body.mood.value, body.current_day)}


@router.post("/analyze")
async def analyze(body: AnalyzeRequest):
    return await analyze_journal_entry(body.content)
