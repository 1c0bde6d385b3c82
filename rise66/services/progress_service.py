from __future__ import annotations
from typing import List, Optional, Tuple
from datetime import date, timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import case
from sqlmodel import select, func
from loguru import logger

from ..config import settings
from ..core.progress import elapsed_program_day, program_day_records
from ..core.streaks import StreakState, compute_current_streak
from ..models.habit import Habit, HabitCompletion
from ..models.progress import UserProgress
from .habit_service import HabitService

class ProgressService:
    """
    Program-level progress: current day, program streak, and chart data.
    """

    @staticmethod
    async def get_progress(session: AsyncSession, user_id: str, for_update: bool = False) -> Optional[UserProgress]:
        stmt = select(UserProgress).where(UserProgress.user_id == user_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def initialize_user(
        session: AsyncSession, user_id: str, today: date
    ) -> Tuple[bool, List[Habit], Optional[UserProgress]]:
        """
        Create the default habits and the progress row for a new user.
        Returns ``(created, habits, progress)``; ``created`` is False when the
        user already had habits and nothing was changed.
        """
        existing = await HabitService.list_habits(session, user_id)
        if existing:
            progress = await ProgressService.get_progress(session, user_id)
            return False, existing, progress

        habits = await HabitService.create_default_habits(session, user_id)
        progress = UserProgress(
            user_id=user_id,
            current_day=1,
            start_date=today,
            total_days_completed=0,
            current_streak=0,
            best_streak=0,
        )
        session.add(progress)
        await session.flush()
        logger.info("Initialized program for user {} starting {}", user_id, today)
        return True, habits, progress

    @staticmethod
    async def load_elapsed_program_day(session: AsyncSession, user_id: str, today: date) -> int:
        progress = await ProgressService.get_progress(session, user_id)
        if not progress:
            return 1
        return elapsed_program_day(progress.start_date, today, settings.TOTAL_PROGRAM_DAYS)

    @staticmethod
    async def sync_current_day(session: AsyncSession, user_id: str, today: date) -> Optional[UserProgress]:
        """Advance ``current_day`` to today and refresh every habit target to match."""
        progress = await ProgressService.get_progress(session, user_id, for_update=True)
        if not progress:
            return None

        day = elapsed_program_day(progress.start_date, today, settings.TOTAL_PROGRAM_DAYS)
        if progress.current_day != day:
            progress.current_day = day
            progress.touch()
            session.add(progress)
            await session.flush()

        await HabitService.refresh_targets(session, user_id, day)
        return progress

    @staticmethod
    async def recalculate_program_streak(session: AsyncSession, user_id: str, today: date) -> Optional[UserProgress]:
        """
        Recompute the whole-program streak. A day counts when at least
        DAY_COMPLETE_THRESHOLD habits were completed on it.
        """
        progress = await ProgressService.get_progress(session, user_id, for_update=True)
        if not progress:
            logger.warning("No progress row for user {}; program streak not updated", user_id)
            return None

        result = await session.execute(
            select(HabitCompletion).where(
                HabitCompletion.user_id == user_id,
                HabitCompletion.log_date <= today,
            )
        )
        records = program_day_records(result.scalars().all(), settings.DAY_COMPLETE_THRESHOLD)
        current = compute_current_streak(records, today)

        state = StreakState(progress.current_streak, progress.best_streak).advance(current)
        progress.current_streak = state.current_streak
        progress.best_streak = state.best_streak
        progress.total_days_completed = sum(1 for r in records if r.completed)
        progress.touch()
        session.add(progress)
        await session.flush()
        return progress

    @staticmethod
    async def weekly_progress(session: AsyncSession, user_id: str, start_date: date) -> List[dict]:
        """Per-day completed/total counts for the 7 days starting at ``start_date``."""
        end_date = start_date + timedelta(days=6)
        result = await session.execute(
            select(
                HabitCompletion.log_date,
                func.count(case((HabitCompletion.completed == True, 1))),  # noqa: E712
                func.count(),
            )
            .where(
                HabitCompletion.user_id == user_id,
                HabitCompletion.log_date >= start_date,
                HabitCompletion.log_date <= end_date,
            )
            .group_by(HabitCompletion.log_date)
            .order_by(HabitCompletion.log_date)
        )
        return [
            {"date": row[0].isoformat(), "completed_count": row[1], "total_habits": row[2]}
            for row in result.all()
        ]

    @staticmethod
    async def habit_progress_chart(session: AsyncSession, user_id: str, habit_name: str, limit: int = 30) -> List[dict]:
        result = await session.execute(
            select(HabitCompletion.log_date, HabitCompletion.completed, HabitCompletion.actual_value)
            .join(Habit, Habit.id == HabitCompletion.habit_id)
            .where(HabitCompletion.user_id == user_id, Habit.name == habit_name)
            .order_by(HabitCompletion.log_date)
            .limit(limit)
        )
        return [
            {"date": row[0].isoformat(), "completed": row[1], "actual_value": row[2]}
            for row in result.all()
        ]
