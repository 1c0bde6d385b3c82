from __future__ import annotations
from typing import List, Optional
from datetime import date, datetime, timedelta, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import select, and_
from loguru import logger

from ..config import settings
from ..core.habits import DEFAULT_HABITS
from ..core.streaks import StreakState, compute_current_streak
from ..core.targets import compute_target
from ..models.habit import Habit, HabitCompletion, HabitStreak

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

class HabitService:
    """
    Habits, daily completions and per-habit streaks.
    """

    @staticmethod
    async def create_default_habits(session: AsyncSession, user_id: str) -> List[Habit]:
        """Create the nine program habits with their day-1 targets."""
        habits = []
        for template in DEFAULT_HABITS:
            target = compute_target(template.kind, 1)
            habit = Habit(
                user_id=user_id,
                name=template.kind.value,
                display_name=template.display_name,
                emoji=template.emoji,
                initial_target=target,
                current_target=target,
                unit=template.unit,
            )
            session.add(habit)
            habits.append(habit)
        await session.flush()
        logger.info("Created {} default habits for user {}", len(habits), user_id)
        return habits

    @staticmethod
    async def list_habits(session: AsyncSession, user_id: str) -> List[Habit]:
        result = await session.execute(select(Habit).where(Habit.user_id == user_id).order_by(Habit.id))
        return list(result.scalars().all())

    @staticmethod
    async def get_habit(session: AsyncSession, user_id: str, habit_id: int) -> Habit:
        habit = await session.get(Habit, habit_id)
        if not habit or habit.user_id != user_id:
            raise ValueError(f"Habit {habit_id} not found")
        return habit

    @staticmethod
    async def update_habit_target(session: AsyncSession, habit: Habit, new_target: str) -> None:
        if habit.current_target == new_target:
            return
        habit.current_target = new_target
        session.add(habit)
        await session.flush()

    @staticmethod
    async def refresh_targets(session: AsyncSession, user_id: str, day: int) -> List[Habit]:
        """Recompute every habit's target for program ``day`` and persist the changes."""
        habits = await HabitService.list_habits(session, user_id)
        for habit in habits:
            await HabitService.update_habit_target(session, habit, compute_target(habit.name, day))
        logger.debug("Refreshed targets for user {} on day {}", user_id, day)
        return habits

    @staticmethod
    async def get_completions(session: AsyncSession, user_id: str, log_date: date) -> List[HabitCompletion]:
        result = await session.execute(
            select(HabitCompletion).where(
                HabitCompletion.user_id == user_id,
                HabitCompletion.log_date == log_date,
            )
        )
        return list(result.scalars().all())

    @staticmethod
    async def _upsert_completion(
        session: AsyncSession,
        user_id: str,
        habit_id: int,
        log_date: date,
        completed: bool,
        actual_value: Optional[str],
    ) -> HabitCompletion:
        """
        Insert or overwrite the (user, habit, date) row in a single statement.
        Concurrent toggles of the same day resolve to the last write.
        """
        dialect = session.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise RuntimeError(f"Completion upsert is not supported on dialect '{dialect}'")

        stmt = insert(HabitCompletion.__table__).values(
            user_id=user_id,
            habit_id=habit_id,
            log_date=log_date,
            completed=completed,
            actual_value=actual_value,
            created_at=datetime.now(timezone.utc),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "habit_id", "log_date"],
            set_={
                "completed": stmt.excluded.completed,
                "actual_value": stmt.excluded.actual_value,
            },
        )
        await session.execute(stmt)

        result = await session.execute(
            select(HabitCompletion)
            .where(
                HabitCompletion.user_id == user_id,
                HabitCompletion.habit_id == habit_id,
                HabitCompletion.log_date == log_date,
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    @staticmethod
    async def toggle_completion(
        session: AsyncSession,
        user_id: str,
        habit_id: int,
        log_date: date,
        completed: bool,
        actual_value: Optional[str] = None,
        today: Optional[date] = None,
    ) -> HabitCompletion:
        """
        Record a completion and recompute the habit and program streaks.

        Everything happens in the caller's transaction; nothing is committed
        here, so the completion and both streak pairs become visible together.
        """
        from .progress_service import ProgressService

        reference_date = today or log_date
        habit = await HabitService.get_habit(session, user_id, habit_id)
        completion = await HabitService._upsert_completion(
            session, user_id, habit.id, log_date, completed, actual_value
        )

        await HabitService.recalculate_streak(session, user_id, habit.id, reference_date)
        await ProgressService.recalculate_program_streak(session, user_id, reference_date)

        logger.info("Habit {} set to completed={} on {} for user {}", habit.id, completed, log_date, user_id)
        return completion

    @staticmethod
    async def get_completion_history(
        session: AsyncSession,
        user_id: str,
        habit_id: int,
        days: int,
        today: date,
    ) -> List[HabitCompletion]:
        """Completions of the last ``days`` days, newest first."""
        since = today - timedelta(days=days)
        result = await session.execute(
            select(HabitCompletion)
            .where(
                and_(
                    HabitCompletion.user_id == user_id,
                    HabitCompletion.habit_id == habit_id,
                    HabitCompletion.log_date >= since,
                )
            )
            .order_by(HabitCompletion.log_date.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def _get_streak_row(session: AsyncSession, user_id: str, habit_id: int) -> Optional[HabitStreak]:
        result = await session.execute(
            select(HabitStreak)
            .where(HabitStreak.user_id == user_id, HabitStreak.habit_id == habit_id)
            .with_for_update()
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def recalculate_streak(session: AsyncSession, user_id: str, habit_id: int, today: date) -> HabitStreak:
        """
        Recompute the current streak from history and raise the best streak
        watermark if needed. Both values are written on the same row.
        """
        history = await HabitService.get_completion_history(
            session, user_id, habit_id, settings.STREAK_WINDOW_DAYS, today
        )
        current = compute_current_streak(history, today)

        row = await HabitService._get_streak_row(session, user_id, habit_id)
        if row is None:
            row = HabitStreak(user_id=user_id, habit_id=habit_id)

        state = StreakState(row.current_streak, row.best_streak).advance(current)
        row.current_streak = state.current_streak
        row.best_streak = state.best_streak

        completed_dates = [c.log_date for c in history if c.completed and c.log_date <= today]
        row.last_completed_date = max(completed_dates) if completed_dates else None

        row.touch()
        session.add(row)
        await session.flush()
        logger.debug(
            "Habit {} streak for user {}: current={} best={}",
            habit_id, user_id, row.current_streak, row.best_streak,
        )
        return row

    @staticmethod
    async def list_habit_streaks(session: AsyncSession, user_id: str) -> List[HabitStreak]:
        result = await session.execute(
            select(HabitStreak).where(HabitStreak.user_id == user_id).order_by(HabitStreak.habit_id)
        )
        return list(result.scalars().all())
