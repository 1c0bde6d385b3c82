import asyncio
from datetime import datetime, timezone
from loguru import logger
from sqlmodel import select

from rise66.db import get_session, init_db
from rise66.models.habit import Habit
from rise66.models.progress import UserProgress
from rise66.services.habit_service import HabitService
from rise66.services.progress_service import ProgressService

async def main():
    """Recompute every stored habit and program streak as of today (UTC)."""
    await init_db()
    today = datetime.now(timezone.utc).date()

    async with get_session() as session:
        habits = (await session.execute(select(Habit))).scalars().all()
        for habit in habits:
            await HabitService.recalculate_streak(session, habit.user_id, habit.id, today)

        user_ids = (await session.execute(select(UserProgress.user_id))).scalars().all()
        for user_id in user_ids:
            await ProgressService.recalculate_program_streak(session, user_id, today)

    logger.info("Recalculated {} habit streaks and {} program streaks", len(habits), len(user_ids))

if __name__ == "__main__":
    asyncio.run(main())
