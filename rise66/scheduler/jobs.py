from __future__ import annotations
from datetime import datetime, timezone
from loguru import logger
from sqlmodel import select

from ..db import AsyncSessionLocal
from ..models.progress import UserProgress
from ..services.progress_service import ProgressService

async def daily_rollover_job():
    """Advance every user's program day and refresh their habit targets."""
    today = datetime.now(timezone.utc).date()
    logger.info("Running daily rollover for {}", today)
    session = AsyncSessionLocal()
    try:
        result = await session.execute(select(UserProgress.user_id))
        user_ids = list(result.scalars().all())

        for user_id in user_ids:
            await ProgressService.sync_current_day(session, user_id, today)

        await session.commit()
        logger.info("Daily rollover updated {} users", len(user_ids))
    except Exception as e:
        logger.exception("Error in daily_rollover_job: {}", e)
        await session.rollback()
    finally:
        await session.close()
