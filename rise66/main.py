from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator
from fastapi import FastAPI, HTTPException, Depends
from loguru import logger
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
import sys

from .config import settings
from .db import init_db, get_db_session
from .scheduler.scheduler_instance import start_scheduler, shutdown_scheduler, scheduler
from .routers import ai, habits, journal, progress

from .models.users import User
from .models.habit import HabitCompletion


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # --- startup ---
    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL)

    await init_db()
    if settings.ENABLE_SCHEDULER:
        start_scheduler()
    logger.info("Rise 66 started ({})", settings.ENV)

    yield

    # --- shutdown ---
    shutdown_scheduler()
    logger.info("Rise 66 shut down")


app = FastAPI(title="Rise 66", lifespan=lifespan)

app.include_router(habits.router)
app.include_router(progress.router)
app.include_router(journal.router)
app.include_router(ai.router)


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "scheduler_running": scheduler.running if scheduler else False,
        "jobs_count": len(scheduler.get_jobs()) if scheduler and scheduler.running else 0,
    }


@app.get("/metrics")
async def metrics(session: AsyncSession = Depends(get_db_session)):
    """Basic metrics endpoint."""
    if not settings.ENABLE_METRICS:
        raise HTTPException(status_code=404)

    from sqlmodel import select, func

    user_count = (await session.execute(select(func.count(User.id)))).scalar_one()
    completion_count = (
        await session.execute(select(func.count(HabitCompletion.id)).where(HabitCompletion.completed == True))  # noqa: E712
    ).scalar_one()

    return {
        "total_users": user_count,
        "total_completions": completion_count,
        "timestamp": datetime.utcnow().isoformat(),
    }
