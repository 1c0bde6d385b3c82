from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlmodel import SQLModel
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from loguru import logger

from .config import settings

engine = create_async_engine(settings.DATABASE_URL, echo=False, future=True, pool_pre_ping=True)
AsyncSessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def _ensure_sqlite_dir(url: str) -> None:
    parsed = make_url(url)
    if not parsed.drivername.startswith("sqlite"):
        return
    database = parsed.database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def import_models() -> None:
    """Register every table on SQLModel.metadata."""
    from .models.users import User  # noqa: F401
    from .models.habit import Habit, HabitCompletion, HabitStreak  # noqa: F401
    from .models.journal import JournalEntry  # noqa: F401
    from .models.progress import UserProgress  # noqa: F401


async def init_db() -> None:
    """Create tables."""
    import_models()
    _ensure_sqlite_dir(settings.DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database tables created/verified")

@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one transaction per request.

    Commits when the endpoint returns and rolls back when it raises, so the
    writes a handler makes (completion, streaks, targets) land together.
    """
    async with get_session() as session:
        yield session
