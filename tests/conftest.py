import os
import sys

# Add the repository root to sys.path so the rise66 package imports without installation
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

os.environ.setdefault("ENABLE_SCHEDULER", "false")

import pytest
from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from rise66.config import settings
from rise66.db import import_models


@pytest.fixture
def make_sessionmaker(tmp_path):
    """Coroutine building a fresh SQLite database; returns (engine, session factory)."""
    async def _make():
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'rise66_test.db'}", poolclass=NullPool)
        import_models()
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        return engine, sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    return _make


@pytest.fixture
def no_ai_keys(monkeypatch):
    monkeypatch.setattr(settings, "TOGETHER_API_KEY", None)
    monkeypatch.setattr(settings, "HUGGINGFACE_API_KEY", None)
