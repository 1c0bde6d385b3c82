import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from pytz import utc

from rise66.scheduler.jobs import daily_rollover_job
from rise66.scheduler.scheduler_instance import ROLLOVER_JOB_ID, register_jobs
from rise66.services.progress_service import ProgressService


def _fake_session(user_ids):
    fake_session = AsyncMock()
    result = MagicMock()
    result.scalars.return_value.all.return_value = user_ids
    fake_session.execute = AsyncMock(return_value=result)
    return fake_session


def test_register_jobs_schedules_rollover_after_midnight():
    test_scheduler = AsyncIOScheduler(timezone=utc)
    register_jobs(test_scheduler)

    job = test_scheduler.get_job(ROLLOVER_JOB_ID)
    assert job is not None
    next_run = job.trigger.get_next_fire_time(previous_fire_time=None, now=datetime.now(timezone.utc))
    assert next_run is not None
    assert next_run.hour == 0 and next_run.minute == 5


def test_daily_rollover_job_syncs_every_user(monkeypatch):
    fake_session = _fake_session(["u1", "u2"])
    monkeypatch.setattr("rise66.scheduler.jobs.AsyncSessionLocal", lambda: fake_session)
    sync = AsyncMock()
    monkeypatch.setattr(ProgressService, "sync_current_day", sync)

    asyncio.run(daily_rollover_job())

    assert [c.args[1] for c in sync.await_args_list] == ["u1", "u2"]
    fake_session.commit.assert_awaited_once()
    fake_session.close.assert_awaited_once()


def test_daily_rollover_job_rolls_back_on_error(monkeypatch):
    fake_session = _fake_session(["u1"])
    monkeypatch.setattr("rise66.scheduler.jobs.AsyncSessionLocal", lambda: fake_session)
    monkeypatch.setattr(ProgressService, "sync_current_day", AsyncMock(side_effect=RuntimeError("db down")))

    asyncio.run(daily_rollover_job())

    fake_session.rollback.assert_awaited_once()
    fake_session.commit.assert_not_awaited()
    fake_session.close.assert_awaited_once()
