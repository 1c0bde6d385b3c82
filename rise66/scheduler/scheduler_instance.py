from __future__ import annotations
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.executors.asyncio import AsyncIOExecutor
from apscheduler.triggers.cron import CronTrigger
from pytz import utc
from loguru import logger

ROLLOVER_JOB_ID = "daily_rollover"

executors = {
    'default': AsyncIOExecutor()
}

job_defaults = {
    'coalesce': True,  # Combine missed runs
    'max_instances': 1,  # One instance per job
    'misfire_grace_time': 300,  # 5 min grace for missed jobs
}

# The only job is re-registered on every start, so the default in-memory store is enough
scheduler = AsyncIOScheduler(
    executors=executors,
    job_defaults=job_defaults,
    timezone=utc,
)

def register_jobs(target: AsyncIOScheduler = scheduler) -> None:
    target.add_job(
        func="rise66.scheduler.jobs:daily_rollover_job",
        trigger=CronTrigger(hour=0, minute=5, timezone=utc),
        id=ROLLOVER_JOB_ID,
        replace_existing=True,
    )
    logger.info("Scheduled daily_rollover_job at 00:05 UTC")

def start_scheduler():
    if not scheduler.running:
        scheduler.start()
        try:
            register_jobs()
        except Exception:
            logger.exception("Failed to schedule rollover job")
        logger.info("APScheduler started")

def shutdown_scheduler():
    if scheduler.running:
        scheduler.shutdown()
        logger.info("APScheduler shut down")
