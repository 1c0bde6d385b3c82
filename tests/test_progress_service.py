import asyncio
from datetime import date, timedelta

from rise66.config import settings
from rise66.services.habit_service import HabitService
from rise66.services.profile_services import get_or_create_user
from rise66.services.progress_service import ProgressService

TODAY = date(2026, 3, 15)


def test_initialize_user_is_idempotent(make_sessionmaker):
    async def _run():
        engine, Session = await make_sessionmaker()
        async with Session() as session:
            await get_or_create_user(session, "user-1")
            created, habits, progress = await ProgressService.initialize_user(session, "user-1", TODAY)
            await session.commit()
            assert created is True
            assert len(habits) == 9
            assert progress.current_day == 1
            assert progress.start_date == TODAY

            created, habits, progress = await ProgressService.initialize_user(
                session, "user-1", TODAY + timedelta(days=3)
            )
            assert created is False
            assert len(habits) == 9
            assert progress.start_date == TODAY
        await engine.dispose()

    asyncio.run(_run())


def test_program_streak_counts_complete_days(make_sessionmaker, monkeypatch):
    monkeypatch.setattr(settings, "DAY_COMPLETE_THRESHOLD", 7)

    async def _run():
        engine, Session = await make_sessionmaker()
        async with Session() as session:
            await get_or_create_user(session, "user-1")
            _, habits, _ = await ProgressService.initialize_user(session, "user-1", TODAY - timedelta(days=5))

            # two full days (7 habits each), then today with only 3 habits
            for offset, count in ((2, 7), (1, 7), (0, 3)):
                for habit in habits[:count]:
                    await HabitService.toggle_completion(
                        session, "user-1", habit.id, TODAY - timedelta(days=offset), True, today=TODAY
                    )
            await session.commit()

            progress = await ProgressService.get_progress(session, "user-1")
            assert progress.total_days_completed == 2
            assert progress.current_streak == 0
            assert progress.best_streak == 0

            # finishing today's seventh habit completes a three-day run
            for habit in habits[3:7]:
                await HabitService.toggle_completion(session, "user-1", habit.id, TODAY, True, today=TODAY)
            await session.commit()

            progress = await ProgressService.get_progress(session, "user-1")
            assert progress.total_days_completed == 3
            assert progress.current_streak == 3
            assert progress.best_streak == 3
        await engine.dispose()

    asyncio.run(_run())


def test_sync_current_day_moves_targets(make_sessionmaker):
    async def _run():
        engine, Session = await make_sessionmaker()
        async with Session() as session:
            await get_or_create_user(session, "user-1")
            await ProgressService.initialize_user(session, "user-1", TODAY - timedelta(days=14))

            assert await ProgressService.load_elapsed_program_day(session, "user-1", TODAY) == 15
            progress = await ProgressService.sync_current_day(session, "user-1", TODAY)
            await session.commit()
            assert progress.current_day == 15

            habits = {h.name: h for h in await HabitService.list_habits(session, "user-1")}
            assert habits["running"].current_target == "3.0 KM"
            assert habits["wakeup"].current_target == "7:00 AM"

            assert await ProgressService.load_elapsed_program_day(session, "nobody", TODAY) == 1
            assert await ProgressService.sync_current_day(session, "nobody", TODAY) is None
        await engine.dispose()

    asyncio.run(_run())


def test_weekly_progress_and_habit_chart(make_sessionmaker):
    async def _run():
        engine, Session = await make_sessionmaker()
        async with Session() as session:
            await get_or_create_user(session, "user-1")
            _, habits, _ = await ProgressService.initialize_user(session, "user-1", TODAY - timedelta(days=6))
            running = next(h for h in habits if h.name == "running")
            reading = next(h for h in habits if h.name == "reading")

            start = TODAY - timedelta(days=6)
            await HabitService.toggle_completion(session, "user-1", running.id, start, True, "2.0 KM", today=TODAY)
            await HabitService.toggle_completion(session, "user-1", reading.id, start, False, today=TODAY)
            await HabitService.toggle_completion(session, "user-1", running.id, TODAY, True, "2.5 KM", today=TODAY)
            # outside the week
            await HabitService.toggle_completion(
                session, "user-1", running.id, TODAY + timedelta(days=1), True, today=TODAY
            )
            await session.commit()

            weekly = await ProgressService.weekly_progress(session, "user-1", start)
            assert weekly == [
                {"date": start.isoformat(), "completed_count": 1, "total_habits": 2},
                {"date": TODAY.isoformat(), "completed_count": 1, "total_habits": 1},
            ]

            chart = await ProgressService.habit_progress_chart(session, "user-1", "running")
            assert [row["actual_value"] for row in chart] == ["2.0 KM", "2.5 KM", None]
            assert chart[0]["date"] == start.isoformat()
            assert await ProgressService.habit_progress_chart(session, "user-1", "yoga") == []
        await engine.dispose()

    asyncio.run(_run())
