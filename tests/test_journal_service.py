import asyncio
from datetime import date, timedelta

import pytest

from rise66.services.journal_service import JournalService
from rise66.services.profile_services import get_or_create_user

TODAY = date(2026, 3, 15)


def test_upsert_overwrites_same_day(make_sessionmaker):
    async def _run():
        engine, Session = await make_sessionmaker()
        async with Session() as session:
            await get_or_create_user(session, "user-1")
            first = await JournalService.upsert_entry(session, "user-1", TODAY, "okay", "First draft")
            await session.commit()
            second = await JournalService.upsert_entry(
                session, "user-1", TODAY, "great", "Final", ai_affirmation="Keep going"
            )
            await session.commit()

            assert first.id == second.id
            entry = await JournalService.get_entry(session, "user-1", TODAY)
            assert entry.mood == "great"
            assert entry.content == "Final"
            assert entry.ai_affirmation == "Keep going"
            assert await JournalService.get_entry(session, "user-1", TODAY - timedelta(days=1)) is None
        await engine.dispose()

    asyncio.run(_run())


def test_unknown_mood_is_rejected(make_sessionmaker):
    async def _run():
        engine, Session = await make_sessionmaker()
        async with Session() as session:
            with pytest.raises(ValueError):
                await JournalService.upsert_entry(session, "user-1", TODAY, "ecstatic")
        await engine.dispose()

    asyncio.run(_run())


def test_recent_entries_newest_first(make_sessionmaker):
    async def _run():
        engine, Session = await make_sessionmaker()
        async with Session() as session:
            await get_or_create_user(session, "user-1")
            for offset in range(7):
                await JournalService.upsert_entry(session, "user-1", TODAY - timedelta(days=offset), "meh")
            await JournalService.upsert_entry(session, "user-2", TODAY, "amazing")
            await session.commit()

            entries = await JournalService.recent_entries(session, "user-1")
            assert [e.entry_date for e in entries] == [TODAY - timedelta(days=i) for i in range(5)]
            assert len(await JournalService.recent_entries(session, "user-1", limit=2)) == 2
        await engine.dispose()

    asyncio.run(_run())
