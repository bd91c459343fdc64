"""
Tests for the inquiry store engine and session helpers
"""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.pool import StaticPool

from estate_enquiry.database import build_engine, build_session_factory, create_tables, session_dependency
from estate_enquiry.models.database import Inquiry


def _inquiry(**overrides):
    values = dict(name="Asha Rao", email="asha@example.com", message="Is the 3BHK available?")
    values.update(overrides)
    return Inquiry(**values)


async def _count(session_factory):
    async with session_factory() as db:
        return (await db.execute(select(func.count(Inquiry.id)))).scalar()


@pytest.mark.parametrize("url", ["sqlite+aiosqlite://", "sqlite+aiosqlite:///:memory:"])
def test_memory_sqlite_pinned_to_one_connection(url):
    engine = build_engine(url)
    assert isinstance(engine.pool, StaticPool)


def test_file_sqlite_uses_regular_pool(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'inquiries.db'}")
    assert not isinstance(engine.pool, StaticPool)


async def test_tables_visible_across_sessions():
    engine = build_engine("sqlite+aiosqlite://")
    await create_tables(engine)
    session_factory = build_session_factory(engine)

    async with session_factory() as db:
        db.add(_inquiry())
        await db.commit()

    assert await _count(session_factory) == 1
    await engine.dispose()


async def test_timestamps_come_back_as_utc(session_factory):
    ist = timezone(timedelta(hours=5, minutes=30))
    async with session_factory() as db:
        inquiry = _inquiry(responded_at=datetime(2026, 10, 17, 15, 30, tzinfo=ist))
        db.add(inquiry)
        await db.commit()
        inquiry_id = inquiry.id

    async with session_factory() as db:
        stored = (await db.execute(select(Inquiry).where(Inquiry.id == inquiry_id))).scalar_one()

    assert stored.responded_at == datetime(2026, 10, 17, 10, 0, tzinfo=timezone.utc)
    assert stored.created_at.tzinfo is not None


class TestSessionDependency:

    async def test_commits_when_request_succeeds(self, session_factory):
        sessions = session_dependency(session_factory)()
        db = await sessions.__anext__()
        db.add(_inquiry())
        with pytest.raises(StopAsyncIteration):
            await sessions.__anext__()

        assert await _count(session_factory) == 1

    async def test_rolls_back_when_request_fails(self, session_factory):
        sessions = session_dependency(session_factory)()
        db = await sessions.__anext__()
        db.add(_inquiry())
        await db.flush()

        with pytest.raises(RuntimeError):
            await sessions.athrow(RuntimeError("handler failed"))

        assert await _count(session_factory) == 0
