import os
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool
from sqlalchemy import TypeDecorator, DateTime
from datetime import timezone
from dotenv import load_dotenv

load_dotenv()

# Inquiries live in a local SQLite file unless DATABASE_URL points elsewhere
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./inquiries.db")
SQL_ECHO = os.getenv("DEBUG") == "true"


class TZDateTime(TypeDecorator):
    """
    Stores inquiry timestamps (created, updated, responded) as UTC and hands
    them back timezone-aware, which SQLite would otherwise drop.
    """
    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            else:
                value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Base(DeclarativeBase):
    pass


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (url.endswith("://") or ":memory:" in url)


def build_engine(url: str = DATABASE_URL) -> AsyncEngine:
    """
    Engine for the inquiry store.

    An in-memory SQLite database exists per connection, so it is pinned to a
    single shared connection; otherwise each session would see empty tables.
    """
    kwargs = {"echo": SQL_ECHO}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(url):
            kwargs["poolclass"] = StaticPool
    return create_async_engine(url, **kwargs)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    # Rows stay readable after commit; services return them as response models
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


def session_dependency(session_factory: async_sessionmaker):
    """FastAPI dependency yielding one session per request, committed on success"""

    async def get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return get_session


async def create_tables(bind: AsyncEngine) -> None:
    # Registers Inquiry and User on Base.metadata
    from estate_enquiry.models import database as _models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


engine = build_engine()
AsyncSessionLocal = build_session_factory(engine)
get_db = session_dependency(AsyncSessionLocal)


async def init_db():
    await create_tables(engine)


async def close_db():
    await engine.dispose()
