from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from photostore.config import Settings, get_settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database."""
    kwargs = {"echo": settings.debug, "pool_pre_ping": True}
    if settings.is_sqlite:
        # One shared connection, otherwise every checkout sees a fresh :memory: database
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_size"] = settings.database_pool_size

    async_engine = create_async_engine(settings.database_url, **kwargs)

    if settings.is_sqlite:
        # Rule and tag cascades are declared as FK actions
        @event.listens_for(async_engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return async_engine


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


settings = get_settings()

engine = build_engine(settings)

AsyncSessionLocal = build_sessionmaker(engine)


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Session for callers outside a request, e.g. scripts and maintenance jobs.

    Rolls back whatever is still pending if the block raises.

    Args:
        session_factory: Defaults to ``AsyncSessionLocal``
    """
    async with (session_factory or AsyncSessionLocal)() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
