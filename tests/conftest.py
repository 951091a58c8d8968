"""Pytest configuration and fixtures."""
from __future__ import annotations

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from photostore.config import Settings
from photostore.database import build_engine, build_sessionmaker
from photostore.models import Base, User
from tests.factories import UserFactory

# In-memory database; build_engine pins it to one connection and turns on FKs
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(database_url=TEST_DATABASE_URL)


@pytest_asyncio.fixture(scope="function")
async def test_db_engine(test_settings: Settings) -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine with all tables."""
    engine = build_engine(test_settings)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session_maker = build_sessionmaker(test_db_engine)

    async with async_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def owner(db_session: AsyncSession) -> User:
    user = UserFactory.create(username="alice")
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    user = UserFactory.create(username="bob")
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture(scope="session")
def span_exporter() -> InMemorySpanExporter:
    """Install an in-memory tracer provider once for the whole run."""
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    return exporter


@pytest.fixture
def spans(span_exporter: InMemorySpanExporter) -> InMemorySpanExporter:
    span_exporter.clear()
    return span_exporter
