import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import OperationalError

# Load .env.dev for tests when present so integration tests can reach a real database
from dotenv import load_dotenv

env_dev_path = os.path.join(os.path.dirname(__file__), ".env.dev")
if os.path.exists(env_dev_path):
    load_dotenv(env_dev_path, override=True)

from libs.common.config import get_settings
from libs.db.base import Base
from services.reports_service.app.main import app

# Import the models so metadata includes the member/event/check-in tables
from services.reports_service import models as _report_models  # noqa: F401

# Clear cached settings to reload with new env vars
get_settings.cache_clear()
settings = get_settings()


@pytest_asyncio.fixture
async def test_engine():
    """
    Engine against the configured database, with the referenced tables created.
    Tests using it are skipped when no database is reachable.
    """
    db_url = settings.DATABASE_URL.replace("host.docker.internal", "localhost")

    engine = create_async_engine(db_url, future=True)

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (OperationalError, OSError):
        await engine.dispose()
        pytest.skip("Database not available for tests")

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a database session that rolls back after the test.
    join_transaction_mode="create_savepoint" lets the session commit freely
    while everything stays inside the outer transaction.
    """
    connection = await test_engine.connect()
    transaction = await connection.begin()

    session_factory = async_sessionmaker(
        bind=connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = session_factory()

    try:
        yield session
    finally:
        await session.close()
        await transaction.rollback()
        await connection.close()


@pytest.fixture
def attendance_repository():
    """Empty in-memory repository; tests fill ``members`` and ``attendance``."""
    from tests.stubs import InMemoryAttendanceRepository

    return InMemoryAttendanceRepository()


@pytest_asyncio.fixture
async def client(attendance_repository) -> AsyncGenerator[AsyncClient, None]:
    """
    AsyncClient for the reports app, reading from the in-memory repository.
    """
    from services.reports_service.router import get_attendance_repository

    app.dependency_overrides[get_attendance_repository] = lambda: attendance_repository

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def db_client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """
    AsyncClient for the reports app, reading through the SQL repository.
    """
    from libs.db.session import get_async_db

    app.dependency_overrides[get_async_db] = lambda: db_session

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
