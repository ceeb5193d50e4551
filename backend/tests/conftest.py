from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from hr_portal.config import get_settings
from hr_portal.db import get_session
from hr_portal.main import app
from hr_portal.models import SQLModel
from hr_portal.services.employee import InMemoryEmployeeService, set_employee_service

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncEngine


@pytest.fixture(autouse=True)
def employee_directory() -> InMemoryEmployeeService:
    """Give every test an empty employee directory."""
    directory = InMemoryEmployeeService()
    set_employee_service(directory)
    return directory


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Async engine with the tables created; skips when the database is unreachable.

    In CI, Alembic migrations run before tests so create_all is a no-op.
    """
    _engine = create_async_engine(get_settings().database_url)
    try:
        async with _engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
    except (OSError, SQLAlchemyError) as exc:
        await _engine.dispose()
        pytest.skip(f"database unavailable: {exc}")
    yield _engine
    await _engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Session inside a transaction that is rolled back after the test."""
    async with engine.connect() as conn:
        txn = await conn.begin()
        session = AsyncSession(bind=conn, expire_on_commit=False)
        yield session
        await session.close()
        if txn.is_active:
            await txn.rollback()


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the test transaction."""

    async def _override_get_session() -> AsyncIterator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_session] = _override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    """HTTP client for endpoints that never touch the database."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
