"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the minewatch test suite.
"""
import os
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

# Keep the app's global engine away from any real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("CREATE_TABLES_ON_START", "false")
os.environ.setdefault("SEED_DEMO_DATA", "false")
os.environ.setdefault("ENVIRONMENT", "test")


class StepClock:
    """Deterministic clock: every call advances one second."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(now) -> StepClock:
    return StepClock(now)


@pytest.fixture
def truck(clock):
    from minewatch.domain.equipment import Equipment
    return Equipment("e1", "VOL-01", "DUMP_TRUCK", 100, 0, clock=clock)


@pytest.fixture
def excavator(clock):
    from minewatch.domain.equipment import Equipment
    from minewatch.domain.status import EquipmentType
    return Equipment("e2", "EXC-01", EquipmentType.EXCAVATOR, 80, 12.5, clock=clock)


@pytest.fixture
def memory_repo():
    from minewatch.services.memory_repository import InMemoryEquipmentRepository
    return InMemoryEquipmentRepository()


# ── Database fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def db_url(tmp_path) -> str:
    """File-backed SQLite with tables created through a sync engine."""
    from sqlalchemy import create_engine
    from sqlmodel import SQLModel
    import minewatch.models  # noqa: F401

    path = tmp_path / "minewatch-test.db"
    sync_engine = create_engine(f"sqlite:///{path}")
    SQLModel.metadata.create_all(sync_engine)
    sync_engine.dispose()
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def session_factory(db_url):
    from sqlalchemy import pool
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
    from sqlalchemy.orm import sessionmaker

    # NullPool: every session opens its connection on the loop that uses it
    engine = create_async_engine(db_url, poolclass=pool.NullPool)
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


# ── API clients ───────────────────────────────────────────────────────────────

@pytest.fixture
def client(memory_repo):
    """API client whose equipment endpoints use the in-memory repository."""
    from fastapi.testclient import TestClient
    from minewatch.api.deps import get_equipment_repository
    from minewatch.main import app

    app.dependency_overrides[get_equipment_repository] = lambda: memory_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def db_client(session_factory):
    """API client backed by the SQL repositories on a temporary database."""
    from fastapi.testclient import TestClient
    from minewatch.core.database import get_session
    from minewatch.main import app

    async def override_get_session():
        async with session_factory() as s:
            yield s

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()
