"""Service test fixtures — async DB, FastAPI test client, in-memory repository.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - FakeEventRepository mirrors SqlEventRepository semantics without SQL

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route and
      repository tests (ilike compiles to lower() LIKE lower() there)
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import recurring.infrastructure.database as db_module
from recurring.core.domain_types import CustomerId, EventId, RecurrenceDefinition
from recurring.db.base import Base
from recurring.infrastructure.database import DatabaseSessionManager, get_db
from recurring.main import app
from recurring.models import Event  # noqa: F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── In-memory repository ────────────────────────────────────────

@dataclass
class FakeEvent:
    customer_id: uuid.UUID
    name: str
    start_date: date
    interval_days: int
    stop_at: date | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class FakeEventRepository:
    """Dict-backed EventRepository + CandidateSelector for service tests."""

    def __init__(self):
        self.rows: dict[uuid.UUID, FakeEvent] = {}
        self.selector_calls: list[tuple] = []

    def _owned(self, customer_id, event_id):
        row = self.rows.get(event_id)
        if row is None or row.customer_id != customer_id:
            return None
        return row

    async def create(self, customer_id, name, start_date, interval_days, stop_at):
        row = FakeEvent(customer_id, name, start_date, interval_days, stop_at)
        self.rows[row.id] = row
        return row

    async def get(self, customer_id, event_id):
        return self._owned(customer_id, event_id)

    async def list(self, customer_id, limit, offset):
        owned = [r for r in self.rows.values() if r.customer_id == customer_id]
        owned.sort(key=lambda r: r.created_at, reverse=True)
        return owned[offset:offset + limit]

    async def update(self, customer_id, event_id, changes):
        row = self._owned(customer_id, event_id)
        if row is None:
            return None
        updated = replace(row, **changes)
        self.rows[event_id] = updated
        return updated

    async def delete(self, customer_id, event_id):
        if self._owned(customer_id, event_id) is None:
            return False
        del self.rows[event_id]
        return True

    async def find_for_occurrences(self, customer_id, name_filter):
        self.selector_calls.append((customer_id, name_filter))
        return [
            RecurrenceDefinition(
                id=EventId(r.id), owner_id=CustomerId(r.customer_id), name=r.name,
                start_date=r.start_date, interval_days=r.interval_days,
                stop_date=r.stop_at,
            )
            for r in self.rows.values()
            if r.customer_id == customer_id
            and (name_filter is None or name_filter.casefold() in r.name.casefold())
        ]


@pytest.fixture
def fake_repo():
    return FakeEventRepository()
