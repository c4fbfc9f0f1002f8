"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db import Base
from app.main import app
from app.tracker import orm  # noqa: F401  (registers tables on Base.metadata)
from app.tracker.models import (
    BacklogCategory,
    BacklogItem,
    DayEntry,
    DayStatus,
    EisenhowerTask,
    Goal,
    Quadrant,
)
from app.tracker.router import get_repository

USER_ID = "user-1"


# ---------------------------------------------------------------------------
# Fake repository (no real database needed)
# ---------------------------------------------------------------------------

class FakeRepository:
    """In-memory stand-in for SqlTrackerRepository used in endpoint/service tests."""

    def __init__(
        self,
        goals: list[Goal] | None = None,
        entries: list[DayEntry] | None = None,
        tasks: list[EisenhowerTask] | None = None,
        backlog: list[BacklogItem] | None = None,
        owner: str = USER_ID,
    ):
        self.goals = goals or []
        self.entries = entries or []
        self.tasks = tasks or []
        self.backlog = backlog or []
        self.owner = owner
        self.entry_queries: list[tuple[date, date]] = []

    async def list_goals(self, user_id, completed=None):
        return list(self.goals) if user_id == self.owner else []

    async def get_goal(self, user_id, goal_id):
        if user_id != self.owner:
            return None
        return next((g for g in self.goals if g.id == goal_id), None)

    async def list_entries(self, user_id, start, end):
        self.entry_queries.append((start, end))
        if user_id != self.owner:
            return []
        return [e for e in self.entries if start <= e.date <= end]

    async def list_tasks(self, user_id, quadrant=None, completed=None):
        return list(self.tasks) if user_id == self.owner else []

    async def list_backlog(self, user_id, category=None, priority=None, completed=None):
        return list(self.backlog) if user_id == self.owner else []


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_repository():
    """Empty FakeRepository (fill its lists in tests as needed)."""
    return FakeRepository()


@pytest.fixture()
def override_repository(fake_repository):
    """Override the FastAPI dependency so no real DB is needed."""
    app.dependency_overrides[get_repository] = lambda: fake_repository
    yield fake_repository
    app.dependency_overrides.clear()


@pytest.fixture()
def fixed_today(monkeypatch):
    today = date(2025, 3, 20)
    monkeypatch.setattr("app.tracker.router._today", lambda: today)
    return today


@pytest.fixture()
async def client(override_repository, fixed_today):
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"X-User-Id": USER_ID},
    ) as ac:
        yield ac


@pytest.fixture()
async def db_session():
    """AsyncSession on a fresh in-memory SQLite database."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session
    await engine.dispose()


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def make_goal(
    goal_id: str = "g1",
    allocated_minutes: int = 30,
    weekend: bool = False,
    weekday: bool = False,
) -> Goal:
    return Goal(
        id=goal_id,
        title=f"Goal {goal_id}",
        start_time="07:00",
        end_time="07:30",
        allocated_minutes=allocated_minutes,
        is_weekend_goal=weekend,
        is_weekday_goal=weekday,
    )


def make_entry(
    goal_id: str,
    d: date,
    status: DayStatus | str = DayStatus.hit,
    actual_minutes: int = 0,
    missed_reason: str | None = None,
) -> DayEntry:
    return DayEntry(
        goal_id=goal_id,
        date=d,
        status=status,
        actual_minutes=actual_minutes,
        missed_reason=missed_reason,
    )


def make_task(
    task_id: str,
    quadrant: Quadrant,
    created: date,
    completed: date | None = None,
) -> EisenhowerTask:
    return EisenhowerTask(
        id=task_id,
        title=f"Task {task_id}",
        quadrant=quadrant,
        created_at=datetime(created.year, created.month, created.day, 9, 0, tzinfo=timezone.utc),
        completed_at=(
            datetime(completed.year, completed.month, completed.day, 17, 0, tzinfo=timezone.utc)
            if completed
            else None
        ),
    )


def make_backlog_item(
    item_id: str,
    category: BacklogCategory,
    estimated_hours: int | None = None,
    completed: bool = False,
) -> BacklogItem:
    return BacklogItem(
        id=item_id,
        title=f"Item {item_id}",
        category=category,
        tentative_start_date=date(2025, 4, 1),
        estimated_hours=estimated_hours,
        completed_at=datetime(2025, 3, 1, tzinfo=timezone.utc) if completed else None,
    )
