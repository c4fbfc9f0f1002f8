"""Tracker repository: async access to goals, day entries, backlog and tasks.

Every method takes the owning user id and never returns (or touches) rows
belonging to anyone else. Not-found and not-owned look the same to callers:
``None`` or ``False``, never an exception.

The write methods serve the goal and day-entry CRUD routes, which live outside
this service; here only the analytics reads are routed.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.tracker.models import (
    BacklogCategory,
    BacklogItem,
    DayEntry,
    DayEntryUpsert,
    EisenhowerTask,
    Goal,
    GoalCreate,
    Priority,
    Quadrant,
)
from app.tracker.orm import BacklogItemRow, DayEntryRow, EisenhowerTaskRow, GoalRow

logger = logging.getLogger(__name__)


class TrackerRepository(Protocol):
    async def list_goals(self, user_id: str, completed: bool | None = None) -> list[Goal]: ...

    async def get_goal(self, user_id: str, goal_id: str) -> Goal | None: ...

    async def create_goal(self, user_id: str, payload: GoalCreate) -> Goal: ...

    async def set_goal_completed(self, user_id: str, goal_id: str, completed: bool) -> Goal | None: ...

    async def delete_goal(self, user_id: str, goal_id: str) -> bool: ...

    async def list_entries(self, user_id: str, start: date, end: date) -> list[DayEntry]: ...

    async def upsert_entry(self, user_id: str, payload: DayEntryUpsert) -> DayEntry | None: ...

    async def list_backlog(
        self,
        user_id: str,
        category: BacklogCategory | None = None,
        priority: Priority | None = None,
        completed: bool | None = None,
    ) -> list[BacklogItem]: ...

    async def list_tasks(
        self,
        user_id: str,
        quadrant: Quadrant | None = None,
        completed: bool | None = None,
    ) -> list[EisenhowerTask]: ...


def _completed_filter(stmt, column, completed: bool | None):
    if completed is True:
        return stmt.where(column.is_not(None))
    if completed is False:
        return stmt.where(column.is_(None))
    return stmt


class SqlTrackerRepository:
    """``TrackerRepository`` backed by an ``AsyncSession``."""

    def __init__(self, session: AsyncSession):
        self._session = session

    # -----------------------------------------------------------------------
    # Goals
    # -----------------------------------------------------------------------

    async def _goal_row(self, user_id: str, goal_id: str) -> GoalRow | None:
        stmt = select(GoalRow).where(GoalRow.id == goal_id, GoalRow.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_goals(self, user_id: str, completed: bool | None = None) -> list[Goal]:
        stmt = _completed_filter(select(GoalRow).where(GoalRow.user_id == user_id), GoalRow.completed_at, completed)
        if completed is True:
            stmt = stmt.order_by(GoalRow.completed_at.desc(), GoalRow.created_at.desc())
        else:
            stmt = stmt.order_by(GoalRow.created_at.desc())
        result = await self._session.execute(stmt)
        return [Goal.model_validate(row) for row in result.scalars().all()]

    async def get_goal(self, user_id: str, goal_id: str) -> Goal | None:
        row = await self._goal_row(user_id, goal_id)
        return Goal.model_validate(row) if row is not None else None

    async def create_goal(self, user_id: str, payload: GoalCreate) -> Goal:
        row = GoalRow(user_id=user_id, **payload.model_dump())
        self._session.add(row)
        await self._session.commit()
        await self._session.refresh(row)
        logger.info("Created goal %s for user %s", row.id, user_id)
        return Goal.model_validate(row)

    async def set_goal_completed(self, user_id: str, goal_id: str, completed: bool) -> Goal | None:
        row = await self._goal_row(user_id, goal_id)
        if row is None:
            return None
        row.completed_at = datetime.now(timezone.utc) if completed else None
        await self._session.commit()
        await self._session.refresh(row)
        return Goal.model_validate(row)

    async def delete_goal(self, user_id: str, goal_id: str) -> bool:
        row = await self._goal_row(user_id, goal_id)
        if row is None:
            return False
        await self._session.delete(row)
        await self._session.commit()
        logger.info("Deleted goal %s (and its day entries) for user %s", goal_id, user_id)
        return True

    # -----------------------------------------------------------------------
    # Day entries
    # -----------------------------------------------------------------------

    async def list_entries(self, user_id: str, start: date, end: date) -> list[DayEntry]:
        """Entries for the user's goals dated within ``[start, end]``."""
        stmt = (
            select(DayEntryRow)
            .join(GoalRow, DayEntryRow.goal_id == GoalRow.id)
            .where(GoalRow.user_id == user_id)
            .where(DayEntryRow.date >= start, DayEntryRow.date <= end)
            .order_by(DayEntryRow.date, DayEntryRow.goal_id)
        )
        result = await self._session.execute(stmt)
        return [DayEntry.model_validate(row) for row in result.scalars().all()]

    async def _entry_row(self, goal_id: str, entry_date: date) -> DayEntryRow | None:
        stmt = select(DayEntryRow).where(DayEntryRow.goal_id == goal_id, DayEntryRow.date == entry_date)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _apply(row: DayEntryRow, payload: DayEntryUpsert) -> None:
        row.status = payload.status.value
        row.actual_minutes = payload.actual_minutes
        row.comment = payload.comment
        row.missed_reason = payload.missed_reason
        row.time_blocks = [tb.model_dump(mode="json") for tb in payload.time_blocks]

    async def upsert_entry(self, user_id: str, payload: DayEntryUpsert) -> DayEntry | None:
        """Create or overwrite the single entry for ``(goal_id, date)``.

        Returns None when the goal does not belong to the user.
        """
        if await self._goal_row(user_id, payload.goal_id) is None:
            return None

        row = await self._entry_row(payload.goal_id, payload.date)
        if row is None:
            row = DayEntryRow(goal_id=payload.goal_id, date=payload.date)
            self._session.add(row)
        self._apply(row, payload)

        try:
            await self._session.commit()
        except IntegrityError:
            # Lost an insert race on (goal_id, date): overwrite the winner's row.
            await self._session.rollback()
            row = await self._entry_row(payload.goal_id, payload.date)
            if row is None:
                raise
            self._apply(row, payload)
            await self._session.commit()

        await self._session.refresh(row)
        logger.info("Upserted %s entry for goal %s on %s", payload.status.value, payload.goal_id, payload.date)
        return DayEntry.model_validate(row)

    # -----------------------------------------------------------------------
    # Boards
    # -----------------------------------------------------------------------

    async def list_backlog(
        self,
        user_id: str,
        category: BacklogCategory | None = None,
        priority: Priority | None = None,
        completed: bool | None = None,
    ) -> list[BacklogItem]:
        stmt = select(BacklogItemRow).where(BacklogItemRow.user_id == user_id)
        if category is not None:
            stmt = stmt.where(BacklogItemRow.category == category.value)
        if priority is not None:
            stmt = stmt.where(BacklogItemRow.priority == priority.value)
        stmt = _completed_filter(stmt, BacklogItemRow.completed_at, completed)
        # Active items first, newest first within each group.
        stmt = stmt.order_by(BacklogItemRow.completed_at.is_not(None), BacklogItemRow.created_at.desc())
        result = await self._session.execute(stmt)
        return [BacklogItem.model_validate(row) for row in result.scalars().all()]

    async def list_tasks(
        self,
        user_id: str,
        quadrant: Quadrant | None = None,
        completed: bool | None = None,
    ) -> list[EisenhowerTask]:
        stmt = select(EisenhowerTaskRow).where(EisenhowerTaskRow.user_id == user_id)
        if quadrant is not None:
            stmt = stmt.where(EisenhowerTaskRow.quadrant == quadrant.value)
        stmt = _completed_filter(stmt, EisenhowerTaskRow.completed_at, completed)
        stmt = stmt.order_by(EisenhowerTaskRow.completed_at.is_not(None), EisenhowerTaskRow.created_at.desc())
        result = await self._session.execute(stmt)
        return [EisenhowerTask.model_validate(row) for row in result.scalars().all()]
