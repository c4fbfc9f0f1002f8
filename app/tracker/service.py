"""Analytics service: fetches through the repository, aggregates with pure functions.

The aggregators in ``analytics`` and ``boards`` never see the repository;
this layer is the only place I/O and computation meet.
"""

from __future__ import annotations

import logging
from datetime import date, timezone, tzinfo

from app.tracker import analytics, boards
from app.tracker.models import GoalAnalytics, MonthAnalytics, OperationStats, VisionStats
from app.tracker.repository import TrackerRepository
from app.tracker.schedule import days_in_month

logger = logging.getLogger(__name__)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar date of the month (inclusive)."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))


class AnalyticsService:
    def __init__(
        self,
        repository: TrackerRepository,
        top_missed_reasons: int = analytics.TOP_MISSED_REASONS,
        operations_weeks: int = boards.OPERATIONS_WEEKS,
        tz: tzinfo = timezone.utc,
    ):
        self._repo = repository
        self._top_missed_reasons = top_missed_reasons
        self._operations_weeks = operations_weeks
        self._tz = tz

    async def month_analytics(self, user_id: str, year: int, month: int, today: date) -> MonthAnalytics:
        start, end = month_bounds(year, month)
        goals = await self._repo.list_goals(user_id)
        entries = await self._repo.list_entries(user_id, start, end)
        logger.debug(
            "Month analytics for user %s %04d-%02d: %d goals, %d entries",
            user_id, year, month, len(goals), len(entries),
        )
        return analytics.compute_month_analytics(
            goals, entries, year, month, today, top_reasons=self._top_missed_reasons
        )

    async def goal_analytics(
        self,
        user_id: str,
        goal_id: str,
        year: int,
        month: int,
        today: date,
    ) -> GoalAnalytics | None:
        goal = await self._repo.get_goal(user_id, goal_id)
        if goal is None:
            return None
        start, end = month_bounds(year, month)
        entries = await self._repo.list_entries(user_id, start, end)
        return analytics.compute_goal_analytics(goal, entries, year, month, today)

    async def operation_stats(self, user_id: str, today: date) -> OperationStats:
        tasks = await self._repo.list_tasks(user_id)
        return boards.compute_operation_stats(tasks, today, weeks=self._operations_weeks, tz=self._tz)

    async def vision_stats(self, user_id: str) -> VisionStats:
        items = await self._repo.list_backlog(user_id)
        return boards.compute_vision_stats(items)
