"""Tracker HTTP router — analytics & catalog."""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import current_user_id, verify_api_key
from app.config import settings
from app.db import get_session
from app.tracker.catalog import MISSED_REASONS, list_categories, list_quadrants
from app.tracker.models import GoalAnalytics, GoalScope, MonthAnalytics, OperationStats, VisionStats
from app.tracker.repository import SqlTrackerRepository, TrackerRepository
from app.tracker.service import AnalyticsService

router = APIRouter(prefix="/tracker", tags=["tracker"])


def _today() -> date:
    return datetime.now(ZoneInfo(settings.default_tz)).date()


def get_repository(session: AsyncSession = Depends(get_session)) -> TrackerRepository:
    return SqlTrackerRepository(session)


def get_service(repository: TrackerRepository = Depends(get_repository)) -> AnalyticsService:
    return AnalyticsService(
        repository,
        top_missed_reasons=settings.top_missed_reasons,
        operations_weeks=settings.operations_weeks,
        tz=ZoneInfo(settings.default_tz),
    )


def _resolve_month(year: int | None, month: int | None, today: date) -> tuple[int, int]:
    return (year if year is not None else today.year, month if month is not None else today.month)


# ---------------------------------------------------------------------------
# /tracker/analytics
# ---------------------------------------------------------------------------


@router.get("/analytics/month", response_model=MonthAnalytics)
async def month_analytics(
    service: AnalyticsService = Depends(get_service),
    user_id: str = Depends(current_user_id),
    _: str = Depends(verify_api_key),
    year: int | None = Query(default=None, ge=1, le=9999, description="Calendar year (default: this year)"),
    month: int | None = Query(default=None, ge=1, le=12, description="Calendar month 1-12 (default: this month)"),
) -> MonthAnalytics:
    today = _today()
    y, m = _resolve_month(year, month, today)
    return await service.month_analytics(user_id, y, m, today)


@router.get("/analytics/goals/{goal_id}", response_model=GoalAnalytics)
async def goal_analytics(
    goal_id: str,
    service: AnalyticsService = Depends(get_service),
    user_id: str = Depends(current_user_id),
    _: str = Depends(verify_api_key),
    year: int | None = Query(default=None, ge=1, le=9999),
    month: int | None = Query(default=None, ge=1, le=12),
) -> GoalAnalytics:
    today = _today()
    y, m = _resolve_month(year, month, today)
    result = await service.goal_analytics(user_id, goal_id, y, m, today)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Goal not found: {goal_id}")
    return result


@router.get("/analytics/operations", response_model=OperationStats)
async def operation_stats(
    service: AnalyticsService = Depends(get_service),
    user_id: str = Depends(current_user_id),
    _: str = Depends(verify_api_key),
) -> OperationStats:
    return await service.operation_stats(user_id, _today())


@router.get("/analytics/vision", response_model=VisionStats)
async def vision_stats(
    service: AnalyticsService = Depends(get_service),
    user_id: str = Depends(current_user_id),
    _: str = Depends(verify_api_key),
) -> VisionStats:
    return await service.vision_stats(user_id)


# ---------------------------------------------------------------------------
# /tracker/catalog
# ---------------------------------------------------------------------------


@router.get("/catalog")
async def catalog(
    _: str = Depends(verify_api_key),
) -> dict:
    return {
        "missed_reasons": list(MISSED_REASONS),
        "backlog_categories": [{"key": c.category.value, "label": c.label} for c in list_categories()],
        "quadrants": [
            {"key": q.quadrant.value, "label": q.label, "subtitle": q.subtitle} for q in list_quadrants()
        ],
        "goal_scopes": [s.value for s in GoalScope],
    }
