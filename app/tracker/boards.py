"""Operations (Eisenhower) and vision (backlog) board statistics."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Sequence

from app.tracker.catalog import list_categories, list_quadrants
from app.tracker.models import (
    BacklogItem,
    CategoryStats,
    EisenhowerTask,
    OperationStats,
    QuadrantStats,
    VisionStats,
    WeeklyThroughput,
)

OPERATIONS_WEEKS = 8


def monday_of(d: date) -> date:
    # Monday = 0, Sunday = 6
    return d - timedelta(days=d.weekday())


def local_date(moment: datetime, tz: tzinfo = timezone.utc) -> date:
    """Calendar date of ``moment`` in ``tz``; naive values are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(tz).date()


def weekly_throughput(
    tasks: Sequence[EisenhowerTask],
    today: date,
    weeks: int = OPERATIONS_WEEKS,
    tz: tzinfo = timezone.utc,
) -> list[WeeklyThroughput]:
    """Tasks created/completed per Monday-start week, oldest first, ending with this week.

    ``today`` and the task timestamps are both read in ``tz``.
    """
    this_week = monday_of(today)
    buckets = {
        this_week - timedelta(weeks=i): WeeklyThroughput(week_start=this_week - timedelta(weeks=i))
        for i in range(weeks - 1, -1, -1)
    }
    for task in tasks:
        created = buckets.get(monday_of(local_date(task.created_at, tz)))
        if created is not None:
            created.created += 1
        if task.completed_at is not None:
            done = buckets.get(monday_of(local_date(task.completed_at, tz)))
            if done is not None:
                done.completed += 1
    return list(buckets.values())


def compute_operation_stats(
    tasks: Sequence[EisenhowerTask],
    today: date,
    weeks: int = OPERATIONS_WEEKS,
    tz: tzinfo = timezone.utc,
) -> OperationStats:
    completed = [t for t in tasks if t.completed_at is not None]
    active = [t for t in tasks if t.completed_at is None]

    quadrants = [
        QuadrantStats(
            quadrant=cfg.quadrant,
            label=cfg.label,
            active=sum(1 for t in active if t.quadrant == cfg.quadrant),
            completed=sum(1 for t in completed if t.quadrant == cfg.quadrant),
            total=sum(1 for t in tasks if t.quadrant == cfg.quadrant),
        )
        for cfg in list_quadrants()
    ]

    return OperationStats(
        active=len(active),
        completed=len(completed),
        total=len(tasks),
        completion_rate=(len(completed) / len(tasks) * 100.0) if tasks else 0.0,
        quadrants=quadrants,
        weekly=weekly_throughput(tasks, today, weeks, tz),
    )


def compute_vision_stats(items: Sequence[BacklogItem]) -> VisionStats:
    categories: list[CategoryStats] = []
    for cfg in list_categories():
        in_cat = [i for i in items if i.category == cfg.category]
        categories.append(
            CategoryStats(
                category=cfg.category,
                label=cfg.label,
                active=sum(1 for i in in_cat if i.completed_at is None),
                completed=sum(1 for i in in_cat if i.completed_at is not None),
                estimated_hours=sum(i.estimated_hours or 0 for i in in_cat),
            )
        )

    return VisionStats(
        total_items=len(items),
        active=sum(1 for i in items if i.completed_at is None),
        completed=sum(1 for i in items if i.completed_at is not None),
        estimated_hours=sum(i.estimated_hours or 0 for i in items),
        categories_with_items=sum(1 for c in categories if c.active + c.completed > 0),
        categories=categories,
    )
