"""Goal analytics — pure stateless aggregation, never raises on missing data.

Everything here is a function of its arguments only: goals and entries come
in already fetched, ``today`` is passed explicitly, and the returned records
are fresh objects.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from app.tracker.models import (
    DailyRate,
    DayEntry,
    DayStatus,
    Goal,
    GoalAnalytics,
    MonthAnalytics,
    ReasonCount,
)
from app.tracker.schedule import days_in_month, effective_dates

TOP_MISSED_REASONS = 5


def _in_month(entry: DayEntry, year: int, month: int) -> bool:
    return entry.date.year == year and entry.date.month == month


def _percent(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return part / whole * 100.0


def streaks(statuses: Iterable[DayStatus | None]) -> tuple[int, int]:
    """Return ``(current, longest)`` for a chronological run of day statuses.

    A ``hit`` extends the running streak; anything else (including ``None``
    for a day with no entry) resets it. ``current`` is the running value on
    the final day, so a streak broken before the last day yields 0.
    """
    running = 0
    longest = 0
    for status in statuses:
        if status == DayStatus.hit:
            running += 1
            longest = max(longest, running)
        else:
            running = 0
    return running, longest


def missed_reason_breakdown(entries: Iterable[DayEntry]) -> dict[str, int]:
    """Count reasons on ``miss`` entries; blank reasons are skipped."""
    counts: dict[str, int] = {}
    for entry in entries:
        if entry.status == DayStatus.miss and entry.missed_reason:
            counts[entry.missed_reason] = counts.get(entry.missed_reason, 0) + 1
    return counts


def compute_goal_analytics(
    goal: Goal,
    entries: Sequence[DayEntry],
    year: int,
    month: int,
    today: date,
) -> GoalAnalytics:
    """Per-goal statistics for calendar ``month`` (1–12) of ``year``.

    Entries belonging to other goals or other months are ignored. Status
    tallies come straight from the stored entries, so an entry recorded on a
    day the goal is not scheduled still counts as a hit/miss/partial, while
    the denominator only counts scheduled days.
    """
    goal_entries = [e for e in entries if e.goal_id == goal.id and _in_month(e, year, month)]

    by_date: dict[date, DayEntry] = {}
    for entry in goal_entries:
        by_date.setdefault(entry.date, entry)

    active = effective_dates(goal, year, month, today)
    current, longest = streaks(by_date[d].status if d in by_date else None for d in active)

    hit_days = sum(1 for e in goal_entries if e.status == DayStatus.hit)
    effective_days = len(active)

    return GoalAnalytics(
        goal_id=goal.id,
        total_days=effective_days,
        hit_days=hit_days,
        miss_days=sum(1 for e in goal_entries if e.status == DayStatus.miss),
        partial_days=sum(1 for e in goal_entries if e.status == DayStatus.partial),
        current_streak=current,
        longest_streak=longest,
        completion_rate=_percent(hit_days, effective_days),
        total_allocated_minutes=effective_days * goal.allocated_minutes,
        total_actual_minutes=sum(e.actual_minutes for e in goal_entries),
        missed_reason_breakdown=missed_reason_breakdown(goal_entries),
    )


def merge_missed_reasons(
    breakdowns: Iterable[dict[str, int]],
    limit: int = TOP_MISSED_REASONS,
) -> list[ReasonCount]:
    """Sum reason counts across goals and keep the ``limit`` most frequent.

    Equal counts keep first-seen order.
    """
    totals: dict[str, int] = {}
    for breakdown in breakdowns:
        for reason, count in breakdown.items():
            totals[reason] = totals.get(reason, 0) + count
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return [ReasonCount(reason=reason, count=count) for reason, count in ranked[:limit]]


def best_and_worst(goal_analytics: Sequence[GoalAnalytics]) -> tuple[str | None, str | None]:
    """Highest and lowest completion rate.

    Ties: the first goal wins "best", the last goal wins "worst".
    """
    if not goal_analytics:
        return None, None
    ranked = sorted(goal_analytics, key=lambda ga: ga.completion_rate, reverse=True)
    return ranked[0].goal_id, ranked[-1].goal_id


def daily_hit_rate(
    goals: Sequence[Goal],
    entries: Sequence[DayEntry],
    year: int,
    month: int,
) -> list[DailyRate]:
    """Share of goals hit on each calendar day of the month.

    The denominator is the full goal count, including goals not scheduled
    on that day. Entries for goals outside ``goals`` are ignored.
    """
    goal_ids = {g.id for g in goals}
    hits_per_day: dict[date, int] = {}
    for entry in entries:
        if entry.goal_id in goal_ids and entry.status == DayStatus.hit and _in_month(entry, year, month):
            hits_per_day[entry.date] = hits_per_day.get(entry.date, 0) + 1

    series: list[DailyRate] = []
    for day in range(1, days_in_month(year, month) + 1):
        d = date(year, month, day)
        series.append(DailyRate(date=d, rate=_percent(hits_per_day.get(d, 0), len(goals))))
    return series


def compute_month_analytics(
    goals: Sequence[Goal],
    entries: Sequence[DayEntry],
    year: int,
    month: int,
    today: date,
    top_reasons: int = TOP_MISSED_REASONS,
) -> MonthAnalytics:
    """Combine per-goal analytics into month-level statistics."""
    per_goal = [compute_goal_analytics(g, entries, year, month, today) for g in goals]

    total_hits = sum(ga.hit_days for ga in per_goal)
    total_days = sum(ga.total_days for ga in per_goal)
    best, worst = best_and_worst(per_goal)

    return MonthAnalytics(
        year=year,
        month=month,
        total_goals=len(goals),
        overall_completion_rate=_percent(total_hits, total_days),
        best_performing_goal=best,
        worst_performing_goal=worst,
        most_frequent_missed_reasons=merge_missed_reasons(
            (ga.missed_reason_breakdown for ga in per_goal), limit=top_reasons
        ),
        daily_hit_rate=daily_hit_rate(goals, entries, year, month),
        goal_analytics=per_goal,
    )
