"""Goal scheduling helpers — pure, never raise on well-formed input."""

from __future__ import annotations

import calendar
from datetime import date

from app.tracker.models import Goal

SUNDAY = 0
SATURDAY = 6


def day_of_week(d: date) -> int:
    """Weekday number with 0=Sunday .. 6=Saturday."""
    return d.isoweekday() % 7


def is_weekend(dow: int) -> bool:
    return dow in (SUNDAY, SATURDAY)


def is_goal_active_on_day(goal: Goal, dow: int) -> bool:
    """Return whether ``goal`` applies on weekday ``dow`` (0=Sunday .. 6=Saturday).

    Weekend-only is checked first, so a goal carrying both flags behaves as
    weekend-only.
    """
    if goal.is_weekend_goal:
        return is_weekend(dow)
    if goal.is_weekday_goal:
        return not is_weekend(dow)
    return True


def is_goal_active_on(goal: Goal, d: date) -> bool:
    return is_goal_active_on_day(goal, day_of_week(d))


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def last_counted_day(year: int, month: int, today: date) -> int:
    """Last day-of-month that counts towards analytics.

    The current month is capped at today; past and future months count in full.
    """
    last = days_in_month(year, month)
    if today.year == year and today.month == month:
        return min(today.day, last)
    return last


def effective_dates(goal: Goal, year: int, month: int, today: date) -> list[date]:
    """Dates in the counted part of the month on which ``goal`` is active."""
    return [
        d
        for d in (date(year, month, day) for day in range(1, last_counted_day(year, month, today) + 1))
        if is_goal_active_on(goal, d)
    ]
