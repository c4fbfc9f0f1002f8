"""Tracker domain contract — Pydantic v2 models."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DayStatus(str, Enum):
    hit = "hit"
    miss = "miss"
    partial = "partial"


class GoalScope(str, Enum):
    all = "all"
    weekday = "weekday"
    weekend = "weekend"


class TimeBlockType(str, Enum):
    executed = "executed"
    blocked = "blocked"


class BacklogCategory(str, Enum):
    certifications = "certifications"
    udemy = "udemy"
    books = "books"
    interview = "interview"
    concepts = "concepts"


class Priority(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class Quadrant(str, Enum):
    do_first = "do-first"
    schedule = "schedule"
    delegate = "delegate"
    eliminate = "eliminate"


HHMM_PATTERN = r"^\d{2}:\d{2}$"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


class TimeBlock(BaseModel):
    id: str
    start_time: str
    end_time: str
    type: TimeBlockType
    note: str | None = None


class Goal(BaseModel):
    """A recurring daily commitment.

    Only ``id``, ``allocated_minutes`` and the two scope flags feed the
    analytics; the rest is carried for the grid.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str = ""
    start_time: str | None = None  # "07:00"
    end_time: str | None = None  # "07:30"
    allocated_minutes: int = 0
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    target_end_date: date | None = None
    is_weekend_goal: bool = False
    is_weekday_goal: bool = False
    completed_at: datetime | None = None

    @property
    def scope(self) -> GoalScope:
        # Weekend-only wins when both flags are stored.
        if self.is_weekend_goal:
            return GoalScope.weekend
        if self.is_weekday_goal:
            return GoalScope.weekday
        return GoalScope.all


class DayEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    goal_id: str
    date: date
    status: DayStatus
    actual_minutes: int = 0
    comment: str = ""
    missed_reason: str | None = None
    time_blocks: list[TimeBlock] = Field(default_factory=list)


class BacklogItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    category: BacklogCategory
    priority: Priority = Priority.medium
    tentative_start_date: date
    estimated_hours: int | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    completed_at: datetime | None = None


class EisenhowerTask(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    quadrant: Quadrant
    delegate_to: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    completed_at: datetime | None = None


# ---------------------------------------------------------------------------
# Write payloads (repository input)
# ---------------------------------------------------------------------------


class GoalCreate(BaseModel):
    title: str = Field(min_length=1)
    start_time: str = Field(pattern=HHMM_PATTERN)
    end_time: str = Field(pattern=HHMM_PATTERN)
    allocated_minutes: int = Field(gt=0)
    tags: list[str] = Field(default_factory=list)
    target_end_date: date | None = None
    is_weekend_goal: bool = False
    is_weekday_goal: bool = False

    @model_validator(mode="after")
    def _single_scope(self) -> "GoalCreate":
        if self.is_weekend_goal and self.is_weekday_goal:
            raise ValueError("A goal cannot be both weekend-only and weekday-only")
        return self


class DayEntryUpsert(BaseModel):
    goal_id: str
    date: date
    status: DayStatus
    actual_minutes: int = Field(default=0, ge=0)
    comment: str = ""
    missed_reason: str | None = None
    time_blocks: list[TimeBlock] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Analytics records
# ---------------------------------------------------------------------------


class GoalAnalytics(BaseModel):
    goal_id: str
    total_days: int = 0  # effective days
    hit_days: int = 0
    miss_days: int = 0
    partial_days: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    completion_rate: float = 0.0  # 0–100
    total_allocated_minutes: int = 0
    total_actual_minutes: int = 0
    missed_reason_breakdown: dict[str, int] = Field(default_factory=dict)


class ReasonCount(BaseModel):
    reason: str
    count: int


class DailyRate(BaseModel):
    date: date
    rate: float  # 0–100


class MonthAnalytics(BaseModel):
    year: int
    month: int  # 1–12
    total_goals: int = 0
    overall_completion_rate: float = 0.0
    best_performing_goal: str | None = None
    worst_performing_goal: str | None = None
    most_frequent_missed_reasons: list[ReasonCount] = Field(default_factory=list)
    daily_hit_rate: list[DailyRate] = Field(default_factory=list)
    goal_analytics: list[GoalAnalytics] = Field(default_factory=list)


class QuadrantStats(BaseModel):
    quadrant: Quadrant
    label: str
    active: int = 0
    completed: int = 0
    total: int = 0


class WeeklyThroughput(BaseModel):
    week_start: date  # Monday
    created: int = 0
    completed: int = 0


class OperationStats(BaseModel):
    active: int = 0
    completed: int = 0
    total: int = 0
    completion_rate: float = 0.0
    quadrants: list[QuadrantStats] = Field(default_factory=list)
    weekly: list[WeeklyThroughput] = Field(default_factory=list)


class CategoryStats(BaseModel):
    category: BacklogCategory
    label: str
    active: int = 0
    completed: int = 0
    estimated_hours: int = 0


class VisionStats(BaseModel):
    total_items: int = 0
    active: int = 0
    completed: int = 0
    estimated_hours: int = 0
    categories_with_items: int = 0
    categories: list[CategoryStats] = Field(default_factory=list)
