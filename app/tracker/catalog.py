"""Static tracker catalog — configuration only, no DB."""

from __future__ import annotations

from dataclasses import dataclass

from app.tracker.models import BacklogCategory, Quadrant


@dataclass(frozen=True, slots=True)
class QuadrantConfig:
    quadrant: Quadrant
    label: str
    subtitle: str


@dataclass(frozen=True, slots=True)
class CategoryConfig:
    category: BacklogCategory
    label: str


# Suggestions offered when marking a day as missed. Free text is still accepted.
MISSED_REASONS: tuple[str, ...] = (
    "Meeting",
    "Fatigue",
    "Travel",
    "Emergency",
    "Laziness",
    "Blocked",
    "Sick",
    "Family",
    "Technical Issues",
    "Priority Shift",
    "Late Wakeup",
    "Early Sleep",
    "Late Office Return",
    "Overslept",
    "Vacation",
    "Holiday",
    "Training",
    "Deadline",
    "Interview",
    "Networking",
    "Client Call",
    "Team Event",
    "Personal",
    "Weather",
    "Commute",
    "Equipment Failure",
    "Power Outage",
    "Internet Issues",
    "Mental Health",
    "Physical Health",
    "Forgot",
    "Procrastination",
    "Burnout",
    "No Motivation",
    "Distracted",
    "Social Event",
    "Gym",
    "Errands",
    "Other",
)


QUADRANTS: dict[Quadrant, QuadrantConfig] = {
    Quadrant.do_first: QuadrantConfig(Quadrant.do_first, "Do First", "Urgent & Important"),
    Quadrant.schedule: QuadrantConfig(Quadrant.schedule, "Schedule", "Important, Not Urgent"),
    Quadrant.delegate: QuadrantConfig(Quadrant.delegate, "Delegate", "Urgent, Not Important"),
    Quadrant.eliminate: QuadrantConfig(Quadrant.eliminate, "Eliminate", "Not Urgent, Not Important"),
}


BACKLOG_CATEGORIES: dict[BacklogCategory, CategoryConfig] = {
    BacklogCategory.certifications: CategoryConfig(BacklogCategory.certifications, "Certifications"),
    BacklogCategory.udemy: CategoryConfig(BacklogCategory.udemy, "Udemy Course"),
    BacklogCategory.books: CategoryConfig(BacklogCategory.books, "Books"),
    BacklogCategory.interview: CategoryConfig(BacklogCategory.interview, "Interview"),
    BacklogCategory.concepts: CategoryConfig(BacklogCategory.concepts, "Concepts/Others"),
}


def list_quadrants() -> list[QuadrantConfig]:
    return list(QUADRANTS.values())


def list_categories() -> list[CategoryConfig]:
    return list(BACKLOG_CATEGORIES.values())
