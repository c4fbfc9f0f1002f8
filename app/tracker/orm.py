"""SQLAlchemy tables for the tracker.

Every row hangs off a user (day entries through their goal); deleting a user
or a goal cascades to everything below it.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.db import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRow(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class GoalRow(Base):
    __tablename__ = "goals"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String, nullable=False)
    start_time = Column(String(5), nullable=False)  # "HH:MM"
    end_time = Column(String(5), nullable=False)
    allocated_minutes = Column(Integer, nullable=False)
    tags = Column(JSON, nullable=False, default=list)

    target_end_date = Column(Date, nullable=True)
    is_weekend_goal = Column(Boolean, nullable=False, default=False)
    is_weekday_goal = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    day_entries = relationship(
        "DayEntryRow",
        back_populates="goal",
        cascade="all, delete-orphan",
    )


class DayEntryRow(Base):
    __tablename__ = "day_entries"
    __table_args__ = (UniqueConstraint("goal_id", "date", name="uq_day_entries_goal_date"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    goal_id = Column(String(36), ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)

    status = Column(String(10), nullable=False)  # hit, miss, partial
    actual_minutes = Column(Integer, nullable=False, default=0)
    comment = Column(Text, nullable=False, default="")
    missed_reason = Column(String, nullable=True)
    time_blocks = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    goal = relationship("GoalRow", back_populates="day_entries")


class BacklogItemRow(Base):
    __tablename__ = "backlog_items"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(20), nullable=False)  # certifications, udemy, books, interview, concepts
    priority = Column(String(10), nullable=False, default="medium")  # high, medium, low
    tentative_start_date = Column(Date, nullable=False)
    estimated_hours = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    completed_at = Column(DateTime(timezone=True), nullable=True)


class EisenhowerTaskRow(Base):
    __tablename__ = "eisenhower_tasks"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    quadrant = Column(String(10), nullable=False)  # do-first, schedule, delegate, eliminate
    delegate_to = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    completed_at = Column(DateTime(timezone=True), nullable=True)
