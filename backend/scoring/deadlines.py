"""Deadline prioritizer — pending queue ordering and due-window counts."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from backend.models.deadline import DeadlineItem
from backend.scoring.temporal import (
    is_due_this_month,
    is_due_this_week,
    is_due_today,
    is_overdue,
)
from backend.utils.time import ensure_utc


class Priority(str, enum.Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNRECOGNIZED = "unrecognized"


_PRIORITY_BY_LABEL = {p.value: p for p in Priority if p is not Priority.UNRECOGNIZED}


def parse_priority(label: str | None) -> Priority:
    if not label:
        return Priority.UNRECOGNIZED
    return _PRIORITY_BY_LABEL.get(label.strip().lower(), Priority.UNRECOGNIZED)


@dataclass(frozen=True)
class DeadlineView:
    id: str
    title: str
    due_date: datetime
    priority: Priority
    completed: bool
    overdue: bool
    category: str | None = None
    framework: str | None = None
    assignee: str | None = None


@dataclass
class DeadlineQueue:
    pending: list[DeadlineView]
    completed: list[DeadlineView]
    overdue_count: int
    overdue_high_priority: int
    due_today_count: int
    this_week_count: int
    this_month_count: int
    completion_rate: int


def deadline_view(item: DeadlineItem, now: datetime) -> DeadlineView:
    return DeadlineView(
        id=item.id,
        title=item.title,
        due_date=item.due_date,
        priority=parse_priority(item.priority),
        completed=item.completed,
        overdue=not item.completed and is_overdue(item.due_date, now),
        category=item.category,
        framework=item.framework,
        assignee=item.assignee,
    )


def prioritize(items: Iterable[DeadlineItem], now: datetime) -> DeadlineQueue:
    """Split completed from pending and order pending by due date.

    ``sorted`` is stable, so equal due dates keep their input order.
    """
    views = [deadline_view(item, now) for item in items]
    pending = sorted(
        (v for v in views if not v.completed),
        key=lambda v: ensure_utc(v.due_date),
    )
    completed = [v for v in views if v.completed]
    overdue = [v for v in pending if v.overdue]

    return DeadlineQueue(
        pending=pending,
        completed=completed,
        overdue_count=len(overdue),
        overdue_high_priority=sum(
            1 for v in overdue if v.priority in {Priority.CRITICAL, Priority.HIGH}
        ),
        due_today_count=sum(1 for v in pending if is_due_today(v.due_date, now)),
        this_week_count=sum(1 for v in pending if is_due_this_week(v.due_date, now)),
        this_month_count=sum(1 for v in pending if is_due_this_month(v.due_date, now)),
        completion_rate=round(len(completed) / len(views) * 100) if views else 0,
    )
