"""Deadline and task records."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class DeadlineItem(BaseModel):
    id: str
    title: str
    due_date: datetime
    priority: str = "medium"  # critical / high / medium / low
    category: Optional[str] = None
    framework: Optional[str] = None
    assignee: Optional[str] = None
    completed: bool = False
    completed_at: Optional[datetime] = None

    model_config = {"frozen": True}
