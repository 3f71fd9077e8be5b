"""Compliance incident records."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class IncidentRecord(BaseModel):
    id: str
    reference_id: Optional[str] = None
    title: str
    severity: str  # Critical / High / Medium / Low
    status: str  # Open / In Progress / Resolved / Closed
    category: Optional[str] = None
    created_at: datetime
    sla_deadline: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    assigned_to: Optional[str] = None

    model_config = {"frozen": True}


class IncidentAdvance(BaseModel):
    status: str
