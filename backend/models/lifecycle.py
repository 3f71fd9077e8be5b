"""Vendor, document and policy records that expire or fall due for review."""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import BaseModel


class LifecycleKind(str, enum.Enum):
    VENDOR = "vendor"
    DOCUMENT = "document"
    POLICY = "policy"


class LifecycleRecord(BaseModel):
    id: str
    kind: LifecycleKind
    name: str
    status: str | None = None
    score: float | None = None
    category: str | None = None
    risk_level: str | None = None  # vendors: Critical / High / Medium / Low
    expiry_date: datetime | None = None
    next_review_date: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"frozen": True}

    @property
    def governing_date(self) -> datetime | None:
        """Expiry date, or the next review date for records without one."""
        return self.expiry_date or self.next_review_date
