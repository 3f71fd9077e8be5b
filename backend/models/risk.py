"""Risk register records — individual risks and pre-scored categories."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class RiskItem(BaseModel):
    """A single assessed risk; replaced wholesale on re-assessment."""

    id: str
    title: str = ""
    category: str
    impact: int  # ordinal 1-5
    likelihood: int  # ordinal 1-5
    owner: str | None = None
    identified_at: datetime | None = None

    model_config = {"frozen": True}


class CategoryScore(BaseModel):
    """Category score as delivered by the assessment, 0-100."""

    name: str
    score: float

    model_config = {"frozen": True}
