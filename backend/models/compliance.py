"""Regulatory framework records."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ComplianceFramework(BaseModel):
    """A framework under assessment.

    ``score`` is ``None`` until the first assessment; a framework scored 0 has
    been assessed and failed, which is not the same thing.
    """

    id: str
    name: str
    score: float | None = None
    controls_compliant: int = 0
    total_controls: int = 0
    critical_findings: int = 0
    last_assessed_at: datetime | None = None

    model_config = {"frozen": True}
