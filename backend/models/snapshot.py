"""Full record snapshot — everything one scoring pass reads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from backend.models.compliance import ComplianceFramework
from backend.models.deadline import DeadlineItem
from backend.models.incident import IncidentRecord
from backend.models.lifecycle import LifecycleRecord
from backend.models.risk import CategoryScore, RiskItem


class RecordSnapshot(BaseModel):
    """Immutable set of records retrieved at one instant; never patched."""

    risk_items: tuple[RiskItem, ...] = ()
    risk_categories: tuple[CategoryScore, ...] | None = None
    risk_overall_score: float | None = None
    risk_previous_score: float | None = None

    incidents: tuple[IncidentRecord, ...] = ()

    frameworks: tuple[ComplianceFramework, ...] = ()
    compliance_overall_score: float | None = None
    compliance_previous_score: float | None = None

    vendors: tuple[LifecycleRecord, ...] = ()
    documents: tuple[LifecycleRecord, ...] = ()
    policies: tuple[LifecycleRecord, ...] = ()

    deadlines: tuple[DeadlineItem, ...] = ()

    retrieved_at: datetime | None = None

    model_config = {"frozen": True}

    @property
    def record_count(self) -> int:
        return (
            len(self.risk_items)
            + len(self.incidents)
            + len(self.frameworks)
            + len(self.vendors)
            + len(self.documents)
            + len(self.policies)
            + len(self.deadlines)
        )
