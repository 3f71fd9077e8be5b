"""Record store interface — where snapshots come from and write-backs go."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from datetime import datetime

from backend.models.compliance import ComplianceFramework
from backend.models.deadline import DeadlineItem
from backend.models.incident import IncidentRecord
from backend.models.lifecycle import LifecycleKind, LifecycleRecord
from backend.models.risk import CategoryScore, RiskItem
from backend.models.snapshot import RecordSnapshot
from backend.utils.time import utc_now


class RecordStoreError(Exception):
    """Base class for record store failures."""


class RecordNotFoundError(RecordStoreError):
    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind} '{record_id}' not found")
        self.kind = kind
        self.record_id = record_id


class InvalidTransitionError(RecordStoreError):
    """A write-back tried to move a record backwards or out of a terminal state."""


class RecordStore(ABC):
    """Abstract source of full record snapshots.

    Every fetch returns a complete list; there is no delta protocol.
    """

    @abstractmethod
    async def fetch_risk_items(self) -> list[RiskItem]:
        ...

    @abstractmethod
    async def fetch_risk_categories(self) -> list[CategoryScore] | None:
        """Pre-scored categories, or None when categories should be derived."""
        ...

    @abstractmethod
    async def fetch_incidents(self) -> list[IncidentRecord]:
        ...

    @abstractmethod
    async def fetch_frameworks(self) -> list[ComplianceFramework]:
        ...

    @abstractmethod
    async def fetch_lifecycle_records(self, kind: LifecycleKind) -> list[LifecycleRecord]:
        ...

    @abstractmethod
    async def fetch_deadlines(self) -> list[DeadlineItem]:
        ...

    @abstractmethod
    async def mark_complete(self, deadline_id: str, at: datetime | None = None) -> DeadlineItem:
        ...

    @abstractmethod
    async def advance_incident(
        self, incident_id: str, status: str, at: datetime | None = None
    ) -> IncidentRecord:
        ...

    async def fetch_scores(self) -> dict[str, float | None]:
        """Top-level scores that come with the snapshot rather than being derived."""
        return {}

    async def fetch_snapshot(self) -> RecordSnapshot:
        (
            risk_items,
            categories,
            incidents,
            frameworks,
            vendors,
            documents,
            policies,
            deadline_items,
            scores,
        ) = await asyncio.gather(
            self.fetch_risk_items(),
            self.fetch_risk_categories(),
            self.fetch_incidents(),
            self.fetch_frameworks(),
            self.fetch_lifecycle_records(LifecycleKind.VENDOR),
            self.fetch_lifecycle_records(LifecycleKind.DOCUMENT),
            self.fetch_lifecycle_records(LifecycleKind.POLICY),
            self.fetch_deadlines(),
            self.fetch_scores(),
        )
        return RecordSnapshot(
            risk_items=tuple(risk_items),
            risk_categories=None if categories is None else tuple(categories),
            risk_overall_score=scores.get("risk_overall_score"),
            risk_previous_score=scores.get("risk_previous_score"),
            incidents=tuple(incidents),
            frameworks=tuple(frameworks),
            compliance_overall_score=scores.get("compliance_overall_score"),
            compliance_previous_score=scores.get("compliance_previous_score"),
            vendors=tuple(vendors),
            documents=tuple(documents),
            policies=tuple(policies),
            deadlines=tuple(deadline_items),
            retrieved_at=utc_now(),
        )

    async def health_check(self) -> bool:
        return True
