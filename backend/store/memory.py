"""In-memory record store seeded from fixtures.

Holds one ``RecordSnapshot``. Write-backs build a new snapshot and swap it in
under a lock, so a reader always sees one whole snapshot.
"""

from __future__ import annotations

import logging
from datetime import datetime
from threading import Lock

from backend.models.compliance import ComplianceFramework
from backend.models.deadline import DeadlineItem
from backend.models.incident import IncidentRecord
from backend.models.lifecycle import LifecycleKind, LifecycleRecord
from backend.models.risk import CategoryScore, RiskItem
from backend.models.snapshot import RecordSnapshot
from backend.scoring.sla import STATUS_ORDER, IncidentStatus, is_terminal, parse_status
from backend.store.base import InvalidTransitionError, RecordNotFoundError, RecordStore
from backend.store.demo_data import demo_snapshot
from backend.utils.time import utc_now

logger = logging.getLogger("compliancelens.store")

_LIFECYCLE_FIELDS = {
    LifecycleKind.VENDOR: "vendors",
    LifecycleKind.DOCUMENT: "documents",
    LifecycleKind.POLICY: "policies",
}


class InMemoryRecordStore(RecordStore):
    def __init__(self, snapshot: RecordSnapshot | None = None) -> None:
        self._lock = Lock()
        self._snapshot = snapshot if snapshot is not None else RecordSnapshot()

    @classmethod
    def with_demo_data(cls) -> "InMemoryRecordStore":
        return cls(demo_snapshot())

    def _current(self) -> RecordSnapshot:
        with self._lock:
            return self._snapshot

    async def fetch_risk_items(self) -> list[RiskItem]:
        return list(self._current().risk_items)

    async def fetch_risk_categories(self) -> list[CategoryScore] | None:
        categories = self._current().risk_categories
        return None if categories is None else list(categories)

    async def fetch_incidents(self) -> list[IncidentRecord]:
        return list(self._current().incidents)

    async def fetch_frameworks(self) -> list[ComplianceFramework]:
        return list(self._current().frameworks)

    async def fetch_lifecycle_records(self, kind: LifecycleKind) -> list[LifecycleRecord]:
        return list(getattr(self._current(), _LIFECYCLE_FIELDS[kind]))

    async def fetch_deadlines(self) -> list[DeadlineItem]:
        return list(self._current().deadlines)

    async def fetch_snapshot(self) -> RecordSnapshot:
        # One read of the held snapshot instead of piecewise fetches.
        return self._current()

    async def mark_complete(self, deadline_id: str, at: datetime | None = None) -> DeadlineItem:
        """Complete a deadline; completing an already-completed one is a no-op."""
        with self._lock:
            snapshot = self._snapshot
            updated: DeadlineItem | None = None
            items = []
            for item in snapshot.deadlines:
                if item.id == deadline_id:
                    if not item.completed:
                        item = item.model_copy(update={"completed": True, "completed_at": at or utc_now()})
                    updated = item
                items.append(item)

            if updated is None:
                raise RecordNotFoundError("Deadline", deadline_id)

            self._snapshot = snapshot.model_copy(update={"deadlines": tuple(items)})

        logger.info("deadline %s marked complete", deadline_id)
        return updated

    async def advance_incident(
        self, incident_id: str, status: str, at: datetime | None = None
    ) -> IncidentRecord:
        """Move an incident forward through Open -> In Progress -> Resolved -> Closed."""
        target = parse_status(status)
        if target is IncidentStatus.UNRECOGNIZED:
            raise InvalidTransitionError(f"Unknown incident status: {status!r}")

        with self._lock:
            snapshot = self._snapshot
            updated: IncidentRecord | None = None
            incidents = []
            for incident in snapshot.incidents:
                if incident.id == incident_id:
                    incident = _advance(incident, target, at or utc_now())
                    updated = incident
                incidents.append(incident)

            if updated is None:
                raise RecordNotFoundError("Incident", incident_id)

            self._snapshot = snapshot.model_copy(update={"incidents": tuple(incidents)})

        logger.info("incident %s advanced to %s", incident_id, target.value)
        return updated


def _advance(incident: IncidentRecord, target: IncidentStatus, at: datetime) -> IncidentRecord:
    current = parse_status(incident.status)
    if current is target:
        return incident
    if current is IncidentStatus.UNRECOGNIZED:
        raise InvalidTransitionError(
            f"Cannot advance incident in unrecognized state '{incident.status}'"
        )
    if is_terminal(current) and not is_terminal(target):
        raise InvalidTransitionError(
            f"Cannot reopen incident in '{incident.status}' state"
        )
    if STATUS_ORDER[target] < STATUS_ORDER[current]:
        raise InvalidTransitionError(
            f"Cannot move incident from '{incident.status}' back to '{target.value}'"
        )

    update: dict = {"status": target.value}
    if is_terminal(target) and incident.resolved_at is None:
        update["resolved_at"] = at
    return incident.model_copy(update=update)
