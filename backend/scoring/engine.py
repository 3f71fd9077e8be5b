"""Scoring engine — one consistent pass over a full record snapshot."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime

from backend.config import Settings, settings as default_settings
from backend.models.lifecycle import LifecycleKind
from backend.models.snapshot import RecordSnapshot
from backend.observability.metrics import InMemoryMetrics, metrics as default_metrics
from backend.scoring import compliance, deadlines, lifecycle, risk, sla
from backend.utils.time import ensure_utc

logger = logging.getLogger("compliancelens.scoring")


@dataclass
class LifecycleListing:
    records: list[lifecycle.LifecycleView]
    summary: lifecycle.LifecycleSummary


@dataclass
class DashboardView:
    """Every derived view of one snapshot, all computed against ``evaluated_at``."""

    evaluated_at: datetime
    risk: risk.RiskSnapshot
    incidents: list[sla.IncidentSLAView]
    incident_stats: sla.IncidentStats
    compliance: compliance.ComplianceOverview
    lifecycle: dict[str, LifecycleListing]
    deadlines: deadlines.DeadlineQueue


class ScoringEngine:
    """Runs every aggregator over a snapshot at a single injected instant.

    The engine keeps no state between passes: scoring the same snapshot at
    the same ``now`` twice yields equal views.
    """

    def __init__(
        self,
        config: Settings | None = None,
        registry: InMemoryMetrics | None = None,
    ) -> None:
        config = config or default_settings
        self.window_days = config.expiring_soon_window_days
        self.at_risk_hours = config.sla_at_risk_hours
        self.metrics = registry or default_metrics

    def score_risk(self, snapshot: RecordSnapshot) -> risk.RiskSnapshot:
        return risk.aggregate(
            snapshot.risk_items,
            categories=snapshot.risk_categories,
            overall_score=snapshot.risk_overall_score,
            previous_score=snapshot.risk_previous_score,
        )

    def score_incidents(self, snapshot: RecordSnapshot, now: datetime) -> list[sla.IncidentSLAView]:
        return sla.incident_views(snapshot.incidents, now, self.at_risk_hours)

    def incident_stats(self, snapshot: RecordSnapshot, now: datetime) -> sla.IncidentStats:
        return sla.summarize_incidents(snapshot.incidents, now, self.at_risk_hours)

    def score_compliance(self, snapshot: RecordSnapshot) -> compliance.ComplianceOverview:
        return compliance.summarize_frameworks(
            snapshot.frameworks,
            overall_score=snapshot.compliance_overall_score,
            previous_score=snapshot.compliance_previous_score,
        )

    def score_lifecycle(
        self,
        snapshot: RecordSnapshot,
        kind: LifecycleKind,
        now: datetime,
        by_risk: bool = False,
    ) -> LifecycleListing:
        """Listing in status order, or by risk level when ``by_risk`` is set."""
        records = {
            LifecycleKind.VENDOR: snapshot.vendors,
            LifecycleKind.DOCUMENT: snapshot.documents,
            LifecycleKind.POLICY: snapshot.policies,
        }[kind]
        views = lifecycle.sort_records(records, now, self.window_days)
        if by_risk:
            views = lifecycle.sort_by_risk(views)
        return LifecycleListing(
            records=views,
            summary=lifecycle.summarize_lifecycle(records, now, self.window_days, kind=kind),
        )

    def score_deadlines(self, snapshot: RecordSnapshot, now: datetime) -> deadlines.DeadlineQueue:
        return deadlines.prioritize(snapshot.deadlines, now)

    def score(self, snapshot: RecordSnapshot, now: datetime) -> DashboardView:
        now = ensure_utc(now)
        started = time.perf_counter()

        view = DashboardView(
            evaluated_at=now,
            risk=self.score_risk(snapshot),
            incidents=self.score_incidents(snapshot, now),
            incident_stats=self.incident_stats(snapshot, now),
            compliance=self.score_compliance(snapshot),
            lifecycle={
                kind.value: self.score_lifecycle(snapshot, kind, now)
                for kind in LifecycleKind
            },
            deadlines=self.score_deadlines(snapshot, now),
        )

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        self.metrics.observe_scoring_pass(snapshot.record_count, duration_ms)
        logger.info(
            "scoring pass completed at %s",
            now.isoformat(),
            extra={"records": snapshot.record_count, "scoring_ms": duration_ms},
        )
        return view
