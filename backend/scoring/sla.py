"""SLA tracker — incident SLA percentage and breach state at a given instant."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from backend.models.incident import IncidentRecord
from backend.scoring.classifier import SeverityLevel, parse_severity
from backend.scoring.temporal import elapsed_fraction, hours_until
from backend.utils.time import ensure_utc


class IncidentStatus(str, enum.Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"
    UNRECOGNIZED = "Unrecognized"


class SLAState(str, enum.Enum):
    ON_TRACK = "on-track"
    AT_RISK = "at-risk"
    BREACHED = "breached"
    MET = "met"
    UNRECOGNIZED = "unrecognized"


TERMINAL_STATUSES = frozenset({IncidentStatus.RESOLVED, IncidentStatus.CLOSED})

# Forward order of the incident lifecycle; no transition moves backwards.
STATUS_ORDER = {
    IncidentStatus.OPEN: 0,
    IncidentStatus.IN_PROGRESS: 1,
    IncidentStatus.RESOLVED: 2,
    IncidentStatus.CLOSED: 3,
}

_STATUS_BY_LABEL = {status.value.lower(): status for status in STATUS_ORDER}


def parse_status(label: str | None) -> IncidentStatus:
    if not label:
        return IncidentStatus.UNRECOGNIZED
    return _STATUS_BY_LABEL.get(label.strip().lower(), IncidentStatus.UNRECOGNIZED)


def is_terminal(status: IncidentStatus) -> bool:
    return status in TERMINAL_STATUSES


@dataclass(frozen=True)
class SLAResult:
    percentage: Optional[int]
    state: SLAState
    hours_left: Optional[float] = None


def evaluate(
    incident: IncidentRecord,
    now: datetime,
    at_risk_hours: float = 24.0,
) -> SLAResult:
    """Evaluate an incident's SLA standing at ``now``.

    Terminal incidents are ``met`` whatever their deadline says. Open
    incidents without a deadline have nothing to count down. Otherwise the
    state follows the hours left: negative is ``breached``, up to and
    including ``at_risk_hours`` is ``at-risk``.
    """
    status = parse_status(incident.status)
    if status is IncidentStatus.UNRECOGNIZED:
        return SLAResult(percentage=None, state=SLAState.UNRECOGNIZED)
    if is_terminal(status):
        return SLAResult(percentage=100, state=SLAState.MET)
    if incident.sla_deadline is None:
        return SLAResult(percentage=None, state=SLAState.ON_TRACK)

    percentage = round(elapsed_fraction(incident.created_at, incident.sla_deadline, now))
    hours_left = hours_until(incident.sla_deadline, now)

    if hours_left < 0:
        state = SLAState.BREACHED
    elif hours_left <= at_risk_hours:
        state = SLAState.AT_RISK
    else:
        state = SLAState.ON_TRACK

    return SLAResult(percentage=percentage, state=state, hours_left=round(hours_left, 2))


@dataclass(frozen=True)
class IncidentSLAView:
    """An incident together with its SLA standing for one scoring pass."""

    id: str
    reference_id: Optional[str]
    title: str
    severity: SeverityLevel
    status: IncidentStatus
    created_at: datetime
    sla_deadline: Optional[datetime]
    sla: SLAResult


@dataclass(frozen=True)
class IncidentStats:
    total: int
    open: int
    in_progress: int
    resolved: int
    closed: int
    unrecognized: int
    open_critical: int
    open_high: int
    sla_breached: int
    sla_at_risk: int
    avg_resolution_hours: Optional[float]
    total_year: int


def incident_views(
    incidents: Iterable[IncidentRecord],
    now: datetime,
    at_risk_hours: float = 24.0,
) -> list[IncidentSLAView]:
    return [
        IncidentSLAView(
            id=incident.id,
            reference_id=incident.reference_id,
            title=incident.title,
            severity=parse_severity(incident.severity),
            status=parse_status(incident.status),
            created_at=incident.created_at,
            sla_deadline=incident.sla_deadline,
            sla=evaluate(incident, now, at_risk_hours),
        )
        for incident in incidents
    ]


def summarize_incidents(
    incidents: Iterable[IncidentRecord],
    now: datetime,
    at_risk_hours: float = 24.0,
) -> IncidentStats:
    incidents = list(incidents)
    views = incident_views(incidents, now, at_risk_hours)

    by_status = {status: 0 for status in IncidentStatus}
    for view in views:
        by_status[view.status] += 1

    active = [
        view
        for view in views
        if view.status in {IncidentStatus.OPEN, IncidentStatus.IN_PROGRESS}
    ]

    resolution_hours = [
        hours_until(incident.resolved_at, incident.created_at)
        for incident in incidents
        if incident.resolved_at is not None
    ]
    avg_resolution = (
        round(sum(resolution_hours) / len(resolution_hours), 1)
        if resolution_hours
        else None
    )

    current_year = ensure_utc(now).year

    return IncidentStats(
        total=len(views),
        open=by_status[IncidentStatus.OPEN],
        in_progress=by_status[IncidentStatus.IN_PROGRESS],
        resolved=by_status[IncidentStatus.RESOLVED],
        closed=by_status[IncidentStatus.CLOSED],
        unrecognized=by_status[IncidentStatus.UNRECOGNIZED],
        open_critical=sum(1 for v in active if v.severity is SeverityLevel.CRITICAL),
        open_high=sum(1 for v in active if v.severity is SeverityLevel.HIGH),
        sla_breached=sum(1 for v in active if v.sla.state is SLAState.BREACHED),
        sla_at_risk=sum(1 for v in active if v.sla.state is SLAState.AT_RISK),
        avg_resolution_hours=avg_resolution,
        total_year=sum(
            1 for incident in incidents if ensure_utc(incident.created_at).year == current_year
        ),
    )
