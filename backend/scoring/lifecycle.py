"""Lifecycle evaluator — date-driven status overrides for vendors, documents and policies.

The effective status of a record is the first match of:

    1. governing date passed          -> the kind's "expired" label
    2. governing date within window   -> the kind's "expiring soon" label
    3. the stored status (or a score-derived one when nothing is stored)

The governing date is the expiry date, or the next review date for records
that carry no expiry.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from backend.models.lifecycle import LifecycleKind, LifecycleRecord
from backend.scoring.classifier import (
    COMPLIANCE_STATUS_TABLE,
    SEVERITY_RANK,
    ComplianceStatus,
    SeverityLevel,
    classify,
    parse_severity,
)
from backend.scoring.temporal import is_expiring_soon, is_overdue
from backend.utils.time import ensure_utc

UNRECOGNIZED_LABEL = "Unrecognized"


class LifecycleOverride(str, enum.Enum):
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring-soon"
    NONE = "none"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class KindVocabulary:
    statuses: tuple[str, ...]
    expired: str
    expiring_soon: str
    default: str


VOCABULARIES: dict[LifecycleKind, KindVocabulary] = {
    LifecycleKind.VENDOR: KindVocabulary(
        statuses=("Compliant", "At Risk", "Non-Compliant", "Pending", "Expired"),
        expired="Expired",
        expiring_soon="At Risk",
        default="Pending",
    ),
    LifecycleKind.DOCUMENT: KindVocabulary(
        statuses=("Draft", "Review", "Approved", "Rejected"),
        expired="Expired",
        expiring_soon="Expiring Soon",
        default="Draft",
    ),
    LifecycleKind.POLICY: KindVocabulary(
        statuses=("Active", "Draft", "Review", "Update Required"),
        expired="Update Required",
        expiring_soon="Review",
        default="Draft",
    ),
}


@dataclass(frozen=True)
class LifecycleView:
    id: str
    kind: LifecycleKind
    name: str
    status: str
    stored_status: Optional[str]
    override: LifecycleOverride
    score: Optional[float]
    governing_date: Optional[datetime]
    updated_at: Optional[datetime]
    risk_level: SeverityLevel = SeverityLevel.UNRECOGNIZED
    review_overdue: bool = False

    @property
    def is_expired(self) -> bool:
        return self.override is LifecycleOverride.EXPIRED

    @property
    def is_expiring_soon(self) -> bool:
        return self.override is LifecycleOverride.EXPIRING_SOON


def _stored_status(record: LifecycleRecord, vocabulary: KindVocabulary) -> tuple[str, LifecycleOverride]:
    if record.status is None:
        if record.score is not None:
            derived = classify(record.score, COMPLIANCE_STATUS_TABLE)
            if derived is ComplianceStatus.UNRECOGNIZED:
                return UNRECOGNIZED_LABEL, LifecycleOverride.UNRECOGNIZED
            return derived.value, LifecycleOverride.NONE
        return vocabulary.default, LifecycleOverride.NONE

    by_label = {label.lower(): label for label in vocabulary.statuses}
    label = by_label.get(record.status.strip().lower())
    if label is None:
        return UNRECOGNIZED_LABEL, LifecycleOverride.UNRECOGNIZED
    return label, LifecycleOverride.NONE


def effective_status(
    record: LifecycleRecord,
    now: datetime,
    window_days: int = 30,
) -> LifecycleView:
    vocabulary = VOCABULARIES[record.kind]
    governing = record.governing_date

    if governing is not None and is_overdue(governing, now):
        status, override = vocabulary.expired, LifecycleOverride.EXPIRED
    elif governing is not None and is_expiring_soon(governing, now, window_days):
        status, override = vocabulary.expiring_soon, LifecycleOverride.EXPIRING_SOON
    else:
        status, override = _stored_status(record, vocabulary)

    return LifecycleView(
        id=record.id,
        kind=record.kind,
        name=record.name,
        status=status,
        stored_status=record.status,
        override=override,
        score=record.score,
        governing_date=governing,
        updated_at=record.updated_at,
        risk_level=parse_severity(record.risk_level),
        review_overdue=(
            record.next_review_date is not None and is_overdue(record.next_review_date, now)
        ),
    )


def _sort_key(view: LifecycleView) -> tuple:
    if view.is_expired:
        return (0, ensure_utc(view.governing_date).timestamp())
    if view.is_expiring_soon:
        return (1, ensure_utc(view.governing_date).timestamp())
    if view.updated_at is None:
        # Records with no update stamp trail everything else.
        return (3, 0.0)
    return (2, -ensure_utc(view.updated_at).timestamp())


def sort_records(
    records: Iterable[LifecycleRecord],
    now: datetime,
    window_days: int = 30,
) -> list[LifecycleView]:
    """Expired first, then expiring soon (both soonest first), then most recently updated."""
    views = [effective_status(record, now, window_days) for record in records]
    return sorted(views, key=_sort_key)


def sort_by_risk(views: Iterable[LifecycleView]) -> list[LifecycleView]:
    """Most severe risk level first, unrecognized last; ties keep their order."""
    return sorted(views, key=lambda view: -SEVERITY_RANK[view.risk_level])


@dataclass
class LifecycleSummary:
    kind: Optional[LifecycleKind]
    total: int
    status_counts: dict[str, int]
    expired_count: int
    expiring_soon_count: int
    average_score: Optional[float]
    next_review_due: Optional[datetime]
    review_overdue_count: int
    completion_percentage: Optional[int]


def summarize_lifecycle(
    records: Iterable[LifecycleRecord],
    now: datetime,
    window_days: int = 30,
    kind: Optional[LifecycleKind] = None,
) -> LifecycleSummary:
    records = list(records)
    views = [effective_status(record, now, window_days) for record in records]

    status_counts: dict[str, int] = {}
    for view in views:
        status_counts[view.status] = status_counts.get(view.status, 0) + 1

    scored = [
        view.score
        for view in views
        if view.score is not None and view.status != "Pending"
    ]
    average_score = round(sum(scored) / len(scored), 1) if scored else None

    upcoming_reviews = sorted(
        ensure_utc(record.next_review_date)
        for record in records
        if record.next_review_date is not None and not is_overdue(record.next_review_date, now)
    )

    completion = None
    if kind is LifecycleKind.DOCUMENT and views:
        approved = sum(
            1
            for view in views
            if (view.stored_status or "").strip().lower() == "approved" and not view.is_expired
        )
        completion = round(approved / len(views) * 100)

    return LifecycleSummary(
        kind=kind,
        total=len(views),
        status_counts=status_counts,
        expired_count=sum(1 for view in views if view.is_expired),
        expiring_soon_count=sum(1 for view in views if view.is_expiring_soon),
        average_score=average_score,
        next_review_due=upcoming_reviews[0] if upcoming_reviews else None,
        review_overdue_count=sum(1 for view in views if view.review_overdue),
        completion_percentage=completion,
    )
