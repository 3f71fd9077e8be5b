"""Compliance aggregator — framework status, ratings and the overall posture."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from backend.models.compliance import ComplianceFramework
from backend.scoring.classifier import (
    COMPLIANCE_RATING_TABLE,
    COMPLIANCE_STATUS_TABLE,
    ComplianceRating,
    ComplianceStatus,
    clamp_score,
    classify,
    usable_score,
)
from backend.scoring.risk import TrendDirection, trend_direction


def framework_status(framework: ComplianceFramework) -> ComplianceStatus:
    """Pending until assessed; afterwards classified by score alone."""
    return score_status(framework.score)


def score_status(score: Optional[float]) -> ComplianceStatus:
    if score is None:
        return ComplianceStatus.PENDING
    return classify(score, COMPLIANCE_STATUS_TABLE)


def score_rating(score: Optional[float]) -> Optional[ComplianceRating]:
    if score is None:
        return None
    return classify(score, COMPLIANCE_RATING_TABLE)


@dataclass(frozen=True)
class FrameworkView:
    id: str
    name: str
    score: Optional[float]
    status: ComplianceStatus
    rating: Optional[ComplianceRating]
    controls_compliant: int
    total_controls: int
    control_coverage: Optional[float]
    critical_findings: int

    @property
    def has_critical_findings(self) -> bool:
        return self.critical_findings > 0


@dataclass
class ComplianceOverview:
    frameworks: list[FrameworkView]
    overall_score: Optional[float]
    previous_score: Optional[float]
    overall_status: ComplianceStatus
    overall_rating: Optional[ComplianceRating]
    trend: TrendDirection
    total_critical_findings: int
    status_counts: dict[str, int]


def _clamped(score: Optional[float]) -> Optional[float]:
    value = usable_score(score)
    return None if value is None else clamp_score(value)


def framework_view(framework: ComplianceFramework) -> FrameworkView:
    coverage = None
    if framework.total_controls > 0:
        coverage = round(framework.controls_compliant / framework.total_controls * 100, 1)

    return FrameworkView(
        id=framework.id,
        name=framework.name,
        score=_clamped(framework.score),
        status=framework_status(framework),
        rating=score_rating(framework.score),
        controls_compliant=framework.controls_compliant,
        total_controls=framework.total_controls,
        control_coverage=coverage,
        critical_findings=framework.critical_findings,
    )


def summarize_frameworks(
    frameworks: Iterable[ComplianceFramework],
    overall_score: Optional[float] = None,
    previous_score: Optional[float] = None,
) -> ComplianceOverview:
    """Overall posture across frameworks.

    Without a top-level score the overall score is the rounded mean of the
    assessed frameworks; pending and unreadable frameworks do not count
    towards it. A top-level score that is not a number leaves the overall
    status unrecognized rather than pending.
    """
    views = [framework_view(f) for f in frameworks]

    if overall_score is None:
        assessed = [v.score for v in views if v.score is not None]
        if assessed:
            overall_score = round(sum(assessed) / len(assessed))
    overall = _clamped(overall_score)
    previous = _clamped(previous_score)

    status_counts = {status.value: 0 for status in ComplianceStatus}
    for view in views:
        status_counts[view.status.value] += 1

    return ComplianceOverview(
        frameworks=views,
        overall_score=overall,
        previous_score=previous,
        overall_status=score_status(overall_score),
        overall_rating=score_rating(overall_score),
        trend=trend_direction(overall, previous),
        total_critical_findings=sum(v.critical_findings for v in views),
        status_counts=status_counts,
    )
