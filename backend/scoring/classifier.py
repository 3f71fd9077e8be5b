"""Score classifier — maps numeric scores onto ordered level vocabularies.

Every level vocabulary in ComplianceLens (risk severity, heat-map severity,
compliance status, compliance rating) is one ``ThresholdTable`` evaluated by
the same ``classify`` function:

    bands are (min_inclusive, level) pairs sorted descending by minimum;
    the first band whose minimum the score meets wins, else the floor level.

Scores are clamped into the table's domain before lookup so that a gauge
drawn from ``gauge_position`` and the label from ``classify`` always agree.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Generic, TypeVar


class SeverityLevel(str, enum.Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    MINIMAL = "Minimal"
    UNRECOGNIZED = "Unrecognized"


class ComplianceStatus(str, enum.Enum):
    COMPLIANT = "Compliant"
    AT_RISK = "At Risk"
    NON_COMPLIANT = "Non-Compliant"
    PENDING = "Pending"
    UNRECOGNIZED = "Unrecognized"


class ComplianceRating(str, enum.Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    ADEQUATE = "Adequate"
    NEEDS_IMPROVEMENT = "Needs Improvement"
    CRITICAL = "Critical"
    UNRECOGNIZED = "Unrecognized"


L = TypeVar("L", bound=enum.Enum)


@dataclass(frozen=True)
class ThresholdTable(Generic[L]):
    """Ordered (min_inclusive, level) bands over the closed domain [lower, upper]."""

    bands: tuple[tuple[float, L], ...]
    floor: L
    unrecognized: L
    lower: float = 0.0
    upper: float = 100.0

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ValueError(f"Empty score domain [{self.lower}, {self.upper}]")
        minimums = [minimum for minimum, _ in self.bands]
        for higher, lower in zip(minimums, minimums[1:]):
            if lower >= higher:
                raise ValueError(
                    f"Threshold bands must be strictly descending, got {minimums}"
                )

    @property
    def levels(self) -> list[L]:
        return [level for _, level in self.bands] + [self.floor]


def clamp_score(score: float, lower: float = 0.0, upper: float = 100.0) -> float:
    """Clamp into ``[lower, upper]``; NaN passes through unchanged."""
    value = float(score)
    if math.isnan(value):
        return value
    return max(lower, min(upper, value))


def usable_score(score: float | None) -> float | None:
    """``score`` as a float, or None when it is missing, NaN or not a number."""
    if score is None:
        return None
    try:
        value = float(score)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(value) else value


def gauge_position(score: float) -> float:
    """Percentage position of a 0-100 score on a gauge."""
    return clamp_score(score, 0.0, 100.0)


def classify(score: float | None, table: ThresholdTable[L]) -> L:
    """Classify ``score`` against ``table``; never raises on bad numbers."""
    value = usable_score(score)
    if value is None:
        return table.unrecognized

    value = clamp_score(value, table.lower, table.upper)
    for minimum, level in table.bands:
        if value >= minimum:
            return level
    return table.floor


RISK_SEVERITY_TABLE: ThresholdTable[SeverityLevel] = ThresholdTable(
    bands=(
        (85, SeverityLevel.CRITICAL),
        (70, SeverityLevel.HIGH),
        (50, SeverityLevel.MEDIUM),
        (30, SeverityLevel.LOW),
    ),
    floor=SeverityLevel.MINIMAL,
    unrecognized=SeverityLevel.UNRECOGNIZED,
)

# Applied to the impact x likelihood product.
HEATMAP_SEVERITY_TABLE: ThresholdTable[SeverityLevel] = ThresholdTable(
    bands=(
        (20, SeverityLevel.CRITICAL),
        (12, SeverityLevel.HIGH),
        (6, SeverityLevel.MEDIUM),
        (3, SeverityLevel.LOW),
    ),
    floor=SeverityLevel.MINIMAL,
    unrecognized=SeverityLevel.UNRECOGNIZED,
    lower=1,
    upper=25,
)

COMPLIANCE_STATUS_TABLE: ThresholdTable[ComplianceStatus] = ThresholdTable(
    bands=(
        (80, ComplianceStatus.COMPLIANT),
        (60, ComplianceStatus.AT_RISK),
    ),
    floor=ComplianceStatus.NON_COMPLIANT,
    unrecognized=ComplianceStatus.UNRECOGNIZED,
)

COMPLIANCE_RATING_TABLE: ThresholdTable[ComplianceRating] = ThresholdTable(
    bands=(
        (90, ComplianceRating.EXCELLENT),
        (75, ComplianceRating.GOOD),
        (60, ComplianceRating.ADEQUATE),
        (40, ComplianceRating.NEEDS_IMPROVEMENT),
    ),
    floor=ComplianceRating.CRITICAL,
    unrecognized=ComplianceRating.UNRECOGNIZED,
)

_SEVERITY_BY_LABEL = {
    level.value.lower(): level
    for level in SeverityLevel
    if level is not SeverityLevel.UNRECOGNIZED
}


def parse_severity(label: str | None) -> SeverityLevel:
    if not label:
        return SeverityLevel.UNRECOGNIZED
    return _SEVERITY_BY_LABEL.get(label.strip().lower(), SeverityLevel.UNRECOGNIZED)


# Higher rank = more severe; unrecognized sorts below everything.
SEVERITY_RANK = {
    SeverityLevel.CRITICAL: 5,
    SeverityLevel.HIGH: 4,
    SeverityLevel.MEDIUM: 3,
    SeverityLevel.LOW: 2,
    SeverityLevel.MINIMAL: 1,
    SeverityLevel.UNRECOGNIZED: 0,
}
