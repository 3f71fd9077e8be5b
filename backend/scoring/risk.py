"""Risk aggregator — heat map, rollups and category summaries for a risk register."""

from __future__ import annotations

import enum
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from backend.models.risk import CategoryScore, RiskItem
from backend.scoring.classifier import (
    HEATMAP_SEVERITY_TABLE,
    RISK_SEVERITY_TABLE,
    SeverityLevel,
    clamp_score,
    classify,
    usable_score,
)

ORDINAL_MIN = 1
ORDINAL_MAX = 5
_MAX_PRODUCT = ORDINAL_MAX * ORDINAL_MAX


class TrendDirection(str, enum.Enum):
    UP = "up"
    DOWN = "down"
    NONE = "none"


def trend_direction(current: Optional[float], previous: Optional[float]) -> TrendDirection:
    """Direction only; whether "up" is good depends on what the score measures."""
    if current is None or previous is None:
        return TrendDirection.NONE
    if current > previous:
        return TrendDirection.UP
    if current < previous:
        return TrendDirection.DOWN
    return TrendDirection.NONE


def _ordinal(value: int) -> int:
    return int(clamp_score(value, ORDINAL_MIN, ORDINAL_MAX))


def risk_product(item: RiskItem) -> int:
    """impact x likelihood with both factors clamped to 1-5."""
    return _ordinal(item.impact) * _ordinal(item.likelihood)


def heatmap_level(item: RiskItem) -> SeverityLevel:
    return classify(risk_product(item), HEATMAP_SEVERITY_TABLE)


def heatmap_key(impact: int, likelihood: int) -> str:
    return f"{impact}-{likelihood}"


@dataclass(frozen=True)
class ScoredRisk:
    id: str
    title: str
    category: str
    impact: int
    likelihood: int
    score: int
    level: SeverityLevel


@dataclass
class HeatMapCell:
    impact: int
    likelihood: int
    level: SeverityLevel
    count: int = 0
    members: list[ScoredRisk] = field(default_factory=list)


@dataclass(frozen=True)
class CategorySummary:
    name: str
    score: Optional[float]
    level: SeverityLevel


@dataclass
class RiskSnapshot:
    overall_score: Optional[float]
    previous_score: Optional[float]
    overall_level: SeverityLevel
    trend: TrendDirection
    categories: list[CategorySummary]
    heat_map: dict[str, HeatMapCell]
    critical_count: int
    high_count: int
    total_count: int

    @property
    def urgent_count(self) -> int:
        return self.critical_count + self.high_count


def score_item(item: RiskItem) -> ScoredRisk:
    impact = _ordinal(item.impact)
    likelihood = _ordinal(item.likelihood)
    score = impact * likelihood
    return ScoredRisk(
        id=item.id,
        title=item.title,
        category=item.category,
        impact=impact,
        likelihood=likelihood,
        score=score,
        level=classify(score, HEATMAP_SEVERITY_TABLE),
    )


def build_heat_map(scored: Iterable[ScoredRisk]) -> dict[str, HeatMapCell]:
    heat_map: dict[str, HeatMapCell] = {}
    for risk in scored:
        key = heatmap_key(risk.impact, risk.likelihood)
        cell = heat_map.get(key)
        if cell is None:
            cell = HeatMapCell(impact=risk.impact, likelihood=risk.likelihood, level=risk.level)
            heat_map[key] = cell
        cell.count += 1
        cell.members.append(risk)
    return heat_map


def derive_category_scores(scored: Iterable[ScoredRisk]) -> list[CategoryScore]:
    """Mean impact x likelihood per category, rescaled onto 0-100."""
    products: dict[str, list[int]] = defaultdict(list)
    for risk in scored:
        products[risk.category].append(risk.score)

    derived = [
        CategoryScore(name=name, score=round(sum(values) / len(values) / _MAX_PRODUCT * 100, 1))
        for name, values in products.items()
    ]
    derived.sort(key=lambda c: (-c.score, c.name))
    return derived


def _clamped(score: Optional[float]) -> Optional[float]:
    value = usable_score(score)
    return None if value is None else clamp_score(value)


def aggregate(
    items: Iterable[RiskItem],
    categories: Optional[Sequence[CategoryScore]] = None,
    overall_score: Optional[float] = None,
    previous_score: Optional[float] = None,
) -> RiskSnapshot:
    """Aggregate a risk register into a snapshot.

    Pre-scored ``categories`` are taken as delivered and only classified; when
    absent they are derived from the items. The overall score falls back to
    the mean of the usable category scores. A score that is not a number is
    reported as None with an unrecognized level, never as a gauge extreme.
    """
    scored = [score_item(item) for item in items]
    heat_map = build_heat_map(scored)

    if categories is None:
        categories = derive_category_scores(scored)

    summaries = [
        CategorySummary(
            name=category.name,
            score=_clamped(category.score),
            level=classify(category.score, RISK_SEVERITY_TABLE),
        )
        for category in categories
    ]

    if overall_score is None:
        usable = [s.score for s in summaries if s.score is not None]
        if usable:
            overall = round(sum(usable) / len(usable), 1)
        else:
            # Nothing to average: an empty register scores 0, unreadable categories score nothing.
            overall = None if summaries else 0.0
    else:
        overall = _clamped(overall_score)
    previous = _clamped(previous_score)

    return RiskSnapshot(
        overall_score=overall,
        previous_score=previous,
        overall_level=classify(overall, RISK_SEVERITY_TABLE),
        trend=trend_direction(overall, previous),
        categories=summaries,
        heat_map=heat_map,
        critical_count=sum(1 for r in scored if r.level is SeverityLevel.CRITICAL),
        high_count=sum(1 for r in scored if r.level is SeverityLevel.HIGH),
        total_count=len(scored),
    )
