"""Tests for the threshold-table classifier."""

import math

import pytest

from backend.scoring.classifier import (
    COMPLIANCE_RATING_TABLE,
    COMPLIANCE_STATUS_TABLE,
    HEATMAP_SEVERITY_TABLE,
    RISK_SEVERITY_TABLE,
    SEVERITY_RANK,
    ComplianceRating,
    ComplianceStatus,
    SeverityLevel,
    ThresholdTable,
    clamp_score,
    classify,
    gauge_position,
    parse_severity,
    usable_score,
)


class TestRiskSeverityTable:
    def test_every_integer_score_maps_to_exactly_one_level(self):
        known = set(RISK_SEVERITY_TABLE.levels)
        for score in range(0, 101):
            level = classify(score, RISK_SEVERITY_TABLE)
            assert level in known
            assert level is not SeverityLevel.UNRECOGNIZED

    @pytest.mark.parametrize(
        "score, expected",
        [
            (100, SeverityLevel.CRITICAL),
            (85, SeverityLevel.CRITICAL),
            (84.99, SeverityLevel.HIGH),
            (70, SeverityLevel.HIGH),
            (69, SeverityLevel.MEDIUM),
            (50, SeverityLevel.MEDIUM),
            (49.5, SeverityLevel.LOW),
            (30, SeverityLevel.LOW),
            (29.9, SeverityLevel.MINIMAL),
            (0, SeverityLevel.MINIMAL),
        ],
    )
    def test_inclusive_lower_bounds(self, score, expected):
        assert classify(score, RISK_SEVERITY_TABLE) is expected

    def test_levels_never_decrease_as_score_rises(self):
        ranks = [SEVERITY_RANK[classify(s, RISK_SEVERITY_TABLE)] for s in range(0, 101)]
        assert ranks == sorted(ranks)

    @pytest.mark.parametrize("score", [-40, -0.1, 100.1, 250, math.inf, -math.inf])
    def test_out_of_range_scores_are_clamped_like_the_gauge(self, score):
        assert classify(score, RISK_SEVERITY_TABLE) is classify(
            gauge_position(score), RISK_SEVERITY_TABLE
        )

    def test_gauge_position_clamps(self):
        assert gauge_position(150) == 100
        assert gauge_position(-5) == 0
        assert gauge_position(42.5) == 42.5

    @pytest.mark.parametrize("score", [None, math.nan, "not-a-number"])
    def test_unusable_scores_are_unrecognized(self, score):
        assert classify(score, RISK_SEVERITY_TABLE) is SeverityLevel.UNRECOGNIZED


class TestHeatmapSeverityTable:
    @pytest.mark.parametrize(
        "product, expected",
        [
            (25, SeverityLevel.CRITICAL),
            (20, SeverityLevel.CRITICAL),
            (16, SeverityLevel.HIGH),
            (12, SeverityLevel.HIGH),
            (10, SeverityLevel.MEDIUM),
            (6, SeverityLevel.MEDIUM),
            (5, SeverityLevel.LOW),
            (3, SeverityLevel.LOW),
            (2, SeverityLevel.MINIMAL),
            (1, SeverityLevel.MINIMAL),
        ],
    )
    def test_product_bands(self, product, expected):
        assert classify(product, HEATMAP_SEVERITY_TABLE) is expected

    def test_monotonic_in_each_factor(self):
        for fixed in range(1, 6):
            by_impact = [
                SEVERITY_RANK[classify(impact * fixed, HEATMAP_SEVERITY_TABLE)]
                for impact in range(1, 6)
            ]
            by_likelihood = [
                SEVERITY_RANK[classify(fixed * likelihood, HEATMAP_SEVERITY_TABLE)]
                for likelihood in range(1, 6)
            ]
            assert by_impact == sorted(by_impact)
            assert by_likelihood == sorted(by_likelihood)


class TestComplianceTables:
    @pytest.mark.parametrize(
        "score, expected",
        [
            (100, ComplianceStatus.COMPLIANT),
            (80, ComplianceStatus.COMPLIANT),
            (79.9, ComplianceStatus.AT_RISK),
            (60, ComplianceStatus.AT_RISK),
            (59, ComplianceStatus.NON_COMPLIANT),
            (0, ComplianceStatus.NON_COMPLIANT),
        ],
    )
    def test_status_bands(self, score, expected):
        assert classify(score, COMPLIANCE_STATUS_TABLE) is expected

    @pytest.mark.parametrize(
        "score, expected",
        [
            (95, ComplianceRating.EXCELLENT),
            (90, ComplianceRating.EXCELLENT),
            (75, ComplianceRating.GOOD),
            (60, ComplianceRating.ADEQUATE),
            (40, ComplianceRating.NEEDS_IMPROVEMENT),
            (39, ComplianceRating.CRITICAL),
        ],
    )
    def test_rating_bands(self, score, expected):
        assert classify(score, COMPLIANCE_RATING_TABLE) is expected


class TestThresholdTable:
    def test_rejects_ascending_bands(self):
        with pytest.raises(ValueError):
            ThresholdTable(
                bands=((30, SeverityLevel.LOW), (85, SeverityLevel.CRITICAL)),
                floor=SeverityLevel.MINIMAL,
                unrecognized=SeverityLevel.UNRECOGNIZED,
            )

    def test_rejects_duplicate_minimums(self):
        with pytest.raises(ValueError):
            ThresholdTable(
                bands=((50, SeverityLevel.HIGH), (50, SeverityLevel.MEDIUM)),
                floor=SeverityLevel.MINIMAL,
                unrecognized=SeverityLevel.UNRECOGNIZED,
            )

    def test_empty_table_returns_floor(self):
        table = ThresholdTable(
            bands=(), floor=SeverityLevel.LOW, unrecognized=SeverityLevel.UNRECOGNIZED
        )
        assert classify(99, table) is SeverityLevel.LOW


class TestParseSeverity:
    def test_case_and_whitespace_insensitive(self):
        assert parse_severity(" high ") is SeverityLevel.HIGH
        assert parse_severity("CRITICAL") is SeverityLevel.CRITICAL

    @pytest.mark.parametrize("label", [None, "", "Severe", "P1"])
    def test_unknown_labels(self, label):
        assert parse_severity(label) is SeverityLevel.UNRECOGNIZED


class TestScoreHelpers:
    def test_clamp_keeps_nan_instead_of_pinning_to_a_bound(self):
        assert math.isnan(clamp_score(math.nan))
        assert clamp_score(120) == 100
        assert clamp_score(0, 1, 25) == 1

    @pytest.mark.parametrize(
        "score, expected",
        [(42, 42.0), ("17.5", 17.5), (None, None), (math.nan, None), ("n/a", None)],
    )
    def test_usable_score(self, score, expected):
        assert usable_score(score) == expected
