"""
Tests for domain model validation and helpers.
"""

from datetime import UTC, datetime, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from vitalcore.domain.models import (
    Alert,
    AlertKind,
    AlertSeverity,
    HealthScore,
    Recommendation,
    RecommendationCategory,
    RecommendationPriority,
    StatusTier,
    VitalsSnapshot,
    sort_alerts,
    sort_recommendations,
)

NOW = datetime(2024, 6, 10, 9, 30, tzinfo=UTC)


def _alert(title: str, timestamp: datetime, severity: AlertSeverity) -> Alert:
    return Alert(
        id=title,
        timestamp=timestamp,
        kind=AlertKind.VITAL_THRESHOLD,
        severity=severity,
        title=title,
        message=title,
    )


def _recommendation(
    title: str, priority: RecommendationPriority, created_at: datetime
) -> Recommendation:
    return Recommendation(
        id=title,
        title=title,
        description=title,
        category=RecommendationCategory.LIFESTYLE,
        priority=priority,
        created_at=created_at,
    )


class TestVitalsSnapshot:
    @given(heart_rate=st.floats(min_value=20, max_value=220), source=st.text(min_size=1, max_size=20))
    def test_snapshot_creation_with_random_data(self, heart_rate: float, source: str) -> None:
        snapshot = VitalsSnapshot(id="s1", heart_rate=heart_rate, source=source)

        assert snapshot.heart_rate == heart_rate
        assert snapshot.source == source
        assert snapshot.timestamp.tzinfo == UTC
        assert snapshot.oxygen_saturation is None

    def test_snapshot_immutability(self) -> None:
        snapshot = VitalsSnapshot(id="s1", heart_rate=80)

        with pytest.raises(ValueError, match="frozen"):
            snapshot.heart_rate = 90  # type: ignore

    def test_copy_with_keeps_unspecified_fields(self) -> None:
        original = VitalsSnapshot(
            id="s1", timestamp=NOW, heart_rate=80, temperature=36.9, source="manual"
        )

        updated = original.copy_with(heart_rate=95)

        assert updated.heart_rate == 95
        assert updated.temperature == 36.9
        assert updated.timestamp == NOW
        assert updated.source == "manual"
        assert original.heart_rate == 80

    def test_has_measurements(self) -> None:
        assert not VitalsSnapshot(id="empty").has_measurements
        assert VitalsSnapshot(id="bp", systolic_bp=110).has_measurements

    def test_non_numeric_metric_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            VitalsSnapshot(id="bad", heart_rate="fast")  # type: ignore[arg-type]


class TestEnums:
    def test_status_tier_display(self) -> None:
        assert StatusTier.EXCELLENT.display_name == "Excellent"
        assert StatusTier.CRITICAL.description == "Immediate medical attention needed"
        assert all(tier.description for tier in StatusTier)

    def test_severity_priority_order(self) -> None:
        priorities = [severity.priority for severity in AlertSeverity]
        assert priorities == sorted(priorities) == [1, 2, 3, 4]

    def test_recommendation_priority_order(self) -> None:
        priorities = [priority.priority for priority in RecommendationPriority]
        assert priorities == [1, 2, 3, 4]


class TestHealthScore:
    def test_score_bounds_are_validated(self) -> None:
        with pytest.raises(ValueError):
            HealthScore(value=101.0, tier=StatusTier.EXCELLENT)

        with pytest.raises(ValueError):
            HealthScore(value=-1.0, tier=StatusTier.CRITICAL)


class TestSorting:
    def test_alerts_newest_first_then_by_severity(self) -> None:
        older = _alert("older", NOW - timedelta(hours=1), AlertSeverity.EMERGENCY)
        info = _alert("info", NOW, AlertSeverity.INFO)
        critical = _alert("critical", NOW, AlertSeverity.CRITICAL)

        ordered = sort_alerts([older, info, critical])

        assert [a.title for a in ordered] == ["critical", "info", "older"]

    def test_recommendations_by_priority_then_newest(self) -> None:
        low = _recommendation("low", RecommendationPriority.LOW, NOW)
        high_old = _recommendation("high-old", RecommendationPriority.HIGH, NOW - timedelta(days=1))
        high_new = _recommendation("high-new", RecommendationPriority.HIGH, NOW)
        urgent = _recommendation("urgent", RecommendationPriority.URGENT, NOW - timedelta(days=3))

        ordered = sort_recommendations([low, high_old, urgent, high_new])

        assert [r.title for r in ordered] == ["urgent", "high-new", "high-old", "low"]
