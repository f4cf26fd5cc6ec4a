"""
Domain models for vital-sign health monitoring.

These models represent the core business concepts and are framework-agnostic.
They use Pydantic for validation and are frozen so a reading, once taken,
can only be "changed" by producing a new copy.
"""

from collections.abc import Iterable
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field


class StatusTier(str, Enum):
    """Discrete health status derived from a 0-100 score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        return _TIER_DESCRIPTIONS[self]


_TIER_DESCRIPTIONS = {
    StatusTier.EXCELLENT: "All vitals are in optimal range",
    StatusTier.GOOD: "Vitals are healthy",
    StatusTier.FAIR: "Some vitals need attention",
    StatusTier.POOR: "Multiple vitals are concerning",
    StatusTier.CRITICAL: "Immediate medical attention needed",
}


class ScoredMetric(str, Enum):
    """Metrics that contribute a sub-score. Blood pressure is one combined metric."""

    HEART_RATE = "heart_rate"
    OXYGEN_SATURATION = "oxygen_saturation"
    TEMPERATURE = "temperature"
    BLOOD_PRESSURE = "blood_pressure"
    GLUCOSE = "glucose"


class AlertKind(str, Enum):
    """What an alert is about."""

    VITAL_THRESHOLD = "vital_threshold"
    TREND_CHANGE = "trend_change"
    GENERAL_STATUS = "general_status"
    EMERGENCY = "emergency"
    ACHIEVEMENT = "achievement"
    MEDICATION = "medication"
    APPOINTMENT = "appointment"
    SYSTEM = "system"
    RECOMMENDATION = "recommendation"


class AlertSeverity(str, Enum):
    """Alert severity levels, ordered by urgency."""

    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"
    EMERGENCY = "emergency"

    @property
    def priority(self) -> int:
        return _SEVERITY_PRIORITY[self]


_SEVERITY_PRIORITY = {
    AlertSeverity.INFO: 1,
    AlertSeverity.WARNING: 2,
    AlertSeverity.CRITICAL: 3,
    AlertSeverity.EMERGENCY: 4,
}


class RecommendationCategory(str, Enum):
    """Areas a recommendation can address."""

    NUTRITION = "nutrition"
    EXERCISE = "exercise"
    HYDRATION = "hydration"
    REST = "rest"
    MEDICATION = "medication"
    APPOINTMENT = "appointment"
    LIFESTYLE = "lifestyle"
    MINDFULNESS = "mindfulness"
    SAFETY = "safety"
    EDUCATION = "education"


class RecommendationPriority(str, Enum):
    """Recommendation priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def priority(self) -> int:
        return _RECOMMENDATION_PRIORITY[self]


_RECOMMENDATION_PRIORITY = {
    RecommendationPriority.LOW: 1,
    RecommendationPriority.MEDIUM: 2,
    RecommendationPriority.HIGH: 3,
    RecommendationPriority.URGENT: 4,
}


class VitalsSnapshot(BaseModel):
    """One set of vital-sign measurements taken at a point in time.

    A metric set to None was not measured in this reading; it is never
    treated as zero.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    heart_rate: float | None = Field(None, description="Beats per minute")
    oxygen_saturation: float | None = Field(None, description="SpO2 percentage")
    temperature: float | None = Field(None, description="Degrees Celsius")
    systolic_bp: float | None = Field(None, description="mmHg")
    diastolic_bp: float | None = Field(None, description="mmHg")
    glucose: float | None = Field(None, description="mg/dL")
    source: str = Field(default="device", description="Provenance, e.g. device or manual")
    is_synced: bool = False

    @computed_field(return_type=bool)
    def has_measurements(self) -> bool:
        """True when at least one metric is present."""
        return any(
            value is not None
            for value in (
                self.heart_rate,
                self.oxygen_saturation,
                self.temperature,
                self.systolic_bp,
                self.diastolic_bp,
                self.glucose,
            )
        )

    def copy_with(self, **changes: Any) -> "VitalsSnapshot":
        """Return a new snapshot with ``changes`` applied and everything else copied."""
        return self.model_validate({**self.model_dump(exclude={"has_measurements"}), **changes})


class HealthScore(BaseModel):
    """Score derived from a single snapshot. Recomputed on demand, never stored alone."""

    model_config = ConfigDict(frozen=True)

    value: float = Field(ge=0.0, le=100.0)
    tier: StatusTier
    metric_scores: dict[ScoredMetric, float] = Field(default_factory=dict)


class Alert(BaseModel):
    """An out-of-range condition or trend detected in a reading."""

    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: datetime
    kind: AlertKind
    severity: AlertSeverity
    title: str
    message: str
    action_label: str | None = None
    is_acknowledged: bool = False
    data: dict[str, float] = Field(default_factory=dict)

    def acknowledge(self) -> "Alert":
        """Acknowledgement is the only state change an alert supports."""
        return self.model_copy(update={"is_acknowledged": True})


class Recommendation(BaseModel):
    """An actionable suggestion derived from a reading."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    category: RecommendationCategory
    priority: RecommendationPriority
    created_at: datetime
    expires_at: datetime | None = None
    is_completed: bool = False
    action_label: str | None = None
    tags: tuple[str, ...] = ()

    def is_expired_at(self, now: datetime) -> bool:
        return self.expires_at is not None and now > self.expires_at

    def is_active_at(self, now: datetime) -> bool:
        return not self.is_completed and not self.is_expired_at(now)

    @property
    def is_expired(self) -> bool:
        return self.is_expired_at(datetime.now(UTC))

    @property
    def is_active(self) -> bool:
        return self.is_active_at(datetime.now(UTC))

    def mark_completed(self) -> "Recommendation":
        return self.model_copy(update={"is_completed": True})


class HealthReport(BaseModel):
    """Everything derived from one evaluation of a batch of readings."""

    model_config = ConfigDict(frozen=True)

    snapshot: VitalsSnapshot
    score: HealthScore
    alerts: tuple[Alert, ...]
    recommendations: tuple[Recommendation, ...]
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    evaluation_duration_seconds: float = Field(default=0.0, ge=0.0)


def sort_alerts(alerts: Iterable[Alert]) -> list[Alert]:
    """Newest first; alerts from the same instant are ordered by severity."""
    return sorted(alerts, key=lambda a: (a.timestamp, a.severity.priority), reverse=True)


def sort_recommendations(recommendations: Iterable[Recommendation]) -> list[Recommendation]:
    """Highest priority first, newest first within a priority."""
    return sorted(
        recommendations, key=lambda r: (r.priority.priority, r.created_at), reverse=True
    )
