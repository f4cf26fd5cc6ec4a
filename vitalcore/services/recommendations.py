"""
Recommendation generation from the latest reading.

Vital-driven suggestions come first, followed by the two standing
recommendations every user receives. Expiry is left to whoever stores them.
"""

import uuid
from datetime import UTC, datetime

import structlog

from vitalcore.domain.errors import require_snapshot
from vitalcore.domain.models import (
    Recommendation,
    RecommendationCategory,
    RecommendationPriority,
    VitalsSnapshot,
)

logger = structlog.get_logger(__name__)


def _recommendation(
    now: datetime,
    title: str,
    description: str,
    category: RecommendationCategory,
    priority: RecommendationPriority,
    action_label: str | None = None,
    tags: tuple[str, ...] = (),
) -> Recommendation:
    return Recommendation(
        id=str(uuid.uuid4()),
        title=title,
        description=description,
        category=category,
        priority=priority,
        created_at=now,
        action_label=action_label,
        tags=tags,
    )


def _vital_recommendations(latest: VitalsSnapshot, now: datetime) -> list[Recommendation]:
    recommendations: list[Recommendation] = []

    if latest.heart_rate is not None:
        if latest.heart_rate > 100:
            recommendations.append(
                _recommendation(
                    now,
                    "Rest and Relaxation",
                    "Your heart rate is elevated. Take a break, lie on your left side "
                    "and rest for 15-20 minutes.",
                    RecommendationCategory.REST,
                    RecommendationPriority.MEDIUM,
                    tags=("heart_rate",),
                )
            )
        elif latest.heart_rate < 60:
            recommendations.append(
                _recommendation(
                    now,
                    "Gentle Activity",
                    "Your heart rate is on the low side. A short, gentle walk can "
                    "help your circulation.",
                    RecommendationCategory.EXERCISE,
                    RecommendationPriority.LOW,
                    action_label="Log Exercise",
                    tags=("heart_rate",),
                )
            )

    if latest.oxygen_saturation is not None and latest.oxygen_saturation < 98:
        recommendations.append(
            _recommendation(
                now,
                "Deep Breathing Exercise",
                "Practice slow, deep breathing for 5 minutes to help improve oxygen levels.",
                RecommendationCategory.MINDFULNESS,
                RecommendationPriority.MEDIUM,
                tags=("oxygen_saturation",),
            )
        )

    if latest.temperature is not None and latest.temperature > 37.0:
        recommendations.append(
            _recommendation(
                now,
                "Stay Hydrated",
                "Your temperature is slightly raised. Drink at least 8-10 glasses of "
                "water today.",
                RecommendationCategory.HYDRATION,
                RecommendationPriority.MEDIUM,
                action_label="Log Water Intake",
                tags=("temperature",),
            )
        )

    return recommendations


def _standing_recommendations(now: datetime) -> list[Recommendation]:
    return [
        _recommendation(
            now,
            "Regular Prenatal Check-ups",
            "Keep up with your scheduled prenatal appointments so your provider can "
            "track your health and your baby's growth.",
            RecommendationCategory.APPOINTMENT,
            RecommendationPriority.HIGH,
            action_label="View Appointments",
        ),
        _recommendation(
            now,
            "Balanced Nutrition",
            "Eat a variety of fruits, vegetables, whole grains and protein, and keep "
            "taking your prenatal vitamins.",
            RecommendationCategory.NUTRITION,
            RecommendationPriority.MEDIUM,
        ),
    ]


def generate_recommendations(
    latest: VitalsSnapshot | None, *, now: datetime | None = None
) -> tuple[Recommendation, ...]:
    """
    Derive recommendations from ``latest``.

    Always returns at least the two standing recommendations, even when
    nothing was measured.

    Raises:
        InvalidInputError: ``latest`` is missing or not a snapshot.
    """
    latest = require_snapshot(latest, "latest")
    now = now or datetime.now(UTC)

    recommendations = _vital_recommendations(latest, now) + _standing_recommendations(now)

    logger.info(
        "recommendations_generated",
        snapshot_id=latest.id,
        count=len(recommendations),
    )
    return tuple(recommendations)
