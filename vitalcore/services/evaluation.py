"""
Evaluation pipeline combining scoring, alerts and recommendations.

The three stages are independent pure functions; this module only picks the
latest and previous readings out of a chronological batch and bundles the
results into a ``HealthReport``.
"""

import time
from collections.abc import Sequence
from datetime import UTC, datetime

import structlog

from vitalcore.domain.errors import InvalidInputError, require_snapshot
from vitalcore.domain.models import HealthReport, VitalsSnapshot
from vitalcore.services.alerts import generate_alerts
from vitalcore.services.recommendations import generate_recommendations
from vitalcore.services.scoring import score

logger = structlog.get_logger(__name__)


def evaluate(readings: Sequence[VitalsSnapshot], *, now: datetime | None = None) -> HealthReport:
    """
    Evaluate a chronologically ordered batch of readings.

    The last reading is scored and drives alerts and recommendations; the one
    before it, if any, is used for trend alerts.

    Raises:
        InvalidInputError: ``readings`` is empty, or its last two entries are
            not snapshots.
    """
    if not readings:
        raise InvalidInputError("at least one reading is required")

    latest = require_snapshot(readings[-1], "latest")
    previous = require_snapshot(readings[-2], "previous") if len(readings) > 1 else None

    start_time = time.perf_counter()
    now = now or datetime.now(UTC)

    health_score = score(latest)
    alerts = generate_alerts(latest, previous, now=now)
    recommendations = generate_recommendations(latest, now=now)

    duration = time.perf_counter() - start_time
    report = HealthReport(
        snapshot=latest,
        score=health_score,
        alerts=alerts,
        recommendations=recommendations,
        generated_at=now,
        evaluation_duration_seconds=duration,
    )

    logger.info(
        "health_report_generated",
        snapshot_id=latest.id,
        readings=len(readings),
        score=round(health_score.value, 2),
        tier=health_score.tier.value,
        alerts=len(alerts),
        recommendations=len(recommendations),
        duration_seconds=round(duration, 6),
    )
    return report
