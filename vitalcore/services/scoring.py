"""
Health scoring: one snapshot in, a 0-100 score and status tier out.

Each present metric gets a sub-score from tiered range checks; the final score
is the plain mean of those sub-scores. Band edges are inclusive on both ends,
so a heart rate of exactly 100 still scores 100 and 101 does not.
"""

import structlog

from vitalcore.domain.models import HealthScore, ScoredMetric, StatusTier, VitalsSnapshot

logger = structlog.get_logger(__name__)

DEFAULT_SCORE = 50.0
DEFAULT_TIER = StatusTier.FAIR


def _heart_rate_score(bpm: float) -> float:
    if 60 <= bpm <= 100:
        return 100.0
    if 50 <= bpm <= 120:
        return 80.0
    if 40 <= bpm <= 140:
        return 60.0
    return 30.0


def _oxygen_score(spo2: float) -> float:
    if spo2 >= 95:
        return 100.0
    if spo2 >= 90:
        return 70.0
    if spo2 >= 85:
        return 40.0
    return 20.0


def _temperature_score(celsius: float) -> float:
    if 36.1 <= celsius <= 37.2:
        return 100.0
    if 35.5 <= celsius <= 37.8:
        return 80.0
    if 35.0 <= celsius <= 38.5:
        return 60.0
    return 30.0


def _blood_pressure_score(systolic: float, diastolic: float) -> float:
    if 90 <= systolic <= 120 and 60 <= diastolic <= 80:
        return 100.0
    if 80 <= systolic <= 140 and 50 <= diastolic <= 90:
        return 70.0
    return 40.0


def _glucose_score(mg_dl: float) -> float:
    # 70-140 mg/dL is the acceptable band during pregnancy
    if 70 <= mg_dl <= 140:
        return 100.0
    if 60 <= mg_dl <= 180:
        return 70.0
    return 40.0


def metric_scores(snapshot: VitalsSnapshot) -> dict[ScoredMetric, float]:
    """Sub-score for every metric present in ``snapshot``, in a fixed order."""
    scores: dict[ScoredMetric, float] = {}

    if snapshot.heart_rate is not None:
        scores[ScoredMetric.HEART_RATE] = _heart_rate_score(snapshot.heart_rate)
    if snapshot.oxygen_saturation is not None:
        scores[ScoredMetric.OXYGEN_SATURATION] = _oxygen_score(snapshot.oxygen_saturation)
    if snapshot.temperature is not None:
        scores[ScoredMetric.TEMPERATURE] = _temperature_score(snapshot.temperature)
    # Blood pressure only counts when both halves were measured
    if snapshot.systolic_bp is not None and snapshot.diastolic_bp is not None:
        scores[ScoredMetric.BLOOD_PRESSURE] = _blood_pressure_score(
            snapshot.systolic_bp, snapshot.diastolic_bp
        )
    if snapshot.glucose is not None:
        scores[ScoredMetric.GLUCOSE] = _glucose_score(snapshot.glucose)

    return scores


def classify(value: float) -> StatusTier:
    """Bucket a 0-100 score into a status tier."""
    if value >= 90:
        return StatusTier.EXCELLENT
    if value >= 75:
        return StatusTier.GOOD
    if value >= 60:
        return StatusTier.FAIR
    if value >= 40:
        return StatusTier.POOR
    return StatusTier.CRITICAL


def score(snapshot: VitalsSnapshot) -> HealthScore:
    """
    Score a single snapshot.

    Always succeeds: a snapshot with nothing measured scores the neutral
    default of 50 with tier fair. The default tier is fixed rather than
    classified, since the bands would put 50 in poor.
    """
    scores = metric_scores(snapshot)

    if scores:
        total = 0.0
        for sub_score in scores.values():
            total += sub_score
        value = total / len(scores)
        tier = classify(value)
    else:
        value = DEFAULT_SCORE
        tier = DEFAULT_TIER

    logger.debug(
        "snapshot_scored",
        snapshot_id=snapshot.id,
        score=value,
        tier=tier.value,
        metrics_scored=len(scores),
    )
    return HealthScore(value=value, tier=tier, metric_scores=scores)
