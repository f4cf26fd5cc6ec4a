"""Short-history trend helpers and per-metric history statistics."""

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, ConfigDict

from vitalcore.domain.models import VitalsSnapshot

TrendDirection = Literal["rising", "falling", "stable"]

TRACKED_METRICS = (
    "heart_rate",
    "oxygen_saturation",
    "temperature",
    "systolic_bp",
    "diastolic_bp",
    "glucose",
)

# Metrics the IoT sensors report, and so the ones history statistics cover
SUMMARIZED_METRICS = ("heart_rate", "oxygen_saturation", "temperature", "glucose")


class MetricStats(BaseModel):
    """Average, minimum and maximum of the measured values of one metric."""

    model_config = ConfigDict(frozen=True)

    avg: float
    min: float
    max: float
    count: int


def percent_change(history: Sequence[VitalsSnapshot], metric: str) -> float:
    """
    Percent change between the last two positive readings of ``metric``.

    ``history`` must be in chronological order. Absent and non-positive
    values are ignored; fewer than two usable values gives 0.0.
    """
    if metric not in TRACKED_METRICS:
        raise ValueError(f"Unknown metric: {metric}")

    values = [
        value
        for value in (getattr(snapshot, metric) for snapshot in history)
        if value is not None and value > 0
    ]
    if len(values) < 2:
        return 0.0

    recent, previous = values[-1], values[-2]
    return (recent - previous) / previous * 100


def trend_direction(change: float) -> TrendDirection:
    if change > 2:
        return "rising"
    if change < -2:
        return "falling"
    return "stable"


def summarize_history(history: Sequence[VitalsSnapshot]) -> dict[str, MetricStats]:
    """
    Per-metric statistics over ``history``.

    Absent values are skipped. A metric with no measured values has no entry,
    so an empty history gives an empty dict rather than zeros.
    """
    stats: dict[str, MetricStats] = {}
    for metric in SUMMARIZED_METRICS:
        values = [
            value
            for value in (getattr(snapshot, metric) for snapshot in history)
            if value is not None
        ]
        if not values:
            continue
        stats[metric] = MetricStats(
            avg=sum(values) / len(values),
            min=min(values),
            max=max(values),
            count=len(values),
        )
    return stats
