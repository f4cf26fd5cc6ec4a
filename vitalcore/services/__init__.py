"""
Core services for the application.

This package contains the evaluation rules: health scoring, alert and
recommendation generation, short-history trends, and the pipeline that
combines them.
"""

from .alerts import concern_message, generate_alerts, vitals_of_concern
from .evaluation import evaluate
from .recommendations import generate_recommendations
from .result import Result
from .scoring import classify, metric_scores, score
from .trends import MetricStats, percent_change, summarize_history, trend_direction

__all__ = [
    "MetricStats",
    "Result",
    "classify",
    "concern_message",
    "evaluate",
    "generate_alerts",
    "generate_recommendations",
    "metric_scores",
    "percent_change",
    "score",
    "summarize_history",
    "trend_direction",
    "vitals_of_concern",
]
