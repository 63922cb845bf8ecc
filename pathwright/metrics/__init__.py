"""Metrics estimation — cost, weight, efficiency, complexity, time, upkeep."""

from pathwright.metrics.estimator import MetricsEstimate, MetricsEstimator, overall_score
from pathwright.metrics.materials import DEFAULT_MATERIALS, MaterialProperties, MaterialTable

__all__ = [
    "DEFAULT_MATERIALS",
    "MaterialProperties",
    "MaterialTable",
    "MetricsEstimate",
    "MetricsEstimator",
    "overall_score",
]
