"""Solution ranking and Pareto-frontier extraction."""

from pathwright.models.objectives import DEFAULT_WEIGHTS, OptimizationObjectives
from pathwright.optimization.optimizer import (
    SolutionOptimizer,
    dominates,
    find_pareto_optimal,
    qualitative_assessment,
    summarize,
)

__all__ = [
    "DEFAULT_WEIGHTS",
    "OptimizationObjectives",
    "SolutionOptimizer",
    "dominates",
    "find_pareto_optimal",
    "qualitative_assessment",
    "summarize",
]
