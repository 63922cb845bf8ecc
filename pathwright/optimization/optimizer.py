"""Multi-objective ranking of design solutions.

Ranking is a weighted-sum sort.  The Pareto-optimal set is computed
independently from the raw metrics, so the top-ranked solution is not
assumed to be non-dominated.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from pathwright.metrics.estimator import MetricsEstimator
from pathwright.models.objectives import OptimizationObjectives
from pathwright.models.optimization import DimensionScores, OptimizationResult, RankedSolution
from pathwright.models.solution import DesignSolution, SolutionMetrics

logger = logging.getLogger(__name__)

# (attribute, below, strength, above, weakness)
_QUALITATIVE_THRESHOLDS: tuple[tuple[str, float, str, float, str], ...] = (
    ("estimated_cost", 500.0, "Low cost", 2000.0, "High cost"),
    ("estimated_weight", 50.0, "Lightweight", 200.0, "Heavy"),
    ("manufacturing_complexity", 4.0, "Easy to manufacture", 7.0, "Complex manufacturing"),
    ("maintenance_score", 4.0, "Low maintenance", 7.0, "High maintenance"),
)
_GOOD_EFFICIENCY = 70.0
_POOR_EFFICIENCY = 30.0


def dominates(a: SolutionMetrics, b: SolutionMetrics) -> bool:
    """True if *a* is at least as good as *b* everywhere and strictly better somewhere.

    Cost, weight, complexity, assembly time and maintenance are minimized;
    material efficiency is maximized.
    """
    no_worse = (
        a.estimated_cost <= b.estimated_cost
        and a.estimated_weight <= b.estimated_weight
        and a.material_efficiency >= b.material_efficiency
        and a.manufacturing_complexity <= b.manufacturing_complexity
        and a.assembly_time_estimate <= b.assembly_time_estimate
        and a.maintenance_score <= b.maintenance_score
    )
    if not no_worse:
        return False
    return (
        a.estimated_cost < b.estimated_cost
        or a.estimated_weight < b.estimated_weight
        or a.material_efficiency > b.material_efficiency
        or a.manufacturing_complexity < b.manufacturing_complexity
        or a.assembly_time_estimate < b.assembly_time_estimate
        or a.maintenance_score < b.maintenance_score
    )


def find_pareto_optimal(solutions: Sequence[DesignSolution]) -> list[str]:
    """Ids of every solution not dominated by another, in input order."""
    optimal: list[str] = []
    for i, candidate in enumerate(solutions):
        dominated = any(
            dominates(other.metrics, candidate.metrics)
            for j, other in enumerate(solutions)
            if i != j
        )
        if not dominated:
            optimal.append(candidate.id)
    return optimal


def qualitative_assessment(metrics: SolutionMetrics) -> tuple[list[str], list[str]]:
    """Strengths and weaknesses from fixed thresholds."""
    strengths: list[str] = []
    weaknesses: list[str] = []
    for attr, low, strength, high, weakness in _QUALITATIVE_THRESHOLDS[:2]:
        _classify(getattr(metrics, attr), low, strength, high, weakness, strengths, weaknesses)

    if metrics.material_efficiency > _GOOD_EFFICIENCY:
        strengths.append("Good material usage")
    elif metrics.material_efficiency < _POOR_EFFICIENCY:
        weaknesses.append("Material waste")

    for attr, low, strength, high, weakness in _QUALITATIVE_THRESHOLDS[2:]:
        _classify(getattr(metrics, attr), low, strength, high, weakness, strengths, weaknesses)
    return strengths, weaknesses


def _classify(
    value: float,
    low: float,
    strength: str,
    high: float,
    weakness: str,
    strengths: list[str],
    weaknesses: list[str],
) -> None:
    if value < low:
        strengths.append(strength)
    elif value > high:
        weaknesses.append(weakness)


def summarize(ranked: Sequence[RankedSolution], pareto_optimal: Sequence[str]) -> str:
    if not ranked:
        return "No solutions to evaluate."

    top = ranked[0]
    parts = [f"Best overall solution: {top.solution_id} (score: {top.scores.overall:.1f})"]
    if top.strengths:
        parts.append(f"Strengths: {', '.join(top.strengths)}")
    if len(pareto_optimal) > 1:
        parts.append(
            f"{len(pareto_optimal)} Pareto-optimal solutions found (no single best trade-off)."
        )
    if len(ranked) > 1:
        costs = [r.scores.cost for r in ranked]
        parts.append(f"Cost range: ${min(costs):.0f} - ${max(costs):.0f}")
    return " ".join(parts)


class SolutionOptimizer:
    """Score, rank and Pareto-filter design solutions.

    The configured objectives are an immutable snapshot; ``set_objectives``
    replaces the snapshot rather than editing it, and ``rank_solutions``
    reads it exactly once per call.  Inputs are never mutated: the result
    carries re-scored copies.

    Parameters
    ----------
    objectives:
        Initial weights.  Defaults to :data:`DEFAULT_WEIGHTS`.
    estimator:
        Metrics estimator used for re-scoring.
    """

    def __init__(
        self,
        objectives: OptimizationObjectives | None = None,
        estimator: MetricsEstimator | None = None,
    ) -> None:
        self._objectives = objectives or OptimizationObjectives()
        self.estimator = estimator or MetricsEstimator()

    @property
    def objectives(self) -> OptimizationObjectives:
        return self._objectives

    def set_objectives(self, partial: dict[str, float]) -> OptimizationObjectives:
        """Merge *partial* over the current weights and renormalize.

        Raises
        ------
        pydantic.ValidationError
            Unknown objective name or negative weight.
        """
        self._objectives = self._objectives.merge(partial)
        logger.info("Objectives updated: %s", self._objectives.as_dict())
        return self._objectives

    def estimate_metrics(
        self,
        solution: DesignSolution,
        objectives: OptimizationObjectives | None = None,
    ) -> SolutionMetrics:
        estimate = self.estimator.estimate(
            solution.domain,
            solution.element_type,
            solution.parameters,
            objectives or self._objectives,
        )
        return estimate.metrics

    def rank_solutions(
        self,
        solutions: Iterable[DesignSolution],
        objectives: OptimizationObjectives | None = None,
    ) -> OptimizationResult:
        """Re-score, rank (stable, descending overall score) and Pareto-filter.

        Parameters
        ----------
        solutions:
            Complete design solutions.
        objectives:
            Per-call weights.  Defaults to the optimizer's current snapshot.

        Returns
        -------
        OptimizationResult
            Ranked entries, Pareto ids (in rank order), summary text, and
            the re-scored solutions in rank order.
        """
        weights = objectives or self._objectives
        rescored = [
            solution.model_copy(update={"metrics": self.estimate_metrics(solution, weights)})
            for solution in solutions
        ]
        # sorted() is stable, so ties keep their input order
        ordered = sorted(rescored, key=lambda s: s.metrics.overall_score, reverse=True)
        pareto = find_pareto_optimal(ordered)
        pareto_ids = set(pareto)

        ranked: list[RankedSolution] = []
        for index, solution in enumerate(ordered):
            m = solution.metrics
            strengths, weaknesses = qualitative_assessment(m)
            ranked.append(
                RankedSolution(
                    solution_id=solution.id,
                    rank=index + 1,
                    scores=DimensionScores(
                        cost=m.estimated_cost,
                        weight=m.estimated_weight,
                        material_efficiency=m.material_efficiency,
                        complexity=m.manufacturing_complexity,
                        assembly_time=m.assembly_time_estimate,
                        maintainability=10 - m.maintenance_score,
                        overall=m.overall_score,
                    ),
                    strengths=tuple(strengths),
                    weaknesses=tuple(weaknesses),
                    pareto_optimal=solution.id in pareto_ids,
                )
            )

        if ranked and not ranked[0].pareto_optimal:
            logger.info("Top-ranked solution %s is dominated by another candidate", ranked[0].solution_id)
        logger.debug("Ranked %d solution(s); %d Pareto-optimal", len(ranked), len(pareto))

        return OptimizationResult(
            ranked_solutions=tuple(ranked),
            pareto_optimal=tuple(pareto),
            summary=summarize(ranked, pareto),
            solutions=tuple(ordered),
        )
