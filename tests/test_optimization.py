"""Tests for objective weights, ranking and Pareto extraction."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pathwright.metrics import MetricsEstimate
from pathwright.metrics.estimator import overall_score
from pathwright.models import (
    DEFAULT_WEIGHTS,
    DesignSolution,
    ElementParameters,
    KnowledgeDomain,
    OptimizationObjectives,
    SolutionMetrics,
)
from pathwright.optimization import (
    SolutionOptimizer,
    dominates,
    find_pareto_optimal,
    qualitative_assessment,
)

A = KnowledgeDomain.ACCESS

GOOD = SolutionMetrics(
    estimated_cost=400,
    estimated_weight=40,
    material_efficiency=80,
    manufacturing_complexity=3,
    assembly_time_estimate=3,
    maintenance_score=3,
)
BAD = SolutionMetrics(
    estimated_cost=3000,
    estimated_weight=300,
    material_efficiency=20,
    manufacturing_complexity=9,
    assembly_time_estimate=15,
    maintenance_score=9,
)


class FixedEstimator:
    """Estimator stand-in returning preset metrics keyed by material."""

    def __init__(self, table: dict[str, SolutionMetrics]) -> None:
        self.table = table
        self.calls = 0

    def estimate(self, domain, element_type, params, objectives=None) -> MetricsEstimate:
        self.calls += 1
        metrics = self.table[params.material]
        score = overall_score(metrics, objectives or OptimizationObjectives())
        return MetricsEstimate(metrics=metrics.model_copy(update={"overall_score": score}))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _solution(sid: str, material: str, metrics: SolutionMetrics | None = None) -> DesignSolution:
    return DesignSolution(
        id=sid,
        domain=A,
        element_type="stairs",
        parameters=ElementParameters(material=material),
        metrics=metrics or SolutionMetrics(),
    )


@pytest.fixture
def optimizer() -> SolutionOptimizer:
    return SolutionOptimizer(estimator=FixedEstimator({"good": GOOD, "bad": BAD}))


# ---------------------------------------------------------------------------
# Objectives
# ---------------------------------------------------------------------------


class TestObjectives:
    def test_defaults_sum_to_one(self) -> None:
        objectives = OptimizationObjectives()
        assert objectives.total == pytest.approx(1.0)
        assert objectives.as_dict() == pytest.approx(DEFAULT_WEIGHTS)

    @pytest.mark.parametrize(
        "partial",
        [
            {"minimize_cost": 1.0},
            {"minimize_weight": 5, "maximize_maintainability": 0},
            {"minimize_cost": 0.0, "minimize_weight": 0.0, "minimize_complexity": 2.5},
            {name: 3.0 for name in DEFAULT_WEIGHTS},
        ],
    )
    def test_partial_normalized(self, partial: dict[str, float]) -> None:
        assert OptimizationObjectives.from_partial(partial).total == pytest.approx(1.0)

    def test_all_zero_left_alone(self) -> None:
        objectives = OptimizationObjectives.from_partial({name: 0.0 for name in DEFAULT_WEIGHTS})
        assert objectives.total == 0.0

    def test_merge_returns_new_instance(self) -> None:
        base = OptimizationObjectives()
        merged = base.merge({"minimize_cost": 2.0})
        assert base.minimize_cost == pytest.approx(0.3)
        assert merged.minimize_cost > base.minimize_cost
        assert merged.total == pytest.approx(1.0)

    def test_unknown_weight_rejected(self) -> None:
        with pytest.raises(ValidationError):
            OptimizationObjectives.from_partial({"minimise_cost": 1.0})

    def test_negative_weight_rejected(self) -> None:
        with pytest.raises(ValidationError):
            OptimizationObjectives.from_partial({"minimize_cost": -1.0})

    def test_set_objectives(self, optimizer: SolutionOptimizer) -> None:
        before = optimizer.objectives
        after = optimizer.set_objectives({"minimize_weight": 1.0})
        assert optimizer.objectives is after
        assert after.total == pytest.approx(1.0)
        assert before.minimize_weight == pytest.approx(0.1)


# ---------------------------------------------------------------------------
# Dominance and Pareto set
# ---------------------------------------------------------------------------


class TestDominance:
    def test_example(self) -> None:
        assert dominates(GOOD, BAD)
        assert not dominates(BAD, GOOD)

    def test_equal_does_not_dominate(self) -> None:
        assert not dominates(GOOD, GOOD)

    def test_mixed_trade_off(self) -> None:
        lighter = GOOD.model_copy(update={"estimated_weight": 10, "estimated_cost": 900})
        assert not dominates(GOOD, lighter)
        assert not dominates(lighter, GOOD)

    def test_efficiency_is_maximized(self) -> None:
        better = GOOD.model_copy(update={"material_efficiency": 90})
        assert dominates(better, GOOD)

    def test_pareto_example(self) -> None:
        solutions = [_solution("b", "bad", BAD), _solution("a", "good", GOOD)]
        assert find_pareto_optimal(solutions) == ["a"]

    def test_pareto_keeps_trade_offs(self) -> None:
        lighter = GOOD.model_copy(update={"estimated_weight": 10, "estimated_cost": 900})
        solutions = [
            _solution("a", "x", GOOD),
            _solution("l", "x", lighter),
            _solution("b", "x", BAD),
        ]
        assert find_pareto_optimal(solutions) == ["a", "l"]

    def test_duplicates_both_optimal(self) -> None:
        solutions = [_solution("a", "x", GOOD), _solution("a2", "x", GOOD)]
        assert find_pareto_optimal(solutions) == ["a", "a2"]

    def test_empty(self) -> None:
        assert find_pareto_optimal([]) == []


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


class TestRankSolutions:
    def test_ranks_by_score(self, optimizer: SolutionOptimizer) -> None:
        result = optimizer.rank_solutions([_solution("b", "bad"), _solution("a", "good")])
        assert [r.solution_id for r in result.ranked_solutions] == ["a", "b"]
        assert [r.rank for r in result.ranked_solutions] == [1, 2]
        assert result.pareto_optimal == ("a",)
        assert result.ranked_solutions[0].pareto_optimal
        assert not result.ranked_solutions[1].pareto_optimal

    def test_inputs_not_mutated(self, optimizer: SolutionOptimizer) -> None:
        original = _solution("a", "good")
        result = optimizer.rank_solutions([original])
        assert original.metrics == SolutionMetrics()
        assert result.solutions[0].metrics.estimated_cost == 400
        assert result.top is result.solutions[0]

    def test_idempotent(self, optimizer: SolutionOptimizer) -> None:
        solutions = [_solution("b", "bad"), _solution("a", "good"), _solution("a2", "good")]
        first = optimizer.rank_solutions(solutions)
        second = optimizer.rank_solutions(solutions)
        assert first.ranked_solutions == second.ranked_solutions
        assert first.pareto_optimal == second.pareto_optimal
        assert first.summary == second.summary

    def test_stable_ties(self, optimizer: SolutionOptimizer) -> None:
        result = optimizer.rank_solutions([_solution("first", "good"), _solution("second", "good")])
        assert [r.solution_id for r in result.ranked_solutions] == ["first", "second"]

    def test_dimension_scores(self, optimizer: SolutionOptimizer) -> None:
        scores = optimizer.rank_solutions([_solution("a", "good")]).ranked_solutions[0].scores
        assert scores.cost == 400
        assert scores.maintainability == 7
        assert scores.overall == pytest.approx(overall_score(GOOD, OptimizationObjectives()))

    def test_per_call_objectives(self, optimizer: SolutionOptimizer) -> None:
        cost_only = OptimizationObjectives.from_partial({
            "minimize_cost": 1, "minimize_weight": 0, "maximize_material_efficiency": 0,
            "minimize_complexity": 0, "minimize_assembly_time": 0, "maximize_maintainability": 0,
        })
        result = optimizer.rank_solutions([_solution("a", "good")], cost_only)
        assert result.ranked_solutions[0].scores.overall == pytest.approx(60.0)
        # Configured weights untouched
        assert optimizer.objectives == OptimizationObjectives()

    def test_summary(self, optimizer: SolutionOptimizer) -> None:
        result = optimizer.rank_solutions([_solution("b", "bad"), _solution("a", "good")])
        top = result.ranked_solutions[0]
        assert result.summary.startswith(f"Best overall solution: a (score: {top.scores.overall:.1f})")
        assert "Strengths: Low cost, Lightweight, Good material usage" in result.summary
        assert "Pareto-optimal solutions found" not in result.summary
        assert result.summary.endswith("Cost range: $400 - $3000")

    def test_summary_reports_pareto_count(self) -> None:
        lighter = GOOD.model_copy(update={"estimated_weight": 10, "estimated_cost": 900})
        optimizer = SolutionOptimizer(estimator=FixedEstimator({"good": GOOD, "light": lighter}))
        result = optimizer.rank_solutions([_solution("a", "good"), _solution("l", "light")])
        assert "2 Pareto-optimal solutions found (no single best trade-off)." in result.summary

    def test_empty(self, optimizer: SolutionOptimizer) -> None:
        result = optimizer.rank_solutions([])
        assert result.ranked_solutions == ()
        assert result.summary == "No solutions to evaluate."
        assert result.top is None

    def test_strengths_and_weaknesses(self) -> None:
        assert qualitative_assessment(GOOD) == (
            ["Low cost", "Lightweight", "Good material usage", "Easy to manufacture", "Low maintenance"],
            [],
        )
        assert qualitative_assessment(BAD) == (
            [],
            ["High cost", "Heavy", "Material waste", "Complex manufacturing", "High maintenance"],
        )


class TestRankOneVersusPareto:
    """Weighted-sum rank 1 and Pareto membership are checked, not assumed."""

    def test_strict_winner_is_pareto_optimal(self, optimizer: SolutionOptimizer) -> None:
        result = optimizer.rank_solutions([_solution("b", "bad"), _solution("a", "good")])
        top = result.ranked_solutions[0]
        assert top.scores.overall > result.ranked_solutions[1].scores.overall
        assert top.solution_id in result.pareto_optimal

    def test_tied_rank_one_can_be_dominated(self) -> None:
        # Both costs sit past the cost sub-score floor, so the cheaper one
        # dominates without scoring higher.
        pricey = GOOD.model_copy(update={"estimated_cost": 1500})
        cheaper = GOOD.model_copy(update={"estimated_cost": 1200})
        assert overall_score(pricey, OptimizationObjectives()) == pytest.approx(
            overall_score(cheaper, OptimizationObjectives())
        )
        assert dominates(cheaper, pricey)

        optimizer = SolutionOptimizer(
            estimator=FixedEstimator({"pricey": pricey, "cheaper": cheaper})
        )
        result = optimizer.rank_solutions(
            [_solution("pricey", "pricey"), _solution("cheaper", "cheaper")]
        )
        assert result.ranked_solutions[0].solution_id == "pricey"
        assert result.pareto_optimal == ("cheaper",)
        assert not result.ranked_solutions[0].pareto_optimal
