"""Ranking output of the solution optimizer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pathwright.models.solution import DesignSolution


class DimensionScores(BaseModel):
    """Raw per-dimension figures for one ranked candidate."""

    model_config = ConfigDict(frozen=True)

    cost: float
    weight: float
    material_efficiency: float
    complexity: float
    assembly_time: float
    maintainability: float
    """10 minus the maintenance score; higher is better."""

    overall: float


class RankedSolution(BaseModel):
    model_config = ConfigDict(frozen=True)

    solution_id: str
    rank: int
    scores: DimensionScores
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    pareto_optimal: bool = False


class OptimizationResult(BaseModel):
    """Candidates in rank order plus the Pareto-optimal subset.

    ``solutions`` holds the re-scored candidates in the same order as
    ``ranked_solutions``.
    """

    model_config = ConfigDict(frozen=True)

    ranked_solutions: tuple[RankedSolution, ...] = ()
    pareto_optimal: tuple[str, ...] = ()
    summary: str = ""
    solutions: tuple[DesignSolution, ...] = ()

    @property
    def top(self) -> DesignSolution | None:
        return self.solutions[0] if self.solutions else None
