"""SolutionBuilder — turn a candidate draft into a complete DesignSolution.

A DesignSolution is never exposed half-built: the builder runs compliance
checking and metrics estimation and only then constructs the value.
"""

from __future__ import annotations

import logging

from pathwright.compliance.checker import ComplianceChecker
from pathwright.generation.generator import CandidateDraft
from pathwright.metrics.estimator import MetricsEstimator
from pathwright.models.objectives import OptimizationObjectives
from pathwright.models.request import DesignRequest
from pathwright.models.solution import DesignRationale, DesignSolution

logger = logging.getLogger(__name__)


class SolutionBuilder:
    """Evaluate drafts and produce immutable DesignSolutions.

    Parameters
    ----------
    checker:
        Compliance checker.  Defaults to one with the embedded rules.
    estimator:
        Metrics estimator.  Defaults to one with the embedded materials.
    """

    def __init__(
        self,
        checker: ComplianceChecker | None = None,
        estimator: MetricsEstimator | None = None,
    ) -> None:
        self.checker = checker or ComplianceChecker()
        self.estimator = estimator or MetricsEstimator()

    def build(
        self,
        draft: CandidateDraft,
        request: DesignRequest,
        objectives: OptimizationObjectives | None = None,
    ) -> DesignSolution:
        params = draft.parameters
        compliance, fixes = self.checker.check(
            draft.domain, draft.element_type, params, request.code_names
        )
        estimate = self.estimator.estimate(draft.domain, draft.element_type, params, objectives)

        warnings: list[str] = []
        warnings.extend(self._parameter_warnings(draft))
        warnings.extend(estimate.warnings)
        warnings.extend(fixes)

        budget = request.constraints.budget
        if budget is not None and estimate.metrics.estimated_cost > budget.max_cost:
            warnings.append(
                f"Estimated cost ${estimate.metrics.estimated_cost:,.0f} exceeds "
                f"{budget.priority} budget of ${budget.max_cost:,.0f} {budget.currency}."
            )

        solution = DesignSolution(
            id=draft.id,
            domain=draft.domain,
            element_type=draft.element_type,
            parameters=params,
            metrics=estimate.metrics,
            compliance=compliance,
            rationale=DesignRationale(),
            warnings=tuple(warnings),
        )
        logger.debug(
            "Built %s: score %.1f, compliant=%s",
            solution.id,
            solution.metrics.overall_score,
            solution.compliance.compliant,
        )
        return solution

    def build_all(
        self,
        drafts: list[CandidateDraft],
        request: DesignRequest,
        objectives: OptimizationObjectives | None = None,
    ) -> list[DesignSolution]:
        return [self.build(draft, request, objectives) for draft in drafts]

    @staticmethod
    def _parameter_warnings(draft: CandidateDraft) -> list[str]:
        params = draft.parameters
        warnings: list[str] = []
        if draft.element_type == "stairs" and params.get("riser_height") == 0:
            warnings.append("No elevation change between endpoints; stair geometry is degenerate.")
        if params.get("cage_required"):
            warnings.append("Ladder height requires a safety cage or fall-arrest system.")
        if params.get("landing_required"):
            warnings.append("Ramp run exceeds 9000mm; an intermediate landing is required.")
        return warnings
