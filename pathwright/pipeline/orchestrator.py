"""Orchestrator — run the design pipeline end to end.

Usage::

    from pathwright import Orchestrator

    result = Orchestrator().process(request)
    best = result.solutions[0]

Stages run strictly in :class:`PipelineStage` order.  Only an input that
cannot become a :class:`DesignRequest` aborts the run
(:class:`InvalidRequestError`); every other anomaly becomes a warning in
``result.metadata.warnings``.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import time
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError

from pathwright.compliance.checker import ComplianceChecker
from pathwright.config import PipelineConfig
from pathwright.domains.selector import DomainSelector
from pathwright.errors import ConfigError, InvalidRequestError
from pathwright.generation.builder import SolutionBuilder
from pathwright.generation.generator import CandidateGenerator
from pathwright.metrics.estimator import MetricsEstimator
from pathwright.models.classification import (
    DomainClassification,
    ElementTypeClassification,
    KnowledgeDomain,
)
from pathwright.models.objectives import OptimizationObjectives
from pathwright.models.optimization import OptimizationResult
from pathwright.models.parameters import ElementParameters
from pathwright.models.request import DesignRequest
from pathwright.models.requirements import ParsedRequirements
from pathwright.models.solution import DesignRationale, DesignSolution, SolutionMetrics
from pathwright.optimization.optimizer import SolutionOptimizer
from pathwright.pipeline.explainer import DesignExplainer
from pathwright.pipeline.requirements import RequestFieldsProvider, RequirementsProvider

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    """Pipeline stages in execution order."""

    REQUIREMENT_PARSING = "requirement-parsing"
    DOMAIN_CLASSIFICATION = "domain-classification"
    ELEMENT_CLASSIFICATION = "element-classification"
    SOLUTION_GENERATION = "solution-generation"
    OPTIMIZATION = "optimization"
    EXPLANATION = "explanation"
    REPORT_GENERATION = "report-generation"


class PipelineMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    processing_time_ms: float
    stages_completed: tuple[PipelineStage, ...] = ()
    warnings: tuple[str, ...] = ()


class PipelineResult(BaseModel):
    """Everything one pipeline run produced.

    ``solutions`` is in rank order; the rationale and report describe
    ``solutions[0]`` (or a placeholder when nothing was generated).
    """

    model_config = ConfigDict(frozen=True)

    request: DesignRequest
    parsed_requirements: ParsedRequirements
    classification: DomainClassification
    element_type: ElementTypeClassification
    solutions: tuple[DesignSolution, ...] = ()
    optimization: OptimizationResult
    rationale: DesignRationale
    report: str
    metadata: PipelineMetadata

    @property
    def top(self) -> DesignSolution | None:
        return self.solutions[0] if self.solutions else None


def empty_solution(request: DesignRequest) -> DesignSolution:
    """Placeholder used for rationale and report when generation yields nothing."""
    return DesignSolution(
        id="empty-solution",
        domain=KnowledgeDomain.ACCESS,
        element_type="unknown",
        parameters=ElementParameters(
            start_point=request.point_a.position,
            end_point=request.point_b.position,
        ),
        metrics=SolutionMetrics(),
        rationale=DesignRationale(summary="No valid solution could be generated."),
        warnings=("No valid solution generated",),
    )


class Orchestrator:
    """Sequence classification, generation, optimization and explanation.

    Parameters
    ----------
    config:
        Pipeline settings.  Defaults to :class:`PipelineConfig` defaults.
    selector, generator, optimizer, explainer:
        Stage collaborators.  Each defaults to the stock implementation.
    provider:
        Requirements source.  Falls back to :class:`RequestFieldsProvider`
        when the given provider reports itself unavailable.
    checker:
        Compliance checker used when building candidates.

    Raises
    ------
    ConfigError
        If ``config.objectives`` names an unknown or negative weight.
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        selector: DomainSelector | None = None,
        generator: CandidateGenerator | None = None,
        optimizer: SolutionOptimizer | None = None,
        explainer: DesignExplainer | None = None,
        provider: RequirementsProvider | None = None,
        checker: ComplianceChecker | None = None,
    ) -> None:
        self.config = config or PipelineConfig()
        self.selector = selector or DomainSelector()
        self.generator = generator or CandidateGenerator(max_solutions=self.config.max_solutions)
        self.explainer = explainer or DesignExplainer()
        self.provider = provider or RequestFieldsProvider()
        self._fallback_provider = RequestFieldsProvider()

        if optimizer is None:
            try:
                objectives = OptimizationObjectives.from_partial(self.config.objectives)
            except ValidationError as exc:
                raise ConfigError(f"Invalid objective weights: {exc}") from exc
            optimizer = SolutionOptimizer(objectives=objectives, estimator=MetricsEstimator())
        self.optimizer = optimizer
        self.builder = SolutionBuilder(checker=checker, estimator=self.optimizer.estimator)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def process(
        self,
        request: DesignRequest | Mapping[str, Any],
        requirements: ParsedRequirements | None = None,
    ) -> PipelineResult:
        """Run the full pipeline for one request.

        Parameters
        ----------
        request:
            A :class:`DesignRequest` or a mapping that validates as one.
        requirements:
            Pre-parsed requirements.  When omitted the configured
            provider derives them.

        Raises
        ------
        InvalidRequestError
            If *request* cannot be validated into a DesignRequest.
        """
        request = coerce_request(request)
        start = time.perf_counter()
        stages: list[PipelineStage] = []
        warnings: list[str] = []
        # One snapshot of the weights for the whole run
        objectives = self.optimizer.objectives

        self._log("Parsing requirements for %s", request.id)
        parsed = requirements if requirements is not None else self._parse(request)
        stages.append(PipelineStage.REQUIREMENT_PARSING)
        if parsed.unparsed_parts:
            warnings.append(
                "Some requirements could not be fully parsed: "
                f"{len(parsed.unparsed_parts)} unparsed sections"
            )

        self._log("Classifying knowledge domain")
        classification = self.selector.classify_domain(request)
        stages.append(PipelineStage.DOMAIN_CLASSIFICATION)
        if classification.confidence < self.config.low_confidence_threshold:
            warnings.append(
                "Domain classification has low confidence "
                f"({classification.confidence * 100:.0f}%)"
            )

        self._log("Classifying element type in %s", classification.primary_domain.value)
        element = self.selector.classify_element_type(request, classification.primary_domain)
        stages.append(PipelineStage.ELEMENT_CLASSIFICATION)

        self._log("Generating solution candidates")
        drafts = self.generator.generate(request, classification, element, self.config.max_solutions)
        candidates = self.builder.build_all(drafts, request, objectives)
        stages.append(PipelineStage.SOLUTION_GENERATION)
        if not candidates:
            warnings.append("No valid solutions could be generated")

        self._log("Optimizing and ranking %d solution(s)", len(candidates))
        optimization = self.optimizer.rank_solutions(candidates, objectives)
        ranked = list(optimization.solutions)
        stages.append(PipelineStage.OPTIMIZATION)
        warnings.extend(solution_warnings(ranked, request))

        self._log("Generating design rationale")
        top = ranked[0] if ranked else empty_solution(request)
        alternatives = ranked[1:]
        rationale = self.explainer.generate_rationale(request, classification, top, alternatives)
        if ranked:
            top = top.model_copy(update={"rationale": rationale})
            ranked[0] = top
        stages.append(PipelineStage.EXPLANATION)

        self._log("Generating design report")
        report = self.explainer.generate_report(
            request, classification, top, alternatives, optimization, rationale
        )
        stages.append(PipelineStage.REPORT_GENERATION)

        elapsed_ms = (time.perf_counter() - start) * 1000
        self._log("Processing complete in %.1fms", elapsed_ms)
        for warning in warnings:
            logger.warning("%s: %s", request.id, warning)

        return PipelineResult(
            request=request,
            parsed_requirements=parsed,
            classification=classification,
            element_type=element,
            solutions=tuple(ranked),
            optimization=optimization,
            rationale=rationale,
            report=report,
            metadata=PipelineMetadata(
                processing_time_ms=elapsed_ms,
                stages_completed=tuple(stages),
                warnings=tuple(warnings),
            ),
        )

    async def aprocess(
        self,
        request: DesignRequest | Mapping[str, Any],
        requirements: ParsedRequirements | None = None,
    ) -> PipelineResult:
        """Async boundary for hosts whose downstream stages are I/O-bound.

        The pipeline itself is pure computation; it runs in the loop's
        default executor so the event loop is not blocked.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, functools.partial(self.process, request, requirements)
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _parse(self, request: DesignRequest) -> ParsedRequirements:
        if self.provider.is_available():
            return self.provider.parse(request)
        logger.debug("Requirements provider unavailable; deriving from request fields")
        return self._fallback_provider.parse(request)

    def _log(self, message: str, *args: Any) -> None:
        level = logging.INFO if self.config.verbose else logging.DEBUG
        logger.log(level, message, *args)


def coerce_request(request: DesignRequest | Mapping[str, Any]) -> DesignRequest:
    """Return *request* as a DesignRequest, validating mappings."""
    if isinstance(request, DesignRequest):
        return request
    if not isinstance(request, Mapping):
        raise InvalidRequestError(
            f"Expected a DesignRequest or mapping, got {type(request).__name__}"
        )
    try:
        return DesignRequest.model_validate(dict(request))
    except ValidationError as exc:
        raise InvalidRequestError(f"Invalid design request: {exc}") from exc


def solution_warnings(solutions: list[DesignSolution], request: DesignRequest) -> list[str]:
    """Pipeline-level warnings for non-compliant and over-budget candidates."""
    warnings: list[str] = []
    budget = request.constraints.budget
    for solution in solutions:
        failures = solution.compliance.failures
        if failures:
            sections = ", ".join(f"{c.code} {c.section}" for c in failures)
            warnings.append(f"Solution {solution.id} is not code compliant ({sections})")
        if budget is not None and solution.metrics.estimated_cost > budget.max_cost:
            warnings.append(
                f"Solution {solution.id} exceeds budget "
                f"(${solution.metrics.estimated_cost:,.0f} > ${budget.max_cost:,.0f})"
            )
    return warnings
