"""Closed-form metric estimates for a candidate's parameter payload.

Everything here is a heuristic box approximation, not structural analysis:

* volume      = length x width x (thickness or height)            [mm3]
* weight      = volume x density / 1e9                              [kg]
* cost        = weight x $/kg + complexity x 0.5 h x $50/h          [USD]
* efficiency  = 100 x volume / bounding volume                      [%]
"""

from __future__ import annotations

import logging
import math

from pydantic import BaseModel, ConfigDict

from pathwright.config import LABOR_HOURS_PER_COMPLEXITY, LABOR_RATE_PER_HOUR
from pathwright.metrics.materials import DEFAULT_MATERIALS, MaterialTable
from pathwright.models.classification import KnowledgeDomain
from pathwright.models.objectives import OptimizationObjectives
from pathwright.models.parameters import ElementParameters
from pathwright.models.request import Exposure
from pathwright.models.solution import SolutionMetrics

logger = logging.getLogger(__name__)

# Complexity added per element type
_ELEMENT_COMPLEXITY: dict[str, float] = {
    "stairs": 2.0,
    "linkage": 3.0,
    "shaft": 2.0,
}

_BASE_COMPLEXITY = 3.0
_MAX_COMPLEXITY = 10.0
_BASE_ASSEMBLY_HOURS = 2.0
_BASE_MAINTENANCE = 5.0


class MetricsEstimate(BaseModel):
    """Metrics plus any estimation edge cases worth reporting."""

    model_config = ConfigDict(frozen=True)

    metrics: SolutionMetrics
    warnings: tuple[str, ...] = ()


def _dimension(params: ElementParameters, *names: str, default: float) -> float:
    """First non-zero numeric attribute among *names*, else *default*."""
    for name in names:
        value = params.get(name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if value:
            return float(value)
    return default


def estimate_volume(params: ElementParameters) -> float:
    length = _dimension(params, "length", default=1000.0)
    width = _dimension(params, "width", default=100.0)
    thickness = _dimension(params, "thickness", "height", default=10.0)
    return length * width * thickness


def estimate_bounding_volume(params: ElementParameters) -> float:
    length = _dimension(params, "length", default=1000.0)
    width = _dimension(params, "width", "total_width", default=500.0)
    height = _dimension(params, "height", "total_rise", default=1000.0)
    return length * width * height


def overall_score(metrics: SolutionMetrics, objectives: OptimizationObjectives) -> float:
    """Weighted sum of the six sub-scores, each rescaled to roughly 0-100."""
    cost_score = max(0.0, 100 - metrics.estimated_cost / 10)
    weight_score = max(0.0, 100 - metrics.estimated_weight * 2)
    efficiency_score = metrics.material_efficiency
    complexity_score = (10 - metrics.manufacturing_complexity) * 10
    time_score = max(0.0, 100 - metrics.assembly_time_estimate * 5)
    maintenance_score = (10 - metrics.maintenance_score) * 10

    return (
        cost_score * objectives.minimize_cost
        + weight_score * objectives.minimize_weight
        + efficiency_score * objectives.maximize_material_efficiency
        + complexity_score * objectives.minimize_complexity
        + time_score * objectives.minimize_assembly_time
        + maintenance_score * objectives.maximize_maintainability
    )


class MetricsEstimator:
    """Estimate cost, weight, efficiency, complexity, time and upkeep.

    Parameters
    ----------
    materials:
        Material property table.  Defaults to the embedded seed data.
    clamp_efficiency:
        Clamp material efficiency into [0, 100] (a warning is still
        recorded when the raw ratio falls outside).
    """

    def __init__(
        self,
        materials: MaterialTable | None = None,
        clamp_efficiency: bool = True,
    ) -> None:
        self.materials = materials or DEFAULT_MATERIALS
        self.clamp_efficiency = clamp_efficiency

    def estimate(
        self,
        domain: KnowledgeDomain,
        element_type: str,
        params: ElementParameters,
        objectives: OptimizationObjectives | None = None,
    ) -> MetricsEstimate:
        """Estimate all metrics and the weighted overall score."""
        objectives = objectives or OptimizationObjectives()
        warnings: list[str] = []
        props = self.materials.get(params.material)

        volume = estimate_volume(params)
        weight = volume * props.density / 1e9

        complexity = self.complexity(element_type, params)
        labor_cost = complexity * LABOR_HOURS_PER_COMPLEXITY * LABOR_RATE_PER_HOUR
        cost = weight * props.cost_per_kg + labor_cost

        bounding = estimate_bounding_volume(params)
        if bounding > 0:
            efficiency = volume / bounding * 100
        else:
            efficiency = 50.0
            warnings.append("Bounding volume is zero; material efficiency assumed 50%.")

        if not math.isfinite(efficiency):
            warnings.append("Material efficiency is not finite; treated as zero.")
            efficiency = 0.0
        elif not 0.0 <= efficiency <= 100.0:
            warnings.append(
                f"Material efficiency estimate {efficiency:.1f}% is outside 0-100%."
            )
            if self.clamp_efficiency:
                efficiency = min(max(efficiency, 0.0), 100.0)

        if not math.isfinite(cost) or not math.isfinite(weight):
            warnings.append("Cost or weight estimate is not finite; treated as zero.")
            cost = cost if math.isfinite(cost) else 0.0
            weight = weight if math.isfinite(weight) else 0.0

        metrics = SolutionMetrics(
            estimated_cost=cost,
            estimated_weight=weight,
            material_efficiency=efficiency,
            manufacturing_complexity=complexity,
            assembly_time_estimate=_BASE_ASSEMBLY_HOURS + complexity * 0.5,
            maintenance_score=self.maintenance(domain, params),
        )
        metrics = metrics.model_copy(update={"overall_score": overall_score(metrics, objectives)})

        for warning in warnings:
            logger.warning("%s/%s: %s", domain.value, element_type, warning)
        return MetricsEstimate(metrics=metrics, warnings=tuple(warnings))

    @staticmethod
    def complexity(element_type: str, params: ElementParameters) -> float:
        """Manufacturing complexity, 1-10."""
        complexity = _BASE_COMPLEXITY + _ELEMENT_COMPLEXITY.get(element_type, 0.0)
        complexity += min(len(params.components) * 0.5, 2.0)
        if params.precision == "high":
            complexity += 2
        return min(complexity, _MAX_COMPLEXITY)

    def maintenance(self, domain: KnowledgeDomain, params: ElementParameters) -> float:
        """Maintenance burden, 1-10 (lower is better)."""
        score = _BASE_MAINTENANCE
        if params.material in self.materials:
            score += self.materials.get(params.material).maintenance_adjustment
        if domain == KnowledgeDomain.MECHANICAL:
            # Moving parts
            score += 2
        if params.exposure == Exposure.OUTDOOR:
            score += 1
        return max(1.0, min(score, 10.0))
