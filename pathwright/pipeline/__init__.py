"""End-to-end design pipeline."""

from pathwright.pipeline.explainer import DesignExplainer
from pathwright.pipeline.orchestrator import (
    Orchestrator,
    PipelineMetadata,
    PipelineResult,
    PipelineStage,
    coerce_request,
    empty_solution,
)
from pathwright.pipeline.requirements import RequestFieldsProvider, RequirementsProvider

__all__ = [
    "DesignExplainer",
    "Orchestrator",
    "PipelineMetadata",
    "PipelineResult",
    "PipelineStage",
    "RequestFieldsProvider",
    "RequirementsProvider",
    "coerce_request",
    "empty_solution",
]
