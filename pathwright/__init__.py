"""pathwright — turn a point-to-point engineering request into ranked, code-checked designs."""

__version__ = "0.1.0"

from pathwright.compliance.checker import ComplianceChecker
from pathwright.config import PipelineConfig, load_config
from pathwright.domains.selector import DomainSelector
from pathwright.errors import ConfigError, InvalidRequestError, PathwrightError
from pathwright.generation.builder import SolutionBuilder
from pathwright.generation.generator import CandidateGenerator
from pathwright.metrics.estimator import MetricsEstimator
from pathwright.models.objectives import OptimizationObjectives
from pathwright.models.request import ConnectionPoint, DesignRequest
from pathwright.models.solution import DesignSolution
from pathwright.optimization.optimizer import SolutionOptimizer
from pathwright.pipeline.explainer import DesignExplainer
from pathwright.pipeline.orchestrator import Orchestrator, PipelineResult, PipelineStage
from pathwright.pipeline.requirements import RequestFieldsProvider, RequirementsProvider

__all__ = [
    "CandidateGenerator",
    "ComplianceChecker",
    "ConfigError",
    "ConnectionPoint",
    "DesignExplainer",
    "DesignRequest",
    "DesignSolution",
    "DomainSelector",
    "InvalidRequestError",
    "MetricsEstimator",
    "OptimizationObjectives",
    "Orchestrator",
    "PathwrightError",
    "PipelineConfig",
    "PipelineResult",
    "PipelineStage",
    "RequestFieldsProvider",
    "RequirementsProvider",
    "SolutionBuilder",
    "SolutionOptimizer",
    "load_config",
]
