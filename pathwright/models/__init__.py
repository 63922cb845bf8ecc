"""Pydantic data models shared by every pipeline stage."""

from pathwright.models.classification import (
    DomainClassification,
    ElementAlternative,
    ElementTypeClassification,
    KnowledgeDomain,
    SecondaryDomain,
)
from pathwright.models.objectives import DEFAULT_WEIGHTS, OptimizationObjectives
from pathwright.models.optimization import (
    DimensionScores,
    OptimizationResult,
    RankedSolution,
)
from pathwright.models.parameters import PARAMETER_SCHEMAS, ElementParameters
from pathwright.models.request import (
    ApplicableCode,
    BoundingBox,
    BudgetConstraint,
    CodeName,
    ConnectionPoint,
    DesignRequest,
    EnvironmentConditions,
    EnvironmentConstraints,
    Exposure,
    MaterialPreference,
    Obstacle,
    Point3D,
    PointType,
    ProjectConstraints,
    ScheduleConstraint,
    Vector3D,
)
from pathwright.models.requirements import (
    ExtractedConstraint,
    ExtractedEndpoint,
    ExtractedPreference,
    ParsedRequirements,
)
from pathwright.models.solution import (
    CheckStatus,
    CodeCheck,
    ComplianceStatus,
    DesignDecision,
    DesignRationale,
    DesignSolution,
    RejectedAlternative,
    SolutionMetrics,
    Tradeoff,
)

__all__ = [
    "ApplicableCode",
    "BoundingBox",
    "BudgetConstraint",
    "CheckStatus",
    "CodeCheck",
    "CodeName",
    "DEFAULT_WEIGHTS",
    "ComplianceStatus",
    "ConnectionPoint",
    "DesignDecision",
    "DesignRationale",
    "DesignRequest",
    "DesignSolution",
    "DimensionScores",
    "DomainClassification",
    "ElementAlternative",
    "ElementParameters",
    "ElementTypeClassification",
    "EnvironmentConditions",
    "EnvironmentConstraints",
    "Exposure",
    "ExtractedConstraint",
    "ExtractedEndpoint",
    "ExtractedPreference",
    "KnowledgeDomain",
    "MaterialPreference",
    "Obstacle",
    "OptimizationObjectives",
    "OptimizationResult",
    "PARAMETER_SCHEMAS",
    "ParsedRequirements",
    "Point3D",
    "PointType",
    "ProjectConstraints",
    "RankedSolution",
    "RejectedAlternative",
    "ScheduleConstraint",
    "SecondaryDomain",
    "SolutionMetrics",
    "Tradeoff",
    "Vector3D",
]
