"""DesignSolution and the records attached to it.

A DesignSolution is only ever produced complete: parameters, metrics,
compliance and warnings are all filled in by
:class:`pathwright.generation.builder.SolutionBuilder` before the value
leaves the generation stage.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny, computed_field

from pathwright.models.classification import KnowledgeDomain
from pathwright.models.parameters import ElementParameters


class SolutionMetrics(BaseModel):
    """Estimated figures used to compare candidates."""

    model_config = ConfigDict(frozen=True)

    estimated_cost: float = 0.0
    estimated_weight: float = 0.0
    """kg."""

    material_efficiency: float = 0.0
    """Percent of the bounding volume occupied by material, 0-100."""

    manufacturing_complexity: float = 0.0
    """1-10."""

    assembly_time_estimate: float = 0.0
    """Hours."""

    maintenance_score: float = 5.0
    """1-10, lower is better."""

    overall_score: float = 0.0
    """Weighted composite, higher is better."""


class CheckStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"
    NOT_APPLICABLE = "not-applicable"


class CodeCheck(BaseModel):
    """Outcome of one (code, section) rule against one candidate."""

    model_config = ConfigDict(frozen=True)

    code: str
    section: str
    requirement: str
    status: CheckStatus
    message: str = ""
    value: float | None = None
    limit: float | None = None


class ComplianceStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    checks: tuple[CodeCheck, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def compliant(self) -> bool:
        """True unless some check failed."""
        return all(c.status != CheckStatus.FAIL for c in self.checks)

    @property
    def failures(self) -> list[CodeCheck]:
        return [c for c in self.checks if c.status == CheckStatus.FAIL]


class DesignDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    aspect: str
    choice: str
    reason: str


class Tradeoff(BaseModel):
    model_config = ConfigDict(frozen=True)

    factor1: str
    factor2: str
    decision: str
    impact: str


class RejectedAlternative(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str
    reason: str


class DesignRationale(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: str = ""
    decisions: tuple[DesignDecision, ...] = ()
    tradeoffs: tuple[Tradeoff, ...] = ()
    rejected_alternatives: tuple[RejectedAlternative, ...] = ()


class DesignSolution(BaseModel):
    """A fully evaluated design candidate.

    ``id`` follows ``<domain>-<element_type>-<variant>``.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    domain: KnowledgeDomain
    element_type: str
    parameters: SerializeAsAny[ElementParameters]
    metrics: SolutionMetrics
    compliance: ComplianceStatus = Field(default_factory=ComplianceStatus)
    rationale: DesignRationale = Field(default_factory=DesignRationale)
    warnings: tuple[str, ...] = ()

    @property
    def material(self) -> str:
        return self.parameters.material
