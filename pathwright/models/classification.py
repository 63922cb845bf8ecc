"""Domain and element-type classification results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class KnowledgeDomain(str, Enum):
    """The five engineering domains, in tie-break order."""

    ACCESS = "access"
    STRUCTURE = "structure"
    ENCLOSURE = "enclosure"
    FLOW = "flow"
    MECHANICAL = "mechanical"


class SecondaryDomain(BaseModel):
    model_config = ConfigDict(frozen=True)

    domain: KnowledgeDomain
    confidence: float
    reason: str


class DomainClassification(BaseModel):
    """Primary domain for a request plus runner-ups.

    ``confidence`` never exceeds 0.95: the classification is heuristic.
    """

    model_config = ConfigDict(frozen=True)

    primary_domain: KnowledgeDomain
    confidence: float = Field(ge=0.0, le=0.95)
    secondary_domains: tuple[SecondaryDomain, ...] = ()
    reasoning: str = ""


class ElementAlternative(BaseModel):
    model_config = ConfigDict(frozen=True)

    element_type: str
    confidence: float
    reason: str


class ElementTypeClassification(BaseModel):
    """Specific element archetype within a domain (confidence ≤ 0.9)."""

    model_config = ConfigDict(frozen=True)

    domain: KnowledgeDomain
    element_type: str
    confidence: float = Field(ge=0.0, le=0.9)
    alternatives: tuple[ElementAlternative, ...] = ()
