"""ParsedRequirements — structured requirements handed to the pipeline.

Produced by a requirements provider (natural-language parsing lives
outside this package); the pipeline only consumes it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pathwright.models.request import PointType


class ExtractedEndpoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str
    """'start' or 'end'."""

    description: str
    type: PointType | None = None
    elevation: float | None = None
    confidence: float = 0.0


class ExtractedConstraint(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    """'dimensional', 'material', 'code', 'cost', 'schedule' or 'environmental'."""

    description: str
    value: float | str | None = None
    unit: str | None = None
    confidence: float = 0.0


class ExtractedPreference(BaseModel):
    model_config = ConfigDict(frozen=True)

    aspect: str
    preference: str
    strength: str = "should"
    """'must', 'should', 'could' or 'would-like'."""

    confidence: float = 0.0


class ParsedRequirements(BaseModel):
    model_config = ConfigDict(frozen=True)

    endpoints: tuple[ExtractedEndpoint, ...] = ()
    constraints: tuple[ExtractedConstraint, ...] = ()
    preferences: tuple[ExtractedPreference, ...] = ()
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    unparsed_parts: tuple[str, ...] = ()
