"""OptimizationObjectives — the six ranking weights.

Weights are always normalized to sum to 1 (left untouched when they are
all zero).  Instances are immutable; updates produce a new instance.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_WEIGHTS: dict[str, float] = {
    "minimize_cost": 0.3,
    "minimize_weight": 0.1,
    "maximize_material_efficiency": 0.15,
    "minimize_complexity": 0.2,
    "minimize_assembly_time": 0.15,
    "maximize_maintainability": 0.1,
}


class OptimizationObjectives(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    minimize_cost: float = Field(default=DEFAULT_WEIGHTS["minimize_cost"], ge=0.0)
    minimize_weight: float = Field(default=DEFAULT_WEIGHTS["minimize_weight"], ge=0.0)
    maximize_material_efficiency: float = Field(
        default=DEFAULT_WEIGHTS["maximize_material_efficiency"], ge=0.0
    )
    minimize_complexity: float = Field(default=DEFAULT_WEIGHTS["minimize_complexity"], ge=0.0)
    minimize_assembly_time: float = Field(default=DEFAULT_WEIGHTS["minimize_assembly_time"], ge=0.0)
    maximize_maintainability: float = Field(
        default=DEFAULT_WEIGHTS["maximize_maintainability"], ge=0.0
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        weights = {**DEFAULT_WEIGHTS, **data}
        total = 0.0
        for key in DEFAULT_WEIGHTS:
            try:
                total += float(weights[key])
            except (TypeError, ValueError):
                # Let field validation report the bad value
                return weights
        if total > 0:
            for key in DEFAULT_WEIGHTS:
                weights[key] = float(weights[key]) / total
        return weights

    @classmethod
    def from_partial(cls, partial: dict[str, float] | None = None) -> OptimizationObjectives:
        """Merge *partial* over the default weights, then normalize."""
        return cls(**(partial or {}))

    def merge(self, partial: dict[str, float]) -> OptimizationObjectives:
        """New objectives with *partial* merged over these weights."""
        return type(self)(**{**self.as_dict(), **partial})

    def as_dict(self) -> dict[str, float]:
        return self.model_dump()

    @property
    def total(self) -> float:
        return sum(self.as_dict().values())
