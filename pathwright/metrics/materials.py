"""Embedded material property data — density, price and upkeep.

Prices are USD per kg of raw stock.  Unknown materials resolve to the
carbon-steel entry rather than raising.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from pathwright.config import DEFAULT_MATERIAL

logger = logging.getLogger(__name__)

# material -> {density kg/m3, cost $/kg, maintenance adjustment}
SEED_MATERIALS: dict[str, dict[str, Any]] = {
    "carbon-steel": {"density": 7850.0, "cost_per_kg": 2.5, "maintenance_adjustment": 1},
    "stainless-steel": {"density": 8000.0, "cost_per_kg": 8.0, "maintenance_adjustment": -2},
    "aluminum": {"density": 2700.0, "cost_per_kg": 6.0, "maintenance_adjustment": -1},
    "wood": {"density": 600.0, "cost_per_kg": 1.5, "maintenance_adjustment": 0},
    "fiberglass": {"density": 1800.0, "cost_per_kg": 12.0, "maintenance_adjustment": -2},
    "galvanized-steel": {"density": 7850.0, "cost_per_kg": 3.5, "maintenance_adjustment": 0},
    "plastic": {"density": 1200.0, "cost_per_kg": 4.0, "maintenance_adjustment": 0},
}


class MaterialProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    density: float
    """kg/m3."""

    cost_per_kg: float
    maintenance_adjustment: int = 0
    """Added to the base maintenance score (negative is easier upkeep)."""


class MaterialTable(BaseModel):
    """Immutable material lookup with a fixed fallback entry."""

    model_config = ConfigDict(frozen=True)

    materials: dict[str, MaterialProperties]
    fallback: str = DEFAULT_MATERIAL

    @classmethod
    def from_seed(cls, seed: dict[str, dict[str, Any]] | None = None) -> MaterialTable:
        seed = SEED_MATERIALS if seed is None else seed
        return cls(
            materials={
                name.lower(): MaterialProperties(name=name.lower(), **props)
                for name, props in seed.items()
            }
        )

    def get(self, material: str | None) -> MaterialProperties:
        """Properties for *material*, or the fallback entry if unknown."""
        key = (material or self.fallback).lower()
        props = self.materials.get(key)
        if props is None:
            logger.debug("Unknown material %r, using %s properties", material, self.fallback)
            props = self.materials[self.fallback]
        return props

    def __contains__(self, material: object) -> bool:
        return isinstance(material, str) and material.lower() in self.materials


DEFAULT_MATERIALS = MaterialTable.from_seed()
