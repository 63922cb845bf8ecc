"""DesignRequest — the immutable input to the decision pipeline.

A request asks to connect ``point_a`` to ``point_b`` inside an environment,
subject to project-level constraints (codes, budget, schedule, materials).
All positions are in millimetres.
"""

from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Point3D(BaseModel):
    """A position in millimetres."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class Vector3D(BaseModel):
    """A direction vector (not necessarily unit length)."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    x: float = 0.0
    y: float = 0.0
    z: float = 1.0


class PointType(str, Enum):
    FLOOR = "floor"
    WALL = "wall"
    CEILING = "ceiling"
    EQUIPMENT = "equipment"
    STRUCTURE = "structure"
    OPENING = "opening"
    CUSTOM = "custom"


class AttachmentType(str, Enum):
    ANCHOR_BOLT = "anchor-bolt"
    WELDED = "welded"
    BOLTED = "bolted"
    CLAMPED = "clamped"
    ADHESIVE = "adhesive"
    EMBEDDED = "embedded"
    FLOATING = "floating"


class ConnectionPoint(BaseModel):
    """One end of the requested connection."""

    model_config = ConfigDict(frozen=True)

    position: Point3D
    type: PointType = PointType.CUSTOM
    normal: Vector3D | None = None
    attachment_options: tuple[AttachmentType, ...] = ()
    load_capacity: float | None = None
    """Load capacity at this point (N)."""


class BoundingBox(BaseModel):
    """Axis-aligned box of available space."""

    model_config = ConfigDict(frozen=True)

    min: Point3D = Field(default_factory=Point3D)
    max: Point3D = Field(default_factory=Point3D)


class Obstacle(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: str = "other"
    """'column', 'equipment', 'pipe', 'duct', 'wall', or 'other'."""

    bounds: BoundingBox = Field(default_factory=BoundingBox)
    avoidance_margin: float = 0.0
    can_penetrate: bool = False


class Exposure(str, Enum):
    INDOOR = "indoor"
    OUTDOOR = "outdoor"
    COVERED = "covered"


class TemperatureRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    max: float


class EnvironmentConditions(BaseModel):
    model_config = ConfigDict(frozen=True)

    exposure: Exposure = Exposure.INDOOR
    temperature_range: TemperatureRange | None = None
    humidity: str | None = None
    """'low', 'normal' or 'high'."""

    corrosive: bool = False
    vibration: str | None = None
    """'none', 'low', 'medium' or 'high'."""


class EnvironmentConstraints(BaseModel):
    model_config = ConfigDict(frozen=True)

    boundaries: BoundingBox = Field(default_factory=BoundingBox)
    obstacles: tuple[Obstacle, ...] = ()
    conditions: EnvironmentConditions = Field(default_factory=EnvironmentConditions)


class CodeName(str, Enum):
    IBC = "IBC"
    OSHA = "OSHA"
    ADA = "ADA"
    NFPA = "NFPA"
    ASME = "ASME"
    AWS = "AWS"
    AISC = "AISC"
    NEC = "NEC"
    CUSTOM = "custom"


class ApplicableCode(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: CodeName
    version: str | None = None
    sections: tuple[str, ...] = ()


class BudgetConstraint(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_cost: float
    currency: str = "USD"
    priority: str = "flexible"
    """'strict' or 'flexible'."""


class ScheduleConstraint(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_lead_time: float
    """Days."""

    preferred_lead_time: float | None = None
    priority: str = "flexible"


class MaterialPreference(BaseModel):
    model_config = ConfigDict(frozen=True)

    material: str
    preference: str = "preferred"
    """'required', 'preferred', 'acceptable' or 'avoid'."""

    reason: str | None = None


class ProjectConstraints(BaseModel):
    model_config = ConfigDict(frozen=True)

    building_type: str = "commercial"
    """'commercial', 'industrial', 'residential' or 'institutional'."""

    occupancy: str | None = None
    codes: tuple[ApplicableCode, ...] = ()
    budget: BudgetConstraint | None = None
    schedule: ScheduleConstraint | None = None
    material_preferences: tuple[MaterialPreference, ...] = ()


class DesignRequest(BaseModel):
    """What needs to be built: connect point A to point B."""

    model_config = ConfigDict(frozen=True)

    id: str
    description: str = ""
    point_a: ConnectionPoint
    point_b: ConnectionPoint
    environment: EnvironmentConstraints = Field(default_factory=EnvironmentConstraints)
    constraints: ProjectConstraints = Field(default_factory=ProjectConstraints)

    @property
    def elevation_change(self) -> float:
        """Signed vertical rise from A to B (mm)."""
        return self.point_b.position.z - self.point_a.position.z

    @property
    def horizontal_distance(self) -> float:
        """Plan distance between A and B (mm)."""
        a, b = self.point_a.position, self.point_b.position
        return math.sqrt((b.x - a.x) ** 2 + (b.y - a.y) ** 2)

    @property
    def code_names(self) -> list[str]:
        return [c.code.value for c in self.constraints.codes]
