"""Per-element parameter payloads.

Every (domain, element type) pair has exactly one payload model.  Payloads
are frozen and reject unknown keys, so a typo in an attribute name fails
loudly at synthesis time instead of silently producing a default.
All lengths are in millimetres.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from pathwright.models.classification import KnowledgeDomain
from pathwright.models.request import Exposure, Point3D


class ElementParameters(BaseModel):
    """Fields shared by every element payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    material: str = "carbon-steel"
    start_point: Point3D = Point3D()
    end_point: Point3D = Point3D()
    exposure: Exposure = Exposure.INDOOR
    components: tuple[str, ...] = ()
    precision: str | None = None
    """'standard' or 'high'."""

    def get(self, name: str, default: Any = None) -> Any:
        """Return attribute *name*, or *default* if this payload lacks it."""
        return getattr(self, name, default)

    def engineering_values(self) -> dict[str, Any]:
        """Element-specific attributes only (no endpoints)."""
        data = self.model_dump(mode="json")
        for key in ("start_point", "end_point", "components", "precision"):
            data.pop(key, None)
        return data


# -- access ------------------------------------------------------------------


class StairsParameters(ElementParameters):
    riser_height: float
    tread_depth: float = 280.0
    num_risers: int
    width: float = 1100.0
    stringer_type: str = "steel-channel"
    handrail_height: float = 1070.0


class LadderParameters(ElementParameters):
    rung_spacing: float = 300.0
    num_rungs: int
    width: float = 450.0
    cage_required: bool = False


class RampParameters(ElementParameters):
    slope: float = 12.0
    """Run per unit rise (12 means 1:12)."""

    length: float
    width: float = 1200.0
    handrail_required: bool = True
    landing_required: bool = False


class PlatformParameters(ElementParameters):
    width: float
    depth: float = 1500.0
    load_capacity: float = 4.8
    """kN/m²."""

    grating_type: str = "steel-bar"


class WalkwayParameters(ElementParameters):
    width: float = 1000.0
    length: float
    grating_type: str = "steel-bar"
    handrail_required: bool = True


# -- structure ---------------------------------------------------------------


class BeamParameters(ElementParameters):
    span: float
    profile: str
    load_type: str = "uniform"


class ColumnParameters(ElementParameters):
    height: float
    profile: str = "HSS150x150x6"
    base_plate_size: float = 300.0


class BracingParameters(ElementParameters):
    brace_type: str = "x-brace"
    profile: str = "L100x100x8"


# -- enclosure ---------------------------------------------------------------


class GuardParameters(ElementParameters):
    opening_size: float = 12.0
    height: float = 1400.0
    mesh_type: str = "welded-wire"


class PanelParameters(ElementParameters):
    thickness: float = 2.0
    bend_radius: float = 3.0


class FenceParameters(ElementParameters):
    height: float = 2100.0
    post_spacing: float = 2400.0
    mesh_type: str = "chain-link"


# -- flow --------------------------------------------------------------------


class PipeParameters(ElementParameters):
    nominal_size: float = 50.0
    schedule: str = "40"
    length: float
    support_spacing: float = 3000.0


class DuctParameters(ElementParameters):
    width: float = 400.0
    height: float = 300.0
    gauge: int = 24
    length: float


class CableTrayParameters(ElementParameters):
    width: float = 300.0
    depth: float = 100.0
    tray_type: str = "ladder"
    length: float


# -- mechanical --------------------------------------------------------------


class ShaftParameters(ElementParameters):
    diameter: float = 50.0
    length: float = 500.0
    keyway: bool = True


class CouplingParameters(ElementParameters):
    coupling_type: str = "flexible-jaw"
    size: float = 50.0
    misalignment_capacity: float = 1.0
    """Degrees."""


class LinkageParameters(ElementParameters):
    linkage_type: str = "four-bar"
    input_angle: float = 90.0
    output_angle: float = 45.0


PARAMETER_SCHEMAS: dict[tuple[KnowledgeDomain, str], type[ElementParameters]] = {
    (KnowledgeDomain.ACCESS, "stairs"): StairsParameters,
    (KnowledgeDomain.ACCESS, "ladder"): LadderParameters,
    (KnowledgeDomain.ACCESS, "ramp"): RampParameters,
    (KnowledgeDomain.ACCESS, "platform"): PlatformParameters,
    (KnowledgeDomain.ACCESS, "walkway"): WalkwayParameters,
    (KnowledgeDomain.STRUCTURE, "beam"): BeamParameters,
    (KnowledgeDomain.STRUCTURE, "column"): ColumnParameters,
    (KnowledgeDomain.STRUCTURE, "bracing"): BracingParameters,
    (KnowledgeDomain.ENCLOSURE, "guard"): GuardParameters,
    (KnowledgeDomain.ENCLOSURE, "panel"): PanelParameters,
    (KnowledgeDomain.ENCLOSURE, "fence"): FenceParameters,
    (KnowledgeDomain.FLOW, "pipe"): PipeParameters,
    (KnowledgeDomain.FLOW, "duct"): DuctParameters,
    (KnowledgeDomain.FLOW, "cable-tray"): CableTrayParameters,
    (KnowledgeDomain.MECHANICAL, "shaft"): ShaftParameters,
    (KnowledgeDomain.MECHANICAL, "coupling"): CouplingParameters,
    (KnowledgeDomain.MECHANICAL, "linkage"): LinkageParameters,
}


def schema_for(domain: KnowledgeDomain, element_type: str) -> type[ElementParameters]:
    """Payload model for *element_type*; the base payload if none is registered."""
    return PARAMETER_SCHEMAS.get((domain, element_type), ElementParameters)
