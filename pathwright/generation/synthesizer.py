"""Parameter synthesis — fixed per-element formulas from endpoint geometry.

All inputs and outputs are in millimetres.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from pathwright.config import DEFAULT_MATERIAL
from pathwright.models.classification import KnowledgeDomain
from pathwright.models.parameters import ElementParameters, schema_for
from pathwright.models.request import DesignRequest, Exposure

logger = logging.getLogger(__name__)

# Stairs: nominal riser (IBC max is 178)
NOMINAL_RISER = 175.0
# Ladder rung pitch
RUNG_SPACING = 300.0
# Ladders taller than this need a cage
LADDER_CAGE_HEIGHT = 6000.0
# Ramp run per unit rise (ADA 1:12)
RAMP_SLOPE = 12.0
# Ramp runs longer than this need an intermediate landing
RAMP_MAX_RUN = 9000.0
# Beam spans above this get the heavier profile
BEAM_PROFILE_SPAN = 3000.0


def default_material(request: DesignRequest) -> str:
    """Base material: a required preference, else chosen from the exposure."""
    for pref in request.constraints.material_preferences:
        if pref.preference == "required":
            return pref.material.lower()
    conditions = request.environment.conditions
    if conditions.corrosive:
        return "stainless-steel"
    if conditions.exposure == Exposure.OUTDOOR:
        return "galvanized-steel"
    return DEFAULT_MATERIAL


def _access(element_type: str, rise: float, run: float) -> dict[str, Any]:
    if element_type == "stairs":
        num_risers = max(1, math.ceil(rise / NOMINAL_RISER))
        return {"riser_height": rise / num_risers, "num_risers": num_risers}
    if element_type == "ladder":
        return {
            "rung_spacing": RUNG_SPACING,
            "num_rungs": math.ceil(rise / RUNG_SPACING),
            "cage_required": rise > LADDER_CAGE_HEIGHT,
        }
    if element_type == "ramp":
        length = rise * RAMP_SLOPE
        return {"slope": RAMP_SLOPE, "length": length, "landing_required": length > RAMP_MAX_RUN}
    if element_type == "platform":
        return {"width": run if run > 0 else 1500.0}
    if element_type == "walkway":
        return {"length": run}
    return {}


def _structure(element_type: str, rise: float, run: float) -> dict[str, Any]:
    if element_type == "beam":
        return {"span": run, "profile": "W200x46" if run > BEAM_PROFILE_SPAN else "W150x22"}
    if element_type == "column":
        return {"height": run}
    return {}


def _flow(element_type: str, rise: float, run: float) -> dict[str, Any]:
    if element_type in ("pipe", "duct", "cable-tray"):
        return {"length": run}
    return {}


_DOMAIN_FORMULAS = {
    KnowledgeDomain.ACCESS: _access,
    KnowledgeDomain.STRUCTURE: _structure,
    KnowledgeDomain.FLOW: _flow,
}


def synthesize_parameters(
    request: DesignRequest,
    domain: KnowledgeDomain,
    element_type: str,
    overrides: dict[str, Any] | None = None,
) -> ElementParameters:
    """Build the parameter payload for one candidate.

    Enclosure and mechanical element types, and any type without a
    registered payload, use the payload defaults only.
    """
    rise = abs(request.elevation_change)
    run = request.horizontal_distance

    values: dict[str, Any] = {
        "material": default_material(request),
        "start_point": request.point_a.position,
        "end_point": request.point_b.position,
        "exposure": request.environment.conditions.exposure,
    }
    formula = _DOMAIN_FORMULAS.get(domain)
    if formula is not None:
        values.update(formula(element_type, rise, run))
    values.update(overrides or {})

    params = schema_for(domain, element_type)(**values)
    logger.debug("Synthesized %s/%s parameters: %s", domain.value, element_type, params.engineering_values())
    return params
