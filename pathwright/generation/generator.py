"""CandidateGenerator — the bounded set of candidates for one request.

Order: one primary candidate at the classified element type, up to two
alternate element types, then material variants of the primary type until
``max_solutions`` is reached.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, SerializeAsAny

from pathwright.config import DEFAULT_MAX_SOLUTIONS, MATERIAL_VARIANTS
from pathwright.generation.synthesizer import synthesize_parameters
from pathwright.models.classification import (
    DomainClassification,
    ElementTypeClassification,
    KnowledgeDomain,
)
from pathwright.models.parameters import ElementParameters
from pathwright.models.request import DesignRequest

logger = logging.getLogger(__name__)

_MAX_ALTERNATES = 2


class CandidateDraft(BaseModel):
    """An unevaluated candidate: identity plus synthesized parameters."""

    model_config = ConfigDict(frozen=True)

    id: str
    domain: KnowledgeDomain
    element_type: str
    variant: str
    parameters: SerializeAsAny[ElementParameters]


def candidate_id(domain: KnowledgeDomain, element_type: str, variant: str) -> str:
    return f"{domain.value}-{element_type}-{variant}"


class CandidateGenerator:
    """Generate candidate drafts for a classified request.

    Parameters
    ----------
    max_solutions:
        Default cap on the number of drafts.
    material_variants:
        Materials cycled through for variants of the primary element type.
    """

    def __init__(
        self,
        max_solutions: int = DEFAULT_MAX_SOLUTIONS,
        material_variants: tuple[str, ...] = MATERIAL_VARIANTS,
    ) -> None:
        self.max_solutions = max_solutions
        self.material_variants = material_variants

    def generate(
        self,
        request: DesignRequest,
        classification: DomainClassification,
        element: ElementTypeClassification,
        max_solutions: int | None = None,
    ) -> list[CandidateDraft]:
        """Primary, alternates, then material variants, capped."""
        cap = self.max_solutions if max_solutions is None else max_solutions
        domain = classification.primary_domain
        drafts: list[CandidateDraft] = []
        if cap <= 0:
            return drafts

        primary = self._draft(request, domain, element.element_type, "primary")
        drafts.append(primary)

        for alt in element.alternatives[:_MAX_ALTERNATES]:
            if len(drafts) >= cap:
                break
            drafts.append(self._draft(request, domain, alt.element_type, f"alt-{alt.element_type}"))

        avoided = {
            pref.material.lower()
            for pref in request.constraints.material_preferences
            if pref.preference == "avoid"
        }
        for material in self.material_variants:
            if len(drafts) >= cap:
                break
            if material == primary.parameters.material.lower() or material in avoided:
                continue
            drafts.append(
                self._draft(
                    request,
                    domain,
                    element.element_type,
                    f"material-{material}",
                    {"material": material},
                )
            )

        logger.debug("Generated %d candidate(s) for %s", len(drafts), request.id)
        return drafts

    @staticmethod
    def _draft(
        request: DesignRequest,
        domain: KnowledgeDomain,
        element_type: str,
        variant: str,
        overrides: dict[str, Any] | None = None,
    ) -> CandidateDraft:
        return CandidateDraft(
            id=candidate_id(domain, element_type, variant),
            domain=domain,
            element_type=element_type,
            variant=variant,
            parameters=synthesize_parameters(request, domain, element_type, overrides),
        )
