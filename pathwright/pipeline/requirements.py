"""Requirements providers — where ParsedRequirements come from.

Natural-language parsing is a collaborator outside this package.  The
orchestrator talks to it through :class:`RequirementsProvider`; the default
:class:`RequestFieldsProvider` needs no external service and derives the
requirements from the structured fields of the request.
"""

from __future__ import annotations

import abc
import logging
import re

from pathwright.metrics.materials import SEED_MATERIALS
from pathwright.models.request import CodeName, DesignRequest, Exposure
from pathwright.models.requirements import (
    ExtractedConstraint,
    ExtractedEndpoint,
    ExtractedPreference,
    ParsedRequirements,
)

logger = logging.getLogger(__name__)

_PREFERENCE_STRENGTH = {
    "required": "must",
    "avoid": "must",
    "preferred": "should",
    "acceptable": "could",
}

_SENTENCE_SPLIT = re.compile(r"(?<=[.;!?])\s+|\n+")
_DIMENSION = re.compile(r"\d+(?:\.\d+)?\s*(?:mm|cm|m|ft|feet|foot|inch|inches)\b", re.IGNORECASE)
_CODE_NAMES = re.compile(
    r"\b(?:" + "|".join(c.value for c in CodeName if c != CodeName.CUSTOM) + r")\b", re.IGNORECASE
)
_CONSTRAINT_TERMS = (
    "budget", "cost", "$", "usd", "cheap", "price",
    "schedule", "lead time", "days", "weeks", "deadline",
    "outdoor", "outside", "indoor", "covered", "corrosive", "humid", "vibration",
    "steel", "aluminum", "aluminium", "wood", "timber", "fiberglass", "plastic",
    "code", "compliant", "compliance",
)


class RequirementsProvider(abc.ABC):
    """Base class for requirement sources.

    Implementations turn a :class:`DesignRequest` into
    :class:`ParsedRequirements`.  Providers that depend on an external
    service report availability through :meth:`is_available`; the
    orchestrator falls back to :class:`RequestFieldsProvider` when it is
    *False*.
    """

    @abc.abstractmethod
    def parse(self, request: DesignRequest) -> ParsedRequirements:
        """Return the structured requirements for *request*."""

    @abc.abstractmethod
    def is_available(self) -> bool:
        """Return *True* if the provider is ready to serve requests."""


class RequestFieldsProvider(RequirementsProvider):
    """Derive requirements from the request's structured fields.

    Always available.  Description sentences that name no recognisable
    constraint (code, material, budget, schedule, environment or
    dimension) are reported as unparsed parts.
    """

    def is_available(self) -> bool:
        """Always available."""
        return True

    def parse(self, request: DesignRequest) -> ParsedRequirements:
        sentences = split_sentences(request.description)
        unparsed = [s for s in sentences if not names_constraint(s)]
        if sentences:
            confidence = (len(sentences) - len(unparsed)) / len(sentences)
        else:
            confidence = 1.0

        parsed = ParsedRequirements(
            endpoints=tuple(self._endpoints(request)),
            constraints=tuple(self._constraints(request)),
            preferences=tuple(self._preferences(request)),
            confidence=confidence,
            unparsed_parts=tuple(unparsed),
        )
        logger.debug(
            "Derived %d constraint(s), %d unparsed fragment(s) for %s",
            len(parsed.constraints),
            len(parsed.unparsed_parts),
            request.id,
        )
        return parsed

    @staticmethod
    def _endpoints(request: DesignRequest) -> list[ExtractedEndpoint]:
        endpoints = []
        for role, point in (("start", request.point_a), ("end", request.point_b)):
            p = point.position
            endpoints.append(
                ExtractedEndpoint(
                    role=role,
                    description=f"{point.type.value} at ({p.x:g}, {p.y:g}, {p.z:g})",
                    type=point.type,
                    elevation=p.z,
                    confidence=1.0,
                )
            )
        return endpoints

    @staticmethod
    def _constraints(request: DesignRequest) -> list[ExtractedConstraint]:
        project = request.constraints
        constraints: list[ExtractedConstraint] = []

        for code in project.codes:
            constraints.append(
                ExtractedConstraint(
                    type="code",
                    description=f"Comply with {code.code.value}"
                    + (f" {code.version}" if code.version else ""),
                    value=code.code.value,
                    confidence=1.0,
                )
            )
        if project.budget is not None:
            constraints.append(
                ExtractedConstraint(
                    type="cost",
                    description=f"{project.budget.priority} budget",
                    value=project.budget.max_cost,
                    unit=project.budget.currency,
                    confidence=1.0,
                )
            )
        if project.schedule is not None:
            constraints.append(
                ExtractedConstraint(
                    type="schedule",
                    description=f"{project.schedule.priority} lead time",
                    value=project.schedule.max_lead_time,
                    unit="days",
                    confidence=1.0,
                )
            )
        for pref in project.material_preferences:
            constraints.append(
                ExtractedConstraint(
                    type="material",
                    description=f"{pref.preference} {pref.material}",
                    value=pref.material,
                    confidence=1.0,
                )
            )

        conditions = request.environment.conditions
        if conditions.exposure != Exposure.INDOOR:
            constraints.append(
                ExtractedConstraint(
                    type="environmental",
                    description=f"{conditions.exposure.value} exposure",
                    value=conditions.exposure.value,
                    confidence=1.0,
                )
            )
        if conditions.corrosive:
            constraints.append(
                ExtractedConstraint(
                    type="environmental",
                    description="corrosive environment",
                    value="corrosive",
                    confidence=1.0,
                )
            )
        return constraints

    @staticmethod
    def _preferences(request: DesignRequest) -> list[ExtractedPreference]:
        project = request.constraints
        preferences = [
            ExtractedPreference(
                aspect="material",
                preference=f"avoid {pref.material}" if pref.preference == "avoid" else pref.material,
                strength=_PREFERENCE_STRENGTH.get(pref.preference, "should"),
                confidence=1.0,
            )
            for pref in project.material_preferences
        ]
        if project.budget is not None:
            preferences.append(
                ExtractedPreference(
                    aspect="cost",
                    preference=f"at most {project.budget.max_cost:g} {project.budget.currency}",
                    strength="must" if project.budget.priority == "strict" else "should",
                    confidence=1.0,
                )
            )
        return preferences


def split_sentences(text: str) -> list[str]:
    return [s.strip() for s in _SENTENCE_SPLIT.split(text or "") if s.strip()]


def names_constraint(sentence: str) -> bool:
    """True if *sentence* mentions a code, material, dimension or project constraint."""
    lower = sentence.lower()
    if _DIMENSION.search(sentence):
        return True
    if _CODE_NAMES.search(sentence):
        return True
    if any(material in lower for material in SEED_MATERIALS):
        return True
    return any(term in lower for term in _CONSTRAINT_TERMS)
