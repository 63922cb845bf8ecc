"""DomainSelector — classify a request into a domain and an element type.

Usage::

    from pathwright.domains import DomainSelector

    selector = DomainSelector()
    classification = selector.classify_domain(request)
    element = selector.classify_element_type(request, classification.primary_domain)
"""

from __future__ import annotations

import logging

from pathwright.domains.tables import DEFAULT_TABLES, ClassifierTables
from pathwright.models.classification import (
    DomainClassification,
    ElementAlternative,
    ElementTypeClassification,
    KnowledgeDomain,
    SecondaryDomain,
)
from pathwright.models.request import DesignRequest

logger = logging.getLogger(__name__)

# Rule-based classification is never certain
MAX_DOMAIN_CONFIDENCE = 0.95
MAX_ELEMENT_CONFIDENCE = 0.9

_POINT_TYPE_WEIGHT = 0.5
_FALLBACK_ALTERNATIVE_CONFIDENCE = 0.1


class DomainSelector:
    """Keyword and geometry heuristics for domain and element selection.

    Parameters
    ----------
    tables:
        Keyword, element-type and point-hint tables.  Defaults to the
        embedded tables.
    """

    def __init__(self, tables: ClassifierTables | None = None) -> None:
        self.tables = tables or DEFAULT_TABLES

    # -- domain -----------------------------------------------------------------

    def classify_domain(self, request: DesignRequest) -> DomainClassification:
        """Score every domain from keywords, point types and geometry."""
        scores: dict[KnowledgeDomain, float] = {domain: 0.0 for domain in KnowledgeDomain}
        text = request.description.lower()

        for domain, rule in self.tables.domain_rules:
            scores[domain] += rule.score(text)

        for point in (request.point_a, request.point_b):
            for domain in self.tables.point_type_hints.get(point.type, ()):
                scores[domain] += _POINT_TYPE_WEIGHT

        elevation = abs(request.elevation_change)
        if elevation > 500:
            scores[KnowledgeDomain.ACCESS] += 2
        elif elevation > 100:
            scores[KnowledgeDomain.ACCESS] += 1

        if request.horizontal_distance > 5000:
            scores[KnowledgeDomain.FLOW] += 1
            scores[KnowledgeDomain.STRUCTURE] += 1

        # Stable sort keeps declaration order among equal scores
        ranked = sorted(scores.items(), key=lambda item: -item[1])
        primary, primary_score = ranked[0]
        total = sum(scores.values())
        confidence = primary_score / total if total > 0 else 0.5

        secondary = tuple(
            SecondaryDomain(
                domain=domain,
                confidence=score / total if total > 0 else 0.0,
                reason=self._domain_reason(domain, text),
            )
            for domain, score in ranked[1:]
            if score > 0
        )

        logger.debug("Domain scores for %s: %s", request.id, {d.value: s for d, s in ranked})
        return DomainClassification(
            primary_domain=primary,
            confidence=min(confidence, MAX_DOMAIN_CONFIDENCE),
            secondary_domains=secondary,
            reasoning=self._reasoning(request, ranked),
        )

    # -- element type -------------------------------------------------------------

    def classify_element_type(
        self,
        request: DesignRequest,
        domain: KnowledgeDomain,
    ) -> ElementTypeClassification:
        """Pick the element type within *domain* by keyword score.

        Falls back to a geometric decision tree when no element keyword
        matches.
        """
        text = request.description.lower()
        rules = self.tables.element_rules.get(domain, ())
        scored = sorted(
            ((rule, rule.score(text)) for rule in rules),
            key=lambda item: -item[1],
        )

        if not scored or scored[0][1] == 0:
            element_type, confidence = self._geometric_element_type(request, domain)
            alternatives = tuple(
                ElementAlternative(
                    element_type=rule.name,
                    confidence=_FALLBACK_ALTERNATIVE_CONFIDENCE,
                    reason="No specific keywords matched",
                )
                for rule in rules
                if rule.name != element_type
            )[:2]
            return ElementTypeClassification(
                domain=domain,
                element_type=element_type,
                confidence=confidence,
                alternatives=alternatives,
            )

        top_rule, top_score = scored[0]
        total = sum(score for _, score in scored)
        alternatives = tuple(
            ElementAlternative(
                element_type=rule.name,
                confidence=score / total,
                reason=f"Keywords matched: {', '.join(rule.matches(text))}",
            )
            for rule, score in scored[1:]
            if score > 0
        )
        return ElementTypeClassification(
            domain=domain,
            element_type=top_rule.name,
            confidence=min(top_score / total, MAX_ELEMENT_CONFIDENCE),
            alternatives=alternatives,
        )

    @staticmethod
    def _geometric_element_type(
        request: DesignRequest,
        domain: KnowledgeDomain,
    ) -> tuple[str, float]:
        """Element type from the A→B geometry alone."""
        elevation = abs(request.elevation_change)
        horizontal = request.horizontal_distance

        if domain == KnowledgeDomain.ACCESS:
            # Steep: ladder, moderate: stairs, shallow: ramp
            if horizontal < 100:
                return "ladder", 0.6
            if elevation > 0 and elevation / horizontal > 0.7:
                return "ladder", 0.5
            if elevation > 0 and elevation / horizontal > 0.25:
                return "stairs", 0.6
            if elevation > 0:
                return "ramp", 0.5
            return "walkway", 0.5
        if domain == KnowledgeDomain.STRUCTURE:
            if elevation > horizontal:
                return "column", 0.6
            return "beam", 0.6
        if domain == KnowledgeDomain.ENCLOSURE:
            return "panel", 0.4
        if domain == KnowledgeDomain.FLOW:
            return "pipe", 0.4
        if domain == KnowledgeDomain.MECHANICAL:
            return "shaft", 0.4
        return "unknown", 0.1

    # -- narrative ------------------------------------------------------------------

    def _domain_reason(self, domain: KnowledgeDomain, text: str) -> str:
        matched = self.tables.domain_rule(domain).matches(text)
        if matched:
            return f"Keywords matched: {', '.join(matched[:3])}"
        return "Geometric analysis suggests this domain may be relevant"

    @staticmethod
    def _reasoning(
        request: DesignRequest,
        ranked: list[tuple[KnowledgeDomain, float]],
    ) -> str:
        a, b = request.point_a, request.point_b
        parts = [
            f"Analyzing request to connect {a.type.value} at "
            f"({a.position.x:.0f}, {a.position.y:.0f}, {a.position.z:.0f}) to "
            f"{b.type.value} at ({b.position.x:.0f}, {b.position.y:.0f}, {b.position.z:.0f})."
        ]

        rise = request.elevation_change
        if abs(rise) > 100:
            direction = "ascending" if rise > 0 else "descending"
            parts.append(f"Elevation change of {rise:.0f}mm suggests {direction} connection.")

        primary, primary_score = ranked[0]
        parts.append(
            f"Selected {primary.value.upper()} domain based on keyword analysis and geometric factors."
        )

        if len(ranked) > 1:
            runner_up, runner_score = ranked[1]
            if runner_score > primary_score * 0.5:
                parts.append(
                    f"{runner_up.value.upper()} domain was also considered "
                    f"({runner_score / primary_score * 100:.0f}% of primary score)."
                )

        return " ".join(parts)
