"""DesignExplainer — human-readable rationale and the Markdown design report."""

from __future__ import annotations

import logging
from typing import Sequence

from pathwright.models.classification import DomainClassification
from pathwright.models.optimization import OptimizationResult
from pathwright.models.request import DesignRequest, Exposure
from pathwright.models.solution import (
    CheckStatus,
    CodeCheck,
    DesignDecision,
    DesignRationale,
    DesignSolution,
    RejectedAlternative,
    SolutionMetrics,
    Tradeoff,
)

logger = logging.getLogger(__name__)

DOMAIN_DESCRIPTIONS: dict[str, str] = {
    "access": "providing human or equipment access between different elevations or locations",
    "structure": "supporting loads and spanning distances with structural elements",
    "enclosure": "protecting, containing, or covering equipment and spaces",
    "flow": "routing fluids, gases, cables, or materials between points",
    "mechanical": "transmitting motion, force, or power between components",
}

ELEMENT_DESCRIPTIONS: dict[str, str] = {
    "stairs": "a stairway with treads, risers, stringers, and handrails",
    "ladder": "a vertical or near-vertical climbing device with rungs",
    "ramp": "an inclined surface for wheelchair or equipment access",
    "platform": "a horizontal surface at elevation for access or working",
    "walkway": "a horizontal path for pedestrian access",
    "beam": "a horizontal structural member spanning between supports",
    "column": "a vertical structural member carrying compressive loads",
    "bracing": "diagonal members providing lateral stability",
    "guard": "a protective enclosure around machinery",
    "panel": "a flat sheet metal component",
    "fence": "a perimeter barrier for safety or security",
    "pipe": "a conduit for fluid or gas transport",
    "duct": "a conduit for air or gas movement",
    "cable-tray": "a support system for routing electrical cables",
    "shaft": "a rotating element transmitting torque",
    "coupling": "a connector joining two rotating shafts",
    "linkage": "a mechanism converting or transmitting motion",
}

_ELEMENT_REASONS: dict[str, str] = {
    "stairs": "Stairway selected due to elevation change within comfortable climbing range and available horizontal space.",
    "ladder": "Ladder selected due to limited horizontal space or steep elevation change.",
    "ramp": "Ramp selected for ADA accessibility or equipment movement requirements.",
    "beam": "Beam selected to span the horizontal distance and support the required loads.",
    "column": "Column selected to transfer vertical loads to foundation.",
}

# Domain confidence below which the summary calls the choice moderate
_CLEAR_CONFIDENCE = 0.7


class DesignExplainer:
    """Explain why a solution was chosen and render the design report."""

    def generate_rationale(
        self,
        request: DesignRequest,
        classification: DomainClassification,
        solution: DesignSolution,
        alternatives: Sequence[DesignSolution] = (),
    ) -> DesignRationale:
        return DesignRationale(
            summary=self._summary(request, classification, solution),
            decisions=tuple(self._decisions(request, classification, solution)),
            tradeoffs=tuple(self._tradeoffs(solution, alternatives)),
            rejected_alternatives=tuple(self._rejections(alternatives, solution)),
        )

    # ------------------------------------------------------------------
    # Rationale parts
    # ------------------------------------------------------------------

    @staticmethod
    def _summary(
        request: DesignRequest,
        classification: DomainClassification,
        solution: DesignSolution,
    ) -> str:
        domain = classification.primary_domain.value
        parts = [
            "This design addresses the requirement of "
            f"{DOMAIN_DESCRIPTIONS.get(domain, 'connecting two points')}.",
            f"The selected solution is {ELEMENT_DESCRIPTIONS.get(solution.element_type, solution.element_type)}.",
        ]
        if classification.confidence < _CLEAR_CONFIDENCE:
            parts.append(
                f"The {domain.upper()} domain was selected with moderate confidence "
                f"({classification.confidence * 100:.0f}%)."
            )
            if classification.secondary_domains:
                names = ", ".join(d.domain.value for d in classification.secondary_domains)
                parts.append(f"Alternative domains considered: {names}.")
        else:
            parts.append(f"The {domain.upper()} domain was clearly indicated by the requirements.")

        if request.code_names:
            verb = "complies with" if solution.compliance.compliant else "was checked against"
            parts.append(f"The design {verb} {', '.join(request.code_names)} requirements.")
        return " ".join(parts)

    def _decisions(
        self,
        request: DesignRequest,
        classification: DomainClassification,
        solution: DesignSolution,
    ) -> list[DesignDecision]:
        decisions = [
            DesignDecision(
                aspect="Domain Selection",
                choice=classification.primary_domain.value,
                reason=classification.reasoning,
            ),
            DesignDecision(
                aspect="Element Type",
                choice=solution.element_type,
                reason=_ELEMENT_REASONS.get(
                    solution.element_type,
                    f"{solution.element_type} was the most appropriate element for the given requirements.",
                ),
            ),
        ]
        if solution.material:
            decisions.append(
                DesignDecision(
                    aspect="Material Selection",
                    choice=solution.material,
                    reason=explain_material(solution.material, request),
                )
            )

        params = solution.parameters
        if solution.element_type == "stairs" and params.get("riser_height"):
            decisions.append(
                DesignDecision(
                    aspect="Riser Height",
                    choice=f"{params.get('riser_height'):.1f}mm",
                    reason="Selected within IBC limits (max 178mm) for comfortable climbing.",
                )
            )
        if solution.element_type == "beam" and params.get("profile"):
            decisions.append(
                DesignDecision(
                    aspect="Profile Selection",
                    choice=params.get("profile"),
                    reason="Selected to meet span and load requirements with acceptable deflection.",
                )
            )
        if params.get("width"):
            decisions.append(
                DesignDecision(
                    aspect="Width",
                    choice=f"{params.get('width'):g}mm",
                    reason="Width selected based on capacity requirements and available space.",
                )
            )
        return decisions

    @staticmethod
    def _tradeoffs(
        solution: DesignSolution,
        alternatives: Sequence[DesignSolution],
    ) -> list[Tradeoff]:
        tradeoffs: list[Tradeoff] = []
        if solution.material == "stainless-steel":
            tradeoffs.append(
                Tradeoff(
                    factor1="Initial Cost",
                    factor2="Long-term Durability",
                    decision="Selected higher-cost stainless steel",
                    impact="Higher upfront cost offset by reduced maintenance and longer service life.",
                )
            )

        chosen = solution.metrics
        for alt in alternatives:
            if alt.metrics.estimated_cost < chosen.estimated_cost * 0.8:
                tradeoffs.append(
                    Tradeoff(
                        factor1="Cost",
                        factor2="Overall Score",
                        decision=f"Selected {solution.element_type} over cheaper {alt.id}",
                        impact="Lower-cost alternative scored lower on the weighted objectives.",
                    )
                )
            if alt.metrics.estimated_weight < chosen.estimated_weight * 0.7:
                tradeoffs.append(
                    Tradeoff(
                        factor1="Weight",
                        factor2="Load Capacity",
                        decision=f"Selected heavier {solution.element_type} over {alt.id}",
                        impact="Additional weight provides required structural capacity.",
                    )
                )

        if solution.domain.value == "access":
            tradeoffs.append(
                Tradeoff(
                    factor1="Space Efficiency",
                    factor2="User Comfort",
                    decision="Balanced rise/run ratio within code limits",
                    impact="Moderate space usage with comfortable climbing angle.",
                )
            )
        return tradeoffs

    @staticmethod
    def _rejections(
        alternatives: Sequence[DesignSolution],
        selected: DesignSolution,
    ) -> list[RejectedAlternative]:
        rejections: list[RejectedAlternative] = []
        for alt in alternatives:
            if alt.id == selected.id:
                continue
            if not alt.compliance.compliant:
                codes = ", ".join(dict.fromkeys(c.code for c in alt.compliance.failures))
                rejections.append(
                    RejectedAlternative(
                        description=f"{alt.element_type} using {alt.material or 'default material'}",
                        reason=f"Failed code compliance: {codes}",
                    )
                )
                continue
            if alt.metrics.overall_score < selected.metrics.overall_score * 0.8:
                rejections.append(
                    RejectedAlternative(
                        description=f"{alt.element_type} configuration ({alt.id})",
                        reason=f"Lower overall score due to {worst_aspect(alt.metrics)}",
                    )
                )
        return rejections

    # ------------------------------------------------------------------
    # Explanations
    # ------------------------------------------------------------------

    @staticmethod
    def explain_compliance(checks: Sequence[CodeCheck]) -> str:
        failed = [c for c in checks if c.status == CheckStatus.FAIL]
        warnings = [c for c in checks if c.status == CheckStatus.WARNING]

        if not failed:
            lines = [f"Design meets all {len(checks)} code requirements."]
        else:
            lines = [f"Design fails {len(failed)} of {len(checks)} code requirements."]
            lines.extend(f"- {c.code} {c.section}: {c.message}" for c in failed)

        if warnings:
            lines.append(f"{len(warnings)} warning(s) noted:")
            lines.extend(f"- {c.message}" for c in warnings)
        return "\n".join(lines)

    @staticmethod
    def explain_optimization(result: OptimizationResult) -> str:
        lines = [result.summary]
        if len(result.ranked_solutions) > 1:
            lines.append("")
            lines.append("Ranking breakdown:")
            for ranked in result.ranked_solutions[:3]:
                marker = " (Pareto-optimal)" if ranked.pareto_optimal else ""
                lines.append(f"{ranked.rank}. Solution {ranked.solution_id}{marker}")
                lines.append(
                    f"   Cost: ${ranked.scores.cost:.0f}, Weight: {ranked.scores.weight:.1f}kg"
                )
                lines.append(f"   Score: {ranked.scores.overall:.1f}/100")
                if ranked.strengths:
                    lines.append(f"   Strengths: {', '.join(ranked.strengths)}")
                if ranked.weaknesses:
                    lines.append(f"   Weaknesses: {', '.join(ranked.weaknesses)}")
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Report
    # ------------------------------------------------------------------

    def generate_report(
        self,
        request: DesignRequest,
        classification: DomainClassification,
        solution: DesignSolution,
        alternatives: Sequence[DesignSolution] = (),
        optimization: OptimizationResult | None = None,
        rationale: DesignRationale | None = None,
    ) -> str:
        """Render the design report as Markdown."""
        rationale = rationale or self.generate_rationale(
            request, classification, solution, alternatives
        )
        a, b = request.point_a, request.point_b
        codes = ", ".join(request.code_names) or "None"

        lines: list[str] = [
            "# Design Report",
            "",
            f"**Request:** {request.id}",
            f"**Selected Solution:** {solution.id}",
            "",
            "## Requirements",
            "",
            f"- **Description:** {request.description or 'None'}",
            f"- **Start point:** {a.type.value} at "
            f"({a.position.x:g}, {a.position.y:g}, {a.position.z:g})",
            f"- **End point:** {b.type.value} at "
            f"({b.position.x:g}, {b.position.y:g}, {b.position.z:g})",
            f"- **Building type:** {request.constraints.building_type}",
            f"- **Applicable codes:** {codes}",
            "",
            "## Domain Analysis",
            "",
            f"**Primary domain:** {classification.primary_domain.value.upper()} "
            f"({classification.confidence * 100:.0f}% confidence)",
            "",
            classification.reasoning,
            "",
            "## Selected Solution",
            "",
            f"**Element type:** {solution.element_type}",
            "",
            "| Parameter | Value |",
            "|-----------|-------|",
        ]
        for key, value in solution.parameters.engineering_values().items():
            if value is not None:
                lines.append(f"| {key} | {_format_value(value)} |")
        lines.append("")

        m = solution.metrics
        lines.extend([
            "## Metrics",
            "",
            f"- **Estimated cost:** ${m.estimated_cost:,.2f}",
            f"- **Estimated weight:** {m.estimated_weight:.1f} kg",
            f"- **Material efficiency:** {m.material_efficiency:.1f}%",
            f"- **Manufacturing complexity:** {m.manufacturing_complexity:.1f}/10",
            f"- **Assembly time:** {m.assembly_time_estimate:.1f} h",
            f"- **Maintenance score:** {m.maintenance_score:.1f}/10",
            f"- **Overall score:** {m.overall_score:.1f}",
            "",
            "## Design Rationale",
            "",
            rationale.summary,
            "",
            "### Key Decisions",
            "",
        ])
        for decision in rationale.decisions:
            lines.append(f"- **{decision.aspect}:** {decision.choice}. {decision.reason}")
        lines.append("")

        if rationale.tradeoffs:
            lines.extend(["### Trade-offs", ""])
            for tradeoff in rationale.tradeoffs:
                lines.append(f"- {tradeoff.factor1} vs {tradeoff.factor2}: {tradeoff.decision}")
            lines.append("")

        if rationale.rejected_alternatives:
            lines.extend(["### Rejected Alternatives", ""])
            for rejected in rationale.rejected_alternatives:
                lines.append(f"- {rejected.description}: {rejected.reason}")
            lines.append("")

        lines.extend(["## Code Compliance", ""])
        if solution.compliance.checks:
            lines.extend([
                "| Code | Section | Requirement | Status | Value | Limit |",
                "|------|---------|-------------|--------|-------|-------|",
            ])
            for check in solution.compliance.checks:
                lines.append(
                    f"| {check.code} | {check.section} | {check.requirement} "
                    f"| {check.status.value.upper()} | {_format_value(check.value)} "
                    f"| {_format_value(check.limit)} |"
                )
            lines.append("")
        lines.extend([self.explain_compliance(solution.compliance.checks), ""])

        if optimization is not None:
            lines.extend([
                "## Optimization Results",
                "",
                self.explain_optimization(optimization),
                "",
            ])

        if solution.warnings:
            lines.extend(["## Warnings", ""])
            lines.extend(f"- {w}" for w in solution.warnings)
            lines.append("")

        return "\n".join(lines)


def explain_material(material: str, request: DesignRequest) -> str:
    """Why *material* suits the request's environment."""
    env = request.environment.conditions
    for pref in request.constraints.material_preferences:
        if pref.material == material and pref.preference == "required":
            return f"{material} was specified as a requirement."

    if material == "stainless-steel":
        if env.corrosive or env.humidity == "high":
            return "Stainless steel selected for corrosion resistance in harsh environment."
        return "Stainless steel selected for durability and low maintenance."
    if material == "galvanized-steel":
        if env.exposure == Exposure.OUTDOOR:
            return "Galvanized steel selected for outdoor exposure protection at lower cost than stainless."
        return "Galvanized steel selected for corrosion resistance."
    if material == "aluminum":
        return "Aluminum selected for light weight and corrosion resistance."
    if material == "carbon-steel":
        if env.exposure == Exposure.INDOOR:
            return "Carbon steel selected for cost effectiveness in protected indoor environment."
        return "Carbon steel selected for strength and cost, with appropriate coating specified."
    return f"{material} selected based on requirements and environmental conditions."


def worst_aspect(metrics: SolutionMetrics) -> str:
    if metrics.estimated_cost > 2000:
        return "high cost"
    if metrics.manufacturing_complexity > 7:
        return "manufacturing complexity"
    if metrics.maintenance_score > 7:
        return "maintenance requirements"
    if metrics.estimated_weight > 200:
        return "excessive weight"
    return "overall performance"


def _format_value(value: object) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        return f"{value:.1f}"
    return str(value)
