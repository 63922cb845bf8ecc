"""Tests for the end-to-end pipeline, requirements providers and explainer.

All tests run offline; the async boundary is exercised with pytest-asyncio.
"""

from __future__ import annotations

import logging

import pytest

from pathwright import (
    InvalidRequestError,
    Orchestrator,
    PipelineConfig,
    PipelineStage,
    RequestFieldsProvider,
    RequirementsProvider,
)
from pathwright.compliance import CodeRule, ComplianceChecker
from pathwright.errors import ConfigError
from pathwright.generation import CandidateGenerator
from pathwright.models import (
    ApplicableCode,
    BudgetConstraint,
    CheckStatus,
    CodeCheck,
    CodeName,
    ConnectionPoint,
    DesignRequest,
    EnvironmentConditions,
    EnvironmentConstraints,
    Exposure,
    KnowledgeDomain,
    MaterialPreference,
    ParsedRequirements,
    Point3D,
    PointType,
    ProjectConstraints,
)
from pathwright.pipeline import DesignExplainer


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _request(
    description: str = "Stairs from floor to mezzanine per IBC.",
    rise: float = 3000,
    run: float = 4000,
    point_type: PointType = PointType.FLOOR,
    codes: tuple[str, ...] = ("IBC", "OSHA"),
    budget: BudgetConstraint | None = None,
    preferences: tuple[MaterialPreference, ...] = (),
    exposure: Exposure = Exposure.INDOOR,
) -> DesignRequest:
    return DesignRequest(
        id="req-pipeline",
        description=description,
        point_a=ConnectionPoint(position=Point3D(), type=point_type),
        point_b=ConnectionPoint(position=Point3D(x=run, z=rise), type=point_type),
        environment=EnvironmentConstraints(conditions=EnvironmentConditions(exposure=exposure)),
        constraints=ProjectConstraints(
            codes=tuple(ApplicableCode(code=CodeName(c)) for c in codes),
            budget=budget,
            material_preferences=preferences,
        ),
    )


@pytest.fixture
def orchestrator() -> Orchestrator:
    return Orchestrator()


class EmptyGenerator(CandidateGenerator):
    def generate(self, request, classification, element, max_solutions=None):
        return []


class OfflineProvider(RequirementsProvider):
    def is_available(self) -> bool:
        return False

    def parse(self, request: DesignRequest) -> ParsedRequirements:
        raise AssertionError("unavailable provider must not be called")


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------


class TestProcess:
    def test_stairs_request(self, orchestrator: Orchestrator) -> None:
        result = orchestrator.process(_request())
        assert result.classification.primary_domain == KnowledgeDomain.ACCESS
        assert result.element_type.element_type == "stairs"
        assert len(result.solutions) == 4
        assert {s.id for s in result.solutions} == {
            "access-stairs-primary",
            "access-platform-alt-platform",
            "access-stairs-material-stainless-steel",
            "access-stairs-material-aluminum",
        }
        assert all(s.compliance.compliant for s in result.solutions)

    def test_stairs_parameters(self, orchestrator: Orchestrator) -> None:
        result = orchestrator.process(_request())
        primary = next(s for s in result.solutions if s.id == "access-stairs-primary")
        assert primary.parameters.num_risers == 18
        assert primary.parameters.riser_height == pytest.approx(166.7, abs=0.05)
        assert primary.parameters.tread_depth == 280
        statuses = {(c.code, c.requirement): c.status for c in primary.compliance.checks}
        assert statuses[("IBC", "Maximum riser height 178mm")] == CheckStatus.PASS
        assert statuses[("IBC", "Minimum tread depth 279mm")] == CheckStatus.PASS

    def test_ramp_request(self, orchestrator: Orchestrator) -> None:
        result = orchestrator.process(
            _request("Wheelchair ramp up to the entrance.", rise=600, run=8000, codes=("ADA",))
        )
        ramp = next(s for s in result.solutions if s.element_type == "ramp")
        assert ramp.parameters.length == 7200
        assert ramp.parameters.landing_required is False
        assert ramp.compliance.compliant

    def test_solutions_in_rank_order(self, orchestrator: Orchestrator) -> None:
        result = orchestrator.process(_request())
        ranked_ids = [r.solution_id for r in result.optimization.ranked_solutions]
        assert [s.id for s in result.solutions] == ranked_ids
        scores = [s.metrics.overall_score for s in result.solutions]
        assert scores == sorted(scores, reverse=True)

    def test_stages_in_order(self, orchestrator: Orchestrator) -> None:
        result = orchestrator.process(_request())
        assert result.metadata.stages_completed == tuple(PipelineStage)
        assert result.metadata.processing_time_ms >= 0

    def test_rationale_and_report(self, orchestrator: Orchestrator) -> None:
        result = orchestrator.process(_request())
        assert result.rationale.summary.startswith("This design addresses the requirement of")
        assert result.solutions[0].rationale == result.rationale
        assert result.report.startswith("# Design Report")
        assert f"**Selected Solution:** {result.solutions[0].id}" in result.report
        assert "## Code Compliance" in result.report
        assert "## Optimization Results" in result.report

    def test_deterministic(self, orchestrator: Orchestrator) -> None:
        first = orchestrator.process(_request())
        second = orchestrator.process(_request())
        assert [s.id for s in first.solutions] == [s.id for s in second.solutions]
        assert first.optimization.pareto_optimal == second.optimization.pareto_optimal
        assert first.report == second.report

    def test_mapping_input(self, orchestrator: Orchestrator) -> None:
        request = _request()
        result = orchestrator.process(request.model_dump())
        assert result.request == request

    def test_max_solutions_from_config(self) -> None:
        result = Orchestrator(PipelineConfig(max_solutions=2)).process(_request())
        assert len(result.solutions) == 2

    def test_objectives_from_config(self) -> None:
        orchestrator = Orchestrator(PipelineConfig(objectives={"minimize_cost": 1.0}))
        assert orchestrator.optimizer.objectives.minimize_cost > 0.3
        assert orchestrator.optimizer.objectives.total == pytest.approx(1.0)

    def test_bad_objectives_rejected(self) -> None:
        with pytest.raises(ConfigError):
            Orchestrator(PipelineConfig(objectives={"minimize_noise": 1.0}))

    @pytest.mark.parametrize(
        "description,rise,run",
        [
            ("Stairs from floor to mezzanine per IBC.", 3000, 4000),
            ("", 500, 1000),
            ("Pipe run along the wall.", 0, 9000),
            ("Beam to carry the load.", 0, 4500),
        ],
    )
    def test_rank_one_versus_pareto(
        self, orchestrator: Orchestrator, description: str, rise: float, run: float
    ) -> None:
        result = orchestrator.process(_request(description, rise=rise, run=run))
        ranked = result.optimization.ranked_solutions
        top = ranked[0]
        if top.solution_id not in result.optimization.pareto_optimal:
            # Only a tie on the weighted score lets a dominated solution rank first
            assert any(r.scores.overall == pytest.approx(top.scores.overall) for r in ranked[1:])


# ---------------------------------------------------------------------------
# Failure and warnings
# ---------------------------------------------------------------------------


class TestWarnings:
    def test_invalid_mapping_raises(self, orchestrator: Orchestrator) -> None:
        with pytest.raises(InvalidRequestError, match="Invalid design request"):
            orchestrator.process({"id": "broken"})

    @pytest.mark.parametrize("z", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_coordinate_raises(self, orchestrator: Orchestrator, z: float) -> None:
        request = {
            "id": "req-non-finite",
            "point_a": {"position": {"x": 0, "z": 0}},
            "point_b": {"position": {"x": 4000, "z": z}},
        }
        with pytest.raises(InvalidRequestError, match="Invalid design request"):
            orchestrator.process(request)

    def test_wrong_type_raises(self, orchestrator: Orchestrator) -> None:
        with pytest.raises(InvalidRequestError):
            orchestrator.process(42)  # type: ignore[arg-type]

    def test_unparsed_fragments(self, orchestrator: Orchestrator) -> None:
        result = orchestrator.process(_request("Stairs from floor to mezzanine. Per IBC."))
        assert result.parsed_requirements.unparsed_parts == ("Stairs from floor to mezzanine.",)
        assert (
            "Some requirements could not be fully parsed: 1 unparsed sections"
            in result.metadata.warnings
        )

    def test_low_confidence(self, orchestrator: Orchestrator) -> None:
        result = orchestrator.process(
            _request("qzx", rise=0, run=0, point_type=PointType.CUSTOM, codes=())
        )
        assert result.classification.confidence == 0.5
        assert "Domain classification has low confidence (50%)" in result.metadata.warnings

    def test_threshold_from_config(self) -> None:
        orchestrator = Orchestrator(PipelineConfig(low_confidence_threshold=0.4))
        result = orchestrator.process(
            _request("qzx", rise=0, run=0, point_type=PointType.CUSTOM, codes=())
        )
        assert not any("low confidence" in w for w in result.metadata.warnings)

    def test_zero_solutions(self) -> None:
        result = Orchestrator(generator=EmptyGenerator()).process(_request())
        assert result.solutions == ()
        assert result.top is None
        assert "No valid solutions could be generated" in result.metadata.warnings
        assert result.optimization.summary == "No solutions to evaluate."
        assert "empty-solution" in result.report
        assert result.metadata.stages_completed == tuple(PipelineStage)

    def test_non_compliant_candidates(self) -> None:
        narrow = CodeRule(
            code="custom",
            section="W-1",
            requirement="Stairs at most 1000mm wide",
            domain=KnowledgeDomain.ACCESS,
            element_types=("stairs",),
            parameter="width",
            check_type="max_value",
            limit=1000,
        )
        orchestrator = Orchestrator(checker=ComplianceChecker(rules=[narrow]))
        result = orchestrator.process(_request(codes=("custom",)))
        assert any(
            "access-stairs-primary is not code compliant (custom W-1)" in w
            for w in result.metadata.warnings
        )

    def test_budget_overrun(self, orchestrator: Orchestrator) -> None:
        result = orchestrator.process(_request(budget=BudgetConstraint(max_cost=10.0)))
        assert any("exceeds budget" in w for w in result.metadata.warnings)
        assert all(any("budget" in w for w in s.warnings) for s in result.solutions)

    def test_pre_parsed_requirements(self, orchestrator: Orchestrator) -> None:
        parsed = ParsedRequirements(confidence=0.9, unparsed_parts=("mystery clause",))
        result = orchestrator.process(_request(), parsed)
        assert result.parsed_requirements is parsed
        assert any("1 unparsed sections" in w for w in result.metadata.warnings)

    def test_unavailable_provider_falls_back(self) -> None:
        result = Orchestrator(provider=OfflineProvider()).process(_request())
        assert len(result.parsed_requirements.endpoints) == 2

    def test_verbose_logging(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="pathwright")
        Orchestrator(PipelineConfig(verbose=True)).process(_request())
        assert "Processing complete" in caplog.text


# ---------------------------------------------------------------------------
# Async boundary
# ---------------------------------------------------------------------------


class TestAsync:
    @pytest.mark.asyncio
    async def test_aprocess_matches_process(self, orchestrator: Orchestrator) -> None:
        request = _request()
        result = await orchestrator.aprocess(request)
        expected = orchestrator.process(request)
        assert [s.id for s in result.solutions] == [s.id for s in expected.solutions]
        assert result.report == expected.report

    @pytest.mark.asyncio
    async def test_aprocess_propagates_invalid_request(self, orchestrator: Orchestrator) -> None:
        with pytest.raises(InvalidRequestError):
            await orchestrator.aprocess({"description": "no endpoints"})


# ---------------------------------------------------------------------------
# Requirements provider
# ---------------------------------------------------------------------------


class TestRequestFieldsProvider:
    def test_endpoints(self) -> None:
        parsed = RequestFieldsProvider().parse(_request())
        assert [e.role for e in parsed.endpoints] == ["start", "end"]
        assert parsed.endpoints[1].elevation == 3000
        assert parsed.endpoints[0].type == PointType.FLOOR

    def test_constraints_and_preferences(self) -> None:
        request = _request(
            budget=BudgetConstraint(max_cost=5000, priority="strict"),
            preferences=(MaterialPreference(material="aluminum", preference="avoid"),),
            exposure=Exposure.OUTDOOR,
        )
        parsed = RequestFieldsProvider().parse(request)
        types = [c.type for c in parsed.constraints]
        assert types.count("code") == 2
        assert "cost" in types
        assert "material" in types
        assert "environmental" in types
        prefs = {p.aspect: p for p in parsed.preferences}
        assert prefs["material"].preference == "avoid aluminum"
        assert prefs["material"].strength == "must"
        assert prefs["cost"].strength == "must"

    def test_unparsed_sentences(self) -> None:
        request = _request(
            "Connect the mezzanine to the floor. Must follow OSHA. Keep it under 3 m wide."
        )
        parsed = RequestFieldsProvider().parse(request)
        assert parsed.unparsed_parts == ("Connect the mezzanine to the floor.",)
        assert parsed.confidence == pytest.approx(2 / 3)

    def test_empty_description(self) -> None:
        parsed = RequestFieldsProvider().parse(_request(""))
        assert parsed.unparsed_parts == ()
        assert parsed.confidence == 1.0


# ---------------------------------------------------------------------------
# Explainer
# ---------------------------------------------------------------------------


class TestExplainer:
    def test_explain_compliance_pass(self) -> None:
        checks = [
            CodeCheck(code="IBC", section="1", requirement="r", status=CheckStatus.PASS),
            CodeCheck(code="IBC", section="2", requirement="r", status=CheckStatus.PASS),
        ]
        assert DesignExplainer.explain_compliance(checks) == "Design meets all 2 code requirements."

    def test_explain_compliance_fail_and_warning(self) -> None:
        checks = [
            CodeCheck(code="IBC", section="1", requirement="r", status=CheckStatus.FAIL, message="too tall"),
            CodeCheck(code="OSHA", section="2", requirement="r", status=CheckStatus.WARNING, message="check cage"),
        ]
        text = DesignExplainer.explain_compliance(checks)
        assert text.splitlines() == [
            "Design fails 1 of 2 code requirements.",
            "- IBC 1: too tall",
            "1 warning(s) noted:",
            "- check cage",
        ]

    def test_rationale_decisions(self, orchestrator: Orchestrator) -> None:
        result = orchestrator.process(_request())
        aspects = [d.aspect for d in result.rationale.decisions]
        assert aspects[:3] == ["Domain Selection", "Element Type", "Material Selection"]
        assert "Width" in aspects

    def test_explain_optimization_breakdown(self, orchestrator: Orchestrator) -> None:
        result = orchestrator.process(_request())
        text = DesignExplainer.explain_optimization(result.optimization)
        assert text.startswith(result.optimization.summary)
        assert "Ranking breakdown:" in text
        assert f"1. Solution {result.solutions[0].id}" in text
