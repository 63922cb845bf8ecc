"""Embedded code rules for the access domain.

Limits are the metric equivalents used by the cited sections
(178 mm = 7 in, 279 mm = 11 in, 1067 mm = 42 in).
"""

from __future__ import annotations

from pathwright.compliance.rules import CodeRule
from pathwright.models.classification import KnowledgeDomain

SEED_RULES: tuple[CodeRule, ...] = (
    CodeRule(
        code="IBC",
        section="1011.5.2",
        requirement="Maximum riser height 178mm",
        domain=KnowledgeDomain.ACCESS,
        element_types=("stairs",),
        parameter="riser_height",
        check_type="max_value",
        limit=178,
    ),
    CodeRule(
        code="IBC",
        section="1011.5.2",
        requirement="Minimum tread depth 279mm",
        domain=KnowledgeDomain.ACCESS,
        element_types=("stairs",),
        parameter="tread_depth",
        check_type="min_value",
        limit=279,
    ),
    CodeRule(
        code="OSHA",
        section="1910.23",
        requirement="Guardrail height 1067mm minimum",
        domain=KnowledgeDomain.ACCESS,
        parameter="handrail_height",
        check_type="min_value",
        limit=1067,
        skip_if_missing=True,
    ),
    CodeRule(
        code="OSHA",
        section="1910.28(b)(9)",
        requirement="Fixed ladders over 7.3m need a cage or personal fall arrest",
        domain=KnowledgeDomain.ACCESS,
        element_types=("ladder",),
        parameter="cage_required",
        check_type="advisory",
    ),
    CodeRule(
        code="ADA",
        section="405.2",
        requirement="Maximum slope 1:12",
        domain=KnowledgeDomain.ACCESS,
        element_types=("ramp",),
        parameter="slope",
        check_type="min_value",
        limit=12,
        unit="ratio",
    ),
    CodeRule(
        code="ADA",
        section="405.8",
        requirement="Ramp runs shall have handrails",
        domain=KnowledgeDomain.ACCESS,
        element_types=("ramp",),
        parameter="handrail_required",
        check_type="boolean",
        limit=True,
    ),
)
