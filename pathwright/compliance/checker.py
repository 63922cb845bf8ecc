"""ComplianceChecker — evaluate a candidate against the requested codes.

Usage::

    from pathwright.compliance import ComplianceChecker

    checker = ComplianceChecker()
    status, fixes = checker.check(domain, "stairs", params, ["IBC", "OSHA"])
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pathwright.compliance.rules import CodeRule, evaluate_rule
from pathwright.compliance.seed_data import SEED_RULES
from pathwright.models.classification import KnowledgeDomain
from pathwright.models.parameters import ElementParameters
from pathwright.models.solution import CheckStatus, CodeCheck, ComplianceStatus

logger = logging.getLogger(__name__)


def check_parameters(
    rules: Iterable[CodeRule],
    params: ElementParameters,
) -> tuple[list[CodeCheck], list[str]]:
    """Evaluate *rules* against a payload.

    Returns
    -------
    tuple[list[CodeCheck], list[str]]
        A tuple of (checks, suggested_fixes).
    """
    checks: list[CodeCheck] = []
    fixes: list[str] = []

    for rule in rules:
        check = evaluate_rule(rule, params)
        if check is None:
            continue
        checks.append(check)
        if check.status == CheckStatus.FAIL:
            fixes.append(_suggest_fix(rule))

    return checks, fixes


def _suggest_fix(rule: CodeRule) -> str:
    """Generate an actionable suggestion for a failed rule."""
    name = rule.parameter.replace("_", " ")
    if rule.check_type == "min_value":
        return f"Increase {name} to at least {rule.limit:g} per {rule.code} §{rule.section}."
    if rule.check_type == "max_value":
        return f"Reduce {name} to at most {rule.limit:g} per {rule.code} §{rule.section}."
    if rule.check_type == "boolean":
        return f"Ensure {name} = {rule.limit} per {rule.code} §{rule.section}."
    return f"Review {rule.code} §{rule.section}: {rule.requirement}."


class ComplianceChecker:
    """Run code rules for the codes a project lists.

    Parameters
    ----------
    rules:
        Rule table.  Defaults to the embedded seed rules.  Code/element
        combinations without a rule produce no checks.
    """

    def __init__(self, rules: Iterable[CodeRule] | None = None) -> None:
        self.rules: tuple[CodeRule, ...] = tuple(SEED_RULES if rules is None else rules)

    def rules_for(
        self,
        code: str,
        domain: KnowledgeDomain,
        element_type: str,
    ) -> list[CodeRule]:
        return [r for r in self.rules if r.applies_to(code, domain, element_type)]

    def check(
        self,
        domain: KnowledgeDomain,
        element_type: str,
        params: ElementParameters,
        codes: Iterable[str],
    ) -> tuple[ComplianceStatus, list[str]]:
        """Check *params* against every rule of every code in *codes*.

        Returns the compliance status and suggested fixes for failures.
        """
        checks: list[CodeCheck] = []
        fixes: list[str] = []

        for code in codes:
            code_checks, code_fixes = check_parameters(
                self.rules_for(code, domain, element_type), params
            )
            checks.extend(code_checks)
            fixes.extend(code_fixes)

        status = ComplianceStatus(checks=tuple(checks))
        if not status.compliant:
            logger.debug(
                "%s/%s fails %d check(s)", domain.value, element_type, len(status.failures)
            )
        return status, fixes
