"""CodeRule model and evaluation logic."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pathwright.models.classification import KnowledgeDomain
from pathwright.models.parameters import ElementParameters
from pathwright.models.solution import CheckStatus, CodeCheck


class CodeRule(BaseModel):
    """A single building/safety-code rule."""

    model_config = ConfigDict(frozen=True)

    code: str
    """Code identifier: 'IBC', 'OSHA', 'ADA'."""

    section: str
    """Section reference: '1011.5.2', '405.2'."""

    requirement: str
    """Human-readable requirement."""

    domain: KnowledgeDomain
    element_types: tuple[str, ...] = Field(default_factory=tuple)
    """Element types the rule applies to; empty means every type in the domain."""

    parameter: str
    """Payload attribute the rule reads, e.g. 'riser_height'."""

    check_type: str
    """'max_value', 'min_value', 'boolean' or 'advisory'."""

    limit: float | bool | None = None
    unit: str = "mm"
    skip_if_missing: bool = False
    """Produce no check at all when the candidate lacks the parameter."""

    def applies_to(self, code: str, domain: KnowledgeDomain, element_type: str) -> bool:
        if code != self.code or domain != self.domain:
            return False
        return not self.element_types or element_type in self.element_types


def _coerce_numeric(value: Any) -> float | None:
    """Try to coerce a value to float."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def _fmt(value: float, unit: str) -> str:
    if unit == "ratio":
        return f"1:{value:g}"
    return f"{value:.0f}{unit}"


def evaluate_rule(rule: CodeRule, params: ElementParameters) -> CodeCheck | None:
    """Evaluate a single rule against a parameter payload.

    Returns *None* when the rule is skipped because the parameter is
    absent and the rule is marked ``skip_if_missing``.
    """
    actual = params.get(rule.parameter)
    if actual is None and rule.skip_if_missing:
        return None

    base: dict[str, Any] = {
        "code": rule.code,
        "section": rule.section,
        "requirement": rule.requirement,
    }

    if rule.check_type == "boolean":
        expected = True if rule.limit is None else bool(rule.limit)
        if actual is not None and bool(actual) == expected:
            return CodeCheck(**base, status=CheckStatus.PASS,
                             message=f"{rule.parameter} = {actual} (expected {expected}).")
        return CodeCheck(**base, status=CheckStatus.FAIL,
                         message=f"{rule.parameter} = {actual} (expected {expected}).")

    if rule.check_type == "advisory":
        # Truthy parameter means the situation needs attention, not a violation
        if actual:
            return CodeCheck(**base, status=CheckStatus.WARNING,
                             message=f"{rule.requirement}: verify {rule.parameter.replace('_', ' ')}.")
        return CodeCheck(**base, status=CheckStatus.NOT_APPLICABLE,
                         message=f"{rule.parameter} not triggered.")

    actual_num = _coerce_numeric(actual)
    limit = _coerce_numeric(rule.limit)

    if actual_num is None or limit is None:
        return CodeCheck(**base, status=CheckStatus.NOT_APPLICABLE,
                         message=f"{rule.parameter} not set; cannot verify.", limit=limit)

    if rule.check_type == "max_value":
        ok = actual_num <= limit
        label = rule.parameter.replace("_", " ").capitalize()
        message = (
            f"{label} {_fmt(actual_num, rule.unit)} is within limit"
            if ok
            else f"{label} {_fmt(actual_num, rule.unit)} exceeds maximum of {_fmt(limit, rule.unit)}"
        )
    elif rule.check_type == "min_value":
        ok = actual_num >= limit
        label = rule.parameter.replace("_", " ").capitalize()
        message = (
            f"{label} {_fmt(actual_num, rule.unit)} meets minimum"
            if ok
            else f"{label} {_fmt(actual_num, rule.unit)} below minimum of {_fmt(limit, rule.unit)}"
        )
    else:
        return CodeCheck(**base, status=CheckStatus.NOT_APPLICABLE,
                         message=f"Unknown check_type: {rule.check_type}")

    return CodeCheck(
        **base,
        status=CheckStatus.PASS if ok else CheckStatus.FAIL,
        message=message,
        value=actual_num,
        limit=limit,
    )
