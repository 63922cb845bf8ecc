"""Code compliance — check candidates against building and safety codes."""

from pathwright.compliance.checker import ComplianceChecker, check_parameters
from pathwright.compliance.rules import CodeRule, evaluate_rule
from pathwright.compliance.seed_data import SEED_RULES

__all__ = [
    "CodeRule",
    "ComplianceChecker",
    "SEED_RULES",
    "check_parameters",
    "evaluate_rule",
]
