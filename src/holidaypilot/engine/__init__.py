"""
HolidayPilot Engine

Services turning rule descriptors into holiday collections.

Services:
- evaluate_rule: Date rule dispatch
- is_applicable: Validity gate
- apply_substitution: Weekend substitution policy
- JurisdictionProvider: Per-jurisdiction computation with parent composition
- JurisdictionRegistry: Provider lookup by code
"""
from __future__ import annotations

from .provider import JurisdictionProvider
from .registry import JurisdictionRegistry
from .rule_evaluator import evaluate_rule, load_zone
from .substitution import apply_substitution, substitute_date
from .validity_gate import applicable_rules, is_applicable

__all__ = [
    "JurisdictionProvider",
    "JurisdictionRegistry",
    "evaluate_rule",
    "load_zone",
    "apply_substitution",
    "substitute_date",
    "applicable_rules",
    "is_applicable",
]
