"""
HolidayPilot Validity Gate

Decides whether a rule exists in a given year, before any date is computed.
Rules outside their window contribute nothing, so pre-historical
configurations never reach the date primitives.
"""
from __future__ import annotations

from typing import Iterable, Iterator

from ..models import RuleDescriptor


def is_applicable(rule: RuleDescriptor, year: int) -> bool:
    """
    Check whether a rule applies to a year.

    valid_from is inclusive, valid_until is exclusive.
    """
    if rule.valid_from is not None and year < rule.valid_from:
        return False
    if rule.valid_until is not None and year >= rule.valid_until:
        return False
    return True


def applicable_rules(rules: Iterable[RuleDescriptor], year: int) -> Iterator[RuleDescriptor]:
    """Rules that apply to year, in declaration order."""
    return (rule for rule in rules if is_applicable(rule, year))
