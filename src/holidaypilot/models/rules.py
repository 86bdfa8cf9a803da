"""
HolidayPilot Rule Models

Declarative descriptions of how a holiday's date is derived for a year.

Date rules form a closed set of variants:
- FixedDateRule: same month/day every year ("July 1")
- NthWeekdayRule: ordinal weekday of a month ("first Monday of August")
- LastWeekdayOnOrBeforeRule: weekday on or before a date ("Monday on or before May 24")
- AnchorOffsetRule: signed offset from an anchor ("Easter - 2 days")

A RuleDescriptor binds a date rule to a holiday key, display names,
a validity window and the substitution flag. Descriptors are immutable
and shared between computations for different years.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from ..calendars.anchors import NAMED_ANCHORS
from ..exceptions import InvalidRuleError
from .enums import HolidayType, Weekday

# Ordinal value meaning "last occurrence in the month"
LAST = -1

VALID_ORDINALS = frozenset({1, 2, 3, 4, 5, LAST})


def _check_month_day(month: int, day: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidRuleError(
            message=f"Month out of range: {month}",
            details={"month": month},
        )
    if not 1 <= day <= 31:
        raise InvalidRuleError(
            message=f"Day out of range: {day}",
            details={"day": day},
        )


# =============================================================================
# Date Rule Variants
# =============================================================================

@dataclass(frozen=True)
class FixedDateRule:
    """
    Same calendar day every year.

    Day validity for the month is checked per year at evaluation time,
    so February 29 is accepted here and fails only in common years.
    """
    month: int
    day: int

    def __post_init__(self) -> None:
        _check_month_day(self.month, self.day)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "fixed", "month": self.month, "day": self.day}


@dataclass(frozen=True)
class NthWeekdayRule:
    """
    The n-th occurrence of a weekday within a month.

    Attributes:
        month: Month (1-12)
        weekday: Day of week
        ordinal: 1-5, or LAST for the final occurrence
    """
    month: int
    weekday: Weekday
    ordinal: int

    def __post_init__(self) -> None:
        _check_month_day(self.month, 1)
        object.__setattr__(self, "weekday", Weekday.parse(self.weekday))
        if self.ordinal not in VALID_ORDINALS:
            raise InvalidRuleError(
                message=f"Ordinal must be 1-5 or last, got {self.ordinal}",
                details={"ordinal": self.ordinal},
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "nth_weekday",
            "month": self.month,
            "weekday": self.weekday.name.lower(),
            "ordinal": "last" if self.ordinal == LAST else self.ordinal,
        }


@dataclass(frozen=True)
class LastWeekdayOnOrBeforeRule:
    """The latest date on or before month/day that falls on weekday."""
    month: int
    day: int
    weekday: Weekday

    def __post_init__(self) -> None:
        _check_month_day(self.month, self.day)
        object.__setattr__(self, "weekday", Weekday.parse(self.weekday))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "last_weekday_on_or_before",
            "month": self.month,
            "day": self.day,
            "weekday": self.weekday.name.lower(),
        }


@dataclass(frozen=True)
class AnchorOffsetRule:
    """
    A signed day offset from an anchor date.

    The anchor is either the name of a movable feast (see
    calendars.anchors.NAMED_ANCHORS) or another date rule.
    """
    anchor: Union[str, "DateRule"]
    offset_days: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.anchor, str):
            if self.anchor not in NAMED_ANCHORS:
                raise InvalidRuleError(
                    message=f"Unknown anchor: {self.anchor!r}",
                    details={"anchor": self.anchor, "available": sorted(NAMED_ANCHORS)},
                )
        elif not isinstance(self.anchor, DATE_RULE_TYPES):
            raise InvalidRuleError(
                message=f"Anchor must be a name or date rule, got {type(self.anchor).__name__}",
            )

    def to_dict(self) -> dict[str, Any]:
        anchor = self.anchor if isinstance(self.anchor, str) else self.anchor.to_dict()
        return {"kind": "anchor_offset", "anchor": anchor, "offset": self.offset_days}


DateRule = Union[FixedDateRule, NthWeekdayRule, LastWeekdayOnOrBeforeRule, AnchorOffsetRule]

DATE_RULE_TYPES = (FixedDateRule, NthWeekdayRule, LastWeekdayOnOrBeforeRule, AnchorOffsetRule)


# =============================================================================
# Rule Descriptor
# =============================================================================

@dataclass(frozen=True)
class RuleDescriptor:
    """
    Declarative definition of one holiday of a jurisdiction.

    Attributes:
        key: Stable identifier (e.g., "victoriaDay")
        names: Locale code -> display name (at least one entry)
        rule: How the date is computed
        valid_from: First year the holiday exists (inclusive), None = always
        valid_until: First year it no longer exists (exclusive), None = never
        observed: Eligible for weekend substitution
        type: Holiday classification (never SUBSTITUTE)
    """
    key: str
    names: Mapping[str, str]
    rule: DateRule
    valid_from: Optional[int] = None
    valid_until: Optional[int] = None
    observed: bool = False
    type: HolidayType = HolidayType.OFFICIAL

    def __post_init__(self) -> None:
        if not self.key:
            raise InvalidRuleError(message="Rule descriptor requires a key")
        if not self.names:
            raise InvalidRuleError(
                message=f"Holiday '{self.key}' requires at least one name",
                details={"key": self.key},
            )
        if not isinstance(self.rule, DATE_RULE_TYPES):
            raise InvalidRuleError(
                message=f"Holiday '{self.key}' has unsupported rule {type(self.rule).__name__}",
                details={"key": self.key},
            )
        object.__setattr__(self, "type", HolidayType(self.type))
        if self.type == HolidayType.SUBSTITUTE:
            raise InvalidRuleError(
                message=f"Holiday '{self.key}' cannot be declared as a substitute",
                details={"key": self.key},
            )
        if (
            self.valid_from is not None
            and self.valid_until is not None
            and self.valid_until <= self.valid_from
        ):
            raise InvalidRuleError(
                message=f"Holiday '{self.key}' has an empty validity window",
                details={"valid_from": self.valid_from, "valid_until": self.valid_until},
            )
        object.__setattr__(self, "names", MappingProxyType(dict(self.names)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "names": dict(self.names),
            "rule": self.rule.to_dict(),
            "valid_from": self.valid_from,
            "valid_until": self.valid_until,
            "observed": self.observed,
            "type": self.type.value,
        }
