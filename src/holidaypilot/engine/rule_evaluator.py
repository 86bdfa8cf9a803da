"""
HolidayPilot Rule Evaluator

Single dispatch point turning a date rule into a concrete date.
"""
from __future__ import annotations

from datetime import date
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..calendars import (
    NAMED_ANCHORS,
    fixed_date,
    last_weekday_on_or_before,
    nth_weekday_of_month,
    offset_from,
)
from ..exceptions import InvalidRuleError, InvalidTimezoneError, NoSuchDateError
from ..models import (
    AnchorOffsetRule,
    DateRule,
    FixedDateRule,
    LastWeekdayOnOrBeforeRule,
    NthWeekdayRule,
)


@lru_cache(maxsize=128)
def load_zone(name: str) -> ZoneInfo:
    """
    Load an IANA time zone.

    Raises:
        InvalidTimezoneError: If the zone is unknown
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidTimezoneError(
            message=f"Unknown time zone: {name}",
            details={"timezone": name, "error": str(e)},
        ) from e


def evaluate_rule(rule: DateRule, year: int, timezone: Optional[str] = None) -> date:
    """
    Compute the date of a rule for a year.

    Dates are civil dates in the jurisdiction's zone; the zone is validated
    but the arithmetic does not depend on it.

    Args:
        rule: Date rule variant
        year: Target year
        timezone: IANA zone of the jurisdiction

    Returns:
        The computed date

    Raises:
        NoSuchDateError: If the rule has no date in the year
        InvalidTimezoneError: If the zone is unknown
    """
    if timezone is not None:
        load_zone(timezone)

    if isinstance(rule, FixedDateRule):
        return fixed_date(year, rule.month, rule.day)
    if isinstance(rule, NthWeekdayRule):
        return nth_weekday_of_month(year, rule.month, int(rule.weekday), rule.ordinal)
    if isinstance(rule, LastWeekdayOnOrBeforeRule):
        return last_weekday_on_or_before(year, rule.month, rule.day, int(rule.weekday))
    if isinstance(rule, AnchorOffsetRule):
        return offset_from(_anchor_date(rule, year, timezone), rule.offset_days)
    raise InvalidRuleError(
        message=f"Unsupported date rule: {type(rule).__name__}",
    )


def _anchor_date(rule: AnchorOffsetRule, year: int, timezone: Optional[str]) -> date:
    if isinstance(rule.anchor, str):
        try:
            return NAMED_ANCHORS[rule.anchor](year)
        except ValueError as e:
            raise NoSuchDateError(
                message=f"Anchor '{rule.anchor}' has no date in {year}",
                details={"anchor": rule.anchor, "year": year},
            ) from e
    return evaluate_rule(rule.anchor, year, timezone)
