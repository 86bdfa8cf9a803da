"""
Date Rule Primitives

Pure functions that compute a concrete date from a year and a symbolic rule.
Every function raises NoSuchDateError when the rule has no date in the year.
"""
from __future__ import annotations

import calendar
from datetime import date, timedelta

from ..exceptions import NoSuchDateError


def fixed_date(year: int, month: int, day: int) -> date:
    """
    Resolve a fixed-date holiday.

    Raises:
        NoSuchDateError: If the day does not exist in that month/year (e.g., Feb 30)
    """
    try:
        return date(year, month, day)
    except ValueError as e:
        raise NoSuchDateError(
            message=f"{year:04d}-{month:02d}-{day:02d} is not a valid date",
            details={"year": year, "month": month, "day": day, "error": str(e)},
        ) from e


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date:
    """
    Get the nth occurrence of a weekday in a month.

    Args:
        year: Year
        month: Month (1-12)
        weekday: Day of week (0=Monday, 6=Sunday)
        n: Which occurrence (1=first ... 5=fifth, -1=last)

    Returns:
        The date of the nth weekday

    Raises:
        NoSuchDateError: If the month has no nth occurrence
    """
    days_in_month = calendar.monthrange(year, month)[1]

    if n == -1:
        last_day = date(year, month, days_in_month)
        return last_day - timedelta(days=(last_day.weekday() - weekday) % 7)

    first_day = date(year, month, 1)
    days_until_weekday = (weekday - first_day.weekday()) % 7
    day = 1 + days_until_weekday + 7 * (n - 1)
    if day > days_in_month:
        raise NoSuchDateError(
            message=f"{calendar.month_name[month]} {year} has no occurrence #{n} "
                    f"of {calendar.day_name[weekday]}",
            details={"year": year, "month": month, "weekday": weekday, "ordinal": n},
        )
    return date(year, month, day)


def last_weekday_on_or_before(year: int, month: int, day: int, weekday: int) -> date:
    """
    Get the latest date on or before year/month/day falling on weekday.

    Used for Victoria Day (Monday on or before May 24).

    Raises:
        NoSuchDateError: If the result precedes the supported date range
    """
    target = fixed_date(year, month, day)
    back = (target.weekday() - weekday) % 7
    try:
        return target - timedelta(days=back)
    except OverflowError as e:
        raise NoSuchDateError(
            message=f"No {calendar.day_name[weekday]} on or before {target.isoformat()} "
                    f"within the supported range",
            details={"year": year, "month": month, "day": day, "weekday": weekday},
        ) from e


def offset_from(anchor: date, days: int) -> date:
    """
    Shift an anchor date by a signed number of days.

    Raises:
        NoSuchDateError: If the result leaves the supported date range
    """
    try:
        return anchor + timedelta(days=days)
    except OverflowError as e:
        raise NoSuchDateError(
            message=f"{anchor.isoformat()} {days:+d} days is outside the supported range",
            details={"anchor": anchor.isoformat(), "offset": days},
        ) from e
