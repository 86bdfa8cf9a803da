"""
HolidayPilot Substitution

Adds substitute holidays for observed holidays that fall on trigger days
(typically Sunday, sometimes Saturday).

Substitution is strictly additive: existing records are never altered.
Holidays are processed in date order, so when Christmas and Boxing Day both
need a substitute the earlier holiday claims the first free day:

    Christmas Sat 25 -> Mon 27, Boxing Day Sun 26 -> Tue 28
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import AbstractSet, Optional

from ..models import (
    HolidayCollection,
    HolidayRecord,
    HolidayType,
    ShiftStrategy,
    SubstitutionPolicy,
)

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


def _next_non_trigger(day: date, policy: SubstitutionPolicy) -> date:
    candidate = day + _ONE_DAY
    while policy.is_trigger(candidate.weekday()):
        candidate += _ONE_DAY
    return candidate


def _nearest_non_trigger(day: date, policy: SubstitutionPolicy) -> date:
    """Closest non-trigger day; on equal distance the later day wins."""
    for distance in range(1, 8):
        after = day + timedelta(days=distance)
        if not policy.is_trigger(after.weekday()):
            return after
        before = day - timedelta(days=distance)
        if not policy.is_trigger(before.weekday()):
            return before
    raise ValueError("Substitution policy has no non-trigger weekday")


def substitute_date(
    original: date,
    policy: SubstitutionPolicy,
    occupied: AbstractSet[date] = frozenset(),
) -> date:
    """
    Compute the substitute date for a holiday on a trigger day.

    Args:
        original: Date of the holiday being substituted
        policy: Jurisdiction substitution policy
        occupied: Dates already holding a holiday

    Returns:
        The substitute date

    Raises:
        OverflowError: If the shift leaves the supported date range
    """
    if policy.strategy == ShiftStrategy.NEAREST_WEEKDAY:
        candidate = _nearest_non_trigger(original, policy)
    else:
        candidate = _next_non_trigger(original, policy)

    if policy.avoid_collisions:
        while candidate in occupied or policy.is_trigger(candidate.weekday()):
            candidate += _ONE_DAY
    return candidate


def apply_substitution(
    collection: HolidayCollection,
    policy: Optional[SubstitutionPolicy],
) -> HolidayCollection:
    """
    Return a new collection extended with substitute holidays.

    Only records that are observed, not substitutes themselves, fall on a
    trigger day and have no substitute yet are considered.

    Args:
        collection: Collection to scan (not modified)
        policy: Substitution policy, or None to opt out

    Returns:
        A new, unfrozen collection
    """
    result = collection.copy()
    if policy is None:
        return result

    occupied = set(result.dates())
    for record in collection.all():
        if record.type == HolidayType.SUBSTITUTE or not record.observed:
            continue
        if not policy.is_trigger(record.weekday):
            continue
        if result.substitute_for(record.key) is not None:
            continue

        try:
            candidate: Optional[date] = substitute_date(record.date, policy, occupied)
        except OverflowError:
            # Shifted past date.min / date.max
            candidate = None
        if candidate is None or candidate.year != collection.year:
            logger.debug(
                "Substitute for %s falls outside %d; skipped",
                record.key,
                collection.year,
                extra={"jurisdiction": collection.jurisdiction, "year": collection.year},
            )
            continue

        substitute = HolidayRecord(
            key=policy.substitute_key(record.key),
            year=collection.year,
            date=candidate,
            names=policy.substitute_names(record.names),
            type=HolidayType.SUBSTITUTE,
            substitutes=record.key,
            timezone=record.timezone,
        )
        result.add(substitute)
        occupied.add(candidate)
        logger.debug(
            "Added %s on %s for %s",
            substitute.key,
            candidate.isoformat(),
            record.key,
            extra={"jurisdiction": collection.jurisdiction, "year": collection.year},
        )

    return result
