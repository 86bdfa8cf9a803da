"""
HolidayPilot Jurisdiction Provider

Computes the holidays of one jurisdiction (country or subdivision) for a year.

A provider may reference a parent provider. Computing a subdivision first
computes its parent for the same year, then layers the subdivision's own
rules on top; a local rule whose key matches an inherited holiday replaces it.

Usage:
    canada = JurisdictionProvider(
        id="CA",
        name="Canada",
        timezone="America/Toronto",
        rules=[...],
        substitution=SubstitutionPolicy.on("saturday", "sunday"),
    )
    nova_scotia = JurisdictionProvider(id="CA-NS", ..., parent=canada)

    holidays = nova_scotia.compute(2021)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from ..config import MAX_YEAR, MIN_YEAR
from ..exceptions import DuplicateHolidayError, InvalidYearError, NoSuchDateError
from ..models import (
    HolidayCollection,
    HolidayRecord,
    RuleDescriptor,
    SubstitutionPolicy,
    Weekday,
    weekday_set,
)
from .rule_evaluator import evaluate_rule, load_zone
from .substitution import apply_substitution
from .validity_gate import applicable_rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JurisdictionProvider:
    """
    Holiday computation for one jurisdiction.

    Attributes:
        id: Jurisdiction code (ISO 3166-1 / 3166-2, e.g., "CA", "CA-NS")
        name: Human-readable name
        timezone: IANA zone the holiday dates are anchored to
        rules: Local rule descriptors, in declaration order
        parent: Provider whose holidays are inherited
        substitution: Substitution policy, None to opt out
        weekend_days: Non-working weekdays of the jurisdiction
    """
    id: str
    name: str
    timezone: str
    rules: Sequence[RuleDescriptor] = ()
    parent: Optional[JurisdictionProvider] = None
    substitution: Optional[SubstitutionPolicy] = None
    weekend_days: frozenset[Weekday] = field(
        default_factory=lambda: frozenset({Weekday.SATURDAY, Weekday.SUNDAY})
    )

    def __post_init__(self) -> None:
        load_zone(self.timezone)
        object.__setattr__(self, "rules", tuple(self.rules))
        object.__setattr__(self, "weekend_days", weekday_set(self.weekend_days))

        seen: set[str] = set()
        for rule in self.rules:
            if rule.key in seen:
                raise DuplicateHolidayError(
                    message=f"Holiday '{rule.key}' is declared twice",
                    details={"key": rule.key},
                    jurisdiction=self.id,
                )
            seen.add(rule.key)

        ancestor = self.parent
        while ancestor is not None:
            if ancestor.id == self.id:
                raise ValueError(f"Jurisdiction '{self.id}' cannot be its own ancestor")
            ancestor = ancestor.parent

    # -------------------------------------------------------------------------
    # Computation
    # -------------------------------------------------------------------------

    def compute(self, year: int) -> HolidayCollection:
        """
        Compute the holidays of this jurisdiction for a year.

        Args:
            year: Calendar year

        Returns:
            Frozen HolidayCollection

        Raises:
            InvalidYearError: If year is outside the supported range
            NoSuchDateError: If a rule has no date in the year
        """
        self._check_year(year)

        if self.parent is not None:
            collection = self.parent.compute(year).copy()
            collection.jurisdiction = self.id
        else:
            collection = HolidayCollection(year=year, jurisdiction=self.id)

        for rule in applicable_rules(self.rules, year):
            record = self._evaluate(rule, year)
            if record is None:
                continue
            replaced = collection.insert(record)
            if replaced is not None:
                self._drop_stale_substitute(collection, rule.key)

        collection = apply_substitution(collection, self.substitution)
        logger.debug(
            "Computed %d holidays",
            len(collection),
            extra={"jurisdiction": self.id, "year": year},
        )
        return collection.freeze()

    def _check_year(self, year: int) -> None:
        if not isinstance(year, int) or isinstance(year, bool) or not MIN_YEAR <= year <= MAX_YEAR:
            raise InvalidYearError(
                message=f"Year must be between {MIN_YEAR} and {MAX_YEAR}, got {year!r}",
                details={"year": year, "min_year": MIN_YEAR, "max_year": MAX_YEAR},
                jurisdiction=self.id,
            )

    def _evaluate(self, rule: RuleDescriptor, year: int) -> Optional[HolidayRecord]:
        try:
            day = evaluate_rule(rule.rule, year, self.timezone)
        except NoSuchDateError as e:
            e.jurisdiction = self.id
            e.details.setdefault("key", rule.key)
            raise

        if day.year != year:
            logger.debug(
                "%s falls on %s, outside %d; skipped",
                rule.key,
                day.isoformat(),
                year,
                extra={"jurisdiction": self.id, "year": year, "holiday_key": rule.key},
            )
            return None

        return HolidayRecord(
            key=rule.key,
            year=year,
            date=day,
            names=rule.names,
            type=rule.type,
            observed=rule.observed,
            timezone=self.timezone,
        )

    @staticmethod
    def _drop_stale_substitute(collection: HolidayCollection, key: str) -> None:
        """
        An overridden holiday invalidates the substitute derived from it.

        Other inherited substitutes keep their dates even when they were
        pushed past the day freed here.
        """
        stale = collection.substitute_for(key)
        if stale is not None:
            collection.remove(stale.key)

    # -------------------------------------------------------------------------
    # Convenience
    # -------------------------------------------------------------------------

    def next_year(self, year: int) -> HolidayCollection:
        return self.compute(year + 1)

    def previous_year(self, year: int) -> HolidayCollection:
        return self.compute(year - 1)

    def is_weekend_day(self, day: date) -> bool:
        return day.weekday() in self.weekend_days
