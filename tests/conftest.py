"""
Pytest configuration and fixtures for HolidayPilot tests.

Provides helper factories for rule descriptors, records and providers,
plus fixtures for a small Canada-shaped jurisdiction tree.
"""
import pytest
from datetime import date

from holidaypilot.models import (
    FixedDateRule,
    HolidayCollection,
    HolidayRecord,
    HolidayType,
    NthWeekdayRule,
    RuleDescriptor,
    SubstitutionPolicy,
    Weekday,
)
from holidaypilot.engine import JurisdictionProvider, JurisdictionRegistry
from holidaypilot.packs import load_default_catalog


# =============================================================================
# Factory Helpers
# =============================================================================

def make_rule(
    key: str,
    rule=None,
    names: dict = None,
    valid_from: int = None,
    valid_until: int = None,
    observed: bool = False,
    type: HolidayType = HolidayType.OFFICIAL,
) -> RuleDescriptor:
    """Create a RuleDescriptor; defaults to January 1."""
    return RuleDescriptor(
        key=key,
        names=names or {"en": key},
        rule=rule or FixedDateRule(month=1, day=1),
        valid_from=valid_from,
        valid_until=valid_until,
        observed=observed,
        type=type,
    )


def make_record(
    key: str,
    day: date,
    names: dict = None,
    type: HolidayType = HolidayType.OFFICIAL,
    observed: bool = False,
    substitutes: str = None,
) -> HolidayRecord:
    """Create a HolidayRecord for the date's year."""
    return HolidayRecord(
        key=key,
        year=day.year,
        date=day,
        names=names or {"en": key},
        type=type,
        observed=observed,
        substitutes=substitutes,
    )


def make_collection(year: int, *records: HolidayRecord, jurisdiction: str = "XX") -> HolidayCollection:
    """Create a collection holding records."""
    return HolidayCollection(year=year, jurisdiction=jurisdiction, records=list(records))


def make_provider(
    id: str = "XX",
    rules: list = None,
    parent: JurisdictionProvider = None,
    substitution: SubstitutionPolicy = None,
    timezone: str = "UTC",
    name: str = None,
) -> JurisdictionProvider:
    """Create a JurisdictionProvider."""
    return JurisdictionProvider(
        id=id,
        name=name or id,
        timezone=timezone,
        rules=rules or [],
        parent=parent,
        substitution=substitution,
    )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def weekend_policy() -> SubstitutionPolicy:
    """Saturday and Sunday trigger a substitute on the next working day."""
    return SubstitutionPolicy.on(Weekday.SATURDAY, Weekday.SUNDAY)


@pytest.fixture
def national(weekend_policy) -> JurisdictionProvider:
    """A country with Canada Day, Christmas and Boxing Day."""
    return make_provider(
        id="CA",
        name="Canada",
        timezone="America/Toronto",
        substitution=weekend_policy,
        rules=[
            make_rule(
                "canadaDay",
                FixedDateRule(month=7, day=1),
                names={"en": "Canada Day", "fr": "Fête du Canada"},
                valid_from=1879,
                observed=True,
            ),
            make_rule(
                "civicHoliday",
                NthWeekdayRule(month=8, weekday=Weekday.MONDAY, ordinal=1),
                names={"en": "Civic Holiday"},
                type=HolidayType.OBSERVANCE,
            ),
            make_rule(
                "christmasDay",
                FixedDateRule(month=12, day=25),
                names={"en": "Christmas Day", "fr": "Noël"},
                observed=True,
            ),
            make_rule(
                "boxingDay",
                FixedDateRule(month=12, day=26),
                names={"en": "Boxing Day"},
                observed=True,
            ),
        ],
    )


@pytest.fixture
def territory(national) -> JurisdictionProvider:
    """A subdivision overriding civicHoliday and adding a 1996 holiday."""
    return make_provider(
        id="CA-NT",
        name="Northwest Territories",
        timezone="America/Yellowknife",
        parent=national,
        rules=[
            make_rule(
                "civicHoliday",
                NthWeekdayRule(month=8, weekday=Weekday.MONDAY, ordinal=1),
                names={"en": "Civic Holiday", "fr": "Premier lundi d'août"},
            ),
            make_rule(
                "nationalIndigenousPeoplesDay",
                FixedDateRule(month=6, day=21),
                names={"en": "National Indigenous Peoples Day"},
                valid_from=1996,
            ),
        ],
    )


@pytest.fixture
def registry(national, territory) -> JurisdictionRegistry:
    registry = JurisdictionRegistry()
    registry.register(national)
    registry.register(territory)
    return registry


@pytest.fixture(scope="session")
def default_catalog() -> JurisdictionRegistry:
    """The bundled Canadian catalog."""
    return load_default_catalog()
