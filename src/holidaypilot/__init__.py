"""
HolidayPilot: Jurisdiction Holiday Engine

Computes the public holidays of a country or subdivision for a year from
declarative rule descriptors, inheriting a parent jurisdiction's holidays
and adding substitute days for holidays that fall on a weekend.

Usage:
    from holidaypilot import load_default_catalog

    registry = load_default_catalog()
    holidays = registry.compute("CA-NS", 2021)
    for holiday in holidays:
        print(holiday.iso_date, holiday.get_name("fr_CA"))
"""
from __future__ import annotations

__version__ = "0.1.0"

from .canon import canonical_json, content_hash
from .config import configure_logging
from .engine import (
    JurisdictionProvider,
    JurisdictionRegistry,
    apply_substitution,
    evaluate_rule,
    is_applicable,
)
from .exceptions import (
    CatalogLoadError,
    CatalogValidationError,
    CatalogVersionMismatch,
    CollectionFrozenError,
    DuplicateHolidayError,
    HolidayPilotError,
    InvalidRuleError,
    InvalidTimezoneError,
    InvalidYearError,
    JurisdictionNotFoundError,
    NoSuchDateError,
    UnknownLocaleError,
)
from .locales import DEFAULT_RESOLVER, LocaleResolver
from .models import (
    LAST,
    AnchorOffsetRule,
    FixedDateRule,
    HolidayCollection,
    HolidayRecord,
    HolidayType,
    LastWeekdayOnOrBeforeRule,
    NthWeekdayRule,
    RuleDescriptor,
    ShiftStrategy,
    SubstitutionPolicy,
    Weekday,
)
from .packs import (
    CatalogLoader,
    load_catalog,
    load_catalog_from_dicts,
    load_default_catalog,
)

__all__ = [
    "__version__",
    # Models
    "HolidayType",
    "Weekday",
    "ShiftStrategy",
    "FixedDateRule",
    "NthWeekdayRule",
    "LastWeekdayOnOrBeforeRule",
    "AnchorOffsetRule",
    "RuleDescriptor",
    "LAST",
    "HolidayRecord",
    "HolidayCollection",
    "SubstitutionPolicy",
    # Engine
    "JurisdictionProvider",
    "JurisdictionRegistry",
    "evaluate_rule",
    "is_applicable",
    "apply_substitution",
    # Locales
    "LocaleResolver",
    "DEFAULT_RESOLVER",
    # Catalog
    "CatalogLoader",
    "load_catalog",
    "load_catalog_from_dicts",
    "load_default_catalog",
    # Canonical output
    "canonical_json",
    "content_hash",
    "configure_logging",
    # Exceptions
    "HolidayPilotError",
    "InvalidYearError",
    "NoSuchDateError",
    "InvalidRuleError",
    "InvalidTimezoneError",
    "DuplicateHolidayError",
    "CollectionFrozenError",
    "UnknownLocaleError",
    "JurisdictionNotFoundError",
    "CatalogLoadError",
    "CatalogValidationError",
    "CatalogVersionMismatch",
]
