"""
HolidayPilot Models

All domain models of the holiday engine:

    from holidaypilot.models import (
        # Enums
        HolidayType, Weekday, ShiftStrategy,
        # Rules
        FixedDateRule, NthWeekdayRule, LastWeekdayOnOrBeforeRule,
        AnchorOffsetRule, RuleDescriptor, LAST,
        # Results
        HolidayRecord, HolidayCollection,
        # Substitution
        SubstitutionPolicy,
    )
"""
from __future__ import annotations

# =============================================================================
# Enums
# =============================================================================
from .enums import (
    HolidayType,
    ShiftStrategy,
    Weekday,
)

# =============================================================================
# Rules
# =============================================================================
from .rules import (
    DATE_RULE_TYPES,
    LAST,
    AnchorOffsetRule,
    DateRule,
    FixedDateRule,
    LastWeekdayOnOrBeforeRule,
    NthWeekdayRule,
    RuleDescriptor,
)

# =============================================================================
# Records and Collections
# =============================================================================
from .holiday import HolidayRecord
from .collection import HolidayCollection

# =============================================================================
# Substitution
# =============================================================================
from .substitution import (
    DEFAULT_NAME_TEMPLATES,
    SubstitutionPolicy,
    weekday_set,
)

__all__ = [
    # Enums
    "HolidayType",
    "ShiftStrategy",
    "Weekday",
    # Rules
    "DATE_RULE_TYPES",
    "LAST",
    "AnchorOffsetRule",
    "DateRule",
    "FixedDateRule",
    "LastWeekdayOnOrBeforeRule",
    "NthWeekdayRule",
    "RuleDescriptor",
    # Records and Collections
    "HolidayRecord",
    "HolidayCollection",
    # Substitution
    "DEFAULT_NAME_TEMPLATES",
    "SubstitutionPolicy",
    "weekday_set",
]
