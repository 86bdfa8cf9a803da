"""
HolidayPilot Enumerations

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum, IntEnum


class HolidayType(str, Enum):
    """Classification of a computed holiday."""
    OFFICIAL = "official"        # Statutory / public holiday
    OBSERVANCE = "observance"    # Commemorated, not a day off
    SUBSTITUTE = "substitute"    # Added by the substitution policy
    OTHER = "other"


class Weekday(IntEnum):
    """Days of the week, numbered like date.weekday()."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, value: int | str) -> Weekday:
        """Accept an index (0=Monday) or a case-insensitive day name."""
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown weekday: {value!r}") from None
        return cls(value)


class ShiftStrategy(str, Enum):
    """How a substitute date is derived from the original date."""
    NEXT_NON_TRIGGER = "next_non_trigger"  # First following day that is not a trigger
    NEAREST_WEEKDAY = "nearest_weekday"    # Saturday -> Friday, Sunday -> Monday
