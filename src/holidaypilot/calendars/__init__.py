"""
HolidayPilot Calendars

Calendar arithmetic used by holiday rules.

Provides:
- Date rule primitives (fixed date, nth weekday, weekday on or before a date, offsets)
- Movable feast anchors (Western and Orthodox Easter)
"""
from __future__ import annotations

from .anchors import (
    NAMED_ANCHORS,
    calculate_easter,
    calculate_orthodox_easter,
)
from .primitives import (
    fixed_date,
    last_weekday_on_or_before,
    nth_weekday_of_month,
    offset_from,
)

__all__ = [
    # Anchors
    "NAMED_ANCHORS",
    "calculate_easter",
    "calculate_orthodox_easter",
    # Primitives
    "fixed_date",
    "nth_weekday_of_month",
    "last_weekday_on_or_before",
    "offset_from",
]
