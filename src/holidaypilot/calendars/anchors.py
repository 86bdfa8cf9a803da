"""
Movable Feast Anchors

Named anchor dates that offset rules can be expressed against.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Callable


def calculate_easter(year: int) -> date:
    """
    Calculate Easter Sunday using the Anonymous Gregorian algorithm.

    This is the standard algorithm for calculating Easter in Western Christianity.
    Years before 1583 use the proleptic Gregorian calendar.
    """
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return date(year, month, day)


def calculate_orthodox_easter(year: int) -> date:
    """
    Calculate Orthodox Easter Sunday (Meeus Julian algorithm).

    The Julian calendar date is converted to the Gregorian calendar.
    """
    a = year % 4
    b = year % 7
    c = year % 19
    d = (19 * c + 15) % 30
    e = (2 * a + 4 * b - d + 34) % 7
    month = (d + e + 114) // 31
    day = ((d + e + 114) % 31) + 1
    julian_to_gregorian = year // 100 - year // 400 - 2
    return date(year, month, day) + timedelta(days=julian_to_gregorian)


NAMED_ANCHORS: dict[str, Callable[[int], date]] = {
    "easter": calculate_easter,
    "orthodox_easter": calculate_orthodox_easter,
}
