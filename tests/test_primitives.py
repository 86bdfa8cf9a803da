"""
Calendar Primitive Tests

Tests for date rule primitives, movable feast anchors and rule evaluation.
"""
from __future__ import annotations

from datetime import date

import pytest

from holidaypilot.calendars import (
    calculate_easter,
    calculate_orthodox_easter,
    fixed_date,
    last_weekday_on_or_before,
    nth_weekday_of_month,
    offset_from,
)
from holidaypilot.engine import evaluate_rule, load_zone
from holidaypilot.exceptions import InvalidRuleError, InvalidTimezoneError, NoSuchDateError
from holidaypilot.models import (
    LAST,
    AnchorOffsetRule,
    FixedDateRule,
    LastWeekdayOnOrBeforeRule,
    NthWeekdayRule,
    Weekday,
)


# =============================================================================
# Primitive Tests
# =============================================================================

class TestFixedDate:
    """Tests for fixed_date."""

    def test_valid_date(self) -> None:
        assert fixed_date(2021, 7, 1) == date(2021, 7, 1)

    def test_leap_day(self) -> None:
        assert fixed_date(2024, 2, 29) == date(2024, 2, 29)

    def test_leap_day_in_common_year_raises(self) -> None:
        with pytest.raises(NoSuchDateError) as exc_info:
            fixed_date(2021, 2, 29)
        assert exc_info.value.code == "HP_NO_SUCH_DATE"

    def test_february_30_raises(self) -> None:
        with pytest.raises(NoSuchDateError):
            fixed_date(2024, 2, 30)


class TestNthWeekdayOfMonth:
    """Tests for nth_weekday_of_month."""

    def test_first_monday_of_august(self) -> None:
        # August 1, 2021 is a Sunday
        assert nth_weekday_of_month(2021, 8, Weekday.MONDAY, 1) == date(2021, 8, 2)

    def test_first_weekday_on_the_first(self) -> None:
        # February 1, 2021 is a Monday
        assert nth_weekday_of_month(2021, 2, Weekday.MONDAY, 1) == date(2021, 2, 1)

    def test_third_monday_of_february(self) -> None:
        assert nth_weekday_of_month(2015, 2, Weekday.MONDAY, 3) == date(2015, 2, 16)

    def test_second_monday_of_october(self) -> None:
        assert nth_weekday_of_month(2021, 10, Weekday.MONDAY, 2) == date(2021, 10, 11)

    def test_last_occurrence(self) -> None:
        assert nth_weekday_of_month(2021, 2, Weekday.MONDAY, LAST) == date(2021, 2, 22)
        assert nth_weekday_of_month(2021, 5, Weekday.MONDAY, LAST) == date(2021, 5, 31)

    def test_missing_fifth_occurrence_raises(self) -> None:
        with pytest.raises(NoSuchDateError, match="no occurrence #5"):
            nth_weekday_of_month(2021, 2, Weekday.MONDAY, 5)

    def test_existing_fifth_occurrence(self) -> None:
        assert nth_weekday_of_month(2021, 5, Weekday.MONDAY, 5) == date(2021, 5, 31)


class TestLastWeekdayOnOrBefore:
    """Tests for last_weekday_on_or_before."""

    def test_monday_before_may_25(self) -> None:
        # May 25, 2021 is a Tuesday
        assert last_weekday_on_or_before(2021, 5, 25, Weekday.MONDAY) == date(2021, 5, 24)

    def test_reference_day_matches_weekday(self) -> None:
        # May 24, 2021 is itself a Monday
        assert last_weekday_on_or_before(2021, 5, 24, Weekday.MONDAY) == date(2021, 5, 24)

    def test_reference_day_on_sunday(self) -> None:
        # May 24, 2020 is a Sunday
        assert last_weekday_on_or_before(2020, 5, 24, Weekday.MONDAY) == date(2020, 5, 18)

    def test_invalid_reference_raises(self) -> None:
        with pytest.raises(NoSuchDateError):
            last_weekday_on_or_before(2021, 2, 30, Weekday.MONDAY)

    def test_before_first_supported_date_raises(self) -> None:
        # January 1, 0001 is a Monday; the previous Sunday is not representable
        with pytest.raises(NoSuchDateError) as exc_info:
            last_weekday_on_or_before(1, 1, 1, Weekday.SUNDAY)
        assert exc_info.value.details["year"] == 1
        assert last_weekday_on_or_before(1, 1, 1, Weekday.MONDAY) == date(1, 1, 1)


class TestOffsetFrom:
    """Tests for offset_from."""

    def test_negative_offset(self) -> None:
        assert offset_from(date(2021, 4, 4), -2) == date(2021, 4, 2)

    def test_offset_crosses_month(self) -> None:
        assert offset_from(date(2021, 4, 30), 1) == date(2021, 5, 1)

    def test_overflow_raises(self) -> None:
        with pytest.raises(NoSuchDateError):
            offset_from(date(9999, 12, 31), 1)


class TestEaster:
    """Tests for Western and Orthodox Easter."""

    @pytest.mark.parametrize("year,expected", [
        (2000, date(2000, 4, 23)),
        (2019, date(2019, 4, 21)),
        (2021, date(2021, 4, 4)),
        (2024, date(2024, 3, 31)),
        (2025, date(2025, 4, 20)),
    ])
    def test_western_easter(self, year: int, expected: date) -> None:
        assert calculate_easter(year) == expected

    @pytest.mark.parametrize("year,expected", [
        (2021, date(2021, 5, 2)),
        (2024, date(2024, 5, 5)),
        (2025, date(2025, 4, 20)),
    ])
    def test_orthodox_easter(self, year: int, expected: date) -> None:
        assert calculate_orthodox_easter(year) == expected

    def test_easter_is_sunday(self) -> None:
        for year in range(1900, 2100):
            assert calculate_easter(year).weekday() == Weekday.SUNDAY


# =============================================================================
# Rule Evaluation Tests
# =============================================================================

class TestEvaluateRule:
    """Tests for evaluate_rule dispatch."""

    def test_fixed(self) -> None:
        assert evaluate_rule(FixedDateRule(month=11, day=11), 2021) == date(2021, 11, 11)

    def test_nth_weekday(self) -> None:
        rule = NthWeekdayRule(month=9, weekday=Weekday.MONDAY, ordinal=1)
        assert evaluate_rule(rule, 2021) == date(2021, 9, 6)

    def test_last_weekday_on_or_before(self) -> None:
        rule = LastWeekdayOnOrBeforeRule(month=5, day=24, weekday=Weekday.MONDAY)
        assert evaluate_rule(rule, 2021) == date(2021, 5, 24)

    def test_good_friday(self) -> None:
        rule = AnchorOffsetRule(anchor="easter", offset_days=-2)
        assert evaluate_rule(rule, 2021) == date(2021, 4, 2)

    def test_nested_anchor(self) -> None:
        rule = AnchorOffsetRule(anchor=FixedDateRule(month=12, day=25), offset_days=1)
        assert evaluate_rule(rule, 2021) == date(2021, 12, 26)

    def test_anchor_may_leave_year(self) -> None:
        rule = AnchorOffsetRule(anchor=FixedDateRule(month=12, day=31), offset_days=1)
        assert evaluate_rule(rule, 2021) == date(2022, 1, 1)

    def test_timezone_is_validated(self) -> None:
        with pytest.raises(InvalidTimezoneError):
            evaluate_rule(FixedDateRule(month=1, day=1), 2021, "Mars/Olympus_Mons")

    def test_unsupported_rule_raises(self) -> None:
        with pytest.raises(InvalidRuleError):
            evaluate_rule("first monday of august", 2021)  # type: ignore[arg-type]

    def test_load_zone(self) -> None:
        assert load_zone("America/Halifax").key == "America/Halifax"
