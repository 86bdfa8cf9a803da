"""
Jurisdiction Provider and Registry Tests

Tests for per-year computation, parent composition, overrides,
determinism and registry lookup.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from holidaypilot.engine import JurisdictionProvider, JurisdictionRegistry
from holidaypilot.exceptions import (
    CollectionFrozenError,
    DuplicateHolidayError,
    InvalidTimezoneError,
    InvalidYearError,
    JurisdictionNotFoundError,
    NoSuchDateError,
)
from holidaypilot.models import (
    AnchorOffsetRule,
    FixedDateRule,
    HolidayType,
    LastWeekdayOnOrBeforeRule,
    SubstitutionPolicy,
    Weekday,
)
from tests.conftest import make_provider, make_record, make_rule


# =============================================================================
# Provider Construction
# =============================================================================

class TestProviderConstruction:
    """Tests for provider validation."""

    def test_duplicate_local_keys(self) -> None:
        with pytest.raises(DuplicateHolidayError):
            make_provider(rules=[make_rule("a"), make_rule("a")])

    def test_unknown_timezone(self) -> None:
        with pytest.raises(InvalidTimezoneError):
            make_provider(timezone="Canada/Nowhere")

    def test_own_ancestor(self) -> None:
        with pytest.raises(ValueError, match="own ancestor"):
            make_provider(id="CA", parent=make_provider(id="CA"))

    def test_default_weekend(self) -> None:
        provider = make_provider()
        assert provider.weekend_days == frozenset({Weekday.SATURDAY, Weekday.SUNDAY})
        assert provider.is_weekend_day(date(2021, 7, 3))
        assert not provider.is_weekend_day(date(2021, 7, 2))

    def test_custom_weekend(self) -> None:
        provider = JurisdictionProvider(
            id="XX", name="X", timezone="UTC", weekend_days=["friday", "saturday"]
        )
        assert provider.is_weekend_day(date(2021, 7, 2))
        assert not provider.is_weekend_day(date(2021, 7, 4))


# =============================================================================
# Computation
# =============================================================================

class TestCompute:
    """Tests for JurisdictionProvider.compute."""

    def test_national_year(self, national) -> None:
        holidays = national.compute(2021)
        assert holidays.year == 2021
        assert holidays.jurisdiction == "CA"
        assert holidays.keys() == [
            "canadaDay",
            "civicHoliday",
            "christmasDay",
            "boxingDay",
            "christmasDayObserved",
            "boxingDayObserved",
        ]

    def test_result_is_frozen(self, national) -> None:
        holidays = national.compute(2021)
        assert holidays.frozen
        with pytest.raises(CollectionFrozenError):
            holidays.add(make_record("labourDay", date(2021, 9, 6)))

    def test_records_carry_timezone(self, territory) -> None:
        holidays = territory.compute(2021)
        assert holidays.get("nationalIndigenousPeoplesDay").timezone == "America/Yellowknife"
        assert holidays.get("canadaDay").timezone == "America/Toronto"

    def test_validity_window(self, territory) -> None:
        assert "nationalIndigenousPeoplesDay" not in territory.compute(1995)
        holidays = territory.compute(1996)
        assert holidays.when_is("nationalIndigenousPeoplesDay") == date(1996, 6, 21)

    def test_before_canada_day_existed(self, national) -> None:
        assert "canadaDay" not in national.compute(1878)
        assert "canadaDay" in national.compute(1879)

    def test_child_inherits_parent(self, territory) -> None:
        holidays = territory.compute(1996)
        assert holidays.jurisdiction == "CA-NT"
        assert holidays.keys() == [
            "nationalIndigenousPeoplesDay",
            "canadaDay",
            "civicHoliday",
            "christmasDay",
            "boxingDay",
        ]

    def test_override_replaces_parent(self, national, territory) -> None:
        assert national.compute(2021).get("civicHoliday").type == HolidayType.OBSERVANCE
        civic = territory.compute(2021).get("civicHoliday")
        assert civic.type == HolidayType.OFFICIAL
        assert civic.names["fr"] == "Premier lundi d'août"
        assert civic.date == date(2021, 8, 2)

    def test_override_does_not_mutate_parent(self, national, territory) -> None:
        territory.compute(2021)
        assert national.compute(2021).get("civicHoliday").type == HolidayType.OBSERVANCE

    def test_inherited_substitutes(self, territory) -> None:
        holidays = territory.compute(2018)
        observed = holidays.get("canadaDayObserved")
        assert observed.date == date(2018, 7, 2)
        assert observed.substitutes == "canadaDay"

    def test_override_drops_stale_substitute(self, national) -> None:
        child = make_provider(
            id="CA-XX",
            parent=national,
            rules=[make_rule("canadaDay", FixedDateRule(month=7, day=1), names={"en": "Dominion Day"})],
        )
        holidays = child.compute(2018)
        assert holidays.get("canadaDay").names["en"] == "Dominion Day"
        assert "canadaDayObserved" not in holidays

    def test_override_keeps_displaced_substitutes(self, national) -> None:
        # 2021: Christmas Sat 25 -> Mon 27, Boxing Day Sun 26 -> Tue 28
        child = make_provider(
            id="CA-XX",
            parent=national,
            rules=[make_rule("christmasDay", FixedDateRule(month=12, day=25))],
        )
        holidays = child.compute(2021)
        assert "christmasDayObserved" not in holidays
        assert holidays.when_is("boxingDayObserved") == date(2021, 12, 28)

    def test_child_policy_applies_to_inherited(self) -> None:
        parent = make_provider(
            id="P",
            rules=[make_rule("canadaDay", FixedDateRule(month=7, day=1), observed=True)],
        )
        child = make_provider(
            id="P-C", parent=parent, substitution=SubstitutionPolicy.on("sunday")
        )
        assert "canadaDayObserved" not in parent.compute(2018)
        assert child.compute(2018).when_is("canadaDayObserved") == date(2018, 7, 2)

    def test_rule_outside_year_is_skipped(self) -> None:
        provider = make_provider(
            rules=[
                make_rule(
                    "newYearsEveEve",
                    AnchorOffsetRule(anchor=FixedDateRule(month=1, day=1), offset_days=-2),
                ),
            ],
        )
        assert len(provider.compute(2021)) == 0

    def test_no_such_date_carries_context(self) -> None:
        provider = make_provider(id="XX", rules=[make_rule("leapDay", FixedDateRule(month=2, day=29))])
        assert provider.compute(2024).when_is("leapDay") == date(2024, 2, 29)
        with pytest.raises(NoSuchDateError) as exc_info:
            provider.compute(2021)
        assert exc_info.value.jurisdiction == "XX"
        assert exc_info.value.details["key"] == "leapDay"

    @pytest.mark.parametrize("year", [0, -1, 10000, "2021", 2021.0, True, None])
    def test_invalid_year(self, national, year) -> None:
        with pytest.raises(InvalidYearError) as exc_info:
            national.compute(year)
        assert exc_info.value.code == "HP_INVALID_YEAR"

    def test_year_bounds(self, national) -> None:
        assert national.compute(1).year == 1
        assert national.compute(9999).year == 9999

    def test_rule_before_first_supported_date(self) -> None:
        provider = make_provider(
            id="XX",
            rules=[make_rule("x", LastWeekdayOnOrBeforeRule(month=1, day=1, weekday=Weekday.SUNDAY))],
        )
        with pytest.raises(NoSuchDateError) as exc_info:
            provider.compute(1)
        assert exc_info.value.jurisdiction == "XX"
        assert exc_info.value.details["key"] == "x"

    def test_substitute_past_last_supported_date_is_skipped(self) -> None:
        # December 31, 9999 is a Friday
        provider = make_provider(
            rules=[make_rule("newYearsEve", FixedDateRule(month=12, day=31), observed=True)],
            substitution=SubstitutionPolicy.on("friday", "saturday"),
        )
        assert provider.compute(9999).keys() == ["newYearsEve"]

    def test_adjacent_years(self, national) -> None:
        assert national.next_year(2020).year == 2021
        assert national.previous_year(2020).year == 2019


class TestDeterminism:
    """Equal inputs produce equal collections."""

    def test_repeatable(self, territory) -> None:
        first = territory.compute(2021)
        second = territory.compute(2021)
        assert first is not second
        assert first.to_list() == second.to_list()
        assert first.fingerprint() == second.fingerprint()

    def test_different_years_differ(self, territory) -> None:
        assert territory.compute(2020).fingerprint() != territory.compute(2021).fingerprint()

    def test_parallel_computation(self, territory) -> None:
        years = list(range(1990, 2030))
        serial = [territory.compute(year).fingerprint() for year in years]
        with ThreadPoolExecutor(max_workers=8) as pool:
            parallel = list(pool.map(lambda y: territory.compute(y).fingerprint(), years))
        assert parallel == serial


# =============================================================================
# Registry
# =============================================================================

class TestRegistry:
    """Tests for JurisdictionRegistry."""

    def test_lookup_is_case_insensitive(self, registry) -> None:
        assert registry.get("ca-nt").id == "CA-NT"
        assert "ca" in registry
        assert "CA-ON" not in registry
        assert len(registry) == 2

    def test_get_or_raise(self, registry) -> None:
        with pytest.raises(JurisdictionNotFoundError) as exc_info:
            registry.get_or_raise("CA-QC")
        assert exc_info.value.details["available"] == ["CA", "CA-NT"]

    def test_list_and_children(self, registry) -> None:
        assert registry.list_ids() == ["CA", "CA-NT"]
        assert registry.children_of("ca") == ["CA-NT"]
        assert registry.children_of("CA-NT") == []

    def test_register_replaces(self, registry) -> None:
        replacement = make_provider(id="CA-NT")
        registry.register(replacement)
        assert registry.get("CA-NT") is replacement
        assert len(registry) == 2

    def test_compute(self, registry) -> None:
        assert registry.compute("CA-NT", 2021).jurisdiction == "CA-NT"

    def test_holidays_rows(self, registry) -> None:
        rows = registry.holidays("CA", 2018, locale="fr_CA")
        assert rows[0] == {
            "key": "canadaDay",
            "date": "2018-07-01",
            "name": "Fête du Canada",
            "names": {"en": "Canada Day", "fr": "Fête du Canada"},
            "type": "official",
        }
        assert rows[1]["key"] == "canadaDayObserved"
        assert rows[1]["name"] == "Fête du Canada (observé)"
        assert rows[1]["substitutes"] == "canadaDay"

    def test_empty_registry(self) -> None:
        registry = JurisdictionRegistry()
        with pytest.raises(JurisdictionNotFoundError):
            registry.compute("CA", 2021)
