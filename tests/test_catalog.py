"""Unit tests for the supplementary holiday catalog."""
from datetime import date
from unittest.mock import patch

from holiday_calendar.holidays import catalog
from holiday_calendar.holidays.catalog import (
    CATEGORY_NAMES,
    all_holidays,
    all_holidays_for_range,
    fixed_holidays,
    floating_holidays,
    lunar_holidays,
)


class TestFixedHolidays:
    """Test cases for fixed-date holidays."""

    def test_dates_follow_requested_year(self):
        holidays = fixed_holidays(2025)

        assert len(holidays) == 13
        assert all(h.date.year == 2025 for h in holidays)

    def test_valentines_day(self):
        by_name = {h.name: h for h in fixed_holidays(2024)}

        valentine = by_name["情人节"]
        assert valentine.date == date(2024, 2, 14)
        assert valentine.category == "western"
        assert valentine.description == "西方情人节"

    def test_categories_are_known(self):
        assert {h.category for h in fixed_holidays(2024)} == {"western", "internet", "professional"}
        assert set(CATEGORY_NAMES) == {"western", "internet", "professional", "traditional"}

    def test_regenerated_values_compare_equal(self):
        """Each call produces new records that compare equal by value."""
        assert fixed_holidays(2024) == fixed_holidays(2024)


class TestFloatingHolidays:
    """Test cases for rule-based holidays."""

    def test_thanksgiving_2024(self):
        holidays = floating_holidays(2024)

        assert len(holidays) == 1
        assert holidays[0].name == "感恩节"
        assert holidays[0].date == date(2024, 11, 28)


class TestLunarHolidays:
    """Test cases for lunar festivals."""

    def test_all_festivals_resolve_for_2024(self):
        by_name = {h.name: h.date for h in lunar_holidays(2024)}

        assert by_name == {
            "七夕节": date(2024, 8, 10),
            "腊八节": date(2024, 1, 18),
            "小年（北方）": date(2024, 2, 2),
            "小年（南方）": date(2024, 2, 3),
            "龙抬头": date(2024, 3, 11),
        }
        assert all(h.category == "traditional" for h in lunar_holidays(2024))

    def test_unresolvable_festival_is_omitted(self):
        """One failing festival does not remove the others."""
        real_resolve = catalog.resolve_festival

        def flaky_resolve(key, year):
            if key == "laba":
                return None
            return real_resolve(key, year)

        with patch.object(catalog, "resolve_festival", side_effect=flaky_resolve):
            names = [h.name for h in lunar_holidays(2024)]

        assert "腊八节" not in names
        assert len(names) == 4


class TestAllHolidays:
    """Test cases for the combined catalog."""

    def test_single_year_concatenates_categories(self):
        holidays = all_holidays(2024)

        assert len(holidays) == 13 + 1 + 5
        assert holidays[:13] == fixed_holidays(2024)
        assert holidays[13] == floating_holidays(2024)[0]

    def test_range_is_inclusive_and_ascending(self):
        holidays = all_holidays_for_range(2023, 2025)

        assert len(holidays) == 3 * 19
        assert holidays[:19] == all_holidays(2023)
        assert holidays[-19:] == all_holidays(2025)

    def test_empty_range(self):
        assert all_holidays_for_range(2025, 2024) == []
