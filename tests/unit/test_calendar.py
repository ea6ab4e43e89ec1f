"""
Tests for Gregorian calendar rules.

Covers date validation, leap years, holiday classification and
single-day stepping across month and year boundaries.
"""

import pytest

from workday_calendar.core import DateValue, GregorianCalendar, days_in_month, is_leap_year


@pytest.fixture
def calendar() -> GregorianCalendar:
    return GregorianCalendar()


class TestLeapYears:
    """Tests for the leap year rule."""

    @pytest.mark.parametrize("year", [2024, 2000, 1600, 4])
    def test_leap_years(self, year):
        assert is_leap_year(year) is True

    @pytest.mark.parametrize("year", [2023, 1900, 2100, 1])
    def test_common_years(self, year):
        assert is_leap_year(year) is False

    def test_february_length(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2023, 2) == 28

    def test_month_lengths(self):
        assert [days_in_month(2023, m) for m in range(1, 13)] == [
            31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31,
        ]

    def test_out_of_range_month_reports_thirty(self):
        assert days_in_month(2024, 13) == 30


class TestIsValidDate:
    """Tests for is_valid_date."""

    def test_regular_date_is_valid(self, calendar):
        assert calendar.is_valid_date(DateValue(2024, 5, 20, 8, 0)) is True

    def test_leap_day_valid_in_leap_years(self, calendar):
        assert calendar.is_valid_date(DateValue(2024, 2, 29)) is True
        assert calendar.is_valid_date(DateValue(2000, 2, 29)) is True

    def test_leap_day_invalid_in_common_years(self, calendar):
        assert calendar.is_valid_date(DateValue(2023, 2, 29)) is False
        assert calendar.is_valid_date(DateValue(1900, 2, 29)) is False

    @pytest.mark.parametrize("date", [
        DateValue(2024, -5, 20, 8, 0),
        DateValue(2024, 0, 20, 8, 0),
        DateValue(2024, 13, 1, 8, 0),
        DateValue(2024, 4, 31, 8, 0),
        DateValue(2024, 5, 0, 8, 0),
        DateValue(2024, 5, 20, 24, 0),
        DateValue(2024, 5, 20, -1, 0),
        DateValue(2024, 5, 20, 8, 60),
        DateValue(2024, 5, 20, 8, -1),
        DateValue(-2024, 5, 20, 17, 0),
    ])
    def test_out_of_range_fields_are_invalid(self, calendar, date):
        assert calendar.is_valid_date(date) is False

    def test_default_value_is_invalid(self, calendar):
        """An all-zero value only looks like a date."""
        assert calendar.is_valid_date(DateValue()) is False

    def test_sentinel_is_invalid(self, calendar):
        assert calendar.is_valid_date(DateValue.invalid()) is False

    def test_year_zero_is_valid(self, calendar):
        assert calendar.is_valid_date(DateValue(0, 1, 1)) is True


class TestHolidays:
    """Tests for holiday registration and lookup."""

    def test_weekdays_are_not_holidays(self, calendar):
        assert calendar.is_holiday(DateValue(2024, 5, 21)) is False

    def test_weekend_days_are_holidays(self, calendar):
        assert calendar.is_holiday(DateValue(2024, 5, 11)) is True  # Saturday
        assert calendar.is_holiday(DateValue(2024, 5, 12)) is True  # Sunday

    def test_one_time_holiday(self, calendar):
        calendar.set_holiday(DateValue(2024, 5, 27, 0, 0))

        assert calendar.is_holiday(DateValue(2024, 5, 27, 13, 0)) is True
        assert calendar.is_holiday(DateValue(2025, 5, 27)) is False

    def test_recurring_holiday_matches_every_year(self, calendar):
        calendar.set_recurring_holiday(DateValue(2024, 12, 25))

        assert calendar.is_holiday(DateValue(2024, 12, 25)) is True
        assert calendar.is_holiday(DateValue(2025, 12, 25)) is True
        assert calendar.is_holiday(DateValue(2030, 12, 25)) is True

    def test_invalid_holiday_is_ignored(self, calendar):
        calendar.set_holiday(DateValue(2023, 2, 30))
        calendar.set_recurring_holiday(DateValue(2024, 13, 1))

        assert calendar.holidays == frozenset()
        assert calendar.recurring_holidays == frozenset()

    def test_holiday_views(self, calendar):
        calendar.set_holiday(DateValue(2024, 7, 4))
        calendar.set_recurring_holiday(DateValue(2024, 12, 25))

        assert calendar.holidays == frozenset(["2024-07-04"])
        assert calendar.recurring_holidays == frozenset([(12, 25)])


class TestDayStepping:
    """Tests for add_day and remove_day."""

    @pytest.mark.parametrize("date, expected", [
        (DateValue(2024, 5, 20), DateValue(2024, 5, 21)),
        (DateValue(2024, 1, 31), DateValue(2024, 2, 1)),
        (DateValue(2024, 2, 28), DateValue(2024, 2, 29)),
        (DateValue(2024, 2, 29), DateValue(2024, 3, 1)),
        (DateValue(2023, 2, 28), DateValue(2023, 3, 1)),
        (DateValue(2024, 12, 31), DateValue(2025, 1, 1)),
    ])
    def test_add_day(self, calendar, date, expected):
        assert calendar.add_day(date) == expected

    @pytest.mark.parametrize("date, expected", [
        (DateValue(2024, 5, 21), DateValue(2024, 5, 20)),
        (DateValue(2024, 3, 1), DateValue(2024, 2, 29)),
        (DateValue(2023, 3, 1), DateValue(2023, 2, 28)),
        (DateValue(2024, 5, 1), DateValue(2024, 4, 30)),
        (DateValue(2025, 1, 1), DateValue(2024, 12, 31)),
    ])
    def test_remove_day(self, calendar, date, expected):
        assert calendar.remove_day(date) == expected

    def test_stepping_keeps_time_of_day(self, calendar):
        date = DateValue(2024, 12, 31, 15, 7)

        assert calendar.add_day(date) == DateValue(2025, 1, 1, 15, 7)
        assert calendar.remove_day(date) == DateValue(2024, 12, 30, 15, 7)

    def test_stepping_does_not_modify_input(self, calendar):
        date = DateValue(2024, 5, 20, 9, 0)
        calendar.add_day(date)
        assert date == DateValue(2024, 5, 20, 9, 0)
