"""
Calendar rules module.

Defines the calendar capability used by the workday engine and its
Gregorian implementation: date validation, weekend and holiday
classification, and single-day stepping.
"""

from abc import ABC, abstractmethod
from typing import FrozenSet, Set, Tuple

from workday_calendar.core.date import DateValue
from workday_calendar.core.time_utils import HOURS_IN_DAY, MINUTES_IN_HOUR


SUNDAY = 0
SATURDAY = 6

MONTHS_IN_YEAR = 12

_LONG_MONTHS = frozenset([1, 3, 5, 7, 8, 10, 12])
_SHORT_MONTHS = frozenset([4, 6, 9, 11])


class Calendar(ABC):
    """
    Calendar capability consumed by the workday engine.

    A variant decides which dates exist, which are holidays, and how to
    step one day forward or backward. Stepping returns a new DateValue and
    leaves the time of day untouched.
    """

    @abstractmethod
    def is_valid_date(self, date: DateValue) -> bool:
        """Check that the date and its time of day exist in this calendar."""

    @abstractmethod
    def set_holiday(self, date: DateValue) -> None:
        """Register a one-time holiday. Invalid dates are ignored."""

    @abstractmethod
    def set_recurring_holiday(self, date: DateValue) -> None:
        """Register a holiday repeating every year. Invalid dates are ignored."""

    @abstractmethod
    def is_holiday(self, date: DateValue) -> bool:
        """Check for a weekend day or registered holiday."""

    @abstractmethod
    def add_day(self, date: DateValue) -> DateValue:
        """Get the next calendar day."""

    @abstractmethod
    def remove_day(self, date: DateValue) -> DateValue:
        """Get the previous calendar day."""


def is_leap_year(year: int) -> bool:
    """Gregorian leap year rule."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    """
    Number of days in a month, honouring leap years.

    Out-of-range months report 30 days.
    """
    if month in _LONG_MONTHS:
        return 31
    if month in _SHORT_MONTHS:
        return 30
    if month == 2:
        return 29 if is_leap_year(year) else 28
    return 30


class GregorianCalendar(Calendar):
    """
    Gregorian calendar with a Saturday/Sunday weekend.

    Holidays come in two tiers: one-time holidays keyed by the full date,
    and recurring holidays keyed by (month, day) that match every year.
    """

    def __init__(self) -> None:
        self._holidays: Set[str] = set()
        self._recurring_holidays: Set[Tuple[int, int]] = set()

    @property
    def holidays(self) -> FrozenSet[str]:
        """One-time holidays as "YYYY-MM-DD" keys."""
        return frozenset(self._holidays)

    @property
    def recurring_holidays(self) -> FrozenSet[Tuple[int, int]]:
        """Recurring holidays as (month, day) pairs."""
        return frozenset(self._recurring_holidays)

    def is_valid_date(self, date: DateValue) -> bool:
        if date.year < 0 or not 1 <= date.month <= MONTHS_IN_YEAR:
            return False
        if not 1 <= date.day <= days_in_month(date.year, date.month):
            return False
        return 0 <= date.hour < HOURS_IN_DAY and 0 <= date.minute < MINUTES_IN_HOUR

    def set_holiday(self, date: DateValue) -> None:
        if self.is_valid_date(date):
            self._holidays.add(date.date_string())

    def set_recurring_holiday(self, date: DateValue) -> None:
        if self.is_valid_date(date):
            self._recurring_holidays.add((date.month, date.day))

    def is_holiday(self, date: DateValue) -> bool:
        """
        Check if a date is a weekend day or a registered holiday.

        The weekend test runs first and does not validate the date;
        callers are expected to pass dates the calendar accepts.

        Args:
            date: The date to check. Time of day is ignored.

        Returns:
            True if the date is a Saturday, Sunday, one-time or recurring
            holiday.
        """
        if date.day_of_week() in (SUNDAY, SATURDAY):
            return True

        if date.date_string() in self._holidays:
            return True

        return (date.month, date.day) in self._recurring_holidays

    def add_day(self, date: DateValue) -> DateValue:
        year, month, day = date.year, date.month, date.day + 1

        if day > days_in_month(year, month):
            day = 1
            month += 1
            if month > MONTHS_IN_YEAR:
                month = 1
                year += 1

        return date.with_date(year, month, day)

    def remove_day(self, date: DateValue) -> DateValue:
        year, month, day = date.year, date.month, date.day - 1

        if day < 1:
            month -= 1
            if month < 1:
                month = MONTHS_IN_YEAR
                year -= 1
            day = days_in_month(year, month)

        return date.with_date(year, month, day)
