"""Core package - Calendar rules and workday arithmetic."""

from workday_calendar.core.calendar import (
    Calendar,
    GregorianCalendar,
    days_in_month,
    is_leap_year,
)
from workday_calendar.core.date import DateValue
from workday_calendar.core.exceptions import (
    BusinessError,
    CalendarError,
    ConfigurationError,
    IncrementFailedError,
    InfrastructureError,
    InvalidDateError,
    ValidationError,
    WorkdayCalendarError,
    WorkdayNotConfiguredError,
)
from workday_calendar.core.workday import (
    WORKWEEK_DURATION,
    WorkdayCalendar,
    WorkdayHours,
)

__all__ = [
    # Dates and calendars
    "Calendar",
    "DateValue",
    "GregorianCalendar",
    "days_in_month",
    "is_leap_year",
    # Workdays
    "WORKWEEK_DURATION",
    "WorkdayCalendar",
    "WorkdayHours",
    # Exceptions
    "BusinessError",
    "CalendarError",
    "ConfigurationError",
    "IncrementFailedError",
    "InfrastructureError",
    "InvalidDateError",
    "ValidationError",
    "WorkdayCalendarError",
    "WorkdayNotConfiguredError",
]
