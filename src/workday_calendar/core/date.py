"""
Date value module.

A plain date/time value (year, month, day, hour, minute) with minute
precision. No calendar validity checks live here: the same type carries
in-flight, possibly invalid intermediate results, and validation is the
calendar's job.
"""

import re
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Tuple


# Sakamoto month offsets, January first
_MONTH_OFFSETS: Tuple[int, ...] = (0, 3, 2, 5, 0, 3, 5, 1, 4, 6, 2, 4)

_INVALID_FIELD = -1

# Placeholder date portion for clock times and month-days (a leap year)
_CLOCK_DATE: Tuple[int, int, int] = (2000, 1, 1)

_DATE_PATTERN = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})"
    r"(?:[ T](?P<hour>\d{1,2}):(?P<minute>\d{2}))?$"
)
_CLOCK_PATTERN = re.compile(r"^(?P<hour>\d{1,2}):(?P<minute>\d{2})$")
_MONTH_DAY_PATTERN = re.compile(r"^(?P<month>\d{1,2})-(?P<day>\d{1,2})$")


@dataclass(frozen=True)
class DateValue:
    """
    Date and clock time at minute precision.

    Attributes:
        year: Calendar year.
        month: Month, 1-based.
        day: Day of month, 1-based.
        hour: Hour of day, 24h clock.
        minute: Minute of hour.
    """
    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0

    @classmethod
    def invalid(cls) -> "DateValue":
        """Get the sentinel returned when no meaningful date can be produced."""
        return cls(
            _INVALID_FIELD, _INVALID_FIELD, _INVALID_FIELD,
            _INVALID_FIELD, _INVALID_FIELD,
        )

    @classmethod
    def clock(cls, hour: int, minute: int) -> "DateValue":
        """
        Build a value where only the clock time is meaningful.

        The date portion is a fixed placeholder so the value still passes
        calendar validation.
        """
        year, month, day = _CLOCK_DATE
        return cls(year, month, day, hour, minute)

    @classmethod
    def parse(cls, text: str) -> "DateValue":
        """
        Parse "YYYY-MM-DD" or "YYYY-MM-DD HH:MM" text.

        Only the shape is checked; "2023-02-30" parses fine and is left to
        the calendar to reject.

        Args:
            text: The text to parse.

        Returns:
            Parsed DateValue, with 00:00 when no time is given.

        Raises:
            ValueError: If the text is not in a supported format.
        """
        match = _DATE_PATTERN.match(text.strip())
        if match is None:
            raise ValueError(
                f"Unsupported date format: {text!r} "
                "(expected YYYY-MM-DD or YYYY-MM-DD HH:MM)"
            )

        parts = match.groupdict()
        return cls(
            int(parts["year"]),
            int(parts["month"]),
            int(parts["day"]),
            int(parts["hour"] or 0),
            int(parts["minute"] or 0),
        )

    @classmethod
    def parse_clock(cls, text: str) -> "DateValue":
        """Parse "HH:MM" into a clock() value."""
        match = _CLOCK_PATTERN.match(text.strip())
        if match is None:
            raise ValueError(f"Unsupported time format: {text!r} (expected HH:MM)")
        return cls.clock(int(match.group("hour")), int(match.group("minute")))

    @classmethod
    def parse_month_day(cls, text: str) -> "DateValue":
        """
        Parse "MM-DD" for recurring holidays.

        The placeholder year is a leap year, so "02-29" is accepted.
        """
        match = _MONTH_DAY_PATTERN.match(text.strip())
        if match is None:
            raise ValueError(f"Unsupported month-day format: {text!r} (expected MM-DD)")
        return cls(_CLOCK_DATE[0], int(match.group("month")), int(match.group("day")))

    @classmethod
    def from_datetime(cls, value: datetime) -> "DateValue":
        """Truncate a datetime to minute precision."""
        return cls(value.year, value.month, value.day, value.hour, value.minute)

    def to_datetime(self) -> Optional[datetime]:
        """Convert to a naive datetime, or None when the fields don't form one."""
        try:
            return datetime(self.year, self.month, self.day, self.hour, self.minute)
        except ValueError:
            return None

    @property
    def time(self) -> Tuple[int, int]:
        """Clock time as an (hour, minute) tuple."""
        return self.hour, self.minute

    @property
    def is_invalid(self) -> bool:
        """True for the sentinel value."""
        return self == DateValue.invalid()

    def with_time(self, hour: int, minute: int) -> "DateValue":
        return replace(self, hour=hour, minute=minute)

    def with_date(self, year: int, month: int, day: int) -> "DateValue":
        return replace(self, year=year, month=month, day=day)

    def day_of_week(self) -> int:
        """
        Day of the week, 0 = Sunday through 6 = Saturday.

        Uses the Sakamoto congruence. The month is not range checked, so
        callers should validate the date first.
        """
        year = self.year - (1 if self.month < 3 else 0)
        return (
            year + year // 4 - year // 100 + year // 400
            + _MONTH_OFFSETS[self.month - 1] + self.day
        ) % 7

    def date_string(self) -> str:
        """Date as "YYYY-MM-DD"."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def date_and_time(self) -> str:
        """Date and time as "YYYY-MM-DD HH:MM"."""
        return f"{self.date_string()} {self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return self.date_and_time()
