"""
Workday arithmetic module.

Moves a date/time forward or backward by a fractional number of workdays.
A workday is the configured window between the daily start and stop
times; weekends and holidays are skipped entirely.

Failures never raise: every date-producing operation returns the
DateValue.invalid() sentinel and logs why.
"""

import math
from dataclasses import dataclass
from threading import Lock
from typing import Optional

from workday_calendar.core.calendar import Calendar, GregorianCalendar
from workday_calendar.core.date import DateValue
from workday_calendar.core.exceptions import CalendarError
from workday_calendar.core.time_utils import (
    ClockTime,
    add_minutes,
    convert_to_minutes,
    subtract_minutes,
    subtract_time,
)
from workday_calendar.infrastructure.logging import get_logger


logger = get_logger(__name__)


WORKWEEK_DURATION = 5

# Upper bound on consecutive holidays skipped in a single step
MAX_CONSECUTIVE_HOLIDAYS = 366


@dataclass(frozen=True)
class WorkdayHours:
    """
    Configured daily work window.

    Attributes:
        start: Start of the workday; only the clock time matters.
        stop: End of the workday; only the clock time matters.
        duration: stop - start as (hours, minutes), wrapped into 24h.
    """
    start: DateValue
    stop: DateValue
    duration: ClockTime

    @classmethod
    def from_start_and_stop(cls, start: DateValue, stop: DateValue) -> "WorkdayHours":
        return cls(start=start, stop=stop, duration=subtract_time(stop.time, start.time))

    @property
    def start_minutes(self) -> int:
        return convert_to_minutes(self.start.time)

    @property
    def stop_minutes(self) -> int:
        return convert_to_minutes(self.stop.time)

    @property
    def duration_minutes(self) -> int:
        return convert_to_minutes(self.duration)


class WorkdayCalendar:
    """
    Workday calculator over a pluggable calendar.

    Configuration (work hours and holidays) and increment computations are
    serialized by a single lock, so an increment never observes a
    half-applied configuration change.
    """

    def __init__(self, calendar: Optional[Calendar] = None) -> None:
        self._calendar: Calendar = calendar or GregorianCalendar()
        self._hours: Optional[WorkdayHours] = None
        self._lock = Lock()

    @property
    def calendar(self) -> Calendar:
        return self._calendar

    @property
    def workday_hours(self) -> Optional[WorkdayHours]:
        return self._hours

    @property
    def workday_start(self) -> Optional[DateValue]:
        return self._hours.start if self._hours else None

    @property
    def workday_stop(self) -> Optional[DateValue]:
        return self._hours.stop if self._hours else None

    @property
    def workday_duration(self) -> Optional[ClockTime]:
        return self._hours.duration if self._hours else None

    @property
    def is_configured(self) -> bool:
        return self._hours is not None

    def set_workday_start_and_stop(self, start: DateValue, stop: DateValue) -> None:
        """
        Set the daily start and stop times.

        Only the clock time of each value is used. If either value is
        rejected by the calendar, any previous configuration is cleared
        rather than partially kept.

        Args:
            start: Start of the workday.
            stop: End of the workday.
        """
        with self._lock:
            for name, value in (("start", start), ("stop", stop)):
                if not self._calendar.is_valid_date(value):
                    logger.info(
                        f"Invalid workday {name}: {value}",
                        extra={"extra_fields": {"field": name, "value": str(value)}}
                    )
                    self._hours = None
                    return

            self._hours = WorkdayHours.from_start_and_stop(start, stop)
            logger.debug(
                f"Workday hours set to {start.time} - {stop.time}",
                extra={"extra_fields": {"duration": self._hours.duration}}
            )

    def set_holiday(self, date: DateValue) -> None:
        with self._lock:
            self._calendar.set_holiday(date)

    def set_recurring_holiday(self, date: DateValue) -> None:
        with self._lock:
            self._calendar.set_recurring_holiday(date)

    def is_holiday(self, date: DateValue) -> bool:
        """Check for a weekend or holiday. Dates the calendar rejects are not holidays."""
        with self._lock:
            if not self._calendar.is_valid_date(date):
                return False
            return self._calendar.is_holiday(date)

    def get_workday_increment(self, start_date: DateValue, increment: float) -> DateValue:
        """
        Get the date reached by moving a number of workdays from a start.

        The increment is converted to minutes of work (rounded down), split
        into whole work weeks, whole workdays and remaining minutes, and
        applied in that order. A start on a holiday first moves to the
        nearest workday in the direction of travel.

        Args:
            start_date: The starting date and time.
            increment: Workdays to move; negative moves backward.

        Returns:
            The resulting date, or DateValue.invalid() if the start is
            invalid, work hours are not configured, or the computation
            fails.
        """
        with self._lock:
            try:
                return self._compute_increment(start_date, increment)
            except Exception as e:
                logger.error(
                    f"Workday increment failed: {e}",
                    exc_info=True,
                    extra={"extra_fields": {
                        "start": str(start_date),
                        "increment": increment,
                        "error_type": type(e).__name__,
                    }}
                )
                return DateValue.invalid()

    def _compute_increment(self, start_date: DateValue, increment: float) -> DateValue:
        if not self._calendar.is_valid_date(start_date):
            logger.info(
                f"Invalid start date: {start_date}",
                extra={"extra_fields": {"start": str(start_date)}}
            )
            return DateValue.invalid()

        hours = self._hours
        if hours is None:
            logger.info("Workday start and stop are not configured")
            return DateValue.invalid()

        if hours.duration_minutes == 0:
            logger.info("Workday duration is zero")
            return DateValue.invalid()

        if not math.isfinite(increment):
            logger.info(
                f"Invalid workday increment: {increment}",
                extra={"extra_fields": {"increment": increment}}
            )
            return DateValue.invalid()

        decrement = increment < 0
        workday_minutes = hours.duration_minutes
        increment_minutes = int(abs(increment) * workday_minutes)

        work_days = increment_minutes // workday_minutes
        work_weeks = work_days // WORKWEEK_DURATION

        current = self._align_to_workday(start_date, hours, decrement)

        for _ in range(work_weeks):
            current = self._step_work_week(current, decrement)

        for _ in range(work_days % WORKWEEK_DURATION):
            current = self._step_workday(current, decrement)

        remaining_minutes = increment_minutes % workday_minutes
        if decrement:
            current = self._remove_remaining_minutes(remaining_minutes, current, hours)
        else:
            current = self._add_remaining_minutes(remaining_minutes, current, hours)

        if not self._calendar.is_valid_date(current):
            logger.info(
                f"Workday increment left the calendar range: {current}",
                extra={"extra_fields": {"start": str(start_date), "increment": increment}}
            )
            return DateValue.invalid()

        return current

    def _step_day(self, date: DateValue, decrement: bool) -> DateValue:
        if decrement:
            stepped = self._calendar.remove_day(date)
        else:
            stepped = self._calendar.add_day(date)

        if not self._calendar.is_valid_date(stepped):
            raise CalendarError(f"Stepped outside the calendar: {stepped}")
        return stepped

    def _align_to_workday(
        self,
        date: DateValue,
        hours: WorkdayHours,
        decrement: bool,
    ) -> DateValue:
        """Move off a holiday, resetting the clock to the edge of the workday."""
        edge = hours.stop if decrement else hours.start
        skipped = 0

        while self._calendar.is_holiday(date):
            skipped += 1
            if skipped > MAX_CONSECUTIVE_HOLIDAYS:
                raise CalendarError(f"No workday found near {date}")
            date = self._step_day(date, decrement).with_time(edge.hour, edge.minute)

        return date

    def _step_work_week(self, date: DateValue, decrement: bool) -> DateValue:
        for _ in range(WORKWEEK_DURATION):
            date = self._step_workday(date, decrement)
        return date

    def _step_workday(self, date: DateValue, decrement: bool) -> DateValue:
        """Step one day, then keep stepping until the day is not a holiday."""
        date = self._step_day(date, decrement)
        skipped = 0

        while self._calendar.is_holiday(date):
            skipped += 1
            if skipped > MAX_CONSECUTIVE_HOLIDAYS:
                raise CalendarError(f"No workday found near {date}")
            date = self._step_day(date, decrement)

        return date

    def _add_remaining_minutes(
        self,
        minutes: int,
        current: DateValue,
        hours: WorkdayHours,
    ) -> DateValue:
        start_minutes = hours.start_minutes
        stop_minutes = hours.stop_minutes
        current_minutes = convert_to_minutes(current.time)

        # At or past stop counts as the next workday's start
        if current_minutes >= stop_minutes:
            current = self._step_workday(current, decrement=False)
            current = current.with_time(hours.start.hour, hours.start.minute)
            current_minutes = start_minutes
        elif current_minutes < start_minutes:
            current = current.with_time(hours.start.hour, hours.start.minute)
            current_minutes = start_minutes

        if current_minutes + minutes <= stop_minutes:
            return current.with_time(*add_minutes(current_minutes, minutes))

        current = self._step_workday(current, decrement=False)
        overflow = (current_minutes + minutes) - stop_minutes
        return current.with_time(*add_minutes(start_minutes, overflow))

    def _remove_remaining_minutes(
        self,
        minutes: int,
        current: DateValue,
        hours: WorkdayHours,
    ) -> DateValue:
        start_minutes = hours.start_minutes
        stop_minutes = hours.stop_minutes
        current_minutes = convert_to_minutes(current.time)

        if current_minutes >= stop_minutes:
            current = current.with_time(hours.stop.hour, hours.stop.minute)
            current_minutes = stop_minutes
        elif current_minutes < start_minutes:
            current = self._step_workday(current, decrement=True)
            current = current.with_time(hours.stop.hour, hours.stop.minute)
            current_minutes = stop_minutes

        if current_minutes - minutes >= start_minutes:
            return current.with_time(*subtract_minutes(current_minutes, minutes))

        current = self._step_workday(current, decrement=True)
        underflow = start_minutes - (current_minutes - minutes)
        return current.with_time(*subtract_minutes(stop_minutes, underflow))
