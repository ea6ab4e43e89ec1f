"""
Workday Service.

Orchestrates the workday engine for the HTTP layer: builds it from
settings, turns the engine's sentinel results into business errors,
and records metrics.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from workday_calendar.config import WorkdaySettings, settings
from workday_calendar.core import (
    ConfigurationError,
    DateValue,
    IncrementFailedError,
    InvalidDateError,
    ValidationError,
    WorkdayCalendar,
    WorkdayHours,
    WorkdayNotConfiguredError,
)
from workday_calendar.core.time_utils import convert_to_minutes
from workday_calendar.infrastructure.logging import get_logger, log_duration
from workday_calendar.infrastructure.metrics import get_metrics


logger = get_logger(__name__)


@dataclass(frozen=True)
class IncrementResult:
    """Outcome of a workday increment."""
    start: DateValue
    amount: float
    result: DateValue

    @property
    def direction(self) -> str:
        return "decrement" if self.amount < 0 else "increment"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start.date_and_time(),
            "amount": self.amount,
            "result": self.result.date_and_time(),
        }


def _is_daytime_window(start: DateValue, stop: DateValue) -> bool:
    """Stop strictly after start within one day; zero-length and overnight windows are refused."""
    return convert_to_minutes(stop.time) > convert_to_minutes(start.time)


class WorkdayService:
    """
    Service for workday calculations.

    Responsible for:
    - Configuring the engine from settings (hours and holidays)
    - Validating dates before they reach the engine
    - Reporting failed increments as errors instead of sentinels
    """

    def __init__(
        self,
        workday_calendar: Optional[WorkdayCalendar] = None,
        workday_settings: Optional[WorkdaySettings] = None,
    ) -> None:
        self._settings = workday_settings or settings.workday
        if workday_calendar is None:
            workday_calendar = WorkdayCalendar()
            self._configure(workday_calendar)
        self._workday = workday_calendar

    def _configure(self, workday: WorkdayCalendar) -> None:
        """
        Apply hours and holidays from settings.

        Raises:
            ConfigurationError: If any setting is malformed or rejected
                by the calendar.
        """
        try:
            start = DateValue.parse_clock(self._settings.start)
            stop = DateValue.parse_clock(self._settings.stop)
        except ValueError as e:
            raise ConfigurationError("WORKDAY_START/WORKDAY_STOP", str(e)) from e

        if not _is_daytime_window(start, stop):
            raise ConfigurationError(
                "WORKDAY_START/WORKDAY_STOP",
                f"Workday stop must be after start: {self._settings.start} - {self._settings.stop}",
            )

        workday.set_workday_start_and_stop(start, stop)
        if not workday.is_configured:
            raise ConfigurationError(
                "WORKDAY_START/WORKDAY_STOP",
                f"Invalid workday hours: {self._settings.start} - {self._settings.stop}",
            )

        for raw in self._settings.holidays:
            holiday = self._parse_setting("HOLIDAYS", raw, DateValue.parse, workday)
            workday.set_holiday(holiday)

        for raw in self._settings.recurring_holidays:
            holiday = self._parse_setting("RECURRING_HOLIDAYS", raw, DateValue.parse_month_day, workday)
            workday.set_recurring_holiday(holiday)

        logger.info(
            "Workday calendar configured",
            extra={"extra_fields": {
                "start": self._settings.start,
                "stop": self._settings.stop,
                "holidays": len(self._settings.holidays),
                "recurring_holidays": len(self._settings.recurring_holidays),
            }}
        )

    @staticmethod
    def _parse_setting(
        name: str,
        raw: str,
        parser: Callable[[str], DateValue],
        workday: WorkdayCalendar,
    ) -> DateValue:
        try:
            value = parser(raw)
        except ValueError as e:
            raise ConfigurationError(name, str(e)) from e
        if not workday.calendar.is_valid_date(value):
            raise ConfigurationError(name, f"Invalid date in {name}: {raw}")
        return value

    def _require_valid(self, field: str, date: DateValue) -> None:
        if not self._workday.calendar.is_valid_date(date):
            raise InvalidDateError(field, str(date))

    @property
    def workday(self) -> WorkdayCalendar:
        return self._workday

    @log_duration("workday_increment")
    def increment(self, start: DateValue, amount: float) -> IncrementResult:
        """
        Move a date by a number of workdays.

        Args:
            start: Starting date and time.
            amount: Workdays to move; negative moves backward.

        Returns:
            IncrementResult with the resulting date.

        Raises:
            ValidationError: If |amount| exceeds the configured maximum.
            InvalidDateError: If the start date is not a calendar date.
            WorkdayNotConfiguredError: If no workday hours are set.
            IncrementFailedError: If the engine returns the invalid sentinel.
        """
        limit = self._settings.max_increment
        if abs(amount) > limit:
            raise ValidationError("amount", f"must be within +/-{limit:g} workdays")

        self._require_valid("start", start)
        if not self._workday.is_configured:
            raise WorkdayNotConfiguredError()

        result = IncrementResult(
            start=start,
            amount=amount,
            result=self._workday.get_workday_increment(start, amount),
        )

        outcome = "failed" if result.result.is_invalid else "ok"
        get_metrics().workday_increments_total.inc(
            direction=result.direction,
            outcome=outcome,
        )

        if result.result.is_invalid:
            raise IncrementFailedError(str(start), amount)

        logger.info(
            f"Moved {amount} workdays from {start} to {result.result}",
            extra={"extra_fields": result.to_dict()}
        )
        return result

    def set_workday_hours(self, start: DateValue, stop: DateValue) -> WorkdayHours:
        """
        Replace the daily work window.

        Both times are taken on the same day, so the stop must come after
        the start.

        Raises:
            InvalidDateError: If either time is rejected by the calendar.
            ValidationError: If the stop is not after the start.

        The current configuration is left untouched when an error is raised.
        """
        self._require_valid("start", start)
        self._require_valid("stop", stop)
        if not _is_daytime_window(start, stop):
            raise ValidationError("stop", f"must be after start ({stop.time} <= {start.time})")

        self._workday.set_workday_start_and_stop(start, stop)
        hours = self._workday.workday_hours
        if hours is None:
            raise WorkdayNotConfiguredError()

        logger.info(
            f"Workday hours changed to {start.time} - {stop.time}",
            extra={"extra_fields": {"duration": hours.duration}}
        )
        return hours

    def get_workday_hours(self) -> Optional[WorkdayHours]:
        return self._workday.workday_hours

    def register_holiday(self, date: DateValue, recurring: bool = False) -> None:
        """
        Register a one-time or recurring holiday.

        Raises:
            InvalidDateError: If the date is rejected by the calendar.
        """
        self._require_valid("date", date)

        if recurring:
            self._workday.set_recurring_holiday(date)
        else:
            self._workday.set_holiday(date)

        kind = "recurring" if recurring else "one_time"
        get_metrics().holidays_registered_total.inc(kind=kind)
        logger.info(
            f"Registered {kind} holiday {date.date_string()}",
            extra={"extra_fields": {"date": date.date_string(), "kind": kind}}
        )

    def is_holiday(self, date: DateValue) -> bool:
        self._require_valid("date", date)
        return self._workday.is_holiday(date)


# Process-wide service instance
_service: Optional[WorkdayService] = None


def get_workday_service() -> WorkdayService:
    """Get the process-wide workday service, building it on first use."""
    global _service
    if _service is None:
        _service = WorkdayService()
    return _service
