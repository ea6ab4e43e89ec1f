"""
Tests for WorkdayService.

Tests configuration from settings and the translation of engine
sentinels into business errors.
"""

import pytest

from workday_calendar.config import WorkdaySettings
from workday_calendar.core import (
    ConfigurationError,
    DateValue,
    GregorianCalendar,
    IncrementFailedError,
    InvalidDateError,
    ValidationError,
    WorkdayCalendar,
    WorkdayNotConfiguredError,
)
from workday_calendar.infrastructure.metrics import get_metrics
from workday_calendar.services import IncrementResult, WorkdayService


def _settings(**overrides) -> WorkdaySettings:
    values = {
        "start": "08:00",
        "stop": "16:00",
        "holidays": (),
        "recurring_holidays": (),
        "max_increment": 10000.0,
    }
    values.update(overrides)
    return WorkdaySettings(**values)


class _ModernCalendar(GregorianCalendar):
    """Gregorian rules restricted to dates from the year 2000 on."""

    def is_valid_date(self, date):
        return date.year >= 2000 and super().is_valid_date(date)


class TestConfiguration:
    """Tests for building the engine from settings."""

    def test_configures_hours(self, service):
        hours = service.get_workday_hours()

        assert hours.start.time == (8, 0)
        assert hours.stop.time == (16, 0)
        assert hours.duration == (8, 0)

    def test_configures_holidays(self):
        service = WorkdayService(workday_settings=_settings(
            holidays=("2024-07-04",),
            recurring_holidays=("12-25", "02-29"),
        ))

        assert service.is_holiday(DateValue(2024, 7, 4)) is True
        assert service.is_holiday(DateValue(2027, 12, 24)) is False
        assert service.is_holiday(DateValue(2031, 12, 25)) is True
        assert service.is_holiday(DateValue(2028, 2, 29)) is True

    @pytest.mark.parametrize("start, stop", [
        ("25:00", "16:00"),
        ("8am", "16:00"),
        ("08:00", "16:75"),
    ])
    def test_invalid_hours_raise_configuration_error(self, start, stop):
        with pytest.raises(ConfigurationError) as exc_info:
            WorkdayService(workday_settings=_settings(start=start, stop=stop))

        assert exc_info.value.config_name == "WORKDAY_START/WORKDAY_STOP"

    @pytest.mark.parametrize("start, stop", [
        ("09:00", "09:00"),
        ("22:00", "06:00"),
    ])
    def test_window_without_daytime_span_raises_configuration_error(self, start, stop):
        """Zero-length and overnight windows would make every increment fail."""
        with pytest.raises(ConfigurationError) as exc_info:
            WorkdayService(workday_settings=_settings(start=start, stop=stop))

        assert exc_info.value.config_name == "WORKDAY_START/WORKDAY_STOP"

    def test_invalid_holiday_raises_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            WorkdayService(workday_settings=_settings(holidays=("2023-02-29",)))

        assert exc_info.value.config_name == "HOLIDAYS"

    def test_malformed_recurring_holiday_raises_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            WorkdayService(workday_settings=_settings(recurring_holidays=("Dec 25",)))

        assert exc_info.value.config_name == "RECURRING_HOLIDAYS"

    def test_injected_engine_is_used_as_is(self):
        """An injected engine should not be reconfigured from settings."""
        engine = WorkdayCalendar()
        service = WorkdayService(workday_calendar=engine)

        assert service.workday is engine
        assert service.get_workday_hours() is None


class TestIncrement:
    """Tests for increment."""

    def test_returns_result(self, service):
        start = DateValue(2024, 7, 1, 15, 0)

        result = service.increment(start, 1)

        assert isinstance(result, IncrementResult)
        assert result.result == DateValue(2024, 7, 2, 15, 0)
        assert result.direction == "increment"
        assert result.to_dict() == {
            "start": "2024-07-01 15:00",
            "amount": 1,
            "result": "2024-07-02 15:00",
        }

    def test_negative_amount_is_decrement(self, service):
        result = service.increment(DateValue(2024, 5, 11, 9, 0), -1)

        assert result.direction == "decrement"
        assert result.result == DateValue(2024, 5, 9, 16, 0)

    def test_invalid_start_raises(self, service):
        with pytest.raises(InvalidDateError) as exc_info:
            service.increment(DateValue(2023, 2, 29, 9, 0), 1)

        assert exc_info.value.field == "start"

    def test_amount_limit_comes_from_service_settings(self):
        service = WorkdayService(workday_settings=_settings(max_increment=5.0))

        assert service.increment(DateValue(2024, 7, 1, 9, 0), -5).result == DateValue(2024, 6, 24, 9, 0)
        with pytest.raises(ValidationError) as exc_info:
            service.increment(DateValue(2024, 7, 1, 9, 0), 5.5)

        assert exc_info.value.field == "amount"

    def test_start_is_checked_against_injected_calendar(self):
        workday = WorkdayCalendar(calendar=_ModernCalendar())
        workday.set_workday_start_and_stop(DateValue.clock(8, 0), DateValue.clock(16, 0))
        service = WorkdayService(workday_calendar=workday)

        with pytest.raises(InvalidDateError):
            service.increment(DateValue(1999, 12, 31, 9, 0), 1)

    def test_unconfigured_engine_raises(self):
        service = WorkdayService(workday_calendar=WorkdayCalendar())

        with pytest.raises(WorkdayNotConfiguredError):
            service.increment(DateValue(2024, 7, 1, 9, 0), 1)

    def test_sentinel_result_raises(self, all_holidays_workday):
        service = WorkdayService(workday_calendar=all_holidays_workday)

        with pytest.raises(IncrementFailedError) as exc_info:
            service.increment(DateValue(2024, 7, 1, 9, 0), 1)

        assert exc_info.value.amount == 1

    def test_records_increment_metrics(self, service, all_holidays_workday):
        counter = get_metrics().workday_increments_total
        ok_before = counter.get(direction="decrement", outcome="ok")
        failed_before = counter.get(direction="increment", outcome="failed")

        service.increment(DateValue(2024, 7, 3, 9, 0), -1)
        with pytest.raises(IncrementFailedError):
            WorkdayService(workday_calendar=all_holidays_workday).increment(
                DateValue(2024, 7, 1, 9, 0), 2
            )

        assert counter.get(direction="decrement", outcome="ok") == ok_before + 1
        assert counter.get(direction="increment", outcome="failed") == failed_before + 1


class TestWorkdayHours:
    """Tests for changing the work window at runtime."""

    def test_set_workday_hours(self, service):
        hours = service.set_workday_hours(DateValue.clock(9, 30), DateValue.clock(17, 0))

        assert hours.duration == (7, 30)
        assert service.get_workday_hours() == hours

    def test_invalid_hours_keep_current_configuration(self, service):
        before = service.get_workday_hours()

        with pytest.raises(InvalidDateError):
            service.set_workday_hours(DateValue.clock(9, 0), DateValue.clock(24, 0))

        assert service.get_workday_hours() == before

    @pytest.mark.parametrize("start, stop", [
        (DateValue.clock(9, 0), DateValue.clock(9, 0)),
        (DateValue.clock(22, 0), DateValue.clock(6, 0)),
    ])
    def test_window_without_daytime_span_is_rejected(self, service, start, stop):
        before = service.get_workday_hours()

        with pytest.raises(ValidationError) as exc_info:
            service.set_workday_hours(start, stop)

        assert exc_info.value.field == "stop"
        assert service.get_workday_hours() == before
        assert service.increment(DateValue(2024, 7, 1, 9, 0), 1).result == DateValue(2024, 7, 2, 9, 0)

    def test_new_hours_apply_to_increments(self, service):
        service.set_workday_hours(DateValue.clock(9, 0), DateValue.clock(17, 0))

        result = service.increment(DateValue(2024, 7, 1, 7, 0), 0.5)

        assert result.result == DateValue(2024, 7, 1, 13, 0)


class TestHolidays:
    """Tests for holiday registration."""

    def test_register_one_time_holiday(self, service):
        service.register_holiday(DateValue(2024, 7, 4))

        assert service.is_holiday(DateValue(2024, 7, 4)) is True
        assert service.is_holiday(DateValue(2025, 7, 4)) is False

    def test_register_recurring_holiday(self, service):
        service.register_holiday(DateValue(2024, 12, 25), recurring=True)

        assert service.is_holiday(DateValue(2029, 12, 25)) is True

    def test_register_invalid_holiday_raises(self, service):
        with pytest.raises(InvalidDateError) as exc_info:
            service.register_holiday(DateValue(2023, 2, 30))

        assert exc_info.value.field == "date"

    def test_register_records_metric(self, service):
        counter = get_metrics().holidays_registered_total
        before = counter.get(kind="recurring")

        service.register_holiday(DateValue(2024, 1, 1), recurring=True)

        assert counter.get(kind="recurring") == before + 1

    def test_weekend_is_holiday(self, service):
        assert service.is_holiday(DateValue(2024, 5, 11)) is True

    def test_is_holiday_rejects_invalid_date(self, service):
        with pytest.raises(InvalidDateError):
            service.is_holiday(DateValue(2024, 2, 30))
