"""
Test Configuration and Fixtures.

Provides shared fixtures for all tests.
"""

import pytest
from flask import Flask
from flask.testing import FlaskClient

import workday_calendar.services.workday_service as workday_service_module
from workday_calendar.app import create_app
from workday_calendar.config import WorkdaySettings
from workday_calendar.core import DateValue, WorkdayCalendar, days_in_month
from workday_calendar.services import WorkdayService


WORKDAY_START = DateValue(2004, 1, 1, 8, 0)
WORKDAY_STOP = DateValue(2004, 1, 1, 16, 0)


@pytest.fixture
def workday() -> WorkdayCalendar:
    """Workday calendar with an 08:00-16:00 window and no holidays."""
    calendar = WorkdayCalendar()
    calendar.set_workday_start_and_stop(WORKDAY_START, WORKDAY_STOP)
    return calendar


@pytest.fixture
def all_holidays_workday(workday: WorkdayCalendar) -> WorkdayCalendar:
    """Workday calendar where every day of the year is a recurring holiday."""
    for month in range(1, 13):
        for day in range(1, days_in_month(2000, month) + 1):
            workday.set_recurring_holiday(DateValue(2000, month, day))
    return workday


@pytest.fixture
def workday_settings() -> WorkdaySettings:
    """Settings independent of the environment."""
    return WorkdaySettings(
        start="08:00",
        stop="16:00",
        holidays=(),
        recurring_holidays=(),
        max_increment=10000.0,
    )


@pytest.fixture
def service(workday_settings: WorkdaySettings, monkeypatch) -> WorkdayService:
    """Fresh workday service installed as the process-wide instance."""
    svc = WorkdayService(workday_settings=workday_settings)
    monkeypatch.setattr(workday_service_module, "_service", svc)
    return svc


@pytest.fixture
def app(service: WorkdayService) -> Flask:
    """Create test Flask application."""
    return create_app({"TESTING": True})


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create test client."""
    return app.test_client()
