"""Configuration package."""

from workday_calendar.config.settings import (
    Settings,
    WorkdaySettings,
    settings,
)

__all__ = [
    "Settings",
    "WorkdaySettings",
    "settings",
]
