"""
Custom exceptions for the workday calendar service.

Provides a hierarchy of business and infrastructure exceptions
for proper error handling and HTTP status code mapping.

The workday engine itself never raises across its public boundary;
these are raised by the service and configuration layers, and
CalendarError only inside the engine's own computation.
"""

from typing import Optional


class WorkdayCalendarError(Exception):
    """Base exception for all workday calendar errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CalendarError(WorkdayCalendarError):
    """Raised when calendar stepping cannot produce a meaningful date."""
    pass


# =============================================================================
# Business Errors (4xx)
# =============================================================================

class BusinessError(WorkdayCalendarError):
    """Base exception for business logic errors (typically 4xx)."""
    pass


class ValidationError(BusinessError):
    """Raised when request validation fails."""

    def __init__(self, field: str, message: str):
        super().__init__(
            f"Validation error on '{field}': {message}",
            {"field": field}
        )
        self.field = field


class InvalidDateError(BusinessError):
    """Raised when a date is rejected by the calendar."""

    def __init__(self, field: str, value: str):
        super().__init__(
            f"Invalid date for '{field}': {value}",
            {"field": field, "value": value}
        )
        self.field = field
        self.value = value


class WorkdayNotConfiguredError(BusinessError):
    """Raised when workday start/stop times have not been set."""

    def __init__(self):
        super().__init__("Workday start and stop times are not configured")


class IncrementFailedError(BusinessError):
    """Raised when a workday increment yields the invalid sentinel."""

    def __init__(self, start: str, amount: float):
        super().__init__(
            f"Workday increment failed: {amount} workdays from {start}",
            {"start": start, "amount": amount}
        )
        self.start = start
        self.amount = amount


# =============================================================================
# Infrastructure Errors (5xx)
# =============================================================================

class InfrastructureError(WorkdayCalendarError):
    """Base exception for infrastructure errors (typically 5xx)."""
    pass


class ConfigurationError(InfrastructureError):
    """Raised when a required configuration is missing or malformed."""

    def __init__(self, config_name: str, message: Optional[str] = None):
        msg = message or f"Configuration missing: {config_name}"
        super().__init__(msg, {"config_name": config_name})
        self.config_name = config_name
