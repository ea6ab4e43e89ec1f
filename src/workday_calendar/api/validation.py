"""
API Request Validation.

Uses Pydantic for request payload validation. Date fields arrive as
text and leave as DateValue instances; whether those values exist on
the calendar, and whether an amount is within the configured limit, is
decided by the workday service.
"""

import math
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from workday_calendar.core import DateValue


def _parse_text(value: Any, parser: Callable[[str], DateValue]) -> Any:
    """Parse text with the given parser; other values are left for type checking."""
    if not isinstance(value, str):
        return value
    return parser(value)


class WorkdayIncrementRequest(BaseModel):
    """Request body for /workday-increment endpoint."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    start: Optional[DateValue] = Field(
        default=None,
        description="Start as YYYY-MM-DD HH:MM; defaults to the current time",
    )
    amount: float = Field(
        ...,
        description="Workdays to move; negative moves backward",
    )

    @field_validator("start", mode="before")
    @classmethod
    def parse_start(cls, v: Any) -> Any:
        return _parse_text(v, DateValue.parse)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("amount must be a finite number")
        return v


class WorkdayHoursRequest(BaseModel):
    """Request body for PUT /workday-hours endpoint."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    start: DateValue = Field(..., description="Daily start as HH:MM")
    stop: DateValue = Field(..., description="Daily stop as HH:MM")

    @field_validator("start", "stop", mode="before")
    @classmethod
    def parse_clock(cls, v: Any) -> Any:
        return _parse_text(v, DateValue.parse_clock)


class HolidayRequest(BaseModel):
    """Request body for /holidays endpoint."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    date: DateValue = Field(..., description="Holiday as YYYY-MM-DD")
    recurring: bool = Field(
        default=False,
        description="If true, the holiday repeats every year on the same month and day",
    )

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        return _parse_text(v, DateValue.parse)
