"""
Services Layer.

Business logic orchestration:
- Workday increments
- Workday hours and holiday management
"""

from workday_calendar.services.workday_service import (
    IncrementResult,
    WorkdayService,
    get_workday_service,
)


__all__ = [
    "IncrementResult",
    "WorkdayService",
    "get_workday_service",
]
