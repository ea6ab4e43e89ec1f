"""
Infrastructure Layer.

Cross-cutting adapters around the core:
- Structured JSON logging
- Prometheus-style metrics
"""

from workday_calendar.infrastructure.logging import (
    get_logger,
    log_duration,
    log_request_context,
    logger,
    StructuredLogger,
)


__all__ = [
    "get_logger",
    "log_duration",
    "log_request_context",
    "logger",
    "StructuredLogger",
]
