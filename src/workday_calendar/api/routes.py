"""
Flask API Routes.

Defines all HTTP endpoints for the workday calendar service.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, request
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

from workday_calendar import __version__
from workday_calendar.api.validation import (
    HolidayRequest,
    WorkdayHoursRequest,
    WorkdayIncrementRequest,
)
from workday_calendar.core import (
    BusinessError,
    DateValue,
    IncrementFailedError,
    InfrastructureError,
    InvalidDateError,
    ValidationError,
    WorkdayHours,
    WorkdayNotConfiguredError,
)
from workday_calendar.infrastructure.logging import get_logger
from workday_calendar.infrastructure.metrics import metrics_endpoint
from workday_calendar.services import get_workday_service


logger = get_logger(__name__)


api_bp = Blueprint("api", __name__)


def _error_response(
    message: str,
    status_code: int,
    error_type: str = "error",
) -> Tuple[Dict[str, Any], int]:
    """Create standardized error response."""
    return {
        "success": False,
        "error": message,
        "error_type": error_type,
    }, status_code


def _success_response(
    data: Dict[str, Any],
    status_code: int = 200,
) -> Tuple[Dict[str, Any], int]:
    """Create standardized success response."""
    return {
        "success": True,
        **data,
    }, status_code


def _validation_error(error: PydanticValidationError) -> Tuple[Dict[str, Any], int]:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    message = str(first["msg"])
    if field:
        message = f"{field}: {message}"
    return _error_response(message, 400, "validation_error")


def _hours_payload(hours: Optional[WorkdayHours]) -> Dict[str, Any]:
    if hours is None:
        return {"configured": False, "start": None, "stop": None, "duration": None}
    return {
        "configured": True,
        "start": f"{hours.start.hour:02d}:{hours.start.minute:02d}",
        "stop": f"{hours.stop.hour:02d}:{hours.stop.minute:02d}",
        "duration": f"{hours.duration[0]:02d}:{hours.duration[1]:02d}",
    }


# ============================================================================
# Health Check
# ============================================================================

@api_bp.route("/health", methods=["GET"])
def health_check() -> Tuple[Dict[str, Any], int]:
    """
    Health check endpoint for liveness and startup probes.

    Returns:
        Health status response.
    """
    return _success_response({
        "status": "healthy",
        "service": "workday-calendar",
        "version": __version__,
    })


@api_bp.route("/", methods=["GET"])
def root() -> Tuple[Dict[str, Any], int]:
    """Root endpoint - same payload as /health."""
    return health_check()


@api_bp.route("/metrics", methods=["GET"])
def metrics():
    """Prometheus metrics endpoint."""
    return metrics_endpoint()


# ============================================================================
# Workday Endpoints
# ============================================================================

@api_bp.route("/workday-increment", methods=["POST"])
def workday_increment() -> Tuple[Dict[str, Any], int]:
    """
    Move a date by a fractional number of workdays.

    Request Body:
        start (str, optional): "YYYY-MM-DD HH:MM"; defaults to now.
        amount (float): Workdays to move; negative moves backward.

    Returns:
        The start, amount and resulting date.
    """
    data = request.get_json(silent=True) or {}

    try:
        validated = WorkdayIncrementRequest.model_validate(data)
    except PydanticValidationError as e:
        return _validation_error(e)

    start = validated.start or DateValue.from_datetime(datetime.now())

    try:
        result = get_workday_service().increment(start, validated.amount)
    except WorkdayNotConfiguredError as e:
        return _error_response(str(e), 409, "not_configured")
    except IncrementFailedError as e:
        return _error_response(str(e), 422, "increment_failed")

    return _success_response(result.to_dict())


@api_bp.route("/workday-hours", methods=["GET"])
def get_workday_hours() -> Tuple[Dict[str, Any], int]:
    """Get the configured daily work window."""
    return _success_response(_hours_payload(get_workday_service().get_workday_hours()))


@api_bp.route("/workday-hours", methods=["PUT"])
def set_workday_hours() -> Tuple[Dict[str, Any], int]:
    """
    Replace the daily work window.

    Request Body:
        start (str): "HH:MM".
        stop (str): "HH:MM".
    """
    data = request.get_json(silent=True) or {}

    try:
        validated = WorkdayHoursRequest.model_validate(data)
    except PydanticValidationError as e:
        return _validation_error(e)

    hours = get_workday_service().set_workday_hours(validated.start, validated.stop)
    return _success_response(_hours_payload(hours))


# ============================================================================
# Holiday Endpoints
# ============================================================================

@api_bp.route("/holidays", methods=["POST"])
def register_holiday() -> Tuple[Dict[str, Any], int]:
    """
    Register a holiday.

    Request Body:
        date (str): "YYYY-MM-DD".
        recurring (bool, optional): Repeat every year on the same month/day.
    """
    data = request.get_json(silent=True) or {}

    try:
        validated = HolidayRequest.model_validate(data)
    except PydanticValidationError as e:
        return _validation_error(e)

    get_workday_service().register_holiday(validated.date, validated.recurring)

    return _success_response({
        "date": validated.date.date_string(),
        "recurring": validated.recurring,
    }, 201)


@api_bp.route("/holidays/<date_text>", methods=["GET"])
def check_holiday(date_text: str) -> Tuple[Dict[str, Any], int]:
    """Check whether a date is a weekend day or registered holiday."""
    try:
        date = DateValue.parse(date_text)
    except ValueError as e:
        raise ValidationError("date", str(e)) from e

    is_holiday = get_workday_service().is_holiday(date)
    return _success_response({
        "date": date.date_string(),
        "is_holiday": is_holiday,
    })


# ============================================================================
# Error Handlers
# ============================================================================

@api_bp.errorhandler(ValidationError)
def handle_validation_error(error: ValidationError) -> Tuple[Dict[str, Any], int]:
    return _error_response(str(error), 400, "validation_error")


@api_bp.errorhandler(InvalidDateError)
def handle_invalid_date(error: InvalidDateError) -> Tuple[Dict[str, Any], int]:
    return _error_response(str(error), 400, "invalid_date")


@api_bp.errorhandler(BusinessError)
def handle_business_error(error: BusinessError) -> Tuple[Dict[str, Any], int]:
    """Handle business logic errors (4xx)."""
    logger.warning(
        f"Business error: {error}",
        extra={"extra_fields": {"error_type": type(error).__name__}}
    )
    return _error_response(str(error), 400, type(error).__name__)


@api_bp.errorhandler(InfrastructureError)
def handle_infrastructure_error(
    error: InfrastructureError,
) -> Tuple[Dict[str, Any], int]:
    """Handle configuration and other infrastructure errors (5xx)."""
    logger.error(
        f"Infrastructure error: {error}",
        extra={"extra_fields": {"error_type": type(error).__name__}}
    )
    return _error_response(str(error), 503, type(error).__name__)


@api_bp.errorhandler(Exception)
def handle_unexpected_error(error: Exception):
    """Handle unexpected errors (500)."""
    if isinstance(error, HTTPException):
        return error

    logger.exception(
        f"Unexpected error: {error}",
        extra={"extra_fields": {"error_type": type(error).__name__}}
    )
    return _error_response(
        "An unexpected error occurred",
        500,
        "internal_error",
    )
