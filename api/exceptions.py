"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Every error body has the shape
``{"success": false, "error": {"code": ..., "message": ...}}``.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    AdminAccessDeniedError,
    DeviceMismatchError,
    DeviceNotBoundError,
    DomainException,
    LicenseAlreadyUsedError,
    LicenseExpiredError,
    LicenseNotFoundError,
    OrderNotFoundError,
    UpstreamError,
    ValidationError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

DOMAIN_STATUS_CODES = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (LicenseExpiredError, status.HTTP_400_BAD_REQUEST),
    ((LicenseNotFoundError, OrderNotFoundError, DeviceNotBoundError), status.HTTP_404_NOT_FOUND),
    (LicenseAlreadyUsedError, status.HTTP_409_CONFLICT),
    ((DeviceMismatchError, AdminAccessDeniedError), status.HTTP_403_FORBIDDEN),
    (UpstreamError, status.HTTP_502_BAD_GATEWAY),
)


def error_body(code: str, message: str) -> Dict[str, Any]:
    """Build the error response body."""
    return {"success": False, "error": {"code": code, "message": message}}


def status_for(exc: DomainException) -> int:
    """Map a domain exception to its HTTP status code."""
    for exc_types, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_types):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, context, trace_id)
    elif isinstance(exc, DRFValidationError):
        response = Response(
            error_body("VALIDATION_ERROR", _first_validation_message(exc.detail)),
            status=status.HTTP_400_BAD_REQUEST,
        )
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        response.data = error_body(code, str(exc.detail))
    elif isinstance(exc, Http404):
        response = Response(
            error_body("NOT_FOUND", "Resource not found"), status=status.HTTP_404_NOT_FOUND
        )
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return request.path if request else "unknown"


def _first_validation_message(detail: Any) -> str:
    """Flatten DRF validation details into one human-readable message."""
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = _first_validation_message(value)
            return message if field == "non_field_errors" else f"{field}: {message}"
    if isinstance(detail, list) and detail:
        return _first_validation_message(detail[0])
    return str(detail) or "Invalid input"


def _handle_domain_exception(
    exc: DomainException, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status_for(exc)
    errors_total.labels(error_type=exc.code.lower(), endpoint=_endpoint(context)).inc()
    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response(error_body(exc.code, exc.message), status=status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    errors_total.labels(error_type="internal_error", endpoint=_endpoint(context)).inc()
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        error_body("INTERNAL_ERROR", "An internal error occurred"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
