"""Typed reservation errors and the handlers that render them.

Errors keep their type (and HTTP status) inside the service while the wire
format stays the flat ``{"success": false, "error": "<message>"}`` envelope
that booking clients already understand.
"""

import logging
import uuid
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ReservationException(HTTPException):
    """
    Base exception for every failure the API reports to a caller.

    Carries an HTTP status, a short title, a human-readable detail, a
    machine-readable code and whether retrying the same call may succeed.
    """

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: str,
        code: str,
        retryable: bool = False,
        extensions: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.title = title
        self.code = code
        self.retryable = retryable
        self.extensions = extensions or {}
        super().__init__(status_code=status_code, detail=detail, headers=headers)

    def to_envelope(self) -> Dict[str, Any]:
        """Render the error as a response envelope."""
        body = {
            "success": False,
            "error": self.detail,
            "code": self.code,
            "retryable": self.retryable,
        }
        body.update(self.extensions)
        return body


class ValidationError(ReservationException):
    """Missing or malformed input, guests over capacity, invalid date range."""

    def __init__(self, detail: str = "The request data failed validation", errors: Optional[list] = None):
        super().__init__(
            status_code=400,
            title="Validation Error",
            detail=detail,
            code="VALIDATION_ERROR",
            extensions={"errors": errors} if errors else None,
        )


class NotFoundError(ReservationException):
    """Exception for resource not found errors."""

    def __init__(
        self,
        resource_type: str = "resource",
        resource_id: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        if not detail:
            detail = f"The requested {resource_type}"
            if resource_id:
                detail += f" with ID '{resource_id}'"
            detail += " could not be found"

        super().__init__(
            status_code=404,
            title="Resource Not Found",
            detail=detail,
            code="NOT_FOUND",
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(ReservationException):
    """The request conflicts with the current state of the store."""

    def __init__(
        self,
        detail: str = "The request conflicts with the current state of the resource",
        code: str = "CONFLICT",
        extensions: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            status_code=409,
            title="Resource Conflict",
            detail=detail,
            code=code,
            extensions=extensions,
        )


class DatesUnavailableError(ConflictError):
    """One or more nights of the requested stay are already held."""

    def __init__(self, cottage_id: str, dates: Iterable[date] = ()):
        conflicting = sorted(dates)
        super().__init__(
            detail="Selected dates are not available for this cottage",
            code="DATES_UNAVAILABLE",
            extensions={
                "cottageId": cottage_id,
                "conflictingDates": [d.isoformat() for d in conflicting],
            },
        )
        self.cottage_id = cottage_id
        self.dates = conflicting


class InvalidStatusTransitionError(ConflictError):
    """A status change not allowed by the strict transition table."""

    def __init__(self, resource_type: str, current: str, requested: str):
        super().__init__(
            detail=f"Cannot change {resource_type} status from {current} to {requested}",
            code="INVALID_STATUS_TRANSITION",
            extensions={"currentStatus": current, "requestedStatus": requested},
        )


class IdempotencyMismatchError(ReservationException):
    """Idempotency key reused with a different request body."""

    def __init__(self, idempotency_key: str, operation: str):
        super().__init__(
            status_code=422,
            title="Idempotency Key Mismatch",
            detail=(
                f"Idempotency key '{idempotency_key}' was already used for "
                f"'{operation}' with a different request body"
            ),
            code="IDEMPOTENCY_KEY_MISMATCH",
        )


class StoreError(ReservationException):
    """The underlying data store failed."""

    def __init__(self, detail: str = "The reservation store failed to complete the request", operation: Optional[str] = None):
        super().__init__(
            status_code=500,
            title="Store Error",
            detail=detail,
            code="STORE_ERROR",
            extensions={"operation": operation} if operation else None,
        )


class StoreTimeoutError(ReservationException):
    """A store round trip exceeded its time budget; the call may be retried."""

    def __init__(self, operation: str, timeout_seconds: float):
        super().__init__(
            status_code=503,
            title="Store Timeout",
            detail=f"The reservation store did not answer '{operation}' within {timeout_seconds:g}s",
            code="STORE_TIMEOUT",
            retryable=True,
            extensions={"operation": operation},
            headers={"Retry-After": "1"},
        )


async def reservation_exception_handler(request: Request, exc: ReservationException) -> JSONResponse:
    """
    Exception handler for typed reservation errors.

    Args:
        request: FastAPI request object
        exc: Raised reservation error

    Returns:
        JSONResponse: Envelope with ``success: false``
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_envelope(),
        headers=exc.headers,
    )


def _describe_violation(error: Dict[str, Any]) -> str:
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "header")]
    field = ".".join(location) or "body"
    return f"{field} ({error.get('msg', 'invalid')})"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI body validation failures as 400 envelopes."""
    violations = [_describe_violation(error) for error in exc.errors()]
    error = ValidationError(
        detail="Missing or invalid parameters: " + ", ".join(violations),
        errors=violations,
    )
    return JSONResponse(status_code=error.status_code, content=error.to_envelope())


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Convert unhandled exceptions into a 500 envelope with a correlation id.

    Args:
        request: FastAPI request object
        exc: Unhandled exception

    Returns:
        JSONResponse: Error envelope
    """
    error_id = str(uuid.uuid4())
    logger.error(
        "Unhandled exception",
        extra={"error_id": error_id, "path": request.url.path, "error": str(exc)},
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "An unexpected error occurred while processing the request",
            "code": "INTERNAL_ERROR",
            "retryable": False,
            "errorId": error_id,
            "timestamp": datetime.utcnow().isoformat() + "Z",
        },
    )
