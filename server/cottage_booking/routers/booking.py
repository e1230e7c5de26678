"""Booking router for reservation operations."""

import logging
from typing import Any, Awaitable, Callable, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import DatabaseSession, IdempotencyKey, RangeLocks
from ..core.exceptions import ReservationException
from ..core.locks import CottageLocks
from ..schemas.booking import Booking, CreateBookingRequest, GetBookingRequest, UpdateBookingStatusRequest
from ..schemas.common import envelope
from ..services.booking_service import BookingService
from ..services.idempotency_service import IdempotencyService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["booking"])


async def handle_idempotent_operation(
    operation: str,
    idempotency_key: Optional[str],
    request_body: dict[str, Any],
    operation_func: Callable[[], Awaitable[dict[str, Any]]],
    db: AsyncSession
) -> JSONResponse:
    """
    Run a create operation, replaying the stored response for a repeated key.

    Without a key the operation simply runs. Non-retryable failures are
    stored too, so a retry with the same key gets the same answer.
    """
    if idempotency_key is None:
        return JSONResponse(status_code=200, content=await operation_func())

    idempotency_service = IdempotencyService(db)

    cached_response = await idempotency_service.check_idempotency(
        idempotency_key=idempotency_key,
        operation=operation,
        request_body=request_body
    )
    if cached_response:
        status_code, response_body = cached_response
        return JSONResponse(status_code=status_code, content=response_body)

    try:
        response_body = await operation_func()
    except ReservationException as e:
        if not e.retryable:
            await idempotency_service.store_response(
                idempotency_key=idempotency_key,
                operation=operation,
                request_body=request_body,
                status_code=e.status_code,
                response_body=e.to_envelope()
            )
        raise

    await idempotency_service.store_response(
        idempotency_key=idempotency_key,
        operation=operation,
        request_body=request_body,
        status_code=200,
        response_body=response_body
    )
    return JSONResponse(status_code=200, content=response_body)


@router.post("/createBooking")
async def create_booking(
    request: CreateBookingRequest,
    db: AsyncSession = DatabaseSession,
    locks: CottageLocks = RangeLocks,
    idempotency_key: Optional[str] = IdempotencyKey
) -> JSONResponse:
    """
    Create a booking for a cottage, a package and a stay.

    Honours an optional Idempotency-Key header.
    """
    booking_service = BookingService(db, locks=locks)

    async def operation() -> dict[str, Any]:
        booking = await booking_service.create_booking(request)
        return envelope(Booking.model_validate(booking), message="Booking created successfully")

    return await handle_idempotent_operation(
        operation="createBooking",
        idempotency_key=idempotency_key,
        request_body=request.model_dump(mode="json"),
        operation_func=operation,
        db=db
    )


@router.post("/getBookingDetails")
async def get_booking_details(
    request: GetBookingRequest,
    db: AsyncSession = DatabaseSession
) -> JSONResponse:
    """Get a booking with its cottage, package and safari bookings."""
    details = await BookingService(db).get_booking_details(request.booking_id)
    return JSONResponse(status_code=200, content=envelope(details))


@router.post("/updateBookingStatus")
async def update_booking_status(
    request: UpdateBookingStatusRequest,
    db: AsyncSession = DatabaseSession,
    locks: CottageLocks = RangeLocks
) -> JSONResponse:
    """Change a booking's status."""
    booking = await BookingService(db, locks=locks).update_booking_status(
        request.booking_id, request.status
    )
    return JSONResponse(
        status_code=200,
        content=envelope(Booking.model_validate(booking), message="Booking status updated successfully")
    )
