"""Safari router: safari sub-bookings and safari inquiries."""

from typing import Any, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import DatabaseSession, IdempotencyKey
from ..schemas.common import envelope
from ..schemas.safari import (
    CreateSafariBookingsRequest,
    CreateSafariInquiryRequest,
    ListSafariInquiriesRequest,
    SafariBooking,
    SafariInquiry,
    UpdateSafariInquiryStatusRequest,
    UpdateSafariStatusRequest,
)
from ..services.inquiry_service import InquiryService
from ..services.safari_service import SafariService
from .booking import handle_idempotent_operation

router = APIRouter(prefix="/v1", tags=["safari"])


@router.post("/createSafariBookings")
async def create_safari_bookings(
    request: CreateSafariBookingsRequest,
    db: AsyncSession = DatabaseSession,
    idempotency_key: Optional[str] = IdempotencyKey
) -> JSONResponse:
    """
    Attach safari slots to an existing booking.

    Honours an optional Idempotency-Key header.
    """
    safari_service = SafariService(db)

    async def operation() -> dict[str, Any]:
        safaris = await safari_service.create_safari_bookings(request.booking_id, request.safari_data)
        return envelope(
            [SafariBooking.model_validate(s) for s in safaris],
            message="Safari bookings created successfully"
        )

    return await handle_idempotent_operation(
        operation="createSafariBookings",
        idempotency_key=idempotency_key,
        request_body=request.model_dump(mode="json"),
        operation_func=operation,
        db=db
    )


@router.post("/updateSafariStatus")
async def update_safari_status(
    request: UpdateSafariStatusRequest,
    db: AsyncSession = DatabaseSession
) -> JSONResponse:
    """Change a safari booking's status."""
    safari = await SafariService(db).update_safari_status(request.safari_id, request.status)
    return JSONResponse(
        status_code=200,
        content=envelope(SafariBooking.model_validate(safari), message="Safari status updated successfully")
    )


@router.post("/createSafariInquiry")
async def create_safari_inquiry(
    request: CreateSafariInquiryRequest,
    db: AsyncSession = DatabaseSession
) -> JSONResponse:
    """Record a safari inquiry from the public form."""
    inquiry = await InquiryService(db).create_inquiry(request)
    return JSONResponse(
        status_code=200,
        content=envelope(SafariInquiry.model_validate(inquiry), message="Safari inquiry submitted successfully")
    )


@router.post("/listSafariInquiries")
async def list_safari_inquiries(
    request: Optional[ListSafariInquiriesRequest] = None,
    db: AsyncSession = DatabaseSession
) -> JSONResponse:
    """List inquiries, newest first, optionally filtered by status."""
    status = request.status if request else None
    inquiries = await InquiryService(db).list_inquiries(status)
    return JSONResponse(
        status_code=200,
        content=envelope([SafariInquiry.model_validate(i) for i in inquiries])
    )


@router.post("/updateSafariInquiryStatus")
async def update_safari_inquiry_status(
    request: UpdateSafariInquiryStatusRequest,
    db: AsyncSession = DatabaseSession
) -> JSONResponse:
    """Move an inquiry through follow-up."""
    inquiry = await InquiryService(db).update_inquiry_status(request.inquiry_id, request.status)
    return JSONResponse(
        status_code=200,
        content=envelope(SafariInquiry.model_validate(inquiry), message="Safari inquiry status updated successfully")
    )
