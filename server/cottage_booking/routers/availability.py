"""Availability and pricing router."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import DatabaseSession
from ..schemas.booking import CalculateCostRequest, CheckAvailabilityRequest, CostBreakdown
from ..schemas.common import envelope
from ..services.availability_service import AvailabilityService
from ..services.booking_service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["availability"])


@router.post("/checkCottageAvailability")
async def check_cottage_availability(
    request: CheckAvailabilityRequest,
    db: AsyncSession = DatabaseSession
) -> JSONResponse:
    """
    Check whether a cottage is free for a stay.

    An unknown or inactive cottage is reported with ``isAvailable: false``,
    not as an error.
    """
    result = await AvailabilityService(db).check_availability(
        request.cottage_id,
        request.check_in_date,
        request.check_out_date
    )
    return JSONResponse(status_code=200, content=envelope(result))


@router.post("/calculateBookingCost")
async def calculate_booking_cost(
    request: CalculateCostRequest,
    db: AsyncSession = DatabaseSession
) -> JSONResponse:
    """Price a stay without reserving it."""
    cost = await BookingService(db).calculate_booking_cost(request)

    logger.debug(
        "Booking cost calculated",
        extra={
            "cottage_id": str(request.cottage_id),
            "package_id": str(request.package_id),
            "nights": cost.nights,
            "total_cost": str(cost.total_cost)
        }
    )
    return JSONResponse(status_code=200, content=envelope(CostBreakdown.model_validate(cost)))
