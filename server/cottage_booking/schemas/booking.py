"""Booking, availability and pricing Pydantic schemas."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from ..models.booking import BookingStatus, PaymentStatus
from .catalog import Cottage, Package
from .common import Amount, CamelModel, Day
from .safari import SafariBooking


class CustomerInfo(CamelModel):
    """Guest contact details captured by the booking form."""

    name: str = Field(..., min_length=1, max_length=255, description="Guest full name")
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$", description="Guest email")
    phone: Optional[str] = Field(None, max_length=50, description="Guest phone number")


class CheckAvailabilityRequest(CamelModel):
    """Request schema for checking a cottage's availability."""

    cottage_id: UUID = Field(..., description="Cottage to check")
    check_in_date: Day = Field(..., description="First night of the stay")
    check_out_date: Day = Field(..., description="Departure day (exclusive)")


class CalculateCostRequest(CamelModel):
    """Request schema for pricing a stay without booking it."""

    cottage_id: UUID = Field(..., description="Cottage to price")
    package_id: UUID = Field(..., description="Package to add")
    check_in_date: Day = Field(..., description="First night of the stay")
    check_out_date: Day = Field(..., description="Departure day (exclusive)")


class CreateBookingRequest(CamelModel):
    """Request schema for creating a booking."""

    cottage_id: UUID = Field(..., description="Cottage to reserve")
    package_id: UUID = Field(..., description="Package to add")
    check_in_date: Day = Field(..., description="First night of the stay")
    check_out_date: Day = Field(..., description="Departure day (exclusive)")
    adults: int = Field(..., ge=1, description="Number of adults")
    children: int = Field(0, ge=0, description="Number of children")
    customer_info: CustomerInfo = Field(..., description="Guest contact details")
    special_requests: str = Field("", max_length=2000, description="Free-text requests")


class GetBookingRequest(CamelModel):
    """Request schema for getting a booking."""

    booking_id: UUID = Field(..., description="Booking to retrieve")


class UpdateBookingStatusRequest(CamelModel):
    """Request schema for changing a booking's status."""

    booking_id: UUID = Field(..., description="Booking to update")
    status: BookingStatus = Field(..., description="New booking status")


class Booking(CamelModel):
    """Booking response schema."""

    id: UUID = Field(..., description="Unique booking ID")
    cottage_id: UUID
    package_id: UUID
    check_in_date: date
    check_out_date: date
    adults: int
    children: int
    total_cost: Amount
    status: BookingStatus
    customer_info: dict
    payment_status: PaymentStatus
    payment_id: Optional[str] = None
    special_requests: str = ""
    created_date: datetime
    updated_date: datetime


class BookingDetails(Booking):
    """Booking joined with its cottage, package and safari bookings."""

    cottage: Optional[Cottage] = None
    package: Optional[Package] = None
    safari_bookings: list[SafariBooking] = Field(default_factory=list)


class AvailabilityResult(CamelModel):
    """Outcome of an availability check."""

    is_available: bool
    message: str
    cottage: Optional[Cottage] = None
    conflicting_dates: list[date] = Field(default_factory=list)


class CostBreakdown(CamelModel):
    """Cost of a stay."""

    room_cost: Amount
    package_cost: Amount
    total_cost: Amount
    nights: int
    cost_per_night: Amount
