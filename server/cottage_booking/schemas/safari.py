"""Safari booking and inquiry Pydantic schemas."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from ..models.safari import InquiryStatus, SafariStatus
from .common import CamelModel, Day


class SafariEntry(CamelModel):
    """One requested safari slot."""

    date: Day = Field(..., description="Safari day")
    time: str = Field(..., min_length=1, max_length=50, description="Slot label, e.g. Morning")
    type: Optional[str] = Field(None, max_length=50, description="Safari type, defaults to Standard")


class CreateSafariBookingsRequest(CamelModel):
    """Request schema for attaching safaris to a booking."""

    booking_id: UUID = Field(..., description="Parent booking")
    safari_data: list[SafariEntry] = Field(..., description="Requested safari slots, possibly none")


class UpdateSafariStatusRequest(CamelModel):
    """Request schema for changing a safari booking's status."""

    safari_id: UUID = Field(..., description="Safari booking to update")
    status: SafariStatus = Field(..., description="New safari status")


class SafariBooking(CamelModel):
    """Safari booking response schema."""

    id: UUID
    booking_id: UUID
    safari_date: date
    safari_time: str
    safari_type: str
    status: SafariStatus
    created_date: datetime
    updated_date: datetime


class CreateSafariInquiryRequest(CamelModel):
    """Request schema for the safari inquiry form."""

    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    customer_phone: Optional[str] = Field(None, max_length=50)
    preferred_date: Optional[Day] = None
    preferred_time: Optional[str] = Field(None, max_length=50)
    num_adults: int = Field(1, ge=0)
    num_children: int = Field(0, ge=0)
    notes: str = Field("", max_length=4000)
    source: str = Field("Website", min_length=1, max_length=50)


class ListSafariInquiriesRequest(CamelModel):
    """Optional filter for listing inquiries."""

    status: Optional[InquiryStatus] = None


class UpdateSafariInquiryStatusRequest(CamelModel):
    """Request schema for moving an inquiry through follow-up."""

    inquiry_id: UUID = Field(..., description="Inquiry to update")
    status: InquiryStatus = Field(..., description="New inquiry status")


class SafariInquiry(CamelModel):
    """Safari inquiry response schema."""

    id: UUID
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    preferred_date: Optional[date] = None
    preferred_time: Optional[str] = None
    num_adults: int
    num_children: int
    notes: str
    status: InquiryStatus
    source: str
    created_date: datetime
    updated_date: datetime
