"""Models module exporting all database models."""

from .availability import AvailabilityRecord
from .booking import Booking, BookingStatus, PaymentStatus
from .catalog import Cottage, Package
from .idempotency import IdempotencyRecord
from .safari import DEFAULT_SAFARI_TYPE, InquiryStatus, SafariBooking, SafariInquiry, SafariStatus

__all__ = [
    # Catalog entities
    "Cottage",
    "Package",

    # Reservation entities
    "Booking",
    "BookingStatus",
    "PaymentStatus",
    "AvailabilityRecord",

    # Safari entities
    "SafariBooking",
    "SafariStatus",
    "SafariInquiry",
    "InquiryStatus",
    "DEFAULT_SAFARI_TYPE",

    # Idempotency entity
    "IdempotencyRecord",
]
