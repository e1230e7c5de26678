"""Service layer package."""

from .availability_service import AvailabilityService
from .booking_service import BookingService
from .catalog_service import CatalogService
from .idempotency_service import IdempotencyService
from .inquiry_service import InquiryService
from .safari_service import SafariService

__all__ = [
    "AvailabilityService",
    "BookingService",
    "CatalogService",
    "IdempotencyService",
    "InquiryService",
    "SafariService",
]
