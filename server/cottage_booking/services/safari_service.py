"""Safari booking service."""

import logging
from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import NotFoundError
from ..core.observability import metrics_collector
from ..core.store import store_call
from ..models.booking import Booking
from ..models.safari import DEFAULT_SAFARI_TYPE, SafariBooking, SafariStatus
from ..schemas.safari import SafariEntry
from .status_policy import SAFARI_TRANSITIONS, ensure_transition

logger = logging.getLogger(__name__)


class SafariService:
    """Service for safari sub-bookings attached to a cottage booking."""

    def __init__(self, db: AsyncSession, strict: Optional[bool] = None):
        self.db = db
        self.strict = settings.strict_status_transitions if strict is None else strict

    async def create_safari_bookings(
        self,
        booking_id: UUID,
        entries: Sequence[SafariEntry]
    ) -> list[SafariBooking]:
        """
        Attach safari slots to a booking, all or nothing.

        Args:
            booking_id: Parent booking UUID
            entries: Requested slots; a missing type means ``Standard``

        Returns:
            Created safari bookings, in request order

        Raises:
            NotFoundError: If the booking does not exist
        """
        stmt = select(Booking.id).where(Booking.id == booking_id)
        result = await store_call(self.db.execute(stmt), "get_booking")
        if result.scalar_one_or_none() is None:
            logger.warning(
                "Safari booking failed - booking not found",
                extra={"booking_id": str(booking_id)}
            )
            raise NotFoundError(
                resource_type="booking",
                resource_id=str(booking_id),
                detail="Booking not found"
            )

        safaris = [
            SafariBooking(
                booking_id=booking_id,
                safari_date=entry.date,
                safari_time=entry.time,
                safari_type=entry.type or DEFAULT_SAFARI_TYPE,
                status=SafariStatus.PENDING.value
            )
            for entry in entries
        ]

        try:
            self.db.add_all(safaris)
            await store_call(self.db.commit(), "create_safari_bookings")
        except Exception:
            await self.db.rollback()
            raise

        metrics_collector.record_safari_bookings(len(safaris))
        logger.info(
            "Safari bookings created",
            extra={
                "booking_id": str(booking_id),
                "count": len(safaris),
                "safari_ids": [str(safari.id) for safari in safaris]
            }
        )
        return safaris

    async def get_safari_booking_or_raise(self, safari_id: UUID) -> SafariBooking:
        """
        Get a safari booking by ID.

        Raises:
            NotFoundError: If the safari booking does not exist
        """
        stmt = select(SafariBooking).where(SafariBooking.id == safari_id)
        result = await store_call(self.db.execute(stmt), "get_safari_booking")
        safari = result.scalar_one_or_none()
        if not safari:
            raise NotFoundError(
                resource_type="safari booking",
                resource_id=str(safari_id),
                detail="Safari booking not found"
            )
        return safari

    async def update_safari_status(self, safari_id: UUID, status: SafariStatus) -> SafariBooking:
        """
        Change a safari booking's status.

        Raises:
            NotFoundError: If the safari booking does not exist
            InvalidStatusTransitionError: If strict mode rejects the change
        """
        safari = await self.get_safari_booking_or_raise(safari_id)
        current = SafariStatus(safari.status)
        ensure_transition("safari booking", SAFARI_TRANSITIONS, current, status, self.strict)

        if current == status:
            return safari

        safari.status = status.value
        safari.updated_date = datetime.utcnow()
        try:
            await store_call(self.db.commit(), "update_safari_status")
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Safari status updated",
            extra={
                "safari_id": str(safari_id),
                "from_status": current.value,
                "to_status": status.value
            }
        )
        return safari

    async def list_safari_bookings(self, booking_id: UUID) -> list[SafariBooking]:
        """Safari bookings of one booking, ordered by date."""
        stmt = (
            select(SafariBooking)
            .where(SafariBooking.booking_id == booking_id)
            .order_by(SafariBooking.safari_date, SafariBooking.created_date)
        )
        result = await store_call(self.db.execute(stmt), "list_safari_bookings")
        return list(result.scalars().all())
