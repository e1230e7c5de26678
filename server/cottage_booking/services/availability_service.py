"""Availability service: per-cottage, per-date booked/free records."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import DatesUnavailableError, ValidationError
from ..core.observability import metrics_collector
from ..core.store import store_call
from ..models.availability import AvailabilityRecord
from ..schemas.booking import AvailabilityResult
from ..schemas.catalog import Cottage as CottageSchema
from .catalog_service import CatalogService
from .pricing import DateLike, StayDates, nights, normalize_day

logger = logging.getLogger(__name__)

MESSAGE_AVAILABLE = "Cottage is available for selected dates."
MESSAGE_UNAVAILABLE = "Selected dates are not available for this cottage."
MESSAGE_COTTAGE_MISSING = "Cottage not found or inactive."


def validate_stay(check_in: DateLike, check_out: DateLike) -> int:
    """
    Return the number of nights of a stay, rejecting empty or reversed ranges.

    Raises:
        ValidationError: If check-out is not after check-in
    """
    stay_nights = nights(check_in, check_out)
    if stay_nights < 1:
        raise ValidationError("Check-out date must be after check-in date")
    return stay_nights


class AvailabilityService:
    """Service for reading and claiming cottage nights."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_conflicting_dates(
        self,
        cottage_id: UUID,
        start: DateLike,
        end_exclusive: DateLike
    ) -> list[date]:
        """Days in ``[start, end_exclusive)`` already held for the cottage."""
        stmt = (
            select(AvailabilityRecord.date)
            .where(
                AvailabilityRecord.cottage_id == cottage_id,
                AvailabilityRecord.is_available.is_(False),
                AvailabilityRecord.date >= normalize_day(start),
                AvailabilityRecord.date < normalize_day(end_exclusive)
            )
            .order_by(AvailabilityRecord.date)
        )
        result = await store_call(self.db.execute(stmt), "find_conflicting_dates")
        return list(result.scalars().all())

    async def is_range_available(
        self,
        cottage_id: UUID,
        start: DateLike,
        end_exclusive: DateLike
    ) -> bool:
        """True when no day of ``[start, end_exclusive)`` is held."""
        return not await self.find_conflicting_dates(cottage_id, start, end_exclusive)

    async def check_availability(
        self,
        cottage_id: UUID,
        check_in: DateLike,
        check_out: DateLike
    ) -> AvailabilityResult:
        """
        Answer whether a cottage can be booked for a stay.

        Held days are reported before the cottage itself is looked up; an
        unknown or inactive cottage is reported as unavailable rather than
        raised.

        Raises:
            ValidationError: If check-out is not after check-in
        """
        validate_stay(check_in, check_out)

        conflicting = await self.find_conflicting_dates(cottage_id, check_in, check_out)
        if conflicting:
            result = AvailabilityResult(
                is_available=False,
                message=MESSAGE_UNAVAILABLE,
                conflicting_dates=conflicting
            )
        else:
            cottage = await CatalogService(self.db).get_cottage(cottage_id)
            if cottage is None or not cottage.is_active:
                result = AvailabilityResult(is_available=False, message=MESSAGE_COTTAGE_MISSING)
            else:
                result = AvailabilityResult(
                    is_available=True,
                    message=MESSAGE_AVAILABLE,
                    cottage=CottageSchema.model_validate(cottage)
                )

        metrics_collector.record_availability_check(result.is_available)
        logger.debug(
            "Availability checked",
            extra={
                "cottage_id": str(cottage_id),
                "check_in": normalize_day(check_in).isoformat(),
                "check_out": normalize_day(check_out).isoformat(),
                "is_available": result.is_available,
                "conflicting_dates": len(result.conflicting_dates)
            }
        )
        return result

    async def reserve_range(
        self,
        cottage_id: UUID,
        start: DateLike,
        end_exclusive: DateLike,
        booking_id: UUID
    ) -> list[date]:
        """
        Claim every day of ``[start, end_exclusive)`` for a booking.

        Each claim is conditional: a free row is flipped only while it is
        still free, and a missing row is inserted under the
        ``(cottage_id, date)`` unique constraint. Nothing is committed here;
        the caller owns the transaction and must roll it back on failure.

        Returns:
            The claimed days, in order

        Raises:
            DatesUnavailableError: If any day is already held
        """
        claimed = []
        for day in StayDates(start, end_exclusive):
            stmt = (
                update(AvailabilityRecord)
                .where(
                    AvailabilityRecord.cottage_id == cottage_id,
                    AvailabilityRecord.date == day,
                    AvailabilityRecord.is_available.is_(True)
                )
                .values(is_available=False, booking_id=booking_id)
                .execution_options(synchronize_session=False)
            )
            result = await store_call(self.db.execute(stmt), "claim_date")

            if result.rowcount == 0:
                # No free row for the day: insert one, or fail on the held row
                self.db.add(AvailabilityRecord(
                    cottage_id=cottage_id,
                    date=day,
                    is_available=False,
                    booking_id=booking_id
                ))
                try:
                    await store_call(self.db.flush(), "claim_date")
                except IntegrityError as e:
                    logger.warning(
                        "Date already held",
                        extra={
                            "cottage_id": str(cottage_id),
                            "date": day.isoformat(),
                            "booking_id": str(booking_id)
                        }
                    )
                    raise DatesUnavailableError(str(cottage_id), [day]) from e

            claimed.append(day)

        return claimed

    async def release_booking(self, booking_id: UUID) -> int:
        """
        Free every day held by a booking. Nothing is committed here.

        Returns:
            Number of days released
        """
        stmt = (
            update(AvailabilityRecord)
            .where(AvailabilityRecord.booking_id == booking_id)
            .values(is_available=True, booking_id=None)
            .execution_options(synchronize_session=False)
        )
        result = await store_call(self.db.execute(stmt), "release_booking")

        logger.info(
            "Released booking dates",
            extra={"booking_id": str(booking_id), "released": result.rowcount}
        )
        return result.rowcount

    async def get_records(
        self,
        cottage_id: UUID,
        start: DateLike,
        end_exclusive: DateLike
    ) -> list[AvailabilityRecord]:
        """Availability rows of a cottage in ``[start, end_exclusive)``, by date."""
        stmt = (
            select(AvailabilityRecord)
            .where(
                AvailabilityRecord.cottage_id == cottage_id,
                AvailabilityRecord.date >= normalize_day(start),
                AvailabilityRecord.date < normalize_day(end_exclusive)
            )
            .order_by(AvailabilityRecord.date)
            .execution_options(populate_existing=True)
        )
        result = await store_call(self.db.execute(stmt), "get_availability_records")
        return list(result.scalars().all())

    async def get_booking_records(self, booking_id: UUID) -> list[AvailabilityRecord]:
        """Availability rows currently held by a booking, by date."""
        stmt = (
            select(AvailabilityRecord)
            .where(AvailabilityRecord.booking_id == booking_id)
            .order_by(AvailabilityRecord.date)
            .execution_options(populate_existing=True)
        )
        result = await store_call(self.db.execute(stmt), "get_booking_availability")
        return list(result.scalars().all())
