"""Booking service: create, price, inspect and move bookings through their lifecycle."""

import logging
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import ConflictError, DatesUnavailableError, NotFoundError, ValidationError
from ..core.locks import CottageLocks
from ..core.observability import metrics_collector
from ..core.store import store_call
from ..models.booking import Booking, BookingStatus, PaymentStatus
from ..schemas.booking import BookingDetails, CalculateCostRequest, CreateBookingRequest
from ..schemas.catalog import Cottage as CottageSchema
from ..schemas.catalog import Package as PackageSchema
from ..schemas.safari import SafariBooking as SafariBookingSchema
from .availability_service import AvailabilityService, validate_stay
from .catalog_service import CatalogService
from .pricing import CostBreakdown, calculate_cost
from .safari_service import SafariService
from .status_policy import BOOKING_TRANSITIONS, ensure_transition

logger = logging.getLogger(__name__)


class BookingService:
    """
    Service for booking-related operations.

    The session and the range-lock registry are passed in; one lock registry
    must be shared by every service instance of a process for the per-cottage
    serialization to hold. Without ``locks`` the instance gets a private
    registry that serializes nothing, and concurrent writers are kept apart
    only by the ``(cottage_id, date)`` unique constraint. Routers pass the
    application registry to every write.
    """

    def __init__(
        self,
        db: AsyncSession,
        locks: Optional[CottageLocks] = None,
        strict: Optional[bool] = None
    ):
        self.db = db
        self.locks = locks if locks is not None else CottageLocks()
        self.strict = settings.strict_status_transitions if strict is None else strict
        self.catalog = CatalogService(db)
        self.availability = AvailabilityService(db)
        self.safaris = SafariService(db, strict=self.strict)

    async def get_booking_by_id(self, booking_id: UUID) -> Optional[Booking]:
        """Get a booking by ID."""
        stmt = select(Booking).where(Booking.id == booking_id).execution_options(populate_existing=True)
        result = await store_call(self.db.execute(stmt), "get_booking")
        return result.scalar_one_or_none()

    async def get_booking_by_id_or_raise(self, booking_id: UUID) -> Booking:
        """
        Get a booking by ID or raise NotFoundError.

        Raises:
            NotFoundError: If the booking does not exist
        """
        booking = await self.get_booking_by_id(booking_id)
        if not booking:
            logger.warning("Booking not found", extra={"booking_id": str(booking_id)})
            raise NotFoundError(
                resource_type="booking",
                resource_id=str(booking_id),
                detail="Booking not found"
            )
        return booking

    async def create_booking(self, request: CreateBookingRequest) -> Booking:
        """
        Create a booking and claim its nights in one transaction.

        Args:
            request: Booking creation request

        Returns:
            Persisted booking with status ``Pending``

        Raises:
            NotFoundError: If the cottage or package does not exist
            ConflictError: If the cottage is inactive or a night is already held
            ValidationError: If guests exceed the cottage limits or the stay is empty
        """
        cottage = await self.catalog.get_cottage_or_raise(request.cottage_id)
        if not cottage.is_active:
            raise ConflictError(detail="Cottage is not available for booking")

        if request.adults > cottage.max_adults:
            raise ValidationError(f"Maximum {cottage.max_adults} adults allowed per cottage")
        if request.children > cottage.max_children:
            raise ValidationError(f"Maximum {cottage.max_children} children allowed per cottage")

        package = await self.catalog.get_package_or_raise(request.package_id)

        validate_stay(request.check_in_date, request.check_out_date)
        cost = calculate_cost(
            cottage.base_price_per_night,
            package.price,
            request.check_in_date,
            request.check_out_date
        )

        cottage_key = str(cottage.id)
        async with self.locks.hold(self.db, cottage_key):
            try:
                conflicting = await self.availability.find_conflicting_dates(
                    cottage.id, request.check_in_date, request.check_out_date
                )
                if conflicting:
                    raise DatesUnavailableError(cottage_key, conflicting)

                booking = Booking(
                    cottage_id=cottage.id,
                    package_id=package.id,
                    check_in_date=request.check_in_date,
                    check_out_date=request.check_out_date,
                    adults=request.adults,
                    children=request.children,
                    total_cost=cost.total_cost,
                    status=BookingStatus.PENDING.value,
                    customer_info=request.customer_info.model_dump(exclude_none=True),
                    payment_status=PaymentStatus.PENDING.value,
                    special_requests=request.special_requests
                )
                self.db.add(booking)
                await store_call(self.db.flush(), "insert_booking")

                await self.availability.reserve_range(
                    cottage.id, request.check_in_date, request.check_out_date, booking.id
                )
                await store_call(self.db.commit(), "create_booking")

            except DatesUnavailableError as e:
                await self.db.rollback()
                metrics_collector.record_booking_conflict(cottage_key)
                logger.warning(
                    "Booking creation failed - dates unavailable",
                    extra={
                        "cottage_id": cottage_key,
                        "check_in": request.check_in_date.isoformat(),
                        "check_out": request.check_out_date.isoformat(),
                        "conflicting_dates": [d.isoformat() for d in e.dates]
                    }
                )
                raise
            except Exception:
                await self.db.rollback()
                raise

        await store_call(self.db.refresh(booking), "get_booking")

        metrics_collector.record_booking_created(cottage_key)
        logger.info(
            "Booking created successfully",
            extra={
                "booking_id": str(booking.id),
                "cottage_id": cottage_key,
                "package_id": str(package.id),
                "nights": cost.nights,
                "total_cost": str(cost.total_cost)
            }
        )
        return booking

    async def update_booking_status(self, booking_id: UUID, status: BookingStatus) -> Booking:
        """
        Change a booking's status.

        Cancelling frees the booking's nights. Leaving ``Cancelled`` (only
        possible under the lenient policy) claims them again.

        Raises:
            NotFoundError: If the booking does not exist
            InvalidStatusTransitionError: If strict mode rejects the change
            DatesUnavailableError: If a re-opened booking's nights were taken
        """
        booking = await self.get_booking_by_id_or_raise(booking_id)
        cottage_key = str(booking.cottage_id)

        async with self.locks.hold(self.db, cottage_key):
            try:
                await store_call(self.db.refresh(booking), "get_booking")
                current = BookingStatus(booking.status)
                ensure_transition("booking", BOOKING_TRANSITIONS, current, status, self.strict)

                if current == status:
                    return booking

                if status == BookingStatus.CANCELLED:
                    await self.availability.release_booking(booking.id)
                elif current == BookingStatus.CANCELLED:
                    conflicting = await self.availability.find_conflicting_dates(
                        booking.cottage_id, booking.check_in_date, booking.check_out_date
                    )
                    if conflicting:
                        raise DatesUnavailableError(cottage_key, conflicting)
                    await self.availability.reserve_range(
                        booking.cottage_id, booking.check_in_date, booking.check_out_date, booking.id
                    )

                booking.status = status.value
                booking.updated_date = datetime.utcnow()
                await store_call(self.db.commit(), "update_booking_status")

            except Exception:
                await self.db.rollback()
                raise

        metrics_collector.record_status_change(status.value)
        logger.info(
            "Booking status updated",
            extra={
                "booking_id": str(booking_id),
                "from_status": current.value,
                "to_status": status.value
            }
        )
        return booking

    async def get_booking_details(self, booking_id: UUID) -> BookingDetails:
        """
        Booking joined with its cottage, package and safari bookings.

        A cottage or package that no longer exists comes back as ``None``.

        Raises:
            NotFoundError: If the booking does not exist
        """
        booking = await self.get_booking_by_id_or_raise(booking_id)
        cottage = await self.catalog.get_cottage(booking.cottage_id)
        package = await self.catalog.get_package(booking.package_id)
        safaris = await self.safaris.list_safari_bookings(booking.id)

        return BookingDetails.model_validate(booking).model_copy(update={
            "cottage": CottageSchema.model_validate(cottage) if cottage else None,
            "package": PackageSchema.model_validate(package) if package else None,
            "safari_bookings": [SafariBookingSchema.model_validate(s) for s in safaris],
        })

    async def calculate_booking_cost(self, request: CalculateCostRequest) -> CostBreakdown:
        """
        Price a stay without reserving it.

        Raises:
            NotFoundError: If the cottage or package does not exist
            ValidationError: If check-out is not after check-in
        """
        cottage = await self.catalog.get_cottage_or_raise(request.cottage_id)
        package = await self.catalog.get_package_or_raise(request.package_id)
        validate_stay(request.check_in_date, request.check_out_date)
        return calculate_cost(
            cottage.base_price_per_night,
            package.price,
            request.check_in_date,
            request.check_out_date
        )

    async def complete_finished_stays(self, today: Optional[date] = None) -> int:
        """
        Mark confirmed bookings whose check-out day has arrived as completed.

        Args:
            today: Reference day, defaults to the current UTC day

        Returns:
            Number of bookings completed
        """
        today = today or datetime.utcnow().date()
        stmt = (
            update(Booking)
            .where(
                Booking.status == BookingStatus.CONFIRMED.value,
                Booking.check_out_date <= today
            )
            .values(status=BookingStatus.COMPLETED.value, updated_date=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        try:
            result = await store_call(self.db.execute(stmt), "complete_finished_stays")
            await store_call(self.db.commit(), "complete_finished_stays")
        except Exception:
            await self.db.rollback()
            raise

        completed = result.rowcount
        if completed:
            logger.info(
                "Completed finished stays",
                extra={"completed": completed, "as_of": today.isoformat()}
            )
        return completed
