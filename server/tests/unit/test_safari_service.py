"""Unit tests for safari service."""

from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from cottage_booking.core.exceptions import InvalidStatusTransitionError, NotFoundError
from cottage_booking.models import SafariBooking, SafariStatus
from cottage_booking.schemas.safari import SafariEntry
from cottage_booking.services.booking_service import BookingService
from cottage_booking.services.safari_service import SafariService


@pytest.mark.asyncio
async def test_create_safari_bookings(test_session, make_booking_request):
    """Every slot becomes a pending safari; a missing type means Standard."""
    booking = await BookingService(test_session).create_booking(make_booking_request())

    safaris = await SafariService(test_session).create_safari_bookings(booking.id, [
        SafariEntry(date=date(2024, 6, 2), time="Morning"),
    ])

    assert len(safaris) == 1
    assert safaris[0].booking_id == booking.id
    assert safaris[0].safari_date == date(2024, 6, 2)
    assert safaris[0].safari_type == "Standard"
    assert safaris[0].status == SafariStatus.PENDING


@pytest.mark.asyncio
async def test_create_safari_bookings_unknown_booking(test_session):
    """Safaris need an existing booking."""
    with pytest.raises(NotFoundError):
        await SafariService(test_session).create_safari_bookings(uuid4(), [
            SafariEntry(date=date(2024, 6, 2), time="Morning"),
        ])

    count = await test_session.execute(select(func.count()).select_from(SafariBooking))
    assert count.scalar_one() == 0


@pytest.mark.asyncio
async def test_update_safari_status(test_session, make_booking_request):
    """Test confirming and cancelling a safari."""
    booking = await BookingService(test_session).create_booking(make_booking_request())
    service = SafariService(test_session, strict=True)
    [safari] = await service.create_safari_bookings(booking.id, [
        SafariEntry(date=date(2024, 6, 2), time="Evening", type="Jeep"),
    ])

    confirmed = await service.update_safari_status(safari.id, SafariStatus.CONFIRMED)
    assert confirmed.status == SafariStatus.CONFIRMED

    cancelled = await service.update_safari_status(safari.id, SafariStatus.CANCELLED)
    assert cancelled.status == SafariStatus.CANCELLED


@pytest.mark.asyncio
async def test_strict_policy_keeps_cancelled_safaris_cancelled(test_session, make_booking_request):
    """Strict mode refuses to revive a cancelled safari; lenient mode allows it."""
    booking = await BookingService(test_session).create_booking(make_booking_request())
    [safari] = await SafariService(test_session).create_safari_bookings(booking.id, [
        SafariEntry(date=date(2024, 6, 2), time="Morning"),
    ])
    safari_id = safari.id
    await SafariService(test_session, strict=True).update_safari_status(safari_id, SafariStatus.CANCELLED)

    with pytest.raises(InvalidStatusTransitionError):
        await SafariService(test_session, strict=True).update_safari_status(safari_id, SafariStatus.CONFIRMED)

    revived = await SafariService(test_session, strict=False).update_safari_status(
        safari_id, SafariStatus.CONFIRMED
    )
    assert revived.status == SafariStatus.CONFIRMED


@pytest.mark.asyncio
async def test_update_safari_status_not_found(test_session):
    """Test updating a non-existent safari."""
    with pytest.raises(NotFoundError):
        await SafariService(test_session).update_safari_status(uuid4(), SafariStatus.CONFIRMED)


@pytest.mark.asyncio
async def test_create_safari_bookings_with_no_slots(test_session, make_booking_request):
    """An empty slot list is accepted and creates nothing."""
    booking = await BookingService(test_session).create_booking(make_booking_request())

    safaris = await SafariService(test_session).create_safari_bookings(booking.id, [])

    assert safaris == []
    assert await SafariService(test_session).list_safari_bookings(booking.id) == []
